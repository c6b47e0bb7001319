# ensemble_lab/training/steps/model_report_step.py
from __future__ import annotations

from ensemble_lab import logs
from ensemble_lab.pipeline.context import ExperimentContext
from ensemble_lab.pipeline.step import PipelineStep
from ensemble_lab.training.engines.model_report_engine import ModelReportEngine


class ModelReportStep(PipelineStep):
    """
    ModelReportStep

    Responsibility:
    - Evaluate every fitted family on the test partition
    - Record metrics via Instrumentation
    - Does NOT modify models, does NOT write files
    """

    stage = "report"

    def __init__(self, *, engine: ModelReportEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: ExperimentContext) -> ExperimentContext:
        # --------------------------------------------------
        # Skip conditions (NOT errors)
        # --------------------------------------------------
        if not ctx.results:
            logs.info(f"[{self.step_name}] skip evaluation (no fitted models)")
            return ctx

        ctx.require("test_X", "test_y")
        if ctx.test_X.shape[0] == 0:
            logs.warning(f"[{self.step_name}] skip evaluation (empty test partition)")
            return ctx

        with self.timed():
            for family, result in ctx.results.items():
                with self.leaf(family):
                    report = self.engine.evaluate(
                        result=result,
                        X=ctx.test_X.values,
                        y=ctx.test_y,
                    )
                ctx.reports[family] = report

                for name, value in report.metrics.items():
                    ctx.inst.record(f"{ctx.dataset_name}.{family}.{name}", value)

        return ctx
