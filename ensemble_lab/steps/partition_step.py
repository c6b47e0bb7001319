# ensemble_lab/steps/partition_step.py
from __future__ import annotations

from ensemble_lab import logs
from ensemble_lab.engines.partition_engine import PartitionEngine, resolve_test_size
from ensemble_lab.pipeline.context import ExperimentContext
from ensemble_lab.pipeline.step import PipelineStep


class PartitionStep(PipelineStep):
    """
    PartitionStep

    Contract:
    - consumes ctx.dataset (after dedup)
    - produces ctx.partition from cfg.split (test_size, seed)
    """

    stage = "partition"

    def __init__(self, engine: PartitionEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: ExperimentContext) -> ExperimentContext:
        ctx.require("dataset")
        split = ctx.cfg.split

        n = len(ctx.dataset)
        k = resolve_test_size(n, split.test_size)

        with self.timed():
            ctx.partition = self.engine.split(n=n, k=k, seed=split.seed)

        logs.info(
            f"[{self.step_name}] n={n} train={len(ctx.partition.train)} "
            f"test={len(ctx.partition.test)} seed={split.seed}"
        )
        return ctx
