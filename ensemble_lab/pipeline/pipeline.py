#!filepath: ensemble_lab/pipeline/pipeline.py
from __future__ import annotations

from ensemble_lab import logs
from ensemble_lab.config.app_config import AppConfig
from ensemble_lab.observability.instrumentation import Instrumentation
from ensemble_lab.pipeline.context import ExperimentContext
from ensemble_lab.pipeline.step import PipelineStep
from ensemble_lab.utils.errors import UserInputError


class ExperimentPipeline:
    """
    ExperimentPipeline = 调度器（Scheduler）

    设计铁律：
    - Pipeline 负责 orchestration（顺序 / 上下文）
    - Pipeline 不负责任何 Step 级计时
    - Step 自己定义时间语义边界（via PipelineStep.timed）
    """

    def __init__(
            self,
            steps: list[PipelineStep],
            *,
            cfg: AppConfig,
            dataset_name: str,
            inst: Instrumentation,
    ):
        if dataset_name not in cfg.data.datasets:
            available = ", ".join(sorted(cfg.data.datasets))
            raise UserInputError(
                f"Unknown dataset {dataset_name!r}. Available: {available}"
            )

        self.steps = steps
        self.cfg = cfg
        self.dataset_name = dataset_name
        self.inst = inst

    def run(self, run_id: str) -> ExperimentContext:
        logs.info(f"[Pipeline] ====== START {run_id} dataset={self.dataset_name} ======")

        ctx = ExperimentContext(
            run_id=run_id,
            dataset_name=self.dataset_name,
            cfg=self.cfg,
            dataset_cfg=self.cfg.data.datasets[self.dataset_name],
            inst=self.inst,
        )

        # --------------------------------------------------
        # 核心循环：Pipeline 不打 timer
        # --------------------------------------------------
        for step in self.steps:
            ctx = step.run(ctx)

        # Timeline 只包含 leaf（由 Step 写入）
        self.inst.generate_timeline_report(run_id)

        logs.info(f"[Pipeline] ====== DONE {run_id} ======")
        return ctx
