# ensemble_lab/steps/dedup_step.py
from __future__ import annotations

import numpy as np

from ensemble_lab import logs
from ensemble_lab.engines.dedup_engine import DedupEngine
from ensemble_lab.pipeline.context import ExperimentContext
from ensemble_lab.pipeline.step import PipelineStep


class DedupStep(PipelineStep):
    """
    DedupStep

    Contract:
    - consumes ctx.dataset
    - produces ctx.dedup_mask and replaces ctx.dataset with first occurrences
    - key columns: dataset_cfg.key_columns, or every non-response column
    - dedup disabled → all-True mask, dataset unchanged
    """

    stage = "dedup"

    def __init__(self, engine: DedupEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: ExperimentContext) -> ExperimentContext:
        ctx.require("dataset")
        dataset = ctx.dataset

        if not ctx.dataset_cfg.dedup:
            ctx.dedup_mask = np.ones(len(dataset), dtype=bool)
            logs.info(f"[{self.step_name}] disabled for {ctx.dataset_name}")
            return ctx

        key_columns = ctx.dataset_cfg.key_columns or [
            c for c in dataset.schema.names if c != ctx.response
        ]

        with self.timed():
            with self.leaf(ctx.dataset_name):
                mask = self.engine.first_occurrence_mask(dataset, key_columns)

        ctx.dedup_mask = mask
        ctx.dataset = dataset.filter(mask)

        removed = int((~mask).sum())
        ctx.inst.record(f"{ctx.dataset_name}.duplicates_removed", removed)
        logs.info(
            f"[{self.step_name}] key={key_columns} "
            f"kept={len(ctx.dataset)} removed={removed}"
        )
        return ctx
