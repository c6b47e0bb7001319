# ensemble_lab/steps/design_matrix_step.py
from __future__ import annotations

import pandas as pd

from ensemble_lab import logs
from ensemble_lab.engines.constant_column_engine import ConstantColumnEngine
from ensemble_lab.engines.design_matrix_engine import DesignMatrixEngine
from ensemble_lab.pipeline.context import ExperimentContext
from ensemble_lab.pipeline.step import PipelineStep


class DesignMatrixStep(PipelineStep):
    """
    DesignMatrixStep

    Contract:
    - consumes ctx.dataset / ctx.partition
    - produces ctx.train_X / ctx.test_X (column-compatible) and ctx.train_y / ctx.test_y
    - constant columns are detected on train_X ONLY and dropped from both sides
    """

    stage = "design_matrix"

    def __init__(
        self,
        engine: DesignMatrixEngine,
        constant_engine: ConstantColumnEngine,
        inst=None,
    ):
        super().__init__(inst)
        self.engine = engine
        self.constant_engine = constant_engine

    def run(self, ctx: ExperimentContext) -> ExperimentContext:
        ctx.require("dataset", "partition")
        prep = ctx.cfg.prep
        dataset = ctx.dataset
        part = ctx.partition

        with self.timed():
            with self.leaf("build"):
                full = self.engine.build(
                    dataset,
                    ctx.response,
                    columns=prep.predictors,
                    sparse=prep.sparse_matrix,
                )

            train_X = full.take_rows(part.train)
            test_X = full.take_rows(part.test)

            if prep.drop_constant_columns:
                with self.leaf("constant_columns"):
                    constant = self.constant_engine.detect(train_X)
                ctx.dropped_columns = [train_X.columns[j] for j in sorted(constant)]
                train_X = self.constant_engine.drop(train_X, constant)
                test_X = self.constant_engine.drop(test_X, constant)

        y = self._response(dataset.frame[ctx.response], ctx.task)

        ctx.train_X = train_X
        ctx.test_X = test_X
        ctx.train_y = y.iloc[part.train].reset_index(drop=True)
        ctx.test_y = y.iloc[part.test].reset_index(drop=True)

        logs.info(
            f"[{self.step_name}] train={train_X.shape} test={test_X.shape} "
            f"dropped={len(ctx.dropped_columns)}"
        )
        return ctx

    @staticmethod
    def _response(col: pd.Series, task: str) -> pd.Series:
        if task == "classification":
            return col.astype(str)
        return col.astype("float64")
