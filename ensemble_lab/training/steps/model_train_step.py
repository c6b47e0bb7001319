# ensemble_lab/training/steps/model_train_step.py
from __future__ import annotations

from ensemble_lab import logs
from ensemble_lab.pipeline.context import ExperimentContext
from ensemble_lab.pipeline.step import PipelineStep
from ensemble_lab.training.engines.registry import resolve_model_train_engine


class ModelTrainStep(PipelineStep):
    """
    ModelTrainStep

    Contract:
    - consumes ctx.train_X / ctx.train_y
    - produces ctx.results[family]
    - engine resolved from (family, ctx.task); seed = cfg.split.seed
    """

    stage = "train"

    def __init__(self, family: str, inst=None):
        super().__init__(inst)
        self.family = family

    @property
    def step_name(self) -> str:
        return f"{self.__class__.__name__}[{self.family}]"

    def run(self, ctx: ExperimentContext) -> ExperimentContext:
        ctx.require("train_X", "train_y")

        engine = resolve_model_train_engine(
            family=self.family,
            task=ctx.task,
            cfg=ctx.cfg.model,
            seed=ctx.cfg.split.seed,
        )

        with self.timed():
            with self.leaf(self.family):
                result = engine.train(
                    X=ctx.train_X.values,
                    y=ctx.train_y,
                    feature_names=ctx.train_X.columns,
                )

        ctx.results[self.family] = result
        logs.info(f"[{self.step_name}] fitted {type(result.model).__name__} {result.metrics}")
        return ctx
