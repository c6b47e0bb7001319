# ensemble_lab/steps/load_dataset_step.py
from __future__ import annotations

from ensemble_lab import logs
from ensemble_lab.datasets.catalog import resolve_schema
from ensemble_lab.datasets.loader import DatasetLoadEngine
from ensemble_lab.pipeline.context import ExperimentContext
from ensemble_lab.pipeline.step import PipelineStep
from ensemble_lab.schema.types import Categorical
from ensemble_lab.utils.errors import SchemaMismatchError, UserInputError
from ensemble_lab.utils.path import PathManager


class LoadDatasetStep(PipelineStep):
    """
    LoadDatasetStep

    Contract:
    - resolves ctx.dataset_cfg.file under PathManager.data_dir()
    - produces ctx.dataset (schema-validated), ctx.rows_loaded
    - response column must be declared and match the task
    """

    stage = "load"

    def __init__(self, engine: DatasetLoadEngine, pm: type[PathManager] = PathManager, inst=None):
        super().__init__(inst)
        self.engine = engine
        self.pm = pm

    def run(self, ctx: ExperimentContext) -> ExperimentContext:
        dcfg = ctx.dataset_cfg
        schema = resolve_schema(dcfg.schema_name)

        if dcfg.response not in schema:
            raise SchemaMismatchError(
                f"response column {dcfg.response!r} not declared in schema "
                f"{dcfg.schema_name!r}",
                column=dcfg.response,
            )

        is_categorical = isinstance(schema[dcfg.response], Categorical)
        if is_categorical != (dcfg.task == "classification"):
            raise UserInputError(
                f"task={dcfg.task!r} does not match response {dcfg.response!r} "
                f"of type {schema[dcfg.response].kind!r}"
            )

        path = self.pm.dataset_file(dcfg.file)

        with self.timed():
            with self.leaf(ctx.dataset_name):
                ctx.dataset = self.engine.load(path, schema)

        ctx.rows_loaded = len(ctx.dataset)
        logs.info(f"[{self.step_name}] {ctx.dataset_name} rows={ctx.rows_loaded}")
        return ctx
