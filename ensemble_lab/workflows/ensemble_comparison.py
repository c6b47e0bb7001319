# ensemble_lab/workflows/ensemble_comparison.py
from __future__ import annotations

from typing import Optional, Sequence

from ensemble_lab.config.app_config import AppConfig
from ensemble_lab.datasets.loader import DatasetLoadEngine
from ensemble_lab.engines.constant_column_engine import ConstantColumnEngine
from ensemble_lab.engines.dedup_engine import DedupEngine
from ensemble_lab.engines.design_matrix_engine import DesignMatrixEngine
from ensemble_lab.engines.partition_engine import PartitionEngine
from ensemble_lab.observability.instrumentation import Instrumentation
from ensemble_lab.pipeline.pipeline import ExperimentPipeline
from ensemble_lab.pipeline.step import PipelineStep
from ensemble_lab.steps.dedup_step import DedupStep
from ensemble_lab.steps.design_matrix_step import DesignMatrixStep
from ensemble_lab.steps.load_dataset_step import LoadDatasetStep
from ensemble_lab.steps.partition_step import PartitionStep
from ensemble_lab.training.engines.model_report_engine import ModelReportEngine
from ensemble_lab.training.engines.registry import available_families
from ensemble_lab.training.steps.model_report_step import ModelReportStep
from ensemble_lab.training.steps.model_train_step import ModelTrainStep
from ensemble_lab.utils.errors import UserInputError
from ensemble_lab.utils.path import PathManager


def build_experiment_pipeline(
    dataset: str,
    cfg: Optional[AppConfig] = None,
    *,
    families: Optional[Sequence[str]] = None,
    prepare_only: bool = False,
    inst: Optional[Instrumentation] = None,
) -> ExperimentPipeline:
    """
    Bagging vs Boosting workflow

    load → dedup → partition → design matrix → train(per family) → report
    prepare_only=True stops after the design matrix.
    """
    if cfg is None:
        cfg = AppConfig.load()
    if inst is None:
        inst = Instrumentation()

    families = list(families or cfg.model.families)
    unknown = [f for f in families if f not in available_families()]
    if unknown:
        raise UserInputError(
            f"Unknown model families {unknown}. Available: {available_families()}"
        )

    PathManager.set_data_dir(cfg.data.data_dir)

    steps: list[PipelineStep] = [
        LoadDatasetStep(DatasetLoadEngine(), inst=inst),
        DedupStep(DedupEngine(), inst=inst),
        PartitionStep(PartitionEngine(), inst=inst),
        DesignMatrixStep(DesignMatrixEngine(), ConstantColumnEngine(), inst=inst),
    ]

    if not prepare_only:
        for family in families:
            steps.append(ModelTrainStep(family, inst=inst))
        steps.append(ModelReportStep(engine=ModelReportEngine(), inst=inst))

    return ExperimentPipeline(steps, cfg=cfg, dataset_name=dataset, inst=inst)
