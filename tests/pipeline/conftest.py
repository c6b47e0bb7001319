# tests/pipeline/conftest.py
from __future__ import annotations

import pytest

from ensemble_lab.observability.instrumentation import Instrumentation
from ensemble_lab.pipeline.context import ExperimentContext
from ensemble_lab.utils.path import PathManager


@pytest.fixture
def make_ctx(app_config):
    """
    Minimal ExperimentContext for single-step tests.
    """
    PathManager.set_data_dir(app_config.data.data_dir)

    def _make(dataset_name: str = "diamonds", cfg=None) -> ExperimentContext:
        cfg = cfg or app_config
        return ExperimentContext(
            run_id="test-run",
            dataset_name=dataset_name,
            cfg=cfg,
            dataset_cfg=cfg.data.datasets[dataset_name],
            inst=Instrumentation(enabled=True),
        )

    return _make
