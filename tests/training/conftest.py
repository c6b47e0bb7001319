# tests/training/conftest.py
from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from ensemble_lab.config.model_config import BaggingParams, BoostingParams, ModelConfig


@pytest.fixture
def model_cfg() -> ModelConfig:
    return ModelConfig(
        bagging=BaggingParams(n_estimators=20),
        boosting=BoostingParams(n_estimators=15, max_depth=2),
    )


@pytest.fixture
def regression_xy():
    """
    y = 3 * x0 - 2 * x1 + 小噪声；x2 为无关列
    """
    rng = np.random.RandomState(0)
    X = rng.uniform(0, 1, size=(80, 3))
    y = pd.Series(3 * X[:, 0] - 2 * X[:, 1] + rng.normal(0, 0.01, 80))
    return X, y, ["x0", "x1", "noise"]


@pytest.fixture
def classification_xy():
    """
    二分类：x0 > 0.5 → p，否则 e
    """
    rng = np.random.RandomState(1)
    X = rng.uniform(0, 1, size=(80, 3))
    y = pd.Series(np.where(X[:, 0] > 0.5, "p", "e"))
    return X, y, ["x0", "x1", "noise"]
