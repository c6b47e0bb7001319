#!filepath: ensemble_lab/config/model_config.py
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class BaggingParams(BaseModel):
    n_estimators: int = Field(500, ge=1)
    max_features: Optional[Union[int, float, str]] = "sqrt"
    min_samples_leaf: int = Field(1, ge=1)
    n_jobs: Optional[int] = None


class BoostingParams(BaseModel):
    n_estimators: int = Field(300, ge=1)
    learning_rate: float = Field(0.1, gt=0)
    max_depth: int = Field(3, ge=1)
    subsample: float = Field(1.0, gt=0, le=1.0)


class ModelConfig(BaseModel):
    families: List[str] = Field(default_factory=lambda: ["bagging", "boosting"])
    bagging: BaggingParams = Field(default_factory=BaggingParams)
    boosting: BoostingParams = Field(default_factory=BoostingParams)
    top_importances: int = Field(10, ge=1)
