# ensemble_lab/config/split_config.py
from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field


class SplitConfig(BaseModel):
    """
    test_size:
      - float in (0, 1) : 测试集比例
      - int >= 0        : 测试集行数
    """

    test_size: Union[int, float] = 0.2
    seed: int = 42


class PrepConfig(BaseModel):
    sparse_matrix: bool = False
    drop_constant_columns: bool = True
    predictors: list[str] | None = Field(
        default=None,
        description="只使用这些列构造 design matrix；None = schema 全部列",
    )
