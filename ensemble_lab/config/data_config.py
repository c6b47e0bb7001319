#!filepath: ensemble_lab/config/data_config.py
from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class DatasetConfig(BaseModel):
    """
    单个数据集的声明：
    - file        : data_dir 下的相对路径（或绝对路径），csv / parquet
    - schema_name : catalog 中的 schema 名称
    - response    : 响应列
    - key_columns : 去重 Identity Key 列；None = 除 response 外全部列
    """

    file: str
    schema_name: str
    response: str
    task: Literal["classification", "regression"]
    dedup: bool = True
    key_columns: Optional[List[str]] = None


class DataConfig(BaseModel):
    data_dir: str = "data"
    datasets: Dict[str, DatasetConfig] = Field(default_factory=dict)
