#!filepath: ensemble_lab/pipeline/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from ensemble_lab.config.app_config import AppConfig
from ensemble_lab.config.data_config import DatasetConfig
from ensemble_lab.engines.design_matrix_engine import DesignMatrix
from ensemble_lab.engines.partition_engine import Partition
from ensemble_lab.schema.dataset import Dataset


@dataclass
class ExperimentContext:
    """
    ExperimentContext = 一次实验运行的唯一上下文

    设计原则：
    - Pipeline 负责构造
    - Step 之间唯一通信载体
    - 只存“事实 / 中间态”，不放业务逻辑
    """

    # -------------------------
    # identity
    # -------------------------
    run_id: str
    dataset_name: str

    # -------------------------
    # static bindings
    # -------------------------
    cfg: AppConfig
    dataset_cfg: DatasetConfig
    inst: Any

    # -------------------------
    # data layer
    # -------------------------
    dataset: Optional[Dataset] = None
    rows_loaded: int = 0
    dedup_mask: Optional[np.ndarray] = None

    partition: Optional[Partition] = None

    train_X: Optional[DesignMatrix] = None
    test_X: Optional[DesignMatrix] = None
    train_y: Optional[pd.Series] = None
    test_y: Optional[pd.Series] = None
    dropped_columns: List[str] = field(default_factory=list)

    # -------------------------
    # model layer
    # -------------------------
    results: Dict[str, Any] = field(default_factory=dict)
    reports: Dict[str, Any] = field(default_factory=dict)

    @property
    def response(self) -> str:
        return self.dataset_cfg.response

    @property
    def task(self) -> str:
        return self.dataset_cfg.task

    def require(self, *names: str) -> None:
        """
        Step 前置条件：ctx 上的字段必须已由上游 Step 填充。
        """
        missing = [n for n in names if getattr(self, n) is None]
        if missing:
            raise RuntimeError(
                f"ExperimentContext missing {missing}; check step order"
            )
