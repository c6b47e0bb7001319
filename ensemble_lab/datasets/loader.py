# ensemble_lab/datasets/loader.py
from __future__ import annotations

from pathlib import Path

import pandas as pd

from ensemble_lab import logs
from ensemble_lab.schema.dataset import Dataset
from ensemble_lab.schema.types import DatasetSchema
from ensemble_lab.utils.errors import UserInputError


class DatasetLoadEngine:
    """
    DatasetLoadEngine（FINAL / FROZEN）

    Responsibility:
    - 唯一做 I/O 的 engine：csv / parquet → Dataset
    - 字符串列去首尾空白（csv 中 "Very Good " 之类）
    - schema 校验交给 Dataset 构造

    Contract:
    - 文件不存在 → FileNotFoundError
    - 不支持的后缀 → UserInputError
    """

    readers = {
        ".csv": pd.read_csv,
        ".parquet": pd.read_parquet,
    }

    def load(self, path: Path | str, schema: DatasetSchema) -> Dataset:
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Dataset file not found: {path}")

        reader = self.readers.get(path.suffix.lower())
        if reader is None:
            supported = ", ".join(sorted(self.readers))
            raise UserInputError(
                f"Unsupported dataset format {path.suffix!r} ({path.name}); "
                f"supported: {supported}"
            )

        df = reader(path)
        df = self._strip_strings(df)

        logs.info(f"[DatasetLoad] {path.name} rows={len(df)} cols={df.shape[1]}")

        return Dataset(df, schema)

    @staticmethod
    def _strip_strings(df: pd.DataFrame) -> pd.DataFrame:
        obj_cols = [
            c for c in df.columns
            if df[c].dtype == object or pd.api.types.is_string_dtype(df[c].dtype)
        ]
        if not obj_cols:
            return df

        df = df.copy()
        for c in obj_cols:
            df[c] = df[c].map(lambda v: v.strip() if isinstance(v, str) else v)
        return df
