# ensemble_lab/schema/dataset.py
from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from ensemble_lab import logs
from ensemble_lab.schema.types import Categorical, DatasetSchema
from ensemble_lab.utils.errors import SchemaMismatchError


class Dataset:
    """
    Dataset（FINAL / FROZEN）

    语义：
    - DataFrame + DatasetSchema，构造时一次性校验
    - 行号 = 位置索引 [0, n)
    - 类别列统一转换为 pandas Categorical（categories = 声明 levels）
    - 所有操作返回新 Dataset，不修改输入

    frame 只读：engine / step 不得原地修改。
    """

    __slots__ = ("_frame", "_schema")

    def __init__(self, frame: pd.DataFrame, schema: DatasetSchema):
        self._frame = conform_frame(frame, schema)
        self._schema = schema

    @classmethod
    def _from_validated(cls, frame: pd.DataFrame, schema: DatasetSchema) -> "Dataset":
        obj = cls.__new__(cls)
        obj._frame = frame
        obj._schema = schema
        return obj

    # --------------------------------------------------
    @property
    def frame(self) -> pd.DataFrame:
        return self._frame

    @property
    def schema(self) -> DatasetSchema:
        return self._schema

    @property
    def columns(self) -> list[str]:
        return list(self._frame.columns)

    def __len__(self) -> int:
        return len(self._frame)

    def __repr__(self) -> str:
        return f"Dataset(rows={len(self)}, columns={len(self._schema)})"

    # --------------------------------------------------
    # row selection
    # --------------------------------------------------
    def take(self, indices: Sequence[int] | np.ndarray) -> "Dataset":
        """按位置取行，结果重新编号为 [0, len(indices))。"""
        frame = self._frame.iloc[np.asarray(indices, dtype=np.int64)].reset_index(drop=True)
        return Dataset._from_validated(frame, self._schema)

    def filter(self, mask: Sequence[bool] | np.ndarray) -> "Dataset":
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != (len(self),):
            raise ValueError(
                f"mask length {mask.shape} does not match dataset rows {len(self)}"
            )
        return self.take(np.flatnonzero(mask))


# ----------------------------------------------------------------------
# Validation（唯一合法位置）
# ----------------------------------------------------------------------
def conform_frame(frame: pd.DataFrame, schema: DatasetSchema) -> pd.DataFrame:
    """
    按 schema 校验并规范化 DataFrame。

    - schema 声明的列必须全部存在
    - 未声明列被丢弃
    - Numeric: 必须可转换为数值（bool → float）
    - Categorical: 每个值必须属于声明的 levels（NaN 也算非法值）

    全部校验通过才返回结果；任何失败抛 SchemaMismatchError。
    """
    missing = [name for name in schema.names if name not in frame.columns]
    if missing:
        raise SchemaMismatchError(
            f"columns missing from dataset: {missing}", column=missing[0]
        )

    extra = [c for c in frame.columns if c not in schema]
    if extra:
        logs.debug(f"[Dataset] dropping undeclared columns: {extra}")

    src = frame.reset_index(drop=True)
    out: dict[str, pd.Series] = {}

    for name, ctype in schema:
        col = src[name]

        if isinstance(ctype, Categorical):
            bad = ~col.isin(ctype.levels)
            if bad.any():
                pos = int(np.flatnonzero(bad.to_numpy())[0])
                value = col.iloc[pos]
                raise SchemaMismatchError(
                    f"column {name!r} row {pos}: value {value!r} "
                    f"not in declared levels {list(ctype.levels)}",
                    column=name,
                    index=pos,
                    value=value,
                )
            out[name] = pd.Series(
                pd.Categorical(col, categories=list(ctype.levels), ordered=ctype.ordered),
                name=name,
            )
            continue

        # Numeric
        if pd.api.types.is_bool_dtype(col):
            out[name] = col.astype(np.float64)
        elif pd.api.types.is_numeric_dtype(col):
            out[name] = col
        else:
            coerced = pd.to_numeric(col, errors="coerce")
            bad = coerced.isna() & col.notna()
            if bad.any():
                pos = int(np.flatnonzero(bad.to_numpy())[0])
                value = col.iloc[pos]
                raise SchemaMismatchError(
                    f"column {name!r} row {pos}: value {value!r} is not numeric",
                    column=name,
                    index=pos,
                    value=value,
                )
            out[name] = coerced

    return pd.DataFrame(out, index=src.index)
