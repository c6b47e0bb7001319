# ensemble_lab/engines/dedup_engine.py
from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from ensemble_lab.schema.dataset import Dataset
from ensemble_lab.utils.errors import InvalidArgumentError, SchemaMismatchError

KEY_SEPARATOR = "|"


class DedupEngine:
    """
    DedupEngine（FINAL / FROZEN）

    Responsibility:
    - 由指定列子集构造 Identity Key
    - 输出 first-occurrence mask（True = 首次出现，False = 重复）

    Contract:
    - key 列顺序 = 调用方给出的顺序，分隔符固定为 KEY_SEPARATOR
    - 多列 key 中含 KEY_SEPARATOR 的取值 → SchemaMismatchError
      （否则 ("x|y", "z") 与 ("x", "y|z") 会得到同一个 key）
    - 行顺序 = 原始行顺序；同样输入永远得到同样 mask
    - 不修改输入
    - 空 Dataset → 空 mask
    """

    def identity_keys(
        self,
        data: Dataset | pd.DataFrame,
        key_columns: Sequence[str],
    ) -> pd.Series:
        frame = self._resolve(data, key_columns)

        if len(frame) == 0:
            return pd.Series([], index=frame.index, dtype=object)

        parts = [frame[c].astype(str) for c in key_columns]
        if len(parts) == 1:
            return parts[0].astype(object)

        for col, part in zip(key_columns, parts):
            clash = part.str.contains(KEY_SEPARATOR, regex=False).to_numpy(dtype=bool)
            if clash.any():
                pos = int(np.flatnonzero(clash)[0])
                raise SchemaMismatchError(
                    f"key column {col!r} row {pos}: value {part.iloc[pos]!r} "
                    f"contains the key separator {KEY_SEPARATOR!r}",
                    column=col,
                    index=pos,
                    value=part.iloc[pos],
                )

        return parts[0].str.cat(parts[1:], sep=KEY_SEPARATOR)

    def first_occurrence_mask(
        self,
        data: Dataset | pd.DataFrame,
        key_columns: Sequence[str],
    ) -> np.ndarray:
        keys = self.identity_keys(data, key_columns)
        if len(keys) == 0:
            return np.zeros(0, dtype=bool)
        return ~keys.duplicated(keep="first").to_numpy()

    def count_distinct(
        self,
        data: Dataset | pd.DataFrame,
        key_columns: Sequence[str],
    ) -> int:
        return int(self.identity_keys(data, key_columns).nunique(dropna=False))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _resolve(data: Dataset | pd.DataFrame, key_columns: Sequence[str]) -> pd.DataFrame:
        if isinstance(key_columns, str):
            raise InvalidArgumentError(
                "key_columns must be a sequence of column names, not a string",
                argument="key_columns",
                value=key_columns,
            )
        if len(key_columns) == 0:
            raise InvalidArgumentError(
                "key_columns must name at least one column",
                argument="key_columns",
                value=list(key_columns),
            )

        frame = data.frame if isinstance(data, Dataset) else data

        missing = [c for c in key_columns if c not in frame.columns]
        if missing:
            raise SchemaMismatchError(
                f"key columns missing from dataset: {missing}", column=missing[0]
            )
        return frame
