# ensemble_lab/engines/design_matrix_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd
import scipy.sparse as sp

from ensemble_lab import logs
from ensemble_lab.schema.dataset import Dataset
from ensemble_lab.schema.types import Categorical, DatasetSchema
from ensemble_lab.utils.errors import SchemaMismatchError


@dataclass(frozen=True, eq=False)
class DesignMatrix:
    """
    数值矩阵 + 列名。

    values 为 np.ndarray（dense）或 scipy.sparse.csr_matrix（sparse）。
    """

    values: np.ndarray | sp.csr_matrix
    columns: List[str]

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    @property
    def is_sparse(self) -> bool:
        return sp.issparse(self.values)

    def take_rows(self, indices: Sequence[int] | np.ndarray) -> "DesignMatrix":
        idx = np.asarray(indices, dtype=np.int64)
        return DesignMatrix(self.values[idx], list(self.columns))

    def drop_columns(self, indices: Iterable[int]) -> "DesignMatrix":
        drop = set(int(i) for i in indices)
        keep = [j for j in range(self.shape[1]) if j not in drop]
        return DesignMatrix(
            self.values[:, keep],
            [self.columns[j] for j in keep],
        )

    def to_frame(self) -> pd.DataFrame:
        dense = self.values.toarray() if self.is_sparse else self.values
        return pd.DataFrame(dense, columns=self.columns)


def indicator_name(column: str, level) -> str:
    return f"{column}_{level}"


class DesignMatrixEngine:
    """
    DesignMatrixEngine（FINAL / FROZEN）

    Responsibility:
    - Dataset → 纯数值 design matrix

    Encoding（schema 驱动）:
    - Numeric               : 原样
    - Categorical(L1..Lm)   : m-1 个 0/1 indicator，丢弃 reference level L1
    - OrderedCategorical    : 同上，按声明的 rank 顺序展开
    - response 列不进入矩阵
    - 不产生 intercept 列

    Column order (FROZEN):
      numeric（schema 声明顺序） → categorical（schema 声明顺序，level 声明顺序）
      同一 schema 构造的矩阵列永远兼容。

    Errors:
    - SchemaMismatchError: 列缺失 / 未声明 level / 数值列非数值 / response 未声明
      校验在产生任何输出之前完成
    """

    def build(
        self,
        data: Dataset | pd.DataFrame,
        response: Optional[str],
        *,
        schema: Optional[DatasetSchema] = None,
        columns: Optional[Sequence[str]] = None,
        sparse: bool = False,
    ) -> DesignMatrix:
        dataset = self._resolve_dataset(data, schema)
        schema = dataset.schema

        if response is not None and response not in schema:
            raise SchemaMismatchError(
                f"response column {response!r} not declared in schema",
                column=response,
            )

        if columns is not None:
            schema = schema.select(columns)

        numeric = schema.numeric_columns(exclude=[response] if response else [])
        categorical = schema.categorical_columns(exclude=[response] if response else [])

        frame = dataset.frame
        n = len(frame)

        names: List[str] = list(numeric)
        for col in categorical:
            ctype: Categorical = schema[col]
            names.extend(indicator_name(col, lvl) for lvl in ctype.levels[1:])

        width = schema.design_width(response)
        if sparse:
            values = self._build_sparse(frame, schema, numeric, categorical, n, width)
        else:
            values = self._build_dense(frame, schema, numeric, categorical, n, width)

        logs.debug(
            f"[DesignMatrix] rows={n} cols={len(names)} "
            f"numeric={len(numeric)} categorical={len(categorical)} sparse={sparse}"
        )

        return DesignMatrix(values, names)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _resolve_dataset(
        data: Dataset | pd.DataFrame,
        schema: Optional[DatasetSchema],
    ) -> Dataset:
        if isinstance(data, Dataset):
            if schema is not None and schema != data.schema:
                return Dataset(data.frame, schema)
            return data

        if schema is None:
            raise SchemaMismatchError("a DataFrame input requires an explicit schema")
        return Dataset(data, schema)

    @staticmethod
    def _category_codes(frame: pd.DataFrame, col: str) -> np.ndarray:
        # Dataset 保证 categories == 声明 levels，codes 即 level 下标
        return frame[col].cat.codes.to_numpy(dtype=np.int64)

    def _build_dense(
        self,
        frame: pd.DataFrame,
        schema: DatasetSchema,
        numeric: List[str],
        categorical: List[str],
        n: int,
        width: int,
    ) -> np.ndarray:
        out = np.zeros((n, width), dtype=np.float64)

        for j, col in enumerate(numeric):
            out[:, j] = frame[col].to_numpy(dtype=np.float64, na_value=np.nan)

        offset = len(numeric)
        rows = np.arange(n)
        for col in categorical:
            ctype: Categorical = schema[col]
            codes = self._category_codes(frame, col)
            hit = codes > 0
            out[rows[hit], offset + codes[hit] - 1] = 1.0
            offset += ctype.n_indicators

        return out

    def _build_sparse(
        self,
        frame: pd.DataFrame,
        schema: DatasetSchema,
        numeric: List[str],
        categorical: List[str],
        n: int,
        width: int,
    ) -> sp.csr_matrix:
        row_parts: List[np.ndarray] = []
        col_parts: List[np.ndarray] = []
        val_parts: List[np.ndarray] = []
        rows = np.arange(n)

        for j, col in enumerate(numeric):
            vals = frame[col].to_numpy(dtype=np.float64, na_value=np.nan)
            nz = vals != 0
            row_parts.append(rows[nz])
            col_parts.append(np.full(int(nz.sum()), j, dtype=np.int64))
            val_parts.append(vals[nz])

        offset = len(numeric)
        for col in categorical:
            ctype: Categorical = schema[col]
            codes = self._category_codes(frame, col)
            hit = codes > 0
            row_parts.append(rows[hit])
            col_parts.append(offset + codes[hit] - 1)
            val_parts.append(np.ones(int(hit.sum()), dtype=np.float64))
            offset += ctype.n_indicators

        if row_parts:
            r = np.concatenate(row_parts)
            c = np.concatenate(col_parts)
            v = np.concatenate(val_parts)
        else:
            r = c = np.zeros(0, dtype=np.int64)
            v = np.zeros(0, dtype=np.float64)

        return sp.csr_matrix(sp.coo_matrix((v, (r, c)), shape=(n, width)))
