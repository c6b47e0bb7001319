# ensemble_lab/engines/constant_column_engine.py
from __future__ import annotations

from typing import Set

import numpy as np
import pandas as pd
import scipy.sparse as sp

from ensemble_lab import logs
from ensemble_lab.engines.design_matrix_engine import DesignMatrix
from ensemble_lab.schema.dataset import Dataset
from ensemble_lab.schema.types import Numeric
from ensemble_lab.utils.errors import InvalidArgumentError, SchemaMismatchError


class ConstantColumnEngine:
    """
    ConstantColumnEngine（FINAL / FROZEN）

    Responsibility:
    - 找出所有行取值完全相同的列（方差为 0 的退化 predictor）

    Contract:
    - 输入：数值 2-D（ndarray / DataFrame / scipy.sparse / DesignMatrix），
      或只含 Numeric 列的 Dataset（否则 SchemaMismatchError）
    - 输出：列下标集合
    - NaN 视为与 NaN 相等
    - 单行输入：所有列都是常数列
    - 零行输入：所有列都是常数列（空集上恒成立）
    """

    def detect(self, matrix) -> Set[int]:
        if isinstance(matrix, DesignMatrix):
            matrix = matrix.values
        elif isinstance(matrix, Dataset):
            matrix = self._numeric_frame(matrix)

        if sp.issparse(matrix):
            return self._detect_sparse(matrix)

        if isinstance(matrix, pd.DataFrame):
            arr = matrix.to_numpy(dtype=np.float64, na_value=np.nan)
        else:
            arr = np.asarray(matrix, dtype=np.float64)

        if arr.ndim != 2:
            raise InvalidArgumentError(
                f"expected a 2-D matrix, got ndim={arr.ndim}",
                argument="matrix",
            )

        n_rows, n_cols = arr.shape
        if n_rows <= 1:
            return set(range(n_cols))

        first = arr[0]
        same = (arr == first) | (np.isnan(arr) & np.isnan(first))
        return set(np.flatnonzero(same.all(axis=0)).tolist())

    def drop(self, dm: DesignMatrix, columns: Set[int] | None = None) -> DesignMatrix:
        """
        去掉常数列；columns 为 None 时在 dm 自身上检测。
        """
        if columns is None:
            columns = self.detect(dm)
        if not columns:
            return dm

        logs.info(
            f"[ConstantColumn] drop {len(columns)} column(s): "
            f"{[dm.columns[j] for j in sorted(columns)]}"
        )
        return dm.drop_columns(columns)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _numeric_frame(dataset: Dataset) -> pd.DataFrame:
        for name, ctype in dataset.schema:
            if not isinstance(ctype, Numeric):
                raise SchemaMismatchError(
                    f"column {name!r} is {ctype.kind}; constant-column detection "
                    f"needs numeric columns only",
                    column=name,
                )
        return dataset.frame

    @staticmethod
    def _detect_sparse(matrix) -> Set[int]:
        csc = sp.csc_matrix(matrix, dtype=np.float64, copy=True)
        csc.sum_duplicates()

        n_rows, n_cols = csc.shape
        if n_rows <= 1:
            return set(range(n_cols))

        out: Set[int] = set()
        for j in range(n_cols):
            start, end = csc.indptr[j], csc.indptr[j + 1]
            vals = csc.data[start:end]
            nnz = end - start

            if nnz < n_rows:
                # 至少一个隐式 0：常数列当且仅当显式值也全为 0
                if np.all(vals == 0):
                    out.add(j)
                continue

            first = vals[0]
            if np.isnan(first):
                if np.all(np.isnan(vals)):
                    out.add(j)
            elif np.all(vals == first):
                out.add(j)

        return out
