# ensemble_lab/engines/partition_engine.py
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

import numpy as np

from ensemble_lab.utils.errors import InvalidArgumentError

_MAX_SEED = 2**32 - 1


@dataclass(frozen=True, eq=False)
class Partition:
    """
    train / test 下标（升序 int64），两者不相交且并集为 [0, n)。
    """

    train: np.ndarray
    test: np.ndarray

    @property
    def n(self) -> int:
        return len(self.train) + len(self.test)

    @property
    def k(self) -> int:
        return len(self.test)


class PartitionEngine:
    """
    PartitionEngine（FINAL / FROZEN）

    Responsibility:
    - 带显式 seed 的无放回抽样：从 [0, n) 中抽 k 个作为 test，其余为 train

    Determinism (HARD):
    - 相同 (n, k, seed) → 逐位相同的结果，与运行环境无关
    - 使用 numpy legacy RandomState（stream 冻结，跨版本稳定）
    - 每次调用独立构造 RNG，不读写全局随机状态

    Errors:
    - InvalidArgumentError: n < 0 / k < 0 / k > n / seed 非法
    """

    def sample(self, *, n: int, k: int, seed: int) -> np.ndarray:
        self._validate(n=n, k=k, seed=seed)

        if k == 0:
            return np.zeros(0, dtype=np.int64)

        rng = np.random.RandomState(int(seed))
        picked = rng.choice(int(n), size=int(k), replace=False)
        return np.sort(picked.astype(np.int64))

    def split(self, *, n: int, k: int, seed: int) -> Partition:
        test = self.sample(n=n, k=k, seed=seed)

        in_test = np.zeros(int(n), dtype=bool)
        in_test[test] = True
        train = np.flatnonzero(~in_test).astype(np.int64)

        return Partition(train=train, test=test)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _validate(*, n, k, seed) -> None:
        for name, value in (("n", n), ("k", k), ("seed", seed)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidArgumentError(
                    f"{name} must be an integer, got {value!r}",
                    argument=name,
                    value=value,
                )

        if n < 0:
            raise InvalidArgumentError(f"n must be >= 0, got {n}", argument="n", value=n)
        if k < 0:
            raise InvalidArgumentError(f"k must be >= 0, got {k}", argument="k", value=k)
        if k > n:
            raise InvalidArgumentError(
                f"test size k={k} exceeds record count n={n}", argument="k", value=k
            )
        if not 0 <= seed <= _MAX_SEED:
            raise InvalidArgumentError(
                f"seed must be in [0, {_MAX_SEED}], got {seed}",
                argument="seed",
                value=seed,
            )


def resolve_test_size(n: int, test_size: int | float) -> int:
    """
    test_size → k

    - int            : 直接作为 k（0 <= k <= n）
    - float in (0,1) : round-half-up(n * test_size)
    """
    if isinstance(test_size, bool):
        raise InvalidArgumentError(
            f"test_size must be a number, got {test_size!r}",
            argument="test_size",
            value=test_size,
        )

    if isinstance(test_size, numbers.Integral):
        k = int(test_size)
        if not 0 <= k <= n:
            raise InvalidArgumentError(
                f"test_size={k} out of range [0, {n}]",
                argument="test_size",
                value=test_size,
            )
        return k

    if isinstance(test_size, numbers.Real):
        frac = float(test_size)
        if not 0.0 < frac < 1.0:
            raise InvalidArgumentError(
                f"fractional test_size must be in (0, 1), got {frac}",
                argument="test_size",
                value=test_size,
            )
        return int(math.floor(n * frac + 0.5))

    raise InvalidArgumentError(
        f"test_size must be a number, got {test_size!r}",
        argument="test_size",
        value=test_size,
    )
