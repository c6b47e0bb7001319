# ensemble_lab/schema/types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Iterator, List, Mapping, Tuple, Union

from ensemble_lab.utils.errors import InvalidArgumentError, SchemaMismatchError


@dataclass(frozen=True)
class Numeric:
    """数值列：原样进入 design matrix。"""

    kind: ClassVar[str] = "numeric"


@dataclass(frozen=True)
class Categorical:
    """
    无序类别列。

    levels 的声明顺序决定 indicator 列顺序，第一个 level 为 reference（被丢弃）。
    """

    levels: Tuple[Any, ...]

    kind: ClassVar[str] = "categorical"
    ordered: ClassVar[bool] = False

    def __post_init__(self):
        levels = tuple(self.levels)
        if not levels:
            raise InvalidArgumentError(
                f"{type(self).__name__} requires at least one level",
                argument="levels",
                value=levels,
            )
        if len(set(levels)) != len(levels):
            raise InvalidArgumentError(
                f"{type(self).__name__} levels must be unique: {levels}",
                argument="levels",
                value=levels,
            )
        object.__setattr__(self, "levels", levels)

    @property
    def n_indicators(self) -> int:
        return len(self.levels) - 1


@dataclass(frozen=True)
class OrderedCategorical(Categorical):
    """
    有序类别列：levels 按 rank 从低到高声明（如 cut: Fair < ... < Ideal）。
    """

    kind: ClassVar[str] = "ordered"
    ordered: ClassVar[bool] = True


ColumnType = Union[Numeric, Categorical, OrderedCategorical]


@dataclass(frozen=True)
class DatasetSchema:
    """
    DatasetSchema（FINAL / FROZEN）

    语义：
    - 列名 → ColumnType 的有序映射
    - 声明顺序 = design matrix 中列的相对顺序
    """

    columns: Tuple[Tuple[str, ColumnType], ...]

    def __post_init__(self):
        cols = tuple((str(name), ctype) for name, ctype in self.columns)
        names = [name for name, _ in cols]
        if len(set(names)) != len(names):
            raise InvalidArgumentError(
                f"duplicate column names in schema: {names}",
                argument="columns",
            )
        for name, ctype in cols:
            if not isinstance(ctype, (Numeric, Categorical)):
                raise InvalidArgumentError(
                    f"column {name!r} has unsupported type {ctype!r}",
                    argument=name,
                    value=ctype,
                )
        object.__setattr__(self, "columns", cols)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, ColumnType]) -> "DatasetSchema":
        return cls(tuple(mapping.items()))

    # --------------------------------------------------
    # mapping protocol
    # --------------------------------------------------
    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.columns]

    def __contains__(self, name: object) -> bool:
        return any(name == n for n, _ in self.columns)

    def __getitem__(self, name: str) -> ColumnType:
        for n, ctype in self.columns:
            if n == name:
                return ctype
        raise SchemaMismatchError(f"column {name!r} not declared in schema", column=name)

    def __iter__(self) -> Iterator[Tuple[str, ColumnType]]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    # --------------------------------------------------
    # views
    # --------------------------------------------------
    def numeric_columns(self, exclude: Iterable[str] = ()) -> List[str]:
        skip = set(exclude)
        return [n for n, t in self.columns if isinstance(t, Numeric) and n not in skip]

    def categorical_columns(self, exclude: Iterable[str] = ()) -> List[str]:
        skip = set(exclude)
        return [n for n, t in self.columns if isinstance(t, Categorical) and n not in skip]

    def select(self, names: Iterable[str]) -> "DatasetSchema":
        """
        子 schema，保持声明顺序；未声明列 → SchemaMismatchError。
        """
        wanted = list(names)
        for name in wanted:
            if name not in self:
                raise SchemaMismatchError(
                    f"column {name!r} not declared in schema", column=name
                )
        keep = set(wanted)
        return DatasetSchema(tuple((n, t) for n, t in self.columns if n in keep))

    def design_width(self, response: str | None = None) -> int:
        """
        design matrix 列数 = #numeric + Σ(levels - 1)，不含 response。
        """
        width = 0
        for name, ctype in self.columns:
            if name == response:
                continue
            if isinstance(ctype, Categorical):
                width += ctype.n_indicators
            else:
                width += 1
        return width
