from .types import (
    Numeric,
    Categorical,
    OrderedCategorical,
    ColumnType,
    DatasetSchema,
)
from .dataset import Dataset

__all__ = [
    "Numeric",
    "Categorical",
    "OrderedCategorical",
    "ColumnType",
    "DatasetSchema",
    "Dataset",
]
