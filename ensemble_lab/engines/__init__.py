from .dedup_engine import DedupEngine, KEY_SEPARATOR
from .design_matrix_engine import DesignMatrix, DesignMatrixEngine
from .constant_column_engine import ConstantColumnEngine
from .partition_engine import Partition, PartitionEngine, resolve_test_size

__all__ = [
    "DedupEngine",
    "KEY_SEPARATOR",
    "DesignMatrix",
    "DesignMatrixEngine",
    "ConstantColumnEngine",
    "Partition",
    "PartitionEngine",
    "resolve_test_size",
]
