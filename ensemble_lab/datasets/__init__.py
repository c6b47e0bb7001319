from .catalog import DIAMONDS_SCHEMA, MUSHROOMS_SCHEMA, resolve_schema
from .loader import DatasetLoadEngine

__all__ = ["DIAMONDS_SCHEMA", "MUSHROOMS_SCHEMA", "resolve_schema", "DatasetLoadEngine"]
