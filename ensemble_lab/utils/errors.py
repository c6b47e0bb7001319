# ensemble_lab/utils/errors.py
from __future__ import annotations

from typing import Any, Optional


class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided config (dataset names, model families, etc).
    Should NOT print traceback.
    """


class InvalidArgumentError(ValueError):
    """
    Argument out of its valid range (partition size, test fraction, ...).
    """

    def __init__(self, message: str, *, argument: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.argument = argument
        self.value = value


class SchemaMismatchError(ValueError):
    """
    Dataset does not conform to its declared schema.

    Attributes
    ----------
    column : offending column name
    index  : offending row label (None for column-level problems)
    value  : offending value (None for column-level problems)
    """

    def __init__(
        self,
        message: str,
        *,
        column: Optional[str] = None,
        index: Any = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.column = column
        self.index = index
        self.value = value
