"""
Repository-layer exceptions for dataset flows.
"""

from __future__ import annotations


class DataSetRepositoryError(Exception):
    """Base exception for dataset repository failures."""


class DataSetNotFoundError(DataSetRepositoryError, LookupError):
    """Raised when a referenced dataset does not exist."""

    def __init__(self, data_set_id: int) -> None:
        self.data_set_id = data_set_id
        super().__init__(f"Dataset not found: {data_set_id}")


class DataSetNameConflictError(DataSetRepositoryError):
    """Raised when a rename would duplicate another dataset's name."""


class DataSetPersistenceError(DataSetRepositoryError):
    """Raised when a dataset tree cannot be written; the cause is chained."""
