"""
Repository layer exports.
"""

from db.repositories.data_set_repository import DataSetRepository
from db.repositories.errors import (
    DataSetNameConflictError,
    DataSetNotFoundError,
    DataSetPersistenceError,
    DataSetRepositoryError,
)
from db.repositories.types import DataSetListing

__all__ = [
    "DataSetRepository",
    "DataSetListing",
    "DataSetRepositoryError",
    "DataSetNotFoundError",
    "DataSetNameConflictError",
    "DataSetPersistenceError",
]
