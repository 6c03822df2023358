"""
app/services/data_set_service.py

Listing, renaming and deleting datasets.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.ledger import DeletedDataSet
from app.logging_utils import log_event
from db.repositories.data_set_repository import DataSetRepository
from db.repositories.errors import DataSetNameConflictError, DataSetPersistenceError
from db.repositories.types import DataSetListing

logger = logging.getLogger(__name__)


class DataSetNameError(ValueError):
    """
    Raised when a requested dataset name is blank.
    """


class DataSetService:
    """
    Explicit, user-triggered mutations on existing datasets.
    """

    def list_data_sets(self, *, db: Session, limit: int = 100) -> list[DataSetListing]:
        return DataSetRepository(db).list_data_sets(limit=limit)

    def rename(self, *, db: Session, data_set_id: int, name: str) -> DataSetListing:
        """
        Rename a dataset.

        Raises:
            DataSetNameError:         *name* is blank.
            DataSetNotFoundError:     Unknown dataset id.
            DataSetNameConflictError: Another dataset already uses the name.
            DataSetPersistenceError:  The update failed and was rolled back.
        """
        new_name = (name or "").strip()
        if not new_name:
            raise DataSetNameError("Dataset name is required.")

        repository = DataSetRepository(db)
        repository.require_data_set(data_set_id)
        if repository.find_by_name(new_name, exclude_id=data_set_id) is not None:
            raise DataSetNameConflictError(f"Dataset name already exists: {new_name!r}")

        try:
            data_set = repository.rename_data_set(data_set_id, new_name)
            db.commit()
            db.refresh(data_set)
        except SQLAlchemyError as exc:
            db.rollback()
            raise DataSetPersistenceError("Failed to rename dataset.") from exc

        log_event(logger, logging.INFO, "data_set_renamed", data_set_id=data_set_id, name=new_name)
        return DataSetListing(
            id=data_set.id,
            name=data_set.name,
            created_at=data_set.created_at,
            product_count=repository.count_products(data_set_id),
        )

    def delete(self, *, db: Session, data_set_id: int) -> DeletedDataSet:
        """
        Delete a dataset with all its products and daily records.

        Raises:
            DataSetNotFoundError:    Unknown dataset id.
            DataSetPersistenceError: The delete failed and was rolled back.
        """
        repository = DataSetRepository(db)
        data_set = repository.require_data_set(data_set_id)
        deleted = DeletedDataSet(
            id=data_set.id,
            name=data_set.name,
            product_count=repository.count_products(data_set_id),
        )

        try:
            repository.delete_data_set(data_set_id)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise DataSetPersistenceError("Failed to delete dataset.") from exc

        log_event(
            logger,
            logging.INFO,
            "data_set_deleted",
            data_set_id=deleted.id,
            products=deleted.product_count,
        )
        return deleted


@lru_cache(maxsize=1)
def get_data_set_service() -> DataSetService:
    return DataSetService()
