"""
app/services/upload_service.py

Service layer for spreadsheet uploads.

Flow
----
1. Validate the payload (name, extension, size) and parse the sheet.
   Validation failures raise before anything touches the database.
2. Inside one transaction: create the dataset, then for every admitted row
   pick a unique display name, roll the ledger forward and insert the
   product with its daily records.
3. Commit. Any database error rolls the whole upload back so no partial
   dataset is ever visible.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_upload_settings
from app.domain.ledger import UploadSummary
from app.logging_utils import log_event
from db.repositories.data_set_repository import DataSetRepository
from db.repositories.errors import DataSetPersistenceError
from ledger.errors import SheetValidationError
from ledger.naming import unique_product_name
from ledger.parser import parse_upload
from ledger.rollforward import roll_forward

logger = logging.getLogger(__name__)


def generate_product_id(data_set_id: int, external_id: str) -> str:
    """
    Build a product key unique across uploads, even for repeated source IDs.
    """

    timestamp_ms = int(time.time() * 1000)
    suffix = uuid.uuid4().hex[:6]
    return f"{data_set_id}-{external_id}-{timestamp_ms}-{suffix}"


class LedgerUploadService:
    """
    Coordinates sheet parsing, ledger rollforward and persistence.
    """

    def __init__(
        self,
        *,
        max_upload_bytes: int,
        allowed_extensions: frozenset[str],
        product_id_factory: Callable[[int, str], str] = generate_product_id,
    ) -> None:
        self._max_upload_bytes = max(1, max_upload_bytes)
        self._allowed_extensions = allowed_extensions
        self._product_id_factory = product_id_factory

    def ingest(
        self,
        *,
        content: bytes,
        file_name: str,
        db: Session,
        dataset_name: str | None = None,
    ) -> UploadSummary:
        """
        Parse one uploaded file and persist it as a new dataset.

        Args:
            content:      Raw file bytes.
            file_name:    Original file name; selects the reader and is the
                          default dataset name.
            db:           Active SQLAlchemy session (caller owns lifecycle).
            dataset_name: Optional explicit dataset name.

        Raises:
            SheetValidationError:    Payload or sheet is unusable. Nothing
                                     has been written.
            DataSetPersistenceError: The write failed and was rolled back.
        """
        self._validate_payload(content=content, file_name=file_name)
        sheet = parse_upload(content, file_name)
        name = (dataset_name or "").strip() or Path(file_name).name

        repository = DataSetRepository(db)
        products_count = 0
        records_count = 0

        try:
            data_set = repository.create_data_set(name=name)
            for position, row in enumerate(sheet.rows):
                # Names written earlier in this transaction are flushed, so
                # they are part of the collision scope.
                existing = repository.existing_product_names(data_set.id, row.product_name)
                product_name = unique_product_name(row.product_name, existing)
                records = roll_forward(row, sheet.max_day)
                repository.add_product(
                    product_id=self._product_id_factory(data_set.id, row.external_id),
                    data_set_id=data_set.id,
                    external_id=row.external_id,
                    name=product_name,
                    position=position,
                    records=records,
                )
                products_count += 1
                records_count += len(records)

            db.commit()
            db.refresh(data_set)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Upload persistence failed file_name=%r", file_name)
            raise DataSetPersistenceError("Failed to persist uploaded dataset.") from exc
        except Exception:
            db.rollback()
            raise

        summary = UploadSummary(
            data_set_id=data_set.id,
            data_set_name=data_set.name,
            created_at=data_set.created_at,
            products_count=products_count,
            records_count=records_count,
            days_processed=sheet.max_day,
            rows_skipped=sheet.skipped_rows,
        )
        log_event(
            logger,
            logging.INFO,
            "upload_completed",
            data_set_id=summary.data_set_id,
            file_name=file_name,
            products=summary.products_count,
            records=summary.records_count,
            max_day=summary.days_processed,
            skipped_rows=summary.rows_skipped,
        )
        return summary

    def _validate_payload(self, *, content: bytes, file_name: str) -> None:
        if not file_name or not file_name.strip():
            raise SheetValidationError("file_name is required.")

        extension = Path(file_name).suffix.lower()
        if extension not in self._allowed_extensions:
            raise SheetValidationError(
                f"Unsupported file type '{extension}'. Allowed: {sorted(self._allowed_extensions)}."
            )

        if not content:
            raise SheetValidationError("Uploaded file content is empty.")

        if len(content) > self._max_upload_bytes:
            raise SheetValidationError("Uploaded file exceeds configured size limit.")


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_upload_service() -> LedgerUploadService:
    """
    Build and cache the upload service with env-driven settings.
    """
    settings = get_upload_settings()
    return LedgerUploadService(
        max_upload_bytes=settings.max_upload_bytes,
        allowed_extensions=settings.allowed_extensions,
    )
