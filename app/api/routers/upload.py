"""
app/api/routers/upload.py

Spreadsheet upload HTTP endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_spreadsheet_upload
from app.schemas.ledger import UploadSummaryResponse
from app.services.upload_service import LedgerUploadService, get_upload_service
from db.repositories.errors import DataSetPersistenceError
from db.session import get_db
from ledger.errors import SheetValidationError

router = APIRouter(tags=["upload"])


@router.post("/upload", response_model=UploadSummaryResponse)
def upload_spreadsheet(
    file: UploadFile = Depends(get_spreadsheet_upload),
    dataset_name: str | None = Form(default=None),
    db: Session = Depends(get_db),
    upload_service: LedgerUploadService = Depends(get_upload_service),
) -> UploadSummaryResponse:
    """
    Parse one spreadsheet and store it as a new dataset.
    """

    try:
        content = file.file.read()
        summary = upload_service.ingest(
            content=content,
            file_name=file.filename or "",
            db=db,
            dataset_name=dataset_name,
        )
    except SheetValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except DataSetPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to persist uploaded dataset.",
        ) from exc
    finally:
        file.file.close()

    return UploadSummaryResponse.from_summary(summary)
