"""
app/api/routers/datasets.py

Dataset listing, rename and delete endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.schemas.ledger import (
    DataSetDeleteResponse,
    DataSetListResponse,
    DataSetRenameRequest,
    DataSetResponse,
)
from app.services.data_set_service import DataSetNameError, DataSetService, get_data_set_service
from db.repositories.errors import (
    DataSetNameConflictError,
    DataSetNotFoundError,
    DataSetPersistenceError,
)
from db.session import get_db

router = APIRouter(prefix="/datasets", tags=["datasets"])


@router.get("", response_model=DataSetListResponse)
def list_data_sets(
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
    service: DataSetService = Depends(get_data_set_service),
) -> DataSetListResponse:
    listings = service.list_data_sets(db=db, limit=limit)
    return DataSetListResponse(data_sets=[DataSetResponse.model_validate(item) for item in listings])


@router.put("/{data_set_id}", response_model=DataSetResponse)
def rename_data_set(
    data_set_id: int,
    payload: DataSetRenameRequest,
    db: Session = Depends(get_db),
    service: DataSetService = Depends(get_data_set_service),
) -> DataSetResponse:
    try:
        listing = service.rename(db=db, data_set_id=data_set_id, name=payload.name)
    except DataSetNameError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DataSetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DataSetNameConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except DataSetPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to rename dataset.",
        ) from exc

    return DataSetResponse.model_validate(listing)


@router.delete("/{data_set_id}", response_model=DataSetDeleteResponse)
def delete_data_set(
    data_set_id: int,
    db: Session = Depends(get_db),
    service: DataSetService = Depends(get_data_set_service),
) -> DataSetDeleteResponse:
    """
    Delete a dataset together with its products and daily records.
    """

    try:
        deleted = service.delete(db=db, data_set_id=data_set_id)
    except DataSetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DataSetPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to delete dataset.",
        ) from exc

    return DataSetDeleteResponse(
        deleted_id=deleted.id,
        name=deleted.name,
        products_deleted=deleted.product_count,
    )
