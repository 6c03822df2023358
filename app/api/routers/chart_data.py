"""
app/api/routers/chart_data.py

Chart data endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.schemas.ledger import ChartDataResponse
from app.services.chart_data_service import ChartDataService, get_chart_data_service
from db.repositories.errors import DataSetNotFoundError
from db.session import get_db
from ledger.aggregator import DayRange

router = APIRouter(tags=["data"])


@router.get("/data/{data_set_id}", response_model=ChartDataResponse)
def get_chart_data(
    data_set_id: int,
    product_id: list[str] | None = Query(default=None, description="Restrict series to these product ids"),
    all_products: bool = Query(
        default=True,
        description="With no product_id given, false selects no products instead of all",
    ),
    day_start: int | None = Query(default=None, description="First day to include"),
    day_end: int | None = Query(default=None, description="Last day to include"),
    db: Session = Depends(get_db),
    service: ChartDataService = Depends(get_chart_data_service),
) -> ChartDataResponse:
    """
    Return overview and per-product series for one dataset.
    """

    product_ids = product_id
    if product_ids is None and not all_products:
        product_ids = []

    day_range = None
    if day_start is not None or day_end is not None:
        day_range = DayRange(start=day_start, end=day_end)

    try:
        chart = service.get_chart_data(
            db=db,
            data_set_id=data_set_id,
            product_ids=product_ids,
            day_range=day_range,
        )
    except DataSetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return ChartDataResponse.from_chart_data(chart)
