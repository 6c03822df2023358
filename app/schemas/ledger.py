"""
app/schemas/ledger.py

Request and response schemas for upload, dataset, chart-data and assistant
endpoints.

Chart payload fields are serialized in camelCase so a chart consumer can use
them as-is.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.ledger import AssistantAnswer, ChartData, UploadSummary
from ledger.aggregator import DayRange


class UploadSummaryResponse(BaseModel):
    """
    API response model for one completed upload.
    """

    data_set_id: int
    data_set_name: str
    created_at: datetime | None = None
    products_count: int = Field(..., ge=0)
    records_count: int = Field(..., ge=0)
    days_processed: int = Field(..., ge=0)
    rows_skipped: int = Field(0, ge=0)

    @classmethod
    def from_summary(cls, summary: UploadSummary) -> "UploadSummaryResponse":
        return cls(
            data_set_id=summary.data_set_id,
            data_set_name=summary.data_set_name,
            created_at=summary.created_at,
            products_count=summary.products_count,
            records_count=summary.records_count,
            days_processed=summary.days_processed,
            rows_skipped=summary.rows_skipped,
        )


class DataSetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime | None = None
    product_count: int = Field(0, ge=0)


class DataSetListResponse(BaseModel):
    data_sets: list[DataSetResponse] = Field(default_factory=list)


class DataSetRenameRequest(BaseModel):
    name: str


class DataSetDeleteResponse(BaseModel):
    deleted_id: int
    name: str
    products_deleted: int = Field(0, ge=0)


# ---------------------------------------------------------------------------
# Chart data
# ---------------------------------------------------------------------------


class DayRangeResponse(BaseModel):
    start: int | None = None
    end: int | None = None


class OverviewPointResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day: int
    inventory: int
    sales_amount: float = Field(..., alias="salesAmount")
    procurement_amount: float = Field(..., alias="procurementAmount")


class ProductSummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    record_count: int = Field(..., ge=0, alias="recordCount")


class ChartSummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_products: int = Field(..., ge=0, alias="totalProducts")
    total_records: int = Field(..., ge=0, alias="totalRecords")
    day_range: DayRangeResponse | None = Field(None, alias="dayRange")


class ChartDataResponse(BaseModel):
    """
    API response model for one dataset's chart payload.

    ``per_product`` rows are keyed ``day`` plus ``{name}_Inventory``,
    ``{name}_Sales`` and ``{name}_Procurement`` for every included product.
    """

    model_config = ConfigDict(populate_by_name=True)

    data_set_id: int = Field(..., alias="dataSetId")
    data_set_name: str = Field(..., alias="dataSetName")
    created_at: datetime | None = Field(None, alias="createdAt")
    products: list[ProductSummaryResponse] = Field(default_factory=list)
    overview: list[OverviewPointResponse] = Field(default_factory=list)
    per_product: list[dict[str, Any]] = Field(default_factory=list, alias="perProduct")
    summary: ChartSummaryResponse

    @classmethod
    def from_chart_data(cls, chart: ChartData) -> "ChartDataResponse":
        return cls(
            data_set_id=chart.data_set_id,
            data_set_name=chart.data_set_name,
            created_at=chart.created_at,
            products=[
                ProductSummaryResponse(id=product.id, name=product.name, record_count=product.record_count)
                for product in chart.products
            ],
            overview=[
                OverviewPointResponse(
                    day=point.day,
                    inventory=point.inventory,
                    sales_amount=point.sales_amount,
                    procurement_amount=point.procurement_amount,
                )
                for point in chart.series.overview
            ],
            per_product=chart.series.per_product,
            summary=ChartSummaryResponse(
                total_products=chart.summary.total_products,
                total_records=chart.summary.total_records,
                day_range=_day_range_response(chart.summary.day_range),
            ),
        )


def _day_range_response(day_range: DayRange | None) -> DayRangeResponse | None:
    if day_range is None:
        return None
    return DayRangeResponse(start=day_range.start, end=day_range.end)


# ---------------------------------------------------------------------------
# Assistant
# ---------------------------------------------------------------------------


class AssistantRequest(BaseModel):
    data_set_id: int
    question: str = Field(..., max_length=4000)


class AssistantDataSummary(BaseModel):
    data_set_name: str
    total_products: int = Field(..., ge=0)
    total_records: int = Field(..., ge=0)
    created_at: datetime | None = None


class AssistantResponse(BaseModel):
    answer: str
    data_summary: AssistantDataSummary

    @classmethod
    def from_answer(cls, answer: AssistantAnswer) -> "AssistantResponse":
        return cls(
            answer=answer.answer,
            data_summary=AssistantDataSummary(
                data_set_name=answer.data_set_name,
                total_products=answer.total_products,
                total_records=answer.total_records,
                created_at=answer.created_at,
            ),
        )
