"""
app/domain/ledger.py

Domain models returned by the upload, chart-data, dataset and assistant
services.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ledger.aggregator import ChartSeries, DayRange


@dataclass(frozen=True)
class UploadSummary:
    """
    End-of-run upload summary.
    """

    data_set_id: int
    data_set_name: str
    created_at: datetime | None
    products_count: int
    records_count: int
    days_processed: int
    rows_skipped: int = 0


@dataclass(frozen=True)
class ProductSummary:
    id: str
    name: str
    record_count: int


@dataclass(frozen=True)
class ChartSummary:
    total_products: int
    total_records: int
    day_range: DayRange | None = None


@dataclass(frozen=True)
class ChartData:
    """
    Everything the chart consumer needs for one dataset read.

    ``summary`` always describes the whole dataset; ``series`` reflects the
    product and day filters of the request.
    """

    data_set_id: int
    data_set_name: str
    created_at: datetime | None
    products: list[ProductSummary] = field(default_factory=list)
    series: ChartSeries = field(default_factory=ChartSeries)
    summary: ChartSummary = field(default_factory=lambda: ChartSummary(0, 0))


@dataclass(frozen=True)
class DeletedDataSet:
    id: int
    name: str
    product_count: int


@dataclass(frozen=True)
class AssistantAnswer:
    """
    Free-text answer plus a summary of the data it was based on.
    """

    answer: str
    data_set_name: str
    total_products: int
    total_records: int
    created_at: datetime | None
