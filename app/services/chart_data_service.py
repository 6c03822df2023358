"""
app/services/chart_data_service.py

Read side of the dashboard: loads one dataset's ledgers and runs them
through the aggregator under the caller's product and day filters.

No arithmetic lives here; see ledger.aggregator.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from functools import lru_cache

from sqlalchemy.orm import Session

from app.domain.ledger import ChartData, ChartSummary, ProductSummary
from db.models.data_set import DataSet
from db.repositories.data_set_repository import DataSetRepository
from ledger.aggregator import DayRange, ProductLedger, aggregate, observed_day_range

logger = logging.getLogger(__name__)


def to_product_ledgers(data_set: DataSet) -> list[ProductLedger]:
    """
    Wrap ORM products (ordered by position, records by day) for aggregation.
    """

    return [
        ProductLedger(product_id=product.id, name=product.name, records=product.daily_records)
        for product in data_set.products
    ]


class ChartDataService:
    """
    Builds chart payloads for one dataset per request.
    """

    def get_chart_data(
        self,
        *,
        db: Session,
        data_set_id: int,
        product_ids: Collection[str] | None = None,
        day_range: DayRange | None = None,
    ) -> ChartData:
        """
        Return overview and per-product series for *data_set_id*.

        Args:
            db:          Active SQLAlchemy session.
            data_set_id: Dataset to read.
            product_ids: Products to include; ``None`` means all, an empty
                         collection yields empty series.
            day_range:   Optional inclusive day window.

        Raises:
            DataSetNotFoundError: Unknown dataset id.
        """
        data_set = DataSetRepository(db).get_data_set_with_ledgers(data_set_id)
        ledgers = to_product_ledgers(data_set)
        series = aggregate(ledgers, product_ids=product_ids, day_range=day_range)

        products = [
            ProductSummary(id=ledger.product_id, name=ledger.name, record_count=len(ledger.records))
            for ledger in ledgers
        ]
        summary = ChartSummary(
            total_products=len(products),
            total_records=sum(product.record_count for product in products),
            day_range=observed_day_range(ledgers),
        )
        logger.debug(
            "get_chart_data data_set_id=%s products=%d overview_points=%d",
            data_set_id,
            len(products),
            len(series.overview),
        )
        return ChartData(
            data_set_id=data_set.id,
            data_set_name=data_set.name,
            created_at=data_set.created_at,
            products=products,
            series=series,
            summary=summary,
        )


@lru_cache(maxsize=1)
def get_chart_data_service() -> ChartDataService:
    return ChartDataService()
