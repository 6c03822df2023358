"""
tests/test_data_set_service.py

DataSetService and ChartDataService against an in-memory SQLite database.
"""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.domain.ledger import UploadSummary
from app.services.chart_data_service import ChartDataService
from app.services.data_set_service import DataSetNameError, DataSetService
from app.services.upload_service import LedgerUploadService
from db.models import DailyRecord, Product
from db.repositories.errors import DataSetNameConflictError, DataSetNotFoundError
from ledger.aggregator import DayRange
from ledger.parser import SUPPORTED_EXTENSIONS


@pytest.fixture()
def upload(db_session: Session, sample_csv: bytes):
    service = LedgerUploadService(max_upload_bytes=1024 * 1024, allowed_extensions=SUPPORTED_EXTENSIONS)

    def _upload(name: str) -> UploadSummary:
        return service.ingest(content=sample_csv, file_name=f"{name}.csv", db=db_session, dataset_name=name)

    return _upload


@pytest.fixture()
def data_sets() -> DataSetService:
    return DataSetService()


class TestListDataSets:
    def test_newest_first_with_counts(self, upload, data_sets: DataSetService, db_session: Session) -> None:
        first = upload("January")
        second = upload("February")

        listings = data_sets.list_data_sets(db=db_session)

        assert [item.id for item in listings] == [second.data_set_id, first.data_set_id]
        assert all(item.product_count == 2 for item in listings)

    def test_empty(self, data_sets: DataSetService, db_session: Session) -> None:
        assert data_sets.list_data_sets(db=db_session) == []


class TestRename:
    def test_renames(self, upload, data_sets: DataSetService, db_session: Session) -> None:
        summary = upload("January")

        listing = data_sets.rename(db=db_session, data_set_id=summary.data_set_id, name="  Q1  ")

        assert listing.name == "Q1"
        assert listing.product_count == 2

    def test_blank_name(self, upload, data_sets: DataSetService, db_session: Session) -> None:
        summary = upload("January")
        with pytest.raises(DataSetNameError):
            data_sets.rename(db=db_session, data_set_id=summary.data_set_id, name="   ")

    def test_conflict(self, upload, data_sets: DataSetService, db_session: Session) -> None:
        upload("January")
        second = upload("February")

        with pytest.raises(DataSetNameConflictError):
            data_sets.rename(db=db_session, data_set_id=second.data_set_id, name="January")

    def test_same_name_is_not_a_conflict(self, upload, data_sets: DataSetService, db_session: Session) -> None:
        summary = upload("January")
        listing = data_sets.rename(db=db_session, data_set_id=summary.data_set_id, name="January")
        assert listing.name == "January"

    def test_unknown_id(self, data_sets: DataSetService, db_session: Session) -> None:
        with pytest.raises(DataSetNotFoundError):
            data_sets.rename(db=db_session, data_set_id=404, name="Anything")


class TestDelete:
    def test_cascades_to_products_and_records(self, upload, data_sets: DataSetService, db_session: Session) -> None:
        keep = upload("Keep")
        drop = upload("Drop")

        deleted = data_sets.delete(db=db_session, data_set_id=drop.data_set_id)

        assert (deleted.id, deleted.name, deleted.product_count) == (drop.data_set_id, "Drop", 2)
        db_session.expire_all()
        assert db_session.scalar(select(func.count()).select_from(Product)) == 2
        assert db_session.scalar(select(func.count()).select_from(DailyRecord)) == 6
        assert [item.id for item in data_sets.list_data_sets(db=db_session)] == [keep.data_set_id]

    def test_unknown_id(self, data_sets: DataSetService, db_session: Session) -> None:
        with pytest.raises(DataSetNotFoundError):
            data_sets.delete(db=db_session, data_set_id=404)


class TestChartData:
    def test_full_dataset(self, upload, db_session: Session) -> None:
        summary = upload("January")

        chart = ChartDataService().get_chart_data(db=db_session, data_set_id=summary.data_set_id)

        assert chart.data_set_name == "January"
        assert [product.name for product in chart.products] == ["Apple", "Banana"]
        assert [product.record_count for product in chart.products] == [3, 3]
        assert chart.summary.total_products == 2
        assert chart.summary.total_records == 6
        assert chart.summary.day_range == DayRange(start=0, end=2)
        assert [point.inventory for point in chart.series.overview] == [30, 27, 34]
        assert chart.series.per_product[2]["Banana_Procurement"] == 10.0

    def test_filters_apply_to_series_only(self, upload, db_session: Session) -> None:
        summary = upload("January")
        full = ChartDataService().get_chart_data(db=db_session, data_set_id=summary.data_set_id)
        apple_id = full.products[0].id

        chart = ChartDataService().get_chart_data(
            db=db_session,
            data_set_id=summary.data_set_id,
            product_ids=[apple_id],
            day_range=DayRange(start=1, end=1),
        )

        assert chart.summary.total_products == 2
        assert [point.day for point in chart.series.overview] == [1]
        assert chart.series.per_product == [
            {"day": "Day 1", "Apple_Inventory": 12, "Apple_Sales": 12.0, "Apple_Procurement": 10.0}
        ]

    def test_unknown_id(self, db_session: Session) -> None:
        with pytest.raises(DataSetNotFoundError):
            ChartDataService().get_chart_data(db=db_session, data_set_id=404)
