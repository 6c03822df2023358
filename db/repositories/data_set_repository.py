"""
db/repositories/data_set_repository.py

Persistence layer for datasets, their products and daily records.

The caller controls commit/rollback; this repository never commits on its
own. Writes are flushed so that later reads in the same transaction (the
product-name collision lookup in particular) see them.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from db.models.daily_record import DailyRecord
from db.models.data_set import DataSet
from db.models.product import Product
from db.repositories.errors import DataSetNotFoundError
from db.repositories.types import DataSetListing
from ledger.types import DailyRecord as LedgerRecord


class DataSetRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def create_data_set(self, *, name: str) -> DataSet:
        data_set = DataSet(name=name)
        self._session.add(data_set)
        self._session.flush()
        return data_set

    def add_product(
        self,
        *,
        product_id: str,
        data_set_id: int,
        external_id: str,
        name: str,
        position: int,
        records: Sequence[LedgerRecord],
    ) -> Product:
        """
        Insert one product with its full daily ledger.
        """
        product = Product(
            id=product_id,
            data_set_id=data_set_id,
            external_id=external_id,
            name=name,
            position=position,
            daily_records=[
                DailyRecord(
                    day=record.day,
                    inventory=record.inventory,
                    procurement_quantity=record.procurement_quantity,
                    procurement_price=record.procurement_price,
                    procurement_amount=record.procurement_amount,
                    sales_quantity=record.sales_quantity,
                    sales_price=record.sales_price,
                    sales_amount=record.sales_amount,
                )
                for record in records
            ],
        )
        self._session.add(product)
        self._session.flush()
        return product

    def rename_data_set(self, data_set_id: int, name: str) -> DataSet:
        data_set = self.require_data_set(data_set_id)
        data_set.name = name
        self._session.flush()
        return data_set

    def delete_data_set(self, data_set_id: int) -> DataSet:
        data_set = self.require_data_set(data_set_id)
        self._session.delete(data_set)
        self._session.flush()
        return data_set

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_data_set(self, data_set_id: int) -> DataSet | None:
        return self._session.get(DataSet, data_set_id)

    def require_data_set(self, data_set_id: int) -> DataSet:
        data_set = self.get_data_set(data_set_id)
        if data_set is None:
            raise DataSetNotFoundError(data_set_id)
        return data_set

    def get_data_set_with_ledgers(self, data_set_id: int) -> DataSet:
        """
        Load a dataset with products (by position) and records (by day).

        Raises DataSetNotFoundError when the id is unknown.
        """
        stmt = (
            select(DataSet)
            .where(DataSet.id == data_set_id)
            .options(selectinload(DataSet.products).selectinload(Product.daily_records))
        )
        data_set = self._session.scalars(stmt).one_or_none()
        if data_set is None:
            raise DataSetNotFoundError(data_set_id)
        return data_set

    def existing_product_names(self, data_set_id: int, base_name: str) -> list[str]:
        """
        Names in the dataset equal to *base_name* or starting with ``base_name(``.
        """
        stmt = select(Product.name).where(
            Product.data_set_id == data_set_id,
            or_(
                Product.name == base_name,
                Product.name.startswith(f"{base_name}(", autoescape=True),
            ),
        )
        return list(self._session.scalars(stmt).all())

    def count_products(self, data_set_id: int) -> int:
        stmt = select(func.count(Product.id)).where(Product.data_set_id == data_set_id)
        return int(self._session.scalar(stmt) or 0)

    def find_by_name(self, name: str, *, exclude_id: int | None = None) -> DataSet | None:
        stmt = select(DataSet).where(DataSet.name == name)
        if exclude_id is not None:
            stmt = stmt.where(DataSet.id != exclude_id)
        return self._session.scalars(stmt.limit(1)).first()

    def list_data_sets(self, *, limit: int = 100) -> list[DataSetListing]:
        """
        Datasets newest first, each with its product count.
        """
        stmt = (
            select(DataSet.id, DataSet.name, DataSet.created_at, func.count(Product.id))
            .outerjoin(Product, Product.data_set_id == DataSet.id)
            .group_by(DataSet.id, DataSet.name, DataSet.created_at)
            .order_by(DataSet.created_at.desc(), DataSet.id.desc())
            .limit(max(1, limit))
        )
        return [
            DataSetListing(id=row[0], name=row[1], created_at=row[2], product_count=int(row[3]))
            for row in self._session.execute(stmt).all()
        ]
