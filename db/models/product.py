"""
db/models/product.py

Product model: one spreadsheet row inside a dataset.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from db.models.daily_record import DailyRecord
    from db.models.data_set import DataSet


class Product(Base):
    """
    A product row of one upload.

    ``id`` is generated per upload (dataset id, source row id, timestamp and
    a random suffix), so the same spreadsheet ID may appear in any number of
    uploads. ``name`` is unique within its dataset; the constraint backs the
    suffixing done at upload time against concurrent writers.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        Text,
        primary_key=True,
    )

    data_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("data_sets.id", ondelete="CASCADE"),
        nullable=False,
    )

    external_id: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="ID column value from the source spreadsheet",
    )

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Row order within the upload",
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    data_set: Mapped["DataSet"] = relationship(
        "DataSet",
        back_populates="products",
    )

    daily_records: Mapped[list["DailyRecord"]] = relationship(
        "DailyRecord",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DailyRecord.day",
    )

    # ── Indexes ────────────────────────────────────────────────────────────────

    __table_args__ = (
        UniqueConstraint("data_set_id", "name", name="uq_products_data_set_name"),
        Index("ix_products_data_set_id", "data_set_id"),
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id!r} name={self.name!r} data_set_id={self.data_set_id}>"
