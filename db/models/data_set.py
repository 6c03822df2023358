"""
db/models/data_set.py

DataSet model: one uploaded spreadsheet and the products parsed from it.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.product import Product


class DataSet(Base, TimestampMixin):
    """
    Named container for the products of one upload.

    Deleting a dataset removes its products and their daily records, both
    through the ORM cascade and the ON DELETE CASCADE foreign keys.
    """

    __tablename__ = "data_sets"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Display name; defaults to the uploaded file name",
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="data_set",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Product.position",
    )

    # ── Indexes ────────────────────────────────────────────────────────────────

    __table_args__ = (
        Index("ix_data_sets_name", "name"),
        Index("ix_data_sets_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<DataSet id={self.id} name={self.name!r}>"
