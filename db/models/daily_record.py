"""
db/models/daily_record.py

DailyRecord model: closing ledger entry for one product on one day.
"""

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Float, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from db.models.product import Product


class DailyRecord(Base):
    """
    Stored output of the rollforward engine.

    Day 0 holds the opening balance with all movement fields at zero.
    ``inventory`` may be negative when more was sold than was on hand.
    """

    __tablename__ = "daily_records"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    product_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )

    day: Mapped[int] = mapped_column(Integer, nullable=False)
    inventory: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Closing balance for the day",
    )
    procurement_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    procurement_price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    procurement_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    sales_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sales_price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    sales_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # ── Relationships ──────────────────────────────────────────────────────────

    product: Mapped["Product"] = relationship(
        "Product",
        back_populates="daily_records",
    )

    __table_args__ = (
        UniqueConstraint("product_id", "day", name="uq_daily_records_product_day"),
    )

    def __repr__(self) -> str:
        return (
            f"<DailyRecord product_id={self.product_id!r} day={self.day} "
            f"inventory={self.inventory}>"
        )
