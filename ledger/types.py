"""
ledger/types.py

Plain data carriers shared by the parser, rollforward engine and aggregator.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawRow:
    """
    One admitted spreadsheet row, already coerced to numbers.

    Day-indexed mappings only hold the days present in the sheet; a missing
    day reads as zero.
    """

    external_id: str
    product_name: str
    opening_inventory: int
    procurement_qty: dict[int, int] = field(default_factory=dict)
    procurement_price: dict[int, float] = field(default_factory=dict)
    sales_qty: dict[int, int] = field(default_factory=dict)
    sales_price: dict[int, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ParsedSheet:
    """
    Parser output for one upload.
    """

    rows: list[RawRow]
    max_day: int
    skipped_rows: int = 0
    headers: tuple[str, ...] = ()


@dataclass(frozen=True)
class DailyRecord:
    """
    Closing ledger entry for one product on one day.

    Day 0 is the synthetic opening-balance row.
    """

    day: int
    inventory: int
    procurement_quantity: int = 0
    procurement_price: float = 0.0
    procurement_amount: float = 0.0
    sales_quantity: int = 0
    sales_price: float = 0.0
    sales_amount: float = 0.0
