"""
ledger/aggregator.py

Reshapes per-product daily ledgers into chart-ready series.

Two views are produced from the same filtered record set:

Overview series
    One point per distinct day with inventory, sales amount and procurement
    amount summed across the included products. Amounts are recomputed as
    ``quantity * price`` here rather than read from the stored amount.

Per-product series
    One row per distinct day labelled ``"Day N"`` carrying
    ``{name}_Inventory``, ``{name}_Sales`` and ``{name}_Procurement`` for
    every included product. A product with no record on a day of the union
    gets zeros for that day.

Both views list days in ascending numeric order and iterate products in the
order they were supplied, so identical inputs give identical output.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

DAY_LABEL_TEMPLATE = "Day {day}"
INVENTORY_SUFFIX = "_Inventory"
SALES_SUFFIX = "_Sales"
PROCUREMENT_SUFFIX = "_Procurement"


class LedgerEntry(Protocol):
    """Attributes read from a stored or freshly computed daily record."""

    day: int
    inventory: int
    procurement_quantity: int
    procurement_price: float
    procurement_amount: float
    sales_quantity: int
    sales_price: float
    sales_amount: float


def record_payload(record: LedgerEntry) -> dict[str, int | float]:
    """
    camelCase mapping of one daily record, as handed to the assistant prompt.
    """
    return {
        "day": record.day,
        "inventory": record.inventory,
        "procurementQuantity": record.procurement_quantity,
        "procurementPrice": record.procurement_price,
        "procurementAmount": record.procurement_amount,
        "salesQuantity": record.sales_quantity,
        "salesPrice": record.sales_price,
        "salesAmount": record.sales_amount,
    }


@dataclass(frozen=True)
class DayRange:
    """
    Inclusive day window; either bound may be left open.
    """

    start: int | None = None
    end: int | None = None

    def contains(self, day: int) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


@dataclass(frozen=True)
class ProductLedger:
    """
    One product's identity plus its daily records.
    """

    product_id: str
    name: str
    records: Sequence[LedgerEntry] = ()


@dataclass(frozen=True)
class OverviewPoint:
    day: int
    inventory: int
    sales_amount: float
    procurement_amount: float

    def as_chart_row(self) -> dict[str, int | float]:
        return {
            "day": self.day,
            "inventory": self.inventory,
            "salesAmount": self.sales_amount,
            "procurementAmount": self.procurement_amount,
        }


@dataclass(frozen=True)
class ChartSeries:
    overview: list[OverviewPoint] = field(default_factory=list)
    per_product: list[dict[str, Any]] = field(default_factory=list)


def day_label(day: int) -> str:
    return DAY_LABEL_TEMPLATE.format(day=day)


def metric_keys(product_name: str) -> tuple[str, str, str]:
    """Inventory, sales and procurement keys for one product."""
    return (
        f"{product_name}{INVENTORY_SUFFIX}",
        f"{product_name}{SALES_SUFFIX}",
        f"{product_name}{PROCUREMENT_SUFFIX}",
    )


def select_ledgers(
    ledgers: Sequence[ProductLedger],
    product_ids: Collection[str] | None = None,
) -> list[ProductLedger]:
    """
    Keep ledgers whose id is in *product_ids*; ``None`` keeps everything.

    Supplied order is preserved regardless of the order of *product_ids*.
    """

    if product_ids is None:
        return list(ledgers)
    wanted = set(product_ids)
    return [ledger for ledger in ledgers if ledger.product_id in wanted]


def observed_day_range(ledgers: Sequence[ProductLedger]) -> DayRange | None:
    """
    Smallest and largest day across all records, or None when there are none.
    """

    days = [record.day for ledger in ledgers for record in ledger.records]
    if not days:
        return None
    return DayRange(start=min(days), end=max(days))


def _filtered_records(ledger: ProductLedger, day_range: DayRange | None) -> list[LedgerEntry]:
    if day_range is None:
        return list(ledger.records)
    return [record for record in ledger.records if day_range.contains(record.day)]


def _sorted_days(filtered: Sequence[Sequence[LedgerEntry]]) -> list[int]:
    return sorted({record.day for records in filtered for record in records})


def build_overview_series(
    ledgers: Sequence[ProductLedger],
    *,
    product_ids: Collection[str] | None = None,
    day_range: DayRange | None = None,
) -> list[OverviewPoint]:
    """
    Per-day totals across the selected products.
    """

    selected = select_ledgers(ledgers, product_ids)
    filtered = [_filtered_records(ledger, day_range) for ledger in selected]

    totals: dict[int, list[Any]] = {day: [0, 0.0, 0.0] for day in _sorted_days(filtered)}
    for records in filtered:
        for record in records:
            bucket = totals[record.day]
            bucket[0] += record.inventory
            bucket[1] += record.sales_quantity * record.sales_price
            bucket[2] += record.procurement_quantity * record.procurement_price

    return [
        OverviewPoint(
            day=day,
            inventory=inventory,
            sales_amount=sales_amount,
            procurement_amount=procurement_amount,
        )
        for day, (inventory, sales_amount, procurement_amount) in totals.items()
    ]


def build_product_series(
    ledgers: Sequence[ProductLedger],
    *,
    product_ids: Collection[str] | None = None,
    day_range: DayRange | None = None,
) -> list[dict[str, Any]]:
    """
    Wide per-day rows with three metric columns per selected product.
    """

    selected = select_ledgers(ledgers, product_ids)
    filtered = [_filtered_records(ledger, day_range) for ledger in selected]
    days = _sorted_days(filtered)

    by_product: list[tuple[ProductLedger, dict[int, LedgerEntry]]] = [
        (ledger, {record.day: record for record in records})
        for ledger, records in zip(selected, filtered)
    ]

    rows: list[dict[str, Any]] = []
    for day in days:
        row: dict[str, Any] = {"day": day_label(day)}
        for ledger, records_by_day in by_product:
            inventory_key, sales_key, procurement_key = metric_keys(ledger.name)
            record = records_by_day.get(day)
            if record is None:
                row[inventory_key] = 0
                row[sales_key] = 0
                row[procurement_key] = 0
            else:
                row[inventory_key] = record.inventory
                row[sales_key] = record.sales_amount
                row[procurement_key] = record.procurement_amount
        rows.append(row)
    return rows


def aggregate(
    ledgers: Sequence[ProductLedger],
    *,
    product_ids: Collection[str] | None = None,
    day_range: DayRange | None = None,
) -> ChartSeries:
    """
    Both chart views for one dataset under the same filters.
    """

    return ChartSeries(
        overview=build_overview_series(ledgers, product_ids=product_ids, day_range=day_range),
        per_product=build_product_series(ledgers, product_ids=product_ids, day_range=day_range),
    )
