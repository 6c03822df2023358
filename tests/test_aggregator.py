"""
tests/test_aggregator.py

Pytest unit tests for ledger.aggregator.

Coverage
--------
- Overview totals across products, amounts recomputed from qty * price
- Per-product wide rows with zero fill for missing days
- Day-range filtering (inclusive, open bounds, inverted)
- Product selection (None, subset, explicitly empty)
- Numeric day ordering and idempotence
"""

from __future__ import annotations

import pytest

from ledger.aggregator import (
    DayRange,
    ProductLedger,
    aggregate,
    build_overview_series,
    build_product_series,
    day_label,
    metric_keys,
    observed_day_range,
    record_payload,
)
from ledger.types import DailyRecord


def _record(day: int, inventory: int, pq: int = 0, pp: float = 0.0, sq: int = 0, sp: float = 0.0) -> DailyRecord:
    return DailyRecord(
        day=day,
        inventory=inventory,
        procurement_quantity=pq,
        procurement_price=pp,
        procurement_amount=pq * pp,
        sales_quantity=sq,
        sales_price=sp,
        sales_amount=sq * sp,
    )


@pytest.fixture()
def ledgers() -> list[ProductLedger]:
    apple = ProductLedger(
        product_id="p-apple",
        name="Apple",
        records=[_record(0, 10), _record(1, 12, pq=5, pp=2.0, sq=3, sp=4.0), _record(2, 9, sq=3, sp=4.0)],
    )
    banana = ProductLedger(
        product_id="p-banana",
        name="Banana",
        records=[_record(0, 20), _record(1, 15, sq=5, sp=1.5)],
    )
    return [apple, banana]


class TestHelpers:
    def test_day_label(self) -> None:
        assert day_label(7) == "Day 7"

    def test_metric_keys(self) -> None:
        assert metric_keys("Apple") == ("Apple_Inventory", "Apple_Sales", "Apple_Procurement")

    def test_observed_day_range(self, ledgers: list[ProductLedger]) -> None:
        assert observed_day_range(ledgers) == DayRange(start=0, end=2)

    def test_observed_day_range_empty(self) -> None:
        assert observed_day_range([ProductLedger(product_id="p", name="P")]) is None

    @pytest.mark.parametrize(
        "day_range, day, expected",
        [
            (DayRange(), 5, True),
            (DayRange(start=3), 2, False),
            (DayRange(start=3), 3, True),
            (DayRange(end=6), 6, True),
            (DayRange(end=6), 7, False),
        ],
    )
    def test_day_range_contains(self, day_range: DayRange, day: int, expected: bool) -> None:
        assert day_range.contains(day) is expected

    def test_record_payload(self) -> None:
        payload = record_payload(_record(1, 12, pq=5, pp=2.0, sq=3, sp=4.0))
        assert payload == {
            "day": 1,
            "inventory": 12,
            "procurementQuantity": 5,
            "procurementPrice": 2.0,
            "procurementAmount": 10.0,
            "salesQuantity": 3,
            "salesPrice": 4.0,
            "salesAmount": 12.0,
        }


class TestOverviewSeries:
    def test_sums_across_products(self, ledgers: list[ProductLedger]) -> None:
        overview = build_overview_series(ledgers)

        assert [point.day for point in overview] == [0, 1, 2]
        day_one = overview[1]
        assert day_one.inventory == 27
        assert day_one.sales_amount == pytest.approx(12.0 + 7.5)
        assert day_one.procurement_amount == pytest.approx(10.0)
        assert overview[2].inventory == 9

    def test_recomputes_amounts_from_quantity_and_price(self) -> None:
        stale = DailyRecord(
            day=1,
            inventory=0,
            sales_quantity=2,
            sales_price=3.0,
            sales_amount=999.0,
            procurement_quantity=1,
            procurement_price=4.0,
            procurement_amount=999.0,
        )
        overview = build_overview_series([ProductLedger(product_id="p", name="P", records=[stale])])

        assert overview[0].sales_amount == 6.0
        assert overview[0].procurement_amount == 4.0

    def test_chart_row_keys(self, ledgers: list[ProductLedger]) -> None:
        row = build_overview_series(ledgers)[0].as_chart_row()
        assert set(row) == {"day", "inventory", "salesAmount", "procurementAmount"}


class TestProductSeries:
    def test_wide_rows_with_zero_fill(self, ledgers: list[ProductLedger]) -> None:
        rows = build_product_series(ledgers)

        assert [row["day"] for row in rows] == ["Day 0", "Day 1", "Day 2"]
        assert rows[1] == {
            "day": "Day 1",
            "Apple_Inventory": 12,
            "Apple_Sales": 12.0,
            "Apple_Procurement": 10.0,
            "Banana_Inventory": 15,
            "Banana_Sales": 7.5,
            "Banana_Procurement": 0.0,
        }
        assert rows[2]["Banana_Inventory"] == 0
        assert rows[2]["Banana_Sales"] == 0
        assert rows[2]["Banana_Procurement"] == 0

    def test_uses_stored_amounts(self) -> None:
        stored = DailyRecord(day=1, inventory=0, sales_quantity=2, sales_price=3.0, sales_amount=5.0)
        rows = build_product_series([ProductLedger(product_id="p", name="P", records=[stored])])

        assert rows[0]["P_Sales"] == 5.0

    def test_keys_follow_product_order(self, ledgers: list[ProductLedger]) -> None:
        rows = build_product_series(list(reversed(ledgers)))
        assert list(rows[0])[1:4] == ["Banana_Inventory", "Banana_Sales", "Banana_Procurement"]


class TestFilters:
    def test_day_range_is_inclusive(self) -> None:
        ledger = ProductLedger(
            product_id="p",
            name="P",
            records=[_record(day, day) for day in range(0, 11)],
        )

        series = aggregate([ledger], day_range=DayRange(start=3, end=6))

        assert [point.day for point in series.overview] == [3, 4, 5, 6]
        assert [row["day"] for row in series.per_product] == ["Day 3", "Day 4", "Day 5", "Day 6"]

    def test_open_bounds(self, ledgers: list[ProductLedger]) -> None:
        assert [p.day for p in aggregate(ledgers, day_range=DayRange(start=1)).overview] == [1, 2]
        assert [p.day for p in aggregate(ledgers, day_range=DayRange(end=1)).overview] == [0, 1]

    def test_inverted_range_is_empty(self, ledgers: list[ProductLedger]) -> None:
        series = aggregate(ledgers, day_range=DayRange(start=5, end=2))
        assert series.overview == []
        assert series.per_product == []

    def test_product_subset(self, ledgers: list[ProductLedger]) -> None:
        series = aggregate(ledgers, product_ids=["p-banana"])

        assert [point.day for point in series.overview] == [0, 1]
        assert all("Apple_Inventory" not in row for row in series.per_product)
        assert series.overview[1].inventory == 15

    def test_empty_selection_yields_empty_series(self, ledgers: list[ProductLedger]) -> None:
        series = aggregate(ledgers, product_ids=[])
        assert series.overview == []
        assert series.per_product == []

    def test_unknown_product_ids_are_ignored(self, ledgers: list[ProductLedger]) -> None:
        series = aggregate(ledgers, product_ids=["missing", "p-apple"])
        assert [point.inventory for point in series.overview] == [10, 12, 9]


class TestOrderingAndDeterminism:
    def test_day_ten_sorts_after_day_nine(self) -> None:
        ledger = ProductLedger(
            product_id="p",
            name="P",
            records=[_record(10, 1), _record(9, 2), _record(2, 3)],
        )

        series = aggregate([ledger])

        assert [point.day for point in series.overview] == [2, 9, 10]
        assert [row["day"] for row in series.per_product] == ["Day 2", "Day 9", "Day 10"]

    def test_idempotent(self, ledgers: list[ProductLedger]) -> None:
        assert aggregate(ledgers) == aggregate(ledgers)

    def test_single_product_single_day_round_trip(self) -> None:
        ledger = ProductLedger(
            product_id="p",
            name="Widget",
            records=[_record(1, 8, pq=2, pp=1.5, sq=4, sp=2.5)],
        )

        series = aggregate([ledger])

        assert len(series.overview) == 1
        assert series.overview[0].as_chart_row() == {
            "day": 1,
            "inventory": 8,
            "salesAmount": 10.0,
            "procurementAmount": 3.0,
        }
        assert series.per_product == [
            {
                "day": "Day 1",
                "Widget_Inventory": 8,
                "Widget_Sales": 10.0,
                "Widget_Procurement": 3.0,
            }
        ]

    def test_no_ledgers(self) -> None:
        series = aggregate([])
        assert series.overview == []
        assert series.per_product == []
