"""
tests/test_rollforward.py

Pytest unit tests for the daily inventory rollforward.

All tests are pure Python: no database, no I/O.
"""

from __future__ import annotations

import random

import pytest

from ledger.rollforward import opening_record, roll_forward, roll_forward_many
from ledger.types import DailyRecord, RawRow


def _row(**overrides) -> RawRow:
    values = {
        "external_id": "A1",
        "product_name": "Apple",
        "opening_inventory": 10,
    }
    values.update(overrides)
    return RawRow(**values)


class TestOpeningRecord:
    def test_day_zero_carries_only_balance(self) -> None:
        assert opening_record(7) == DailyRecord(day=0, inventory=7)


class TestRollForward:
    def test_single_day_example(self) -> None:
        row = _row(
            procurement_qty={1: 5},
            procurement_price={1: 2.0},
            sales_qty={1: 3},
            sales_price={1: 4.0},
        )

        records = roll_forward(row, max_day=1)

        assert records[0] == DailyRecord(day=0, inventory=10)
        day_one = records[1]
        assert day_one.inventory == 12
        assert day_one.procurement_amount == 10.0
        assert day_one.sales_amount == 12.0

    def test_produces_max_day_plus_one_records_in_order(self) -> None:
        records = roll_forward(_row(), max_day=5)

        assert [record.day for record in records] == [0, 1, 2, 3, 4, 5]

    def test_missing_days_read_as_zero(self) -> None:
        records = roll_forward(_row(sales_qty={2: 4}), max_day=3)

        assert [record.inventory for record in records] == [10, 10, 6, 6]
        assert records[1].sales_quantity == 0
        assert records[3].sales_amount == 0

    def test_each_day_builds_on_previous_balance(self) -> None:
        row = _row(
            opening_inventory=0,
            procurement_qty={1: 10, 2: 5, 3: 0},
            sales_qty={1: 2, 2: 8, 3: 1},
        )

        records = roll_forward(row, max_day=3)

        assert [record.inventory for record in records] == [0, 8, 5, 4]

    def test_negative_balance_is_preserved(self) -> None:
        records = roll_forward(_row(opening_inventory=1, sales_qty={1: 3}), max_day=1)

        assert records[1].inventory == -2

    def test_zero_max_day_yields_opening_only(self) -> None:
        assert roll_forward(_row(), max_day=0) == [DailyRecord(day=0, inventory=10)]

    def test_amounts_are_quantity_times_price(self) -> None:
        rng = random.Random(20261016)
        max_day = 12
        row = _row(
            procurement_qty={day: rng.randint(-5, 50) for day in range(1, max_day + 1)},
            procurement_price={day: round(rng.uniform(0, 20), 2) for day in range(1, max_day + 1)},
            sales_qty={day: rng.randint(0, 40) for day in range(1, max_day + 1)},
            sales_price={day: round(rng.uniform(0, 30), 2) for day in range(1, max_day + 1)},
        )

        for record in roll_forward(row, max_day):
            assert record.procurement_amount == pytest.approx(
                record.procurement_quantity * record.procurement_price
            )
            assert record.sales_amount == pytest.approx(record.sales_quantity * record.sales_price)

    def test_is_deterministic(self) -> None:
        row = _row(procurement_qty={1: 3}, sales_qty={2: 1})
        assert roll_forward(row, 2) == roll_forward(row, 2)


class TestRollForwardMany:
    def test_products_are_independent(self) -> None:
        first = _row(sales_qty={1: 4})
        second = _row(external_id="B1", product_name="Banana", opening_inventory=3)

        ledgers = roll_forward_many([first, second], max_day=1)

        assert [ledger[-1].inventory for ledger in ledgers] == [6, 3]
