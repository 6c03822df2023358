"""
ledger/rollforward.py

Daily inventory rollforward for one product.

Formula
-------
inventory(0) = opening_inventory
inventory(d) = inventory(d - 1) + procurement_qty(d) - sales_qty(d)     d >= 1

amount = quantity * price, for procurement and sales alike.

Each day depends on the previous day's computed balance, so days are folded
strictly in increasing order. Products are independent of each other.

Negative balances are kept as-is: an oversold day is a data-entry signal
for the reader, not something to correct here.
"""

from __future__ import annotations

from collections.abc import Iterable

from ledger.types import DailyRecord, RawRow


def opening_record(opening_inventory: int) -> DailyRecord:
    """Synthetic day-0 row carrying only the opening balance."""
    return DailyRecord(day=0, inventory=opening_inventory)


def roll_forward(row: RawRow, max_day: int) -> list[DailyRecord]:
    """
    Build the ``max_day + 1`` ledger entries (day 0 .. max_day) for *row*.

    Parameters
    ----------
    row:
        Parsed spreadsheet row. Days absent from its mappings read as zero.
    max_day:
        Highest day index of the upload.

    Returns
    -------
    list[DailyRecord]
        Ordered by day ascending.
    """

    records = [opening_record(row.opening_inventory)]
    inventory = row.opening_inventory

    for day in range(1, max(0, max_day) + 1):
        procurement_qty = row.procurement_qty.get(day, 0)
        procurement_price = row.procurement_price.get(day, 0.0)
        sales_qty = row.sales_qty.get(day, 0)
        sales_price = row.sales_price.get(day, 0.0)

        inventory = inventory + procurement_qty - sales_qty
        records.append(
            DailyRecord(
                day=day,
                inventory=inventory,
                procurement_quantity=procurement_qty,
                procurement_price=procurement_price,
                procurement_amount=procurement_qty * procurement_price,
                sales_quantity=sales_qty,
                sales_price=sales_price,
                sales_amount=sales_qty * sales_price,
            )
        )

    return records


def roll_forward_many(rows: Iterable[RawRow], max_day: int) -> list[list[DailyRecord]]:
    """Ledgers for several products, in input order."""
    return [roll_forward(row, max_day) for row in rows]
