"""DataFrame builders for the dashboard charts.

Kept free of Streamlit calls so the shapes can be checked in isolation.
"""

from __future__ import annotations

import pandas as pd

from app.domain.ledger import ChartData
from ledger.aggregator import metric_keys

OVERVIEW_COLUMNS = ["Inventory", "Sales Amount", "Procurement Amount"]
PRODUCT_METRICS = ("inventory", "sales", "procurement")


def overview_frame(chart: ChartData) -> pd.DataFrame:
    """One row per day indexed by day number."""
    rows = [
        {
            "day": point.day,
            "Inventory": point.inventory,
            "Sales Amount": point.sales_amount,
            "Procurement Amount": point.procurement_amount,
        }
        for point in chart.series.overview
    ]
    if not rows:
        return pd.DataFrame(columns=["day", *OVERVIEW_COLUMNS]).set_index("day")
    return pd.DataFrame(rows).set_index("day")


def _day_number(label: str) -> int:
    return int(str(label).rsplit(" ", 1)[-1])


def product_metric_frame(chart: ChartData, product_names: list[str], metric: str) -> pd.DataFrame:
    """Per-product columns of one metric (``inventory``, ``sales`` or ``procurement``).

    ``"Day N"`` labels become an integer index so charts keep numeric order.
    """
    position = PRODUCT_METRICS.index(metric)
    columns = {name: metric_keys(name)[position] for name in product_names}

    rows = []
    for row in chart.series.per_product:
        entry = {"day": _day_number(row["day"])}
        for name, key in columns.items():
            entry[name] = row.get(key, 0)
        rows.append(entry)

    if not rows:
        return pd.DataFrame(columns=["day", *product_names]).set_index("day")
    return pd.DataFrame(rows).set_index("day")
