"""
ledger/parser.py

Turns an uploaded spreadsheet into RawRow values.

Expected layout
---------------
The first row holds the column labels. Every later row is one product:

    ID | Product Name | Opening Inventory |
    Procurement Qty (Day N) | Procurement Price (Day N) |
    Sales Qty (Day N) | Sales Price (Day N) | ...

The day-column labels are matched case-insensitively and the highest ``N``
found across all four templates becomes ``max_day`` for the whole upload.

Coercion policy
---------------
Source sheets are hand-edited, so numeric cells never raise: anything that
does not parse as the expected type becomes ``0`` and is logged at DEBUG.
The same goes for quantities outside the 32-bit column range and for prices
that are non-finite or larger than ``PRICE_LIMIT``, so day amounts and
inventory totals always fit their columns.
Rows without an ``ID`` or ``Product Name`` are skipped, which lets trailing
blank rows through without complaint.
"""

from __future__ import annotations

import csv
import io
import logging
import math
import re
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ledger.errors import SheetValidationError
from ledger.types import ParsedSheet, RawRow

logger = logging.getLogger(__name__)

ID_COLUMN = "ID"
PRODUCT_NAME_COLUMN = "Product Name"
OPENING_INVENTORY_COLUMN = "Opening Inventory"

PROCUREMENT_QTY = "procurement qty"
PROCUREMENT_PRICE = "procurement price"
SALES_QTY = "sales qty"
SALES_PRICE = "sales price"

DAY_METRICS: tuple[str, ...] = (PROCUREMENT_QTY, PROCUREMENT_PRICE, SALES_QTY, SALES_PRICE)

_DAY_COLUMN_PATTERN = re.compile(
    r"^(procurement qty|procurement price|sales qty|sales price)\s*\(\s*day\s+(\d+)\s*\)$",
    re.IGNORECASE,
)

CSV_EXTENSIONS = frozenset({".csv"})
WORKBOOK_EXTENSIONS = frozenset({".xlsx", ".xlsm"})
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS | WORKBOOK_EXTENSIONS

QUANTITY_MIN = -(2**31)
QUANTITY_MAX = 2**31 - 1
PRICE_LIMIT = 1e15


# ---------------------------------------------------------------------------
# Byte stream -> rows-as-arrays
# ---------------------------------------------------------------------------


def read_tabular(content: bytes, file_name: str) -> list[list[Any]]:
    """
    Decode an uploaded file into a list of rows, header row first.

    CSV files are read as UTF-8 (BOM tolerated); workbooks are read from
    their first worksheet with cached formula values.
    """

    extension = Path(file_name or "").suffix.lower()
    if extension in CSV_EXTENSIONS:
        return _read_csv(content)
    if extension in WORKBOOK_EXTENSIONS:
        return _read_workbook(content)
    raise SheetValidationError(
        f"Unsupported file type '{extension}'. Allowed: {sorted(SUPPORTED_EXTENSIONS)}."
    )


def _read_csv(content: bytes) -> list[list[Any]]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise SheetValidationError("CSV must be UTF-8 encoded.") from exc

    try:
        return [list(row) for row in csv.reader(io.StringIO(text, newline=""))]
    except csv.Error as exc:
        raise SheetValidationError(f"Invalid CSV format: {exc}") from exc


def _read_workbook(content: bytes) -> list[list[Any]]:
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, ValueError, OSError) as exc:
        raise SheetValidationError("Workbook could not be opened.") from exc

    try:
        if not workbook.worksheets:
            raise SheetValidationError("Workbook has no worksheets.")
        sheet = workbook.worksheets[0]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


# ---------------------------------------------------------------------------
# Header analysis
# ---------------------------------------------------------------------------


def match_day_column(header: str) -> tuple[str, int] | None:
    """
    Return ``(metric, day)`` when *header* is one of the four day templates.
    """

    match = _DAY_COLUMN_PATTERN.match(header.strip())
    if match is None:
        return None
    return match.group(1).lower(), int(match.group(2))


def detect_max_day(headers: Sequence[str]) -> int:
    """
    Return the highest day index present in any recognised day column.

    Raises SheetValidationError when no header matches a day template.
    """

    days = [matched[1] for matched in map(match_day_column, headers) if matched is not None]
    if not days:
        raise SheetValidationError("Upload has no recognizable day columns.")
    return max(days)


def _day_column_index(headers: Sequence[str]) -> dict[tuple[str, int], str]:
    index: dict[tuple[str, int], str] = {}
    for header in headers:
        matched = match_day_column(header)
        if matched is not None:
            index[matched] = header
    return index


# ---------------------------------------------------------------------------
# Rows-as-arrays -> RawRow
# ---------------------------------------------------------------------------


def parse_rows(rows: Sequence[Sequence[Any]]) -> ParsedSheet:
    """
    Map raw rows onto RawRow values using the first row as header.

    Raises SheetValidationError when the header row is missing or carries
    no day columns. Never raises for individual cell values.
    """

    if not rows:
        raise SheetValidationError("Sheet header row is missing.")

    headers = tuple(_header_text(cell) for cell in rows[0])
    if not any(headers):
        raise SheetValidationError("Sheet header row is missing.")

    max_day = detect_max_day(headers)
    day_columns = _day_column_index(headers)

    parsed: list[RawRow] = []
    skipped = 0
    for row_number, values in enumerate(rows[1:], start=2):
        record = {header: value for header, value in zip(headers, values)}

        external_id = _cell_text(record.get(ID_COLUMN))
        product_name = _cell_text(record.get(PRODUCT_NAME_COLUMN))
        if not external_id or not product_name:
            skipped += 1
            logger.debug("Skipping row=%s without ID or product name", row_number)
            continue

        parsed.append(
            RawRow(
                external_id=external_id,
                product_name=product_name,
                opening_inventory=coerce_int(
                    record.get(OPENING_INVENTORY_COLUMN),
                    row_number=row_number,
                    column=OPENING_INVENTORY_COLUMN,
                ),
                procurement_qty=_day_values(record, day_columns, PROCUREMENT_QTY, coerce_int, row_number),
                procurement_price=_day_values(record, day_columns, PROCUREMENT_PRICE, coerce_float, row_number),
                sales_qty=_day_values(record, day_columns, SALES_QTY, coerce_int, row_number),
                sales_price=_day_values(record, day_columns, SALES_PRICE, coerce_float, row_number),
            )
        )

    return ParsedSheet(rows=parsed, max_day=max_day, skipped_rows=skipped, headers=headers)


def parse_upload(content: bytes, file_name: str) -> ParsedSheet:
    """
    Read and parse one uploaded file.
    """

    return parse_rows(read_tabular(content, file_name))


def _day_values(
    record: dict[str, Any],
    day_columns: dict[tuple[str, int], str],
    metric: str,
    coerce: Any,
    row_number: int,
) -> dict:
    values = {}
    for (column_metric, day), header in day_columns.items():
        if column_metric != metric:
            continue
        values[day] = coerce(record.get(header), row_number=row_number, column=header)
    return values


# ---------------------------------------------------------------------------
# Cell coercion
# ---------------------------------------------------------------------------


def coerce_int(value: Any, *, row_number: int | None = None, column: str | None = None) -> int:
    """
    Parse a quantity cell; fractional values truncate toward zero.

    Results outside the 32-bit range of the quantity columns default to 0.
    """

    if _is_blank(value):
        return 0
    if isinstance(value, bool):
        return _default(value, row_number, column)
    if isinstance(value, int):
        return value if QUANTITY_MIN <= value <= QUANTITY_MAX else _default(value, row_number, column)
    if isinstance(value, float):
        if math.isfinite(value) and QUANTITY_MIN - 1 < value < QUANTITY_MAX + 1:
            return int(value)
        return _default(value, row_number, column)
    if isinstance(value, str):
        decimal_value = _parse_decimal(value.strip())
        if decimal_value is not None and QUANTITY_MIN - 1 < decimal_value < QUANTITY_MAX + 1:
            return int(decimal_value)
    return _default(value, row_number, column)


def coerce_float(value: Any, *, row_number: int | None = None, column: str | None = None) -> float:
    """
    Parse a price cell. Non-finite values and magnitudes above
    ``PRICE_LIMIT`` default to 0.
    """

    if _is_blank(value):
        return 0.0
    if isinstance(value, bool):
        return float(_default(value, row_number, column))
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return float(_default(value, row_number, column))
        if -PRICE_LIMIT <= value <= PRICE_LIMIT:
            return float(value)
        return float(_default(value, row_number, column))
    if isinstance(value, str):
        decimal_value = _parse_decimal(value.strip())
        if decimal_value is not None and -PRICE_LIMIT <= decimal_value <= PRICE_LIMIT:
            return float(decimal_value)
    return float(_default(value, row_number, column))


def _parse_decimal(raw: str) -> Decimal | None:
    try:
        parsed = Decimal(raw)
    except (InvalidOperation, ValueError):
        return None
    return parsed if parsed.is_finite() else None


def _default(value: Any, row_number: int | None, column: str | None) -> int:
    logger.debug(
        "Unparsable numeric cell row=%s column=%s value=%r defaulted to 0",
        row_number,
        column,
        value,
    )
    return 0


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _header_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
