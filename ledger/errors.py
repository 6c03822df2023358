"""
ledger/errors.py

Exceptions raised by the spreadsheet-to-ledger pipeline.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base exception for ledger pipeline failures."""


class SheetValidationError(LedgerError, ValueError):
    """
    Raised when an uploaded sheet cannot be turned into a ledger at all.

    Always raised before anything is persisted.
    """
