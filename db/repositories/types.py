"""
Typed DTOs returned by dataset repository reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DataSetListing:
    """
    One row of the dataset listing.
    """

    id: int
    name: str
    created_at: datetime
    product_count: int
