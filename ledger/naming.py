"""
ledger/naming.py

Display-name de-duplication for products within one dataset.
"""

from __future__ import annotations

import re
from collections.abc import Iterable


def unique_product_name(base_name: str, existing_names: Iterable[str]) -> str:
    """
    Return *base_name*, or ``base_name(n)`` with the lowest free ``n >= 2``.

    The bare name occupies slot 1. Names such as ``Apple(3)`` occupy slot 3
    only when their prefix is exactly *base_name*.

    >>> unique_product_name("Apple", ["Apple", "Apple(3)"])
    'Apple(2)'
    """

    suffix_pattern = re.compile(rf"^{re.escape(base_name)}\((\d+)\)$")
    taken: set[int] = set()
    for name in existing_names:
        if name == base_name:
            taken.add(1)
            continue
        match = suffix_pattern.match(name)
        if match is not None:
            taken.add(int(match.group(1)))

    if 1 not in taken:
        return base_name

    candidate = 2
    while candidate in taken:
        candidate += 1
    return f"{base_name}({candidate})"
