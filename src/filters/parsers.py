# src/filters/parsers.py

"""Parsing helpers for the free-text fields of the product CSV.

Prices are stored as display strings such as ``"13.0 - 15.0 USD"`` or
``"900.0 USD"``.  Search and sorting only ever look at the first numeric
token, so a range collapses to its lower bound and the currency is
ignored.  Anything unparseable is treated as a price of 0.
"""

import re

_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)")
_CURRENCY_RE = re.compile(r"([A-Z]{3})")
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")

DEFAULT_PRICE = "0.0 USD"
DEFAULT_CURRENCY = "USD"


def parse_price(text: str | None) -> float:
    """Return the first number in a price string, or 0.0.

    >>> parse_price("13.0 - 15.0 USD")
    13.0
    >>> parse_price("1,299.00 USD")
    1.0
    """
    if not text:
        return 0.0
    match = _NUMBER_RE.search(text)
    return float(match.group(1)) if match else 0.0


def parse_currency(text: str | None) -> str:
    """Return the first three-capital-letter token, defaulting to USD."""
    if not text:
        return DEFAULT_CURRENCY
    match = _CURRENCY_RE.search(text)
    return match.group(1) if match else DEFAULT_CURRENCY


def parse_discount_flag(text: str | None) -> int:
    """Coerce a CSV discount cell to exactly 0 or 1.

    Only the leading integer is read (``"1.0"`` is 1, ``"yes"`` is 0),
    and values outside 0..1 are clamped.
    """
    if not text:
        return 0
    match = _INT_PREFIX_RE.match(text)
    if not match:
        return 0
    return max(0, min(1, int(match.group(1))))
