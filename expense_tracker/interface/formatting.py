"""Mini README: Display formatting for amounts, dates and chart labels.

Structure:
    * format_currency - symbol-prefixed amount with Indian digit grouping.
    * format_display_date - day/month/year rendering for the expense list.
    * month_labels - short month names for the trend chart axis.

Formatting belongs to the presentation layer only; the ledger always returns
raw floats and ``date`` objects.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import List

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _group_indian(digits: str) -> str:
    """Insert separators as 12,34,567: the last three digits, then pairs."""

    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: List[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: float, symbol: str = "₹") -> str:
    """Render ``amount`` with at most two decimals, trailing zeros trimmed."""

    quantised = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if quantised < 0 else ""
    integer_part, _, fraction = f"{abs(quantised):f}".partition(".")
    fraction = fraction.rstrip("0")
    text = _group_indian(integer_part)
    if fraction:
        text = f"{text}.{fraction}"
    return f"{sign}{symbol}{text}"


def format_display_date(value: date) -> str:
    """Render a date as DD/MM/YYYY for the expense list."""

    return value.strftime("%d/%m/%Y")


def month_labels() -> List[str]:
    """Short month names, January first, for the trend chart axis."""

    return list(MONTH_ABBREVIATIONS)
