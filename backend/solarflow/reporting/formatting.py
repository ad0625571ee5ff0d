"""Presentation helpers for monetary values and large quantities."""

from __future__ import annotations

import math

from solarflow.config import settings


def format_currency(value: float | None, symbol: str | None = None) -> str:
    """Format *value* as whole currency units with space-grouped thousands.

    >>> format_currency(1234567)
    'R 1 234 567'
    >>> format_currency(-2500)
    '-R 2 500'
    """
    if value is None or not math.isfinite(value):
        return "N/A"
    if symbol is None:
        symbol = settings.currency_symbol

    amount = round(value)
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,.0f}".replace(",", " ")
    return f"{sign}{symbol} {grouped}"


def format_large_number(value: float | None) -> str:
    """Compact form: ``1.2M``, ``3.4k``, ``999``."""
    if value is None or not math.isfinite(value):
        return "N/A"
    magnitude = abs(value)
    if magnitude >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if magnitude >= 1_000:
        return f"{value / 1_000:.1f}k"
    return f"{value:.0f}"
