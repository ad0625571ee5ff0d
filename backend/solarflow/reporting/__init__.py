"""Presentation formatting helpers."""

from .formatting import format_currency, format_large_number

__all__ = ["format_currency", "format_large_number"]
