"""Fail-fast parameter checks shared by the calculation modules."""

from __future__ import annotations

import math


class InvalidParameterError(ValueError):
    """Raised when an input lies outside the range the engine accepts."""


def ensure_finite(value: float, name: str) -> float:
    """Return *value* as float, raising when it is NaN or infinite."""
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be a finite number, got {value}")
    return value


def ensure_non_negative(value: float, name: str) -> float:
    value = ensure_finite(value, name)
    if value < 0:
        raise InvalidParameterError(f"{name} must be non-negative, got {value}")
    return value


def ensure_positive(value: float, name: str) -> float:
    value = ensure_finite(value, name)
    if value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")
    return value


def ensure_fraction(value: float, name: str) -> float:
    """Check that *value* lies in the half-open interval (0, 1]."""
    value = ensure_finite(value, name)
    if not 0 < value <= 1.0:
        raise InvalidParameterError(f"{name} must be in (0, 1], got {value}")
    return value
