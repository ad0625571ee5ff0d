"""
Inverter clipping model.

Maps a DC/AC oversizing ratio to an annual clipping percentage using a
power-law fit, and to the incremental yield that the extra DC capacity
delivers once the clipped share is removed::

    x = ratio - 1
    clipping = 47.6 * x ** 3.31            # ~0.9 % at 1.3, ~4.8 % at 1.5
    gain     = 100 * x * (1 - clipping / 100 / x)

Clipping is deliberately left uncapped; at high ratios real inverters
curtail an ever larger share of the array output.
"""

from __future__ import annotations

from dataclasses import dataclass

from solarflow.validation import ensure_positive

CLIPPING_COEFFICIENT: float = 47.6
CLIPPING_EXPONENT: float = 3.31


@dataclass(frozen=True)
class ClippingEstimate:
    """Clipping and incremental-yield percentages for one ratio."""

    clipping_percent: float
    yield_gain_percent: float

    def to_dict(self) -> dict[str, float]:
        return {
            "clipping_percent": self.clipping_percent,
            "yield_gain_percent": self.yield_gain_percent,
        }


def clipping_percent_raw(dc_ac_ratio: float) -> float:
    """Unrounded clipping percentage for *dc_ac_ratio*."""
    ratio = ensure_positive(dc_ac_ratio, "dc_ac_ratio")
    if ratio <= 1.0:
        return 0.0
    return CLIPPING_COEFFICIENT * (ratio - 1.0) ** CLIPPING_EXPONENT


def yield_gain_percent_raw(dc_ac_ratio: float) -> float:
    """Unrounded net yield gain of the extra DC capacity, never negative."""
    ratio = ensure_positive(dc_ac_ratio, "dc_ac_ratio")
    if ratio <= 1.0:
        return 0.0
    x = ratio - 1.0
    clipping = clipping_percent_raw(ratio)
    return max(0.0, (100.0 * x) * (1.0 - clipping / 100.0 / x))


def estimate_clipping(dc_ac_ratio: float) -> ClippingEstimate:
    """Return clipping and yield-gain percentages rounded to one decimal.

    Parameters
    ----------
    dc_ac_ratio : float
        DC capacity divided by AC capacity. Must be positive; ratios at
        or below 1.0 give zero clipping and zero gain.
    """
    return ClippingEstimate(
        clipping_percent=round(clipping_percent_raw(dc_ac_ratio), 1),
        yield_gain_percent=round(yield_gain_percent_raw(dc_ac_ratio), 1),
    )


# ======================================================================
# Reference trade-off points
# ======================================================================

@dataclass(frozen=True)
class ReferencePoint:
    """Industry reference for clipping and yield gain at one ratio."""

    ratio: float
    clipping_percent: float
    yield_gain_percent: float
    label: str


REFERENCE_RATIO_POINTS: tuple[ReferencePoint, ...] = (
    ReferencePoint(1.0, 0.0, 0.0, "Baseline"),
    ReferencePoint(1.2, 0.25, 4.0, "Conservative"),
    ReferencePoint(1.3, 0.9, 12.0, "Optimal (SA)"),
    ReferencePoint(1.4, 3.0, 15.0, "Moderate"),
    ReferencePoint(1.5, 4.9, 17.0, "Aggressive"),
    ReferencePoint(2.0, 20.0, 22.0, "BESS Only"),
)


def closest_reference_point(dc_ac_ratio: float) -> ReferencePoint:
    """Return the reference point nearest to *dc_ac_ratio* (lower ratio on ties)."""
    ratio = ensure_positive(dc_ac_ratio, "dc_ac_ratio")
    return min(REFERENCE_RATIO_POINTS, key=lambda p: abs(p.ratio - ratio))
