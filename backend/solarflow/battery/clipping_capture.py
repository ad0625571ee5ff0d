"""
Battery capture of inverter-clipped energy.

Simulates a battery soaking up the energy an oversized array clips at
the inverter over one representative day, then scales the day to an
annual figure.

Efficiency convention
---------------------
Only the charge leg is modelled, so half of the round-trip loss is
applied: of ``E`` kWh offered to the battery, ``E * sqrt(eta)`` is
stored. Discharge-side losses are outside the scope of capture
accounting. Energy lost to charging inefficiency counts as lost, so
``stored + lost`` always equals the clipped total.

The battery starts empty on every call and dispatch is strictly
causal: an hour that finds the battery full loses its clipping even
if the battery would later have room.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from solarflow.config import settings
from solarflow.validation import ensure_fraction, ensure_non_negative

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BESSConfig:
    """Battery energy storage sizing.

    Parameters
    ----------
    enabled : bool
        Whether the battery takes part in the analysis.
    capacity_kwh : float
        Usable energy capacity (kWh), >= 0.
    power_kw : float
        Maximum charge power (kW), >= 0.
    round_trip_efficiency : float
        Round-trip efficiency in (0, 1].
    """

    enabled: bool = False
    capacity_kwh: float = 0.0
    power_kw: float = 0.0
    round_trip_efficiency: float = 0.90

    def __post_init__(self) -> None:
        ensure_non_negative(self.capacity_kwh, "capacity_kwh")
        ensure_non_negative(self.power_kw, "power_kw")
        ensure_fraction(self.round_trip_efficiency, "round_trip_efficiency")

    @property
    def charge_efficiency(self) -> float:
        """One-way (charge leg) efficiency, ``sqrt(round_trip_efficiency)``."""
        return math.sqrt(self.round_trip_efficiency)

    @property
    def is_active(self) -> bool:
        return self.enabled and self.capacity_kwh > 0

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "capacity_kwh": self.capacity_kwh,
            "power_kw": self.power_kw,
            "round_trip_efficiency": self.round_trip_efficiency,
        }


@dataclass(frozen=True)
class CaptureResult:
    """Annualised split of clipped energy into stored and lost."""

    stored_kwh: float
    lost_kwh: float
    # Per-hour energy added to the battery on the representative day (kWh).
    hourly_stored_kwh: tuple[float, ...] = ()

    @property
    def total_clipped_kwh(self) -> float:
        return self.stored_kwh + self.lost_kwh

    def to_dict(self) -> dict:
        return {
            "stored_kwh": self.stored_kwh,
            "lost_kwh": self.lost_kwh,
            "hourly_stored_kwh": list(self.hourly_stored_kwh),
        }


def simulate_clipping_capture(
    hourly_clipping_kw: Sequence[float],
    bess: BESSConfig | None,
    annual_multiplier: float | None = None,
) -> CaptureResult:
    """Run the representative day through the battery and annualise it.

    Parameters
    ----------
    hourly_clipping_kw : sequence of float
        Clipped power for each hour of the representative day (kW). Each
        sample spans one hour, so it is also the clipped energy in kWh.
    bess : BESSConfig or None
        Battery specification. ``None``, a disabled battery, or zero
        capacity loses all clipped energy.
    annual_multiplier : float or None
        Number of full-sun-equivalent days per year. Defaults to
        ``settings.annual_sun_days``.

    Returns
    -------
    CaptureResult
        ``stored_kwh`` and ``lost_kwh`` for the whole year.
    """
    if annual_multiplier is None:
        annual_multiplier = settings.annual_sun_days
    annual_multiplier = ensure_non_negative(annual_multiplier, "annual_multiplier")

    clipping = np.maximum(np.asarray(hourly_clipping_kw, dtype=np.float64), 0.0)
    daily_clipped = float(clipping.sum())

    if bess is None or not bess.is_active:
        return CaptureResult(
            stored_kwh=0.0,
            lost_kwh=daily_clipped * annual_multiplier,
            hourly_stored_kwh=tuple(0.0 for _ in clipping),
        )

    eta_charge = bess.charge_efficiency
    soc_kwh = 0.0
    daily_stored = 0.0
    hourly_stored = []

    for clipped_kwh in clipping:
        headroom = bess.capacity_kwh - soc_kwh
        chargeable = min(float(clipped_kwh), bess.power_kw, headroom)
        stored = max(chargeable, 0.0) * eta_charge
        soc_kwh += stored
        daily_stored += stored
        hourly_stored.append(stored)

    daily_lost = daily_clipped - daily_stored
    logger.debug(
        "Clipping capture: %.2f kWh/day clipped, %.2f kWh stored (soc end %.2f kWh)",
        daily_clipped,
        daily_stored,
        soc_kwh,
    )

    return CaptureResult(
        stored_kwh=daily_stored * annual_multiplier,
        lost_kwh=daily_lost * annual_multiplier,
        hourly_stored_kwh=tuple(hourly_stored),
    )
