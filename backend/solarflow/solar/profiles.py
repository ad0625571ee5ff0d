"""
Irradiance profiles and regional presets.

Supplies the fixed 24-hour normalised production curve used for the
representative-day comparison and the three climate-class presets that
set annual specific yield, monthly seasonality, and the recommended
DC/AC ratio band.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np
from numpy.typing import NDArray

from solarflow.validation import InvalidParameterError

RegionName = Literal["high-sun", "moderate", "cloudy"]

MONTH_NAMES: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Peaks at ~80 % of STC rating; arrays rarely reach nameplate output.
HOURLY_SOLAR_CURVE: tuple[float, ...] = (
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0,       # 00-05 night
    0.02, 0.10, 0.28, 0.48,             # 06-09 morning ramp
    0.65, 0.75, 0.80, 0.78,             # 10-13 midday
    0.70, 0.55, 0.38, 0.18,             # 14-17 afternoon decline
    0.05, 0.0, 0.0, 0.0, 0.0, 0.0,      # 18-23 evening
)

# Southern-hemisphere high-irradiance seasonality (summer Dec-Feb).
DEFAULT_MONTHLY_FACTORS: tuple[float, ...] = (
    1.15, 1.10, 1.00, 0.85, 0.70, 0.60,
    0.65, 0.75, 0.90, 1.00, 1.10, 1.15,
)


@dataclass(frozen=True)
class RegionalConfig:
    """Climate-class preset for oversizing analysis."""

    name: str
    description: str
    annual_irradiance_kwh_per_kwp: float
    recommended_dc_ac_min: float
    recommended_dc_ac_max: float
    monthly_factors: tuple[float, ...]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "annual_irradiance_kwh_per_kwp": self.annual_irradiance_kwh_per_kwp,
            "recommended_dc_ac_min": self.recommended_dc_ac_min,
            "recommended_dc_ac_max": self.recommended_dc_ac_max,
            "monthly_factors": list(self.monthly_factors),
        }


REGIONAL_PRESETS: dict[str, RegionalConfig] = {
    "high-sun": RegionalConfig(
        name="high-sun",
        description="Conservative oversizing due to high irradiance",
        annual_irradiance_kwh_per_kwp=1864.0,
        recommended_dc_ac_min=1.1,
        recommended_dc_ac_max=1.35,
        monthly_factors=DEFAULT_MONTHLY_FACTORS,
    ),
    "moderate": RegionalConfig(
        name="moderate",
        description="Balanced approach for temperate climates",
        annual_irradiance_kwh_per_kwp=1600.0,
        recommended_dc_ac_min=1.2,
        recommended_dc_ac_max=1.4,
        monthly_factors=(
            0.55, 0.70, 0.95, 1.10, 1.25, 1.35,
            1.40, 1.30, 1.10, 0.85, 0.60, 0.50,
        ),
    ),
    "cloudy": RegionalConfig(
        name="cloudy",
        description="Higher ratio to capture diffuse light",
        annual_irradiance_kwh_per_kwp=1100.0,
        recommended_dc_ac_min=1.3,
        recommended_dc_ac_max=1.5,
        monthly_factors=(
            0.35, 0.45, 0.75, 1.05, 1.25, 1.35,
            1.35, 1.20, 0.95, 0.65, 0.40, 0.30,
        ),
    ),
}


def get_regional_config(region: str) -> RegionalConfig:
    """Look up a preset by name, raising on unknown regions."""
    try:
        return REGIONAL_PRESETS[region]
    except KeyError:
        raise InvalidParameterError(
            f"Unknown region '{region}'. Choose from: {sorted(REGIONAL_PRESETS)}"
        ) from None


def hourly_solar_curve() -> NDArray[np.float64]:
    """Return a fresh copy of the normalised 24-point production curve."""
    return np.array(HOURLY_SOLAR_CURVE, dtype=np.float64)


def monthly_weights(monthly_factors: tuple[float, ...] | list[float]) -> NDArray[np.float64]:
    """Normalise 12 monthly factors so they sum to one.

    An all-zero factor set falls back to an even split so that monthly
    totals still add up to the annual figure.
    """
    factors = np.asarray(monthly_factors, dtype=np.float64)
    if factors.shape != (12,):
        raise InvalidParameterError(
            f"monthly_factors must contain 12 values, got {factors.size}"
        )
    if np.any(factors < 0):
        raise InvalidParameterError("monthly_factors must be non-negative")

    total = float(factors.sum())
    if total <= 0:
        return np.full(12, 1.0 / 12.0)
    return factors / total
