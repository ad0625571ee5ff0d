"""
DC/AC oversizing analysis.

Compares a 1:1 baseline array against an oversized array behind the
same inverter, optionally with a battery that recaptures clipped
energy.  The analysis produces:

* annual baseline, theoretical DC, and delivered oversized energy,
* a 24-hour comparison on a representative full-sun day,
* a 12-month comparison distributed by regional seasonality,
* storage capture and utilisation figures plus recommendation text.

Every call is a pure function of its arguments; no state survives
between analyses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from solarflow.battery.clipping_capture import BESSConfig, simulate_clipping_capture
from solarflow.config import settings
from solarflow.validation import ensure_non_negative, ensure_positive

from .clipping import clipping_percent_raw, yield_gain_percent_raw
from .inverter import clip_to_inverter
from .profiles import (
    DEFAULT_MONTHLY_FACTORS,
    MONTH_NAMES,
    get_regional_config,
    hourly_solar_curve,
    monthly_weights,
)

logger = logging.getLogger(__name__)

# ======================================================================
# Recommendation thresholds
# ======================================================================

HIGH_RATIO_WITHOUT_STORAGE: float = 1.35
HIGH_UTILIZATION_PERCENT: float = 90.0
MODERATE_UTILIZATION_PERCENT: float = 50.0
BESS_MAX_RATIO: float = 2.0


# ======================================================================
# Result records
# ======================================================================

@dataclass(frozen=True)
class HourlyComparison:
    """Baseline vs oversized output for one hour of the representative day."""

    hour: int
    baseline_kw: float
    oversized_dc_kw: float
    oversized_ac_kw: float
    clipping_kw: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "hour": self.hour,
            "baseline_kw": self.baseline_kw,
            "oversized_dc_kw": self.oversized_dc_kw,
            "oversized_ac_kw": self.oversized_ac_kw,
            "clipping_kw": self.clipping_kw,
        }


@dataclass(frozen=True)
class MonthlyComparison:
    """Baseline vs oversized energy for one calendar month."""

    month: str
    baseline_kwh: float
    oversized_kwh: float
    gain_kwh: float
    gain_percent: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "baseline_kwh": self.baseline_kwh,
            "oversized_kwh": self.oversized_kwh,
            "gain_kwh": self.gain_kwh,
            "gain_percent": self.gain_percent,
        }


@dataclass(frozen=True)
class BESSAdjustedAnalysis:
    """Complete oversizing analysis, with or without storage."""

    # Inputs as resolved
    ac_capacity_kw: float
    dc_capacity_kwp: float
    dc_ac_ratio: float
    annual_irradiance_kwh_per_kwp: float
    region: str | None

    # Annual energy (kWh)
    baseline_annual_kwh: float
    theoretical_dc_annual_kwh: float
    oversized_annual_kwh: float
    clipping_loss_kwh: float
    additional_capture_kwh: float
    net_gain_kwh: float
    net_gain_percent: float

    # Clipping model
    clipping_percent: float
    yield_gain_percent: float

    # Storage
    bess_enabled: bool
    clipped_energy_stored_kwh: float
    clipped_energy_lost_kwh: float
    effective_clipping_loss_kwh: float
    effective_clipping_percent: float
    bess_utilization_percent: float
    bess_recommendation: str

    hourly_comparison: tuple[HourlyComparison, ...] = field(default_factory=tuple)
    monthly_comparison: tuple[MonthlyComparison, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "ac_capacity_kw": self.ac_capacity_kw,
            "dc_capacity_kwp": self.dc_capacity_kwp,
            "dc_ac_ratio": self.dc_ac_ratio,
            "annual_irradiance_kwh_per_kwp": self.annual_irradiance_kwh_per_kwp,
            "region": self.region,
            "baseline_annual_kwh": self.baseline_annual_kwh,
            "theoretical_dc_annual_kwh": self.theoretical_dc_annual_kwh,
            "oversized_annual_kwh": self.oversized_annual_kwh,
            "clipping_loss_kwh": self.clipping_loss_kwh,
            "additional_capture_kwh": self.additional_capture_kwh,
            "net_gain_kwh": self.net_gain_kwh,
            "net_gain_percent": self.net_gain_percent,
            "clipping_percent": self.clipping_percent,
            "yield_gain_percent": self.yield_gain_percent,
            "bess_enabled": self.bess_enabled,
            "clipped_energy_stored_kwh": self.clipped_energy_stored_kwh,
            "clipped_energy_lost_kwh": self.clipped_energy_lost_kwh,
            "effective_clipping_loss_kwh": self.effective_clipping_loss_kwh,
            "effective_clipping_percent": self.effective_clipping_percent,
            "bess_utilization_percent": self.bess_utilization_percent,
            "bess_recommendation": self.bess_recommendation,
            "hourly_comparison": [h.to_dict() for h in self.hourly_comparison],
            "monthly_comparison": [m.to_dict() for m in self.monthly_comparison],
        }


# ======================================================================
# Internal helpers
# ======================================================================

def _resolve_irradiance(
    annual_irradiance_kwh_per_kwp: float | None,
    region: str | None,
) -> tuple[float, tuple[float, ...]]:
    """Return ``(annual_irradiance, monthly_factors)`` from preset or fallback."""
    if region is not None:
        preset = get_regional_config(region)
        return preset.annual_irradiance_kwh_per_kwp, preset.monthly_factors

    if annual_irradiance_kwh_per_kwp is None:
        annual_irradiance_kwh_per_kwp = settings.default_irradiance_kwh_per_kwp
    irradiance = ensure_positive(
        annual_irradiance_kwh_per_kwp, "annual_irradiance_kwh_per_kwp"
    )
    return irradiance, DEFAULT_MONTHLY_FACTORS


def _hourly_comparison(
    ac_capacity_kw: float,
    dc_capacity_kwp: float,
) -> tuple[tuple[HourlyComparison, ...], np.ndarray]:
    """Build the 24-hour table and return it with the unrounded clipping series."""
    curve = hourly_solar_curve()
    baseline_kw = ac_capacity_kw * curve
    dc_kw = dc_capacity_kwp * curve
    ac_kw, clipped_kw = clip_to_inverter(dc_kw, ac_capacity_kw)

    rows = tuple(
        HourlyComparison(
            hour=hour,
            baseline_kw=round(float(baseline_kw[hour]), 2),
            oversized_dc_kw=round(float(dc_kw[hour]), 2),
            oversized_ac_kw=round(float(ac_kw[hour]), 2),
            clipping_kw=round(float(clipped_kw[hour]), 2),
        )
        for hour in range(curve.size)
    )
    return rows, clipped_kw


def _monthly_comparison(
    baseline_annual_kwh: float,
    oversized_annual_kwh: float,
    monthly_factors: tuple[float, ...],
) -> tuple[MonthlyComparison, ...]:
    """Distribute annual totals across months by irradiance weight."""
    weights = monthly_weights(monthly_factors)
    baseline_months = baseline_annual_kwh * weights
    oversized_months = oversized_annual_kwh * weights

    rows = []
    for idx, month in enumerate(MONTH_NAMES):
        baseline_kwh = float(baseline_months[idx])
        oversized_kwh = float(oversized_months[idx])
        gain_percent = (
            (oversized_kwh - baseline_kwh) / baseline_kwh * 100.0
            if baseline_kwh > 0 else 0.0
        )
        baseline_rounded = round(baseline_kwh)
        oversized_rounded = round(oversized_kwh)
        rows.append(
            MonthlyComparison(
                month=month,
                baseline_kwh=baseline_rounded,
                oversized_kwh=oversized_rounded,
                gain_kwh=oversized_rounded - baseline_rounded,
                gain_percent=round(gain_percent, 1),
            )
        )
    return tuple(rows)


# ======================================================================
# Recommendation text
# ======================================================================

def get_bess_recommendation(
    bess_enabled: bool,
    utilization_percent: float,
    dc_ac_ratio: float,
) -> str:
    """Storage recommendation from the battery state and its utilisation.

    Evaluated top to bottom, first match wins:

    1. no storage, ratio above ``HIGH_RATIO_WITHOUT_STORAGE``
    2. no storage
    3. utilisation above 90 %
    4. utilisation above 50 %
    5. anything else (low utilisation)
    """
    if not bess_enabled:
        if dc_ac_ratio > HIGH_RATIO_WITHOUT_STORAGE:
            return (
                f"At {dc_ac_ratio:.2f}:1 a significant share of peak production is "
                "clipped. Add battery storage to recapture clipped energy or reduce "
                "the DC/AC ratio."
            )
        return (
            "A battery could capture energy clipped during peak production hours "
            "and shift it to the evening."
        )

    if utilization_percent > HIGH_UTILIZATION_PERCENT:
        return (
            f"The battery recaptures {utilization_percent:.1f}% of clipped energy. "
            "Storage is well matched to the clipping profile."
        )
    if utilization_percent > MODERATE_UTILIZATION_PERCENT:
        return (
            f"The battery recaptures {utilization_percent:.1f}% of clipped energy. "
            "Increasing its power rating or capacity would capture more."
        )
    return (
        f"The battery recaptures only {utilization_percent:.1f}% of clipped energy. "
        "It is undersized for clipping recapture, or the ratio clips too little "
        "to justify storage on this basis alone."
    )


def get_dc_ac_recommendation(
    dc_ac_ratio: float,
    region: str | None = None,
    bess_enabled: bool = False,
) -> str:
    """Narrative recommendation for the oversizing ratio itself.

    Bands are inclusive of their upper bound. Regional bands are checked
    first; a ratio beyond its region's bands falls through to the
    generic bands (1.25 / 1.35 / 1.5).
    """
    ratio = ensure_positive(dc_ac_ratio, "dc_ac_ratio")
    label = f"{ratio:.2f}:1"

    if ratio <= 1.0:
        return (
            f"A {label} ratio means no oversizing: the inverter is never saturated "
            "and extra panels would add yield at little clipping cost."
        )

    if region == "high-sun":
        if ratio <= 1.2:
            return (
                f"A {label} ratio is conservative for high-sun sites. There is room "
                "to add panels before clipping becomes significant."
            )
        if ratio <= 1.35:
            return (
                f"A {label} ratio is optimal for high-sun sites, balancing extra "
                "morning and evening yield against midday clipping."
            )
    elif region == "cloudy":
        if ratio <= 1.3:
            return (
                f"A {label} ratio is below the typical range for cloudy sites, where "
                "higher ratios capture more diffuse light."
            )
        if ratio <= 1.5:
            return (
                f"A {label} ratio is optimal for cloudy sites, where the inverter "
                "rarely reaches full output."
            )

    if ratio <= 1.25:
        return (
            f"A {label} ratio is conservative oversizing with negligible clipping."
        )
    if ratio <= 1.35:
        return (
            f"A {label} ratio sits in the optimal range, in line with industry "
            "practice."
        )
    if ratio <= 1.5:
        return (
            f"A {label} ratio is aggressive oversizing. Clipping losses grow quickly "
            "above this point; confirm the inverter warranty allows it."
        )
    if bess_enabled:
        return (
            f"A {label} ratio is justified with battery storage that recaptures "
            "the clipped midday energy."
        )
    return (
        f"A {label} ratio is excessive without storage. Clipping losses outweigh "
        "the extra yield; reduce the ratio or add a battery."
    )


def dc_ac_ratio_status(
    dc_ac_ratio: float,
    region: str = "high-sun",
    bess_enabled: bool = False,
) -> str:
    """Classify a ratio against the region's recommended band.

    Returns one of ``"low"``, ``"optimal"``, ``"bess-ok"`` or ``"high"``.
    Storage lifts the acceptable ceiling to ``BESS_MAX_RATIO``; ratios
    between the regional band and that ceiling are ``"bess-ok"``.
    """
    ratio = ensure_positive(dc_ac_ratio, "dc_ac_ratio")
    preset = get_regional_config(region)
    low, high = preset.recommended_dc_ac_min, preset.recommended_dc_ac_max
    ceiling = BESS_MAX_RATIO if bess_enabled else high

    if ratio < low:
        return "low"
    if ratio > ceiling:
        return "high"
    if ratio <= high:
        return "optimal"
    return "bess-ok"


# ======================================================================
# Main entry point
# ======================================================================

def calculate_dc_ac_analysis(
    solar_capacity_kwp: float,
    dc_ac_ratio: float,
    annual_irradiance_kwh_per_kwp: float | None = None,
    region: str | None = None,
    bess_config: BESSConfig | None = None,
    annual_sun_days: float | None = None,
) -> BESSAdjustedAnalysis:
    """Analyse an oversized array against its 1:1 baseline.

    Parameters
    ----------
    solar_capacity_kwp : float
        AC (inverter) capacity; also the baseline array size (kWp).
    dc_ac_ratio : float
        DC array size divided by AC capacity.
    annual_irradiance_kwh_per_kwp : float or None
        Flat specific yield used when no *region* is given. Defaults to
        ``settings.default_irradiance_kwh_per_kwp`` (1864).
    region : str or None
        ``"high-sun"``, ``"moderate"`` or ``"cloudy"``. Takes precedence
        over *annual_irradiance_kwh_per_kwp*.
    bess_config : BESSConfig or None
        Optional battery for clipping recapture.
    annual_sun_days : float or None
        Full-sun-equivalent days used to annualise the representative
        day. Defaults to ``settings.annual_sun_days`` (300).

    Returns
    -------
    BESSAdjustedAnalysis
    """
    ac_capacity_kw = ensure_non_negative(solar_capacity_kwp, "solar_capacity_kwp")
    ratio = ensure_positive(dc_ac_ratio, "dc_ac_ratio")

    # ------------------------------------------------------------------
    # 1. Irradiance and seasonality
    # ------------------------------------------------------------------
    irradiance, monthly_factors = _resolve_irradiance(
        annual_irradiance_kwh_per_kwp, region
    )
    logger.debug(
        "Oversizing analysis: region=%s irradiance=%.0f kWh/kWp", region, irradiance
    )

    # ------------------------------------------------------------------
    # 2. Annual energy
    # ------------------------------------------------------------------
    dc_capacity_kwp = ac_capacity_kw * ratio
    baseline_annual = ac_capacity_kw * irradiance
    theoretical_dc_annual = dc_capacity_kwp * irradiance

    # ------------------------------------------------------------------
    # 3. Clipping model
    # ------------------------------------------------------------------
    raw_clipping_percent = clipping_percent_raw(ratio)
    raw_yield_gain_percent = yield_gain_percent_raw(ratio)
    nominal_clipping_loss = theoretical_dc_annual * raw_clipping_percent / 100.0

    # ------------------------------------------------------------------
    # 4. Representative day
    # ------------------------------------------------------------------
    hourly_rows, clipped_kw = _hourly_comparison(ac_capacity_kw, dc_capacity_kwp)

    # ------------------------------------------------------------------
    # 5-6. Storage capture and effective clipping
    # ------------------------------------------------------------------
    # A battery with no capacity is treated as absent.
    bess_enabled = bess_config is not None and bess_config.is_active
    if bess_enabled:
        capture = simulate_clipping_capture(clipped_kw, bess_config, annual_sun_days)
        stored_kwh = capture.stored_kwh
        # Storage can only reduce the nominal loss, never add to it.
        lost_kwh = min(capture.lost_kwh, nominal_clipping_loss)
        effective_loss = lost_kwh
    else:
        stored_kwh = 0.0
        lost_kwh = nominal_clipping_loss
        effective_loss = nominal_clipping_loss

    baseline_rounded = round(baseline_annual)
    theoretical_rounded = round(theoretical_dc_annual)
    effective_rounded = round(effective_loss)
    oversized_rounded = theoretical_rounded - effective_rounded
    net_gain = oversized_rounded - baseline_rounded
    net_gain_percent = net_gain / baseline_rounded * 100.0 if baseline_rounded > 0 else 0.0
    effective_clipping_percent = (
        effective_loss / theoretical_dc_annual * 100.0 if theoretical_dc_annual > 0 else 0.0
    )

    # ------------------------------------------------------------------
    # 7. Monthly distribution
    # ------------------------------------------------------------------
    monthly_rows = _monthly_comparison(
        baseline_rounded, oversized_rounded, monthly_factors
    )

    # ------------------------------------------------------------------
    # 8. Utilisation and recommendation
    # ------------------------------------------------------------------
    if nominal_clipping_loss > 0:
        utilization = min(100.0, stored_kwh / nominal_clipping_loss * 100.0)
    else:
        utilization = 0.0
    utilization = round(utilization, 1)

    recommendation = get_bess_recommendation(bess_enabled, utilization, ratio)

    logger.info(
        "DC/AC %.2f: net gain %.1f%% (%d kWh), clipping %.1f%%, effective %.1f%%",
        ratio,
        net_gain_percent,
        net_gain,
        raw_clipping_percent,
        effective_clipping_percent,
    )

    return BESSAdjustedAnalysis(
        ac_capacity_kw=ac_capacity_kw,
        dc_capacity_kwp=round(dc_capacity_kwp, 2),
        dc_ac_ratio=ratio,
        annual_irradiance_kwh_per_kwp=irradiance,
        region=region,
        baseline_annual_kwh=baseline_rounded,
        theoretical_dc_annual_kwh=theoretical_rounded,
        oversized_annual_kwh=oversized_rounded,
        clipping_loss_kwh=round(nominal_clipping_loss),
        additional_capture_kwh=theoretical_rounded - baseline_rounded,
        net_gain_kwh=net_gain,
        net_gain_percent=round(net_gain_percent, 1),
        clipping_percent=round(raw_clipping_percent, 1),
        yield_gain_percent=round(raw_yield_gain_percent, 1),
        bess_enabled=bess_enabled,
        clipped_energy_stored_kwh=round(stored_kwh),
        clipped_energy_lost_kwh=round(lost_kwh),
        effective_clipping_loss_kwh=effective_rounded,
        effective_clipping_percent=round(effective_clipping_percent, 1),
        bess_utilization_percent=utilization,
        bess_recommendation=recommendation,
        hourly_comparison=hourly_rows,
        monthly_comparison=monthly_rows,
    )
