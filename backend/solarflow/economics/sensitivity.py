"""One-at-a-time sensitivity sweeps.

Two sweeps are provided:

* :func:`sweep_dc_ac_ratios` re-runs the oversizing analysis for a list
  of DC/AC ratios so callers can chart clipping against yield gain.
* :func:`financial_sensitivity` varies a single financial input while
  every other input stays at its base-case value.

Each evaluation is an independent call; nothing is shared between runs.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from solarflow.battery.clipping_capture import BESSConfig
from solarflow.economics.metrics import calculate_financial_summary
from solarflow.solar.oversizing import calculate_dc_ac_analysis, dc_ac_ratio_status
from solarflow.validation import InvalidParameterError

logger = logging.getLogger(__name__)


# ======================================================================
# DC/AC ratio sweep
# ======================================================================

def sweep_dc_ac_ratios(
    solar_capacity_kwp: float,
    ratios: Iterable[float],
    annual_irradiance_kwh_per_kwp: float | None = None,
    region: str | None = None,
    bess_config: BESSConfig | None = None,
    annual_sun_days: float | None = None,
) -> dict[str, Any]:
    """Evaluate the oversizing analysis at each ratio in *ratios*.

    Parameters
    ----------
    solar_capacity_kwp : float
        AC capacity shared by every point of the sweep.
    ratios : iterable of float
        DC/AC ratios to evaluate, in the order they should be reported.
    annual_irradiance_kwh_per_kwp, region, bess_config, annual_sun_days
        Passed through to :func:`calculate_dc_ac_analysis`.

    Returns
    -------
    dict
        ``"points"`` -- one summary dict per ratio with the keys
        ``dc_ac_ratio``, ``clipping_percent``, ``effective_clipping_percent``,
        ``net_gain_kwh``, ``net_gain_percent``, ``clipped_energy_stored_kwh``
        and ``status``.

        ``"best_ratio"`` -- the ratio with the largest net gain, or
        ``None`` when *ratios* is empty.
    """
    points: list[dict[str, Any]] = []
    status_region = region if region is not None else "high-sun"
    bess_enabled = bess_config is not None and bess_config.is_active

    for ratio in ratios:
        analysis = calculate_dc_ac_analysis(
            solar_capacity_kwp,
            ratio,
            annual_irradiance_kwh_per_kwp=annual_irradiance_kwh_per_kwp,
            region=region,
            bess_config=bess_config,
            annual_sun_days=annual_sun_days,
        )
        points.append({
            "dc_ac_ratio": analysis.dc_ac_ratio,
            "clipping_percent": analysis.clipping_percent,
            "effective_clipping_percent": analysis.effective_clipping_percent,
            "net_gain_kwh": analysis.net_gain_kwh,
            "net_gain_percent": analysis.net_gain_percent,
            "clipped_energy_stored_kwh": analysis.clipped_energy_stored_kwh,
            "status": dc_ac_ratio_status(ratio, status_region, bess_enabled),
        })

    best_ratio = None
    if points:
        best_ratio = max(points, key=lambda p: p["net_gain_kwh"])["dc_ac_ratio"]

    logger.debug("Ratio sweep over %d points, best ratio %s", len(points), best_ratio)
    return {"points": points, "best_ratio": best_ratio}


# ======================================================================
# Financial sensitivity
# ======================================================================

SENSITIVITY_VARIABLES: tuple[str, ...] = (
    "system_cost",
    "annual_savings",
    "discount_rate",
    "system_life_years",
    "annual_degradation",
    "tariff_escalation",
)

_METRIC_KEYS = ("npv", "irr", "payback_years", "roi_percent")


def financial_sensitivity(
    base_params: dict[str, Any],
    variable: str,
    values: Iterable[float],
) -> dict[str, Any]:
    """Vary one financial input across *values*.

    Parameters
    ----------
    base_params : dict
        Keyword arguments for :func:`calculate_financial_summary`. Must
        include ``system_cost``, ``annual_savings``,
        ``annual_grid_cost_baseline`` and ``annual_grid_cost_with_solar``.
        Never mutated.
    variable : str
        One of :data:`SENSITIVITY_VARIABLES`.
    values : iterable of float
        Values substituted for *variable*.

    Returns
    -------
    dict
        ``"variable"``, ``"base"`` (metrics of the unperturbed case) and
        ``"points"`` (``{"value", "npv", "irr", "payback_years",
        "roi_percent"}`` per value, in input order).
    """
    if variable not in SENSITIVITY_VARIABLES:
        raise InvalidParameterError(
            f"variable must be one of {', '.join(SENSITIVITY_VARIABLES)}, got {variable!r}"
        )

    base_summary = calculate_financial_summary(**base_params).to_dict()
    base_metrics = {k: base_summary[k] for k in _METRIC_KEYS}

    points: list[dict[str, Any]] = []
    for value in values:
        params = dict(base_params)
        params[variable] = int(value) if variable == "system_life_years" else value
        summary = calculate_financial_summary(**params).to_dict()
        entry: dict[str, Any] = {"value": value}
        entry.update({k: summary[k] for k in _METRIC_KEYS})
        points.append(entry)

    return {"variable": variable, "base": base_metrics, "points": points}
