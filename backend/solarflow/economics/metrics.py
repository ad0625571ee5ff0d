"""Financial projection for a solar installation.

Builds a year-by-year savings series under panel degradation and tariff
escalation, then derives simple payback, ROI, Net Present Value (NPV)
and Internal Rate of Return (IRR).

Year ``t`` (1-indexed) saves::

    annual_savings * (1 - degradation) ** (t - 1) * (1 + escalation) ** (t - 1)

and is discounted by ``(1 + discount_rate) ** t``.  Monetary values
are in the caller's currency.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

from solarflow.config import settings
from solarflow.validation import InvalidParameterError, ensure_finite, ensure_non_negative

logger = logging.getLogger(__name__)


# ======================================================================
# Constants
# ======================================================================

# Newton iterates are held inside this band so that ``1 + irr`` stays
# positive and the solver cannot run off to meaningless rates. This is
# a numerical safeguard only.
IRR_LOWER_BOUND: float = -0.99
IRR_UPPER_BOUND: float = 1.0


# ======================================================================
# Result records
# ======================================================================

@dataclass(frozen=True)
class YearlyCashflow:
    year: int
    cumulative_savings: float
    cumulative_cost: float
    net_position: float

    def to_dict(self) -> dict[str, float]:
        return {
            "year": self.year,
            "cumulative_savings": self.cumulative_savings,
            "cumulative_cost": self.cumulative_cost,
            "net_position": self.net_position,
        }


@dataclass(frozen=True)
class FinancialSummary:
    """Headline financial metrics plus the cumulative cashflow table."""

    system_cost: float
    annual_grid_cost_baseline: float
    annual_grid_cost_with_solar: float
    annual_savings: float
    payback_years: float            # math.inf when savings <= 0
    roi_percent: float
    npv: float
    irr: float                      # percent
    yearly_cashflows: tuple[YearlyCashflow, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "system_cost": self.system_cost,
            "annual_grid_cost_baseline": self.annual_grid_cost_baseline,
            "annual_grid_cost_with_solar": self.annual_grid_cost_with_solar,
            "annual_savings": self.annual_savings,
            "payback_years": self.payback_years,
            "roi_percent": self.roi_percent,
            "npv": self.npv,
            "irr": self.irr,
            "yearly_cashflows": [c.to_dict() for c in self.yearly_cashflows],
        }


# ======================================================================
# Internal helpers
# ======================================================================

def _discount_factor(rate: float, year: int) -> float:
    """Return ``1 / (1 + rate) ** year``."""
    return 1.0 / (1.0 + rate) ** year


def yearly_savings_series(
    annual_savings: float,
    years: int,
    annual_degradation: float,
    tariff_escalation: float,
) -> NDArray[np.float64]:
    """Savings for years 1..*years* after degradation and escalation."""
    exponents = np.arange(years, dtype=np.float64)
    growth = (1.0 - annual_degradation) ** exponents * (1.0 + tariff_escalation) ** exponents
    return annual_savings * growth


def npv_at_rate(
    initial_investment: float,
    cashflows: Sequence[float],
    rate: float,
) -> float:
    """NPV of an outlay at year 0 followed by *cashflows* at years 1..N."""
    npv = -initial_investment
    for t, cf in enumerate(cashflows, start=1):
        npv += cf * _discount_factor(rate, t)
    return npv


# ======================================================================
# IRR calculation
# ======================================================================

def solve_irr(
    initial_investment: float,
    cashflows: Sequence[float],
    initial_guess: float | None = None,
    max_iterations: int | None = None,
    tolerance: float | None = None,
) -> float:
    """Compute IRR using Newton-Raphson.

    Parameters
    ----------
    initial_investment : float
        Outlay at year 0 (positive number).
    cashflows : sequence of float
        Inflows at years 1..N.
    initial_guess : float or None
        Starting rate as a fraction. Default ``settings.irr_initial_guess`` (10 %).
    max_iterations : int or None
        Iteration cap. Default ``settings.irr_max_iterations`` (100).
    tolerance : float or None
        Stop once ``|NPV|`` falls below this. Default ``settings.irr_tolerance``.

    Returns
    -------
    float
        IRR in percent. This is the best estimate found: when the
        derivative vanishes or the iterations run out the result may
        not zero the NPV exactly.
    """
    irr = settings.irr_initial_guess if initial_guess is None else initial_guess
    if max_iterations is None:
        max_iterations = settings.irr_max_iterations
    if tolerance is None:
        tolerance = settings.irr_tolerance

    flows = np.asarray(cashflows, dtype=np.float64)
    periods = np.arange(1, flows.size + 1, dtype=np.float64)

    for iteration in range(max_iterations):
        base = 1.0 + irr
        npv = -initial_investment + float(np.sum(flows / base ** periods))
        derivative = -float(np.sum(periods * flows / base ** (periods + 1)))

        if abs(npv) < tolerance:
            logger.debug("IRR converged after %d iterations: %.6f", iteration, irr)
            break
        if derivative == 0:
            logger.debug("IRR stalled on zero derivative at %.6f", irr)
            break

        irr = irr - npv / derivative
        irr = max(IRR_LOWER_BOUND, min(IRR_UPPER_BOUND, irr))
    else:
        logger.debug("IRR did not converge in %d iterations: %.6f", max_iterations, irr)

    return irr * 100.0


# ======================================================================
# Main entry point
# ======================================================================

def calculate_financial_summary(
    system_cost: float,
    annual_savings: float,
    annual_grid_cost_baseline: float,
    annual_grid_cost_with_solar: float,
    discount_rate: float | None = None,
    system_life_years: int | None = None,
    annual_degradation: float | None = None,
    tariff_escalation: float | None = None,
) -> FinancialSummary:
    """Project savings over the system life and derive headline metrics.

    Parameters
    ----------
    system_cost : float
        Installed cost, paid at year 0.
    annual_savings : float
        First-year savings (grid cost avoided).
    annual_grid_cost_baseline, annual_grid_cost_with_solar : float
        Annual grid bill without and with the system (reported only).
    discount_rate : float or None
        NPV discount rate. Default 8 %.
    system_life_years : int or None
        Projection horizon. Default 20.
    annual_degradation : float or None
        Yearly output loss. Default 0.5 %.
    tariff_escalation : float or None
        Yearly tariff increase. Default 10 %.

    Returns
    -------
    FinancialSummary
    """
    if discount_rate is None:
        discount_rate = settings.discount_rate
    if system_life_years is None:
        system_life_years = settings.system_life_years
    if annual_degradation is None:
        annual_degradation = settings.annual_degradation
    if tariff_escalation is None:
        tariff_escalation = settings.tariff_escalation

    system_cost = ensure_non_negative(system_cost, "system_cost")
    annual_savings = ensure_finite(annual_savings, "annual_savings")
    if system_life_years < 1:
        raise InvalidParameterError(
            f"system_life_years must be at least 1, got {system_life_years}"
        )
    if ensure_finite(discount_rate, "discount_rate") <= -1.0:
        raise InvalidParameterError(f"discount_rate must exceed -1, got {discount_rate}")

    # ------------------------------------------------------------------
    # 1. Simple payback (undiscounted, year-1 savings)
    # ------------------------------------------------------------------
    if annual_savings > 0:
        payback_years = round(system_cost / annual_savings, 1)
    else:
        payback_years = math.inf

    # ------------------------------------------------------------------
    # 2. Yearly savings, cumulative position and NPV
    # ------------------------------------------------------------------
    savings = yearly_savings_series(
        annual_savings, system_life_years, annual_degradation, tariff_escalation
    )

    yearly: list[YearlyCashflow] = []
    cumulative_savings = 0.0
    npv = -system_cost

    for year, year_savings in enumerate(savings, start=1):
        cumulative_savings += float(year_savings)
        npv += float(year_savings) * _discount_factor(discount_rate, year)
        yearly.append(
            YearlyCashflow(
                year=year,
                cumulative_savings=float(round(cumulative_savings)),
                cumulative_cost=system_cost,
                net_position=float(round(cumulative_savings - system_cost)),
            )
        )

    # ------------------------------------------------------------------
    # 3. ROI and IRR
    # ------------------------------------------------------------------
    roi_percent = (
        (cumulative_savings - system_cost) / system_cost * 100.0 if system_cost > 0 else 0.0
    )
    irr = solve_irr(system_cost, savings)

    return FinancialSummary(
        system_cost=float(round(system_cost)),
        annual_grid_cost_baseline=float(round(annual_grid_cost_baseline)),
        annual_grid_cost_with_solar=float(round(annual_grid_cost_with_solar)),
        annual_savings=float(round(annual_savings)),
        payback_years=payback_years,
        roi_percent=float(round(roi_percent)),
        npv=float(round(npv)),
        irr=round(irr, 1),
        yearly_cashflows=tuple(yearly),
    )
