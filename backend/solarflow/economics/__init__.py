"""Economic, engineering and environmental analysis module."""

from .environmental import EnvironmentalMetrics, calculate_environmental_metrics
from .kpis import EngineeringKPIs, calculate_engineering_kpis
from .metrics import (
    FinancialSummary,
    YearlyCashflow,
    calculate_financial_summary,
    npv_at_rate,
    solve_irr,
)
from .sensitivity import financial_sensitivity, sweep_dc_ac_ratios

__all__ = [
    "EnvironmentalMetrics",
    "calculate_environmental_metrics",
    "EngineeringKPIs",
    "calculate_engineering_kpis",
    "FinancialSummary",
    "YearlyCashflow",
    "calculate_financial_summary",
    "npv_at_rate",
    "solve_irr",
    "financial_sensitivity",
    "sweep_dc_ac_ratios",
]
