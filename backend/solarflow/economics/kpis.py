"""Engineering KPIs derived from annual energy and cost aggregates."""

from __future__ import annotations

from dataclasses import dataclass

from solarflow.config import settings

REFERENCE_YIELD_KWH_PER_KWP: float = 1800.0
HOURS_PER_YEAR: int = 8760
LIFETIME_DEGRADATION_FACTOR: float = 0.92
BATTERY_CONTRIBUTION_FACTOR: float = 0.90


@dataclass(frozen=True)
class EngineeringKPIs:
    specific_yield: float           # kWh/kWp
    performance_ratio: float        # %
    capacity_factor: float          # %
    lcoe: float                     # currency/kWh
    self_consumption_rate: float    # %
    solar_coverage: float           # %
    grid_independence: float        # %, clamped to 100
    peak_shaving_kw: float

    def to_dict(self) -> dict[str, float]:
        return {
            "specific_yield": self.specific_yield,
            "performance_ratio": self.performance_ratio,
            "capacity_factor": self.capacity_factor,
            "lcoe": self.lcoe,
            "self_consumption_rate": self.self_consumption_rate,
            "solar_coverage": self.solar_coverage,
            "grid_independence": self.grid_independence,
            "peak_shaving_kw": self.peak_shaving_kw,
        }


def _safe_ratio(numerator: float, denominator: float) -> float:
    """``numerator / denominator``, or 0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def calculate_engineering_kpis(
    solar_capacity_kwp: float,
    annual_solar_generation_kwh: float,
    annual_consumption_kwh: float,
    self_consumption_kwh: float,
    battery_throughput_kwh: float = 0.0,
    peak_demand_kw: float = 0.0,
    peak_demand_with_solar_kw: float = 0.0,
    system_cost: float = 0.0,
    system_life_years: int | None = None,
) -> EngineeringKPIs:
    """Compute engineering KPIs for one year of operation.

    Parameters
    ----------
    solar_capacity_kwp : float
        Installed PV capacity (kWp).
    annual_solar_generation_kwh : float
        Energy generated in the year (kWh).
    annual_consumption_kwh : float
        Site consumption in the year (kWh).
    self_consumption_kwh : float
        Generated energy consumed on site (kWh).
    battery_throughput_kwh : float
        Energy discharged from storage to the site (kWh). Counted at
        90 % towards grid independence.
    peak_demand_kw, peak_demand_with_solar_kw : float
        Site peak demand before and after solar (kW).
    system_cost : float
        Total installed cost.
    system_life_years : int or None
        Project life for LCOE. Defaults to ``settings.system_life_years``.

    Returns
    -------
    EngineeringKPIs
        Any ratio with a zero denominator is reported as 0.
    """
    if system_life_years is None:
        system_life_years = settings.system_life_years

    generation = annual_solar_generation_kwh

    specific_yield = _safe_ratio(generation, solar_capacity_kwp)
    performance_ratio = _safe_ratio(
        generation, solar_capacity_kwp * REFERENCE_YIELD_KWH_PER_KWP
    ) * 100.0
    capacity_factor = _safe_ratio(generation, solar_capacity_kwp * HOURS_PER_YEAR) * 100.0

    lifetime_energy = generation * system_life_years * LIFETIME_DEGRADATION_FACTOR
    lcoe = _safe_ratio(system_cost, lifetime_energy)

    self_consumption_rate = _safe_ratio(self_consumption_kwh, generation) * 100.0
    solar_coverage = _safe_ratio(self_consumption_kwh, annual_consumption_kwh) * 100.0

    self_supplied = self_consumption_kwh + battery_throughput_kwh * BATTERY_CONTRIBUTION_FACTOR
    grid_independence = min(
        100.0, _safe_ratio(self_supplied, annual_consumption_kwh) * 100.0
    )

    peak_shaving = max(0.0, peak_demand_kw - peak_demand_with_solar_kw)

    return EngineeringKPIs(
        specific_yield=float(round(specific_yield)),
        performance_ratio=round(performance_ratio, 1),
        capacity_factor=round(capacity_factor, 1),
        lcoe=round(lcoe, 2),
        self_consumption_rate=round(self_consumption_rate, 1),
        solar_coverage=round(solar_coverage, 1),
        grid_independence=round(grid_independence, 1),
        peak_shaving_kw=round(peak_shaving, 1),
    )
