"""
Environmental equivalents of avoided grid energy.

All conversions are linear. The grid emission factor reflects a
coal-heavy grid (Eskom, ~0.95 kg CO2/kWh).
"""

from __future__ import annotations

from dataclasses import dataclass

GRID_EMISSION_FACTOR_KG_PER_KWH: float = 0.95
KG_CO2_PER_TREE_PER_YEAR: float = 22.0
KG_CO2_PER_CAR_MILE: float = 0.404
KWH_PER_HOME_PER_YEAR: float = 10_908.0


@dataclass(frozen=True)
class EnvironmentalMetrics:
    co2_avoided_tons: float
    trees_equivalent: float
    car_miles_avoided: float
    homes_powered_equivalent: float
    grid_emission_factor: float

    def to_dict(self) -> dict[str, float]:
        return {
            "co2_avoided_tons": self.co2_avoided_tons,
            "trees_equivalent": self.trees_equivalent,
            "car_miles_avoided": self.car_miles_avoided,
            "homes_powered_equivalent": self.homes_powered_equivalent,
            "grid_emission_factor": self.grid_emission_factor,
        }


def calculate_environmental_metrics(
    annual_solar_generation_kwh: float,
    self_consumption_kwh: float,
) -> EnvironmentalMetrics:
    """Convert self-consumed solar energy into CO2 and everyday equivalents.

    CO2, trees and car miles follow from the self-consumed energy that
    displaces grid supply; homes powered follows from total generation.
    """
    co2_avoided_kg = self_consumption_kwh * GRID_EMISSION_FACTOR_KG_PER_KWH

    return EnvironmentalMetrics(
        co2_avoided_tons=round(co2_avoided_kg / 1000.0, 1),
        trees_equivalent=float(round(co2_avoided_kg / KG_CO2_PER_TREE_PER_YEAR)),
        car_miles_avoided=float(round(co2_avoided_kg / KG_CO2_PER_CAR_MILE)),
        homes_powered_equivalent=round(
            annual_solar_generation_kwh / KWH_PER_HOME_PER_YEAR, 1
        ),
        grid_emission_factor=GRID_EMISSION_FACTOR_KG_PER_KWH,
    )
