"""Pydantic schemas for analysis inputs read from a configuration source."""
from typing import Literal

from pydantic import BaseModel, Field

from solarflow.battery.clipping_capture import BESSConfig
from solarflow.economics.metrics import FinancialSummary, calculate_financial_summary
from solarflow.solar.oversizing import BESSAdjustedAnalysis, calculate_dc_ac_analysis


class BESSParams(BaseModel):
    enabled: bool = False
    capacity_kwh: float = Field(default=0.0, ge=0.0, description="Usable battery capacity in kWh")
    power_kw: float = Field(default=0.0, ge=0.0, description="Maximum charge power in kW")
    round_trip_efficiency: float = Field(default=0.90, gt=0.0, le=1.0, description="Round-trip efficiency")

    def to_config(self) -> BESSConfig:
        return BESSConfig(
            enabled=self.enabled,
            capacity_kwh=self.capacity_kwh,
            power_kw=self.power_kw,
            round_trip_efficiency=self.round_trip_efficiency,
        )


class OversizingRequest(BaseModel):
    solar_capacity_kwp: float = Field(ge=0.0, description="AC inverter capacity in kW")
    dc_ac_ratio: float = Field(default=1.3, gt=0.0, le=5.0, description="DC array size over AC capacity")
    region: Literal["high-sun", "moderate", "cloudy"] | None = None
    annual_irradiance_kwh_per_kwp: float | None = Field(
        default=None, gt=0, description="Specific yield used when no region is given"
    )
    bess: BESSParams | None = None
    annual_sun_days: float | None = Field(
        default=None, gt=0, le=366, description="Full-sun days used to annualise the daily clipping profile"
    )

    def run(self) -> BESSAdjustedAnalysis:
        return calculate_dc_ac_analysis(
            self.solar_capacity_kwp,
            self.dc_ac_ratio,
            annual_irradiance_kwh_per_kwp=self.annual_irradiance_kwh_per_kwp,
            region=self.region,
            bess_config=self.bess.to_config() if self.bess is not None else None,
            annual_sun_days=self.annual_sun_days,
        )


class FinancialParams(BaseModel):
    system_cost: float = Field(ge=0.0, description="Installed system cost")
    annual_savings: float = Field(description="First-year grid cost avoided")
    annual_grid_cost_baseline: float = Field(default=0.0, ge=0.0, description="Annual grid bill without solar")
    annual_grid_cost_with_solar: float = Field(default=0.0, ge=0.0, description="Annual grid bill with solar")
    discount_rate: float | None = Field(default=None, ge=0.0, le=1.0, description="NPV discount rate")
    system_life_years: int | None = Field(default=None, ge=1, le=50, description="Projection horizon in years")
    annual_degradation: float | None = Field(default=None, ge=0.0, lt=1.0, description="Yearly output loss")
    tariff_escalation: float | None = Field(default=None, ge=0.0, le=1.0, description="Yearly tariff increase")

    def run(self) -> FinancialSummary:
        return calculate_financial_summary(**self.model_dump())
