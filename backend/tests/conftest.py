"""Shared test fixtures for SolarFlow engine tests."""

from __future__ import annotations

import pytest

from solarflow.battery.clipping_capture import BESSConfig
from solarflow.solar.oversizing import calculate_dc_ac_analysis


# ======================================================================
# Storage fixtures
# ======================================================================

@pytest.fixture
def clipping_bess() -> BESSConfig:
    """50 kWh / 25 kW battery at 90 % round-trip efficiency."""
    return BESSConfig(
        enabled=True,
        capacity_kwh=50.0,
        power_kw=25.0,
        round_trip_efficiency=0.90,
    )


# ======================================================================
# Oversizing fixtures
# ======================================================================

@pytest.fixture
def high_sun_analysis():
    """100 kW inverter at 1.3:1 on a high-sun site, no storage."""
    return calculate_dc_ac_analysis(100.0, 1.3, region="high-sun")


@pytest.fixture
def high_sun_bess_analysis(clipping_bess):
    """Same system as ``high_sun_analysis`` with the 50 kWh battery."""
    return calculate_dc_ac_analysis(
        100.0, 1.3, region="high-sun", bess_config=clipping_bess
    )


# ======================================================================
# Financial fixtures
# ======================================================================

@pytest.fixture
def financial_base_params() -> dict:
    """R100k system saving R15k in year one."""
    return {
        "system_cost": 100_000.0,
        "annual_savings": 15_000.0,
        "annual_grid_cost_baseline": 40_000.0,
        "annual_grid_cost_with_solar": 25_000.0,
    }
