"""Tests for solarflow.battery.clipping_capture -- clipped energy recapture."""

from __future__ import annotations

import math

import pytest

from solarflow.battery.clipping_capture import BESSConfig, simulate_clipping_capture
from solarflow.validation import InvalidParameterError


class TestBESSConfig:
    """Tests for BESSConfig validation and derived values."""

    def test_defaults_inactive(self):
        bess = BESSConfig()
        assert not bess.is_active
        assert bess.round_trip_efficiency == 0.90

    def test_charge_efficiency_is_sqrt(self):
        bess = BESSConfig(enabled=True, capacity_kwh=10, power_kw=5, round_trip_efficiency=0.81)
        assert bess.charge_efficiency == pytest.approx(0.9)

    def test_zero_capacity_is_inactive(self):
        assert not BESSConfig(enabled=True, capacity_kwh=0.0, power_kw=10.0).is_active

    @pytest.mark.parametrize("eta", [0.0, 1.2, -0.5])
    def test_bad_efficiency_raises(self, eta):
        with pytest.raises(InvalidParameterError, match="round_trip_efficiency"):
            BESSConfig(enabled=True, capacity_kwh=10, power_kw=5, round_trip_efficiency=eta)

    def test_negative_capacity_raises(self):
        with pytest.raises(InvalidParameterError, match="capacity_kwh"):
            BESSConfig(enabled=True, capacity_kwh=-1.0)

    def test_nan_power_raises(self):
        with pytest.raises(InvalidParameterError, match="power_kw"):
            BESSConfig(enabled=True, capacity_kwh=10.0, power_kw=math.nan)


class TestSimulateClippingCapture:
    """Tests for simulate_clipping_capture()."""

    def test_power_and_capacity_limits(self):
        """Lossless 20 kWh / 15 kW battery: 10 + 10 stored, then full."""
        bess = BESSConfig(enabled=True, capacity_kwh=20, power_kw=15, round_trip_efficiency=1.0)
        result = simulate_clipping_capture([0.0, 10.0, 30.0, 5.0], bess, annual_multiplier=1)
        assert result.stored_kwh == pytest.approx(20.0)
        assert result.lost_kwh == pytest.approx(25.0)
        assert result.hourly_stored_kwh == pytest.approx((0.0, 10.0, 10.0, 0.0))

    def test_charge_losses(self):
        """Charging applies sqrt(eta); the headroom check uses stored energy."""
        bess = BESSConfig(enabled=True, capacity_kwh=20, power_kw=15, round_trip_efficiency=0.81)
        result = simulate_clipping_capture([0.0, 10.0, 30.0, 5.0], bess, annual_multiplier=1)
        assert result.hourly_stored_kwh == pytest.approx((0.0, 9.0, 9.9, 0.99))

    def test_conservation(self, clipping_bess):
        """Stored + lost equals total clipped energy."""
        clipping = [0, 0, 3.0, 12.0, 28.0, 30.0, 16.0, 2.0]
        result = simulate_clipping_capture(clipping, clipping_bess, annual_multiplier=300)
        assert result.total_clipped_kwh == pytest.approx(sum(clipping) * 300)

    def test_per_hour_bound(self, clipping_bess):
        """No hour charges more than the power rating or the clipped energy."""
        clipping = [5.0, 40.0, 40.0, 40.0, 1.0]
        result = simulate_clipping_capture(clipping, clipping_bess, annual_multiplier=1)
        for clipped, stored in zip(clipping, result.hourly_stored_kwh):
            assert stored <= min(clipped, clipping_bess.power_kw) + 1e-9
        assert sum(result.hourly_stored_kwh) <= clipping_bess.capacity_kwh + 1e-9

    def test_default_multiplier_is_300_days(self, clipping_bess):
        result = simulate_clipping_capture([4.0, 1.4], clipping_bess)
        assert result.stored_kwh == pytest.approx(5.4 * math.sqrt(0.9) * 300)

    @pytest.mark.parametrize(
        "bess",
        [
            None,
            BESSConfig(enabled=False, capacity_kwh=50, power_kw=25),
            BESSConfig(enabled=True, capacity_kwh=0, power_kw=25),
        ],
    )
    def test_inactive_battery_loses_everything(self, bess):
        result = simulate_clipping_capture([4.0, 1.4], bess, annual_multiplier=300)
        assert result.stored_kwh == 0.0
        assert result.lost_kwh == pytest.approx(1620.0)

    def test_zero_power_stores_nothing(self):
        bess = BESSConfig(enabled=True, capacity_kwh=50, power_kw=0)
        result = simulate_clipping_capture([4.0, 1.4], bess, annual_multiplier=1)
        assert result.stored_kwh == 0.0

    def test_each_call_starts_empty(self, clipping_bess):
        """Repeated calls give identical results; no state carries over."""
        first = simulate_clipping_capture([30.0, 30.0], clipping_bess, annual_multiplier=1)
        second = simulate_clipping_capture([30.0, 30.0], clipping_bess, annual_multiplier=1)
        assert first == second

    def test_to_dict(self, clipping_bess):
        d = simulate_clipping_capture([1.0], clipping_bess, annual_multiplier=1).to_dict()
        assert set(d) == {"stored_kwh", "lost_kwh", "hourly_stored_kwh"}
