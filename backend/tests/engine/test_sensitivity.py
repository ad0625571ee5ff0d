"""Tests for solarflow.economics.sensitivity -- ratio sweep and financial OAT."""

from __future__ import annotations

import pytest

from solarflow.battery.clipping_capture import BESSConfig
from solarflow.economics.sensitivity import financial_sensitivity, sweep_dc_ac_ratios
from solarflow.validation import InvalidParameterError


class TestRatioSweep:
    """Tests for sweep_dc_ac_ratios()."""

    def test_points_in_order(self):
        result = sweep_dc_ac_ratios(100.0, [1.0, 1.3, 1.6, 2.0], region="high-sun")
        assert [p["dc_ac_ratio"] for p in result["points"]] == [1.0, 1.3, 1.6, 2.0]

    def test_clipping_grows(self):
        points = sweep_dc_ac_ratios(100.0, [1.1, 1.3, 1.5, 1.7])["points"]
        clipping = [p["clipping_percent"] for p in points]
        assert clipping == sorted(clipping)

    def test_best_ratio(self):
        """Net gain peaks between the aggressive and BESS-only ratios."""
        result = sweep_dc_ac_ratios(100.0, [1.0, 1.3, 1.6, 2.0], region="high-sun")
        assert result["best_ratio"] == 1.6

    def test_status(self):
        points = sweep_dc_ac_ratios(100.0, [1.0, 1.3, 1.6], region="high-sun")["points"]
        assert [p["status"] for p in points] == ["low", "optimal", "high"]

    def test_status_with_storage(self, clipping_bess):
        points = sweep_dc_ac_ratios(
            100.0, [1.6], region="high-sun", bess_config=clipping_bess
        )["points"]
        assert points[0]["status"] == "bess-ok"
        assert points[0]["clipped_energy_stored_kwh"] > 0

    def test_empty(self):
        assert sweep_dc_ac_ratios(100.0, []) == {"points": [], "best_ratio": None}


class TestFinancialSensitivity:
    """Tests for financial_sensitivity()."""

    def test_system_cost_sweep(self, financial_base_params):
        result = financial_sensitivity(
            financial_base_params, "system_cost", [50_000, 100_000, 150_000]
        )
        points = result["points"]
        assert [p["value"] for p in points] == [50_000, 100_000, 150_000]
        assert [p["payback_years"] for p in points] == [3.3, 6.7, 10.0]
        npvs = [p["npv"] for p in points]
        assert npvs == sorted(npvs, reverse=True)

    def test_base_point_matches_base(self, financial_base_params):
        result = financial_sensitivity(financial_base_params, "system_cost", [100_000.0])
        point = result["points"][0]
        assert {k: point[k] for k in result["base"]} == result["base"]

    def test_life_sweep(self, financial_base_params):
        result = financial_sensitivity(financial_base_params, "system_life_years", [10, 25])
        assert result["points"][1]["npv"] > result["points"][0]["npv"]

    def test_escalation_raises_irr(self, financial_base_params):
        points = financial_sensitivity(
            financial_base_params, "tariff_escalation", [0.0, 0.10]
        )["points"]
        assert points[1]["irr"] > points[0]["irr"]

    def test_base_not_mutated(self, financial_base_params):
        snapshot = dict(financial_base_params)
        financial_sensitivity(financial_base_params, "annual_savings", [1.0, 2.0])
        assert financial_base_params == snapshot

    def test_unknown_variable_raises(self, financial_base_params):
        with pytest.raises(InvalidParameterError, match="fuel_price"):
            financial_sensitivity(financial_base_params, "fuel_price", [1.0])


class TestRatioSweepInactiveStorage:
    """A zero-capacity battery does not extend the acceptable ratio band."""

    def test_status_ignores_empty_battery(self):
        bess = BESSConfig(enabled=True, capacity_kwh=0.0, power_kw=10.0)
        points = sweep_dc_ac_ratios(100.0, [1.6], region="high-sun", bess_config=bess)["points"]
        assert points[0]["status"] == "high"
