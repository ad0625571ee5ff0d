"""Tests for solarflow.solar.profiles -- presets, daily curve, monthly weights."""

from __future__ import annotations

import numpy as np
import pytest

from solarflow.solar.profiles import (
    DEFAULT_MONTHLY_FACTORS,
    HOURLY_SOLAR_CURVE,
    REGIONAL_PRESETS,
    get_regional_config,
    hourly_solar_curve,
    monthly_weights,
)
from solarflow.validation import InvalidParameterError


class TestHourlyCurve:
    """Tests for the normalised 24-hour production curve."""

    def test_length(self):
        """One value per hour of the day."""
        assert len(HOURLY_SOLAR_CURVE) == 24

    def test_peak_at_noon(self):
        """Peak of 0.80 falls at hour 12."""
        curve = hourly_solar_curve()
        assert int(np.argmax(curve)) == 12
        assert curve[12] == pytest.approx(0.80)

    def test_night_is_dark(self):
        """No production before 06:00 or after 18:00."""
        curve = hourly_solar_curve()
        assert np.all(curve[:6] == 0.0)
        assert np.all(curve[19:] == 0.0)

    def test_returns_copy(self):
        """Mutating the returned array leaves the module curve intact."""
        curve = hourly_solar_curve()
        curve[12] = 5.0
        assert hourly_solar_curve()[12] == pytest.approx(0.80)


class TestRegionalPresets:
    """Tests for the climate-class presets."""

    def test_high_sun(self):
        preset = get_regional_config("high-sun")
        assert preset.annual_irradiance_kwh_per_kwp == 1864.0
        assert preset.recommended_dc_ac_min == 1.1
        assert preset.recommended_dc_ac_max == 1.35
        assert preset.monthly_factors == DEFAULT_MONTHLY_FACTORS

    def test_moderate_and_cloudy(self):
        assert get_regional_config("moderate").annual_irradiance_kwh_per_kwp == 1600.0
        assert get_regional_config("cloudy").annual_irradiance_kwh_per_kwp == 1100.0
        assert get_regional_config("cloudy").recommended_dc_ac_max == 1.5

    def test_every_preset_has_twelve_factors(self):
        for preset in REGIONAL_PRESETS.values():
            assert len(preset.monthly_factors) == 12

    def test_unknown_region_raises(self):
        """An unknown region name is rejected, not silently defaulted."""
        with pytest.raises(InvalidParameterError, match="desert"):
            get_regional_config("desert")

    def test_to_dict(self):
        d = get_regional_config("moderate").to_dict()
        assert d["name"] == "moderate"
        assert isinstance(d["monthly_factors"], list)


class TestMonthlyWeights:
    """Tests for monthly_weights()."""

    def test_sum_to_one(self):
        weights = monthly_weights(DEFAULT_MONTHLY_FACTORS)
        assert weights.sum() == pytest.approx(1.0)

    def test_proportional(self):
        """January (1.15) weighs more than June (0.60)."""
        weights = monthly_weights(DEFAULT_MONTHLY_FACTORS)
        assert weights[0] / weights[5] == pytest.approx(1.15 / 0.60)

    def test_all_zero_falls_back_to_even(self):
        weights = monthly_weights([0.0] * 12)
        np.testing.assert_allclose(weights, np.full(12, 1.0 / 12.0))

    def test_wrong_length_raises(self):
        with pytest.raises(InvalidParameterError):
            monthly_weights([1.0] * 11)

    def test_negative_raises(self):
        with pytest.raises(InvalidParameterError):
            monthly_weights([1.0] * 11 + [-0.1])
