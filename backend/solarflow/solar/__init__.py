"""
Solar oversizing engine.

Provides regional irradiance presets and the representative daily
generation curve, the empirical clipping model, inverter clipping and
configuration helpers, and the DC/AC oversizing analysis with optional
battery recapture of clipped energy.
"""

from .profiles import (
    DEFAULT_MONTHLY_FACTORS,
    HOURLY_SOLAR_CURVE,
    MONTH_NAMES,
    REGIONAL_PRESETS,
    RegionalConfig,
    get_regional_config,
    hourly_solar_curve,
    monthly_weights,
)
from .clipping import (
    REFERENCE_RATIO_POINTS,
    ClippingEstimate,
    ReferencePoint,
    closest_reference_point,
    estimate_clipping,
)
from .inverter import InverterConfiguration, clip_to_inverter, valid_inverter_configurations
from .oversizing import (
    BESSAdjustedAnalysis,
    HourlyComparison,
    MonthlyComparison,
    calculate_dc_ac_analysis,
    dc_ac_ratio_status,
    get_bess_recommendation,
    get_dc_ac_recommendation,
)

__all__ = [
    # profiles
    "DEFAULT_MONTHLY_FACTORS",
    "HOURLY_SOLAR_CURVE",
    "MONTH_NAMES",
    "REGIONAL_PRESETS",
    "RegionalConfig",
    "get_regional_config",
    "hourly_solar_curve",
    "monthly_weights",
    # clipping
    "REFERENCE_RATIO_POINTS",
    "ClippingEstimate",
    "ReferencePoint",
    "closest_reference_point",
    "estimate_clipping",
    # inverter
    "InverterConfiguration",
    "clip_to_inverter",
    "valid_inverter_configurations",
    # oversizing
    "BESSAdjustedAnalysis",
    "HourlyComparison",
    "MonthlyComparison",
    "calculate_dc_ac_analysis",
    "dc_ac_ratio_status",
    "get_bess_recommendation",
    "get_dc_ac_recommendation",
]
