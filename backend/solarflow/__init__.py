"""
SolarFlow -- deterministic solar oversizing and project economics.

Sub-packages
------------
solar
    Irradiance presets, clipping model and the DC/AC oversizing analysis.
battery
    Battery recapture of inverter-clipped energy.
economics
    Engineering KPIs, environmental equivalents, financial projection
    and sensitivity sweeps.
reporting
    Currency and number formatting for presentation layers.
"""

from .validation import InvalidParameterError

__version__ = "0.1.0"

__all__ = ["InvalidParameterError", "__version__"]
