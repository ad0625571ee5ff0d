"""
Inverter AC limiting and configuration helpers.

The oversizing analysis treats the inverter as an ideal power limiter:
AC output follows DC input until the rated AC capacity is reached and
everything above it is clipped.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from solarflow.validation import InvalidParameterError, ensure_non_negative, ensure_positive


def clip_to_inverter(
    p_dc: NDArray[np.float64],
    ac_capacity_kw: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Split a DC power series into AC output and clipped power.

    Parameters
    ----------
    p_dc : ndarray
        DC power from the array (kW). Negative values are treated as zero.
    ac_capacity_kw : float
        Rated AC output of the inverter (kW).

    Returns
    -------
    p_ac : ndarray
        ``min(p_dc, ac_capacity_kw)`` for every sample.
    clipped : ndarray
        ``max(0, p_dc - ac_capacity_kw)`` for every sample.
    """
    ac_capacity_kw = ensure_non_negative(ac_capacity_kw, "ac_capacity_kw")
    p_dc = np.maximum(np.asarray(p_dc, dtype=np.float64), 0.0)

    p_ac = np.minimum(p_dc, ac_capacity_kw)
    clipped = np.maximum(p_dc - ac_capacity_kw, 0.0)
    return p_ac, clipped


@dataclass(frozen=True)
class InverterConfiguration:
    inverter_count: int
    ac_capacity_kw: float
    dc_capacity_kwp: float

    def to_dict(self) -> dict:
        return {
            "inverter_count": self.inverter_count,
            "ac_capacity_kw": self.ac_capacity_kw,
            "dc_capacity_kwp": self.dc_capacity_kwp,
        }


def valid_inverter_configurations(
    inverter_size_kw: float,
    dc_ac_ratio: float,
    max_inverters: int = 10,
) -> list[InverterConfiguration]:
    """List system sizes buildable from 1..max_inverters identical inverters.

    The AC capacity is the system size; the DC panel capacity is the AC
    capacity scaled by the ratio and rounded to the nearest kWp.
    """
    inverter_size_kw = ensure_positive(inverter_size_kw, "inverter_size_kw")
    dc_ac_ratio = ensure_positive(dc_ac_ratio, "dc_ac_ratio")
    if max_inverters < 1:
        raise InvalidParameterError(f"max_inverters must be at least 1, got {max_inverters}")

    configurations = []
    for count in range(1, max_inverters + 1):
        ac_capacity = inverter_size_kw * count
        configurations.append(
            InverterConfiguration(
                inverter_count=count,
                ac_capacity_kw=ac_capacity,
                dc_capacity_kwp=float(round(ac_capacity * dc_ac_ratio)),
            )
        )
    return configurations
