"""Battery storage -- recapture of inverter-clipped energy."""

from .clipping_capture import BESSConfig, CaptureResult, simulate_clipping_capture

__all__ = ["BESSConfig", "CaptureResult", "simulate_clipping_capture"]
