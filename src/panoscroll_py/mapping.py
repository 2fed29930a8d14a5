"""Mapping of normalised angles onto scroll offsets."""
from __future__ import annotations

import math

from .config import GimbalGuard, TiltWindow
from .orientation import DeviceOrientationState, RawOrientationSample, ScreenGeometry

ALPHA_MAX = 360.0


def round_half_up(value: float) -> int:
    """Round to the nearest pixel, halves going up (browser rounding)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def map_range(value: float, from_min: float, from_max: float, to_min: float, to_max: float) -> float:
    """Map value from [from_min, from_max] onto [to_min, to_max]."""
    return (value - from_min) * (to_max - to_min) / (from_max - from_min) + to_min


def clamp_tilt(
    beta: float,
    sample: RawOrientationSample,
    orientation: DeviceOrientationState,
    window: TiltWindow,
) -> float:
    """Lock normalised tilt into the window.

    In landscape the lock target depends on which side of the horizon the
    phone is on, read from the raw angles.
    """
    min_beta, max_beta = window.min_beta, window.max_beta

    # lock to top when moving beyond max angle
    if beta > max_beta:
        if not orientation.is_landscape:
            beta = max_beta
        elif (orientation.is_rotated_clockwise and sample.gamma > 0) or (
            not orientation.is_rotated_clockwise and sample.gamma < 0
        ):
            beta = min_beta
        else:
            beta = max_beta

    # lock to bottom when moving below initial angle
    if beta < min_beta:
        if not orientation.is_landscape:
            beta = min_beta
        elif abs(sample.beta) > 90:
            # above the horizon
            beta = max_beta
        else:
            beta = min_beta

    return beta


def vertical_offset(beta: float, geometry: ScreenGeometry, window: TiltWindow) -> float:
    """min_beta maps to the bottom of the scrollable range, max_beta to 0."""
    scroll_range = geometry.vertical_range
    if scroll_range <= 0:
        return 0.0
    return map_range(beta, window.min_beta, window.max_beta, scroll_range, 0)


def horizontal_offset(alpha: float, geometry: ScreenGeometry) -> float:
    available = geometry.horizontal_range
    if available <= 0:
        return 0.0
    ratio = alpha / ALPHA_MAX
    return float(available - round_half_up(available * ratio))


def in_gimbal_lock(beta: float, orientation: DeviceOrientationState, guard: GimbalGuard) -> bool:
    """Near horizontal in portrait, alpha readings swing wildly."""
    return not orientation.is_landscape and guard.contains(beta)
