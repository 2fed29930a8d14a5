"""Angle normalisation.

Raw orientation angles jump at the edges of their ranges, and holding the
phone in landscape swaps which axis reports tilt. The helpers below turn a raw
sample into an alpha/beta pair that changes continuously as the device moves.
"""
from __future__ import annotations

from .orientation import DeviceOrientationState, NormalizedSample, RawOrientationSample


def normalise_alpha_clockwise(alpha: float, gamma: float) -> float:
    """Rotated 90 degrees clockwise, alpha above the horizon reads 180 less than below it."""
    if gamma < 0:
        alpha = alpha + 180
        if alpha > 360:
            alpha = alpha - 360
    return alpha


def normalise_alpha_anticlockwise(alpha: float, gamma: float) -> float:
    """Rotated 90 degrees anti-clockwise, alpha above the horizon reads 180 more than below it."""
    if gamma > 0:
        alpha = alpha - 180
        if alpha < 0:
            alpha = alpha + 360
    return alpha


def normalise_beta(beta: float) -> float:
    """
    Convert beta from [-180, 180] to [0, 270] so it increases steadily.

    0    (face up)                    -> 0
    90   (horizontal)                 -> 90
    179  (almost face down)           -> 179
    -179 (almost face down inverted)  -> 181
    -90  (horizontal inverted)        -> 270
    -1   (almost face up inverted)    -> 0
    """
    if beta < 0:
        beta = 360 + beta
    # (270, 360) is never reached holding the phone; fold it onto face up
    if beta > 270:
        beta = 0
    return beta


def normalise_gamma_clockwise(gamma: float) -> float:
    """
    Convert gamma from [-90, 90] to [0, 180] for a phone rotated clockwise.

    -1  (face up)            -> 179
    -89 (just below horizon) -> 91
    89  (just above horizon) -> 89
    1   (almost face down)   -> 1
    """
    if gamma < 0:
        gamma = 180 - abs(gamma)
    return gamma


def normalise_gamma_anticlockwise(gamma: float) -> float:
    """
    Convert gamma from [-90, 90] to [0, 180] for a phone rotated anti-clockwise.

    1   (face up)            -> 179
    89  (just below horizon) -> 91
    -89 (just above horizon) -> 89
    -1  (almost face down)   -> 1
    """
    if gamma > 0:
        gamma = 180 - gamma
    elif gamma < 0:
        gamma = abs(gamma)
    return gamma


def normalise_alpha(sample: RawOrientationSample, orientation: DeviceOrientationState) -> float:
    if not orientation.is_landscape:
        return sample.alpha
    if orientation.is_rotated_clockwise:
        return normalise_alpha_clockwise(sample.alpha, sample.gamma)
    return normalise_alpha_anticlockwise(sample.alpha, sample.gamma)


def normalise_tilt(sample: RawOrientationSample, orientation: DeviceOrientationState) -> float:
    """Tilt used for vertical scrolling; comes from gamma when the phone lies sideways."""
    if not orientation.is_landscape:
        return normalise_beta(sample.beta)
    if orientation.is_rotated_clockwise:
        return normalise_gamma_clockwise(sample.gamma)
    return normalise_gamma_anticlockwise(sample.gamma)


def normalise_sample(
    sample: RawOrientationSample, orientation: DeviceOrientationState
) -> NormalizedSample:
    return NormalizedSample(
        alpha=normalise_alpha(sample, orientation),
        beta=normalise_tilt(sample, orientation),
    )
