"""Value types for one orientation event and the device's screen orientation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Platform rotation quadrant reported while held rotated 90 degrees clockwise.
CLOCKWISE_ROTATION = -90


@dataclass(frozen=True)
class ViewportMetrics:
    """One measurement taken from the page layout."""

    wrapper_height: int
    wrapper_width: int
    canvas_width: int
    client_height: int
    client_width: int
    rotation: Optional[int] = None


@dataclass(frozen=True)
class ScreenGeometry:
    wrapper_height: int = 0
    wrapper_width: int = 0
    canvas_width: int = 0
    screen_height: int = 0

    @classmethod
    def from_metrics(cls, metrics: ViewportMetrics) -> "ScreenGeometry":
        return cls(
            wrapper_height=metrics.wrapper_height,
            wrapper_width=metrics.wrapper_width,
            canvas_width=metrics.canvas_width,
            screen_height=metrics.client_height,
        )

    @property
    def vertical_range(self) -> int:
        return max(0, self.wrapper_height - self.screen_height)

    @property
    def horizontal_range(self) -> int:
        return max(0, self.canvas_width - self.wrapper_width)


@dataclass(frozen=True)
class DeviceOrientationState:
    """
    Screen orientation of the device.

    is_rotated_clockwise only carries meaning while is_landscape is True.
    """
    is_landscape: bool = False
    is_rotated_clockwise: bool = False

    @property
    def is_portrait(self) -> bool:
        return not self.is_landscape


@dataclass(frozen=True)
class RawOrientationSample:
    """Angles in degrees: alpha [0, 360), beta [-180, 180], gamma [-90, 90]."""

    alpha: float
    beta: float
    gamma: float


@dataclass(frozen=True)
class NormalizedSample:
    alpha: float
    beta: float


@dataclass(frozen=True)
class ScrollPosition:
    top: int = 0
    left: int = 0


def classify_orientation(
    client_width: float, client_height: float, rotation: Optional[int] = None
) -> DeviceOrientationState:
    return DeviceOrientationState(
        is_landscape=client_height < client_width,
        is_rotated_clockwise=rotation == CLOCKWISE_ROTATION,
    )
