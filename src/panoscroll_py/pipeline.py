"""Orientation-to-scroll pipeline."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, Optional, Protocol

from .config import AppConfig
from .mapping import (
    clamp,
    clamp_tilt,
    horizontal_offset,
    in_gimbal_lock,
    round_half_up,
    vertical_offset,
)
from .normalize import normalise_sample
from .orientation import (
    DeviceOrientationState,
    RawOrientationSample,
    ScreenGeometry,
    ScrollPosition,
    ViewportMetrics,
    classify_orientation,
)
from .scheduling import DebouncedTask, Scheduler, ThreadingScheduler
from .smoothing import JumpDamper


class GeometrySource(Protocol):
    def measure(self) -> ViewportMetrics: ...


class ScrollSink(Protocol):
    def apply(self, top: int, left: int) -> None: ...


class Lifecycle(str, Enum):
    # browsers claim orientation support without a gyroscope, so wait for a real sample
    UNINITIALIZED = "UNINITIALIZED"
    ACTIVE = "ACTIVE"


@dataclass
class LastPosition:
    top: Optional[int] = None
    left: Optional[int] = None


@dataclass
class PipelineState:
    geometry: ScreenGeometry = field(default_factory=ScreenGeometry)
    orientation: DeviceOrientationState = field(default_factory=DeviceOrientationState)
    last: LastPosition = field(default_factory=LastPosition)
    lifecycle: Lifecycle = Lifecycle.UNINITIALIZED
    touch_scroll_suppressed: bool = False


@dataclass(frozen=True)
class DebugReadout:
    alpha: int
    beta: int
    gamma: int
    top: int
    left: int
    alpha_modified: int
    beta_modified: int

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class OrientationPipeline:
    """Turns orientation samples into scroll positions for one page."""

    def __init__(
        self,
        geometry_source: GeometrySource,
        config: AppConfig | None = None,
        scheduler: Scheduler | None = None,
        sink: ScrollSink | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.geometry_source = geometry_source
        self.sink = sink
        self.state = PipelineState()
        self.debug: DebugReadout | None = None

        self._top_damper = JumpDamper(
            self.config.top_smoothing.movement_limit, self.config.top_smoothing.dampening
        )
        self._left_damper = JumpDamper(
            self.config.left_smoothing.movement_limit, self.config.left_smoothing.dampening
        )

        scheduler = scheduler or ThreadingScheduler()
        timing = self.config.timing
        # layout needs time to settle after a rotation before it is measured
        self._settle_task = DebouncedTask(
            scheduler, timing.settle_delay_ms / 1000.0, self.recompute_geometry
        )
        self._resize_task = DebouncedTask(
            scheduler, timing.resize_debounce_ms / 1000.0, self._settle_task.trigger
        )

    # Entry points -------------------------------------------------------------
    def load(self) -> ScrollPosition:
        self.recompute_geometry()
        position = ScrollPosition(0, 0)
        self._emit(position)
        return position

    def recompute_geometry(self) -> PipelineState:
        metrics = self.geometry_source.measure()
        geometry = ScreenGeometry.from_metrics(metrics)
        orientation = classify_orientation(metrics.client_width, metrics.client_height, metrics.rotation)
        if geometry != self.state.geometry or orientation != self.state.orientation:
            print(
                f"[Pipeline] Geometry {geometry.wrapper_width}x{geometry.wrapper_height} "
                f"canvas={geometry.canvas_width} screen={geometry.screen_height} "
                f"landscape={orientation.is_landscape} clockwise={orientation.is_rotated_clockwise}"
            )
        self.state.geometry = geometry
        self.state.orientation = orientation
        return self.state

    def process_sample(self, sample: RawOrientationSample) -> ScrollPosition:
        if self.state.lifecycle is Lifecycle.UNINITIALIZED:
            self._activate()

        orientation = self.state.orientation
        normalized = normalise_sample(sample, orientation)

        top = self._vertical(normalized.beta, sample)
        left = self._horizontal(normalized.alpha, normalized.beta)
        position = ScrollPosition(top=top, left=left)

        self._emit(position)
        self.state.last.top = top
        self.state.last.left = left

        self.debug = DebugReadout(
            alpha=round_half_up(sample.alpha),
            beta=round_half_up(sample.beta),
            gamma=round_half_up(sample.gamma),
            top=top,
            left=left,
            alpha_modified=round_half_up(normalized.alpha),
            beta_modified=round_half_up(normalized.beta),
        )
        return position

    def notify_resize(self) -> None:
        # resize is only tracked once the device proved it reports orientation
        if self.state.lifecycle is Lifecycle.ACTIVE:
            self._resize_task.trigger()

    def notify_rotation(self) -> None:
        self._settle_task.trigger()

    def shutdown(self) -> None:
        self._resize_task.cancel()
        self._settle_task.cancel()

    @property
    def recompute_pending(self) -> bool:
        return self._resize_task.pending or self._settle_task.pending

    # Internals ----------------------------------------------------------------
    def _activate(self) -> None:
        self.state.lifecycle = Lifecycle.ACTIVE
        self.state.touch_scroll_suppressed = True
        print("[Pipeline] First orientation sample received; device orientation active")
        # styles may differ once orientation is active, so measure again
        self.recompute_geometry()

    def _vertical(self, beta: float, sample: RawOrientationSample) -> int:
        orientation = self.state.orientation
        clamped = clamp_tilt(beta, sample, orientation, self.config.tilt)
        top = vertical_offset(clamped, self.state.geometry, self.config.tilt)
        if orientation.is_portrait:
            top = self._top_damper.apply(top, self.state.last.top)
        return int(clamp(round_half_up(top), 0, self.state.geometry.vertical_range))

    def _horizontal(self, alpha: float, beta: float) -> int:
        orientation = self.state.orientation
        available = self.state.geometry.horizontal_range
        if in_gimbal_lock(beta, orientation, self.config.gimbal_guard):
            last_left = self.state.last.left or 0
            return int(clamp(last_left, 0, available))
        left = horizontal_offset(alpha, self.state.geometry)
        if orientation.is_portrait:
            left = self._left_damper.apply(left, self.state.last.left)
        return int(clamp(round_half_up(left), 0, available))

    def _emit(self, position: ScrollPosition) -> None:
        if self.sink is not None:
            self.sink.apply(position.top, position.left)
