"""Configuration helpers for Panoscroll."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict
import json

from platformdirs import PlatformDirs

CONFIG_FILENAME = "panoscroll.config.json"


@dataclass
class TiltWindow:
    """Usable tilt arc (degrees of normalized beta) mapped onto the page."""

    min_beta: float = 50.0
    max_beta: float = 150.0

    def __post_init__(self) -> None:
        if self.max_beta <= self.min_beta:
            raise ValueError(
                f"max_beta ({self.max_beta}) must be greater than min_beta ({self.min_beta})"
            )


@dataclass
class GimbalGuard:
    """Open interval of normalized beta where alpha readings are ignored in portrait."""

    lower: float = 85.0
    upper: float = 95.0

    def __post_init__(self) -> None:
        if self.upper < self.lower:
            raise ValueError("GimbalGuard upper bound must not be below lower bound")

    def contains(self, beta: float) -> bool:
        return self.lower < beta < self.upper


@dataclass
class SmoothingSettings:
    movement_limit: float = 5.0
    dampening: float = 0.9

    def __post_init__(self) -> None:
        if self.movement_limit < 0:
            raise ValueError("movement_limit must be non-negative")
        if not 0.0 <= self.dampening <= 1.0:
            raise ValueError("dampening must be within [0, 1]")


@dataclass
class TimingSettings:
    resize_debounce_ms: int = 10
    settle_delay_ms: int = 500


@dataclass
class ServerSettings:
    host: str | None = None
    port: int = 0
    use_ssl: bool = True
    client_timeout_s: float = 5.0


@dataclass
class AppConfig:
    tilt: TiltWindow = field(default_factory=TiltWindow)
    gimbal_guard: GimbalGuard = field(default_factory=GimbalGuard)
    top_smoothing: SmoothingSettings = field(
        default_factory=lambda: SmoothingSettings(movement_limit=5.0, dampening=0.9)
    )
    left_smoothing: SmoothingSettings = field(
        default_factory=lambda: SmoothingSettings(movement_limit=10.0, dampening=0.8)
    )
    timing: TimingSettings = field(default_factory=TimingSettings)
    server: ServerSettings = field(default_factory=ServerSettings)


def _config_dir() -> Path:
    dirs = PlatformDirs(appname="Panoscroll", appauthor="Panoscroll", roaming=True)
    path = Path(dirs.user_data_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_path() -> Path:
    return _config_dir() / CONFIG_FILENAME


def data_path(filename: str) -> Path:
    """Location for generated files (certificates, QR codes) next to the config."""
    return _config_dir() / filename


def default_config() -> AppConfig:
    return AppConfig()


def load_config() -> AppConfig:
    path = config_path()
    if not path.exists():
        cfg = default_config()
        save_config(cfg)
        return cfg

    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    return AppConfig(
        tilt=TiltWindow(**payload.get("tilt", {})),
        gimbal_guard=GimbalGuard(**payload.get("gimbal_guard", {})),
        top_smoothing=SmoothingSettings(
            **{"movement_limit": 5.0, "dampening": 0.9, **payload.get("top_smoothing", {})}
        ),
        left_smoothing=SmoothingSettings(
            **{"movement_limit": 10.0, "dampening": 0.8, **payload.get("left_smoothing", {})}
        ),
        timing=TimingSettings(**payload.get("timing", {})),
        server=ServerSettings(**payload.get("server", {})),
    )


def save_config(config: AppConfig) -> None:
    payload: Dict[str, object] = asdict(config)
    path = config_path()
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)
