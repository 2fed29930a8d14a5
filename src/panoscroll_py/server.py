"""
Flask server that receives orientation samples from the phone and serves the web client
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict
import threading
import time

from flask import Flask, jsonify, request, send_from_directory

from .config import AppConfig
from .network import get_ip_address
from .orientation import RawOrientationSample, ViewportMetrics
from .pipeline import Lifecycle, OrientationPipeline
from .scheduling import Scheduler, ThreadingScheduler

CLIENT_DIR = Path(__file__).resolve().parent / "client"

METRIC_FIELDS = ("wrapper_height", "wrapper_width", "canvas_width", "client_height", "client_width")
SAMPLE_FIELDS = ("alpha", "beta", "gamma")
LAYOUT_REASONS = ("load", "activation", "resize", "rotation")
# measured right away; resize and rotation only schedule a later measurement
MEASURED_REASONS = ("load", "activation")


class RequestError(ValueError):
    """Malformed request body."""


class ReportedGeometry:
    """Geometry source backed by the latest layout the client reported."""

    def __init__(self) -> None:
        self._metrics = ViewportMetrics(0, 0, 0, 0, 0, None)
        self._lock = threading.Lock()

    def update(self, metrics: ViewportMetrics) -> None:
        with self._lock:
            self._metrics = metrics

    def measure(self) -> ViewportMetrics:
        with self._lock:
            return self._metrics


class PositionRecorder:
    """Scroll sink holding the last position sent to the client."""

    def __init__(self) -> None:
        self.current_position: Dict[str, int] = {"top": 0, "left": 0}

    def apply(self, top: int, left: int) -> None:
        self.current_position = {"top": top, "left": left}


def _number(payload: dict, name: str) -> float:
    value = payload.get(name)
    # bool is an int subclass but never a valid angle or extent
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RequestError(f"'{name}' must be a number")
    return float(value)


def parse_metrics(payload: dict) -> ViewportMetrics:
    values = {name: int(round(_number(payload, name))) for name in METRIC_FIELDS}
    rotation = payload.get("rotation")
    if rotation is not None:
        rotation = int(_number(payload, "rotation"))
    return ViewportMetrics(rotation=rotation, **values)


def parse_sample(payload: dict) -> RawOrientationSample:
    return RawOrientationSample(**{name: _number(payload, name) for name in SAMPLE_FIELDS})


class PanoscrollServer:
    """Flask server for Panoscroll"""

    def __init__(self, config: AppConfig | None = None, scheduler: Scheduler | None = None) -> None:
        self.config = config or AppConfig()
        self.app = Flask(__name__, static_folder=str(CLIENT_DIR), static_url_path="")
        # Flask handles requests on several threads and timers fire on their own
        self.lock = threading.RLock()
        self.geometry = ReportedGeometry()
        self.recorder = PositionRecorder()
        self.scheduler = scheduler or ThreadingScheduler(lock=self.lock)
        self.pipeline = self._new_pipeline()
        self.last_sample_time = 0.0
        self._setup_routes()

    def _new_pipeline(self) -> OrientationPipeline:
        return OrientationPipeline(
            self.geometry,
            config=self.config,
            scheduler=self.scheduler,
            sink=self.recorder,
        )

    def _setup_routes(self) -> None:
        """Setup Flask routes"""

        @self.app.errorhandler(RequestError)
        def bad_request(exc):
            return jsonify({"status": "error", "message": str(exc)}), 400

        @self.app.route("/ip")
        def get_ip():
            return jsonify({"ip": get_ip_address()})

        @self.app.route("/layout", methods=["POST"])
        def layout():
            payload = self._json_body()
            reason = payload.get("reason", "load")
            if reason not in LAYOUT_REASONS:
                raise RequestError(f"Unknown layout reason '{reason}'")
            if reason in MEASURED_REASONS:
                self.geometry.update(parse_metrics(payload))
            with self.lock:
                self.handle_layout(reason)
                return jsonify(self._layout_status())

        @self.app.route("/orientation", methods=["POST"])
        def orientation():
            payload = self._json_body()
            sample = parse_sample(payload)
            # samples carry the current layout so a deferred recompute reads settled values
            if any(name in payload for name in METRIC_FIELDS):
                self.geometry.update(parse_metrics(payload))
            self.last_sample_time = time.time()
            with self.lock:
                position = self.pipeline.process_sample(sample)
                state = self.pipeline.state
                return jsonify(
                    {
                        "top": position.top,
                        "left": position.left,
                        "active": state.lifecycle is Lifecycle.ACTIVE,
                        "suppress_touch": state.touch_scroll_suppressed,
                    }
                )

        @self.app.route("/position")
        def position():
            return jsonify(self.get_current_position())

        @self.app.route("/debug")
        def debug():
            with self.lock:
                readout = self.pipeline.debug
            return jsonify(readout.as_dict() if readout else {})

        @self.app.route("/")
        @self.app.route("/<path:path>")
        def serve_static(path="index.html"):
            return send_from_directory(self.app.static_folder, path)

    def _json_body(self) -> dict:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise RequestError("Expected a JSON object")
        return payload

    def handle_layout(self, reason: str) -> None:
        if reason == "load":
            # a page load starts over from an uninitialised pipeline
            self.pipeline.shutdown()
            self.pipeline = self._new_pipeline()
            self.pipeline.load()
        elif reason == "activation":
            self.pipeline.recompute_geometry()
        elif reason == "resize":
            self.pipeline.notify_resize()
        else:
            self.pipeline.notify_rotation()

    def _layout_status(self) -> Dict[str, object]:
        state = self.pipeline.state
        return {
            "landscape": state.orientation.is_landscape,
            "rotated_clockwise": state.orientation.is_rotated_clockwise,
            "wrapper_height": state.geometry.wrapper_height,
            "wrapper_width": state.geometry.wrapper_width,
            "canvas_width": state.geometry.canvas_width,
            "screen_height": state.geometry.screen_height,
            "recompute_pending": self.pipeline.recompute_pending,
        }

    def get_current_position(self) -> Dict[str, int]:
        """Get the last scroll position sent to the phone"""
        return dict(self.recorder.current_position)

    def is_client_connected(self) -> bool:
        """Check if a client has streamed recently"""
        return time.time() - self.last_sample_time < self.config.server.client_timeout_s

    def shutdown(self) -> None:
        with self.lock:
            self.pipeline.shutdown()

    def run(self, host: str, port: int, ssl_context=None, **kwargs) -> None:
        """Run the Flask server"""
        self.app.run(host=host, port=port, ssl_context=ssl_context, threaded=True, **kwargs)
