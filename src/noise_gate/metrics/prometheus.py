"""
Prometheus metrics for gated streams.

- Frame counters by decision
- Clip counter and clip length histogram
- Gate open/closed gauge
- Aborted run counter
"""

from __future__ import annotations

import logging
from typing import ClassVar

from prometheus_client import Counter, Gauge, Histogram

from noise_gate.gate.noise_gate import Decision

logger = logging.getLogger(__name__)


class GateMetrics:
    """Prometheus metrics for one stream.

    All metrics use the 'noise_gate_' prefix and a stream_id label.

    Note: Metrics are class-level singletons to avoid Prometheus
    "Duplicated timeseries" errors when creating multiple instances.
    """

    NAMESPACE = "noise_gate"

    # Class-level metric singletons (initialized on first use)
    _frames: ClassVar[Counter | None] = None
    _clips: ClassVar[Counter | None] = None
    _clip_frames: ClassVar[Histogram | None] = None
    _gate_open: ClassVar[Gauge | None] = None
    _run_errors: ClassVar[Counter | None] = None
    _metrics_initialized: ClassVar[bool] = False

    def __init__(self, stream_id: str | None = None) -> None:
        """Initialize gate metrics.

        Args:
            stream_id: Stream identifier for labels (optional)
        """
        self.stream_id = stream_id or "unknown"
        self._ensure_metrics_initialized()

    @classmethod
    def _ensure_metrics_initialized(cls) -> None:
        """Initialize all Prometheus metrics (once per class)."""
        if cls._metrics_initialized:
            return

        prefix = cls.NAMESPACE

        cls._frames = Counter(
            f"{prefix}_frames_total",
            "Frames processed by the gate",
            ["stream_id", "decision"],  # values: drop|forward|open_and_forward|close
        )

        cls._clips = Counter(
            f"{prefix}_clips_total",
            "Clips completed",
            ["stream_id"],
        )

        cls._clip_frames = Histogram(
            f"{prefix}_clip_frames",
            "Clip length in frames",
            ["stream_id"],
            buckets=[160, 800, 1600, 8000, 16000, 48000, 96000, 480000, 960000, 2880000],
        )

        cls._gate_open = Gauge(
            f"{prefix}_gate_open",
            "Gate state (0=closed, 1=open)",
            ["stream_id"],
        )

        cls._run_errors = Counter(
            f"{prefix}_run_errors_total",
            "Gate runs aborted by an error",
            ["stream_id", "error_type"],
        )

        cls._metrics_initialized = True

    @property
    def frames(self) -> Counter:
        return self._frames

    @property
    def clips(self) -> Counter:
        return self._clips

    @property
    def clip_frames(self) -> Histogram:
        return self._clip_frames

    @property
    def gate_open(self) -> Gauge:
        return self._gate_open

    @property
    def run_errors(self) -> Counter:
        return self._run_errors

    def record_decision(self, decision: Decision) -> None:
        """Count one frame decision and update the gate state gauge."""
        self.frames.labels(stream_id=self.stream_id, decision=decision.value).inc()

        if decision.opens_clip:
            self.gate_open.labels(stream_id=self.stream_id).set(1)
        elif decision.closes_clip:
            self.gate_open.labels(stream_id=self.stream_id).set(0)

    def record_clip(self, frame_count: int) -> None:
        """Record a completed clip.

        Args:
            frame_count: Frames in the clip
        """
        self.clips.labels(stream_id=self.stream_id).inc()
        self.clip_frames.labels(stream_id=self.stream_id).observe(frame_count)
        self.gate_open.labels(stream_id=self.stream_id).set(0)

    def record_run_error(self, error_type: str) -> None:
        """Count a run aborted by an exception of the given type."""
        self.run_errors.labels(stream_id=self.stream_id, error_type=error_type).inc()
