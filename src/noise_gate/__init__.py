# noise_gate: split audio streams into clips at sustained silence

from .errors import (
    ConfigError,
    FrameShapeError,
    GateFinalizedError,
    NoiseGateError,
    SinkStateError,
)
from .level_meter import ChannelReduction, LevelMeter, max_abs_level, rms_level
from .config import GateConfig, GateSettings, release_samples_for
from .gate import Decision, GateState, NoiseGate, next_state
from .models import Clip, CollectedClip
from .sink import ClipCollector, ClipSink, WavClipSink
from .metrics import GateMetrics
from .pipeline import GateRunStats, dispatch, iter_frames, run_gate

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "FrameShapeError",
    "GateFinalizedError",
    "NoiseGateError",
    "SinkStateError",
    "ChannelReduction",
    "LevelMeter",
    "max_abs_level",
    "rms_level",
    "GateConfig",
    "GateSettings",
    "release_samples_for",
    "Decision",
    "GateState",
    "NoiseGate",
    "next_state",
    "Clip",
    "CollectedClip",
    "ClipCollector",
    "ClipSink",
    "WavClipSink",
    "GateMetrics",
    "GateRunStats",
    "dispatch",
    "iter_frames",
    "run_gate",
]
