"""
Driver that folds a frame stream through a noise gate into a clip sink.

- Frames are processed strictly in order, one process() call each
- Sink calls follow each decision before the next frame is processed
- finalize() runs exactly once, after the last frame
- A failing sink call aborts the open clip and propagates
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from noise_gate.gate.noise_gate import Decision, NoiseGate
from noise_gate.level_meter import Frame
from noise_gate.metrics.prometheus import GateMetrics
from noise_gate.sink.base import ClipSink

logger = logging.getLogger(__name__)


@dataclass
class GateRunStats:
    """Summary of one run_gate() call.

    Attributes:
        frames: Frames processed
        frames_forwarded: Frames written to clips
        frames_dropped: Frames outside any clip
        clip_lengths: Frame count of each clip, in order
    """

    frames: int = 0
    frames_forwarded: int = 0
    frames_dropped: int = 0
    clip_lengths: list[int] = field(default_factory=list)

    @property
    def clips(self) -> int:
        return len(self.clip_lengths)


def dispatch(decision: Decision, frame: Any, sink: ClipSink, frame_index: int) -> None:
    """Translate one decision into sink calls."""
    if decision is Decision.OPEN_AND_FORWARD:
        sink.open_clip(frame_index)
        sink.write_frame(frame)
    elif decision is Decision.FORWARD:
        sink.write_frame(frame)
    elif decision is Decision.CLOSE:
        sink.close_clip()


def iter_frames(samples: Any, channels: int | None = None) -> Iterator[NDArray[Any]]:
    """Yield frames from a sample array.

    Args:
        samples: (n_frames, channels) array, or interleaved 1-D samples
        channels: Channel count for interleaved input (default 1)
    """
    array = np.asarray(samples)
    if array.ndim == 1:
        array = array.reshape(-1, channels or 1)
    elif array.ndim != 2:
        raise ValueError(f"Expected 1-D or 2-D samples, got shape {array.shape}")
    elif channels is not None and array.shape[1] != channels:
        raise ValueError(f"Expected {channels} channels, got {array.shape[1]}")

    yield from array


def run_gate(
    gate: NoiseGate,
    frames: Iterable[Frame],
    sink: ClipSink,
    *,
    metrics: GateMetrics | None = None,
) -> GateRunStats:
    """Process a whole stream and finalize the gate.

    Args:
        gate: Configured gate, not yet finalized
        frames: Frames in stream order
        sink: Receives clip boundaries and forwarded frames
        metrics: Optional Prometheus metrics

    Returns:
        Run statistics

    Raises:
        FrameShapeError: If a frame has the wrong channel count
        Exception: Whatever the sink raised, after sink.abort()
    """
    stats = GateRunStats()
    clip_frames = 0

    try:
        for frame in frames:
            decision = gate.process(frame)
            stats.frames += 1

            if decision.forwards_frame:
                stats.frames_forwarded += 1
                clip_frames = 1 if decision.opens_clip else clip_frames + 1
            else:
                stats.frames_dropped += 1

            if metrics is not None:
                metrics.record_decision(decision)

            if decision.opens_clip:
                logger.info(f"Clip {stats.clips} opened at frame {stats.frames - 1}")

            dispatch(decision, frame, sink, stats.frames - 1)

            if decision.closes_clip:
                _clip_closed(stats, clip_frames, metrics)
                clip_frames = 0

        if gate.finalize().closes_clip:
            sink.close_clip()
            _clip_closed(stats, clip_frames, metrics)

    except Exception as e:
        if metrics is not None:
            metrics.record_run_error(type(e).__name__)
        logger.error(
            f"Gate run aborted at frame {stats.frames} "
            f"after {stats.clips} completed clips",
            exc_info=True,
        )
        try:
            sink.abort()
        except Exception as abort_error:
            logger.warning(f"Sink abort failed: {abort_error}")
        raise

    logger.info(
        f"Gate run complete: frames={stats.frames}, clips={stats.clips}, "
        f"forwarded={stats.frames_forwarded}, dropped={stats.frames_dropped}"
    )
    return stats


def _clip_closed(stats: GateRunStats, frame_count: int, metrics: GateMetrics | None) -> None:
    stats.clip_lengths.append(frame_count)
    if metrics is not None:
        metrics.record_clip(frame_count)
    logger.info(f"Clip {stats.clips - 1} closed: {frame_count} frames")
