"""
Noise gate state machine.

Splits a frame stream into clips at sustained silence:
- A frame whose level meets the threshold opens the gate (or keeps it open)
  and refills the release countdown
- While open, each quiet frame spends one unit of the countdown and is still
  forwarded, so trailing decay stays inside the clip
- A quiet frame arriving with the countdown at zero closes the gate; that
  frame is not forwarded
- finalize() closes a clip still open at end of stream

The machine is strictly causal. The only memory is one integer counter.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from noise_gate.config.gate_config import GateConfig
from noise_gate.errors import FrameShapeError, GateFinalizedError
from noise_gate.level_meter import ChannelReduction, Frame

if TYPE_CHECKING:
    from noise_gate.sink.base import ClipSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateState:
    """Gate state: Closed, or Open with a release countdown.

    Attributes:
        is_open: Whether frames are currently forwarded
        remaining_release: Quiet frames left before the gate closes (0 when closed)
    """

    is_open: bool
    remaining_release: int = 0

    CLOSED: ClassVar[GateState]

    def __post_init__(self) -> None:
        if self.remaining_release < 0:
            raise ValueError(f"remaining_release must be >= 0, got {self.remaining_release}")
        if not self.is_open and self.remaining_release:
            raise ValueError("Closed state carries no release countdown")

    @classmethod
    def open(cls, remaining_release: int) -> GateState:
        return cls(is_open=True, remaining_release=remaining_release)

    def __repr__(self) -> str:
        if self.is_open:
            return f"Open({self.remaining_release})"
        return "Closed"


GateState.CLOSED = GateState(is_open=False)


class Decision(Enum):
    """What the caller should do with one frame."""

    DROP = "drop"  # Silence, no sink call
    FORWARD = "forward"  # Append frame to the open clip
    OPEN_AND_FORWARD = "open_and_forward"  # Start a clip with this frame
    CLOSE = "close"  # Previous frame ended the clip; this one is dropped

    @property
    def opens_clip(self) -> bool:
        return self is Decision.OPEN_AND_FORWARD

    @property
    def forwards_frame(self) -> bool:
        return self in (Decision.FORWARD, Decision.OPEN_AND_FORWARD)

    @property
    def closes_clip(self) -> bool:
        return self is Decision.CLOSE


def next_state(
    state: GateState,
    metric: float,
    threshold: float,
    release_samples: int,
) -> tuple[GateState, Decision]:
    """Pure transition function of the gate.

    Args:
        state: State before the frame
        metric: Level of the frame
        threshold: Gate-opening level
        release_samples: Countdown refill value

    Returns:
        (state after the frame, decision for the frame)
    """
    if metric >= threshold:
        decision = Decision.FORWARD if state.is_open else Decision.OPEN_AND_FORWARD
        return GateState.open(release_samples), decision

    if not state.is_open:
        return state, Decision.DROP

    if state.remaining_release > 0:
        return GateState.open(state.remaining_release - 1), Decision.FORWARD

    return GateState.CLOSED, Decision.CLOSE


class NoiseGate:
    """Noise gate for one stream.

    Create with NoiseGate.configure(...) or NoiseGate(config). Feed frames in
    stream order through process(), then call finalize() exactly once.

    Attributes:
        config: Validated gate configuration
    """

    def __init__(self, config: GateConfig) -> None:
        self.config = config
        self._meter = config.meter()
        self._state = GateState.CLOSED
        self._finalized = False
        self._channels = config.channels

        # Metrics tracking
        self._frames_processed = 0
        self._frames_forwarded = 0
        self._frames_dropped = 0
        self._clips_opened = 0
        self._clips_closed = 0

    @classmethod
    def configure(
        cls,
        threshold: float,
        release_samples: int,
        *,
        reduction: ChannelReduction | str = ChannelReduction.MAX_ABS,
        full_scale: float = 1.0,
        channels: int | None = None,
    ) -> NoiseGate:
        """Validate parameters and build a gate.

        Raises:
            ConfigError: If threshold is outside [0, full_scale], release_samples
                is negative, or any other parameter is invalid
        """
        config = GateConfig(
            threshold=threshold,
            release_samples=release_samples,
            reduction=reduction,
            full_scale=full_scale,
            channels=channels,
        )
        return cls(config)

    def process(self, frame: Frame) -> Decision:
        """Classify one frame and advance the state machine.

        Raises:
            FrameShapeError: If the frame's channel count does not match the stream
            GateFinalizedError: If finalize() was already called
        """
        if self._finalized:
            raise GateFinalizedError("process() called after finalize()")

        metric = self._meter.measure(frame)
        self._check_channels(len(frame))

        previous = self._state
        self._state, decision = next_state(
            previous,
            metric,
            self.config.threshold,
            self.config.release_samples,
        )
        self._frames_processed += 1

        if decision.forwards_frame:
            self._frames_forwarded += 1
        else:
            self._frames_dropped += 1

        if decision.opens_clip:
            self._clips_opened += 1
            logger.debug(
                f"Gate opened at frame {self._frames_processed - 1}: "
                f"level={metric:g} >= threshold={self.config.threshold:g}"
            )
        elif decision.closes_clip:
            self._clips_closed += 1
            logger.debug(f"Gate closed at frame {self._frames_processed - 1}")

        return decision

    def _check_channels(self, channels: int) -> None:
        if self._channels is None:
            self._channels = channels
        elif channels != self._channels:
            raise FrameShapeError(expected=self._channels, got=channels)

    def finalize(self) -> Decision:
        """Close a clip left open at end of stream.

        Returns:
            Decision.CLOSE if a clip was open, otherwise Decision.DROP
        """
        if self._finalized:
            return Decision.DROP
        self._finalized = True

        if not self._state.is_open:
            return Decision.DROP

        logger.debug(
            f"Gate closed at end of stream after {self._frames_processed} frames "
            f"(remaining release {self._state.remaining_release})"
        )
        self._state = GateState.CLOSED
        self._clips_closed += 1
        return Decision.CLOSE

    def process_frames(self, frames: Iterable[Frame], sink: ClipSink) -> list[Decision]:
        """Push a batch of frames, passing loud spans through to a sink.

        Does not finalize, so consecutive batches continue the same stream.
        """
        from noise_gate.pipeline import dispatch

        decisions = []
        for frame in frames:
            decision = self.process(frame)
            dispatch(decision, frame, sink, self._frames_processed - 1)
            decisions.append(decision)
        return decisions

    def reset(self) -> None:
        """Start a new stream: closed, not finalized, channel count unlocked.

        Counters are kept.
        """
        self._state = GateState.CLOSED
        self._finalized = False
        self._channels = self.config.channels

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def is_open(self) -> bool:
        """Is the gate passing frames through to the sink?"""
        return self._state.is_open

    @property
    def is_closed(self) -> bool:
        """Is the gate ignoring silence?"""
        return not self._state.is_open

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def channels(self) -> int | None:
        """Channel count of the stream, once known."""
        return self._channels

    # Metrics accessors
    @property
    def frames_processed(self) -> int:
        """Frames passed to process()."""
        return self._frames_processed

    @property
    def frames_forwarded(self) -> int:
        """Frames that belonged to a clip."""
        return self._frames_forwarded

    @property
    def frames_dropped(self) -> int:
        """Frames outside any clip, including closing frames."""
        return self._frames_dropped

    @property
    def clips_opened(self) -> int:
        return self._clips_opened

    @property
    def clips_closed(self) -> int:
        return self._clips_closed
