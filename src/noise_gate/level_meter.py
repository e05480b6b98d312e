"""
Level meter: reduces one audio frame to a single loudness metric.

The metric lives in the same scale as the samples themselves (raw PCM units
for integer audio, [0, 1] for normalized float audio) so that a gate
threshold can be expressed directly in sample units.

Reductions:
- max_abs: loudest absolute sample across channels (default; any loud channel
  opens the gate)
- rms: root mean square across channels
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum
from typing import Union

import numpy as np
from numpy.typing import NDArray

from noise_gate.errors import ConfigError, FrameShapeError

Frame = Union[Sequence[float], NDArray[np.generic]]


class ChannelReduction(str, Enum):
    """Strategy for collapsing a multi-channel frame into one metric."""

    MAX_ABS = "max_abs"
    RMS = "rms"


def _as_channels(frame: Frame) -> NDArray[np.float64]:
    # Widen before abs so the most negative integer sample cannot overflow
    samples = np.asarray(frame, dtype=np.float64)
    if samples.ndim != 1 or samples.size == 0:
        raise FrameShapeError(expected=None, got=samples.shape)
    return samples


def max_abs_level(frame: Frame) -> float:
    """Maximum absolute sample value across all channels."""
    return float(np.max(np.abs(_as_channels(frame))))


def rms_level(frame: Frame) -> float:
    """Root mean square of the samples across all channels."""
    samples = _as_channels(frame)
    return float(np.sqrt(np.mean(samples * samples)))


_REDUCERS = {
    ChannelReduction.MAX_ABS: max_abs_level,
    ChannelReduction.RMS: rms_level,
}


class LevelMeter:
    """Deterministic, side-effect-free frame meter.

    Attributes:
        reduction: Channel reduction strategy
        max_level: Upper bound of the meter output (the stream's full scale)
    """

    def __init__(
        self,
        reduction: ChannelReduction | str = ChannelReduction.MAX_ABS,
        full_scale: float = 1.0,
    ) -> None:
        try:
            self.reduction = ChannelReduction(reduction)
        except ValueError as e:
            raise ConfigError(
                f"unknown channel reduction {reduction!r}", field="reduction"
            ) from e

        if not math.isfinite(full_scale) or full_scale <= 0:
            raise ConfigError(
                f"must be a positive finite number, got {full_scale}",
                field="full_scale",
            )

        self.max_level = float(full_scale)
        self._reduce = _REDUCERS[self.reduction]

    def measure(self, frame: Frame) -> float:
        """Return the loudness metric for one frame.

        Raises:
            FrameShapeError: If the frame is empty or not one-dimensional
        """
        return self._reduce(frame)

    def __call__(self, frame: Frame) -> float:
        return self.measure(frame)

    def __repr__(self) -> str:
        return f"LevelMeter(reduction={self.reduction.value!r}, full_scale={self.max_level})"
