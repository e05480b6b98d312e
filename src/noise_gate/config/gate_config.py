"""
Immutable, validated gate configuration.

A GateConfig is checked once, at construction. Any problem raises
ConfigError before a single frame is processed.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

from noise_gate.errors import ConfigError
from noise_gate.level_meter import ChannelReduction, LevelMeter


def release_samples_for(release_time_s: float, sample_rate: float) -> int:
    """Convert a release time in seconds to a whole number of frames.

    Rounds half up: 0.5 frames becomes 1.

    Args:
        release_time_s: Release time in seconds (>= 0)
        sample_rate: Stream sample rate in Hz (> 0)

    Returns:
        Release length in frames

    Raises:
        ConfigError: If either argument is out of range or non-finite
    """
    if not math.isfinite(sample_rate) or sample_rate <= 0:
        raise ConfigError(
            f"must be a positive finite number, got {sample_rate}",
            field="sample_rate",
        )
    if not math.isfinite(release_time_s) or release_time_s < 0:
        raise ConfigError(
            f"must be a non-negative finite number, got {release_time_s}",
            field="release_time_s",
        )

    return int(math.floor(release_time_s * sample_rate + 0.5))


@dataclass(frozen=True)
class GateConfig:
    """Noise gate parameters.

    Attributes:
        threshold: Minimum metric treated as loud, in [0, full_scale]
        release_samples: Frames the gate stays open after the last loud frame
        reduction: How a multi-channel frame is reduced to one metric
        full_scale: Largest metric the level meter can produce
        channels: Expected channel count, or None to lock onto the first frame
    """

    threshold: float
    release_samples: int
    reduction: ChannelReduction = ChannelReduction.MAX_ABS
    full_scale: float = 1.0
    channels: int | None = None

    def __post_init__(self) -> None:
        # Builds (and validates) reduction and full_scale
        meter = self.meter()
        object.__setattr__(self, "reduction", meter.reduction)

        threshold = self.threshold
        if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
            raise ConfigError(f"must be a number, got {threshold!r}", field="threshold")
        if not math.isfinite(threshold) or not 0 <= threshold <= meter.max_level:
            raise ConfigError(
                f"must be within [0, {meter.max_level}], got {threshold}",
                field="threshold",
            )

        release = self.release_samples
        if isinstance(release, bool) or not isinstance(release, numbers.Integral):
            raise ConfigError(
                f"must be an integer, got {release!r}", field="release_samples"
            )
        if release < 0:
            raise ConfigError(f"must be >= 0, got {release}", field="release_samples")

        channels = self.channels
        if channels is not None and (
            isinstance(channels, bool)
            or not isinstance(channels, numbers.Integral)
            or channels < 1
        ):
            raise ConfigError(
                f"must be a positive integer, got {channels!r}", field="channels"
            )

        object.__setattr__(self, "release_samples", int(release))

    def meter(self) -> LevelMeter:
        """Level meter matching this configuration."""
        return LevelMeter(self.reduction, self.full_scale)

    @classmethod
    def from_release_time(
        cls,
        threshold: float,
        release_time_s: float,
        sample_rate: float,
        **kwargs,
    ) -> GateConfig:
        """Build a config from a release time in seconds.

        Args:
            threshold: Gate-opening metric value
            release_time_s: Hold-open time in seconds
            sample_rate: Stream sample rate in Hz
            **kwargs: Remaining GateConfig fields

        Raises:
            ConfigError: If any value is invalid
        """
        return cls(
            threshold=threshold,
            release_samples=release_samples_for(release_time_s, sample_rate),
            **kwargs,
        )
