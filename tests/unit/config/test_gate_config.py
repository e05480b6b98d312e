"""
Unit tests for GateConfig and release time conversion.

- Threshold must lie within the level meter's output range
- release_samples must be a non-negative integer
- Release times convert with round-half-up
"""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from noise_gate.config.gate_config import GateConfig, release_samples_for
from noise_gate.errors import ConfigError
from noise_gate.level_meter import ChannelReduction


class TestReleaseSamplesFor:
    """Tests for seconds-to-frames conversion."""

    @pytest.mark.parametrize(
        ("release_time_s", "sample_rate", "expected"),
        [
            (0.25, 44100, 11025),
            (0.0, 48000, 0),
            (1.0, 8000, 8000),
            (0.5, 3, 2),  # 1.5 rounds up
            (0.5, 5, 3),  # 2.5 rounds up
            (0.1, 4, 0),  # 0.4 rounds down
        ],
    )
    def test_round_half_up(self, release_time_s, sample_rate, expected):
        assert release_samples_for(release_time_s, sample_rate) == expected

    @pytest.mark.parametrize("release_time_s", [-0.001, float("nan"), float("inf")])
    def test_invalid_release_time(self, release_time_s):
        with pytest.raises(ConfigError) as exc_info:
            release_samples_for(release_time_s, 44100)
        assert exc_info.value.field == "release_time_s"

    @pytest.mark.parametrize("sample_rate", [0, -44100, float("nan")])
    def test_invalid_sample_rate(self, sample_rate):
        with pytest.raises(ConfigError) as exc_info:
            release_samples_for(0.25, sample_rate)
        assert exc_info.value.field == "sample_rate"


class TestGateConfigValidation:
    """Tests for GateConfig construction."""

    def test_defaults(self):
        config = GateConfig(threshold=0.05, release_samples=100)

        assert config.reduction is ChannelReduction.MAX_ABS
        assert config.full_scale == 1.0
        assert config.channels is None

    def test_frozen(self):
        config = GateConfig(threshold=0.05, release_samples=100)

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.threshold = 0.5

    @pytest.mark.parametrize("threshold", [0, 0.0, 128, 255])
    def test_threshold_bounds_inclusive(self, threshold):
        config = GateConfig(threshold=threshold, release_samples=0, full_scale=255)
        assert config.threshold == threshold

    @pytest.mark.parametrize(
        "threshold", [-1, 255.5, float("nan"), float("inf"), "50", None, True]
    )
    def test_threshold_out_of_range(self, threshold):
        with pytest.raises(ConfigError) as exc_info:
            GateConfig(threshold=threshold, release_samples=0, full_scale=255)
        assert exc_info.value.field == "threshold"

    @pytest.mark.parametrize("release", [-1, 1.5, "3", True])
    def test_invalid_release_samples(self, release):
        with pytest.raises(ConfigError) as exc_info:
            GateConfig(threshold=0.5, release_samples=release)
        assert exc_info.value.field == "release_samples"

    def test_numpy_integers_accepted(self):
        config = GateConfig(threshold=np.int16(500), release_samples=np.int64(4), full_scale=32768)

        assert config.release_samples == 4
        assert type(config.release_samples) is int

    @pytest.mark.parametrize("channels", [0, -2, 1.0])
    def test_invalid_channels(self, channels):
        with pytest.raises(ConfigError):
            GateConfig(threshold=0.5, release_samples=1, channels=channels)

    def test_reduction_normalized(self):
        config = GateConfig(threshold=0.5, release_samples=1, reduction="rms")

        assert config.reduction is ChannelReduction.RMS
        assert config.meter().reduction is ChannelReduction.RMS

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            GateConfig(threshold=2.0, release_samples=1)


class TestFromReleaseTime:
    """Tests for GateConfig.from_release_time()."""

    def test_converts_release_time(self):
        config = GateConfig.from_release_time(
            threshold=1000,
            release_time_s=0.25,
            sample_rate=16000,
            full_scale=32768,
            channels=1,
        )

        assert config.release_samples == 4000
        assert config.channels == 1

    def test_negative_release_time_fails_before_config(self):
        with pytest.raises(ConfigError):
            GateConfig.from_release_time(threshold=0.1, release_time_s=-1, sample_rate=8000)
