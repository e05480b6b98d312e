"""
Unit tests for the level meter.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from noise_gate.errors import ConfigError, FrameShapeError
from noise_gate.level_meter import ChannelReduction, LevelMeter, max_abs_level, rms_level


class TestMaxAbsLevel:
    """Tests for the default reduction."""

    def test_mono(self):
        assert max_abs_level([-0.25]) == 0.25

    def test_loudest_channel_wins(self):
        assert max_abs_level([0.1, -0.7, 0.3]) == pytest.approx(0.7)

    def test_int16_minimum_does_not_overflow(self):
        """abs(-32768) must be 32768, not wrap around in int16."""
        frame = np.array([-32768, 5], dtype=np.int16)

        assert max_abs_level(frame) == 32768.0

    def test_silence_is_zero(self):
        assert max_abs_level([0, 0]) == 0.0


class TestRmsLevel:
    """Tests for the RMS reduction."""

    def test_equal_channels(self):
        assert rms_level([-3, 3]) == pytest.approx(3.0)

    def test_mixed_channels(self):
        assert rms_level([3, 4]) == pytest.approx(math.sqrt(12.5))

    def test_rms_never_exceeds_max_abs(self):
        frame = [0.9, -0.1, 0.2, 0.0]
        assert rms_level(frame) <= max_abs_level(frame)


class TestLevelMeter:
    """Tests for LevelMeter construction and dispatch."""

    def test_defaults(self):
        meter = LevelMeter()

        assert meter.reduction is ChannelReduction.MAX_ABS
        assert meter.max_level == 1.0
        assert meter([0.5, -0.6]) == pytest.approx(0.6)

    def test_reduction_from_string(self):
        meter = LevelMeter("rms", full_scale=32768)

        assert meter.reduction is ChannelReduction.RMS
        assert meter.measure([3, 4]) == pytest.approx(math.sqrt(12.5))

    def test_unknown_reduction_rejected(self):
        with pytest.raises(ConfigError) as exc_info:
            LevelMeter("peak")
        assert exc_info.value.field == "reduction"

    @pytest.mark.parametrize("full_scale", [0, -1.0, float("inf"), float("nan")])
    def test_invalid_full_scale_rejected(self, full_scale):
        with pytest.raises(ConfigError):
            LevelMeter(full_scale=full_scale)

    def test_deterministic(self):
        meter = LevelMeter()
        frame = np.array([0.2, -0.4])

        assert meter(frame) == meter(frame)
        assert frame.tolist() == [0.2, -0.4]

    @pytest.mark.parametrize("frame", [[], [[1, 2]], np.zeros((2, 2))])
    def test_malformed_frame_rejected(self, frame):
        with pytest.raises(FrameShapeError):
            LevelMeter().measure(frame)
