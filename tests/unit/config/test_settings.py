"""
Unit tests for GateSettings.

These tests verify gate settings loading from environment variables.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from noise_gate.errors import ConfigError
from noise_gate.level_meter import ChannelReduction


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove NOISE_GATE_* variables leaking from the outer environment."""
    for name in (
        "NOISE_GATE_THRESHOLD",
        "NOISE_GATE_RELEASE_TIME_S",
        "NOISE_GATE_REDUCTION",
        "NOISE_GATE_OUTPUT_DIR",
        "NOISE_GATE_CLIP_PREFIX",
    ):
        monkeypatch.delenv(name, raising=False)


class TestGateSettingsDefaults:
    """Tests for default configuration values."""

    def test_default_values(self):
        from noise_gate.config.settings import GateSettings

        settings = GateSettings()

        assert settings.threshold is None
        assert settings.release_time_s == 0.25
        assert settings.reduction is ChannelReduction.MAX_ABS
        assert settings.output_dir == Path(".")
        assert settings.clip_prefix == "clip_"


class TestGateSettingsEnvironmentVariables:
    """Tests for environment variable loading."""

    def test_threshold_from_env(self, monkeypatch):
        monkeypatch.setenv("NOISE_GATE_THRESHOLD", "1200")

        from noise_gate.config.settings import GateSettings

        assert GateSettings().threshold == 1200.0

    def test_release_time_from_env(self, monkeypatch):
        monkeypatch.setenv("NOISE_GATE_RELEASE_TIME_S", "0.5")

        from noise_gate.config.settings import GateSettings

        assert GateSettings().release_time_s == 0.5

    def test_reduction_from_env(self, monkeypatch):
        monkeypatch.setenv("NOISE_GATE_REDUCTION", "rms")

        from noise_gate.config.settings import GateSettings

        assert GateSettings().reduction is ChannelReduction.RMS

    def test_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("noise_gate_clip_prefix", "take_")

        from noise_gate.config.settings import GateSettings

        assert GateSettings().clip_prefix == "take_"

    def test_init_overrides_env(self, monkeypatch):
        monkeypatch.setenv("NOISE_GATE_THRESHOLD", "1200")

        from noise_gate.config.settings import GateSettings

        assert GateSettings(threshold=300).threshold == 300.0


class TestGateSettingsValidation:
    """Tests for validation constraints."""

    def test_negative_threshold_rejected(self):
        from noise_gate.config.settings import GateSettings

        with pytest.raises(ValidationError):
            GateSettings(threshold=-1)

    def test_unknown_reduction_rejected(self, monkeypatch):
        monkeypatch.setenv("NOISE_GATE_REDUCTION", "peak")

        from noise_gate.config.settings import GateSettings

        with pytest.raises(ValidationError):
            GateSettings()


class TestToGateConfig:
    """Tests for turning settings into a stream-specific GateConfig."""

    def test_builds_config(self):
        from noise_gate.config.settings import GateSettings

        settings = GateSettings(threshold=800, release_time_s=0.25, reduction="rms")
        config = settings.to_gate_config(sample_rate=44100, full_scale=32768, channels=2)

        assert config.threshold == 800
        assert config.release_samples == 11025
        assert config.reduction is ChannelReduction.RMS
        assert config.full_scale == 32768
        assert config.channels == 2

    def test_threshold_above_full_scale(self):
        from noise_gate.config.settings import GateSettings

        settings = GateSettings(threshold=200)

        with pytest.raises(ConfigError):
            settings.to_gate_config(sample_rate=8000, full_scale=128)

    def test_missing_threshold(self):
        from noise_gate.config.settings import GateSettings

        with pytest.raises(ConfigError) as exc_info:
            GateSettings().to_gate_config(sample_rate=8000, full_scale=128)

        assert exc_info.value.field == "threshold"

    def test_negative_release_time(self):
        from noise_gate.config.settings import GateSettings

        settings = GateSettings(threshold=10, release_time_s=-0.1)

        with pytest.raises(ConfigError):
            settings.to_gate_config(sample_rate=8000, full_scale=128)
