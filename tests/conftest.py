"""
Pytest fixtures for noise gate tests.

Includes fixtures for:
- Gate construction
- Frame sequences built from per-frame levels
- In-memory clip collection
- Synthetic WAV recordings
"""

from __future__ import annotations

import wave
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest

from noise_gate.gate.noise_gate import NoiseGate
from noise_gate.sink.collector import ClipCollector


# =============================================================================
# Gates and frames
# =============================================================================


@pytest.fixture
def make_gate() -> Callable[..., NoiseGate]:
    """Factory for gates on a 0-255 metric scale with threshold 50.

    Usage:
        def test_something(make_gate):
            gate = make_gate(release_samples=3)
    """

    def _make(release_samples: int = 3, threshold: float = 50, **kwargs) -> NoiseGate:
        kwargs.setdefault("full_scale", 255)
        return NoiseGate.configure(threshold, release_samples, **kwargs)

    return _make


@pytest.fixture
def frames_from_levels() -> Callable[..., list[list[int]]]:
    """Build mono frames whose max-abs level equals each given value.

    Odd frames are negated so both polarities are exercised.
    """

    def _build(levels: list[int], channels: int = 1) -> list[list[int]]:
        frames = []
        for i, level in enumerate(levels):
            sample = -level if i % 2 else level
            frames.append([sample] + [0] * (channels - 1))
        return frames

    return _build


@pytest.fixture
def collector() -> ClipCollector:
    """Empty in-memory clip sink."""
    return ClipCollector()


# =============================================================================
# WAV recordings
# =============================================================================


@pytest.fixture
def write_test_wav(tmp_path: Path) -> Callable[..., Path]:
    """Write a 16-bit PCM WAV built from (level, n_frames) runs.

    Usage:
        path = write_test_wav([(0, 100), (5000, 400), (0, 100)])
    """

    def _write(
        runs: list[tuple[int, int]],
        sample_rate: int = 1000,
        channels: int = 1,
        name: str = "input.wav",
    ) -> Path:
        blocks = []
        for level, count in runs:
            # Alternate polarity so the block is a square wave at the given level
            signs = np.where(np.arange(count) % 2 == 0, 1, -1)
            block = np.repeat((signs * level)[:, None], channels, axis=1)
            blocks.append(block)
        samples = np.concatenate(blocks).astype("<i2")

        path = tmp_path / name
        with wave.open(str(path), "wb") as wav:
            wav.setnchannels(channels)
            wav.setsampwidth(2)
            wav.setframerate(sample_rate)
            wav.writeframes(samples.tobytes())
        return path

    return _write
