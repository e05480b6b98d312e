"""
Configuration module for the noise gate.

Exports:
    GateConfig: Immutable, validated gate parameters
    GateSettings: Pydantic settings loaded from NOISE_GATE_* variables
    release_samples_for: Release time (seconds) to frame count conversion
"""

from noise_gate.config.gate_config import GateConfig, release_samples_for
from noise_gate.config.settings import GateSettings

__all__ = [
    "GateConfig",
    "GateSettings",
    "release_samples_for",
]
