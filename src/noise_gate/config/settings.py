"""
Gate settings from environment variables.

- Environment variables use the NOISE_GATE_ prefix
- Defaults suit 16-bit speech recordings split at quarter-second pauses
- Range checks that depend on the stream (full scale, sample rate) happen
  when the settings are turned into a GateConfig
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from noise_gate.config.gate_config import GateConfig
from noise_gate.errors import ConfigError
from noise_gate.level_meter import ChannelReduction


class GateSettings(BaseSettings):
    """Noise gate settings loaded from the environment.

    Attributes:
        threshold: Gate-opening level in raw sample units. Required, no default.
        release_time_s: Time the gate stays open after the last loud frame.
            Default 0.25 seconds keeps word endings inside the clip.
        reduction: Channel reduction used by the level meter.
        output_dir: Directory that receives clip files.
        clip_prefix: File name prefix for clips ("clip_" gives clip_0.wav).
    """

    threshold: float | None = Field(
        default=None,
        ge=0.0,
        description="Minimum level treated as sound, in sample units",
    )
    release_time_s: float = Field(
        default=0.25,
        description="Seconds the gate stays open after the level drops",
    )
    reduction: ChannelReduction = Field(
        default=ChannelReduction.MAX_ABS,
        description="Channel reduction strategy (max_abs or rms)",
    )
    output_dir: Path = Field(
        default=Path("."),
        description="Where clip files are written",
    )
    clip_prefix: str = Field(
        default="clip_",
        description="Prefix inserted before each clip number",
    )

    model_config = {
        "env_prefix": "NOISE_GATE_",
        "case_sensitive": False,
    }

    def to_gate_config(
        self,
        sample_rate: float,
        full_scale: float,
        channels: int | None = None,
    ) -> GateConfig:
        """Build a validated GateConfig for a concrete stream.

        Raises:
            ConfigError: If no threshold is set, or the settings do not fit
                the stream
        """
        if self.threshold is None:
            raise ConfigError(
                "no threshold set (use -t or NOISE_GATE_THRESHOLD)", field="threshold"
            )
        return GateConfig.from_release_time(
            threshold=self.threshold,
            release_time_s=self.release_time_s,
            sample_rate=sample_rate,
            reduction=self.reduction,
            full_scale=full_scale,
            channels=channels,
        )
