"""Command-line WAV splitter.

Usage:
    noise-gate-split recording.wav -t 800
    noise-gate-split recording.wav -t 800 -r 0.5 -o clips/ -p take_
    python -m noise_gate recording.wav --threshold 800 --reduction rms

Defaults come from NOISE_GATE_* environment variables (see GateSettings).
"""

from __future__ import annotations

import argparse
import logging
import wave
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from noise_gate.audio.wav_io import read_wav
from noise_gate.config.settings import GateSettings
from noise_gate.errors import ConfigError
from noise_gate.gate.noise_gate import NoiseGate
from noise_gate.level_meter import ChannelReduction
from noise_gate.logging_config import configure_logging
from noise_gate.metrics.prometheus import GateMetrics
from noise_gate.pipeline import GateRunStats, iter_frames, run_gate
from noise_gate.sink.wav_sink import WavClipSink

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_CONFIG_ERROR = 2


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="noise-gate-split",
        description="Split a WAV recording into clips at sustained silence",
    )
    parser.add_argument("input_file", type=Path, help="The WAV file to read")
    parser.add_argument(
        "-t",
        "--threshold",
        type=float,
        help="Noise threshold in raw sample units (required unless NOISE_GATE_THRESHOLD is set)",
    )
    parser.add_argument(
        "-r",
        "--release-time",
        type=float,
        dest="release_time_s",
        help="Release time in seconds (default: 0.25)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        help="Where to write the split files (default: .)",
    )
    parser.add_argument(
        "-p",
        "--prefix",
        dest="clip_prefix",
        help="A prefix to insert before each clip number (default: clip_)",
    )
    parser.add_argument(
        "--reduction",
        choices=[r.value for r in ChannelReduction],
        help="Channel reduction for multi-channel input (default: max_abs)",
    )
    parser.add_argument(
        "--stream-id",
        default=None,
        help="Stream label for metrics (default: input file name)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> GateSettings:
    """Merge command line overrides onto environment settings."""
    overrides = {
        name: getattr(args, name)
        for name in ("threshold", "release_time_s", "output_dir", "clip_prefix", "reduction")
        if getattr(args, name) is not None
    }
    return GateSettings(**overrides)


def split_wav(
    input_file: Path,
    settings: GateSettings,
    stream_id: str | None = None,
) -> GateRunStats:
    """Split one WAV file into clip files.

    The gate is configured before any clip file is created.

    Raises:
        ConfigError: If the settings do not fit the file's format
        OSError, wave.Error: On read or write failure
    """
    samples, info = read_wav(input_file)

    config = settings.to_gate_config(
        sample_rate=info.sample_rate,
        full_scale=info.full_scale,
        channels=info.channels,
    )
    logger.info(
        f"Gate configured: threshold={config.threshold:g}/{config.full_scale}, "
        f"release={settings.release_time_s}s ({config.release_samples} frames), "
        f"reduction={config.reduction.value}"
    )

    gate = NoiseGate(config)
    sink = WavClipSink(settings.output_dir, info, prefix=settings.clip_prefix)
    metrics = GateMetrics(stream_id=stream_id or input_file.stem)

    return run_gate(gate, iter_frames(samples), sink, metrics=metrics)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entrypoint for the splitter."""
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        settings = load_settings(args)
        stats = split_wav(args.input_file, settings, stream_id=args.stream_id)
    except (ValidationError, ConfigError) as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR
    except (OSError, wave.Error, ValueError) as e:
        logger.error(f"Failed to split {args.input_file}: {e}")
        return EXIT_IO_ERROR

    logger.info(
        f"Wrote {stats.clips} clips to {settings.output_dir} "
        f"({stats.frames_forwarded}/{stats.frames} frames kept)"
    )
    return EXIT_OK
