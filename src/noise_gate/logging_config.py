"""
Logging configuration for the noise gate tools.

Usage:
  LOG_LEVEL sets the level (default INFO).
  Set LOG_FOCUS=1 to show only the gate, driver and sink modules at LOG_LEVEL;
  everything else is raised to WARNING.

Example:
  LOG_LEVEL=DEBUG LOG_FOCUS=1 noise-gate-split recording.wav -t 800
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s.%(msecs)03d | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"

FOCUSED_MODULES = [
    "noise_gate.gate.noise_gate",
    "noise_gate.pipeline",
    "noise_gate.sink.wav_sink",
]


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from arguments and environment.

    Args:
        level: Log level name; falls back to LOG_LEVEL, then INFO
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_focus = os.getenv("LOG_FOCUS", "0") == "1"

    logging.basicConfig(
        level=log_level if not log_focus else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        force=True,  # Override any existing config
    )

    if not log_focus:
        return

    for module in FOCUSED_MODULES:
        logging.getLogger(module).setLevel(log_level)

    logging.getLogger().warning(
        f"Focused logging enabled: {', '.join(FOCUSED_MODULES)} at {log_level}"
    )
