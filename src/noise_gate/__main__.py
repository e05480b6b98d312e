"""Entrypoint for running the splitter with python -m noise_gate."""

import sys

from noise_gate.cli import main

if __name__ == "__main__":
    sys.exit(main())
