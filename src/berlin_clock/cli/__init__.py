"""CLI package for the Berlin Clock service.

This package contains the command-line interface components, including:
- Output formatting (JSON and Rich text)
- Command implementations
- CLI app configuration
"""

from berlin_clock.cli.cli import app, run_cli
from berlin_clock.cli.output import Error, set_json_mode, write

__all__ = ["Error", "app", "run_cli", "set_json_mode", "write"]
