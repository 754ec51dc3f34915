"""Output module for the CLI.

This module provides functions for writing output in both human-readable (Rich)
and machine-readable (JSON) formats.
"""

import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from berlin_clock.api.server import LampStateModel
from berlin_clock.codec import RED, LampState

# Create two consoles - one for stdout and one for stderr
stdout_console = Console()
stderr_console = Console(stderr=True)

LAMP_STYLES = {
    "Y": "bold yellow",
    "R": "bold red",
    "O": "grey30",
}


def set_json_mode(value: bool) -> None:
    """Set the output mode to JSON or Rich.

    Args:
        value: True for JSON output, False for Rich output
    """
    # Using a function attribute instead of global
    set_json_mode.mode = value  # type: ignore


# Initialize the function attribute
set_json_mode.mode = False  # type: ignore


def is_json_mode() -> bool:
    """Check if JSON output mode is enabled.

    Returns:
        True if JSON output is enabled, False otherwise
    """
    return getattr(set_json_mode, "mode", False)


@dataclass
class Error:
    """Error message for output."""

    message: str


def lamp_state_payload(state: LampState) -> dict[str, Any]:
    """Return the JSON representation used by the HTTP API."""
    return LampStateModel.from_state(state).model_dump(by_alias=True)


def render_lamp_state(state: LampState) -> Panel:
    """Draw the clock face, one line per lamp row, seconds lamp on top."""
    lines = []
    for field, row in state.rows().items():
        line = Text(justify="center")
        if field == "seconds_lamp":
            line.append("(●)", style=LAMP_STYLES[row])
        else:
            for position, lamp in enumerate(row, start=1):
                line.append("▮", style=LAMP_STYLES[lamp])
                if position < len(row):
                    line.append(" ")
        lines.append(line)
    title = state.source_time_label or None
    return Panel(Group(*lines), title=title, expand=False, border_style=LAMP_STYLES[RED])


def write(payload: Error | LampState | dict[str, Any]) -> None:
    """Write output in the current mode (JSON or Rich).

    Args:
        payload: The data to write. Can be:
            - Error: An error message
            - LampState: A clock face to display
            - dict[str, Any]: Arbitrary data to display
    """
    if is_json_mode():
        _write_json(payload)
    else:
        _write_rich(payload)


def _write_json(payload: Error | LampState | dict[str, Any]) -> None:
    if isinstance(payload, Error):
        print(json.dumps({"error": payload.message}))
    elif isinstance(payload, LampState):
        print(json.dumps(lamp_state_payload(payload)))
    elif isinstance(payload, dict):
        print(json.dumps(payload))


def _write_rich(payload: Error | LampState | dict[str, Any]) -> None:
    if isinstance(payload, Error):
        # plain Text: messages can contain user input that looks like markup
        stderr_console.print(Text(f"Error: {payload.message}", style="red"))
    elif isinstance(payload, LampState):
        stdout_console.print(render_lamp_state(payload))
    elif isinstance(payload, dict):
        for key, value in payload.items():
            stdout_console.print(Text.assemble((f"{key}:", "bold"), f" {value}"))
