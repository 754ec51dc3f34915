"""Unit tests for the CLI output module."""

import io
import json
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from berlin_clock.cli.output import Error, lamp_state_payload, render_lamp_state, set_json_mode, write
from berlin_clock.codec import WallTime, encode

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_consoles():
    """Mock Rich consoles for testing."""
    stdout_console = MagicMock(spec=Console)
    stderr_console = MagicMock(spec=Console)
    with (
        patch("berlin_clock.cli.output.stdout_console", stdout_console),
        patch("berlin_clock.cli.output.stderr_console", stderr_console),
    ):
        yield stdout_console, stderr_console


def test_write_error_rich(mock_consoles):
    stdout_console, stderr_console = mock_consoles
    set_json_mode(False)
    write(Error("Test error"))
    (text,), _ = stderr_console.print.call_args
    assert isinstance(text, Text)
    assert text.plain == "Error: Test error"
    assert text.style == "red"
    stdout_console.print.assert_not_called()


def test_write_error_rich_keeps_brackets_literal():
    console = Console(file=io.StringIO(), width=80, color_system=None)
    set_json_mode(False)
    with patch("berlin_clock.cli.output.stderr_console", console):
        write(Error("Invalid five_hours_row: got '[/O]', expected 4 of OR"))
    assert console.file.getvalue() == (
        "Error: Invalid five_hours_row: got '[/O]', expected 4 of OR\n"
    )


def test_write_lamp_state_rich(mock_consoles):
    stdout_console, _ = mock_consoles
    set_json_mode(False)
    write(encode(WallTime(13, 17, 1)))
    (panel,), _ = stdout_console.print.call_args
    assert isinstance(panel, Panel)
    assert panel.title == "13:17:01"


def test_write_dict_rich():
    console = Console(file=io.StringIO(), width=80, color_system=None)
    set_json_mode(False)
    with patch("berlin_clock.cli.output.stdout_console", console):
        write({"time": "13:17:01"})
    assert console.file.getvalue() == "time: 13:17:01\n"


def test_write_error_json(capsys):
    set_json_mode(True)
    write(Error("Test error"))
    assert json.loads(capsys.readouterr().out) == {"error": "Test error"}


def test_write_lamp_state_json(capsys):
    set_json_mode(True)
    write(encode(WallTime(23, 59, 59)))
    assert json.loads(capsys.readouterr().out) == {
        "secondsLamp": "Y",
        "fiveHoursRow": "RRRR",
        "singleHoursRow": "RRRO",
        "fiveMinutesRow": "YYRYYRYYRYY",
        "singleMinutesRow": "YYYY",
        "currentTime": "23:59:59",
    }


def test_write_dict_json(capsys):
    set_json_mode(True)
    write({"time": "13:17:01"})
    assert json.loads(capsys.readouterr().out) == {"time": "13:17:01"}


def test_lamp_state_payload_uses_api_field_names():
    payload = lamp_state_payload(encode(WallTime(0, 0, 0)))
    assert list(payload) == [
        "secondsLamp",
        "fiveHoursRow",
        "singleHoursRow",
        "fiveMinutesRow",
        "singleMinutesRow",
        "currentTime",
    ]


def test_render_lamp_state_draws_every_lamp():
    console = Console(file=io.StringIO(), width=40, color_system=None)
    console.print(render_lamp_state(encode(WallTime(13, 17, 1))))
    text = console.file.getvalue()
    assert "13:17:01" in text
    assert "(●)" in text
    assert text.count("▮") == 4 + 4 + 11 + 4
