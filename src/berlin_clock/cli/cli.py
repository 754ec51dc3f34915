#!/usr/bin/env python3
import logging
import sys
from dataclasses import replace
from enum import Enum

import typer
from dotenv import load_dotenv

from berlin_clock import codec
from berlin_clock.api import run_http_server
from berlin_clock.cli.output import Error, set_json_mode, write
from berlin_clock.config import ServerConfig
from berlin_clock.utils import exceptions
from berlin_clock.utils.logging_utils import ClockLogger, get_logger, setup_logging

logger = get_logger()


class LogLevel(str, Enum):
    """Log levels for the CLI."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


app = typer.Typer(
    name="berlin-clock",
    help="Berlin Clock (Mengenlehreuhr) converter and API server",
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)


class GlobalState:
    """Global state for the CLI."""

    config: ServerConfig = ServerConfig()


state = GlobalState()


LOG_LEVEL_OPTION = typer.Option(
    None,
    "--log-level",
    "-l",
    help="Set the logging level (defaults to BERLIN_CLOCK_LOG_LEVEL or INFO)",
)

LOG_FILE_OPTION = typer.Option(
    None,
    "--log-file",
    help="Also write logs to this file",
)

JSON_OUTPUT_OPTION = typer.Option(
    None,
    "--json/--no-json",
    help="Output in JSON format (default when stdout is not a terminal)",
)


def configure_logging(
    log_level: str,
    log_file: str | None,
    json_logs: bool,
) -> ClockLogger:
    """Configure logging based on CLI options."""
    level = getattr(logging, log_level)
    setup_logging(log_file=log_file, log_level=level, json_logs=json_logs)
    return get_logger()


def _fail(error: exceptions.BerlinClockError) -> typer.Exit:
    write(Error(str(error)))
    return typer.Exit(1)


@app.callback()
def main(
    log_level: LogLevel | None = LOG_LEVEL_OPTION,
    log_file: str | None = LOG_FILE_OPTION,
    json_output: bool | None = JSON_OUTPUT_OPTION,
) -> None:
    """Berlin Clock (Mengenlehreuhr) CLI.

    Convert times to lamp patterns and back, or serve the conversion API.
    """
    load_dotenv()

    json_mode = json_output if json_output is not None else not sys.stdout.isatty()
    set_json_mode(json_mode)

    try:
        config = ServerConfig.from_env()
    except exceptions.ConfigurationError as e:
        raise _fail(e) from e

    if log_level is not None:
        config = replace(config, log_level=log_level.value)
    if log_file is not None:
        config = replace(config, log_file=log_file)
    state.config = config

    configure_logging(config.log_level, config.log_file, config.json_logs)
    logger.debug(
        "Loaded configuration",
        subsystem="CLI",
        extra={"host": config.host, "port": config.port},
    )


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on"),
) -> None:
    """Run the HTTP API."""
    config = state.config
    try:
        if host is not None:
            config = replace(config, host=host)
        if port is not None:
            config = replace(config, port=port)
    except exceptions.ConfigurationError as e:
        raise _fail(e) from e

    run_http_server(config)


@app.command()
def now() -> None:
    """Show the current time as a Berlin Clock."""
    write(codec.current_lamp_state())


@app.command()
def convert(
    time: str = typer.Argument(..., help="Time of day as HH:MM:SS"),
) -> None:
    """Show the Berlin Clock for a given time."""
    try:
        lamp_state = codec.encode(codec.parse_time_string(time))
    except exceptions.ConversionError as e:
        raise _fail(e) from e
    write(lamp_state)


@app.command()
def decode(
    seconds_lamp: str = typer.Argument(..., help="Seconds lamp (Y or O)"),
    five_hours_row: str = typer.Argument(..., help="Five-hours row, 4 lamps"),
    single_hours_row: str = typer.Argument(..., help="Single-hours row, 4 lamps"),
    five_minutes_row: str = typer.Argument(..., help="Five-minutes row, 11 lamps"),
    single_minutes_row: str = typer.Argument(..., help="Single-minutes row, 4 lamps"),
) -> None:
    """Read the time off a Berlin Clock lamp pattern.

    Only the parity of the seconds survives, so the decoded second is 00 or 01.
    """
    lamp_state = codec.LampState(
        seconds_lamp=seconds_lamp.upper(),
        five_hours_row=five_hours_row.upper(),
        single_hours_row=single_hours_row.upper(),
        five_minutes_row=five_minutes_row.upper(),
        single_minutes_row=single_minutes_row.upper(),
    )
    try:
        decoded = codec.decode(lamp_state)
    except exceptions.ConversionError as e:
        raise _fail(e) from e
    write({"time": decoded.format()})


def run_cli() -> None:
    app()


if __name__ == "__main__":
    run_cli()
