"""Conversion between wall-clock time and Berlin Clock lamp patterns.

The Berlin Clock (Mengenlehreuhr) shows the time of day with five rows of
lamps:

- a single round lamp that blinks with the seconds (lit on odd seconds),
- four red lamps worth five hours each,
- four red lamps worth one hour each,
- eleven lamps worth five minutes each, every third one red (quarter marker)
  and the others yellow,
- four yellow lamps worth one minute each.

Rows are represented as strings over ``Y`` (yellow on), ``R`` (red on) and
``O`` (off). Every function in this module is pure.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass

from berlin_clock.utils.clock import ClockProtocol, SystemClock
from berlin_clock.utils.exceptions import InvalidFormatError, OutOfRangeError

YELLOW = "Y"
RED = "R"
OFF = "O"

FIVE_HOURS_LAMPS = 4
SINGLE_HOURS_LAMPS = 4
FIVE_MINUTES_LAMPS = 11
SINGLE_MINUTES_LAMPS = 4

TIME_FORMAT = "HH:MM:SS"
_TIME_PATTERN = re.compile(r"([0-9]{2}):([0-9]{2}):([0-9]{2})")

# field name -> (row length, accepted characters)
ROW_FORMATS: dict[str, tuple[int, frozenset[str]]] = {
    "seconds_lamp": (1, frozenset({YELLOW, OFF})),
    "five_hours_row": (FIVE_HOURS_LAMPS, frozenset({RED, OFF})),
    "single_hours_row": (SINGLE_HOURS_LAMPS, frozenset({RED, OFF})),
    "five_minutes_row": (FIVE_MINUTES_LAMPS, frozenset({RED, YELLOW, OFF})),
    "single_minutes_row": (SINGLE_MINUTES_LAMPS, frozenset({YELLOW, OFF})),
}


@dataclass(frozen=True)
class WallTime:
    """A time of day with whole-second precision."""

    hour: int
    minute: int
    second: int = 0

    def __post_init__(self) -> None:
        for field, limit in (("hour", 23), ("minute", 59), ("second", 59)):
            value = getattr(self, field)
            if not 0 <= value <= limit:
                raise OutOfRangeError(field, value, limit)

    @classmethod
    def from_datetime(cls, value: datetime.datetime | datetime.time) -> WallTime:
        """Build a ``WallTime`` from a datetime, dropping sub-second precision."""
        return cls(value.hour, value.minute, value.second)

    def format(self) -> str:
        """Return the zero-padded ``HH:MM:SS`` label."""
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class LampState:
    """The lamp rows of a Berlin Clock at one instant.

    Attributes:
        seconds_lamp: ``Y`` on odd seconds, ``O`` otherwise
        five_hours_row: four ``R``/``O`` lamps, five hours each
        single_hours_row: four ``R``/``O`` lamps, one hour each
        five_minutes_row: eleven ``Y``/``R``/``O`` lamps, five minutes each
        single_minutes_row: four ``Y``/``O`` lamps, one minute each
        source_time_label: ``HH:MM:SS`` the state was encoded from, or empty
    """

    seconds_lamp: str
    five_hours_row: str
    single_hours_row: str
    five_minutes_row: str
    single_minutes_row: str
    source_time_label: str = ""

    def rows(self) -> dict[str, str]:
        """Return the lamp rows keyed by field name, top row first."""
        return {field: getattr(self, field) for field in ROW_FORMATS}


def _fill_row(total: int, lit: int, color: str) -> str:
    return color * lit + OFF * (total - lit)


def _five_minutes_row(lit: int) -> str:
    lamps = [
        (RED if position % 3 == 0 else YELLOW) if position <= lit else OFF
        for position in range(1, FIVE_MINUTES_LAMPS + 1)
    ]
    return "".join(lamps)


def encode(time: WallTime) -> LampState:
    """Convert a wall-clock time into its lamp pattern."""
    return LampState(
        seconds_lamp=YELLOW if time.second % 2 else OFF,
        five_hours_row=_fill_row(FIVE_HOURS_LAMPS, time.hour // 5, RED),
        single_hours_row=_fill_row(SINGLE_HOURS_LAMPS, time.hour % 5, RED),
        five_minutes_row=_five_minutes_row(time.minute // 5),
        single_minutes_row=_fill_row(SINGLE_MINUTES_LAMPS, time.minute % 5, YELLOW),
        source_time_label=time.format(),
    )


def count_lit(row: str) -> int:
    """Count the lamps in *row* that are on, whatever their color."""
    return sum(1 for lamp in row if lamp != OFF)


def validate(state: LampState) -> None:
    """Check every row of *state* for its fixed length and alphabet.

    Raises:
        InvalidFormatError: If a row is missing, has the wrong length or
            contains a character outside its alphabet.
    """
    for field, (length, alphabet) in ROW_FORMATS.items():
        row = getattr(state, field)
        expected = f"{length} of {''.join(sorted(alphabet))}"
        if not isinstance(row, str) or len(row) != length:
            raise InvalidFormatError(field, row, expected)
        if not set(row) <= alphabet:
            raise InvalidFormatError(field, row, expected)


def decode(state: LampState) -> WallTime:
    """Convert a lamp pattern back into a wall-clock time.

    The seconds lamp only carries parity, so the decoded second is always
    ``1`` (lamp on) or ``0`` (lamp off).

    Raises:
        InvalidFormatError: If any row is malformed.
        OutOfRangeError: If the lit lamps add up to more than 23 hours or 59
            minutes.
    """
    validate(state)

    hours = 5 * count_lit(state.five_hours_row) + count_lit(state.single_hours_row)
    minutes = 5 * count_lit(state.five_minutes_row) + count_lit(state.single_minutes_row)
    seconds = 1 if state.seconds_lamp == YELLOW else 0

    return WallTime(hours, minutes, seconds)


def parse_time_string(text: str) -> WallTime:
    """Parse a strict, zero-padded 24-hour ``HH:MM:SS`` string.

    Raises:
        InvalidFormatError: On any deviation from the format, including
            fields out of range.
    """
    match = _TIME_PATTERN.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        raise InvalidFormatError("time", text, TIME_FORMAT)

    hour, minute, second = (int(group) for group in match.groups())
    try:
        return WallTime(hour, minute, second)
    except OutOfRangeError as exc:
        raise InvalidFormatError("time", text, TIME_FORMAT) from exc


def now(clock: ClockProtocol | None = None) -> WallTime:
    """Read the current local time from *clock*, truncated to whole seconds."""
    clock = clock or SystemClock()
    return WallTime.from_datetime(datetime.datetime.fromtimestamp(clock.time()))


def current_lamp_state(clock: ClockProtocol | None = None) -> LampState:
    return encode(now(clock))
