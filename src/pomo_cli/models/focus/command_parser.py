"""Command grammar for the single-line focus prompt.

The prompt accepts a handful of one-letter commands:

    s [minutes]       start a work session (default 25 minutes)
    b [minutes]       start a break session (default 5 minutes)
    l [YYYY-MM-DD]    list work sessions for today or a given date
    q                 quit

Parsing never raises: anything that is not understood becomes an
``Invalid`` command carrying the message to show the user.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Union

from .errors import UserInputError

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
# Keeps timedelta arithmetic in range
MAX_MINUTES = 1_000_000

INVALID_COMMAND = "Invalid command"
INVALID_MINUTE = "Invalid minute"
INVALID_DATE = "Invalid date format"

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_INTEGER = re.compile(r"^-?\d+$")


@dataclass(frozen=True)
class StartWork:
    minutes: int


@dataclass(frozen=True)
class StartBreak:
    minutes: int


@dataclass(frozen=True)
class ListToday:
    pass


@dataclass(frozen=True)
class ListForDate:
    day: date


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Invalid:
    reason: str


Command = Union[StartWork, StartBreak, ListToday, ListForDate, Stop, Quit, Invalid]


def parse_command(
    line: str,
    work_minutes: int = DEFAULT_WORK_MINUTES,
    break_minutes: int = DEFAULT_BREAK_MINUTES,
) -> Command:
    """Parse one prompt line into a command."""
    text = line.strip()
    if not text:
        return Invalid(INVALID_COMMAND)
    if text == "q":
        return Quit()

    letter, rest = text[0], text[1:]
    if letter == "s":
        minutes = _parse_minutes(rest, work_minutes)
        return minutes if isinstance(minutes, Invalid) else StartWork(minutes)
    if letter == "b":
        minutes = _parse_minutes(rest, break_minutes)
        return minutes if isinstance(minutes, Invalid) else StartBreak(minutes)
    if letter == "l":
        return _parse_list(rest)
    return Invalid(INVALID_COMMAND)


def _parse_minutes(rest: str, default: int) -> Union[int, Invalid]:
    """Resolve the optional ``" <n>"`` suffix of a start command."""
    if not rest:
        return default
    if not rest.startswith(" "):
        # "stop", "s10", "break" ...
        return Invalid(INVALID_COMMAND)

    value = rest.strip()
    if not _INTEGER.match(value):
        return Invalid(INVALID_MINUTE)

    minutes = int(value)
    if minutes < 0 or minutes > MAX_MINUTES:
        return Invalid(INVALID_MINUTE)
    if minutes == 0:
        return default
    return minutes


def _parse_list(rest: str) -> Command:
    if not rest:
        return ListToday()
    if not rest.startswith(" "):
        return Invalid(INVALID_COMMAND)

    try:
        return ListForDate(parse_iso_date(rest.strip()))
    except UserInputError as e:
        return Invalid(str(e))


def parse_iso_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD calendar date.

    Raises UserInputError for anything else, including impossible dates
    such as 2024-02-30.
    """
    if not _ISO_DATE.match(value):
        raise UserInputError(INVALID_DATE)
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise UserInputError(INVALID_DATE) from e
