"""
Rendering of a signed millisecond duration as a countdown string.

Two styles share one numeric decomposition:

- ``digit``: ``DD:HH:MM:SS``
- ``word``: ``DD days HH hours MM minutes SS seconds``

Division truncates toward zero at every step, so an expired timer (negative
duration) decomposes into components that are all zero or negative. Each
component is rendered as its absolute value zero-padded to two digits, with a
leading ``-`` when negative (``-5`` -> ``-05``).
"""
from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Tuple

MS_PER_SECOND = 1_000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

_UNITS: Tuple[Tuple[str, str], ...] = (
    ("day", "days"),
    ("hour", "hours"),
    ("minute", "minutes"),
    ("second", "seconds"),
)


# PUBLIC_INTERFACE
class TimerStyle(str, Enum):
    """Display style of a countdown."""

    DIGIT = "digit"
    WORD = "word"


# PUBLIC_INTERFACE
class Duration(NamedTuple):
    """Day/hour/minute/second components of a millisecond duration."""

    days: int
    hours: int
    minutes: int
    seconds: int


def _trunc_divmod(dividend: int, divisor: int) -> Tuple[int, int]:
    # Python's divmod floors; the remainder must keep the dividend's sign.
    quotient = abs(dividend) // divisor
    remainder = abs(dividend) % divisor
    if dividend < 0:
        return -quotient, -remainder
    return quotient, remainder


# PUBLIC_INTERFACE
def decompose(remaining: int) -> Duration:
    """Split ``remaining`` milliseconds into days, hours, minutes and seconds."""
    days, rest = _trunc_divmod(remaining, MS_PER_DAY)
    hours, rest = _trunc_divmod(rest, MS_PER_HOUR)
    minutes, rest = _trunc_divmod(rest, MS_PER_MINUTE)
    seconds, _ = _trunc_divmod(rest, MS_PER_SECOND)
    return Duration(days, hours, minutes, seconds)


def _pad(value: int) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{abs(value):02d}"


def _digit(parts: Duration) -> str:
    return ":".join(_pad(v) for v in parts)


def _word(parts: Duration) -> str:
    rendered = []
    for value, (singular, plural) in zip(parts, _UNITS):
        unit = singular if abs(value) == 1 else plural
        rendered.append(f"{_pad(value)} {unit}")
    return " ".join(rendered)


# PUBLIC_INTERFACE
def format_duration(remaining: int, style: TimerStyle = TimerStyle.DIGIT) -> str:
    """
    Render a signed millisecond duration in the given style.

    Args:
        remaining: Duration in milliseconds; negative once a timer has expired.
        style: TimerStyle.DIGIT (default) or TimerStyle.WORD. Plain strings
            ('digit', 'word') are accepted too.

    Returns:
        The countdown string, e.g. '00:00:01:30' or
        '00 days 00 hours 01 minute 30 seconds'.

    Raises:
        ValueError: if style is not a known TimerStyle.
    """
    style = TimerStyle(style)
    parts = decompose(int(remaining))
    if style is TimerStyle.WORD:
        return _word(parts)
    return _digit(parts)
