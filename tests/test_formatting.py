import re

import pytest

from timer_api.formatting import (
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    Duration,
    TimerStyle,
    decompose,
    format_duration,
)

DIGIT_RE = re.compile(r"^(-?\d{2,}):(-?\d{2,}):(-?\d{2,}):(-?\d{2,})$")
WORD_RE = re.compile(
    r"^(-?\d{2,}) days? (-?\d{2,}) hours? (-?\d{2,}) minutes? (-?\d{2,}) seconds?$"
)

ONE_OF_EACH = MS_PER_DAY + MS_PER_HOUR + MS_PER_MINUTE + MS_PER_SECOND

SAMPLES = [
    0,
    1,
    999,
    1_000,
    59_999,
    90_000,
    ONE_OF_EACH,
    MS_PER_DAY - 1,
    3 * MS_PER_DAY + 7 * MS_PER_HOUR + 42 * MS_PER_MINUTE + 5 * MS_PER_SECOND + 321,
    123 * MS_PER_DAY,
    -1,
    -999,
    -5_000,
    -90_000,
    -ONE_OF_EACH,
    -(2 * MS_PER_DAY + 30 * MS_PER_SECOND),
]


def _ints(match):
    return tuple(int(g) for g in match.groups())


class TestDecompose:
    def test_positive_components(self):
        assert decompose(90_000) == Duration(0, 0, 1, 30)
        assert decompose(ONE_OF_EACH) == Duration(1, 1, 1, 1)

    def test_negative_truncates_toward_zero(self):
        assert decompose(-90_000) == Duration(0, 0, -1, -30)
        assert decompose(-ONE_OF_EACH) == Duration(-1, -1, -1, -1)
        # Less than a second in the past is still all zeros
        assert decompose(-999) == Duration(0, 0, 0, 0)

    @pytest.mark.parametrize("remaining", [v for v in SAMPLES if v >= 0])
    def test_components_bound_the_input(self, remaining):
        d = decompose(remaining)
        whole = d.days * MS_PER_DAY + d.hours * MS_PER_HOUR + d.minutes * MS_PER_MINUTE
        assert whole + d.seconds * MS_PER_SECOND <= remaining < whole + (d.seconds + 1) * MS_PER_SECOND
        assert 0 <= d.hours < 24 and 0 <= d.minutes < 60 and 0 <= d.seconds < 60

    @pytest.mark.parametrize("remaining", [v for v in SAMPLES if v < 0])
    def test_negative_components_never_positive(self, remaining):
        assert all(v <= 0 for v in decompose(remaining))


class TestDigitStyle:
    def test_ninety_seconds(self):
        assert format_duration(90_000) == "00:00:01:30"
        assert format_duration(90_000, TimerStyle.DIGIT) == "00:00:01:30"

    def test_zero(self):
        assert format_duration(0, "digit") == "00:00:00:00"

    def test_days_wider_than_two_digits(self):
        assert format_duration(123 * MS_PER_DAY) == "123:00:00:00"

    def test_negative_components_pad_absolute_value(self):
        assert format_duration(-5_000) == "00:00:00:-05"
        assert format_duration(-90_000) == "00:00:-01:-30"
        assert format_duration(-ONE_OF_EACH) == "-01:-01:-01:-01"

    @pytest.mark.parametrize("remaining", SAMPLES)
    def test_pattern(self, remaining):
        assert DIGIT_RE.match(format_duration(remaining, TimerStyle.DIGIT))


class TestWordStyle:
    def test_zero_is_plural(self):
        assert format_duration(0, TimerStyle.WORD) == "00 days 00 hours 00 minutes 00 seconds"

    def test_singular_units(self):
        assert format_duration(ONE_OF_EACH, TimerStyle.WORD) == "01 day 01 hour 01 minute 01 second"

    def test_mixed_units(self):
        assert format_duration(90_000, "word") == "00 days 00 hours 01 minute 30 seconds"
        assert format_duration(2 * MS_PER_DAY + 2 * MS_PER_HOUR, "word") == "02 days 02 hours 00 minutes 00 seconds"

    def test_negative_one_is_singular(self):
        assert format_duration(-ONE_OF_EACH, TimerStyle.WORD) == "-01 day -01 hour -01 minute -01 second"
        assert format_duration(-90_000, TimerStyle.WORD) == "00 days 00 hours -01 minute -30 seconds"


class TestStylesAgree:
    @pytest.mark.parametrize("remaining", SAMPLES)
    def test_same_decomposition(self, remaining):
        digit = DIGIT_RE.match(format_duration(remaining, TimerStyle.DIGIT))
        word = WORD_RE.match(format_duration(remaining, TimerStyle.WORD))
        assert digit and word
        assert _ints(digit) == _ints(word) == tuple(decompose(remaining))


def test_unknown_style_rejected():
    with pytest.raises(ValueError):
        format_duration(1_000, "fancy")
