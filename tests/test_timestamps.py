from datetime import datetime, timedelta, timezone

import pytest

from boiltypes.timestamps import (
    disable_infinity_ts,
    enable_infinity_ts,
    format_timestamp,
    format_ts,
    parse_timestamp,
    parse_ts,
)


@pytest.fixture
def infinity():
    negative = datetime(1000, 1, 1, tzinfo=timezone.utc)
    positive = datetime(3000, 1, 1, tzinfo=timezone.utc)
    enable_infinity_ts(negative, positive)
    yield negative, positive
    disable_infinity_ts()


@pytest.mark.parametrize(
    "value",
    [
        datetime(2001, 2, 3, 4, 5, 6, 123456, tzinfo=timezone(timedelta(hours=-7))),
        datetime(1999, 12, 31, 23, 59, 59, tzinfo=timezone(timedelta(hours=9))),
        datetime(2020, 6, 1, 0, 0, 0, 500000, tzinfo=timezone(timedelta(hours=1))),
        datetime(1, 1, 1, 0, 0, 0, tzinfo=timezone(timedelta(hours=5, minutes=30))),
        datetime(
            1900, 7, 4, 12, 0, 0, 1, tzinfo=timezone(timedelta(hours=-3, seconds=-15))
        ),
    ],
)
def test_round_trip(value):
    parsed = parse_timestamp(format_timestamp(value))
    assert parsed == value
    assert parsed.utcoffset() == value.utcoffset()
    assert parsed.microsecond == value.microsecond


def test_format_utc():
    value = datetime(2001, 2, 3, 4, 5, 6, tzinfo=timezone.utc)
    assert format_timestamp(value) == "2001-02-03 04:05:06Z"


def test_format_naive_is_utc():
    naive = datetime(2011, 5, 6, 7, 8, 9, 10)
    assert format_timestamp(naive) == format_timestamp(naive.replace(tzinfo=timezone.utc))


def test_format_seconds_offset():
    value = datetime(2001, 2, 3, tzinfo=timezone(timedelta(hours=5, minutes=30, seconds=15)))
    assert format_timestamp(value).endswith("+05:30:15")


def test_parse_date_only():
    parsed = parse_timestamp("2001-02-03")
    assert (parsed.year, parsed.month, parsed.day) == (2001, 2, 3)
    assert (parsed.hour, parsed.minute, parsed.second) == (0, 0, 0)
    assert parsed.utcoffset() == timedelta(0)


def test_parse_rolls_over_hour():
    assert parse_timestamp("2001-02-03 24:00:00+00") == parse_timestamp(
        "2001-02-04 00:00:00+00"
    )


def test_parse_rolls_over_month():
    assert parse_timestamp("2001-13-01") == parse_timestamp("2002-01-01")


def test_current_location_agrees():
    location = timezone(timedelta(hours=2))
    parsed = parse_timestamp("2001-02-03 04:05:06+02", location)
    assert parsed.tzinfo is location
    assert parsed.hour == 4


def test_current_location_disagrees():
    location = timezone(timedelta(hours=3))
    parsed = parse_timestamp("2001-02-03 04:05:06+02", location)
    assert parsed.tzinfo is not location
    assert parsed.utcoffset() == timedelta(hours=2)
    assert parsed.hour == 4


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("", "invalid timestamp"),
        ("abc", "invalid timestamp"),
        ("2001-02x03", "expected '-' at position 7"),
        ("2001-02-03 04:05:06 junk", "expected end of input"),
        ("2001-aa-03", "expected number"),
        ("2001-02-03 04:05", "invalid timestamp"),
    ],
)
def test_parse_errors(text, message):
    with pytest.raises(ValueError, match=message):
        parse_timestamp(text)


def test_parse_bc_year_out_of_range():
    with pytest.raises(ValueError):
        parse_timestamp("0005-02-03 04:05:06+00 BC")


def test_parse_ts_infinity_disabled():
    assert parse_ts("infinity") == "infinity"
    assert parse_ts("-infinity") == "-infinity"


def test_parse_ts_regular_matches_parse_timestamp():
    text = "2001-02-03 04:05:06.7+01"
    assert parse_ts(text) == parse_timestamp(text)


def test_parse_ts_infinity_enabled(infinity):
    negative, positive = infinity
    assert parse_ts("-infinity") == negative
    assert parse_ts("infinity") == positive


def test_format_ts_infinity_enabled(infinity):
    negative, positive = infinity
    assert format_ts(negative) == "-infinity"
    assert format_ts(negative - timedelta(days=1)) == "-infinity"
    assert format_ts(positive) == "infinity"
    assert format_ts(positive + timedelta(days=1)) == "infinity"
    middle = datetime(2001, 1, 1, tzinfo=timezone(timedelta(hours=1)))
    assert format_ts(middle) == format_timestamp(middle)


def test_format_ts_infinity_disabled():
    value = datetime(5000, 1, 1, tzinfo=timezone(timedelta(hours=1)))
    assert format_ts(value) == format_timestamp(value)


def test_enable_twice_raises(infinity):
    negative, positive = infinity
    with pytest.raises(RuntimeError, match="enabled already"):
        enable_infinity_ts(negative, positive)


def test_enable_requires_ordering():
    bound = datetime(2000, 1, 1, tzinfo=timezone.utc)
    with pytest.raises(ValueError, match="negative value must be smaller"):
        enable_infinity_ts(bound, bound)
    assert parse_ts("infinity") == "infinity"