"""Reading and writing timestamps in the PostgreSQL text format (DateStyle ISO, MDY)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, datetime, timedelta, timezone, tzinfo
from functools import lru_cache

_NUMBER = re.compile(r"[+-]?[0-9]+")
_FRACTION_END = re.compile(r"[-+ ]")

# Length of "01-01" and "01-01 00:00:00" after the year separator.
_DATE_TAIL = len("01-01") + 1
_DATETIME_TAIL = len("01-01 00:00:00") + 1


@dataclass
class _InfinitySettings:
    enabled: bool = False
    negative: datetime | None = None
    positive: datetime | None = None


_INFINITY = _InfinitySettings()


def enable_infinity_ts(negative: datetime, positive: datetime) -> None:
    """Map "-infinity" and "infinity" to the given bounds when reading and writing.

    Raises RuntimeError if already enabled, ValueError unless negative < positive.
    """
    if _INFINITY.enabled:
        raise RuntimeError("infinity timestamp enabled already")
    if not negative < positive:
        raise ValueError(
            "infinity timestamp: negative value must be smaller (before) than positive"
        )
    _INFINITY.enabled = True
    _INFINITY.negative = negative
    _INFINITY.positive = positive


def disable_infinity_ts() -> None:
    """Turn off the infinity mapping again."""
    _INFINITY.enabled = False


@lru_cache(maxsize=None)
def _fixed_zone(offset_seconds: int) -> timezone:
    return timezone(timedelta(seconds=offset_seconds))


def _expect(s: str, char: str, pos: int) -> None:
    if pos + 1 > len(s):
        raise ValueError("invalid timestamp")
    if s[pos] != char:
        raise ValueError(f"expected {char!r} at position {pos}; got {s[pos]!r}")


def _atoi(s: str, begin: int, end: int) -> int:
    if begin < 0 or end < 0 or begin > end or end > len(s):
        raise ValueError("invalid timestamp")
    part = s[begin:end]
    if not _NUMBER.fullmatch(part):
        raise ValueError(f"expected number; got {s!r}")
    return int(part)


def _build(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: int,
    nanos: int,
    zone: tzinfo,
) -> datetime:
    # Out-of-range fields roll over into the next larger unit.
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    if not MINYEAR <= year <= MAXYEAR:
        raise ValueError(f"year {year} is out of range")
    try:
        return datetime(year, month, 1, tzinfo=zone) + timedelta(
            days=day - 1,
            hours=hour,
            minutes=minute,
            seconds=second,
            microseconds=nanos // 1000,
        )
    except OverflowError as exc:
        raise ValueError(f"timestamp out of range: {exc}") from None


def parse_timestamp(s: str, current_location: tzinfo | None = None) -> datetime:
    """Parse a PostgreSQL text timestamp.

    The result is expressed in ``current_location`` when that zone agrees with
    the offset in the text; otherwise it keeps the fixed offset from the text.
    """
    mon_sep = s.find("-")
    year = _atoi(s, 0, mon_sep)
    day_sep = mon_sep + 3
    month = _atoi(s, mon_sep + 1, day_sep)
    _expect(s, "-", day_sep)
    time_sep = day_sep + 3
    day = _atoi(s, day_sep + 1, time_sep)

    hour = minute = second = 0
    if len(s) > mon_sep + _DATE_TAIL:
        _expect(s, " ", time_sep)
        min_sep = time_sep + 3
        _expect(s, ":", min_sep)
        hour = _atoi(s, time_sep + 1, min_sep)
        sec_sep = min_sep + 3
        _expect(s, ":", sec_sep)
        minute = _atoi(s, min_sep + 1, sec_sep)
        second = _atoi(s, sec_sep + 1, sec_sep + 3)

    idx = mon_sep + _DATETIME_TAIL
    nanos = 0
    tz_off = 0

    if idx < len(s) and s[idx] == ".":
        frac_start = idx + 1
        match = _FRACTION_END.search(s, frac_start)
        frac_len = match.start() - frac_start if match else len(s) - frac_start
        fraction = _atoi(s, frac_start, frac_start + frac_len)
        nanos = fraction * (10**9 // 10**frac_len)
        idx += frac_len + 1

    if idx < len(s) and s[idx] in "-+":
        sign = -1 if s[idx] == "-" else 1
        tz_hours = _atoi(s, idx + 1, idx + 3)
        idx += 3
        tz_min = tz_sec = 0
        if idx < len(s) and s[idx] == ":":
            tz_min = _atoi(s, idx + 1, idx + 3)
            idx += 3
        if idx < len(s) and s[idx] == ":":
            tz_sec = _atoi(s, idx + 1, idx + 3)
            idx += 3
        tz_off = sign * (tz_hours * 3600 + tz_min * 60 + tz_sec)

    if s[idx : idx + 3] == " BC":
        year = 1 - year
        idx += 3

    if idx < len(s):
        raise ValueError(f"expected end of input, got {s[idx:]!r}")

    result = _build(year, month, day, hour, minute, second, nanos, _fixed_zone(tz_off))

    if current_location is not None:
        local = result.astimezone(current_location)
        if local.utcoffset() == timedelta(seconds=tz_off):
            result = local
    return result


def parse_ts(s: str, current_location: tzinfo | None = None) -> datetime | str:
    """Parse a timestamp, honouring the infinity mapping.

    Without the mapping, "-infinity" and "infinity" are returned unchanged.
    """
    if s == "-infinity":
        return _INFINITY.negative if _INFINITY.enabled else s
    if s == "infinity":
        return _INFINITY.positive if _INFINITY.enabled else s
    return parse_timestamp(s, current_location)


def format_timestamp(t: datetime) -> str:
    """Format ``t`` as PostgreSQL timestamp text. Naive values are written as UTC."""
    text = (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d} "
        f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
    )
    if t.microsecond:
        text += "." + f"{t.microsecond:06d}".rstrip("0")

    offset = t.utcoffset() or timedelta(0)
    total = int(offset.total_seconds())
    if total == 0:
        return text + "Z"
    sign = "-" if total < 0 else "+"
    magnitude = abs(total)
    text += f"{sign}{magnitude // 3600:02d}:{magnitude // 60 % 60:02d}"
    if magnitude % 60:
        text += f":{magnitude % 60:02d}"
    return text


def format_ts(t: datetime) -> str:
    """Format ``t``, writing the infinity bounds as "-infinity" and "infinity"."""
    if _INFINITY.enabled:
        if not t > _INFINITY.negative:
            return "-infinity"
        if not t < _INFINITY.positive:
            return "infinity"
    return format_timestamp(t)