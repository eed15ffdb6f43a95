"""SQL DECIMAL values that refuse NaN and infinity on the way to the database."""

from __future__ import annotations

import decimal
import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

BigDecimal = decimal.Decimal

NULL_JSON = b"null"


def _remainder(a: int, b: int) -> int:
    """Remainder that takes the sign of the dividend."""
    r = abs(a) % b
    return -r if a < 0 else r


def _parse(text: str) -> BigDecimal:
    try:
        return BigDecimal(text)
    except decimal.InvalidOperation:
        raise ValueError(f"invalid decimal syntax: {text!r}") from None


def _random_decimal(next_int: Callable[[], int], should_be_null: bool) -> BigDecimal | None:
    if should_be_null:
        return None
    text = f"{_remainder(next_int(), 10)}.{_remainder(next_int(), 10)}"
    try:
        return BigDecimal(text)
    except decimal.InvalidOperation:
        raise ValueError("random value could not be turned into a decimal") from None


def _decimal_value(d: BigDecimal | None, can_null: bool) -> str | None:
    if d is None:
        return None if can_null else "0"
    if d.is_nan():
        raise ValueError("refusing to allow NaN into database")
    if d.is_infinite():
        raise ValueError("refusing to allow infinity into database")
    return str(d)


def _decimal_scan(val: Any, can_null: bool) -> BigDecimal | None:
    if val is None:
        if not can_null:
            raise ValueError("null cannot be scanned into decimal")
        return None
    if isinstance(val, bool):
        raise TypeError(f"cannot scan decimal value: {val!r}")
    if isinstance(val, float):
        return BigDecimal(repr(val))
    if isinstance(val, int):
        return BigDecimal(val)
    if isinstance(val, str):
        return _parse(val)
    if isinstance(val, (bytes, bytearray)):
        return _parse(bytes(val).decode("utf-8"))
    raise TypeError(f"cannot scan decimal value: {val!r}")


def _from_json(data: bytes | str) -> BigDecimal | None:
    text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
    text = text.strip()
    if text == "null":
        return None
    if text.startswith('"'):
        try:
            inner = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON decimal: {exc}") from None
        if not isinstance(inner, str):
            raise ValueError(f"invalid JSON decimal: {text!r}")
        text = inner
    return _parse(text)


@dataclass(frozen=True)
class Decimal:
    """A non-null DECIMAL. A missing value is written as "0" and cannot be scanned from NULL."""

    big: BigDecimal | None = None

    def value(self) -> str:
        """Return the database text for this value."""
        return _decimal_value(self.big, False)

    @classmethod
    def scan(cls, val: Any) -> Decimal:
        """Build a value from what the database returned."""
        return cls(_decimal_scan(val, False))

    @classmethod
    def unmarshal_json(cls, data: bytes | str) -> Decimal:
        """Read a JSON number or string; JSON null gives zero."""
        big = _from_json(data)
        return cls(BigDecimal(0) if big is None else big)

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> Decimal:
        """Make a random value of the form "d.d"; never null."""
        return cls(_random_decimal(next_int, False))

    def __str__(self) -> str:
        return "0" if self.big is None else str(self.big)


@dataclass(frozen=True)
class NullDecimal:
    """A DECIMAL that may be NULL, held as ``big is None``."""

    big: BigDecimal | None = None

    def value(self) -> str | None:
        """Return the database text for this value, or None for NULL."""
        return _decimal_value(self.big, True)

    @classmethod
    def scan(cls, val: Any) -> NullDecimal:
        """Build a value from what the database returned."""
        return cls(_decimal_scan(val, True))

    @classmethod
    def unmarshal_json(cls, data: bytes | str) -> NullDecimal:
        """Read a JSON number, string or null."""
        return cls(_from_json(data))

    def marshal_json(self) -> bytes:
        """Write the value as a JSON number, or null."""
        if self.big is None:
            return NULL_JSON
        return str(self.big).encode("ascii")

    def is_zero(self) -> bool:
        """True when the value is NULL."""
        return self.big is None

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> NullDecimal:
        """Make a random value of the form "d.d", or NULL when asked to."""
        return cls(_random_decimal(next_int, should_be_null))

    def __str__(self) -> str:
        return "nil" if self.big is None else str(self.big)

    def __format__(self, spec: str) -> str:
        if self.big is None:
            return "nil"
        return format(self.big, spec)