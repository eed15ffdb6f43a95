"""One-dimensional PostgreSQL arrays of booleans, bytea, numbers, text and decimals."""

from __future__ import annotations

import decimal
import re
from collections.abc import Callable
from typing import Any

from .array_text import quote_array_bytes, scan_linear_array
from .decimal_types import BigDecimal, Decimal
from .textformat import encode, parse_bytea

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_TEXT_TYPES = (bytes, bytearray, memoryview, str)


def _remainder(a: int, b: int) -> int:
    """Remainder that takes the sign of the dividend."""
    r = abs(a) % b
    return -r if a < 0 else r


def _elements(src: Any, type_name: str) -> list[bytes | None]:
    if not isinstance(src, _TEXT_TYPES):
        raise TypeError(f"cannot convert {type(src).__name__} to {type_name}")
    return scan_linear_array(src, b",", type_name)


def _show(elem: bytes | None) -> str:
    return "" if elem is None else elem.decode("utf-8", "replace")


class BoolArray(list):
    """An array of the PostgreSQL boolean type."""

    @classmethod
    def scan(cls, src: Any) -> BoolArray | None:
        """Build an array from database text; NULL gives None."""
        if src is None:
            return None
        result = cls()
        for i, elem in enumerate(_elements(src, "BoolArray")):
            first = elem[:1] if elem else b""
            if first in (b"t", b"T"):
                result.append(True)
            elif first in (b"f", b"F"):
                result.append(False)
            else:
                raise ValueError(
                    f'could not parse boolean array index {i}: invalid boolean "{_show(elem)}"'
                )
        return result

    def value(self) -> str:
        """Return the array text for the database."""
        return "{" + ",".join("t" if b else "f" for b in self) + "}"

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> BoolArray:
        """Make an array of three random booleans."""
        return cls(next_int() % 2 == 0 for _ in range(3))


class BytesArray(list):
    """An array of the PostgreSQL bytea type; NULL elements are None."""

    @classmethod
    def scan(cls, src: Any) -> BytesArray | None:
        """Build an array from database text; NULL gives None."""
        if src is None:
            return None
        result = cls()
        for i, elem in enumerate(_elements(src, "BytesArray")):
            if elem is None:
                result.append(None)
                continue
            try:
                result.append(parse_bytea(elem))
            except ValueError as exc:
                raise ValueError(f"could not parse bytea array index {i}: {exc}") from None
        return result

    def value(self) -> str:
        """Return the array text using the hex bytea format."""
        parts = ('"\\\\x' + bytes(item or b"").hex() + '"' for item in self)
        return "{" + ",".join(parts) + "}"


class Float64Array(list):
    """An array of the PostgreSQL double precision type."""

    @classmethod
    def scan(cls, src: Any) -> Float64Array | None:
        """Build an array from database text; NULL gives None."""
        if src is None:
            return None
        result = cls()
        for i, elem in enumerate(_elements(src, "Float64Array")):
            text = _show(elem)
            try:
                if elem is None or text != text.strip() or "_" in text:
                    raise ValueError
                result.append(float(text))
            except ValueError:
                raise ValueError(
                    f"parsing array element index {i}: invalid float {text!r}"
                ) from None
        return result

    def value(self) -> str:
        """Return the array text for the database."""
        return "{" + ",".join(encode(float(x)).decode("ascii") for x in self) + "}"

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> Float64Array:
        """Make an array of two random numbers."""
        return cls(float(next_int()) for _ in range(2))


class Int64Array(list):
    """An array of the PostgreSQL integer types."""

    @classmethod
    def scan(cls, src: Any) -> Int64Array | None:
        """Build an array from database text; NULL gives None."""
        if src is None:
            return None
        result = cls()
        for i, elem in enumerate(_elements(src, "Int64Array")):
            text = _show(elem)
            if elem is None or not _INTEGER.fullmatch(text):
                raise ValueError(f"parsing array element index {i}: invalid integer {text!r}")
            number = int(text)
            if not _INT64_MIN <= number <= _INT64_MAX:
                raise ValueError(f"parsing array element index {i}: value out of range {text!r}")
            result.append(number)
        return result

    def value(self) -> str:
        """Return the array text for the database."""
        return "{" + ",".join(str(int(x)) for x in self) + "}"

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> Int64Array:
        """Make an array of two random integers."""
        return cls(next_int() for _ in range(2))


class StringArray(list):
    """An array of the PostgreSQL character types."""

    @classmethod
    def scan(cls, src: Any) -> StringArray | None:
        """Build an array from database text; NULL gives None."""
        if src is None:
            return None
        result = cls()
        for i, elem in enumerate(_elements(src, "StringArray")):
            if elem is None:
                raise ValueError(f"parsing array element index {i}: cannot convert nil to string")
            result.append(elem.decode("utf-8"))
        return result

    def value(self) -> str:
        """Return the array text with every element quoted."""
        return "{" + ",".join(quote_array_bytes(str(s)) for s in self) + "}"


class DecimalArray(list):
    """An array of DECIMAL values held as ``Decimal``."""

    @classmethod
    def scan(cls, src: Any) -> DecimalArray | None:
        """Build an array from database text; NULL gives None."""
        if src is None:
            return None
        result = cls()
        for i, elem in enumerate(_elements(src, "DecimalArray")):
            text = _show(elem)
            try:
                if elem is None:
                    raise decimal.InvalidOperation
                result.append(Decimal(BigDecimal(text)))
            except decimal.InvalidOperation:
                raise ValueError(
                    f"parsing decimal element index as decimal {i}: {text}"
                ) from None
        return result

    def value(self) -> str:
        """Return the array text for the database."""
        return "{" + ",".join(str(d) for d in self) + "}"

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> DecimalArray:
        """Make an array of two random decimals of the form "d.d"."""
        items = []
        for _ in range(2):
            text = f"{_remainder(next_int(), 10)}.{_remainder(next_int(), 10)}"
            try:
                items.append(Decimal(BigDecimal(text)))
            except decimal.InvalidOperation:
                raise ValueError(f"random value {text!r} is not a decimal") from None
        return cls(items)