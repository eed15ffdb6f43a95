"""A single byte stored in the database and in JSON as a one-character string."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


def _remainder(a: int, b: int) -> int:
    """Remainder that takes the sign of the dividend."""
    r = abs(a) % b
    return -r if a < 0 else r


@dataclass(frozen=True)
class Byte:
    """One byte, held as its integer code."""

    code: int

    def __post_init__(self) -> None:
        if isinstance(self.code, bool) or not isinstance(self.code, int):
            raise TypeError(f"byte code must be an int, not {type(self.code).__name__}")
        if not 0 <= self.code <= 255:
            raise ValueError(f"byte code {self.code} out of range")

    def __str__(self) -> str:
        return chr(self.code)

    @classmethod
    def unmarshal_json(cls, data: bytes | str) -> Byte:
        """Read a JSON string holding exactly one byte."""
        text = json.loads(data)
        if not isinstance(text, str):
            raise ValueError(f"json: cannot convert {type(text).__name__} to byte")
        raw = text.encode("utf-8")
        if len(raw) > 1:
            raise ValueError("json: cannot convert to byte, text len is greater than one")
        if not raw:
            raise ValueError("json: cannot convert to byte, text is empty")
        return cls(raw[0])

    def marshal_json(self) -> bytes:
        """Write the byte as a quoted JSON string."""
        return b'"' + bytes([self.code]) + b'"'

    def value(self) -> bytes:
        """Return the byte for the database."""
        return bytes([self.code])

    @classmethod
    def scan(cls, src: Any) -> Byte:
        """Take the byte from an int, or the first byte of a string or bytes."""
        if isinstance(src, int) and not isinstance(src, bool):
            return cls(src)
        if isinstance(src, str):
            src = src.encode("utf-8")
        if isinstance(src, (bytes, bytearray, memoryview)):
            data = bytes(src)
            if not data:
                raise ValueError("cannot scan an empty value into byte")
            return cls(data[0])
        raise TypeError("incompatible type for byte")

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> Byte:
        """Make a random printable ASCII byte."""
        return cls(_remainder(next_int(), 60) + 65)