"""Raw JSON text stored as bytes, checked for validity on its way to the database."""

from __future__ import annotations

import json
from typing import Any

_JSON_SPACE = b" \t\r\n"
_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal {name}")


class JSON(bytes):
    """Raw JSON text."""

    def __new__(cls, data: bytes | bytearray | memoryview | str = b"") -> JSON:
        if isinstance(data, str):
            data = data.encode("utf-8")
        elif isinstance(data, int):
            raise TypeError("JSON text must be bytes or str")
        return super().__new__(cls, data)

    def __str__(self) -> str:
        return self.decode("utf-8")

    def unmarshal(self) -> Any:
        """Decode the JSON text into Python objects."""
        return json.loads(self, parse_constant=_reject_constant)

    @classmethod
    def marshal(cls, obj: Any) -> JSON:
        """Encode ``obj`` as compact JSON text."""
        text = json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        return cls(text.translate(_ESCAPES))

    @classmethod
    def unmarshal_json(cls, data: bytes | str) -> JSON:
        """Keep a copy of the given JSON text."""
        return cls(data)

    def marshal_json(self) -> bytes:
        """Return the JSON text unchanged."""
        return bytes(self)

    def value(self) -> bytes:
        """Return the JSON text for the database, raising ValueError if it is invalid."""
        self.unmarshal()
        return bytes(self).strip(_JSON_SPACE)

    @classmethod
    def scan(cls, src: Any) -> JSON:
        """Take the JSON text from a string or bytes."""
        if isinstance(src, (str, bytes, bytearray, memoryview)):
            return cls(src)
        raise TypeError("incompatible type for json")