"""PostgreSQL arrays of any element type and any number of dimensions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .array_text import ArrayParseError, parse_array, quote_array_bytes
from .arrays import (
    BoolArray,
    BytesArray,
    DecimalArray,
    Float64Array,
    Int64Array,
    StringArray,
)
from .textformat import encode

_TEXT_TYPES = (bytes, bytearray, memoryview, str)
_DRIVER_TYPES = (bool, int, float, bytes, bytearray, memoryview, str, datetime)
_TYPED_ARRAYS = (BoolArray, BytesArray, DecimalArray, Float64Array, Int64Array, StringArray)


def _as_bytes(v: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(v, str):
        return v.encode("utf-8")
    return bytes(v)


def _delimiter_of(obj: Any) -> str:
    """Delimiter declared by ``obj`` through ``array_delimiter``, or ",".

    ``array_delimiter`` may be a string or a callable taking no arguments.
    """
    attr = getattr(obj, "array_delimiter", None)
    if attr is None:
        return ","
    delimiter = attr() if callable(attr) else attr
    if not isinstance(delimiter, str) or not delimiter:
        raise TypeError("array_delimiter must be a non-empty string")
    return delimiter


def _shape(dims: list[int]) -> str:
    return "".join(f"[{d}]" for d in dims)


def _driver_value(v: Any) -> Any:
    method = getattr(v, "value", None)
    if callable(method):
        result = method()
        if result is not None and not isinstance(result, _DRIVER_TYPES):
            raise TypeError(
                f"non-value type {type(result).__name__} returned from value()"
            )
        return result
    if v is None or isinstance(v, _DRIVER_TYPES):
        return v
    raise TypeError(f"unsupported type {type(v).__name__}")


def _is_nested(v: Any) -> bool:
    return isinstance(v, (list, tuple)) and not callable(getattr(v, "value", None))


def _append_element(v: Any) -> tuple[bytes, bytes]:
    """Text of one element and the delimiter to write before the next one."""
    if _is_nested(v):
        if v:
            return _append_array(v)
        return b"", b""

    delimiter = _delimiter_of(v).encode("utf-8")
    converted = _driver_value(v)
    if converted is None:
        return b"NULL", delimiter
    if isinstance(converted, _TEXT_TYPES):
        return quote_array_bytes(_as_bytes(converted)), delimiter
    return encode(converted), delimiter


def _append_array(items: list[Any] | tuple[Any, ...]) -> tuple[bytes, bytes]:
    out = bytearray(b"{")
    delimiter = b""
    for index, item in enumerate(items):
        if index:
            out += delimiter
        piece, delimiter = _append_element(item)
        out += piece
    out += b"}"
    return bytes(out), delimiter


@dataclass
class GenericArray:
    """An array of any shape.

    For writing, ``a`` holds the (possibly nested) list or tuple. For reading,
    ``element_type`` names a type with a ``scan`` classmethod, and ``length``
    fixes the number of elements when set.
    """

    a: Any = None
    element_type: type | None = None
    length: int | None = None

    def _target(self) -> str:
        name = getattr(self.element_type, "__name__", repr(self.element_type))
        size = "" if self.length is None else str(self.length)
        return f"[{size}]{name}"

    def scan(self, src: Any) -> list[Any] | None:
        """Read array text into a list of ``element_type`` values.

        The result is also stored in ``a``. NULL gives None unless a fixed
        ``length`` is set.
        """
        if self.element_type is None:
            raise TypeError("destination has no element type to scan into")
        target = self._target()

        if src is None:
            if self.length is None:
                self.a = None
                return None
            raise TypeError(f"cannot convert None to {target}")
        if not isinstance(src, _TEXT_TYPES):
            raise TypeError(f"cannot convert {type(src).__name__} to {target}")

        dims, elems = parse_array(src, _delimiter_of(self.element_type))
        if len(dims) > 1:
            raise ArrayParseError(
                f"scanning from multidimensional ARRAY{_shape(dims)} is not implemented"
            )
        if not dims:
            dims = [0]
        if self.length is not None and self.length != dims[0]:
            raise ArrayParseError(f"cannot convert ARRAY{_shape(dims)} to {target}")

        scanner = getattr(self.element_type, "scan", None)
        values = []
        for index, elem in enumerate(elems):
            if not callable(scanner):
                raise TypeError(
                    f"parsing array element index {index}: scanning to "
                    f"{self.element_type.__name__} is not implemented; "
                    "only types with a scan method"
                )
            try:
                values.append(scanner(elem))
            except (ValueError, TypeError) as exc:
                raise ArrayParseError(
                    f"parsing array element index {index}: {exc}"
                ) from exc

        self.a = values
        return values

    def value(self) -> str | None:
        """Return the array text for the database, or None when ``a`` is None."""
        if self.a is None:
            return None
        if not isinstance(self.a, (list, tuple)):
            raise TypeError(f"Unable to convert {type(self.a).__name__} to array")
        if not self.a:
            return "{}"
        text, _ = _append_array(self.a)
        return text.decode("utf-8", "surrogateescape")


def array(a: Any) -> Any:
    """Pick the most suitable array type for ``a``.

    Non-empty lists of only booleans, integers, floats or strings get the
    matching typed array; everything else is wrapped in a GenericArray.
    """
    if isinstance(a, _TYPED_ARRAYS):
        return a
    if isinstance(a, (list, tuple)) and a:
        if all(isinstance(x, bool) for x in a):
            return BoolArray(a)
        if all(isinstance(x, int) and not isinstance(x, bool) for x in a):
            return Int64Array(a)
        if all(isinstance(x, float) for x in a):
            return Float64Array(a)
        if all(isinstance(x, str) for x in a):
            return StringArray(a)
    return GenericArray(a)