"""Parsing and quoting of PostgreSQL array literals in text format."""

from __future__ import annotations

_LBRACE = ord("{")
_RBRACE = ord("}")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")


class ArrayParseError(ValueError):
    """Raised when array text cannot be parsed or converted."""


def _as_bytes(v: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(v, str):
        return v.encode("utf-8")
    return bytes(v)


def _unexpected(src: bytes, i: int) -> ArrayParseError:
    return ArrayParseError(
        f"unable to parse array; unexpected {chr(src[i])!r} at offset {i}"
    )


def parse_array(
    src: bytes | str, delimiter: bytes | str = b","
) -> tuple[list[int], list[bytes | None]]:
    """Split array text into its dimensions and its elements.

    Only the form the server emits is accepted: whitespace is significant
    and NULL is case-sensitive. NULL elements come back as None.
    """
    data = _as_bytes(src)
    delim = _as_bytes(delimiter)
    if not delim:
        raise ValueError("array delimiter must not be empty")
    n = len(data)

    if n < 1 or data[0] != _LBRACE:
        raise ArrayParseError("unable to parse array; expected '{' at offset 0")

    depth = 0
    i = 0
    dims: list[int] = []
    elems: list[bytes | None] = []

    empty = False
    while i < n:
        if data[i] == _LBRACE:
            depth += 1
            i += 1
        elif data[i] == _RBRACE:
            empty = True
            break
        else:
            break

    if not empty:
        dims = [0] * i
        while True:
            # One element, possibly preceded by opening braces.
            while i < n:
                c = data[i]
                if c == _LBRACE:
                    if depth == len(dims):
                        break
                    depth += 1
                    dims[depth - 1] = 0
                    i += 1
                elif c == _QUOTE:
                    elem = bytearray()
                    escape = False
                    i += 1
                    while i < n:
                        b = data[i]
                        if escape:
                            elem.append(b)
                            escape = False
                        elif b == _BACKSLASH:
                            escape = True
                        elif b == _QUOTE:
                            elems.append(bytes(elem))
                            i += 1
                            break
                        else:
                            elem.append(b)
                        i += 1
                    break
                else:
                    start = i
                    while i < n:
                        if data.startswith(delim, i) or data[i] == _RBRACE:
                            raw = data[start:i]
                            if not raw:
                                raise _unexpected(data, i)
                            elems.append(None if raw == b"NULL" else raw)
                            break
                        i += 1
                    break

            # Closing braces and the delimiter before the next element.
            another = False
            while i < n:
                if data.startswith(delim, i) and depth > 0:
                    dims[depth - 1] += 1
                    i += len(delim)
                    another = True
                    break
                if data[i] == _RBRACE and depth > 0:
                    dims[depth - 1] += 1
                    depth -= 1
                    i += 1
                else:
                    raise _unexpected(data, i)
            if not another:
                break

    while i < n:
        if data[i] == _RBRACE and depth > 0:
            depth -= 1
            i += 1
        else:
            raise _unexpected(data, i)

    if depth > 0:
        raise ArrayParseError(f"unable to parse array; expected '}}' at offset {i}")
    for d in dims:
        if d and len(elems) % d:
            raise ArrayParseError(
                "multidimensional arrays must have elements with matching dimensions"
            )
    return dims, elems


def scan_linear_array(
    src: bytes | str, delimiter: bytes | str, type_name: str
) -> list[bytes | None]:
    """Parse array text that must have at most one dimension."""
    dims, elems = parse_array(src, delimiter)
    if len(dims) > 1:
        shape = "".join(f"[{d}]" for d in dims)
        raise ArrayParseError(f"cannot convert ARRAY{shape} to {type_name}")
    return elems


def quote_array_bytes(v: bytes | str) -> bytes | str:
    """Double-quote an array element, escaping quotes and backslashes.

    Returns the same type it was given.
    """
    if isinstance(v, str):
        return '"' + v.replace("\\", "\\\\").replace('"', '\\"') + '"'
    data = bytes(v)
    return b'"' + data.replace(b"\\", b"\\\\").replace(b'"', b'\\"') + b'"'