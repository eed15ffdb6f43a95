"""Encoding of scalar values and bytea data in the PostgreSQL text format."""

from __future__ import annotations

import binascii
import decimal
import math
import re
from datetime import datetime
from typing import Any

from .timestamps import format_ts

_BACKSLASH = ord("\\")
_OCTAL = re.compile(r"[+-]?[0-7]+")

# Servers from this version on understand the hex bytea format.
HEX_BYTEA_SERVER_VERSION = 90000


def _format_float(v: float) -> str:
    """Shortest decimal text for ``v`` without an exponent."""
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "+Inf" if v > 0 else "-Inf"
    text = format(decimal.Decimal(repr(v)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _as_bytes(v: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(v, str):
        return v.encode("utf-8")
    return bytes(v)


def encode(value: Any, bytea: bool = False, server_version: int = 0) -> bytes:
    """Encode a scalar value as PostgreSQL text.

    With ``bytea`` set, strings and bytes are written in the bytea format
    suited to ``server_version``.
    """
    if isinstance(value, bool):
        return b"true" if value else b"false"
    if isinstance(value, int):
        return str(value).encode("ascii")
    if isinstance(value, float):
        return _format_float(value).encode("ascii")
    if isinstance(value, (bytes, bytearray, memoryview, str)):
        data = _as_bytes(value)
        return encode_bytea(data, server_version) if bytea else data
    if isinstance(value, datetime):
        return format_ts(value).encode("ascii")
    raise TypeError(f"encode: unknown type for {type(value).__name__}")


def parse_bytea(s: bytes | bytearray | memoryview | str) -> bytes:
    """Decode a bytea value in either the "hex" or the legacy "escape" format."""
    data = _as_bytes(s)
    if data[:2] == b"\\x":
        try:
            return binascii.unhexlify(data[2:])
        except binascii.Error as exc:
            raise ValueError(f"could not parse bytea value: {exc}") from None

    out = bytearray()
    i = 0
    while i < len(data):
        if data[i] == _BACKSLASH:
            if data[i + 1 : i + 2] == b"\\":
                out.append(_BACKSLASH)
                i += 2
                continue
            if len(data) - i < 4:
                raise ValueError(f"invalid bytea sequence {data[i:]!r}")
            digits = data[i + 1 : i + 4].decode("latin-1")
            if not _OCTAL.fullmatch(digits):
                raise ValueError(
                    f"could not parse bytea value: invalid octal number {digits!r}"
                )
            number = int(digits, 8)
            if not -256 <= number <= 255:
                raise ValueError(
                    f"could not parse bytea value: octal number {digits!r} out of range"
                )
            out.append(number & 0xFF)
            i += 4
        else:
            j = data.find(b"\\", i)
            if j == -1:
                out += data[i:]
                break
            out += data[i:j]
            i = j
    return bytes(out)


def encode_bytea(v: bytes | bytearray | memoryview | str, server_version: int = 0) -> bytes:
    """Encode raw bytes as bytea text: hex for newer servers, escape otherwise."""
    data = _as_bytes(v)
    if server_version >= HEX_BYTEA_SERVER_VERSION:
        return b"\\x" + binascii.hexlify(data)
    out = bytearray()
    for b in data:
        if b == _BACKSLASH:
            out += b"\\\\"
        elif b < 0x20 or b > 0x7E:
            out += f"\\{b:03o}".encode("ascii")
        else:
            out.append(b)
    return bytes(out)