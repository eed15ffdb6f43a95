"""PostgreSQL hstore values: maps from text keys to text or NULL."""

from __future__ import annotations

from typing import Any

_BACKSLASH = ord("\\")
_QUOTE = ord('"')
_EQUALS = ord("=")
_ARROW = ord(">")
_COMMA = ord(",")
_WHITESPACE = frozenset(b" \t\n\r")


def hstore_quote(s: str | None) -> str:
    """Quote and escape a key or value; None becomes NULL."""
    if s is None:
        return "NULL"
    if not isinstance(s, str):
        raise TypeError(f"not a string or None: {type(s).__name__}")
    return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'


class HStore(dict):
    """An hstore value; NULL values are held as None."""

    def _store(self, pair: list[bytearray], did_quote: bool) -> None:
        key = pair[0].decode("utf-8")
        raw = bytes(pair[1])
        if not did_quote and len(raw) == 4 and raw.lower() == b"null":
            self[key] = None
        else:
            self[key] = raw.decode("utf-8")

    @classmethod
    def scan(cls, value: Any) -> HStore | None:
        """Parse hstore text from the database; NULL gives None."""
        if value is None:
            return None
        if isinstance(value, str):
            data = value.encode("utf-8")
        elif isinstance(value, (bytes, bytearray, memoryview)):
            data = bytes(value)
        else:
            raise TypeError(f"incompatible type for hstore: {type(value).__name__}")

        result = cls()
        pair = [bytearray(), bytearray()]
        index = 0
        in_quote = did_quote = saw_slash = False
        for b in data:
            if saw_slash:
                pair[index].append(b)
                saw_slash = False
                continue
            if b == _BACKSLASH:
                saw_slash = True
                continue
            if b == _QUOTE:
                in_quote = not in_quote
                did_quote = True
                continue
            if not in_quote:
                if b in _WHITESPACE or b == _EQUALS:
                    continue
                if b == _ARROW:
                    index = 1
                    did_quote = False
                    continue
                if b == _COMMA:
                    result._store(pair, did_quote)
                    pair = [bytearray(), bytearray()]
                    index = 0
                    continue
            pair[index].append(b)

        if len(data) > 1:
            result._store(pair, did_quote)
        return result

    def value(self) -> bytes:
        """Return the hstore text for the database."""
        parts = (f"{hstore_quote(k)}=>{hstore_quote(v)}" for k, v in self.items())
        return ",".join(parts).encode("utf-8")