"""PostgreSQL geometric types: point, line, lseg, box, path, polygon and circle."""

from __future__ import annotations

import decimal
import math
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

_NUMBER = r"-?[0-9]+(?:\.[0-9]+)?"
_POINT = re.compile(rf"\(({_NUMBER}),({_NUMBER})\)")
_POINTS = re.compile(rf"\((?:{_NUMBER}),(?:{_NUMBER})\)")
_LINE = re.compile(rf"\{{({_NUMBER}),({_NUMBER}),({_NUMBER})\}}")
_CLOSED_PATH = re.compile(r"\(\(")


def _to_text(src: Any) -> str:
    if isinstance(src, str):
        return src
    if isinstance(src, (bytes, bytearray, memoryview)):
        return bytes(src).decode("utf-8")
    raise TypeError(f"incompatible type {type(src).__name__}")


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"invalid float {text!r}")
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"invalid float {text!r}") from None


def _format_float(v: float) -> str:
    """Shortest text for ``v``, switching to exponent form for large or tiny values."""
    v = float(v)
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "+Inf" if v > 0 else "-Inf"
    if v == 0:
        return "-0" if math.copysign(1.0, v) < 0 else "0"

    sign, digit_tuple, exponent = decimal.Decimal(repr(v)).as_tuple()
    digits = "".join(map(str, digit_tuple))
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    digits = stripped
    exp10 = len(digits) + exponent - 1
    prefix = "-" if sign else ""

    if exp10 < -4 or exp10 >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "+" if exp10 >= 0 else "-"
        return f"{prefix}{mantissa}e{exp_sign}{abs(exp10):02d}"

    if exp10 >= 0:
        whole = digits[: exp10 + 1].ljust(exp10 + 1, "0")
        frac = digits[exp10 + 1 :]
        return prefix + whole + ("." + frac if frac else "")
    return prefix + "0." + "0" * (-exp10 - 1) + digits


def _random_number(next_int: Callable[[], int]) -> float:
    return float(next_int())


@dataclass(frozen=True)
class Point:
    """A two-dimensional point."""

    x: float = 0.0
    y: float = 0.0

    def value(self) -> str:
        """Return the database text "(x,y)"."""
        return format_point(self)

    @classmethod
    def scan(cls, src: Any) -> Point:
        """Build a point from database text; NULL gives the origin."""
        if src is None:
            return cls()
        return parse_point(_to_text(src))

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> Point:
        """Make a point with random coordinates."""
        return cls(_random_number(next_int), _random_number(next_int))


def _random_points(next_int: Callable[[], int], n: int) -> tuple[Point, ...]:
    return tuple(Point.randomize(next_int, "", False) for _ in range(max(n, 0)))


def parse_point(text: str) -> Point:
    """Parse exactly one point written as "(x,y)"."""
    match = _POINT.fullmatch(text)
    if match is None:
        raise ValueError("wrong point")
    return Point(_parse_float(match.group(1)), _parse_float(match.group(2)))


def parse_points(text: str) -> list[Point]:
    """Find every "(x,y)" point in ``text``, in order."""
    return [parse_point(found) for found in _POINTS.findall(text)]


def format_point(point: Point) -> str:
    """Write a point as "(x,y)"."""
    return f"({_format_float(point.x)},{_format_float(point.y)})"


def format_points(points: Iterable[Point]) -> str:
    """Write points as "(x,y)" separated by commas."""
    return ",".join(format_point(p) for p in points)


def _scan_points(src: Any) -> list[Point]:
    return parse_points(_to_text(src))


@dataclass(frozen=True)
class Line:
    """An infinite line Ax + By + C = 0."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0

    def value(self) -> str:
        """Return the database text "{A,B,C}"."""
        return "{" + ",".join(_format_float(n) for n in (self.a, self.b, self.c)) + "}"

    @classmethod
    def scan(cls, src: Any) -> Line:
        """Build a line from database text; NULL gives all zeros."""
        if src is None:
            return cls()
        match = _LINE.fullmatch(_to_text(src))
        if match is None:
            raise ValueError("wrong line")
        return cls(*(_parse_float(g) for g in match.groups()))

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> Line:
        """Make a line with random A and B and C of zero."""
        return cls(_random_number(next_int), _random_number(next_int), 0.0)


@dataclass(frozen=True)
class Lseg:
    """A line segment between two end points."""

    a: Point = field(default_factory=Point)
    b: Point = field(default_factory=Point)

    def value(self) -> str:
        """Return the database text "[(x1,y1),(x2,y2)]"."""
        return f"[{format_points((self.a, self.b))}]"

    @classmethod
    def scan(cls, src: Any) -> Lseg:
        """Build a segment from database text; NULL gives two origins."""
        if src is None:
            return cls()
        points = _scan_points(src)
        if len(points) != 2:
            raise ValueError("wrong lseg")
        return cls(points[0], points[1])

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> Lseg:
        """Make a segment between two random points."""
        return cls(*_random_points(next_int, 2))


@dataclass(frozen=True)
class Box:
    """A box given by two opposite corners."""

    a: Point = field(default_factory=Point)
    b: Point = field(default_factory=Point)

    def value(self) -> str:
        """Return the database text "((x1,y1),(x2,y2))"."""
        return f"({format_points((self.a, self.b))})"

    @classmethod
    def scan(cls, src: Any) -> Box:
        """Build a box from database text; NULL gives two origins."""
        if src is None:
            return cls()
        points = _scan_points(src)
        if len(points) != 2:
            raise ValueError("wrong box")
        return cls(points[0], points[1])

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> Box:
        """Make a box between two random corners."""
        return cls(*_random_points(next_int, 2))


@dataclass(frozen=True)
class Path:
    """Connected points; a closed path joins the last point to the first."""

    points: tuple[Point, ...] = ()
    closed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    def value(self) -> str:
        """Return "(...)" for a closed path and "[...]" for an open one."""
        body = format_points(self.points)
        return f"({body})" if self.closed else f"[{body}]"

    @classmethod
    def scan(cls, src: Any) -> Path:
        """Build a path from database text; NULL gives an empty open path."""
        if src is None:
            return cls()
        text = _to_text(src)
        points = parse_points(text)
        if not points:
            raise ValueError("wrong path")
        return cls(tuple(points), _CLOSED_PATH.match(text) is not None)

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> Path:
        """Make a path of three random points, closed at random."""
        points = _random_points(next_int, 3)
        return cls(points, _random_number(next_int) < 40)


@dataclass(frozen=True)
class Polygon:
    """A polygon given by its vertices."""

    points: tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    def value(self) -> str:
        """Return the database text "((x1,y1),...)"."""
        return f"({format_points(self.points)})"

    @classmethod
    def scan(cls, src: Any) -> Polygon:
        """Build a polygon from database text; NULL gives an empty polygon."""
        if src is None:
            return cls()
        points = _scan_points(src)
        if not points:
            raise ValueError("wrong polygon")
        return cls(tuple(points))

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> Polygon:
        """Make a polygon of three random vertices."""
        return cls(_random_points(next_int, 3))


@dataclass(frozen=True)
class Circle:
    """A circle given by its center and radius."""

    center: Point = field(default_factory=Point)
    radius: float = 0.0

    def value(self) -> str:
        """Return the database text "<(x,y),r>"."""
        return f"<{format_point(self.center)},{_format_float(self.radius)}>"

    @classmethod
    def scan(cls, src: Any) -> Circle:
        """Build a circle from database text; NULL gives a zero circle at the origin."""
        if src is None:
            return cls()
        text = _to_text(src)
        points = parse_points(text)
        parts = text.split("),")
        if len(points) != 1 or len(parts) != 2:
            raise ValueError("wrong circle")
        return cls(points[0], _parse_float(parts[1].strip(">")))

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> Circle:
        """Make a circle with a random center and radius."""
        center = Point.randomize(next_int, field_type, False)
        return cls(center, _random_number(next_int))