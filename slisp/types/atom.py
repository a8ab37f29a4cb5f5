"""Tagged atom values.

An Atom is a closed union: the `type` tag selects exactly one variant and
`value` carries its payload. Geometry payloads are small frozen dataclasses so
they compare and hash by value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class AtomType(Enum):
    NONE = "None"
    BOOLEAN = "Boolean"
    NUMBER = "Number"
    SYMBOL = "Symbol"
    POINT = "Point"
    LINE = "Line"
    ARC = "Arc"
    LIST = "List"


DRAWABLE_TYPES = frozenset({AtomType.POINT, AtomType.LINE, AtomType.ARC})


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __str__(self) -> str:
        return f"({format_number(self.x)},{format_number(self.y)})"


@dataclass(frozen=True)
class Line:
    first: Point
    second: Point

    def __str__(self) -> str:
        return f"({self.first},{self.second})"


@dataclass(frozen=True)
class Arc:
    center: Point
    start: Point
    span: float  # radians

    def __str__(self) -> str:
        return f"({self.center},{self.start} {format_number(self.span)})"


AtomValue = Union[None, bool, float, str, Point, Line, Arc]


def format_number(value: float) -> str:
    """Shortest text that reads back as the same float; integral values drop the fraction."""
    value = float(value)
    if math.isinf(value):
        # Out of range for a double, so it reads back as infinity
        return "1e999" if value > 0 else "-1e999"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


class Atom:
    __slots__ = ("type", "value")

    def __init__(self, type: AtomType = AtomType.NONE, value: AtomValue = None):
        self.type = type
        self.value = value

    # --- Named constructors ---
    @classmethod
    def boolean(cls, value: bool) -> Atom:
        return cls(AtomType.BOOLEAN, bool(value))

    @classmethod
    def number(cls, value: float) -> Atom:
        return cls(AtomType.NUMBER, float(value))

    @classmethod
    def symbol(cls, name: str) -> Atom:
        return cls(AtomType.SYMBOL, name)

    @classmethod
    def point(cls, x: float, y: float) -> Atom:
        return cls(AtomType.POINT, Point(float(x), float(y)))

    @classmethod
    def line(cls, first: Point, second: Point) -> Atom:
        return cls(AtomType.LINE, Line(first, second))

    @classmethod
    def arc(cls, center: Point, start: Point, span: float) -> Atom:
        return cls(AtomType.ARC, Arc(center, start, float(span)))

    @classmethod
    def list(cls) -> Atom:
        return cls(AtomType.LIST)

    @classmethod
    def from_value(cls, value: Any) -> Atom:
        """Wrap a raw Python value in the matching variant."""
        # bool first: bool is a subclass of int
        if isinstance(value, Atom):
            return value
        if value is None:
            return cls()
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, (int, float)):
            return cls.number(value)
        if isinstance(value, str):
            return cls.symbol(value)
        if isinstance(value, Point):
            return cls(AtomType.POINT, value)
        if isinstance(value, Line):
            return cls(AtomType.LINE, value)
        if isinstance(value, Arc):
            return cls(AtomType.ARC, value)
        raise TypeError(f"Cannot make an atom from {value!r}")

    @property
    def is_drawable(self) -> bool:
        return self.type in DRAWABLE_TYPES

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Atom)
            and self.type is other.type
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value))

    def __repr__(self) -> str:
        return f"Atom({self.type.value}, {self.value!r})"

    def __str__(self) -> str:
        match self.type:
            case AtomType.NONE:
                return "None"
            case AtomType.BOOLEAN:
                return "True" if self.value else "False"
            case AtomType.NUMBER:
                return format_number(self.value)
            case AtomType.SYMBOL:
                return self.value
            case AtomType.POINT | AtomType.LINE | AtomType.ARC:
                return str(self.value)
            case AtomType.LIST:
                return "list"
        raise AssertionError(f"unhandled atom type {self.type}")
