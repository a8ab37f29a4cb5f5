"""Scene items for drawable results, and SVG export.

Each geometry atom maps to one canvas item:

- Point -> EllipseItem, a 1x1 ellipse anchored at the point
- Line  -> LineItem between its two end points
- Arc   -> ArcItem; the radius is the distance from center to start, the
  start angle is the direction of start seen from center, and the span is
  swept counter-clockwise for positive values

Coordinates are canvas coordinates (y grows downwards), as in a graphics
scene; no axis flip is applied.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from io import StringIO
from typing import Iterable, Union

from slisp.config import get_svg_margin
from slisp.types.atom import Arc, Atom, Line, Point

STROKE = "black"


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def united(self, other: Rect) -> Rect:
        left = min(self.x, other.x)
        top = min(self.y, other.y)
        right = max(self.x + self.width, other.x + other.width)
        bottom = max(self.y + self.height, other.y + other.height)
        return Rect(left, top, right - left, bottom - top)


@dataclass(frozen=True)
class EllipseItem:
    x: float
    y: float
    width: float = 1.0
    height: float = 1.0

    def bounding_rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def to_svg(self) -> str:
        rx, ry = self.width / 2, self.height / 2
        return (
            f'<ellipse cx="{_n(self.x + rx)}" cy="{_n(self.y + ry)}" '
            f'rx="{_n(rx)}" ry="{_n(ry)}" stroke="{STROKE}" fill="{STROKE}"/>'
        )


@dataclass(frozen=True)
class LineItem:
    x1: float
    y1: float
    x2: float
    y2: float

    def bounding_rect(self) -> Rect:
        return Rect(
            min(self.x1, self.x2),
            min(self.y1, self.y2),
            abs(self.x2 - self.x1),
            abs(self.y2 - self.y1),
        )

    def to_svg(self) -> str:
        return (
            f'<line x1="{_n(self.x1)}" y1="{_n(self.y1)}" '
            f'x2="{_n(self.x2)}" y2="{_n(self.y2)}" stroke="{STROKE}"/>'
        )


@dataclass(frozen=True)
class ArcItem:
    center: Point
    radius: float
    start_angle: float  # radians
    span: float  # radians

    def bounding_rect(self) -> Rect:
        """Bounding box of the full circle the arc lies on."""
        return Rect(
            self.center.x - self.radius,
            self.center.y - self.radius,
            2 * self.radius,
            2 * self.radius,
        )

    @property
    def start_angle_16(self) -> int:
        """Start angle in 1/16th of a degree, the unit graphics toolkits draw arcs in."""
        return round(math.degrees(self.start_angle) * 16)

    @property
    def span_angle_16(self) -> int:
        return round(math.degrees(self.span) * 16)

    def point_at(self, angle: float) -> Point:
        return Point(
            self.center.x + self.radius * math.cos(angle),
            self.center.y + self.radius * math.sin(angle),
        )

    def to_svg(self) -> str:
        if self.radius == 0 or self.span == 0:
            p = self.point_at(self.start_angle)
            return f'<path d="M {_n(p.x)} {_n(p.y)}" stroke="{STROKE}" fill="none"/>'
        # An SVG arc segment cannot close on itself; split anything over half a turn
        segments = max(1, math.ceil(abs(self.span) / math.pi))
        step = self.span / segments
        sweep = 1 if self.span > 0 else 0
        start = self.point_at(self.start_angle)
        with StringIO() as d:
            d.write(f"M {_n(start.x)} {_n(start.y)}")
            for i in range(1, segments + 1):
                p = self.point_at(self.start_angle + step * i)
                d.write(
                    f" A {_n(self.radius)} {_n(self.radius)} 0 0 {sweep} {_n(p.x)} {_n(p.y)}"
                )
            return f'<path d="{d.getvalue()}" stroke="{STROKE}" fill="none"/>'


SceneItem = Union[EllipseItem, LineItem, ArcItem]


def item_for_atom(atom: Atom) -> SceneItem:
    value = atom.value
    if isinstance(value, Point):
        return EllipseItem(value.x, value.y)
    if isinstance(value, Line):
        return LineItem(value.first.x, value.first.y, value.second.x, value.second.y)
    if isinstance(value, Arc):
        dx = value.start.x - value.center.x
        dy = value.start.y - value.center.y
        return ArcItem(value.center, math.hypot(dx, dy), math.atan2(dy, dx), value.span)
    raise ValueError(f"{atom.type.value} atoms are not drawable")


@dataclass
class Scene:
    items: list[SceneItem] = field(default_factory=list)

    @classmethod
    def from_atoms(cls, atoms: Iterable[Atom]) -> Scene:
        return cls([item_for_atom(atom) for atom in atoms])

    def add(self, item: SceneItem) -> None:
        self.items.append(item)

    def clear(self) -> None:
        self.items.clear()

    def bounding_rect(self) -> Rect:
        if not self.items:
            return Rect(0, 0, 0, 0)
        rect = self.items[0].bounding_rect()
        for item in self.items[1:]:
            rect = rect.united(item.bounding_rect())
        return rect

    def to_svg(self, margin: float | None = None) -> str:
        if margin is None:
            margin = get_svg_margin()
        box = self.bounding_rect()
        with StringIO() as buffer:
            buffer.write(
                '<svg xmlns="http://www.w3.org/2000/svg" '
                f'viewBox="{_n(box.x - margin)} {_n(box.y - margin)} '
                f'{_n(box.width + 2 * margin)} {_n(box.height + 2 * margin)}">\n'
            )
            for item in self.items:
                buffer.write("  ")
                buffer.write(item.to_svg())
                buffer.write("\n")
            buffer.write("</svg>\n")
            return buffer.getvalue()


def _n(value: float) -> str:
    """Compact SVG number."""
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text
