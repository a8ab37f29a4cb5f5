"""Geometry constructors and the `draw` aggregator.

`point`, `line` and `arc` build tagged geometry atoms from their components.
`draw` bundles one or more geometry values into a List result so a single
program can hand several shapes to the renderer.
"""
from __future__ import annotations

from slisp.types.atom import Arc, AtomType, DRAWABLE_TYPES, Line, Point
from slisp.types.expression import Expression
from slisp.types.procedure import Builtin


def make_point(args: list[float]) -> Point:
    x, y = args
    return Point(x, y)


def make_line(args: list[Point]) -> Line:
    first, second = args
    return Line(first, second)


def make_arc(args: list) -> Arc:
    center, start, span = args
    return Arc(center, start, span)


def draw(args: list) -> Expression:
    return Expression.list_of(Expression(value) for value in args)


BUILTINS: list[Builtin] = [
    Builtin("point", make_point, 2, 2, AtomType.NUMBER, "(point x y)"),
    Builtin("line", make_line, 2, 2, AtomType.POINT, "(line point point)"),
    Builtin(
        "arc",
        make_arc,
        3,
        3,
        (AtomType.POINT, AtomType.POINT, AtomType.NUMBER),
        "(arc center start span) with span in radians",
    ),
    Builtin("draw", draw, 1, None, DRAWABLE_TYPES, "(draw shape ...) groups shapes for rendering"),
]
