from __future__ import annotations

from io import StringIO
from typing import Iterable, Iterator, Optional

from slisp.types.atom import Atom, AtomType


class Expression:
    """A tree node: a head Atom and an ordered tail of child Expressions.

    A leaf has an empty tail. A parsed application keeps the operator symbol
    in `head` and operands in `tail`; an evaluated List result keeps its
    already evaluated items in `tail`.
    """

    __slots__ = ("head", "tail")

    def __init__(self, head: object = None, tail: Optional[Iterable[Expression]] = None):
        self.head: Atom = Atom.from_value(head)
        self.tail: list[Expression] = list(tail) if tail is not None else []

    @classmethod
    def list_of(cls, items: Iterable[Expression]) -> Expression:
        return cls(Atom.list(), items)

    @property
    def is_leaf(self) -> bool:
        return not self.tail

    def walk(self) -> Iterator[Expression]:
        """Pre-order traversal of this node and every descendant."""
        yield self
        for child in self.tail:
            yield from child.walk()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        return self.head == other.head and self.tail == other.tail

    def __hash__(self) -> int:
        return hash((self.head, tuple(self.tail)))

    def __repr__(self) -> str:
        if not self.tail:
            return f"Expression({self.head!r})"
        return f"Expression({self.head!r}, {self.tail!r})"

    def __str__(self) -> str:
        if not self.tail:
            return str(self.head)
        with StringIO() as buffer:
            buffer.write("(")
            if self.head.type is not AtomType.LIST:
                buffer.write(str(self.head))
                buffer.write(" ")
            buffer.write(" ".join(str(child) for child in self.tail))
            buffer.write(")")
            return buffer.getvalue()
