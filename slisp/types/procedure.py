"""Built-in procedure descriptor.

A Builtin pairs a native Python function with its arity and operand types so
that arity and type checking happen in one place, before the function runs.
The function receives the atom payloads (floats, bools, Points, ...) and may
return either a raw value or an Expression.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from slisp.types.atom import AtomType
from slisp.types.expression import Expression
from slisp.errors import ArityError, SemanticTypeError

# One allowed type for every operand, a set of allowed types, or one entry per position
OperandTypes = Union[AtomType, frozenset, tuple]


@dataclass(frozen=True)
class Builtin:
    name: str
    fn: Callable[[list[Any]], Any]
    min_args: int
    max_args: Optional[int]
    operand_types: OperandTypes
    doc: str = ""

    @property
    def signature(self) -> str:
        if self.max_args is None:
            arity = f"{self.min_args}+"
        elif self.min_args == self.max_args:
            arity = str(self.min_args)
        else:
            arity = f"{self.min_args}-{self.max_args}"
        return f"({self.name} ...) [{arity} args]"

    def check_arity(self, count: int) -> None:
        if count < self.min_args or (self.max_args is not None and count > self.max_args):
            if self.max_args is None:
                expected = f"at least {self.min_args}"
            elif self.min_args == self.max_args:
                expected = f"exactly {self.min_args}"
            else:
                expected = f"{self.min_args} to {self.max_args}"
            raise ArityError(
                f"{self.name} requires {expected} argument(s), got {count}"
            )

    def _allowed(self, position: int) -> frozenset:
        types = self.operand_types
        if isinstance(types, tuple):
            types = types[position]
        if isinstance(types, AtomType):
            return frozenset({types})
        return types

    def check_types(self, args: Sequence[Expression]) -> None:
        for position, arg in enumerate(args):
            allowed = self._allowed(position)
            if arg.head.type not in allowed or arg.tail:
                names = "/".join(sorted(t.value for t in allowed))
                raise SemanticTypeError(
                    f"{self.name} expects {names} for argument {position + 1}, "
                    f"got {arg.head.type.value}"
                )

    def __call__(self, args: Sequence[Expression]) -> Expression:
        self.check_arity(len(args))
        self.check_types(args)
        result = self.fn([arg.head.value for arg in args])
        if isinstance(result, Expression):
            return result
        return Expression(result)
