"""Runtime environment for slisp.

The Environment is a single flat scope. It captures a read-only template of
built-in bindings at construction; `define` adds user bindings on top and
`reset` drops them again. Built-in names can never be rebound.
"""

from __future__ import annotations

from io import StringIO
from types import MappingProxyType
from typing import Mapping, Optional, Union

from slisp.errors import RedefinitionError, UnboundSymbolError, UnknownProcedureError
from slisp.types.expression import Expression
from slisp.types.procedure import Builtin

Binding = Union[Expression, Builtin]


class Environment:
    """Mapping from symbol names to values and built-in procedures."""

    __slots__ = ("vars", "builtins")

    def __init__(self, builtins: Optional[Mapping[str, Binding]] = None):
        self.builtins: Mapping[str, Binding] = MappingProxyType(dict(builtins or {}))
        self.vars: dict[str, Expression] = {}

    def is_symbol_string_defined(self, name: str) -> bool:
        return name in self.vars or name in self.builtins

    def is_builtin(self, name: str) -> bool:
        return name in self.builtins

    def is_procedure(self, name: str) -> bool:
        return isinstance(self.builtins.get(name), Builtin)

    def define(self, name: str, value: Expression) -> None:
        """Bind `name` to `value`, replacing any earlier user binding.

        Raises RedefinitionError if `name` is a built-in.
        """
        if name in self.builtins:
            raise RedefinitionError(f"Cannot redefine built-in symbol {name}")
        self.vars[name] = value

    def lookup(self, name: str) -> Expression:
        """Look up the value bound to `name`.

        Raises UnboundSymbolError if nothing is bound, or if `name` is a
        procedure (procedures are not values in this language).
        """
        if name in self.vars:
            return self.vars[name]
        binding = self.builtins.get(name)
        if isinstance(binding, Expression):
            return binding
        if binding is not None:
            raise UnboundSymbolError(f"Procedure {name} cannot be used as a value")
        raise UnboundSymbolError(f"Cannot lookup unbound symbol {name}")

    def lookup_procedure(self, name: str) -> Builtin:
        binding = self.builtins.get(name)
        if isinstance(binding, Builtin):
            return binding
        raise UnknownProcedureError(f"Unknown procedure {name}")

    def reset(self) -> None:
        """Discard every user binding, leaving exactly the built-ins."""
        self.vars.clear()

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
            buffer.write("}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment {len(self.builtins)} builtins, user {self}>"
