"""Built-in binding table shared by every interpreter."""
from __future__ import annotations

import math
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from slisp.builtin import env_builtin, graphics_builtin
from slisp.types.environment import Binding
from slisp.types.expression import Expression

CONSTANTS: dict[str, Expression] = {
    "pi": Expression(math.pi),
}


@lru_cache(maxsize=None)
def default_builtins() -> Mapping[str, Binding]:
    """Return the read-only template of built-in procedures and constants."""
    table: dict[str, Binding] = {}
    for builtin in env_builtin.BUILTINS + graphics_builtin.BUILTINS:
        table[builtin.name] = builtin
    table.update(CONSTANTS)
    return MappingProxyType(table)
