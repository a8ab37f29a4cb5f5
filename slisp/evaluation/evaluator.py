"""Core evaluator for the slisp interpreter.

Dispatches on the head atom of an expression: literals evaluate to
themselves, symbols are looked up, and applications go either to a special
form handler or to a built-in procedure.
"""

from __future__ import annotations

from slisp.errors import SemanticTypeError
from slisp.evaluation.apply import apply
from slisp.evaluation.special_forms import SPECIAL_FORMS
from slisp.types.atom import AtomType
from slisp.types.environment import Environment
from slisp.types.expression import Expression


def evaluate(expr: Expression, env: Environment) -> Expression:
    """Reduce `expr` against `env`.

    Raises InterpreterSemanticError (or a subclass) on any contract
    violation. Only `define` mutates `env`.
    """
    head = expr.head
    match head.type:
        case AtomType.SYMBOL:
            name = head.value
            if name in SPECIAL_FORMS:
                return SPECIAL_FORMS[name](expr.tail, env, evaluate)
            # (+) parses to the same tree as a bare +: treat both as a call
            if expr.tail or env.is_procedure(name):
                return apply(name, expr.tail, env, evaluate)
            return env.lookup(name)
        case AtomType.BOOLEAN | AtomType.NUMBER:
            if expr.tail:
                raise SemanticTypeError(f"Cannot apply {head.type.value} {head} as a procedure")
            return expr
        case AtomType.POINT | AtomType.LINE | AtomType.ARC | AtomType.LIST:
            # Already evaluated results
            return expr
        case AtomType.NONE:
            raise SemanticTypeError("Cannot evaluate an empty expression")
    raise AssertionError(f"unhandled atom type {head.type}")
