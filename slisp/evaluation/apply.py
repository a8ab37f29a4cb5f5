"""Procedure application for slisp.

Operands are evaluated left to right before the built-in runs; the Builtin
descriptor itself checks arity and operand types.
"""

from slisp import EvaluatorFn
from slisp.types.environment import Environment
from slisp.types.expression import Expression


def apply(
    name: str,
    operands: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    """Apply the built-in procedure called `name` to `operands`.

    Raises UnknownProcedureError before any operand is evaluated when `name`
    is not a procedure.
    """
    procedure = env.lookup_procedure(name)
    args = [evaluate_fn(operand, env) for operand in operands]
    return procedure(args)
