from slisp import EvaluatorFn
from slisp.errors import ArityError, SemanticTypeError
from slisp.types.atom import AtomType
from slisp.types.environment import Environment
from slisp.types.expression import Expression


def if_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    if len(tail) != 3:
        raise ArityError("if requires a condition, a then-expression and an else-expression")

    cond = evaluate_fn(tail[0], env)
    # No truthiness: the condition must be a Boolean
    if cond.head.type is not AtomType.BOOLEAN or cond.tail:
        raise SemanticTypeError(f"if condition must be a Boolean, got {cond}")

    if cond.head.value:
        return evaluate_fn(tail[1], env)
    return evaluate_fn(tail[2], env)
