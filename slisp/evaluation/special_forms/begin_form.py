from slisp import EvaluatorFn
from slisp.errors import ArityError
from slisp.types.environment import Environment
from slisp.types.expression import Expression


def begin_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    if not tail:
        raise ArityError("begin requires at least 1 argument")
    for e in tail[:-1]:
        evaluate_fn(e, env)
    return evaluate_fn(tail[-1], env)
