from slisp import EvaluatorFn
from slisp.errors import ArityError, RedefinitionError, SemanticTypeError
from slisp.types.atom import AtomType
from slisp.types.environment import Environment
from slisp.types.expression import Expression


def define_form(
    tail: list[Expression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    """
    (define name value)
    The target is checked before the value is evaluated, and the name is bound
    only after evaluation succeeds. Returns the bound value.
    """
    if len(tail) != 2:
        raise ArityError("define requires exactly 2 arguments")

    target, val_expr = tail
    if target.head.type is not AtomType.SYMBOL or target.tail:
        raise SemanticTypeError(f"define target must be a symbol, got {target}")
    name = target.head.value
    # Imported lazily: the registry imports this module
    from slisp.evaluation.special_forms import SPECIAL_FORMS
    if env.is_builtin(name) or name in SPECIAL_FORMS:
        raise RedefinitionError(f"Cannot redefine built-in symbol {name}")

    value = evaluate_fn(val_expr, env)
    env.define(name, value)
    return value
