# Core type aliases for slisp's data model.
# Unlike a general Lisp, code and values share one tree type: an Expression
# whose head is a tagged Atom. Parsed programs and evaluation results are both
# Expressions; only evaluation results may carry geometry or List heads.

from typing import Callable

from slisp.types.atom import Atom, AtomType, Point, Line, Arc
from slisp.types.expression import Expression

# Evaluator function type: used by special forms to recurse into operands
EvaluatorFn = Callable[..., Expression]

__all__ = [
    "Atom",
    "AtomType",
    "Point",
    "Line",
    "Arc",
    "Expression",
    "EvaluatorFn",
]
