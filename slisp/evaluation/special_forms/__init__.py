"""Registry of special forms for the slisp evaluator.

Maps operator names to handler functions that implement non-standard
evaluation rules. The evaluator consults this table before ordinary
procedure application, so operands reach a handler unevaluated.
"""

from slisp.evaluation.special_forms.begin_form import begin_form
from slisp.evaluation.special_forms.define_form import define_form
from slisp.evaluation.special_forms.if_form import if_form

SPECIAL_FORMS = {
    "begin": begin_form,
    "define": define_form,
    "if": if_form,
}
