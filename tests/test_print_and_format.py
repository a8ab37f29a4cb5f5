import pytest

from slisp.debug_utils.pprint import (
    COLOR_BUILTIN,
    COLOR_SPECIAL_FORM,
    COLOR_SYMBOL,
    DEFAULT_OPTIONS,
    RESET,
    colorize,
    load_options_from_json,
    plain_options,
    pprint_expr,
)
from slisp.interpreter import Interpreter
from slisp.types.expression import Expression


@pytest.fixture
def interp_env():
    return Interpreter().env


def _ast(source):
    interp = Interpreter()
    assert interp.parse(source)
    return interp.ast


def test_plain_single_line(interp_env):
    expr = _ast("(begin (define a 1) (draw (point a 2.5)))")
    assert pprint_expr(expr, env=interp_env, options=plain_options()) == "(begin (define a 1) (draw (point a 2.5)))"


def test_long_expressions_wrap():
    options = {**plain_options(), "max_line_length": 10}
    assert pprint_expr(_ast("(+ 1 2 3 4 5 6)"), options=options) == "(+\n  1\n  2\n  3\n  4\n  5\n  6)"


def test_max_depth_elides():
    options = {**plain_options(), "max_depth": 1}
    assert pprint_expr(_ast("(+ 1 (+ 2 3))"), options=options) == "(+ … …)"


@pytest.mark.parametrize(
    "name, color",
    [("+", COLOR_BUILTIN), ("define", COLOR_SPECIAL_FORM), ("x", COLOR_SYMBOL)]
)
def test_colorize_symbols(interp_env, name, color):
    assert colorize(Expression(name), interp_env, DEFAULT_OPTIONS) == f"{color}{name}{RESET}"


def test_legend_only_at_top_level():
    options = {**plain_options(), "display_legend": True}
    out = pprint_expr(_ast("(+ 1 (- 2))"), options=options)
    assert out.startswith("Color Key: ")
    assert out.count("Color Key: ") == 1
    assert out.endswith("(+ 1 (- 2))")


def test_load_options_from_json():
    opts = load_options_from_json('{"max_depth": 2}')
    assert opts["max_depth"] == 2
    assert opts["max_line_length"] == DEFAULT_OPTIONS["max_line_length"]
    assert load_options_from_json("{broken") == DEFAULT_OPTIONS
