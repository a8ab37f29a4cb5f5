import pytest

from slisp.errors import (
    ArityError,
    InterpreterSemanticError,
    RedefinitionError,
    SemanticTypeError,
    UnboundSymbolError,
    UnknownProcedureError,
)
from slisp.evaluation.evaluator import evaluate
from slisp.reader.parser import parse_source
from slisp.types.expression import Expression


def test_self_evaluating_literals(run):
    assert run("1") == Expression(1.0)
    assert run("3.14") == Expression(3.14)
    assert run("True") == Expression(True)
    assert run("False") == Expression(False)


def test_symbol_lookup(run):
    run("(define x 42)")
    assert run("x") == Expression(42.0)
    with pytest.raises(UnboundSymbolError):
        run("z")


def test_pi(run):
    assert run("pi").head.value == pytest.approx(3.141592653589793)


# --- define ---
def test_define_returns_value(run, interp):
    assert run("(define a 1)") == Expression(1.0)
    assert interp.is_symbol_string_defined("a")


def test_define_evaluates_value(run):
    assert run("(define a (if (< (* 2 3) 8) (+ 1 (if True 2 3)) 4))") == Expression(3.0)
    assert run("a") == Expression(3.0)


def test_define_is_idempotent(run, interp):
    run("(define x 5)")
    run("(define x 5)")
    assert interp.env.lookup("x") == Expression(5.0)
    interp.reset_environment()
    assert not interp.is_symbol_string_defined("x")
    assert interp.is_symbol_string_defined("+")


@pytest.mark.parametrize(
    "source, error",
    [
        ("(define 1 2)", SemanticTypeError),
        ("(define 123 456)", SemanticTypeError),
        ("(define True 1)", SemanticTypeError),
        ("(define (+ 1 2) 1)", SemanticTypeError),
        ("(define x)", ArityError),
        ("(define x 1 2)", ArityError),
        ("(define + 10)", RedefinitionError),
        ("(define pi 3)", RedefinitionError),
        ("(define if 1)", RedefinitionError),
        ("(define begin 1)", RedefinitionError),
    ]
)
def test_define_errors(run, source, error):
    with pytest.raises(error):
        run(source)


def test_define_target_checked_before_value(run, interp):
    # The value would fail too; the bad target is reported first
    with pytest.raises(SemanticTypeError):
        run("(define 1 (/ 1 0))")


def test_failed_define_does_not_bind(run, interp):
    with pytest.raises(InterpreterSemanticError):
        run("(define x (/ 1 0))")
    assert not interp.is_symbol_string_defined("x")


def test_failed_redefine_keeps_old_value(run):
    run("(define x 1)")
    with pytest.raises(InterpreterSemanticError):
        run("(define x (+ True 1))")
    assert run("x") == Expression(1.0)


# --- if ---
@pytest.mark.parametrize(
    "source, expected",
    [
        ("(if True 2 3)", Expression(2.0)),
        ("(if False 2 3)", Expression(3.0)),
        ("(if (< 1 2) (+ 1 1) (- 1 1))", Expression(2.0)),
        ("(if (not True) 1 (if True 5 6))", Expression(5.0)),
    ]
)
def test_if(run, source, expected):
    assert run(source) == expected


def test_if_only_evaluates_selected_branch(run, interp):
    assert run("(if True 2 (define never 3))") == Expression(2.0)
    assert not interp.is_symbol_string_defined("never")
    assert run("(if True 2 (/ 1 0))") == Expression(2.0)
    assert run("(if False (unknownOp 1) 7)") == Expression(7.0)


@pytest.mark.parametrize(
    "source, error",
    [
        ("(if 1 (+ 1 1) (- 1 1))", SemanticTypeError),
        ("(if (+ 1 1) 1 2)", SemanticTypeError),
        ("(if (< 1 2) (+ 1 1))", ArityError),
        ("(if True 1 2 3)", ArityError),
        ("(if)", ArityError),
    ]
)
def test_if_errors(run, source, error):
    with pytest.raises(error):
        run(source)


# --- begin ---
@pytest.mark.parametrize(
    "source, expected",
    [
        ("(begin (define a 1) (define b (+ a 1)) (* b 10))", Expression(20.0)),
        ("(begin (define a 1) (define b 2))", Expression(2.0)),
        ("(begin (define a 1) (define b 2) (define c 3))", Expression(3.0)),
        ("(begin 7)", Expression(7.0)),
    ]
)
def test_begin(run, source, expected):
    assert run(source) == expected


def test_empty_begin_fails(run):
    with pytest.raises(ArityError):
        run("(begin)")


def test_begin_stops_at_first_error(run, interp):
    with pytest.raises(InterpreterSemanticError):
        run("(begin (define a 1) (/ a 0) (define b 2))")
    assert interp.is_symbol_string_defined("a")
    assert not interp.is_symbol_string_defined("b")


# --- application ---
@pytest.mark.parametrize(
    "source, error",
    [
        ("(unsupportedOp 1 2)", UnknownProcedureError),
        ("(foo)", UnboundSymbolError),
        ("(1 2)", SemanticTypeError),
        ("(True 1)", SemanticTypeError),
        ("+", ArityError),
    ]
)
def test_application_errors(run, source, error):
    with pytest.raises(error):
        run(source)


def test_user_value_is_not_a_procedure(run):
    run("(define x 1)")
    with pytest.raises(UnknownProcedureError):
        run("(x 2)")


def test_unknown_procedure_evaluates_no_operands(run, interp):
    with pytest.raises(UnknownProcedureError):
        run("(nope (define y 1))")
    assert not interp.is_symbol_string_defined("y")


def test_operands_left_to_right(run, interp):
    with pytest.raises(ArityError):
        run("(+ (define a 1) (define b a) (begin))")
    assert run("b") == Expression(1.0)


def test_evaluate_directly(interp):
    expr = parse_source("(begin (define q 4) (* q q))")
    assert evaluate(expr, interp.env) == Expression(16.0)
    assert interp.env.lookup("q") == Expression(4.0)


def test_environment_persists_across_programs(run):
    run("(define r 10)")
    assert run("(+ r 1)") == Expression(11.0)
