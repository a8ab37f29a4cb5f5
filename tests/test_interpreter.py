import io
import math

import pytest

from slisp.errors import InterpreterSemanticError, SlispSyntaxError
from slisp.interpreter import Interpreter, drawables
from slisp.types.atom import Atom, Point
from slisp.types.expression import Expression


def test_parse_sets_ast(interp):
    assert interp.parse("(+ 1 2)")
    assert interp.ast == Expression("+", [Expression(1), Expression(2)])
    assert interp.syntax_error is None


def test_parse_replaces_ast(interp):
    assert interp.parse("(+ 1 2)")
    assert interp.parse("7")
    assert interp.ast == Expression(7)


def test_parse_accepts_streams(interp):
    assert interp.parse(io.StringIO(";; This is a comment\n(+ 1 2)"))
    assert interp.eval() == Expression(3.0)


@pytest.mark.parametrize(
    "source",
    ["(+ 1 (- 2 3)", "", ";; nothing here", ")", "(+ 1 2))", "(1..5)", "(a) (b)"]
)
def test_parse_failures_return_false(interp, source):
    assert interp.parse(source) is False
    assert interp.ast is None
    assert interp.syntax_error


def test_failed_parse_cannot_be_evaluated(interp):
    assert interp.parse("(+ 1 2)")
    assert not interp.parse("(+ 1")
    with pytest.raises(InterpreterSemanticError):
        interp.eval()


def test_eval_before_parse(interp):
    with pytest.raises(InterpreterSemanticError):
        interp.eval()


def test_unreadable_stream(interp):
    class Broken(io.StringIO):
        def read(self, *args):
            raise OSError("device gone")

    assert interp.parse(Broken()) is False
    assert "device gone" in interp.syntax_error


def test_closed_stream(interp):
    stream = io.StringIO("(+ 1 2)")
    stream.close()
    assert interp.parse(stream) is False
    assert interp.syntax_error.startswith("Cannot read input")


@pytest.mark.parametrize("stream", [io.BytesIO(b"(+ 1 2)"), io.BytesIO(b"\xff\xfe")])
def test_binary_stream(interp, stream):
    assert interp.parse(stream) is False
    assert interp.ast is None
    assert "bytes" in interp.syntax_error


def test_deep_nesting_is_a_parse_failure(interp):
    depth = 100_000
    assert interp.parse("(not " * depth + "True" + ")" * depth) is False
    assert "nested too deeply" in interp.syntax_error


def test_parse_missing_file(interp, tmp_path):
    assert interp.parse_file(tmp_path / "non_existent_file.slp") is False
    assert interp.ast is None


def test_parse_file(interp, tmp_path):
    program = tmp_path / "prog.slp"
    program.write_text(";; square\n(begin (define a 4)\n  (* a a))\n", encoding="utf-8")
    assert interp.parse_file(program)
    assert interp.eval() == Expression(16.0)


def test_parse_expression_method(interp):
    expr, position = interp.parse_expression(["(", "not", "True", ")"], 0)
    assert expr == Expression("not", [Expression(True)])
    assert position == 4


def test_run(interp):
    assert interp.run("(begin (define a 1) (define b (+ a 1)) (* b 10))") == Expression(20.0)
    with pytest.raises(SlispSyntaxError):
        interp.run("(+ 1")


def test_large_numbers(interp):
    assert math.isinf(interp.run("(+ 1e308 1e308)").head.value)


def test_definitions_survive_failed_programs(interp):
    interp.run("(define x 2)")
    with pytest.raises(InterpreterSemanticError):
        interp.run("(+ x True)")
    assert not interp.parse("(+ x")
    assert interp.run("(* x 3)") == Expression(6.0)


def test_reset_environment(interp):
    interp.run("(define x 5)")
    assert interp.is_symbol_string_defined("x")
    interp.reset_environment()
    assert not interp.is_symbol_string_defined("x")
    assert interp.is_symbol_string_defined("+")
    assert interp.is_symbol_string_defined("draw")


def test_interpreters_are_independent():
    a, b = Interpreter(), Interpreter()
    a.run("(define x 1)")
    assert not b.is_symbol_string_defined("x")


def test_drawables_flatten_lists():
    expr = Expression.list_of([
        Expression(Point(0, 0)),
        Expression(1.0),
        Expression.list_of([Expression(Point(1, 1))]),
    ])
    assert drawables(expr) == [Atom.point(0, 0), Atom.point(1, 1)]
    assert drawables(Expression(True)) == []
