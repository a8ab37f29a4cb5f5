import io

import pytest

from slisp.cli import main, repl
from slisp.session import PARSE_FAILED, InterpreterSession


def test_expression(capsys):
    assert main(["-e", "(begin (define a 1) (define b (+ a 1)) (* b 10))"]) == 0
    assert capsys.readouterr().out == "20\n"


def test_program_file(tmp_path, capsys):
    program = tmp_path / "test.slp"
    program.write_text(";; draw a unit segment\n(line (point 0 0) (point 1 0))\n", encoding="utf-8")
    assert main([str(program)]) == 0
    assert capsys.readouterr().out == "((0,0),(1,0))\n"


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.slp")]) == 1
    assert capsys.readouterr().err.startswith("Error: Invalid Program.")


@pytest.mark.parametrize("source", ["(+ 1", "(1 2)x", ""])
def test_invalid_program(capsys, source):
    assert main(["-e", source]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: Invalid Program.")


def test_semantic_error(capsys):
    assert main(["-e", "(/ 1 0)"]) == 1
    assert capsys.readouterr().err == "Error: Division by zero\n"


def test_file_and_expression_conflict(tmp_path, capsys):
    program = tmp_path / "test.slp"
    program.write_text("1", encoding="utf-8")
    assert main([str(program), "-e", "2"]) == 1
    assert "either a file or -e" in capsys.readouterr().err


def test_ast_output(capsys):
    assert main(["-e", "(begin (define a 1) (draw (point a 2)))", "--ast"]) == 0
    assert capsys.readouterr().out == "(begin (define a 1) (draw (point a 2)))\n"


def test_svg_output(tmp_path, capsys):
    svg = tmp_path / "out.svg"
    assert main(["-e", "(draw (point 0 0) (line (point 0 0) (point 20 10)))", "--svg", str(svg)]) == 0
    text = svg.read_text(encoding="utf-8")
    assert text.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
    assert "<ellipse" in text
    assert '<line x1="0" y1="0" x2="20" y2="10" stroke="black"/>' in text


def test_svg_not_written_on_failure(tmp_path, capsys):
    svg = tmp_path / "out.svg"
    assert main(["-e", "(point 0 True)", "--svg", str(svg)]) == 1
    assert not svg.exists()


def test_repl_session():
    stdin = io.StringIO(
        "(define x 2)\n"
        "\n"
        ";; comment lines are skipped\n"
        "(* x 21)\n"
        "(+ x\n"
        "(point x 1)\n"
        ":reset\n"
        "x\n"
    )
    out, err = io.StringIO(), io.StringIO()
    assert repl(InterpreterSession(), stdin, out, err) == 0
    assert out.getvalue() == "(2)\n(42)\n(2,1)\n"
    assert err.getvalue() == (
        f"Error: {PARSE_FAILED}\n"
        "Error: Cannot lookup unbound symbol x\n"
    )
