"""Command line entry point.

    slisp program.slp          run a file and print the result
    slisp -e "(+ 1 2)"         run an expression
    slisp                      interactive REPL, one expression per line

`--svg PATH` writes every shape drawn during the run to an SVG file and
`--ast` prints the parsed program instead of evaluating it.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, TextIO

from slisp.config import configure_logging
from slisp.debug_utils.pprint import DEFAULT_OPTIONS, plain_options, pprint_expr
from slisp.errors import InterpreterSemanticError
from slisp.interpreter import Interpreter
from slisp.render import Scene
from slisp.session import InterpreterSession

PROMPT = "slisp> "
EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slisp", description="Run slisp drawing programs")
    parser.add_argument("file", nargs="?", type=Path, help="Program file (.slp)")
    parser.add_argument("-e", "--expression", help="Evaluate this expression")
    parser.add_argument("--svg", type=Path, help="Write drawn shapes to this SVG file")
    parser.add_argument("--ast", action="store_true", help="Print the parsed program and exit")
    parser.add_argument("--log-level", help="Logging level (default: SLISP_LOG_LEVEL or WARNING)")
    return parser


def run_program(
    interp: Interpreter,
    source: Optional[str],
    path: Optional[Path],
    show_ast: bool,
    out: TextIO,
    err: TextIO,
) -> int:
    ok = interp.parse_file(path) if path is not None else interp.parse(source or "")
    if not ok:
        print(f"Error: Invalid Program. {interp.syntax_error}", file=err)
        return EXIT_FAILURE
    if show_ast:
        options = DEFAULT_OPTIONS if out.isatty() else plain_options()
        print(pprint_expr(interp.ast, env=interp.env, options=options), file=out)
        return EXIT_OK
    try:
        result = interp.eval()
    except InterpreterSemanticError as ex:
        print(f"Error: {ex}", file=err)
        return EXIT_FAILURE
    print(result, file=out)
    return EXIT_OK


def repl(session: InterpreterSession, stdin: TextIO, out: TextIO, err: TextIO) -> int:
    session.info.connect(lambda message: print(message, file=out))
    session.error.connect(lambda message: print(f"Error: {message}", file=err))
    interactive = stdin.isatty()
    while True:
        if interactive:
            out.write(PROMPT)
            out.flush()
        line = stdin.readline()
        if not line:
            break
        entry = line.strip()
        if not entry or entry.startswith(";;"):
            continue
        if entry == ":reset":
            session.clear()
            continue
        session.parse_and_evaluate(entry)
    return EXIT_OK


def write_svg(interp: Interpreter, path: Path) -> None:
    path.write_text(Scene.from_atoms(interp.graphics).to_svg(), encoding="utf-8")


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    interp = Interpreter()
    if args.file is not None or args.expression is not None:
        if args.file is not None and args.expression is not None:
            print("Error: give either a file or -e, not both", file=sys.stderr)
            return EXIT_FAILURE
        status = run_program(interp, args.expression, args.file, args.ast, sys.stdout, sys.stderr)
    else:
        status = repl(InterpreterSession(interp), sys.stdin, sys.stdout, sys.stderr)

    if args.svg is not None and status == EXIT_OK:
        write_svg(interp, args.svg)
    return status
