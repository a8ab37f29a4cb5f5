from __future__ import annotations

import logging
import os
from typing import Optional, Sequence, TextIO, Union

from slisp.builtin import default_builtins
from slisp.errors import InterpreterSemanticError, SlispSyntaxError
from slisp.evaluation.evaluator import evaluate
from slisp.reader.lexer import tokenize
from slisp.reader.parser import parse_expression, parse_tokens
from slisp.types.atom import Atom, AtomType
from slisp.types.environment import Environment
from slisp.types.expression import Expression

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Parses one program at a time into `ast` and evaluates it against an
    Environment that persists across calls until `reset_environment`.
    """

    def __init__(self):
        self.env: Environment = Environment(default_builtins())
        self.ast: Optional[Expression] = None
        self.syntax_error: Optional[str] = None
        # Drawable atoms produced by every successful eval, oldest first
        self.graphics: list[Atom] = []

    # --- Reading ---
    def parse(self, stream: Union[str, TextIO]) -> bool:
        """Read the whole stream and parse exactly one expression into `ast`.

        Returns False instead of raising on any syntax problem, on empty
        input and when the stream cannot be read.
        """
        self.ast = None
        try:
            source = stream if isinstance(stream, str) else stream.read()
        except (OSError, ValueError) as ex:
            # ValueError covers closed streams and UnicodeDecodeError
            return self._parse_failed(f"Cannot read input: {ex}")
        if not isinstance(source, str):
            return self._parse_failed(f"Cannot read input: expected text, got {type(source).__name__}")
        try:
            self.ast = parse_tokens(tokenize(source))
        except SlispSyntaxError as ex:
            return self._parse_failed(str(ex))
        except RecursionError:
            return self._parse_failed("Expression nested too deeply to parse")
        self.syntax_error = None
        return True

    def parse_file(self, path: Union[str, os.PathLike]) -> bool:
        """Parse a program file; a missing or unreadable file is a parse failure."""
        try:
            with open(path, encoding="utf-8") as f:
                return self.parse(f)
        except OSError as ex:
            self.ast = None
            return self._parse_failed(f"Cannot read {os.fspath(path)}: {ex.strerror}")

    def _parse_failed(self, message: str) -> bool:
        logger.debug("parse failed: %s", message)
        self.syntax_error = message
        return False

    def parse_expression(self, tokens: Sequence[str], position: int = 0) -> tuple[Expression, int]:
        return parse_expression(tokens, position)

    # --- Evaluation ---
    def eval(self) -> Expression:
        """Evaluate the last successfully parsed program."""
        if self.ast is None:
            raise InterpreterSemanticError("No parsed expression to evaluate")
        return self.evaluate_expression(self.ast)

    def evaluate_expression(self, expr: Expression) -> Expression:
        try:
            result = evaluate(expr, self.env)
        except InterpreterSemanticError as ex:
            logger.debug("evaluation of %s failed: %s", expr, ex)
            raise
        self.graphics.extend(drawables(result))
        return result

    def run(self, source: Union[str, TextIO]) -> Expression:
        """Parse then evaluate; raises SlispSyntaxError if parsing fails."""
        if not self.parse(source):
            raise SlispSyntaxError(self.syntax_error or "Failed to parse")
        return self.eval()

    # --- Environment ---
    def reset_environment(self) -> None:
        self.env.reset()

    def clear_graphics(self) -> None:
        self.graphics.clear()

    def is_symbol_string_defined(self, name: str) -> bool:
        return self.env.is_symbol_string_defined(name)


def drawables(expr: Expression) -> list[Atom]:
    """Geometry atoms of a result, flattening List results in order."""
    if expr.head.type is AtomType.LIST:
        found: list[Atom] = []
        for child in expr.tail:
            found.extend(drawables(child))
        return found
    if expr.head.is_drawable:
        return [expr.head]
    return []
