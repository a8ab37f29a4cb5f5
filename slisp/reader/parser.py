"""
  Recursive-descent parser for slisp.

Builds a single Expression tree from a token list:

    - atoms -> leaf Expression (Boolean, Number or Symbol head)
    - (op a b ...) -> Expression(head=op, tail=[a, b, ...])

The first element of every parenthesised form must be an atom; `()` and
`((...) ...)` are rejected, so a parsed head is never a nested list.
"""

from __future__ import annotations

from typing import Sequence

from slisp.errors import SlispSyntaxError
from slisp.reader.atom_classifier import token_to_atom
from slisp.reader.lexer import tokenize
from slisp.types.expression import Expression

LPAREN = "("
RPAREN = ")"


def parse_expression(tokens: Sequence[str], position: int = 0) -> tuple[Expression, int]:
    """Parse one expression starting at `position`.

    Returns the expression and the position just past it. Raises
    SlispSyntaxError (or its InvalidTokenError subclass) on malformed input.
    """
    if position >= len(tokens):
        raise SlispSyntaxError("Unexpected end of input")

    token = tokens[position]
    if token == RPAREN:
        raise SlispSyntaxError("Unexpected ')'")
    if token != LPAREN:
        return Expression(token_to_atom(token)), position + 1

    # List form: an atom head followed by operands
    position += 1
    if position >= len(tokens):
        raise SlispSyntaxError("Unmatched '('")
    head_token = tokens[position]
    if head_token == RPAREN:
        raise SlispSyntaxError("Empty expression '()'")
    if head_token == LPAREN:
        raise SlispSyntaxError("Expression head must be an atom, not a list")
    expr = Expression(token_to_atom(head_token))
    position += 1

    while True:
        if position >= len(tokens):
            raise SlispSyntaxError("Unmatched '('")
        if tokens[position] == RPAREN:
            return expr, position + 1
        child, position = parse_expression(tokens, position)
        expr.tail.append(child)


def parse_tokens(tokens: Sequence[str]) -> Expression:
    """Parse exactly one expression that consumes every token."""
    if not tokens:
        raise SlispSyntaxError("Empty input")
    expr, position = parse_expression(tokens, 0)
    if position != len(tokens):
        if tokens[position] == RPAREN:
            raise SlispSyntaxError("Unmatched ')'")
        raise SlispSyntaxError("Only one top-level expression is allowed")
    return expr


def parse_source(source: str) -> Expression:
    return parse_tokens(tokenize(source))
