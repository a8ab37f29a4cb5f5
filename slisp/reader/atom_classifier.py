"""Classify a single token as a Boolean, Number or Symbol atom."""

from __future__ import annotations

import re

from slisp.errors import InvalidTokenError
from slisp.types.atom import Atom

NUMBER_RE = re.compile(r"[-+]?\d+(\.\d+)?([eE][-+]?\d+)?")
# Symbols may not start with a digit; numerals with two or more points are malformed
MALFORMED_NUMBER_RE = re.compile(r"\d|[-+]?[\d.]*\.[\d.]*\.")

BOOLEANS = {"True": True, "False": False}


def token_to_atom(token: str) -> Atom:
    """Classify `token`; raises InvalidTokenError when it is not a valid atom."""
    if not token or token.isspace():
        raise InvalidTokenError("Empty token")

    if token in BOOLEANS:
        return Atom.boolean(BOOLEANS[token])

    if NUMBER_RE.fullmatch(token):
        return Atom.number(float(token))
    if MALFORMED_NUMBER_RE.match(token):
        raise InvalidTokenError(f"Invalid number or symbol: {token!r}")

    if not token.isprintable() or any(ch.isspace() for ch in token):
        raise InvalidTokenError(f"Invalid symbol: {token!r}")
    if "(" in token or ")" in token:
        raise InvalidTokenError(f"Parenthesis inside symbol: {token!r}")
    return Atom.symbol(token)


def is_valid_token(token: str) -> bool:
    try:
        token_to_atom(token)
    except InvalidTokenError:
        return False
    return True
