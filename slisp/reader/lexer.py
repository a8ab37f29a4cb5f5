"""
  Tokenizer for slisp source text.

- `;;` starts a comment that runs to the end of the line
- `(` and `)` are always tokens of their own
- any other maximal run of non-whitespace, non-parenthesis characters is a token

Tokenizing never fails; malformed tokens are rejected later by the atom
classifier and the parser.
"""

from __future__ import annotations

import re
from typing import Iterator

COMMENT = ";;"

TOKEN_RE = re.compile(
    r"(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<atom>[^\s()]+)"
)


def strip_comments(source: str) -> str:
    """Blank out every `;;` comment; offsets of the remaining text do not move."""
    lines = []
    # Only "\n" ends a comment
    for line in source.split("\n"):
        idx = line.find(COMMENT)
        if idx != -1:
            line = line[:idx] + " " * (len(line) - idx)
        lines.append(line)
    return "\n".join(lines)


def lex(source: str) -> Iterator[tuple[str, str, int]]:
    """Token generator: yields (token_type, token_value, offset) tuples."""
    for m in TOKEN_RE.finditer(strip_comments(source)):
        yield m.lastgroup, m.group(), m.start()


def tokenize(source: str) -> list[str]:
    return [value for _, value, _ in lex(source)]


def tokenize_with_positions(source: str) -> list[tuple[str, int, int]]:
    """Tokens with their 0-based (line, column)."""
    result = []
    line_starts = [0]
    for m in re.finditer("\n", source):
        line_starts.append(m.end())
    line = 0
    for _, value, offset in lex(source):
        while line + 1 < len(line_starts) and line_starts[line + 1] <= offset:
            line += 1
        result.append((value, line, offset - line_starts[line]))
    return result
