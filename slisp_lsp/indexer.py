from __future__ import annotations

"""
Indexer for slisp documents.

Collects what the language server needs from a buffer:
- definitions: (define name ...) with their positions
- parenthesis balance and the first unbalanced position
- tokens the atom classifier rejects
- the syntax error and, when the buffer parses, the semantic error of
  evaluating it in a throw-away Interpreter

Evaluating is safe because the language has no I/O and no unbounded loops.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from slisp.builtin import default_builtins
from slisp.errors import InterpreterSemanticError
from slisp.interpreter import Interpreter
from slisp.reader.atom_classifier import is_valid_token
from slisp.reader.lexer import tokenize_with_positions
from slisp.types.procedure import Builtin


@dataclass
class SymbolDef:
    name: str
    line: int
    col: int


@dataclass
class Problem:
    message: str
    line: int
    col: int
    length: int = 1


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    paren_balance: int = 0
    unbalanced_at: Optional[Tuple[int, int]] = None
    invalid_tokens: List[Problem] = field(default_factory=list)
    syntax_error: Optional[str] = None
    semantic_error: Optional[str] = None
    result: Optional[str] = None
    defined: set = field(default_factory=set)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = tokenize_with_positions(text)

    open_stack: List[Tuple[int, int]] = []
    for i, (tok, line, col) in enumerate(tokens):
        if tok == "(":
            idx.paren_balance += 1
            open_stack.append((line, col))
            # (define name ...)
            if i + 2 < len(tokens) and tokens[i + 1][0] == "define":
                name, nline, ncol = tokens[i + 2]
                if name not in ("(", ")") and is_valid_token(name):
                    idx.symbols.setdefault(name, SymbolDef(name=name, line=nline, col=ncol))
        elif tok == ")":
            idx.paren_balance -= 1
            if open_stack:
                open_stack.pop()
            elif idx.unbalanced_at is None:
                idx.unbalanced_at = (line, col)
        elif not is_valid_token(tok):
            idx.invalid_tokens.append(
                Problem(message=f"Invalid token {tok!r}", line=line, col=col, length=len(tok))
            )
    if idx.unbalanced_at is None and open_stack:
        idx.unbalanced_at = open_stack[-1]

    if not tokens:
        return idx

    interp = Interpreter()
    if not interp.parse(text):
        idx.syntax_error = interp.syntax_error
        return idx
    try:
        idx.result = str(interp.eval())
    except InterpreterSemanticError as ex:
        idx.semantic_error = str(ex)
    except RecursionError:
        idx.semantic_error = "Expression nested too deeply to evaluate"
    idx.defined = {name for name in idx.symbols if interp.is_symbol_string_defined(name)}
    return idx


def _signature(builtin: Builtin) -> str:
    if builtin.doc.startswith("("):
        return builtin.doc
    return f"{builtin.signature} {builtin.doc}".strip()


# Signatures for hover/signature help
BUILTIN_SIGNATURES: Dict[str, str] = {
    name: _signature(binding)
    for name, binding in default_builtins().items()
    if isinstance(binding, Builtin)
}
BUILTIN_SIGNATURES["pi"] = "pi: the constant 3.14159..."

SPECIAL_FORM_SIGNATURES: Dict[str, str] = {
    "define": "(define name value)",
    "if": "(if condition then else)",
    "begin": "(begin expr ...)",
}
