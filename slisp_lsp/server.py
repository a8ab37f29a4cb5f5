from __future__ import annotations

"""
A minimal pygls-based Language Server for slisp.

Features:
- Text synchronization and document store
- Diagnostics: invalid tokens, unbalanced parentheses, syntax errors and the
  semantic error of evaluating the buffer
- Hover: built-in and special form signatures, document definitions
- Completion: built-ins, special forms and symbols the buffer defines
- Signature Help: for built-ins and special forms
- Document Symbols: define targets
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
    SignatureInformation,
    SymbolKind,
)

from slisp.config import configure_logging
from slisp_lsp.indexer import (
    BUILTIN_SIGNATURES,
    SPECIAL_FORM_SIGNATURES,
    DocumentIndex,
    build_index,
)

logger = logging.getLogger(__name__)

SOURCE = "slisp-ls"
WORD_BREAKS = " \t()\n\r"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class SlispLanguageServer(LanguageServer):
    CMD_NAME = "slisp-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, "v0.1")
        self.documents: Dict[str, DocumentState] = {}

    def update_document(self, uri: str, text: str) -> DocumentState:
        state = DocumentState(text=text, index=build_index(text))
        self.documents[uri] = state
        return state


ls = SlispLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    state = ls.update_document(uri, params.text_document.text or "")
    ls.publish_diagnostics(uri, build_diagnostics(state.text, state.index))


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # pygls has already applied the change to its workspace copy
    doc = ls.workspace.get_text_document(uri)
    state = ls.update_document(uri, doc.source)
    ls.publish_diagnostics(uri, build_diagnostics(state.text, state.index))


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def _document_range(text: str) -> Range:
    lines = text.split("\n")
    return Range(
        start=Position(line=0, character=0),
        end=Position(line=len(lines) - 1, character=len(lines[-1])),
    )


def build_diagnostics(text: str, idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    for problem in idx.invalid_tokens:
        diags.append(
            Diagnostic(
                range=_mk_range(problem.line, problem.col, problem.length),
                message=problem.message,
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )

    if idx.unbalanced_at is not None:
        line, col = idx.unbalanced_at
        diags.append(
            Diagnostic(
                range=_mk_range(line, col),
                message="Unmatched parenthesis",
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )

    # Token and paren problems already explain most syntax errors
    if idx.syntax_error and not diags:
        diags.append(
            Diagnostic(
                range=_document_range(text),
                message=idx.syntax_error,
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )

    if idx.semantic_error:
        diags.append(
            Diagnostic(
                range=_document_range(text),
                message=idx.semantic_error,
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )
    return diags


# --- Hover ---
def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in SPECIAL_FORM_SIGNATURES:
        return f"{SPECIAL_FORM_SIGNATURES[word]} (special form)"
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    if word in idx.symbols:
        sdef = idx.symbols[word]
        return f"{word} (defined at {sdef.line + 1}:{sdef.col + 1})"
    return None


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    word = extract_word_at(state.text, params.position)
    if not word:
        return None
    contents = hover_text(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: DocumentIndex) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for name, sig in SPECIAL_FORM_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Keyword, detail=sig))
    for name, sig in BUILTIN_SIGNATURES.items():
        kind = CompletionItemKind.Constant if name == "pi" else CompletionItemKind.Function
        items.append(CompletionItem(label=name, kind=kind, detail=sig))
    for name in sorted(idx.symbols):
        # Only names that actually got bound when the buffer ran
        if name in idx.defined:
            items.append(CompletionItem(label=name, kind=CompletionItemKind.Variable))
    return items


@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    idx = state.index if state else DocumentIndex()
    return CompletionList(is_incomplete=False, items=completion_items(idx))


# --- Signature Help ---
def signature_for(callee: str) -> Optional[SignatureHelp]:
    sig = SPECIAL_FORM_SIGNATURES.get(callee) or BUILTIN_SIGNATURES.get(callee)
    if not sig:
        return None
    close_paren = sig.find(")")
    params_text = sig[len(callee) + 2 : close_paren] if sig.startswith("(") else ""
    parameters = [ParameterInformation(label=p) for p in params_text.split() if p]
    return SignatureHelp(
        signatures=[SignatureInformation(label=sig, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    callee = extract_callee_name(get_line_prefix(state.text, params.position))
    if not callee:
        return None
    return signature_for(callee)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(DocumentSymbol(name=name, kind=SymbolKind.Variable, range=rng, selection_range=rng))
    return symbols


# --- Helpers ---
def get_line_prefix(text: str, pos: Position) -> str:
    lines = text.split("\n")
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.split("\n")
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in WORD_BREAKS:
        start -= 1
    while end < len(line) and line[end] not in WORD_BREAKS:
        end += 1
    return line[start:end] or None


def extract_callee_name(prefix: str) -> Optional[str]:
    lp = prefix.rfind("(")
    if lp == -1:
        return None
    tail = prefix[lp + 1 :].strip()
    if not tail:
        return None
    return tail.split()[0]


def main():
    configure_logging()
    logger.info("starting %s over stdio", SlispLanguageServer.CMD_NAME)
    ls.start_io()


if __name__ == "__main__":
    main()
