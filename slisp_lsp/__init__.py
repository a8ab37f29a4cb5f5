"""slisp Language Server and REPL integration package.

This package provides:
- A pygls-based Language Server for the slisp language.
- An indexer that scans a document and runs it in a throw-away interpreter.
- A simple TCP REPL server to evaluate code via the existing Interpreter.
"""

__all__ = [
    "server",
    "indexer",
    "repl_server",
]
