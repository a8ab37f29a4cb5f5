from __future__ import annotations
import logging
import os
from typing import Optional

# Defaults
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_REPL_HOST = "127.0.0.1"
_DEFAULT_REPL_PORT = 8765
_DEFAULT_SVG_MARGIN = 10.0

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    return raw.strip() if raw and raw.strip() else default


def get_log_level() -> str:
    return _env("SLISP_LOG_LEVEL", _DEFAULT_LOG_LEVEL).upper()


def get_repl_address() -> tuple[str, int]:
    host = _env("SLISP_REPL_HOST", _DEFAULT_REPL_HOST)
    port = int(_env("SLISP_REPL_PORT", str(_DEFAULT_REPL_PORT)))
    return host, port


def get_svg_margin() -> float:
    return float(_env("SLISP_SVG_MARGIN", str(_DEFAULT_SVG_MARGIN)))


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging once for an entry point; library modules only get loggers."""
    logging.basicConfig(level=(level or get_log_level()).upper(), format=LOG_FORMAT)
