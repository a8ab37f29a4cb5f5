import json
from typing import Optional

from slisp.evaluation.special_forms import SPECIAL_FORMS
from slisp.types.atom import AtomType
from slisp.types.environment import Environment
from slisp.types.expression import Expression

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_SYMBOL = "\033[94m"
COLOR_BUILTIN = "\033[95m"
COLOR_SPECIAL_FORM = "\033[90m"
COLOR_NUMBER = "\033[93m"
COLOR_BOOLEAN = "\033[96m"
COLOR_GEOMETRY = "\033[92m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "max_depth": 8,
    "display_legend": False,
    "color_symbols": True,
    "color_builtins": True,
    "color_special_forms": True,
    "color_numbers": True,
    "color_booleans": True,
    "color_geometry": True,
}


# ----------------- Colorize utility -----------------
def colorize(
    expr: Expression,
    env: Optional[Environment] = None,
    options: dict = DEFAULT_OPTIONS,
) -> str:
    """Colour a single head atom by its type."""
    head = expr.head
    text = str(head)
    match head.type:
        case AtomType.SYMBOL:
            if head.value in SPECIAL_FORMS and options.get("color_special_forms", True):
                return f"{COLOR_SPECIAL_FORM}{text}{RESET}"
            if env is not None and env.is_builtin(head.value) and options.get("color_builtins", True):
                return f"{COLOR_BUILTIN}{text}{RESET}"
            if options.get("color_symbols", True):
                return f"{COLOR_SYMBOL}{text}{RESET}"
        case AtomType.NUMBER:
            if options.get("color_numbers", True):
                return f"{COLOR_NUMBER}{text}{RESET}"
        case AtomType.BOOLEAN:
            if options.get("color_booleans", True):
                return f"{COLOR_BOOLEAN}{text}{RESET}"
        case AtomType.POINT | AtomType.LINE | AtomType.ARC:
            if options.get("color_geometry", True):
                return f"{COLOR_GEOMETRY}{text}{RESET}"
    return text


# ----------------- Pretty printer -----------------
def pprint_expr(
    expr: Expression,
    indent: int = 0,
    env: Optional[Environment] = None,
    options: dict = DEFAULT_OPTIONS,
    _current_depth: int = 0,
) -> str:
    pad = "  " * indent
    legend_str = ""
    if options.get("display_legend", True) and indent == 0:
        legend_items = [
            f"{COLOR_SYMBOL}Symbol{RESET}",
            f"{COLOR_BUILTIN}Built-in{RESET}",
            f"{COLOR_SPECIAL_FORM}Special Form{RESET}",
            f"{COLOR_NUMBER}Number{RESET}",
            f"{COLOR_BOOLEAN}Boolean{RESET}",
            f"{COLOR_GEOMETRY}Geometry{RESET}",
        ]
        legend_str = "Color Key: " + " | ".join(legend_items) + "\n"

    if _current_depth >= options.get("max_depth", 8):
        return legend_str + "…"

    if not expr.tail:
        return legend_str + colorize(expr, env, options)

    parts = [
        pprint_expr(e, indent + 1, env, {**options, "display_legend": False}, _current_depth + 1)
        for e in expr.tail
    ]
    if expr.head.type is not AtomType.LIST:
        parts.insert(0, colorize(Expression(expr.head), env, options))

    single_line = "(" + " ".join(parts) + ")"
    # Escape codes do not take up columns
    visible = _strip_colors(single_line)
    if len(visible) + indent * 2 <= options.get("max_line_length", 80):
        return legend_str + single_line

    aligned_lines = ["(" + parts[0]]
    for part in parts[1:]:
        aligned_lines.append(pad + "  " + part)
    aligned_lines[-1] += ")"
    return legend_str + "\n".join(aligned_lines)


def _strip_colors(text: str) -> str:
    for code in (RESET, COLOR_SYMBOL, COLOR_BUILTIN, COLOR_SPECIAL_FORM,
                 COLOR_NUMBER, COLOR_BOOLEAN, COLOR_GEOMETRY):
        text = text.replace(code, "")
    return text


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    try:
        user_opts = json.loads(json_str)
    except json.JSONDecodeError:
        return DEFAULT_OPTIONS
    return {**DEFAULT_OPTIONS, **user_opts}


def plain_options() -> dict:
    """Options with every colour switched off, for non-terminal output."""
    return {k: (False if k.startswith("color_") else v) for k, v in DEFAULT_OPTIONS.items()}
