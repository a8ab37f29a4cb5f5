"""Front-end session around an Interpreter.

Plays the part of a canvas widget's interpreter object: a front end pushes
text entries in with `parse_and_evaluate` and subscribes to notifications:

- `info(message)`   text form of each result value
- `error(message)`  syntax failure or semantic error message
- `draw(item)`      a scene item for each drawable result
- `clear()`         the canvas should be emptied before new results arrive

Nothing raised by the interpreter for bad input escapes a session call.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from slisp.errors import InterpreterSemanticError
from slisp.interpreter import Interpreter
from slisp.render import item_for_atom
from slisp.types.atom import AtomType
from slisp.types.expression import Expression

logger = logging.getLogger(__name__)

PARSE_FAILED = "Failed to parse the expression."


class Signal:
    """Minimal observer list: connect callables, emit to all of them in order."""

    __slots__ = ("name", "_slots")

    def __init__(self, name: str):
        self.name = name
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        self._slots.remove(slot)

    def emit(self, *args: Any) -> None:
        for slot in list(self._slots):
            slot(*args)


class InterpreterSession:
    def __init__(self, interpreter: Optional[Interpreter] = None):
        self.interpreter = interpreter if interpreter is not None else Interpreter()
        self.info = Signal("info")
        self.error = Signal("error")
        self.draw = Signal("draw")
        self.clear_canvas = Signal("clear")

    def parse_and_evaluate(self, entry: str) -> Optional[Expression]:
        """Parse and evaluate one entry, reporting the outcome through signals.

        Returns the result, or None when the entry failed.
        """
        if not self.interpreter.parse(entry):
            self.error.emit(PARSE_FAILED)
            return None
        try:
            result = self.interpreter.eval()
        except InterpreterSemanticError as ex:
            self.error.emit(str(ex))
            return None
        self.clear_canvas.emit()
        self.draw_expression(result)
        return result

    def draw_expression(self, expr: Expression) -> None:
        """Emit info and draw notifications for a result; List results recurse per item."""
        head = expr.head
        match head.type:
            case AtomType.LIST:
                for child in expr.tail:
                    self.draw_expression(child)
                return
            case AtomType.POINT | AtomType.LINE | AtomType.ARC:
                self.info.emit(str(head))
                self.draw.emit(item_for_atom(head))
            case AtomType.NUMBER:
                self.info.emit(f"({head})")
            case AtomType.BOOLEAN | AtomType.SYMBOL:
                self.info.emit(str(head))
            case AtomType.NONE:
                logger.debug("nothing to show for an empty result")

    def clear(self) -> None:
        """Forget user definitions and drawn shapes, then clear the canvas."""
        self.interpreter.reset_environment()
        self.interpreter.clear_graphics()
        self.clear_canvas.emit()
