import pytest

from slisp.interpreter import Interpreter


@pytest.fixture
def interp():
    """Fresh interpreter with built-ins loaded."""
    return Interpreter()


@pytest.fixture
def run(interp):
    """Parse and evaluate a program on the shared `interp` fixture."""
    def _run(source):
        assert interp.parse(source), f"Failed to parse: {source!r} ({interp.syntax_error})"
        return interp.eval()
    return _run
