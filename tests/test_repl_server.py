import json

import pytest

from slisp_lsp.repl_server import ReplServer, atom_to_json
from slisp.types.atom import Atom, Point


@pytest.fixture
def server():
    return ReplServer(host="127.0.0.1", port=0)


def test_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("SLISP_REPL_HOST", "0.0.0.0")
    monkeypatch.setenv("SLISP_REPL_PORT", "9999")
    srv = ReplServer()
    assert (srv.host, srv.port) == ("0.0.0.0", 9999)


def test_eval_number(server):
    assert server.handle_request({"cmd": "eval", "code": "(+ 1 2)"}) == {
        "ok": True,
        "result": "3",
        "type": "Number",
        "graphics": [],
    }


def test_eval_graphics(server):
    resp = server.handle_request({"cmd": "eval", "code": "(draw (point 1 2) (line (point 0 0) (point 1 1)))"})
    assert resp["ok"]
    assert resp["type"] == "List"
    assert resp["graphics"] == [
        {"type": "Point", "x": 1.0, "y": 2.0},
        {"type": "Line", "first": {"x": 0.0, "y": 0.0}, "second": {"x": 1.0, "y": 1.0}},
    ]


def test_state_persists_until_reset(server):
    server.handle_request({"cmd": "eval", "code": "(define x 4)"})
    assert server.handle_request({"cmd": "defined", "name": "x"}) == {"ok": True, "defined": True}
    assert server.handle_request({"cmd": "eval", "code": "(* x x)"})["result"] == "16"
    assert server.handle_request({"cmd": "reset"}) == {"ok": True}
    assert server.handle_request({"cmd": "defined", "name": "x"}) == {"ok": True, "defined": False}


def test_errors(server):
    parse = server.handle_request({"cmd": "eval", "code": "(+ 1"})
    assert not parse["ok"]
    assert parse["error"].startswith("Failed to parse the expression")
    semantic = server.handle_request({"cmd": "eval", "code": "(not 1)"})
    assert not semantic["ok"]
    assert "not expects Boolean" in semantic["error"]
    assert server.handle_request({"cmd": "shutdown"}) == {"ok": False, "error": "Unknown cmd: shutdown"}


@pytest.mark.parametrize("line", [b"not json", b"[1, 2]", b"\xff\xfe"])
def test_bad_request_lines(server, line):
    resp = server.handle_line(line)
    assert resp["ok"] is False
    assert resp["error"].startswith("Invalid request")


def test_request_line(server):
    line = json.dumps({"cmd": "eval", "code": "(arctan 1 0)"}).encode("utf-8")
    resp = server.handle_line(line)
    assert resp["ok"] and resp["type"] == "Number"


def test_atom_to_json_rejects_numbers():
    assert atom_to_json(Atom.point(1, 2)) == {"type": "Point", "x": 1, "y": 2}
    assert atom_to_json(Atom.arc(Point(0, 0), Point(1, 0), 3.0))["span"] == 3.0
    with pytest.raises(ValueError):
        atom_to_json(Atom.number(1))


def test_deeply_nested_request_keeps_the_connection(server, monkeypatch):
    depth = 100_000
    resp = server.handle_request({"cmd": "eval", "code": "(not " * depth + "True" + ")" * depth})
    assert resp["ok"] is False
    assert "nested too deeply" in resp["error"]

    def overflow():
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(server.interp, "eval", overflow)
    assert server.handle_request({"cmd": "eval", "code": "(not True)"}) == {
        "ok": False,
        "error": "Expression nested too deeply to evaluate",
    }
    monkeypatch.undo()
    assert server.handle_request({"cmd": "eval", "code": "(not True)"})["result"] == "False"
