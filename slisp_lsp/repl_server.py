from __future__ import annotations

"""
Simple TCP REPL server for slisp.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(begin ...)"}
  Response: {"ok": true, "result": "20", "type": "Number", "graphics": [...]}
- Request: {"cmd": "reset"}
  Response: {"ok": true}
- Request: {"cmd": "defined", "name": "x"}
  Response: {"ok": true, "defined": false}
- Failures: {"ok": false, "error": <message>}

One Interpreter is kept alive so definitions persist across requests from
every client; a lock serialises access to it.
"""

import json
import logging
import socket
import threading
from typing import Any, Dict, Optional, Tuple

from slisp.config import configure_logging, get_repl_address
from slisp.errors import InterpreterSemanticError
from slisp.interpreter import Interpreter, drawables
from slisp.types.atom import Arc, Atom, Line, Point

logger = logging.getLogger(__name__)


def _point_json(p: Point) -> Dict[str, float]:
    return {"x": p.x, "y": p.y}


def atom_to_json(atom: Atom) -> Dict[str, Any]:
    value = atom.value
    if isinstance(value, Point):
        return {"type": "Point", **_point_json(value)}
    if isinstance(value, Line):
        return {"type": "Line", "first": _point_json(value.first), "second": _point_json(value.second)}
    if isinstance(value, Arc):
        return {
            "type": "Arc",
            "center": _point_json(value.center),
            "start": _point_json(value.start),
            "span": value.span,
        }
    raise ValueError(f"{atom.type.value} atoms are not drawable")


class ReplServer:
    def __init__(self, host: Optional[str] = None, port: Optional[int] = None):
        default_host, default_port = get_repl_address()
        self.host = host if host is not None else default_host
        self.port = port if port is not None else default_port
        # Keep a single interpreter to maintain session state
        self.interp = Interpreter()
        self._lock = threading.Lock()

    def handle_request(self, req: Dict[str, Any]) -> Dict[str, Any]:
        cmd = req.get("cmd")
        with self._lock:
            if cmd == "eval":
                return self._eval(str(req.get("code", "")))
            if cmd == "reset":
                self.interp.reset_environment()
                self.interp.clear_graphics()
                return {"ok": True}
            if cmd == "defined":
                return {"ok": True, "defined": self.interp.is_symbol_string_defined(str(req.get("name", "")))}
        return {"ok": False, "error": f"Unknown cmd: {cmd}"}

    def _eval(self, code: str) -> Dict[str, Any]:
        if not self.interp.parse(code):
            return {"ok": False, "error": f"Failed to parse the expression: {self.interp.syntax_error}"}
        try:
            result = self.interp.eval()
        except InterpreterSemanticError as ex:
            return {"ok": False, "error": str(ex)}
        except RecursionError:
            logger.warning("evaluation exceeded the recursion limit")
            return {"ok": False, "error": "Expression nested too deeply to evaluate"}
        return {
            "ok": True,
            "result": str(result),
            "type": result.head.type.value,
            "graphics": [atom_to_json(a) for a in drawables(result)],
        }

    def handle_line(self, line: bytes) -> Dict[str, Any]:
        try:
            req = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as ex:
            return {"ok": False, "error": f"Invalid request: {ex}"}
        if not isinstance(req, dict):
            return {"ok": False, "error": "Invalid request: expected a JSON object"}
        return self.handle_request(req)

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("REPL server listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.info("client connected from %s:%d", *addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = self.handle_line(line)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))
        logger.info("client %s:%d disconnected", *addr)


def main():
    configure_logging()
    ReplServer().serve_forever()


if __name__ == "__main__":
    main()
