import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import MagicMock, patch

import pytest


def reply(result=None, error=None, cookies=()):
    """What a mock daemon method returns: result, error and Set-Cookie values."""
    return result, error, list(cookies)


class DaemonHandler(BaseHTTPRequestHandler):
    """Answers Deluge Web JSON-RPC calls from the methods table on the server."""

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        envelope = json.loads(self.rfile.read(length))
        self.server.calls.append({
            "envelope": envelope,
            "cookie": self.headers.get("Cookie"),
            "content_type": self.headers.get("Content-Type"),
        })

        if self.server.status_code != 200:
            self.send_response(self.server.status_code)
            self.send_header("Content-Length", "0")
            self.end_headers()
            return

        method = self.server.methods.get(envelope["method"])
        if method is None:
            result, error, cookies = reply(error={"message": f"Unknown method {envelope['method']}", "code": 2})
        else:
            result, error, cookies = method(envelope["params"])

        body = json.dumps({"result": result, "error": error, "id": envelope["id"]}).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        for cookie in cookies:
            self.send_header("Set-Cookie", cookie)
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture(autouse=True)
def bypass_proxies(monkeypatch):
    """Keep requests to the local mock daemon off any configured proxy."""
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")


class DaemonServer(ThreadingHTTPServer):
    request_queue_size = 64


@pytest.fixture
def mock_daemon():
    """A local HTTP server speaking the Deluge Web JSON-RPC dialect."""
    server = DaemonServer(("127.0.0.1", 0), DaemonHandler)
    server.reply = reply
    server.calls = []
    server.status_code = 200
    server.methods = {
        "auth.login": lambda params: reply(True, cookies=["_session_id=s1"]),
    }
    server.url = f"http://127.0.0.1:{server.server_address[1]}/json"

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join()


@pytest.fixture
def rpc_response():
    """Factory for fake requests.Response objects carrying a response envelope."""
    def make(result=None, error=None, status_code=200, cookies=None, body=None, set_cookie=None):
        resp = MagicMock()
        resp.status_code = status_code
        if set_cookie is None:
            set_cookie = [f"{name}={value}" for name, value in (cookies or {}).items()]
        resp.raw.headers.getlist.side_effect = lambda name: list(set_cookie) if name == "Set-Cookie" else []
        if body is None:
            body = json.dumps({"result": result, "error": error, "id": None}).encode()
        resp.content = body
        return resp
    return make


@pytest.fixture
def mock_post():
    with patch("requests.Session.post") as post:
        yield post


def sent_envelope(post_call):
    """Decode the JSON body of a recorded requests.Session.post call."""
    return json.loads(post_call.kwargs["data"])


@pytest.fixture
def sent():
    return sent_envelope
