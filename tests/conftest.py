from __future__ import annotations

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


class _Handler(BaseHTTPRequestHandler):
    seen_headers: list[dict[str, str]] = []

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        return

    def do_GET(self) -> None:  # noqa: N802
        type(self).seen_headers.append({k.lower(): v for k, v in self.headers.items()})

        if self.path == "/slow":
            time.sleep(2)

        routes: dict[str, int] = {
            "/ok": 200,
            "/slow": 200,
            "/created": 201,
            "/missing": 404,
            "/unavailable": 503,
        }
        status = routes.get(self.path, 404)
        body = b"body"
        self.send_response(status)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


@pytest.fixture(scope="module")
def local_server_base_url() -> str:
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    httpd.daemon_threads = True
    host, port = httpd.server_address
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()

    try:
        yield f"http://{host}:{port}"
    finally:
        httpd.shutdown()
        thread.join(timeout=5)
        httpd.server_close()


@pytest.fixture
def seen_headers() -> list[dict[str, str]]:
    _Handler.seen_headers.clear()
    return _Handler.seen_headers
