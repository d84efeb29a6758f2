"""
Tests for the stdlib http.server runtime, against a real server on an
ephemeral port.
"""
import logging
import socket
import struct
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from latency_demo import stdlib_server
from latency_demo.core import normalize_delay
from latency_demo.stdlib_server import create_server, LatencyDemoHandler


@pytest.fixture
def server_url():
    server = create_server("127.0.0.1", 0, delay_seconds=0.5)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()


class TestStdlibRoutes:

    def test_index_page(self, server_url):
        response = httpx.get(f"{server_url}/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert '<button id="latencyButton"' in response.text

    def test_health(self, server_url):
        response = httpx.get(f"{server_url}/health")
        assert response.status_code == 200
        assert response.json()["simulated_delay_seconds"] == 0.5

    def test_unknown_paths_404(self, server_url):
        assert httpx.get(f"{server_url}/missing").status_code == 404
        response = httpx.post(f"{server_url}/missing", content=b"{}")
        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    def test_simulate_latency(self, server_url):
        start = time.monotonic()
        response = httpx.post(f"{server_url}/simulate_latency", json={"ignored": True}, timeout=5)
        elapsed = time.monotonic() - start

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert elapsed >= 0.5
        assert response.json() == {
            "message": "Processed successfully after a 0.50 second delay!",
            "simulated_delay_seconds": 0.5,
        }

    def test_concurrent_requests_do_not_serialize(self, server_url):
        def call(_):
            return httpx.post(f"{server_url}/simulate_latency", timeout=5)

        start = time.monotonic()
        with ThreadPoolExecutor(max_workers=2) as pool:
            responses = list(pool.map(call, range(2)))
        elapsed = time.monotonic() - start

        assert all(r.status_code == 200 for r in responses)
        assert elapsed < 0.9

    def test_health_reports_normalized_delay(self):
        server = create_server("127.0.0.1", 0, delay_seconds=2.345)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        try:
            host, port = server.server_address[:2]
            response = httpx.get(f"http://{host}:{port}/health")
        finally:
            server.shutdown()
            server.server_close()

        assert response.json()["simulated_delay_seconds"] == normalize_delay(2.345)

    def test_client_disconnect_during_delay_is_logged(self, server_url, caplog):
        caplog.set_level(logging.WARNING, logger="latency_demo.stdlib_server")
        caplog.set_level(logging.INFO, logger="latency_demo.core.latency")
        url = httpx.URL(server_url)

        def wait_for(text, timeout=3.0):
            deadline = time.monotonic() + timeout
            while time.monotonic() < deadline:
                if any(text in r.getMessage() for r in caplog.records):
                    return True
                time.sleep(0.02)
            return False

        sock = socket.create_connection((url.host, url.port))
        sock.sendall(b"POST /simulate_latency HTTP/1.1\r\nHost: test\r\nContent-Length: 0\r\n\r\n")
        assert wait_for("Intentionally delaying")

        # Abortive close so the delayed write hits a reset connection
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_LINGER, struct.pack("ii", 1, 0))
        sock.close()

        assert wait_for("Client disconnected before delayed response was sent")
        warning = next(r for r in caplog.records if "Client disconnected" in r.getMessage())
        assert warning.levelno == logging.WARNING
        assert warning.name == "latency_demo.stdlib_server"

        # The server keeps serving afterwards
        assert httpx.get(f"{server_url}/health").status_code == 200


def test_create_server_without_override_uses_configured_delay():
    server = create_server("127.0.0.1", 0)
    try:
        assert server.RequestHandlerClass is LatencyDemoHandler
        assert LatencyDemoHandler.delay_seconds == 15.0
    finally:
        server.server_close()


def test_create_server_rejects_bad_delay():
    with pytest.raises(ValueError):
        create_server("127.0.0.1", 0, delay_seconds=float("nan"))


def test_main_keeps_explicit_port_zero(monkeypatch, capsys):
    created = []

    class _Server:
        server_address = ("127.0.0.1", 54321)

        def serve_forever(self):
            raise KeyboardInterrupt

        def server_close(self):
            created.append("closed")

    def fake_create_server(host, port):
        created.append((host, port))
        return _Server()

    monkeypatch.setattr(stdlib_server, "create_server", fake_create_server)
    stdlib_server.main("127.0.0.1", 0)

    assert created == [("127.0.0.1", 0), "closed"]
    out = capsys.readouterr().out
    assert "  Port: 0" in out
    assert "listening on http://127.0.0.1:54321" in out
