#!/usr/bin/env python3
"""
Latency demo server using Python stdlib http.server.

Same routes and payloads as the FastAPI app, without FastAPI/uvicorn.
Each connection gets its own thread, so a delayed request only blocks
the thread serving it.

Run with: python run.py --stdlib
"""
import json
import logging
import threading
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Optional, Any

from latency_demo.core import (
    Config,
    setup_logging,
    simulate_latency_blocking,
    normalize_delay,
    INDEX_HTML,
)

logger = logging.getLogger(__name__)


class LatencyDemoHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the demo page and the delayed endpoint."""

    delay_seconds = Config.LATENCY_DELAY_SECONDS

    def log_message(self, format, *args):
        logger.info(f"[{self.client_address[0]}] {format % args}")

    def send_body(self, status: int, body: bytes, content_type: str):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def send_json_response(self, status: int, data: Any):
        """Send JSON response."""
        self.send_body(status, json.dumps(data).encode(), "application/json")

    def send_error_response(self, status: int, message: str):
        """Send JSON error response."""
        self.send_json_response(status, {"error": message})

    def discard_body(self):
        """Drain any request body; the delayed endpoint consumes no input."""
        content_length = int(self.headers.get("Content-Length", 0))
        if content_length > 0:
            self.rfile.read(content_length)

    def do_GET(self):
        path = self.path.split("?")[0]
        if path == "/":
            self.send_body(200, INDEX_HTML.encode("utf-8"), "text/html; charset=utf-8")
        elif path == "/health":
            self.send_json_response(200, {
                "status": "ok",
                "service": "latency-demo",
                "simulated_delay_seconds": normalize_delay(self.delay_seconds),
            })
        else:
            self.send_error_response(404, "Not found")

    def do_POST(self):
        path = self.path.split("?")[0]
        self.discard_body()
        if path != "/simulate_latency":
            self.send_error_response(404, "Not found")
            return

        result = simulate_latency_blocking(self.delay_seconds)
        try:
            self.send_json_response(200, result)
        except (BrokenPipeError, ConnectionResetError) as e:
            logger.warning(f"Client disconnected before delayed response was sent: {e}")


class ThreadedHTTPServer(HTTPServer):
    """HTTP server that handles each request in a new thread."""

    def process_request(self, request, client_address):
        thread = threading.Thread(target=self.process_request_thread, args=(request, client_address))
        thread.daemon = True
        thread.start()

    def process_request_thread(self, request, client_address):
        try:
            self.finish_request(request, client_address)
        except Exception:
            self.handle_error(request, client_address)
        finally:
            self.shutdown_request(request)


def create_server(host: str, port: int, delay_seconds: Optional[float] = None) -> ThreadedHTTPServer:
    """Create a threaded server; delay_seconds overrides the configured delay."""
    handler = LatencyDemoHandler
    if delay_seconds is not None:
        handler = type(
            "ConfiguredLatencyDemoHandler",
            (LatencyDemoHandler,),
            {"delay_seconds": normalize_delay(delay_seconds)},
        )
    return ThreadedHTTPServer((host, port), handler)


def main(host: Optional[str] = None, port: Optional[int] = None):
    setup_logging()
    if host is None:
        host = Config.DEMO_HOST
    if port is None:
        port = Config.DEMO_PORT

    print("=" * 60)
    print("  Latency Demo (stdlib version)")
    print("=" * 60)
    print(f"  Host: {host}")
    print(f"  Port: {port}")
    print(f"  Delay: {normalize_delay(Config.LATENCY_DELAY_SECONDS):.2f}s")
    print(f"  Log Level: {Config.LOG_LEVEL}")
    print("=" * 60)

    server = create_server(host, port)
    print(f"\nStdlib HTTP server listening on http://{host}:{server.server_address[1]}")
    print("Press Ctrl+C to stop\n")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down...")
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
