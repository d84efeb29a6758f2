#!/usr/bin/env python3
"""
Latency Demo CLI - run and poke the demo server

Usage:
    python -m latency_demo.cli serve              # FastAPI/uvicorn
    python -m latency_demo.cli serve --stdlib     # stdlib http.server
    python -m latency_demo.cli check-port         # Is the port free?
    python -m latency_demo.cli trigger            # Call /simulate_latency and time it
"""

import asyncio
import argparse
import sys
import time

import httpx

from latency_demo.core import Config
from latency_demo.check_port import check_port

# Fix Windows console encoding for Unicode
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    sys.stderr.reconfigure(encoding='utf-8', errors='replace')


def run_fastapi(host: str, port: int):
    """Run with FastAPI/uvicorn"""
    import uvicorn

    print(f"Starting FastAPI/uvicorn server on {host}:{port}")
    uvicorn.run(
        'latency_demo.main:app',
        host=host,
        port=port,
        log_level=Config.LOG_LEVEL.lower(),
        http='h11',
        ws='none',
    )


def run_stdlib(host: str, port: int):
    """Run with stdlib http.server"""
    from latency_demo.stdlib_server import main as stdlib_main
    stdlib_main(host, port)


async def trigger(url: str, timeout: float) -> int:
    """POST to /simulate_latency, print elapsed time and result"""
    endpoint = f"{url.rstrip('/')}/simulate_latency"
    print(f"Request sent to {endpoint}, waiting for server response...")

    start = time.monotonic()
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(endpoint, headers={"Content-Type": "application/json"})
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"Error: HTTP error! status: {e.response.status_code}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    duration = time.monotonic() - start
    data = response.json()
    print(f"Server responded in {duration:.2f} seconds")
    print(f"  message: {data.get('message')}")
    print(f"  simulated_delay_seconds: {data.get('simulated_delay_seconds')}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="latency-demo",
        description="Latency demo server",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the demo server")
    serve.add_argument("--host", default=Config.DEMO_HOST)
    serve.add_argument("--port", type=int, default=Config.DEMO_PORT)
    serve.add_argument("--stdlib", action="store_true", help="Use stdlib http.server instead of uvicorn")

    port = subparsers.add_parser("check-port", help="Check that the server port is free")
    port.add_argument("--host", default=Config.DEMO_HOST)
    port.add_argument("--port", type=int, default=Config.DEMO_PORT)

    trig = subparsers.add_parser("trigger", help="Call /simulate_latency and time the response")
    trig.add_argument("--url", default=f"http://{Config.DEMO_HOST}:{Config.DEMO_PORT}")
    trig.add_argument(
        "--timeout",
        type=float,
        default=Config.LATENCY_DELAY_SECONDS + 30,
        help="Client timeout in seconds (must exceed the server delay)",
    )

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        if args.stdlib:
            run_stdlib(args.host, args.port)
        else:
            run_fastapi(args.host, args.port)
        return 0
    elif args.command == "check-port":
        return check_port(args.host, args.port)
    elif args.command == "trigger":
        return asyncio.run(trigger(args.url, args.timeout))

    return 1


if __name__ == "__main__":
    sys.exit(main())
