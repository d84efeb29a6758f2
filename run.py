#!/usr/bin/env python3
"""
Run the latency demo server.

Usage:
    python run.py              # FastAPI/uvicorn
    python run.py --stdlib     # stdlib http.server (thread per connection)
"""
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from latency_demo.core import Config
from latency_demo.cli import run_fastapi, run_stdlib


if __name__ == "__main__":
    use_stdlib = "--stdlib" in sys.argv or "-s" in sys.argv

    if use_stdlib:
        print("=" * 60)
        print("  MODE: stdlib http.server")
        print("  Note: Use FastAPI for the async event-loop version")
        print("=" * 60)
        run_stdlib(Config.DEMO_HOST, Config.DEMO_PORT)
    else:
        run_fastapi(Config.DEMO_HOST, Config.DEMO_PORT)
