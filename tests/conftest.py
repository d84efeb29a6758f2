"""
Pytest configuration for latency-demo tests.

This file ensures that the src directory is in the Python path
so that tests can import from latency_demo, and that the app is
imported with its default (unthrottled) configuration.
"""
import sys
import os
from pathlib import Path

# Run against the defaults even if the shell exports a limit
os.environ.pop("RATE_LIMIT", None)

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))
