# Core shared modules for both FastAPI and stdlib servers
from .config import Config, setup_logging
from .latency import (
    normalize_delay,
    build_latency_response,
    simulate_latency,
    simulate_latency_blocking,
)
from .page import INDEX_HTML

__all__ = [
    # Config
    "Config",
    "setup_logging",
    # Latency
    "normalize_delay",
    "build_latency_response",
    "simulate_latency",
    "simulate_latency_blocking",
    # Page
    "INDEX_HTML",
]
