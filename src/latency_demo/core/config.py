"""
Shared configuration for both FastAPI and stdlib servers.
"""
import math
import os
import logging
from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: str) -> int:
    value = os.getenv(name, default)
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be a valid integer. Configure this in your .env file.")


def _env_float(name: str, default: str) -> float:
    value = os.getenv(name, default)
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds. Configure this in your .env file.")
    if not math.isfinite(number) or number < 0:
        raise ValueError(f"{name} must be a finite, non-negative number of seconds, got {value!r}.")
    return number


class Config:
    """Centralized configuration loaded from environment variables."""

    # Server
    DEMO_HOST = os.getenv("DEMO_HOST", "127.0.0.1")
    DEMO_PORT = _env_int("DEMO_PORT", "5005")

    # Simulated backend latency
    LATENCY_DELAY_SECONDS = _env_float("LATENCY_DELAY_SECONDS", "15")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Optional rate limit for the delay endpoint (slowapi syntax, e.g. "60/minute")
    RATE_LIMIT = os.getenv("RATE_LIMIT") or None

    # CORS
    @classmethod
    def get_allowed_origins(cls) -> list:
        """Get CORS allowed origins from env, including 127.0.0.1 variants."""
        cors_env = os.getenv("CORS_ORIGINS", f"http://localhost:{cls.DEMO_PORT}")
        origins = [origin.strip() for origin in cors_env.split(",") if origin.strip()]
        # Also allow 127.0.0.1 variants
        origins += [origin.replace("localhost", "127.0.0.1") for origin in origins if "localhost" in origin]
        return origins


def setup_logging():
    """Configure logging based on LOG_LEVEL."""
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger(__name__)
