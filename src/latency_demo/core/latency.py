"""
Simulated backend latency shared by the FastAPI and stdlib servers.

The delay is normalised to two decimals before the suspension so the value
reported back to the client is exactly the value that was slept.
"""
import asyncio
import math
import logging
import time
from typing import Dict, Any

logger = logging.getLogger(__name__)


def normalize_delay(delay_seconds: float) -> float:
    """Round a delay to two decimals, rejecting negative or non-finite values."""
    delay = round(float(delay_seconds), 2)
    if not math.isfinite(delay) or delay < 0:
        raise ValueError(f"Delay must be a finite, non-negative number, got {delay_seconds}")
    return delay


def build_latency_response(delay_seconds: float) -> Dict[str, Any]:
    """Build the JSON payload returned after a simulated delay."""
    delay = normalize_delay(delay_seconds)
    return {
        "message": f"Processed successfully after a {delay:.2f} second delay!",
        "simulated_delay_seconds": delay,
    }


async def simulate_latency(delay_seconds: float) -> Dict[str, Any]:
    """Suspend the calling task for the delay, then return the payload.

    Only the awaiting task is suspended; the event loop keeps serving
    other requests.
    """
    delay = normalize_delay(delay_seconds)
    logger.info(f"Received request for /simulate_latency. Intentionally delaying for {delay:.2f} seconds.")
    await asyncio.sleep(delay)
    logger.info("Finished delay. Sending response.")
    return build_latency_response(delay)


def simulate_latency_blocking(delay_seconds: float) -> Dict[str, Any]:
    """Thread-per-connection variant used by the stdlib server."""
    delay = normalize_delay(delay_seconds)
    logger.info(f"Received request for /simulate_latency. Intentionally delaying for {delay:.2f} seconds.")
    time.sleep(delay)
    logger.info("Finished delay. Sending response.")
    return build_latency_response(delay)
