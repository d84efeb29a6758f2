import json
import logging

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import Response, HTMLResponse
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
import uvicorn

from .core import Config, setup_logging, simulate_latency, normalize_delay, INDEX_HTML

# Configuration
DEMO_HOST = Config.DEMO_HOST
DEMO_PORT = Config.DEMO_PORT
LOG_LEVEL = Config.LOG_LEVEL
LATENCY_DELAY_SECONDS = Config.LATENCY_DELAY_SECONDS
RATE_LIMIT = Config.RATE_LIMIT

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application"""
    # Startup
    logger.info(f"Server running on http://{DEMO_HOST}:{DEMO_PORT}")
    logger.info(f"Simulated latency: {LATENCY_DELAY_SECONDS:.2f} seconds per request")
    logger.info(f"Rate limit on /simulate_latency: {RATE_LIMIT or 'disabled'}")
    logger.info(f"Logging level: {LOG_LEVEL}")

    yield

    # Shutdown
    logger.info("Shutting down latency demo server")


limiter = Limiter(key_func=get_remote_address)

# FastAPI Application
app = FastAPI(
    title="Latency Demo",
    description="Demo server that intentionally delays responses to exercise client loading states",
    version="1.0.0",
    lifespan=lifespan
)

# Add rate limiter to app state for middleware
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["accept", "content-type", "origin"],
)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Handle rate limit exceeded errors"""
    logger.warning(f"Rate limit exceeded for {request.client.host}: {exc.detail}")
    return Response(
        content=json.dumps({
            "detail": "Too many requests. Please try again later.",
            "error": "rate_limit_exceeded"
        }),
        status_code=429,
        media_type="application/json"
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Incoming request: {request.method} {request.url}")
    try:
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code} for {request.method} {request.url.path}")
        return response
    except Exception as e:
        logger.error(f"Request failed: {request.method} {request.url.path}: {e}")
        raise


# Routes

@app.get("/", response_class=HTMLResponse)
async def index():
    """Demo page with a button that triggers the delayed endpoint"""
    return HTMLResponse(content=INDEX_HTML)


def apply_rate_limit(endpoint, limit):
    """Wrap an endpoint in the slowapi limiter only when a limit is configured"""
    if not limit:
        return endpoint
    return limiter.limit(limit)(endpoint)


async def simulate_latency_endpoint(request: Request):
    """
    Intentionally slow endpoint.

    The request body is ignored. Only this request's task is suspended, so
    other requests keep being served during the delay. Unthrottled unless
    RATE_LIMIT is set.
    """
    return await simulate_latency(LATENCY_DELAY_SECONDS)


app.post("/simulate_latency")(apply_rate_limit(simulate_latency_endpoint, RATE_LIMIT))


@app.get("/health")
async def health_check():
    """Health check endpoint - responds immediately"""
    return {
        "status": "ok",
        "service": "latency-demo",
        "simulated_delay_seconds": normalize_delay(LATENCY_DELAY_SECONDS)
    }


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=DEMO_HOST,
        port=DEMO_PORT,
        log_level=LOG_LEVEL.lower()
    )
