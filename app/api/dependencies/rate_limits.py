from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from infrastructure.clock import system_clock_ms
from infrastructure.logging import get_module_logger
from infrastructure.ratelimit import RateLimitExceededError
from infrastructure.services import RateLimiterDep
from infrastructure.storage import StorageUnavailableError

logger = get_module_logger()


def get_remote_address(request: Request) -> str:
    """Client address used as the rate limit identity.

    Forwarded headers are not read here; behind a proxy, uvicorn rewrites the
    client address only for peers listed in ``FORWARDED_ALLOW_IPS``.
    """
    return request.client.host if request.client else "unknown"


def enforce_api_rate_limit(request: Request, limiter: RateLimiterDep) -> None:
    """Route dependency counting one "api" call for the client address."""
    limiter.check_or_raise(get_remote_address(request), "api")


async def rate_limit_handler(_request: Request, exc: Exception):
    """Return a 429 status code with a Retry-After header."""
    if isinstance(exc, RateLimitExceededError):
        retry_after = exc.retry_after_seconds(system_clock_ms())
        return JSONResponse(
            status_code=429,
            content={"message": "Rate limit exceeded", "reset_at": exc.reset_at},
            headers={"Retry-After": str(retry_after)},
        )


async def storage_unavailable_handler(_request: Request, exc: Exception):
    """Return a 503 status code when the durable store is unreachable."""
    if isinstance(exc, StorageUnavailableError):
        logger.error(
            "storage_unavailable", operation=exc.operation, error=str(exc)
        )
        return JSONResponse(
            status_code=503,
            content={"message": "Storage unavailable"},
        )


def setup_rate_limiter(app: FastAPI):
    """
    Setup rate limiting error handling for the FastAPI application.
    """
    app.add_exception_handler(RateLimitExceededError, rate_limit_handler)
    app.add_exception_handler(StorageUnavailableError, storage_unavailable_handler)
