"""
Rate Limiting Service

Per-client request limits for the books and authors endpoints, using slowapi.

Read endpoints use settings.rate_limit_default and create, update and
delete endpoints use settings.rate_limit_write. Clients are keyed by their
connection address. Proxy headers are only honoured when
settings.rate_limit_trust_proxy_headers is set, because any client can send
them.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from library_api.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def get_client_ip(request: Request) -> str:
    """
    Key a request by client address.

    Behind a trusted reverse proxy the first X-Forwarded-For entry is the
    client; otherwise the header is ignored.
    """
    if settings.rate_limit_trust_proxy_headers:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_ip,
    default_limits=[settings.rate_limit_default],
    storage_uri=settings.rate_limit_storage_uri,
    strategy="fixed-window",
    enabled=settings.rate_limit_enabled,
)

logger.info(
    f"Rate limiter enabled: {settings.rate_limit_enabled} "
    f"(read {settings.rate_limit_default}, write {settings.rate_limit_write})"
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Answer 429 Too Many Requests.

    Retry-After is the length of the window of the limit that was hit, so
    a "5/second" limit asks for 1 second and "30/minute" for 60.
    """
    window = exc.limit.limit.get_expiry()

    logger.warning(
        f"{request.method} {request.url.path} rate limited for "
        f"{get_client_ip(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "detail": str(exc.detail),
        },
        headers={"Retry-After": str(window)},
    )
