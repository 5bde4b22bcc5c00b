"""
Rate limiter infrastructure using slowapi.

Callers are keyed by client IP. Two shared buckets exist: ``api`` covers
every route, ``documents`` additionally caps the document endpoints.
IPs listed in ``rate_limit.trusted_ips`` skip the api-wide bucket.
"""
from slowapi import Limiter
from starlette.requests import Request

from api.middleware.request_id import get_client_ip
from core.config import settings


def client_ip_key(request: Request) -> str:
    """Resolve the caller's IP, preferring the value set by RequestIDMiddleware."""
    client_ip = getattr(request.state, "client_ip", None)
    if client_ip:
        return client_ip
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def is_trusted_client() -> bool:
    return get_client_ip() in set(settings.rate_limit.trusted_ips)


limiter = Limiter(
    key_func=client_ip_key,
    storage_uri=settings.rate_limit.storage_uri,
    enabled=settings.rate_limit.enabled,
)

api_rate_limit = limiter.shared_limit(
    settings.rate_limit.api_limit,
    scope="api",
    error_message=settings.rate_limit.api_limit_message,
    exempt_when=is_trusted_client,
)

upload_rate_limit = limiter.shared_limit(
    settings.rate_limit.upload_limit,
    scope="documents",
    error_message=settings.rate_limit.upload_limit_message,
)
