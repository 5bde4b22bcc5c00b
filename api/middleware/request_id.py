"""
Request ID middleware

Reuses or generates a trace id per request and publishes it (plus the
caller IP) through contextvars so structlog and the rate limiter see it.
"""
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

import structlog


client_ip_var: ContextVar[Optional[str]] = ContextVar("client_ip", default=None)

# Incoming ids are echoed back in headers and logs, so keep them tame
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Request id tracing middleware

    1. Take ``X-Request-ID`` from the request or generate a uuid4
    2. Bind request_id/client_ip/method/path into structlog contextvars
    3. Echo the id back in the response headers
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(self.HEADER_NAME)
        if not request_id or not _VALID_REQUEST_ID.match(request_id):
            request_id = str(uuid.uuid4())

        client_ip = self._get_client_ip(request)

        request.state.request_id = request_id
        request.state.client_ip = client_ip

        client_ip_var.set(client_ip)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            client_ip=client_ip,
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)
        response.headers[self.HEADER_NAME] = request_id
        return response

    def _get_client_ip(self, request: Request) -> str:
        """Client IP, honouring X-Forwarded-For / X-Real-IP from a proxy."""
        x_forwarded_for = request.headers.get("X-Forwarded-For")
        if x_forwarded_for:
            return x_forwarded_for.split(",")[0].strip()
        x_real_ip = request.headers.get("X-Real-IP")
        if x_real_ip:
            return x_real_ip
        return request.client.host if request.client else "unknown"


def get_client_ip() -> Optional[str]:
    """Current client IP, or None outside a request."""
    return client_ip_var.get()
