"""Request boundary middleware.

Every request gets an ID, timing logs and the response hardening headers.
Exceptions no handler claimed are rendered here through the generic
exception handler, so the caller only ever sees the fixed 500 message and
the error is logged once, with the request ID attached to the response.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .exceptions import generic_exception_handler

RESPONSE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'",
}


def _client_ip(request: Request) -> str | None:
    # Behind a proxy the first forwarded address is the caller
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign request IDs, log request timing and finalize every response."""

    def __init__(self, app: ASGIApp, logger_name: str = "user_api.requests") -> None:
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Run the request and stamp the response, converting unexpected errors.

        Args:
            request: HTTP request
            call_next: Next middleware/endpoint in chain

        Returns:
            Response: Endpoint response, or the opaque 500 response
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": _client_ip(request),
        }
        start_time = time.time()

        self.logger.info(
            f"Request started: {request.method} {request.url.path}",
            extra={
                **context,
                "query_params": dict(request.query_params),
                "user_agent": request.headers.get("User-Agent"),
                "event_type": "request_started",
            },
        )

        try:
            response = await call_next(request)
            event_type = "request_completed"
        except Exception as exc:
            # The handler writes the single ERROR record with the traceback
            response = await generic_exception_handler(request, exc)
            event_type = "request_failed"

        self.logger.info(
            f"Request finished: {request.method} {request.url.path} - {response.status_code}",
            extra={
                **context,
                "status_code": response.status_code,
                "process_time": round(time.time() - start_time, 4),
                "event_type": event_type,
            },
        )

        response.headers["X-Request-ID"] = request_id
        response.headers.update(RESPONSE_HEADERS)
        return response
