"""
Request correlation and access logging middleware.

Every request gets a correlation id, taken from ``X-Correlation-ID`` or
``X-Request-ID`` when the caller sends one, otherwise generated. The id is
bound to the logging context for the duration of the request and echoed on
the response.
"""

import time
import uuid
from typing import Any, Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from formrelay.shared.logging import correlation_id_var, get_logger

CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id to each request and log its completion."""

    def __init__(
        self,
        app: Any,
        header_name: str = CORRELATION_ID_HEADER,
        generator: Callable[[], str] = generate_correlation_id,
    ) -> None:
        super().__init__(app)
        self.header_name = header_name
        self.generator = generator

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        correlation_id = request.headers.get(self.header_name)
        if not correlation_id:
            correlation_id = request.headers.get(REQUEST_ID_HEADER)
        if not correlation_id:
            correlation_id = self.generator()

        token = correlation_id_var.set(correlation_id)
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[self.header_name] = correlation_id

            logger.info(
                "Request completed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
                    "client": request.client.host if request.client else None,
                },
            )
            return response
        finally:
            correlation_id_var.reset(token)
