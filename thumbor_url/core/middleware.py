import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from thumbor_url.core.logging import get_logger


logger = get_logger("middleware")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging request and response details."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process the request and log details.

        Args:
            request: The incoming request
            call_next: The next middleware or route handler

        Returns:
            The response
        """
        # Generate a unique request ID
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        client = request.client.host if request.client else None

        logger.info(f"Request received: {request.method} {request.url.path} (client: {client}, request_id: {request_id})")

        try:
            response = await call_next(request)
        except Exception:
            duration = time.time() - start_time
            logger.exception(f"Request failed: {request.method} {request.url.path} ({duration:.3f}s)")
            raise

        duration = time.time() - start_time
        log_level = "error" if response.status_code >= 500 else \
                   "warning" if response.status_code >= 400 else "info"

        getattr(logger, log_level)(
            f"Response sent: {response.status_code} {request.method} {request.url.path} ({duration:.3f}s)"
        )

        # Add request ID to response headers
        response.headers["X-Request-ID"] = request_id

        return response
