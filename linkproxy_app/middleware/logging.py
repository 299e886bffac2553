"""Request logging middleware."""

import time
import logging
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Access log: one line per request with status and duration.

    Unhandled exceptions pass through here before the server-error handler
    turns them into a 502, so they are logged with that status and re-raised.
    """

    failed_status = 502

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("linkproxy.web")

    def _log(self, request: Request, status_code: int, started: float):
        client_ip = request.client.host if request.client else "unknown"
        duration_ms = (time.time() - started) * 1000
        self.logger.info(
            f"{request.method} {request.url.path} from {client_ip} - "
            f"Status: {status_code} - Duration: {duration_ms:.2f}ms"
        )

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.time()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, self.failed_status, started)
            raise
        self._log(request, response.status_code, started)
        return response
