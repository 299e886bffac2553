"""Middleware for the link proxy web app."""

from .logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
]
