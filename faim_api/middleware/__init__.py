"""Middleware for request processing."""

from .logging import RequestLoggingMiddleware
from .request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware", "RequestLoggingMiddleware"]
