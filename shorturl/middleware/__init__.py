"""HTTP middleware for the URL shortener service."""

from shorturl.middleware.logging import LoggingMiddleware, request_id_var

__all__ = ["LoggingMiddleware", "request_id_var"]
