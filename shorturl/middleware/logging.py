"""
Request logging middleware for FastAPI using Loguru.

Every response carries an ``X-Request-ID`` header, and one ``REQUEST`` level
record is written per request with its method, path, status and latency.
"""

import time
import uuid
from contextvars import ContextVar

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable to store request ID across async context
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_client_ip(request: Request) -> str:
    """Client IP, preferring the first X-Forwarded-For hop."""
    if "X-Forwarded-For" in request.headers:
        forwarded_ips = request.headers["X-Forwarded-For"].split(",")
        if forwarded_ips and forwarded_ips[0].strip():
            return forwarded_ips[0].strip()
    return request.client.host if request.client else "unknown"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each HTTP request once it has been answered."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = str(uuid.uuid4())
        request_id_var.set(request_id)

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Request-ID"] = request_id

        log_record = {
            "request_id": request_id,
            "client_ip": get_client_ip(request),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round(process_time * 1000, 2),
        }
        if request.query_params:
            log_record["query_params"] = dict(request.query_params)

        logger.bind(**log_record).log(
            "REQUEST",
            "{method} {path} {status_code} {process_time_ms}ms",
            **log_record,
        )
        return response
