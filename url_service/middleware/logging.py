"""
Request logging middleware for FastAPI using Loguru.

Every request gets a request ID. It is echoed back in the ``X-Request-ID``
header and attached to every log record emitted while the request is handled.
Each request also gets one log line with its method, path, status code and
processing time.
"""

import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each HTTP request with a request ID and its latency."""

    async def dispatch(self, request: Request, call_next) -> Response:
        # Reuse the caller's request ID when one is supplied
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        start_time = time.perf_counter()
        # Every log line written while handling the request carries its ID
        with logger.contextualize(request_id=request_id):
            response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)

        client_ip = request.client.host if request.client else "unknown"
        if "X-Forwarded-For" in request.headers:
            forwarded_ips = request.headers["X-Forwarded-For"].split(",")
            if forwarded_ips:
                client_ip = forwarded_ips[0].strip()

        logger.bind(
            request_id=request_id,
            client_ip=client_ip,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=process_time_ms,
        ).info(
            f"{request.method} {request.url.path} {response.status_code} {process_time_ms}ms"
        )

        return response
