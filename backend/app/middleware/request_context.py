"""
Q&A Service — Request Context Middleware
==========================================

What:  Gives every request a correlation ID and writes one access log line
       when it completes.
How:   The ID (client-supplied X-Request-ID, or 8 hex chars of a UUID4) lives
       in a ContextVar for the duration of the request. RequestIdLogFilter
       copies it onto every log record, so service and handler log lines carry
       it without passing it around. The ID is echoed in the response header.

Access line:
    GET /questions/7 404 3.2ms from 127.0.0.1
    Level by status: 5xx → ERROR, 4xx → WARNING, everything else → INFO.
    /health is not logged; load balancers poll it every few seconds.
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

access_logger = logging.getLogger("qa_service.access")


class RequestIdLogFilter(logging.Filter):
    """Sets `record.request_id` for the %(request_id)s log format field."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class RequestContextMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        token = request_id_var.set(rid)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid

            if request.url.path != "/health":
                elapsed_ms = (time.perf_counter() - started) * 1000
                if response.status_code >= 500:
                    level = logging.ERROR
                elif response.status_code >= 400:
                    level = logging.WARNING
                else:
                    level = logging.INFO
                client = request.client.host if request.client else "unknown"
                access_logger.log(
                    level,
                    "%s %s %d %.1fms from %s",
                    request.method,
                    request.url.path,
                    response.status_code,
                    elapsed_ms,
                    client,
                )
            return response
        finally:
            request_id_var.reset(token)
