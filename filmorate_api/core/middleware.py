import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from filmorate_api.core.trace import (
    TRACE_HEADER,
    bind_trace_id,
    get_trace_id,
    unbind_trace_id,
)

alog = logging.getLogger("filmorate.access")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a trace id per request, echo it back and write one access line."""

    async def dispatch(self, request: Request, call_next):
        token = bind_trace_id(request.headers.get(TRACE_HEADER))
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers[TRACE_HEADER] = get_trace_id()
            return response
        finally:
            alog.info(
                "access",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "query": str(request.url.query or ""),
                    "status": status,
                    "latency_ms": int((time.perf_counter() - start) * 1000),
                    "client_ip": request.client.host
                    if request.client else None,
                },
            )
            unbind_trace_id(token)
