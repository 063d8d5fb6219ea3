"""Per-request access log: method, path, caller, status and latency."""
from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from relay_chat.api.middleware.correlation_id import request_id_ctx

logger = logging.getLogger(__name__)


class RequestTimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "[%s] %s %s user=%s -> %s %.1fms",
            request_id_ctx.get(),
            request.method,
            request.url.path,
            request.headers.get("user", "-"),
            response.status_code,
            elapsed_ms,
        )
        return response
