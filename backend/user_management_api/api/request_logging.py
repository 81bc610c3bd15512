"""Request/Response Logging Middleware — one line in, one line out, per request.

Invariants:
    - Every request gets a request id (incoming X-Request-ID or a fresh uuid4 hex),
      stored on request.state and echoed in the X-Request-ID response header
    - Requests are numbered per endpoint key "METHOD path", starting at 1
    - The response line carries status, duration (ms) and the body truncated to body_max_chars
    - A request whose handler raises is logged with status 500 and the exception re-raised
"""

import logging
import time
import uuid
from collections import Counter
from collections.abc import AsyncIterator

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def _replay(chunks: list[bytes]) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk


class RequestResponseLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request and its response with timing and a per-endpoint counter."""

    def __init__(self, app: ASGIApp, body_max_chars: int = 2048):
        super().__init__(app)
        self.body_max_chars = body_max_chars
        self.endpoint_counter: Counter[str] = Counter()

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        endpoint = f"{request.method} {request.url.path}"
        self.endpoint_counter[endpoint] += 1
        count = self.endpoint_counter[endpoint]
        query = request.url.query

        logger.info(
            f"Incoming request #{count} to {endpoint} | Query: {query}",
            extra={
                "request_id": request_id,
                "endpoint": endpoint,
                "request_count": count,
                "query": query,
            },
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            logger.error(
                f"Request #{count} to {endpoint} failed after {duration_ms} ms: {exc!r}",
                extra={
                    "request_id": request_id,
                    "endpoint": endpoint,
                    "request_count": count,
                    "status_code": 500,
                    "duration_ms": duration_ms,
                },
            )
            raise

        chunks = [chunk async for chunk in response.body_iterator]
        response.body_iterator = _replay(chunks)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        body = b"".join(chunks).decode("utf-8", errors="replace")
        if len(body) > self.body_max_chars:
            body = body[: self.body_max_chars] + "...(truncated)"

        logger.info(
            f"Response to {endpoint} (#{count}) | Status: {response.status_code} "
            f"| Duration: {duration_ms} ms | Body: {body}",
            extra={
                "request_id": request_id,
                "endpoint": endpoint,
                "request_count": count,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
