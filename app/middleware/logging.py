import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and logs one line per request.

    An id sent by the client (or a proxy) in ``X-Request-ID`` is reused so
    log lines can be correlated across hops.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()
        fields = {"request_id": request_id, "method": request.method, "path": request.url.path}

        try:
            response = await call_next(request)
        except Exception as exc:
            fields["duration_ms"] = _elapsed_ms(started)
            logger.exception(f"[{request_id}] {request.method} {request.url.path} failed: {exc}", extra=fields)
            raise

        fields.update(status_code=response.status_code, duration_ms=_elapsed_ms(started))
        # 4xx and 5xx are worth a look; everything else is routine traffic
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            f"[{request_id}] {request.method} {request.url.path} - {response.status_code} ({fields['duration_ms']}ms)",
            extra=fields,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
