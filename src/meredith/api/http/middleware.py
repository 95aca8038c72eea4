"""HTTP middleware: response hardening and request correlation."""

import time
import uuid

from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse, Response

from src.meredith.runtime.context import get_config

REQUEST_ID_HEADER = "X-Request-ID"

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}
_HSTS = "max-age=31536000; includeSubDomains; preload"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add browser hardening headers; HSTS is only sent in production."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        if get_config().app.environment == "production":
            response.headers.setdefault("Strict-Transport-Security", _HSTS)
        return response


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every log record of a request with its correlation id.

    The id is taken from the incoming ``X-Request-ID`` header or generated,
    and echoed on the response. Unhandled errors become an opaque 500 that
    still carries the id.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        started = time.perf_counter()

        with logger.contextualize(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=_client_ip(request),
        ):
            logger.info("request.start")
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.bind(
                    status_code=500,
                    duration_ms=_elapsed_ms(started),
                    error_type=type(exc).__name__,
                ).exception("request.error")
                return JSONResponse(
                    status_code=500,
                    content={"detail": "Internal Server Error", "request_id": request_id},
                    headers={REQUEST_ID_HEADER: request_id},
                )

            logger.bind(
                status_code=response.status_code, duration_ms=_elapsed_ms(started)
            ).info("request.end")
            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
            return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)
