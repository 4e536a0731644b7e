"""Request-id propagation, request logging, and JSON error payloads."""

from __future__ import annotations

from time import perf_counter
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from fastapi import status
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from validation_playbooks.core.config import settings
from validation_playbooks.core.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import FastAPI
    from starlette.requests import Request
    from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-Id"
HEALTH_PATHS = frozenset({"/health", "/healthz", "/readyz"})
logger = get_logger(__name__)


def _get_request_id(request: Request) -> str | None:
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    return None


def _error_payload(*, detail: Any, request_id: str | None) -> dict[str, Any]:
    payload: dict[str, Any] = {"error": detail}
    if request_id is not None:
        payload["request_id"] = request_id
    return payload


def _json_safe(value: Any) -> Any:
    """Coerce validation-error inputs into something JSON can carry."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _error_response(
    request: Request,
    *,
    status_code: int,
    detail: Any,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    request_id = _get_request_id(request)
    response = JSONResponse(
        status_code=status_code,
        content=_error_payload(detail=detail, request_id=request_id),
        headers=headers,
    )
    if request_id is not None:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def _request_validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, RequestValidationError):
        raise TypeError("Expected RequestValidationError")
    return _error_response(
        request,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=[_json_safe(issue) for issue in exc.errors()],
    )


async def _response_validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, ResponseValidationError):
        raise TypeError("Expected ResponseValidationError")
    logger.error(
        "http.response.invalid",
        extra={"path": request.url.path, "error_count": len(exc.errors())},
    )
    return _error_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal Server Error",
    )


async def _http_exception_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, StarletteHTTPException):
        raise TypeError("Expected StarletteHTTPException")
    return _error_response(
        request,
        status_code=exc.status_code,
        detail=exc.detail,
        headers=dict(exc.headers) if exc.headers else None,
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "http.request.unhandled",
        extra={"path": request.url.path, "method": request.method, "error": str(exc)},
    )
    return _error_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal Server Error",
    )


async def _request_context_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    request_id = incoming or uuid4().hex
    request.state.request_id = request_id

    started = perf_counter()
    response = await call_next(request)
    elapsed_ms = (perf_counter() - started) * 1000
    response.headers.setdefault(REQUEST_ID_HEADER, request_id)

    path = request.url.path
    if path in HEALTH_PATHS and not settings.request_log_include_health:
        return response

    extra = {
        "method": request.method,
        "path": path,
        "status_code": response.status_code,
        "duration_ms": round(elapsed_ms, 2),
        "request_id": request_id,
    }
    threshold = settings.request_log_slow_ms
    if threshold and elapsed_ms >= threshold:
        logger.warning("http.request.slow", extra={**extra, "slow_threshold_ms": threshold})
    else:
        logger.info("http.request.complete", extra=extra)
    return response


def install_error_handling(app: FastAPI) -> None:
    """Register request-id middleware and JSON exception handlers on `app`."""
    app.middleware("http")(_request_context_middleware)
    app.add_exception_handler(RequestValidationError, _request_validation_exception_handler)
    app.add_exception_handler(ResponseValidationError, _response_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
