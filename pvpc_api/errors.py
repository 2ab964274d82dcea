"""
Unified error responses for the API.

Every failure leaves the service as
``{"error": {"code", "message", "detail"?, "request_id"}}`` and each
response echoes an ``X-Request-ID`` header, taken from the request when the
client sent one.

Tags:
    - error-handling
    - middleware
    - request-tracing
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .exceptions import PriceServiceError


ERROR_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
    502: "UPSTREAM_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


def error_body(code: str, message: str, request_id: Optional[str],
               detail: Any = None) -> Dict[str, Any]:
    """Build the error envelope shared by every handler."""
    error: Dict[str, Any] = {"code": code, "message": message}
    if detail is not None:
        error["detail"] = detail
    if request_id:
        error["request_id"] = request_id
    return {"error": error}


def error_code_for_status(status_code: int) -> str:
    """Default error code for an HTTP status without an explicit one."""
    return ERROR_CODES.get(status_code, f"HTTP_{status_code}")


def validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """Validation errors without their `ctx`, which may hold exception objects."""
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


def _error_response(request: Request, status_code: int, code: str, message: str,
                    detail: Any = None) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content=error_body(code, message, request_id, detail=detail),
        headers={"X-Request-ID": request_id} if request_id else None,
    )


def register_error_handling(app: FastAPI, logger: logging.Logger) -> None:
    """
    Install the request-id middleware and the exception handlers.

    Args:
        app (FastAPI): Application to configure
        logger (logging.Logger): Receives the traceback of unhandled errors
    """

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid4().hex[:12]
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(PriceServiceError)
    async def price_service_error_handler(request: Request, exc: PriceServiceError):
        return _error_response(request, exc.status_code, exc.code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return _error_response(
            request, 422, "VALIDATION_ERROR", "Request validation failed.",
            detail=validation_errors(exc),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        code = error_code_for_status(exc.status_code)
        message = "Request failed."
        # controllers pass {"code", "message"} for service errors
        if isinstance(exc.detail, dict):
            code = str(exc.detail.get("code") or code)
            message = str(exc.detail.get("message") or message)
        elif exc.detail:
            message = str(exc.detail)
        return _error_response(request, exc.status_code, code, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            f"❌ Unhandled API exception [request_id={getattr(request.state, 'request_id', None)}]")
        return _error_response(request, 500, "INTERNAL_ERROR", "Unexpected internal error.")
