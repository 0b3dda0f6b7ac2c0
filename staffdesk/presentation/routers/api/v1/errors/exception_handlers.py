"""Global exception handlers for the FastAPI application.

Action failures are rendered by the routes themselves (ErrorResponseBuilder).
These handlers cover what reaches the framework: HTTPException raised by
dependencies or re-raised by actions, request validation errors, and
anything unhandled.

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from staffdesk.core.config import get_settings
from staffdesk.core.container import get_logger
from staffdesk.presentation.routers.api.middleware.trace_middleware import get_trace_id
from staffdesk.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

# HTTP status code to (title, slug) mapping for RFC 9457
_HTTP_STATUS_INFO: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad-request"),
    401: ("Authentication Required", "unauthorized"),
    403: ("Access Denied", "forbidden"),
    404: ("Resource Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    409: ("Resource Conflict", "conflict"),
    422: ("Validation Failed", "validation-failed"),
    500: ("Internal Server Error", "internal-server-error"),
}


def _status_info(status_code: int) -> tuple[str, str]:
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert HTTPException to RFC 9457 Problem Details response."""
    assert isinstance(exc, HTTPException)

    title, slug = _status_info(exc.status_code)
    problem = ProblemDetails(
        type=f"{get_settings().site_url}/errors/{slug}",
        title=title,
        status=exc.status_code,
        detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        instance=str(request.url.path),
        trace_id=get_trace_id(),
    )

    # Preserve any headers from HTTPException (e.g., WWW-Authenticate)
    return JSONResponse(
        status_code=exc.status_code,
        content=problem.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert RequestValidationError to RFC 9457 with field-level errors."""
    assert isinstance(exc, RequestValidationError)

    field_errors: list[ErrorDetail] = []
    for error in exc.errors():
        # ["body", "email"] -> "email"
        field_parts = [str(p) for p in error.get("loc", []) if p not in ("body", "query", "path")]
        field_errors.append(
            ErrorDetail(
                field=".".join(field_parts) if field_parts else "unknown",
                code=error.get("type", "validation_error"),
                message=error.get("msg", "Validation failed"),
            )
        )

    problem = ProblemDetails(
        type=f"{get_settings().site_url}/errors/validation-failed",
        title="Validation Failed",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="Request validation failed. Check 'errors' for details.",
        instance=str(request.url.path),
        code="VALIDATION_ERROR",
        errors=field_errors or None,
        trace_id=get_trace_id(),
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=problem.model_dump(exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert any unhandled exception into a 500 without leaking internals."""
    trace_id = get_trace_id()
    get_logger().error(
        "http.unhandled_exception",
        error=exc,
        request_path=request.url.path,
        request_method=request.method,
    )

    problem = ProblemDetails(
        type=f"{get_settings().site_url}/errors/internal-server-error",
        title="Internal Server Error",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please contact support with the trace ID.",
        instance=str(request.url.path),
        code="INTERNAL_ERROR",
        trace_id=trace_id,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=problem.model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the application.

    Example:
        >>> app = FastAPI()
        >>> register_exception_handlers(app)
    """
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
