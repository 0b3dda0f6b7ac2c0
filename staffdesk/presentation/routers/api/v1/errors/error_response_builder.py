"""Error response builder for RFC 9457 Problem Details.

Converts the ActionError of a Failure result into a JSON response with the
HTTP status its code maps to.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 9457 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from staffdesk.core.config import get_settings
from staffdesk.core.enums import ErrorCode
from staffdesk.core.errors import ActionError
from staffdesk.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INVALID_DATE_RANGE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.DUPLICATE_ENTRY: status.HTTP_409_CONFLICT,
    ErrorCode.HAS_DEPENDENCIES: status.HTTP_409_CONFLICT,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.SESSION_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_TITLE_BY_CODE: dict[ErrorCode, str] = {
    ErrorCode.NOT_FOUND: "Resource Not Found",
    ErrorCode.VALIDATION_ERROR: "Validation Failed",
    ErrorCode.INVALID_DATE_RANGE: "Invalid Date Range",
    ErrorCode.DUPLICATE_ENTRY: "Resource Conflict",
    ErrorCode.HAS_DEPENDENCIES: "Resource In Use",
    ErrorCode.FORBIDDEN: "Access Denied",
    ErrorCode.NOT_AUTHENTICATED: "Authentication Required",
    ErrorCode.SESSION_EXPIRED: "Session Expired",
    ErrorCode.INVALID_CREDENTIALS: "Invalid Credentials",
    ErrorCode.DATABASE_ERROR: "Database Error",
    ErrorCode.INTERNAL_ERROR: "Internal Server Error",
}


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses from action errors.

    Example:
        >>> match await create_client(payload, access_token=token):
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_action_error(
        ...             error, request, trace_id=get_trace_id()
        ...         )
    """

    @staticmethod
    def from_action_error(
        error: ActionError,
        request: Request,
        trace_id: str | None = None,
    ) -> JSONResponse:
        """Convert ActionError to RFC 9457 JSON response.

        ``details.fieldErrors`` (validation failures) becomes ``errors``;
        the remaining details are passed through as ``details``.
        """
        status_code = ErrorResponseBuilder.get_status_code(error.code)
        details = dict(error.details or {})
        field_errors = details.pop("fieldErrors", None) or {}
        details.pop("issues", None)

        problem = ProblemDetails(
            type=f"{get_settings().site_url}/errors/{error.code.value.lower().replace('_', '-')}",
            title=_TITLE_BY_CODE.get(error.code, "Error"),
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            code=error.code.value,
            details=details or None,
            errors=[
                ErrorDetail(field=field, code=error.code.value, message=message)
                for field, messages in field_errors.items()
                for message in messages
            ]
            or None,
            trace_id=trace_id,
        )

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(mode="json", exclude_none=True),
        )

    @staticmethod
    def get_status_code(code: ErrorCode) -> int:
        """Map an error code to its HTTP status (500 when unmapped).

        Example:
            >>> ErrorResponseBuilder.get_status_code(ErrorCode.DUPLICATE_ENTRY)
            409
        """
        return _STATUS_BY_CODE.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)
