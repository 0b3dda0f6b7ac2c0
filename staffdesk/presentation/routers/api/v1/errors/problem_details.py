"""RFC 9457 Problem Details for HTTP APIs.

RFC 9457: https://www.rfc-editor.org/rfc/rfc9457

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 9457 compliant error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    One entry per message in an action error's ``fieldErrors``.

    Examples:
        >>> error = ErrorDetail(
        ...     field="email",
        ...     code="VALIDATION_ERROR",
        ...     message="value is not a valid email address",
        ... )
    """

    field: str = Field(..., description="Field path (dotted)")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details response.

    ``code`` and ``details`` are extension members carrying the action
    error's taxonomy code and structured details, so callers can branch on
    the same codes the actions return.

    Examples:
        >>> problem = ProblemDetails(
        ...     type="https://app.staffdesk.local/errors/duplicate-entry",
        ...     title="Resource Conflict",
        ...     status=409,
        ...     detail="A record with this email already exists",
        ...     instance="/api/v1/clients",
        ...     code="DUPLICATE_ENTRY",
        ...     details={"field": "email"},
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["https://app.staffdesk.local/errors/validation-error"],
    )
    title: str = Field(..., description="Short, human-readable summary", examples=["Validation Failed"])
    status: int = Field(..., description="HTTP status code", examples=[422])
    detail: str = Field(..., description="Human-readable explanation")
    instance: str = Field(..., description="Request path", examples=["/api/v1/clients"])
    code: str | None = Field(None, description="Error taxonomy code", examples=["VALIDATION_ERROR"])
    details: dict | None = Field(None, description="Structured error details")
    errors: list[ErrorDetail] | None = Field(None, description="List of field-specific errors")
    trace_id: str | None = Field(None, description="Request trace ID for debugging")
