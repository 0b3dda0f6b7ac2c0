"""Exceptions raised at the edges of the system.

Actions return ActionError as data, but handlers talk to infrastructure that
reports failure by raising. These are the exception types the action wrapper
knows how to classify.

Exceptions:
    AuthenticationRequiredError: Handler needs an authenticated session.
    BackendQueryError: Database/query gateway failure with a backend code.
    AuthProviderError: Identity provider rejected a request.
"""

from dataclasses import dataclass

from staffdesk.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DatabaseErrorInfo:
    """Backend error shape consumed by ``map_database_error``.

    Attributes:
        code: SQLSTATE (e.g. ``23505``) or query-gateway code (e.g. ``PGRST116``).
        message: Backend message (e.g. ``null value in column "name" ...``).
        details: Backend detail string (e.g. ``Key (email)=(x) already exists.``).
        hint: Optional backend hint.
    """

    code: str
    message: str
    details: str | None = None
    hint: str | None = None


class AuthenticationRequiredError(Exception):
    """Raised by handlers that need an authenticated session but have none.

    Carries its own taxonomy code so the wrapper can pass it through unchanged.

    Attributes:
        code: Taxonomy code (NOT_AUTHENTICATED by default).
        message: Human-readable message.
    """

    def __init__(
        self,
        message: str = "User is not authenticated",
        code: ErrorCode = ErrorCode.NOT_AUTHENTICATED,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class BackendQueryError(Exception):
    """Raised when the backend rejects a query.

    Attributes:
        info: Structured backend error.
    """

    def __init__(self, info: DatabaseErrorInfo) -> None:
        super().__init__(info.message)
        self.info = info


class AuthProviderError(Exception):
    """Raised when the identity provider returns an error response.

    Attributes:
        code: Provider error code (e.g. ``invalid_credentials``), may be None.
        message: Provider message.
        status: HTTP status returned by the provider, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = status

    def __repr__(self) -> str:
        return (
            f"AuthProviderError(code={self.code!r}, status={self.status!r}, "
            f"message={self.message!r})"
        )
