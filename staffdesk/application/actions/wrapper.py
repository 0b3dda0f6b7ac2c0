"""Action wrapper.

``create_action`` turns a business handler into an action: an async
callable that always returns an ActionResult. For every invocation it

1. acquires a backend client scoped to this call,
2. resolves the user when ``require_auth`` (no user -> NOT_AUTHENTICATED),
3. validates the input against ``schema`` (invalid -> VALIDATION_ERROR),
4. runs ``handler(validated_input, ActionContext(client, user))``,
5. wraps the value in Success and revalidates ``revalidate_paths``,
6. translates exceptions through the error taxonomy.

Steps 2 and 3 short-circuit before the handler runs. Revalidation is
best-effort and never turns a Success into a Failure. Framework control
signals (Starlette ``HTTPException``) are the only exceptions that escape.

Usage:
    async def _create_client(data: CreateClientInput, ctx: ActionContext) -> ClientResult:
        ...

    create_client = create_action(
        _create_client,
        schema=CreateClientInput,
        revalidate_paths=[RevalidatePath("/clients")],
    )

    result = await create_client({"name": "Acme", ...}, access_token=token)
"""

from collections.abc import Awaitable, Callable, Iterable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from staffdesk.application.actions.classification import (
    ControlSignal,
    UnexpectedError,
    classify_exception,
    to_action_error,
)
from staffdesk.core.container import get_logger, get_path_revalidator
from staffdesk.core.enums import ErrorCode
from staffdesk.core.errors import AuthenticationRequiredError, map_validation_error
from staffdesk.core.result import ActionResult, Failure, Success, failure, success
from staffdesk.domain.entities import AuthUser
from staffdesk.domain.protocols import (
    LoggerProtocol,
    PathRevalidatorProtocol,
    RevalidateType,
)
from staffdesk.infrastructure.backend.client import BackendClient, backend_client_scope

OutputT = TypeVar("OutputT")

NOT_AUTHENTICATED_MESSAGE = "You must be logged in to perform this action"

type ClientScope = Callable[[str | None], AbstractAsyncContextManager[BackendClient]]


@dataclass(frozen=True, slots=True, kw_only=True)
class ActionContext:
    """Per-invocation context passed to handlers.

    Attributes:
        client: Backend client scoped to this invocation.
        user: Authenticated user (None when the action does not require auth).
    """

    client: BackendClient
    user: AuthUser | None

    def require_user(self) -> AuthUser:
        """Return the user of an action created with ``require_auth=True``."""
        if self.user is None:
            raise AuthenticationRequiredError(NOT_AUTHENTICATED_MESSAGE)
        return self.user


@dataclass(frozen=True, slots=True)
class RevalidatePath:
    """Cache-invalidation directive run after a successful action.

    Attributes:
        path: Rendered path to mark stale.
        type: ``page`` or ``layout`` (None means page).
    """

    path: str
    type: RevalidateType | None = None


type ActionHandler[I, O] = Callable[[I, ActionContext], Awaitable[O]]
type Action[O] = Callable[..., Awaitable[ActionResult[O]]]


def create_action(
    handler: ActionHandler[Any, OutputT],
    *,
    schema: type[BaseModel] | None = None,
    require_auth: bool = True,
    revalidate_paths: Iterable[RevalidatePath] = (),
    client_scope: ClientScope | None = None,
    revalidator: PathRevalidatorProtocol | None = None,
    logger: LoggerProtocol | None = None,
    name: str | None = None,
) -> Action[OutputT]:
    """Wrap ``handler`` into an action.

    Args:
        handler: ``async (input, ctx) -> value``.
        schema: pydantic model validating the raw input. Without a schema
            the input is passed through unchanged.
        require_auth: Resolve the user first and fail with
            NOT_AUTHENTICATED when there is none.
        revalidate_paths: Paths invalidated after success.
        client_scope: ``(access_token) -> async context manager`` yielding
            a BackendClient. Defaults to ``backend_client_scope``.
        revalidator: Path revalidator. Defaults to the container's.
        logger: Logger. Defaults to the container's.
        name: Action name used in logs. Defaults to the handler's name.

    Returns:
        ``async (input=None, *, access_token=None) -> ActionResult``.

    Example:
        >>> get_clients = create_action(_get_clients, schema=ClientFilterInput)
        >>> result = await get_clients({"page": 3}, access_token=token)
        >>> result.value.pagination.page
        3
    """
    paths = tuple(revalidate_paths)
    action_name = name or getattr(handler, "__name__", "action").lstrip("_")

    async def action(
        input: Any = None,
        *,
        access_token: str | None = None,
    ) -> ActionResult[OutputT]:
        log = (logger or get_logger()).bind(action=action_name)
        scope = client_scope or backend_client_scope

        try:
            async with scope(access_token) as client:
                result = await _execute(client, input, log)
        except Exception as exc:
            variant = classify_exception(exc)
            if isinstance(variant, ControlSignal):
                raise
            error = to_action_error(variant)
            if isinstance(variant, UnexpectedError):
                log.error("action.unexpected_error", error=exc, error_code=error.code.value)
            else:
                log.warning(
                    "action.failed",
                    error_code=error.code.value,
                    error_message=error.message,
                )
            return Failure(error=error)

        if isinstance(result, Success) and paths:
            await _revalidate(paths, revalidator, log)
        return result

    async def _execute(
        client: BackendClient,
        raw_input: Any,
        log: LoggerProtocol,
    ) -> ActionResult[OutputT]:
        user: AuthUser | None = None
        if require_auth:
            try:
                user = await client.get_user()
            except Exception as exc:
                log.info("action.user_unresolved", error_type=type(exc).__name__)
                user = None
            if user is None:
                log.info("action.failed", error_code=ErrorCode.NOT_AUTHENTICATED.value)
                return failure(ErrorCode.NOT_AUTHENTICATED, NOT_AUTHENTICATED_MESSAGE)

        validated = raw_input
        if schema is not None:
            try:
                validated = schema.model_validate({} if raw_input is None else raw_input)
            except ValidationError as exc:
                error = map_validation_error(exc)
                log.info(
                    "action.failed",
                    error_code=error.code.value,
                    fields=sorted(error.details["fieldErrors"]) if error.details else [],
                )
                return Failure(error=error)

        value = await handler(validated, ActionContext(client=client, user=user))
        return success(value)

    action.__name__ = action_name
    action.__qualname__ = action_name
    action.__doc__ = handler.__doc__
    return action


async def _revalidate(
    paths: tuple[RevalidatePath, ...],
    revalidator: PathRevalidatorProtocol | None,
    log: LoggerProtocol,
) -> None:
    """Run every directive; failures are logged and swallowed."""
    try:
        target = revalidator or get_path_revalidator()
    except Exception as exc:
        log.error("action.revalidation_unavailable", error=exc)
        return

    for directive in paths:
        try:
            outcome = await target.revalidate_path(directive.path, directive.type)
        except Exception as exc:
            log.error("action.revalidation_failed", error=exc, path=directive.path)
            continue
        if isinstance(outcome, Failure):
            log.warning(
                "action.revalidation_failed",
                path=directive.path,
                error_message=outcome.error.message,
            )
