"""Application actions.

Every action is built with ``create_action`` and returns an ActionResult:
``Success(value=...)`` or ``Failure(error=ActionError)``.

Usage:
    from staffdesk.application.actions import get_clients

    result = await get_clients({"page": 2, "search": "acme"}, access_token=token)
    if is_success(result):
        rows = result.value.data
"""

from staffdesk.application.actions.auth_actions import (
    get_current_user,
    reset_password,
    sign_in,
    sign_out,
    sign_up,
    update_password,
    update_profile,
)
from staffdesk.application.actions.client_actions import (
    create_client,
    delete_client,
    get_client,
    get_clients,
    update_client,
)
from staffdesk.application.actions.wrapper import (
    ActionContext,
    RevalidatePath,
    create_action,
)

__all__ = [
    "ActionContext",
    "RevalidatePath",
    "create_action",
    "create_client",
    "delete_client",
    "get_client",
    "get_clients",
    "get_current_user",
    "reset_password",
    "sign_in",
    "sign_out",
    "sign_up",
    "update_client",
    "update_password",
    "update_profile",
]
