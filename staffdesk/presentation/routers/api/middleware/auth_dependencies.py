"""Bearer token dependency.

Routes only extract the caller's access token. Whether a user is required,
and resolving it, is the action's job: an action created with
``require_auth=True`` answers NOT_AUTHENTICATED (401) when the token is
missing or rejected.

Usage:
    @router.get("/clients")
    async def list_clients(request: Request, access_token: AccessToken):
        result = await get_clients(params, access_token=access_token)
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# auto_error=False: a missing header yields None instead of a 403
bearer_scheme_optional = HTTPBearer(auto_error=False)


async def get_access_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme_optional)
    ],
) -> str | None:
    """Return the bearer token from the Authorization header, if any."""
    if credentials is None:
        return None
    return credentials.credentials


AccessToken = Annotated[str | None, Depends(get_access_token)]
