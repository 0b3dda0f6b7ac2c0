"""Domain ports (Protocol-based, structural typing)."""

from staffdesk.domain.protocols.auth_provider_protocol import AuthProviderProtocol
from staffdesk.domain.protocols.logger_protocol import LoggerProtocol
from staffdesk.domain.protocols.path_revalidator_protocol import (
    PathRevalidatorProtocol,
    RevalidateType,
)

__all__ = [
    "AuthProviderProtocol",
    "LoggerProtocol",
    "PathRevalidatorProtocol",
    "RevalidateType",
]
