"""Identity provider adapters."""

from staffdesk.infrastructure.auth.gotrue_adapter import GoTrueAuthAdapter

__all__ = ["GoTrueAuthAdapter"]
