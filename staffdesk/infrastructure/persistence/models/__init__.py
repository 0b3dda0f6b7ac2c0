"""Database models.

Importing this package registers every model on ``Base.metadata``.
"""

from staffdesk.infrastructure.persistence.base import Base
from staffdesk.infrastructure.persistence.models.client import ClientModel
from staffdesk.infrastructure.persistence.models.organization import (
    OrganizationModel,
)
from staffdesk.infrastructure.persistence.models.profile import ProfileModel

__all__ = ["Base", "ClientModel", "OrganizationModel", "ProfileModel"]
