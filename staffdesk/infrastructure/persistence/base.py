"""Base model and mixins for all database entities.

This module provides:
- Base: Declarative registry shared by every model (and by Alembic)
- BaseModel: Abstract base for ALL models (provides id, created_at)
- TimestampMixin: Adds updated_at
- SoftDeleteMixin: Adds deleted_at (rows are hidden, never removed)
- BaseMutableModel: Recommended base for mutable models (combines above)

Usage:
    class ClientModel(SoftDeleteMixin, BaseMutableModel):
        __tablename__ = "clients"
        name: Mapped[str]
        # Has: id, created_at, updated_at, deleted_at

Architecture:
    BaseModel (id, created_at)
        ↑
        └── BaseMutableModel (+ updated_at via TimestampMixin)
            ├── OrganizationModel
            ├── ProfileModel
            └── ClientModel (+ deleted_at via SoftDeleteMixin)

The models stay database-agnostic (generic Uuid/DateTime types) so the
test suite can run them on SQLite.
"""

from datetime import datetime
from typing import Any
from uuid import UUID as PythonUUID, uuid4

from sqlalchemy import DateTime, MetaData, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Deterministic constraint names so migrations and error details are stable
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative registry. ``Base.metadata`` is the Alembic target."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class BaseModel(Base):
    """Abstract base for all database models.

    Provides common fields that ALL database models need:
    - id: UUID primary key (auto-generated)
    - created_at: Timestamp when record was created (UTC)
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),  # Database sets this on INSERT
    )

    def __repr__(self) -> str:
        """String showing class name and ID."""
        return f"<{self.__class__.__name__}(id={self.id})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary (for debugging/logging)."""
        return {
            "id": str(self.id),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class TimestampMixin:
    """Mixin for mutable models that track updates."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def to_dict(self) -> dict[str, Any]:
        """Extend BaseModel.to_dict() with updated_at."""
        data: dict[str, Any] = super().to_dict()  # type: ignore[misc]
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data


class SoftDeleteMixin:
    """Mixin for models that are soft deleted.

    A non-null ``deleted_at`` hides the row from default queries
    (see ``apply_soft_delete_filter``).
    """

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    @property
    def is_deleted(self) -> bool:
        """True once the row has been soft deleted."""
        return self.deleted_at is not None

    def to_dict(self) -> dict[str, Any]:
        """Extend to_dict() with deleted_at."""
        data: dict[str, Any] = super().to_dict()  # type: ignore[misc]
        data["deleted_at"] = self.deleted_at.isoformat() if self.deleted_at else None
        return data


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for mutable database models.

    Provides:
        - id: UUID primary key (from BaseModel)
        - created_at: Timestamp when created (from BaseModel)
        - updated_at: Timestamp when last updated (from TimestampMixin)
    """

    __abstract__ = True
