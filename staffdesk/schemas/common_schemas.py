"""Common schemas used across multiple actions and endpoints.

Provides reusable field types (phone, trimmed strings), pagination and sort
inputs, date ranges, and standard response wrappers.
"""

import re
from datetime import date, datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
)

from staffdesk.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, NAME_MAX_LENGTH
from staffdesk.core.pagination import PaginationMeta

_PHONE_PATTERN = re.compile(r"^[\d\s\-()+]+$")

DATE_RANGE_MESSAGE = "Start date must be before or equal to end date"


def _validate_phone(value: str) -> str:
    if not _PHONE_PATTERN.fullmatch(value):
        raise ValueError("Invalid phone format")
    if len(value) < 9:
        raise ValueError("Phone must be at least 9 characters")
    if len(value) > 20:
        raise ValueError("Phone must be at most 20 characters")
    return value


# =============================================================================
# Field Types
# =============================================================================

Phone = Annotated[str, AfterValidator(_validate_phone)]
"""Digits, spaces, dashes, parentheses and plus sign; 9-20 characters."""

TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]

PersonName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)
]

SortOrder = Literal["asc", "desc"]


# =============================================================================
# Inputs
# =============================================================================


class IdInput(BaseModel):
    """Input carrying a single record id."""

    id: UUID = Field(..., description="Record identifier")


class PaginationInput(BaseModel):
    """Pagination parameters (1-indexed pages)."""

    page: int = Field(1, ge=1, description="Page number (1-indexed)")
    page_size: int = Field(
        DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Items per page",
    )


class BaseFilterInput(PaginationInput):
    """Pagination plus an optional free-text search."""

    search: TrimmedStr | None = Field(None, description="Free-text search term")


class DateRangeInput(BaseModel):
    """Optional datetime range; when both ends are given, start <= end."""

    date_from: datetime | None = Field(None, description="Range start (ISO datetime)")
    date_to: datetime | None = Field(None, description="Range end (ISO datetime)")

    @field_validator("date_to")
    @classmethod
    def validate_range(cls, v: datetime | None, info: ValidationInfo) -> datetime | None:
        """Reject ranges that end before they start."""
        start = info.data.get("date_from")
        if v is not None and start is not None and start > v:
            raise ValueError(DATE_RANGE_MESSAGE)
        return v


class DateOnlyRangeInput(BaseModel):
    """Required date range (YYYY-MM-DD), start <= end."""

    start_date: date = Field(..., description="Range start")
    end_date: date = Field(..., description="Range end")

    @field_validator("end_date")
    @classmethod
    def validate_range(cls, v: date, info: ValidationInfo) -> date:
        """Reject ranges that end before they start."""
        start = info.data.get("start_date")
        if start is not None and start > v:
            raise ValueError(DATE_RANGE_MESSAGE)
        return v


# =============================================================================
# Responses
# =============================================================================


class PaginationResponse(BaseModel):
    """Pagination metadata for list responses."""

    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., description="Items per page")
    total_items: int = Field(..., description="Total items matching the filters")
    total_pages: int = Field(..., description="Total number of pages")
    has_next_page: bool = Field(..., description="Whether a next page exists")
    has_previous_page: bool = Field(..., description="Whether a previous page exists")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_meta(cls, meta: PaginationMeta) -> "PaginationResponse":
        """Convert pagination metadata to response schema."""
        return cls.model_validate(meta)


class SuccessResponse(BaseModel):
    """Acknowledgement for operations without a resource to return."""

    success: bool = Field(True, description="Always true")
