"""Translate SQLAlchemy exceptions into DatabaseErrorInfo.

PostgreSQL drivers expose the SQLSTATE and the detail string directly.
SQLite only reports a message ("UNIQUE constraint failed: clients.email"),
so its constraint failures are normalized into the PostgreSQL shape the
error mapper understands.
"""

import re

from sqlalchemy.exc import DBAPIError, NoResultFound

from staffdesk.core.errors import DatabaseErrorInfo

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?P<columns>[\w.,\s]+)")
_SQLITE_NOT_NULL = re.compile(r"NOT NULL constraint failed: (?:\w+\.)?(?P<column>\w+)")


def database_error_from_exception(exc: DBAPIError | NoResultFound) -> DatabaseErrorInfo:
    """Extract the backend error shape from a SQLAlchemy exception.

    Args:
        exc: ``NoResultFound`` from ``scalar_one()`` or a ``DBAPIError``
            wrapping the driver exception.

    Returns:
        DatabaseErrorInfo with a SQLSTATE-style code.

    Example:
        >>> database_error_from_exception(NoResultFound()).code
        'PGRST116'
    """
    if isinstance(exc, NoResultFound):
        return DatabaseErrorInfo(
            code="PGRST116",
            message=str(exc) or "No row was found when one was required",
        )

    orig = exc.orig
    # asyncpg errors are chained behind SQLAlchemy's adapter exception
    driver_error = getattr(orig, "__cause__", None) or orig

    sqlstate = (
        getattr(orig, "sqlstate", None)
        or getattr(orig, "pgcode", None)
        or getattr(driver_error, "sqlstate", None)
    )
    if sqlstate:
        diag = getattr(driver_error, "diag", None)
        return DatabaseErrorInfo(
            code=str(sqlstate),
            message=getattr(driver_error, "message", None) or str(driver_error),
            details=getattr(driver_error, "detail", None)
            or getattr(diag, "message_detail", None),
            hint=getattr(driver_error, "hint", None)
            or getattr(diag, "message_hint", None),
        )

    return _from_sqlite_message(str(orig))


def _from_sqlite_message(message: str) -> DatabaseErrorInfo:
    if match := _SQLITE_UNIQUE.search(message):
        columns = ", ".join(
            column.strip().rsplit(".", 1)[-1]
            for column in match.group("columns").split(",")
        )
        return DatabaseErrorInfo(
            code="23505",
            message=message,
            details=f"Key ({columns})=() already exists.",
        )
    if match := _SQLITE_NOT_NULL.search(message):
        return DatabaseErrorInfo(
            code="23502",
            message=f'null value in column "{match.group("column")}"',
        )
    if "FOREIGN KEY constraint failed" in message:
        return DatabaseErrorInfo(code="23503", message=message)
    if "CHECK constraint failed" in message:
        return DatabaseErrorInfo(code="23514", message=message)

    return DatabaseErrorInfo(code="UNKNOWN", message=message)
