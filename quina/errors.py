"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass

EXPECTED_COLUMNS = "draw_number/drawNumber, date, numbers"


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int


class ResultsQueryError(AppError):
    """Both the primary and the fallback results query failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code="Failed to fetch results",
            message=f"Database query failed: {reason}. Make sure your table has columns: {EXPECTED_COLUMNS}",
            status_code=500,
        )


class DatabaseUnavailableError(AppError):
    """The storage backend did not answer a liveness probe."""

    def __init__(self, reason: str) -> None:
        super().__init__(code="database_unavailable", message=reason, status_code=500)


class QueryShapeError(LookupError):
    """Stored rows do not have the shape the primary query expects."""
