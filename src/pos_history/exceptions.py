"""Domain-specific exceptions for POS sales history.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from PosHistoryError for easy catching.
"""

from __future__ import annotations

from pathlib import Path


class PosHistoryError(Exception):
    """Base exception for all POS sales history errors.

    Users can catch this exception to handle any error raised by the package.
    Aggregations never raise on malformed sale data; they coerce instead.
    """

    pass


class ConfigError(PosHistoryError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - Invalid configuration values are provided
    - A sales history file cannot be loaded or parsed
    """

    pass


class ReportExportError(PosHistoryError):
    """Raised when the sales report could not be produced.

    When this is raised during a daily closing, the register was NOT closed.
    """

    pass


class ClosingError(PosHistoryError):
    """Base class for daily closing workflow errors."""

    pass


class InvalidTransitionError(ClosingError):
    """Raised when a workflow operation is called from the wrong state."""

    pass


class DailyCloseError(ClosingError):
    """Raised when the external close operation fails.

    The report was already written when this is raised; it is not rolled back.

    Attributes:
        report_path: Path of the spreadsheet written before the close attempt.
    """

    def __init__(self, message: str, report_path: Path | None = None) -> None:
        super().__init__(message)
        self.report_path = report_path
