"""Daily closing: export the day's report, then close the register.

State machine::

    IDLE -> CONFIRMING -> EXPORTING -> CLOSING -> DONE -> IDLE
                 |             |           |
                 v             v           v
               IDLE         FAILED      FAILED -> IDLE (acknowledge_failure)

The report is always written before the close operation is invoked, and
the close is never invoked when the export fails. A failed close is
reported once and not retried; the report already written is kept.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable

from pos_history.config import ReportConfig
from pos_history.exceptions import DailyCloseError, InvalidTransitionError, ReportExportError
from pos_history.models import FilterSelection
from pos_history.providers import SalesHistoryProvider, SpreadsheetWriter
from pos_history.sales.export import ExcelReportWriter, flatten_sales
from pos_history.sales.filters import filter_sales

logger = logging.getLogger(__name__)


class ClosingState(str, Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"
    EXPORTING = "exporting"
    CLOSING = "closing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ClosingResult:
    """Outcome of a successful daily closing.

    Attributes:
        state: Always ClosingState.DONE.
        report_path: Spreadsheet written before the register was closed.
        row_count: Number of rows in the spreadsheet.
    """

    state: ClosingState
    report_path: Path
    row_count: int


class DailyClosingWorkflow:
    """Coordinates "generate Excel and close register".

    Args:
        history: Provider of the current sale history snapshot.
        close_daily_sales: Zero-argument coroutine function closing the day.
        writer: Spreadsheet sink. Defaults to an ExcelReportWriter on ``config``.
        config: Report settings. Defaults to ReportConfig.from_env().
    """

    def __init__(
        self,
        history: SalesHistoryProvider,
        close_daily_sales: Callable[[], Awaitable[object]],
        writer: SpreadsheetWriter | None = None,
        config: ReportConfig | None = None,
    ) -> None:
        self.history = history
        self.close_daily_sales = close_daily_sales
        self.config = config or ReportConfig.from_env()
        self.writer = writer or ExcelReportWriter(self.config)
        self._state = ClosingState.IDLE
        self.transitions: list[ClosingState] = [ClosingState.IDLE]
        self.last_error: Exception | None = None

    @property
    def state(self) -> ClosingState:
        return self._state

    def _move(self, target: ClosingState) -> None:
        logger.info("Daily closing: %s -> %s", self._state.value, target.value)
        self._state = target
        self.transitions.append(target)

    def _require(self, *allowed: ClosingState) -> None:
        if self._state not in allowed:
            names = ", ".join(s.value for s in allowed)
            raise InvalidTransitionError(
                f"Cannot do this while {self._state.value}; expected one of: {names}"
            )

    def request_report(self) -> None:
        """Open the confirmation step (IDLE -> CONFIRMING)."""
        self._require(ClosingState.IDLE)
        self._move(ClosingState.CONFIRMING)

    def cancel(self) -> None:
        """Dismiss the confirmation without exporting (CONFIRMING -> IDLE)."""
        self._require(ClosingState.CONFIRMING)
        self._move(ClosingState.IDLE)

    def acknowledge_failure(self) -> None:
        """Dismiss a failed closing once the caller has reported it (FAILED -> IDLE)."""
        self._require(ClosingState.FAILED)
        self.last_error = None
        self._move(ClosingState.IDLE)

    async def confirm(
        self,
        selection: FilterSelection,
        now: datetime | None = None,
    ) -> ClosingResult:
        """Export the filtered sales, then close the register.

        Args:
            selection: Filter currently applied on the screen; the exported
                rows are the sales it selects.
            now: Reference moment for the date filter.

        Returns:
            ClosingResult in state DONE. The workflow is back to IDLE.

        Raises:
            InvalidTransitionError: If not in CONFIRMING.
            ReportExportError: If the report could not be produced. The
                register was not closed.
            DailyCloseError: If the close operation failed. The report was
                written and ``report_path`` points to it.
        """
        self._require(ClosingState.CONFIRMING)
        self._move(ClosingState.EXPORTING)

        try:
            sales = filter_sales(
                self.history.current_sales,
                selection.date_range,
                selection.payment_filter,
                now=now,
            )
            rows = flatten_sales(sales, timestamp_format=self.config.timestamp_format)
            report_path = Path(self.writer(rows, self.config.sheet_name))
        except Exception as e:
            logger.error("Daily closing export failed, register not closed: %s", e)
            self.last_error = e
            self._move(ClosingState.FAILED)
            raise ReportExportError(f"Could not export sales report: {e}") from e

        logger.info("Report written to %s (%d rows)", report_path, len(rows))
        self._move(ClosingState.CLOSING)

        try:
            await self.close_daily_sales()
        except Exception as e:
            logger.error("Close daily sales failed after report %s: %s", report_path, e)
            self.last_error = e
            self._move(ClosingState.FAILED)
            raise DailyCloseError(
                f"Report {report_path.name} was written but the register was not closed: {e}",
                report_path=report_path,
            ) from e

        self._move(ClosingState.DONE)
        result = ClosingResult(state=ClosingState.DONE, report_path=report_path, row_count=len(rows))
        self._move(ClosingState.IDLE)
        return result
