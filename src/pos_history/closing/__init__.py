"""Daily closing workflow.

Example:
    >>> from pos_history.closing import DailyClosingWorkflow
    >>> from pos_history.models import FilterSelection
    >>>
    >>> workflow = DailyClosingWorkflow(history, close_daily_sales=api.close_daily_sales)
    >>> workflow.request_report()
    >>> result = await workflow.confirm(FilterSelection.of("today"))
    >>> print(result.report_path)
"""

from pos_history.closing.workflow import ClosingResult, ClosingState, DailyClosingWorkflow

__all__ = ["ClosingResult", "ClosingState", "DailyClosingWorkflow"]
