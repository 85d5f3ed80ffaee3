"""POS sales history - analytics and daily closing for the register.

This package computes everything the sales history screen shows and
coordinates the "generate Excel and close register" action:

- **Filtering**: date range (today, week, month, all) and payment method
- **Chart buckets**: revenue and sale count per hour, weekday, day or month
- **Statistics**: totals, average ticket and payment breakdown
- **Export**: one spreadsheet row per sale line item
- **Daily closing**: export first, then the external close operation

Module Structure:
    pos_history.models: Sale, LineItem and the derived result types
    pos_history.sales: Filtering, grouping, statistics and export
    pos_history.closing: Daily closing state machine
    pos_history.providers: Sale history and spreadsheet collaborators
    pos_history.config: ReportConfig

Quick Start:
    >>> from pos_history import FilterSelection
    >>> from pos_history.providers import JsonFileSalesHistory
    >>> from pos_history.sales import build_chart_series, summarize_sales
    >>>
    >>> history = JsonFileSalesHistory("sales.json")
    >>> stats = summarize_sales(history.current_sales)
    >>> series = build_chart_series(history.current_sales, FilterSelection.of("today"))
"""

__version__ = "0.1.0"

from pos_history.config import ReportConfig
from pos_history.exceptions import (
    ClosingError,
    ConfigError,
    DailyCloseError,
    InvalidTransitionError,
    PosHistoryError,
    ReportExportError,
)
from pos_history.models import (
    DateRange,
    FilterSelection,
    LineItem,
    PaymentMethod,
    Sale,
)

__all__ = [
    "ClosingError",
    "ConfigError",
    "DailyCloseError",
    "DateRange",
    "FilterSelection",
    "InvalidTransitionError",
    "LineItem",
    "PaymentMethod",
    "PosHistoryError",
    "ReportConfig",
    "ReportExportError",
    "Sale",
    "__version__",
]
