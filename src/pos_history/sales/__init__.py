"""Sales analytics over the register's sale history.

This module provides the pure computations behind the sales history screen:

- **filter_sales**: narrow the history to a date range and payment method.
- **group_sales / build_chart_series**: time buckets for the trend chart.
- **summarize_sales**: headline totals over the full, unfiltered history.
- **flatten_sales / write_sales_workbook**: spreadsheet export rows.

Example:
    >>> from pos_history.models import DateRange, FilterSelection
    >>> from pos_history.sales import build_chart_series, filter_sales, summarize_sales
    >>>
    >>> selection = FilterSelection.of("week", "ALL")
    >>> week = filter_sales(sales, selection.date_range, selection.payment_filter)
    >>> series = build_chart_series(sales, selection)
    >>> stats = summarize_sales(sales)
"""

from pos_history.sales.export import (
    EXPORT_COLUMNS,
    ExcelReportWriter,
    flatten_sales,
    report_filename,
    rows_to_frame,
    write_sales_workbook,
)
from pos_history.sales.filters import filter_sales, range_start
from pos_history.sales.grouping import WEEKDAY_LABELS, bucket_key, build_chart_series, group_sales
from pos_history.sales.stats import summarize_sales

__all__ = [
    "EXPORT_COLUMNS",
    "ExcelReportWriter",
    "WEEKDAY_LABELS",
    "bucket_key",
    "build_chart_series",
    "filter_sales",
    "flatten_sales",
    "group_sales",
    "range_start",
    "report_filename",
    "rows_to_frame",
    "summarize_sales",
    "write_sales_workbook",
]
