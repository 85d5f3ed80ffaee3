"""Command-line report over a sale history JSON file.

Prints the headline statistics and the chart buckets for the selected
range and payment method, and optionally writes the Excel report. The
register is never closed from here.

Usage:
    pos-history sales.json --range week --payment ALL -o reports/
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime

from pos_history.config import ReportConfig
from pos_history.exceptions import PosHistoryError
from pos_history.formatters.console import format_chart_for_console, format_stats_for_console
from pos_history.models import DateRange, FilterSelection
from pos_history.providers import JsonFileSalesHistory
from pos_history.sales.export import flatten_sales, write_sales_workbook
from pos_history.sales.filters import filter_sales
from pos_history.sales.grouping import build_chart_series
from pos_history.sales.stats import summarize_sales

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Sales history report for the register.")
    parser.add_argument("input", help="JSON file with an array of sale records")
    parser.add_argument(
        "--range",
        dest="date_range",
        choices=[r.value for r in DateRange],
        default=DateRange.WEEK.value,
        help="Time window for the chart and the export (default: week)",
    )
    parser.add_argument(
        "--payment",
        default="ALL",
        help="Payment method filter: ALL, CASH, CARD or NEQUI (default: ALL)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Write Reporte_Ventas_<date>.xlsx into this directory",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run the report and print it to stdout."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        history = JsonFileSalesHistory(args.input)
    except PosHistoryError as e:
        raise SystemExit(f"ERROR: {e}") from e

    sales = history.current_sales
    selection = FilterSelection.of(args.date_range, args.payment)
    now = datetime.now()

    print(format_stats_for_console(summarize_sales(sales)))
    print()
    print(format_chart_for_console(build_chart_series(sales, selection, now=now)))

    if args.output_dir:
        config = ReportConfig.from_root(args.output_dir)
        filtered = filter_sales(sales, selection.date_range, selection.payment_filter, now=now)
        rows = flatten_sales(filtered, timestamp_format=config.timestamp_format)
        path = write_sales_workbook(
            rows, config.output_dir, sheet_name=config.sheet_name, prefix=config.filename_prefix
        )
        print(f"\nWrote {path}")


if __name__ == "__main__":
    main()
