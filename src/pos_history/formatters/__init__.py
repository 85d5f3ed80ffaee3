"""Output formatting utilities."""

from pos_history.formatters.console import format_chart_for_console, format_stats_for_console

__all__ = ["format_chart_for_console", "format_stats_for_console"]
