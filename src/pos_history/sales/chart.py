"""Chart payload for the sales trend bar chart.

Only the data shape is produced here; the renderer owns the drawing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pos_history.models import ChartSeries

REVENUE_LABEL = "Ingresos por ventas"
COUNT_LABEL = "Número de ventas"


@dataclass(frozen=True)
class ChartDisplayConfig:
    """Static display settings passed along with the series."""

    revenue_label: str = REVENUE_LABEL
    count_label: str = COUNT_LABEL
    revenue_color: str = "rgba(139, 92, 246, 0.7)"
    count_color: str = "rgba(244, 63, 94, 0.7)"
    tick_color: str = "#D1D5DB"
    grid_color: str = "rgba(156,163,175,0.1)"
    legend_color: str = "#F9FAFB"


def to_chart_payload(
    series: ChartSeries,
    display: ChartDisplayConfig | None = None,
) -> dict[str, Any]:
    """Build the ``{"data": ..., "options": ...}`` mapping for a bar chart.

    Args:
        series: Output of build_chart_series().
        display: Colours and legend labels. Defaults to ChartDisplayConfig().

    Returns:
        Dictionary with ``data`` (labels and two datasets) and ``options``.
    """
    display = display or ChartDisplayConfig()
    axis = {"ticks": {"color": display.tick_color}, "grid": {"color": display.grid_color}}

    return {
        "data": {
            "labels": list(series.labels),
            "datasets": [
                {
                    "label": display.revenue_label,
                    "data": list(series.revenue_by_label),
                    "backgroundColor": display.revenue_color,
                },
                {
                    "label": display.count_label,
                    "data": list(series.count_by_label),
                    "backgroundColor": display.count_color,
                },
            ],
        },
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "scales": {"y": {"beginAtZero": True, **axis}, "x": dict(axis)},
            "plugins": {
                "legend": {"position": "top", "labels": {"color": display.legend_color}},
                "title": {"display": False},
            },
        },
    }
