"""Console output formatting utilities."""

from __future__ import annotations

from pos_history.models import ChartSeries, SalesStats
from pos_history.sales.chart import COUNT_LABEL, REVENUE_LABEL


def format_stats_for_console(stats: SalesStats) -> str:
    """Render the four headline cards of the sales history screen.

    Args:
        stats: Output of summarize_sales().

    Returns:
        Multi-line text, amounts with two decimals.
    """
    breakdown = stats.payment_breakdown
    lines = [
        "Historial de ventas",
        "=" * 40,
        f"Ventas totales:   {stats.total_sales}",
        f"Ingresos totales: ${stats.total_revenue:,.2f}",
        f"Promedio:         ${stats.avg_ticket:,.2f}",
        "Métodos de pago:",
        f"  Efectivo: {breakdown.cash}",
        f"  Tarjeta:  {breakdown.card}",
        f"  Nequi:    {breakdown.nequi}",
    ]
    return "\n".join(lines)


def format_chart_for_console(series: ChartSeries) -> str:
    """Render the chart series as a three-column table."""
    if not series.labels:
        return "No hay ventas en el rango seleccionado."

    width = max(len(label) for label in series.labels)
    lines = [
        "Tendencia de ventas",
        "-" * 40,
        f"{'':<{width}}  {REVENUE_LABEL:>20}  {COUNT_LABEL}",
    ]
    for label, revenue, count in zip(
        series.labels, series.revenue_by_label, series.count_by_label
    ):
        lines.append(f"{label:<{width}}  {f'${revenue:,.2f}':>20}  {count}")
    return "\n".join(lines)
