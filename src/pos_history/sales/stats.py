"""Headline statistics for the sales history screen.

The figures always cover the full history passed in; the date range and
payment filter used by the chart and the export are not applied here.
"""

from __future__ import annotations

import logging
from typing import Sequence

from pos_history.models import PaymentBreakdown, PaymentMethod, Sale, SalesStats
from pos_history.sales.frame import sales_to_frame

logger = logging.getLogger(__name__)


def summarize_sales(all_sales: Sequence[Sale]) -> SalesStats:
    """Compute sale count, revenue, average ticket and payment breakdown.

    Args:
        all_sales: Unfiltered sale history.

    Returns:
        SalesStats. Empty input gives all zeros (avg_ticket is 0, not NaN).

    Examples:
        >>> summarize_sales([]).avg_ticket
        0.0
    """
    df = sales_to_frame(all_sales, with_dates=False)

    total_sales = len(df)
    total_revenue = float(df["total"].sum()) if total_sales else 0.0
    avg_ticket = total_revenue / total_sales if total_sales > 0 else 0.0

    counts = df["metodo_pago"].value_counts()
    breakdown = PaymentBreakdown(
        cash=int(counts.get(PaymentMethod.CASH.value, 0)),
        card=int(counts.get(PaymentMethod.CARD.value, 0)),
        nequi=int(counts.get(PaymentMethod.NEQUI.value, 0)),
    )

    logger.debug(
        "Summarized %d sale(s): revenue=%.2f avg_ticket=%.2f", total_sales, total_revenue, avg_ticket
    )
    return SalesStats(
        total_sales=total_sales,
        total_revenue=total_revenue,
        avg_ticket=avg_ticket,
        payment_breakdown=breakdown,
    )
