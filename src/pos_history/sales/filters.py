"""Narrow a sale collection to a time window and payment method."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Sequence

import pandas as pd

from pos_history.models import (
    PAYMENT_FILTER_ALL,
    DateRange,
    PaymentMethod,
    Sale,
    normalize_payment_filter,
)
from pos_history.sales.frame import sales_to_frame

logger = logging.getLogger(__name__)


def local_now(now: datetime | None = None) -> datetime:
    """Return ``now`` as a naive local datetime (current time when None)."""
    if now is None:
        return datetime.now()
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


def range_start(date_range: DateRange | str, now: datetime | None = None) -> datetime:
    """Compute the earliest moment included by ``date_range``.

    - TODAY: start of the current day (00:00:00.000)
    - WEEK: exactly 7 days before now
    - MONTH: exactly 1 calendar month before now, with the day clamped to
      the end of the shorter month (31 Mar -> 28 Feb). Plain date
      arithmetic that rolls over would give 3 Mar instead.
    - ALL: the epoch

    Args:
        date_range: Range to evaluate.
        now: Reference moment. Defaults to the current local time.

    Returns:
        Naive local datetime.
    """
    date_range = DateRange.from_value(date_range)
    now = local_now(now)

    if date_range is DateRange.TODAY:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if date_range is DateRange.WEEK:
        return now - timedelta(days=7)
    if date_range is DateRange.MONTH:
        return (pd.Timestamp(now) - pd.DateOffset(months=1)).to_pydatetime()
    if date_range is DateRange.ALL:
        return datetime.fromtimestamp(0)
    raise ValueError(f"Unhandled date range: {date_range!r}")


def window_mask(
    df: pd.DataFrame,
    date_range: DateRange | str,
    now: datetime | None = None,
) -> pd.Series:
    """Boolean mask of rows whose ``fecha`` falls inside ``date_range``.

    Rows with an invalid date (NaT) are always False.
    """
    start = range_start(date_range, now)
    return df["fecha"].notna() & (df["fecha"] >= start)


def filter_sales(
    sales: Sequence[Sale],
    date_range: DateRange | str,
    payment_filter: PaymentMethod | str = PAYMENT_FILTER_ALL,
    now: datetime | None = None,
) -> list[Sale]:
    """Keep the sales inside ``date_range`` paid with ``payment_filter``.

    Output order matches input order. Sales whose date cannot be parsed
    are excluded. Never raises on malformed sale data.

    Args:
        sales: Sale history snapshot.
        date_range: TODAY, WEEK, MONTH or ALL (unknown names mean ALL).
        payment_filter: A PaymentMethod or "ALL".
        now: Reference moment. Defaults to the current local time.

    Returns:
        New list with the matching sales.

    Examples:
        >>> filter_sales([], DateRange.ALL)
        []
    """
    payment_filter = normalize_payment_filter(payment_filter)
    df = sales_to_frame(sales)

    mask = window_mask(df, date_range, now)
    if payment_filter != PAYMENT_FILTER_ALL:
        method = getattr(payment_filter, "value", payment_filter)
        mask &= df["metodo_pago"] == method

    kept = [sale for sale, keep in zip(sales, mask.tolist()) if keep]
    logger.debug(
        "Filtered %d of %d sale(s) for range=%s payment=%s",
        len(kept),
        len(sales),
        DateRange.from_value(date_range).value,
        getattr(payment_filter, "value", payment_filter),
    )
    return kept
