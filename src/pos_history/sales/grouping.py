"""Group sales into labelled time buckets for the sales trend chart.

Each date range has its own labelling rule:

- TODAY: hour of day, ``"9:00"`` (local time, no zero padding)
- WEEK: weekday abbreviation, ``"Sun"`` .. ``"Sat"``
- MONTH: day of month, ``"15"``
- ALL: month and year, ``"3/2025"``

WEEK buckets always come out Sun -> Sat. Every other range keeps the order
in which each label first appears in the input; labels are not sorted.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

import pandas as pd

from pos_history.models import Bucket, ChartSeries, DateRange, FilterSelection, Sale
from pos_history.sales.filters import filter_sales, local_now, window_mask
from pos_history.sales.frame import sales_to_frame

logger = logging.getLogger(__name__)

# Sunday first, like the register's calendar
WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def bucket_key(moment: datetime, date_range: DateRange | str) -> str:
    """Label a single moment for ``date_range``.

    Examples:
        >>> bucket_key(datetime(2025, 3, 9, 9, 30), DateRange.TODAY)
        '9:00'
        >>> bucket_key(datetime(2025, 3, 9, 9, 30), DateRange.WEEK)
        'Sun'
    """
    date_range = DateRange.from_value(date_range)

    if date_range is DateRange.TODAY:
        return f"{moment.hour}:00"
    if date_range is DateRange.WEEK:
        # datetime.weekday() is Monday=0
        return WEEKDAY_LABELS[(moment.weekday() + 1) % 7]
    if date_range is DateRange.MONTH:
        return f"{moment.day}"
    if date_range is DateRange.ALL:
        return f"{moment.month}/{moment.year}"
    raise ValueError(f"Unhandled date range: {date_range!r}")


def _bucket_keys(fechas: pd.Series, date_range: DateRange) -> pd.Series:
    """Vectorized bucket_key over a datetime Series without NaT."""
    if date_range is DateRange.TODAY:
        return fechas.dt.hour.astype(str) + ":00"
    if date_range is DateRange.WEEK:
        return ((fechas.dt.dayofweek + 1) % 7).map(lambda i: WEEKDAY_LABELS[i])
    if date_range is DateRange.MONTH:
        return fechas.dt.day.astype(str)
    if date_range is DateRange.ALL:
        return fechas.dt.month.astype(str) + "/" + fechas.dt.year.astype(str)
    raise ValueError(f"Unhandled date range: {date_range!r}")


def group_sales(
    sales: Sequence[Sale],
    date_range: DateRange | str,
    now: datetime | None = None,
) -> list[Bucket]:
    """Accumulate revenue and sale count per time bucket.

    Only sales inside the ``date_range`` window are counted, so passing an
    already filtered collection gives the same result.

    Args:
        sales: Sales to group, usually the output of filter_sales().
        date_range: Range selecting both the window and the labelling rule.
        now: Reference moment. Defaults to the current local time.

    Returns:
        Buckets with unique keys; Sun -> Sat for WEEK, first-occurrence
        order otherwise. Empty input gives an empty list.
    """
    date_range = DateRange.from_value(date_range)
    df = sales_to_frame(sales)
    df = df[window_mask(df, date_range, now)]

    if df.empty:
        return []

    df = df.assign(clave=_bucket_keys(df["fecha"], date_range))
    grouped = df.groupby("clave", sort=False).agg(
        total=("total", "sum"),
        count=("total", "size"),
    )

    if date_range is DateRange.WEEK:
        grouped = grouped.reindex([d for d in WEEKDAY_LABELS if d in grouped.index])

    buckets = [
        Bucket(key=str(key), total=float(total), count=int(count))
        for key, total, count in zip(grouped.index, grouped["total"], grouped["count"])
    ]
    logger.debug(
        "Grouped %d sale(s) into %d bucket(s) for %s", len(df), len(buckets), date_range.value
    )
    return buckets


def build_chart_series(
    sales: Sequence[Sale],
    selection: FilterSelection,
    now: datetime | None = None,
) -> ChartSeries:
    """Filter ``sales`` with ``selection`` and group them for the chart.

    Args:
        sales: Full sale history snapshot.
        selection: Date range and payment filter held by the caller.
        now: Reference moment shared by the filter and the grouping.

    Returns:
        ChartSeries with positionally aligned labels, revenue and counts.
    """
    now = local_now(now)
    filtered = filter_sales(sales, selection.date_range, selection.payment_filter, now=now)
    return ChartSeries.from_buckets(group_sales(filtered, selection.date_range, now=now))
