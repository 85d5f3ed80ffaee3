"""Sale records and the derived shapes computed from them.

Sale and LineItem are read-only inputs coming from the sale history
provider. Timestamps and amounts are kept exactly as received and coerced
on access, so a malformed record never raises:

- ``Sale.moment``: naive local datetime, or None when the date is invalid.
- ``Sale.amount``: numeric total, 0.0 when the total is not a number.

Bucket, ChartSeries, SalesStats and ExportRow are derived per call and
never persisted.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

import pandas as pd

logger = logging.getLogger(__name__)

PAYMENT_FILTER_ALL = "ALL"

# Bounds of datetime64[ns], the dtype used for the ``fecha`` column
MIN_MOMENT = pd.Timestamp.min.ceil("us").to_pydatetime()
MAX_MOMENT = pd.Timestamp.max.floor("us").to_pydatetime()


class PaymentMethod(str, Enum):
    """Payment methods accepted at the register."""

    CASH = "CASH"
    CARD = "CARD"
    NEQUI = "NEQUI"


class DateRange(str, Enum):
    """Time window selectable on the sales history screen."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"

    @classmethod
    def from_value(cls, value: DateRange | str | None) -> DateRange:
        """Resolve a range from an enum member or a case-insensitive name.

        Unknown values fall back to ALL, like the screen's default branch.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.ALL
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning("Unknown date range %r, using 'all'", value)
            return cls.ALL


def normalize_payment_filter(value: PaymentMethod | str | None) -> PaymentMethod | str:
    """Return a PaymentMethod, or PAYMENT_FILTER_ALL for the match-all filter.

    Unknown method names are returned unchanged; they match no sale.
    """
    if value is None:
        return PAYMENT_FILTER_ALL
    if isinstance(value, PaymentMethod):
        return value
    text = str(value).strip().upper()
    if text == PAYMENT_FILTER_ALL:
        return PAYMENT_FILTER_ALL
    try:
        return PaymentMethod(text)
    except ValueError:
        logger.warning("Unknown payment filter %r, no sale will match", value)
        return str(value)


def coerce_amount(value: Any) -> float:
    """Coerce a monetary value to float; non-numeric, missing or NaN gives 0.0.

    Examples:
        >>> coerce_amount("50")
        50.0
        >>> coerce_amount("abc")
        0.0
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, numbers.Number):
        logger.debug("Non-numeric amount %r coerced to 0", value)
        return 0.0
    try:
        number = pd.to_numeric(value, errors="coerce")
    except (TypeError, ValueError):
        logger.debug("Non-numeric amount %r coerced to 0", value)
        return 0.0
    if pd.isna(number):
        return 0.0
    return float(number)


def parse_moment(value: Any) -> datetime | None:
    """Parse a sale timestamp into a naive local datetime.

    Accepts ISO strings, datetime/Timestamp objects and epoch milliseconds.
    Timezone-aware values are converted to local time. Anything that cannot
    be parsed, or falls outside the pandas nanosecond range
    (``pd.Timestamp.min`` .. ``pd.Timestamp.max``), returns None.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            if isinstance(value, float) and math.isnan(value):
                return None
            ts = pd.to_datetime(value, unit="ms", utc=True, errors="coerce")
        else:
            ts = pd.to_datetime(value, errors="coerce")
        if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
            return None
        moment = ts.to_pydatetime()
        if moment.tzinfo is not None:
            moment = moment.astimezone().replace(tzinfo=None)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.debug("Unparseable sale date %r", value)
        return None
    if not MIN_MOMENT <= moment <= MAX_MOMENT:
        logger.debug("Sale date %r outside the supported range", value)
        return None
    return moment


@dataclass(frozen=True)
class LineItem:
    """One product line within a sale."""

    name: str
    price: float
    quantity: float

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> LineItem:
        return cls(
            name=str(record.get("name", "")),
            price=coerce_amount(record.get("price")),
            quantity=coerce_amount(record.get("quantity")),
        )


@dataclass(frozen=True)
class Sale:
    """One completed transaction as recorded by the register.

    Attributes:
        id: Opaque identifier.
        date: Timestamp as received (string, datetime or epoch millis).
        payment_method: PaymentMethod, or the raw string for unknown methods.
        items: Line items in ticket order; may be empty.
        total: Sale total as received; may be text. See ``amount``.
    """

    id: Any
    date: Any
    payment_method: PaymentMethod | str
    items: tuple[LineItem, ...] = ()
    total: Any = 0

    @property
    def moment(self) -> datetime | None:
        return parse_moment(self.date)

    @property
    def amount(self) -> float:
        return coerce_amount(self.total)

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> Sale:
        """Build a Sale from an API record.

        Accepts ``paymentMethod`` (API) or ``payment_method`` keys.
        """
        method = record.get("paymentMethod", record.get("payment_method"))
        try:
            method = PaymentMethod(method)
        except ValueError:
            logger.warning("Sale %r has unknown payment method %r", record.get("id"), method)
        items = tuple(LineItem.from_dict(item) for item in (record.get("items") or []))
        return cls(
            id=record.get("id"),
            date=record.get("date"),
            payment_method=method,
            items=items,
            total=record.get("total"),
        )


@dataclass(frozen=True)
class FilterSelection:
    """Filter state held by the caller and passed into each computation."""

    date_range: DateRange = DateRange.WEEK
    payment_filter: PaymentMethod | str = PAYMENT_FILTER_ALL

    @classmethod
    def of(
        cls,
        date_range: DateRange | str | None = None,
        payment_filter: PaymentMethod | str | None = None,
    ) -> FilterSelection:
        return cls(
            date_range=(
                DateRange.from_value(date_range) if date_range is not None else DateRange.WEEK
            ),
            payment_filter=normalize_payment_filter(payment_filter),
        )


@dataclass
class Bucket:
    """Revenue and sale count accumulated under one chart label."""

    key: str
    total: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class ChartSeries:
    """Positionally aligned chart arrays: labels[i] matches the other two."""

    labels: list[str] = field(default_factory=list)
    revenue_by_label: list[float] = field(default_factory=list)
    count_by_label: list[int] = field(default_factory=list)

    @classmethod
    def from_buckets(cls, buckets: list[Bucket]) -> ChartSeries:
        return cls(
            labels=[b.key for b in buckets],
            revenue_by_label=[b.total for b in buckets],
            count_by_label=[b.count for b in buckets],
        )


@dataclass(frozen=True)
class PaymentBreakdown:
    """Number of sales per payment method."""

    cash: int = 0
    card: int = 0
    nequi: int = 0


@dataclass(frozen=True)
class SalesStats:
    """Headline figures for the whole sale history."""

    total_sales: int
    total_revenue: float
    avg_ticket: float
    payment_breakdown: PaymentBreakdown

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalSales": self.total_sales,
            "totalRevenue": self.total_revenue,
            "avgTicket": self.avg_ticket,
            "paymentBreakdown": asdict(self.payment_breakdown),
        }


@dataclass(frozen=True)
class ExportRow:
    """One (sale, line item) pair flattened for the spreadsheet."""

    date: str
    payment_method: str
    product_name: str
    quantity: float
    unit_price: float
    subtotal: float
    sale_total: float
