"""Tests for date range and payment method filtering."""

from datetime import datetime, timedelta

import pytest

from pos_history.models import DateRange, LineItem, PaymentMethod, Sale
from pos_history.sales.filters import filter_sales, range_start

# Wednesday afternoon
NOW = datetime(2025, 3, 12, 15, 30)


def make_sale(sale_id, when, method=PaymentMethod.CASH, total=10) -> Sale:
    return Sale(
        id=sale_id,
        date=when,
        payment_method=method,
        items=(LineItem(name="Pan", price=float(total), quantity=1),),
        total=total,
    )


@pytest.fixture
def sales() -> list[Sale]:
    return [
        make_sale(1, NOW.replace(hour=9), PaymentMethod.CASH),
        make_sale(2, NOW - timedelta(days=3), PaymentMethod.CARD),
        make_sale(3, NOW - timedelta(days=20), PaymentMethod.NEQUI),
        make_sale(4, datetime(1999, 12, 31, 23, 0), PaymentMethod.CASH),
        make_sale(5, NOW.replace(hour=0, minute=0), PaymentMethod.NEQUI),
    ]


class TestRangeStart:
    def test_today_is_start_of_day(self) -> None:
        assert range_start(DateRange.TODAY, NOW) == datetime(2025, 3, 12, 0, 0, 0, 0)

    def test_week_is_exactly_seven_days_back(self) -> None:
        assert range_start(DateRange.WEEK, NOW) == datetime(2025, 3, 5, 15, 30)

    def test_month_is_one_calendar_month_back(self) -> None:
        assert range_start(DateRange.MONTH, NOW) == datetime(2025, 2, 12, 15, 30)

    def test_month_clamps_to_end_of_shorter_month(self) -> None:
        assert range_start("month", datetime(2025, 3, 31, 10, 0)) == datetime(2025, 2, 28, 10, 0)

    def test_all_is_the_epoch(self) -> None:
        assert range_start(DateRange.ALL, NOW) == datetime.fromtimestamp(0)

    def test_unknown_range_behaves_like_all(self) -> None:
        assert range_start("forever", NOW) == range_start(DateRange.ALL, NOW)


class TestFilterSales:
    def test_all_and_all_returns_input_unchanged(self, sales: list[Sale]) -> None:
        result = filter_sales(sales, DateRange.ALL, "ALL", now=NOW)
        assert result == sales

    def test_today_includes_midnight_and_excludes_yesterday(self, sales: list[Sale]) -> None:
        yesterday = make_sale(6, NOW.replace(hour=0, minute=0) - timedelta(microseconds=1))
        result = filter_sales(sales + [yesterday], DateRange.TODAY, now=NOW)
        assert [s.id for s in result] == [1, 5]

    def test_week_boundary_is_inclusive(self) -> None:
        edge = make_sale("edge", NOW - timedelta(days=7))
        outside = make_sale("outside", NOW - timedelta(days=7, seconds=1))
        result = filter_sales([outside, edge], DateRange.WEEK, now=NOW)
        assert [s.id for s in result] == ["edge"]

    def test_month_range(self, sales: list[Sale]) -> None:
        result = filter_sales(sales, DateRange.MONTH, now=NOW)
        assert [s.id for s in result] == [1, 2, 3, 5]

    def test_payment_filter(self, sales: list[Sale]) -> None:
        result = filter_sales(sales, DateRange.ALL, PaymentMethod.NEQUI, now=NOW)
        assert [s.id for s in result] == [3, 5]

    def test_payment_filter_accepts_lowercase_name(self, sales: list[Sale]) -> None:
        result = filter_sales(sales, DateRange.WEEK, "card", now=NOW)
        assert [s.id for s in result] == [2]

    def test_date_and_payment_both_apply(self, sales: list[Sale]) -> None:
        result = filter_sales(sales, DateRange.TODAY, PaymentMethod.CASH, now=NOW)
        assert [s.id for s in result] == [1]

    def test_invalid_dates_are_excluded_without_raising(self, sales: list[Sale]) -> None:
        broken = [
            make_sale("bad-text", "not a date"),
            make_sale("missing", None),
        ]
        result = filter_sales(broken + sales, DateRange.ALL, now=NOW)
        assert [s.id for s in result] == [1, 2, 3, 4, 5]

    def test_string_dates_from_the_api(self) -> None:
        sale = make_sale("api", "2025-03-12T10:00:00")
        assert filter_sales([sale], DateRange.TODAY, now=NOW) == [sale]

    def test_order_is_preserved(self, sales: list[Sale]) -> None:
        reversed_sales = list(reversed(sales))
        result = filter_sales(reversed_sales, DateRange.ALL, now=NOW)
        assert [s.id for s in result] == [5, 4, 3, 2, 1]

    def test_empty_input(self) -> None:
        assert filter_sales([], DateRange.TODAY, PaymentMethod.CASH, now=NOW) == []

    def test_input_is_not_mutated(self, sales: list[Sale]) -> None:
        snapshot = list(sales)
        filter_sales(sales, DateRange.TODAY, now=NOW)
        assert sales == snapshot
