"""Tests for export row flattening and the report workbook."""

from datetime import date, datetime
from pathlib import Path

import pytest

from pos_history.config import ReportConfig
from pos_history.models import ExportRow, LineItem, PaymentMethod, Sale
from pos_history.sales.export import (
    EXPORT_COLUMNS,
    ExcelReportWriter,
    flatten_sales,
    report_filename,
    rows_to_frame,
    write_sales_workbook,
)


@pytest.fixture
def sales() -> list[Sale]:
    return [
        Sale(
            id=1,
            date=datetime(2025, 3, 12, 9, 0),
            payment_method=PaymentMethod.CASH,
            items=(LineItem(name="A", price=50.0, quantity=2),),
            total=100,
        ),
        Sale(
            id=2,
            date=datetime(2025, 3, 12, 10, 30),
            payment_method=PaymentMethod.NEQUI,
            items=(
                LineItem(name="Café", price=2500.0, quantity=1),
                LineItem(name="Pan", price=800.0, quantity=3),
                LineItem(name="Servilleta", price=0.0, quantity=0),
            ),
            total="4900",
        ),
        Sale(id=3, date=datetime(2025, 3, 12, 11, 0), payment_method=PaymentMethod.CARD, total=0),
    ]


class TestFlattenSales:
    def test_single_sale_single_item(self, sales: list[Sale]) -> None:
        rows = flatten_sales(sales[:1])

        assert rows == [
            ExportRow(
                date="12/03/2025, 09:00:00",
                payment_method="CASH",
                product_name="A",
                quantity=2,
                unit_price=50.0,
                subtotal=100.0,
                sale_total=100.0,
            )
        ]

    def test_row_count_matches_line_items(self, sales: list[Sale]) -> None:
        rows = flatten_sales(sales)
        assert len(rows) == sum(len(s.items) for s in sales) == 4

    def test_sale_order_outer_item_order_inner(self, sales: list[Sale]) -> None:
        rows = flatten_sales(sales)
        assert [r.product_name for r in rows] == ["A", "Café", "Pan", "Servilleta"]

    def test_sale_without_items_gives_no_row(self, sales: list[Sale]) -> None:
        assert flatten_sales(sales[2:]) == []

    def test_zero_quantity_gives_zero_subtotal(self, sales: list[Sale]) -> None:
        rows = flatten_sales(sales[1:2])
        assert rows[-1].subtotal == 0.0

    def test_sale_total_is_not_reconciled(self, sales: list[Sale]) -> None:
        rows = flatten_sales(sales[1:2])
        assert sum(r.subtotal for r in rows) == 4900.0
        assert {r.sale_total for r in rows} == {4900.0}

        mismatch = Sale(
            id=9,
            date=datetime(2025, 3, 12, 12, 0),
            payment_method=PaymentMethod.CARD,
            items=(LineItem(name="X", price=10.0, quantity=1),),
            total=999,
        )
        assert flatten_sales([mismatch])[0].sale_total == 999.0

    def test_invalid_date_gives_empty_timestamp(self) -> None:
        sale = Sale(
            id=4,
            date="???",
            payment_method=PaymentMethod.CASH,
            items=(LineItem(name="A", price=1.0, quantity=1),),
            total=1,
        )
        assert flatten_sales([sale])[0].date == ""

    def test_text_price_and_quantity_are_coerced(self) -> None:
        sale = Sale(
            id=5,
            date=datetime(2025, 3, 12, 9, 0),
            payment_method=PaymentMethod.CASH,
            items=(LineItem(name="A", price="5", quantity="11"), LineItem(name="B", price="x", quantity=3)),
            total=55,
        )

        rows = flatten_sales([sale])

        assert (rows[0].unit_price, rows[0].quantity, rows[0].subtotal) == (5.0, 11.0, 55.0)
        assert rows[1].subtotal == 0.0

    def test_custom_timestamp_format(self, sales: list[Sale]) -> None:
        rows = flatten_sales(sales[:1], timestamp_format="%Y-%m-%d %H:%M")
        assert rows[0].date == "2025-03-12 09:00"

    def test_deterministic(self, sales: list[Sale]) -> None:
        assert flatten_sales(sales) == flatten_sales(sales)


def test_rows_to_frame_uses_spreadsheet_headers(sales: list[Sale]) -> None:
    df = rows_to_frame(flatten_sales(sales))

    assert list(df.columns) == EXPORT_COLUMNS
    assert len(df) == 4
    assert df["Subtotal"].tolist() == [100.0, 2500.0, 2400.0, 0.0]


def test_rows_to_frame_empty_keeps_headers() -> None:
    df = rows_to_frame([])
    assert list(df.columns) == EXPORT_COLUMNS
    assert df.empty


def test_report_filename() -> None:
    assert report_filename(date(2025, 1, 15)) == "Reporte_Ventas_2025-01-15.xlsx"
    assert report_filename(date(2025, 1, 15), prefix="Cierre") == "Cierre_2025-01-15.xlsx"


def test_write_sales_workbook(tmp_path: Path, sales: list[Sale]) -> None:
    out_dir = tmp_path / "reports"

    path = write_sales_workbook(flatten_sales(sales), out_dir, today=date(2025, 3, 12))

    assert path == out_dir / "Reporte_Ventas_2025-03-12.xlsx"
    assert path.exists()
    assert path.stat().st_size > 0


def test_write_sales_workbook_with_no_rows(tmp_path: Path) -> None:
    path = write_sales_workbook([], tmp_path, today=date(2025, 3, 12))
    assert path.exists()


def test_excel_report_writer_uses_config(tmp_path: Path, sales: list[Sale]) -> None:
    config = ReportConfig.from_root(tmp_path / "out", filename_prefix="Cierre")
    writer = ExcelReportWriter(config)

    path = writer(flatten_sales(sales), config.sheet_name)

    assert path.parent == tmp_path / "out"
    assert path.name == report_filename(prefix="Cierre")
    assert path.exists()
