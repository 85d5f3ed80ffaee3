"""Flatten sales into spreadsheet rows and write the daily report workbook.

One row is produced per (sale, line item) pair, sale order outer and item
order inner. A sale without items produces no row.
"""

from __future__ import annotations

import logging
from dataclasses import astuple
from datetime import date
from pathlib import Path
from typing import Sequence

import pandas as pd

from pos_history.config import (
    DEFAULT_FILENAME_PREFIX,
    DEFAULT_SHEET_NAME,
    DEFAULT_TIMESTAMP_FORMAT,
    ReportConfig,
)
from pos_history.models import ExportRow, Sale, coerce_amount

logger = logging.getLogger(__name__)

# Spreadsheet headers, in ExportRow field order
EXPORT_COLUMNS = [
    "Fecha",
    "Método de pago",
    "Producto",
    "Cantidad",
    "Precio unitario",
    "Subtotal",
    "Total de venta",
]


def flatten_sales(
    sales: Sequence[Sale],
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> list[ExportRow]:
    """Expand sales and their line items into export rows.

    ``subtotal`` is unit price times quantity. ``sale_total`` is the sale's
    own total, even when it differs from the sum of its subtotals.

    Args:
        sales: Sales to export, usually the filtered collection.
        timestamp_format: strftime format for the date column. Sales with an
            invalid date get an empty string.

    Returns:
        One ExportRow per line item across ``sales``.
    """
    rows: list[ExportRow] = []

    for sale in sales:
        moment = sale.moment
        fecha = moment.strftime(timestamp_format) if moment is not None else ""
        method = str(getattr(sale.payment_method, "value", sale.payment_method))
        sale_total = sale.amount

        for item in sale.items:
            price = coerce_amount(item.price)
            quantity = coerce_amount(item.quantity)
            rows.append(
                ExportRow(
                    date=fecha,
                    payment_method=method,
                    product_name=item.name,
                    quantity=quantity,
                    unit_price=price,
                    subtotal=price * quantity,
                    sale_total=sale_total,
                )
            )

    logger.debug("Flattened %d sale(s) into %d row(s)", len(sales), len(rows))
    return rows


def rows_to_frame(rows: Sequence[ExportRow]) -> pd.DataFrame:
    """Build the report DataFrame with the Spanish spreadsheet headers."""
    return pd.DataFrame([astuple(row) for row in rows], columns=EXPORT_COLUMNS)


def report_filename(today: date | None = None, prefix: str = DEFAULT_FILENAME_PREFIX) -> str:
    """Name of the report workbook for ``today``.

    Examples:
        >>> report_filename(date(2025, 1, 15))
        'Reporte_Ventas_2025-01-15.xlsx'
    """
    today = today or date.today()
    return f"{prefix}_{today.strftime('%Y-%m-%d')}.xlsx"


def write_sales_workbook(
    rows: Sequence[ExportRow],
    output_dir: str | Path,
    sheet_name: str = DEFAULT_SHEET_NAME,
    today: date | None = None,
    prefix: str = DEFAULT_FILENAME_PREFIX,
) -> Path:
    """Write ``rows`` to ``<output_dir>/Reporte_Ventas_<YYYY-MM-DD>.xlsx``.

    An existing report for the same day is overwritten.

    Args:
        rows: Export rows; an empty sequence writes the header only.
        output_dir: Target directory, created if missing.
        sheet_name: Worksheet name.
        today: Date embedded in the file name. Defaults to the local date.
        prefix: File name prefix.

    Returns:
        Path to the written workbook.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / report_filename(today, prefix)

    df = rows_to_frame(rows)
    with pd.ExcelWriter(output_path, engine="xlsxwriter") as xw:
        df.to_excel(xw, sheet_name=sheet_name, index=False)

    logger.info("Wrote %d row(s) to %s", len(df), output_path)
    return output_path


class ExcelReportWriter:
    """Spreadsheet writer used by the daily closing workflow.

    Callable as ``writer(rows, sheet_name) -> Path``.
    """

    def __init__(self, config: ReportConfig) -> None:
        self.config = config

    def __call__(self, rows: Sequence[ExportRow], sheet_name: str) -> Path:
        self.config.ensure_dirs()
        return write_sales_workbook(
            rows,
            self.config.output_dir,
            sheet_name=sheet_name,
            prefix=self.config.filename_prefix,
        )
