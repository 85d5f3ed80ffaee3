"""Tabular view of a sale collection.

The aggregations work on a DataFrame with one row per sale, in input order:

- ``fecha``: parsed local timestamp (NaT when the date is invalid or out of range)
- ``metodo_pago``: payment method value
- ``total``: coerced sale total (0.0 when non-numeric)
"""

from __future__ import annotations

import logging
from typing import Sequence

import pandas as pd

from pos_history.models import Sale

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["fecha", "metodo_pago", "total"]


def sales_to_frame(sales: Sequence[Sale], with_dates: bool = True) -> pd.DataFrame:
    """Build the per-sale DataFrame used by filters, grouping and stats.

    Args:
        sales: Sale records; never mutated.
        with_dates: If False, skip date parsing and omit the ``fecha`` column.

    Returns:
        DataFrame with FRAME_COLUMNS (minus ``fecha`` when ``with_dates`` is
        False) and a RangeIndex matching input positions.
    """
    columns = {
        "metodo_pago": pd.Series(
            [_method_value(sale.payment_method) for sale in sales], dtype="object"
        ),
        "total": pd.Series([sale.amount for sale in sales], dtype="float64"),
    }
    if not with_dates:
        return pd.DataFrame(columns)

    fechas = pd.to_datetime(
        pd.Series([sale.moment for sale in sales], dtype="object"), errors="coerce"
    ).astype("datetime64[ns]")
    df = pd.DataFrame({"fecha": fechas, **columns})

    invalid = int(df["fecha"].isna().sum())
    if invalid:
        logger.warning("%d sale(s) have an invalid date", invalid)

    return df


def _method_value(method: object) -> object:
    return getattr(method, "value", method)
