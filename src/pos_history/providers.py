"""Collaborator interfaces around the analytics core.

The sale history comes from a provider exposing a ``current_sales``
snapshot and an asynchronous ``refresh()``. The spreadsheet writer is any
callable taking export rows and a sheet name and returning the file path.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol, Sequence

from pos_history.exceptions import ConfigError
from pos_history.models import ExportRow, Sale

logger = logging.getLogger(__name__)


class SalesHistoryProvider(Protocol):
    """Protocol for sale history sources.

    Example:
        async def reload(history: SalesHistoryProvider) -> list[Sale]:
            await history.refresh()
            return list(history.current_sales)
    """

    @property
    def current_sales(self) -> Sequence[Sale]: ...

    async def refresh(self) -> None: ...


class SpreadsheetWriter(Protocol):
    """Protocol for the report sink used by the daily closing."""

    def __call__(self, rows: Sequence[ExportRow], sheet_name: str) -> Path: ...


def sales_from_records(records: Iterable[Mapping[str, Any]]) -> list[Sale]:
    """Build Sale objects from API-shaped dictionaries."""
    return [Sale.from_dict(record) for record in records]


class InMemorySalesHistory:
    """Sale history held in memory; ``refresh()`` keeps the same snapshot."""

    def __init__(self, sales: Iterable[Sale] = ()) -> None:
        self._sales: tuple[Sale, ...] = tuple(sales)

    @property
    def current_sales(self) -> Sequence[Sale]:
        return self._sales

    def replace(self, sales: Iterable[Sale]) -> None:
        self._sales = tuple(sales)

    async def refresh(self) -> None:
        return None


class JsonFileSalesHistory:
    """Sale history read from a JSON file holding an array of sale records.

    The file is read on construction and again on every ``refresh()``.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._sales: tuple[Sale, ...] = ()
        self._load()

    @property
    def current_sales(self) -> Sequence[Sale]:
        return self._sales

    async def refresh(self) -> None:
        self._load()

    def _load(self) -> None:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ConfigError(f"Sales history file not found: {self.path}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in sales history file {self.path}: {e}") from e

        if not isinstance(payload, list):
            raise ConfigError(
                f"Sales history file {self.path} must hold a JSON array, "
                f"got {type(payload).__name__}"
            )

        self._sales = tuple(sales_from_records(payload))
        logger.info("Loaded %d sale(s) from %s", len(self._sales), self.path)
