"""Configuration for sales report generation.

This module provides the single configuration class used by the export
and daily closing code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from pos_history.exceptions import ConfigError

DEFAULT_SHEET_NAME = "Ventas del Día"
DEFAULT_FILENAME_PREFIX = "Reporte_Ventas"
DEFAULT_TIMESTAMP_FORMAT = "%d/%m/%Y, %H:%M:%S"


@dataclass
class ReportConfig:
    """Settings for the sales report spreadsheet.

    Attributes:
        output_dir: Directory where report workbooks are written.
        sheet_name: Name of the worksheet holding the sale rows.
        filename_prefix: Workbook file name prefix; the date is appended.
        timestamp_format: strftime format for the "Fecha" column.
    """

    output_dir: Path
    sheet_name: str = DEFAULT_SHEET_NAME
    filename_prefix: str = DEFAULT_FILENAME_PREFIX
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT

    def __post_init__(self) -> None:
        if not self.sheet_name:
            raise ConfigError("sheet_name must not be empty")
        # Excel rejects sheet names longer than 31 characters
        if len(self.sheet_name) > 31:
            raise ConfigError(f"sheet_name too long for Excel: {self.sheet_name!r}")
        if not self.filename_prefix:
            raise ConfigError("filename_prefix must not be empty")

    @classmethod
    def from_root(cls, output_dir: str | Path, **kwargs) -> ReportConfig:
        """Create a ReportConfig writing into ``output_dir``.

        Args:
            output_dir: Directory for report workbooks.
            **kwargs: Any other ReportConfig field.

        Returns:
            ReportConfig instance.

        Examples:
            >>> config = ReportConfig.from_root("reports")
            >>> config.output_dir
            PosixPath('reports')
        """
        if isinstance(output_dir, str):
            output_dir = Path(output_dir)

        return cls(output_dir=output_dir, **kwargs)

    @classmethod
    def from_env(cls) -> ReportConfig:
        """Build a config from environment variables.

        Reads POS_REPORTS_DIR (default: current directory) and
        POS_REPORT_SHEET (default: "Ventas del Día").
        """
        output_dir = os.environ.get("POS_REPORTS_DIR", ".").strip('"').strip("'")
        sheet_name = os.environ.get("POS_REPORT_SHEET", DEFAULT_SHEET_NAME)
        return cls.from_root(output_dir, sheet_name=sheet_name)

    def ensure_dirs(self) -> None:
        """Create the output directory."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
