"""Excel to CSV executable - converts .xlsx/.xls workbooks to CSV."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, TYPE_CHECKING

import pandas as pd

from .base import BaseExecutable, ExecutableMetadata, SettingField

if TYPE_CHECKING:
    from ..engine.types import ExecutableResult


EXCEL_EXTENSIONS = (".xlsx", ".xls")
PREVIEW_LINES = 5


class ExcelToCsvExecutable(BaseExecutable):
    """Convert one sheet of an Excel workbook to a CSV file."""

    metadata = ExecutableMetadata(
        name="Excel to CSV",
        description="Converts Excel files (.xlsx, .xls) to CSV format",
        category="File Conversion",
        icon="FileExcelOutlined",
        settings=[
            SettingField(
                key="inputFile",
                label="Input Excel File Path",
                required=True,
                description="Path to the Excel file to convert",
            ),
            SettingField(
                key="outputFile",
                label="Output CSV File Path",
                description="Path for the output CSV file (defaults to same name with .csv extension)",
            ),
            SettingField(
                key="sheetName",
                label="Sheet Name",
                description="Name of the sheet to convert (defaults to first sheet)",
            ),
            SettingField(
                key="delimiter",
                label="Delimiter",
                default=",",
                description="CSV delimiter character",
            ),
        ],
    )

    @property
    def identifier(self) -> str:
        return "excel-to-csv"

    async def execute(self, input_data: Any, settings: dict[str, Any]) -> ExecutableResult:
        input_file = self.get_setting(settings, "inputFile")
        if not input_file and isinstance(input_data, dict):
            input_file = input_data.get("filePath")

        if not input_file:
            return self.failure("No input file specified. Please provide an Excel file path.")

        source = Path(input_file)
        if not source.exists():
            return self.failure(f"File not found: {input_file}")

        ext = source.suffix.lower()
        if ext not in EXCEL_EXTENSIONS:
            return self.failure(f"Invalid file type: {ext}. Expected .xlsx or .xls")

        try:
            return await asyncio.to_thread(self._convert, source, settings)
        except Exception as e:
            return self.failure(f"Conversion failed: {e}")

    def _convert(self, source: Path, settings: dict[str, Any]) -> ExecutableResult:
        with pd.ExcelFile(source) as workbook:
            sheet_names = [str(name) for name in workbook.sheet_names]
            sheet_name = self.get_setting(settings, "sheetName") or sheet_names[0]

            if sheet_name not in sheet_names:
                return self.failure(
                    f"Sheet not found: {sheet_name}. Available sheets: {', '.join(sheet_names)}"
                )

            # header=None keeps the header row as data, matching a raw sheet dump
            frame = workbook.parse(sheet_name, header=None)

        delimiter = self.get_setting(settings, "delimiter", ",")
        csv_content = frame.to_csv(sep=delimiter, index=False, header=False)

        output_file = self.get_setting(settings, "outputFile") or str(source.with_suffix(".csv"))
        Path(output_file).write_text(csv_content, encoding="utf-8")

        return self.success(
            {
                "filePath": output_file,
                "originalFile": str(source),
                "sheetName": sheet_name,
                "rowCount": len(frame.index),
                "columnCount": len(frame.columns),
                "message": f"Successfully converted {source.name} to CSV",
                "csvPreview": "\n".join(csv_content.splitlines()[:PREVIEW_LINES]),
            }
        )
