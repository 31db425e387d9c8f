"""CSV Parser executable - reads a CSV file into row records."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, TYPE_CHECKING

import pandas as pd

from .base import BaseExecutable, ExecutableMetadata, SettingField

if TYPE_CHECKING:
    from ..engine.types import ExecutableResult


class CsvParserExecutable(BaseExecutable):
    """Parse a CSV file into a list of records.

    Accepts the file path from settings or from the previous step's
    ``filePath`` output, so it chains directly after Excel to CSV.
    """

    metadata = ExecutableMetadata(
        name="CSV Parser",
        description="Parse CSV files into structured records",
        category="Data Processing",
        icon="TableOutlined",
        settings=[
            SettingField(
                key="inputFile",
                label="Input CSV File Path",
                required=True,
                description="Path to the CSV file (defaults to the previous step's filePath)",
            ),
            SettingField(
                key="delimiter",
                label="Delimiter",
                default=",",
                description="Column delimiter character",
            ),
            SettingField(
                key="maxRows",
                label="Max Rows",
                type="number",
                description="Maximum number of rows to read",
            ),
        ],
    )

    @property
    def identifier(self) -> str:
        return "csv-parser"

    async def execute(self, input_data: Any, settings: dict[str, Any]) -> ExecutableResult:
        input_file = self.get_setting(settings, "inputFile")
        if not input_file and isinstance(input_data, dict):
            input_file = input_data.get("filePath")

        if not input_file:
            return self.failure("No input file specified. Please provide a CSV file path.")

        source = Path(input_file)
        if not source.exists():
            return self.failure(f"File not found: {input_file}")

        max_rows = self.get_setting(settings, "maxRows")
        try:
            nrows = int(max_rows) if max_rows is not None else None
        except (TypeError, ValueError):
            return self.failure(f"Invalid maxRows value: {max_rows}")

        try:
            frame = await asyncio.to_thread(
                pd.read_csv,
                source,
                sep=self.get_setting(settings, "delimiter", ","),
                nrows=nrows,
            )
        except pd.errors.EmptyDataError:
            frame = pd.DataFrame()
        except Exception as e:
            return self.failure(f"Parsing failed: {e}")

        # NaN is not JSON-serializable; report missing cells as None
        records = frame.astype(object).where(frame.notna(), None).to_dict(orient="records")

        return self.success(
            {
                "filePath": str(source),
                "rowCount": len(records),
                "columns": [str(c) for c in frame.columns],
                "rows": records,
            }
        )
