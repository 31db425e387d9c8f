"""Built-in deterministic executables (common agents)."""

from .base import BaseExecutable, ExecutableMetadata, SettingField
from .excel_to_csv import ExcelToCsvExecutable
from .csv_parser import CsvParserExecutable
from .api_caller import ApiCallerExecutable

__all__ = [
    "BaseExecutable",
    "ExecutableMetadata",
    "SettingField",
    "ExcelToCsvExecutable",
    "CsvParserExecutable",
    "ApiCallerExecutable",
]
