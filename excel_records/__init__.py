"""
excel_records: header-keyed records from multi-sheet workbooks.
"""

from excel_records.excel import (
    ConcurrentDocumentProcessor,
    DocumentOpenError,
    ExcelReader,
    ParseOptions,
    SheetReadError,
)
from excel_records.ir import ParseReport, SheetResult

__all__ = [
    "ConcurrentDocumentProcessor",
    "DocumentOpenError",
    "ExcelReader",
    "ParseOptions",
    "ParseReport",
    "SheetReadError",
    "SheetResult",
]
