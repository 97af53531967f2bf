"""
Excel extraction subpackage.

Public API:
  - ConcurrentDocumentProcessor  (fans sheets out under a bound, in processor.py)
  - SheetExtractor               (one sheet to a SheetResult)
  - RowProjector                 (filter / rename / trim one row)
  - HeaderDetector               (header row identification)
  - ExcelReader                  (file I/O, sheet listing)
  - ParseOptions                 (per-run options)
"""

from excel_records.excel.config import DEFAULT_OPTIONS, DetectorConfig, ParseOptions
from excel_records.excel.data_cleaner import DataCleaner
from excel_records.excel.header_detector import HeaderDetector
from excel_records.excel.processor import ConcurrentDocumentProcessor
from excel_records.excel.reader import (
    DocumentOpenError,
    DocumentReader,
    ExcelReader,
    SheetReadError,
)
from excel_records.excel.row_projector import RowProjector
from excel_records.excel.sheet_extractor import SheetExtractor

__all__ = [
    "ConcurrentDocumentProcessor",
    "DEFAULT_OPTIONS",
    "DataCleaner",
    "DetectorConfig",
    "DocumentOpenError",
    "DocumentReader",
    "ExcelReader",
    "HeaderDetector",
    "ParseOptions",
    "RowProjector",
    "SheetExtractor",
    "SheetReadError",
]
