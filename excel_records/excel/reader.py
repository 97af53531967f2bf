"""
ExcelReader: document reader backed by openpyxl (xlsx) and xlrd (xls).

Responsibilities:
- Opening the workbook (the only fatal failure of an extraction run)
- Listing sheet names
- Rendering one sheet as rows of text, trailing empties removed

The workbook is loaded fully into memory when opened. Each sheet is then
rendered by exactly one task, so concurrent ``get_rows`` calls for
different sheets never touch the same worksheet.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Protocol

from openpyxl import load_workbook

from excel_records.excel.data_cleaner import DataCleaner
from excel_records.logger import get_logger

logger = get_logger(__name__)

RawRow = List[str]
RawSheet = List[RawRow]

OPENPYXL_SUFFIXES = {".xlsx", ".xlsm", ".xltx", ".xltm"}
XLRD_SUFFIXES = {".xls"}


class DocumentOpenError(RuntimeError):
    """The workbook container could not be opened or parsed."""


class SheetReadError(RuntimeError):
    """A single sheet could not be read."""

    def __init__(self, sheet_name: str, reason: str):
        super().__init__(f"failed to read sheet {sheet_name!r}: {reason}")
        self.sheet_name = sheet_name
        self.reason = reason


class DocumentReader(Protocol):
    """What the processor needs from a document."""

    def list_sheet_names(self) -> List[str]:
        ...

    def get_rows(self, sheet_name: str) -> RawSheet:
        ...


def _drop_trailing_empty_rows(rows: RawSheet) -> RawSheet:
    while rows and not rows[-1]:
        rows.pop()
    return rows


class ExcelReader:
    """
    Read-only view of one workbook.

    Use :meth:`open` rather than the constructor; it selects the engine by
    file suffix and turns every open failure into :class:`DocumentOpenError`.
    """

    def __init__(self, file_path: str, workbook: Any, backend: str):
        self.file_path = file_path
        self.backend = backend
        self._wb = workbook

    # ------------------------------------------------------------------
    # Construction / teardown
    # ------------------------------------------------------------------

    @classmethod
    def open(cls, file_path: str) -> "ExcelReader":
        path = Path(file_path)
        suffix = path.suffix.lower()
        if suffix not in OPENPYXL_SUFFIXES and suffix not in XLRD_SUFFIXES:
            raise DocumentOpenError(f"unsupported spreadsheet type {suffix or '(none)'}: {file_path}")
        if not path.is_file():
            raise DocumentOpenError(f"failed to open excel file: {file_path} does not exist")
        try:
            if suffix in XLRD_SUFFIXES:
                import xlrd
                wb = xlrd.open_workbook(str(path))
                backend = "xlrd"
            else:
                wb = load_workbook(str(path), read_only=False, data_only=True)
                backend = "openpyxl"
        except Exception as exc:
            raise DocumentOpenError(f"failed to open excel file: {exc}") from exc
        logger.info("Opened %s (backend=%s)", path.name, backend)
        return cls(str(path), wb, backend)

    def close(self) -> None:
        if self._wb is None:
            return
        try:
            if self.backend == "xlrd":
                self._wb.release_resources()
            else:
                self._wb.close()
        finally:
            self._wb = None

    def __enter__(self) -> "ExcelReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # DocumentReader
    # ------------------------------------------------------------------

    def list_sheet_names(self) -> List[str]:
        if self.backend == "xlrd":
            return list(self._wb.sheet_names())
        return list(self._wb.sheetnames or [])

    def get_rows(self, sheet_name: str) -> RawSheet:
        """Return the sheet as text rows; raises :class:`SheetReadError`."""
        if self._wb is None:
            raise SheetReadError(sheet_name, "workbook is closed")
        try:
            if self.backend == "xlrd":
                rows = self._rows_xls(sheet_name)
            else:
                rows = self._rows_openpyxl(sheet_name)
        except SheetReadError:
            raise
        except Exception as exc:
            raise SheetReadError(sheet_name, str(exc)) from exc
        return _drop_trailing_empty_rows(rows)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _rows_openpyxl(self, sheet_name: str) -> RawSheet:
        if sheet_name not in self._wb.sheetnames:
            raise SheetReadError(sheet_name, "sheet does not exist")
        ws = self._wb[sheet_name]
        if not hasattr(ws, "iter_rows"):
            raise SheetReadError(sheet_name, f"not a worksheet ({type(ws).__name__})")
        return [
            DataCleaner.trim_trailing_empty(row or ())
            for row in ws.iter_rows(values_only=True)
        ]

    def _rows_xls(self, sheet_name: str) -> RawSheet:
        import xlrd

        try:
            ws = self._wb.sheet_by_name(sheet_name)
        except xlrd.XLRDError as exc:
            raise SheetReadError(sheet_name, "sheet does not exist") from exc
        rows: RawSheet = []
        for ri in range(ws.nrows):
            values = [self._xls_cell_value(ws.cell(ri, ci)) for ci in range(ws.row_len(ri))]
            rows.append(DataCleaner.trim_trailing_empty(values))
        return rows

    def _xls_cell_value(self, cell: Any) -> Optional[Any]:
        import xlrd

        if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
            return None
        if cell.ctype == xlrd.XL_CELL_DATE:
            return xlrd.xldate.xldate_as_datetime(cell.value, self._wb.datemode)
        if cell.ctype == xlrd.XL_CELL_BOOLEAN:
            return bool(cell.value)
        return cell.value
