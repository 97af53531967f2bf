"""
Pytest configuration and shared fixtures.
"""
import os
import sys
import threading
import time

import pytest
from openpyxl import Workbook

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from excel_records.excel.reader import SheetReadError


class FakeReader:
    """
    In-memory document reader.

    Records the high-water mark of concurrent ``get_rows`` calls and can be
    told to fail for specific sheets.
    """

    def __init__(self, sheets, fail=(), delay=0.0, barrier=None):
        self._sheets = dict(sheets)
        self._fail = set(fail)
        self._delay = delay
        self._barrier = barrier
        self._lock = threading.Lock()
        self.active = 0
        self.max_active = 0
        self.calls = []
        self.threads = set()

    def list_sheet_names(self):
        return list(self._sheets)

    def get_rows(self, sheet_name):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            self.calls.append(sheet_name)
            self.threads.add(threading.get_ident())
        try:
            if self._barrier is not None:
                self._barrier.wait()
            if self._delay:
                time.sleep(self._delay)
            if sheet_name in self._fail:
                raise SheetReadError(sheet_name, "simulated read failure")
            if sheet_name not in self._sheets:
                raise SheetReadError(sheet_name, "sheet does not exist")
            return [list(r) for r in self._sheets[sheet_name]]
        finally:
            with self._lock:
                self.active -= 1


@pytest.fixture
def fake_reader_cls():
    return FakeReader


@pytest.fixture
def orders_rows():
    """Title row, blank row, then a header on row 2 and five data rows."""
    return [
        ["a", "b"],
        ["", "", ""],
        ["ID", "Name", "Amount"],
        ["1", "Bob", "5"],
        ["2", "Sue", "6"],
        ["3", "Al", "7"],
        ["4", "Meg", "8"],
        ["5", "Cid", "9"],
    ]


@pytest.fixture
def sample_workbook(tmp_path):
    """Workbook with a titled sheet, a plain sheet and an empty sheet."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Orders"
    ws["A1"] = "Monthly order report"
    ws.append([])
    ws.append(["ID", " Name ", "Amount", "Note"])
    for row in [
        (1, " Bob ", 5, "x"),
        (2, "Sue", 6.5, None),
        (3, "Al", 7, "y"),
        (4, "Meg", 8, None),
        (5, "Cid", 9, "z"),
    ]:
        ws.append(row)

    plain = wb.create_sheet("Staff")
    plain.append(["Name", "Dept"])
    plain.append(["Ann", "Ops"])
    plain.append(["Ben", ""])

    wb.create_sheet("Empty")

    file_path = tmp_path / "sample.xlsx"
    wb.save(file_path)
    return str(file_path)
