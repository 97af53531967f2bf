"""
DataCleaner: cell-to-text conversion for the reader.

Every cell leaves the reader as text. No type inference happens here beyond
rendering dates and integral floats the way a spreadsheet displays them.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, List, Sequence

import pandas as pd


class DataCleaner:
    """Stateless helper that turns raw cell values into text."""

    @staticmethod
    def cell_to_text(value: Any) -> str:
        """
        Convert an arbitrary cell value to text without trimming it.

        Whitespace is preserved so that ``trim_space`` stays a caller decision.
        """
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, (pd.Timestamp, datetime)):
            if value.hour == 0 and value.minute == 0 and value.second == 0 and value.microsecond == 0:
                return value.date().isoformat()
            return value.isoformat(sep=" ", timespec="seconds")
        if isinstance(value, (date, time)):
            return value.isoformat()
        if isinstance(value, float):
            if pd.isna(value):
                return ""
            if value.is_integer():
                return str(int(value))
            return repr(value)
        # Rich-text objects from openpyxl may expose .plain or .text
        plain_attr = getattr(value, "plain", None)
        if isinstance(plain_attr, str):
            return plain_attr
        text_attr = getattr(value, "text", None)
        if isinstance(text_attr, str):
            return text_attr
        return str(value)

    @staticmethod
    def count_non_empty(cells: Sequence[str]) -> int:
        """Number of cells whose stripped text is non-empty."""
        return sum(1 for c in cells if c is not None and str(c).strip() != "")

    @staticmethod
    def trim_trailing_empty(cells: Sequence[Any]) -> List[str]:
        """
        Render a row as text and drop trailing empty cells.

        Interior blanks stay as ``""``; cells past the last value are absent.
        """
        out = [DataCleaner.cell_to_text(c) for c in cells]
        while out and out[-1] == "":
            out.pop()
        return out
