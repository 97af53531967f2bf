"""
SheetExtractor: one sheet's raw rows to a :class:`SheetResult`.
"""

from __future__ import annotations

from typing import Optional, Sequence

from excel_records.excel.config import ParseOptions
from excel_records.excel.header_detector import HeaderDetector
from excel_records.excel.row_projector import RowProjector
from excel_records.ir import SheetResult
from excel_records.logger import get_logger

logger = get_logger(__name__)


class SheetExtractor:
    """
    Runs header detection once and the row projector once per data row.

    Pure and synchronous; a single instance is shared by all sheet tasks.
    """

    def __init__(self, header_detector: Optional[HeaderDetector] = None):
        self._hd = header_detector or HeaderDetector()

    def header_row_index(self, rows: Sequence[Sequence[str]], options: ParseOptions) -> int:
        if not options.header_row_auto_detect:
            return 0
        idx, debug = self._hd.select_header_row_index(rows, options.effective_scan_limit)
        logger.debug("Header row %d chosen (%s)", idx, debug["chosen_reason"])
        return idx

    def extract(
        self,
        sheet_name: str,
        rows: Sequence[Sequence[str]],
        options: ParseOptions,
    ) -> Optional[SheetResult]:
        """
        Return the sheet's result, or ``None`` when the sheet has no rows.
        """
        if not rows:
            logger.debug("Sheet %s has no rows, skipping", sheet_name)
            return None

        header_idx = self.header_row_index(rows, options)
        headers = list(rows[header_idx])

        projector = RowProjector(options)
        active = projector.active_headers(headers)

        records = []
        for row in rows[header_idx + 1:]:
            record = projector.project(active, row)
            if record is not None:
                records.append(record)

        logger.debug(
            "Sheet %s: header_row=%d active_columns=%d records=%d",
            sheet_name, header_idx, len(active), len(records),
        )
        return SheetResult.from_records(headers, records)
