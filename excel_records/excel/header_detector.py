"""
HeaderDetector: locate the header row of a sheet.

Forward scan with a fixed lookahead: a candidate row needs enough filled
cells, and enough of the rows right below it must look like data. The first
candidate that qualifies wins; nothing is scored or ranked.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

from excel_records.excel.config import DEFAULT_DETECTOR_CONFIG, DetectorConfig
from excel_records.excel.data_cleaner import DataCleaner


class HeaderDetector:
    """
    Stateless header-row detector.

    A :class:`DetectorConfig` can be passed in to override the default
    thresholds.
    """

    def __init__(self, cfg: DetectorConfig = DEFAULT_DETECTOR_CONFIG):
        self._cfg = cfg

    def detect(self, rows: Sequence[Sequence[str]], scan_limit: int) -> int:
        """Return the header row index, or 0 when no row qualifies."""
        idx, _ = self.select_header_row_index(rows, scan_limit)
        return idx

    def select_header_row_index(
        self,
        rows: Sequence[Sequence[str]],
        scan_limit: int,
    ) -> Tuple[int, Dict[str, Any]]:
        """
        Scan the first *scan_limit* rows and return ``(idx, debug_info)``.

        *scan_limit* values that are non-positive or exceed the number of
        rows are replaced by ``len(rows)``.
        """
        total = len(rows)
        if total == 0:
            return 0, {
                "scanned_rows": [],
                "chosen_header_row_idx": 0,
                "chosen_reason": "empty_sheet",
            }
        if scan_limit <= 0 or scan_limit > total:
            scan_limit = total

        c = self._cfg
        scanned: List[Dict[str, int]] = []
        for i in range(scan_limit):
            filled = DataCleaner.count_non_empty(rows[i])
            if filled < c.min_header_cells:
                scanned.append({"row_idx": i, "non_empty": filled, "valid_data_rows": -1})
                continue

            valid_data_rows = 0
            for j in range(i + 1, min(total, i + 1 + c.lookahead_rows)):
                if DataCleaner.count_non_empty(rows[j]) >= c.min_data_cells:
                    valid_data_rows += 1
            scanned.append({"row_idx": i, "non_empty": filled, "valid_data_rows": valid_data_rows})

            if valid_data_rows >= c.min_valid_data_rows:
                return i, {
                    "scanned_rows": scanned,
                    "chosen_header_row_idx": i,
                    "chosen_reason": "lookahead_match",
                }

        return 0, {
            "scanned_rows": scanned,
            "chosen_header_row_idx": 0,
            "chosen_reason": "fallback_first_row",
        }
