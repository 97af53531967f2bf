"""
ConcurrentDocumentProcessor: run the sheet extractor over many sheets.

One task per sheet on a thread pool. When ``max_concurrent_sheets`` is
positive the pool has that many workers and a bounded semaphore of the same
size admits at most that many tasks into the read/extract section at once.
Results are merged into the shared report under a single lock. A failing
sheet is logged and recorded; it never fails the run.
"""

from __future__ import annotations

import threading
import traceback
from concurrent.futures import ThreadPoolExecutor, as_completed
from contextlib import nullcontext
from typing import Dict, List, Optional

from excel_records.excel.config import ParseOptions
from excel_records.excel.reader import DocumentReader
from excel_records.excel.sheet_extractor import SheetExtractor
from excel_records.ir import ParseReport, SheetResult
from excel_records.logger import get_logger

logger = get_logger(__name__)


class ConcurrentDocumentProcessor:
    """Fans :class:`SheetExtractor` out across the sheets of one document."""

    def __init__(self, extractor: Optional[SheetExtractor] = None):
        self._extractor = extractor or SheetExtractor()

    def process(self, reader: DocumentReader, options: ParseOptions) -> Dict[str, SheetResult]:
        """Return ``{sheet_name: SheetResult}`` for every sheet that produced a result."""
        return self.process_report(reader, options).results

    def process_report(self, reader: DocumentReader, options: ParseOptions) -> ParseReport:
        """
        Same as :meth:`process`, but also returns why sheets are missing.
        """
        sheets = self._working_sheets(reader, options)
        report = ParseReport()
        if not sheets:
            logger.info("No sheets to process")
            return report

        bound = options.max_concurrent_sheets
        gate = threading.BoundedSemaphore(bound) if bound > 0 else None
        lock = threading.Lock()

        logger.info(
            "Processing %d sheet(s) (max_concurrent_sheets=%s)",
            len(sheets), bound if bound > 0 else "unbounded",
        )

        workers = min(bound, len(sheets)) if bound > 0 else len(sheets)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sheet") as executor:
            futures = [
                executor.submit(self._run_sheet, reader, name, options, gate, lock, report)
                for name in sheets
            ]
            for future in as_completed(futures):
                future.result()

        logger.info(
            "Done: %d processed, %d skipped, %d failed",
            len(report.results), len(report.skipped), len(report.failures),
        )
        return report

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _working_sheets(reader: DocumentReader, options: ParseOptions) -> List[str]:
        if options.sheet_names:
            return list(dict.fromkeys(options.sheet_names))
        return list(reader.list_sheet_names())

    def _run_sheet(
        self,
        reader: DocumentReader,
        sheet_name: str,
        options: ParseOptions,
        gate: Optional[threading.BoundedSemaphore],
        lock: threading.Lock,
        report: ParseReport,
    ) -> None:
        with gate if gate is not None else nullcontext():
            try:
                rows = reader.get_rows(sheet_name)
                result = self._extractor.extract(sheet_name, rows, options)
            except Exception as exc:
                logger.error("Sheet %s failed: %s", sheet_name, exc)
                logger.debug("Traceback: %s", traceback.format_exc())
                with lock:
                    report.failures[sheet_name] = str(exc)
                return

        with lock:
            if result is None:
                report.skipped.append(sheet_name)
            else:
                report.results[sheet_name] = result
