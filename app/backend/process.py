"""
Backend Process Module
======================

Wraps the extraction run for the command line: open the workbook, process
its sheets, write the output as JSON or one CSV per sheet.
"""

import json
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import pandas as pd

from excel_records.config import get_settings
from excel_records.excel.config import ParseOptions
from excel_records.excel.processor import ConcurrentDocumentProcessor
from excel_records.excel.reader import ExcelReader
from excel_records.ir import ParseReport, SheetResult
from excel_records.logger import get_logger

logger = get_logger(__name__)


def process_workbook(
    file_path: str,
    options: ParseOptions,
    processor: Optional[ConcurrentDocumentProcessor] = None,
) -> ParseReport:
    """
    Extract every requested sheet of *file_path*.

    Raises:
        DocumentOpenError: when the workbook cannot be opened
    """
    processor = processor or ConcurrentDocumentProcessor()
    with ExcelReader.open(file_path) as reader:
        report = processor.process_report(reader, options)
    for sheet_name, reason in report.failures.items():
        logger.warning("Sheet %s omitted: %s", sheet_name, reason)
    return report


def _resolve_output_json_name(output_filename: Optional[str] = None) -> str:
    if output_filename and output_filename.strip():
        return output_filename.strip()
    env_output_name = os.getenv("OUTPUT_JSON_NAME", "").strip()
    if env_output_name:
        return env_output_name
    return get_settings().OUTPUT_JSON_NAME


def write_json_output(
    result: Dict[str, Any],
    output_dir: str,
    output_filename: Optional[str] = None,
) -> str:
    """
    Write *result* as JSON into *output_dir*.

    The file name comes from *output_filename*, then the OUTPUT_JSON_NAME
    environment variable, then the settings default.
    """
    output_path = Path(output_dir).resolve()
    output_path.mkdir(parents=True, exist_ok=True)
    json_path = output_path / _resolve_output_json_name(output_filename)
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(result, f, ensure_ascii=False, indent=2)
    return str(json_path)


def sheet_to_dataframe(result: SheetResult) -> pd.DataFrame:
    """Records as a DataFrame; columns in first-seen key order, gaps as ``""``."""
    columns: List[str] = []
    for record in result.records:
        for key in record:
            if key not in columns:
                columns.append(key)
    return pd.DataFrame(result.records, columns=columns).fillna("")


def _safe_file_stem(sheet_name: str) -> str:
    stem = re.sub(r'[\\/:*?"<>|\s]+', "_", sheet_name).strip("._")
    return stem or "sheet"


def write_csv_output(report: ParseReport, output_dir: str) -> List[str]:
    """Write one UTF-8 CSV per processed sheet and return the paths."""
    output_path = Path(output_dir).resolve()
    output_path.mkdir(parents=True, exist_ok=True)
    written: List[str] = []
    names = {name: _safe_file_stem(name) for name in report.results}
    # Stems that belong to a sheet as-is are reserved before any suffixing.
    taken = set(names.values())
    used: Set[str] = set()
    for sheet_name in sorted(report.results):
        base = names[sheet_name]
        stem = base
        n = 1
        while stem in used or (n > 1 and stem in taken):
            n += 1
            stem = f"{base}_{n}"
        used.add(stem)
        csv_path = output_path / f"{stem}.csv"
        sheet_to_dataframe(report.results[sheet_name]).to_csv(csv_path, index=False, encoding="utf-8")
        written.append(str(csv_path))
    return written
