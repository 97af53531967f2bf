import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from pydantic import ValidationError

from app.backend.process import process_workbook, write_csv_output, write_json_output
from excel_records.config import get_settings
from excel_records.excel.config import ParseOptions
from excel_records.excel.reader import DocumentOpenError
from excel_records.logger import set_level
from excel_records.options_loader import load_options


def parse_header_map(pairs: Optional[List[str]]) -> Dict[str, str]:
    mapping: Dict[str, str] = {}
    for raw in pairs or []:
        if "=" not in raw:
            raise argparse.ArgumentTypeError(f"--header-map expects OLD=NEW, got {raw!r}")
        old, new = raw.split("=", 1)
        mapping[old] = new
    return mapping


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Convert every sheet of a workbook into header-keyed records."
    )
    parser.add_argument("file", help="Path to an .xlsx / .xlsm / .xls workbook.")
    parser.add_argument(
        "--sheet",
        action="append",
        default=None,
        help="Sheet to process (repeatable). Default: all sheets.",
    )
    parser.add_argument(
        "--header-filter",
        action="append",
        default=None,
        help="Header to keep, case-insensitive (repeatable). Default: all headers.",
    )
    parser.add_argument(
        "--header-map",
        action="append",
        default=None,
        metavar="OLD=NEW",
        help="Rename a header in the output records (repeatable).",
    )
    parser.add_argument("--no-trim", action="store_true", help="Keep surrounding whitespace.")
    parser.add_argument("--keep-empty", action="store_true", help="Keep fields with empty values.")
    parser.add_argument(
        "--no-auto-detect",
        action="store_true",
        help="Always use the first row as the header row.",
    )
    parser.add_argument(
        "--scan-limit",
        type=int,
        default=None,
        help=f"Rows scanned for header detection (default: {settings.HEADER_ROW_SCAN_LIMIT}).",
    )
    parser.add_argument(
        "--max-concurrent",
        type=int,
        default=None,
        help=f"Sheets processed at once, 0 for no limit (default: {settings.MAX_CONCURRENT_SHEETS}).",
    )
    parser.add_argument(
        "--options",
        default=None,
        help="YAML options file; command-line flags take precedence.",
    )
    parser.add_argument("--output-dir", default=".", help="Directory for output files.")
    parser.add_argument(
        "--output-json-name",
        default=None,
        help="Output JSON filename (default: output.json, or env OUTPUT_JSON_NAME).",
    )
    parser.add_argument(
        "--format",
        choices=("json", "csv"),
        default="json",
        help="Write one JSON document or one CSV per sheet.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def build_options(args: argparse.Namespace) -> ParseOptions:
    settings = get_settings()
    base = ParseOptions(
        trim_space=True,
        skip_empty=True,
        header_row_auto_detect=True,
        header_row_scan_limit=settings.HEADER_ROW_SCAN_LIMIT,
        max_concurrent_sheets=settings.MAX_CONCURRENT_SHEETS,
    )
    if args.options:
        base = load_options(args.options, base)
    return base.with_overrides(
        sheet_names=tuple(args.sheet) if args.sheet else None,
        header_filter=tuple(args.header_filter) if args.header_filter else None,
        header_map=parse_header_map(args.header_map) or None,
        trim_space=False if args.no_trim else None,
        skip_empty=False if args.keep_empty else None,
        header_row_auto_detect=False if args.no_auto_detect else None,
        header_row_scan_limit=args.scan_limit,
        max_concurrent_sheets=args.max_concurrent,
    )


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"[error] invalid settings (check environment and .env): {exc}")
        return 2

    parser = build_parser()
    args = parser.parse_args(argv)
    set_level("DEBUG" if args.verbose else settings.LOG_LEVEL)

    try:
        options = build_options(args)
    except (argparse.ArgumentTypeError, FileNotFoundError) as exc:
        parser.error(str(exc))

    try:
        report = process_workbook(args.file, options)
    except DocumentOpenError as exc:
        print(f"[error] {exc}")
        return 1

    if args.format == "csv":
        for path in write_csv_output(report, args.output_dir):
            print("CSV:", path)
    else:
        json_path = write_json_output(report.to_payload(), args.output_dir, args.output_json_name)
        print("JSON:", json_path)
    for sheet_name in sorted(report.failures):
        print(f"[warn] sheet skipped after read error: {sheet_name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
