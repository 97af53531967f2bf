"""
Options Loader Module
=====================

Load :class:`ParseOptions` from a YAML file. Unknown keys are ignored and
malformed values fall back to the defaults.

Example file::

    sheet_names: [Orders, Returns]
    header_filter: [Name, Amount, Date]
    header_map:
      Amount: amt
    trim_space: true
    skip_empty: true
    header_row_auto_detect: true
    header_row_scan_limit: 50
    max_concurrent_sheets: 5
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml

from excel_records.excel.config import DEFAULT_OPTIONS, ParseOptions
from excel_records.logger import get_logger

logger = get_logger(__name__)


def _ensure_dict(value: Any) -> Dict[str, Any]:
    if isinstance(value, dict):
        return value
    return {}


def _ensure_str_list(value: Any) -> List[str]:
    """String list with blank and non-string items removed."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    out: List[str] = []
    for item in value:
        if isinstance(item, str) and item.strip():
            out.append(item)
    return out


def _ensure_str_map(value: Any) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key, target in _ensure_dict(value).items():
        if isinstance(key, str) and isinstance(target, str) and target.strip():
            out[key] = target
    return out


def _ensure_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in {"1", "true", "yes", "on"}:
            return True
        if text in {"0", "false", "no", "off"}:
            return False
    return default


def _ensure_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def options_from_dict(data: Dict[str, Any], base: ParseOptions = DEFAULT_OPTIONS) -> ParseOptions:
    """Build options from a plain mapping, starting from *base*."""
    data = _ensure_dict(data)
    # A key that is present overrides the base, even with an empty value.
    return ParseOptions(
        sheet_names=(
            tuple(_ensure_str_list(data["sheet_names"])) if "sheet_names" in data else base.sheet_names
        ),
        header_filter=(
            tuple(_ensure_str_list(data["header_filter"])) if "header_filter" in data else base.header_filter
        ),
        header_map=_ensure_str_map(data["header_map"]) if "header_map" in data else base.header_map,
        trim_space=_ensure_bool(data.get("trim_space"), base.trim_space),
        skip_empty=_ensure_bool(data.get("skip_empty"), base.skip_empty),
        header_row_auto_detect=_ensure_bool(data.get("header_row_auto_detect"), base.header_row_auto_detect),
        header_row_scan_limit=_ensure_int(data.get("header_row_scan_limit"), base.header_row_scan_limit),
        max_concurrent_sheets=_ensure_int(data.get("max_concurrent_sheets"), base.max_concurrent_sheets),
    )


def load_options(options_path: str, base: ParseOptions = DEFAULT_OPTIONS) -> ParseOptions:
    """
    Read a YAML options file.

    Raises:
        FileNotFoundError: when the file does not exist
    """
    path = Path(options_path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"options file not found: {path}")

    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        logger.warning("Options file %s is not a mapping, using defaults", path)
    options = options_from_dict(_ensure_dict(raw), base)
    logger.debug("Loaded options from %s: %s", path, options)
    return options
