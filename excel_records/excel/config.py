"""
Centralised configuration for the sheet extraction pipeline.

Heuristic thresholds live here so that the detector and the projector stay
free of hard-coded values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Tuple


# ---------------------------------------------------------------------------
# Header detection constants
# ---------------------------------------------------------------------------

DEFAULT_HEADER_SCAN_LIMIT = 10
MIN_HEADER_CELLS = 3
LOOKAHEAD_ROWS = 5
MIN_DATA_CELLS = 3
MIN_VALID_DATA_ROWS = 4


@dataclass(frozen=True)
class DetectorConfig:
    """Immutable bag of thresholds used by the header-row lookahead."""

    min_header_cells: int = MIN_HEADER_CELLS
    lookahead_rows: int = LOOKAHEAD_ROWS
    min_data_cells: int = MIN_DATA_CELLS
    min_valid_data_rows: int = MIN_VALID_DATA_ROWS


DEFAULT_DETECTOR_CONFIG = DetectorConfig()


# ---------------------------------------------------------------------------
# ParseOptions: per-invocation extraction options
# ---------------------------------------------------------------------------

def _as_tuple(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass(frozen=True)
class ParseOptions:
    """
    Options for one extraction run.

    ``sheet_names`` empty means every sheet in the document.
    ``header_filter`` empty means keep every column; matching is
    case-insensitive. ``header_map`` renames by exact header text.
    ``header_row_scan_limit`` of 0 or less falls back to
    :data:`DEFAULT_HEADER_SCAN_LIMIT`; ``max_concurrent_sheets`` of 0 or
    less means no admission bound.
    """

    sheet_names: Tuple[str, ...] = ()
    header_filter: Tuple[str, ...] = ()
    header_map: Mapping[str, str] = field(default_factory=dict)
    trim_space: bool = False
    skip_empty: bool = False
    header_row_auto_detect: bool = False
    header_row_scan_limit: int = 0
    max_concurrent_sheets: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "sheet_names", _as_tuple(self.sheet_names))
        object.__setattr__(self, "header_filter", _as_tuple(self.header_filter))
        object.__setattr__(self, "header_map", dict(self.header_map or {}))

    @property
    def effective_scan_limit(self) -> int:
        if self.header_row_scan_limit <= 0:
            return DEFAULT_HEADER_SCAN_LIMIT
        return self.header_row_scan_limit

    def with_overrides(self, **changes) -> "ParseOptions":
        """Return a copy with the given fields replaced; ``None`` values are ignored."""
        current: Dict[str, object] = {
            "sheet_names": self.sheet_names,
            "header_filter": self.header_filter,
            "header_map": self.header_map,
            "trim_space": self.trim_space,
            "skip_empty": self.skip_empty,
            "header_row_auto_detect": self.header_row_auto_detect,
            "header_row_scan_limit": self.header_row_scan_limit,
            "max_concurrent_sheets": self.max_concurrent_sheets,
        }
        for key, value in changes.items():
            if key not in current:
                raise TypeError(f"unknown ParseOptions field: {key}")
            if value is not None:
                current[key] = value
        return ParseOptions(**current)


DEFAULT_OPTIONS = ParseOptions()
