"""
RowProjector: turn one data row into one record.

Columns are selected once per sheet from the header row (trim, then filter),
then every data row is read through that selection (trim, skip empty,
rename). Column filtering is case-insensitive; renaming is exact.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from excel_records.excel.config import ParseOptions

ActiveHeaders = List[Tuple[int, str]]
Record = Dict[str, str]


class RowProjector:
    """Projects raw rows onto the header columns kept by a :class:`ParseOptions`."""

    def __init__(self, options: ParseOptions):
        self._opts = options
        self._filter: FrozenSet[str] = frozenset(h.casefold() for h in options.header_filter)
        self._rename: Dict[str, str] = dict(options.header_map)

    def keeps_header(self, header: str) -> bool:
        if not self._filter:
            return True
        return header.casefold() in self._filter

    def active_headers(self, header_row: Sequence[str]) -> ActiveHeaders:
        """
        Return ``(column_index, header_name)`` pairs in column order.

        Columns rejected by the filter never have their cells read.
        """
        active: ActiveHeaders = []
        for idx, header in enumerate(header_row):
            name = header.strip() if self._opts.trim_space else header
            if self.keeps_header(name):
                active.append((idx, name))
        return active

    def output_key(self, header: str) -> str:
        return self._rename.get(header, header)

    def project(self, active: ActiveHeaders, data_row: Sequence[str]) -> Optional[Record]:
        """
        Build the record for *data_row*, or ``None`` when nothing survives.

        When two columns share an output key the later column wins.
        """
        record: Record = {}
        width = len(data_row)
        for idx, header in active:
            if idx >= width:
                continue
            value = data_row[idx]
            if self._opts.trim_space:
                value = value.strip()
            if self._opts.skip_empty and value == "":
                continue
            record[self.output_key(header)] = value
        return record or None

    def project_row(self, header_row: Sequence[str], data_row: Sequence[str]) -> Optional[Record]:
        """Single-row convenience; sheets should reuse :meth:`active_headers`."""
        return self.project(self.active_headers(header_row), data_row)
