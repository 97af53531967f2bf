"""
Intermediate Representation Module
==================================

Result models handed from the extraction core to the output layer:
SheetResult, ParseReport.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SheetResult(BaseModel):
    """
    Extraction result for one sheet.

    Attributes:
        headers: the header row exactly as found (untrimmed, unfiltered)
        records: one mapping per kept data row, in original row order
        record_count: number of records; serialised as ``recordCount``
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    headers: List[str]
    records: List[Dict[str, str]]
    record_count: int = Field(alias="recordCount")

    @model_validator(mode="after")
    def check_record_count(self) -> "SheetResult":
        if self.record_count != len(self.records):
            raise ValueError(
                f"record_count={self.record_count} does not match {len(self.records)} records"
            )
        return self

    @classmethod
    def from_records(cls, headers: List[str], records: List[Dict[str, str]]) -> "SheetResult":
        return cls(headers=list(headers), records=records, record_count=len(records))


class ParseReport(BaseModel):
    """
    Aggregate of one extraction run.

    ``results`` holds every processed sheet. Sheets that could not be read
    are listed in ``failures`` with the reason; sheets with no rows are
    listed in ``skipped``. Neither appears in ``results``.
    """
    results: Dict[str, SheetResult] = Field(default_factory=dict)
    failures: Dict[str, str] = Field(default_factory=dict)
    skipped: List[str] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, dict]:
        """Render ``results`` as ``{sheet: {"headers", "records", "recordCount"}}``."""
        return {
            name: result.model_dump(by_alias=True)
            for name, result in self.results.items()
        }
