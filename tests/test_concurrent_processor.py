import threading

import pytest

from excel_records.excel.config import ParseOptions
from excel_records.excel.processor import ConcurrentDocumentProcessor


def _sheet(n_rows=3):
    return [["Name", "Amount"]] + [[f"p{i}", str(i)] for i in range(n_rows)]


@pytest.mark.parametrize("bound", [1, 2, 3])
def test_concurrency_never_exceeds_bound(fake_reader_cls, bound):
    sheets = {f"S{i}": _sheet() for i in range(8)}
    reader = fake_reader_cls(sheets, delay=0.02)

    results = ConcurrentDocumentProcessor().process(reader, ParseOptions(max_concurrent_sheets=bound))

    assert set(results) == set(sheets)
    assert 1 <= reader.max_active <= bound


def test_unbounded_runs_every_sheet_at_once(fake_reader_cls):
    sheets = {f"S{i}": _sheet() for i in range(6)}
    # Every get_rows call must be in flight together for the barrier to open.
    barrier = threading.Barrier(len(sheets), timeout=5)
    reader = fake_reader_cls(sheets, barrier=barrier)

    report = ConcurrentDocumentProcessor().process_report(reader, ParseOptions(max_concurrent_sheets=0))

    assert report.failures == {}
    assert set(report.results) == set(sheets)
    assert reader.max_active == len(sheets)


def test_failing_sheet_is_isolated(fake_reader_cls):
    sheets = {"A": _sheet(), "B": _sheet(), "C": _sheet()}
    reader = fake_reader_cls(sheets, fail={"B"})

    processor = ConcurrentDocumentProcessor()
    results = processor.process(reader, ParseOptions(max_concurrent_sheets=2))
    assert set(results) == {"A", "C"}

    report = processor.process_report(reader, ParseOptions(max_concurrent_sheets=2))
    assert set(report.failures) == {"B"}
    assert "simulated read failure" in report.failures["B"]


def test_empty_sheet_is_skipped_not_failed(fake_reader_cls):
    reader = fake_reader_cls({"Data": _sheet(), "Blank": []})

    report = ConcurrentDocumentProcessor().process_report(reader, ParseOptions())

    assert set(report.results) == {"Data"}
    assert report.skipped == ["Blank"]
    assert report.failures == {}


def test_requested_sheet_names_limit_the_run(fake_reader_cls):
    reader = fake_reader_cls({"A": _sheet(), "B": _sheet(), "C": _sheet()})

    results = ConcurrentDocumentProcessor().process(reader, ParseOptions(sheet_names=("C", "A", "C")))

    assert set(results) == {"A", "C"}
    assert sorted(reader.calls) == ["A", "C"]


def test_unknown_requested_sheet_is_a_failure(fake_reader_cls):
    reader = fake_reader_cls({"A": _sheet()})

    report = ConcurrentDocumentProcessor().process_report(reader, ParseOptions(sheet_names=("A", "Missing")))

    assert set(report.results) == {"A"}
    assert set(report.failures) == {"Missing"}


def test_results_keep_row_order_within_sheet(fake_reader_cls):
    reader = fake_reader_cls({"A": _sheet(50), "B": _sheet(50)}, delay=0.01)

    results = ConcurrentDocumentProcessor().process(reader, ParseOptions(max_concurrent_sheets=2))

    for result in results.values():
        assert [r["Name"] for r in result.records] == [f"p{i}" for i in range(50)]
        assert result.record_count == len(result.records) == 50


def test_no_sheets_returns_empty_mapping(fake_reader_cls):
    assert ConcurrentDocumentProcessor().process(fake_reader_cls({}), ParseOptions()) == {}


def test_options_flow_into_each_sheet(fake_reader_cls, orders_rows):
    reader = fake_reader_cls({"Orders": orders_rows})
    options = ParseOptions(
        header_row_auto_detect=True,
        header_filter=("name", "amount"),
        header_map={"Amount": "amt"},
    )

    results = ConcurrentDocumentProcessor().process(reader, options)

    assert results["Orders"].headers == ["ID", "Name", "Amount"]
    assert results["Orders"].records[0] == {"Name": "Bob", "amt": "5"}


@pytest.mark.parametrize("bound", [1, 2])
def test_bounded_pool_starts_at_most_bound_threads(fake_reader_cls, bound):
    sheets = {f"S{i}": _sheet() for i in range(40)}
    reader = fake_reader_cls(sheets, delay=0.005)

    results = ConcurrentDocumentProcessor().process(reader, ParseOptions(max_concurrent_sheets=bound))

    assert set(results) == set(sheets)
    assert 1 <= len(reader.threads) <= bound


def test_bound_larger_than_sheet_count(fake_reader_cls):
    reader = fake_reader_cls({"A": _sheet(), "B": _sheet()})

    results = ConcurrentDocumentProcessor().process(reader, ParseOptions(max_concurrent_sheets=16))

    assert set(results) == {"A", "B"}
    assert len(reader.threads) <= 2
