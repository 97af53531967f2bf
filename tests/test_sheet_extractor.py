from excel_records.excel.config import ParseOptions
from excel_records.excel.sheet_extractor import SheetExtractor
from excel_records.ir import SheetResult


def test_auto_detect_finds_header_and_keeps_raw_headers(orders_rows):
    options = ParseOptions(header_row_auto_detect=True)
    result = SheetExtractor().extract("Orders", orders_rows, options)

    assert result.headers == ["ID", "Name", "Amount"]
    assert result.record_count == 5
    assert result.records[0] == {"ID": "1", "Name": "Bob", "Amount": "5"}
    assert [r["Name"] for r in result.records] == ["Bob", "Sue", "Al", "Meg", "Cid"]


def test_auto_detect_off_always_uses_row_zero(orders_rows):
    result = SheetExtractor().extract("Orders", orders_rows, ParseOptions())
    assert result.headers == ["a", "b"]
    assert result.records[0] == {"a": "", "b": ""}
    assert result.records[1] == {"a": "ID", "b": "Name"}


def test_default_scan_limit_is_ten():
    rows = [["t"]] * 10 + [["A", "B", "C"]] + [["1", "2", "3"]] * 5
    extractor = SheetExtractor()
    assert extractor.header_row_index(rows, ParseOptions(header_row_auto_detect=True)) == 0
    options = ParseOptions(header_row_auto_detect=True, header_row_scan_limit=11)
    assert extractor.header_row_index(rows, options) == 10


def test_headers_are_returned_untrimmed_and_unfiltered():
    rows = [[" Name ", "Amount", "Note"], ["Bob", "5", "n"]]
    options = ParseOptions(trim_space=True, header_filter=("name",))
    result = SheetExtractor().extract("S", rows, options)
    assert result.headers == [" Name ", "Amount", "Note"]
    assert result.records == [{"Name": "Bob"}]


def test_rows_without_fields_are_dropped():
    rows = [["Name", "Amount"], [" ", ""], ["Bob", "5"], []]
    options = ParseOptions(trim_space=True, skip_empty=True)
    result = SheetExtractor().extract("S", rows, options)
    assert result.records == [{"Name": "Bob", "Amount": "5"}]
    assert result.record_count == len(result.records)


def test_empty_sheet_has_no_result():
    assert SheetExtractor().extract("S", [], ParseOptions()) is None


def test_header_only_sheet_has_zero_records():
    result = SheetExtractor().extract("S", [["A", "B"]], ParseOptions())
    assert result.headers == ["A", "B"]
    assert result.records == []
    assert result.record_count == 0


def test_extraction_is_idempotent(orders_rows):
    options = ParseOptions(trim_space=True, skip_empty=True, header_row_auto_detect=True)
    extractor = SheetExtractor()
    first = extractor.extract("Orders", orders_rows, options)
    second = extractor.extract("Orders", orders_rows, options)
    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_serialises_record_count_alias():
    result = SheetResult.from_records(["A"], [{"A": "1"}])
    assert result.model_dump(by_alias=True) == {
        "headers": ["A"],
        "records": [{"A": "1"}],
        "recordCount": 1,
    }
