"""
Unit tests for the CSV record source
"""

import types

import pytest
from core.exceptions import LocalIOError, ParseError
from ingestion.extractors.csv_reader import iter_csv_records, normalize_header


class TestNormalizeHeader:
    """Header names become model attribute names"""

    @pytest.mark.parametrize("header,expected", [
        ("Index", "index"),
        ("Organization Id", "organization_id"),
        ("Number of employees", "number_of_employees"),
        ("Phone 1", "phone_1"),
        ("  Subscription Date ", "subscription_date"),
        ("name", "name"),
    ])
    def test_normalize(self, header, expected):
        assert normalize_header(header) == expected


class TestIterCSVRecords:
    """Test CSV parsing into records"""

    def test_reads_records_keyed_by_header(self, write_csv):
        path = write_csv("id,name\n1,Alice\n2,Bob\n3,Carol")

        records = list(iter_csv_records(path))

        assert records == [
            {"id": "1", "name": "Alice"},
            {"id": "2", "name": "Bob"},
            {"id": "3", "name": "Carol"},
        ]

    def test_is_lazy(self, write_csv):
        path = write_csv("id\n1\n2\n")

        records = iter_csv_records(path)

        assert isinstance(records, types.GeneratorType)
        assert next(records) == {"id": "1"}

    def test_values_are_passed_through_as_text(self, write_csv):
        path = write_csv("id,name,note\n007, padded ,\n")

        record = next(iter_csv_records(path))

        assert record == {"id": "007", "name": " padded ", "note": ""}

    def test_quoted_fields(self, write_csv):
        path = write_csv('id,company\n1,"Mckinney, Riley and Day"\n2,"multi\nline"\n')

        records = list(iter_csv_records(path))

        assert records[0]["company"] == "Mckinney, Riley and Day"
        assert records[1]["company"] == "multi\nline"

    def test_blank_lines_are_skipped(self, write_csv):
        path = write_csv("id,name\n1,Alice\n\n2,Bob\n\n")

        assert [r["id"] for r in iter_csv_records(path)] == ["1", "2"]

    def test_header_only(self, write_csv):
        path = write_csv("id,name\n")

        assert list(iter_csv_records(path)) == []

    def test_empty_file(self, write_csv):
        path = write_csv("")

        assert list(iter_csv_records(path)) == []

    @pytest.mark.parametrize("bad_row,actual", [
        ("3,Carol,extra", 3),
        ("3", 1),
    ])
    def test_field_count_mismatch_raises_parse_error(self, write_csv, bad_row, actual):
        path = write_csv(f"id,name\n1,Alice\n2,Bob\n{bad_row}\n4,Dan\n")
        records = iter_csv_records(path)

        assert next(records)["name"] == "Alice"
        assert next(records)["name"] == "Bob"

        with pytest.raises(ParseError) as exc_info:
            next(records)

        assert exc_info.value.context["line_number"] == 4
        assert exc_info.value.context["expected_fields"] == 2
        assert exc_info.value.context["actual_fields"] == actual

    def test_missing_file_raises_local_io_error(self, tmp_path):
        with pytest.raises(LocalIOError) as exc_info:
            list(iter_csv_records(tmp_path / "missing.csv"))

        assert exc_info.value.context["file_path"].endswith("missing.csv")

    def test_invalid_encoding_raises_parse_error(self, tmp_path):
        path = tmp_path / "latin1.csv"
        path.write_bytes("id,name\n1,Jos\xe9\n".encode("latin-1"))

        with pytest.raises(ParseError):
            list(iter_csv_records(path))

    def test_byte_order_mark_is_not_part_of_first_header(self, write_csv):
        path = write_csv("\ufeffIndex,Name\n1,Acme\n")

        records = list(iter_csv_records(path))

        assert records == [{"index": "1", "name": "Acme"}]
