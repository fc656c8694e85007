"""Tests for row validation and dataset construction."""

import warnings
from datetime import date, datetime

import pytest

from timeline_plotter.data_model import Record
from timeline_plotter.errors import RowValidationError
from timeline_plotter.normalizer import (
    build_dataset, normalize_row, normalize_rows, parse_date, parse_value,
)


def _row(when, value, event=""):
    return {"date": when, "value": value, "event": event}


class TestParseDate:

    @pytest.mark.parametrize("text, expected", [
        ("2024-01-03", datetime(2024, 1, 3)),
        ("  2024-01-03  ", datetime(2024, 1, 3)),
        ("2024-01-03 14:30", datetime(2024, 1, 3, 14, 30)),
        ("2024/01/03", datetime(2024, 1, 3)),
        ("01/03/2024", datetime(2024, 1, 3)),
        ("Jan 03, 2024", datetime(2024, 1, 3)),
        ("3 January 2024", datetime(2024, 1, 3)),
        ("2024-01-03T10:30:00", datetime(2024, 1, 3, 10, 30)),
    ])
    def test_supported_formats(self, text, expected):
        assert parse_date(text) == expected

    def test_utc_suffix_is_dropped(self):
        assert parse_date("2024-01-03T10:30:00Z") == datetime(2024, 1, 3, 10, 30)

    def test_offset_is_converted_to_utc(self):
        parsed = parse_date("2024-01-03T10:30:00+02:00")
        assert parsed == datetime(2024, 1, 3, 8, 30)
        assert parsed.tzinfo is None

    def test_date_and_datetime_objects(self):
        assert parse_date(date(2024, 5, 1)) == datetime(2024, 5, 1)
        assert parse_date(datetime(2024, 5, 1, 6)) == datetime(2024, 5, 1, 6)

    @pytest.mark.parametrize("value", [
        "bad-date", "2024-02-30", "", "   ", 20240103.0, None,
        "0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-05:00",
    ])
    def test_invalid_dates_raise(self, value):
        with pytest.raises(ValueError):
            parse_date(value)


class TestParseValue:

    @pytest.mark.parametrize("raw, expected", [
        ("10", 10.0),
        (" 2.5 ", 2.5),
        ("-3e2", -300.0),
        (7, 7.0),
        (1.25, 1.25),
    ])
    def test_numbers(self, raw, expected):
        assert parse_value(raw) == expected

    @pytest.mark.parametrize("raw", [
        None, "", "  ", "abc", "1,000", "1_000", "nan", "inf", "-Infinity",
        float("nan"), float("inf"), True,
    ])
    def test_rejected(self, raw):
        with pytest.raises(ValueError):
            parse_value(raw)


class TestNormalizeRow:

    def test_valid_row(self):
        record = normalize_row(_row("2024-01-03", "20", "  Launch "), 4)
        assert record == Record(datetime(2024, 1, 3), 20.0, "Launch")

    def test_missing_event_column_means_no_event(self):
        record = normalize_row({"date": "2024-01-03", "value": "20"}, 2)
        assert record.event == ""
        assert not record.has_event

    def test_numeric_event_from_dynamic_typing(self):
        record = normalize_row(_row("2024-01-03", 20.0, 2024.0), 2)
        assert record.event == "2024"

    @pytest.mark.parametrize("row, field, reason", [
        ({"value": "1"}, "date", "is missing"),
        (_row("  ", "1"), "date", "is missing"),
        (_row("bad-date", "1"), "date", "is not a valid date"),
        (_row("2024-01-01", None), "value", "is missing"),
        (_row("2024-01-01", "n/a"), "value", "is not a finite number"),
        (_row("2024-01-01", "NaN"), "value", "is not a finite number"),
    ])
    def test_invalid_rows(self, row, field, reason):
        outcome = normalize_row(row, 7)
        assert isinstance(outcome, RowValidationError)
        assert outcome.line_number == 7
        assert outcome.field == field
        assert outcome.reason == reason
        assert str(outcome).startswith("line 7: ")


class TestNormalizeRows:

    def test_bad_date_row_is_dropped(self, example_rows):
        with pytest.warns(UserWarning, match="Dropped 1 invalid row"):
            records, dropped = normalize_rows(example_rows)
        assert [r.value for r in records] == [10.0, 20.0]
        assert records[1].event == "Launch"
        assert len(dropped) == 1
        assert dropped[0].line_number == 3
        assert dropped[0].raw_value == "bad-date"

    def test_preserves_input_order(self):
        rows = [_row("2024-01-05", "1"), _row("2024-01-01", "2"), _row("2024-01-03", "3")]
        records, _ = normalize_rows(rows)
        assert [r.value for r in records] == [1.0, 2.0, 3.0]

    @pytest.mark.parametrize("n_bad", [0, 1, 3])
    def test_never_more_records_than_rows(self, n_bad):
        rows = [_row("2024-01-01", "1")] * 4 + [_row("x", "1")] * n_bad
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            records, dropped = normalize_rows(rows)
        assert len(records) == 4
        assert len(records) + len(dropped) == len(rows)

    def test_all_valid_rows_emit_no_warning(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            normalize_rows([_row("2024-01-01", "1")])

    def test_warning_lists_a_limited_number_of_examples(self):
        rows = [_row("bad", "1")] * 12
        with pytest.warns(UserWarning, match=r"Dropped 12 invalid row\(s\).*and 2 more"):
            normalize_rows(rows)

    def test_first_line_offset(self):
        with pytest.warns(UserWarning):
            _, dropped = normalize_rows([_row("bad", "1")], first_line=10)
        assert dropped[0].line_number == 10


class TestBuildDataset:

    def test_three_row_example(self, example_rows):
        with pytest.warns(UserWarning):
            dataset = build_dataset(example_rows, source="data.csv")
        assert len(dataset) == 2
        assert dataset.source == "data.csv"
        assert len(dataset.dropped) == 1
        assert [r.event for r in dataset.events] == ["Launch"]

    def test_sorted_by_date_and_stable(self):
        rows = [
            _row("2024-01-03", "1", "a"),
            _row("2024-01-01", "2", "b"),
            _row("2024-01-03", "3", "c"),
            _row("2024-01-02", "4", "d"),
        ]
        dataset = build_dataset(rows)
        assert [r.event for r in dataset] == ["b", "d", "a", "c"]
        assert dataset.sorted_by_date

    def test_unsorted_keeps_csv_order(self):
        rows = [_row("2024-01-03", "1"), _row("2024-01-01", "2")]
        dataset = build_dataset(rows, sort=False)
        assert [r.value for r in dataset] == [1.0, 2.0]
        assert not dataset.sorted_by_date

    def test_date_outside_utc_range_drops_only_its_row(self):
        rows = [
            _row("0001-01-01T00:00:00+01:00", "1"),
            _row("2024-01-01", "2"),
        ]
        with pytest.warns(UserWarning, match="Dropped 1 invalid row"):
            dataset = build_dataset(rows)
        assert [r.value for r in dataset] == [2.0]
        assert dataset.dropped[0].reason == "is not a valid date"

    def test_all_invalid_gives_empty_dataset(self):
        with pytest.warns(UserWarning):
            dataset = build_dataset([_row("x", "1"), _row("2024-01-01", "y")])
        assert dataset.is_empty
        assert len(dataset.dropped) == 2

    def test_new_dataset_per_call(self):
        rows = [_row("2024-01-01", "1")]
        first = build_dataset(rows)
        second = build_dataset(rows)
        assert first == second
        assert first is not second
