"""Pytest configuration for the timeline_plotter test suite."""

from datetime import datetime

import matplotlib

# Headless backend for every test; must run before pyplot/figure imports
matplotlib.use("Agg")

import pytest  # noqa: E402

from timeline_plotter.data_model import Dataset, Record  # noqa: E402


@pytest.fixture
def example_rows():
    """Three raw rows, the second with an unparseable date."""
    return [
        {"date": "2024-01-01", "value": "10", "event": ""},
        {"date": "bad-date", "value": "5"},
        {"date": "2024-01-03", "value": "20", "event": "Launch"},
    ]


@pytest.fixture
def two_point_dataset():
    return Dataset(
        records=(
            Record(datetime(2024, 1, 1), 10.0, ""),
            Record(datetime(2024, 1, 3), 20.0, "Launch"),
        ),
        source="data.csv",
    )


@pytest.fixture
def event_dataset():
    """Six daily records, events on the 2nd, 3rd and 5th."""
    values = [12.0, 15.0, 11.0, 18.0, 22.0, 19.0]
    events = ["", "Launch", "Outage", "", "Release", ""]
    return Dataset(
        records=tuple(
            Record(datetime(2024, 3, day + 1), value, event)
            for day, (value, event) in enumerate(zip(values, events))
        ),
        source="/tmp/data.csv",
    )


@pytest.fixture
def write_csv(tmp_path):
    """Write *text* to ``data.csv`` under ``tmp_path`` and return the path."""

    def _write(text: str, name: str = "data.csv") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write
