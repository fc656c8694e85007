"""Tests for the matplotlib-axes rendition of the chart."""

from datetime import datetime, timedelta

import matplotlib.dates as mdates
import pytest
from matplotlib.figure import Figure

from timeline_plotter.chart_axes import render_axes_chart
from timeline_plotter.config import ChartConfig
from timeline_plotter.data_model import Dataset, Record


@pytest.fixture
def fig():
    return Figure(figsize=(8, 4), dpi=100)


def _labels(ax):
    return [t.get_text() for t in ax.texts if t.get_text()]


def test_renders_line_and_event_labels(fig, event_dataset):
    render_axes_chart(fig, event_dataset)
    (ax,) = fig.get_axes()
    assert _labels(ax) == ["Launch", "Outage", "Release"]
    # Smoothed line plus one marker series
    assert len(ax.lines) == 2


def test_value_limits_are_padded(fig, two_point_dataset):
    render_axes_chart(fig, two_point_dataset)
    (ax,) = fig.get_axes()
    assert ax.get_ylim() == pytest.approx((9.0, 22.0))


def test_negative_padding_keeps_ascending_limits(fig):
    dataset = Dataset(records=tuple(_records([(-10.0, ""), (-2.0, "")])))
    render_axes_chart(fig, dataset)
    (ax,) = fig.get_axes()
    lo, hi = ax.get_ylim()
    assert lo < hi


def test_date_axis_format(fig, event_dataset):
    render_axes_chart(fig, event_dataset, config=ChartConfig(date_format="%Y-%m-%d"))
    (ax,) = fig.get_axes()
    formatter = ax.xaxis.get_major_formatter()
    assert isinstance(formatter, mdates.DateFormatter)
    assert formatter.fmt == "%Y-%m-%d"


def test_title_defaults_to_file_name(fig, event_dataset):
    render_axes_chart(fig, event_dataset)
    assert fig.get_axes()[0].get_title() == "data.csv"
    render_axes_chart(fig, event_dataset, title="Sales")
    assert fig.get_axes()[0].get_title() == "Sales"


def test_rendering_twice_replaces_axes(fig, event_dataset):
    render_axes_chart(fig, event_dataset)
    render_axes_chart(fig, event_dataset)
    (ax,) = fig.get_axes()
    assert len(_labels(ax)) == 3


def test_single_record(fig):
    dataset = Dataset(records=tuple(_records([(5.0, "Only")])))
    render_axes_chart(fig, dataset)
    (ax,) = fig.get_axes()
    lo, hi = ax.get_xlim()
    assert hi - lo == pytest.approx(2.0)
    assert _labels(ax) == ["Only"]


@pytest.mark.parametrize("dataset", [None, Dataset(records=())])
def test_no_data_message(fig, dataset):
    render_axes_chart(fig, dataset)
    (ax,) = fig.get_axes()
    assert _labels(ax) == ["No valid data points"]


def _records(points):
    start = datetime(2024, 1, 1)
    return [
        Record(start + timedelta(days=i), value, event)
        for i, (value, event) in enumerate(points)
    ]
