"""Tests for PNG export."""

import os

import pytest
from matplotlib.figure import Figure

from timeline_plotter.chart_drawn import render_drawn_chart
from timeline_plotter.export import (
    export_all_charts, export_png, png_bytes, safe_filename,
)


@pytest.fixture
def fig(event_dataset):
    figure = Figure(figsize=(6, 3), dpi=100)
    render_drawn_chart(figure, event_dataset)
    return figure


def _is_png(path):
    with open(path, "rb") as fh:
        return fh.read(8) == b"\x89PNG\r\n\x1a\n"


def test_export_png_restores_figure_size(fig, tmp_path):
    path = str(tmp_path / "chart.png")
    export_png(fig, path, dpi=50, size_inches=(8, 4))
    assert _is_png(path)
    assert tuple(fig.get_size_inches()) == (6, 3)


def test_export_all_charts(fig, tmp_path):
    out_dir = str(tmp_path / "exports")
    paths = export_all_charts({"data drawn/chart": fig}, out_dir, dpi=50)
    assert paths == [os.path.join(out_dir, "data_drawn_chart.png")]
    assert _is_png(paths[0])


@pytest.mark.parametrize("name, expected", [
    ("data_drawn_chart", "data_drawn_chart"),
    ("my data", "my_data"),
    ("a/b:c", "a_b_c"),
    ("", "chart"),
])
def test_safe_filename(name, expected):
    assert safe_filename(name) == expected


def test_png_bytes(fig):
    data = png_bytes(fig, dpi=40)
    assert data.startswith(b"\x89PNG\r\n\x1a\n")
