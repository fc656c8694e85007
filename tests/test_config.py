"""Tests for chart configuration."""

import pytest

from timeline_plotter.config import ChartConfig


def test_defaults_match_canvas_layout():
    config = ChartConfig()
    assert (config.width, config.height) == (800, 400)
    assert config.margins == {"top": 50, "right": 60, "bottom": 50, "left": 60}
    assert config.plot_width == 680
    assert config.plot_height == 300
    assert config.figsize == (8.0, 4.0)
    assert config.sort_by_date
    assert not config.dynamic_typing


def test_default_margins_are_not_shared():
    a, b = ChartConfig(), ChartConfig()
    assert a.margins == b.margins
    assert a.margins is not b.margins


@pytest.mark.parametrize("kwargs", [
    {"margins": {"top": 10, "left": 10}},
    {"width": 100},
    {"height": 80},
    {"tick_count": 1},
    {"dpi": 0},
])
def test_invalid_config_raises(kwargs):
    with pytest.raises(ValueError):
        ChartConfig(**kwargs)


def test_config_is_frozen():
    with pytest.raises(AttributeError):
        ChartConfig().width = 10
