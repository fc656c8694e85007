"""
Drawn time-series chart for the Event Timeline Plotter.

Builds scales from the dataset, turns them into draw commands
(gridlines, monotone line, axes, staggered event labels) and applies
the commands onto the figure.
"""

from typing import List, Optional

from matplotlib.figure import Figure

from .chart_commands import render_chart
from .config import ChartConfig
from .constants import CHART_COLORS, LOADING_TEXT
from .data_model import Dataset, DrawCommand
from .scales import build_scales
from .surface import apply_commands, prepare_canvas


def drawn_chart_commands(dataset: Dataset, config: ChartConfig) -> List[DrawCommand]:
    """Scales and draw commands for a non-empty *dataset*."""
    scales = build_scales(dataset, config.plot_width, config.plot_height)
    return render_chart(
        dataset, scales,
        tick_count=config.tick_count, date_format=config.date_format,
    )


def render_drawn_chart(
    fig: Figure,
    dataset: Optional[Dataset],
    *,
    config: Optional[ChartConfig] = None,
) -> None:
    """Render the drawn chart on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    dataset : Dataset or None
        Data to plot.  ``None`` or an empty dataset shows the loading
        placeholder instead of a chart.
    config : ChartConfig, optional
        Canvas geometry and tick settings.
    """
    config = config or ChartConfig()

    if dataset is None or dataset.is_empty:
        ax = prepare_canvas(fig, config)
        ax.text(config.width / 2, config.height / 2, LOADING_TEXT,
                ha='center', va='center', color=CHART_COLORS['no_data_text'])
        return

    apply_commands(fig, drawn_chart_commands(dataset, config), config=config)
