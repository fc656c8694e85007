"""
Axes-based time-series chart for the Event Timeline Plotter.

The same dataset drawn through matplotlib's own charting layer: a date
x-axis with ``AutoDateLocator`` / ``DateFormatter``, a padded value
axis, a smoothed line and ``annotate`` labels for the events.  Label
placement follows the drawn chart (alternating above / below).
"""

import os
from typing import Optional

import matplotlib.dates as mdates
from matplotlib.figure import Figure
from matplotlib.ticker import MaxNLocator

from .chart_commands import connector_gap, label_offset, monotone_path
from .config import ChartConfig
from .constants import (
    CHART_COLORS, LINE_WIDTH, GRID_DASH, CONNECTOR_DASH, CONNECTOR_WIDTH,
    EVENT_MARKER_RADIUS, EVENT_FONT_SIZE, TICK_FONT_SIZE,
)
from .data_model import Dataset
from .scales import padded_value_domain
from .surface import px_to_pt


def render_axes_chart(
    fig: Figure,
    dataset: Optional[Dataset],
    *,
    config: Optional[ChartConfig] = None,
    title: str = "",
) -> None:
    """Render the axes-based chart on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    dataset : Dataset or None
        Data to plot.  ``None`` or empty shows a "No valid data points"
        message.
    config : ChartConfig, optional
        Tick count, date format and DPI used for size conversions.
    title : str
        Axes title; defaults to the dataset's file name.
    """
    fig.clf()
    config = config or ChartConfig()
    fig.set_facecolor(CHART_COLORS['background'])
    ax = fig.add_subplot(111)

    if dataset is None or dataset.is_empty:
        ax.text(0.5, 0.5, 'No valid data points',
                transform=ax.transAxes, ha='center', va='center',
                color=CHART_COLORS['no_data_text'])
        return

    dpi = config.dpi
    x_nums = [float(mdates.date2num(r.date)) for r in dataset.records]
    values = [r.value for r in dataset.records]

    # ── Line ─────────────────────────────────────────────────────────
    points = monotone_path(x_nums, values)
    ax.plot(
        [p[0] for p in points], [p[1] for p in points],
        color=CHART_COLORS['line'], linewidth=px_to_pt(LINE_WIDTH, dpi),
        solid_joinstyle='round', zorder=3,
    )
    ax.xaxis_date()

    # ── Limits ───────────────────────────────────────────────────────
    x_lo, x_hi = min(x_nums), max(x_nums)
    if x_lo == x_hi:
        x_lo, x_hi = x_lo - 1.0, x_hi + 1.0
    ax.set_xlim(x_lo, x_hi)

    y_lo, y_hi = sorted(padded_value_domain(*dataset.value_extent()))
    if y_lo == y_hi:
        y_lo, y_hi = y_lo - 1.0, y_hi + 1.0
    ax.set_ylim(y_lo, y_hi)

    # ── Ticks and grid ───────────────────────────────────────────────
    tick_pt = px_to_pt(TICK_FONT_SIZE, dpi)
    ax.xaxis.set_major_locator(mdates.AutoDateLocator(
        minticks=max(2, config.tick_count // 2), maxticks=config.tick_count + 1,
    ))
    ax.xaxis.set_major_formatter(mdates.DateFormatter(config.date_format))
    ax.yaxis.set_major_locator(
        MaxNLocator(nbins=config.tick_count, steps=[1, 2, 5, 10])
    )
    ax.tick_params(axis='both', labelsize=tick_pt)
    ax.yaxis.grid(
        True, color=CHART_COLORS['grid'], linestyle=(0, GRID_DASH),
        linewidth=px_to_pt(1, dpi),
    )
    ax.set_axisbelow(True)

    # ── Events ───────────────────────────────────────────────────────
    color = CHART_COLORS['event']
    events = dataset.events
    if events:
        ax.plot(
            [mdates.date2num(r.date) for r in events],
            [r.value for r in events],
            linestyle='none', marker='o', color=color,
            markersize=px_to_pt(2 * EVENT_MARKER_RADIUS, dpi), zorder=4,
        )
    for i, record in enumerate(events):
        offset = label_offset(i)
        connector = offset + connector_gap(i)
        x = mdates.date2num(record.date)
        # Offsets are in screen pixels; matplotlib's y grows upward.
        ax.annotate(
            '', xy=(x, record.value),
            xytext=(0, -connector), textcoords='offset pixels',
            arrowprops=dict(
                arrowstyle='-', color=color, linestyle=(0, CONNECTOR_DASH),
                linewidth=px_to_pt(CONNECTOR_WIDTH, dpi),
                shrinkA=0, shrinkB=0,
            ),
            zorder=4,
        )
        ax.annotate(
            record.event, xy=(x, record.value),
            xytext=(0, -offset), textcoords='offset pixels',
            ha='center', va='baseline', color=color, fontweight='bold',
            fontsize=px_to_pt(EVENT_FONT_SIZE, dpi), zorder=5,
            annotation_clip=False,
        )

    # ── Labels ───────────────────────────────────────────────────────
    if not title:
        title = os.path.basename(dataset.source) or "Time Series"
    ax.set_title(title, fontsize=10, fontweight='bold',
                 color=CHART_COLORS['title'])
    ax.set_xlabel("Date", fontsize=8)
    ax.set_ylabel("Value", fontsize=8)

    fig.tight_layout(pad=1.5)
