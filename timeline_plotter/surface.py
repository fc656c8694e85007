"""
Matplotlib drawing surface for the drawn chart.

``apply_commands`` replays draw commands onto a ``Figure`` whose single
axes is laid out in canvas pixels (800 x 400 by default, y growing
downward).  The figure is cleared first, so applying the same commands
again leaves exactly the same artists behind.

Every artist gets its command's layer as ``gid``; ``summarize_artists``
counts them per layer.
"""

from collections import Counter
from typing import Dict, Iterable, Optional

from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Rectangle

from .config import ChartConfig
from .constants import CHART_COLORS
from .data_model import (
    DrawCommand, LineCommand, PathCommand, CircleCommand, TextCommand,
)

_H_ALIGN = {'start': 'left', 'middle': 'center', 'end': 'right'}
_V_ALIGN = {'top': 'top', 'middle': 'center', 'baseline': 'baseline'}

# gid of the canvas border, excluded from summaries
_BORDER_GID = "canvas-border"


def prepare_canvas(fig: Figure, config: ChartConfig) -> Axes:
    """Clear *fig* and return a pixel-space axes covering the canvas."""
    fig.clf()
    fig.set_facecolor(CHART_COLORS['background'])
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, config.width)
    ax.set_ylim(config.height, 0)
    ax.set_aspect('equal', adjustable='box')
    ax.set_axis_off()
    ax.add_patch(Rectangle(
        (0, 0), config.width, config.height,
        facecolor=CHART_COLORS['background'],
        edgecolor=CHART_COLORS['border'], linewidth=1.0,
        zorder=0, gid=_BORDER_GID,
    ))
    return ax


def px_to_pt(px: float, dpi: int) -> float:
    return px * 72.0 / dpi


def _draw(ax: Axes, cmd: DrawCommand, dx: float, dy: float, dpi: int) -> None:
    if isinstance(cmd, LineCommand):
        linestyle = (0, cmd.dash) if cmd.dash else '-'
        ax.plot(
            [cmd.x1 + dx, cmd.x2 + dx], [cmd.y1 + dy, cmd.y2 + dy],
            color=cmd.color, linewidth=px_to_pt(cmd.width, dpi),
            linestyle=linestyle, clip_on=False, gid=cmd.layer, zorder=2,
        )
    elif isinstance(cmd, PathCommand):
        xs = [x + dx for x, _ in cmd.points]
        ys = [y + dy for _, y in cmd.points]
        ax.plot(
            xs, ys, color=cmd.color, linewidth=px_to_pt(cmd.width, dpi),
            solid_joinstyle='round', solid_capstyle='round',
            clip_on=False, gid=cmd.layer, zorder=3,
        )
    elif isinstance(cmd, CircleCommand):
        ax.add_patch(Circle(
            (cmd.cx + dx, cmd.cy + dy), cmd.r,
            facecolor=cmd.fill, edgecolor='none',
            clip_on=False, gid=cmd.layer, zorder=4,
        ))
    elif isinstance(cmd, TextCommand):
        ax.text(
            cmd.x + dx, cmd.y + dy, cmd.text,
            color=cmd.color, fontsize=px_to_pt(cmd.font_size, dpi),
            fontweight='bold' if cmd.bold else 'normal',
            ha=_H_ALIGN[cmd.anchor], va=_V_ALIGN[cmd.baseline],
            clip_on=False, gid=cmd.layer, zorder=5,
        )
    else:
        raise TypeError(f"Unknown draw command: {cmd!r}")


def apply_commands(
    fig: Figure,
    commands: Iterable[DrawCommand],
    *,
    config: Optional[ChartConfig] = None,
) -> Axes:
    """Clear *fig* and draw *commands* on it.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Surface to draw on (will be cleared).
    commands : iterable of draw commands
        Plot-area coordinates; translated by the top/left margins.
    config : ChartConfig, optional
        Canvas geometry; defaults to ``ChartConfig()``.

    Returns
    -------
    matplotlib.axes.Axes
        The pixel-space axes holding the drawn artists.
    """
    config = config or ChartConfig()
    ax = prepare_canvas(fig, config)
    dx = config.margins['left']
    dy = config.margins['top']
    for cmd in commands:
        _draw(ax, cmd, dx, dy, config.dpi)
    return ax


def summarize_artists(fig: Figure) -> Dict[str, int]:
    """Count drawn artists per layer across all axes of *fig*."""
    counts: Counter = Counter()
    for ax in fig.get_axes():
        for artist in list(ax.lines) + list(ax.patches) + list(ax.texts):
            gid = artist.get_gid()
            if gid and gid != _BORDER_GID:
                counts[gid] += 1
    return dict(counts)
