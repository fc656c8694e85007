"""
Draw-command builder for the drawn time-series chart.

``render_chart`` turns a ``Dataset`` and its ``Scales`` into a flat list
of draw commands (gridlines, monotone line path, axes, event markers)
in plot-area pixel coordinates.  Nothing here touches a figure; the
commands are applied by ``surface.apply_commands``, which clears the
surface first, so rendering the same input twice draws the same thing.
"""

from typing import List, Sequence, Tuple

import numpy as np
from scipy.interpolate import PchipInterpolator

from .constants import (
    CHART_COLORS, LINE_WIDTH, GRID_DASH, CONNECTOR_DASH, CONNECTOR_WIDTH,
    TICK_COUNT, TICK_SIZE, TICK_PADDING, TICK_FONT_SIZE, DATE_TICK_FORMAT,
    CURVE_SAMPLES_PER_SEGMENT, EVENT_MARKER_RADIUS, EVENT_LABEL_OFFSET_EVEN,
    EVENT_LABEL_OFFSET_ODD, EVENT_CONNECTOR_GAP, EVENT_FONT_SIZE,
)
from .data_model import (
    Dataset, EventMarker, DrawCommand, LineCommand, PathCommand,
    CircleCommand, TextCommand,
    LAYER_GRID, LAYER_LINE, LAYER_X_AXIS, LAYER_Y_AXIS,
    LAYER_EVENT_MARKER, LAYER_EVENT_CONNECTOR, LAYER_EVENT_LABEL,
)
from .scales import Scales


Point = Tuple[float, float]


# ── Monotone line ────────────────────────────────────────────────────────

def _sample_run(xs: np.ndarray, ys: np.ndarray, samples: int) -> List[Point]:
    """Flatten one strictly-increasing run, excluding its first point."""
    curve = PchipInterpolator(xs, ys)
    points: List[Point] = []
    for i in range(len(xs) - 1):
        t = np.linspace(xs[i], xs[i + 1], samples + 1)[1:-1]
        points.extend(zip(t.tolist(), curve(t).tolist()))
        points.append((float(xs[i + 1]), float(ys[i + 1])))
    return points


def monotone_path(
    xs: Sequence[float],
    ys: Sequence[float],
    *,
    samples_per_segment: int = CURVE_SAMPLES_PER_SEGMENT,
) -> List[Point]:
    """Polyline approximating a monotone cubic through the points.

    Uses PCHIP interpolation, which never overshoots between two
    consecutive samples.  The curve needs strictly increasing x, so the
    points are split into such runs; runs are joined with straight
    segments where x repeats or goes back.  Every input point is on the
    returned polyline, in input order.
    """
    n = len(xs)
    if n == 0:
        return []
    x_arr = np.asarray(xs, dtype=float)
    y_arr = np.asarray(ys, dtype=float)

    points: List[Point] = [(float(x_arr[0]), float(y_arr[0]))]
    start = 0
    for end in range(1, n + 1):
        if end < n and x_arr[end] > x_arr[end - 1]:
            continue
        if end - start >= 2:
            points.extend(_sample_run(
                x_arr[start:end], y_arr[start:end], samples_per_segment,
            ))
        if end < n:
            points.append((float(x_arr[end]), float(y_arr[end])))
        start = end
    return points


# ── Chart body ───────────────────────────────────────────────────────────

def _gridlines(scales: Scales, width: float, tick_count: int) -> List[DrawCommand]:
    return [
        LineCommand(
            layer=LAYER_GRID, x1=0.0, y1=scales.y(v), x2=width, y2=scales.y(v),
            color=CHART_COLORS['grid'], width=1.0, dash=GRID_DASH,
        )
        for v in scales.y.ticks(tick_count)
    ]


def _x_axis(
    scales: Scales, width: float, height: float,
    tick_count: int, date_format: str,
) -> List[DrawCommand]:
    color = CHART_COLORS['axis']
    commands: List[DrawCommand] = [
        LineCommand(layer=LAYER_X_AXIS, x1=0.0, y1=height, x2=width, y2=height,
                    color=color),
    ]
    for tick in scales.x.ticks(tick_count):
        x = scales.x(tick)
        commands.append(LineCommand(
            layer=LAYER_X_AXIS, x1=x, y1=height, x2=x, y2=height + TICK_SIZE,
            color=color,
        ))
        commands.append(TextCommand(
            layer=LAYER_X_AXIS, x=x, y=height + TICK_SIZE + TICK_PADDING,
            text=tick.strftime(date_format), color=CHART_COLORS['tick_text'],
            font_size=TICK_FONT_SIZE, anchor="middle", baseline="top",
        ))
    return commands


def _y_axis(scales: Scales, height: float, tick_count: int) -> List[DrawCommand]:
    color = CHART_COLORS['axis']
    fmt = scales.y.tick_format(tick_count)
    commands: List[DrawCommand] = [
        LineCommand(layer=LAYER_Y_AXIS, x1=0.0, y1=0.0, x2=0.0, y2=height,
                    color=color),
    ]
    for value in scales.y.ticks(tick_count):
        y = scales.y(value)
        commands.append(LineCommand(
            layer=LAYER_Y_AXIS, x1=-TICK_SIZE, y1=y, x2=0.0, y2=y, color=color,
        ))
        commands.append(TextCommand(
            layer=LAYER_Y_AXIS, x=-(TICK_SIZE + TICK_PADDING), y=y,
            text=fmt(value), color=CHART_COLORS['tick_text'],
            font_size=TICK_FONT_SIZE, anchor="end", baseline="middle",
        ))
    return commands


def build_chart_commands(
    dataset: Dataset,
    scales: Scales,
    *,
    tick_count: int = TICK_COUNT,
    date_format: str = DATE_TICK_FORMAT,
) -> List[DrawCommand]:
    """Gridlines, line path and both axes for *dataset*.

    The plot size is read from the scales' ranges.
    """
    width = max(scales.x.range)
    height = max(scales.y.range)

    commands: List[DrawCommand] = _gridlines(scales, width, tick_count)

    xs = [scales.x(r.date) for r in dataset.records]
    ys = [scales.y(r.value) for r in dataset.records]
    commands.append(PathCommand(
        layer=LAYER_LINE,
        points=tuple(monotone_path(xs, ys)),
        color=CHART_COLORS['line'],
        width=LINE_WIDTH,
    ))

    commands.extend(_x_axis(scales, width, height, tick_count, date_format))
    commands.extend(_y_axis(scales, height, tick_count))
    return commands


# ── Event annotation ─────────────────────────────────────────────────────

def label_offset(index: int) -> float:
    """Vertical label offset for the *index*-th event (alternating)."""
    return EVENT_LABEL_OFFSET_EVEN if index % 2 == 0 else EVENT_LABEL_OFFSET_ODD


def connector_gap(index: int) -> float:
    """Gap between the connector end and the label baseline."""
    return EVENT_CONNECTOR_GAP if index % 2 == 0 else -EVENT_CONNECTOR_GAP


def event_markers(dataset: Dataset, scales: Scales) -> List[EventMarker]:
    """Placement of every event, indexed among event rows only."""
    markers = []
    for i, record in enumerate(dataset.events):
        x = scales.x(record.date)
        y = scales.y(record.value)
        offset = label_offset(i)
        markers.append(EventMarker(
            index=i, x=x, y=y, label=record.event, label_offset=offset,
            connector_end_y=y + offset + connector_gap(i),
        ))
    return markers


def build_event_commands(dataset: Dataset, scales: Scales) -> List[DrawCommand]:
    """Marker, dashed connector and bold label for each event."""
    color = CHART_COLORS['event']
    commands: List[DrawCommand] = []
    for m in event_markers(dataset, scales):
        commands.append(CircleCommand(
            layer=LAYER_EVENT_MARKER, cx=m.x, cy=m.y,
            r=EVENT_MARKER_RADIUS, fill=color,
        ))
        commands.append(LineCommand(
            layer=LAYER_EVENT_CONNECTOR, x1=m.x, y1=m.y, x2=m.x,
            y2=m.connector_end_y, color=color, width=CONNECTOR_WIDTH,
            dash=CONNECTOR_DASH,
        ))
        commands.append(TextCommand(
            layer=LAYER_EVENT_LABEL, x=m.x, y=m.label_y, text=m.label,
            color=color, font_size=EVENT_FONT_SIZE, anchor="middle",
            baseline="baseline", bold=True,
        ))
    return commands


def render_chart(
    dataset: Dataset,
    scales: Scales,
    *,
    tick_count: int = TICK_COUNT,
    date_format: str = DATE_TICK_FORMAT,
) -> List[DrawCommand]:
    """All draw commands for one chart, in drawing order."""
    commands = build_chart_commands(
        dataset, scales, tick_count=tick_count, date_format=date_format,
    )
    commands.extend(build_event_commands(dataset, scales))
    return commands
