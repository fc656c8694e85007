"""
Data model for the Event Timeline Plotter.

Immutable dataclasses representing one loaded ``data.csv``.  The
dataset is built once per load by ``normalizer`` and never mutated:
a new load produces a new ``Dataset`` that replaces the old one.

Rows that fail validation are not kept as records; their
``RowValidationError`` diagnostics are carried on ``Dataset.dropped``
so the GUI can report how many rows were excluded.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Tuple, Union

from .errors import RowValidationError

# One parsed CSV line before validation: column name -> cell.
# Cells are ``str`` (``float`` in dynamic-typing mode) or ``None`` when
# the line was shorter than the header.
RawRow = Dict[str, Union[str, float, None]]


@dataclass(frozen=True)
class Record:
    """A validated data point.

    Parameters
    ----------
    date : datetime
        Naive timestamp.  Timezone-aware inputs are converted to UTC.
    value : float
        Finite measurement value.
    event : str
        Trimmed event label, ``""`` when the row carries no event.
    """
    date: datetime
    value: float
    event: str = ""

    @property
    def has_event(self) -> bool:
        return self.event != ""


@dataclass(frozen=True)
class Dataset:
    """Ordered records from one load.

    Parameters
    ----------
    records : tuple of Record
        Surviving rows, ascending by date when ``sorted_by_date``,
        otherwise in CSV order.
    source : str
        Path or URL the data was loaded from.
    dropped : tuple of RowValidationError
        One diagnostic per excluded row, in CSV order.
    sorted_by_date : bool
        Whether ``records`` were sorted after normalisation.
    """
    records: Tuple[Record, ...]
    source: str = ""
    dropped: Tuple[RowValidationError, ...] = field(default=())
    sorted_by_date: bool = True

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def events(self) -> Tuple[Record, ...]:
        """Event-bearing records in dataset order."""
        return tuple(r for r in self.records if r.has_event)

    def date_extent(self) -> Tuple[datetime, datetime]:
        if not self.records:
            raise ValueError("date_extent() of an empty dataset")
        dates = [r.date for r in self.records]
        return min(dates), max(dates)

    def value_extent(self) -> Tuple[float, float]:
        if not self.records:
            raise ValueError("value_extent() of an empty dataset")
        values = [r.value for r in self.records]
        return min(values), max(values)


@dataclass(frozen=True)
class EventMarker:
    """Placement of one event annotation, in plot-area pixels.

    ``index`` counts event-bearing records only.  Even indices put the
    label above the point, odd indices below it.
    """
    index: int
    x: float
    y: float
    label: str
    label_offset: float
    connector_end_y: float

    @property
    def label_y(self) -> float:
        return self.y + self.label_offset


# ── Draw commands ────────────────────────────────────────────────────────
# Coordinates are plot-area pixels: origin at the top-left corner of the
# plot area, y growing downward.

@dataclass(frozen=True)
class LineCommand:
    layer: str
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float = 1.0
    dash: Optional[Tuple[float, float]] = None


@dataclass(frozen=True)
class PathCommand:
    layer: str
    points: Tuple[Tuple[float, float], ...]
    color: str
    width: float = 1.0
    fill: Optional[str] = None


@dataclass(frozen=True)
class CircleCommand:
    layer: str
    cx: float
    cy: float
    r: float
    fill: str


@dataclass(frozen=True)
class TextCommand:
    layer: str
    x: float
    y: float
    text: str
    color: str
    font_size: float
    anchor: str = "middle"       # "start", "middle", "end"
    baseline: str = "baseline"   # "top", "middle", "baseline"
    bold: bool = False


DrawCommand = Union[LineCommand, PathCommand, CircleCommand, TextCommand]

# Layer tags, in drawing order
LAYER_GRID = "grid"
LAYER_LINE = "line"
LAYER_X_AXIS = "x-axis"
LAYER_Y_AXIS = "y-axis"
LAYER_EVENT_MARKER = "event-marker"
LAYER_EVENT_CONNECTOR = "event-connector"
LAYER_EVENT_LABEL = "event-label"
