"""
Runtime configuration for the Event Timeline Plotter.

``ChartConfig`` gathers the options a render or load needs.  Defaults
come from ``constants``; the GUI builds one config per session and
passes it down read-only.
"""

from dataclasses import dataclass, field
from typing import Dict

from .constants import (
    CANVAS_WIDTH, CANVAS_HEIGHT, CANVAS_DPI, MARGINS, TICK_COUNT,
    DATE_TICK_FORMAT,
)


@dataclass(frozen=True)
class ChartConfig:
    """Options shared by the loader and both chart renderers.

    Parameters
    ----------
    width, height : int
        Canvas size in logical pixels.
    margins : dict
        ``{'top', 'right', 'bottom', 'left'}`` margins around the plot area.
    tick_count : int
        Approximate number of ticks on each axis.
    date_format : str
        ``strftime`` pattern for the horizontal tick labels.
    sort_by_date : bool
        Sort records by date after normalisation (stable).
    dynamic_typing : bool
        Convert numeric-looking CSV cells to ``float`` while parsing.
    dpi : int
        Figure resolution; ``width / dpi`` gives the figure width in inches.
    """
    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    margins: Dict[str, int] = field(default_factory=lambda: dict(MARGINS))
    tick_count: int = TICK_COUNT
    date_format: str = DATE_TICK_FORMAT
    sort_by_date: bool = True
    dynamic_typing: bool = False
    dpi: int = CANVAS_DPI

    def __post_init__(self):
        missing = {'top', 'right', 'bottom', 'left'} - set(self.margins)
        if missing:
            raise ValueError(f"margins missing keys: {sorted(missing)}")
        if self.plot_width <= 0 or self.plot_height <= 0:
            raise ValueError(
                f"Margins {self.margins} leave no plot area on a "
                f"{self.width}x{self.height} canvas."
            )
        if self.tick_count < 2:
            raise ValueError(f"tick_count must be at least 2, got {self.tick_count}")
        if self.dpi <= 0:
            raise ValueError("dpi must be positive")

    @property
    def plot_width(self) -> int:
        return self.width - self.margins['left'] - self.margins['right']

    @property
    def plot_height(self) -> int:
        return self.height - self.margins['top'] - self.margins['bottom']

    @property
    def figsize(self):
        """Figure size in inches matching the canvas at ``dpi``."""
        return (self.width / self.dpi, self.height / self.dpi)
