"""
Scales for the Event Timeline Plotter.

A scale maps a data-domain value to a pixel coordinate inside the plot
area.  ``TimeScale`` is linear in time (matplotlib day numbers) and
``LinearScale`` is linear in value.  Tick generation is delegated to
matplotlib's ``AutoDateLocator`` and ``MaxNLocator``.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import List, Tuple

import matplotlib.dates as mdates
from matplotlib.ticker import MaxNLocator

from .constants import Y_DOMAIN_PAD_LOW, Y_DOMAIN_PAD_HIGH, TICK_COUNT
from .data_model import Dataset

# Relative slack when deciding whether a tick lies inside the domain
_DOMAIN_EPS = 1e-9

# Tick steps allowed on the value axis (1, 2, 5 × 10^n)
_LINEAR_TICK_STEPS = [1, 2, 5, 10]


def _interpolate(t: float, d0: float, d1: float, r0: float, r1: float) -> float:
    """Linear map of *t* from ``[d0, d1]`` onto ``[r0, r1]``.

    A degenerate domain maps everything to the middle of the range.
    """
    if d1 == d0:
        return (r0 + r1) / 2.0
    return r0 + (t - d0) / (d1 - d0) * (r1 - r0)


def _inside(values, lo: float, hi: float) -> list:
    eps = _DOMAIN_EPS * max(abs(hi - lo), 1.0)
    return [v for v in values if lo - eps <= v <= hi + eps]


class LinearScale:
    """Linear value-to-pixel mapping.

    Parameters
    ----------
    domain : (float, float)
        Data interval.  May be "inverted" (``domain[0] > domain[1]``).
    range : (float, float)
        Pixel interval, e.g. ``(plot_height, 0)`` for an upward axis.
    """

    def __init__(self, domain: Tuple[float, float], range: Tuple[float, float]):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range[0]), float(range[1]))

    def __call__(self, value: float) -> float:
        return _interpolate(float(value), *self.domain, *self.range)

    def __repr__(self):
        return f"LinearScale(domain={self.domain}, range={self.range})"

    def invert(self, pixel: float) -> float:
        return _interpolate(float(pixel), *self.range, *self.domain)

    def ticks(self, count: int = TICK_COUNT) -> List[float]:
        """About *count* round tick values inside the domain, ascending."""
        lo, hi = sorted(self.domain)
        if lo == hi:
            return [lo]
        locator = MaxNLocator(nbins=count, steps=_LINEAR_TICK_STEPS)
        values = [float(v) for v in locator.tick_values(lo, hi)]
        return _inside(values, lo, hi)

    def tick_step(self, count: int = TICK_COUNT) -> float:
        ticks = self.ticks(count)
        if len(ticks) < 2:
            return 0.0
        return ticks[1] - ticks[0]

    def tick_format(self, count: int = TICK_COUNT):
        """Return a formatter for this scale's ticks.

        Fixed-point with the precision implied by the tick step and a
        thousands separator: a step of 0.5 gives one decimal, a step of
        20 gives none.
        """
        step = self.tick_step(count)
        if step > 0:
            decimals = max(0, -math.floor(math.log10(step)))
        else:
            decimals = 0

        def _format(value: float) -> str:
            text = f"{value:,.{decimals}f}"
            if text.startswith('-'):
                if float(text[1:].replace(',', '')) == 0.0:
                    text = text[1:]
                else:
                    text = '\u2212' + text[1:]
            return text

        return _format


class TimeScale:
    """Linear-in-time date-to-pixel mapping.

    Parameters
    ----------
    domain : (datetime, datetime)
        Earliest and latest date.
    range : (float, float)
        Pixel interval, e.g. ``(0, plot_width)``.
    """

    def __init__(self, domain: Tuple[datetime, datetime], range: Tuple[float, float]):
        self.domain = (domain[0], domain[1])
        self.range = (float(range[0]), float(range[1]))
        self._num_domain = (
            float(mdates.date2num(domain[0])),
            float(mdates.date2num(domain[1])),
        )

    def __call__(self, when: datetime) -> float:
        t = float(mdates.date2num(when))
        return _interpolate(t, *self._num_domain, *self.range)

    def __repr__(self):
        return f"TimeScale(domain={self.domain}, range={self.range})"

    def invert(self, pixel: float) -> datetime:
        t = _interpolate(float(pixel), *self.range, *self._num_domain)
        return mdates.num2date(t).replace(tzinfo=None)

    def ticks(self, count: int = TICK_COUNT) -> List[datetime]:
        """About *count* calendar-aligned ticks inside the domain."""
        lo, hi = sorted(self._num_domain)
        if lo == hi:
            return [min(self.domain)]
        locator = mdates.AutoDateLocator(
            minticks=max(2, count // 2), maxticks=count + 1,
        )
        values = locator.tick_values(mdates.num2date(lo), mdates.num2date(hi))
        inside = _inside([float(v) for v in values], lo, hi)
        return [mdates.num2date(v).replace(tzinfo=None) for v in inside]


@dataclass(frozen=True)
class Scales:
    """Horizontal (time) and vertical (value) scales of one render."""
    x: TimeScale
    y: LinearScale


def padded_value_domain(vmin: float, vmax: float) -> Tuple[float, float]:
    """Apply the fixed 0.9 / 1.1 padding to a value extent.

    The factors scale the raw extremes, so for negative values the lower
    bound moves up and the upper bound moves down.  This asymmetry is
    intentional and kept as is.
    """
    return vmin * Y_DOMAIN_PAD_LOW, vmax * Y_DOMAIN_PAD_HIGH


def build_scales(dataset: Dataset, plot_width: float, plot_height: float) -> Scales:
    """Derive both scales from *dataset*.

    Raises ``ValueError`` on an empty dataset; callers only render when
    data is present.
    """
    if dataset.is_empty:
        raise ValueError("Cannot build scales for an empty dataset.")
    x = TimeScale(dataset.date_extent(), (0.0, float(plot_width)))
    y = LinearScale(
        padded_value_domain(*dataset.value_extent()),
        (float(plot_height), 0.0),
    )
    return Scales(x=x, y=y)
