"""
PNG export for the Event Timeline Plotter.

Charts are exported at their canvas size (``ChartConfig.figsize``)
whatever the on-screen canvas currently measures; the figure's own size
is put back afterwards.
"""

import io
import os
import re
from contextlib import contextmanager
from typing import Dict, List, Optional, Tuple

from matplotlib.figure import Figure

from .constants import EXPORT_DPI, CLIPBOARD_DPI

_UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9_-]+')


@contextmanager
def _figure_size(fig: Figure, size_inches: Optional[Tuple[float, float]]):
    """Temporarily resize *fig*; no-op when *size_inches* is ``None``."""
    original = tuple(fig.get_size_inches())
    if size_inches is not None:
        fig.set_size_inches(*size_inches, forward=False)
    try:
        yield fig
    finally:
        fig.set_size_inches(*original, forward=False)


def _save(fig: Figure, target, dpi: int) -> None:
    fig.savefig(
        target,
        format='png',
        dpi=dpi,
        bbox_inches='tight',
        pad_inches=0.1,
        facecolor=fig.get_facecolor(),
        edgecolor='none',
    )


def export_png(
    fig: Figure,
    filepath: str,
    *,
    dpi: int = EXPORT_DPI,
    size_inches: Optional[Tuple[float, float]] = None,
) -> None:
    """Write *fig* to *filepath* as PNG.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
    filepath : str
        Output file path (should end with ``.png``).
    dpi : int
        Export resolution.
    size_inches : (float, float), optional
        Size to render at, typically ``ChartConfig().figsize``.
    """
    with _figure_size(fig, size_inches):
        _save(fig, filepath, dpi)


def png_bytes(fig: Figure, dpi: int = CLIPBOARD_DPI) -> bytes:
    """Encode *fig* as PNG in memory."""
    buf = io.BytesIO()
    _save(fig, buf, dpi)
    return buf.getvalue()


def copy_to_clipboard(fig: Figure, dpi: int = CLIPBOARD_DPI) -> bool:
    """Put *fig* on the system clipboard as an image.

    Returns ``False`` when Qt or its clipboard is unavailable.
    """
    try:
        from PySide6.QtGui import QImage
        from PySide6.QtWidgets import QApplication
    except ImportError:
        return False

    clipboard = QApplication.clipboard() if QApplication.instance() else None
    if clipboard is None:
        return False
    img = QImage()
    img.loadFromData(png_bytes(fig, dpi))
    clipboard.setImage(img)
    return True


def safe_filename(name: str) -> str:
    """Collapse runs of characters other than letters, digits, ``-`` and
    ``_`` into one underscore."""
    return _UNSAFE_CHARS.sub('_', name.strip()).strip('_') or "chart"


def export_all_charts(
    figures: Dict[str, Figure],
    output_dir: str,
    *,
    dpi: int = EXPORT_DPI,
    size_inches: Optional[Tuple[float, float]] = None,
) -> List[str]:
    """Write each ``{stem: Figure}`` entry to ``<output_dir>/<stem>.png``.

    The directory is created if needed.  Returns the written paths in
    the order of *figures*.
    """
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for stem, fig in figures.items():
        path = os.path.join(output_dir, f"{safe_filename(stem)}.png")
        export_png(fig, path, dpi=dpi, size_inches=size_inches)
        paths.append(path)
    return paths
