"""
Chart tabs widget for the Event Timeline Plotter.

Each tab is bound to one renderer (``render_drawn_chart`` or
``render_axes_chart``) and hosts its FigureCanvas, the matplotlib
navigation toolbar and copy / export buttons.  Tabs re-render the whole
figure from the dataset on every update.
"""

import os
from typing import Callable, Dict, Optional

from PySide6.QtWidgets import (
    QTabWidget, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QFileDialog, QMessageBox,
)

import matplotlib
matplotlib.use('QtAgg')
from matplotlib.figure import Figure
from matplotlib.backends.backend_qtagg import (
    FigureCanvasQTAgg as FigureCanvas,
    NavigationToolbar2QT as NavigationToolbar,
)

from .config import ChartConfig
from .data_model import Dataset
from .export import export_png, copy_to_clipboard
from .chart_drawn import render_drawn_chart
from .chart_axes import render_axes_chart
from .theme import CHART_BUTTON

# render(fig, dataset, config=...) -> None
Renderer = Callable[..., None]


class _ChartTab(QWidget):
    """One renderer's canvas with toolbar, copy and export buttons."""

    def __init__(self, title: str, render: Renderer, config: ChartConfig,
                 parent=None):
        super().__init__(parent)
        self.title = title
        self._render = render
        self._config = config

        self._fig = Figure(figsize=config.figsize, dpi=config.dpi)
        self._canvas = FigureCanvas(self._fig)
        # Empty state until the first dataset arrives
        self._render(self._fig, None, config=self._config)

        controls = QHBoxLayout()
        controls.setSpacing(4)
        controls.addWidget(NavigationToolbar(self._canvas, self))
        controls.addStretch()
        controls.addWidget(self._make_button("Copy to Clipboard", self._on_copy))
        controls.addWidget(self._make_button("Export PNG...", self._on_export))

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)
        layout.addLayout(controls)
        layout.addWidget(self._canvas, 1)

    def _make_button(self, text: str, slot) -> QPushButton:
        button = QPushButton(text)
        button.setObjectName(CHART_BUTTON)
        button.clicked.connect(lambda *_: slot())
        return button

    @property
    def fig(self) -> Figure:
        return self._fig

    def show_dataset(self, dataset: Optional[Dataset]) -> None:
        """Re-render the tab's figure from *dataset* and repaint."""
        self._render(self._fig, dataset, config=self._config)
        self._canvas.draw_idle()

    def render_offscreen(self, dataset: Dataset) -> Figure:
        """Render *dataset* on a new figure at the canvas size."""
        fig = Figure(figsize=self._config.figsize, dpi=self._config.dpi)
        self._render(fig, dataset, config=self._config)
        return fig

    def _status(self, message: str) -> None:
        self.window().statusBar().showMessage(message, 3000)

    def _on_copy(self):
        if copy_to_clipboard(self._fig):
            self._status(f"{self.title} copied to clipboard")
        else:
            QMessageBox.warning(self, "Copy Failed",
                                "Could not copy chart to clipboard.")

    def _on_export(self):
        path, _ = QFileDialog.getSaveFileName(
            self, f"Export {self.title} as PNG",
            "", "PNG Files (*.png);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.png'):
            path += '.png'
        try:
            export_png(self._fig, path, size_inches=self._config.figsize)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(self, "Export Error", f"Failed to export: {exc}")
            return
        self._status(f"Exported to {os.path.basename(path)}")


class ChartTabsWidget(QTabWidget):
    """Tabbed container for the drawn chart and the axes chart."""

    def __init__(self, config: ChartConfig = None, parent=None):
        super().__init__(parent)
        config = config or ChartConfig()
        self._tabs = {
            "drawn_chart": _ChartTab("Drawn Chart", render_drawn_chart, config),
            "axes_chart": _ChartTab("Axes Chart", render_axes_chart, config),
        }
        for tab in self._tabs.values():
            self.addTab(tab, tab.title)

    def current_figure(self) -> Optional[Figure]:
        tab = self.currentWidget()
        return tab.fig if tab is not None else None

    def update_all_charts(self, dataset: Optional[Dataset]) -> None:
        """Re-render every tab from *dataset*."""
        for tab in self._tabs.values():
            tab.show_dataset(dataset)

    def get_all_figures(self, dataset: Dataset) -> Dict[str, Figure]:
        """Fresh canvas-sized figures of every chart for batch export.

        Keys are file name stems: ``<source stem>_<chart>``.
        """
        stem = os.path.splitext(os.path.basename(dataset.source))[0] or "data"
        return {
            f"{stem}_{key}": tab.render_offscreen(dataset)
            for key, tab in self._tabs.items()
        }
