"""
Main window for the Event Timeline Plotter.

A ``QStackedWidget`` switches between the "Loading data..." label and
the chart tabs.  Each opened file or URL starts a new ``ChartSession``;
its single load runs on a ``_LoadWorkerThread`` and the outcome is
handed back to that session on the GUI thread.  Opening another source
closes the previous session, so a late result from it is dropped.
"""

import os
import tempfile

from PySide6.QtWidgets import (
    QMainWindow, QStackedWidget, QLabel,
    QFileDialog, QMessageBox, QInputDialog,
)
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtCore import Qt, QThread, Signal

from . import APP_NAME, APP_VERSION
from .config import ChartConfig
from .constants import LOADING_TEXT
from .example_data import generate_example_csv
from .export import export_all_charts, export_png
from .gui_chart_tabs import ChartTabsWidget
from .session import ChartSession, ChartState, load_dataset
from .theme import LOADING_LABEL

_PNG_FILTER = "PNG Files (*.png);;All Files (*)"
_CSV_FILTER = "CSV Files (*.csv);;All Files (*)"


class _LoadWorkerThread(QThread):
    """
    Background worker that performs one session's load.

    Signals
    -------
    finished_result : Signal(object)
        Emits the loaded :class:`Dataset`.
    error_occurred : Signal(object)
        Emits the ``LoadError`` / ``ParseError`` that aborted the load.
    """

    finished_result = Signal(object)
    error_occurred = Signal(object)

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session

    def run(self):  # noqa: D401 - Qt override
        try:
            dataset = load_dataset(self.session.locator, config=self.session.config)
        except (OSError, ValueError) as exc:
            self.error_occurred.emit(exc)
        else:
            self.finished_result.emit(dataset)


class PlotterMainWindow(QMainWindow):
    """Main window for the Event Timeline Plotter."""

    def __init__(self, locator: str = "", config: ChartConfig = None):
        super().__init__()
        self._config = config or ChartConfig()
        self._session = None
        self._workers = set()

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(900, 560)

        self._lbl_loading = QLabel(LOADING_TEXT)
        self._lbl_loading.setObjectName(LOADING_LABEL)
        self._lbl_loading.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._chart_tabs = ChartTabsWidget(self._config)

        self._stack = QStackedWidget()
        self._stack.addWidget(self._lbl_loading)
        self._stack.addWidget(self._chart_tabs)
        self._stack.setContentsMargins(4, 4, 4, 4)
        self.setCentralWidget(self._stack)

        self._build_menus()

        if locator:
            self.open_locator(locator)
        else:
            self.statusBar().showMessage("Ready. Open a CSV file to begin.")

    # ── Menus ────────────────────────────────────────────────────────

    def _build_menus(self):
        # (menu, [(label, slot, shortcut) or None for a separator])
        layout = [
            ("File", [
                ("Open CSV...", self._open_file, QKeySequence.StandardKey.Open),
                ("Open URL...", self._open_url, "Ctrl+L"),
                None,
                ("Export Current Chart...", self._export_current, "Ctrl+E"),
                ("Export All Charts...", self._export_all, "Ctrl+Shift+E"),
                None,
                ("Exit", self.close, QKeySequence.StandardKey.Quit),
            ]),
            ("Examples", [
                ("Load Example Dataset", self._load_example, None),
            ]),
            ("Help", [
                ("About", self._show_about, None),
            ]),
        ]
        for title, entries in layout:
            menu = self.menuBar().addMenu(title)
            for entry in entries:
                if entry is None:
                    menu.addSeparator()
                    continue
                label, slot, shortcut = entry
                action = QAction(label, self)
                if shortcut is not None:
                    action.setShortcut(shortcut)
                action.triggered.connect(lambda *_, s=slot: s())
                menu.addAction(action)

    # ── Sessions ─────────────────────────────────────────────────────

    def open_locator(self, locator: str) -> None:
        """Start a new session for *locator*, replacing the current one."""
        if self._session is not None:
            self._session.close()

        session = ChartSession(locator, config=self._config)
        session.subscribe(self._show_state)
        self._session = session
        self._show_state(session.state)

        session.begin()
        worker = _LoadWorkerThread(session, self)
        worker.finished_result.connect(self._on_load_finished)
        worker.error_occurred.connect(self._on_load_failed)
        worker.finished.connect(self._on_worker_done)
        self._workers.add(worker)
        worker.start()

        self.statusBar().showMessage(f"Loading {locator} ...")

    def _on_load_finished(self, dataset):
        # The worker carries its own session; a closed one drops the result
        self.sender().session.complete(dataset)

    def _on_load_failed(self, exc):
        self.sender().session.fail(exc)

    def _on_worker_done(self):
        self._workers.discard(self.sender())

    def _show_state(self, state: ChartState):
        if not state.is_ready:
            self._stack.setCurrentWidget(self._lbl_loading)
            if state.error:
                self.statusBar().showMessage(state.error)
            return

        dataset = state.dataset
        try:
            self._chart_tabs.update_all_charts(dataset)
        except ValueError as exc:
            QMessageBox.critical(
                self, "Chart Error", f"Could not draw the charts:\n\n{exc}",
            )
            return

        self._stack.setCurrentWidget(self._chart_tabs)
        msg = (
            f"Loaded {len(dataset)} records, "
            f"{len(dataset.events)} events from "
            f"{os.path.basename(dataset.source) or dataset.source}"
        )
        if dataset.dropped:
            msg += f" ({len(dataset.dropped)} invalid rows dropped)"
        self.statusBar().showMessage(msg)

    def _current_dataset(self):
        if self._session is None or not self._session.state.is_ready:
            return None
        return self._session.state.dataset

    # ── Opening ──────────────────────────────────────────────────────

    def _open_file(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open CSV File", "", _CSV_FILTER)
        if path:
            self.open_locator(path)

    def _open_url(self):
        url, ok = QInputDialog.getText(
            self, "Open URL", "CSV URL (http:// or https://):",
        )
        url = url.strip()
        if ok and url:
            self.open_locator(url)

    def _load_example(self):
        path = os.path.join(
            tempfile.gettempdir(), 'timeline_plotter_example', 'data.csv'
        )
        try:
            generate_example_csv(path)
        except OSError as exc:
            QMessageBox.critical(self, "Example Data Error", str(exc))
            return
        self.open_locator(path)

    # ── Export ───────────────────────────────────────────────────────

    def _require_dataset(self):
        dataset = self._current_dataset()
        if dataset is None:
            QMessageBox.warning(self, "Nothing to Export",
                                "Load a CSV file before exporting.")
        return dataset

    def _run_export(self, action, done_message):
        try:
            result = action()
        except (OSError, ValueError) as exc:
            QMessageBox.critical(self, "Export Error", f"Failed to export:\n\n{exc}")
            return
        self.statusBar().showMessage(done_message(result), 5000)

    def _export_current(self):
        if self._require_dataset() is None:
            return
        fig = self._chart_tabs.current_figure()
        path, _ = QFileDialog.getSaveFileName(self, "Export Chart as PNG", "", _PNG_FILTER)
        if not path:
            return
        if not path.lower().endswith('.png'):
            path += '.png'
        self._run_export(
            lambda: export_png(fig, path, size_inches=self._config.figsize),
            lambda _: f"Exported to {os.path.basename(path)}",
        )

    def _export_all(self):
        dataset = self._require_dataset()
        if dataset is None:
            return
        folder = QFileDialog.getExistingDirectory(self, "Select Output Folder")
        if not folder:
            return
        self._run_export(
            lambda: export_all_charts(
                self._chart_tabs.get_all_figures(dataset), folder,
                size_inches=self._config.figsize,
            ),
            lambda paths: f"Exported {len(paths)} charts to {os.path.basename(folder)}",
        )

    def _show_about(self):
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<h3>{APP_NAME} v{APP_VERSION}</h3>"
            f"<p>Time-series line chart with annotated events, "
            f"loaded from a CSV file with <i>date</i>, <i>value</i> and "
            f"optional <i>event</i> columns.</p>"
            f"<p>Events are marked in red with alternating label "
            f"offsets.</p>",
        )

    def closeEvent(self, event):
        if self._session is not None:
            self._session.close()
        # A QThread must not be destroyed while running
        for worker in list(self._workers):
            worker.wait()
        super().closeEvent(event)
