"""
Entry point for the Event Timeline Plotter.

Usage:
    python -m timeline_plotter [PATH_OR_URL] [--date-format FMT]
                               [--no-sort] [--dynamic-typing]

Without a locator the window opens ``data.csv`` from the working
directory when that file exists.
"""

import argparse
import importlib
import os
import sys
import traceback

# (import name, distribution name)
_REQUIRED = (
    ("PySide6", "PySide6"),
    ("matplotlib", "matplotlib"),
    ("numpy", "numpy"),
    ("scipy", "scipy"),
    ("httpx", "httpx"),
)


def _check_dependencies():
    """Exit with an install hint if a required package is missing."""
    missing = []
    for module, dist in _REQUIRED:
        try:
            importlib.import_module(module)
        except ImportError:
            missing.append(dist)
    if missing:
        print(
            f"Missing required packages: {', '.join(missing)}\n"
            f"Install with: pip install {' '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)


def _exception_hook(exc_type, exc_value, exc_tb):
    """Report uncaught exceptions instead of letting Qt abort silently."""
    msg = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
    print(f"Unhandled exception:\n{msg}", file=sys.stderr)

    from PySide6.QtWidgets import QApplication, QMessageBox
    if QApplication.instance() is not None:
        QMessageBox.critical(
            None, "Unhandled Error",
            f"{exc_type.__name__}: {exc_value}\n\n"
            f"See console for full traceback.",
        )


def _parse_args(argv):
    from .constants import DATE_TICK_FORMAT, DEFAULT_DATA_FILE

    parser = argparse.ArgumentParser(
        prog="timeline-plotter",
        description="Plot a date/value CSV with annotated events.",
    )
    parser.add_argument(
        "locator", nargs="?", default="",
        help=f"CSV file path or http(s) URL (default: ./{DEFAULT_DATA_FILE})",
    )
    parser.add_argument(
        "--date-format", default=DATE_TICK_FORMAT,
        help="strftime pattern for the date axis labels",
    )
    parser.add_argument(
        "--no-sort", action="store_true",
        help="keep CSV row order instead of sorting by date",
    )
    parser.add_argument(
        "--dynamic-typing", action="store_true",
        help="convert numeric-looking cells while parsing",
    )
    args = parser.parse_args(argv)

    if not args.locator and os.path.isfile(DEFAULT_DATA_FILE):
        args.locator = os.path.abspath(DEFAULT_DATA_FILE)
    return args


def main(argv=None):
    """Launch the Event Timeline Plotter GUI."""
    _check_dependencies()
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    sys.excepthook = _exception_hook

    # Backend must be chosen before any Qt widget module is imported
    os.environ.setdefault("QT_API", "pyside6")
    import matplotlib
    matplotlib.use('QtAgg')

    from PySide6.QtWidgets import QApplication
    from PySide6.QtGui import QFont, QFontDatabase

    from .config import ChartConfig
    from .constants import FONT_FAMILIES
    from .gui_main import PlotterMainWindow
    from .theme import get_dark_stylesheet

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")

    font = QFont()
    family = next((f for f in FONT_FAMILIES if QFontDatabase.hasFamily(f)), None)
    if family:
        font.setFamily(family)
    font.setPointSize(10)
    app.setFont(font)
    app.setStyleSheet(get_dark_stylesheet())

    config = ChartConfig(
        date_format=args.date_format,
        sort_by_date=not args.no_sort,
        dynamic_typing=args.dynamic_typing,
    )
    window = PlotterMainWindow(locator=args.locator, config=config)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
