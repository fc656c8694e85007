"""
Event Timeline Plotter v1.0.0

Time-series line chart with annotated events.  Reads a ``data.csv``
file (``date``, ``value`` and an optional ``event`` column) and draws
the series as a smooth monotone line with staggered red event labels.

Two renderers share the same normalised dataset: a drawn chart built
from explicit draw commands, and an axes chart built on matplotlib's
date axes.
"""

APP_NAME = "Event Timeline Plotter"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-18"
__version__ = APP_VERSION
