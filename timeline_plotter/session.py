"""
Display-session state for the Event Timeline Plotter.

A ``ChartSession`` owns the result of exactly one load.  Its state is an
immutable ``ChartState`` that is replaced as a whole, never edited field
by field.  The session stays ``LOADING`` until a non-empty dataset
arrives; failed loads record the error and keep it there.  Results
delivered after ``close()`` are discarded.

The session itself is GUI-agnostic: ``gui_main`` runs ``load_dataset``
on a worker thread and hands the outcome back with ``complete`` or
``fail`` on the GUI thread.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional

import httpx

from .config import ChartConfig
from .csv_loader import load_rows
from .data_model import Dataset
from .normalizer import build_dataset


class LoadStatus(Enum):
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class ChartState:
    """Snapshot of a session.

    Parameters
    ----------
    status : LoadStatus
        ``READY`` only once a non-empty dataset is available.
    dataset : Dataset or None
        The dataset to render when ``READY``.
    error : str or None
        Message of the last failed load, for developer-facing display.
    generation : int
        Number of state replacements so far.
    """
    status: LoadStatus = LoadStatus.LOADING
    dataset: Optional[Dataset] = None
    error: Optional[str] = None
    generation: int = 0

    @property
    def is_ready(self) -> bool:
        return self.status is LoadStatus.READY


def load_dataset(
    locator: str,
    *,
    config: Optional[ChartConfig] = None,
    client: Optional[httpx.Client] = None,
) -> Dataset:
    """Fetch, parse and normalise *locator* into a ``Dataset``.

    Raises ``LoadError`` or ``ParseError``; invalid rows only produce a
    warning.
    """
    config = config or ChartConfig()
    rows = load_rows(locator, dynamic_typing=config.dynamic_typing, client=client)
    return build_dataset(rows, source=locator, sort=config.sort_by_date)


StateListener = Callable[[ChartState], None]


class ChartSession:
    """One display session: one locator, one load.

    Parameters
    ----------
    locator : str
        Path or URL of the CSV file.
    config : ChartConfig, optional
        Load options (sorting, dynamic typing).
    loader : callable, optional
        ``loader(locator, config=...) -> Dataset``; defaults to
        ``load_dataset``.
    """

    def __init__(
        self,
        locator: str,
        *,
        config: Optional[ChartConfig] = None,
        loader: Callable[..., Dataset] = load_dataset,
    ):
        self.locator = locator
        self.config = config or ChartConfig()
        self._loader = loader
        self._state = ChartState()
        self._started = False
        self._closed = False
        self._listeners: List[StateListener] = []

    # ── State ────────────────────────────────────────────────────────

    @property
    def state(self) -> ChartState:
        return self._state

    @property
    def started(self) -> bool:
        return self._started

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener) -> None:
        """Call *listener* with the new state after every replacement."""
        self._listeners.append(listener)

    def _replace_state(self, new_state: ChartState) -> None:
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)

    # ── Lifecycle ────────────────────────────────────────────────────

    def begin(self) -> None:
        """Mark the session's single load as started.

        Raises ``RuntimeError`` on a second call or after ``close()``.
        """
        if self._closed:
            raise RuntimeError("Session is closed.")
        if self._started:
            raise RuntimeError("A session loads its data exactly once.")
        self._started = True

    def complete(self, dataset: Dataset) -> bool:
        """Install a loaded dataset.

        Returns ``False`` (and changes nothing) if the session is closed.
        An empty dataset leaves the session ``LOADING``.
        """
        if self._closed:
            return False
        if dataset.is_empty:
            status, kept, error = (
                LoadStatus.LOADING, None, f"No valid rows in '{self.locator}'",
            )
        else:
            status, kept, error = LoadStatus.READY, dataset, None
        self._replace_state(ChartState(
            status=status,
            dataset=kept,
            error=error,
            generation=self._state.generation + 1,
        ))
        return True

    def fail(self, exc: BaseException) -> bool:
        """Record a failed load; the session stays ``LOADING``.

        Returns ``False`` if the session is closed.
        """
        if self._closed:
            return False
        self._replace_state(replace(
            self._state,
            error=f"{type(exc).__name__}: {exc}",
            generation=self._state.generation + 1,
        ))
        return True

    def start(self) -> ChartState:
        """Run the load synchronously and return the resulting state.

        ``LoadError`` / ``ParseError`` are recorded through ``fail`` rather
        than raised.
        """
        self.begin()
        try:
            dataset = self._loader(self.locator, config=self.config)
        except (OSError, ValueError) as exc:
            self.fail(exc)
        else:
            self.complete(dataset)
        return self._state

    def close(self) -> None:
        """End the session; later results are ignored."""
        self._closed = True
        self._listeners.clear()
