"""
Row normaliser for the Event Timeline Plotter.

Turns raw CSV rows into typed ``Record`` objects.  Each row yields
either a ``Record`` or a ``RowValidationError``; invalid rows are
excluded from the dataset and reported in one aggregated warning,
never raised.
"""

import math
import warnings
from datetime import date, datetime, timezone
from operator import attrgetter
from typing import Iterable, List, Optional, Tuple, Union

from .constants import COL_DATE, COL_VALUE, COL_EVENT, MAX_DIAGNOSTIC_EXAMPLES
from .data_model import Dataset, RawRow, Record
from .errors import RowValidationError

# The header is line 1, so the first data row is line 2
FIRST_DATA_LINE = 2

_DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d, %Y %H:%M",
    "%B %d, %Y %H:%M",
    "%d %b %Y",
    "%d %B %Y",
]


# ── Field parsers ────────────────────────────────────────────────────────

def _try_parse_iso_datetime(text: str) -> Optional[datetime]:
    """Try parsing ISO-8601 strings, accepting a trailing ``Z``."""
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_date(value) -> datetime:
    """Parse a date cell into a naive ``datetime``.

    Accepts ``datetime`` / ``date`` objects and strings in one of the
    supported ``strptime`` formats or ISO-8601.  Timezone-aware results
    are converted to UTC and returned naive so every record compares
    with every other.

    Raises ``ValueError`` when the value is missing or not a date.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("empty date")
        parsed = None
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
            except ValueError:
                continue
            break
        if parsed is None:
            parsed = _try_parse_iso_datetime(text)
        if parsed is None:
            raise ValueError(f"unrecognised date: {value!r}")
    else:
        raise ValueError(f"not a date: {value!r}")

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError as exc:
            # e.g. 0001-01-01T00:00:00+01:00 has no UTC equivalent
            raise ValueError(f"date out of range in UTC: {value!r}") from exc
    return parsed


def parse_value(value) -> float:
    """Parse a value cell into a finite ``float``.

    Raises ``ValueError`` for missing, blank, non-numeric, NaN and
    infinite values.  Booleans are not numbers here.
    """
    if value is None:
        raise ValueError("missing value")
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text or '_' in text:
            raise ValueError(f"not a number: {value!r}")
        result = float(text)
    else:
        raise ValueError(f"not a number: {value!r}")
    if not math.isfinite(result):
        raise ValueError(f"non-finite value: {value!r}")
    return result


def _event_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        # Dynamic typing turns "2024" into 2024.0
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value).strip()


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# ── Row normalisation ────────────────────────────────────────────────────

def normalize_row(
    row: RawRow,
    line_number: int,
) -> Union[Record, RowValidationError]:
    """Validate one raw row.

    Returns a ``Record`` or, if the date or value is unusable, the
    ``RowValidationError`` describing why the row is dropped.
    """
    raw_date = row.get(COL_DATE)
    if _is_missing(raw_date):
        return RowValidationError(line_number, COL_DATE, raw_date, "is missing")
    try:
        when = parse_date(raw_date)
    except ValueError:
        return RowValidationError(
            line_number, COL_DATE, raw_date, "is not a valid date"
        )

    raw_value = row.get(COL_VALUE)
    if _is_missing(raw_value):
        return RowValidationError(line_number, COL_VALUE, raw_value, "is missing")
    try:
        number = parse_value(raw_value)
    except ValueError:
        return RowValidationError(
            line_number, COL_VALUE, raw_value, "is not a finite number"
        )

    return Record(date=when, value=number, event=_event_text(row.get(COL_EVENT)))


def normalize_rows(
    rows: Iterable[RawRow],
    *,
    first_line: int = FIRST_DATA_LINE,
) -> Tuple[List[Record], List[RowValidationError]]:
    """Filter-map raw rows into records, preserving their order.

    Parameters
    ----------
    rows : iterable of dict
        Rows as returned by ``csv_loader.parse_csv``.
    first_line : int
        Line number reported for the first row.

    Returns
    -------
    records : list of Record
        Valid rows, in input order.
    dropped : list of RowValidationError
        One entry per excluded row, in input order.
    """
    records: List[Record] = []
    dropped: List[RowValidationError] = []

    for line_number, row in enumerate(rows, start=first_line):
        outcome = normalize_row(row, line_number)
        if isinstance(outcome, RowValidationError):
            dropped.append(outcome)
        else:
            records.append(outcome)

    if dropped:
        examples = [str(err) for err in dropped[:MAX_DIAGNOSTIC_EXAMPLES]]
        detail = "; ".join(examples)
        if len(dropped) > MAX_DIAGNOSTIC_EXAMPLES:
            detail += f" ... and {len(dropped) - MAX_DIAGNOSTIC_EXAMPLES} more"
        warnings.warn(
            f"Dropped {len(dropped)} invalid row(s): {detail}.",
            stacklevel=2,
        )

    return records, dropped


def build_dataset(
    rows: Iterable[RawRow],
    *,
    source: str = "",
    sort: bool = True,
) -> Dataset:
    """Normalise *rows* into a new ``Dataset``.

    With ``sort=True`` records are ordered by ascending date; the sort
    is stable, so rows sharing a date keep their CSV order.
    """
    records, dropped = normalize_rows(rows)
    if sort:
        records = sorted(records, key=attrgetter('date'))
    return Dataset(
        records=tuple(records),
        source=source,
        dropped=tuple(dropped),
        sorted_by_date=sort,
    )
