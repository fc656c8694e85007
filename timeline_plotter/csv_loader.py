"""
CSV loader for the Event Timeline Plotter.

Fetches ``data.csv`` from a local path, a ``file://`` URL or an
``http(s)://`` URL and parses it into header-keyed rows.  Handles:

- UTF-8 BOM markers
- Blank lines between rows
- Quoted fields containing commas
- Short rows (missing cells become ``None``) and long rows (surplus
  cells dropped with a warning)
- Optional dynamic typing of numeric-looking cells

Fetch failures raise ``LoadError``; malformed CSV raises ``ParseError``.
"""

import csv
import io
import os
import re
import warnings
from typing import List, Optional
from urllib.parse import urlsplit
from urllib.request import url2pathname

import httpx

from .constants import HTTP_TIMEOUT_SECONDS, MAX_DIAGNOSTIC_EXAMPLES
from .data_model import RawRow
from .errors import LoadError, ParseError


# Numbers as written in CSV exports: 12, -3.5, .5, 4., 1e-3
_NUMERIC_RE = re.compile(r'^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?\s*$')

_LARGE_FILE_BYTES = 100 * 1024 * 1024


# ── Fetching ─────────────────────────────────────────────────────────────

def _is_http(locator: str) -> bool:
    return urlsplit(locator).scheme.lower() in ('http', 'https')


def _local_path(locator: str) -> str:
    parts = urlsplit(locator)
    if parts.scheme.lower() == 'file':
        return url2pathname(parts.path)
    return locator


def _fetch_http(
    locator: str,
    client: Optional[httpx.Client],
    timeout: float,
) -> str:
    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        response = client.get(locator)
        response.raise_for_status()
        return response.text
    except httpx.HTTPStatusError as exc:
        raise LoadError(
            locator, f"HTTP {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        raise LoadError(locator, str(exc) or type(exc).__name__) from exc
    finally:
        if owns_client:
            client.close()


def _read_file(locator: str) -> str:
    path = _local_path(locator)
    try:
        file_size = os.path.getsize(path)
        if file_size > _LARGE_FILE_BYTES:
            warnings.warn(
                f"File is very large ({file_size / (1024 * 1024):.0f} MB). "
                f"Rendering may be slow.",
                stacklevel=3,
            )
        with open(path, 'r', encoding='utf-8-sig', newline='') as fh:
            return fh.read()
    except FileNotFoundError as exc:
        raise LoadError(locator, "file not found") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(
            f"'{os.path.basename(path)}' is not UTF-8 text"
        ) from exc
    except OSError as exc:
        raise LoadError(locator, exc.strerror or str(exc)) from exc


def fetch_text(
    locator: str,
    *,
    client: Optional[httpx.Client] = None,
    timeout: float = HTTP_TIMEOUT_SECONDS,
) -> str:
    """Return the raw text behind *locator*.

    Parameters
    ----------
    locator : str
        File path, ``file://`` URL or ``http(s)://`` URL.
    client : httpx.Client, optional
        Client to use for HTTP locators.  A short-lived client is
        created (and closed) when omitted.
    timeout : float
        Timeout in seconds for the default HTTP client.

    Raises
    ------
    LoadError
        The file does not exist, cannot be read, or the HTTP request
        failed / returned a non-2xx status.
    ParseError
        The file is not valid UTF-8.
    """
    if not locator:
        raise LoadError(locator, "no file or URL given")
    if _is_http(locator):
        return _fetch_http(locator, client, timeout)
    return _read_file(locator)


# ── Parsing ──────────────────────────────────────────────────────────────

def _coerce_cell(cell: str):
    """Dynamic typing: numeric-looking cells become ``float``."""
    if _NUMERIC_RE.match(cell):
        return float(cell)
    return cell


def _is_blank(row: List[str]) -> bool:
    return not row or all(not cell.strip() for cell in row)


def parse_csv(text: str, *, dynamic_typing: bool = False) -> List[RawRow]:
    """Parse comma-delimited *text* into header-keyed rows.

    The first non-blank line is the header; its cells (stripped) become
    the keys of every row.  Cell values are left unstripped so the
    normaliser sees exactly what the file holds.

    Parameters
    ----------
    text : str
        Full CSV content.
    dynamic_typing : bool
        If ``True``, numeric-looking cells are returned as ``float``.

    Returns
    -------
    list of dict
        One mapping per data line, in file order.

    Raises
    ------
    ParseError
        Empty content, blank or duplicate header names, or malformed
        quoting.
    """
    if text.startswith('\ufeff'):
        text = text[1:]
    if not text.strip():
        raise ParseError("CSV content is empty")

    reader = csv.reader(io.StringIO(text, newline=''), delimiter=',', strict=True)
    header: Optional[List[str]] = None
    rows: List[RawRow] = []
    long_lines: List[int] = []

    try:
        for tokens in reader:
            if _is_blank(tokens):
                continue

            if header is None:
                header = [t.strip() for t in tokens]
                if any(not name for name in header):
                    raise ParseError(
                        "CSV header contains a blank column name",
                        line_number=reader.line_num,
                    )
                duplicates = sorted({n for n in header if header.count(n) > 1})
                if duplicates:
                    raise ParseError(
                        f"CSV header repeats column(s) {duplicates}",
                        line_number=reader.line_num,
                    )
                continue

            if len(tokens) > len(header):
                long_lines.append(reader.line_num)
                tokens = tokens[:len(header)]

            row: RawRow = {}
            for idx, name in enumerate(header):
                if idx < len(tokens):
                    cell = tokens[idx]
                    row[name] = _coerce_cell(cell) if dynamic_typing else cell
                else:
                    row[name] = None
            rows.append(row)
    except csv.Error as exc:
        raise ParseError(f"malformed CSV: {exc}", line_number=reader.line_num) from exc

    if header is None:
        raise ParseError("CSV content has no header row")

    if long_lines:
        detail = ", ".join(str(n) for n in long_lines[:MAX_DIAGNOSTIC_EXAMPLES])
        if len(long_lines) > MAX_DIAGNOSTIC_EXAMPLES:
            detail += f" ... and {len(long_lines) - MAX_DIAGNOSTIC_EXAMPLES} more"
        warnings.warn(
            f"Lines with more cells than the header ({len(header)}): "
            f"{detail}. Surplus cells were ignored.",
            stacklevel=2,
        )

    return rows


def load_rows(
    locator: str,
    *,
    dynamic_typing: bool = False,
    client: Optional[httpx.Client] = None,
) -> List[RawRow]:
    """Fetch *locator* and parse it into rows."""
    text = fetch_text(locator, client=client)
    return parse_csv(text, dynamic_typing=dynamic_typing)
