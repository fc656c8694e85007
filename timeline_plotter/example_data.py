"""
Example data generator for the Event Timeline Plotter.

Creates a synthetic ``data.csv`` for demonstration and tests: a daily
random walk with a handful of labelled events and a few deliberately
broken rows (bad date, missing value, non-numeric value) to exercise
the row normaliser.
"""

import csv
import os
import random
from datetime import date, timedelta

# (day index, label) pairs; day indices beyond n_days are skipped
EXAMPLE_EVENTS = [
    (5, "Launch"),
    (12, "Price change"),
    (20, "Outage"),
    (33, "Campaign"),
    (47, "Release 2.0"),
]

# Broken rows appended after the valid ones (date, value, event)
EXAMPLE_INVALID_ROWS = [
    ("not-a-date", "42", ""),
    ("2024-02-30", "17", ""),
    ("2024-03-15", "", "Missing value"),
    ("2024-03-16", "n/a", ""),
]


def generate_example_csv(
    path: str,
    *,
    seed: int = 42,
    n_days: int = 60,
    start: date = date(2024, 1, 1),
    include_invalid: bool = True,
) -> str:
    """Write an example ``data.csv`` to *path* and return the path.

    Parameters
    ----------
    path : str
        Output file; parent directories are created.
    seed : int
        Seed for the reproducible random walk.
    n_days : int
        Number of valid daily rows.
    start : datetime.date
        Date of the first row.
    include_invalid : bool
        Append the rows listed in ``EXAMPLE_INVALID_ROWS``.
    """
    if n_days < 1:
        raise ValueError(f"n_days must be at least 1, got {n_days}")

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    rng = random.Random(seed)
    events = dict(EXAMPLE_EVENTS)

    value = 100.0
    rows = []
    for day in range(n_days):
        # Random walk with a slight upward drift; events cause a jump
        value += rng.gauss(0.4, 3.0)
        if day in events:
            value += rng.choice((-1, 1)) * rng.uniform(5.0, 12.0)
        value = max(value, 1.0)
        rows.append((
            (start + timedelta(days=day)).isoformat(),
            f"{value:.2f}",
            events.get(day, ""),
        ))

    if include_invalid:
        rows.extend(EXAMPLE_INVALID_ROWS)

    with open(path, 'w', encoding='utf-8', newline='') as fh:
        writer = csv.writer(fh)
        writer.writerow(['date', 'value', 'event'])
        writer.writerows(rows)

    return path


if __name__ == '__main__':
    # Quick test: generate to a temporary directory and print summary
    import tempfile
    out_path = os.path.join(tempfile.gettempdir(), 'timeline_plotter_example', 'data.csv')
    generate_example_csv(out_path)
    print(f"  data.csv: {out_path} ({os.path.getsize(out_path):,} bytes)")
