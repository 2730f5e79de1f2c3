# (c) 2026 (KriaetvAspie / AspieTheBard)
# Licensed under the Polyform Noncommercial License 1.0.0
"""
metrics.py — Per-turn CSV telemetry for the Evolvera sim.

One row per turn, reals at three decimals, empty cell when no event fired:

    turn,action1,action2,event,survival,production,warfare,exploration,social,expression,ni
    1,hunt,farm,,6.200,5.400,5.200,5.000,5.000,5.000,2.356
"""

import csv
from pathlib import Path

from .sim import CSV_COLUMNS, TurnRecord


def format_row(rec: TurnRecord) -> list:
    row = []
    for col, val in zip(CSV_COLUMNS, rec.as_row()):
        if col == 'event':
            row.append(val or '')
        elif isinstance(val, float):
            row.append(f"{val:.3f}")
        else:
            row.append(val)
    return row


class TurnLogger:
    """Writes TurnRecords to CSV.  Usable as a context manager or on_turn callback."""

    def __init__(self, path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh     = open(self.path, 'w', newline='', encoding='utf-8')
        self._writer = csv.writer(self._fh)
        self._writer.writerow(CSV_COLUMNS)
        self.rows    = 0

    def record_turn(self, rec: TurnRecord) -> None:
        self._writer.writerow(format_row(rec))
        self.rows += 1
        # dashboard.py polls this file while the run is in progress
        self._fh.flush()

    __call__ = record_turn

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.flush()
            self._fh.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def read_rows(path) -> list:
    """Load a run CSV back as dicts with numeric columns converted."""
    out = []
    with open(path, newline='', encoding='utf-8') as fh:
        for row in csv.DictReader(fh):
            rec = {'turn': int(row['turn']),
                   'action1': row['action1'],
                   'action2': row['action2'],
                   'event': row['event'] or None}
            for col in CSV_COLUMNS[4:]:
                rec[col] = float(row[col])
            out.append(rec)
    return out
