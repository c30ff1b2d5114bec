"""
Immutable trace store.

Holds one row per time point: its timestamp and the root explanation
produced by the monitor at that time point. Rows are dense and 0-based.
Appending new rows produces a new store; an existing store never changes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from explvis.core.explanation import ExplanationNode


class UnknownTimePoint(LookupError):
    """Raised when a time point has no row in the trace."""

    def __init__(self, tp: int, length: int) -> None:
        super().__init__(f"No trace row for tp={tp} (trace has {length} rows)")
        self.tp = tp
        self.length = length


@dataclass(frozen=True)
class TraceRow:
    """
    A single trace row.

    Attributes:
        tp: Time point index.
        ts: Timestamp of the time point.
        explanation: Root explanation evaluated at ``tp``.
    """

    tp: int
    ts: float
    explanation: ExplanationNode


class TraceStore:
    """
    Ordered, read-only sequence of trace rows.

    Invariants checked at construction: time points are ``0..n-1`` in
    order and timestamps never decrease.
    """

    __slots__ = ("_rows",)

    def __init__(self, rows: Iterable[TraceRow] = ()) -> None:
        """
        Build a store from rows in time point order.

        Raises:
            ValueError: If time points are not dense and 0-based, or
                timestamps are not finite or decrease.
        """
        rows = tuple(rows)
        _check_rows(rows, start_tp=0, last_ts=None)
        self._rows: Tuple[TraceRow, ...] = rows

    def row_at(self, tp: int) -> TraceRow:
        """
        Return the row at time point ``tp``.

        Raises:
            UnknownTimePoint: If the trace has no such row.
        """
        if not 0 <= tp < len(self._rows):
            raise UnknownTimePoint(tp, len(self._rows))
        return self._rows[tp]

    def extended(self, rows: Iterable[TraceRow]) -> TraceStore:
        """
        Return a new store with ``rows`` appended.

        The new rows must continue the time point sequence.
        """
        new_rows = tuple(rows)
        last_ts = self._rows[-1].ts if self._rows else None
        _check_rows(new_rows, start_tp=len(self._rows), last_ts=last_ts)
        return TraceStore._from_checked(self._rows + new_rows)

    @classmethod
    def _from_checked(cls, rows: Tuple[TraceRow, ...]) -> TraceStore:
        """Wrap rows that were already validated."""
        store = cls.__new__(cls)
        store._rows = rows
        return store

    @property
    def timestamps(self) -> Tuple[float, ...]:
        return tuple(row.ts for row in self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[TraceRow]:
        return iter(self._rows)


def _check_rows(
    rows: Tuple[TraceRow, ...], start_tp: int, last_ts: Optional[float]
) -> None:
    """Validate dense time points from ``start_tp`` and finite, monotonic timestamps."""
    for offset, row in enumerate(rows):
        expected = start_tp + offset
        if row.tp != expected:
            raise ValueError(f"Expected tp={expected}, got tp={row.tp}")
        if not math.isfinite(row.ts):
            raise ValueError(f"Timestamp at tp={row.tp} is not finite: {row.ts}")
        if last_ts is not None and row.ts < last_ts:
            raise ValueError(
                f"Timestamp at tp={row.tp} decreases ({row.ts} < {last_ts})"
            )
        last_ts = row.ts
