"""
Grid state: the current color of every (time point, column) cell.

The grid is held as an immutable snapshot. Every change builds a new
snapshot, copying only the rows it touches, and publishes it with a
single reference swap, so a reader holding a snapshot never observes a
half-applied batch.
"""

from __future__ import annotations

import threading
from typing import Iterable, Mapping, Optional, Tuple, Union

from explvis.core.colors import Color, VerdictColorMap
from explvis.core.trace import TraceStore
from explvis.core.traversal import Cell, CellUpdate, TraversalResult
from explvis.utils.logger import GridLogger, LogLevel

Row = Tuple[Color, ...]
Batch = Union[TraversalResult, Mapping[Cell, Color], Iterable[CellUpdate]]


class GridSnapshot:
    """
    Immutable view of every cell color.

    Attributes:
        rows: One tuple of colors per time point, indexed by column.
        width: Number of columns.
    """

    __slots__ = ("rows", "width")

    def __init__(self, rows: Tuple[Row, ...], width: int) -> None:
        self.rows = rows
        self.width = width

    def read(self, tp: int, column: int) -> Color:
        """Color of a cell; cells outside the grid read as NEUTRAL."""
        if not 0 <= tp < len(self.rows) or not 0 <= column < self.width:
            return Color.NEUTRAL
        return self.rows[tp][column]

    def __len__(self) -> int:
        return len(self.rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridSnapshot):
            return NotImplemented
        return self.width == other.width and self.rows == other.rows

    def __hash__(self) -> int:
        return hash((self.width, self.rows))

    def __repr__(self) -> str:
        return f"GridSnapshot(rows={len(self.rows)}, width={self.width})"


class GridStateController:
    """
    Owner of the mutable grid state.

    Column 0 of each row starts with the color of the row's root verdict;
    every other cell starts NEUTRAL. Batches overwrite cells wholesale.

    Attributes:
        width: Number of columns (registry size).
        colors: Maps root verdicts to colors during initialization.
    """

    def __init__(
        self,
        width: int,
        colors: Optional[VerdictColorMap] = None,
        logger: Optional[GridLogger] = None,
    ) -> None:
        if width < 1:
            raise ValueError(f"Grid needs at least one column, got {width}")
        self.width = width
        self.colors = colors or VerdictColorMap()
        self.logger = logger or GridLogger(LogLevel.SILENT)
        self._lock = threading.Lock()
        self._snapshot = GridSnapshot((), width)

    @property
    def snapshot(self) -> GridSnapshot:
        """The current snapshot. Safe to read without locking."""
        return self._snapshot

    def read(self, tp: int, column: int) -> Color:
        """Current color of cell ``(tp, column)``."""
        return self._snapshot.read(tp, column)

    def initialize(self, store: TraceStore) -> GridSnapshot:
        """
        Reset every row to its initial coloring.

        Args:
            store: The trace whose root verdicts color column 0.

        Returns:
            The newly published snapshot.
        """
        rows = tuple(self._initial_row(row.explanation) for row in store)
        return self._publish(GridSnapshot(rows, self.width))

    def extend(self, store: TraceStore) -> GridSnapshot:
        """
        Initialize rows of ``store`` beyond the current grid.

        Existing rows keep their colors.

        Returns:
            The newly published snapshot.
        """
        with self._lock:
            current = self._snapshot
            added = tuple(
                self._initial_row(row.explanation)
                for row in store
                if row.tp >= len(current.rows)
            )
            snapshot = GridSnapshot(current.rows + added, self.width)
            self._snapshot = snapshot
        self.logger.debug(f"Grid extended by {len(added)} row(s)")
        return snapshot

    def apply_batch(self, batch: Batch) -> GridSnapshot:
        """
        Write every update of ``batch`` and publish the result at once.

        Updates addressing rows outside the grid are skipped.

        Args:
            batch: A TraversalResult, a ``(tp, column) -> Color`` mapping,
                or an iterable of CellUpdate.

        Returns:
            The newly published snapshot.
        """
        updates = _as_cells(batch)
        with self._lock:
            current = self._snapshot
            changed = {}
            for (tp, col), color in updates:
                if not 0 <= tp < len(current.rows) or not 0 <= col < self.width:
                    self.logger.warning(
                        f"Skipped update outside the grid: tp={tp} column={col}"
                    )
                    continue
                row = changed.get(tp)
                if row is None:
                    row = changed[tp] = list(current.rows[tp])
                row[col] = color

            if not changed:
                return current
            rows = list(current.rows)
            for tp, row in changed.items():
                rows[tp] = tuple(row)
            snapshot = GridSnapshot(tuple(rows), self.width)
            self._snapshot = snapshot
        return snapshot

    def _initial_row(self, explanation) -> Row:
        return (self.colors.color(explanation),) + (Color.NEUTRAL,) * (self.width - 1)

    def _publish(self, snapshot: GridSnapshot) -> GridSnapshot:
        with self._lock:
            self._snapshot = snapshot
        return snapshot


def _as_cells(batch: Batch) -> Tuple[Tuple[Cell, Color], ...]:
    """Normalize any batch form to ``((tp, column), color)`` pairs."""
    if isinstance(batch, TraversalResult):
        return tuple(batch.cells.items())
    if isinstance(batch, Mapping):
        return tuple(batch.items())
    return tuple((update.cell, update.color) for update in batch)
