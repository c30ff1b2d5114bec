"""
Interaction controller for the explanation grid.

Turns clicks and control-surface actions (reset, refresh, append) into
grid state transitions. Only the root-formula column is clickable: a
click there traverses the row's root explanation and applies the
resulting batch. All other columns are display-only.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from explvis.core.colors import VerdictColorMap
from explvis.core.grid import GridSnapshot, GridStateController
from explvis.core.registry import SubformulaRegistry
from explvis.core.trace import TraceRow, TraceStore, UnknownTimePoint
from explvis.core.traversal import (
    DEFAULT_MAX_DEPTH,
    ExplanationTraversal,
    TraversalResult,
)
from explvis.utils.logger import GridLogger, LogLevel

ROOT_COLUMN = 0

_BUSY_POLICIES = frozenset({"queue", "drop"})


class ControllerState(Enum):
    """States of the interaction controller."""

    IDLE = "idle"
    PROCESSING = "processing"


class InteractionController:
    """
    Glue between user interaction and grid state.

    Clicks are handled one at a time. With ``busy_policy="queue"`` a
    click arriving from another thread while one is processing waits
    for it to finish; with ``"drop"`` it is ignored. A click issued from
    inside the processing thread itself is always dropped.

    Attributes:
        store: The current trace.
        registry: The current column catalog.
        grid: The grid state owner.
        state: Current controller state.
        busy_policy: ``"queue"`` or ``"drop"``.
    """

    def __init__(
        self,
        store: TraceStore,
        registry: SubformulaRegistry,
        colors: Optional[VerdictColorMap] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        busy_policy: str = "queue",
        logger: Optional[GridLogger] = None,
    ) -> None:
        """
        Build the controller and initialize the grid from ``store``.

        Args:
            store: Trace to display.
            registry: Column catalog for the trace's formulas.
            colors: Verdict to color mapping.
            max_depth: Traversal depth bound.
            busy_policy: What to do with a click that arrives while
                another is processing.
            logger: Optional logger.

        Raises:
            ValueError: If ``busy_policy`` is unknown.
        """
        if busy_policy not in _BUSY_POLICIES:
            raise ValueError(
                f"busy_policy must be one of {sorted(_BUSY_POLICIES)}, "
                f"got '{busy_policy}'"
            )
        self.colors: VerdictColorMap = colors or VerdictColorMap()
        self.max_depth = max_depth
        self.busy_policy = busy_policy
        self.logger: GridLogger = logger or GridLogger(LogLevel.SILENT)

        self.store: TraceStore = store
        self.registry: SubformulaRegistry = registry
        self.traversal = self._make_traversal(registry)
        self.grid = GridStateController(len(registry), self.colors, self.logger)
        self.grid.initialize(store)

        self.state: ControllerState = ControllerState.IDLE
        self._lock = threading.Lock()
        self._owner: Optional[int] = None
        self._stats: Dict[str, int] = {
            "clicks_processed": 0,
            "clicks_ignored": 0,
            "cells_updated": 0,
            "conditions_reported": 0,
            "resets": 0,
        }

    # ------------------------------------------------------------------ #
    # Clicks
    # ------------------------------------------------------------------ #

    def click(self, tp: int, column: int = ROOT_COLUMN) -> Optional[TraversalResult]:
        """
        Handle a click on cell ``(tp, column)``.

        Args:
            tp: Row of the clicked cell.
            column: Column of the clicked cell.

        Returns:
            The applied TraversalResult, or None when the click was a
            no-op (non-root column, unknown row, or dropped while busy).

        Raises:
            MalformedExplanation: If the row's explanation exceeds the
                depth bound. The grid is left unchanged.
        """
        if column != ROOT_COLUMN:
            self.logger.debug(f"Ignored click on display-only column {column}")
            self._stats["clicks_ignored"] += 1
            return None

        if not self._acquire():
            self.logger.warning(f"Dropped click at tp={tp}: controller is busy")
            self._stats["clicks_ignored"] += 1
            return None

        try:
            self.state = ControllerState.PROCESSING
            try:
                row = self.store.row_at(tp)
            except UnknownTimePoint as exc:
                self.logger.warning(str(exc))
                self._stats["clicks_ignored"] += 1
                return None

            result = self.traversal.changed_cells(row.explanation, tp)
            self.grid.apply_batch(result)

            self._stats["clicks_processed"] += 1
            self._stats["cells_updated"] += len(result)
            self._stats["conditions_reported"] += len(result.conditions)
            self.logger.click_processed(tp, len(result), len(result.conditions))
            return result
        finally:
            self.state = ControllerState.IDLE
            self._owner = None
            self._lock.release()

    # ------------------------------------------------------------------ #
    # Control surface
    # ------------------------------------------------------------------ #

    def reset(self) -> GridSnapshot:
        """Discard all propagated coloring."""
        with self._lock:
            snapshot = self.grid.initialize(self.store)
            self.state = ControllerState.IDLE
        self._stats["resets"] += 1
        self.logger.info("Grid reset", rows=len(snapshot))
        return snapshot

    def refresh(
        self, store: TraceStore, registry: Optional[SubformulaRegistry] = None
    ) -> GridSnapshot:
        """
        Replace the trace (and optionally the registry) and reinitialize.

        Args:
            store: The reloaded trace.
            registry: New column catalog; keeps the current one if None.

        Returns:
            The reinitialized snapshot.
        """
        with self._lock:
            if registry is not None and registry is not self.registry:
                self.registry = registry
                self.traversal = self._make_traversal(registry)
                self.grid = GridStateController(len(registry), self.colors, self.logger)
            self.store = store
            snapshot = self.grid.initialize(store)
        self.logger.info("Trace refreshed", rows=len(store), columns=len(self.registry))
        return snapshot

    def append(self, rows: Iterable[TraceRow]) -> GridSnapshot:
        """
        Extend the trace with new rows.

        Only the new rows are initialized; propagated coloring of the
        existing rows is kept.

        Raises:
            ValueError: If the rows do not continue the trace.
        """
        with self._lock:
            self.store = self.store.extended(rows)
            snapshot = self.grid.extend(self.store)
        self.logger.info("Rows appended", rows=len(self.store))
        return snapshot

    # ------------------------------------------------------------------ #
    # Read side
    # ------------------------------------------------------------------ #

    @property
    def snapshot(self) -> GridSnapshot:
        return self.grid.snapshot

    @property
    def statistics(self) -> Dict[str, Any]:
        """Interaction counters plus the current grid size."""
        stats: Dict[str, Any] = dict(self._stats)
        stats["rows"] = len(self.store)
        stats["columns"] = len(self.registry)
        return stats

    def log_statistics(self) -> None:
        self.logger.statistics(self.statistics)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _make_traversal(self, registry: SubformulaRegistry) -> ExplanationTraversal:
        return ExplanationTraversal(
            registry, self.colors, max_depth=self.max_depth, logger=self.logger
        )

    def _acquire(self) -> bool:
        """Take the click lock according to the busy policy."""
        me = threading.get_ident()
        if self._owner == me:
            return False
        blocking = self.busy_policy == "queue"
        if not self._lock.acquire(blocking=blocking):
            return False
        self._owner = me
        return True
