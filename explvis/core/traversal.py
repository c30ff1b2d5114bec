"""
Changed-cells engine.

Given the explanation node behind a clicked cell, computes every grid
cell its justification touches. Temporal operators justify a verdict
with evidence at other time points, so each descendant is addressed by
its own time point, not the clicked row's.

The result depends only on the node and its owning time point: it never
reads grid state, and a repeated call yields an equal result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple

from explvis.core.colors import Color, VerdictColorMap
from explvis.core.explanation import ExplanationNode, Operator
from explvis.core.registry import SubformulaRegistry, UnregisteredFormula
from explvis.utils.logger import GridLogger, LogLevel

DEFAULT_MAX_DEPTH = 256

Cell = Tuple[int, int]


class MalformedExplanation(Exception):
    """Raised when an explanation tree is too deep to be a valid proof."""

    def __init__(self, message: str, tp: int, depth: int) -> None:
        super().__init__(message)
        self.tp = tp
        self.depth = depth


@dataclass(frozen=True)
class CellUpdate:
    """
    A single cell write.

    Attributes:
        tp: Row (time point) of the cell.
        column: Column index of the cell.
        color: New color of the cell.
    """

    tp: int
    column: int
    color: Color

    @property
    def cell(self) -> Cell:
        return (self.tp, self.column)


@dataclass(frozen=True)
class TraversalResult:
    """
    Outcome of one traversal.

    Attributes:
        cells: Read-only mapping from ``(tp, column)`` to the new color.
        conditions: Unregistered formulas whose branches were skipped.
    """

    cells: Mapping[Cell, Color] = field(default_factory=lambda: MappingProxyType({}))
    conditions: Tuple[UnregisteredFormula, ...] = ()

    @property
    def updates(self) -> FrozenSet[CellUpdate]:
        """The result as a set of cell updates."""
        return frozenset(
            CellUpdate(tp, col, color) for (tp, col), color in self.cells.items()
        )

    def __len__(self) -> int:
        return len(self.cells)


def _same(parent: int, child: int) -> bool:
    return child == parent


def _past(parent: int, child: int) -> bool:
    return child <= parent


def _future(parent: int, child: int) -> bool:
    return child >= parent


def _any(parent: int, child: int) -> bool:
    return True


# Where a child of each operator may sit relative to its parent.
_CHILD_TP_RULES: Dict[Operator, Callable[[int, int], bool]] = {
    Operator.TRUE: _same,
    Operator.FALSE: _same,
    Operator.ATOM: _same,
    Operator.NEG: _same,
    Operator.AND: _same,
    Operator.OR: _same,
    Operator.IMP: _same,
    Operator.IFF: _same,
    Operator.EXISTS: _same,
    Operator.FORALL: _same,
    Operator.PREV: lambda parent, child: child == parent - 1,
    Operator.NEXT: lambda parent, child: child == parent + 1,
    Operator.ONCE: _past,
    Operator.HISTORICALLY: _past,
    Operator.SINCE: _past,
    Operator.EVENTUALLY: _future,
    Operator.ALWAYS: _future,
    Operator.UNTIL: _future,
    Operator.UNKNOWN: _any,
}

_missing = set(Operator) - set(_CHILD_TP_RULES)
if _missing:
    raise RuntimeError(
        f"No child time point rule for operator(s): {sorted(op.name for op in _missing)}"
    )


class ExplanationTraversal:
    """
    Computes the cell updates implied by an explanation node.

    Attributes:
        registry: Resolves formula identities to columns.
        colors: Maps node kinds to colors.
        max_depth: Deepest nesting accepted before the tree is
            considered malformed.
    """

    def __init__(
        self,
        registry: SubformulaRegistry,
        colors: Optional[VerdictColorMap] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        logger: Optional[GridLogger] = None,
    ) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self.registry = registry
        self.colors = colors or VerdictColorMap()
        self.max_depth = max_depth
        self.logger = logger or GridLogger(LogLevel.SILENT)

    def changed_cells(self, node: ExplanationNode, owning_tp: int) -> TraversalResult:
        """
        Compute the updates implied by the descendants of ``node``.

        Children are visited in pre-order. Each child contributes one
        update at its own time point and column, then its own children
        are visited with the child's time point as their owner. ``node``
        itself is never emitted, and neither is the root cell
        ``(owning_tp, 0)``.

        A child whose formula is not registered is skipped together with
        its subtree; the condition is returned alongside the updates of
        the other branches.

        Args:
            node: The explanation node behind the clicked cell.
            owning_tp: Time point ``node`` is evaluated at.

        Returns:
            A TraversalResult with the cell colors and skipped conditions.

        Raises:
            MalformedExplanation: If nesting exceeds ``max_depth``. No
                partial result is produced.
        """
        cells: Dict[Cell, Color] = {}
        conditions: List[UnregisteredFormula] = []
        self._visit(node, owning_tp, 1, cells, conditions)

        root_cell = (owning_tp, 0)
        if root_cell in cells:
            self.logger.debug(f"Dropped update to root cell tp={owning_tp}")
            del cells[root_cell]

        for cond in conditions:
            self.logger.condition(cond)
        return TraversalResult(
            cells=MappingProxyType(cells), conditions=tuple(conditions)
        )

    def _visit(
        self,
        node: ExplanationNode,
        owning_tp: int,
        depth: int,
        cells: Dict[Cell, Color],
        conditions: List[UnregisteredFormula],
    ) -> None:
        if not node.children:
            return
        if depth > self.max_depth:
            raise MalformedExplanation(
                f"Explanation at tp={owning_tp} nests deeper than {self.max_depth}",
                tp=owning_tp,
                depth=depth,
            )

        rule = _CHILD_TP_RULES[node.operator]
        for child in node.children:
            if not rule(owning_tp, child.tp):
                self.logger.warning(
                    f"{node.kind} at tp={owning_tp} has child {child.kind} "
                    f"at unexpected tp={child.tp}"
                )
            try:
                col = self.registry.column_of(child.formula_id)
            except UnregisteredFormula:
                conditions.append(UnregisteredFormula(child.formula_id, child.tp))
                continue

            color = self.colors.color(child)
            key = (child.tp, col)
            previous = cells.get(key)
            if previous is not None and previous is not color:
                self.logger.warning(
                    f"Conflicting colors for tp={child.tp} column={col}: "
                    f"{previous.name} then {color.name}"
                )
            cells[key] = color
            self.logger.debug(
                f"tp={child.tp} column={col} -> {color.name}", kind=child.kind
            )
            self._visit(child, child.tp, depth + 1, cells, conditions)
