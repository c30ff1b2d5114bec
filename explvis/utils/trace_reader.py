"""
JSON trace file parser for monitor explanations.

Reads a trace of per-time-point explanations, builds the subformula
registry from the column catalog, and constructs the immutable trace
store. Any structural problem is fatal: the reader raises before a grid
can be built from a malformed trace.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from explvis.core.explanation import ExplanationNode
from explvis.core.registry import SubformulaRegistry
from explvis.core.trace import TraceRow, TraceStore
from explvis.parser.grammar import ParseError
from explvis.parser.lexer import LexerError
from explvis.utils.logger import GridLogger, LogLevel


class TraceFormatError(ValueError):
    """Raised when a trace cannot be loaded."""


@dataclass
class TraceData:
    """
    Complete trace data loaded from a file.

    Attributes:
        registry: Column catalog (column 0 is the root formula).
        store: Trace rows with their root explanations.
        columns: Column header labels in column order.
    """

    registry: SubformulaRegistry
    store: TraceStore
    columns: Tuple[str, ...]


class TraceReader:
    """
    Parses JSON trace files into a registry and a trace store.

    Expected format::

        {
          "columns": ["(a S b)", "a", "b"],
          "subformulas": [{"id": "(a S b)", "label": "(a S b)"}, ...],
          "explanations": [
            {"tp": 0, "ts": 0,
             "explanation": {"kind": "SSince", "formulaId": "(a S b)",
                             "tp": 0, "children": [...]}}
          ]
        }

    ``subformulas`` entry 0 is the root formula. Without ``subformulas``
    the registry is built from ``columns``; without either, from the
    optional ``formula`` string. Nodes may use ``type`` instead of
    ``kind``; a node without ``tp`` inherits its parent's.

    Attributes:
        filepath: Path to the trace JSON file.
    """

    def __init__(self, filepath: Path, logger: Optional[GridLogger] = None) -> None:
        """
        Initialize reader with file path.

        Args:
            filepath: Path to the JSON trace file.
            logger: Optional logger for load diagnostics.
        """
        self.filepath: Path = Path(filepath)
        self.logger: GridLogger = logger or GridLogger(LogLevel.SILENT)

    def read_all(self) -> TraceData:
        """
        Read the registry and every trace row.

        Raises:
            FileNotFoundError: If the trace file does not exist.
            TraceFormatError: If the trace is malformed.
        """
        return self.parse(self._load(), self.logger)

    def read_rows(self, start_tp: int = 0) -> List[TraceRow]:
        """
        Read only the ``explanations`` of the file.

        Used to load rows to append to an existing trace.

        Args:
            start_tp: Time point the first row must carry.

        Raises:
            FileNotFoundError: If the trace file does not exist.
            TraceFormatError: If the rows are malformed.
        """
        data = self._load()
        rows = self.parse_rows(data.get("explanations"))
        if rows and rows[0].tp != start_tp:
            raise TraceFormatError(
                f"Appended rows must start at tp={start_tp}, got tp={rows[0].tp}"
            )
        return rows

    # ------------------------------------------------------------------ #
    # Static helpers
    # ------------------------------------------------------------------ #

    @classmethod
    def parse(cls, data: Any, logger: Optional[GridLogger] = None) -> TraceData:
        """
        Build TraceData from an already decoded JSON document.

        Raises:
            TraceFormatError: If the document is malformed.
        """
        logger = logger or GridLogger(LogLevel.SILENT)
        if not isinstance(data, dict):
            raise TraceFormatError("Trace must be a JSON object")

        registry = cls.parse_registry(data)
        rows = cls.parse_rows(data.get("explanations"))
        try:
            store = TraceStore(rows)
        except ValueError as exc:
            raise TraceFormatError(str(exc)) from exc

        unregistered = sorted(
            {
                node.formula_id
                for row in store
                for node in row.explanation.walk()
                if node.formula_id not in registry
            }
        )
        if unregistered:
            logger.warning(
                f"Trace references {len(unregistered)} unregistered formula(s)",
                formulas=", ".join(unregistered),
            )
        logger.info("Trace loaded", rows=len(store), columns=len(registry))
        return TraceData(registry=registry, store=store, columns=registry.labels)

    @staticmethod
    def parse_registry(data: Dict[str, Any]) -> SubformulaRegistry:
        """
        Build the column catalog from ``subformulas``, ``columns`` or
        ``formula``, in that order of preference.

        Raises:
            TraceFormatError: If the catalog is missing or inconsistent.
        """
        columns = data.get("columns")
        subformulas = data.get("subformulas")

        if columns is not None and (
            not isinstance(columns, list) or not all(isinstance(c, str) for c in columns)
        ):
            raise TraceFormatError("'columns' must be a list of strings")

        try:
            if subformulas is not None:
                if not isinstance(subformulas, list):
                    raise TraceFormatError("'subformulas' must be a list")
                entries = [_parse_subformula(i, s) for i, s in enumerate(subformulas)]
                registry = SubformulaRegistry(entries)
                if columns is not None and list(registry.labels) != columns:
                    raise TraceFormatError(
                        f"'columns' {columns} disagree with subformula labels "
                        f"{list(registry.labels)}"
                    )
                return registry
            if columns is not None:
                return SubformulaRegistry.from_labels(columns)
            if isinstance(data.get("formula"), str):
                return SubformulaRegistry.from_formula(data["formula"])
        except (LexerError, ParseError, ValueError) as exc:
            if isinstance(exc, TraceFormatError):
                raise
            raise TraceFormatError(f"Invalid column catalog: {exc}") from exc

        raise TraceFormatError(
            "Trace needs 'subformulas', 'columns' or 'formula' to define columns"
        )

    @classmethod
    def parse_rows(cls, explanations: Any) -> List[TraceRow]:
        """
        Parse the ``explanations`` list into trace rows.

        Raises:
            TraceFormatError: If a row or node is malformed.
        """
        if not isinstance(explanations, list):
            raise TraceFormatError("'explanations' must be a list")

        rows: List[TraceRow] = []
        for i, entry in enumerate(explanations):
            if not isinstance(entry, dict):
                raise TraceFormatError(f"Row {i} must be an object")
            tp = _require_int(entry, "tp", f"row {i}")
            ts = entry.get("ts")
            if isinstance(ts, bool) or not isinstance(ts, (int, float)):
                raise TraceFormatError(f"Row {i} needs a numeric 'ts'")
            if not math.isfinite(ts):
                raise TraceFormatError(f"Row {i} has a non-finite 'ts': {ts}")
            if "explanation" not in entry:
                raise TraceFormatError(f"Row {i} has no 'explanation'")
            try:
                node = cls.parse_node(entry["explanation"], tp)
            except RecursionError:
                raise TraceFormatError(f"Explanation of row {i} is nested too deeply") from None
            rows.append(TraceRow(tp=tp, ts=float(ts), explanation=node))
        return rows

    @classmethod
    def parse_node(cls, data: Any, parent_tp: int) -> ExplanationNode:
        """
        Parse one explanation node and its subtree.

        Args:
            data: The decoded node object.
            parent_tp: Time point inherited when the node has no ``tp``.

        Raises:
            TraceFormatError: If the node is malformed.
        """
        if not isinstance(data, dict):
            raise TraceFormatError("Explanation node must be an object")
        kind = data.get("kind", data.get("type"))
        if not isinstance(kind, str):
            raise TraceFormatError("Explanation node needs a string 'kind'")
        formula_id = data.get("formulaId")
        if not isinstance(formula_id, str):
            raise TraceFormatError(f"Node '{kind}' needs a string 'formulaId'")
        tp = _require_int(data, "tp", f"node '{kind}'") if "tp" in data else parent_tp
        children = data.get("children", [])
        if not isinstance(children, list):
            raise TraceFormatError(f"Children of node '{kind}' must be a list")
        try:
            return ExplanationNode(
                kind=kind,
                formula_id=formula_id,
                tp=tp,
                children=tuple(cls.parse_node(c, tp) for c in children),
            )
        except ValueError as exc:
            if isinstance(exc, TraceFormatError):
                raise
            raise TraceFormatError(str(exc)) from exc

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _load(self) -> Any:
        """Decode the JSON document."""
        if not self.filepath.exists():
            raise FileNotFoundError(f"Trace file not found: {self.filepath}")
        try:
            with open(self.filepath, encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as exc:
            raise TraceFormatError(f"Invalid JSON in {self.filepath}: {exc}") from exc
        except RecursionError:
            raise TraceFormatError(f"Trace in {self.filepath} is nested too deeply") from None


def _parse_subformula(index: int, entry: Any) -> Tuple[str, str]:
    """Extract ``(id, label)`` from a subformula entry."""
    if not isinstance(entry, dict) or not isinstance(entry.get("id"), str):
        raise TraceFormatError(f"Subformula {index} needs a string 'id'")
    label = entry.get("label", entry["id"])
    if not isinstance(label, str):
        raise TraceFormatError(f"Subformula {index} label must be a string")
    return entry["id"], label


def _require_int(obj: Dict[str, Any], key: str, where: str) -> int:
    value = obj.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TraceFormatError(f"{where} needs an integer '{key}'")
    return value
