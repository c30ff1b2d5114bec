"""
Render boundary for the explanation grid.

Describes the grid's columns with neutral descriptors any grid component
can consume, exposes per-cell color accessors, and renders the grid as
an ASCII table or a JSON document.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from explvis.core.colors import Color
from explvis.core.controller import ROOT_COLUMN, InteractionController

FIXED_COLUMN_WIDTH = 55
WIDTH_PER_CHAR = 10

_SYMBOLS = {
    Color.SATISFIED: "+",
    Color.VIOLATED: "x",
    Color.NEUTRAL: ".",
}


@dataclass(frozen=True)
class Column:
    """
    Neutral column descriptor.

    Attributes:
        index: Formula column index, or None for the fixed tp/ts columns.
        field: Field name rows are keyed by.
        label: Header text.
        width_hint: Suggested width in pixels.
        clickable: Whether cells in the column accept clicks.
    """

    index: Optional[int]
    field: str
    label: str
    width_hint: int
    clickable: bool = False


class GridVisualizer:
    """
    Read-only view of a controller's grid for rendering.

    Attributes:
        controller: The controller whose current state is rendered.
    """

    def __init__(self, controller: InteractionController) -> None:
        self.controller = controller

    def columns(self) -> List[Column]:
        """Fixed ``tp``/``ts`` columns followed by one per registry entry."""
        cols = [
            Column(None, "tp", "TP", FIXED_COLUMN_WIDTH),
            Column(None, "ts", "TS", FIXED_COLUMN_WIDTH),
        ]
        for sub in self.controller.registry:
            cols.append(
                Column(
                    index=sub.column_index,
                    field=f"f{sub.column_index}",
                    label=sub.label,
                    width_hint=WIDTH_PER_CHAR * len(sub.label),
                    clickable=self.is_clickable(sub.column_index),
                )
            )
        return cols

    def rows(self) -> List[Dict[str, Any]]:
        """Row records with ``id``, ``tp`` and ``ts`` fields."""
        return [
            {"id": row.tp, "tp": row.tp, "ts": row.ts}
            for row in self.controller.store
        ]

    def render_cell(self, tp: int, column: int) -> Color:
        """Current color of cell ``(tp, column)``; missing rows are NEUTRAL."""
        return self.controller.snapshot.read(tp, column)

    @staticmethod
    def is_clickable(column: int) -> bool:
        return column == ROOT_COLUMN

    def to_ascii(self, max_width: int = 120) -> str:
        """
        Render the grid as a text table.

        Cells show ``+`` for satisfied, ``x`` for violated and ``.`` for
        neutral. Long headers are truncated.

        Args:
            max_width: Maximum line width.

        Returns:
            Multi-line string ready for terminal output.
        """
        snapshot = self.controller.snapshot
        labels = [sub.label for sub in self.controller.registry]
        col_width = max(3, min(max(len(label) for label in labels) + 2, 16))

        header = "TP".rjust(4) + "TS".rjust(10) + " "
        for label in labels:
            if len(label) > col_width - 1:
                label = label[: col_width - 2] + "~"
            header += label.center(col_width)
        lines = [header.rstrip()[:max_width]]
        lines.append("-" * min(len(lines[0]), max_width))

        for row in self.controller.store:
            line = str(row.tp).rjust(4) + f"{row.ts:g}".rjust(10) + " "
            for col in range(len(labels)):
                line += _SYMBOLS[snapshot.read(row.tp, col)].center(col_width)
            lines.append(line.rstrip()[:max_width])

        return "\n".join(lines)

    def to_json(self) -> str:
        """
        Generate a JSON document of the columns and current cell colors.

        Returns:
            A JSON string with ``columns`` and ``rows``.
        """
        snapshot = self.controller.snapshot
        columns = [
            {
                "index": col.index,
                "field": col.field,
                "label": col.label,
                "width": col.width_hint,
                "clickable": col.clickable,
            }
            for col in self.columns()
        ]
        rows = []
        for record in self.rows():
            tp = record["tp"]
            record["cells"] = [
                snapshot.read(tp, col).css for col in range(snapshot.width)
            ]
            rows.append(record)
        return json.dumps({"columns": columns, "rows": rows}, indent=2)
