"""
Verdict to display color mapping.

Every grid cell holds one color from a closed set. The mapping is total:
anything it does not recognize is shown as neutral instead of failing.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from explvis.core.explanation import ExplanationNode, Verdict, classify_kind


class Color(Enum):
    """Cell colors, valued by their CSS representation."""

    SATISFIED = "#4caf50"
    VIOLATED = "#f44336"
    NEUTRAL = "#9e9e9e"

    @property
    def css(self) -> str:
        return self.value


_VERDICT_COLORS = {
    Verdict.SATISFIED: Color.SATISFIED,
    Verdict.VIOLATED: Color.VIOLATED,
}


class VerdictColorMap:
    """
    Total, pure function from a verdict or node kind to a Color.

    Accepts a raw kind string (``"SSince"``, ``"Violated"``), a
    :class:`Verdict`, an :class:`ExplanationNode`, or ``None``.
    """

    def color(
        self, kind: Union[str, Verdict, ExplanationNode, None]
    ) -> Color:
        verdict: Optional[Verdict]
        if isinstance(kind, ExplanationNode):
            verdict = kind.verdict
        elif isinstance(kind, Verdict):
            verdict = kind
        elif isinstance(kind, str):
            verdict, _ = classify_kind(kind)
        else:
            verdict = None
        return _VERDICT_COLORS.get(verdict, Color.NEUTRAL)

    __call__ = color
