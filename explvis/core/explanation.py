"""
Explanation tree nodes produced by a point-wise temporal-logic monitor.

An explanation is a proof (for a satisfied formula) or a violation proof
(for a violated one). Every node instantiates one subformula at one time
point, and the children of temporal operators may live at time points
other than their parent's.

The monitor names each node by its proof constructor (``SSince``,
``VAtom``, ...). The constructor fixes both the verdict and the operator,
so both are derived here from the raw kind string through a closed table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple


class Verdict(Enum):
    """Outcome of evaluating a formula at a time point."""

    SATISFIED = "satisfied"
    VIOLATED = "violated"


class Operator(Enum):
    """Operator kinds an explanation node can instantiate."""

    TRUE = "true"
    FALSE = "false"
    ATOM = "atom"
    NEG = "neg"
    AND = "and"
    OR = "or"
    IMP = "imp"
    IFF = "iff"
    EXISTS = "exists"
    FORALL = "forall"
    PREV = "prev"
    NEXT = "next"
    ONCE = "once"
    HISTORICALLY = "historically"
    EVENTUALLY = "eventually"
    ALWAYS = "always"
    SINCE = "since"
    UNTIL = "until"
    UNKNOWN = "unknown"


_S = Verdict.SATISFIED
_V = Verdict.VIOLATED

# Proof constructors emitted by the upstream monitor.
_CONSTRUCTORS: Dict[str, Tuple[Verdict, Operator]] = {
    "STT": (_S, Operator.TRUE),
    "SAtom": (_S, Operator.ATOM),
    "SNeg": (_S, Operator.NEG),
    "SDisjL": (_S, Operator.OR),
    "SDisjR": (_S, Operator.OR),
    "SConj": (_S, Operator.AND),
    "SImpL": (_S, Operator.IMP),
    "SImpR": (_S, Operator.IMP),
    "SIffSS": (_S, Operator.IFF),
    "SIffVV": (_S, Operator.IFF),
    "SExists": (_S, Operator.EXISTS),
    "SForall": (_S, Operator.FORALL),
    "SPrev": (_S, Operator.PREV),
    "SNext": (_S, Operator.NEXT),
    "SOnce": (_S, Operator.ONCE),
    "SEventually": (_S, Operator.EVENTUALLY),
    "SHistorically": (_S, Operator.HISTORICALLY),
    "SHistoricallyOut": (_S, Operator.HISTORICALLY),
    "SAlways": (_S, Operator.ALWAYS),
    "SSince": (_S, Operator.SINCE),
    "SUntil": (_S, Operator.UNTIL),
    "VFF": (_V, Operator.FALSE),
    "VAtom": (_V, Operator.ATOM),
    "VNeg": (_V, Operator.NEG),
    "VDisj": (_V, Operator.OR),
    "VConjL": (_V, Operator.AND),
    "VConjR": (_V, Operator.AND),
    "VImp": (_V, Operator.IMP),
    "VIffSV": (_V, Operator.IFF),
    "VIffVS": (_V, Operator.IFF),
    "VExists": (_V, Operator.EXISTS),
    "VForall": (_V, Operator.FORALL),
    "VPrev": (_V, Operator.PREV),
    "VPrev0": (_V, Operator.PREV),
    "VPrevOutL": (_V, Operator.PREV),
    "VPrevOutR": (_V, Operator.PREV),
    "VNext": (_V, Operator.NEXT),
    "VNextOutL": (_V, Operator.NEXT),
    "VNextOutR": (_V, Operator.NEXT),
    "VOnceOut": (_V, Operator.ONCE),
    "VOnce": (_V, Operator.ONCE),
    "VEventually": (_V, Operator.EVENTUALLY),
    "VHistorically": (_V, Operator.HISTORICALLY),
    "VAlways": (_V, Operator.ALWAYS),
    "VSinceOut": (_V, Operator.SINCE),
    "VSince": (_V, Operator.SINCE),
    "VSinceInf": (_V, Operator.SINCE),
    "VUntil": (_V, Operator.UNTIL),
    "VUntilInf": (_V, Operator.UNTIL),
}

# Bare verdict names, matched case-insensitively.
_VERDICT_ALIASES: Dict[str, Verdict] = {
    "satisfied": _S,
    "violated": _V,
    "true": _S,
    "false": _V,
}


def classify_kind(kind: str) -> Tuple[Optional[Verdict], Operator]:
    """
    Derive the verdict and operator of a raw node kind.

    Args:
        kind: The constructor name emitted by the monitor.

    Returns:
        ``(verdict, operator)``. Unrecognized kinds yield
        ``(None, Operator.UNKNOWN)``.
    """
    if kind in _CONSTRUCTORS:
        return _CONSTRUCTORS[kind]
    alias = _VERDICT_ALIASES.get(kind.strip().lower())
    if alias is not None:
        return alias, Operator.UNKNOWN
    return None, Operator.UNKNOWN


@dataclass(frozen=True)
class ExplanationNode:
    """
    Immutable node of an explanation tree.

    Attributes:
        kind: Raw proof constructor name.
        formula_id: Identity of the subformula this node instantiates.
        tp: Time point the node is evaluated at.
        children: Ordered child nodes, each carrying its own time point.
        verdict: Verdict derived from ``kind`` (None if unrecognized).
        operator: Operator derived from ``kind``.
    """

    kind: str
    formula_id: str
    tp: int
    children: Tuple[ExplanationNode, ...] = ()
    verdict: Optional[Verdict] = field(init=False, compare=False)
    operator: Operator = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if self.tp < 0:
            raise ValueError(f"tp must be non-negative, got {self.tp}")
        verdict, operator = classify_kind(self.kind)
        object.__setattr__(self, "verdict", verdict)
        object.__setattr__(self, "operator", operator)
        object.__setattr__(self, "children", tuple(self.children))

    def is_leaf(self) -> bool:
        """True if the node has no children."""
        return not self.children

    def walk(self) -> Iterator[ExplanationNode]:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))
