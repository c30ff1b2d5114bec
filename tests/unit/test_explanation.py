"""
Tests for explanation nodes and verdict colors.

Tests cover kind classification, derived verdict and operator fields,
node equality, pre-order walking, and the total verdict color map.
"""

import pytest

from explvis.core.colors import Color, VerdictColorMap
from explvis.core.explanation import (
    ExplanationNode,
    Operator,
    Verdict,
    classify_kind,
)


def _node(kind: str, fid: str, tp: int, *children: ExplanationNode) -> ExplanationNode:
    return ExplanationNode(kind=kind, formula_id=fid, tp=tp, children=children)


# ---------------------------------------------------------------------------
# Tests: Kind classification
# ---------------------------------------------------------------------------


class TestClassifyKind:
    """Test mapping of constructor names to verdict and operator."""

    @pytest.mark.parametrize(
        "kind, verdict, operator",
        [
            ("SAtom", Verdict.SATISFIED, Operator.ATOM),
            ("VAtom", Verdict.VIOLATED, Operator.ATOM),
            ("SSince", Verdict.SATISFIED, Operator.SINCE),
            ("VSinceInf", Verdict.VIOLATED, Operator.SINCE),
            ("VUntil", Verdict.VIOLATED, Operator.UNTIL),
            ("SPrev", Verdict.SATISFIED, Operator.PREV),
            ("VNextOutR", Verdict.VIOLATED, Operator.NEXT),
            ("SDisjR", Verdict.SATISFIED, Operator.OR),
            ("VConjL", Verdict.VIOLATED, Operator.AND),
            ("STT", Verdict.SATISFIED, Operator.TRUE),
            ("VFF", Verdict.VIOLATED, Operator.FALSE),
        ],
    )
    def test_constructors(self, kind: str, verdict: Verdict, operator: Operator) -> None:
        assert classify_kind(kind) == (verdict, operator)

    def test_verdict_aliases(self) -> None:
        assert classify_kind("Satisfied") == (Verdict.SATISFIED, Operator.UNKNOWN)
        assert classify_kind("VIOLATED") == (Verdict.VIOLATED, Operator.UNKNOWN)
        assert classify_kind("true") == (Verdict.SATISFIED, Operator.UNKNOWN)

    def test_unknown_kind(self) -> None:
        assert classify_kind("SFoo") == (None, Operator.UNKNOWN)
        assert classify_kind("") == (None, Operator.UNKNOWN)


# ---------------------------------------------------------------------------
# Tests: ExplanationNode
# ---------------------------------------------------------------------------


class TestExplanationNode:
    """Test node construction and derived fields."""

    def test_derived_fields(self) -> None:
        n = _node("VSince", "(a S b)", 4)
        assert n.verdict is Verdict.VIOLATED
        assert n.operator is Operator.SINCE
        assert n.is_leaf()

    def test_children_become_tuple(self) -> None:
        child = _node("SAtom", "a", 1)
        n = ExplanationNode(kind="SNeg", formula_id="!a", tp=1, children=[child])
        assert n.children == (child,)

    def test_negative_tp_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            _node("SAtom", "a", -1)

    def test_frozen(self) -> None:
        n = _node("SAtom", "a", 0)
        with pytest.raises(AttributeError):
            n.tp = 3  # type: ignore[misc]

    def test_equality_and_hash(self) -> None:
        a = _node("SSince", "s", 2, _node("SAtom", "b", 1))
        b = _node("SSince", "s", 2, _node("SAtom", "b", 1))
        assert a == b
        assert hash(a) == hash(b)
        assert a != _node("SSince", "s", 2, _node("SAtom", "b", 0))

    def test_walk_pre_order(self) -> None:
        tree = _node(
            "SConj", "r", 0,
            _node("SNeg", "x", 0, _node("VAtom", "p", 0)),
            _node("SAtom", "q", 0),
        )
        assert [n.formula_id for n in tree.walk()] == ["r", "x", "p", "q"]


# ---------------------------------------------------------------------------
# Tests: VerdictColorMap
# ---------------------------------------------------------------------------


class TestVerdictColorMap:
    """Test the total verdict to color function."""

    def test_kind_strings(self) -> None:
        colors = VerdictColorMap()
        assert colors.color("SSince") is Color.SATISFIED
        assert colors.color("VAtom") is Color.VIOLATED
        assert colors.color("Violated") is Color.VIOLATED

    def test_verdicts(self) -> None:
        colors = VerdictColorMap()
        assert colors.color(Verdict.SATISFIED) is Color.SATISFIED
        assert colors.color(Verdict.VIOLATED) is Color.VIOLATED

    def test_nodes(self) -> None:
        colors = VerdictColorMap()
        assert colors.color(_node("VUntil", "u", 0)) is Color.VIOLATED

    def test_unknown_is_neutral(self) -> None:
        """Unrecognized input degrades to NEUTRAL instead of failing."""
        colors = VerdictColorMap()
        assert colors.color("Bogus") is Color.NEUTRAL
        assert colors.color(_node("Bogus", "u", 0)) is Color.NEUTRAL
        assert colors.color(None) is Color.NEUTRAL

    def test_callable(self) -> None:
        assert VerdictColorMap()("SAtom") is Color.SATISFIED

    def test_css_values(self) -> None:
        assert Color.SATISFIED.css.startswith("#")
        assert len({c.css for c in Color}) == 3
