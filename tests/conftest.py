"""
Shared pytest fixtures for the EXPLVIS test suite.

Provides explanation node builders, a small registry and trace matching
the Since scenario, and paths to the JSON trace fixtures.
"""

from pathlib import Path

import pytest

from explvis.core.explanation import ExplanationNode
from explvis.core.registry import SubformulaRegistry
from explvis.core.trace import TraceRow, TraceStore


def node(kind: str, formula_id: str, tp: int, *children: ExplanationNode) -> ExplanationNode:
    """Build an explanation node with positional children."""
    return ExplanationNode(kind=kind, formula_id=formula_id, tp=tp, children=children)


@pytest.fixture
def since_registry() -> SubformulaRegistry:
    """Columns: 0 = (A S B), 1 = A, 2 = B."""
    return SubformulaRegistry.from_labels(["(A S B)", "A", "B"])


@pytest.fixture
def since_store() -> TraceStore:
    """
    Six-row trace whose tp=5 root is a violated Since justified by a
    violated B at tp=3.
    """
    return TraceStore(
        [
            TraceRow(0, 0.0, node("VSince", "(A S B)", 0, node("VAtom", "B", 0))),
            TraceRow(1, 1.5, node("SSince", "(A S B)", 1, node("SAtom", "B", 1))),
            TraceRow(
                2,
                3.0,
                node("SSince", "(A S B)", 2, node("SAtom", "B", 1), node("SAtom", "A", 2)),
            ),
            TraceRow(3, 4.0, node("Violated", "B", 3)),
            TraceRow(4, 6.0, node("VSince", "(A S B)", 4, node("VAtom", "B", 4))),
            TraceRow(5, 7.0, node("VSince", "(A S B)", 5, node("VAtom", "B", 3))),
        ]
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def traces_dir(fixtures_dir: Path) -> Path:
    """Path to the test trace fixtures directory."""
    return fixtures_dir / "traces"


@pytest.fixture
def tmp_trace_file(tmp_path: Path) -> Path:
    """Path for a temporary trace JSON file."""
    return tmp_path / "trace.json"
