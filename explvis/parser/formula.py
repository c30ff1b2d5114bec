"""
Formula utilities for MTL.

Provides convenience functions for parsing and inspecting MTL formulas:
ordered subformula extraction (the grid's column order), proposition
listing, and canonical string conversion.
"""

from __future__ import annotations

from typing import FrozenSet, List

from explvis.parser.ast_nodes import Formula, Proposition
from explvis.parser.grammar import MTLParser


_parser = MTLParser()


def parse_formula(text: str) -> Formula:
    """
    Parse a formula string into an AST.

    Args:
        text: The MTL formula string.

    Returns:
        The root Formula node of the AST.

    Raises:
        LexerError: If the formula contains an invalid character.
        ParseError: If the formula is syntactically invalid.
    """
    return _parser.parse(text)


def ordered_subformulas(formula: Formula) -> List[Formula]:
    """
    Return the distinct subformulas of ``formula`` in pre-order.

    The formula itself comes first, then each operand's subformulas
    left to right. A subformula occurring more than once is listed at
    its first occurrence only.

    Args:
        formula: The formula to enumerate.

    Returns:
        A list of distinct subformulas, root first.
    """
    seen = set()
    ordered: List[Formula] = []
    stack = [formula]
    while stack:
        sub = stack.pop()
        if sub in seen:
            continue
        seen.add(sub)
        ordered.append(sub)
        stack.extend(reversed(sub.operands()))
    return ordered


def propositions(formula: Formula) -> FrozenSet[str]:
    """
    Return all proposition names appearing in the formula.

    Args:
        formula: The formula to inspect.

    Returns:
        A frozenset of proposition name strings.
    """
    return frozenset(
        sub.name for sub in formula.subformulas() if isinstance(sub, Proposition)
    )


def to_string(formula: Formula) -> str:
    """
    Convert a formula to its canonical string representation.

    Args:
        formula: The formula to convert.

    Returns:
        The canonical string representation.
    """
    return str(formula)
