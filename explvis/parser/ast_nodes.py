"""
Abstract syntax tree node definitions for MTL formulas.

Defines immutable, hashable AST nodes for constants (TRUE, FALSE),
propositions, boolean connectives, and the past (previous, once,
historically, since) and future (next, eventually, always, until)
temporal operators. Temporal operators carry an optional time interval.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import FrozenSet, Optional, Tuple


class Interval:
    """
    Time interval constraining a temporal operator.

    Attributes:
        lower: Inclusive lower bound.
        upper: Inclusive upper bound, or None for unbounded.
    """

    __slots__ = ("lower", "upper")

    def __init__(self, lower: int = 0, upper: Optional[int] = None) -> None:
        if lower < 0:
            raise ValueError(f"Interval lower bound must be >= 0, got {lower}")
        if upper is not None and upper < lower:
            raise ValueError(f"Empty interval [{lower},{upper}]")
        self.lower = lower
        self.upper = upper

    def is_full(self) -> bool:
        """True for the unconstrained interval ``[0,*)``."""
        return self.lower == 0 and self.upper is None

    def __str__(self) -> str:
        if self.upper is None:
            return f"[{self.lower},*)"
        return f"[{self.lower},{self.upper}]"

    def __repr__(self) -> str:
        return f"Interval({self.lower}, {self.upper})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.lower == other.lower and self.upper == other.upper

    def __hash__(self) -> int:
        return hash(("Interval", self.lower, self.upper))


FULL = Interval()


class Formula(ABC):
    """
    Base class for all MTL formula nodes.

    All formula nodes are immutable and support equality comparison
    and hashing for use in sets and dictionaries.
    """

    @abstractmethod
    def operands(self) -> Tuple[Formula, ...]:
        """Return the direct operands, left to right."""

    @abstractmethod
    def __str__(self) -> str:
        """Return string representation of formula."""

    @abstractmethod
    def __eq__(self, other: object) -> bool:
        """Check equality with another formula."""

    @abstractmethod
    def __hash__(self) -> int:
        """Return hash for use in sets and dicts."""

    def subformulas(self) -> FrozenSet[Formula]:
        """Return set of all subformulas including self."""
        result = {self}
        for op in self.operands():
            result |= op.subformulas()
        return frozenset(result)

    def __repr__(self) -> str:
        return str(self)


# === Constants ===


class TrueConstant(Formula):
    """Represents the constant TRUE."""

    def operands(self) -> Tuple[Formula, ...]:
        return ()

    def __str__(self) -> str:
        return "TRUE"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrueConstant):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(("TrueConstant",))


class FalseConstant(Formula):
    """Represents the constant FALSE."""

    def operands(self) -> Tuple[Formula, ...]:
        return ()

    def __str__(self) -> str:
        return "FALSE"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FalseConstant):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(("FalseConstant",))


# === Atomic ===


class Proposition(Formula):
    """
    Represents an atomic proposition.

    Attributes:
        name: The proposition identifier (e.g., "ready", "p1").
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def operands(self) -> Tuple[Formula, ...]:
        return ()

    def __str__(self) -> str:
        return self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Proposition):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(("Proposition", self.name))


# === Unary Operators ===


class Negation(Formula):
    """
    Represents !phi (negation).

    Attributes:
        operand: The formula being negated.
    """

    __slots__ = ("operand",)

    def __init__(self, operand: Formula) -> None:
        self.operand = operand

    def operands(self) -> Tuple[Formula, ...]:
        return (self.operand,)

    def __str__(self) -> str:
        return f"!{self.operand}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Negation):
            return NotImplemented
        return self.operand == other.operand

    def __hash__(self) -> int:
        return hash(("Negation", self.operand))


class _TemporalUnary(Formula):
    """Base class for interval-constrained unary operators."""

    __slots__ = ("operand", "interval")

    _op_symbol: str = ""

    def __init__(self, operand: Formula, interval: Interval = FULL) -> None:
        self.operand = operand
        self.interval = interval

    def operands(self) -> Tuple[Formula, ...]:
        return (self.operand,)

    def __str__(self) -> str:
        bound = "" if self.interval.is_full() else str(self.interval)
        return f"{self._op_symbol}{bound} {self.operand}"

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.operand == other.operand and self.interval == other.interval

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.operand, self.interval))


class Previous(_TemporalUnary):
    """
    Represents Y phi (previous).

    True at time point i if phi held at i-1 and the timestamp gap
    lies within the interval. False at the first time point.
    """

    _op_symbol = "Y"


class Next(_TemporalUnary):
    """Represents X phi (next): phi holds at the following time point."""

    _op_symbol = "X"


class Once(_TemporalUnary):
    """Represents O phi (once): phi held at some past time point."""

    _op_symbol = "O"


class Historically(_TemporalUnary):
    """Represents H phi (historically): phi held at all past time points."""

    _op_symbol = "H"


class Eventually(_TemporalUnary):
    """Represents F phi (eventually): phi holds at some future time point."""

    _op_symbol = "F"


class Always(_TemporalUnary):
    """Represents G phi (always): phi holds at all future time points."""

    _op_symbol = "G"


# === Binary Operator Base ===


class _BinaryOp(Formula):
    """Base class for binary operators (not part of public API)."""

    __slots__ = ("left", "right")

    _op_symbol: str = ""

    def __init__(self, left: Formula, right: Formula) -> None:
        self.left = left
        self.right = right

    def operands(self) -> Tuple[Formula, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return f"({self.left} {self._op_symbol} {self.right})"

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.left == other.left and self.right == other.right

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.left, self.right))


class _TemporalBinary(_BinaryOp):
    """Base class for interval-constrained binary operators."""

    __slots__ = ("interval",)

    def __init__(
        self, left: Formula, right: Formula, interval: Interval = FULL
    ) -> None:
        super().__init__(left, right)
        self.interval = interval

    def __str__(self) -> str:
        bound = "" if self.interval.is_full() else str(self.interval)
        return f"({self.left} {self._op_symbol}{bound} {self.right})"

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return (
            self.left == other.left
            and self.right == other.right
            and self.interval == other.interval
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.left, self.right, self.interval))


# === Binary Operators ===


class Conjunction(_BinaryOp):
    """Represents phi & psi (conjunction/AND)."""

    _op_symbol = "&"


class Disjunction(_BinaryOp):
    """Represents phi | psi (disjunction/OR)."""

    _op_symbol = "|"


class Implication(_BinaryOp):
    """
    Represents phi -> psi (implication).

    Attributes:
        left: Antecedent (the "if" part).
        right: Consequent (the "then" part).
    """

    _op_symbol = "->"


class Biconditional(_BinaryOp):
    """Represents phi <-> psi (biconditional/iff)."""

    _op_symbol = "<->"


class Since(_TemporalBinary):
    """
    Represents phi S psi (since operator).

    phi S psi is true at time point i if psi held at some j <= i whose
    timestamp distance from i lies within the interval, and phi held at
    every time point from j+1 to i.

    Attributes:
        left: The formula that must hold since psi (phi in "phi S psi").
        right: The formula that triggered the since (psi in "phi S psi").
    """

    _op_symbol = "S"


class Until(_TemporalBinary):
    """
    Represents phi U psi (until operator).

    The future mirror of Since: psi holds at some j >= i within the
    interval and phi holds at every time point from i to j-1.
    """

    _op_symbol = "U"
