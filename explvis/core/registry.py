"""
Subformula registry: the grid's column catalog.

Binds every formula identity that can appear in an explanation to one
grid column. Column 0 is the root formula of the trace; the remaining
columns follow the registry order. The registry is fixed once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple

from explvis.parser.formula import ordered_subformulas, parse_formula


class UnregisteredFormula(KeyError):
    """Raised when a formula identity has no column in the registry."""

    def __init__(self, formula_id: str, tp: int = -1) -> None:
        super().__init__(formula_id)
        self.formula_id = formula_id
        self.tp = tp

    def __str__(self) -> str:
        where = f" at tp={self.tp}" if self.tp >= 0 else ""
        return f"formula '{self.formula_id}'{where} is not registered"


@dataclass(frozen=True)
class Subformula:
    """
    One registered (sub)formula.

    Attributes:
        column_index: Grid column bound to the formula.
        formula_id: Identity used by explanation nodes.
        label: Header text for the column.
    """

    column_index: int
    formula_id: str
    label: str


class SubformulaRegistry:
    """
    Ordered, immutable catalog of formula identities and their columns.

    Attributes:
        entries: Registered subformulas in column order.
    """

    __slots__ = ("_entries", "_columns")

    def __init__(self, entries: Iterable[Tuple[str, str]]) -> None:
        """
        Build the registry from ``(formula_id, label)`` pairs.

        The first pair is the root formula (column 0).

        Args:
            entries: Formula identities and labels in column order.

        Raises:
            ValueError: If no entries are given or an id repeats.
        """
        subs = tuple(
            Subformula(column_index=i, formula_id=fid, label=label)
            for i, (fid, label) in enumerate(entries)
        )
        if not subs:
            raise ValueError("Registry needs at least the root formula")

        columns: Dict[str, int] = {}
        for sub in subs:
            if sub.formula_id in columns:
                raise ValueError(f"Duplicate formula id '{sub.formula_id}'")
            columns[sub.formula_id] = sub.column_index

        self._entries: Tuple[Subformula, ...] = subs
        self._columns: Dict[str, int] = columns

    @classmethod
    def from_labels(cls, labels: Iterable[str]) -> SubformulaRegistry:
        """Registry whose formula ids are the column labels themselves."""
        return cls((label, label) for label in labels)

    @classmethod
    def from_formula(cls, text: str) -> SubformulaRegistry:
        """
        Registry derived from a formula string.

        The root formula takes column 0, followed by its distinct
        subformulas in pre-order. Ids and labels are canonical strings.

        Raises:
            LexerError: If the formula contains an invalid character.
            ParseError: If the formula is syntactically invalid.
        """
        return cls.from_labels(str(sub) for sub in ordered_subformulas(parse_formula(text)))

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #

    def column_of(self, formula_id: str) -> int:
        """
        Resolve a formula identity to its column.

        Raises:
            UnregisteredFormula: If the identity is unknown.
        """
        try:
            return self._columns[formula_id]
        except KeyError:
            raise UnregisteredFormula(formula_id) from None

    def label_of(self, column: int) -> str:
        """Header label of ``column``."""
        if not 0 <= column < len(self._entries):
            raise IndexError(f"Column {column} out of range")
        return self._entries[column].label

    def __contains__(self, formula_id: object) -> bool:
        return formula_id in self._columns

    @property
    def root(self) -> Subformula:
        """The root formula entry (column 0)."""
        return self._entries[0]

    @property
    def entries(self) -> Tuple[Subformula, ...]:
        return self._entries

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(sub.label for sub in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Subformula]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"SubformulaRegistry({list(self.labels)!r})"
