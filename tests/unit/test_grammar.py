"""
Tests for the MTL grammar/parser.

Tests cover atomic formulas, unary and binary operators, temporal
intervals, operator precedence, associativity, parentheses, and error
handling.
"""

import pytest

from explvis.parser.ast_nodes import (
    Always,
    Biconditional,
    Conjunction,
    Disjunction,
    Eventually,
    FalseConstant,
    Historically,
    Implication,
    Interval,
    Negation,
    Next,
    Once,
    Previous,
    Proposition,
    Since,
    TrueConstant,
    Until,
)
from explvis.parser.grammar import MTLParser, ParseError
from explvis.parser.lexer import LexerError


@pytest.fixture
def parser() -> MTLParser:
    """Return a fresh parser instance."""
    return MTLParser()


class TestAtomicFormulas:
    """Test parsing of propositions and constants."""

    def test_proposition(self, parser: MTLParser) -> None:
        result = parser.parse("ready")
        assert result == Proposition("ready")

    def test_true_constant(self, parser: MTLParser) -> None:
        assert isinstance(parser.parse("true"), TrueConstant)

    def test_false_constant(self, parser: MTLParser) -> None:
        assert isinstance(parser.parse("FALSE"), FalseConstant)


class TestUnaryOperators:
    """Test parsing of unary operators."""

    def test_negation(self, parser: MTLParser) -> None:
        assert parser.parse("!p") == Negation(Proposition("p"))

    @pytest.mark.parametrize(
        "text, cls",
        [
            ("Y p", Previous),
            ("@p", Previous),
            ("X p", Next),
            ("O p", Once),
            ("H p", Historically),
            ("F p", Eventually),
            ("G p", Always),
        ],
    )
    def test_temporal_unary(self, parser: MTLParser, text: str, cls: type) -> None:
        result = parser.parse(text)
        assert isinstance(result, cls)
        assert result.operand == Proposition("p")
        assert result.interval.is_full()

    def test_nested_unary(self, parser: MTLParser) -> None:
        result = parser.parse("!O !p")
        assert result == Negation(Once(Negation(Proposition("p"))))


class TestBinaryOperators:
    """Test parsing of binary operators."""

    def test_conjunction(self, parser: MTLParser) -> None:
        assert parser.parse("p & q") == Conjunction(Proposition("p"), Proposition("q"))

    def test_disjunction(self, parser: MTLParser) -> None:
        assert parser.parse("p | q") == Disjunction(Proposition("p"), Proposition("q"))

    def test_implication(self, parser: MTLParser) -> None:
        assert parser.parse("p -> q") == Implication(Proposition("p"), Proposition("q"))

    def test_biconditional(self, parser: MTLParser) -> None:
        assert parser.parse("p <-> q") == Biconditional(Proposition("p"), Proposition("q"))

    def test_since(self, parser: MTLParser) -> None:
        assert parser.parse("p S q") == Since(Proposition("p"), Proposition("q"))

    def test_until(self, parser: MTLParser) -> None:
        assert parser.parse("p until q") == Until(Proposition("p"), Proposition("q"))


class TestIntervals:
    """Test interval-constrained temporal operators."""

    def test_bounded_since(self, parser: MTLParser) -> None:
        result = parser.parse("p S[0,3] q")
        assert result == Since(Proposition("p"), Proposition("q"), Interval(0, 3))

    def test_unbounded_until(self, parser: MTLParser) -> None:
        result = parser.parse("p U[2,*) q")
        assert result == Until(Proposition("p"), Proposition("q"), Interval(2))

    def test_unbounded_closed_bracket(self, parser: MTLParser) -> None:
        result = parser.parse("O[1,inf] p")
        assert result == Once(Proposition("p"), Interval(1))

    def test_bounded_eventually(self, parser: MTLParser) -> None:
        result = parser.parse("F[0,5] p")
        assert result == Eventually(Proposition("p"), Interval(0, 5))

    def test_interval_distinguishes_formulas(self, parser: MTLParser) -> None:
        assert parser.parse("O[0,3] p") != parser.parse("O p")

    def test_empty_interval_rejected(self, parser: MTLParser) -> None:
        with pytest.raises(ParseError, match="Invalid interval"):
            parser.parse("O[5,2] p")


class TestPrecedence:
    """Test operator precedence and associativity."""

    def test_and_binds_tighter_than_or(self, parser: MTLParser) -> None:
        result = parser.parse("a | b & c")
        assert result == Disjunction(
            Proposition("a"), Conjunction(Proposition("b"), Proposition("c"))
        )

    def test_since_binds_tighter_than_and(self, parser: MTLParser) -> None:
        result = parser.parse("a & b S c")
        assert result == Conjunction(
            Proposition("a"), Since(Proposition("b"), Proposition("c"))
        )

    def test_unary_binds_tighter_than_since(self, parser: MTLParser) -> None:
        result = parser.parse("O a S b")
        assert result == Since(Once(Proposition("a")), Proposition("b"))

    def test_unary_binds_tighter_than_and(self, parser: MTLParser) -> None:
        result = parser.parse("G a & b")
        assert result == Conjunction(Always(Proposition("a")), Proposition("b"))

    def test_implication_right_associative(self, parser: MTLParser) -> None:
        result = parser.parse("a -> b -> c")
        assert result == Implication(
            Proposition("a"), Implication(Proposition("b"), Proposition("c"))
        )

    def test_since_right_associative(self, parser: MTLParser) -> None:
        result = parser.parse("a S b S c")
        assert result == Since(Proposition("a"), Since(Proposition("b"), Proposition("c")))

    def test_parentheses_override(self, parser: MTLParser) -> None:
        result = parser.parse("(a | b) & c")
        assert result == Conjunction(
            Disjunction(Proposition("a"), Proposition("b")), Proposition("c")
        )


class TestErrors:
    """Test error handling."""

    def test_empty_formula(self, parser: MTLParser) -> None:
        with pytest.raises(ParseError, match="empty formula"):
            parser.parse("   ")

    def test_dangling_operator(self, parser: MTLParser) -> None:
        with pytest.raises(ParseError, match="unexpected end"):
            parser.parse("p &")

    def test_unbalanced_parentheses(self, parser: MTLParser) -> None:
        with pytest.raises(ParseError):
            parser.parse("(p & q")

    def test_invalid_character(self, parser: MTLParser) -> None:
        with pytest.raises(LexerError):
            parser.parse("p ? q")
