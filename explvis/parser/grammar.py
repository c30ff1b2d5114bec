"""
Parser for MTL formulas.

Implements a grammar with proper precedence and associativity rules
to parse MTL formula strings into an abstract syntax tree (AST).
"""

from __future__ import annotations

import sly

from explvis.parser.ast_nodes import (
    Always,
    Biconditional,
    Conjunction,
    Disjunction,
    Eventually,
    FalseConstant,
    Formula,
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
from explvis.parser.lexer import MTLLexer


class ParseError(Exception):
    """Exception raised for parsing errors."""

    pass


class _SLYParser(sly.Parser):
    """
    SLY-based parser for MTL formulas.

    Precedence (lowest to highest):
        1. <->     (biconditional, left-to-right)
        2. ->      (implication, right-to-left)
        3. |       (disjunction, left-to-right)
        4. &       (conjunction, left-to-right)
        5. S U     (since, until, right-to-left)
        6. ! unary temporal operators (right-to-left)

    Temporal operators accept an optional interval written right
    after the operator: ``O[0,3] p``, ``p S[1,*) q``.
    """

    tokens = MTLLexer.tokens

    precedence = (
        ("left", IFF),
        ("right", IMPLIES),
        ("left", OR),
        ("left", AND),
        ("right", SINCE, UNTIL),
        ("right", NOT, PREV, NEXT, ONCE, HISTORICALLY, EVENTUALLY, ALWAYS),
    )

    # --- Atomic formulas ---

    @_("PROP")
    def formula(self, p):
        return Proposition(p.PROP)

    @_("TRUE")
    def formula(self, p):
        return TrueConstant()

    @_("FALSE")
    def formula(self, p):
        return FalseConstant()

    # --- Unary operators ---

    @_("NOT formula")
    def formula(self, p):
        return Negation(p.formula)

    @_("unary_temporal formula %prec NOT")
    def formula(self, p):
        return p.unary_temporal(p.formula)

    @_("unary_temporal interval formula %prec NOT")
    def formula(self, p):
        return p.unary_temporal(p.formula, p.interval)

    @_("PREV")
    def unary_temporal(self, p):
        return Previous

    @_("NEXT")
    def unary_temporal(self, p):
        return Next

    @_("ONCE")
    def unary_temporal(self, p):
        return Once

    @_("HISTORICALLY")
    def unary_temporal(self, p):
        return Historically

    @_("EVENTUALLY")
    def unary_temporal(self, p):
        return Eventually

    @_("ALWAYS")
    def unary_temporal(self, p):
        return Always

    # --- Binary operators ---

    @_("formula AND formula")
    def formula(self, p):
        return Conjunction(p.formula0, p.formula1)

    @_("formula OR formula")
    def formula(self, p):
        return Disjunction(p.formula0, p.formula1)

    @_("formula IMPLIES formula")
    def formula(self, p):
        return Implication(p.formula0, p.formula1)

    @_("formula IFF formula")
    def formula(self, p):
        return Biconditional(p.formula0, p.formula1)

    @_("formula SINCE formula")
    def formula(self, p):
        return Since(p.formula0, p.formula1)

    @_("formula SINCE interval formula")
    def formula(self, p):
        return Since(p.formula0, p.formula1, p.interval)

    @_("formula UNTIL formula")
    def formula(self, p):
        return Until(p.formula0, p.formula1)

    @_("formula UNTIL interval formula")
    def formula(self, p):
        return Until(p.formula0, p.formula1, p.interval)

    # --- Intervals ---

    @_("LBRACK NUMBER COMMA NUMBER RBRACK")
    def interval(self, p):
        return Interval(p.NUMBER0, p.NUMBER1)

    @_("LBRACK NUMBER COMMA STAR RPAREN", "LBRACK NUMBER COMMA STAR RBRACK")
    def interval(self, p):
        return Interval(p.NUMBER)

    # --- Parentheses ---

    @_("LPAREN formula RPAREN")
    def formula(self, p):
        return p.formula

    def error(self, token):
        if token:
            raise ParseError(
                f"Syntax error at '{token.value}' " f"(type: {token.type}, index: {token.index})"
            )
        raise ParseError("Syntax error: unexpected end of formula")


class MTLParser:
    """
    Parser for MTL formulas.

    Wraps the SLY-based parser with a clean public interface.
    Converts formula strings into AST nodes.
    """

    def __init__(self) -> None:
        self._lexer = MTLLexer()
        self._parser = _SLYParser()

    def parse(self, text: str) -> Formula:
        """
        Parse a formula string into an AST.

        Args:
            text: The formula string to parse.

        Returns:
            The root Formula node of the AST.

        Raises:
            ParseError: If the formula is syntactically invalid or
                contains an empty interval.
        """
        text = text.strip()
        if not text:
            raise ParseError("Syntax error: empty formula")

        try:
            result = self._parser.parse(self._lexer.tokenize(text))
        except ValueError as exc:
            raise ParseError(f"Invalid interval: {exc}") from exc
        if result is None:
            raise ParseError("Syntax error: could not parse formula")
        return result
