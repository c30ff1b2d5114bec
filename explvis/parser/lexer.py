"""
Lexical analyzer for MTL formulas.

Tokenizes formula strings into a stream of tokens (propositions,
operators, constants, interval bounds, delimiters) that can be consumed
by the parser.
"""

from __future__ import annotations

import sly


class LexerError(Exception):
    """Exception raised for lexical analysis errors."""
    pass


class MTLLexer(sly.Lexer):
    """
    Lexical analyzer for MTL formulas.

    Token Types:
        TRUE, FALSE                  - Boolean constants
        PROP                         - Proposition identifiers
        NOT                          - Negation
        PREV, NEXT                   - Single-step temporal operators
        ONCE, HISTORICALLY           - Unary past operators
        EVENTUALLY, ALWAYS           - Unary future operators
        AND, OR, IMPLIES, IFF        - Boolean connectives
        SINCE, UNTIL                 - Binary temporal operators
        LPAREN, RPAREN               - Grouping
        LBRACK, RBRACK, COMMA,
        NUMBER, STAR                 - Interval bounds
    """

    tokens = {
        TRUE, FALSE,
        PROP,
        NOT, PREV, NEXT,
        ONCE, HISTORICALLY, EVENTUALLY, ALWAYS,
        AND, OR, IMPLIES, IFF, SINCE, UNTIL,
        LPAREN, RPAREN,
        LBRACK, RBRACK, COMMA, NUMBER, STAR,
    }

    ignore = " \t"

    @_(r"\n+")
    def ignore_newline(self, t):
        self.lineno += len(t.value)

    # Comments run to end of line
    ignore_comment = r"\#[^\n]*"

    # <-> must come before ->
    IFF = r"<->|↔"
    IMPLIES = r"->|→"
    AND = r"&&|∧"
    OR = r"\|\||∨"

    NOT = r"!"
    PREV = r"@"
    LPAREN = r"\("
    RPAREN = r"\)"
    LBRACK = r"\["
    RBRACK = r"\]"
    COMMA = r","
    STAR = r"\*|∞"

    @_(r"\d+")
    def NUMBER(self, t):
        t.value = int(t.value)
        return t

    @_(r"&")
    def AND_SINGLE(self, t):
        t.type = "AND"
        return t

    @_(r"\|")
    def OR_SINGLE(self, t):
        t.type = "OR"
        return t

    @_(r"¬")
    def NOT_UNICODE(self, t):
        t.type = "NOT"
        return t

    # Keywords are exact matches of the identifier pattern; longer
    # words are propositions.
    @_(r"[a-zA-Z_][a-zA-Z0-9_'\.]*")
    def PROP(self, t):
        keywords = {
            "TRUE": "TRUE",
            "true": "TRUE",
            "FALSE": "FALSE",
            "false": "FALSE",
            "not": "NOT",
            "and": "AND",
            "or": "OR",
            "implies": "IMPLIES",
            "iff": "IFF",
            "since": "SINCE",
            "until": "UNTIL",
            "prev": "PREV",
            "previous": "PREV",
            "next": "NEXT",
            "once": "ONCE",
            "historically": "HISTORICALLY",
            "eventually": "EVENTUALLY",
            "always": "ALWAYS",
            "inf": "STAR",
            "S": "SINCE",
            "U": "UNTIL",
            "Y": "PREV",
            "X": "NEXT",
            "O": "ONCE",
            "H": "HISTORICALLY",
            "F": "EVENTUALLY",
            "G": "ALWAYS",
        }
        t.type = keywords.get(t.value, "PROP")
        return t

    def error(self, t):
        """Handle invalid characters."""
        raise LexerError(
            f"Invalid character '{t.value[0]}' at index {self.index}"
        )
