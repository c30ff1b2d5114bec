"""
MTL formula parser for EXPLVIS.

Provides lexical analysis, parsing, and AST construction for metric
temporal logic formulas with past (previous, once, historically, since)
and future (next, eventually, always, until) operators. Used to derive
the grid's subformula columns from a formula string.
"""
