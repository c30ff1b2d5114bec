"""
EXPLVIS: Explanation grid engine.

Visualizes the explanations of a point-wise temporal-logic monitor as a
grid of time points by subformulas. Clicking a row's root-formula cell
propagates the verdicts of the subformulas that justify it, across
whichever time points the explanation refers to.
"""

__version__ = "0.1.0"
