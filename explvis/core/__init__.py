"""
Core engine for EXPLVIS.

Contains the explanation tree model, verdict colors, the subformula
registry, the trace store, the changed-cells traversal, copy-on-write
grid state, and the interaction controller.
"""
