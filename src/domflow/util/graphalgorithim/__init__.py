"""
Graph algorithms for control flow analysis.

This package provides the graph algorithms domflow runs over control flow
graphs stored as dense integer indices:

- Reverse post-order numbering of the nodes reachable from an entry
- Iterative dominator set computation over that numbering
"""
