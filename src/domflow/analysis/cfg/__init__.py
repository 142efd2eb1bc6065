"""Control flow graph storage, dominance analysis and dumping.

- graph.py: The block arena (CFGNode, ControlFlowGraph)
- dom.py: Dominator sets bound to a ControlFlowGraph
- dump.py: Text, JSON and DOT renderings
"""

from .graph import CFGNode, ControlFlowGraph
from .dom import DominanceInfo, compute_dominators

__all__ = [
    "CFGNode",
    "ControlFlowGraph",
    "DominanceInfo",
    "compute_dominators",
]
