"""Dominance analysis for control flow graphs.

This module binds the iterative dominator solver to a ControlFlowGraph and
exposes the result in terms of external block ids.

- A block A dominates block B if all paths from the entry to B pass through A
- The entry dominates only itself
- Blocks unreachable from the entry have no dominator information; they are
  reported as None, never as an empty or a universal set
"""

import logging

from domflow.util.graphalgorithim import dominator

LOG = logging.getLogger(__name__)


class DominanceInfo(object):
    """Dominator sets of a control flow graph, keyed by block id.

    Attributes:
        graph: The analysed ControlFlowGraph.
        doms: doms[i] is the DominatorSet of block index i, or None.
        rpo: Mapping from reachable block index to reverse post-order rank.
        passes: Number of solver passes, including the final unchanged one.
    """

    def __init__(self, graph, doms, rpo, passes):
        self.graph = graph
        self.doms = doms
        self.rpo = rpo
        self.passes = passes

    def _index(self, id):
        return self.graph.index_of(id)

    def dominators(self, id):
        """Get the ids of the blocks dominating id.

        Returns:
            frozenset of block ids, or None if id is unreachable.
        """
        doms = self.doms[self._index(id)]
        if doms is None:
            return None
        return frozenset(self.graph.id_of(i) for i in doms)

    def dominates(self, a, b):
        """True if block a dominates block b. Unreachable blocks dominate nothing."""
        doms = self.doms[self._index(b)]
        if doms is None:
            return False
        ia = self._index(a)
        if self.doms[ia] is None:
            return False
        return ia in doms

    def is_reachable(self, id):
        return self.doms[self._index(id)] is not None

    def unreachable(self):
        """Ids of the blocks unreachable from the entry, in index order."""
        return [
            self.graph.id_of(i) for i, doms in enumerate(self.doms) if doms is None
        ]

    def rank(self, id):
        """Reverse post-order rank of id, or None if id is unreachable."""
        return self.rpo.get(self._index(id))

    def order(self):
        """Ids of the reachable blocks in reverse post-order."""
        ordered = sorted(self.rpo.items(), key=lambda item: item[1])
        return [self.graph.id_of(index) for index, _rank in ordered]

    def as_dict(self):
        """Map every block id to its dominator ids in index order, or None."""
        result = {}
        for node in self.graph:
            doms = self.doms[node.index]
            if doms is None:
                result[node.id] = None
            else:
                result[node.id] = [self.graph.id_of(i) for i in doms]
        return result

    def __len__(self):
        return len(self.doms)


def compute_dominators(graph):
    """Compute the dominator set of every block in graph.

    The first block (index 0) is the entry. Each block's final DominatorSet is
    written back into its CFGNode.dominators; unreachable blocks get None.

    Args:
        graph: ControlFlowGraph to analyse.

    Returns:
        DominanceInfo: The dominator sets keyed by block id.
    """
    count = graph.node_count()
    if count == 0:
        LOG.info("empty graph, nothing to analyse")
        return DominanceInfo(graph, [], {}, 0)

    solver = dominator.DominanceSolver(
        count, graph.successors_of, graph.predecessors_of, graph.entry
    )
    doms = solver.solve()

    for node in graph:
        node.dominators = doms[node.index]

    LOG.info(
        "dominators converged after %d passes (%d of %d blocks reachable)",
        solver.passes,
        len(solver.order),
        count,
    )
    return DominanceInfo(graph, doms, dict(solver.crawler.rank), solver.passes)
