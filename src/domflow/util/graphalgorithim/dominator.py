"""
Dominator set computation algorithms.

This module provides the iterative dominance algorithm of Cooper, Harvey and
Kennedy over graphs whose nodes are dense integer indices. A node d dominates
a node n if every path from the entry point to n must pass through d.

Three pieces are provided:
1. DominatorSet: a dominator set stored as a bitset over node indices, with an
   explicit universal state used before the first real intersection
2. ReversePostorderCrawler: depth-first numbering of the nodes reachable from
   the entry, using an explicit stack
3. DominanceSolver: the set-intersection fixed point over reverse post-order
"""

import logging

from domflow.application import errors

LOG = logging.getLogger(__name__)


class DominatorSet(object):
    """
    A set of node indices that is either universal or concrete.

    The universal set is the top element of the dominance lattice: every
    reachable node except the entry starts there, and intersecting with it
    returns the other operand unchanged. It is kept as an explicit state so
    that it can never be confused with an empty set.

    Concrete sets are stored as an int used as a bitset: bit i is set when
    node index i is a member. This gives O(1) membership and cheap
    intersection of whole sets.

    Instances are immutable; every operation returns a new set.
    """

    __slots__ = "bits"

    def __init__(self, bits=None):
        """
        Parameters
        ----------
        bits : int or None
            Bitset of member indices, or None for the universal set
        """
        self.bits = bits

    @classmethod
    def universal(cls):
        return _UNIVERSAL

    @classmethod
    def of(cls, indices):
        """Build a concrete set from an iterable of node indices."""
        bits = 0
        for index in indices:
            bits |= 1 << index
        return cls(bits)

    def isUniversal(self):
        return self.bits is None

    def intersect(self, other):
        """
        Intersect two dominator sets.

        The universal set acts as the identity: intersecting with it
        returns the other operand unchanged.
        """
        if self.bits is None:
            return other
        if other.bits is None:
            return self
        return DominatorSet(self.bits & other.bits)

    def add(self, index):
        """Return this set with index added. The universal set is unchanged."""
        if self.bits is None:
            return self
        return DominatorSet(self.bits | (1 << index))

    def issubset(self, other):
        if other.bits is None:
            return True
        if self.bits is None:
            return False
        return self.bits & ~other.bits == 0

    def __contains__(self, index):
        if self.bits is None:
            return True
        return index >= 0 and (self.bits >> index) & 1 == 1

    def __iter__(self):
        """Iterate over the member indices in ascending order."""
        if self.bits is None:
            raise errors.InternalError("cannot enumerate the universal dominator set")
        bits = self.bits
        index = 0
        while bits:
            if bits & 1:
                yield index
            bits >>= 1
            index += 1

    def __len__(self):
        if self.bits is None:
            raise errors.InternalError("the universal dominator set has no finite size")
        return bin(self.bits).count("1")

    def __eq__(self, other):
        if not isinstance(other, DominatorSet):
            return NotImplemented
        return self.bits == other.bits

    def __hash__(self):
        return hash(self.bits)

    def __repr__(self):
        if self.bits is None:
            return "DominatorSet(<universal>)"
        return "DominatorSet({%s})" % ", ".join(str(i) for i in self)


_UNIVERSAL = DominatorSet(None)


class ReversePostorderCrawler(object):
    """
    Performs depth-first traversal to compute reverse post-order numbering.

    Reverse post-order is a numbering where nodes are numbered in the reverse
    of the order they are finished during a DFS. On an acyclic graph every
    node is numbered after all of its predecessors, which is what makes the
    dominance fixed point converge quickly.

    Only nodes reachable from the head are visited. Successors are visited in
    the order the forward callback yields them, so the numbering is
    deterministic.

    Attributes
    ----------
    order : list
        Reachable node indices in reverse post-order (head first)
    rank : dict
        Mapping from reachable node index to its reverse post-order rank
    """

    def __init__(self, forwardCallback, head):
        """
        Initialize the crawler and compute reverse post-order.

        Parameters
        ----------
        forwardCallback : callable
            Function(index) -> iterable of successor indices
        head : int
            The entry point (head) node to start traversal from
        """
        self.forwardCallback = forwardCallback
        self.head = head

        self.processed = set()
        self.postorder = []

        self(head)

        reachable = len(self.postorder)
        self.rank = {}
        for post, node in enumerate(self.postorder):
            self.rank[node] = reachable - 1 - post

        self.order = list(reversed(self.postorder))

    def __call__(self, node):
        """
        Perform DFS traversal from a node using an explicit stack.

        Uses an explicit stack instead of recursion so that deep graphs do
        not hit Python's recursion limit. Based on the PADS (Python
        Algorithms and Data Structures) library.

        Parameters
        ----------
        node : int
            The node to start DFS traversal from
        """
        if node in self.processed:
            return

        # Each entry is (node, iterator of its successors)
        self.processed.add(node)
        stack = [(node, iter(self.forwardCallback(node)))]
        while stack:
            _parent, children = stack[-1]
            try:
                child = next(children)
                if child not in self.processed:
                    self.processed.add(child)
                    stack.append((child, iter(self.forwardCallback(child))))
            except StopIteration:
                # All children processed, add to post-order
                self.postorder.append(stack[-1][0])
                stack.pop()

    def reachable(self, node):
        return node in self.rank


class DominanceSolver(object):
    """
    Iterative dominator set computation.

    The entry starts with {entry} and every other reachable node starts at
    the universal set. Each pass visits the reachable nodes in reverse
    post-order and replaces a node's set with the intersection of its
    reachable predecessors' sets plus the node itself. Passes repeat until
    one of them changes nothing.

    Sets only ever shrink, and the lattice of subsets is finite, so the
    iteration always terminates.

    Nodes unreachable from the entry keep None: they have no dominator
    information, which is distinct from both the empty and the universal set.
    """

    def __init__(self, count, forwardCallback, backwardCallback, head=0):
        """
        Parameters
        ----------
        count : int
            Number of nodes; indices range over 0 .. count-1
        forwardCallback : callable
            Function(index) -> iterable of successor indices
        backwardCallback : callable
            Function(index) -> iterable of predecessor indices
        head : int
            Index of the entry node
        """
        self.count = count
        self.backwardCallback = backwardCallback
        self.head = head

        self.crawler = ReversePostorderCrawler(forwardCallback, head)
        self.order = self.crawler.order

        self.doms = [None for i in range(count)]
        for node in self.order:
            self.doms[node] = DominatorSet.universal()
        self.doms[head] = DominatorSet.of((head,))

        self.passes = 0

    def iterate(self):
        """
        Run one full pass over the reachable nodes.

        Returns
        -------
        bool
            True if any dominator set changed during the pass
        """
        doms = self.doms
        changed = False

        for node in self.order:
            if node == self.head:
                continue

            newSet = DominatorSet.universal()
            for p in self.backwardCallback(node):
                pdoms = doms[p]
                # Unreachable predecessors lie on no path from the entry
                if pdoms is not None:
                    newSet = newSet.intersect(pdoms)
            newSet = newSet.add(node)

            if newSet != doms[node]:
                if not newSet.issubset(doms[node]):
                    raise errors.InternalError(
                        "dominator set of node %d grew from %r to %r"
                        % (node, doms[node], newSet)
                    )
                doms[node] = newSet
                changed = True

        self.passes += 1
        LOG.debug("dominance pass %d: changed=%s", self.passes, changed)
        return changed

    def solve(self):
        """
        Iterate to the fixed point.

        Returns
        -------
        list
            doms[i] is the DominatorSet of node i, or None if i is unreachable
        """
        while self.iterate():
            pass
        return self.doms


def dominatorSets(count, forwardCallback, backwardCallback, head=0):
    """
    Compute the dominator set of every node reachable from head.

    Parameters
    ----------
    count : int
        Number of nodes; indices range over 0 .. count-1
    forwardCallback : callable
        Function(index) -> iterable of successor indices
    backwardCallback : callable
        Function(index) -> iterable of predecessor indices
    head : int
        Index of the entry node

    Returns
    -------
    list
        doms[i] is the DominatorSet of node i, or None if i is unreachable
    """
    return DominanceSolver(count, forwardCallback, backwardCallback, head).solve()
