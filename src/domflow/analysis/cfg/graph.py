"""
Control flow graph storage.

This module defines the graph store that dominance analysis runs over. Basic
blocks live in a single arena (a Python list) owned by one ControlFlowGraph;
every relation between blocks is expressed as an index into that arena,
never as a reference to another node object.

**Indexing:**
- Each block has an external id supplied by the input (an int, or any
  hashable token) and an internal index assigned the first time the id is
  referenced.
- Indices are dense, start at 0, and follow first-seen order. Index 0 is the
  entry block.
- Growing the arena never renumbers an existing block.

**Adjacency:**
Successor and predecessor lists keep declaration order and keep duplicate
edges, so the graph is a multigraph. The two lists are updated together.
"""

from typing import Dict, Hashable, Iterator, List, Optional

import networkx as nx

from domflow.application import errors


class CFGNode(object):
    """
    A basic block in the control flow graph.

    Attributes:
        id: External block id, unique within the graph
        index: Stable arena index of this block
        successors: Indices of successor blocks, in declaration order
        predecessors: Indices of predecessor blocks, in declaration order
        dominators: DominatorSet written back by dominance analysis, or None
            when the block has not been analysed or is unreachable
    """

    __slots__ = "id", "index", "successors", "predecessors", "dominators"

    def __init__(self, id: Hashable, index: int):
        self.id = id
        self.index = index
        self.successors: List[int] = []
        self.predecessors: List[int] = []
        self.dominators = None

    def __repr__(self):
        return "CFGNode(%r, index=%d)" % (self.id, self.index)


class ControlFlowGraph(object):
    """
    Append-only store of basic blocks and their adjacency.

    Each analysis owns its own ControlFlowGraph; there is no shared or global
    state, so independent graphs can be analysed side by side.

    Attributes:
        nodes: Arena of CFGNode objects, position == index
    """

    def __init__(self):
        self.nodes: List[CFGNode] = []
        self._index: Dict[Hashable, int] = {}
        self._edges = 0

    def resolve(self, id: Hashable) -> int:
        """
        Get the index of a block, creating the block if it is new.

        Args:
            id: External block id

        Returns:
            The stable index of the block

        Raises:
            GraphAllocationError: If the store cannot grow
        """
        index = self._index.get(id)
        if index is not None:
            return index

        index = len(self.nodes)
        try:
            node = CFGNode(id, index)
            self.nodes.append(node)
            self._index[id] = index
        except MemoryError as e:
            del self.nodes[index:]
            self._index.pop(id, None)
            raise errors.GraphAllocationError(
                "out of memory while adding block %r (%d blocks stored)"
                % (id, len(self.nodes))
            ) from e
        return index

    def add_edge(self, src: Hashable, dst: Hashable) -> None:
        """
        Record the edge src -> dst, creating either block as needed.

        The source is resolved before the destination, so a new source gets
        the lower index. Duplicate edges and self-loops are recorded as is.
        """
        srcIndex = self.resolve(src)
        dstIndex = self.resolve(dst)
        successors = self.nodes[srcIndex].successors
        count = len(successors)
        try:
            successors.append(dstIndex)
            self.nodes[dstIndex].predecessors.append(srcIndex)
        except MemoryError as e:
            # Keep the two adjacency lists mutual
            del successors[count:]
            raise errors.GraphAllocationError(
                "out of memory while adding edge %r -> %r" % (src, dst)
            ) from e
        self._edges += 1

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return self._edges

    def successors_of(self, index: int) -> List[int]:
        return self.nodes[index].successors

    def predecessors_of(self, index: int) -> List[int]:
        return self.nodes[index].predecessors

    def node(self, index: int) -> CFGNode:
        return self.nodes[index]

    def lookup(self, id: Hashable) -> Optional[int]:
        """Get the index of a block, or None if the id was never seen."""
        return self._index.get(id)

    def index_of(self, id: Hashable) -> int:
        """Get the index of a block, raising KeyError for an unknown id."""
        try:
            return self._index[id]
        except KeyError:
            raise KeyError("unknown block id %r" % (id,)) from None

    def id_of(self, index: int) -> Hashable:
        return self.nodes[index].id

    def ids(self) -> List[Hashable]:
        """All block ids in index order."""
        return [node.id for node in self.nodes]

    def successor_ids(self, index: int) -> List[Hashable]:
        return [self.nodes[i].id for i in self.nodes[index].successors]

    def predecessor_ids(self, index: int) -> List[Hashable]:
        return [self.nodes[i].id for i in self.nodes[index].predecessors]

    @property
    def entry(self) -> Optional[int]:
        """Index of the entry block, or None for an empty graph."""
        return 0 if self.nodes else None

    def __len__(self):
        return len(self.nodes)

    def __iter__(self) -> Iterator[CFGNode]:
        return iter(self.nodes)

    def __contains__(self, id):
        return id in self._index

    def __repr__(self):
        return "ControlFlowGraph(%d blocks, %d edges)" % (len(self.nodes), self._edges)

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Export the graph as a networkx MultiDiGraph keyed by block id.

        Nodes are added in index order and carry their index as the "index"
        attribute. Every declared edge becomes one networkx edge, so
        duplicate edges survive the export.
        """
        g = nx.MultiDiGraph()
        for node in self.nodes:
            g.add_node(node.id, index=node.index)
        for node in self.nodes:
            for succ in node.successors:
                g.add_edge(node.id, self.nodes[succ].id)
        return g
