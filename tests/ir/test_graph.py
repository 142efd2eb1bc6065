import unittest
from unittest import mock

from domflow.analysis.cfg.graph import ControlFlowGraph
from domflow.application.errors import GraphAllocationError


class TestControlFlowGraph(unittest.TestCase):
    def setUp(self):
        self.graph = ControlFlowGraph()

    def testResolveAssignsDenseIndices(self):
        self.assertEqual(self.graph.resolve(10), 0)
        self.assertEqual(self.graph.resolve(20), 1)
        self.assertEqual(self.graph.resolve(10), 0)
        self.assertEqual(self.graph.resolve(5), 2)
        self.assertEqual(self.graph.ids(), [10, 20, 5])
        self.assertEqual(self.graph.node_count(), 3)

    def testEntryIsFirstSeen(self):
        self.assertIsNone(self.graph.entry)
        self.graph.add_edge(7, 3)
        self.assertEqual(self.graph.entry, 0)
        self.assertEqual(self.graph.id_of(self.graph.entry), 7)

    def testAdjacencyIsMutual(self):
        self.graph.add_edge(1, 2)
        self.graph.add_edge(1, 3)
        self.graph.add_edge(3, 2)

        for node in self.graph:
            for succ in node.successors:
                self.assertIn(node.index, self.graph.predecessors_of(succ))
            for pred in node.predecessors:
                self.assertIn(node.index, self.graph.successors_of(pred))

        self.assertEqual(self.graph.successor_ids(0), [2, 3])
        self.assertEqual(self.graph.predecessor_ids(1), [1, 3])

    def testDuplicateEdgesAreKept(self):
        self.graph.add_edge(1, 2)
        self.graph.add_edge(1, 2)

        self.assertEqual(self.graph.successors_of(0), [1, 1])
        self.assertEqual(self.graph.predecessors_of(1), [0, 0])
        self.assertEqual(self.graph.edge_count(), 2)

    def testSelfLoop(self):
        self.graph.add_edge(4, 4)
        self.assertEqual(self.graph.successors_of(0), [0])
        self.assertEqual(self.graph.predecessors_of(0), [0])

    def testIndicesStableWhileGrowing(self):
        first = self.graph.node(self.graph.resolve("a"))
        for i in range(10000):
            self.graph.add_edge("a", i)
        self.assertIs(self.graph.node(0), first)
        self.assertEqual(self.graph.index_of("a"), 0)
        self.assertEqual(self.graph.index_of(9999), 10000)
        self.assertEqual(len(self.graph.successors_of(0)), 10000)

    def testLookup(self):
        self.graph.resolve("x")
        self.assertEqual(self.graph.lookup("x"), 0)
        self.assertIsNone(self.graph.lookup("y"))
        self.assertIn("x", self.graph)
        self.assertNotIn("y", self.graph)
        with self.assertRaises(KeyError):
            self.graph.index_of("y")

    def testGraphsAreIndependent(self):
        other = ControlFlowGraph()
        self.graph.add_edge(1, 2)
        other.add_edge(2, 1)

        self.assertEqual(self.graph.ids(), [1, 2])
        self.assertEqual(other.ids(), [2, 1])

    def testToNetworkx(self):
        self.graph.add_edge(1, 2)
        self.graph.add_edge(1, 2)
        self.graph.resolve(3)

        g = self.graph.to_networkx()
        self.assertEqual(list(g.nodes), [1, 2, 3])
        self.assertEqual(g.number_of_edges(1, 2), 2)
        self.assertEqual(g.nodes[3]["index"], 2)

    def testAllocationFailureIsReported(self):
        with mock.patch(
            "domflow.analysis.cfg.graph.CFGNode", side_effect=MemoryError
        ):
            with self.assertRaises(GraphAllocationError):
                self.graph.resolve(1)
        self.assertEqual(self.graph.node_count(), 0)


class FailingList(list):
    def append(self, item):
        raise MemoryError


class FailingDict(dict):
    def __setitem__(self, key, value):
        raise MemoryError


class TestAllocationRollback(unittest.TestCase):
    def testFailedResolveLeavesNoHalfBlock(self):
        graph = ControlFlowGraph()
        graph.resolve(1)
        graph._index = FailingDict(graph._index)

        with self.assertRaises(GraphAllocationError):
            graph.resolve(2)

        self.assertEqual(graph.ids(), [1])
        self.assertNotIn(2, graph)

    def testFailedEdgeKeepsAdjacencyMutual(self):
        graph = ControlFlowGraph()
        graph.resolve(1)
        graph.resolve(2)
        graph.node(1).predecessors = FailingList()

        with self.assertRaises(GraphAllocationError):
            graph.add_edge(1, 2)

        self.assertEqual(graph.successors_of(0), [])
        self.assertEqual(list(graph.predecessors_of(1)), [])
        self.assertEqual(graph.edge_count(), 0)
