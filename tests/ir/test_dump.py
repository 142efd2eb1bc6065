import json
import unittest

from domflow.analysis.cfg import dump
from domflow.analysis.cfg.dom import compute_dominators
from domflow.frontend.cfgspec import ingest_lines

DIAMOND = ["1: 2, 3", "2: 4", "3: 4", "9: 4"]


class TestDump(unittest.TestCase):
    def setUp(self):
        self.graph = ingest_lines(DIAMOND)
        self.info = compute_dominators(self.graph)

    def testText(self):
        lines = dump.generate_text(self.graph, self.info).split("\n")

        self.assertEqual(lines[0], "1 [0] succs=[2, 3] preds=[] doms={1}")
        self.assertEqual(lines[3], "4 [3] succs=[] preds=[2, 3, 9] doms={1, 4}")
        self.assertEqual(lines[4], "9 [4] succs=[4] preds=[] doms=<unreachable>")

    def testJson(self):
        data = json.loads(dump.generate_json(self.graph, self.info))

        self.assertEqual(data["entry"], 1)
        self.assertEqual(data["passes"], self.info.passes)
        self.assertEqual([n["id"] for n in data["nodes"]], [1, 2, 3, 4, 9])
        self.assertEqual(data["nodes"][3]["dominators"], [1, 4])
        self.assertEqual(data["nodes"][0]["rpo"], 0)
        self.assertIsNone(data["nodes"][4]["dominators"])
        self.assertIsNone(data["nodes"][4]["rpo"])

    def testDot(self):
        g = dump.generate_dot(self.graph, self.info)

        self.assertEqual(len(g.get_nodes()), 5)
        self.assertEqual(len(g.get_edges()), 5)
        text = g.to_string()
        self.assertIn("doublecircle", text)
        self.assertIn("dashed", text)

    def testRender(self):
        self.assertEqual(
            dump.render(self.graph, self.info, "text"),
            dump.generate_text(self.graph, self.info),
        )
        with self.assertRaises(ValueError):
            dump.render(self.graph, self.info, "svg")

    def testSpecEcho(self):
        self.assertEqual(
            dump.generate_spec(self.graph), "1: 2, 3\n2: 4\n3: 4\n4\n9: 4"
        )

    def testMakeStr(self):
        self.assertEqual(dump.makeStr('a "b"\nc'), '"a \\"b\\"\\nc"')

    def testMakeStrEscapesBackslash(self):
        self.assertEqual(dump.makeStr("a\\"), '"a\\\\"')
        self.assertEqual(dump.makeStr("\\\""), '"\\\\\\""')

    def testDotWithBackslashToken(self):
        graph = ingest_lines(["a\\: b"], parse_id=str)
        info = compute_dominators(graph)
        labels = [n.get("label") for n in dump.generate_dot(graph, info).get_nodes()]
        self.assertIn('"a\\\\\\ndom {a\\\\}"', labels)
