import io
import unittest

from domflow import analyze
from domflow.application.config import AnalysisConfig
from domflow.application.context import AnalysisContext
from domflow.application.pipeline import Pipeline
from domflow.util.application.console import Console


class TestPipeline(unittest.TestCase):
    def testAnalyze(self):
        result = analyze(["1: 2, 3", "2: 4", "3: 4"])
        self.assertEqual(result.dominance.dominators(4), {1, 4})
        self.assertEqual(result.graph.node_count(), 4)

    def testStats(self):
        context = AnalysisContext(AnalysisConfig())
        Pipeline(context).run(["1: 2", "2: x", "7"])

        self.assertEqual(context.stats["ingest"]["skipped"], 1)
        self.assertEqual(context.stats["ingest"]["blocks"], 3)
        self.assertEqual(context.stats["solve"]["reachable"], 2)
        self.assertEqual(context.stats["solve"]["passes"], 2)

    def testEachRunBuildsAFreshGraph(self):
        pipeline = Pipeline()
        first = pipeline.run(["1: 2"])
        second = pipeline.run(["5: 6"])

        self.assertIsNot(first.graph, second.graph)
        self.assertEqual(second.graph.ids(), [5, 6])

    def testTimings(self):
        out = io.StringIO()
        config = AnalysisConfig(timings=True)
        context = AnalysisContext(config, Console(out, timings=True))
        Pipeline(context).run(["1: 2"])

        text = out.getvalue()
        self.assertIn("begin [ ingest ]", text)
        self.assertIn("end   [ solve ]", text)
        self.assertIn(("solve",), context.console.elapsed)

    def testQuietConsole(self):
        out = io.StringIO()
        context = AnalysisContext(AnalysisConfig(), Console(out))
        Pipeline(context).run(["1: 2"])
        self.assertEqual(out.getvalue(), "")

    def testStrictOption(self):
        with self.assertRaises(ValueError):
            analyze(["1: two"], strict=True)

    def testUnknownFormat(self):
        with self.assertRaises(ValueError):
            AnalysisConfig(output_format="svg")
