"""Analysis pipeline for domflow.

The pipeline runs the phases of a dominance analysis in order:

1. ingest: build a fresh ControlFlowGraph from description lines
2. solve: number the reachable blocks in reverse post-order and iterate
   the dominator sets to their fixed point

Each run owns its own graph; nothing is shared between runs.
"""

import logging
from typing import NamedTuple

from domflow.analysis.cfg.dom import DominanceInfo, compute_dominators
from domflow.analysis.cfg.graph import ControlFlowGraph
from domflow.frontend.cfgspec import EdgeIngestor

from .config import AnalysisConfig
from .context import AnalysisContext

LOG = logging.getLogger(__name__)


class AnalysisResult(NamedTuple):
    """The graph built by a run and its dominator sets."""

    graph: ControlFlowGraph
    dominance: DominanceInfo


class Pipeline(object):
    """Runs ingestion and dominance analysis under an AnalysisContext."""

    def __init__(self, context=None):
        self.context = context if context is not None else AnalysisContext()

    def ingest(self, lines):
        """Build a fresh ControlFlowGraph from description lines."""
        config = self.context.config
        ingestor = EdgeIngestor(strict=config.strict, parse_id=config.parse_id)
        with self.context.console.scope("ingest"):
            graph = ingestor.feed(lines)

        stats = ingestor.stats()
        self.context.stats["ingest"].update(stats)
        LOG.info(
            "ingested %d blocks and %d edges from %d lines (%d tokens skipped)",
            stats["blocks"],
            stats["edges"],
            stats["lines"],
            stats["skipped"],
        )
        if stats["skipped"]:
            self.context.console.verbose_output(
                "%d malformed tokens skipped" % stats["skipped"], 0
            )
        return graph

    def solve(self, graph):
        """Compute the dominator sets of graph."""
        with self.context.console.scope("solve"):
            info = compute_dominators(graph)

        self.context.stats["solve"].update(
            {
                "blocks": graph.node_count(),
                "reachable": len(info.rpo),
                "passes": info.passes,
            }
        )
        unreachable = info.unreachable()
        if unreachable:
            LOG.info("%d blocks unreachable from the entry", len(unreachable))
        return info

    def run(self, lines):
        """Run every phase over description lines.

        Returns:
            AnalysisResult: The graph and its dominator sets.
        """
        graph = self.ingest(lines)
        return AnalysisResult(graph, self.solve(graph))


def analyze(lines, **options):
    """Analyse description lines with an AnalysisConfig built from options.

    Example:
        result = analyze(["1: 2, 3", "2: 4", "3: 4"])
        result.dominance.dominators(4)  # frozenset({1, 4})
    """
    context = AnalysisContext(AnalysisConfig(**options))
    return Pipeline(context).run(lines)
