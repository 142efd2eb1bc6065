"""domflow - Dominance analysis for control flow graphs.
"""

__version__ = "0.1.0"

from .analysis.cfg.graph import CFGNode, ControlFlowGraph
from .analysis.cfg.dom import DominanceInfo, compute_dominators
from .application.config import AnalysisConfig
from .application.context import AnalysisContext
from .application.pipeline import AnalysisResult, Pipeline, analyze
from .frontend.cfgspec import EdgeIngestor, ingest_file, ingest_lines, ingest_pairs

__all__ = [
    "AnalysisConfig",
    "AnalysisContext",
    "AnalysisResult",
    "CFGNode",
    "ControlFlowGraph",
    "DominanceInfo",
    "EdgeIngestor",
    "Pipeline",
    "analyze",
    "compute_dominators",
    "ingest_file",
    "ingest_lines",
    "ingest_pairs",
    "__version__",
]
