"""
Context management for domflow analysis.

The AnalysisContext carries the state shared by every phase of one analysis
run: the configuration, the console used for phase output and timings, and
the statistics collected along the way.
"""

import collections

from domflow.util.application.console import Console
from .config import AnalysisConfig


class AnalysisContext(object):
    """
    Context for a single analysis run.

    Attributes:
        config: AnalysisConfig for this run
        console: Console object for structured output and timings
        stats: Statistics collection, one dict per phase
    """

    __slots__ = "config", "console", "stats"

    def __init__(self, config=None, console=None):
        """
        Args:
            config: AnalysisConfig. If None, the defaults are used.
            console: Console object for output. If None, a Console is
                created from the config's verbose and timings flags.
        """
        self.config = config if config is not None else AnalysisConfig()
        if console is None:
            console = Console(verbose=self.config.verbose, timings=self.config.timings)
        self.console = console
        self.stats = collections.defaultdict(dict)
