"""
Console output and timing utilities for analysis phases.

This module provides a hierarchical console output system with timing
capabilities, allowing structured reporting of analysis phases with
nested scopes and elapsed time tracking.
"""

import sys
import time

from domflow.util.io import formatting


class Scope(object):
    """Represents a hierarchical scope for timing.

    Scopes form a tree structure where each scope can have children,
    allowing nested timing of analysis phases.

    Attributes:
        parent: Parent scope, or None for root scope.
        name: Name of this scope.
    """

    def __init__(self, parent, name):
        self.parent = parent
        self.name = name
        self._start = None
        self._end = None

    def begin(self):
        """Start timing this scope."""
        self._start = time.perf_counter()

    def end(self):
        """Stop timing this scope."""
        self._end = time.perf_counter()

    @property
    def elapsed(self):
        """Time elapsed between begin() and end() calls, in seconds."""
        return self._end - self._start

    def path(self):
        """Get the tuple of scope names from root to this scope."""
        if self.parent is None:
            return ()
        else:
            return self.parent.path() + (self.name,)

    def child(self, name):
        return Scope(self, name)


class ConsoleScopeManager(object):
    """Context manager for console scopes.

    Example:
        with console.scope("ingest"):
            # ... ingest code ...
            pass  # Scope automatically ends here
    """

    __slots__ = "console", "name"

    def __init__(self, console, name):
        self.console = console
        self.name = name

    def __enter__(self):
        self.console.begin(self.name)

    def __exit__(self, type, value, tb):
        self.console.end()


class Console(object):
    """Hierarchical console output with timing and scoping.

    Scope begin/end messages and their timings are only written when
    timings are enabled; verbose_output() only writes in verbose mode.

    Attributes:
        out: Output stream (default: sys.stderr).
        root: Root scope of the hierarchy.
        current: Currently active scope.
        verbose: If True, enable verbose output mode.
        timings: If True, report scope begin/end with elapsed time.
        elapsed: Mapping from scope path to elapsed seconds of finished scopes.
    """

    def __init__(self, out=None, verbose=False, timings=False):
        if out is None:
            out = sys.stderr
        self.out = out

        self.root = Scope(None, "root")
        self.current = self.root

        self.verbose = verbose
        self.timings = timings
        self.elapsed = {}

    def path(self):
        """Get formatted path string for current scope, e.g. "[ ingest ]"."""
        return "[ %s ]" % " | ".join(self.current.path())

    def begin(self, name):
        scope = self.current.child(name)
        scope.begin()
        self.current = scope

        if self.timings:
            self.output("begin %s" % self.path(), 0)

    def end(self):
        self.current.end()
        self.elapsed[self.current.path()] = self.current.elapsed
        if self.timings:
            self.output(
                "end   %s %s"
                % (self.path(), formatting.elapsedTime(self.current.elapsed)),
                0,
            )
        self.current = self.current.parent

    def scope(self, name):
        """Create a context manager for a scope.

        Example:
            with console.scope("solve"):
                # ... code ...
        """
        return ConsoleScopeManager(self, name)

    def output(self, s, tabs=1):
        """Write a line to the console, indented by tabs tab characters."""
        if tabs:
            self.out.write("\t" * tabs)
        self.out.write(s)
        self.out.write("\n")

    def verbose_output(self, s, tabs=1):
        if self.verbose:
            self.output(s, tabs)
