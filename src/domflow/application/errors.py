"""
Error handling for domflow analysis.

This module defines the exception classes raised while ingesting a CFG
description and while computing dominance over it.
"""


class DomflowError(Exception):
    """Base class for every error raised by domflow."""

    pass


class CFGSpecError(DomflowError, ValueError):
    """
    Exception raised for a malformed CFG description in strict mode.

    In the default best-effort mode malformed tokens are skipped and only
    logged; this exception is raised only when the ingestor runs strict.

    Attributes:
        lineno: 1-based line number of the offending line (None if unknown)
        token: The token that could not be parsed as a block id
        line: The raw text of the offending line
    """

    def __init__(self, msg, lineno=None, token=None, line=None):
        self.lineno = lineno
        self.token = token
        self.line = line
        if lineno is not None:
            msg = "line %d: %s" % (lineno, msg)
        super().__init__(msg)


class GraphAllocationError(DomflowError, MemoryError):
    """
    Exception raised when the graph store cannot grow.

    The store never truncates a graph; running out of memory while adding
    a node or an edge surfaces as this error instead.
    """

    pass


class InternalError(DomflowError):
    """
    Exception raised for internal errors in domflow.

    This exception indicates a broken invariant in domflow itself, as
    opposed to a problem with the user's input.
    """

    pass


class AnalysisAbort(DomflowError):
    """
    Exception raised to abort an analysis run.

    The command line catches it and exits with a non-zero status.
    """

    pass


def abort(msg=None):
    """
    Abort the analysis with an optional message.

    Raises:
        AnalysisAbort: Always raises this exception
    """
    raise AnalysisAbort(msg)
