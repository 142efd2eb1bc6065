"""
Reader for textual CFG descriptions.

A CFG description is line oriented. Each line names a source block followed
by the blocks it branches to:

    SRC : DST1, DST2, DST3
    !comment line, ignored
    ISOLATED_SRC

The source token ends at whitespace or ':'; the remaining tokens are
separated by whitespace and ','. A line whose first token is empty or starts
with '!' is skipped. A line without destinations declares a block with no
outgoing edges.

The first id met in the whole input becomes the entry block (index 0).

**Malformed tokens:**
By default ingestion is best effort: a destination token that does not parse
as an id is skipped with a warning. When the source token does not parse, the
valid destination ids of the line are still declared as blocks, without edges.
In strict mode the first malformed token raises CFGSpecError instead.
"""

import logging
import re
from typing import Callable, Hashable, Iterable, List, NamedTuple, Optional, Tuple

from domflow.analysis.cfg.graph import ControlFlowGraph
from domflow.application import errors

LOG = logging.getLogger(__name__)

_SOURCE_TOKEN = re.compile(r"[\s:]*([^\s:]*)[\s:]*(.*)", re.DOTALL)
_DEST_SPLIT = re.compile(r"[\s,]+")
_BLOCK_ID = re.compile(r"[+-]?[0-9]+")


def parse_block_id(token: str) -> int:
    """
    Parse a base-10 integer block id.

    Only ASCII digits with an optional sign are accepted; digit separators
    such as "1_0", padding and non-ASCII digits are rejected.

    Raises:
        ValueError: If token is not a base-10 integer
    """
    if _BLOCK_ID.fullmatch(token) is None:
        raise ValueError("not a base-10 integer: %r" % (token,))
    return int(token)


class SpecLine(NamedTuple):
    """A tokenized CFG description line."""

    lineno: Optional[int]
    source: str
    destinations: List[str]


def tokenize_line(line: str, lineno: Optional[int] = None) -> Optional[SpecLine]:
    """
    Split a description line into its source and destination tokens.

    Returns None for blank and comment lines. Tokens are returned unparsed.
    """
    match = _SOURCE_TOKEN.match(line)
    source, rest = match.group(1), match.group(2)
    if not source or source.startswith("!"):
        return None

    destinations = [tok for tok in _DEST_SPLIT.split(rest) if tok]
    return SpecLine(lineno, source, destinations)


class EdgeIngestor(object):
    """
    Feeds CFG description lines or edge pairs into a ControlFlowGraph.

    Attributes:
        graph: The graph being populated
        strict: Raise CFGSpecError on a malformed token instead of skipping it
        parse_id: Callable turning a token into a block id
        lines: Number of description lines read
        comments: Number of blank or comment lines skipped
        edges: Number of edges recorded
        skipped: Number of malformed tokens skipped
    """

    def __init__(
        self,
        graph: Optional[ControlFlowGraph] = None,
        strict: bool = False,
        parse_id: Callable[[str], Hashable] = parse_block_id,
    ):
        self.graph = graph if graph is not None else ControlFlowGraph()
        self.strict = strict
        self.parse_id = parse_id

        self.lines = 0
        self.comments = 0
        self.edges = 0
        self.skipped = 0

    def _parse(self, token, spec, line, role):
        try:
            return self.parse_id(token)
        except (TypeError, ValueError):
            if self.strict:
                raise errors.CFGSpecError(
                    "malformed %s id %r" % (role, token),
                    lineno=spec.lineno,
                    token=token,
                    line=line,
                ) from None
            self.skipped += 1
            LOG.warning(
                "line %s: skipping malformed %s id %r",
                spec.lineno if spec.lineno is not None else "?",
                role,
                token,
            )
            return None

    def feed_line(self, line: str, lineno: Optional[int] = None) -> None:
        """Ingest one description line."""
        self.lines += 1
        spec = tokenize_line(line, lineno)
        if spec is None:
            self.comments += 1
            return

        src = self._parse(spec.source, spec, line, "source")

        dsts = []
        for token in spec.destinations:
            dst = self._parse(token, spec, line, "destination")
            if dst is not None:
                dsts.append(dst)

        if src is None:
            # No source to attach edges to; keep the ids in first-seen order
            for dst in dsts:
                self.graph.resolve(dst)
            return

        LOG.debug("%s: %s", src, ", ".join(str(dst) for dst in dsts))

        if not dsts:
            self.graph.resolve(src)
        for dst in dsts:
            self.add_edge(src, dst)

    def feed(self, lines: Iterable[str]) -> ControlFlowGraph:
        """Ingest every line of an iterable, numbering lines from 1."""
        for lineno, line in enumerate(lines, 1):
            self.feed_line(line, lineno)
        return self.graph

    def add_edge(self, src: Hashable, dst: Hashable) -> None:
        self.graph.add_edge(src, dst)
        self.edges += 1

    def feed_pairs(self, pairs: Iterable[Tuple[Hashable, Hashable]]) -> ControlFlowGraph:
        """Ingest already-parsed (source id, destination id) pairs."""
        for src, dst in pairs:
            self.add_edge(src, dst)
        return self.graph

    def stats(self):
        return {
            "lines": self.lines,
            "comments": self.comments,
            "edges": self.edges,
            "skipped": self.skipped,
            "blocks": self.graph.node_count(),
        }


def ingest_lines(lines, strict=False, parse_id=parse_block_id, graph=None):
    """Build a ControlFlowGraph from description lines."""
    return EdgeIngestor(graph, strict=strict, parse_id=parse_id).feed(lines)


def ingest_pairs(pairs, graph=None):
    """Build a ControlFlowGraph from (source id, destination id) pairs."""
    return EdgeIngestor(graph).feed_pairs(pairs)


def ingest_file(path, strict=False, parse_id=parse_block_id, graph=None):
    """Build a ControlFlowGraph from a description file."""
    with open(path, "r", encoding="utf-8") as handle:
        return ingest_lines(handle, strict=strict, parse_id=parse_id, graph=graph)
