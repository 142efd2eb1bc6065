"""
Frontends that build control flow graphs from textual descriptions.
"""

from .cfgspec import (
    EdgeIngestor,
    SpecLine,
    ingest_file,
    ingest_lines,
    ingest_pairs,
    parse_block_id,
    tokenize_line,
)

__all__ = [
    "EdgeIngestor",
    "SpecLine",
    "ingest_file",
    "ingest_lines",
    "ingest_pairs",
    "parse_block_id",
    "tokenize_line",
]
