"""
Dominance commands for the domflow CLI.

This module provides the "dom" command, which prints the dominator sets of a
CFG description, and the "parse" command, which echoes the parsed graph.
"""

import logging
import sys

from domflow.analysis.cfg import dump
from domflow.application import errors
from domflow.application.config import OUTPUT_FORMATS, AnalysisConfig
from domflow.application.context import AnalysisContext
from domflow.application.pipeline import Pipeline

LOG = logging.getLogger(__name__)


def _add_common_arguments(parser):
    parser.add_argument("input", help="CFG description file, or - for stdin")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first malformed id instead of skipping it",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Treat block ids as arbitrary tokens instead of integers",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("-d", "--debug", action="store_true", help="Debug output")


def add_dom_parser(subparsers):
    """Add the dom command parser to the main CLI."""
    parser = subparsers.add_parser("dom", help="Compute the dominators of every block")
    _add_common_arguments(parser)
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument("--output", "-o", help="Write the result to this file")
    parser.add_argument(
        "--timings", action="store_true", help="Print per-phase timings on stderr"
    )
    return parser


def add_parse_parser(subparsers):
    """Add the parse command parser to the main CLI."""
    parser = subparsers.add_parser("parse", help="Echo the parsed CFG description")
    _add_common_arguments(parser)
    return parser


def configure_logging(args):
    level = (
        logging.DEBUG
        if getattr(args, "debug", False)
        else logging.INFO
        if getattr(args, "verbose", False)
        else logging.WARNING
    )
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def read_lines(input):
    """Read the description lines of a file, or of stdin for "-"."""
    if input == "-":
        return sys.stdin.readlines()
    with open(input, "r", encoding="utf-8") as handle:
        return handle.readlines()


def write_output(text, output=None):
    if output:
        with open(output, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.write("\n")
        LOG.info("result written to %s", output)
    else:
        print(text)


def run_dom(args):
    """Compute and print the dominators of a CFG description.

    Returns:
        int: Exit code.
    """
    config = AnalysisConfig.from_args(args)
    pipeline = Pipeline(AnalysisContext(config))
    graph, info = pipeline.run(read_lines(args.input))
    if graph.node_count() == 0:
        errors.abort("%s declares no blocks" % args.input)
    write_output(dump.render(graph, info, config.output_format), args.output)
    return 0


def run_parse(args):
    """Echo the graph parsed from a CFG description.

    Returns:
        int: Exit code.
    """
    config = AnalysisConfig.from_args(args)
    pipeline = Pipeline(AnalysisContext(config))
    graph = pipeline.ingest(read_lines(args.input))
    write_output(dump.generate_spec(graph))
    return 0
