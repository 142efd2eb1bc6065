"""Main CLI dispatcher for domflow.

This module provides the main command-line interface for domflow,
dispatching commands to the appropriate sub-modules.
"""

import argparse
import sys

from domflow import __version__
from domflow.application import errors

from .dom import add_dom_parser, add_parse_parser, configure_logging, run_dom, run_parse


def build_parser():
    parser = argparse.ArgumentParser(
        description="domflow - dominance analysis for control flow graphs",
        prog="domflow",
    )
    parser.add_argument(
        "--version", action="version", version="domflow %s" % __version__
    )

    subparsers = parser.add_subparsers(
        dest="command", help="Available commands", required=True
    )
    add_dom_parser(subparsers)
    add_parse_parser(subparsers)
    return parser


def main(argv=None):
    """Main entry point for the domflow CLI.

    Parses command-line arguments and dispatches to the dom or parse
    sub-command.

    Returns:
        int: Exit code (0 for success, non-zero for error).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args)

    commands = {"dom": run_dom, "parse": run_parse}

    try:
        return commands[args.command](args)
    except errors.CFGSpecError as e:
        print("Error: %s" % e, file=sys.stderr)
        return 1
    except OSError as e:
        print("Error: %s" % e, file=sys.stderr)
        return 1
    except errors.GraphAllocationError as e:
        print("Error: %s" % e, file=sys.stderr)
        return 2
    except errors.AnalysisAbort as e:
        reason = e.args[0] if e.args and e.args[0] else "no reason given"
        print("Analysis aborted: %s" % reason, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
