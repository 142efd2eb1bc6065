"""
Run configuration for domflow.

AnalysisConfig gathers every option that influences an analysis run. It is
built from parsed command-line arguments by the CLI, or constructed
directly by library users.
"""

from domflow.frontend.cfgspec import parse_block_id

OUTPUT_FORMATS = ("text", "json", "dot")


class AnalysisConfig(object):
    """
    Options for a single analysis run.

    Attributes:
        strict: Fail on the first malformed token instead of skipping it
        parse_id: Callable turning a token into a block id (base-10 integers by default)
        output_format: One of OUTPUT_FORMATS, used by the CLI renderer
        verbose: Emit verbose console output
        timings: Print per-phase timings on the console
    """

    __slots__ = "strict", "parse_id", "output_format", "verbose", "timings"

    def __init__(
        self,
        strict=False,
        parse_id=parse_block_id,
        output_format="text",
        verbose=False,
        timings=False,
    ):
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(
                "unknown output format %r (expected one of %s)"
                % (output_format, ", ".join(OUTPUT_FORMATS))
            )
        self.strict = strict
        self.parse_id = parse_id
        self.output_format = output_format
        self.verbose = verbose
        self.timings = timings

    @classmethod
    def from_args(cls, args):
        """
        Build a configuration from an argparse namespace.

        Missing attributes fall back to their defaults so that every
        subcommand can share this constructor.
        """
        return cls(
            strict=getattr(args, "strict", False),
            parse_id=str if getattr(args, "tokens", False) else parse_block_id,
            output_format=getattr(args, "format", None) or "text",
            verbose=getattr(args, "verbose", False),
            timings=getattr(args, "timings", False),
        )

    def __repr__(self):
        return "AnalysisConfig(%s)" % ", ".join(
            "%s=%r" % (name, getattr(self, name)) for name in self.__slots__
        )
