"""Main CLI entry point for the xmldiff command-line tool.

    xmldiff expected.xml actual.xml [-notext] [-i ignores]

Exit status is 0 when expected is included in actual, 1 when a difference
was found and 2 for usage errors, malformed ignore patterns and documents
that cannot be loaded.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from xml_inclusion_diff import __version__
from xml_inclusion_diff.api import compare_documents, render_result
from xml_inclusion_diff.shared import (
    ConfigError,
    DiffConfig,
    configure_logging,
    get_logger,
)
from xml_inclusion_diff.tree import DocumentLoadError, load_file

EXIT_SIMILAR = 0
EXIT_DIFFERENT = 1
EXIT_USAGE = 2

DESCRIPTION = """\
Compares the two documents for similarity. Element order is not significant,
all other nodes are ordered. This is NOT a two-way diff tool. It checks that
<expected> is included in <actual>. For a stricter notion of similarity, run
the tool twice and switch the order of the arguments.
"""


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xmldiff",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=__version__)

    parser.add_argument("expected", type=Path, help="Expected XML document")
    parser.add_argument("actual", type=Path, help="Actual XML document")
    parser.add_argument(
        "-notext", "--no-text",
        dest="skip_text",
        action="store_true",
        default=None,
        help="Ignore text nodes. Only document structure matters (elements and attributes)"
    )
    parser.add_argument(
        "-i", "--ignore",
        dest="ignore_patterns",
        nargs=argparse.REMAINDER,
        metavar="PATH",
        help="Element paths to ignore. Understands only '/' and '//', and has no "
             "namespace support. Consumes all remaining arguments, so it must come last"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file with ignore_patterns and skip_text"
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def build_config(args: argparse.Namespace) -> DiffConfig:
    """Merge the optional config file with command-line options.

    Command-line values take precedence over the file.

    Raises:
        ConfigError: If the config file is unreadable or any value is invalid
    """
    config = DiffConfig.from_file(args.config) if args.config else DiffConfig()

    overrides = {}
    if args.skip_text is not None:
        overrides["skip_text"] = args.skip_text
    if args.ignore_patterns:
        overrides["ignore_patterns"] = tuple(args.ignore_patterns)
    if args.verbose:
        overrides["logging_level"] = "DEBUG"
    elif args.quiet:
        overrides["logging_level"] = "ERROR"

    return config.override(**overrides) if overrides else config


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # --help and --version exit with 0, usage errors with 2
        return e.code if isinstance(e.code, int) else EXIT_USAGE

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if config.logging_level != DiffConfig.logging_level:
        configure_logging(config.logging_level)
    logger = get_logger(__name__, config.correlation_id, "cli")

    try:
        expected = load_file(args.expected)
        actual = load_file(args.actual)
    except DocumentLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    logger.debug(
        "Comparing documents",
        extra={"expected": str(args.expected), "actual": str(args.actual)}
    )
    result = compare_documents(expected, actual, config)

    if args.format == "json":
        print(result.to_json())
    else:
        print(render_result(result))

    return EXIT_SIMILAR if result.is_similar else EXIT_DIFFERENT


if __name__ == "__main__":
    sys.exit(main())
