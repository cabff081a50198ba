"""Command-line entry point: tail [-n N] [-f] [FILE ...]."""

import logging
import sys
from argparse import ArgumentParser

from tailer.config import LOG_LEVELS, load_config, load_yaml_config
from tailer.driver import tail_sources
from tailer.errors import ConfigError


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="tail",
        description="Print the last lines of each FILE to standard output. "
                    "With no FILE, or when FILE is -, read standard input.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="File path(s), or - for standard input",
    )
    parser.add_argument(
        "-n", "--lines",
        dest="line_count",
        type=int,
        help="Output the last N lines (default: 10)",
    )
    parser.add_argument(
        "-f", "--follow",
        action="store_true",
        default=None,
        help="Output appended data as the first file grows",
    )
    parser.add_argument(
        "--polling",
        dest="use_polling",
        action="store_true",
        default=None,
        help="Detect changes by polling instead of native filesystem events",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Diagnostic log level on stderr (default: WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args, load_yaml_config(args.config))
    except ConfigError as e:
        print(f"tail: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [TAIL] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        return tail_sources(args.files, config)
    except KeyboardInterrupt:
        return 0
    except BrokenPipeError:
        return 0
