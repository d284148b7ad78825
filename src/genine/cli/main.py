"""Command line entry point: read one markup file and print its tree."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from genine import __version__
from genine.api import parse_file
from genine.shared import ParserConfig, RootPolicy, configure_logging, get_logger
from genine.tools import dump_tokens, format_outline, format_tree

DEFAULT_INPUT = "index.html"
OUTPUT_FORMATS = ["tree", "outline", "tokens", "json"]


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="genine",
        description="Tokenize a markup file, build its tree and print it"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path(DEFAULT_INPUT),
        help=f"Markup file to parse (default: {DEFAULT_INPUT})"
    )
    parser.add_argument(
        "--format", "-f",
        choices=OUTPUT_FORMATS,
        default="tree",
        help="Output format (default: tree, children before parent)"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Input file encoding (default: utf-8)"
    )
    parser.add_argument(
        "--legacy-root",
        action="store_true",
        help="Return the first completed top-level node and ignore the rest"
    )
    parser.add_argument(
        "--check-tag-names",
        action="store_true",
        help="Reject closing tags whose name differs from the opening tag"
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        help="Maximum element nesting depth"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log errors"
    )
    return parser


def build_config(args: argparse.Namespace) -> ParserConfig:
    """Combine the configuration file (if any) with command line flags."""
    config = ParserConfig.from_file(args.config) if args.config else ParserConfig()
    overrides = {}
    if args.legacy_root:
        overrides["root_policy"] = RootPolicy.FIRST
    if args.check_tag_names:
        overrides["check_tag_names"] = True
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    return config.with_overrides(**overrides) if overrides else config


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging(logging.DEBUG)
    elif args.quiet:
        configure_logging(logging.ERROR)
    else:
        configure_logging(logging.WARNING)
    logger = get_logger(__name__, None, "cli")

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        result = parse_file(args.path, encoding=args.encoding, config=config)
        if not result.success:
            message = (
                str(result.error) if result.error is not None
                else result.diagnostics[-1].message
            )
            print(f"error: {message}", file=sys.stderr)
            return 1

        logger.debug("Rendering tree", extra={"format": args.format})
        if args.format == "json":
            try:
                output = json.dumps(result.tree.to_dict(), indent=2)
            except RecursionError:
                # The json encoder recurses once per nesting level
                print(
                    f"error: tree of depth {result.max_depth} is too deep "
                    f"for JSON output",
                    file=sys.stderr,
                )
                return 1
            print(output)
        elif args.format == "outline":
            print("\n".join(format_outline(result.tree)))
        elif args.format == "tokens":
            print("\n".join(dump_tokens(result.tokens)))
        else:
            print("\n".join(format_tree(result.tree)))
        return 0

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
