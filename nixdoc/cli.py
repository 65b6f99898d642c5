"""CLI for generating library function documentation from a Nix file."""

import argparse
import sys
from pathlib import Path

from nixdoc.driver import document_file
from nixdoc.exceptions import NixdocError
from nixdoc.logging import get_nixdoc_logger, setup_logging
from nixdoc.options import build_options
from nixdoc.settings import settings

logger = get_nixdoc_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Entry point: write the generated document to stdout."""
    parser = argparse.ArgumentParser(
        prog="nixdoc",
        description="Generate CommonMark or DocBook from Nix library functions",
    )
    parser.add_argument("-f", "--file", type=Path, required=True, help="Nix file to process")
    parser.add_argument("-c", "--category", required=True, help="Name of the function category (e.g. 'strings', 'attrsets')")
    parser.add_argument("-d", "--description", required=True, help="Description of the function category")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=("commonmark", "docbook"),
        default=settings.default_format,
        help="Output format (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        help="Log level for diagnostics on stderr",
    )

    args = parser.parse_args(argv)
    if args.log_level:
        setup_logging(level=args.log_level)

    try:
        options = build_options(
            file=args.file,
            category=args.category,
            description=args.description,
            output_format=args.output_format,
        )
        document = document_file(options)
        sys.stdout.write(document)
        sys.stdout.flush()
    except NixdocError as exc:
        logger.debug("Run aborted", exc_info=True)
        print(f"FAIL: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"FAIL: {exc}", file=sys.stderr)
        return 1
    return 0
