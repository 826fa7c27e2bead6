"""Command line entry point: ``checkepub EPUB_FILE_PATH``.

Exit codes: 0 when the file is valid, 1 when it is invalid or the check
could not be completed.
"""

from __future__ import annotations

import argparse
import sys

from dotenv import load_dotenv
from termcolor import colored

from checkepub.checker import Checker
from checkepub.config import CheckerConfig, load_config
from checkepub.errors import CheckEpubError
from checkepub.logging_config import configure_logging

USAGE = "Usage: checkepub EPUB_FILE_PATH"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="checkepub",
        description="Validate an EPUB file with the HamePub Lint API",
    )
    parser.add_argument(
        'epub_file',
        nargs='?',
        help='Path to the EPUB file to validate'
    )
    parser.add_argument(
        '--url',
        type=str,
        help='Lint API endpoint (default: CHECKEPUB_BASE_URL or the public API)'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        help='HTTP timeout in seconds (default: CHECKEPUB_TIMEOUT_SECONDS or 600)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    if not args.epub_file:
        print(USAGE, file=sys.stderr)
        return 1

    configure_logging(verbose=args.verbose)

    try:
        config = load_config()
        overrides = {}
        if args.url:
            overrides["base_url"] = args.url
        if args.timeout is not None:
            overrides["timeout_seconds"] = args.timeout
        if overrides:
            config = CheckerConfig.model_validate({**config.model_dump(), **overrides})
    except ValueError as exc:
        print(colored(f"Invalid configuration: {exc}", "red"), file=sys.stderr)
        return 1

    try:
        result = Checker(config).check(args.epub_file)
    except CheckEpubError as exc:
        print(colored(str(exc), "red"), file=sys.stderr)
        return 1

    if result.is_valid:
        print(colored(str(result), "green"))
        return 0

    print(colored(str(result), "red"))
    return 1


if __name__ == "__main__":
    sys.exit(main())
