"""Command-line interface for gomermaid."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from gomermaid.config import resolve_settings
from gomermaid.errors import GomermaidError
from gomermaid.loaders import LOADER_KINDS
from gomermaid.pipeline import run

logger = logging.getLogger("gomermaid")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="gomermaid",
        description=(
            "Print a Mermaid flowchart of the internal package imports of a Go "
            "module. Inspect the result at https://mermaid.live"
        ),
    )
    parser.add_argument(
        "module_dir",
        type=Path,
        help="Directory of the Go module",
    )
    parser.add_argument(
        "--pattern",
        default=None,
        help="Go package pattern (default: ./...)",
    )
    parser.add_argument(
        "--ignore",
        default=None,
        help="Packages to ignore, comma separated; any package or import containing one is dropped",
    )
    parser.add_argument(
        "--ignore-prefix",
        default=None,
        help="Prefix to remove from each package name",
    )
    parser.add_argument(
        "--loader",
        choices=LOADER_KINDS,
        default=None,
        help="How to discover packages: go list, source parsing, or auto (default)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    try:
        settings = resolve_settings(
            args.module_dir,
            pattern=args.pattern,
            ignore=args.ignore,
            ignore_prefix=args.ignore_prefix,
            loader=args.loader,
        )
        run(args.module_dir, settings)
    except GomermaidError as e:
        logger.error("%s", e)
        sys.exit(1)
