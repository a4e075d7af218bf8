"""Command-line entry point for mdsplit."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from mdsplit import __version__
from mdsplit.build import build_markdown
from mdsplit.config import BuildPaths
from mdsplit.exceptions import MdsplitError
from mdsplit.verify import verify_split


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="mdsplit",
        description="Convert HTML/index.html to Markdown and split it by '## ' headings.",
    )
    parser.add_argument("--version", action="version", version=f"mdsplit {__version__}")
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Directory containing HTML/index.html and receiving markdown/",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="cmd", required=True)
    sub.add_parser("build", help="Convert and split the HTML document")
    sub.add_parser("verify", help="Check the section files reproduce the full document")
    sub.add_parser("run", help="Build, then verify")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    paths = BuildPaths.from_root(args.root)

    try:
        if args.cmd in {"build", "run"}:
            _cmd_build(paths)
        if args.cmd in {"verify", "run"}:
            _cmd_verify(paths)
    except MdsplitError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def _cmd_build(paths: BuildPaths) -> None:
    result = asyncio.run(build_markdown(paths))
    print(f"Wrote {result.full_markdown_path}")
    print(f"Split into {result.sections_count} markdown files in {result.sections_dir}")


def _cmd_verify(paths: BuildPaths) -> None:
    result = asyncio.run(verify_split(paths))
    print(f"Verified {result.files_verified} files, no text loss after split+merge.")


if __name__ == "__main__":
    app()
