"""Verify that the section files reproduce the full Markdown document."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Sequence

from mdsplit.config import SECTION_SUFFIX, BuildPaths
from mdsplit.exceptions import InputReadError, VerificationError
from mdsplit.schemas import VerificationResult
from mdsplit.storage import LocalStorage, Storage

logger = logging.getLogger(__name__)

_FENCED_BLOCK_RE = re.compile(r"```[\s\S]*?```")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_for_comparison(text: str) -> str:
    """Drop fenced code blocks, then remove all whitespace."""
    text = _FENCED_BLOCK_RE.sub("", text)
    return _WHITESPACE_RE.sub("", text)


def section_order_key(name: str) -> tuple[int, str]:
    """Order section files by their numeric prefix, then by name."""
    prefix = name.split("-", 1)[0]
    return (int(prefix) if prefix.isdigit() else -1, name)


def verify_text(full_markdown: str, sections: Sequence[str]) -> None:
    """Raise VerificationError unless the joined sections match the full text."""
    merged = "\n\n".join(sections)
    if normalize_for_comparison(full_markdown) != normalize_for_comparison(merged):
        raise VerificationError(
            "Split+merge verification failed: text mismatch detected."
        )


async def verify_split(
    paths: BuildPaths, *, storage: Storage | None = None
) -> VerificationResult:
    """Re-read the persisted artifacts and check the split lost nothing.

    Section files are read concurrently and merged by their numeric ordinal
    prefix, which is document order.

    Args:
        paths: Locations of the full document and the sections directory.
        storage: Storage to read from. Defaults to the local filesystem.

    Returns:
        The number of section files verified.

    Raises:
        InputReadError: If an artifact cannot be read.
        VerificationError: If the normalized texts differ.
    """
    store = storage or LocalStorage()
    try:
        full_markdown = await store.read_text(paths.full_markdown_path)
        names = sorted(
            await store.list_files(paths.sections_dir, SECTION_SUFFIX),
            key=section_order_key,
        )
        contents = await asyncio.gather(
            *(store.read_text(paths.sections_dir / name) for name in names)
        )
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(f"Failed to read split output: {exc}") from exc

    verify_text(full_markdown, contents)
    logger.debug("Verified %d section files in %s", len(names), paths.sections_dir)
    return VerificationResult(files_verified=len(names), sections_dir=paths.sections_dir)
