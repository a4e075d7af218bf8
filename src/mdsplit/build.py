"""Conversion pass: HTML document -> full Markdown, section files and manifest."""

from __future__ import annotations

import logging

from mdsplit.config import SECTION_SUFFIX, BuildPaths
from mdsplit.exceptions import InputReadError, OutputWriteError
from mdsplit.markdown import convert_html_to_markdown
from mdsplit.schemas import BuildResult, SectionEntry
from mdsplit.sections import render_manifest, split_sections
from mdsplit.storage import LocalStorage, Storage

logger = logging.getLogger(__name__)


async def build_markdown(
    paths: BuildPaths, *, storage: Storage | None = None
) -> BuildResult:
    """Convert the input HTML and persist the full document, sections and manifest.

    Nothing is written unless the input was read and parsed successfully.
    A write failure part way through can leave partial output behind.

    Args:
        paths: Input and output locations.
        storage: Storage to read from and write to. Defaults to the local
            filesystem.

    Returns:
        BuildResult describing the written artifacts.

    Raises:
        InputReadError: If the input document cannot be read.
        ParseError: If the input cannot be parsed as HTML.
        OutputWriteError: If a directory or file cannot be written.
    """
    store = storage or LocalStorage()
    try:
        html = await store.read_text(paths.input_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(f"Failed to read {paths.input_path}: {exc}") from exc
    logger.debug("Read %d characters from %s", len(html), paths.input_path)

    markdown = convert_html_to_markdown(html)
    sections = split_sections(markdown)
    logger.debug("Split Markdown into %d sections", len(sections))

    await write_outputs(paths, markdown, sections, storage=store)
    return BuildResult(
        full_markdown_path=paths.full_markdown_path,
        sections_dir=paths.sections_dir,
        manifest_path=paths.manifest_path,
        sections=sections,
    )


async def write_outputs(
    paths: BuildPaths,
    markdown: str,
    sections: list[SectionEntry],
    *,
    storage: Storage,
) -> None:
    """Write the full document, one file per section, and the manifest.

    Section files left in the sections directory by an earlier build are
    removed so the directory only holds the current split.
    """
    current = {section.file_name for section in sections}
    try:
        await storage.mkdir(paths.sections_dir)
        for name in await storage.list_files(paths.sections_dir, SECTION_SUFFIX):
            if name not in current:
                await storage.remove(paths.sections_dir / name)
                logger.debug("Removed stale section %s", name)
        await storage.write_text(paths.full_markdown_path, markdown)
        for section in sections:
            target = paths.sections_dir / section.file_name
            await storage.write_text(target, section.content)
            logger.debug("Wrote section %s", target)
        await storage.write_text(paths.manifest_path, render_manifest(sections))
    except OSError as exc:
        raise OutputWriteError(f"Failed to write output: {exc}") from exc
