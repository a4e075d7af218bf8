"""Split Markdown into sections at second-level headings."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from mdsplit.config import PREAMBLE_TITLE, SECTION_HEADING_PREFIX, SECTION_SUFFIX
from mdsplit.schemas import SectionEntry

_LINE_BREAK_RE = re.compile(r"\r?\n")
_WHITESPACE_RE = re.compile(r"\s+")
# ASCII word characters, hyphens and CJK unified ideographs survive.
_SLUG_STRIP_RE = re.compile(r"[^\w\-\u4e00-\u9fff]", re.ASCII)
_HYPHEN_RUN_RE = re.compile(r"-+")


@dataclass
class SectionRecord:
    """Lines accumulated for one section while scanning the document."""

    title: str
    lines: list[str] = field(default_factory=list)


def slugify(text: str) -> str:
    """Convert a section title into a filesystem-safe slug."""
    slug = _WHITESPACE_RE.sub("-", text.lower().strip())
    slug = _SLUG_STRIP_RE.sub("", slug)
    return _HYPHEN_RUN_RE.sub("-", slug)


def is_section_heading(line: str) -> bool:
    return line.startswith(SECTION_HEADING_PREFIX)


def collect_records(markdown: str) -> list[SectionRecord]:
    """Group Markdown lines into records, opening a new one at each ``## `` line.

    The first record holds everything before the first heading and is
    titled with the preamble marker. Records without lines are dropped.
    """
    records: list[SectionRecord] = []
    current = SectionRecord(title=PREAMBLE_TITLE)

    for line in _LINE_BREAK_RE.split(markdown):
        if is_section_heading(line):
            if current.lines:
                records.append(current)
            title = line[len(SECTION_HEADING_PREFIX):].strip()
            current = SectionRecord(title=title, lines=[line])
        else:
            current.lines.append(line)

    if current.lines:
        records.append(current)
    return records


def file_name_for(index: int, title: str) -> str:
    prefix = f"{index:02d}"
    slug = slugify(title) or f"section-{prefix}"
    return f"{prefix}-{slug}{SECTION_SUFFIX}"


def finalize_records(records: Iterable[SectionRecord]) -> list[SectionEntry]:
    return [
        SectionEntry(
            file_name=file_name_for(index, record.title),
            title=record.title,
            content="\n".join(record.lines).strip() + "\n",
        )
        for index, record in enumerate(records)
    ]


def split_sections(markdown: str) -> list[SectionEntry]:
    """Partition Markdown into ordered section entries.

    Args:
        markdown: The full Markdown document.

    Returns:
        Entries in document order. File names carry a zero-padded ordinal
        prefix, so they are unique and sort in document order even when two
        headings share the same text.
    """
    return finalize_records(collect_records(markdown))


def render_manifest(sections: Iterable[SectionEntry]) -> str:
    """Render the ``- <file>: <title>`` index of sections."""
    return "\n".join(section.manifest_line() for section in sections) + "\n"
