"""Structural clean-up applied to the parsed HTML tree before serialization."""

from __future__ import annotations

import logging
import re

try:
    from bs4 import BeautifulSoup
    from bs4.element import (
        Comment,
        Declaration,
        Doctype,
        NavigableString,
        ProcessingInstruction,
        Tag,
    )
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

TABLE_CELL_TAGS = ("td", "th")

# Elements whose boundaries render as line breaks in text content.
_BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "caption",
        "dd",
        "details",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hr",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "summary",
        "table",
        "tbody",
        "tfoot",
        "thead",
        "tr",
        "ul",
    }
)
_SKIPPED_TAGS = frozenset({"script", "style", "noscript", "template"})
_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)

_INLINE_WHITESPACE_RE = re.compile(r"[^\S\n]+")
_NEWLINE_RUN_RE = re.compile(r"\s*\n\s*")


def remove_comments(root: BeautifulSoup | Tag) -> int:
    """Detach every comment node from the tree.

    Matches are collected before any node is detached, so removing a comment
    never causes its following sibling to be skipped.

    Returns:
        Number of comments removed.
    """
    comments = root.find_all(string=lambda text: isinstance(text, Comment))
    for comment in comments:
        comment.extract()
    if comments:
        logger.debug("Removed %d HTML comments", len(comments))
    return len(comments)


def flatten_table_cells(root: BeautifulSoup | Tag) -> int:
    """Replace the children of every ``td``/``th`` with its normalized text.

    A cell whose text is empty ends up with no children at all; otherwise it
    holds exactly one text node, so serialized tables never contain raw
    newlines or nested markup inside a cell.

    Returns:
        Number of cells flattened.
    """
    cells = root.find_all(TABLE_CELL_TAGS)
    for cell in cells:
        text = cell_text(cell)
        cell.clear()
        if text:
            cell.append(NavigableString(text))
    return len(cells)


def sanitize_tree(root: BeautifulSoup | Tag) -> None:
    """Run comment removal followed by table-cell flattening."""
    remove_comments(root)
    flatten_table_cells(root)


def cell_text(cell: Tag) -> str:
    """Return the rendered, whitespace-normalized text content of ``cell``."""
    parts: list[str] = []
    _collect_text(cell, parts)
    text = _INLINE_WHITESPACE_RE.sub(" ", "".join(parts))
    return _NEWLINE_RUN_RE.sub(" ", text).strip()


def _collect_text(node: Tag, parts: list[str]) -> None:
    for child in node.children:
        if isinstance(child, _NON_TEXT_STRINGS):
            continue
        if isinstance(child, NavigableString):
            parts.append(str(child))
            continue
        if not isinstance(child, Tag) or child.name in _SKIPPED_TAGS:
            continue
        if child.name == "br":
            parts.append("\n")
        elif child.name in _BLOCK_TAGS:
            parts.append("\n")
            _collect_text(child, parts)
            parts.append("\n")
        elif child.name in TABLE_CELL_TAGS:
            parts.append(" ")
            _collect_text(child, parts)
            parts.append(" ")
        else:
            _collect_text(child, parts)
