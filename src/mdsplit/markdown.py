"""Convert a full HTML document to GitHub-flavoured Markdown."""

from __future__ import annotations

import logging
import re

from mdsplit.exceptions import ParseError
from mdsplit.sanitize import TABLE_CELL_TAGS, flatten_table_cells, remove_comments

try:
    from bs4 import BeautifulSoup, FeatureNotFound, ParserRejectedMarkup
    from bs4.element import (
        Comment,
        Declaration,
        Doctype,
        NavigableString,
        PageElement,
        ProcessingInstruction,
        Tag,
    )
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

# Serialization style. Splitting and verification depend on these choices:
# fenced code blocks only, and ATX headings so "## " starts a level-2 line.
BULLET = "-"
FENCE = "```"
EMPHASIS = "*"
STRONG = "**"
STRIKETHROUGH = "~~"
THEMATIC_BREAK = "***"
HARD_BREAK = "\\\n"

_HEADING_TAGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}
_CONTAINER_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "body",
        "center",
        "dd",
        "details",
        "dialog",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "header",
        "hgroup",
        "html",
        "li",
        "main",
        "nav",
        "search",
        "section",
        "summary",
        "tbody",
        "tfoot",
        "thead",
        "tr",
    }
)
_BLOCK_TAGS = _CONTAINER_TAGS | frozenset(
    {"blockquote", "hr", "ol", "p", "pre", "table", "ul", *_HEADING_TAGS}
)
_SKIPPED_TAGS = frozenset(
    {
        "base",
        "head",
        "link",
        "meta",
        "noscript",
        "script",
        "style",
        "template",
        "title",
    }
)
_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)

_HTML_WHITESPACE_RE = re.compile(r"[ \t\n\r\f]+")
_ESCAPE_RE = re.compile(r"([\\`*_\[\]<~])")
_AUTOLINK_RE = re.compile(r"^(?:https?|mailto):", re.IGNORECASE)
_CODE_LANGUAGE_RE = re.compile(r"^(?:language|lang)-(.+)$")
_BACKTICK_RUN_RE = re.compile(r"`+")

# Line starts that would otherwise be read as block syntax.
_ATX_START_RE = re.compile(r"^(#{1,6})(?=\s|$)")
_BULLET_START_RE = re.compile(r"^([-+*>])(?=\s|$)")
_ORDERED_START_RE = re.compile(r"^(\d{1,9})([.)])(?=\s|$)")
_SETEXT_RE = re.compile(r"^(=+|-+)\s*$")


def parse_document(html: str) -> BeautifulSoup:
    """Parse ``html`` as a complete document (html/head/body)."""
    try:
        return BeautifulSoup(html, "lxml")
    except (FeatureNotFound, ParserRejectedMarkup) as exc:
        raise ParseError(f"Failed to parse HTML document: {exc}") from exc


def convert_html_to_markdown(html: str) -> str:
    """Convert a full HTML document into a single Markdown string.

    The tree is parsed, stripped of comments, has its table cells flattened
    to plain text, and is then serialized block by block. Tables,
    strikethrough and autolinks use their GFM forms.

    Parameters
    ----------
    html : str
        Complete HTML document text.

    Returns
    -------
    str
        Markdown ending with a single newline, or ``""`` for a document
        without renderable content.

    Raises
    ------
    ParseError
        If the document cannot be parsed.
    """
    soup = parse_document(html)
    remove_comments(soup)
    flatten_table_cells(soup)

    root = soup.body or soup
    blocks = _serialize_flow(root)
    markdown = "\n\n".join(block for block in blocks if block)
    logger.debug("Serialized %d Markdown blocks", len(blocks))
    return markdown + "\n" if markdown else ""


def _serialize_flow(container: Tag) -> list[str]:
    """Serialize mixed block/inline children, grouping inline runs into paragraphs."""
    blocks: list[str] = []
    inline_run: list[PageElement] = []

    def flush() -> None:
        paragraph = _serialize_paragraph(inline_run)
        inline_run.clear()
        if paragraph:
            blocks.append(paragraph)

    for child in container.children:
        if isinstance(child, _NON_TEXT_STRINGS):
            continue
        if isinstance(child, Tag):
            if child.name in _SKIPPED_TAGS:
                continue
            if child.name in _BLOCK_TAGS:
                flush()
                blocks.extend(_serialize_block(child))
                continue
        inline_run.append(child)
    flush()
    return blocks


def _serialize_block(tag: Tag) -> list[str]:
    if tag.name in _HEADING_TAGS:
        heading = " ".join(_inline_lines(tag.children))
        if not heading:
            return []
        return [f"{'#' * _HEADING_TAGS[tag.name]} {heading}"]

    if tag.name == "p":
        paragraph = _serialize_paragraph(tag.children)
        return [paragraph] if paragraph else []

    if tag.name in {"ul", "ol"}:
        rendered = _serialize_list(tag)
        return [rendered] if rendered else []

    if tag.name == "pre":
        return [_serialize_code_block(tag)]

    if tag.name == "blockquote":
        inner = "\n\n".join(_serialize_flow(tag))
        if not inner:
            return []
        return ["\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))]

    if tag.name == "table":
        return _serialize_table(tag)

    if tag.name == "hr":
        return [THEMATIC_BREAK]

    return _serialize_flow(tag)


def _serialize_paragraph(nodes) -> str:
    lines = _inline_lines(nodes)
    return HARD_BREAK.join(_escape_line_start(line) for line in lines)


def _inline_lines(nodes) -> list[str]:
    """Render inline nodes and split on hard breaks, dropping empty lines."""
    text = "".join(_serialize_inline(node) for node in nodes)
    text = re.sub(r" {2,}", " ", text)
    return [line.strip() for line in text.split("\n") if line.strip()]


def _serialize_inline(node: PageElement) -> str:
    if isinstance(node, _NON_TEXT_STRINGS):
        return ""
    if isinstance(node, NavigableString):
        return _escape_text(_collapse_whitespace(str(node)))
    if not isinstance(node, Tag) or node.name in _SKIPPED_TAGS:
        return ""

    if node.name == "br":
        return "\n"

    if node.name in {"em", "i"}:
        return _wrap(_serialize_children_inline(node), EMPHASIS)

    if node.name in {"strong", "b"}:
        return _wrap(_serialize_children_inline(node), STRONG)

    if node.name in {"del", "s", "strike"}:
        return _wrap(_serialize_children_inline(node), STRIKETHROUGH)

    if node.name == "code":
        return _serialize_inline_code(node.get_text())

    if node.name == "a":
        return _serialize_link(node)

    if node.name == "img":
        alt = _escape_text(_collapse_whitespace(node.get("alt", "")))
        src = node.get("src")
        if not src:
            return alt
        return f"![{alt}]({_format_destination(src, node.get('title'))})"

    return _serialize_children_inline(node)


def _serialize_children_inline(tag: Tag) -> str:
    return "".join(_serialize_inline(child) for child in tag.children)


def _serialize_link(node: Tag) -> str:
    text = _serialize_children_inline(node).strip()
    href = node.get("href")
    if not href:
        return text
    plain = _collapse_whitespace(node.get_text()).strip()
    if _AUTOLINK_RE.match(href) and plain in {href, href.removeprefix("mailto:")}:
        if not node.get("title") and not re.search(r"[\s<>]", href):
            return f"<{href}>"
    return f"[{text}]({_format_destination(href, node.get('title'))})"


def _format_destination(url: str, title: str | None) -> str:
    destination = f"<{url}>" if re.search(r"[\s()]", url) else url
    if title:
        escaped_title = title.replace("\\", "\\\\").replace('"', '\\"')
        return f'{destination} "{escaped_title}"'
    return destination


def _serialize_inline_code(text: str) -> str:
    text = _collapse_whitespace(text)
    if not text:
        return ""
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(text)), default=0)
    fence = "`" * (longest + 1)
    if text.startswith("`") or text.endswith("`"):
        text = f" {text} "
    return f"{fence}{text}{fence}"


def _wrap(inner: str, marker: str) -> str:
    """Wrap ``inner`` in ``marker``, keeping edge whitespace outside the markers."""
    stripped = inner.strip()
    if not stripped:
        return inner
    leading = " " if inner[:1].isspace() else ""
    trailing = " " if inner[-1:].isspace() else ""
    return f"{leading}{marker}{stripped}{marker}{trailing}"


def _serialize_list(list_tag: Tag) -> str:
    ordered = list_tag.name == "ol"
    start = _list_start(list_tag) if ordered else 1
    items = [
        child
        for child in list_tag.children
        if isinstance(child, Tag) and child.name == "li"
    ]
    if not items:
        return ""

    item_blocks = [_serialize_flow(item) for item in items]
    spread = any(
        sum(1 for block in blocks if not _is_list_block(block)) > 1
        for blocks in item_blocks
    )
    separator = "\n\n" if spread else "\n"

    rendered: list[str] = []
    for offset, blocks in enumerate(item_blocks):
        marker = f"{start + offset}." if ordered else BULLET
        rendered.append(_format_list_item(marker, separator.join(blocks)))
    return separator.join(rendered)


def _list_start(list_tag: Tag) -> int:
    try:
        return int(list_tag.get("start", 1))
    except (TypeError, ValueError):
        return 1


def _is_list_block(block: str) -> bool:
    first = block.split("\n", 1)[0]
    return first.startswith(f"{BULLET} ") or first == BULLET or bool(
        re.match(r"^\d+\.(?: |$)", first)
    )


def _format_list_item(marker: str, content: str) -> str:
    if not content:
        return marker
    # Continuation lines align with the first character after "<marker> ".
    indent = " " * (len(marker) + 1)
    lines = content.split("\n")
    rest = [f"{indent}{line}" if line else "" for line in lines[1:]]
    return "\n".join([f"{marker} {lines[0]}", *rest])


def _serialize_code_block(pre: Tag) -> str:
    code = pre.find("code")
    source = code if code is not None else pre
    text = source.get_text()
    if text.endswith("\n"):
        text = text[:-1]

    language = _code_language(source) or _code_language(pre)
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(text)), default=0)
    fence = FENCE if longest < len(FENCE) else "`" * (longest + 1)
    return f"{fence}{language}\n{text}\n{fence}"


def _code_language(tag: Tag) -> str:
    for cls in tag.get("class", []):
        match = _CODE_LANGUAGE_RE.match(cls)
        if match:
            return match.group(1)
    return ""


def _serialize_table(table: Tag) -> list[str]:
    blocks: list[str] = []
    caption = table.find("caption", recursive=False)
    if caption is not None:
        caption_text = _serialize_paragraph(caption.children)
        if caption_text:
            blocks.append(caption_text)

    rows: list[list[str]] = []
    alignments: list[str] = []
    for row in table.find_all("tr"):
        if row.find_parent("table") is not table:
            continue
        cells = row.find_all(TABLE_CELL_TAGS, recursive=False)
        if not cells:
            continue
        if not rows:
            alignments = [_alignment_marker(cell.get("align")) for cell in cells]
        rows.append([_table_cell_text(cell) for cell in cells])

    if not rows:
        return blocks

    max_cols = max(len(row) for row in rows)
    normalized = [row + [""] * (max_cols - len(row)) for row in rows]
    alignments += ["---"] * (max_cols - len(alignments))
    lines = [
        "| " + " | ".join(normalized[0]) + " |",
        "| " + " | ".join(alignments) + " |",
    ]
    for row in normalized[1:]:
        lines.append("| " + " | ".join(row) + " |")
    blocks.append("\n".join(lines))
    return blocks


def _table_cell_text(cell: Tag) -> str:
    text = _escape_text(_collapse_whitespace(cell.get_text())).strip()
    return text.replace("|", "\\|")


def _alignment_marker(align: str | None) -> str:
    align = (align or "").strip().lower()
    if align == "left":
        return ":--"
    if align == "right":
        return "--:"
    if align == "center":
        return ":-:"
    return "---"


def _collapse_whitespace(text: str) -> str:
    return _HTML_WHITESPACE_RE.sub(" ", text)


def _escape_text(text: str) -> str:
    return _ESCAPE_RE.sub(r"\\\1", text)


def _escape_line_start(line: str) -> str:
    """Escape a paragraph line whose start would parse as block syntax."""
    if _ATX_START_RE.match(line) or _BULLET_START_RE.match(line):
        return "\\" + line
    if _SETEXT_RE.match(line):
        return "\\" + line
    match = _ORDERED_START_RE.match(line)
    if match:
        return f"{match.group(1)}\\{line[len(match.group(1)):]}"
    return line
