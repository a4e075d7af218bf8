"""Tests for section splitting."""

from __future__ import annotations

from mdsplit.sections import (
    SectionRecord,
    collect_records,
    file_name_for,
    render_manifest,
    slugify,
    split_sections,
)


class TestSlugify:
    """Tests for slugify."""

    def test_basic_slug(self) -> None:
        assert slugify("Hello World") == "hello-world"

    def test_collapses_whitespace(self) -> None:
        assert slugify("  Multiple   Spaces  ") == "multiple-spaces"

    def test_strips_punctuation_and_collapses_hyphens(self) -> None:
        assert slugify("C++ & Rust!") == "c-rust"
        assert slugify("a - b") == "a-b"

    def test_keeps_cjk_ideographs(self) -> None:
        assert slugify("中文 标题") == "中文-标题"
        assert slugify("00-前言") == "00-前言"

    def test_drops_non_ascii_letters(self) -> None:
        """Only ASCII word characters count as word characters."""
        assert slugify("Café Menu") == "caf-menu"

    def test_symbols_only_is_empty(self) -> None:
        assert slugify("!!! ???") == "-"
        assert slugify("!!!") == ""


class TestCollectRecords:
    """Tests for collect_records."""

    def test_preamble_and_headings(self) -> None:
        records = collect_records("intro\n## A\nbody\n")

        assert records == [
            SectionRecord(title="00-前言", lines=["intro"]),
            SectionRecord(title="A", lines=["## A", "body", ""]),
        ]

    def test_only_exact_prefix_splits(self) -> None:
        """'###', '##x' and indented headings do not open a section."""
        records = collect_records("x\n### Sub\n##Tight\n ## Indented\n")

        assert len(records) == 1

    def test_heading_title_is_trimmed(self) -> None:
        records = collect_records("##    Spaced Title   \n")

        assert records[0].title == "Spaced Title"
        assert records[0].lines[0] == "##    Spaced Title   "


class TestSplitSections:
    """Tests for split_sections."""

    def test_example_document(self) -> None:
        """Preamble plus two headings give three sections."""
        sections = split_sections("intro text\n## Alpha\nbody A\n## Beta\nbody B\n")

        assert [(s.file_name, s.title, s.content) for s in sections] == [
            ("00-00-前言.md", "00-前言", "intro text\n"),
            ("01-alpha.md", "Alpha", "## Alpha\nbody A\n"),
            ("02-beta.md", "Beta", "## Beta\nbody B\n"),
        ]

    def test_manifest_for_example_document(self) -> None:
        sections = split_sections("intro text\n## Alpha\nbody A\n## Beta\nbody B\n")

        assert render_manifest(sections) == (
            "- 00-00-前言.md: 00-前言\n- 01-alpha.md: Alpha\n- 02-beta.md: Beta\n"
        )

    def test_no_headings_single_section(self) -> None:
        """A document without '## ' lines is one preamble section."""
        sections = split_sections("just text\n\nmore\n")

        assert len(sections) == 1
        assert sections[0].content == "just text\n\nmore\n"

    def test_leading_heading_drops_empty_preamble(self) -> None:
        sections = split_sections("## First\nbody\n")

        assert [s.file_name for s in sections] == ["00-first.md"]

    def test_consecutive_headings(self) -> None:
        """A heading followed directly by another holds only its own line."""
        sections = split_sections("## A\n## B\n")

        assert [(s.file_name, s.content) for s in sections] == [
            ("00-a.md", "## A\n"),
            ("01-b.md", "## B\n"),
        ]

    def test_duplicate_titles_get_distinct_names(self) -> None:
        sections = split_sections("## Same\nx\n## Same\ny\n")

        assert [s.file_name for s in sections] == ["00-same.md", "01-same.md"]

    def test_empty_slug_falls_back(self) -> None:
        sections = split_sections("intro\n## !!!\nx\n")

        assert sections[1].file_name == "01-section-01.md"
        assert sections[1].title == "!!!"

    def test_crlf_line_endings(self) -> None:
        sections = split_sections("intro\r\n## A\r\nbody\r\n")

        assert [s.content for s in sections] == ["intro\n", "## A\nbody\n"]

    def test_content_is_trimmed_with_single_newline(self) -> None:
        sections = split_sections("\n\n  intro  \n\n\n## A\n\nbody\n\n\n")

        assert [s.content for s in sections] == ["intro\n", "## A\n\nbody\n"]

    def test_empty_document_yields_one_preamble(self) -> None:
        sections = split_sections("")

        assert [(s.file_name, s.content) for s in sections] == [("00-00-前言.md", "\n")]

    def test_section_count_matches_heading_lines(self) -> None:
        markdown = "intro\n" + "".join(f"## H{i}\nbody {i}\n" for i in range(12))

        sections = split_sections(markdown)
        headings = [line for line in markdown.split("\n") if line.startswith("## ")]

        assert len(sections) == 1 + len(headings)

    def test_file_names_unique_and_sorted_in_document_order(self) -> None:
        markdown = "".join(f"## Title {i % 3}\nx\n" for i in range(15))

        names = [s.file_name for s in split_sections(markdown)]

        assert len(set(names)) == len(names)
        assert sorted(names) == names


class TestFileNameFor:
    """Tests for file_name_for."""

    def test_zero_padded_prefix(self) -> None:
        assert file_name_for(7, "Setup") == "07-setup.md"

    def test_fallback_uses_prefix(self) -> None:
        assert file_name_for(3, "???") == "03-section-03.md"

    def test_three_digit_index(self) -> None:
        assert file_name_for(100, "Late") == "100-late.md"
