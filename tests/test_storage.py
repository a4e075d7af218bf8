"""Tests for storage helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdsplit.storage import (
    LocalStorage,
    list_files,
    read_text_async,
    write_text_async,
)


class TestTextHelpers:
    """Tests for read_text_async and write_text_async."""

    @pytest.mark.asyncio
    async def test_round_trip_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "a.md"

        await write_text_async(path, "## 前言\n")

        assert await read_text_async(path) == "## 前言\n"

    @pytest.mark.asyncio
    async def test_line_endings_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "crlf.md"
        path.write_bytes(b"a\r\nb\n")

        assert await read_text_async(path) == "a\r\nb\n"

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            await read_text_async(tmp_path / "missing.html")


class TestListFiles:
    """Tests for list_files."""

    def test_filters_by_suffix_and_type(self, tmp_path: Path) -> None:
        (tmp_path / "00-a.md").write_text("a")
        (tmp_path / "notes.txt").write_text("b")
        (tmp_path / "dir.md").mkdir()

        assert list_files(tmp_path, ".md") == ["00-a.md"]


class TestLocalStorage:
    """Tests for LocalStorage."""

    @pytest.mark.asyncio
    async def test_write_list_read(self, tmp_path: Path) -> None:
        storage = LocalStorage()
        directory = tmp_path / "out" / "sections"

        await storage.mkdir(directory)
        await storage.write_text(directory / "01-b.md", "b\n")
        await storage.write_text(directory / "00-a.md", "a\n")

        assert sorted(await storage.list_files(directory, ".md")) == ["00-a.md", "01-b.md"]
        assert await storage.read_text(directory / "00-a.md") == "a\n"

    @pytest.mark.asyncio
    async def test_mkdir_creates_parents_and_tolerates_existing(self, tmp_path: Path) -> None:
        storage = LocalStorage()
        target = tmp_path / "a" / "b"

        await storage.mkdir(target)
        await storage.mkdir(target)

        assert target.is_dir()

    @pytest.mark.asyncio
    async def test_remove(self, tmp_path: Path) -> None:
        storage = LocalStorage()
        path = tmp_path / "old.md"
        path.write_text("x")

        await storage.remove(path)

        assert not path.exists()
