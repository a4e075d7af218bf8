"""File access helpers used by the build and verify passes."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol


class Storage(Protocol):
    """Read/write capability handed to the build and verify passes."""

    async def read_text(self, path: Path) -> str: ...

    async def write_text(self, path: Path, content: str) -> None: ...

    async def mkdir(self, path: Path) -> None: ...

    async def list_files(self, directory: Path, suffix: str) -> list[str]: ...

    async def remove(self, path: Path) -> None: ...


async def read_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.
    """
    return await asyncio.to_thread(_read_text, path, encoding)


def _read_text(path: Path, encoding: str) -> str:
    # newline="" keeps "\r\n" intact; line splitting handles both conventions.
    with path.open("r", encoding=encoding, newline="") as handle:
        return handle.read()


async def write_text_async(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write text to a file asynchronously using a thread pool.

    Args:
        path: Path to the file to write.
        content: Text content to write.
        encoding: Text encoding to use.
    """
    await asyncio.to_thread(_write_text, path, content, encoding)


def _write_text(path: Path, content: str, encoding: str) -> None:
    with path.open("w", encoding=encoding, newline="") as handle:
        handle.write(content)


def list_files(directory: Path, suffix: str) -> list[str]:
    """Return names of regular files in ``directory`` ending with ``suffix``."""
    return [
        entry.name
        for entry in directory.iterdir()
        if entry.is_file() and entry.name.endswith(suffix)
    ]


class LocalStorage:
    """Storage backed by the local filesystem."""

    async def read_text(self, path: Path) -> str:
        return await read_text_async(path)

    async def write_text(self, path: Path, content: str) -> None:
        await write_text_async(path, content)

    async def mkdir(self, path: Path) -> None:
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)

    async def list_files(self, directory: Path, suffix: str) -> list[str]:
        return await asyncio.to_thread(list_files, directory, suffix)

    async def remove(self, path: Path) -> None:
        await asyncio.to_thread(path.unlink)
