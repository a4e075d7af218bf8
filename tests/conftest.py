"""Test setup for mdsplit."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class MemoryStorage:
    """In-memory stand-in for LocalStorage."""

    def __init__(self, files: dict[Path, str] | None = None) -> None:
        self.files: dict[Path, str] = dict(files or {})
        self.dirs: set[Path] = set()
        self.writes: list[Path] = []

    async def read_text(self, path: Path) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    async def write_text(self, path: Path, content: str) -> None:
        self.files[path] = content
        self.writes.append(path)

    async def mkdir(self, path: Path) -> None:
        self.dirs.add(path)

    async def list_files(self, directory: Path, suffix: str) -> list[str]:
        return [
            path.name
            for path in self.files
            if path.parent == directory and path.name.endswith(suffix)
        ]

    async def remove(self, path: Path) -> None:
        del self.files[path]


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def sample_html() -> str:
    """A small document exercising headings, comments, tables and code."""
    return """<!DOCTYPE html>
<html>
  <head>
    <title>Guide</title>
    <!-- head comment -->
  </head>
  <body>
    <h1>User Guide</h1>
    <p>Welcome to the <em>guide</em>.</p>
    <!-- drafting note: remove before release -->
    <h2>Install</h2>
    <p>Run the installer.</p>
    <pre><code class="language-sh">## not a heading
make install
</code></pre>
    <h2>Options</h2>
    <table>
      <tr><th>Name</th><th>Meaning</th></tr>
      <tr><td>foo
          bar</td><td><p>first</p><p>second</p></td></tr>
    </table>
    <h2>Install</h2>
    <ul><li>Again</li></ul>
  </body>
</html>
"""
