"""Local configuration for mdsplit."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_INPUT_PATH = Path("HTML") / "index.html"
DEFAULT_OUTPUT_DIR = Path("markdown")
SECTIONS_DIRNAME = "sections"
FULL_MARKDOWN_NAME = "index.full.md"
MANIFEST_NAME = "sections.manifest.md"

# Title given to the content that precedes the first second-level heading.
PREAMBLE_TITLE = "00-前言"
SECTION_HEADING_PREFIX = "## "
SECTION_SUFFIX = ".md"


@dataclass(frozen=True)
class BuildPaths:
    """Input and output locations, anchored at an explicit root directory.

    Attributes:
        root: Directory every other path is resolved against.
        input_path: HTML source document.
        output_dir: Directory receiving the full document and manifest.
    """

    root: Path
    input_path: Path
    output_dir: Path

    @classmethod
    def from_root(cls, root: Path | str = ".") -> "BuildPaths":
        base = Path(root)
        return cls(
            root=base,
            input_path=base / DEFAULT_INPUT_PATH,
            output_dir=base / DEFAULT_OUTPUT_DIR,
        )

    @property
    def sections_dir(self) -> Path:
        return self.output_dir / SECTIONS_DIRNAME

    @property
    def full_markdown_path(self) -> Path:
        return self.output_dir / FULL_MARKDOWN_NAME

    @property
    def manifest_path(self) -> Path:
        return self.output_dir / MANIFEST_NAME
