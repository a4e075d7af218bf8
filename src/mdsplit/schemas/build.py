"""Build and verification output models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from mdsplit.schemas.sections import SectionEntry


class BuildResult(BaseModel):
    """Artifacts produced by a conversion pass.

    Attributes:
        full_markdown_path: File holding the unsplit Markdown document.
        sections_dir: Directory holding one file per section.
        manifest_path: File listing section file names and titles.
        sections: Section entries in split order.
    """

    full_markdown_path: Path
    sections_dir: Path
    manifest_path: Path
    sections: list[SectionEntry] = Field(default_factory=list)

    @property
    def sections_count(self) -> int:
        return len(self.sections)


class VerificationResult(BaseModel):
    """Outcome of a successful split+merge verification."""

    files_verified: int = Field(..., ge=0)
    sections_dir: Path
