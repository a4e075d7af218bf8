"""Section models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SectionEntry(BaseModel):
    """A finalized section, ready to be written to its own file."""

    file_name: str = Field(..., pattern=r"^\d{2,}-.+\.md$")
    title: str
    content: str

    def manifest_line(self) -> str:
        return f"- {self.file_name}: {self.title}"
