"""mdsplit: convert an HTML document to Markdown and split it into sections."""

__version__ = "0.1.0"

from mdsplit.build import build_markdown
from mdsplit.config import BuildPaths
from mdsplit.exceptions import (
    InputReadError,
    MdsplitError,
    OutputWriteError,
    ParseError,
    VerificationError,
)
from mdsplit.markdown import convert_html_to_markdown
from mdsplit.schemas import BuildResult, SectionEntry, VerificationResult
from mdsplit.sections import render_manifest, slugify, split_sections
from mdsplit.verify import normalize_for_comparison, verify_split

__all__ = [
    "BuildPaths",
    "BuildResult",
    "InputReadError",
    "MdsplitError",
    "OutputWriteError",
    "ParseError",
    "SectionEntry",
    "VerificationError",
    "VerificationResult",
    "__version__",
    "build_markdown",
    "convert_html_to_markdown",
    "normalize_for_comparison",
    "render_manifest",
    "slugify",
    "split_sections",
    "verify_split",
]
