"""Shared schemas for mdsplit."""

from mdsplit.schemas.build import BuildResult, VerificationResult
from mdsplit.schemas.sections import SectionEntry

__all__ = ["BuildResult", "SectionEntry", "VerificationResult"]
