"""Custom exceptions for mdsplit."""


class MdsplitError(Exception):
    """Base exception for mdsplit operations."""


class InputReadError(MdsplitError):
    """Source document is missing or unreadable."""


class ParseError(MdsplitError):
    """Error during HTML tree construction."""


class OutputWriteError(MdsplitError):
    """Error while creating output directories or writing files."""


class VerificationError(MdsplitError):
    """Split sections do not reproduce the full document."""
