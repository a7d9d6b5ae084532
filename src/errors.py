"""
Error taxonomy for CommentLens.

Parse-time errors derive from FileParseError and are terminal for the
file being parsed. Batch-time errors are terminal for a submission unless
they are raised inside the per-item fallback loop.
"""

from typing import Optional


class SentimentPipelineError(Exception):
    """Base class for every error raised by the pipeline."""


# ---------------------------------------------------------------------------
# File ingestion and parsing
# ---------------------------------------------------------------------------

class FileParseError(SentimentPipelineError):
    """A file could not be turned into comments."""


class UnsupportedTypeError(FileParseError):
    """File extension is not one of the supported formats."""


class FileTooLargeError(FileParseError):
    """File exceeds the configured size ceiling."""

    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"File is too large: {size} bytes (maximum {max_size} bytes)"
        )


class ReadError(FileParseError):
    """File content could not be read or decoded."""


class InvalidFormatError(FileParseError):
    """Decoded content has the wrong top-level shape."""


class ValidationError(FileParseError):
    """Content could not be decoded at all."""


class MissingColumnError(FileParseError):
    """CSV header has no recognized comment column."""


class EmptyInputError(FileParseError):
    """File has no lines or rows."""


class NoCommentsFoundError(FileParseError):
    """File is structurally valid but yields no comment text."""


# ---------------------------------------------------------------------------
# Sentiment analysis
# ---------------------------------------------------------------------------

class NoValidInputError(SentimentPipelineError):
    """Every submitted text was empty."""


class SentimentTimeoutError(SentimentPipelineError):
    """A backend request exceeded its timeout."""


class BackendError(SentimentPipelineError):
    """Backend returned a non-2xx response or could not be reached."""

    def __init__(self, message: str, status: Optional[int] = None, detail: Optional[str] = None):
        self.status = status
        self.detail = detail
        super().__init__(message)


class BulkUnavailableError(BackendError):
    """Bulk endpoint does not exist on the backend (404)."""
