"""
Comment data models.

Represents comments extracted from uploaded JSON/CSV files and the
outcome of parsing a single file.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from src.errors import FileParseError


@dataclass(frozen=True)
class ExtractedComment:
    """
    A single comment pulled out of an uploaded file.
    Produced only by the format parsers.
    """
    text: str  # Trimmed, non-empty comment text
    source: Optional[str] = None  # Field/column name the text came from

    def __post_init__(self):
        if not self.text or self.text != self.text.strip():
            raise ValueError(f"Invalid comment text: {self.text!r}. Must be non-empty and trimmed")


@dataclass
class FileParseResult:
    """
    Outcome of parsing one file.

    Either carries comments, or an error descriptor with an empty
    comment list. Never both.
    """
    comments: List[ExtractedComment] = field(default_factory=list)
    total_count: int = 0
    error: Optional[str] = None
    error_code: Optional[str] = None  # Exception class name, e.g. "MissingColumnError"
    exception: Optional[FileParseError] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.error is not None and self.comments:
            raise ValueError("An error result cannot carry comments")

    @property
    def ok(self) -> bool:
        return self.error is None

    def texts(self) -> List[str]:
        return [c.text for c in self.comments]

    @classmethod
    def from_comments(cls, comments: List[ExtractedComment]) -> "FileParseResult":
        return cls(comments=list(comments), total_count=len(comments))

    @classmethod
    def from_error(cls, error: FileParseError) -> "FileParseResult":
        return cls(
            comments=[],
            total_count=0,
            error=str(error),
            error_code=type(error).__name__,
            exception=error
        )

    def raise_for_error(self) -> None:
        """Re-raise the error this result was built from, if any."""
        if self.exception is not None:
            raise self.exception
        if self.error is not None:
            raise FileParseError(self.error)
