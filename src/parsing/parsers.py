"""
Format parsers.

Turn decoded JSON or CSV content into extracted comments. Both parsers
return a FileParseResult on success and raise a FileParseError subclass
on failure, so a failed parse never yields partial comments.
"""

import json
import logging
from typing import List, Optional

from src.errors import (
    EmptyInputError,
    InvalidFormatError,
    MissingColumnError,
    NoCommentsFoundError,
    ValidationError,
)
from src.models.comment import ExtractedComment, FileParseResult
from src.parsing.field_matcher import FieldMatcher
from src.parsing.tokenizer import parse_csv_line

logger = logging.getLogger(__name__)


def parse_json_content(content: str, matcher: Optional[FieldMatcher] = None) -> FileParseResult:
    """
    Extract comments from a JSON array.

    Array elements may be plain strings or objects; objects go through
    the field matcher. Any other element type is skipped.

    Args:
        content: Decoded file content
        matcher: Field matcher (defaults to the configured candidates)

    Returns:
        FileParseResult with at least one comment

    Raises:
        ValidationError: Content is not valid JSON
        InvalidFormatError: Top-level value is not an array
        NoCommentsFoundError: No element yielded comment text
    """
    matcher = matcher or FieldMatcher()

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValidationError(f"JSON decode error: {e}") from e

    if not isinstance(data, list):
        raise InvalidFormatError(
            f"JSON must contain an array of comments, got {type(data).__name__}"
        )

    comments: List[ExtractedComment] = []
    skipped = 0

    for item in data:
        if isinstance(item, str):
            text = item.strip()
            if text:
                comments.append(ExtractedComment(text=text))
            else:
                skipped += 1
        elif isinstance(item, dict):
            key = matcher.find_comment_key(item)
            if key is not None:
                comments.append(ExtractedComment(text=item[key].strip(), source=str(key)))
            else:
                skipped += 1
        else:
            skipped += 1

    if not comments:
        raise NoCommentsFoundError("No valid comments found in the JSON file")

    logger.info(f"Parsed {len(comments)} comments from JSON ({skipped} elements skipped)")
    return FileParseResult.from_comments(comments)


def parse_csv_content(content: str, matcher: Optional[FieldMatcher] = None) -> FileParseResult:
    """
    Extract comments from a CSV table.

    The first non-empty line is the header; the comment column is
    located by the field matcher. Rows too short to reach that column
    are skipped.

    Raises:
        EmptyInputError: No non-empty lines
        MissingColumnError: Header has no recognized comment column
        NoCommentsFoundError: No row yielded comment text
    """
    matcher = matcher or FieldMatcher()

    lines = [line.strip() for line in content.split("\n")]
    lines = [line for line in lines if line]

    if not lines:
        raise EmptyInputError("The CSV file is empty")

    headers = parse_csv_line(lines[0])
    column_index = matcher.find_column_index(headers)

    if column_index == -1:
        raise MissingColumnError(
            "No comment column found. Expected one of: " + ", ".join(matcher.candidates)
        )

    source = headers[column_index].strip()
    comments: List[ExtractedComment] = []
    short_rows = 0

    for line in lines[1:]:
        row = parse_csv_line(line)
        if len(row) <= column_index:
            short_rows += 1
            continue

        text = row[column_index].strip()
        if text:
            comments.append(ExtractedComment(text=text, source=source))

    if not comments:
        raise NoCommentsFoundError("No valid comments found in the CSV file")

    logger.info(
        f"Parsed {len(comments)} comments from CSV column '{source}' "
        f"({len(lines) - 1} rows, {short_rows} too short)"
    )
    return FileParseResult.from_comments(comments)
