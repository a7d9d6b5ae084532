"""
File Ingestion Agent.

Admits uploaded comment files (type and size checks), reads their
content and dispatches to the matching format parser.
"""

import io
import logging
import os
from typing import BinaryIO, Callable, Dict, Iterable, Optional

from src.errors import FileParseError, FileTooLargeError, ReadError, UnsupportedTypeError
from src.models.comment import FileParseResult
from src.parsing.field_matcher import FieldMatcher
from src.parsing.parsers import parse_csv_content, parse_json_content
import config.settings as settings

logger = logging.getLogger(__name__)


class FileIngestionAgent:
    """
    Turns JSON/CSV files into extracted comments.

    Admission checks run before any content is read:
    1. Extension must be supported (.json or .csv)
    2. Size must not exceed max_file_size

    The ingest_* methods raise FileParseError subclasses. The parse_*
    methods return a FileParseResult carrying the error instead.
    """

    def __init__(
        self,
        max_file_size: int = settings.MAX_FILE_SIZE_BYTES,
        supported_extensions: Iterable[str] = settings.SUPPORTED_EXTENSIONS,
        matcher: Optional[FieldMatcher] = None,
        encoding: str = settings.FILE_ENCODING
    ):
        """
        Initialize ingestion agent.

        Args:
            max_file_size: Size ceiling in bytes
            supported_extensions: Accepted extensions, lowercase with dot
            matcher: Field matcher shared by both parsers
            encoding: Text encoding used to decode file bytes
        """
        self.max_file_size = max_file_size
        self.supported_extensions = tuple(ext.lower() for ext in supported_extensions)
        self.matcher = matcher or FieldMatcher()
        self.encoding = encoding

        self._parsers: Dict[str, Callable[[str, FieldMatcher], FileParseResult]] = {
            ".json": parse_json_content,
            ".csv": parse_csv_content,
        }

        logger.info(
            f"Initialized FileIngestionAgent (max_size={max_file_size} bytes, "
            f"extensions={', '.join(self.supported_extensions)})"
        )

    def check_admission(self, filename: str, size: int) -> str:
        """
        Validate file type and size without touching content.

        Returns:
            The lowercase extension of the admitted file

        Raises:
            UnsupportedTypeError: Extension not supported
            FileTooLargeError: Size above the ceiling
        """
        extension = os.path.splitext(filename.lower())[1]

        if extension not in self.supported_extensions or extension not in self._parsers:
            raise UnsupportedTypeError(
                f"Unsupported file format '{extension or filename}'. "
                f"Only {', '.join(self.supported_extensions)} files are accepted"
            )

        if size > self.max_file_size:
            raise FileTooLargeError(size, self.max_file_size)

        return extension

    def ingest_path(self, path: str) -> FileParseResult:
        """Admit, read and parse a file on disk."""
        filename = os.path.basename(path)

        try:
            size = os.path.getsize(path)
        except OSError as e:
            # Still reject unsupported types ahead of I/O problems
            self.check_admission(filename, 0)
            raise ReadError(f"Error reading file {filename}: {e}") from e

        extension = self.check_admission(filename, size)

        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise ReadError(f"Error reading file {filename}: {e}") from e

        return self._parse_bytes(raw, filename, extension)

    def ingest_stream(
        self,
        stream: BinaryIO,
        filename: str,
        size: Optional[int] = None
    ) -> FileParseResult:
        """
        Admit, read and parse an uploaded file object.

        Args:
            stream: Binary file-like object
            filename: Declared file name (used for type detection)
            size: Declared size in bytes; measured by seeking when omitted
        """
        if size is None:
            size = self._measure(stream, filename)

        extension = self.check_admission(filename, size)

        try:
            raw = stream.read()
        except (OSError, ValueError) as e:
            raise ReadError(f"Error reading file {filename}: {e}") from e

        return self._parse_bytes(raw, filename, extension)

    def parse_path(self, path: str) -> FileParseResult:
        """Like ingest_path, but report failures inside the result."""
        try:
            return self.ingest_path(path)
        except FileParseError as e:
            logger.warning(f"Failed to parse {path}: {e}")
            return FileParseResult.from_error(e)

    def parse_stream(
        self,
        stream: BinaryIO,
        filename: str,
        size: Optional[int] = None
    ) -> FileParseResult:
        """Like ingest_stream, but report failures inside the result."""
        try:
            return self.ingest_stream(stream, filename, size)
        except FileParseError as e:
            logger.warning(f"Failed to parse {filename}: {e}")
            return FileParseResult.from_error(e)

    def _measure(self, stream: BinaryIO, filename: str) -> int:
        """Size of a seekable stream from its current position, without reading."""
        try:
            start = stream.tell()
            end = stream.seek(0, io.SEEK_END)
            stream.seek(start)
        except (OSError, ValueError, AttributeError) as e:
            raise ReadError(f"Cannot determine size of {filename}: {e}") from e
        return end - start

    def _parse_bytes(self, raw: bytes, filename: str, extension: str) -> FileParseResult:
        if isinstance(raw, str):
            content = raw
        else:
            try:
                content = raw.decode(self.encoding)
            except UnicodeDecodeError as e:
                raise ReadError(f"Error decoding file {filename} as {self.encoding}: {e}") from e

        logger.info(f"Read {len(raw)} bytes from {filename}")
        result = self._parsers[extension](content, self.matcher)
        logger.info(f"Extracted {result.total_count} comments from {filename}")
        return result
