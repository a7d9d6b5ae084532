"""
Comment field matcher.

Locates the column or property that holds comment text in loosely
structured records, using an ordered list of candidate field names.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import config.settings as settings

logger = logging.getLogger(__name__)


def _normalize_name(name: Any) -> str:
    return str(name).strip().lower()


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


class FieldMatcher:
    """
    Finds the comment field in a CSV header row or a JSON object.

    Candidates are checked in priority order: the first candidate present
    in the record wins, whatever order the record lists its own keys in.
    Matching ignores case and surrounding whitespace.
    """

    def __init__(self, candidates: Optional[Iterable[str]] = None):
        """
        Initialize field matcher.

        Args:
            candidates: Ordered field names, highest priority first.
                Defaults to settings.COMMENT_FIELD_CANDIDATES.
        """
        if candidates is None:
            candidates = settings.COMMENT_FIELD_CANDIDATES

        self.candidates: List[str] = []
        for name in candidates:
            normalized = _normalize_name(name)
            if normalized and normalized not in self.candidates:
                self.candidates.append(normalized)

        if not self.candidates:
            raise ValueError("FieldMatcher needs at least one candidate field name")

    def extend(self, extra_candidates: Iterable[str]) -> "FieldMatcher":
        """Return a new matcher with extra names appended at lowest priority."""
        return FieldMatcher(self.candidates + list(extra_candidates))

    def find_column_index(self, headers: List[str]) -> int:
        """
        Find the comment column in a CSV header row.

        Returns:
            Column index, or -1 if no header matches a candidate
        """
        positions = {}
        for i, header in enumerate(headers):
            # Keep the first occurrence of duplicated header names
            positions.setdefault(_normalize_name(header), i)

        for candidate in self.candidates:
            if candidate in positions:
                logger.debug(f"Matched comment column '{candidate}' at index {positions[candidate]}")
                return positions[candidate]

        return -1

    def find_comment_key(self, record: Dict[str, Any]) -> Optional[str]:
        """
        Find the key holding comment text in a JSON object.

        Candidate names are tried first (their value must be a non-blank
        string). Otherwise falls back to the first key, in record order,
        whose value is a non-blank string.

        Returns:
            The record's own key, or None
        """
        keys_by_name = {}
        for key in record:
            keys_by_name.setdefault(_normalize_name(key), key)

        for candidate in self.candidates:
            key = keys_by_name.get(candidate)
            if key is not None and _is_text(record[key]):
                return key

        for key, value in record.items():
            if _is_text(value):
                logger.debug(f"No candidate field matched, falling back to '{key}'")
                return key

        return None

    def extract_text(self, record: Dict[str, Any]) -> Optional[str]:
        """Return the trimmed comment text of a record, or None."""
        key = self.find_comment_key(record)
        if key is None:
            return None
        return record[key].strip()
