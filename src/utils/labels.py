"""
Sentiment label normalization.

Maps the backend's native vocabulary onto canonical labels.
"""

import logging
from typing import Any, Dict, Optional

import config.settings as settings

logger = logging.getLogger(__name__)


def normalize_sentiment(label: Any, label_map: Optional[Dict[str, str]] = None) -> str:
    """
    Convert a backend sentiment label to "positive", "negative" or "neutral".

    Canonical labels pass through unchanged. Matching ignores case.
    Unrecognized labels become "neutral" and are logged as a warning so
    backend vocabulary drift shows up in the logs.
    """
    label_map = label_map or settings.BACKEND_LABEL_MAP
    key = str(label).strip().lower() if label is not None else ""

    if key in settings.CANONICAL_LABELS:
        return key

    if key in label_map:
        return label_map[key]

    logger.warning(f"Unrecognized sentiment label {label!r}, treating as neutral")
    return "neutral"
