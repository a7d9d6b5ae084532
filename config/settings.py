"""
Configuration settings for CommentLens.

Centralized configuration for file ingestion, the sentiment backend
and pipeline parameters.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_ROOT = PROJECT_ROOT / "output"

# Sentiment backend
SENTIMENT_API_BASE_URL = os.getenv("SENTIMENT_API_BASE_URL", "http://localhost:8000")
SENTIMENT_API_TIMEOUT_SECONDS = float(os.getenv("SENTIMENT_API_TIMEOUT_SECONDS", "30"))

# Native backend vocabulary -> canonical labels
BACKEND_LABEL_MAP = {
    "positivo": "positive",
    "negativo": "negative",
    "neutral": "neutral",
}
CANONICAL_LABELS = ("positive", "negative", "neutral")

# File admission
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024  # 10 MiB
SUPPORTED_EXTENSIONS = (".json", ".csv")
FILE_ENCODING = "utf-8-sig"

# Field names that may hold comment text, highest priority first
COMMENT_FIELD_CANDIDATES = [
    "comment",
    "comments",
    "text",
    "mensaje",
    "mensajes",
    "review",
    "reviews",
    "feedback",
    "content",
    "contenido",
    "description",
    "descripción",
    "body",
    "message",
]

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "commentlens.log"
