"""
Sentiment analysis data models.

Canonical per-text results, the native bulk payload returned by the
backend, and the aggregated batch summary.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

CANONICAL_SENTIMENTS = ("positive", "negative", "neutral")


@dataclass
class AnalysisResult:
    """
    Sentiment of a single text, expressed with a canonical label.
    """
    text: str
    sentiment: str  # "positive", "negative", or "neutral"
    score: float  # Backend polarity
    confidence: Optional[float] = None

    def __post_init__(self):
        if self.sentiment not in CANONICAL_SENTIMENTS:
            raise ValueError(
                f"Invalid sentiment: {self.sentiment}. Must be 'positive', 'negative', or 'neutral'"
            )

    @classmethod
    def placeholder(cls, text: str) -> "AnalysisResult":
        """Neutral stand-in for a text whose analysis failed."""
        return cls(text=text, sentiment="neutral", score=0.0, confidence=0.0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "sentiment": self.sentiment,
            "score": self.score,
            "confidence": self.confidence
        }


@dataclass
class BatchSummary:
    """Counters over a sequence of AnalysisResult."""
    total: int = 0
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    avg_score: float = 0.0

    def __post_init__(self):
        if min(self.total, self.positive, self.negative, self.neutral) < 0:
            raise ValueError("Summary counters must be non-negative")
        if self.positive + self.negative + self.neutral != self.total:
            raise ValueError(
                f"Label counts ({self.positive}+{self.negative}+{self.neutral}) "
                f"do not add up to total ({self.total})"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "positive": self.positive,
            "negative": self.negative,
            "neutral": self.neutral,
            "avgScore": self.avg_score
        }


@dataclass
class BulkSentimentPayload:
    """
    Response body of the bulk endpoint, in the backend's own vocabulary.

    Each row looks like:
        {"index": 0, "comment": "...", "sentiment": "Positivo",
         "polarity": 0.8, "language": "es", "confidence": 0.9}
    """
    total: int
    processed: int
    failed: int
    results: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BulkSentimentPayload":
        results = data.get("results") or []
        return cls(
            total=int(data.get("total", len(results))),
            processed=int(data.get("processed", len(results))),
            failed=int(data.get("failed", 0)),
            results=list(results)
        )


@dataclass
class BatchAnalysisResult:
    """Results of one batch submission plus their summary."""
    results: List[AnalysisResult]
    summary: BatchSummary
    mode: str = "bulk"  # "bulk" or "fallback"
    failed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "mode": self.mode,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
            "summary": self.summary.to_dict()
        }
