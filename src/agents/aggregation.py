"""
Sentiment Result Aggregator.

Translates backend-shaped results into canonical AnalysisResult objects
and folds them into batch summary counters.
"""

import logging
from collections import Counter
from typing import Any, List, Optional, Sequence, Union

from src.models.analysis import (
    AnalysisResult,
    BatchAnalysisResult,
    BatchSummary,
    BulkSentimentPayload,
)
from src.utils.labels import normalize_sentiment

logger = logging.getLogger(__name__)

# Either the native bulk response or results that are already canonical
ResultPayload = Union[BulkSentimentPayload, Sequence[AnalysisResult]]


def polarity_score(value: Any) -> float:
    """
    Convert a backend polarity to a float score.

    A missing polarity scores 0.0 and is logged as a warning.

    Raises:
        ValueError, TypeError: Polarity is not numeric
    """
    if value is None:
        logger.warning("Backend result has no polarity, scoring it 0.0")
        return 0.0
    if isinstance(value, bool):
        raise TypeError(f"Polarity must be a number, got {value!r}")
    return float(value)


def _row_position(pair) -> tuple:
    position, row = pair
    index = row.get("index")
    if isinstance(index, int) and not isinstance(index, bool):
        return (index, position)
    return (position, position)


class SentimentAggregator:
    """
    Builds BatchAnalysisResult objects from either input shape.
    """

    def to_results(self, payload: ResultPayload) -> List[AnalysisResult]:
        """
        Convert a payload into canonical results.

        Args:
            payload: BulkSentimentPayload (translated row by row, ordered
                by the backend's index) or a sequence of AnalysisResult
                (used as-is)

        Returns:
            List of AnalysisResult
        """
        if isinstance(payload, BulkSentimentPayload):
            rows = sorted(enumerate(payload.results), key=_row_position)
            return [self._translate_row(row) for _, row in rows]

        return list(payload)

    def summarize(self, results: Sequence[AnalysisResult]) -> BatchSummary:
        """
        Count results per label and average their scores in one pass.

        Returns:
            BatchSummary (avg_score is 0.0 for an empty sequence)
        """
        counts = Counter()
        total_score = 0.0

        for result in results:
            counts[result.sentiment] += 1
            total_score += result.score

        total = len(results)
        return BatchSummary(
            total=total,
            positive=counts["positive"],
            negative=counts["negative"],
            neutral=counts["neutral"],
            avg_score=total_score / total if total > 0 else 0.0
        )

    def aggregate(self, payload: ResultPayload, mode: str = "bulk", failed: Optional[int] = None) -> BatchAnalysisResult:
        """
        Translate a payload and attach its summary.

        Args:
            payload: Either input shape (see to_results)
            mode: "bulk" or "fallback"
            failed: Failure count; defaults to the bulk payload's own
                `failed` field, or 0 for canonical results
        """
        results = self.to_results(payload)
        summary = self.summarize(results)

        if failed is None:
            failed = payload.failed if isinstance(payload, BulkSentimentPayload) else 0

        logger.info(
            f"Aggregated {summary.total} results ({mode}): "
            f"{summary.positive} positive, {summary.negative} negative, "
            f"{summary.neutral} neutral, avg score {summary.avg_score:.3f}"
        )

        return BatchAnalysisResult(
            results=results,
            summary=summary,
            mode=mode,
            failed=failed
        )

    def _translate_row(self, row: dict) -> AnalysisResult:
        confidence = row.get("confidence")
        return AnalysisResult(
            text=str(row.get("comment", "")),
            sentiment=normalize_sentiment(row.get("sentiment")),
            score=polarity_score(row.get("polarity")),
            confidence=float(confidence) if confidence is not None else None
        )
