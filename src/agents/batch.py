"""
Batch Orchestrator.

Submits a batch of texts through the bulk endpoint and degrades to
sequential per-text analysis when the backend has no bulk capability.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

import requests

from src.agents.aggregation import SentimentAggregator
from src.agents.sentiment_gateway import SentimentGateway
from src.errors import BulkUnavailableError, NoValidInputError, SentimentPipelineError
from src.models.analysis import AnalysisResult, BatchAnalysisResult

logger = logging.getLogger(__name__)


class BatchState(Enum):
    IDLE = "idle"
    BULK_REQUESTED = "bulk_requested"
    BULK_SUCCEEDED = "bulk_succeeded"
    BULK_UNAVAILABLE = "bulk_unavailable"
    FALLBACK_IN_PROGRESS = "fallback_in_progress"
    COMPLETED = "completed"


class BatchOrchestrator:
    """
    Runs one batch submission through the state machine:

        IDLE -> BULK_REQUESTED -> BULK_SUCCEEDED -> COMPLETED
                               -> BULK_UNAVAILABLE -> FALLBACK_IN_PROGRESS -> COMPLETED

    Only a missing bulk endpoint triggers the fallback; every other bulk
    failure aborts the batch. Inside the fallback a failing text becomes
    a neutral placeholder and the batch carries on. Nothing is retried.
    """

    def __init__(self, gateway: SentimentGateway, aggregator: Optional[SentimentAggregator] = None):
        self.gateway = gateway
        self.aggregator = aggregator or gateway.aggregator
        self.state = BatchState.IDLE

    def run(self, texts: Sequence[str]) -> BatchAnalysisResult:
        """
        Analyze a batch of texts.

        Args:
            texts: Raw texts; blank entries are dropped before submission

        Returns:
            BatchAnalysisResult with one result per submitted text

        Raises:
            NoValidInputError: Every text was blank (no request is made)
            SentimentTimeoutError, BackendError: Bulk request failed for
                any reason other than a missing endpoint
        """
        self._transition(BatchState.IDLE)

        valid_texts = [t.strip() for t in texts if t and t.strip()]
        if not valid_texts:
            raise NoValidInputError("No valid texts to analyze")

        logger.info(f"Submitting batch of {len(valid_texts)} texts ({len(texts) - len(valid_texts)} blank dropped)")

        self._transition(BatchState.BULK_REQUESTED)
        try:
            batch = self.gateway.analyze_many(valid_texts)
        except BulkUnavailableError:
            self._transition(BatchState.BULK_UNAVAILABLE)
            logger.warning("Bulk endpoint not available, analyzing texts one by one")
            batch = self._run_fallback(valid_texts)
        else:
            self._transition(BatchState.BULK_SUCCEEDED)

        self._transition(BatchState.COMPLETED)
        return batch

    def _run_fallback(self, texts: List[str]) -> BatchAnalysisResult:
        self._transition(BatchState.FALLBACK_IN_PROGRESS)

        results: List[AnalysisResult] = []
        failed = 0

        # Sequential: results keep input order
        for i, text in enumerate(texts):
            try:
                results.append(self.gateway.analyze_one(text))
            except (SentimentPipelineError, requests.RequestException) as e:
                logger.warning(f"Failed to analyze text {i + 1}/{len(texts)}, using neutral placeholder: {e}")
                results.append(AnalysisResult.placeholder(text))
                failed += 1

        if failed:
            logger.warning(f"Fallback finished with {failed}/{len(texts)} placeholder results")

        return self.aggregator.aggregate(results, mode="fallback", failed=failed)

    def _transition(self, state: BatchState) -> None:
        logger.debug(f"Batch state: {self.state.value} -> {state.value}")
        self.state = state
