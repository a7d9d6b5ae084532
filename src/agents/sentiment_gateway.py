"""
Sentiment Gateway.

HTTP client for the remote sentiment-classification backend.

Endpoints:
- GET  /health/               liveness check
- POST /api/sentiment/        analyze one text
- POST /api/sentiment/bulk/   analyze many texts
"""

import logging
import re
from typing import Any, Dict, Optional, Sequence, Tuple

import requests

from src.agents.aggregation import SentimentAggregator, polarity_score
from src.errors import (
    BackendError,
    BulkUnavailableError,
    NoValidInputError,
    SentimentTimeoutError,
)
from src.models.analysis import AnalysisResult, BatchAnalysisResult, BulkSentimentPayload
from src.utils.labels import normalize_sentiment
import config.settings as settings

logger = logging.getLogger(__name__)


def clean_base_url(base_url: str) -> str:
    """Strip trailing slashes and a trailing /api segment."""
    base = base_url.strip().rstrip("/")
    return re.sub(r"/api$", "", base)


class SentimentGateway:
    """
    Thin client over the sentiment backend.

    Every request carries its own timeout. Backend labels are converted
    to canonical labels before results leave the gateway.
    """

    def __init__(
        self,
        base_url: str = settings.SENTIMENT_API_BASE_URL,
        timeout_seconds: float = settings.SENTIMENT_API_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        aggregator: Optional[SentimentAggregator] = None
    ):
        """
        Initialize sentiment gateway.

        Args:
            base_url: Backend root, e.g. http://localhost:8000
            timeout_seconds: Per-request timeout
            session: HTTP session (a new requests.Session by default)
            aggregator: Used to build bulk results and summaries
        """
        root = clean_base_url(base_url)
        self.api_base_url = f"{root}/api"
        self.health_check_url = f"{root}/health/"
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        self.aggregator = aggregator or SentimentAggregator()

        logger.info(f"Initialized SentimentGateway with base_url={root}, timeout={timeout_seconds}s")

    def analyze_one(self, text: str) -> AnalysisResult:
        """
        Analyze the sentiment of a single text.

        Raises:
            NoValidInputError: Text is empty
            SentimentTimeoutError: Request timed out
            BackendError: Non-2xx response or transport failure
        """
        if not text or not text.strip():
            raise NoValidInputError("Text must not be empty")

        clean_text = text.strip()
        url = f"{self.api_base_url}/sentiment/"
        status, data = self._post(url, {"text": clean_text})

        try:
            confidence = data.get("confidence")
            return AnalysisResult(
                text=clean_text,
                sentiment=normalize_sentiment(data.get("sentiment")),
                score=polarity_score(data.get("polarity")),
                confidence=float(confidence) if confidence is not None else None
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise BackendError(f"Unexpected response from {url}: {e}", status=status) from e

    def analyze_many(self, texts: Sequence[str]) -> BatchAnalysisResult:
        """
        Analyze many texts through the bulk endpoint.

        Args:
            texts: Non-empty texts to analyze

        Raises:
            BulkUnavailableError: Backend has no bulk endpoint (404)
            SentimentTimeoutError: Request timed out
            BackendError: Any other failure
        """
        comments = list(texts)
        if not comments:
            raise NoValidInputError("At least one text is required")

        url = f"{self.api_base_url}/sentiment/bulk/"
        status, data = self._post(url, {"comments": comments}, not_found_error=BulkUnavailableError)

        try:
            payload = BulkSentimentPayload.from_dict(data)
            logger.info(
                f"Bulk analysis: {payload.processed}/{payload.total} processed, {payload.failed} failed"
            )
            return self.aggregator.aggregate(payload, mode="bulk")
        except (AttributeError, TypeError, ValueError) as e:
            raise BackendError(f"Unexpected response from {url}: {e}", status=status) from e

    def health_check(self) -> bool:
        """Return True if the backend answers its health check with 2xx."""
        try:
            response = self.session.get(self.health_check_url, timeout=self.timeout_seconds)
            return response.ok
        except requests.RequestException as e:
            logger.error(f"API health check failed: {e}")
            return False

    def _post(
        self,
        url: str,
        body: Dict[str, Any],
        not_found_error: type = BackendError
    ) -> Tuple[int, Dict[str, Any]]:
        try:
            response = self.session.post(url, json=body, timeout=self.timeout_seconds)
        except requests.Timeout as e:
            raise SentimentTimeoutError(
                f"Request to {url} timed out after {self.timeout_seconds}s"
            ) from e
        except requests.RequestException as e:
            raise BackendError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            detail = self._error_detail(response)
            message = detail or f"Error: {response.status_code} {response.reason}"
            error_cls = not_found_error if response.status_code == 404 else BackendError
            raise error_cls(message, status=response.status_code, detail=detail)

        try:
            data = response.json()
        except ValueError as e:
            raise BackendError(
                f"Invalid JSON in response from {url}", status=response.status_code
            ) from e

        if not isinstance(data, dict):
            raise BackendError(
                f"Unexpected response shape from {url}: {type(data).__name__}",
                status=response.status_code
            )

        return response.status_code, data

    @staticmethod
    def _error_detail(response: requests.Response) -> Optional[str]:
        try:
            data = response.json()
        except ValueError:
            return None
        if isinstance(data, dict) and data.get("detail"):
            return str(data["detail"])
        return None

    def close(self) -> None:
        self.session.close()
