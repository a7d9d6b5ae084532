"""
Unit tests for the Batch Orchestrator.
"""

from unittest.mock import Mock, call

import pytest
from src.agents.aggregation import SentimentAggregator
from src.agents.batch import BatchOrchestrator, BatchState
from src.agents.sentiment_gateway import SentimentGateway
from src.errors import (
    BackendError,
    BulkUnavailableError,
    NoValidInputError,
    SentimentTimeoutError,
)
from src.models.analysis import AnalysisResult


@pytest.fixture
def aggregator():
    return SentimentAggregator()


@pytest.fixture
def mock_gateway():
    """Gateway mock whose bulk endpoint is missing."""
    gateway = Mock(spec=SentimentGateway)
    gateway.analyze_many.side_effect = BulkUnavailableError("Not found.", status=404)
    return gateway


def _positive(text):
    return AnalysisResult(text=text, sentiment="positive", score=0.5, confidence=0.9)


def test_bulk_success(aggregator):
    """Test that a successful bulk call skips the fallback."""
    gateway = Mock(spec=SentimentGateway)
    bulk_batch = aggregator.aggregate([_positive("a"), _positive("b")])
    gateway.analyze_many.return_value = bulk_batch

    orchestrator = BatchOrchestrator(gateway, aggregator)
    batch = orchestrator.run(["a", "b"])

    assert batch is bulk_batch
    assert orchestrator.state == BatchState.COMPLETED
    gateway.analyze_one.assert_not_called()


def test_blank_texts_filtered_before_bulk(aggregator):
    """Test that blank entries never reach the backend."""
    gateway = Mock(spec=SentimentGateway)
    gateway.analyze_many.return_value = aggregator.aggregate([_positive("keep")])

    BatchOrchestrator(gateway, aggregator).run(["   ", "", " keep "])

    gateway.analyze_many.assert_called_once_with(["keep"])


def test_all_blank_fails_fast(mock_gateway, aggregator):
    """Test NoValidInputError without any network call."""
    with pytest.raises(NoValidInputError):
        BatchOrchestrator(mock_gateway, aggregator).run(["", "  ", "\n"])

    mock_gateway.analyze_many.assert_not_called()
    mock_gateway.analyze_one.assert_not_called()


def test_fallback_preserves_order_and_substitutes_failures(mock_gateway, aggregator):
    """Test degradation to per-text calls when bulk is unavailable."""
    def analyze_one(text):
        if text == "bad":
            raise BackendError("Error: 500 Internal Server Error", status=500)
        return _positive(text)

    mock_gateway.analyze_one.side_effect = analyze_one
    texts = ["first", "bad", "third"]

    orchestrator = BatchOrchestrator(mock_gateway, aggregator)
    batch = orchestrator.run(texts)

    assert len(batch.results) == len(texts)
    assert [r.text for r in batch.results] == texts
    assert mock_gateway.analyze_one.call_args_list == [call("first"), call("bad"), call("third")]

    placeholder = batch.results[1]
    assert placeholder.sentiment == "neutral"
    assert placeholder.score == 0
    assert placeholder.confidence == 0

    assert batch.mode == "fallback"
    assert batch.failed == 1
    assert batch.summary.total == 3
    assert batch.summary.positive == 2
    assert batch.summary.neutral == 1
    assert orchestrator.state == BatchState.COMPLETED


def test_fallback_absorbs_timeouts(mock_gateway, aggregator):
    """Test that a timed-out item becomes a placeholder."""
    mock_gateway.analyze_one.side_effect = SentimentTimeoutError("timed out")

    batch = BatchOrchestrator(mock_gateway, aggregator).run(["a", "b"])

    assert batch.failed == 2
    assert all(r.sentiment == "neutral" and r.score == 0 for r in batch.results)
    assert batch.summary.avg_score == 0.0


def test_bulk_server_error_is_fatal(aggregator):
    """Test that non-404 bulk failures abort the batch."""
    gateway = Mock(spec=SentimentGateway)
    gateway.analyze_many.side_effect = BackendError("boom", status=500)

    orchestrator = BatchOrchestrator(gateway, aggregator)
    with pytest.raises(BackendError):
        orchestrator.run(["a"])

    gateway.analyze_one.assert_not_called()
    assert orchestrator.state == BatchState.BULK_REQUESTED


def test_bulk_timeout_is_fatal(aggregator):
    """Test that a bulk timeout is not treated as a missing endpoint."""
    gateway = Mock(spec=SentimentGateway)
    gateway.analyze_many.side_effect = SentimentTimeoutError("timed out")

    with pytest.raises(SentimentTimeoutError):
        BatchOrchestrator(gateway, aggregator).run(["a"])

    gateway.analyze_one.assert_not_called()


def test_fallback_with_real_gateway(mock_session, make_response):
    """Test the whole bulk -> fallback path through the HTTP layer."""
    mock_session.post.side_effect = [
        make_response(404, {"detail": "Not found."}),
        make_response(200, {"sentiment": "Positivo", "polarity": 0.7, "language": "es"}),
        make_response(500, {"detail": "Model crashed"}),
        make_response(200, {"sentiment": "Negativo", "polarity": -0.4, "language": "es"}),
    ]
    gateway = SentimentGateway(base_url="http://api.test", timeout_seconds=5, session=mock_session)

    batch = BatchOrchestrator(gateway).run(["good", "broken", "bad"])

    assert [r.sentiment for r in batch.results] == ["positive", "neutral", "negative"]
    assert [r.score for r in batch.results] == [0.7, 0.0, -0.4]
    assert batch.summary.avg_score == pytest.approx(0.1)
    assert mock_session.post.call_count == 4


def test_fallback_non_numeric_polarity_becomes_placeholder(mock_session, make_response):
    """Test a malformed single-text response is absorbed like any other failure."""
    mock_session.post.side_effect = [
        make_response(404, {"detail": "Not found."}),
        make_response(200, {"sentiment": "Positivo", "polarity": 0.7, "language": "es"}),
        make_response(200, {"sentiment": "Positivo", "polarity": "n/a"}),
        make_response(200, {"sentiment": "Negativo", "polarity": -0.4, "language": "es"}),
    ]
    gateway = SentimentGateway(base_url="http://api.test", timeout_seconds=5, session=mock_session)

    batch = BatchOrchestrator(gateway).run(["good", "odd", "bad"])

    assert batch.mode == "fallback"
    assert batch.failed == 1
    assert [r.text for r in batch.results] == ["good", "odd", "bad"]
    assert batch.results[1].sentiment == "neutral"
    assert batch.results[1].score == 0.0
    assert batch.results[1].confidence == 0.0
    assert batch.summary.neutral == 1


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
