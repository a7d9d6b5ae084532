"""
Unit tests for comment and analysis data models.
"""

import pytest
from src.errors import NoCommentsFoundError
from src.models.analysis import AnalysisResult, BatchAnalysisResult, BatchSummary, BulkSentimentPayload
from src.models.comment import ExtractedComment, FileParseResult


def test_extracted_comment_validation():
    """Test that comments must be non-empty and trimmed."""
    comment = ExtractedComment(text="Nice", source="review")
    assert comment.source == "review"

    with pytest.raises(ValueError):
        ExtractedComment(text="")
    with pytest.raises(ValueError):
        ExtractedComment(text=" padded ")


def test_extracted_comment_is_immutable():
    """Test that comments cannot be modified after creation."""
    comment = ExtractedComment(text="Nice")
    with pytest.raises(AttributeError):
        comment.text = "Changed"


def test_parse_result_from_error():
    """Test error results carry no comments."""
    result = FileParseResult.from_error(NoCommentsFoundError("nothing here"))

    assert not result.ok
    assert result.comments == []
    assert result.total_count == 0
    assert result.error == "nothing here"
    assert result.error_code == "NoCommentsFoundError"

    with pytest.raises(NoCommentsFoundError):
        result.raise_for_error()


def test_parse_result_rejects_error_with_comments():
    """Test an error result cannot also hold comments."""
    with pytest.raises(ValueError):
        FileParseResult(comments=[ExtractedComment("x")], total_count=1, error="boom")


def test_analysis_result_rejects_native_labels():
    """Test that only canonical labels are accepted."""
    with pytest.raises(ValueError):
        AnalysisResult(text="x", sentiment="Positivo", score=0.5)


def test_placeholder():
    """Test the failure placeholder."""
    result = AnalysisResult.placeholder("oops")
    assert (result.text, result.sentiment, result.score, result.confidence) == ("oops", "neutral", 0.0, 0.0)


def test_summary_invariant():
    """Test that label counts must add up to total."""
    BatchSummary(total=3, positive=1, negative=1, neutral=1, avg_score=0.0)

    with pytest.raises(ValueError):
        BatchSummary(total=3, positive=1, negative=1, neutral=0)
    with pytest.raises(ValueError):
        BatchSummary(total=-1, positive=0, negative=0, neutral=-1)


def test_bulk_payload_defaults():
    """Test missing bulk counters default from the results list."""
    payload = BulkSentimentPayload.from_dict({"results": [{"comment": "a"}]})

    assert payload.total == 1
    assert payload.processed == 1
    assert payload.failed == 0


def test_batch_result_to_dict():
    """Test the export dictionary layout."""
    batch = BatchAnalysisResult(
        results=[AnalysisResult("a", "positive", 0.5)],
        summary=BatchSummary(total=1, positive=1, avg_score=0.5)
    )

    data = batch.to_dict()

    assert "timestamp" in data
    assert data["summary"]["avgScore"] == 0.5
    assert data["results"][0]["sentiment"] == "positive"


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
