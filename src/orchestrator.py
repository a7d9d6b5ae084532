"""
Pipeline Orchestrator.

Coordinates file ingestion, batch sentiment analysis and export.
"""

import logging
from datetime import datetime
from typing import Optional, Sequence

from src.agents.aggregation import SentimentAggregator
from src.agents.batch import BatchOrchestrator
from src.agents.ingestion import FileIngestionAgent
from src.agents.sentiment_gateway import SentimentGateway
from src.models.analysis import BatchAnalysisResult
from src.parsing.field_matcher import FieldMatcher
from src.utils.export import ResultExporter
import config.settings as settings

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """
    Runs the full pipeline:

    1. Ingestion (admission checks + parsing) → 2. Batch analysis
    → 3. Aggregation, with export as a separate step
    """

    def __init__(
        self,
        base_url: str = settings.SENTIMENT_API_BASE_URL,
        timeout_seconds: float = settings.SENTIMENT_API_TIMEOUT_SECONDS,
        output_dir: str = str(settings.OUTPUT_ROOT),
        extra_field_names: Optional[Sequence[str]] = None,
        gateway: Optional[SentimentGateway] = None
    ):
        """
        Initialize pipeline orchestrator.

        Args:
            base_url: Sentiment backend root URL
            timeout_seconds: Per-request timeout
            output_dir: Directory for exported reports
            extra_field_names: Additional comment field names, checked
                after the configured candidates
            gateway: Pre-built gateway (a new one by default)
        """
        logger.info("Initializing pipeline components...")

        matcher = FieldMatcher()
        if extra_field_names:
            matcher = matcher.extend(extra_field_names)

        self.aggregator = SentimentAggregator()
        self.ingestion_agent = FileIngestionAgent(matcher=matcher)
        self.gateway = gateway or SentimentGateway(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            aggregator=self.aggregator
        )
        self.batch_orchestrator = BatchOrchestrator(self.gateway, self.aggregator)
        self.exporter = ResultExporter(output_dir)

        logger.info("Pipeline initialized successfully")

    def analyze_texts(self, texts: Sequence[str]) -> BatchAnalysisResult:
        """Analyze texts that are already in memory."""
        return self.batch_orchestrator.run(texts)

    def analyze_file(self, path: str) -> BatchAnalysisResult:
        """
        Parse a comment file and analyze every extracted comment.

        Args:
            path: JSON or CSV file

        Returns:
            BatchAnalysisResult

        Raises:
            FileParseError: File was rejected or yielded no comments
            SentimentPipelineError: Batch analysis failed
        """
        start_time = datetime.now()

        # STAGE 1: Ingestion
        parsed = self.ingestion_agent.ingest_path(path)
        logger.info(f"Ingested {parsed.total_count} comments from {path}")

        # STAGE 2-3: Analysis and aggregation
        batch = self.batch_orchestrator.run(parsed.texts())

        elapsed = (datetime.now() - start_time).total_seconds()
        logger.info(f"Pipeline complete for {path} in {elapsed:.2f}s ({batch.mode} mode)")
        return batch

    def export(self, batch: BatchAnalysisResult, filename: str) -> str:
        return self.exporter.save(batch, filename)

    def health_check(self) -> bool:
        return self.gateway.health_check()
