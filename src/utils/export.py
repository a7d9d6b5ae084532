"""
Result export utility.

Writes batch analysis results as a JSON report or a CSV table.
"""

import json
import logging
import os
from typing import Optional

import pandas as pd

from src.models.analysis import BatchAnalysisResult

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["text", "sentiment", "score", "confidence"]
EXPORT_FORMATS = (".json", ".csv")


class ResultExporter:
    """
    Exports BatchAnalysisResult objects to files.

    - JSON: {"timestamp", "mode", "failed", "results", "summary"}
    - CSV: one row per result (text, sentiment, score, confidence)
    """

    def __init__(self, output_dir: str):
        self.output_dir = output_dir

    def to_frame(self, batch: BatchAnalysisResult) -> pd.DataFrame:
        rows = [r.to_dict() for r in batch.results]
        return pd.DataFrame(rows, columns=RESULT_COLUMNS)

    def save(self, batch: BatchAnalysisResult, filename: str) -> str:
        """
        Save results, choosing the format from the file extension.

        Args:
            batch: Results to export
            filename: Target name (".json" or ".csv"); relative names
                are placed under output_dir

        Returns:
            Path of the written file
        """
        extension = os.path.splitext(filename)[1].lower()
        if extension == ".json":
            return self.save_json(batch, filename)
        if extension == ".csv":
            return self.save_csv(batch, filename)
        raise ValueError(
            f"Unsupported export format: {extension or filename}. Use {' or '.join(EXPORT_FORMATS)}"
        )

    def save_json(self, batch: BatchAnalysisResult, filename: Optional[str] = None) -> str:
        filepath = self._resolve(filename or "sentiment_results.json")

        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(batch.to_dict(), f, indent=2, ensure_ascii=False)
            logger.info(f"Saved {len(batch.results)} results to {filepath}")
        except OSError as e:
            logger.error(f"Failed to save results to {filepath}: {e}")
            raise

        return filepath

    def save_csv(self, batch: BatchAnalysisResult, filename: Optional[str] = None) -> str:
        filepath = self._resolve(filename or "sentiment_results.csv")

        try:
            self.to_frame(batch).to_csv(filepath, index=False)
            logger.info(f"Saved {len(batch.results)} results to {filepath}")
        except OSError as e:
            logger.error(f"Failed to save results to {filepath}: {e}")
            raise

        return filepath

    def _resolve(self, filename: str) -> str:
        filepath = filename if os.path.isabs(filename) else os.path.join(self.output_dir, filename)
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)
        return filepath
