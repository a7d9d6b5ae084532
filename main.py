"""
CommentLens - Comment Sentiment Analysis

CLI entry point for analyzing comment files or texts.
"""

import argparse
import logging
import os
import sys

from src.errors import FileParseError, SentimentPipelineError
from src.orchestrator import PipelineOrchestrator
from src.utils.export import EXPORT_FORMATS
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CommentLens - Batch sentiment analysis of user comments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze a CSV or JSON file of comments
  python main.py --file comments.csv

  # Analyze and export a report
  python main.py --file comments.json --output report.json

  # Analyze texts given on the command line
  python main.py --text "Great product" --text "Terrible support"

  # Check that the sentiment backend is up
  python main.py --health

Note: Set SENTIMENT_API_BASE_URL to point at the sentiment backend.
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--file",
        help="JSON or CSV file of comments (max 10 MB)"
    )
    source.add_argument(
        "--text",
        action="append",
        help="Text to analyze (repeat for several texts)"
    )
    source.add_argument(
        "--health",
        action="store_true",
        help="Only check backend health"
    )

    parser.add_argument(
        "--output",
        help="Export results to this file (.json or .csv), relative to the output directory"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--field",
        action="append",
        dest="fields",
        help="Extra comment field name to recognize (repeatable)"
    )

    parser.add_argument(
        "--api-url",
        default=settings.SENTIMENT_API_BASE_URL,
        help=f"Sentiment backend URL (default: {settings.SENTIMENT_API_BASE_URL})"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.SENTIMENT_API_TIMEOUT_SECONDS,
        help=f"Request timeout in seconds (default: {settings.SENTIMENT_API_TIMEOUT_SECONDS})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def print_summary(batch) -> None:
    summary = batch.summary
    print()
    print("=" * 60)
    print(f"Analyzed {summary.total} comments ({batch.mode} mode)")
    print("=" * 60)
    print(f"Positive: {summary.positive}")
    print(f"Negative: {summary.negative}")
    print(f"Neutral:  {summary.neutral}")
    print(f"Average score: {summary.avg_score:.3f}")
    if batch.failed:
        print(f"Failed analyses: {batch.failed}")
    print("=" * 60)


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.output and os.path.splitext(args.output)[1].lower() not in EXPORT_FORMATS:
        parser.error(f"--output must end in one of: {', '.join(EXPORT_FORMATS)}")

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    orchestrator = PipelineOrchestrator(
        base_url=args.api_url,
        timeout_seconds=args.timeout,
        output_dir=args.output_dir,
        extra_field_names=args.fields
    )

    if args.health:
        healthy = orchestrator.health_check()
        print(f"Sentiment backend at {args.api_url}: {'OK' if healthy else 'UNAVAILABLE'}")
        return 0 if healthy else 1

    try:
        if args.file:
            batch = orchestrator.analyze_file(args.file)
        else:
            batch = orchestrator.analyze_texts(args.text)

        print_summary(batch)

        if args.output:
            try:
                path = orchestrator.export(batch, args.output)
            except (ValueError, OSError) as e:
                logger.error(f"Export failed: {e}")
                print(f"\n❌ Could not write {args.output}: {e}")
                return 1
            print(f"Results: {path}")

        logger.info("CommentLens completed successfully")
        return 0

    except KeyboardInterrupt:
        logger.warning("Analysis interrupted by user")
        print("\n⚠️  Analysis interrupted")
        return 1

    except FileParseError as e:
        logger.error(f"File rejected: {e}")
        print(f"\n❌ Could not read comments: {e}")
        return 1

    except SentimentPipelineError as e:
        logger.error(f"Analysis failed: {e}", exc_info=True)
        print(f"\n❌ Analysis failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        return 1


if __name__ == "__main__":
    sys.exit(main())
