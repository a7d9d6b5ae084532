"""
Agent implementations for CommentLens.

Contains the modules that move comments through the pipeline:
- File Ingestion Agent
- Sentiment Gateway
- Batch Orchestrator
- Aggregation (result translation + summary counters)
"""
