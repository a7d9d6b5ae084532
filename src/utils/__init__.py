"""
Utility modules for CommentLens.

Cross-cutting concerns:
- Labels: Backend sentiment label normalization
- Export: JSON/CSV result reports
"""
