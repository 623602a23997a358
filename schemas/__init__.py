"""
Pydantic schemas for pipeline results.

Schemas:
    results: LoadSummary (one CSV source) and PipelineSummary (one run)

Usage:
    from schemas.results import LoadSummary, PipelineSummary
"""

from schemas.results import LoadSummary, PipelineSummary

__all__ = [
    "LoadSummary",
    "PipelineSummary",
]
