"""
Retriever Module
================

Query-time filtering of records returned by the retrieval backend.
"""

from .models import (
    MIN_TERM_LENGTH,
    RANKING_THRESHOLD,
    RELAXED_THRESHOLD,
    RelevanceConfig,
)
from .relevance import (
    RelevanceFilter,
    build_context,
    candidate_text,
    filter_by_content_relevance,
    relevance_score,
    tokenize_query,
)

__all__ = [
    "MIN_TERM_LENGTH",
    "RANKING_THRESHOLD",
    "RELAXED_THRESHOLD",
    "RelevanceConfig",
    "RelevanceFilter",
    "build_context",
    "candidate_text",
    "filter_by_content_relevance",
    "relevance_score",
    "tokenize_query",
]
