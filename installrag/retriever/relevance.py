"""
Content Relevance Filter
========================

Prunes retrieved records by term overlap with the query before they are
handed to generation.

Score:
    terms  = distinct lower-cased query tokens with at least 3 characters
    score  = |{t in terms : t is a substring of the record text}| / |terms|

A query with no usable terms scores 0.0 for every candidate, so any
positive threshold rejects everything and a threshold of 0 keeps
everything.

Example:
    >>> terms = tokenize_query("Show me the kitchen sensors")
    >>> terms
    ['show', 'the', 'kitchen', 'sensors']
    >>> kept = filter_by_content_relevance(records, "kitchen sensors", threshold=0.3)
"""

from typing import Any, Iterable, List, Optional, Sequence

import structlog

from installrag.retriever.models import (
    MIN_TERM_LENGTH,
    RANKING_THRESHOLD,
    RELAXED_THRESHOLD,
    RelevanceConfig,
)

log = structlog.get_logger()


def tokenize_query(query: str, min_term_length: int = MIN_TERM_LENGTH) -> List[str]:
    """
    Split a query into distinct lower-cased terms, dropping short tokens.

    Order of first appearance is preserved.
    """
    terms: List[str] = []
    seen = set()
    for token in (query or "").lower().split():
        if len(token) < min_term_length or token in seen:
            continue
        seen.add(token)
        terms.append(token)
    return terms


def candidate_text(candidate: Any) -> str:
    """
    Extract the searchable text of a retrieved candidate.

    Accepts OutputRecord-like objects (page_content attribute), dicts with
    "pageContent" or "page_content", and plain strings.
    """
    if isinstance(candidate, str):
        return candidate
    if isinstance(candidate, dict):
        value = candidate.get("pageContent", candidate.get("page_content", ""))
        return value if isinstance(value, str) else str(value)
    value = getattr(candidate, "page_content", None)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def relevance_score(content: str, terms: Sequence[str]) -> float:
    """
    Fraction of terms found as substrings of content, in [0, 1].

    Returns 0.0 when there are no terms.
    """
    if not terms:
        return 0.0
    text = (content or "").lower()
    matched = sum(1 for term in terms if term in text)
    return matched / len(terms)


def filter_by_content_relevance(
    candidates: Iterable[Any],
    query: str,
    threshold: float = RANKING_THRESHOLD,
    min_term_length: int = MIN_TERM_LENGTH,
) -> List[Any]:
    """
    Keep the candidates whose relevance score meets the threshold.

    Args:
        candidates: Retrieved records, in retrieval order
        query: Raw user query
        threshold: Minimum score (inclusive)
        min_term_length: Minimum query token length

    Returns:
        Kept candidates, in input order
    """
    terms = tokenize_query(query, min_term_length)
    candidates = list(candidates)

    kept = [
        c for c in candidates
        if relevance_score(candidate_text(c), terms) >= threshold
    ]

    log.debug(
        "Relevance filter applied",
        terms=len(terms),
        threshold=threshold,
        retrieved=len(candidates),
        kept=len(kept),
    )
    return kept


def build_context(records: Iterable[Any], separator: str = "\n\n") -> str:
    """Join record texts into the context block passed to generation."""
    return separator.join(candidate_text(r) for r in records)


class RelevanceFilter:
    """
    Term-overlap filter with a fixed configuration.

    Example:
        >>> ranking = RelevanceFilter.for_ranking()      # threshold 0.3
        >>> relaxed = RelevanceFilter.relaxed()          # threshold 0.2
        >>> kept = ranking.filter(retrieved, "thermostat setpoint")
    """

    def __init__(self, config: Optional[RelevanceConfig] = None):
        self.config = config or RelevanceConfig()

    @classmethod
    def for_ranking(cls) -> "RelevanceFilter":
        return cls(RelevanceConfig(threshold=RANKING_THRESHOLD))

    @classmethod
    def relaxed(cls) -> "RelevanceFilter":
        return cls(RelevanceConfig(threshold=RELAXED_THRESHOLD))

    def score(self, candidate: Any, query: str) -> float:
        terms = tokenize_query(query, self.config.min_term_length)
        return relevance_score(candidate_text(candidate), terms)

    def filter(self, candidates: Iterable[Any], query: str) -> List[Any]:
        return filter_by_content_relevance(
            candidates,
            query,
            threshold=self.config.threshold,
            min_term_length=self.config.min_term_length,
        )

    def __repr__(self) -> str:
        return (
            f"<RelevanceFilter(threshold={self.config.threshold}, "
            f"min_term_length={self.config.min_term_length})>"
        )
