"""
Relevance Filter Models
=======================

Configuration for the post-retrieval relevance filter.
"""

import math
from dataclasses import dataclass, field

from installrag.config import load_yaml_defaults


def _relevance_default(key: str, default: float) -> float:
    return load_yaml_defaults().get("relevance", {}).get(key, default)


# Threshold applied to retrieved candidates before generation
RANKING_THRESHOLD: float = float(_relevance_default("ranking_threshold", 0.3))

# Looser threshold for the larger, later retrieval set
RELAXED_THRESHOLD: float = float(_relevance_default("relaxed_threshold", 0.2))

# Query tokens shorter than this are ignored
MIN_TERM_LENGTH: int = int(_relevance_default("min_term_length", 3))


@dataclass
class RelevanceConfig:
    """
    Configuration for RelevanceFilter.

    Attributes:
        threshold: Minimum fraction of query terms a candidate must contain.
                   Default: 0.3. Values above 1 reject every candidate.
        min_term_length: Query tokens shorter than this are dropped.
                         Default: 3 (tokens of 1-2 characters are noise)
    """
    threshold: float = field(default=RANKING_THRESHOLD)
    min_term_length: int = field(default=MIN_TERM_LENGTH)

    def __post_init__(self):
        """Validate configuration values."""
        if not math.isfinite(self.threshold) or self.threshold < 0:
            raise ValueError(f"threshold must be a finite value >= 0, got {self.threshold}")
        if self.min_term_length < 1:
            raise ValueError(f"min_term_length must be >= 1, got {self.min_term_length}")
