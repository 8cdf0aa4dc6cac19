"""Scoring, similarity and fusion helpers."""

from .keyword_search import keyword_score, keyword_search, matches_tags
from .vector_search import (
    DEFAULT_RRF_K,
    cosine_similarity,
    reciprocal_rank_fusion,
    rrf_score,
    vector_search,
)

__all__ = [
    "DEFAULT_RRF_K",
    "cosine_similarity",
    "keyword_score",
    "keyword_search",
    "matches_tags",
    "reciprocal_rank_fusion",
    "rrf_score",
    "vector_search",
]
