"""Embedding cache and result models for vaguefinder."""

from .models import CachedSentence, ComparisonResult, PairComparison, SentenceComparison
from .store import EmbeddingCache

__all__ = [
    "CachedSentence",
    "ComparisonResult",
    "EmbeddingCache",
    "PairComparison",
    "SentenceComparison",
]
