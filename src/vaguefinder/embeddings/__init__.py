"""Sentence embedding providers for vaguefinder."""

from .base import EmbeddingProvider, ProgressCallback
from .generator import EmbeddingGenerator
from .models import EMBEDDING_DIM, EMBEDDING_MODEL, Embedding, LoadProgress

__all__ = [
    "EMBEDDING_DIM",
    "EMBEDDING_MODEL",
    "Embedding",
    "EmbeddingGenerator",
    "EmbeddingProvider",
    "LoadProgress",
    "ProgressCallback",
]
