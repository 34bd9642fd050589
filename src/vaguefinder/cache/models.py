"""Data models for cached embeddings and comparison results."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from ..errors import MalformedCacheEntryError


@dataclass
class CachedSentence:
    """A sentence together with its precomputed embedding.

    Attributes:
        sentence: Original sentence text
        embedding: Embedding vector, or None if it still has to be computed
    """

    sentence: str
    embedding: np.ndarray | None = field(default=None, repr=False)

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], index: int | None = None
    ) -> "CachedSentence":
        """Build an entry from a mapping such as a decoded JSON object.

        Args:
            data: Mapping with a "sentence" key and optional "embedding" key
            index: Position of the entry in its list, used in error messages

        Raises:
            MalformedCacheEntryError: If "sentence" is missing or not a string
        """
        sentence = data.get("sentence")
        if not isinstance(sentence, str):
            where = f" at index {index}" if index is not None else ""
            raise MalformedCacheEntryError(
                f"Cache entry{where} has no 'sentence' text", index=index
            )

        embedding = data.get("embedding")
        if embedding is not None:
            embedding = np.asarray(embedding, dtype=np.float32)

        return cls(sentence=sentence, embedding=embedding)


@dataclass(frozen=True)
class ComparisonResult:
    """A candidate sentence scored against a query.

    Attributes:
        sentence: Candidate sentence
        score: Cosine similarity to the query (-1.0 to 1.0)
    """

    sentence: str
    score: float


@dataclass(frozen=True)
class PairComparison:
    """Result of comparing two sentences."""

    sentence_one: str
    sentence_two: str
    score: float


@dataclass(frozen=True)
class SentenceComparison:
    """A query sentence and its scored candidates.

    Attributes:
        sentence: The query sentence
        results: Scored candidates, in input order or by descending score
    """

    sentence: str
    results: list[ComparisonResult]

    def to_dict(self) -> dict:
        """Convert to plain data for JSON output."""
        return {
            "sentence": self.sentence,
            "results": [
                {"sentence": r.sentence, "score": r.score} for r in self.results
            ],
        }
