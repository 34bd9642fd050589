"""In-memory embedding cache keyed by sentence text."""

import logging
from collections.abc import Awaitable, Callable, Iterator

import numpy as np

from ..embeddings.models import Embedding

logger = logging.getLogger(__name__)


def _frozen(embedding: Embedding) -> Embedding:
    """Read-only copy of embedding, so cached vectors cannot drift."""
    frozen = np.array(embedding, copy=True)
    frozen.flags.writeable = False
    return frozen


class EmbeddingCache:
    """Map of sentence text to its embedding.

    Entries are created on demand and are never invalidated or evicted, so
    the cache lives exactly as long as its owner. Keys are the exact sentence
    text; no normalization is applied. Stored embeddings are read-only.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Embedding] = {}
        self.hits = 0
        self.misses = 0

    def __contains__(self, sentence: object) -> bool:
        return sentence in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def sentences(self) -> Iterator[str]:
        """Iterate cached sentences in insertion order."""
        return iter(self._entries)

    def get(self, sentence: str) -> Embedding | None:
        """Return the cached embedding for sentence, or None."""
        return self._entries.get(sentence)

    def put(self, sentence: str, embedding: Embedding) -> None:
        """Store a read-only copy of embedding, replacing any previous one."""
        self._entries[sentence] = _frozen(embedding)

    async def get_or_embed(
        self, sentence: str, embed_fn: Callable[[str], Awaitable[Embedding]]
    ) -> Embedding:
        """Return the cached embedding, computing and storing it on a miss.

        Args:
            sentence: Sentence text to look up
            embed_fn: Awaited with sentence only when it is not cached

        Returns:
            Embedding for sentence
        """
        embedding = self._entries.get(sentence)
        if embedding is not None:
            self.hits += 1
            logger.debug(f"Cache hit for sentence: '{sentence[:50]}'")
            return embedding

        self.misses += 1
        logger.debug(f"Cache miss for sentence: '{sentence[:50]}'")
        embedding = _frozen(await embed_fn(sentence))
        self._entries[sentence] = embedding
        return embedding
