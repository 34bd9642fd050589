"""Sentence similarity finder - orchestrates embedding, caching and ranking."""

import asyncio
import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from .cache.models import (
    CachedSentence,
    ComparisonResult,
    PairComparison,
    SentenceComparison,
)
from .cache.store import EmbeddingCache
from .config import VagueFinderConfig, load_config
from .embeddings.base import EmbeddingProvider
from .embeddings.generator import EmbeddingGenerator
from .embeddings.models import Embedding, LoadProgress
from .errors import MalformedCacheEntryError, ModelNotLoadedError
from .similarity import cosine_similarity

logger = logging.getLogger(__name__)


def _by_descending_score(results: list[ComparisonResult]) -> list[ComparisonResult]:
    """Sort results best first, ties in input order, NaN scores last."""
    return sorted(
        results,
        key=lambda r: (
            not math.isnan(r.score),
            0.0 if math.isnan(r.score) else r.score,
        ),
        reverse=True,
    )


class VagueFinder:
    """Compare and rank sentences by the cosine similarity of their embeddings.

    Holds the embedding model handle, an embedding cache and the last load
    progress snapshot. The model must be loaded with ``load_model()`` before
    any comparison; concurrent ``load_model()`` calls share one load.

    Example:
        finder = VagueFinder()
        await finder.load_model()

        ranked = await finder.array_in_order(
            "How do I reset my password?",
            ["Password reset steps", "Office opening hours", "Change your login"],
        )
        for result in ranked.results:
            print(f"{result.score:.3f} {result.sentence}")
    """

    def __init__(
        self,
        provider: EmbeddingProvider | None = None,
        config: VagueFinderConfig | None = None,
        use_cache: bool | None = None,
    ):
        """Initialize the finder without loading the model.

        Args:
            provider: Embedding provider (defaults to a sentence-transformers
                EmbeddingGenerator built from config)
            config: Configuration (defaults to load_config())
            use_cache: Reuse embeddings across comparisons (defaults to
                config.cache.enabled)
        """
        if provider is None or use_cache is None:
            config = config or load_config()

        if provider is None:
            provider = EmbeddingGenerator(config.model.name, device=config.device)

        self.provider = provider
        self.use_cache = config.cache.enabled if use_cache is None else use_cache
        self.cache = EmbeddingCache()
        self._progress: LoadProgress | None = None
        self._load_lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self.provider.is_loaded

    async def load_model(self) -> None:
        """Load the embedding model, once.

        Progress snapshots are available through get_progress() while the
        model loads.

        Raises:
            ModelLoadError: If the model cannot be loaded
        """
        async with self._load_lock:
            if self.provider.is_loaded:
                logger.debug(f"Model {self.provider.model_name} already loaded")
                return
            await asyncio.to_thread(self.provider.load, self._record_progress)

    def get_progress(self) -> LoadProgress | None:
        """Return the latest model load progress, or None before loading starts."""
        return self._progress

    def _record_progress(self, progress: LoadProgress) -> None:
        self._progress = progress
        logger.debug(
            f"Model load {progress.status} for {progress.model} "
            f"({progress.progress:.0f}%)"
        )

    def _require_model(self) -> None:
        if not self.provider.is_loaded:
            raise ModelNotLoadedError()

    async def _embed_uncached(self, sentence: str) -> Embedding:
        return await asyncio.to_thread(self.provider.embed, sentence)

    async def _embed(self, sentence: str) -> Embedding:
        if self.use_cache:
            return await self.cache.get_or_embed(sentence, self._embed_uncached)
        return await self._embed_uncached(sentence)

    async def compare_two_sentences(
        self, sentence_one: str, sentence_two: str
    ) -> PairComparison:
        """Compare two sentences.

        Returns:
            PairComparison with the cosine similarity of both embeddings

        Raises:
            ModelNotLoadedError: If load_model() has not completed
        """
        self._require_model()

        embedding1 = await self._embed(sentence_one)
        embedding2 = await self._embed(sentence_two)
        score = cosine_similarity(embedding1, embedding2)

        logger.debug(
            f"Compared '{sentence_one[:50]}' to '{sentence_two[:50]}': {score:.4f}"
        )
        return PairComparison(sentence_one, sentence_two, score)

    async def compare_sentence_to_array(
        self, sentence: str, sentences: Iterable[str]
    ) -> SentenceComparison:
        """Score every candidate sentence against a query sentence.

        Args:
            sentence: Query sentence
            sentences: Candidate sentences, left unmodified

        Returns:
            SentenceComparison with results in input order

        Raises:
            ModelNotLoadedError: If load_model() has not completed
        """
        self._require_model()

        query = await self._embed(sentence)
        results = []
        for candidate in sentences:
            embedding = await self._embed(candidate)
            results.append(
                ComparisonResult(candidate, cosine_similarity(query, embedding))
            )

        logger.debug(f"Compared '{sentence[:50]}' to {len(results)} sentences")
        return SentenceComparison(sentence, results)

    async def array_in_order(
        self, sentence: str, sentences: Iterable[str]
    ) -> SentenceComparison:
        """Like compare_sentence_to_array, sorted by descending similarity.

        Ties keep their input order.
        """
        comparison = await self.compare_sentence_to_array(sentence, sentences)
        return SentenceComparison(sentence, _by_descending_score(comparison.results))

    async def get_top(
        self, sentence: str, sentences: Iterable[str], n: int
    ) -> SentenceComparison:
        """Return the n candidates most similar to sentence.

        Args:
            sentence: Query sentence
            sentences: Candidate sentences
            n: Number of results to keep; fewer are returned if there are
                fewer candidates

        Raises:
            ValueError: If n is negative
            ModelNotLoadedError: If load_model() has not completed
        """
        if n < 0:
            raise ValueError(f"n must be zero or greater, got {n}")

        ordered = await self.array_in_order(sentence, sentences)
        return SentenceComparison(sentence, ordered.results[:n])

    async def get_cached(self, sentences: Iterable[str]) -> list[CachedSentence]:
        """Embed sentences ahead of time for the cached_* comparisons.

        Returns:
            One CachedSentence per input sentence, in input order

        Raises:
            ModelNotLoadedError: If load_model() has not completed
        """
        self._require_model()

        entries = []
        for sentence in sentences:
            embedding = await self._embed(sentence)
            # Callers own their copy; the cache keeps its read-only original
            entries.append(CachedSentence(sentence, embedding.copy()))

        logger.debug(f"Prepared {len(entries)} cached sentences")
        return entries

    async def cached_compare_sentence_to_array(
        self,
        sentence: str,
        entries: Iterable[CachedSentence | Mapping[str, Any]],
    ) -> SentenceComparison:
        """Score pre-embedded entries against a query sentence.

        Entries may be CachedSentence records or mappings with a "sentence"
        key and an optional "embedding" key. Entries without an embedding are
        embedded on demand.

        Returns:
            SentenceComparison with results in input order

        Raises:
            ModelNotLoadedError: If load_model() has not completed
            MalformedCacheEntryError: If an entry has no sentence text
        """
        self._require_model()

        records = [
            self._as_cached_sentence(entry, i) for i, entry in enumerate(entries)
        ]

        query = await self._embed(sentence)
        results = []
        for record in records:
            embedding = record.embedding
            if embedding is None:
                embedding = await self._embed(record.sentence)
            results.append(
                ComparisonResult(record.sentence, cosine_similarity(query, embedding))
            )

        logger.debug(
            f"Compared '{sentence[:50]}' to {len(results)} cached sentences"
        )
        return SentenceComparison(sentence, results)

    async def cached_array_in_order(
        self,
        sentence: str,
        entries: Iterable[CachedSentence | Mapping[str, Any]],
    ) -> SentenceComparison:
        """Like cached_compare_sentence_to_array, sorted by descending similarity."""
        comparison = await self.cached_compare_sentence_to_array(sentence, entries)
        return SentenceComparison(sentence, _by_descending_score(comparison.results))

    @staticmethod
    def _as_cached_sentence(entry: object, index: int) -> CachedSentence:
        if isinstance(entry, CachedSentence):
            if not isinstance(entry.sentence, str):
                raise MalformedCacheEntryError(
                    f"Cache entry at index {index} has no 'sentence' text",
                    index=index,
                )
            return entry
        if isinstance(entry, Mapping):
            return CachedSentence.from_mapping(entry, index)
        raise MalformedCacheEntryError(
            f"Cache entry at index {index} is a {type(entry).__name__}, "
            "expected CachedSentence or mapping",
            index=index,
        )
