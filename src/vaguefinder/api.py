"""High-level API for vaguefinder library usage."""

from functools import lru_cache

from .cache.models import PairComparison, SentenceComparison
from .finder import VagueFinder


@lru_cache(maxsize=1)
def get_default_finder() -> VagueFinder:
    """Create the process-wide finder from configuration, once.

    The model is not loaded here; compare() and rank() load it on first use.
    """
    return VagueFinder()


async def compare(sentence_one: str, sentence_two: str) -> PairComparison:
    """Compare two sentences with the default finder.

    Args:
        sentence_one: First sentence
        sentence_two: Second sentence

    Returns:
        PairComparison with the cosine similarity of both sentences

    Raises:
        ModelLoadError: If the embedding model cannot be loaded
    """
    finder = get_default_finder()
    await finder.load_model()
    return await finder.compare_two_sentences(sentence_one, sentence_two)


async def rank(
    sentence: str, candidates: list[str], top: int | None = None
) -> SentenceComparison:
    """Rank candidates by similarity to sentence with the default finder.

    Args:
        sentence: Query sentence
        candidates: Candidate sentences
        top: Keep only the best ``top`` results (all if None)

    Returns:
        SentenceComparison sorted by descending similarity

    Raises:
        ModelLoadError: If the embedding model cannot be loaded
        ValueError: If top is negative
    """
    finder = get_default_finder()
    await finder.load_model()

    if top is None:
        return await finder.array_in_order(sentence, candidates)
    return await finder.get_top(sentence, candidates, top)
