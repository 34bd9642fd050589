"""vaguefinder - rank sentences by semantic similarity using sentence embeddings."""

__version__ = "0.1.0"
__all__ = ["VagueFinder", "compare", "cosine_similarity", "rank"]


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name == "VagueFinder":
        from .finder import VagueFinder

        return VagueFinder
    if name in ("compare", "rank"):
        from . import api

        return getattr(api, name)
    if name == "cosine_similarity":
        from .similarity import cosine_similarity

        return cosine_similarity
    raise AttributeError(f"module 'vaguefinder' has no attribute {name!r}")
