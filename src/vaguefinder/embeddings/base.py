"""Abstract base class for sentence embedding providers.

This module defines the interface the finder relies on, so the
sentence-transformers backend can be swapped for another model runtime.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from .models import Embedding, EmbeddingBatch, LoadProgress

ProgressCallback = Callable[[LoadProgress], None]


class EmbeddingProvider(ABC):
    """Abstract base class for embedding providers.

    Providers turn one sentence into one fixed-length, unit-normalized
    vector. Loading is explicit: ``embed()`` may be called only after
    ``load()`` has completed.
    """

    model_name: str

    @property
    @abstractmethod
    def is_loaded(self) -> bool:
        """Whether the underlying model has been instantiated."""

    @abstractmethod
    def load(self, progress_callback: ProgressCallback | None = None) -> None:
        """Instantiate the underlying model.

        Args:
            progress_callback: Called with LoadProgress snapshots while loading

        Raises:
            ModelLoadError: If the model cannot be loaded
        """

    @abstractmethod
    def generate(self, texts: list[str]) -> EmbeddingBatch:
        """Embed a batch of texts, returning shape (len(texts), dim)."""

    def embed(self, text: str) -> Embedding:
        """Embed a single text.

        Args:
            text: Sentence to embed

        Returns:
            1-D embedding vector
        """
        return self.generate([text])[0]
