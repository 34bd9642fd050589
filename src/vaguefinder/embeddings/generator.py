"""Text embedding generation using sentence-transformers."""

import logging
from typing import TYPE_CHECKING

from ..errors import ModelLoadError
from .base import EmbeddingProvider, ProgressCallback
from .models import EMBEDDING_DIM, EMBEDDING_MODEL, EmbeddingBatch, LoadProgress

if TYPE_CHECKING:
    from sentence_transformers import SentenceTransformer

logger = logging.getLogger(__name__)


class EmbeddingGenerator(EmbeddingProvider):
    """Generate sentence embeddings using sentence-transformers.

    Uses gte-small by default: 384-dimensional, mean-pooled embeddings that
    are small enough to load quickly on CPU while ranking short sentences well.
    """

    def __init__(self, model_name: str = EMBEDDING_MODEL, device: str | None = None):
        """Initialize embedding generator with specified model.

        Args:
            model_name: Name or path of a sentence-transformers model
            device: Compute device ("cpu", "cuda", "mps"), None lets the
                library choose
        """
        self.model_name = model_name
        self.device = device
        self._model: SentenceTransformer | None = None  # Lazy load the model
        self.dimension: int | None = (
            EMBEDDING_DIM if model_name == EMBEDDING_MODEL else None
        )

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    @property
    def model(self) -> "SentenceTransformer":
        """Lazy-load the model only when actually needed."""
        if self._model is None:
            self.load()
        return self._model

    def load(self, progress_callback: ProgressCallback | None = None) -> None:
        """Instantiate the sentence-transformers model once.

        Args:
            progress_callback: Receives "initiate" before loading and
                "ready" or "error" afterwards

        Raises:
            ModelLoadError: If the model fails to load or has the wrong dimension
        """
        if self._model is not None:
            return

        def report(status: str, progress: float) -> None:
            if progress_callback is not None:
                progress_callback(LoadProgress(status, self.model_name, progress))

        report("initiate", 0.0)
        logger.info(f"Loading embedding model {self.model_name}")

        try:
            # Import here to avoid loading torch at module import time
            from sentence_transformers import SentenceTransformer

            model = SentenceTransformer(self.model_name, device=self.device)

            actual_dim = model.get_sentence_embedding_dimension()
            if self.dimension is not None and actual_dim != self.dimension:
                raise ValueError(
                    f"Model {self.model_name} has dimension {actual_dim}, "
                    f"expected {self.dimension}"
                )
        except Exception as e:
            report("error", 0.0)
            raise ModelLoadError(
                f"Unable to load model {self.model_name} due to {e}", e
            ) from e

        self._model = model
        self.dimension = actual_dim
        report("ready", 100.0)
        logger.info(
            f"Embedding model {self.model_name} ready (dimension: {actual_dim})"
        )

    def generate(self, texts: list[str]) -> EmbeddingBatch:
        """Generate embeddings for one or more texts.

        Args:
            texts: List of text strings to embed

        Returns:
            Numpy array of embeddings with shape (len(texts), dimension)

        Raises:
            ValueError: If texts is empty
        """
        if not texts:
            raise ValueError("Cannot generate embeddings for empty text list")

        embeddings = self.model.encode(
            texts,
            convert_to_numpy=True,
            normalize_embeddings=True,  # Normalize for cosine similarity
        )

        # Ensure correct shape
        if len(texts) == 1:
            embeddings = embeddings.reshape(1, -1)

        return embeddings
