"""Embedding models and constants for sentence similarity."""

from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

# Model configuration constants
EMBEDDING_MODEL = "thenlper/gte-small"
EMBEDDING_DIM = 384

# Type aliases for clarity
Embedding: TypeAlias = np.ndarray  # Shape: (384,)
EmbeddingBatch: TypeAlias = np.ndarray  # Shape: (n, 384)


@dataclass(frozen=True)
class LoadProgress:
    """Snapshot of model loading progress.

    Attributes:
        status: One of "initiate", "ready" or "error"
        model: Name of the model being loaded
        progress: Percentage complete (0.0-100.0)
    """

    status: str
    model: str
    progress: float = 0.0
