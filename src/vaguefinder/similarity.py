"""Cosine similarity between embedding vectors."""

import math
from collections.abc import Sequence

import numpy as np


def _unit_vector(v: np.ndarray) -> np.ndarray | None:
    """Scale v to unit length, or None if v is all zeros.

    Dividing by the largest component first keeps the norm finite for very
    large or very small vectors. NaN components stay NaN.
    """
    scale = np.max(np.abs(v))
    if scale == 0.0:
        return None
    scaled = v / scale
    return scaled / np.linalg.norm(scaled)


def cosine_similarity(
    embedding1: np.ndarray | Sequence[float], embedding2: np.ndarray | Sequence[float]
) -> float:
    """Calculate cosine similarity between two vectors.

    Unlike a plain dot product this does not assume normalized input, so it
    also works for vectors that did not come from the embedding model.

    Args:
        embedding1: First vector
        embedding2: Second vector of the same length

    Returns:
        dot(a, b) / (|a| * |b|), in [-1.0, 1.0]. NaN if either vector is
        all zeros or has non-finite components, since the similarity is
        undefined there.

    Raises:
        ValueError: If the vectors are not 1-D or differ in length
    """
    a = np.asarray(embedding1, dtype=np.float64)
    b = np.asarray(embedding2, dtype=np.float64)

    if a.ndim != 1 or b.ndim != 1:
        raise ValueError(
            f"Embeddings must be 1-D, got shapes {a.shape} and {b.shape}"
        )
    if a.shape != b.shape:
        raise ValueError(
            f"Embeddings must have equal length, got {a.shape[0]} and {b.shape[0]}"
        )

    if a.size == 0:
        return float("nan")

    with np.errstate(all="ignore"):
        unit_a = _unit_vector(a)
        unit_b = _unit_vector(b)
        if unit_a is None or unit_b is None:
            return float("nan")
        similarity = float(np.dot(unit_a, unit_b))

    if math.isnan(similarity):
        return similarity

    # Clamp to valid range to absorb floating point drift
    return max(-1.0, min(1.0, similarity))
