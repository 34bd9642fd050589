"""Pytest configuration and fixtures for vaguefinder tests."""

import sys
from collections import Counter
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vaguefinder.embeddings.base import EmbeddingProvider, ProgressCallback
from vaguefinder.embeddings.models import LoadProgress

# Small hand-made embeddings with known cosine similarities to QUERY
QUERY = "The cat sat on the mat"
SENTENCE_VECTORS = {
    QUERY: [1.0, 0.0, 0.0, 0.0],
    "A kitten rested on the rug": [0.8, 0.6, 0.0, 0.0],  # 0.8
    "Stock markets fell sharply": [0.0, 0.0, 1.0, 0.0],  # 0.0
    "The dog chased a ball": [0.6, 0.0, 0.0, 0.8],  # 0.6
    "Cats are never on mats": [-1.0, 0.0, 0.0, 0.0],  # -1.0
    "A feline sat on the carpet": [0.8, 0.0, 0.6, 0.0],  # 0.8
    "": [0.0, 0.0, 0.0, 0.0],  # undefined
}


class FakeEmbeddingProvider(EmbeddingProvider):
    """Embedding provider returning fixed vectors and counting model calls."""

    def __init__(self, vectors: dict[str, list[float]] | None = None) -> None:
        self.model_name = "fake-model"
        self.vectors = vectors if vectors is not None else SENTENCE_VECTORS
        self.load_calls = 0
        self.embed_calls: Counter[str] = Counter()
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self, progress_callback: ProgressCallback | None = None) -> None:
        self.load_calls += 1
        if progress_callback is not None:
            progress_callback(LoadProgress("initiate", self.model_name, 0.0))
        self._loaded = True
        if progress_callback is not None:
            progress_callback(LoadProgress("ready", self.model_name, 100.0))

    def generate(self, texts: list[str]) -> np.ndarray:
        if not texts:
            raise ValueError("Cannot generate embeddings for empty text list")
        self.embed_calls.update(texts)
        return np.array([self.vectors[t] for t in texts], dtype=np.float32)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch) -> Path:
    """Point config at a per-test location and clear env overrides."""
    import vaguefinder.api
    import vaguefinder.cli
    import vaguefinder.config

    config_path = tmp_path / "config" / "config.toml"
    monkeypatch.setattr(vaguefinder.config, "CONFIG_PATH", config_path)
    monkeypatch.setattr(vaguefinder.cli, "CONFIG_PATH", config_path)
    for name in ("VAGUEFINDER_MODEL", "VAGUEFINDER_DEVICE", "VAGUEFINDER_CACHE"):
        monkeypatch.delenv(name, raising=False)

    vaguefinder.config.reset_config_cache()
    vaguefinder.api.get_default_finder.cache_clear()
    yield config_path
    vaguefinder.config.reset_config_cache()
    vaguefinder.api.get_default_finder.cache_clear()


@pytest.fixture
def fake_provider() -> FakeEmbeddingProvider:
    """Unloaded fake provider with the standard sentence vectors."""
    return FakeEmbeddingProvider()


@pytest.fixture
def make_finder(fake_provider) -> Callable:
    """Factory for finders backed by the fake provider."""
    from vaguefinder.finder import VagueFinder

    def _make(use_cache: bool = True) -> VagueFinder:
        return VagueFinder(provider=fake_provider, use_cache=use_cache)

    return _make
