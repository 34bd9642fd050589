"""Configuration management for vaguefinder.

Loads configuration from ~/.config/vaguefinder/config.toml.
Priority chain: CLI flags > env vars > config file > defaults.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .embeddings.models import EMBEDDING_MODEL

CONFIG_DIR = Path.home() / ".config" / "vaguefinder"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_CONFIG = f"""\
# vaguefinder configuration

[model]
# sentence-transformers model name or local path
name = "{EMBEDDING_MODEL}"

# Compute device: "auto" lets sentence-transformers pick, or "cpu", "cuda", "mps"
device = "auto"

[cache]
# Reuse embeddings of sentences that were already compared
enabled = true
"""


@dataclass(frozen=True)
class ModelConfig:
    """Embedding model configuration."""

    name: str
    device: str


@dataclass(frozen=True)
class CacheConfig:
    """Embedding cache configuration."""

    enabled: bool


@dataclass(frozen=True)
class VagueFinderConfig:
    """Top-level vaguefinder configuration."""

    model: ModelConfig
    cache: CacheConfig

    @property
    def device(self) -> str | None:
        """Device to hand to sentence-transformers, None for automatic."""
        return None if self.model.device == "auto" else self.model.device


_cached_config: VagueFinderConfig | None = None


def generate_config(path: Path | None = None) -> Path:
    """Generate default config file at ~/.config/vaguefinder/config.toml."""
    path = path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG)
    return path


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(path: Path | None = None) -> VagueFinderConfig:
    """Load configuration from config file with env var overrides.

    A missing config file is not an error: built-in defaults are used so the
    library works without any setup.

    Args:
        path: Config file to read instead of the default location

    Returns:
        Loaded VagueFinderConfig. Results for the default location are memoized.

    Raises:
        ValueError: If the config file is not valid TOML or has wrong types
    """
    global _cached_config
    if path is None and _cached_config is not None:
        return _cached_config

    config_path = path or CONFIG_PATH
    data: dict = {}
    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid config file {config_path}: {e}") from e

    model = data.get("model", {})
    cache = data.get("cache", {})

    # Validate value types
    invalid = []
    if not isinstance(model, dict):
        invalid.append(f"[model] must be a table, got {model!r}")
        model = {}
    if not isinstance(cache, dict):
        invalid.append(f"[cache] must be a table, got {cache!r}")
        cache = {}
    for key in ("name", "device"):
        if key in model and not isinstance(model[key], str):
            invalid.append(f"model.{key} must be a string, got {model[key]!r}")
    enabled = cache.get("enabled", True)
    if not isinstance(enabled, bool):
        invalid.append(f"cache.enabled must be true or false, got {enabled!r}")

    if invalid:
        problems = "; ".join(invalid)
        raise ValueError(f"Invalid config file {config_path}: {problems}")

    # Env vars override config file values
    cache_env = os.getenv("VAGUEFINDER_CACHE")

    config = VagueFinderConfig(
        model=ModelConfig(
            name=os.getenv("VAGUEFINDER_MODEL", model.get("name", EMBEDDING_MODEL)),
            device=os.getenv("VAGUEFINDER_DEVICE", model.get("device", "auto")),
        ),
        cache=CacheConfig(
            enabled=_parse_bool(cache_env) if cache_env is not None else enabled,
        ),
    )

    if path is None:
        _cached_config = config
    return config


def reset_config_cache() -> None:
    """Forget the memoized configuration."""
    global _cached_config
    _cached_config = None
