"""Unit tests for configuration loading and env var overrides."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from vaguefinder import config as config_module
from vaguefinder.config import generate_config, load_config, reset_config_cache
from vaguefinder.embeddings.models import EMBEDDING_MODEL


def write_config(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


class TestLoadConfigDefaults:
    """Test behavior when no config file exists."""

    def test_missing_file_uses_defaults(self, isolated_config) -> None:
        """Test that a missing config file is not an error."""
        assert not isolated_config.exists()

        config = load_config()

        assert config.model.name == EMBEDDING_MODEL
        assert config.model.device == "auto"
        assert config.device is None
        assert config.cache.enabled is True
        assert not isolated_config.exists()

    def test_generated_config_matches_defaults(self, isolated_config) -> None:
        """Test the generated file parses back to the defaults."""
        path = generate_config()

        assert path == isolated_config
        assert path.exists()
        assert load_config(path) == load_config()


class TestLoadConfigFile:
    """Test reading values from the config file."""

    def test_file_values(self, isolated_config) -> None:
        """Test values in the file replace defaults."""
        write_config(
            isolated_config,
            '[model]\nname = "all-MiniLM-L6-v2"\ndevice = "cpu"\n\n'
            "[cache]\nenabled = false\n",
        )

        config = load_config()

        assert config.model.name == "all-MiniLM-L6-v2"
        assert config.device == "cpu"
        assert config.cache.enabled is False

    def test_partial_file_keeps_other_defaults(self, isolated_config) -> None:
        """Test sections and keys may be omitted."""
        write_config(isolated_config, '[model]\ndevice = "mps"\n')

        config = load_config()

        assert config.model.name == EMBEDDING_MODEL
        assert config.model.device == "mps"
        assert config.cache.enabled is True

    def test_invalid_toml_raises(self, isolated_config) -> None:
        """Test a broken file is reported as ValueError."""
        write_config(isolated_config, "[model\nname = ")

        with pytest.raises(ValueError, match="Invalid config file"):
            load_config()

    def test_invalid_cache_enabled_raises(self, isolated_config) -> None:
        """Test cache.enabled must be a boolean."""
        write_config(isolated_config, '[cache]\nenabled = "sometimes"\n')

        with pytest.raises(ValueError, match="cache.enabled must be true or false"):
            load_config()

    def test_explicit_path(self, tmp_path) -> None:
        """Test loading from an explicit path."""
        path = tmp_path / "other.toml"
        write_config(path, '[model]\nname = "custom"\n')

        assert load_config(path).model.name == "custom"


class TestEnvOverrides:
    """Test env vars take priority over the file."""

    def test_env_overrides_file(self, isolated_config, monkeypatch) -> None:
        """Test each env var overrides its config value."""
        write_config(
            isolated_config,
            '[model]\nname = "from-file"\ndevice = "cpu"\n\n[cache]\nenabled = true\n',
        )
        monkeypatch.setenv("VAGUEFINDER_MODEL", "from-env")
        monkeypatch.setenv("VAGUEFINDER_DEVICE", "cuda")
        monkeypatch.setenv("VAGUEFINDER_CACHE", "off")

        config = load_config()

        assert config.model.name == "from-env"
        assert config.device == "cuda"
        assert config.cache.enabled is False

    @pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
    def test_truthy_cache_values(self, monkeypatch, value) -> None:
        """Test accepted spellings for enabling the cache."""
        monkeypatch.setenv("VAGUEFINDER_CACHE", value)

        assert load_config().cache.enabled is True


class TestConfigMemoization:
    """Test the loaded config is reused until reset."""

    def test_config_is_memoized(self, isolated_config) -> None:
        """Test later file changes are ignored until reset_config_cache()."""
        first = load_config()
        write_config(isolated_config, '[model]\nname = "changed"\n')

        assert load_config() is first

        reset_config_cache()
        assert load_config().model.name == "changed"

    def test_explicit_path_is_not_memoized(self, tmp_path) -> None:
        """Test loading an explicit path leaves the default memo alone."""
        path = tmp_path / "other.toml"
        write_config(path, '[model]\nname = "custom"\n')

        load_config(path)

        assert config_module._cached_config is None


class TestConfigValueTypes:
    """Test wrongly shaped config values are reported as ValueError."""

    @pytest.mark.parametrize(
        "text, message",
        [
            ('model = "x"\n', "\\[model\\] must be a table"),
            ("cache = 1\n", "\\[cache\\] must be a table"),
            ("[model]\nname = 5\n", "model.name must be a string"),
            ("[model]\ndevice = true\n", "model.device must be a string"),
        ],
    )
    def test_wrong_types_raise(self, isolated_config, text, message) -> None:
        """Test non-table sections and non-string model values are rejected."""
        write_config(isolated_config, text)

        with pytest.raises(ValueError, match=message):
            load_config()

    def test_all_problems_reported_together(self, isolated_config) -> None:
        """Test every invalid value is named in one error."""
        write_config(isolated_config, 'cache = "on"\n[model]\nname = 1\n')

        with pytest.raises(ValueError) as exc_info:
            load_config()

        assert "[cache] must be a table" in str(exc_info.value)
        assert "model.name must be a string" in str(exc_info.value)
