"""Test package structure and imports."""

import sys
from pathlib import Path

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))


def test_package_imports() -> None:
    """Test that vaguefinder package can be imported."""
    import vaguefinder

    assert vaguefinder.__version__ == "0.1.0"


def test_lazy_exports() -> None:
    """Test that top-level names resolve to their implementations."""
    import vaguefinder
    from vaguefinder.api import compare, rank
    from vaguefinder.finder import VagueFinder
    from vaguefinder.similarity import cosine_similarity

    assert vaguefinder.VagueFinder is VagueFinder
    assert vaguefinder.compare is compare
    assert vaguefinder.rank is rank
    assert vaguefinder.cosine_similarity is cosine_similarity


def test_unknown_attribute_raises() -> None:
    """Test that unknown names raise AttributeError."""
    import vaguefinder

    with pytest.raises(AttributeError, match="has no attribute 'missing'"):
        vaguefinder.missing


def test_main_module_imports() -> None:
    """Test that main module can be imported without error."""
    from vaguefinder.__main__ import main

    assert callable(main)
