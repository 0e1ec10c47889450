"""
Pytest configuration and fixtures for sanitizer tests.
"""

import pytest

from sanitization.core.loader import PresetLoader
from sanitization.core.profile import Profile
from sanitization.service.pipeline import SanitizerService


@pytest.fixture(autouse=True)
def fresh_singletons():
    """Rebuild the service engine and preset cache for every test."""
    SanitizerService.reset()
    yield
    SanitizerService.reset()


@pytest.fixture
def default_profile() -> Profile:
    """The default preset as built from field defaults."""
    return Profile()


@pytest.fixture
def sterile_profile() -> Profile:
    """The bundled max_sterile preset."""
    return PresetLoader.get_instance().get_profile("max_sterile")


@pytest.fixture
def presets_file(tmp_path):
    """Write a presets YAML file and return its path."""

    def _write(content: str):
        path = tmp_path / "presets.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
