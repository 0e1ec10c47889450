"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from sanitization.service.config import Settings


class TestSettings:
    """Tests for Settings defaults, environment loading and validation."""

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.default_preset == "default"
        assert settings.default_language is None
        assert settings.max_input_chars == 1_000_000
        assert settings.log_level == "INFO"
        assert settings.presets_path is None

    def test_environment_prefix(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("SANITIZER_DEFAULT_PRESET", "max_sterile")
        monkeypatch.setenv("SANITIZER_MAX_INPUT_CHARS", "10")
        monkeypatch.setenv("SANITIZER_PRESETS_PATH", str(tmp_path / "p.yaml"))
        settings = Settings(_env_file=None)
        assert settings.default_preset == "max_sterile"
        assert settings.max_input_chars == 10
        assert settings.presets_path == tmp_path / "p.yaml"

    def test_log_level_normalised(self) -> None:
        assert Settings(_env_file=None, log_level=" debug ").log_level == "DEBUG"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"log_level": "VERBOSE"},
            {"default_preset": "  "},
            {"max_input_chars": 0},
        ],
    )
    def test_invalid_values(self, overrides: dict) -> None:
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, **overrides)
