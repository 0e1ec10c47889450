# sanitization/core/loader.py

"""Preset loader for sanitization profiles."""

import yaml
import logging
import threading
from pathlib import Path
from typing import Dict, List, Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from sanitization.core.definitions import Preset
from sanitization.core.exceptions import ConfigurationError
from sanitization.core.profile import Profile

logger = logging.getLogger(__name__)

DEFAULT_PRESETS_PATH = Path(__file__).parent / "presets.yaml"

REQUIRED_PRESETS = (
    Preset.DEFAULT,
    Preset.EMOJI_SAFE,
    Preset.MAX_STERILE,
    Preset.MARKUP_INTACT,
)


class PresetLoader:
    """Singleton loader for named sanitization presets.

    Reads the presets file once, builds every profile eagerly so invalid
    presets fail at start-up, and serves the frozen profiles afterwards.
    """

    _instance: Optional["PresetLoader"] = None
    _lock = threading.Lock()

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        self.config_path = Path(config_path) if config_path else DEFAULT_PRESETS_PATH
        self._config: Dict[str, Any] = {}
        self._profiles: Dict[str, Profile] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Loads and validates the presets file.

        Raises:
            ConfigurationError: If file is missing, invalid, or empty.
        """
        try:
            if not self.config_path.exists():
                error_msg = f"Presets file not found: {self.config_path}"
                logger.error(error_msg)
                raise ConfigurationError(error_msg)

            with open(self.config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f)

            if not self._config:
                raise ConfigurationError("Presets file is empty or invalid")

            self._validate_config()
            self._build_profiles()

            logger.info(
                "Presets loaded successfully",
                extra={
                    "config_path": str(self.config_path),
                    "preset_count": len(self._profiles),
                },
            )

        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}", exc_info=True)
            raise ConfigurationError(
                f"Failed to parse {self.config_path.name}: {e}"
            ) from e
        except Exception as e:
            if isinstance(e, ConfigurationError):
                raise
            logger.error(f"Preset loading failed: {e}", exc_info=True)
            raise ConfigurationError(f"Failed to load presets: {e}") from e

    def _validate_config(self) -> None:
        """Validates the presets section and the built-in preset names.

        Raises:
            ConfigurationError: If required sections or presets are missing.
        """
        if not isinstance(self._config, dict) or "presets" not in self._config:
            error_msg = "Missing required configuration section: 'presets'"
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

        presets = self._config["presets"]
        if not isinstance(presets, dict):
            raise ConfigurationError("'presets' must be a mapping of name to overrides")

        missing = [name for name in REQUIRED_PRESETS if name not in presets]
        if missing:
            error_msg = f"Missing required presets: {missing}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

        for name, overrides in presets.items():
            if overrides is not None and not isinstance(overrides, dict):
                raise ConfigurationError(
                    f"Preset '{name}' must be a mapping of field overrides"
                )

    def _build_profiles(self) -> None:
        """Derives every preset from the default profile.

        Raises:
            ConfigurationError: If a preset names an unknown or invalid field.
        """
        base = Profile()

        for name, overrides in self._config["presets"].items():
            try:
                self._profiles[name] = base.with_overrides(**(overrides or {}))
            except PydanticValidationError as e:
                logger.error(f"Invalid preset '{name}'", extra={"errors": e.error_count()})
                raise ConfigurationError(f"Invalid preset '{name}': {e}") from e

    @classmethod
    def get_instance(
        cls, config_path: Optional[Union[str, Path]] = None
    ) -> "PresetLoader":
        """Returns the singleton instance, loading it on first use.

        Args:
            config_path: Presets file used when the instance is first created
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls(config_path)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drops the cached instance so the next access reloads the file."""
        with cls._lock:
            cls._instance = None

    def get_profile(self, name: str) -> Profile:
        """Returns the profile for a named preset.

        Args:
            name: Preset name (e.g., 'default', 'max_sterile')

        Returns:
            Frozen Profile instance

        Raises:
            ConfigurationError: If no preset has that name.
        """
        profile = self._profiles.get(name)
        if profile is None:
            raise ConfigurationError(
                f"Unknown preset '{name}'. Available: {self.preset_names()}"
            )
        return profile

    def preset_names(self) -> List[str]:
        """Returns the names of all loaded presets."""
        return list(self._profiles)
