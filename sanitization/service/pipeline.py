# sanitization/service/pipeline.py

"""Main sanitization service pipeline."""

import logging
import threading
from typing import Any, Optional, Union

from sanitization.service.config import settings
from sanitization.engine import detector
from sanitization.engine.sanitizer import SanitizerEngine
from sanitization.core.domain import DetectionResult, SanitizeResult
from sanitization.core.loader import PresetLoader
from sanitization.core.profile import Profile
from sanitization.core.exceptions import (
    ConfigurationError,
    InitializationError,
    PipelineError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ProfileArg = Optional[Union[Profile, str]]


class SanitizerService:
    """Singleton service wrapper for the sanitizer engine.

    Manages engine lifecycle and provides thread-safe access to
    the sanitization functionality.
    """

    _instance: Optional[SanitizerEngine] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> SanitizerEngine:
        """Returns singleton sanitizer engine instance.

        Returns:
            Initialized SanitizerEngine

        Raises:
            InitializationError: If engine initialization fails
        """
        if cls._instance is None:
            with cls._lock:
                # Double-checked locking pattern
                if cls._instance is None:
                    try:
                        logger.info("Initializing sanitizer engine")
                        PresetLoader.get_instance(settings.presets_path)
                        cls._instance = SanitizerEngine()
                        logger.info("Sanitizer engine initialized successfully")

                    except Exception as e:
                        logger.error(
                            "Failed to initialize sanitizer engine", exc_info=True
                        )
                        if isinstance(e, InitializationError):
                            raise
                        raise InitializationError(
                            "Sanitizer engine initialization failed"
                        ) from e

        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drops the engine and cached presets so both are rebuilt."""
        with cls._lock:
            cls._instance = None
        PresetLoader.reset_instance()


def get_profile(name: Optional[str] = None) -> Profile:
    """Returns a named preset profile.

    Args:
        name: Preset name; the configured default preset when omitted

    Returns:
        Frozen Profile instance

    Raises:
        ConfigurationError: If the preset is unknown or presets fail to load.
    """
    loader = PresetLoader.get_instance(settings.presets_path)
    return loader.get_profile(name or settings.default_preset)


def _resolve_profile(profile: ProfileArg) -> Profile:
    if isinstance(profile, Profile):
        return profile
    if profile is None or isinstance(profile, str):
        return get_profile(profile)
    raise ValidationError(f"Unsupported profile type: {type(profile).__name__}")


def _profile_label(profile: ProfileArg) -> str:
    if isinstance(profile, Profile):
        return "custom"
    if isinstance(profile, str) and profile:
        return profile
    return settings.default_preset


def _failed_result(text: str, message: str, **extra: Any) -> SanitizeResult:
    # Fail closed: never hand back unsanitized text
    return SanitizeResult(
        original_text=text,
        sanitized_text="",
        detection_before=detector.detect(text),
        metadata={"error": message, "status": "failed", **extra},
    )


def sanitize_text(
    text: str, profile: ProfileArg = None, lang: Optional[str] = None
) -> SanitizeResult:
    """Main entry point for text sanitization.

    Args:
        text: Input text to sanitize
        profile: Profile instance or preset name; the default preset when omitted
        lang: Optional language code; the configured default when omitted

    Returns:
        SanitizeResult with cleaned text, detection statistics and metadata.
        On failure, the cleaned text is empty and metadata carries the error.
    """
    if not isinstance(text, str):
        logger.error(f"Invalid input type received: {type(text)}")
        return SanitizeResult(
            original_text="",
            sanitized_text="",
            metadata={"error": "Invalid input format"},
        )

    if not text:
        logger.warning("Empty text provided for sanitization")
        return SanitizeResult(
            original_text="",
            sanitized_text="",
            metadata={"error": "Empty input provided"},
        )

    language = lang or settings.default_language

    try:
        if len(text) > settings.max_input_chars:
            raise ValidationError(
                f"Input of {len(text)} characters exceeds the "
                f"{settings.max_input_chars} character limit"
            )

        engine = SanitizerService.get_instance()
        active_profile = _resolve_profile(profile)

        logger.info(
            "Starting sanitization request",
            extra={
                "text_length": len(text),
                "preset": _profile_label(profile),
                "language": language,
            },
        )

        cleaned = engine.process(text, active_profile, language)
        before = detector.detect(text)
        after = detector.detect(cleaned)

        logger.info(
            "Sanitization completed",
            extra={
                "text_length": len(text),
                "output_length": len(cleaned),
                "tracked_before": before.total_count,
                "tracked_after": after.total_count,
            },
        )

        return SanitizeResult(
            original_text=text,
            sanitized_text=cleaned,
            detection_before=before,
            detection_after=after,
            metadata={
                "preset": _profile_label(profile),
                "language": language,
                "input_length": len(text),
                "output_length": len(cleaned),
                "removed_tracked": before.total_count - after.total_count,
                "guard_strategy": engine.guard_strategy,
            },
        )

    except (
        ConfigurationError,
        InitializationError,
        PipelineError,
        ValidationError,
    ) as e:
        # These are known errors, log with context but hide internal details in response
        logger.error(
            f"Known error during sanitization: {type(e).__name__}",
            exc_info=True,
            extra={"text_length": len(text)},
        )
        return _failed_result(
            text,
            "The sanitization service encountered a processing error.",
            error_type=type(e).__name__,
        )

    except Exception:
        # Catch-all for unexpected bugs
        logger.error(
            "Unexpected critical error in sanitization pipeline",
            exc_info=True,
            extra={"text_length": len(text)},
        )
        return _failed_result(text, "An unexpected system error occurred.")


def sanitize(text: str, profile: ProfileArg = None, lang: Optional[str] = None) -> str:
    """Returns only the cleaned text; never raises.

    Args:
        text: Input text to sanitize
        profile: Profile instance or preset name
        lang: Optional language code

    Returns:
        Cleaned text, or "" for invalid input and processing failures
    """
    return sanitize_text(text, profile, lang).sanitized_text


def detect(text: str) -> DetectionResult:
    """Read-only statistics over the tracked code points of a text."""
    return detector.detect(text)
