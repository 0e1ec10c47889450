# sanitization/core/exceptions.py

"""Errors raised inside the sanitizer.

The service layer converts each of these into a failed ``SanitizeResult``
with empty output, so callers of ``sanitize`` never see them raised.
"""


class SanitizationError(Exception):
    """Root of every sanitizer error; ``error_type`` in result metadata is the subclass name."""


class ConfigurationError(SanitizationError):
    """A preset file is missing, malformed, or defines an invalid profile."""


class InitializationError(SanitizationError):
    """The service could not build its engine or load its presets."""


class PipelineError(SanitizationError):
    """A sanitization pass raised while processing text."""


class ValidationError(SanitizationError):
    """The text or profile handed to the sanitizer is unusable (wrong type, too long)."""
