# sanitization/engine/sanitizer.py

"""Sanitization engine running the ordered multi-pass pipeline."""

import logging
from typing import Optional

from sanitization.core.profile import Profile
from sanitization.core.exceptions import PipelineError, ValidationError
from sanitization.engine.filters import (
    filter_characters,
    prune_isolated_combining_marks,
    strip_directionality_controls,
)
from sanitization.engine.guard import EMOJI_STRATEGY, JoinerGuard
from sanitization.engine.markup import strip_markup
from sanitization.engine.whitespace import normalize_whitespace
from sanitization.logic.normalization import apply_normalization

logger = logging.getLogger(__name__)


class SanitizerEngine:
    """Applies a profile to text through the ordered cleaning passes.

    Pass order: markup stripping, normalization pre-pass, joiner protect,
    character filter, joiner restore, isolated combining mark pruning,
    directionality control strip, whitespace normalization, and the final
    normalization pass. The engine keeps no per-call state, so one
    instance can serve concurrent callers.
    """

    def __init__(self, guard_strategy: Optional[str] = None) -> None:
        """Initialize the engine.

        Args:
            guard_strategy: Emoji joiner strategy override; defaults to the
                strategy selected at start-up
        """
        self.guard_strategy = guard_strategy or EMOJI_STRATEGY
        logger.info(
            "Sanitizer engine initialized",
            extra={"guard_strategy": self.guard_strategy},
        )

    def process(self, text: str, profile: Profile, lang: Optional[str] = None) -> str:
        """Sanitizes text according to the profile.

        Args:
            text: Raw input text
            profile: Active sanitization profile
            lang: Optional language code selecting an allowlist

        Returns:
            Cleaned text ("" for empty or non-string input)

        Raises:
            ValidationError: If profile is not a Profile.
            PipelineError: If a pass fails unexpectedly.
        """
        if not text or not isinstance(text, str):
            return ""

        if not isinstance(profile, Profile):
            raise ValidationError(
                f"Expected a Profile, got {type(profile).__name__}"
            )

        try:
            # 1. Markup
            if profile.strip_markup.any_enabled:
                text = strip_markup(text, profile.strip_markup)

            # 2. Normalization pre-pass
            pre_form = "NFKC" if profile.nfkc_compat else profile.normalize
            text = apply_normalization(text, pre_form)

            # 3. Character filter with structural joiners shielded
            guard = JoinerGuard(profile, strategy=self.guard_strategy)
            text, shielded = guard.protect(text)
            text = filter_characters(text, profile, lang, shielded)
            if shielded:
                text = guard.restore(text, shielded)

            # 4. Late tidy passes
            if profile.remove_isolated_combining_marks:
                text = prune_isolated_combining_marks(text, keep=profile.hard_allowlist)

            if profile.strip_directionality_controls:
                text = strip_directionality_controls(text, keep=profile.hard_allowlist)

            if profile.collapse_whitespace:
                text = normalize_whitespace(text, keep=profile.hard_allowlist)

            # 5. Normalization post-pass
            return apply_normalization(text, profile.normalize)

        except Exception as e:
            logger.error(
                "Sanitization processing failed",
                exc_info=True,
                extra={"text_length": len(text), "language": lang},
            )
            raise PipelineError(f"Failed to sanitize text: {e}") from e
