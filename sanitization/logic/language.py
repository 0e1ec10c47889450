# sanitization/logic/language.py

"""Language code resolution for per-language allowlists."""

import logging
from typing import FrozenSet, Optional

from sanitization.core.profile import Profile

logger = logging.getLogger(__name__)


def normalize_language_code(lang: Optional[str]) -> Optional[str]:
    """Lowercases a language tag and unifies '_' to '-'.

    Args:
        lang: Language tag such as 'ar', 'fa-IR' or 'th_TH'

    Returns:
        Normalized tag, or None when the tag is empty or not a string
    """
    if not lang or not isinstance(lang, str):
        return None

    code = lang.strip().lower().replace("_", "-")
    return code or None


def language_allowances(profile: Profile, lang: Optional[str]) -> FrozenSet[str]:
    """Returns the characters the profile allows for a language.

    An exact tag match wins; otherwise the primary subtag is tried, so
    'fa-IR' falls back to 'fa'.

    Args:
        profile: Active sanitization profile
        lang: Optional language tag

    Returns:
        Allowed characters, empty when the language has no override
    """
    code = normalize_language_code(lang)
    if code is None:
        return frozenset()

    override = profile.language_overrides.get(code)
    if override is None and "-" in code:
        override = profile.language_overrides.get(code.split("-", 1)[0])

    if override is None:
        logger.debug("No language override", extra={"language": code})
        return frozenset()

    return override.allow
