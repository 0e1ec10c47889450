# sanitization/logic/normalization.py

"""Unicode normalization with a safe NFC fallback."""

import logging
import unicodedata

logger = logging.getLogger(__name__)

FALLBACK_FORM = "NFC"


def apply_normalization(text: str, form: str) -> str:
    """Normalizes text, falling back to NFC when the form is rejected.

    Args:
        text: Text to normalize
        form: One of NFC, NFD, NFKC, NFKD

    Returns:
        Normalized text
    """
    try:
        return unicodedata.normalize(form, text)
    except (ValueError, TypeError):
        logger.debug(
            "Normalization form rejected, falling back",
            extra={"form": form, "fallback": FALLBACK_FORM},
        )
        return unicodedata.normalize(FALLBACK_FORM, text)
