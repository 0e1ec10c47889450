# sanitization/engine/guard.py

"""Joiner guard shielding structural ZWJ/ZWNJ from the filter pass.

Joiners that hold emoji sequences, Indic conjuncts, or Arabic-script word
parts together are swapped for private sentinels before filtering and
swapped back afterwards, so they survive even when zero-width removal is
enabled.
"""

import logging
import re
from typing import FrozenSet, Iterable, List, Optional, Pattern, Tuple

import emoji

from sanitization.core.profile import Profile

logger = logging.getLogger(__name__)

ZWJ = "\u200D"
ZWNJ = "\u200C"

# Last two scalars of Supplementary Private Use Area-B
ZWJ_SENTINEL = "\U0010FFFD"
ZWNJ_SENTINEL = "\U0010FFFC"
SENTINELS: FrozenSet[str] = frozenset({ZWJ_SENTINEL, ZWNJ_SENTINEL})

STRATEGY_PICTOGRAPHIC = "pictographic"
STRATEGY_SUPPLEMENTARY = "supplementary_plane"

# Fallback: any two supplementary-plane scalars joined by ZWJ
_SUPPLEMENTARY_CLASS = r"[\U00010000-\U0010FFFF]"

_INDIC_CLASS = r"[\u0900-\u0DFF]"
_ARABIC_CLASS = r"[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF]"

_INDIC_ZWJ_RE = re.compile(f"({_INDIC_CLASS}){ZWJ}(?={_INDIC_CLASS})")
_INDIC_ZWNJ_RE = re.compile(f"({_INDIC_CLASS}){ZWNJ}(?={_INDIC_CLASS})")
_ARABIC_ZWNJ_RE = re.compile(f"({_ARABIC_CLASS}){ZWNJ}(?={_ARABIC_CLASS})")


def _merge_ranges(codepoints: Iterable[int]) -> List[Tuple[int, int]]:
    ranges: List[Tuple[int, int]] = []
    for cp in sorted(set(codepoints)):
        if ranges and cp == ranges[-1][1] + 1:
            ranges[-1] = (ranges[-1][0], cp)
        else:
            ranges.append((cp, cp))
    return ranges


def build_pictographic_class() -> str:
    """Builds a regex character class of pictographic scalars.

    Uses the single-scalar entries of the emoji package's data (an entry
    followed by U+FE0F counts as its base scalar). ASCII keycap bases are
    excluded.

    Returns:
        Character class source such as ``[\\U0001F600-\\U0001F64F...]``

    Raises:
        ValueError: If the emoji data yields no pictographic scalars.
    """
    codepoints = set()
    for key in emoji.EMOJI_DATA:
        if len(key) == 1 or (len(key) == 2 and key[1] == "\uFE0F"):
            cp = ord(key[0])
            if cp > 0x7F:
                codepoints.add(cp)

    if not codepoints:
        raise ValueError("emoji data contains no single-scalar pictographs")

    parts = []
    for start, end in _merge_ranges(codepoints):
        if start == end:
            parts.append(f"\\U{start:08X}")
        else:
            parts.append(f"\\U{start:08X}-\\U{end:08X}")
    return "[" + "".join(parts) + "]"


def _compile_emoji_joiner(char_class: str) -> Pattern:
    return re.compile(f"({char_class}\\uFE0F?){ZWJ}(?={char_class})")


def select_emoji_strategy() -> Tuple[str, Pattern]:
    """Chooses the emoji joiner pattern once, at start-up.

    Returns:
        Tuple of (strategy name, compiled pattern)
    """
    try:
        pattern = _compile_emoji_joiner(build_pictographic_class())
        return STRATEGY_PICTOGRAPHIC, pattern
    except (ValueError, re.error) as e:
        logger.warning(
            "Pictographic matching unavailable, using supplementary-plane heuristic",
            extra={"reason": str(e)},
        )
        return STRATEGY_SUPPLEMENTARY, _compile_emoji_joiner(_SUPPLEMENTARY_CLASS)


EMOJI_STRATEGY, _EMOJI_ZWJ_RE = select_emoji_strategy()
_SUPPLEMENTARY_ZWJ_RE = _compile_emoji_joiner(_SUPPLEMENTARY_CLASS)


class JoinerGuard:
    """Protects and restores structural joiners for one profile.

    Attributes:
        strategy: Emoji matching strategy in use ('pictographic' or
            'supplementary_plane')
    """

    # Substitution passes for emoji chains (family and profession sequences)
    EMOJI_PASSES = 2

    def __init__(self, profile: Profile, strategy: Optional[str] = None) -> None:
        self.preserve_emoji = profile.preserve_emoji_sequences
        self.preserve_indic = profile.preserve_indic_joiners
        self.preserve_arabic = profile.preserve_arabic_zwnj

        # Hard-blocked joiners are never shielded
        blocked = profile.hard_blocklist - profile.hard_allowlist
        self.shield_zwj = ZWJ not in blocked
        self.shield_zwnj = ZWNJ not in blocked

        self.strategy = strategy or EMOJI_STRATEGY
        self._emoji_re = (
            _SUPPLEMENTARY_ZWJ_RE
            if self.strategy == STRATEGY_SUPPLEMENTARY
            else _EMOJI_ZWJ_RE
        )

    @property
    def enabled(self) -> bool:
        return self.preserve_emoji or self.preserve_indic or self.preserve_arabic

    def protect(self, text: str) -> Tuple[str, FrozenSet[str]]:
        """Replaces structural joiners with sentinels.

        Args:
            text: Normalized text about to be filtered

        Returns:
            Tuple of (protected text, sentinels the filter must keep). The
            set is empty when nothing was protected.
        """
        if not self.enabled or (ZWJ not in text and ZWNJ not in text):
            return text, frozenset()

        if any(sentinel in text for sentinel in SENTINELS):
            logger.debug("Input already contains a joiner sentinel, guard skipped")
            return text, frozenset()

        zwj_sub = rf"\1{ZWJ_SENTINEL}"
        zwnj_sub = rf"\1{ZWNJ_SENTINEL}"

        if self.preserve_emoji and self.shield_zwj:
            for _ in range(self.EMOJI_PASSES):
                text = self._emoji_re.sub(zwj_sub, text)

        if self.preserve_indic:
            if self.shield_zwj:
                text = _INDIC_ZWJ_RE.sub(zwj_sub, text)
            if self.shield_zwnj:
                text = _INDIC_ZWNJ_RE.sub(zwnj_sub, text)

        if self.preserve_arabic and self.shield_zwnj:
            text = _ARABIC_ZWNJ_RE.sub(zwnj_sub, text)

        shielded = frozenset(sentinel for sentinel in SENTINELS if sentinel in text)

        if shielded:
            logger.debug(
                "Structural joiners shielded",
                extra={
                    "zwj": text.count(ZWJ_SENTINEL),
                    "zwnj": text.count(ZWNJ_SENTINEL),
                    "strategy": self.strategy,
                },
            )
        return text, shielded

    @staticmethod
    def restore(text: str, shielded: FrozenSet[str]) -> str:
        """Swaps the sentinels produced by ``protect`` back to joiners."""
        if ZWJ_SENTINEL in shielded:
            text = text.replace(ZWJ_SENTINEL, ZWJ)
        if ZWNJ_SENTINEL in shielded:
            text = text.replace(ZWNJ_SENTINEL, ZWNJ)
        return text
