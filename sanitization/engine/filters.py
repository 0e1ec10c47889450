# sanitization/engine/filters.py

"""Character-level filter passes driven by a sanitization profile."""

import logging
import unicodedata
from typing import Callable, FrozenSet, List, Optional, Tuple

from sanitization.core.definitions import VariationSelectorPolicy
from sanitization.core.profile import Profile
from sanitization.engine.classifier import (
    PRESENTATION_SELECTORS,
    is_bidi_control,
    is_combining_mark,
    is_control,
    is_format_control,
    is_invisible_separator,
    is_noncharacter,
    is_private_use,
    is_surrogate,
    is_tag_character,
    is_variation_selector,
)
from sanitization.logic.language import language_allowances

logger = logging.getLogger(__name__)

ZWSP = "\u200B"

RemovalRule = Tuple[str, Callable[[int], bool]]


def _variation_selector_rule(policy: str) -> Optional[Callable[[int], bool]]:
    if policy == VariationSelectorPolicy.ALL:
        return is_variation_selector
    if policy == VariationSelectorPolicy.EMOJI_SAFEKEEP:
        return lambda cp: cp not in PRESENTATION_SELECTORS and is_variation_selector(cp)
    return None


def build_removal_rules(profile: Profile) -> List[RemovalRule]:
    """Returns the enabled removal rules in evaluation order.

    Disabled rules are left out entirely, so they can never drop a
    character.

    Args:
        profile: Active sanitization profile

    Returns:
        List of (rule name, predicate over code points)
    """
    rules: List[RemovalRule] = []
    categories = profile.remove_categories

    if categories.cc_controls:
        rules.append(("controls", is_control))
    if categories.cs_surrogates:
        rules.append(("surrogates", is_surrogate))
    if profile.strip_bom_anywhere:
        rules.append(("bom", lambda cp: cp == 0xFEFF))
    if categories.cf_format_controls:
        rules.append(("format_controls", is_format_control))
    if profile.strip_invisible_separators:
        rules.append(("invisible_separators", is_invisible_separator))
    if profile.strip_soft_hyphen:
        rules.append(("soft_hyphen", lambda cp: cp == 0x00AD))
    if profile.strip_tag_chars:
        rules.append(("tag_characters", is_tag_character))

    vs_rule = _variation_selector_rule(profile.strip_variation_selectors)
    if vs_rule is not None:
        rules.append(("variation_selectors", vs_rule))

    if profile.remove_noncharacters:
        rules.append(("noncharacters", is_noncharacter))

    scope = profile.remove_private_use
    if scope != "none":
        rules.append(("private_use", lambda cp: is_private_use(cp, scope)))

    return rules


def filter_characters(
    text: str,
    profile: Profile,
    lang: Optional[str] = None,
    shielded: FrozenSet[str] = frozenset(),
) -> str:
    """Single left-to-right scan deciding keep or drop per code point.

    Precedence per character: shielded sentinel, hard allowlist, hard
    blocklist, language allowlist, then the first enabled removal rule.
    A dropped ZWSP that separated two visible characters becomes a space
    when the profile asks for it.

    Args:
        text: Normalized text
        profile: Active sanitization profile
        lang: Optional language code selecting an allowlist
        shielded: Sentinels from the joiner guard that must be kept

    Returns:
        Filtered text; filtering it again yields the same text
    """
    if not text:
        return ""

    hard_allow = profile.hard_allowlist
    hard_block = profile.hard_blocklist
    lang_allow = language_allowances(profile, lang)
    rules = build_removal_rules(profile)

    out: List[str] = []
    last = len(text) - 1
    dropped = 0

    for index, ch in enumerate(text):
        if ch in shielded or ch in hard_allow:
            out.append(ch)
            continue

        if ch in hard_block:
            drop = True
        elif ch in lang_allow:
            drop = False
        else:
            cp = ord(ch)
            drop = any(predicate(cp) for _, predicate in rules)

        if not drop:
            out.append(ch)
            continue

        dropped += 1
        if (
            ch == ZWSP
            and profile.zwsp_to_space
            and out
            and not out[-1].isspace()
            and index < last
            and not text[index + 1].isspace()
        ):
            out.append(" ")

    if dropped:
        logger.debug(
            "Character filter pass complete",
            extra={"dropped": dropped, "language": lang},
        )
    return "".join(out)


def _is_base(ch: str) -> bool:
    """A base is any non-whitespace, non-control, non-combining character."""
    if ch.isspace() or is_combining_mark(ord(ch)):
        return False
    return not unicodedata.category(ch).startswith("C")


def prune_isolated_combining_marks(
    text: str, keep: FrozenSet[str] = frozenset()
) -> str:
    """Drops combining marks that have no base character to attach to.

    A mark directly after a base, or after a kept mark of the same
    cluster, stays; marks at the start of the text or after whitespace or
    controls are dropped. Marks in ``keep`` always stay.
    """
    out: List[str] = []
    attached = False

    for ch in text:
        if is_combining_mark(ord(ch)):
            if attached or ch in keep:
                out.append(ch)
            continue

        out.append(ch)
        attached = _is_base(ch)

    return "".join(out)


def strip_directionality_controls(
    text: str, keep: FrozenSet[str] = frozenset()
) -> str:
    """Removes bidi marks, embeddings, overrides and isolates.

    Args:
        text: Text after combining-mark pruning
        keep: Hard-allowed characters that must survive

    Returns:
        Text without directionality controls
    """
    return "".join(
        ch for ch in text if ch in keep or not is_bidi_control(ord(ch))
    )
