# sanitization/engine/classifier.py

"""Code point classification tables and predicates.

Membership tables are built once at import time and never mutated, so
classification is safe to call from any number of threads.
"""

import unicodedata
from typing import Dict, FrozenSet, Iterable, Tuple

from sanitization.core.definitions import Category, PrivateUseScope

MAX_CODEPOINT = 0x10FFFF

# Plane 14 ranges
TAG_START = 0xE0000
TAG_END = 0xE007F
IVS_START = 0xE0100
IVS_END = 0xE01EF

# Private-use areas
PUA_BMP = (0xE000, 0xF8FF)
PUA_SUPPLEMENTARY = ((0xF0000, 0xFFFFD), (0x100000, 0x10FFFD))

# Combining diacritic blocks used by the isolated-mark heuristic
COMBINING_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x0300, 0x036F),  # Combining Diacritical Marks
    (0x1AB0, 0x1AFF),  # Combining Diacritical Marks Extended
    (0x1DC0, 0x1DFF),  # Combining Diacritical Marks Supplement
    (0x20D0, 0x20FF),  # Combining Diacritical Marks for Symbols
    (0xFE20, 0xFE2F),  # Combining Half Marks
)

# Text and emoji presentation selectors
PRESENTATION_SELECTORS = frozenset({0xFE0E, 0xFE0F})

# Controls that carry line structure and survive Cc removal
LAYOUT_CONTROLS = frozenset({0x09, 0x0A, 0x0D})


def _span(start: int, end: int) -> Iterable[int]:
    return range(start, end + 1)


_EXPLICIT_MEMBERS: Dict[str, Tuple[int, ...]] = {
    Category.ZERO_WIDTH: (0x200B, 0x200C, 0x200D, 0x2060, 0xFEFF),
    Category.BIDI_CONTROL: (
        0x200E,  # LRM
        0x200F,  # RLM
        0x061C,  # Arabic letter mark
        *_span(0x202A, 0x202E),  # Embeddings, overrides, PDF
        *_span(0x2066, 0x2069),  # Isolates
    ),
    Category.MATH_INVISIBLE: tuple(_span(0x2061, 0x2064)),
    Category.HYPHENATION: (0x00AD,),
    Category.VARIATION_SELECTOR: (
        *_span(0x180B, 0x180E),  # Mongolian FVS1-3 and the deprecated MVS
        *_span(0xFE00, 0xFE0F),  # VS1-VS16
    ),
    Category.FORMAT_CONTROL: (0x034F, *_span(0xFFF9, 0xFFFB)),
    Category.SHORTHAND_FORMAT: tuple(_span(0x1BCA0, 0x1BCA3)),
}

CATEGORY_BY_CODEPOINT: Dict[int, str] = {
    codepoint: category
    for category, members in _EXPLICIT_MEMBERS.items()
    for codepoint in members
}

BIDI_CONTROLS: FrozenSet[int] = frozenset(_EXPLICIT_MEMBERS[Category.BIDI_CONTROL])
VARIATION_SELECTORS: FrozenSet[int] = frozenset(
    _EXPLICIT_MEMBERS[Category.VARIATION_SELECTOR]
)
FORMAT_CONTROLS: FrozenSet[int] = frozenset(
    _EXPLICIT_MEMBERS[Category.FORMAT_CONTROL]
    + _EXPLICIT_MEMBERS[Category.SHORTHAND_FORMAT]
)

# Invisible characters commonly pasted between words
INVISIBLE_SEPARATORS: FrozenSet[int] = frozenset(
    {
        *_span(0x200B, 0x200F),
        *_span(0x202A, 0x202E),
        *_span(0x2060, 0x2064),
        *_span(0x2066, 0x2069),
        0x00AD,
        0x180E,
        0xFEFF,
    }
)


def classify(codepoint: int, private_use_scope: str = PrivateUseScope.ALL) -> str:
    """Maps a code point to its primary category.

    Args:
        codepoint: Unicode scalar value
        private_use_scope: 'all' also counts the supplementary private-use
            planes; 'bmp_only' and 'none' count only U+E000-U+F8FF

    Returns:
        Category constant; Category.NONE for untracked or invalid values
    """
    if not 0 <= codepoint <= MAX_CODEPOINT:
        return Category.NONE

    category = CATEGORY_BY_CODEPOINT.get(codepoint)
    if category is not None:
        return category

    if is_tag_character(codepoint):
        return Category.TAG_CHARACTER
    if IVS_START <= codepoint <= IVS_END:
        return Category.IDEOGRAPHIC_VARIATION_SELECTOR
    if is_noncharacter(codepoint):
        return Category.NON_CHARACTER

    pua_scope = (
        PrivateUseScope.ALL
        if private_use_scope == PrivateUseScope.ALL
        else PrivateUseScope.BMP_ONLY
    )
    if is_private_use(codepoint, pua_scope):
        return Category.PRIVATE_USE
    if is_combining_mark(codepoint):
        return Category.COMBINING_MARK

    return Category.NONE


def general_category(codepoint: int) -> str:
    """Returns the Unicode general category, e.g. 'Cc' or 'Mn'."""
    return unicodedata.category(chr(codepoint))


def is_control(codepoint: int) -> bool:
    """Cc controls other than tab, line feed, and carriage return."""
    return codepoint not in LAYOUT_CONTROLS and general_category(codepoint) == "Cc"


def is_surrogate(codepoint: int) -> bool:
    return 0xD800 <= codepoint <= 0xDFFF


def is_format_control(codepoint: int) -> bool:
    """Cf format characters plus the explicitly listed format controls."""
    return codepoint in FORMAT_CONTROLS or general_category(codepoint) == "Cf"


def is_invisible_separator(codepoint: int) -> bool:
    return codepoint in INVISIBLE_SEPARATORS


def is_tag_character(codepoint: int) -> bool:
    return TAG_START <= codepoint <= TAG_END


def is_variation_selector(codepoint: int) -> bool:
    """Standard, Mongolian, and ideographic variation selectors."""
    return codepoint in VARIATION_SELECTORS or IVS_START <= codepoint <= IVS_END


def is_noncharacter(codepoint: int) -> bool:
    if 0xFDD0 <= codepoint <= 0xFDEF:
        return True
    return (codepoint & 0xFFFF) in (0xFFFE, 0xFFFF)


def is_private_use(codepoint: int, scope: str = PrivateUseScope.ALL) -> bool:
    """Checks private-use membership for the given removal scope.

    Args:
        codepoint: Unicode scalar value
        scope: 'none', 'bmp_only', or 'all'

    Returns:
        False whenever scope is 'none'
    """
    if scope == PrivateUseScope.NONE:
        return False

    if PUA_BMP[0] <= codepoint <= PUA_BMP[1]:
        return True

    if scope == PrivateUseScope.ALL:
        return any(start <= codepoint <= end for start, end in PUA_SUPPLEMENTARY)

    return False


def is_combining_mark(codepoint: int) -> bool:
    return any(start <= codepoint <= end for start, end in COMBINING_RANGES)


def is_bidi_control(codepoint: int) -> bool:
    return codepoint in BIDI_CONTROLS
