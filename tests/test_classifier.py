"""Tests for code point classification tables and predicates."""

from __future__ import annotations

import pytest

from sanitization.core.definitions import Category, PrivateUseScope
from sanitization.engine.classifier import (
    classify,
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


class TestClassify:
    """Tests for the primary category lookup."""

    @pytest.mark.parametrize(
        "codepoint, expected",
        [
            (0x200B, Category.ZERO_WIDTH),
            (0x200D, Category.ZERO_WIDTH),
            (0xFEFF, Category.ZERO_WIDTH),
            (0x200F, Category.BIDI_CONTROL),
            (0x061C, Category.BIDI_CONTROL),
            (0x202E, Category.BIDI_CONTROL),
            (0x2068, Category.BIDI_CONTROL),
            (0x2062, Category.MATH_INVISIBLE),
            (0x00AD, Category.HYPHENATION),
            (0x180E, Category.VARIATION_SELECTOR),
            (0xFE0F, Category.VARIATION_SELECTOR),
            (0x034F, Category.FORMAT_CONTROL),
            (0xFFFA, Category.FORMAT_CONTROL),
            (0x1BCA1, Category.SHORTHAND_FORMAT),
            (0xE0041, Category.TAG_CHARACTER),
            (0xE0100, Category.IDEOGRAPHIC_VARIATION_SELECTOR),
            (0xFDD0, Category.NON_CHARACTER),
            (0x1FFFE, Category.NON_CHARACTER),
            (0x10FFFF, Category.NON_CHARACTER),
            (0xE000, Category.PRIVATE_USE),
            (0xF0000, Category.PRIVATE_USE),
            (0x0301, Category.COMBINING_MARK),
            (0x20DD, Category.COMBINING_MARK),
            (ord("A"), Category.NONE),
            (ord("\n"), Category.NONE),
            (0x1F600, Category.NONE),
        ],
    )
    def test_category_membership(self, codepoint: int, expected: str) -> None:
        """Each listed code point maps to exactly its primary category."""
        assert classify(codepoint) == expected

    def test_out_of_range_is_none(self) -> None:
        """Negative and beyond-U+10FFFF values are not tracked."""
        assert classify(-1) == Category.NONE
        assert classify(0x110000) == Category.NONE

    def test_supplementary_private_use_depends_on_scope(self) -> None:
        """Plane 15/16 private use is only tracked for the 'all' scope."""
        assert classify(0x100000, PrivateUseScope.ALL) == Category.PRIVATE_USE
        assert classify(0x100000, PrivateUseScope.BMP_ONLY) == Category.NONE
        assert classify(0xE123, PrivateUseScope.BMP_ONLY) == Category.PRIVATE_USE


class TestPredicates:
    """Tests for the filter predicates."""

    def test_layout_controls_are_not_controls(self) -> None:
        """Tab, line feed and carriage return survive Cc removal."""
        for ch in "\t\n\r":
            assert not is_control(ord(ch))
        assert is_control(0x00)
        assert is_control(0x7F)
        assert is_control(0x85)

    def test_surrogates(self) -> None:
        assert is_surrogate(0xD800)
        assert is_surrogate(0xDFFF)
        assert not is_surrogate(0xE000)

    def test_format_controls_cover_cf_and_extras(self) -> None:
        """Cf characters and the explicitly listed extras are format controls."""
        assert is_format_control(0x200B)
        assert is_format_control(0x2066)
        assert is_format_control(0x034F)
        assert is_format_control(0x1BCA0)
        assert not is_format_control(ord("a"))

    def test_invisible_separators(self) -> None:
        assert is_invisible_separator(0x2060)
        assert is_invisible_separator(0x180E)
        assert not is_invisible_separator(0x0020)

    def test_tag_characters(self) -> None:
        assert is_tag_character(0xE0000)
        assert is_tag_character(0xE007F)
        assert not is_tag_character(0xE0080)

    def test_variation_selectors_include_ideographic(self) -> None:
        assert is_variation_selector(0xFE00)
        assert is_variation_selector(0x180B)
        assert is_variation_selector(0xE01EF)
        assert not is_variation_selector(0xFE10)

    def test_noncharacters(self) -> None:
        assert is_noncharacter(0xFDEF)
        assert is_noncharacter(0xFFFF)
        assert is_noncharacter(0x2FFFE)
        assert not is_noncharacter(0xFDF0)

    @pytest.mark.parametrize(
        "codepoint, scope, expected",
        [
            (0xE000, PrivateUseScope.NONE, False),
            (0xE000, PrivateUseScope.BMP_ONLY, True),
            (0xF0000, PrivateUseScope.BMP_ONLY, False),
            (0xF0000, PrivateUseScope.ALL, True),
            (0x10FFFD, PrivateUseScope.ALL, True),
            (0x10FFFE, PrivateUseScope.ALL, False),
        ],
    )
    def test_private_use_scopes(self, codepoint: int, scope: str, expected: bool) -> None:
        """Scope controls which private-use areas count."""
        assert is_private_use(codepoint, scope) is expected

    def test_combining_marks(self) -> None:
        assert is_combining_mark(0x0300)
        assert is_combining_mark(0xFE2F)
        assert not is_combining_mark(0x0370)

    def test_bidi_controls(self) -> None:
        assert is_bidi_control(0x202A)
        assert is_bidi_control(0x2069)
        assert not is_bidi_control(0x200B)
