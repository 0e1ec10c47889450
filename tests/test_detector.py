"""Tests for detection statistics and Markdown marker counts."""

from __future__ import annotations

from sanitization.core.definitions import BOM_BUCKET, Category
from sanitization.engine.detector import count_markers, detect


class TestDetect:
    """Tests for the read-only tracked code point scan."""

    def test_zero_width_and_bom(self) -> None:
        result = detect("a\u200Bb\uFEFFc")
        assert result.total_count == 2
        assert result.categories[Category.ZERO_WIDTH] == 1
        assert result.categories[BOM_BUCKET] == 1
        assert result.positions == [1, 3]

    def test_every_category_present(self) -> None:
        """Categories are fully populated even when nothing was found."""
        result = detect("plain text")
        assert result.total_count == 0
        assert set(result.categories) == set(Category.TRACKED) | {BOM_BUCKET}
        assert all(count == 0 for count in result.categories.values())
        assert result.positions == []

    def test_positions_are_code_point_indices(self) -> None:
        """Astral characters count as one index each."""
        result = detect("\U0001F600\u200D\U0001F600\u202E")
        assert result.positions == [1, 3]
        assert result.categories[Category.ZERO_WIDTH] == 1
        assert result.categories[Category.BIDI_CONTROL] == 1

    def test_mixed_categories(self) -> None:
        text = "e\u0301\u00AD\U000E0041\uE000\uFDD0\u2061\uFE0F"
        result = detect(text)
        assert result.total_count == 7
        assert result.categories[Category.COMBINING_MARK] == 1
        assert result.categories[Category.HYPHENATION] == 1
        assert result.categories[Category.TAG_CHARACTER] == 1
        assert result.categories[Category.PRIVATE_USE] == 1
        assert result.categories[Category.NON_CHARACTER] == 1
        assert result.categories[Category.MATH_INVISIBLE] == 1
        assert result.categories[Category.VARIATION_SELECTOR] == 1
        assert result.positions == list(range(1, 8))

    def test_empty_and_invalid_input(self) -> None:
        assert detect("").total_count == 0
        assert detect(None).total_count == 0
        assert detect(42).positions == []

    def test_text_is_not_modified(self) -> None:
        text = "x\u200By"
        detect(text)
        assert text == "x\u200By"


class TestCountMarkers:
    """Tests for the Markdown marker report."""

    def test_counts(self) -> None:
        text = "# Title\n**bold** and `code`\n- item\n> quote\n---"
        markers = count_markers(text)
        assert markers["headers"] == 1
        assert markers["emphasis"] == 2
        assert markers["backticks"] == 2
        assert markers["list_markers"] == 1
        assert markers["blockquotes"] == 1
        assert markers["dash_separators"] == 1

    def test_code_fence_counts_once(self) -> None:
        assert count_markers("```\nx\n```")["backticks"] == 2

    def test_empty_text(self) -> None:
        markers = count_markers("")
        assert set(markers) == {
            "headers",
            "emphasis",
            "backticks",
            "dash_separators",
            "blockquotes",
            "list_markers",
        }
        assert all(count == 0 for count in markers.values())
