"""Tests for HTML, code fence and Markdown stripping."""

from __future__ import annotations

import pytest

from sanitization.core.profile import MarkupFlags
from sanitization.engine.markup import (
    decode_entities,
    strip_code_fences,
    strip_html,
    strip_markdown,
    strip_markup,
)


class TestDecodeEntities:
    """Entities are decoded exactly once."""

    def test_double_encoded_decodes_once(self) -> None:
        assert decode_entities("&amp;lt;x&amp;gt;") == "&lt;x&gt;"

    @pytest.mark.parametrize(
        "text, expected",
        [
            (
                "&amp;lt;div&amp;gt;content&amp;lt;/div&amp;gt;",
                "&lt;div&gt;content&lt;/div&gt;",
            ),
            (
                "&amp;#39;Hello&amp;#39; &amp;quot;World&amp;quot;",
                "&#39;Hello&#39; &quot;World&quot;",
            ),
            (
                "&amp;lt;p&gt;Text with &amp;quot;quotes&amp;quot; and &amp;amp; symbols&lt;/p&gt;",
                "&lt;p>Text with &quot;quotes&quot; and &amp; symbols</p>",
            ),
            (
                "&amp;invalid; &amp;lt;valid&gt; &partial",
                "&invalid; &lt;valid> &partial",
            ),
        ],
    )
    def test_entity_chains(self, text: str, expected: str) -> None:
        """Mixed, chained and malformed entities never double-unescape."""
        assert decode_entities(text) == expected
        assert strip_html(text) == expected

    def test_plain_entities(self) -> None:
        assert decode_entities("&lt;b&gt; &quot;q&quot; &apos;a&#x27; &amp;") == "<b> \"q\" 'a' &"


class TestStripHtml:
    """Tests for tag and script/style block removal."""

    def test_tags_removed(self) -> None:
        assert strip_html("<p>Hello <b>world</b></p>") == "Hello world"

    def test_script_and_style_blocks_removed_with_contents(self) -> None:
        text = "a<script type='x'>alert(1)</script>b<STYLE>p{}</style >c"
        assert strip_html(text) == "a b c"

    def test_unterminated_script_keeps_contents(self) -> None:
        """Only the opening tag is removed when no closing tag exists."""
        assert strip_html("a<script>alert(1)") == "a alert(1)"

    def test_unterminated_then_terminated_kinds(self) -> None:
        text = "<style>x</style>y<script>z"
        assert strip_html(text) == "y z"

    def test_adjacent_block_tags_become_one_space(self) -> None:
        assert strip_html("<p>Hello</p><p>World</p>") == "Hello World"
        assert strip_html("line1<br/>line2") == "line1 line2"

    def test_tags_next_to_whitespace_add_nothing(self) -> None:
        assert strip_html("<b>bold</b> text\n<i>x</i>") == "bold text\nx"

    def test_comparison_operators_survive(self) -> None:
        assert strip_html("a < b > c") == "a < b > c"

    def test_unclosed_angle_bracket_is_literal(self) -> None:
        assert strip_html("1 <2 and <b") == "1 <2 and <b"


class TestStripCodeFences:
    """Tests for fenced code block removal."""

    def test_block_removed(self) -> None:
        assert strip_code_fences("before\n```python\ncode\n```\nafter") == "before\nafter"

    def test_unterminated_fence_is_literal(self) -> None:
        text = "a\n```\ncode"
        assert strip_code_fences(text) == text

    def test_trailing_opener_kept(self) -> None:
        text = "x\n```\n1\n```\ny\n```\nz"
        assert strip_code_fences(text) == "x\ny\n```\nz"

    def test_inline_closed_fence_is_not_a_fence_line(self) -> None:
        text = "```x``` hi\nkeep\n```\ncode\n```\nafter"
        assert strip_code_fences(text) == "```x``` hi\nkeep\nafter"


class TestStripMarkdown:
    """Tests for block and inline Markdown removal."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("## Title", "Title"),
            ("> quoted\n>> nested", "quoted\nnested"),
            ("- one\n* two\n1. three\n2) four", "one\ntwo\nthree\nfour"),
            ("see [docs](http://example.com)", "see docs"),
            ("![logo](logo.png)text", "text"),
            ("run `pip list` now", "run pip list now"),
            ("**bold** and __strong__", "bold and strong"),
            ("*it* and _it_", "it and it"),
            ("~~gone~~", "gone"),
            ("above\n---\nbelow", "above\n\nbelow"),
            ("above\n* * *\nbelow", "above\n\nbelow"),
            ("above\n\u2014\nbelow", "above\n\nbelow"),
            ("above\n \u2013 \nbelow", "above\n\nbelow"),
        ],
    )
    def test_markers_removed(self, text: str, expected: str) -> None:
        assert strip_markdown(text) == expected

    def test_identifiers_with_underscores_survive(self) -> None:
        assert strip_markdown("call snake_case_name now") == "call snake_case_name now"

    def test_arithmetic_asterisks_survive(self) -> None:
        assert strip_markdown("2 * 3 * 4") == "2 * 3 * 4"

    def test_hash_without_space_is_not_a_header(self) -> None:
        assert strip_markdown("#hashtag") == "#hashtag"


class TestStripMarkup:
    """Tests for the combined markup pass."""

    def test_all_disabled_is_identity(self) -> None:
        text = "<b>**x**</b>\n```\ny\n```"
        flags = MarkupFlags(html_xml=False, markdown=False, code_fences=False)
        assert strip_markup(text, flags) == text

    def test_html_only(self) -> None:
        flags = MarkupFlags(markdown=False, code_fences=False)
        assert strip_markup("<i>**x**</i>", flags) == "**x**"

    def test_fences_removed_before_markdown(self) -> None:
        """Code inside a fence is dropped, not unwrapped."""
        text = "# Head\n```\n**keep?**\n```\n*done*"
        assert strip_markup(text, MarkupFlags()) == "Head\ndone"

    def test_adversarial_input_completes(self) -> None:
        """Long runs of unmatched delimiters are handled in one pass."""
        text = "<" * 5000 + "*" * 5000 + "[" * 5000 + "_" * 5000
        result = strip_markup(text, MarkupFlags())
        assert result.startswith("<" * 5000)
