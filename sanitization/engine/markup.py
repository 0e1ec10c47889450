# sanitization/engine/markup.py

"""HTML/XML and Markdown stripping applied before character filtering.

Every pattern here is bounded by a negated character class or a literal
delimiter, so stripping stays linear on adversarial input.
"""

import logging
import re
from typing import Dict, List, Pattern, Set, Tuple

from sanitization.core.profile import MarkupFlags

logger = logging.getLogger(__name__)

# Pre-compiled regex patterns for performance
_BLOCK_OPEN_RE = re.compile(r"<(script|style)\b", re.IGNORECASE)
_BLOCK_CLOSE_RE: Dict[str, Pattern] = {
    "script": re.compile(r"</script\s*>", re.IGNORECASE),
    "style": re.compile(r"</style\s*>", re.IGNORECASE),
}

# A tag must start with a name, '/', '!' or '?' so that "a < b > c" survives
_TAG_RUN_RE = re.compile(r"(?:</?[A-Za-z!?][^<>]*>)+")

_ENTITIES: Dict[str, str] = {
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
    "&#x27;": "'",
}
_ENTITY_RE = re.compile("|".join(re.escape(entity) for entity in _ENTITIES))
_AMP_ENTITY = "&amp;"

# A line that also closes the fence inline is not a fence line
_FENCE_LINE_RE = re.compile(r"^[ \t]{0,3}```(?!.*```)")

_MARKDOWN_RULES: Tuple[Tuple[Pattern, str], ...] = (
    # ATX headers
    (re.compile(r"^[ \t]{0,3}#{1,6}[ \t]+", re.MULTILINE), ""),
    # Horizontal rules and dash separator lines
    (
        re.compile(
            r"^[ \t]*(?:[-\u2013\u2014][ \t]*){2,}$|^[ \t]*[\u2013\u2014][ \t]*$|"
            r"^[ \t]*(?:[*_][ \t]*){3,}$",
            re.MULTILINE,
        ),
        "",
    ),
    # Blockquotes, including nested markers
    (re.compile(r"^[ \t]{0,3}(?:>[ \t]?)+", re.MULTILINE), ""),
    # Bullet and ordered list markers
    (
        re.compile(r"^[ \t]*(?:[-*+\u2022][ \t]+|\d{1,9}[.)][ \t]+)", re.MULTILINE),
        "",
    ),
    # Images are dropped, links keep their text
    (re.compile(r"!\[[^\[\]\n]*\]\([^()\n]*\)"), ""),
    (re.compile(r"\[([^\[\]\n]*)\]\([^()\n]*\)"), r"\1"),
    # Inline code
    (re.compile(r"`([^`\n]+)`"), r"\1"),
    # Bold, then single-marker emphasis, then strikethrough
    (re.compile(r"\*\*([^*\n]+)\*\*"), r"\1"),
    (re.compile(r"__([^_\n]+)__"), r"\1"),
    (re.compile(r"(?<!\*)\*(?![\s*])([^*\n]+)(?<!\s)\*(?!\*)"), r"\1"),
    (re.compile(r"(?<![\w_])_(?![\s_])([^_\n]+)(?<!\s)_(?![\w_])"), r"\1"),
    (re.compile(r"~~([^~\n]+)~~"), r"\1"),
)


def decode_entities(text: str) -> str:
    """Decodes the standard HTML entities exactly once.

    Non-ampersand entities are decoded first and ``&amp;`` last, each in a
    single pass, so "&amp;lt;" becomes "&lt;" and never "<".

    Args:
        text: Text possibly containing HTML entities

    Returns:
        Text with each entity decoded at most once
    """
    text = _ENTITY_RE.sub(lambda match: _ENTITIES[match.group(0)], text)
    return text.replace(_AMP_ENTITY, "&")


def _separator(text: str, start: int, end: int) -> str:
    """A space when the removed span sat between two non-space characters."""
    if start == 0 or end >= len(text):
        return ""
    if text[start - 1].isspace() or text[end].isspace():
        return ""
    return " "


def _remove_script_style_blocks(text: str) -> str:
    """Removes <script> and <style> elements together with their contents.

    A removed element leaves a space behind when it separated two words.
    An element with no closing tag is left in place; its opening tag is
    later removed by the generic tag pass. Once a closing tag of one kind
    is known to be absent, later openers of that kind are skipped without
    searching again.
    """
    parts: List[str] = []
    kept_from = 0
    search_from = 0
    unterminated: Set[str] = set()

    while True:
        opener = _BLOCK_OPEN_RE.search(text, search_from)
        if opener is None:
            break

        name = opener.group(1).lower()
        if name in unterminated:
            search_from = opener.end()
            continue

        closer = _BLOCK_CLOSE_RE[name].search(text, opener.end())
        if closer is None:
            unterminated.add(name)
            search_from = opener.end()
            continue

        parts.append(text[kept_from : opener.start()])
        parts.append(_separator(text, opener.start(), closer.end()))
        kept_from = search_from = closer.end()

    parts.append(text[kept_from:])
    return "".join(parts)


def strip_html(text: str) -> str:
    """Removes script/style blocks and tags, then decodes entities once.

    A run of adjacent tags between two words becomes one space, so
    "<p>Hello</p><p>World</p>" reads "Hello World".
    """
    text = _remove_script_style_blocks(text)
    text = _TAG_RUN_RE.sub(
        lambda match: _separator(match.string, match.start(), match.end()), text
    )
    return decode_entities(text)


def strip_code_fences(text: str) -> str:
    """Removes fenced code blocks, fence lines included.

    Fence lines pair up in order. A trailing opener without a closing fence
    is left as literal text together with everything after it.
    """
    lines = text.split("\n")
    fence_lines = [i for i, line in enumerate(lines) if _FENCE_LINE_RE.match(line)]

    if len(fence_lines) < 2:
        return text

    blocks = list(zip(fence_lines[0::2], fence_lines[1::2]))
    kept: List[str] = []
    cursor = 0

    for start, end in blocks:
        kept.extend(lines[cursor:start])
        cursor = end + 1

    kept.extend(lines[cursor:])
    return "\n".join(kept)


def strip_markdown(text: str) -> str:
    """Removes block markers and inline Markdown syntax, keeping the text."""
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text


def strip_markup(text: str, flags: MarkupFlags) -> str:
    """Applies the enabled markup passes in order: HTML, fences, Markdown.

    Args:
        text: Raw input text
        flags: Markup toggles from the active profile

    Returns:
        Text with the selected markup removed
    """
    original_length = len(text)

    if flags.html_xml:
        text = strip_html(text)

    if flags.code_fences:
        text = strip_code_fences(text)

    if flags.markdown:
        text = strip_markdown(text)

    logger.debug(
        "Markup stripped",
        extra={
            "html_xml": flags.html_xml,
            "markdown": flags.markdown,
            "code_fences": flags.code_fences,
            "removed_chars": original_length - len(text),
        },
    )
    return text
