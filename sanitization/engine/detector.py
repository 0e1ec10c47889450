# sanitization/engine/detector.py

"""Read-only detection of tracked code points and Markdown markers."""

import logging
import re
from typing import Dict, Pattern

from sanitization.core.definitions import Category, BOM_BUCKET
from sanitization.core.domain import DetectionResult
from sanitization.engine.classifier import classify

logger = logging.getLogger(__name__)

_MARKER_PATTERNS: Dict[str, Pattern] = {
    "headers": re.compile(r"^[ \t]{0,3}#{1,6}[ \t]+", re.MULTILINE),
    "emphasis": re.compile(r"\*\*|__|~~|(?<!\*)\*(?!\*)|(?<!_)_(?!_)"),
    "backticks": re.compile(r"```|`"),
    "dash_separators": re.compile(r"^[ \t]*[-\u2013\u2014]{2,}[ \t]*$", re.MULTILINE),
    "blockquotes": re.compile(r"^[ \t]{0,3}>", re.MULTILINE),
    "list_markers": re.compile(
        r"^[ \t]*(?:[-*+\u2022][ \t]+|\d{1,9}[.)][ \t]+)", re.MULTILINE
    ),
}


def detect(text: str) -> DetectionResult:
    """Counts tracked code points without modifying the text.

    Every code point whose category is not NONE is counted once, under
    its category, or under the BOM bucket for U+FEFF. Positions are
    Python ``str`` indices, i.e. code point offsets.

    Args:
        text: Any text, typically the raw input

    Returns:
        Fully-populated DetectionResult (all zeros for empty input)
    """
    result = DetectionResult()

    if not text or not isinstance(text, str):
        return result

    for index, ch in enumerate(text):
        codepoint = ord(ch)
        category = classify(codepoint)

        if category == Category.NONE:
            continue

        bucket = BOM_BUCKET if codepoint == 0xFEFF else category
        result.categories[bucket] += 1
        result.positions.append(index)
        result.total_count += 1

    return result


def count_markers(text: str) -> Dict[str, int]:
    """Counts Markdown markers for before/after comparison.

    Args:
        text: Any text

    Returns:
        Marker name to number of occurrences
    """
    if not text or not isinstance(text, str):
        return {name: 0 for name in _MARKER_PATTERNS}

    return {
        name: sum(1 for _ in pattern.finditer(text))
        for name, pattern in _MARKER_PATTERNS.items()
    }
