# sanitization/core/domain.py

"""Domain models for detection and sanitization results."""

from dataclasses import dataclass, field
from typing import List, Dict, Any

from sanitization.core.definitions import Category, BOM_BUCKET


def empty_category_counts() -> Dict[str, int]:
    """Returns a zeroed counter for every tracked category and the BOM bucket."""
    counts = {name: 0 for name in Category.TRACKED}
    counts[BOM_BUCKET] = 0
    return counts


@dataclass
class DetectionResult:
    """Per-category statistics for the tracked code points in a text.

    Attributes:
        total_count: Number of tracked code points found
        categories: Occurrences per category name (always fully populated)
        positions: Ascending code point indices (Python ``str`` indices)
            of each tracked occurrence
    """

    total_count: int = 0
    categories: Dict[str, int] = field(default_factory=empty_category_counts)
    positions: List[int] = field(default_factory=list)


@dataclass
class SanitizeResult:
    """Result object returned by the sanitization service.

    Attributes:
        original_text: Unmodified input text
        sanitized_text: Cleaned text ("" when processing failed)
        detection_before: Statistics for the input text
        detection_after: Statistics for the cleaned text
        metadata: Additional processing information
    """

    original_text: str
    sanitized_text: str
    detection_before: DetectionResult = field(default_factory=DetectionResult)
    detection_after: DetectionResult = field(default_factory=DetectionResult)
    metadata: Dict[str, Any] = field(default_factory=dict)
