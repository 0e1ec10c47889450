# sanitization/engine/whitespace.py

"""Whitespace and blank-line normalization."""

import re
from typing import FrozenSet

# Pre-compiled regex patterns for performance
_LINE_BREAK_RE = re.compile(r"\r\n?")
_SPACE_SEPARATOR_RE = re.compile(r"[\u00A0\u1680\u2000-\u200A\u202F\u205F\u3000]")
_HORIZONTAL_RUN_RE = re.compile(r"[^\S\n]{2,}")
_TRAILING_SPACE_RE = re.compile(r"[^\S\n]+$", re.MULTILINE)
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def _collapse_run(run: str, keep: FrozenSet[str]) -> str:
    """Collapses a whitespace run, leaving kept characters in place."""
    out = []
    for ch in run:
        if ch in keep:
            out.append(ch)
        elif not out or out[-1] != " ":
            out.append(" ")
    return "".join(out)


def normalize_whitespace(text: str, keep: FrozenSet[str] = frozenset()) -> str:
    """Tidies spaces and blank lines without touching line content.

    Converts CRLF and CR to LF, maps Unicode space separators to ASCII
    space, collapses runs of horizontal whitespace to one space, trims
    trailing whitespace on every line, and keeps at most one blank line.

    Args:
        text: Filtered text
        keep: Hard-allowed characters; never mapped, collapsed or trimmed

    Returns:
        Normalized text
    """
    text = _LINE_BREAK_RE.sub("\n", text)

    kept_spaces = frozenset(ch for ch in keep if ch.isspace() and ch != "\n")
    if not kept_spaces:
        text = _SPACE_SEPARATOR_RE.sub(" ", text)
        # Runs are collapsed before trimming so the trailing pass never rescans long runs
        text = _HORIZONTAL_RUN_RE.sub(" ", text)
        text = _TRAILING_SPACE_RE.sub("", text)
        return _BLANK_LINES_RE.sub("\n\n", text)

    text = _SPACE_SEPARATOR_RE.sub(
        lambda match: match.group(0) if match.group(0) in kept_spaces else " ", text
    )
    text = _HORIZONTAL_RUN_RE.sub(lambda match: _collapse_run(match.group(0), kept_spaces), text)
    text = _TRAILING_SPACE_RE.sub(
        lambda match: "".join(ch for ch in match.group(0) if ch in kept_spaces), text
    )
    return _BLANK_LINES_RE.sub("\n\n", text)
