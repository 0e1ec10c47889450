# main.py

"""Streamlit web UI for the Unicode sanitizer.

Provides a simple interface to paste text, choose a preset and language,
and receive the cleaned text with per-category counts of the invisible
characters found before and after cleaning.
"""

import streamlit as st
import logging

from sanitization.logging_config import configure_logging
from sanitization.core.definitions import Preset
from sanitization.core.domain import DetectionResult
from sanitization.engine.detector import count_markers
from sanitization.service.config import settings
from sanitization.service.pipeline import sanitize_text

configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

PRESET_LABELS = {
    Preset.DEFAULT: "Default",
    Preset.EMOJI_SAFE: "Emoji safe",
    Preset.MAX_STERILE: "Maximum sterile",
    Preset.MARKUP_INTACT: "Markup intact",
}

LANGUAGE_OPTIONS = ["", "ar", "fa", "ur", "hi", "bn", "ml", "ta", "te", "th", "km"]


def _render_counts(title: str, detection: DetectionResult) -> None:
    st.markdown(f"**{title}:** {detection.total_count} tracked characters")
    found = {name: n for name, n in detection.categories.items() if n}
    if found:
        st.table(found)


def main():
    """Run the Streamlit application UI.

    This function configures the Streamlit page, accepts input text from
    the user, invokes the sanitization pipeline, and displays the cleaned
    output along with detection statistics.
    """
    st.set_page_config(
        layout="wide", page_title="Unicode Text Sanitizer", page_icon="🧼"
    )

    st.title("Unicode Text Sanitizer")
    st.markdown(
        "Removes invisible characters, bidirectional controls and markup from pasted text while keeping emoji sequences and script joiners intact."
    )
    st.markdown("---")

    with st.sidebar:
        st.header("Profile")
        preset = st.selectbox(
            "Preset",
            options=list(PRESET_LABELS),
            format_func=PRESET_LABELS.get,
        )
        language = st.selectbox(
            "Language",
            options=LANGUAGE_OPTIONS,
            format_func=lambda code: code or "(none)",
        )

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Input Text")
        text_input = st.text_area(
            "Source Text",
            height=400,
            placeholder="Paste text here...",
        )

    with col2:
        st.subheader("Sanitized Output")

        if st.button("Sanitize", type="primary"):
            if not text_input:
                st.warning("Please enter text to process.")
                logger.warning("Sanitization attempted with empty input")

            else:
                try:
                    logger.info(f"Processing text of length: {len(text_input)}")
                    result = sanitize_text(text_input, preset, language or None)

                    if "error" in result.metadata:
                        st.error(f"Sanitization failed: {result.metadata['error']}")
                        logger.error(
                            "Sanitization returned error status",
                            extra={"status": "failed", "text_length": len(text_input)},
                        )
                    else:
                        st.text_area(
                            "Sanitized Text", value=result.sanitized_text, height=400
                        )

                        st.success(
                            f"Sanitization complete. Removed "
                            f"{result.metadata['removed_tracked']} tracked characters."
                        )
                        _render_counts("Before", result.detection_before)
                        _render_counts("After", result.detection_after)

                        st.markdown("**Markdown markers (before → after)**")
                        before = count_markers(result.original_text)
                        after = count_markers(result.sanitized_text)
                        st.table(
                            {name: f"{before[name]} → {after[name]}" for name in before}
                        )

                except Exception:
                    st.error("An unexpected error occurred during sanitization.")
                    logger.error(
                        "Unexpected error in main application loop",
                        exc_info=True,
                        extra={"text_length": len(text_input) if text_input else 0},
                    )

    with st.sidebar:
        st.header("About")
        st.markdown("""
        This tool removes characters that are invisible or alter rendering:

        - **Zero-width characters** (ZWSP, ZWJ, ZWNJ, word joiner, BOM)
        - **Bidirectional controls** (marks, embeddings, overrides, isolates)
        - **Variation selectors and tag characters**
        - **Private-use and non-character code points**
        - **HTML and Markdown markup**

        Emoji sequences and language-specific joiners are preserved.
        """)


if __name__ == "__main__":
    main()
