# sanitization/core/definitions.py

"""Category and policy constants for code point classification."""


class Category:
    """Constants naming the semantic category of a single code point."""

    # Invisible formatting
    ZERO_WIDTH = "ZERO_WIDTH"
    BIDI_CONTROL = "BIDI_CONTROL"
    MATH_INVISIBLE = "MATH_INVISIBLE"
    HYPHENATION = "HYPHENATION"
    VARIATION_SELECTOR = "VARIATION_SELECTOR"
    FORMAT_CONTROL = "FORMAT_CONTROL"
    SHORTHAND_FORMAT = "SHORTHAND_FORMAT"

    # Plane 14
    TAG_CHARACTER = "TAG_CHARACTER"
    IDEOGRAPHIC_VARIATION_SELECTOR = "IDEOGRAPHIC_VARIATION_SELECTOR"

    # Reserved and private ranges
    NON_CHARACTER = "NON_CHARACTER"
    PRIVATE_USE = "PRIVATE_USE"

    # Detection-only heuristic
    COMBINING_MARK = "COMBINING_MARK"

    NONE = "NONE"

    TRACKED = (
        ZERO_WIDTH,
        BIDI_CONTROL,
        MATH_INVISIBLE,
        HYPHENATION,
        VARIATION_SELECTOR,
        FORMAT_CONTROL,
        SHORTHAND_FORMAT,
        TAG_CHARACTER,
        IDEOGRAPHIC_VARIATION_SELECTOR,
        NON_CHARACTER,
        PRIVATE_USE,
        COMBINING_MARK,
    )


# Statistics bucket for U+FEFF, reported apart from the other zero-width marks
BOM_BUCKET = "BOM"


class PrivateUseScope:
    """Scopes for private-use removal."""

    NONE = "none"
    BMP_ONLY = "bmp_only"
    ALL = "all"


class VariationSelectorPolicy:
    """Policies for variation selector removal."""

    NONE = "none"
    EMOJI_SAFEKEEP = "emoji_safekeep"
    ALL = "all"


class Preset:
    """Names of the built-in sanitization presets."""

    DEFAULT = "default"
    EMOJI_SAFE = "emoji_safe"
    MAX_STERILE = "max_sterile"
    MARKUP_INTACT = "markup_intact"
