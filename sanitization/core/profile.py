# sanitization/core/profile.py

"""Sanitization profile models using Pydantic.

A profile is immutable, fully-specified data. Field defaults describe the
``default`` preset; other presets are derived with ``with_overrides``.
"""

from typing import Any, Dict, FrozenSet, Iterable, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

NormalizationForm = Literal["NFC", "NFD", "NFKC", "NFKD"]
PrivateUseScopeName = Literal["none", "bmp_only", "all"]
VariationSelectorPolicyName = Literal["none", "emoji_safekeep", "all"]

# Groups merged field-by-field by with_overrides; every other field is replaced
_NESTED_GROUPS = ("strip_markup", "remove_categories")


def coerce_char(value: Any) -> str:
    """Converts a character, ``U+XXXX`` string, or code point to a character.

    Args:
        value: Single-character string, ``U+`` notation, or integer code point

    Returns:
        Single-character string

    Raises:
        ValueError: If the value does not denote exactly one code point.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a character, got boolean {value!r}")

    if isinstance(value, int):
        return chr(value)

    if isinstance(value, str):
        if len(value) == 1:
            return value
        if value[:2].upper() == "U+":
            return chr(int(value[2:], 16))

    raise ValueError(
        f"Expected a single character or U+XXXX notation, got {value!r}"
    )


def coerce_char_set(value: Any) -> FrozenSet[str]:
    """Normalises a collection of character designations to a frozenset."""
    if value is None:
        return frozenset()
    if isinstance(value, (str, int)):
        value = [value]
    if not isinstance(value, Iterable):
        raise ValueError(f"Expected a list of characters, got {type(value).__name__}")
    return frozenset(coerce_char(item) for item in value)


def _joiner_allowance(comments: Optional[str] = None) -> Dict[str, Any]:
    return {"allow": frozenset({"\u200D", "\u200C"}), "comments": comments}


def _default_language_overrides() -> Dict[str, "LanguageOverride"]:
    overrides = {
        "ar": _joiner_allowance("ZWJ/ZWNJ allowed for Arabic shaping exceptions."),
        "fa": _joiner_allowance("ZWNJ separates Persian word parts."),
        "ur": _joiner_allowance(),
        "hi": _joiner_allowance("ZWJ/ZWNJ select Devanagari conjunct forms."),
        "bn": _joiner_allowance(),
        "ml": _joiner_allowance("ZWJ forms Malayalam chillu letters."),
        "ta": _joiner_allowance(),
        "te": _joiner_allowance(),
        "th": {
            "allow": frozenset({"\u200B"}),
            "comments": "ZWSP permitted for Thai line-break hints.",
        },
        "km": {
            "allow": frozenset({"\u200B"}),
            "comments": "ZWSP permitted for Khmer line-break hints.",
        },
    }
    return {lang: LanguageOverride(**data) for lang, data in overrides.items()}


class LanguageOverride(BaseModel):
    """Characters explicitly allowed for one language.

    Attributes:
        allow: Characters kept even when a removal rule matches them
        comments: Optional note explaining the exception
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    allow: FrozenSet[str] = Field(default_factory=frozenset)
    comments: Optional[str] = None

    @field_validator("allow", mode="before")
    @classmethod
    def validate_allow(cls, v: Any) -> FrozenSet[str]:
        """Accept characters, U+XXXX notation, or code points."""
        return coerce_char_set(v)


class MarkupFlags(BaseModel):
    """Toggles for the markup stripping pass."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    html_xml: bool = True
    markdown: bool = True
    code_fences: bool = True

    @property
    def any_enabled(self) -> bool:
        return self.html_xml or self.markdown or self.code_fences


class CategoryFlags(BaseModel):
    """Toggles for removal by Unicode general category (Cc, Cf, Cs)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    cc_controls: bool = True
    cf_format_controls: bool = True
    cs_surrogates: bool = True


class Profile(BaseModel):
    """Declarative sanitization profile.

    Every field carries an explicit default, so a profile never reaches the
    filter logic partially specified. Instances are frozen.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = "1.2"
    normalize: NormalizationForm = Field(
        default="NFC", description="Normalization form for the pre- and post-pass."
    )
    nfkc_compat: bool = Field(
        default=False, description="Use NFKC for the pre-pass regardless of form."
    )
    collapse_whitespace: bool = True

    strip_markup: MarkupFlags = Field(default_factory=MarkupFlags)
    remove_categories: CategoryFlags = Field(default_factory=CategoryFlags)

    remove_noncharacters: bool = True
    remove_private_use: PrivateUseScopeName = "all"
    remove_isolated_combining_marks: bool = True
    strip_directionality_controls: bool = True
    strip_soft_hyphen: bool = True
    strip_invisible_separators: bool = True
    strip_tag_chars: bool = True
    strip_variation_selectors: VariationSelectorPolicyName = "emoji_safekeep"
    strip_bom_anywhere: bool = True

    # Contextual joiner guards
    preserve_emoji_sequences: bool = True
    preserve_indic_joiners: bool = True
    preserve_arabic_zwnj: bool = True

    zwsp_to_space: bool = Field(
        default=True,
        description="Emit a space for a removed ZWSP that separated two words.",
    )

    language_overrides: Dict[str, LanguageOverride] = Field(
        default_factory=_default_language_overrides
    )
    hard_allowlist: FrozenSet[str] = Field(default_factory=frozenset)
    hard_blocklist: FrozenSet[str] = Field(
        default_factory=lambda: frozenset(
            {
                "\u2060",  # Word joiner
                "\u00AD",  # Soft hyphen
                "\u180E",  # Mongolian vowel separator
                "\uFEFF",  # Zero width no-break space (BOM)
            }
        )
    )

    @field_validator("hard_allowlist", "hard_blocklist", mode="before")
    @classmethod
    def validate_char_sets(cls, v: Any) -> FrozenSet[str]:
        """Accept characters, U+XXXX notation, or code points."""
        return coerce_char_set(v)

    @field_validator("language_overrides", mode="after")
    @classmethod
    def validate_language_codes(
        cls, v: Dict[str, LanguageOverride]
    ) -> Dict[str, LanguageOverride]:
        """Language codes are matched case-insensitively."""
        normalized = {}
        for code, override in v.items():
            key = code.strip().lower().replace("_", "-")
            if not key:
                raise ValueError("Language code cannot be empty")
            normalized[key] = override
        return normalized

    def with_overrides(self, **overrides: Any) -> "Profile":
        """Returns a new profile with the given fields replaced.

        ``strip_markup`` and ``remove_categories`` accept partial dicts that
        are merged into the current flags.

        Raises:
            pydantic.ValidationError: If a field is unknown or invalid.
        """
        data = self.model_dump()

        for key, value in overrides.items():
            if key in _NESTED_GROUPS and isinstance(value, dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

        return Profile.model_validate(data)
