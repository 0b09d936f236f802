"""
Cross-language formatting and conversion of citations.

Both entry points re-parse the input string, so every parse failure surfaces
unchanged in the result's ``error``.

    format_citation("BGE 145 III 229", "fr", "short")  -> "ATF 145 III 229"
    format_citation("Art. 97 OR", "fr", "full")        -> "art. 97 CO"
"""
from __future__ import annotations

import logging
from typing import Union

from .grammar import (
    CONSIDERATION_MARKER_BY_LANGUAGE,
    PREFIX_BY_LANGUAGE,
    STATUTE_TERMINOLOGY,
    CitationKind,
    FormatStyle,
    Language,
    translate_statute,
)
from .models import (
    CaseCitation,
    Citation,
    ConversionResult,
    DoctrineCitation,
    FormatResult,
    StatuteCitation,
)
from .parser import coerce_kind, parse

logger = logging.getLogger(__name__)


def render_case(c: CaseCitation, language: Language, style: FormatStyle) -> str:
    core = f"{c.volume} {c.section} {c.page}"
    if style == FormatStyle.INLINE:
        return core
    result = f"{PREFIX_BY_LANGUAGE[language]} {core}"
    if style == FormatStyle.FULL and c.consideration:
        result += f" {CONSIDERATION_MARKER_BY_LANGUAGE[language]} {c.consideration}"
    return result


def render_statute(c: StatuteCitation, language: Language, style: FormatStyle) -> str:
    terms = STATUTE_TERMINOLOGY[language]
    statute = translate_statute(c.statute, language)
    if style == FormatStyle.INLINE:
        return f"{c.article} {statute}"
    if style == FormatStyle.SHORT:
        return f"{terms.article} {c.article} {statute}"

    parts = [terms.article, str(c.article)]
    if c.paragraph is not None:
        parts += [terms.paragraph, str(c.paragraph)]
    if c.letter is not None:
        parts += [terms.letter, c.letter]
    if c.number is not None:
        parts += [terms.number, str(c.number)]
    parts.append(statute)
    return " ".join(parts)


def render(citation: Citation, language: Language, style: FormatStyle) -> str:
    """Render a parsed citation; doctrine references have no target form."""
    if isinstance(citation, CaseCitation):
        return render_case(citation, language, style)
    if isinstance(citation, StatuteCitation):
        return render_statute(citation, language, style)
    if isinstance(citation, DoctrineCitation):
        raise ValueError("Doctrine citations cannot be formatted")
    raise TypeError(f"Not a citation: {type(citation).__name__}")


def _fold(enum_cls, value):
    """Case-insensitive enum lookup; unknown values come back as None."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value.lower())
    except (AttributeError, ValueError):
        return None


def format_citation(
    raw_text: str,
    target_language: Union[Language, str],
    style: Union[FormatStyle, str] = FormatStyle.FULL,
) -> FormatResult:
    language = _fold(Language, target_language)
    fmt_style = _fold(FormatStyle, style)

    def failed(error: str) -> FormatResult:
        return FormatResult(
            success=False,
            formatted=None,
            original=raw_text,
            target_language=language or target_language,
            style=fmt_style or style,
            error=error,
        )

    if language is None:
        return failed(f"Unsupported target language '{target_language}'")
    if fmt_style is None:
        return failed(f"Unsupported citation style '{style}'")

    result = parse(raw_text)
    if not result.success:
        return failed(result.error or "Failed to parse citation")
    if isinstance(result.citation, DoctrineCitation):
        return failed("Unsupported citation type for formatting")

    return FormatResult(
        success=True,
        formatted=render(result.citation, language, fmt_style),
        original=raw_text,
        target_language=language,
        style=fmt_style,
    )


def convert_citation(
    raw_text: str,
    to_kind: Union[CitationKind, str],
    from_kind: Union[CitationKind, str, None] = None,
    target_language: Union[Language, str] = Language.DE,
) -> ConversionResult:
    """Re-render a citation in ``target_language`` as the same kind.

    A citation can only be converted to its own kind; conversion into a
    doctrine reference is not supported.
    """
    to_kind = coerce_kind(to_kind)
    from_kind = coerce_kind(from_kind)
    language = _fold(Language, target_language)

    def failed(error: str, detected=from_kind) -> ConversionResult:
        return ConversionResult(
            success=False,
            converted=None,
            original=raw_text,
            from_kind=detected,
            to_kind=to_kind,
            target_language=language or target_language,
            error=error,
        )

    if language is None:
        return failed(f"Unsupported target language '{target_language}'")

    result = parse(raw_text, from_kind)
    if not result.success:
        return failed(result.error or "Failed to parse citation")

    detected = result.citation.kind
    if to_kind == CitationKind.DOCTRINE:
        return failed("Conversion to doctrine format is not yet supported", detected)
    if detected != to_kind:
        logger.debug("Refusing %s -> %s conversion", detected.value, to_kind.value)
        return failed(
            f"Cannot convert from '{detected.value}' to '{to_kind.value}'. "
            "Citation type must match target format.",
            detected,
        )

    return ConversionResult(
        success=True,
        converted=render(result.citation, language, FormatStyle.FULL),
        original=raw_text,
        from_kind=detected,
        to_kind=to_kind,
        target_language=language,
    )
