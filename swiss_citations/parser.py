"""
Citation parser.

Turns a raw citation string into a CaseCitation, StatuteCitation or
DoctrineCitation. Malformed input is an expected outcome and comes back as a
ParseResult carrying a ParseFailure; nothing here raises for bad text.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from .grammar import (
    KIND_ALIASES,
    LETTER_MARKERS,
    NUMBER_MARKERS,
    PARAGRAPH_MARKERS,
    SECTION_CODES,
    CitationKind,
    Language,
    canonical_consideration_marker,
    canonical_section,
    canonical_statute,
    is_valid_section,
)
from .matcher import Match, match, normalize_whitespace, sniff_kind
from .models import (
    CaseCitation,
    Citation,
    DoctrineCitation,
    ErrorCode,
    ParseFailure,
    ParseResult,
    StatuteCitation,
)
from .normalizer import normalize

logger = logging.getLogger(__name__)

BGE_FORMAT_MESSAGE = (
    "Citation does not match BGE format: BGE/ATF/DTF [volume] [section] [page]"
)
STATUTE_FORMAT_MESSAGE = (
    "Citation does not match statute format: Art. [number] [paragraph] [statute]"
)
UNRECOGNIZED_MESSAGE = (
    "Citation format not recognized. Supported formats: BGE/ATF/DTF, Art. [statute]"
)
MISSING_STATUTE_MESSAGE = (
    "Statute citation is missing the statute abbreviation (e.g., OR, ZGB, StGB)"
)

_DOCTRINE_MARKER_LANGUAGE = {"n": Language.FR, "n.": Language.FR}


def coerce_kind(value: Union[CitationKind, str, None]) -> Optional[CitationKind]:
    """Accept a CitationKind, its value, or the legacy alias ``"bge"``."""
    if value is None or isinstance(value, CitationKind):
        return value
    try:
        return KIND_ALIASES[value.lower()]
    except KeyError:
        raise ValueError(f"Unknown citation type: {value!r}") from None


def _format_failure(kind: CitationKind) -> ParseFailure:
    if kind == CitationKind.CASE:
        return ParseFailure(ErrorCode.INVALID_BGE_FORMAT, BGE_FORMAT_MESSAGE)
    if kind == CitationKind.STATUTE:
        return ParseFailure(ErrorCode.INVALID_STATUTE_FORMAT, STATUTE_FORMAT_MESSAGE)
    return ParseFailure(ErrorCode.UNRECOGNIZED_FORMAT, UNRECOGNIZED_MESSAGE)


def section_failure(section: str, position: Optional[int]) -> ParseFailure:
    return ParseFailure(
        ErrorCode.INVALID_SECTION,
        f"Invalid BGE section '{section}'. Valid sections: {', '.join(SECTION_CODES)}",
        position,
    )


# ── Per-kind builders ─────────────────────────────────────────


def _parse_case(text: str) -> Union[CaseCitation, ParseFailure]:
    m = match(text, CitationKind.CASE)
    if m is None:
        loose = match(text, CitationKind.CASE, loose=True)
        if loose is not None and not is_valid_section(loose.get("section")):
            return section_failure(loose.get("section"), loose.position("section"))
        return _format_failure(CitationKind.CASE)

    volume = int(m.get("volume"))
    page = int(m.get("page"))
    if volume <= 0 or page <= 0:
        return ParseFailure(
            ErrorCode.INVALID_BGE_FORMAT,
            "BGE volume and page must be positive numbers",
            m.position("volume") if volume <= 0 else m.position("page"),
        )

    consideration = m.get("consideration")
    return CaseCitation(
        prefix=m.get("prefix").upper(),
        volume=volume,
        section=canonical_section(m.get("section")),
        page=page,
        consideration=consideration,
        consideration_marker=(
            canonical_consideration_marker(m.markers["consideration"]) if consideration else None
        ),
    )


def _statute_language(m: Match) -> Language:
    """First non-German connector word decides; German otherwise."""
    for name, table in (
        ("paragraph", PARAGRAPH_MARKERS),
        ("letter", LETTER_MARKERS),
        ("number", NUMBER_MARKERS),
    ):
        marker = m.markers.get(name)
        if marker and table[marker.lower()] != Language.DE:
            return table[marker.lower()]
    return Language.DE


def _parse_statute(text: str) -> Union[StatuteCitation, ParseFailure]:
    m = match(text, CitationKind.STATUTE)
    if m is None:
        return _format_failure(CitationKind.STATUTE)
    if m.get("statute") is None:
        return ParseFailure(ErrorCode.MISSING_STATUTE, MISSING_STATUTE_MESSAGE)

    numbers = {}
    for name in ("article", "paragraph", "number"):
        raw = m.get(name)
        if raw is None:
            continue
        numbers[name] = int(raw)
        if numbers[name] <= 0:
            return ParseFailure(
                ErrorCode.INVALID_STATUTE_FORMAT,
                f"Statute {name} must be a positive number",
                m.position(name),
            )

    letter = m.get("letter")
    return StatuteCitation(
        article=numbers["article"],
        paragraph=numbers.get("paragraph"),
        letter=letter.lower() if letter else None,
        number=numbers.get("number"),
        statute=canonical_statute(m.get("statute").rstrip(".")),
        language=_statute_language(m),
    )


def _parse_doctrine(text: str) -> Union[DoctrineCitation, ParseFailure]:
    m = match(text, CitationKind.DOCTRINE)
    if m is None:
        return ParseFailure(ErrorCode.UNRECOGNIZED_FORMAT, UNRECOGNIZED_MESSAGE)
    margin = m.get("margin")
    marker = m.markers.get("margin") or ""
    return DoctrineCitation(
        authors=tuple(m.get("authors").split("/")),
        title=m.get("title"),
        margin_number=int(margin) if margin else None,
        language=_DOCTRINE_MARKER_LANGUAGE.get(marker, Language.DE),
    )


_BUILDERS = {
    CitationKind.CASE: _parse_case,
    CitationKind.STATUTE: _parse_statute,
    CitationKind.DOCTRINE: _parse_doctrine,
}


# ── Public API ────────────────────────────────────────────────


def parse(raw_text: str, kind_hint: Union[CitationKind, str, None] = None) -> ParseResult:
    """Parse ``raw_text`` into a structured citation.

    With ``kind_hint`` only that kind is attempted, so callers can assert the
    shape they expect: ``parse("BGE 145 III 229", "statute")`` fails instead of
    being read as a case citation. Without a hint the kind is sniffed from the
    leading token.
    """
    hint = coerce_kind(kind_hint)
    text = normalize_whitespace(raw_text)
    if not text:
        return ParseResult(
            original=raw_text,
            failure=ParseFailure(
                ErrorCode.EMPTY_CITATION,
                "Citation string is empty or contains only whitespace",
            ),
        )

    detected = sniff_kind(text)
    kind = hint or detected
    if kind is None:
        logger.debug("Unrecognized citation: %.80r", text)
        return ParseResult(
            original=raw_text,
            failure=ParseFailure(ErrorCode.UNRECOGNIZED_FORMAT, UNRECOGNIZED_MESSAGE),
        )

    outcome = _BUILDERS[kind](text)
    if isinstance(outcome, ParseFailure):
        if hint and detected and hint != detected:
            outcome = ParseFailure(
                _format_failure(hint).code,
                f"Citation type hint '{hint.value}' does not match detected type '{detected.value}'",
            )
        logger.debug("Parse failed (%s) for %.80r", outcome.code.value, text)
        return ParseResult(original=raw_text, failure=outcome, kind=kind)

    return ParseResult(
        original=raw_text,
        citation=outcome,
        normalized=normalize(outcome),
        kind=kind,
    )


def parse_citation(raw_text: str, kind_hint: Union[CitationKind, str, None] = None) -> Optional[Citation]:
    """Shortcut returning only the citation, or None when parsing fails."""
    return parse(raw_text, kind_hint).citation
