"""
Citation extraction from running text.

Finds case and statute citations inside prose, e.g.

    "Vgl. BGE 147 I 268 E. 2.1 sowie Art. 8 Abs. 1 lit. a ZGB."

At every token that opens a citation (BGE/ATF/DTF or Art.) the longest
window of following tokens that parses is taken. Sentence punctuation and
brackets around the citation are ignored.
"""
from __future__ import annotations

import logging
import re

from .grammar import CitationKind
from .matcher import normalize_whitespace, tokenize
from .models import ExtractedCitation
from .parser import parse

logger = logging.getLogger(__name__)

# Longest possible token windows per kind.
_MAX_TOKENS = {
    CitationKind.CASE: 6,  # BGE 145 III 229 E. 4.2
    CitationKind.STATUTE: 9,  # Art. 50 Abs. 3 lit. b Ziff. 2 OR
}
_OPENERS = {
    CitationKind.CASE: re.compile(r"[(\[]?(?:BGE|ATF|DTF)$", re.IGNORECASE),
    CitationKind.STATUTE: re.compile(r"[(\[]?Art\.$", re.IGNORECASE),
}
_LEADING_PUNCT = "(["
_TRAILING_PUNCT = ",;:)]"

# Short prose words that follow "Art. N" in running text and are not law codes.
_PROSE_WORDS = frozenset({
    # German
    "AB", "AM", "AN", "AUS", "BEI", "BZW", "DA", "DAS", "DEM", "DEN", "DER",
    "DES", "DIE", "EIN", "ER", "ES", "IM", "IN", "IST", "MIT", "NACH", "ODER",
    "SIE", "UM", "UND", "VOM", "VON", "VOR", "WIE", "ZU", "ZUM", "ZUR",
    # French
    "AU", "AUX", "CE", "DANS", "DE", "DU", "EN", "EST", "ET", "IL", "LA",
    "LE", "LES", "OU", "PAR", "POUR", "QUE", "QUI", "SE", "SUR", "UN", "UNE",
    # Italian
    "CHE", "CON", "DEL", "DELLA", "DI", "NEL", "NON", "PER", "SUL", "TRA", "UNA",
})


def _opener_kind(token: str):
    for kind, pattern in _OPENERS.items():
        if pattern.match(token):
            return kind
    return None


def _looks_like_law_code(raw: str) -> bool:
    # Law codes carry capitals (OR, StGB, Cst); "und", "Oder" and "Della" do not
    # count. Short title-case words are caught by the prose list.
    n_upper = sum(1 for c in raw if c.isupper())
    if n_upper == 0:
        return False
    if n_upper == 1 and len(raw) > 3:
        return False
    return raw.upper() not in _PROSE_WORDS


def _candidates(text: str, start: int, end: int):
    """Yield (start, end) spans to try, most punctuation stripped first."""
    span = text[start:end]
    tried = set()
    # "Art. 97 OR." and "(BGE 147 I 268)." end in punctuation; "E." may not.
    for stripped in (span.rstrip(_TRAILING_PUNCT + "."), span.rstrip(_TRAILING_PUNCT)):
        if stripped and stripped not in tried:
            tried.add(stripped)
            yield start, start + len(stripped)


def extract_citations(text: str | None) -> list[ExtractedCitation]:
    """Extract case and statute citations from ``text``.

    Offsets refer to the whitespace-normalized text. Duplicates (by
    normalized form) are reported once, at their first occurrence.
    """
    if not text:
        return []

    normalized = normalize_whitespace(text)
    tokens = tokenize(normalized)
    found: list[ExtractedCitation] = []
    seen: set[str] = set()

    i = 0
    while i < len(tokens):
        kind = _opener_kind(tokens[i].text)
        if kind is None:
            i += 1
            continue

        start = tokens[i].start
        if tokens[i].text[0] in _LEADING_PUNCT:
            start += 1

        hit = None
        last = min(len(tokens), i + _MAX_TOKENS[kind])
        for j in range(last, i + 1, -1):
            for span_start, span_end in _candidates(normalized, start, tokens[j - 1].end):
                candidate = normalized[span_start:span_end]
                result = parse(candidate, kind)
                if result.success and (
                    kind != CitationKind.STATUTE
                    or _looks_like_law_code(candidate.rsplit(" ", 1)[-1].rstrip("."))
                ):
                    hit = (span_start, span_end, result, j)
                    break
            if hit:
                break

        if hit is None:
            i += 1
            continue

        span_start, span_end, result, j = hit
        if result.normalized not in seen:
            seen.add(result.normalized)
            found.append(
                ExtractedCitation(
                    raw=normalized[span_start:span_end],
                    start=span_start,
                    end=span_end,
                    citation=result.citation,
                    normalized=result.normalized,
                )
            )
        i = j

    logger.debug("Extracted %d citations from %d tokens", len(found), len(tokens))
    return found


def extract_references(text: str | None) -> dict[str, list[dict]]:
    """Group extracted citations by kind, as JSON-ready dicts."""
    citations = extract_citations(text)
    return {
        "statutes": [c.to_dict() for c in citations if c.kind == CitationKind.STATUTE],
        "citations": [c.to_dict() for c in citations if c.kind == CitationKind.CASE],
    }
