"""Canonical string rendering of parsed citations."""
from __future__ import annotations

from .grammar import STATUTE_TERMINOLOGY, Language, canonical_consideration_marker
from .models import CaseCitation, Citation, DoctrineCitation, StatuteCitation

# Statute markers are always rendered in their German spelling.
_CANONICAL_TERMS = STATUTE_TERMINOLOGY[Language.DE]


def normalize(citation: Citation) -> str:
    """Render ``citation`` in its single canonical form.

    BGE 145 III 229 E. 4.2 | Art. 8 Abs. 1 lit. a ZGB | GAUCH/SCHLUEP, OR AT, N 123
    """
    if isinstance(citation, CaseCitation):
        return _normalize_case(citation)
    if isinstance(citation, StatuteCitation):
        return _normalize_statute(citation)
    if isinstance(citation, DoctrineCitation):
        return _normalize_doctrine(citation)
    raise TypeError(f"Not a citation: {type(citation).__name__}")


def _normalize_case(c: CaseCitation) -> str:
    result = f"{c.prefix} {c.volume} {c.section} {c.page}"
    if c.consideration:
        marker = canonical_consideration_marker(c.consideration_marker or "E.")
        result += f" {marker} {c.consideration}"
    return result


def _normalize_statute(c: StatuteCitation) -> str:
    parts = [_CANONICAL_TERMS.article, str(c.article)]
    if c.paragraph is not None:
        parts += [_CANONICAL_TERMS.paragraph, str(c.paragraph)]
    if c.letter is not None:
        parts += [_CANONICAL_TERMS.letter, c.letter]
    if c.number is not None:
        parts += [_CANONICAL_TERMS.number, str(c.number)]
    parts.append(c.statute)
    return " ".join(parts)


def _normalize_doctrine(c: DoctrineCitation) -> str:
    result = f"{'/'.join(c.authors)}, {c.title}"
    if c.margin_number is not None:
        result += f", N {c.margin_number}"
    return result
