"""
Citation validation with actionable diagnostics.

Wraps the parser: a successful parse is a valid citation with its canonical
form; a failed parse becomes a Diagnostic plus advisory suggestions drawn from
a fixed list of known mistakes.
"""
from __future__ import annotations

import re
from typing import Optional, Union

from .grammar import CitationKind
from .matcher import normalize_whitespace
from .models import Diagnostic, ErrorCode, ValidationResult
from .parser import coerce_kind, parse

# (pattern, applies to, suggestion). Patterns run against the normalized text
# unless marked raw; they are hints only and never change validity.
_SUGGESTIONS = [
    (
        re.compile(r"^(?:BGE|ATF|DTF) [0-9]+ (?:I|Ia|II|III|IV|V|VI)$", re.IGNORECASE),
        "normalized",
        "BGE citation appears to be missing page number. Format: BGE [volume] [section] [page]",
    ),
    (
        re.compile(r"^Art\. [0-9]+$", re.IGNORECASE),
        "normalized",
        "Statute citation is missing the statute abbreviation. Example: Art. 97 OR",
    ),
    (
        re.compile(r"(?:BGE|ATF|DTF)[0-9]+|Art\.[0-9]+", re.IGNORECASE),
        "raw",
        "Add spaces between components of the citation",
    ),
]


def suggest(raw_text: str) -> list[str]:
    """Known-mistake hints for ``raw_text``."""
    normalized = normalize_whitespace(raw_text)
    if not normalized:
        return ["Please provide a valid citation string"]
    suggestions = []
    for pattern, target, hint in _SUGGESTIONS:
        subject = raw_text if target == "raw" else normalized
        if pattern.search(subject):
            suggestions.append(hint)
    return suggestions


def validate(
    raw_text: str,
    kind_hint: Union[CitationKind, str, None] = None,
) -> ValidationResult:
    """Validate a citation and explain what is wrong with it.

    The kind is reported whenever it was hinted or could be sniffed, so
    ``validate("BGE 145 VII 229")`` is an invalid *case* citation.
    """
    hint: Optional[CitationKind] = coerce_kind(kind_hint)
    result = parse(raw_text, hint)

    if result.success:
        return ValidationResult(
            valid=True,
            kind=result.citation.kind,
            normalized=result.normalized,
        )

    failure = result.failure
    diagnostic = Diagnostic(code=failure.code, message=failure.message, position=failure.position)
    kind = result.kind
    if failure.code in (ErrorCode.EMPTY_CITATION, ErrorCode.UNRECOGNIZED_FORMAT) and hint is None:
        kind = None

    return ValidationResult(
        valid=False,
        kind=kind,
        diagnostics=(diagnostic,),
        suggestions=tuple(suggest(raw_text)),
    )


def is_valid(raw_text: str, kind_hint: Union[CitationKind, str, None] = None) -> bool:
    return validate(raw_text, kind_hint).valid
