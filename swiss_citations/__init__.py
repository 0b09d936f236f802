"""
Swiss legal citation engine.

This package provides:
- parsing of BGE/ATF/DTF decisions and statute provisions (DE/FR/IT)
- validation with diagnostics and suggested fixes
- canonical normalization
- cross-language formatting and conversion
- extraction of citations from running text
"""

from .extraction import extract_citations, extract_references
from .formatter import convert_citation, format_citation
from .grammar import CitationKind, FormatStyle, Language
from .models import (
    CaseCitation,
    Citation,
    Diagnostic,
    DoctrineCitation,
    ErrorCode,
    ParseResult,
    StatuteCitation,
    ValidationResult,
)
from .normalizer import normalize
from .parser import parse, parse_citation
from .validator import validate

__all__ = [
    "CaseCitation",
    "Citation",
    "CitationKind",
    "Diagnostic",
    "DoctrineCitation",
    "ErrorCode",
    "FormatStyle",
    "Language",
    "ParseResult",
    "StatuteCitation",
    "ValidationResult",
    "convert_citation",
    "extract_citations",
    "extract_references",
    "format_citation",
    "normalize",
    "parse",
    "parse_citation",
    "validate",
]
