"""
Value types produced by the citation engine.

Citations are a closed set of frozen dataclasses (case, statute, doctrine).
Parse, validation, format and conversion results are plain records with a
``to_dict()`` that is safe to hand to ``json.dumps``.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union

from .grammar import PREFIX_LANGUAGE, CitationKind, FormatStyle, Language


class ErrorCode(str, Enum):
    EMPTY_CITATION = "EMPTY_CITATION"
    UNRECOGNIZED_FORMAT = "UNRECOGNIZED_FORMAT"
    INVALID_BGE_FORMAT = "INVALID_BGE_FORMAT"
    INVALID_STATUTE_FORMAT = "INVALID_STATUTE_FORMAT"
    INVALID_SECTION = "INVALID_SECTION"
    MISSING_STATUTE = "MISSING_STATUTE"


def _jsonable(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


# ============================================================
# Citations
# ============================================================


@dataclass(frozen=True)
class CaseCitation:
    """A published Federal Supreme Court decision, e.g. ``BGE 145 III 229 E. 4.2``."""

    kind: ClassVar[CitationKind] = CitationKind.CASE

    prefix: str  # BGE | ATF | DTF
    volume: int
    section: str  # I, Ia, II, III, IV, V, VI
    page: int
    consideration: Optional[str] = None  # "4.2.1"
    # Spelling of the marker that introduced the consideration ("E." | "consid.").
    consideration_marker: Optional[str] = field(default=None, compare=False)

    @property
    def language(self) -> Language:
        return PREFIX_LANGUAGE[self.prefix]

    def to_dict(self) -> dict:
        data = {"type": self.kind.value, **asdict(self), "language": self.language.value}
        data.pop("consideration_marker")
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class StatuteCitation:
    """A statutory provision, e.g. ``Art. 8 Abs. 1 lit. a ZGB``.

    ``language`` records which connector words matched on input. It is not
    part of the citation's identity: the German and French spellings of the
    same provision compare equal.
    """

    kind: ClassVar[CitationKind] = CitationKind.STATUTE

    article: int
    statute: str
    paragraph: Optional[int] = None
    letter: Optional[str] = None
    number: Optional[int] = None
    language: Language = field(default=Language.DE, compare=False)

    def to_dict(self) -> dict:
        data = {"type": self.kind.value, **_jsonable(asdict(self))}
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class DoctrineCitation:
    """A commentary or textbook reference, e.g. ``GAUCH/SCHLUEP, OR AT, N 123``."""

    kind: ClassVar[CitationKind] = CitationKind.DOCTRINE

    authors: tuple[str, ...]
    title: str
    margin_number: Optional[int] = None
    language: Language = field(default=Language.DE, compare=False)

    def to_dict(self) -> dict:
        data = {"type": self.kind.value, **_jsonable(asdict(self))}
        return {k: v for k, v in data.items() if v is not None}


Citation = Union[CaseCitation, StatuteCitation, DoctrineCitation]


# ============================================================
# Results
# ============================================================


@dataclass(frozen=True)
class ParseFailure:
    code: ErrorCode
    message: str
    position: Optional[int] = None


@dataclass(frozen=True)
class ParseResult:
    original: str
    citation: Optional[Citation] = None
    normalized: Optional[str] = None
    failure: Optional[ParseFailure] = None
    # Kind that was hinted or sniffed, also set on failure when known.
    kind: Optional[CitationKind] = None

    @property
    def success(self) -> bool:
        return self.citation is not None

    @property
    def error(self) -> Optional[str]:
        return self.failure.message if self.failure else None

    def __getattr__(self, name: str):
        # parse(x).section etc. read through to the parsed citation.
        citation = self.__dict__.get("citation")
        if name.startswith("_") or citation is None:
            raise AttributeError(name)
        return getattr(citation, name)

    def to_dict(self) -> dict:
        data = {
            "success": self.success,
            "parsed": self.citation.to_dict() if self.citation else None,
            "original": self.original,
            "normalized": self.normalized,
        }
        if self.failure:
            data["error"] = self.failure.message
            data["code"] = self.failure.code.value
        return data


@dataclass(frozen=True)
class Diagnostic:
    code: ErrorCode
    message: str
    position: Optional[int] = None

    def to_dict(self) -> dict:
        data = {"code": self.code.value, "message": self.message}
        if self.position is not None:
            data["position"] = self.position
        return data


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    kind: Optional[CitationKind]
    diagnostics: tuple[Diagnostic, ...] = ()
    normalized: Optional[str] = None
    suggestions: Optional[tuple[str, ...]] = None

    def to_dict(self) -> dict:
        data = {
            "valid": self.valid,
            "citationType": self.kind.value if self.kind else None,
            "errors": [d.to_dict() for d in self.diagnostics],
        }
        if self.normalized is not None:
            data["normalized"] = self.normalized
        if self.suggestions is not None:
            data["suggestions"] = list(self.suggestions)
        return data


@dataclass(frozen=True)
class FormatResult:
    success: bool
    formatted: Optional[str]
    original: str
    target_language: Union[Language, str]  # raw value when unsupported
    style: Union[FormatStyle, str]
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "success": self.success,
            "formatted": self.formatted,
            "original": self.original,
            "targetLanguage": _jsonable(self.target_language),
            "style": _jsonable(self.style),
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class ConversionResult:
    success: bool
    converted: Optional[str]
    original: str
    from_kind: Optional[CitationKind]
    to_kind: CitationKind
    target_language: Union[Language, str]
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "success": self.success,
            "converted": self.converted,
            "original": self.original,
            "fromFormat": self.from_kind.value if self.from_kind else None,
            "toFormat": self.to_kind.value,
            "targetLanguage": _jsonable(self.target_language),
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class ExtractedCitation:
    raw: str
    start: int  # offset into the whitespace-normalized text
    end: int
    citation: Citation
    normalized: str

    @property
    def kind(self) -> CitationKind:
        return self.citation.kind

    def to_dict(self) -> dict:
        return {
            "raw": self.raw,
            "start": self.start,
            "end": self.end,
            "type": self.kind.value,
            "normalized": self.normalized,
            "parsed": self.citation.to_dict(),
        }
