"""
Canonical tables for Swiss legal citations.

Holds the closed vocabularies the matcher, normalizer and formatter share:
- court prefixes (BGE/ATF/DTF) and the language each one implies
- the seven BGE section codes
- statute connector words per language (Art./Abs./lit./Ziff. and friends)
- statute abbreviation casing and cross-language equivalence groups

Everything here is built once at import and never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class Language(str, Enum):
    DE = "de"
    FR = "fr"
    IT = "it"
    EN = "en"


class CitationKind(str, Enum):
    CASE = "case"
    STATUTE = "statute"
    DOCTRINE = "doctrine"


class FormatStyle(str, Enum):
    FULL = "full"
    SHORT = "short"
    INLINE = "inline"


# Legacy tool vocabulary used "bge" for case citations.
KIND_ALIASES = MappingProxyType({
    "case": CitationKind.CASE,
    "bge": CitationKind.CASE,
    "statute": CitationKind.STATUTE,
    "doctrine": CitationKind.DOCTRINE,
})


# ── Federal Supreme Court decisions ───────────────────────────

SECTION_CODES = ("I", "Ia", "II", "III", "IV", "V", "VI")

PREFIX_LANGUAGE = MappingProxyType({
    "BGE": Language.DE,
    "ATF": Language.FR,
    "DTF": Language.IT,
})

# English has no prefix of its own; the German collection name is used.
PREFIX_BY_LANGUAGE = MappingProxyType({
    Language.DE: "BGE",
    Language.FR: "ATF",
    Language.IT: "DTF",
    Language.EN: "BGE",
})

CONSIDERATION_MARKERS = frozenset({"e.", "consid."})

CONSIDERATION_MARKER_BY_LANGUAGE = MappingProxyType({
    Language.DE: "E.",
    Language.FR: "consid.",
    Language.IT: "consid.",
    Language.EN: "consid.",
})


def canonical_section(raw: str) -> str:
    """'IA'/'ia'/'Ia' -> 'Ia', everything else uppercased."""
    upper = raw.upper()
    return "Ia" if upper == "IA" else upper


def is_valid_section(raw: str) -> bool:
    # ASCII only: "ıı".upper() == "II"
    return raw.isascii() and canonical_section(raw) in SECTION_CODES


def canonical_consideration_marker(raw: str) -> str:
    return "consid." if "consid" in raw.lower() else "E."


# ── Statutes ──────────────────────────────────────────────────

ARTICLE_MARKERS = frozenset({"art."})

# Connector words by language, matched case-insensitively on input.
PARAGRAPH_MARKERS = MappingProxyType({"abs.": Language.DE, "al.": Language.FR, "cpv.": Language.IT})
LETTER_MARKERS = MappingProxyType({"lit.": Language.DE, "let.": Language.FR, "lett.": Language.IT})
NUMBER_MARKERS = MappingProxyType({"ziff.": Language.DE, "ch.": Language.FR, "n.": Language.IT})


@dataclass(frozen=True)
class StatuteTerms:
    article: str
    paragraph: str
    letter: str
    number: str


STATUTE_TERMINOLOGY = MappingProxyType({
    Language.DE: StatuteTerms("Art.", "Abs.", "lit.", "Ziff."),
    Language.FR: StatuteTerms("art.", "al.", "let.", "ch."),
    Language.IT: StatuteTerms("art.", "cpv.", "lett.", "n."),
    Language.EN: StatuteTerms("Art.", "para.", "let.", "no."),
})

# Words that look like a law code but are structural markers.
STRUCTURAL_WORDS = frozenset({
    "ART", "ABS", "ABSATZ", "AL", "ALIN", "ALINEA", "CPV", "PARA",
    "LIT", "LET", "LETT", "ZIFF", "ZIFFER", "CH", "BST", "SATZ",
    "BIS", "TER", "QUATER", "FF", "SS", "SEGG",
})

# Upper-cased abbreviation -> official casing. Unknown codes are uppercased.
_STATUTE_CASING = {
    # German
    "OR": "OR", "ZGB": "ZGB", "STGB": "StGB", "BV": "BV", "ZPO": "ZPO",
    "STPO": "StPO", "UWG": "UWG", "DSG": "DSG", "SCHKG": "SchKG",
    "IPRG": "IPRG", "BGG": "BGG", "VWVG": "VwVG", "ASYLG": "AsylG",
    "AIG": "AIG", "ATSG": "ATSG", "EMRK": "EMRK", "URG": "URG",
    # French
    "CO": "CO", "CC": "CC", "CP": "CP", "CST": "Cst", "CPC": "CPC",
    "CPP": "CPP", "LP": "LP", "LDIP": "LDIP", "LTF": "LTF", "LPD": "LPD",
    "LCD": "LCD", "CEDH": "CEDH", "LPGA": "LPGA",
    # Italian
    "COST": "Cost", "LEF": "LEF", "CEDU": "CEDU",
    # English
    "SCC": "SCC", "FC": "FC", "CRIMPC": "CrimPC", "DEBA": "DEBA",
    "FSCA": "FSCA", "PILA": "PILA", "FADP": "FADP", "UCA": "UCA",
    "ECHR": "ECHR",
}
STATUTE_CASING = MappingProxyType(_STATUTE_CASING)


def canonical_statute(raw: str) -> str:
    upper = raw.upper()
    return STATUTE_CASING.get(upper, upper)


# One entry per statute: its abbreviation in each language.
STATUTE_GROUPS = (
    # Code of Obligations
    MappingProxyType({Language.DE: "OR", Language.FR: "CO", Language.IT: "CO", Language.EN: "CO"}),
    # Civil Code
    MappingProxyType({Language.DE: "ZGB", Language.FR: "CC", Language.IT: "CC", Language.EN: "CC"}),
    # Criminal Code
    MappingProxyType({Language.DE: "StGB", Language.FR: "CP", Language.IT: "CP", Language.EN: "SCC"}),
    # Federal Constitution
    MappingProxyType({Language.DE: "BV", Language.FR: "Cst", Language.IT: "Cost", Language.EN: "FC"}),
    # Civil Procedure Code
    MappingProxyType({Language.DE: "ZPO", Language.FR: "CPC", Language.IT: "CPC", Language.EN: "CPC"}),
    # Criminal Procedure Code
    MappingProxyType({Language.DE: "StPO", Language.FR: "CPP", Language.IT: "CPP", Language.EN: "CrimPC"}),
    # Debt Enforcement and Bankruptcy Act
    MappingProxyType({Language.DE: "SchKG", Language.FR: "LP", Language.IT: "LEF", Language.EN: "DEBA"}),
    # Federal Supreme Court Act
    MappingProxyType({Language.DE: "BGG", Language.FR: "LTF", Language.IT: "LTF", Language.EN: "FSCA"}),
    # Private International Law Act
    MappingProxyType({Language.DE: "IPRG", Language.FR: "LDIP", Language.IT: "LDIP", Language.EN: "PILA"}),
    # Data Protection Act
    MappingProxyType({Language.DE: "DSG", Language.FR: "LPD", Language.IT: "LPD", Language.EN: "FADP"}),
    # Unfair Competition Act
    MappingProxyType({Language.DE: "UWG", Language.FR: "LCD", Language.IT: "LCD", Language.EN: "UCA"}),
    # European Convention on Human Rights
    MappingProxyType({Language.DE: "EMRK", Language.FR: "CEDH", Language.IT: "CEDU", Language.EN: "ECHR"}),
)


def _build_statute_index() -> MappingProxyType:
    index = {}
    for group in STATUTE_GROUPS:
        for abbreviation in group.values():
            key = abbreviation.upper()
            if key in index and index[key] is not group:
                raise ValueError(f"Statute abbreviation {abbreviation} belongs to two groups")
            index[key] = group
    return MappingProxyType(index)


# Upper-cased abbreviation in any language -> its equivalence group.
STATUTE_INDEX = _build_statute_index()


def translate_statute(statute: str, language: Language) -> str:
    """Return the abbreviation of the same statute in ``language``.

    Abbreviations outside every known group pass through unchanged.
    """
    group = STATUTE_INDEX.get(statute.upper())
    if group is None:
        return statute
    return group[language]
