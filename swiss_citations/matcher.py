"""
Token-sequence matcher for citation grammars.

Each citation kind is described as an explicit sequence: required slots,
then optional (marker, value) pairs, then an optional trailing slot. The
matcher walks whitespace-separated tokens against that description and
returns the raw text and offset of every slot it filled. It does not
convert or validate values; the parser does that.

All offsets refer to the whitespace-normalized string.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from .grammar import (
    ARTICLE_MARKERS,
    CONSIDERATION_MARKERS,
    LETTER_MARKERS,
    NUMBER_MARKERS,
    PARAGRAPH_MARKERS,
    PREFIX_LANGUAGE,
    STRUCTURAL_WORDS,
    CitationKind,
    is_valid_section,
)

_WHITESPACE_RE = re.compile(r"\s+")
_TOKEN_RE = re.compile(r"\S+")

_DIGITS_RE = re.compile(r"[0-9]{1,9}")
_DOTTED_RE = re.compile(r"[0-9]+(?:\.[0-9]+)*")
_LETTERS_RE = re.compile(r"[A-Za-z]+")
_LETTER_RE = re.compile(r"[A-Za-z]")
_LAW_CODE_RE = re.compile(r"[A-Za-z]{2,10}\.?")

# Prefix followed by a space, a digit or nothing; "ATF/TERCIER, ..." is doctrine.
_CASE_SNIFF_RE = re.compile(r"(?:BGE|ATF|DTF)(?=[ 0-9]|$)", re.IGNORECASE)
_STATUTE_SNIFF_RE = re.compile(r"Art\.", re.IGNORECASE)

# GAUCH/SCHLUEP/SCHMID, OR AT, N 123
DOCTRINE_PATTERN = re.compile(
    r"""
    (?P<authors>[A-ZÄÖÜÉÈ][A-ZÄÖÜÉÈa-zäöüéèàç-]*(?:/[A-ZÄÖÜÉÈ][A-ZÄÖÜÉÈa-zäöüéèàç-]*)*)
    ,\s*
    (?P<title>.+?)
    (?:,\s*(?P<marker>N|Rz\.?|n\.?)\s*(?P<margin>[0-9]{1,9}))?
    """,
    flags=re.VERBOSE,
)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and trim both ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


@dataclass(frozen=True)
class Token:
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def tokenize(text: str) -> list[Token]:
    return [Token(m.group(0), m.start()) for m in _TOKEN_RE.finditer(text)]


# ── Grammar description ───────────────────────────────────────


@dataclass(frozen=True)
class Slot:
    name: str
    accepts: Callable[[str], bool]


@dataclass(frozen=True)
class Pair:
    """An optional component introduced by a marker word, e.g. ``Abs. 2``."""

    name: str
    markers: frozenset[str]  # lower-cased marker literals
    accepts: Callable[[str], bool]


@dataclass(frozen=True)
class Grammar:
    kind: CitationKind
    required: tuple[Slot, ...]
    optional: tuple[Pair, ...] = ()
    trailing: Optional[Slot] = None


@dataclass(frozen=True)
class Match:
    kind: CitationKind
    slots: Mapping[str, Token] = field(default_factory=dict)
    # Pair name -> marker literal exactly as it appeared in the input.
    markers: Mapping[str, str] = field(default_factory=dict)

    def get(self, name: str) -> Optional[str]:
        token = self.slots.get(name)
        return token.text if token else None

    def position(self, name: str) -> Optional[int]:
        token = self.slots.get(name)
        return token.start if token else None


def _full(pattern: re.Pattern) -> Callable[[str], bool]:
    return lambda value: pattern.fullmatch(value) is not None


def _one_of(values) -> Callable[[str], bool]:
    return lambda value: value.lower() in values


def _is_law_code(value: str) -> bool:
    return (
        _LAW_CODE_RE.fullmatch(value) is not None
        and value.rstrip(".").upper() not in STRUCTURAL_WORDS
    )


_PREFIXES = frozenset(p.lower() for p in PREFIX_LANGUAGE)
_CONSIDERATION = Pair("consideration", CONSIDERATION_MARKERS, _full(_DOTTED_RE))

CASE_GRAMMAR = Grammar(
    kind=CitationKind.CASE,
    required=(
        Slot("prefix", _one_of(_PREFIXES)),
        Slot("volume", _full(_DIGITS_RE)),
        Slot("section", is_valid_section),
        Slot("page", _full(_DIGITS_RE)),
    ),
    optional=(_CONSIDERATION,),
)

# Same shape, any letters as section: tells "bad section" from "not a BGE".
CASE_GRAMMAR_LOOSE = Grammar(
    kind=CitationKind.CASE,
    required=(
        Slot("prefix", _one_of(_PREFIXES)),
        Slot("volume", _full(_DIGITS_RE)),
        Slot("section", _full(_LETTERS_RE)),
        Slot("page", _full(_DIGITS_RE)),
    ),
    optional=(_CONSIDERATION,),
)

STATUTE_GRAMMAR = Grammar(
    kind=CitationKind.STATUTE,
    required=(
        Slot("article_marker", _one_of(ARTICLE_MARKERS)),
        Slot("article", _full(_DIGITS_RE)),
    ),
    optional=(
        Pair("paragraph", frozenset(PARAGRAPH_MARKERS), _full(_DIGITS_RE)),
        Pair("letter", frozenset(LETTER_MARKERS), _full(_LETTER_RE)),
        Pair("number", frozenset(NUMBER_MARKERS), _full(_DIGITS_RE)),
    ),
    trailing=Slot("statute", _is_law_code),
)


def match_tokens(tokens: list[Token], grammar: Grammar) -> Optional[Match]:
    """Match ``tokens`` against ``grammar``; every token must be consumed."""
    slots: dict[str, Token] = {}
    markers: dict[str, str] = {}
    i = 0

    for slot in grammar.required:
        if i >= len(tokens) or not slot.accepts(tokens[i].text):
            return None
        slots[slot.name] = tokens[i]
        i += 1

    for pair in grammar.optional:
        if i >= len(tokens) or tokens[i].text.lower() not in pair.markers:
            continue
        if i + 1 < len(tokens) and pair.accepts(tokens[i + 1].text):
            markers[pair.name] = tokens[i].text
            slots[pair.name] = tokens[i + 1]
            i += 2
        elif i + 1 == len(tokens):
            # Marker at the very end with nothing after it: not present.
            i += 1

    if grammar.trailing and i < len(tokens) and grammar.trailing.accepts(tokens[i].text):
        slots[grammar.trailing.name] = tokens[i]
        i += 1

    if i != len(tokens):
        return None
    return Match(kind=grammar.kind, slots=slots, markers=markers)


def _match_doctrine(text: str) -> Optional[Match]:
    m = DOCTRINE_PATTERN.fullmatch(text)
    if not m:
        return None
    slots = {
        name: Token(m.group(name), m.start(name))
        for name in ("authors", "title", "margin")
        if m.group(name) is not None
    }
    markers = {"margin": m.group("marker")} if m.group("marker") else {}
    return Match(kind=CitationKind.DOCTRINE, slots=slots, markers=markers)


def match(text: str, kind: CitationKind, *, loose: bool = False) -> Optional[Match]:
    """Match whitespace-normalized ``text`` against the grammar for ``kind``.

    ``loose`` only changes case citations (any letters accepted as section).
    """
    if kind == CitationKind.DOCTRINE:
        return _match_doctrine(text)
    if kind == CitationKind.CASE:
        grammar = CASE_GRAMMAR_LOOSE if loose else CASE_GRAMMAR
    elif kind == CitationKind.STATUTE:
        grammar = STATUTE_GRAMMAR
    else:
        raise ValueError(f"Unknown citation kind: {kind!r}")
    return match_tokens(tokenize(text), grammar)


def sniff_kind(text: str) -> Optional[CitationKind]:
    """Guess the citation kind from the leading text alone."""
    if _CASE_SNIFF_RE.match(text):
        return CitationKind.CASE
    if _STATUTE_SNIFF_RE.match(text):
        return CitationKind.STATUTE
    if DOCTRINE_PATTERN.fullmatch(text):
        return CitationKind.DOCTRINE
    return None
