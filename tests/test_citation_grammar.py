from __future__ import annotations

import pytest
from pydantic import ValidationError

from swiss_citations.grammar import (
    SECTION_CODES,
    STATUTE_GROUPS,
    STATUTE_INDEX,
    CitationKind,
    FormatStyle,
    Language,
    canonical_consideration_marker,
    canonical_section,
    canonical_statute,
    is_valid_section,
)
from swiss_citations.matcher import (
    CASE_GRAMMAR,
    STATUTE_GRAMMAR,
    match,
    match_tokens,
    normalize_whitespace,
    sniff_kind,
    tokenize,
)
from swiss_citations.schemas import (
    ConvertCitationInput,
    ExtractCitationsInput,
    FormatCitationInput,
    ParseCitationInput,
)


# ── grammar tables ────────────────────────────────────────────


def test_section_codes_are_closed():
    assert SECTION_CODES == ("I", "Ia", "II", "III", "IV", "V", "VI")
    assert not is_valid_section("VII")
    assert is_valid_section("ia")
    assert not is_valid_section("ıı")


@pytest.mark.parametrize("raw,expected", [("ia", "Ia"), ("IA", "Ia"), ("iv", "IV"), ("vii", "VII")])
def test_canonical_section(raw, expected):
    assert canonical_section(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [("E.", "E."), ("e.", "E."), ("consid.", "consid."), ("CONSID.", "consid.")],
)
def test_canonical_consideration_marker(raw, expected):
    assert canonical_consideration_marker(raw) == expected


def test_canonical_statute_casing():
    assert canonical_statute("STGB") == "StGB"
    assert canonical_statute("crimpc") == "CrimPC"
    assert canonical_statute("foo") == "FOO"


def test_every_statute_group_covers_all_languages():
    for group in STATUTE_GROUPS:
        assert set(group) == set(Language)
        for abbreviation in group.values():
            assert STATUTE_INDEX[abbreviation.upper()] is group


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        STATUTE_INDEX["XYZ"] = STATUTE_GROUPS[0]


# ── matcher ───────────────────────────────────────────────────


def test_normalize_whitespace():
    assert normalize_whitespace("  BGE\t145 \n III  229  ") == "BGE 145 III 229"


def test_tokenize_offsets():
    tokens = tokenize("Art. 97 OR")
    assert [(t.text, t.start, t.end) for t in tokens] == [("Art.", 0, 4), ("97", 5, 7), ("OR", 8, 10)]


def test_match_case_slots():
    m = match("BGE 145 III 229 E. 4.2", CitationKind.CASE)
    assert m.get("volume") == "145"
    assert m.get("consideration") == "4.2"
    assert m.markers["consideration"] == "E."
    assert m.position("page") == 12


def test_loose_case_match_accepts_any_section_letters():
    assert match("BGE 145 VII 229", CitationKind.CASE) is None
    loose = match("BGE 145 VII 229", CitationKind.CASE, loose=True)
    assert loose.get("section") == "VII"
    assert loose.position("section") == 8


def test_statute_pairs_need_marker_and_value():
    m = match_tokens(tokenize("Art. 8 lit. a ZGB"), STATUTE_GRAMMAR)
    assert m.get("letter") == "a"
    assert m.get("paragraph") is None
    assert m.get("statute") == "ZGB"


def test_structural_word_is_not_a_law_code():
    m = match("Art. 8 Abs.", CitationKind.STATUTE)
    assert m is not None
    assert m.get("statute") is None
    assert m.get("paragraph") is None


def test_components_out_of_order_do_not_match():
    assert match("Art. 8 lit. a Abs. 1 ZGB", CitationKind.STATUTE) is None


def test_all_tokens_must_be_consumed():
    assert match_tokens(tokenize("BGE 145 III 229 extra"), CASE_GRAMMAR) is None


@pytest.mark.parametrize(
    "text,kind",
    [
        ("BGE 145 III 229", CitationKind.CASE),
        ("atf 145 III 229", CitationKind.CASE),
        ("BGE145III229", CitationKind.CASE),
        ("art. 97 OR", CitationKind.STATUTE),
        ("GAUCH/SCHLUEP, OR AT, N 123", CitationKind.DOCTRINE),
        ("Atfield road", None),
        ("ATF/TERCIER, Le droit, n. 4", CitationKind.DOCTRINE),
        ("BGE", CitationKind.CASE),
        ("random text here", None),
    ],
)
def test_sniff_kind(text, kind):
    assert sniff_kind(text) == kind


# ── tool-boundary schemas ─────────────────────────────────────


def test_parse_input_accepts_alias_and_legacy_type():
    args = ParseCitationInput.model_validate({"citation": "BGE 145 III 229", "citationType": "bge"})
    assert args.citation_type == CitationKind.CASE


def test_parse_input_rejects_unknown_type():
    with pytest.raises(ValidationError):
        ParseCitationInput.model_validate({"citation": "x", "citationType": "treaty"})


def test_parse_input_requires_citation():
    with pytest.raises(ValidationError):
        ParseCitationInput.model_validate({"citation": ""})


def test_format_input_defaults_and_case_folding():
    args = FormatCitationInput.model_validate({"citation": "x", "targetLanguage": "FR"})
    assert args.target_language == Language.FR
    assert args.style == FormatStyle.FULL


def test_convert_input_optional_fields():
    args = ConvertCitationInput.model_validate({"citation": "x", "toFormat": "statute"})
    assert args.to_format == CitationKind.STATUTE
    assert args.from_format is None
    assert args.target_language is None


def test_extract_input_group():
    assert ExtractCitationsInput.model_validate({"text": ""}).group == "flat"
    with pytest.raises(ValidationError):
        ExtractCitationsInput.model_validate({"text": "", "group": "nested"})


def test_convert_input_case_folds_language():
    args = ConvertCitationInput.model_validate({"citation": "x", "toFormat": "case", "targetLanguage": "IT"})
    assert args.target_language == Language.IT
