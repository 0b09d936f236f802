from __future__ import annotations

import pytest

from swiss_citations import (
    CaseCitation,
    CitationKind,
    DoctrineCitation,
    ErrorCode,
    Language,
    StatuteCitation,
    parse,
    parse_citation,
)


def test_parse_case_citation_components():
    result = parse("BGE 145 III 229")
    assert result.success
    assert result.section == "III"
    assert result.volume == 145
    assert result.page == 229
    assert result.consideration is None
    assert result.language == Language.DE
    assert result.original == "BGE 145 III 229"


@pytest.mark.parametrize(
    "raw,section",
    [
        ("BGE 145 iii 229", "III"),
        ("BGE 130 ia 55", "Ia"),
        ("BGE 130 IA 55", "Ia"),
        ("BGE 140 v 1", "V"),
    ],
)
def test_parse_canonicalizes_section(raw, section):
    assert parse(raw).section == section


@pytest.mark.parametrize(
    "prefix,language",
    [("BGE", Language.DE), ("ATF", Language.FR), ("DTF", Language.IT), ("atf", Language.FR)],
)
def test_case_language_follows_prefix(prefix, language):
    result = parse(f"{prefix} 145 III 229")
    assert result.prefix == prefix.upper()
    assert result.language == language


def test_parse_consideration_with_french_marker():
    result = parse("ATF 145 III 229 consid. 4.2.1")
    assert result.consideration == "4.2.1"
    assert result.normalized == "ATF 145 III 229 consid. 4.2.1"


def test_consideration_marker_without_digits_is_dropped():
    result = parse("BGE 145 III 229 E.")
    assert result.success
    assert result.consideration is None
    assert result.normalized == "BGE 145 III 229"


def test_whitespace_is_tolerated():
    result = parse("  BGE \t145\n  III   229 ")
    assert result.normalized == "BGE 145 III 229"


def test_excess_structural_tokens_fail():
    result = parse("BGE 145 III 229 BGE")
    assert not result.success
    assert result.failure.code == ErrorCode.INVALID_BGE_FORMAT


def test_parse_statute_full():
    result = parse("Art. 8 Abs. 1 lit. a ZGB")
    assert result.citation == StatuteCitation(article=8, paragraph=1, letter="a", statute="ZGB")
    assert result.kind == CitationKind.STATUTE


def test_statute_letter_is_lowercased():
    assert parse("Art. 8 Abs. 1 lit. A ZGB").letter == "a"


def test_statute_with_number_component():
    result = parse("Art. 50 Abs. 3 lit. b Ziff. 2 OR")
    assert (result.article, result.paragraph, result.letter, result.number) == (50, 3, "b", 2)
    assert result.statute == "OR"


@pytest.mark.parametrize(
    "raw,language",
    [
        ("Art. 8 Abs. 1 ZGB", Language.DE),
        ("art. 8 al. 1 let. a CC", Language.FR),
        ("art. 8 cpv. 1 lett. a CC", Language.IT),
        ("art. 97 CO", Language.DE),
    ],
)
def test_statute_language_from_connector_words(raw, language):
    assert parse(raw).language == language


def test_statute_casing_follows_official_abbreviation():
    assert parse("Art. 41 stgb").statute == "StGB"
    assert parse("Art. 5 schkg").statute == "SchKG"
    assert parse("art. 9 cst").statute == "Cst"
    assert parse("Art. 3 abcg").statute == "ABCG"


def test_french_and_german_spellings_are_the_same_citation():
    assert parse("art. 8 al. 1 CC").citation == parse("Art. 8 Abs. 1 CC").citation


def test_statute_without_abbreviation_is_missing_statute():
    result = parse("Art. 97")
    assert not result.success
    assert result.failure.code == ErrorCode.MISSING_STATUTE


def test_statute_without_article_number_is_invalid():
    result = parse("Art. OR")
    assert result.failure.code == ErrorCode.INVALID_STATUTE_FORMAT


def test_invalid_section_reports_position():
    result = parse("BGE 145 VII 229")
    assert result.failure.code == ErrorCode.INVALID_SECTION
    assert result.failure.position == 8
    assert "VII" in result.error


def test_zero_volume_is_rejected():
    result = parse("BGE 0 III 229")
    assert result.failure.code == ErrorCode.INVALID_BGE_FORMAT
    assert result.failure.position == 4


def test_type_hint_is_not_reinterpreted():
    result = parse("BGE 145 III 229", kind_hint="statute")
    assert not result.success
    assert result.failure.code == ErrorCode.INVALID_STATUTE_FORMAT
    assert "statute" in result.error and "case" in result.error


def test_matching_type_hint_parses():
    assert parse("BGE 145 III 229", kind_hint=CitationKind.CASE).success
    assert parse("BGE 145 III 229", kind_hint="bge").success


def test_unknown_type_hint_raises():
    with pytest.raises(ValueError):
        parse("BGE 145 III 229", kind_hint="treaty")


def test_parse_doctrine_reference():
    result = parse("GAUCH/SCHLUEP, OR AT, N 123")
    assert isinstance(result.citation, DoctrineCitation)
    assert result.authors == ("GAUCH", "SCHLUEP")
    assert result.title == "OR AT"
    assert result.margin_number == 123
    assert result.normalized == "GAUCH/SCHLUEP, OR AT, N 123"


def test_doctrine_french_margin_marker():
    result = parse("TERCIER, Le droit des obligations, n. 45")
    assert result.language == Language.FR
    assert result.normalized == "TERCIER, Le droit des obligations, N 45"


@pytest.mark.parametrize("raw", ["", "   ", "\n\t"])
def test_empty_input(raw):
    result = parse(raw)
    assert result.failure.code == ErrorCode.EMPTY_CITATION
    assert result.kind is None


def test_unrecognized_input():
    result = parse("random text here")
    assert result.failure.code == ErrorCode.UNRECOGNIZED_FORMAT
    assert result.kind is None


@pytest.mark.parametrize(
    "raw",
    [
        "\x00\xff\x1b[0m" * 500,
        "BGE " * 10000,
        "Art. " * 10000,
        "A" * 100000,
        "BGE 1" + "0" * 5000 + " III 229",
        "Art. " + "9" * 5000 + " OR",
        "Ärzte/Öl, Übersicht" + ", N " + "1" * 2000,
        "BGE 145 III 229 E. " + ".".join(["1"] * 5000),
    ],
)
def test_parse_never_raises(raw):
    result = parse(raw)
    assert result.original == raw
    assert result.success or result.failure is not None


def test_parse_citation_shortcut():
    assert isinstance(parse_citation("BGE 145 III 229"), CaseCitation)
    assert parse_citation("BGE 145 VII 229") is None


def test_failed_result_has_no_partial_citation():
    result = parse("BGE 145 VII 229")
    assert result.citation is None
    assert result.normalized is None
    with pytest.raises(AttributeError):
        result.section


def test_parse_result_to_dict():
    payload = parse("BGE 145 III 229 E. 4.2").to_dict()
    assert payload["success"] is True
    assert payload["normalized"] == "BGE 145 III 229 E. 4.2"
    assert payload["parsed"] == {
        "type": "case",
        "prefix": "BGE",
        "volume": 145,
        "section": "III",
        "page": 229,
        "consideration": "4.2",
        "language": "de",
    }

    failed = parse("Art. 97").to_dict()
    assert failed["success"] is False
    assert failed["parsed"] is None
    assert failed["code"] == "MISSING_STATUTE"


def test_non_ascii_section_letters_are_rejected():
    # "ı".upper() == "I"
    result = parse("BGE 145 ıı 229")
    assert not result.success
    assert result.failure.code == ErrorCode.INVALID_BGE_FORMAT


def test_doctrine_author_starting_with_court_prefix():
    result = parse("ATF/TERCIER, Le droit, n. 4")
    assert result.kind == CitationKind.DOCTRINE
    assert result.authors == ("ATF", "TERCIER")
    assert result.margin_number == 4
