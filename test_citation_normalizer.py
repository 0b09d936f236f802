import pytest

from swiss_citations import CaseCitation, StatuteCitation, normalize, parse


@pytest.mark.parametrize(
    "raw",
    [
        "BGE 145 III 229",
        "bge  145 iii 229 e. 4.2",
        "ATF 130 IA 55 CONSID. 3",
        "DTF 140 v 1",
        "Art. 8 Abs. 1 lit. A ZGB",
        "art. 8 al. 1 let. b CC",
        "art. 97 cpv. 2 lett. c n. 3 CO",
        "Art. 41 stgb",
        "GAUCH/SCHLUEP, OR AT, Rz. 12",
    ],
)
def test_normalization_is_idempotent(raw):
    once = normalize(parse(raw).citation)
    assert normalize(parse(once).citation) == once


@pytest.mark.parametrize(
    "raw",
    [
        "BGE 145 III 229 E. 4.2",
        "ATF 145 III 229 consid. 4.2.1",
        "art. 8 al. 1 let. a CC",
        "Art. 50 Abs. 3 lit. b Ziff. 2 OR",
    ],
)
def test_round_trip(raw):
    first = parse(raw)
    assert parse(normalize(first.citation)).citation == first.citation


def test_whitespace_normalized():
    assert normalize(parse("BGE  145   III  229").citation) == "BGE 145 III 229"


def test_consideration_marker_tie_break():
    assert normalize(parse("BGE 145 III 229 e. 4").citation) == "BGE 145 III 229 E. 4"
    assert normalize(parse("BGE 145 III 229 Consid. 4").citation) == "BGE 145 III 229 consid. 4"


def test_statute_markers_render_in_german():
    citation = parse("art. 8 al. 1 let. a ch. 2 CC").citation
    assert normalize(citation) == "Art. 8 Abs. 1 lit. a Ziff. 2 CC"


def test_normalize_constructed_citations():
    assert normalize(CaseCitation(prefix="DTF", volume=140, section="V", page=1)) == "DTF 140 V 1"
    assert normalize(StatuteCitation(article=97, statute="OR", paragraph=1)) == "Art. 97 Abs. 1 OR"


def test_normalize_rejects_non_citations():
    with pytest.raises(TypeError):
        normalize("BGE 145 III 229")
