from swiss_citations import CitationKind, extract_citations, extract_references


def test_extract_case_and_statute_from_prose():
    text = "Vgl. BGE 147 I 268 E. 2.1 sowie Art. 8 Abs. 1 lit. a ZGB."
    found = extract_citations(text)
    assert [c.normalized for c in found] == [
        "BGE 147 I 268 E. 2.1",
        "Art. 8 Abs. 1 lit. a ZGB",
    ]
    assert [c.kind for c in found] == [CitationKind.CASE, CitationKind.STATUTE]


def test_offsets_point_into_normalized_text():
    text = "Vgl.   BGE 147 I 268."
    (hit,) = extract_citations(text)
    assert hit.raw == "BGE 147 I 268"
    assert "Vgl. BGE 147 I 268."[hit.start:hit.end] == hit.raw


def test_extract_statute_references_multilingual_markers():
    text = "Selon art. 8 al. 1 CEDH et Art. 3 cpv. 2 LPGA."
    normalized = {c.normalized for c in extract_citations(text)}
    assert normalized == {"Art. 8 Abs. 1 CEDH", "Art. 3 Abs. 2 LPGA"}


def test_extract_ignores_brackets_and_punctuation():
    text = "Die Rechtsprechung (BGE 145 III 229; ATF 140 II 1) gilt."
    normalized = [c.normalized for c in extract_citations(text)]
    assert normalized == ["BGE 145 III 229", "ATF 140 II 1"]


def test_extract_does_not_take_prose_words_as_law_codes():
    text = "Nach Art. 8 und Art. 34 Abs. 2 BV ist der Anspruch zu prüfen."
    normalized = [c.normalized for c in extract_citations(text)]
    assert normalized == ["Art. 34 Abs. 2 BV"]


def test_extract_deduplicates_by_normalized_form():
    text = "BGE 147 I 268 und bge 147 i 268, ferner BGE 147 I 268."
    found = extract_citations(text)
    assert len(found) == 1
    assert found[0].start == 0


def test_extract_skips_invalid_citations():
    text = "BGE 145 VII 229 ist kein gültiges Zitat, Art. 97 OR schon."
    normalized = [c.normalized for c in extract_citations(text)]
    assert normalized == ["Art. 97 OR"]


def test_extract_empty_text():
    assert extract_citations("") == []
    assert extract_citations(None) == []


def test_extract_references_grouped_schema():
    payload = extract_references("Art. 8 EMRK; BGE 147 I 268.")
    assert [s["normalized"] for s in payload["statutes"]] == ["Art. 8 EMRK"]
    assert [c["normalized"] for c in payload["citations"]] == ["BGE 147 I 268"]
    assert payload["citations"][0]["parsed"]["volume"] == 147
