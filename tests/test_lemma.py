import pytest

from makedonia.lemma import (
    LemmaSource,
    LocalizedGloss,
    ModernConnection,
    NounInfo,
    lemma_from_source,
)


@pytest.fixture
def document():
    return {
        "id": "abc",
        "greek": "λόγος",
        "normalized": "λογος",
        "linkedWord": "λέγω",
        "partOfSpeech": "noun",
        "article": "ὁ",
        "gender": "masculine",
        "noun": {"declension": "second", "genitive": "λόγου"},
        "definitions": [
            {
                "grade": 3,
                "meanings": [
                    {"language": "en", "definition": "word", "notes": ["common"], "example": "ex"},
                    {"language": "nl", "definition": "woord"},
                ],
            }
        ],
        "modernConnections": [{"term": "logic", "note": "via Latin"}],
        "english": "word",
        "dutch": "woord",
    }


def test_from_dict_reads_camel_case_keys(document):
    source = LemmaSource.from_dict(document)
    assert source.linked_word == "λέγω"
    assert source.part_of_speech == "noun"
    assert source.modern_connections == [ModernConnection(term="logic", note="via Latin")]
    assert source.verb is None


def test_lemma_copies_fields(document):
    lemma = lemma_from_source(LemmaSource.from_dict(document))
    assert lemma.id == "abc"
    assert lemma.headword == "λόγος"
    assert lemma.normalized == "λογος"
    assert lemma.noun == NounInfo(declension="second", genitive="λόγου")
    assert lemma.verb is None
    assert lemma.modern_connections == [ModernConnection(term="logic", note="via Latin")]


def test_quick_glosses_order(document):
    lemma = lemma_from_source(LemmaSource.from_dict(document))
    assert lemma.quick_glosses == [
        LocalizedGloss(language="en", gloss="word"),
        LocalizedGloss(language="nl", gloss="woord"),
    ]


def test_quick_glosses_skip_empty():
    lemma = lemma_from_source(LemmaSource(greek="x", dutch="woord"))
    assert lemma.quick_glosses == [LocalizedGloss(language="nl", gloss="woord")]
    assert lemma_from_source(LemmaSource(greek="x")).quick_glosses == []


def test_definitions_preserved(document):
    lemma = lemma_from_source(LemmaSource.from_dict(document))
    assert len(lemma.definitions) == 1
    definition = lemma.definitions[0]
    assert definition.grade == 3
    assert [m.definition for m in definition.meanings] == ["word", "woord"]
    assert definition.meanings[0].notes == ["common"]
    assert definition.meanings[1].notes == []
    assert definition.meanings[1].example == ""


def test_verb_principal_parts():
    source = LemmaSource.from_dict({"greek": "λύω", "verb": {"principalParts": ["λύω", "λύσω"]}})
    lemma = lemma_from_source(source)
    assert lemma.verb.principal_parts == ["λύω", "λύσω"]
    assert lemma.noun is None


def test_missing_fields_default_empty():
    source = LemmaSource.from_dict({})
    assert source == LemmaSource()


@pytest.mark.parametrize(
    "bad",
    [
        {"greek": 5},
        {"definitions": [{"grade": "one"}]},
        {"definitions": [{"grade": 1.5}]},
        {"verb": {"principalParts": "λύω"}},
        {"noun": []},
    ],
)
def test_from_dict_rejects_wrong_types(bad):
    with pytest.raises(ValueError):
        LemmaSource.from_dict(bad)


def test_from_dict_rejects_non_object():
    with pytest.raises(ValueError):
        LemmaSource.from_dict(["greek"])