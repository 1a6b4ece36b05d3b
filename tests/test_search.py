import pytest

from makedonia.lemma import LocalizedGloss
from makedonia.search import (
    DatabaseHealth,
    Language,
    SearchError,
    database_health,
    decode_hits,
    hits_total,
    language_field,
    remove_accents,
)


@pytest.mark.parametrize(
    "language, expected",
    [
        (Language.LANG_GREEK, "greek"),
        (Language.LANG_ENGLISH, "english"),
        (Language.LANG_DUTCH, "dutch"),
    ],
)
def test_language_field(language, expected):
    assert language_field(language) == expected


@pytest.mark.parametrize("language", [Language.LANG_UNSPECIFIED, 42])
def test_language_field_unsupported(language):
    with pytest.raises(SearchError, match="unsupported language"):
        language_field(language)


def test_remove_accents_greek():
    assert remove_accents("λόγος") == "λογος"


def test_remove_accents_plain_text_unchanged():
    assert remove_accents("logos") == "logos"


def test_remove_accents_idempotent():
    once = remove_accents("ἀνήρ ὁδός")
    assert remove_accents(once) == once
    assert len(once) == len("ἀνήρ ὁδός")


def test_hits_total_with_hits():
    response = {"hits": {"total": {"value": 7}, "hits": []}}
    assert hits_total(response) == 7


def test_hits_total_without_hit_list():
    assert hits_total({"hits": {"total": {"value": 7}}}) == 0
    assert hits_total({}) == 0


def test_decode_hits():
    response = {
        "hits": {
            "total": {"value": 2},
            "hits": [
                {"_source": {"greek": "λόγος", "english": "word"}},
                {"_source": {"greek": "ἀνήρ"}},
            ],
        }
    }
    lemmas = decode_hits(response)
    assert [lemma.headword for lemma in lemmas] == ["λόγος", "ἀνήρ"]
    assert lemmas[0].quick_glosses == [LocalizedGloss(language="en", gloss="word")]


def test_decode_hits_empty():
    assert decode_hits({"hits": {"hits": None}}) == []


def test_decode_hits_bad_source():
    response = {"hits": {"hits": [{"_source": {"greek": 12}}]}}
    with pytest.raises(SearchError, match="decode _source"):
        decode_hits(response)


def test_database_health():
    info = {
        "healthy": True,
        "cluster_name": "cluster",
        "server_name": "node",
        "server_version": "9",
    }
    assert database_health(info) == DatabaseHealth(
        healthy=True, cluster_name="cluster", server_name="node", server_version="9"
    )