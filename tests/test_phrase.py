import pytest

from makedonia.phrase import PhraseService, build_query, extract_base_word
from makedonia.search import Language, SearchError, SearchQuery


class FakeElastic:
    def __init__(self, responses=()):
        self.responses = list(responses)
        self.queries = []

    def match(self, index, query):
        self.queries.append((index, query))
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def health(self):
        return {"healthy": False, "cluster_name": "c", "server_name": "s", "server_version": "v"}


def response(*sources):
    return {
        "hits": {
            "total": {"value": len(sources)},
            "hits": [{"_source": s} for s in sources],
        }
    }


def test_extract_strips_article_and_accents():
    assert extract_base_word("ὁ λόγος") == "λογος"


def test_extract_trims_punctuation_and_lowers():
    assert extract_base_word("Hello!") == "hello"


def test_extract_only_article_returns_input():
    assert extract_base_word("ὁ") == "ὁ"


def test_build_query():
    assert build_query("house", "english", 3) == {
        "query": {"match_phrase": {"english": "house"}},
        "size": 3,
    }


def test_search_builds_phrase_query():
    elastic = FakeElastic([response({"greek": "οἶκος", "english": "house"})])
    service = PhraseService(elastic, "dictionary")
    result = service.search(SearchQuery(word="House", language=Language.LANG_ENGLISH))
    index, query = elastic.queries[0]
    assert index == "dictionary"
    assert query == build_query("house", "english", 5)
    assert result.results[0].headword == "οἶκος"
    assert result.results[0].quick_glosses[0].gloss == "house"
    assert result.page_info.total == 1
    assert result.page_info.size == 1


def test_search_keeps_requested_size():
    elastic = FakeElastic([response()])
    service = PhraseService(elastic, "dictionary")
    result = service.search(
        SearchQuery(word="huis", language=Language.LANG_DUTCH, number_of_results=2)
    )
    assert elastic.queries[0][1]["size"] == 2
    assert result.results == []
    assert result.page_info.total == 0


def test_search_unsupported_language():
    service = PhraseService(FakeElastic(), "dictionary")
    with pytest.raises(SearchError):
        service.search(SearchQuery(word="word", language=Language.LANG_UNSPECIFIED))


def test_search_index_failure():
    service = PhraseService(FakeElastic([RuntimeError("down")]), "dictionary")
    with pytest.raises(SearchError, match="error querying elastic"):
        service.search(SearchQuery(word="word", language=Language.LANG_GREEK))


def test_health():
    service = PhraseService(FakeElastic(), "dictionary", version="v2")
    health = service.health()
    assert health.healthy is True
    assert health.version == "v2"
    assert health.database_health.healthy is False