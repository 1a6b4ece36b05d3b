"""Partial dictionary search: matches a word against several fields at once."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from makedonia.search import (
    DEFAULT_NUMBER_OF_RESULTS,
    ElasticClient,
    HealthResponse,
    PageInfo,
    SearchError,
    SearchQuery,
    SearchResponse,
    database_health,
    decode_hits,
    hits_total,
    language_field,
    remove_accents,
)

DEFAULT_ADDRESS = "localhost:50060"

_GREEK_PRONOUNS = frozenset({"η", "ο", "το"})
_PUNCTUATION = ",.!?-"


def extract_base_word(query_word: str) -> str:
    """Return the first non-article word, lower-cased and without accents.

    When every word is an article the query is returned unchanged.
    """
    stripped = remove_accents(query_word.lower())
    for word in stripped.split(" "):
        cleaned = word.strip(_PUNCTUATION)
        if cleaned.startswith("-"):
            continue
        if cleaned not in _GREEK_PRONOUNS:
            return cleaned
    return query_word


def build_query(word: str, language: str, size: int) -> dict[str, Any]:
    """Build a multi-field query over the language field and the original text."""
    return {
        "query": {
            "multi_match": {
                "query": word,
                "type": "most_fields",
                "analyzer": "greek_analyzer",
                "fields": [language, "original"],
            }
        },
        "size": size,
    }


class PartialService:
    """Searches the dictionary for entries that partly match a word."""

    def __init__(self, elastic: ElasticClient, index: str, version: str = "") -> None:
        self.elastic = elastic
        self.index = index
        self.version = version

    def health(self) -> HealthResponse:
        return HealthResponse(
            healthy=True,
            time=str(datetime.now()),
            version=self.version,
            database_health=database_health(self.elastic.health()),
        )

    def search(self, request: SearchQuery) -> SearchResponse:
        """Run a partial search; raise SearchError on bad input or a failing index."""
        base_word = extract_base_word(request.word)
        size = request.number_of_results or DEFAULT_NUMBER_OF_RESULTS
        language = language_field(request.language)

        query = build_query(base_word, language, size)
        try:
            response = self.elastic.match(self.index, query)
        except Exception as exc:
            raise SearchError(f"error querying elastic: {exc}") from exc

        results = decode_hits(response)
        return SearchResponse(
            results=results,
            page_info=PageInfo(page=1, size=len(results), total=hits_total(response)),
        )