"""Exact-match dictionary search, with usage statistics per caller."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
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

logger = logging.getLogger(__name__)


def extract_base_word(query_word: str) -> tuple[str, str]:
    """Pick the word to search for and its lower-case, accent-free form.

    Leading articles are skipped and surrounding punctuation is trimmed.
    """
    for word in query_word.split(" "):
        cleaned = word.strip(_PUNCTUATION)
        if cleaned.startswith("-"):
            continue
        if cleaned not in _GREEK_PRONOUNS:
            return cleaned, remove_accents(cleaned.lower())
    return query_word, remove_accents(query_word.lower())


def build_query(word: str, language: str, normalized: bool, size: int) -> dict[str, Any]:
    """Build the index query for an exact or a normalized lookup."""
    if normalized:
        return {"query": {"match": {"normalized": word}}}
    keyword_field = f"{language}.keyword"
    return {
        "query": {
            "bool": {
                "should": [
                    {"prefix": {keyword_field: f"{word},"}},
                    {"term": {keyword_field: word}},
                ]
            }
        },
        "size": size,
    }


def _hit_list(response: Mapping[str, Any]) -> list[Any]:
    return (response.get("hits") or {}).get("hits") or []


class ExactService:
    """Searches the dictionary for an exact word, falling back to its plain form."""

    def __init__(self, elastic: ElasticClient, index: str, version: str = "") -> None:
        self.elastic = elastic
        self.index = index
        self.version = version
        self._lock = threading.Lock()
        self._total_requests = 0
        self._ip_counts: dict[str, int] = {}

    def health(self) -> HealthResponse:
        return HealthResponse(
            healthy=True,
            time=str(datetime.now()),
            version=self.version,
            database_health=database_health(self.elastic.health()),
        )

    def search(self, request: SearchQuery, peer: str | None = None) -> SearchResponse:
        """Look a word up; raise SearchError on bad input or a failing index."""
        base_word, stripped_word = extract_base_word(request.word)
        self.record_request(peer)

        language = language_field(request.language)
        size = request.number_of_results or DEFAULT_NUMBER_OF_RESULTS

        response = self._query(build_query(base_word, language, False, size))
        if not _hit_list(response):
            logger.debug("no hits found trying with a word without diacritics")
            response = self._query(build_query(stripped_word, language, True, size))

        results = decode_hits(response)
        return SearchResponse(
            results=results,
            page_info=PageInfo(page=1, size=len(results), total=hits_total(response)),
        )

    def _query(self, query: Mapping[str, Any]) -> Mapping[str, Any]:
        try:
            return self.elastic.match(self.index, query)
        except Exception as exc:
            raise SearchError(f"error querying elastic: {exc}") from exc

    def record_request(self, peer: str | None = None) -> None:
        """Count a request, and the caller's address when it is known."""
        with self._lock:
            self._total_requests += 1
            if peer:
                self._ip_counts[peer] = self._ip_counts.get(peer, 0) + 1

    def report(self) -> str | None:
        """Log and return the request statistics, or None when there were no requests."""
        with self._lock:
            total = self._total_requests
            counts = list(self._ip_counts.items())
        if total == 0:
            return None
        lines = [f"Service Stats (Last Minute) - Total Requests: {total}\nIP Breakdown:"]
        lines.extend(f"\n  - {ip}: {count}" for ip, count in counts)
        stats = "".join(lines)
        logger.info(stats)
        return stats