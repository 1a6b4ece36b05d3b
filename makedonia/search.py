"""Types and helpers shared by the dictionary search services."""

from __future__ import annotations

import enum
import unicodedata
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from makedonia.lemma import Lemma, LemmaSource, lemma_from_source

DEFAULT_NUMBER_OF_RESULTS = 5


class SearchError(Exception):
    """Raised when a search cannot be carried out."""


class Language(enum.IntEnum):
    LANG_UNSPECIFIED = 0
    LANG_GREEK = 1
    LANG_ENGLISH = 2
    LANG_DUTCH = 3


_FIELDS = {
    Language.LANG_GREEK: "greek",
    Language.LANG_ENGLISH: "english",
    Language.LANG_DUTCH: "dutch",
}


@dataclass
class SearchQuery:
    word: str = ""
    language: Language = Language.LANG_UNSPECIFIED
    number_of_results: int = 0


@dataclass
class PageInfo:
    page: int = 1
    size: int = 0
    total: int = 0


@dataclass
class SearchResponse:
    results: list[Lemma] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=PageInfo)


@dataclass
class DatabaseHealth:
    healthy: bool = False
    cluster_name: str = ""
    server_name: str = ""
    server_version: str = ""


@dataclass
class HealthResponse:
    healthy: bool = True
    time: str = ""
    version: str = ""
    database_health: DatabaseHealth | None = None


class ElasticClient(Protocol):
    """The parts of a search-index client the services rely on."""

    def match(self, index: str, query: Mapping[str, Any]) -> Mapping[str, Any]:
        """Run a query against an index and return the raw response."""
        ...

    def health(self) -> Mapping[str, Any]:
        """Return cluster health information."""
        ...


def language_field(language: Language | int) -> str:
    """Return the index field that holds words of the given language."""
    try:
        member = Language(language)
    except ValueError:
        raise SearchError(f"unsupported language: {language}") from None
    try:
        return _FIELDS[member]
    except KeyError:
        raise SearchError(f"unsupported language: {member.name}") from None


def remove_accents(text: str) -> str:
    """Strip diacritics, leaving the base letters."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def _hits(response: Mapping[str, Any]) -> Mapping[str, Any]:
    return response.get("hits") or {}


def hits_total(response: Mapping[str, Any]) -> int:
    """Total hit count of a response, or 0 when it carries no hit list."""
    hits = _hits(response)
    if hits.get("hits") is None:
        return 0
    total = hits.get("total") or {}
    return int(total.get("value", 0))


def decode_hits(response: Mapping[str, Any]) -> list[Lemma]:
    """Turn the documents of a response into lemmas."""
    lemmas = []
    for hit in _hits(response).get("hits") or []:
        source = hit.get("_source")
        try:
            lemmas.append(lemma_from_source(LemmaSource.from_dict(source or {})))
        except ValueError as exc:
            raise SearchError(f"decode _source: {exc}") from exc
    return lemmas


def database_health(info: Mapping[str, Any]) -> DatabaseHealth:
    """Build database health from the index client's health information."""
    return DatabaseHealth(
        healthy=bool(info.get("healthy", False)),
        cluster_name=info.get("cluster_name", ""),
        server_name=info.get("server_name", ""),
        server_version=info.get("server_version", ""),
    )