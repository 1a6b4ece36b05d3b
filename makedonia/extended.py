"""Extended search: finds where a word appears in texts, with a short-lived cache."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Protocol

from makedonia.search import HealthResponse

DEFAULT_ADDRESS = "localhost:50060"
DEFAULT_TRACING_NAME = "tracing"
DEFAULT_HEADER_KEY = "x-request-id"
CACHE_TTL = timedelta(minutes=10)

logger = logging.getLogger(__name__)


@dataclass
class AnalyzerReply:
    """A reply from the text analyser: an HTTP status and a JSON body."""

    status_code: int
    body: bytes


class TextAnalyzer(Protocol):
    def analyze(self, body: bytes, request_id: str) -> AnalyzerReply | None:
        """Send an analysis request and return the reply, if any."""
        ...


class Cache(Protocol):
    def read(self, key: str) -> bytes | None:
        """Return the cached value for a key, or None."""
        ...

    def set_with_ttl(self, key: str, value: str, ttl: timedelta) -> None:
        """Store a value that expires after ttl."""
        ...


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _list(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    return value if isinstance(value, list) else []


def _map(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _prune(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v not in ("", [], None, {})}


@dataclass
class Conjugation:
    word: str = ""
    rule: str = ""


@dataclass
class Rhema:
    greek: str = ""
    translations: list[str] = field(default_factory=list)
    section: str = ""


@dataclass
class AnalyzeResult:
    reference_link: str = ""
    author: str = ""
    book: str = ""
    reference: str = ""
    text: Rhema | None = None


@dataclass
class AnalyzeTextResponse:
    rootword: str = ""
    part_of_speech: str = ""
    conjugations: list[Conjugation] = field(default_factory=list)
    texts: list[AnalyzeResult] = field(default_factory=list)


def _rhema_to_dict(rhema: Rhema | None) -> dict[str, Any] | None:
    if rhema is None:
        return None
    return _prune(
        {"greek": rhema.greek, "translations": list(rhema.translations), "section": rhema.section}
    )


@dataclass
class ExtendedSearchResponse:
    found_in_text: AnalyzeTextResponse | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form used for caching; empty fields are left out."""
        found = self.found_in_text
        if found is None:
            return {}
        texts = [
            _prune(
                {
                    "reference_link": t.reference_link,
                    "author": t.author,
                    "book": t.book,
                    "reference": t.reference,
                    "text": _rhema_to_dict(t.text),
                }
            )
            for t in found.texts
        ]
        conjugations = [_prune({"word": c.word, "rule": c.rule}) for c in found.conjugations]
        return {
            "found_in_text": _prune(
                {
                    "rootword": found.rootword,
                    "part_of_speech": found.part_of_speech,
                    "conjugations": conjugations,
                    "texts": texts,
                }
            )
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ExtendedSearchResponse:
        """Build a response from its JSON form."""
        data = _map(data)
        if data.get("found_in_text") is None:
            return cls()
        found = _map(data["found_in_text"])
        texts = []
        for raw in _list(found, "texts"):
            raw = _map(raw)
            text = None
            if raw.get("text") is not None:
                rt = _map(raw["text"])
                text = Rhema(
                    greek=_str(rt, "greek"),
                    translations=[str(t) for t in _list(rt, "translations")],
                    section=_str(rt, "section"),
                )
            texts.append(
                AnalyzeResult(
                    reference_link=_str(raw, "reference_link"),
                    author=_str(raw, "author"),
                    book=_str(raw, "book"),
                    reference=_str(raw, "reference"),
                    text=text,
                )
            )
        conjugations = [
            Conjugation(word=_str(_map(c), "word"), rule=_str(_map(c), "rule"))
            for c in _list(found, "conjugations")
        ]
        return cls(
            found_in_text=AnalyzeTextResponse(
                rootword=_str(found, "rootword"),
                part_of_speech=_str(found, "part_of_speech"),
                conjugations=conjugations,
                texts=texts,
            )
        )


def _from_analyzer(payload: Mapping[str, Any]) -> AnalyzeTextResponse:
    texts = []
    for raw in _list(payload, "results"):
        raw = _map(raw)
        rt = _map(raw.get("text"))
        texts.append(
            AnalyzeResult(
                reference_link=_str(raw, "referenceLink"),
                author=_str(raw, "author"),
                book=_str(raw, "book"),
                reference=_str(raw, "reference"),
                text=Rhema(
                    greek=_str(rt, "greek"),
                    translations=[str(t) for t in _list(rt, "translations")],
                    section=_str(rt, "section"),
                ),
            )
        )
    conjugations = [
        Conjugation(word=_str(_map(c), "word"), rule=_str(_map(c), "rule"))
        for c in _list(payload, "conjugations")
    ]
    return AnalyzeTextResponse(
        rootword=_str(payload, "rootword"),
        part_of_speech=_str(payload, "partOfSpeech"),
        conjugations=conjugations,
        texts=texts,
    )


def current_request_id(
    context: Mapping[Any, Any] | None,
    metadata: Mapping[str, Any] | None,
    ctx_key: Any = DEFAULT_TRACING_NAME,
    header_key: str = DEFAULT_HEADER_KEY,
) -> str:
    """Find the request id in the call context, then in the incoming metadata."""
    if context:
        value = context.get(ctx_key)
        if isinstance(value, str) and value:
            return value
    if metadata:
        wanted = header_key.lower()
        for key, values in metadata.items():
            if key.lower() != wanted:
                continue
            if isinstance(values, str):
                return values
            if isinstance(values, Sequence) and values:
                return values[0]
    return ""


class ExtendedService:
    """Looks up the texts a word occurs in, caching each answer for ten minutes."""

    def __init__(
        self,
        analyzer: TextAnalyzer,
        cache: Cache,
        version: str = "",
        ctx_key: Any = DEFAULT_TRACING_NAME,
        header_key: str = DEFAULT_HEADER_KEY,
    ) -> None:
        self.analyzer = analyzer
        self.cache = cache
        self.version = version
        self.ctx_key = ctx_key
        self.header_key = header_key

    def health(self) -> HealthResponse:
        return HealthResponse(
            healthy=True, time=str(datetime.now()), version=self.version, database_health=None
        )

    def search(
        self,
        word: str,
        context: Mapping[Any, Any] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> ExtendedSearchResponse:
        """Return the texts a word occurs in; a corrupt cache entry raises ValueError."""
        request_id = current_request_id(context, metadata, self.ctx_key, self.header_key)

        try:
            cached = self.cache.read(word)
        except Exception:
            cached = None
        if cached is not None:
            result = ExtendedSearchResponse.from_dict(json.loads(cached))
            found = result.found_in_text
            logger.debug(
                "found in cache: %s number of results: %d",
                word,
                len(found.texts) if found else 0,
            )
            return result

        body = json.dumps({"rootword": word}).encode("utf-8")
        try:
            reply = self.analyzer.analyze(body, request_id)
        except Exception as exc:
            logger.error("analysis request failed: %s", exc)
            reply = None

        result = ExtendedSearchResponse()
        if reply is not None:
            try:
                payload = _map(json.loads(reply.body))
            except (ValueError, TypeError) as exc:
                logger.error("error while decoding: %s", exc)
                payload = {}
            result.found_in_text = _from_analyzer(payload)

        try:
            self.cache.set_with_ttl(word, json.dumps(result.to_dict()), CACHE_TTL)
        except Exception as exc:
            logger.error("%s", exc)

        found = result.found_in_text
        logger.debug(
            "found in analyser: %s number of results: %d", word, len(found.texts) if found else 0
        )
        return result