"""Dictionary entries: the stored document form and the form returned to callers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r}: expected a string, got {type(value).__name__}")
    return value


def _strings(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"field {key!r}: expected a list, got {type(value).__name__}")
    result = []
    for item in value:
        if item is None:
            result.append("")
        elif isinstance(item, str):
            result.append(item)
        else:
            raise ValueError(f"field {key!r}: expected strings, got {type(item).__name__}")
    return result


def _object(value: Any, key: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"field {key!r}: expected an object, got {type(value).__name__}")
    return value


def _objects(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"field {key!r}: expected a list, got {type(value).__name__}")
    return [_object(item, key) for item in value]


def _integer(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r}: expected an integer, got {value!r}")
    return value


def _int32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


@dataclass
class Meaning:
    language: str = ""
    definition: str = ""
    notes: list[str] = field(default_factory=list)
    example: str = ""

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> Meaning:
        return cls(
            language=_string(data, "language"),
            definition=_string(data, "definition"),
            notes=_strings(data, "notes"),
            example=_string(data, "example"),
        )


@dataclass
class Definition:
    grade: int = 0
    meanings: list[Meaning] = field(default_factory=list)

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> Definition:
        return cls(
            grade=_integer(data, "grade"),
            meanings=[Meaning._from_dict(m) for m in _objects(data, "meanings")],
        )


@dataclass
class Noun:
    declension: str = ""
    genitive: str = ""


@dataclass
class Verb:
    principal_parts: list[str] = field(default_factory=list)


@dataclass
class ModernConnection:
    term: str = ""
    note: str = ""


@dataclass
class LemmaSource:
    """A dictionary entry as stored in the search index."""

    id: str = ""
    greek: str = ""
    normalized: str = ""
    linked_word: str = ""
    part_of_speech: str = ""
    article: str = ""
    gender: str = ""
    noun: Noun | None = None
    verb: Verb | None = None
    definitions: list[Definition] = field(default_factory=list)
    modern_connections: list[ModernConnection] = field(default_factory=list)
    english: str = ""
    dutch: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LemmaSource:
        """Build an entry from its stored JSON object; raise ValueError on bad types."""
        if not isinstance(data, Mapping):
            raise ValueError(f"expected an object, got {type(data).__name__}")

        noun = None
        if data.get("noun") is not None:
            raw = _object(data["noun"], "noun")
            noun = Noun(declension=_string(raw, "declension"), genitive=_string(raw, "genitive"))

        verb = None
        if data.get("verb") is not None:
            raw = _object(data["verb"], "verb")
            verb = Verb(principal_parts=_strings(raw, "principalParts"))

        return cls(
            id=_string(data, "id"),
            greek=_string(data, "greek"),
            normalized=_string(data, "normalized"),
            linked_word=_string(data, "linkedWord"),
            part_of_speech=_string(data, "partOfSpeech"),
            article=_string(data, "article"),
            gender=_string(data, "gender"),
            noun=noun,
            verb=verb,
            definitions=[Definition._from_dict(d) for d in _objects(data, "definitions")],
            modern_connections=[
                ModernConnection(term=_string(mc, "term"), note=_string(mc, "note"))
                for mc in _objects(data, "modernConnections")
            ],
            english=_string(data, "english"),
            dutch=_string(data, "dutch"),
        )


@dataclass
class LocalizedGloss:
    language: str = ""
    gloss: str = ""


@dataclass
class NounInfo:
    declension: str = ""
    genitive: str = ""


@dataclass
class VerbInfo:
    principal_parts: list[str] = field(default_factory=list)


@dataclass
class LemmaMeaning:
    language: str = ""
    definition: str = ""
    notes: list[str] = field(default_factory=list)
    example: str = ""


@dataclass
class LemmaDefinition:
    grade: int = 0
    meanings: list[LemmaMeaning] = field(default_factory=list)


@dataclass
class Lemma:
    """A dictionary entry as returned by the search services."""

    id: str = ""
    headword: str = ""
    normalized: str = ""
    linked_word: str = ""
    part_of_speech: str = ""
    article: str = ""
    gender: str = ""
    noun: NounInfo | None = None
    verb: VerbInfo | None = None
    quick_glosses: list[LocalizedGloss] = field(default_factory=list)
    definitions: list[LemmaDefinition] = field(default_factory=list)
    modern_connections: list[ModernConnection] = field(default_factory=list)


def lemma_from_source(source: LemmaSource) -> Lemma:
    """Convert a stored entry into the public lemma form."""
    quick = []
    if source.english:
        quick.append(LocalizedGloss(language="en", gloss=source.english))
    if source.dutch:
        quick.append(LocalizedGloss(language="nl", gloss=source.dutch))

    noun = None
    if source.noun is not None:
        noun = NounInfo(declension=source.noun.declension, genitive=source.noun.genitive)

    verb = None
    if source.verb is not None:
        verb = VerbInfo(principal_parts=list(source.verb.principal_parts))

    definitions = [
        LemmaDefinition(
            grade=_int32(d.grade),
            meanings=[
                LemmaMeaning(
                    language=m.language,
                    definition=m.definition,
                    notes=list(m.notes),
                    example=m.example,
                )
                for m in d.meanings
            ],
        )
        for d in source.definitions
    ]

    return Lemma(
        id=source.id,
        headword=source.greek,
        normalized=source.normalized,
        linked_word=source.linked_word,
        part_of_speech=source.part_of_speech,
        article=source.article,
        gender=source.gender,
        noun=noun,
        verb=verb,
        quick_glosses=quick,
        definitions=definitions,
        modern_connections=[
            ModernConnection(term=mc.term, note=mc.note) for mc in source.modern_connections
        ],
    )