"""In-memory word usage counter, global and per session."""

from __future__ import annotations

import os
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

_TOP = 5
_VERSION_ENV = "VERSION"


def _utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _rfc3339(ts: datetime) -> str:
    ts = _utc(ts)
    text = ts.strftime("%Y-%m-%dT%H:%M:%S")
    if ts.microsecond:
        text += "." + f"{ts.microsecond:06d}".rstrip("0")
    return text + "Z"


@dataclass
class Counter:
    count: int
    last_used: datetime


@dataclass
class TopFive:
    service_name: str = ""
    word: str = ""
    last_used: str = ""
    count: int = 0


@dataclass
class CountCreationRequest:
    session_id: str = ""
    service_name: str = ""
    word: str = ""


@dataclass
class CounterHealth:
    healthy: bool
    time: str
    version: str


def _top_five(rows: list[tuple[str, str, int, datetime]]) -> list[TopFive]:
    ranked = sorted(rows, key=lambda row: (row[2], row[3]), reverse=True)
    return [
        TopFive(service_name=service, word=word, last_used=_rfc3339(last_used), count=count)
        for service, word, count, last_used in ranked[:_TOP]
    ]


class Store:
    """Thread-safe counters keyed by (service, word) and (session, service, word)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._global: dict[tuple[str, str], Counter] = {}
        self._session: dict[tuple[str, str, str], Counter] = {}

    def inc(self, session_id: str, service: str, word: str, ts: datetime) -> None:
        """Count one use of a word, both globally and for the session."""
        ts = _utc(ts)
        with self._lock:
            for table, key in (
                (self._global, (service, word)),
                (self._session, (session_id, service, word)),
            ):
                counter = table.get(key)
                if counter is None:
                    table[key] = Counter(count=1, last_used=ts)
                else:
                    counter.count += 1
                    if ts > counter.last_used:
                        counter.last_used = ts

    def top_five_global(self) -> list[TopFive]:
        with self._lock:
            rows = [(s, w, c.count, c.last_used) for (s, w), c in self._global.items()]
        return _top_five(rows)

    def top_five_by_service(self, service: str) -> list[TopFive]:
        with self._lock:
            rows = [
                (s, w, c.count, c.last_used)
                for (s, w), c in self._global.items()
                if s == service
            ]
        return _top_five(rows)

    def top_five_for_session(self, session: str) -> list[TopFive]:
        with self._lock:
            rows = [
                (s, w, c.count, c.last_used)
                for (sess, s, w), c in self._session.items()
                if sess == session
            ]
        return _top_five(rows)


class CounterService:
    """The counting service: records word usage and reports the most used words."""

    def __init__(self, version: str = "", store: Store | None = None) -> None:
        self.version = version
        self.store = store if store is not None else Store()

    def health(self) -> CounterHealth:
        return CounterHealth(healthy=True, time=str(datetime.now()), version=self.version)

    def create_new_entry(
        self, request_sets: Iterable[Iterable[CountCreationRequest]]
    ) -> str:
        """Consume a stream of request sets, counting every request; return the ack."""
        for request_set in request_sets:
            now = datetime.now(timezone.utc)
            for request in request_set:
                self.store.inc(request.session_id, request.service_name, request.word, now)
        return "Received"

    def retrieve_top_five(self) -> list[TopFive]:
        return self.store.top_five_global()

    def retrieve_top_five_service(self, name: str) -> TopFive:
        """Return the most used word of a service, or an empty entry."""
        top = self.store.top_five_by_service(name)
        return top[0] if top else TopFive()

    def retrieve_top_five_for_session(self, session_id: str) -> list[TopFive]:
        return self.store.top_five_for_session(session_id)


def create_counter_service(environ: Mapping[str, str] | None = None) -> CounterService:
    """Create the service, reading its version from the environment."""
    env = os.environ if environ is None else environ
    return CounterService(version=env.get(_VERSION_ENV, ""))