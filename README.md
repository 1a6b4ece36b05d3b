# makedonia

A library for looking up words in an Ancient Greek dictionary held in a search
index. It also keeps count of which words people look up.

It has no dependencies outside the standard library.

## Modules

- `makedonia.lemma` holds the dictionary entry in two forms. `LemmaSource` is
  the entry as stored in the index; `LemmaSource.from_dict` builds it from the
  stored JSON object and raises `ValueError` when a field has the wrong type.
  `Lemma` is the entry as returned to callers. `lemma_from_source` converts the
  first into the second. The `english` and `dutch` fields become
  `quick_glosses`, tagged `"en"` and `"nl"`.
- `makedonia.search` holds what the search services share: `Language`,
  `SearchQuery`, `SearchResponse`, `PageInfo`, `HealthResponse`,
  `DatabaseHealth` and `SearchError`. It also defines the `ElasticClient`
  protocol, which a search backend must provide, and the helpers
  `language_field`, `remove_accents`, `hits_total`, `decode_hits` and
  `database_health`.
- `makedonia.exact` provides `ExactService`, which looks up an exact headword
  on the `<language>.keyword` field. When nothing matches, it searches again on
  the `normalized` field with the lower-case form without accents. It also
  counts requests in total and per peer address. `report()` logs those counts
  and returns them as text, or returns `None` when there were no requests.
  `extract_base_word` skips the articles `η`, `ο` and `το` and trims
  punctuation. `build_query` builds the index query.
- `makedonia.phrase` provides `PhraseService`, which runs a `match_phrase`
  query on the language field.
- `makedonia.partial` provides `PartialService`, which runs a `most_fields`
  `multi_match` query over the language field and `original`, using
  `greek_analyzer`.
- `makedonia.extended` provides `ExtendedService`, which asks a text analyser
  where a root word occurs in texts. Each answer is cached for ten minutes
  (`CACHE_TTL`). `current_request_id` takes the request id from the call
  context, or failing that from the incoming metadata.
- `makedonia.counter` provides `Store` and `CounterService`. They count each
  use of a word both overall and per session, and report the five most used
  words. `create_counter_service` reads the service version from the `VERSION`
  environment variable.

For the exact, phrase and partial services, the default number of results is
5. `SearchError` is raised when the language is unsupported, when the index
query fails, or when a stored document cannot be decoded.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Searching

The search services need an object that has `match(index, query)` and
`health()`. Both return plain mappings shaped like a search-index response.

```python
from makedonia.exact import ExactService
from makedonia.search import Language, SearchQuery


class Index:
    def match(self, index, query):
        return {
            "hits": {
                "total": {"value": 1},
                "hits": [{"_source": {"greek": "λόγος", "english": "word"}}],
            }
        }

    def health(self):
        return {"healthy": True, "cluster_name": "local"}


service = ExactService(Index(), "dictionary", version="1.0")
response = service.search(SearchQuery(word="λόγος", language=Language.LANG_GREEK))
lemma = response.results[0]
print(lemma.headword, lemma.quick_glosses[0].gloss)  # λόγος word
print(response.page_info.total)                      # 1
```

`PhraseService` and `PartialService` take the same constructor arguments and
have the same `search(request)` and `health()` methods.

Removing accents:

```python
from makedonia.search import remove_accents

remove_accents("λόγος")  # "λογος"
```

## Extended search

`ExtendedService(analyzer, cache)` needs two objects:

- an analyser whose `analyze(body, request_id)` returns an `AnalyzerReply`
  (a status code and a JSON body) or `None`;
- a cache with `read(key)` and `set_with_ttl(key, value, ttl)`.

`search(word, context=None, metadata=None)` returns an
`ExtendedSearchResponse`. If the cache already holds the word, the cached
answer is returned. A cache entry that is not valid JSON raises `ValueError`.
`ExtendedSearchResponse.to_dict` and `from_dict` convert to and from the JSON
form kept in the cache.

## Counting words

```python
from datetime import datetime, timezone

from makedonia.counter import Store

store = Store()
now = datetime.now(timezone.utc)
store.inc("session-1", "dictionary", "λόγος", now)
store.inc("session-1", "dictionary", "λόγος", now)
store.inc("session-2", "dictionary", "θεός", now)

for entry in store.top_five_global():
    print(entry.word, entry.count)
```

Top-five lists are ordered by count, highest first. Equal counts are ordered by
most recent use, and each list holds at most five entries. `last_used` is an
RFC 3339 UTC timestamp.

`CounterService.create_new_entry` takes an iterable of request sets, each an
iterable of `CountCreationRequest`. It counts every request and returns
`"Received"`. `retrieve_top_five_service(name)` returns only the top entry for
that service, or an empty `TopFive` when the service has no entries.

## What this package does not do

This is a library, not a set of running services. It has no network server, no
command to start one and no remote client. It does not include a search-index
client, a text analyser or a cache store. You pass those in as objects with the
methods described above. The counters live only in memory.