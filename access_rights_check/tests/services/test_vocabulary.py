import json
import threading
import time

import pytest
import requests

from access_rights_check.clients import DocumentFetcher, TransportError
from access_rights_check.config import Settings
from access_rights_check.services import (
    DEFAULT_ACCESS_TERMS,
    VocabularyCache,
    VocabularySource,
    parse_vocabulary,
)


def test_fetches_terms_once_and_caches(fake_fetcher, make_vocabulary):
    fetcher = fake_fetcher(vocabulary=make_vocabulary(" Open ", "Restricted", "Embargoed"))
    cache = VocabularyCache(fetcher)

    first = cache.approved_terms()
    second = cache.get_or_populate()

    assert first == {"Open", "Restricted", "Embargoed"}
    assert second is first
    assert fetcher.vocabulary_calls == 1
    assert cache.source is VocabularySource.REMOTE
    assert cache.is_populated


def test_empty_cache_reports_no_source():
    cache = VocabularyCache(settings=Settings())
    assert not cache.is_populated
    assert cache.source is None


@pytest.mark.parametrize(
    "failure",
    [
        TransportError("Failed to fetch document: HTTP 503"),
        TransportError("Request failed: connection refused"),
        b"{not json",
        b'{"versions": [{"concepts": []}]}',
        b'{"versions": []}',
        b"[]",
    ],
)
def test_failures_fall_back_to_defaults_and_are_cached(fake_fetcher, failure):
    fetcher = fake_fetcher(vocabulary=failure)
    cache = VocabularyCache(fetcher)

    assert cache.approved_terms() == {"Open", "Restricted"}
    assert cache.approved_terms() == {"Open", "Restricted"}
    assert fetcher.vocabulary_calls == 1
    assert cache.source is VocabularySource.DEFAULT


def test_non_success_status_through_real_fetcher(fake_session, fake_response):
    session = fake_session([fake_response(500, b"oops")])
    cache = VocabularyCache(DocumentFetcher(Settings(), session=session))

    assert cache.approved_terms() == DEFAULT_ACCESS_TERMS
    assert cache.approved_terms() == DEFAULT_ACCESS_TERMS
    assert len(session.calls) == 1


def test_timeout_through_real_fetcher(fake_session):
    session = fake_session([requests.Timeout("read timed out")])
    cache = VocabularyCache(DocumentFetcher(Settings(), session=session))

    assert cache.approved_terms() == DEFAULT_ACCESS_TERMS
    assert cache.source is VocabularySource.DEFAULT


def test_failure_is_logged_at_error(fake_fetcher, caplog):
    cache = VocabularyCache(fake_fetcher(vocabulary=TransportError("HTTP 404")))
    with caplog.at_level("INFO", logger="access_rights_check.services.vocabulary"):
        cache.approved_terms()

    errors = [record for record in caplog.records if record.levelname == "ERROR"]
    assert errors
    assert "HTTP 404" in errors[0].getMessage()


def test_configured_defaults_are_used(fake_fetcher):
    settings = Settings(default_access_terms=["Open", " Closed "])
    cache = VocabularyCache(
        fake_fetcher(vocabulary=TransportError("down"), settings=settings)
    )
    assert cache.approved_terms() == {"Open", "Closed"}


def test_concurrent_first_use_fetches_once(fake_fetcher, make_vocabulary):
    fetcher = fake_fetcher(
        vocabulary=make_vocabulary("Open", "Restricted", "Embargoed"),
        on_vocabulary=lambda: time.sleep(0.05),
    )
    cache = VocabularyCache(fetcher)
    start = threading.Barrier(8)
    results = []
    results_lock = threading.Lock()

    def worker():
        start.wait()
        terms = cache.approved_terms()
        with results_lock:
            results.append(terms)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert fetcher.vocabulary_calls == 1
    assert len(results) == 8
    assert all(terms == {"Open", "Restricted", "Embargoed"} for terms in results)


def test_interrupted_fetch_releases_lock_and_keeps_cache_empty(fake_fetcher, make_vocabulary):
    fetcher = fake_fetcher(vocabulary=KeyboardInterrupt())
    cache = VocabularyCache(fetcher)

    with pytest.raises(KeyboardInterrupt):
        cache.approved_terms()

    assert not cache.is_populated
    assert not cache._lock.locked()

    fetcher.vocabulary = make_vocabulary("Open")
    assert cache.approved_terms() == {"Open"}


def test_preloaded_cache_never_fetches():
    cache = VocabularyCache.preloaded(["Open", " Restricted "])
    assert cache.approved_terms() == {"Open", "Restricted"}
    assert cache.source is VocabularySource.REMOTE


def test_preloaded_cache_requires_terms():
    with pytest.raises(ValueError):
        VocabularyCache.preloaded(["", "  "])


def test_parse_vocabulary_reads_first_version_only():
    payload = json.dumps(
        {
            "versions": [
                {
                    "concepts": [
                        {"title": "Open"},
                        {"title": "  "},
                        {"title": None},
                        {"title": 3},
                        {"notation": "Restricted"},
                        "Restricted",
                    ]
                },
                {"concepts": [{"title": "Restricted"}]},
            ]
        }
    )
    assert parse_vocabulary(payload) == {"Open"}


@pytest.mark.parametrize(
    "payload",
    [
        "{}",
        '{"versions": {}}',
        '{"versions": ["x"]}',
        '{"versions": [{"concepts": {"title": "Open"}}]}',
    ],
)
def test_parse_vocabulary_tolerates_unexpected_shapes(payload):
    assert parse_vocabulary(payload) == set()
