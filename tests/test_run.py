import asyncio

import pytest

from conftest import FakeSource, transient
from transcriptly.components.sources import FetchConfig
from transcriptly.errors import FetchError, InvalidInputError, RetrievalFailedError
from transcriptly.run import TranscriptRetriever, backoff_delay


def make_retriever(cache, sleep, primary, fallback, config=None):
    return TranscriptRetriever(
        config=config or FetchConfig(),
        cache=cache,
        primary=primary,
        fallback=fallback,
        sleep=sleep,
    )


def test_backoff_delays():
    assert [backoff_delay(k) for k in (1, 2, 3)] == [0.0, 1.0, 2.0]


def test_primary_success_is_cached(cache, sleep):
    primary = FakeSource("structured", ["hello world"])
    fallback = FakeSource("raw_scrape", [])
    retriever = make_retriever(cache, sleep, primary, fallback)

    result = asyncio.run(retriever.retrieve("https://youtu.be/dQw4w9WgXcQ", "en"))

    assert result.text == "hello world"
    assert result.video_id == "dQw4w9WgXcQ"
    assert result.language == "en"
    assert result.char_count == len("hello world")
    assert result.source == "structured"
    assert sleep.delays == []
    assert cache.lookup("dQw4w9WgXcQ", "en") == "hello world"


def test_cache_hit_skips_network(cache, sleep):
    cache.store("dQw4w9WgXcQ", "en", "cached text")
    primary = FakeSource("structured", [])
    fallback = FakeSource("raw_scrape", [])
    retriever = make_retriever(cache, sleep, primary, fallback)

    result = asyncio.run(retriever.retrieve("dQw4w9WgXcQ", "en"))

    assert result.text == "cached text"
    assert result.source == "cache"
    assert primary.calls == []
    assert fallback.calls == []


def test_primary_retries_then_succeeds(cache, sleep):
    primary = FakeSource("structured", [transient(), transient(), "third time lucky"])
    fallback = FakeSource("raw_scrape", ["unused"])
    retriever = make_retriever(cache, sleep, primary, fallback)

    text, source = asyncio.run(retriever.fetch_text("dQw4w9WgXcQ", "en"))

    assert text == "third time lucky"
    assert source == "structured"
    assert sleep.delays == [1.0, 2.0]
    assert len(primary.calls) == 3
    assert fallback.calls == []


def test_fallback_after_primary_exhausted(cache, sleep):
    primary = FakeSource("structured", [transient(), transient(), transient()])
    fallback = FakeSource("raw_scrape", ["scraped text"])
    retriever = make_retriever(cache, sleep, primary, fallback)

    result = asyncio.run(retriever.retrieve("dQw4w9WgXcQ", "ko"))

    assert result.text == "scraped text"
    assert result.source == "raw_scrape"
    assert len(primary.calls) == 3
    assert len(fallback.calls) == 1
    assert sleep.delays == [1.0, 2.0]
    assert cache.lookup("dQw4w9WgXcQ", "ko") == "scraped text"


def test_total_failure_references_last_primary_error(cache, sleep):
    primary = FakeSource(
        "structured", [transient("first"), transient("second"), transient("last one")]
    )
    fallback = FakeSource("raw_scrape", [FetchError("raw_scrape", "HTTP 404")])
    retriever = make_retriever(cache, sleep, primary, fallback)

    with pytest.raises(RetrievalFailedError) as exc_info:
        asyncio.run(retriever.retrieve("dQw4w9WgXcQ", "en"))

    assert "last one" in exc_info.value.last_error
    assert "last one" in str(exc_info.value)
    assert "HTTP 404" in exc_info.value.fallback_error
    assert cache.lookup("dQw4w9WgXcQ", "en") is None


def test_invalid_input_from_source_aborts_retries(cache, sleep):
    primary = FakeSource("structured", [InvalidInputError("bad id"), "unused"])
    fallback = FakeSource("raw_scrape", ["unused"])
    retriever = make_retriever(cache, sleep, primary, fallback)

    with pytest.raises(InvalidInputError):
        asyncio.run(retriever.fetch_text("dQw4w9WgXcQ", "en"))

    assert len(primary.calls) == 1
    assert fallback.calls == []
    assert sleep.delays == []


def test_invalid_input_never_reaches_sources(cache, sleep):
    primary = FakeSource("structured", [])
    fallback = FakeSource("raw_scrape", [])
    retriever = make_retriever(cache, sleep, primary, fallback)

    with pytest.raises(InvalidInputError):
        asyncio.run(retriever.retrieve("https://example.com/watch?v=dQw4w9WgXcQ"))

    assert primary.calls == []


def test_unexpected_exception_is_treated_as_transient(cache, sleep):
    primary = FakeSource("structured", [ValueError("boom"), "recovered"])
    fallback = FakeSource("raw_scrape", [])
    retriever = make_retriever(cache, sleep, primary, fallback)

    text, _ = asyncio.run(retriever.fetch_text("dQw4w9WgXcQ", "en"))

    assert text == "recovered"
    assert sleep.delays == [1.0]


def test_language_defaults_to_english_and_config_is_passed(cache, sleep):
    config = FetchConfig(proxy_url="http://proxy.local:3128")
    primary = FakeSource("structured", ["hi"])
    retriever = make_retriever(cache, sleep, primary, FakeSource("raw_scrape", []), config)

    result = asyncio.run(retriever.retrieve("dQw4w9WgXcQ"))

    assert result.language == "en"
    assert primary.calls == [("dQw4w9WgXcQ", "en", config)]


def test_cache_failure_does_not_fail_retrieval(tmp_path, sleep):
    from transcriptly.components.cache.cache import TranscriptCache

    blocker = tmp_path / "file"
    blocker.write_text("occupied", encoding="utf-8")
    broken_cache = TranscriptCache(cache_dir=blocker / "cache")
    primary = FakeSource("structured", ["still works"])
    retriever = make_retriever(broken_cache, sleep, primary, FakeSource("raw_scrape", []))

    result = asyncio.run(retriever.retrieve("dQw4w9WgXcQ"))

    assert result.text == "still works"


def test_rate_limited_errors_follow_the_normal_retry_path(cache, sleep):
    rate_limited = [FetchError("structured", "429", rate_limited=True) for _ in range(3)]
    primary = FakeSource("structured", rate_limited)
    fallback = FakeSource("raw_scrape", ["scraped text"])
    retriever = make_retriever(cache, sleep, primary, fallback)

    text, source = asyncio.run(retriever.fetch_text("dQw4w9WgXcQ", "en"))

    assert (text, source) == ("scraped text", "raw_scrape")
    assert len(primary.calls) == 3
    assert sleep.delays == [1.0, 2.0]
    assert len(fallback.calls) == 1
