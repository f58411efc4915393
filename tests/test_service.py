"""Unit tests for the shortening service."""

import logging
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from shortener.exceptions import (
    CounterExhaustedError,
    DuplicateLongUrlError,
    DuplicateShortCodeError,
    ShortCodeNotFoundError,
    ShortenError,
)
from shortener.service import COUNTER_MAX, ShorteningService
from shortener.storage import InMemoryMappingStore, MappingStore


class TestShorteningService:
    """Test suite for ShorteningService."""

    def test_service_initialization(self, service, store) -> None:
        assert service.counter == 0
        assert service.store is store

    def test_shorten_example_sequence(self, service) -> None:
        assert service.shorten_url("https://example.com/a/b") == "1"
        assert service.counter == 1
        assert service.shorten_url("https://example.com/c") == "2"
        assert service.counter == 2
        assert service.get_long_url("1") == "https://example.com/a/b"

    def test_shorten_same_url_is_idempotent(self, service) -> None:
        first = service.shorten_url("https://example.com/a")
        second = service.shorten_url("https://example.com/a")

        assert first == second
        assert service.counter == 1

    def test_distinct_urls_get_distinct_codes(self, service) -> None:
        urls = [f"https://example.com/{i}" for i in range(500)]
        codes = [service.shorten_url(u) for u in urls]

        assert len(set(codes)) == len(urls)
        for url, code in zip(urls, codes):
            assert service.get_long_url(code) == url

    def test_codes_grow_past_one_symbol(self, service) -> None:
        codes = [service.shorten_url(f"https://example.com/{i}") for i in range(62)]

        assert codes[0] == "1"
        assert codes[60] == "z"
        assert codes[61] == "10"

    def test_get_long_url_not_found(self, service) -> None:
        with pytest.raises(ShortCodeNotFoundError) as exc_info:
            service.get_long_url("nope")

        assert exc_info.value.short_code == "nope"

    def test_get_long_url_empty_code_not_found(self, service) -> None:
        with pytest.raises(ShortCodeNotFoundError):
            service.get_long_url("")

    def test_generate_short_code_increments_by_one(self, service) -> None:
        assert service.generate_short_code() == "1"
        assert service.generate_short_code() == "2"
        assert service.counter == 2

    def test_counter_overflow_raises(self, service) -> None:
        service._counter = COUNTER_MAX - 1
        assert service.generate_short_code() == "AzL8n0Y58m7"

        with pytest.raises(CounterExhaustedError):
            service.generate_short_code()
        assert service.counter == COUNTER_MAX

    def test_new_service_starts_new_counter(self, store) -> None:
        ShorteningService(store).shorten_url("https://example.com/a")
        other = ShorteningService(InMemoryMappingStore())

        assert other.counter == 0
        assert other.shorten_url("https://example.com/b") == "1"


class TestShortenFailures:
    """Storage failures are wrapped and never retried."""

    def test_duplicate_short_code_is_wrapped(self, store) -> None:
        service = ShorteningService(store)
        store.save("1", "https://example.com/taken")

        with pytest.raises(ShortenError) as exc_info:
            service.shorten_url("https://example.com/new")

        assert isinstance(exc_info.value.__cause__, DuplicateShortCodeError)
        # The failed attempt still consumed a counter value
        assert service.counter == 1
        assert service.shorten_url("https://example.com/new") == "2"

    def test_duplicate_long_url_race_is_wrapped(self) -> None:
        store = MagicMock(spec=MappingStore)
        store.get_short_code.return_value = None
        store.save.side_effect = DuplicateLongUrlError("https://example.com/a")
        service = ShorteningService(store)

        with pytest.raises(ShortenError) as exc_info:
            service.shorten_url("https://example.com/a")

        assert isinstance(exc_info.value.__cause__, DuplicateLongUrlError)
        store.save.assert_called_once_with("1", "https://example.com/a")

    def test_existing_url_skips_generation(self) -> None:
        store = MagicMock(spec=MappingStore)
        store.get_short_code.return_value = "abc"
        service = ShorteningService(store)

        assert service.shorten_url("https://example.com/a") == "abc"
        store.save.assert_not_called()
        assert service.counter == 0

    def test_failure_is_logged(self, store, caplog) -> None:
        service = ShorteningService(store)
        store.save("1", "https://example.com/taken")

        with caplog.at_level(logging.ERROR, logger="urlshortener"):
            with pytest.raises(ShortenError):
                service.shorten_url("https://example.com/new")

        assert "Failed to save mapping 1" in caplog.text


class TestServiceConcurrency:
    """Concurrent callers never corrupt the store or reuse a code."""

    def test_concurrent_distinct_urls(self, service, store) -> None:
        urls = [f"https://example.com/page/{i}" for i in range(3000)]

        with ThreadPoolExecutor(max_workers=32) as pool:
            codes = list(pool.map(service.shorten_url, urls))

        assert len(set(codes)) == len(urls)
        assert service.counter == len(urls)
        forward, reverse = store.snapshot()
        assert len(forward) == len(reverse) == len(urls)
        for url, code in zip(urls, codes):
            assert forward[code] == url
            assert reverse[url] == code

    def test_concurrent_generation_yields_unique_codes(self, service) -> None:
        with ThreadPoolExecutor(max_workers=32) as pool:
            codes = list(pool.map(lambda _: service.generate_short_code(), range(5000)))

        assert len(set(codes)) == 5000
        assert service.counter == 5000

    def test_concurrent_same_url_stores_one_record(self, service, store) -> None:
        def shorten(_: int):
            try:
                return service.shorten_url("https://example.com/hot")
            except ShortenError:
                return None

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(shorten, range(200)))

        stored = store.get_short_code("https://example.com/hot")
        assert len(store) == 1
        assert {r for r in results if r is not None} == {stored}
