"""Thread safety tests for the message source caches.

Validates concurrent lookups, refreshes and clears against one
ReloadableMessageSource.
"""

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

from propsource import CacheConfig, ReloadableMessageSource
from tests.helpers.loaders import FakeClock, StubLoader


def build_loader() -> StubLoader:
    loader = StubLoader()
    loader.add("app.properties", "msg=Hello, {0}!\nplain=Plain")
    loader.add("app_de.properties", "msg=Hallo, {0}!")
    return loader


class TestCacheConcurrency:
    """Test cache thread safety."""

    def test_concurrent_first_lookups_load_once(self) -> None:
        """Many threads racing on a cold cache trigger a single load per file."""
        loader = build_loader()
        source = ReloadableMessageSource(["app"], loader, default_locale="en")
        barrier = threading.Barrier(8)

        def lookup(_: int) -> str:
            barrier.wait()
            return source.get_message("msg", ("Ada",), "de")

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lookup, range(8)))

        assert results == ["Hallo, Ada!"] * 8
        assert loader.open_calls == {"app.properties": 1, "app_de.properties": 1}
        assert source.get_cache_stats()["merged"]["misses"] == 1

    def test_concurrent_pattern_memoization(self) -> None:
        """Every thread sees the same compiled pattern object."""
        source = ReloadableMessageSource(["app"], build_loader(), default_locale="en")

        with ThreadPoolExecutor(max_workers=10) as executor:
            futures = [executor.submit(source.resolve_format, "msg", "en") for _ in range(100)]
            patterns = {id(future.result()) for future in as_completed(futures)}

        assert len(patterns) == 1

    def test_concurrent_lookups_while_revalidating(self) -> None:
        """Lookups stay consistent while another thread advances the clock."""
        loader = build_loader()
        clock = FakeClock()
        source = ReloadableMessageSource(
            ["app"], loader, default_locale="en", cache=CacheConfig(ttl=0.5), clock=clock
        )
        errors: list[Exception] = []
        results: list[str] = []
        lock = threading.Lock()

        def lookup() -> None:
            try:
                for _ in range(50):
                    message = source.get_message("msg", ("Bob",), "de")
                    with lock:
                        results.append(message)
            except Exception as e:  # pylint: disable=broad-exception-caught
                errors.append(e)

        def tick() -> None:
            for _ in range(50):
                clock.advance(1)

        threads = [threading.Thread(target=lookup) for _ in range(4)]
        threads.append(threading.Thread(target=tick))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert not errors
        assert set(results) == {"Hallo, Bob!"}
        # Unchanged files are never re-read, however many refreshes ran.
        assert loader.open_calls == {"app_de.properties": 1}

    def test_concurrent_cache_clear(self) -> None:
        """Concurrent cache clear is thread-safe."""
        source = ReloadableMessageSource(["app"], build_loader(), default_locale="en")
        errors: list[Exception] = []

        def format_and_clear() -> None:
            try:
                for _ in range(10):
                    assert source.get_message("plain") == "Plain"
                    source.clear_cache()
            except Exception as e:  # pylint: disable=broad-exception-caught
                errors.append(e)

        threads = [threading.Thread(target=format_and_clear) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert not errors

    def test_clear_cache_during_lookups_reloads(self) -> None:
        """No merged view built from pre-clear tables outlives clear_cache()."""
        loader = build_loader()
        (file,) = loader.files["app.properties"]
        source = ReloadableMessageSource(["app"], loader, default_locale="en")
        assert source.resolve_text("plain", "en") == "Plain"
        stop = threading.Event()
        errors: list[Exception] = []

        def lookup() -> None:
            try:
                while not stop.is_set():
                    source.resolve_text("plain", "en")
            except Exception as e:  # pylint: disable=broad-exception-caught
                errors.append(e)

        threads = [threading.Thread(target=lookup) for _ in range(4)]
        for thread in threads:
            thread.start()
        try:
            for version in range(200):
                file.data = f"plain=Version {version}".encode()
                source.clear_cache()
                assert source.resolve_text("plain", "en") == f"Version {version}"
        finally:
            stop.set()
            for thread in threads:
                thread.join()

        assert not errors
