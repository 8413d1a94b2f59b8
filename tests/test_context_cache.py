"""Tests for the global context cache and its storage slots."""

import threading

from storefront_sdk.config import StorefrontConfig
from storefront_sdk.telemetry.cache import DEVICE_FINGERPRINT_KEY, SESSION_ID_KEY, GlobalContextCache
from storefront_sdk.telemetry.context import OSType
from storefront_sdk.telemetry.environment import RuntimeEnvironment
from storefront_sdk.telemetry.storage import JsonFileStorage, MemoryStorage


def _cache(config, **kwargs) -> GlobalContextCache:
    kwargs.setdefault("environment", RuntimeEnvironment(system="Linux", release="6.5.0"))
    return GlobalContextCache(config, **kwargs)


class TestFingerprint:
    """Test device fingerprint resolution."""

    def test_stable_within_process(self, config):
        cache = _cache(config)
        assert cache.resolve_fingerprint() == cache.resolve_fingerprint()

    def test_persisted_and_reloaded(self, config):
        storage = MemoryStorage()
        first = _cache(config, device_storage=storage).resolve_fingerprint()

        assert storage.get(DEVICE_FINGERPRINT_KEY) == first
        # a new process with the same durable storage
        assert _cache(config, device_storage=storage).resolve_fingerprint() == first

    def test_cleared_storage_yields_new_fingerprint(self, config):
        storage = MemoryStorage()
        cache = _cache(config, device_storage=storage)
        first = cache.resolve_fingerprint()

        storage.clear()
        second = cache.resolve_fingerprint()

        assert second != first
        assert storage.get(DEVICE_FINGERPRINT_KEY) == second

    def test_survives_restart_on_disk(self, config, tmp_path):
        path = tmp_path / "device.json"
        first = _cache(config, device_storage=JsonFileStorage(path)).resolve_fingerprint()
        second = _cache(config, device_storage=JsonFileStorage(path)).resolve_fingerprint()
        assert first == second

    def test_concurrent_resolution_creates_once(self, config):
        created = []

        def id_factory():
            created.append(1)
            return f"fp-{len(created)}"

        cache = _cache(config, id_factory=id_factory)
        results = []
        threads = [threading.Thread(target=lambda: results.append(cache.resolve_fingerprint())) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert set(results) == {"fp-1"}
        assert len(created) == 1


class TestSessionID:
    """Test session ID resolution."""

    def test_independent_of_fingerprint(self, config):
        cache = _cache(config)
        assert cache.resolve_session_id() != cache.resolve_fingerprint()

    def test_end_session_starts_a_new_one(self, config):
        session_storage = MemoryStorage()
        cache = _cache(config, session_storage=session_storage)
        first = cache.resolve_session_id()

        cache.end_session()

        assert session_storage.get(SESSION_ID_KEY) is None
        assert cache.resolve_session_id() != first


class TestGlobalContext:
    """Test global context computation and caching."""

    def test_gathers_configuration_and_environment(self, config):
        cache = _cache(config, library_version="1.0.0", library_variant="python")

        context = cache.global_context()

        assert context.partner_scope() == "acme/downtown"
        assert context.fingerprint == cache.device_fingerprint
        assert context.session == cache.session_id
        assert context.browser.os_type is OSType.LINUX
        assert context.browser.library_version == "1.0.0"
        assert context.user is None
        assert context.order is None

    def test_is_cached_until_forced(self, config):
        cache = _cache(config)
        first = cache.global_context()

        config.location = "uptown"

        assert cache.global_context() is first
        refreshed = cache.global_context(force_fresh=True)
        assert refreshed is not first
        assert refreshed.partner_scope() == "acme/uptown"

    def test_invalidate_recomputes(self, config):
        cache = _cache(config)
        first = cache.global_context()

        cache.invalidate()

        assert cache.cached_context is None
        second = cache.global_context()
        assert second is not first
        # storage was untouched, so identity carries over
        assert second.fingerprint == first.fingerprint

    def test_without_scope(self):
        cache = _cache(StorefrontConfig())
        context = cache.global_context()
        assert "scope" not in context.serialize()
        assert context.fingerprint


class TestJsonFileStorage:
    """Test the durable JSON file store."""

    def test_set_get_delete(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "nested" / "store.json")

        assert storage.get("k") is None
        storage.set("k", "v")
        assert storage.get("k") == "v"
        storage.delete("k")
        assert storage.get("k") is None

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")

        storage = JsonFileStorage(path)

        assert storage.get("k") is None
        storage.set("k", "v")
        assert storage.get("k") == "v"
