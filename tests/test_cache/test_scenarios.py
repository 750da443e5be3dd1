"""End-to-end scenarios: several handles and threads sharing one cache root."""

from concurrent.futures import ThreadPoolExecutor

from shardcache.cache.engine import FileCache
from shardcache.config.loader import load_settings_file


class TestSharedRoot:
    def test_user_session_scenario(self, cache, age_entry):
        cache.write("user-42", "hello")
        assert cache.read("user-42") == b"hello"

        cache.write("user-42", "v2")
        assert cache.read("user-42", 0) == b"v2"

        cache.write("temp", "x")
        path = cache.path_for("temp")
        age_entry(path, 11)
        assert cache.read("temp", 10) is None
        assert not path.exists()

    def test_entries_survive_new_instances(self, cache_root):
        FileCache(cache_root).write("persistent", "data")
        assert FileCache(cache_root).read("persistent") == b"data"

    def test_instances_see_each_others_writes(self, cache_root):
        a = FileCache(cache_root, namespace="shared")
        b = FileCache(cache_root, namespace="shared")
        a.write("k", "from a")
        assert b.read("k") == b"from a"
        b.delete("k")
        assert a.read("k") is None

    def test_concurrent_writers_and_readers(self, cache_root):
        cache = FileCache(cache_root, max_entries=1000)
        keys = [f"key-{i}" for i in range(200)]

        def write(key):
            cache.write(key, key * 10)

        def read(key):
            # Either absent (not written yet) or complete, never partial
            value = cache.read(key)
            assert value is None or value == (key * 10).encode()

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(write, keys))
            list(pool.map(read, keys))

        assert all(cache.read(k) == (k * 10).encode() for k in keys)

    def test_concurrent_writers_respect_soft_limit(self, cache_root):
        cache = FileCache(cache_root, max_entries=20)
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: cache.write(f"k{i}", "v"), range(200)))
        # Bound is approximate under concurrency; rewriting a live key trims one per write
        for _ in range(250):
            cache.write("drain", "v")
        assert cache.entry_count() <= 20

    def test_from_settings_file(self, tmp_path):
        settings_path = tmp_path / "shardcache.yaml"
        settings_path.write_text(
            f"cache:\n  cache_dir: {tmp_path / 'store'}\n  namespace: reports\n  max_entries: 2\n"
        )
        cache = FileCache.from_settings(load_settings_file(settings_path))
        for key in ("a", "b", "c"):
            cache.write(key, key)
        assert cache.entry_count() == 2
        assert (tmp_path / "store" / "reports").is_dir()
        assert (tmp_path / "store" / ".htaccess").exists()
