import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import redis

from sitecms.config import Settings
from sitecms.dependencies import build_store
from sitecms.kv import (
    InMemoryKeyValueClient,
    KeyValueStore,
    LocalFileStore,
    RedisKeyValueClient,
)


class LocalFileStoreTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_write_creates_parent_directories(self):
        path = self.root / "nested" / "dir" / "store.json"
        store = LocalFileStore(path)
        store.set("skills_data", [{"id": 1, "name": "Go"}])

        self.assertTrue(path.exists())
        on_disk = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(on_disk, {"skills_data": [{"id": 1, "name": "Go"}]})

    def test_values_survive_a_fresh_instance(self):
        path = self.root / "store.json"
        LocalFileStore(path).set("site_settings", {"siteName": "X"})
        self.assertEqual(LocalFileStore(path).get("site_settings"), {"siteName": "X"})

    def test_missing_key_returns_none(self):
        self.assertIsNone(LocalFileStore(self.root / "absent.json").get("anything"))

    def test_file_is_loaded_once(self):
        path = self.root / "store.json"
        path.write_text(json.dumps({"a": 1}), encoding="utf-8")
        store = LocalFileStore(path)
        self.assertEqual(store.get("a"), 1)

        path.write_text(json.dumps({"a": 2}), encoding="utf-8")
        self.assertEqual(store.get("a"), 1)

    def test_corrupt_file_is_treated_as_empty(self):
        path = self.root / "store.json"
        path.write_text("{not json", encoding="utf-8")
        store = LocalFileStore(path)
        with self.assertLogs("sitecms.kv", level="WARNING"):
            self.assertIsNone(store.get("a"))

        store.set("a", [1])
        self.assertEqual(json.loads(path.read_text(encoding="utf-8")), {"a": [1]})
        corrupt = self.root / "store.json.corrupt"
        self.assertEqual(corrupt.read_text(encoding="utf-8"), "{not json")

    def test_non_object_file_is_kept_aside(self):
        path = self.root / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")
        store = LocalFileStore(path)
        with self.assertLogs("sitecms.kv", level="WARNING"):
            self.assertIsNone(store.get("a"))
        self.assertFalse(path.exists())
        self.assertEqual(
            (self.root / "store.json.corrupt").read_text(encoding="utf-8"), "[1, 2]"
        )

    def test_failed_write_leaves_previous_value(self):
        blocker = self.root / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        store = LocalFileStore(blocker / "store.json")

        with self.assertRaises(OSError):
            store.set("skills_data", [{"id": 1, "name": "Go"}])
        self.assertIsNone(store.get("skills_data"))

    def test_failed_overwrite_keeps_old_value(self):
        path = self.root / "store.json"
        store = LocalFileStore(path)
        store.set("skills_data", [{"name": "Go"}])

        with patch("sitecms.kv.os.replace", side_effect=OSError("disk full")):
            with self.assertRaises(OSError):
                store.set("skills_data", [{"name": "Rust"}])
        self.assertEqual(store.get("skills_data"), [{"name": "Go"}])
        self.assertEqual(
            json.loads(path.read_text(encoding="utf-8")),
            {"skills_data": [{"name": "Go"}]},
        )

    def test_returned_values_are_copies(self):
        store = LocalFileStore(self.root / "store.json")
        store.set("skills_data", [{"name": "Go"}])
        value = store.get("skills_data")
        value.append({"name": "Rust"})
        self.assertEqual(store.get("skills_data"), [{"name": "Go"}])


class KeyValueStoreTests(unittest.TestCase):
    def test_local_only_store_is_not_configured(self):
        store = KeyValueStore(local=InMemoryKeyValueClient())
        self.assertFalse(store.is_configured())
        store.set("k", {"v": 1})
        self.assertEqual(store.get("k"), {"v": 1})

    def test_remote_is_preferred_when_healthy(self):
        local = InMemoryKeyValueClient()
        remote = InMemoryKeyValueClient()
        store = KeyValueStore(local=local, remote=remote)
        self.assertTrue(store.is_configured())

        store.set("k", [1, 2])
        self.assertEqual(remote.items, {"k": [1, 2]})
        self.assertEqual(local.items, {})
        self.assertEqual(store.get("k"), [1, 2])

    def test_remote_failures_fall_back_to_local(self):
        local = InMemoryKeyValueClient()
        remote = MagicMock()
        remote.get.side_effect = redis.exceptions.ConnectionError("refused")
        remote.set.side_effect = redis.exceptions.TimeoutError("timed out")
        store = KeyValueStore(local=local, remote=remote)

        with self.assertLogs("sitecms.kv", level="WARNING"):
            store.set("k", {"saved": True})
        self.assertEqual(local.items["k"], {"saved": True})

        with self.assertLogs("sitecms.kv", level="WARNING"):
            self.assertEqual(store.get("k"), {"saved": True})

    def test_remote_miss_does_not_consult_local(self):
        local = InMemoryKeyValueClient(items={"k": "stale"})
        remote = InMemoryKeyValueClient()
        store = KeyValueStore(local=local, remote=remote)
        self.assertIsNone(store.get("k"))


class RedisKeyValueClientTests(unittest.TestCase):
    def test_client_is_built_with_socket_deadlines(self):
        with patch("sitecms.kv.redis.Redis.from_url") as from_url:
            RedisKeyValueClient(url="redis://example:6379/0", timeout_seconds=1.5)
        from_url.assert_called_once_with(
            "redis://example:6379/0",
            socket_timeout=1.5,
            socket_connect_timeout=1.5,
            decode_responses=True,
        )

    def test_values_are_json_encoded(self):
        with patch("sitecms.kv.redis.Redis.from_url") as from_url:
            connection = from_url.return_value
            client = RedisKeyValueClient(url="redis://example:6379/0")

            client.set("skills_data", [{"name": "Go"}])
            connection.set.assert_called_once_with(
                "skills_data", json.dumps([{"name": "Go"}])
            )

            connection.get.return_value = '{"siteName": "X"}'
            self.assertEqual(client.get("site_settings"), {"siteName": "X"})

            connection.get.return_value = None
            self.assertIsNone(client.get("missing"))


class BuildStoreTests(unittest.TestCase):
    def test_in_memory_toggle(self):
        settings = Settings(_env_file=None, use_in_memory_backends=True)
        store = build_store(settings)
        self.assertIsInstance(store.local, InMemoryKeyValueClient)
        self.assertIsNone(store.remote)

    def test_local_file_without_redis_url(self):
        with tempfile.TemporaryDirectory() as tmp:
            settings = Settings(
                _env_file=None,
                use_in_memory_backends=False,
                redis_url=None,
                local_store_path=str(Path(tmp) / "store.json"),
            )
            store = build_store(settings)
        self.assertIsInstance(store.local, LocalFileStore)
        self.assertFalse(store.is_configured())

    def test_redis_url_adds_remote(self):
        settings = Settings(
            _env_file=None,
            use_in_memory_backends=False,
            redis_url="redis://example:6379/0",
        )
        with patch("sitecms.kv.redis.Redis.from_url"):
            store = build_store(settings)
        self.assertIsInstance(store.remote, RedisKeyValueClient)
        self.assertTrue(store.is_configured())


if __name__ == "__main__":
    unittest.main()
