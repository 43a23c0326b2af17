"""
Unit tests for the local key-value stores.
"""

import json

from atom_mail.storage.key_value import (
    AUTH_TOKEN_KEY,
    PREFERENCES_KEY,
    InMemoryStore,
    JsonFileStore,
)


class TestInMemoryStore:
    def test_get_missing_key(self):
        assert InMemoryStore().get("missing") is None

    def test_set_get_remove(self):
        store = InMemoryStore()
        store.set(AUTH_TOKEN_KEY, "token-123")

        assert store.get(AUTH_TOKEN_KEY) == "token-123"

        store.remove(AUTH_TOKEN_KEY)
        assert store.get(AUTH_TOKEN_KEY) is None

    def test_initial_values_are_copied(self):
        initial = {"a": 1}
        store = InMemoryStore(initial)
        store.set("b", 2)

        assert initial == {"a": 1}
        assert store.get("a") == 1

    def test_remove_missing_key(self):
        store = InMemoryStore()
        store.remove("missing")
        assert store.get("missing") is None


class TestJsonFileStore:
    def test_values_persist_across_instances(self, tmp_path):
        path = tmp_path / "store.json"
        record = {"data": "abc=", "iv": "00" * 16, "salt": "11" * 16}

        JsonFileStore(str(path)).set(PREFERENCES_KEY, record)

        assert JsonFileStore(str(path)).get(PREFERENCES_KEY) == record
        assert json.loads(path.read_text())[PREFERENCES_KEY] == record

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "store.json"
        store = JsonFileStore(str(path))
        store.set("key", "value")

        assert path.exists()

    def test_no_temp_file_left_behind(self, tmp_path):
        path = tmp_path / "store.json"
        JsonFileStore(str(path)).set("key", "value")

        assert not path.with_suffix(".tmp").exists()

    def test_remove(self, tmp_path):
        path = tmp_path / "store.json"
        store = JsonFileStore(str(path))
        store.set("keep", 1)
        store.set("drop", 2)

        store.remove("drop")

        assert store.get("drop") is None
        assert store.get("keep") == 1

    def test_missing_file_reads_empty(self, tmp_path):
        assert JsonFileStore(str(tmp_path / "absent.json")).get("key") is None

    def test_corrupt_file_is_ignored(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")
        store = JsonFileStore(str(path))

        assert store.get("key") is None

        store.set("key", "value")
        assert store.get("key") == "value"

    def test_non_object_file_is_ignored(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]")

        assert JsonFileStore(str(path)).get("key") is None
