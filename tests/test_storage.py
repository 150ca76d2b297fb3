import json

import pytest

from todo_api.settings import Settings
from todo_api.storage import (
    InMemoryStorage,
    JsonFileStorage,
    ParseError,
    ReadError,
    StorageError,
    WriteError,
    build_storage,
)


class TestJsonFileStorage:
    def test_load_returns_records_in_file_order(self, storage, seed_todos):
        assert storage.load() == seed_todos

    def test_save_then_load_round_trips(self, storage, seed_todos):
        reordered = list(reversed(seed_todos))
        reordered[0]["extra"] = {"kept": ["verbatim"]}
        storage.save(reordered)
        assert storage.load() == reordered

    def test_save_is_pretty_printed_with_trailing_newline(self, storage, store_path):
        todos = [{"id": "a", "name": "Café", "completed": False, "created": "2021-01-01T00:00:00.000Z"}]
        storage.save(todos)
        text = store_path.read_text(encoding="utf-8")
        assert text == json.dumps(todos, indent=2, ensure_ascii=False) + "\n"
        assert "Café" in text

    def test_save_empty_collection(self, storage, store_path):
        storage.save([])
        assert store_path.read_text(encoding="utf-8") == "[]\n"
        assert storage.load() == []

    def test_missing_file_is_read_error(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path / "missing.json"))
        with pytest.raises(ReadError) as info:
            storage.load()
        assert info.value.path == str(tmp_path / "missing.json")
        assert isinstance(info.value, StorageError)

    def test_invalid_json_is_parse_error(self, store_path, storage):
        store_path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(ParseError):
            storage.load()

    def test_non_array_is_parse_error(self, store_path, storage):
        store_path.write_text('{"id": "x"}', encoding="utf-8")
        with pytest.raises(ParseError):
            storage.load()

    def test_non_object_entry_is_parse_error(self, store_path, storage):
        store_path.write_text('[{"id": "x"}, 3]', encoding="utf-8")
        with pytest.raises(ParseError):
            storage.load()

    def test_unwritable_path_is_write_error(self, tmp_path):
        # A directory in place of the file cannot be opened for writing
        target = tmp_path / "store.json"
        target.mkdir()
        with pytest.raises(WriteError):
            JsonFileStorage(str(target)).save([])

    def test_save_creates_parent_directories(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path / "nested" / "dir" / "todos.json"))
        storage.save([{"id": "a"}])
        assert storage.load() == [{"id": "a"}]

    def test_ensure_exists(self, tmp_path, storage):
        fresh = JsonFileStorage(str(tmp_path / "new.json"))
        assert fresh.ensure_exists() is True
        assert fresh.load() == []
        assert fresh.ensure_exists() is False
        # Existing stores are left alone
        before = storage.load()
        assert storage.ensure_exists() is False
        assert storage.load() == before


class TestInMemoryStorage:
    def test_load_returns_copies(self):
        storage = InMemoryStorage([{"id": "a", "completed": False}])
        loaded = storage.load()
        loaded[0]["completed"] = True
        assert storage.load() == [{"id": "a", "completed": False}]

    def test_save_copies_input(self):
        storage = InMemoryStorage()
        todos = [{"id": "a"}]
        storage.save(todos)
        todos.append({"id": "b"})
        assert storage.load() == [{"id": "a"}]


class TestBuildStorage:
    def test_file_backend(self, tmp_path):
        storage = build_storage(Settings(json_path=str(tmp_path / "t.json")))
        assert isinstance(storage, JsonFileStorage)
        assert storage.path == str(tmp_path / "t.json")
        assert storage.describe() == "file"

    def test_memory_backend(self):
        storage = build_storage(Settings(json_path="", persistence_backend="memory"))
        assert isinstance(storage, InMemoryStorage)
        assert storage.describe() == "memory"
