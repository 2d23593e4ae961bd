import json
import logging

from clockpro.storage import JsonFileStore, MemoryStore


def test_memory_store():
    store = MemoryStore({"a": "1"})
    store.set("b", "2")
    store.remove("a")
    store.remove("missing")
    assert store.get("a") is None
    assert store.get("b") == "2"
    assert store.get("c", "x") == "x"


def test_json_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "clock_config.json"
    store = JsonFileStore(path)
    store.set("app_theme", "dark")
    store.set("app_timezone", "Asia/Tokyo")
    store.remove("app_timezone")

    assert json.loads(path.read_text(encoding="utf-8")) == {"app_theme": "dark"}
    assert JsonFileStore(path).get("app_theme") == "dark"
    assert not path.with_suffix(".json.tmp").exists()


def test_corrupt_file_starts_empty(tmp_path, caplog):
    path = tmp_path / "clock_config.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="clockpro.storage"):
        store = JsonFileStore(path)

    assert store.data == {}
    assert "Failed to load" in caplog.text


def test_non_object_file_is_ignored(tmp_path):
    path = tmp_path / "clock_config.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert JsonFileStore(path).data == {}


def test_write_failure_is_logged_not_raised(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileStore(blocker / "clock_config.json")

    with caplog.at_level(logging.ERROR, logger="clockpro.storage"):
        store.set("app_theme", "dark")

    assert store.get("app_theme") == "dark"
    assert "Failed to save" in caplog.text
