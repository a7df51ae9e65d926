"""Test the editor session cache and the receiver log."""
import json
from datetime import datetime, timezone

import pytest

from verticals.combo_builder.receiver import ReceiverLog
from verticals.combo_builder.schema import SCHEMA
from verticals.combo_builder.session_cache import (
    DEFAULT_SLOT,
    JsonFileSessionCache,
    MemorySessionCache,
    build_store,
    load_configuration,
)


def test_every_commit_is_persisted():
    cache = MemorySessionCache()
    store = build_store(cache)
    store.set("max_selections", 6)
    assert cache.read(DEFAULT_SLOT)["max_selections"] == 6


def test_rehydrate_from_json_file(tmp_path):
    path = tmp_path / "session.json"
    store = build_store(JsonFileSessionCache(path))
    store.set("collection_title", "Bundle up")
    store.apply_control("header_padding_vertical", 20)

    reloaded = build_store(JsonFileSessionCache(path))
    assert reloaded.get("collection_title") == "Bundle up"
    assert reloaded.get("header_padding_top") == 20
    assert reloaded.get("header_padding_bottom") == 20


def test_missing_slot_gives_defaults(tmp_path):
    config = load_configuration(JsonFileSessionCache(tmp_path / "absent.json"))
    assert config["max_selections"] == 3


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    config = load_configuration(JsonFileSessionCache(path))
    assert config["collection_title"] == "Build Your Combo"


def test_old_slot_merged_over_defaults():
    cache = MemorySessionCache()
    cache.write(DEFAULT_SLOT, {"banner_width_mobile": 70, "removed_key": True})
    config = load_configuration(cache)
    assert config["banner_width_mobile"] == 70
    assert "removed_key" not in config
    assert set(config) == set(SCHEMA)


def test_non_object_slot_gives_defaults():
    cache = MemorySessionCache()
    cache.write(DEFAULT_SLOT, ["not", "a", "dict"])
    assert load_configuration(cache)["max_selections"] == 3


def test_receiver_appends_json_lines(tmp_path):
    log = ReceiverLog(tmp_path / "logs")
    now = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)
    log.append({"event": "view", "timestamp": "client"}, now=now)
    log.append({"event": "add"}, now=now)

    lines = (tmp_path / "logs" / "receiver.log").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first == {"event": "view", "timestamp": now.isoformat()}
    assert [e["event"] for e in log.read_entries()] == ["view", "add"]


def test_receiver_rejects_non_object(tmp_path):
    log = ReceiverLog(tmp_path)
    with pytest.raises(TypeError):
        log.append(["a", "b"])
    assert log.read_entries() == []
