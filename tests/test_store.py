"""Tests for persistence in store.py"""

import json

import pytest

from conftest import make_log
from oscillation_os.domain import FieldEntry, FieldLog, Pole
from oscillation_os.store import (
    FIELD_LOG_KEY,
    SCHEMA_VERSION,
    SCHEMA_VERSION_KEY,
    STATE_LOG_KEY,
    JsonStore,
    MemoryStore,
    check_schema_version,
    load_field_log,
    load_state_log,
    resolve_data_dir,
    save_field_log,
    save_state_log,
)

G, F, C = Pole.GROUND, Pole.FLIGHT, Pole.CENTER


@pytest.fixture(params=["json", "memory"])
def store(request, tmp_path):
    if request.param == "json":
        return JsonStore(tmp_path / "data")
    return MemoryStore()


class TestStoreContract:
    """load/save behavior shared by JsonStore and MemoryStore."""

    def test_missing_key_returns_fallback(self, store):
        assert store.load("nope", [1, 2]) == [1, 2]

    def test_save_then_load(self, store):
        store.save("k", {"a": [1, "x"]})
        assert store.load("k", None) == {"a": [1, "x"]}

    def test_save_overwrites(self, store):
        store.save("k", [1, 2, 3])
        store.save("k", [])
        assert store.load("k", None) == []


class TestJsonStore:
    """File-specific behavior of JsonStore."""

    def test_corrupt_file_returns_fallback(self, tmp_path):
        s = JsonStore(tmp_path)
        s.path_for("k").write_text("{not json", encoding="utf-8")
        assert s.load("k", "fallback") == "fallback"

    def test_empty_file_returns_fallback(self, tmp_path):
        s = JsonStore(tmp_path)
        s.path_for("k").write_text("", encoding="utf-8")
        assert s.load("k", []) == []

    def test_creates_data_dir(self, tmp_path):
        s = JsonStore(tmp_path / "a" / "b")
        s.save("k", 1)
        assert s.path_for("k").exists()
        assert not s.path_for("k").with_suffix(".json.tmp").exists()

    def test_write_failure_propagates(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        s = JsonStore(blocker / "sub")
        with pytest.raises(OSError):
            s.save("k", [])

    def test_deeply_nested_json_returns_fallback(self, tmp_path):
        """A record nested too deep for the decoder is treated as corrupt."""
        s = JsonStore(tmp_path)
        s.path_for(STATE_LOG_KEY).write_text("[" * 200_000, encoding="utf-8")
        assert s.load(STATE_LOG_KEY, []) == []
        assert load_state_log(s) == []

    def test_resolve_data_dir_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OSCILLATION_OS_DATA_DIR", str(tmp_path))
        assert resolve_data_dir() == tmp_path
        assert resolve_data_dir(tmp_path / "x") == tmp_path / "x"

    def test_resolve_data_dir_default(self, monkeypatch):
        monkeypatch.delenv("OSCILLATION_OS_DATA_DIR", raising=False)
        assert resolve_data_dir().name == ".oscillation-os"


class TestLogRecords:
    """Round-trips and recovery for the state and field log records."""

    def test_state_log_round_trip(self, store):
        log = make_log([G, F, C, F], gap_minutes=7)
        save_state_log(store, log)
        assert load_state_log(store) == log

    def test_state_record_field_names(self):
        store = MemoryStore()
        save_state_log(store, make_log([F]))
        record = json.loads(store.raw(STATE_LOG_KEY))
        assert set(record[0]) == {"timestamp", "dayKey", "pole", "rawValue", "energy", "note"}
        assert record[0]["pole"] == "FLIGHT"

    def test_field_log_round_trip(self, store):
        field_log = FieldLog(
            ground=[FieldEntry(1, "run 5k"), FieldEntry(2, "dishes")],
            flight=[FieldEntry(3, "sketching")],
        )
        save_field_log(store, field_log)
        assert load_field_log(store) == field_log

    def test_missing_records_are_empty(self, store):
        assert load_state_log(store) == []
        assert load_field_log(store) == FieldLog()

    def test_wrong_shape_is_empty(self):
        store = MemoryStore()
        store.save(STATE_LOG_KEY, {"not": "a list"})
        store.save(FIELD_LOG_KEY, [1, 2])
        assert load_state_log(store) == []
        assert load_field_log(store) == FieldLog()

    def test_malformed_entry_is_empty(self):
        store = MemoryStore()
        store.save(STATE_LOG_KEY, [{"timestamp": 1}])
        store.save(FIELD_LOG_KEY, {"ground": [{"text": "no timestamp"}], "flight": []})
        assert load_state_log(store) == []
        assert load_field_log(store) == FieldLog()

    def test_unknown_pole_is_rederived(self):
        store = MemoryStore()
        store.save(STATE_LOG_KEY, [
            {"timestamp": 1, "dayKey": "2025-01-01", "pole": "SIDEWAYS", "rawValue": -40, "energy": 2, "note": ""},
        ])
        assert load_state_log(store)[0].pole == Pole.GROUND

    def test_schema_version_written(self):
        store = MemoryStore()
        save_state_log(store, [])
        assert store.load(SCHEMA_VERSION_KEY, None) == SCHEMA_VERSION
        assert check_schema_version(store) == SCHEMA_VERSION

    def test_schema_version_mismatch_is_only_logged(self, caplog):
        store = MemoryStore()
        store.save(SCHEMA_VERSION_KEY, 99)
        assert check_schema_version(store) == 99
        assert "schema version" in caplog.text


class TestRecordValidation:
    """Stored records that fail schema validation fall back to empty logs."""

    STATE = {"timestamp": 1, "dayKey": "2025-01-01", "pole": "GROUND", "rawValue": -40, "energy": 2, "note": ""}

    @pytest.mark.parametrize("literal", ["Infinity", "-Infinity", "NaN", "1e400"])
    def test_non_finite_timestamp_in_file(self, tmp_path, literal):
        s = JsonStore(tmp_path)
        s.path_for(STATE_LOG_KEY).write_text(
            '[{"timestamp": %s, "dayKey": "2025-01-01", "pole": "GROUND", '
            '"rawValue": -40, "energy": 2, "note": ""}]' % literal,
            encoding="utf-8",
        )
        s.path_for(FIELD_LOG_KEY).write_text(
            '{"ground": [{"timestamp": %s, "text": "run"}], "flight": []}' % literal,
            encoding="utf-8",
        )
        assert load_state_log(s) == []
        assert load_field_log(s) == FieldLog()

    def test_tracker_starts_empty_on_non_finite_timestamp(self, tmp_path):
        from oscillation_os.tracker import OscillationTracker

        s = JsonStore(tmp_path)
        s.path_for(STATE_LOG_KEY).write_text(
            '[{"timestamp": Infinity, "dayKey": "2025-01-01", "pole": "FLIGHT", '
            '"rawValue": 40, "energy": 3, "note": ""}]',
            encoding="utf-8",
        )
        assert OscillationTracker(s).state_log == ()

    def test_fractional_timestamp_is_rejected(self):
        store = MemoryStore()
        store.save(STATE_LOG_KEY, [dict(self.STATE, timestamp=1.5)])
        assert load_state_log(store) == []

    def test_whole_float_timestamp_is_accepted(self):
        store = MemoryStore()
        store.save(STATE_LOG_KEY, [dict(self.STATE, timestamp=1000.0)])
        assert load_state_log(store)[0].timestamp == 1000

    def test_missing_note_and_extra_keys(self):
        record = {k: v for k, v in self.STATE.items() if k != "note"}
        record["mood"] = "extra"
        store = MemoryStore()
        store.save(STATE_LOG_KEY, [record])
        entry = load_state_log(store)[0]
        assert entry.note == ""
        assert entry.pole == Pole.GROUND

    def test_null_note_reads_as_empty(self):
        store = MemoryStore()
        store.save(STATE_LOG_KEY, [dict(self.STATE, note=None)])
        assert load_state_log(store)[0].note == ""

    def test_field_log_missing_side_defaults_empty(self):
        store = MemoryStore()
        store.save(FIELD_LOG_KEY, {"ground": [{"timestamp": 5, "text": "run"}]})
        field_log = load_field_log(store)
        assert [e.text for e in field_log.ground] == ["run"]
        assert field_log.flight == []
