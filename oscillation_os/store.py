"""
Key-value persistence for the state and field logs.

Every record is stored as a JSON document under a string key and rewritten in
full on each save. Reads never raise: a missing, empty or unparseable record
yields the caller's fallback.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .domain import FieldEntry, FieldLog, Pole, StateEntry, StateLog
from .labels import classify_pole

logger = logging.getLogger(__name__)

STATE_LOG_KEY = "oscillation.os.stateLog"
FIELD_LOG_KEY = "oscillation.os.fieldLog"
SCHEMA_VERSION_KEY = "oscillation.os.schemaVersion"
SCHEMA_VERSION = 1

DATA_DIR_ENV = "OSCILLATION_OS_DATA_DIR"


def resolve_data_dir(data_dir: Optional[os.PathLike | str] = None) -> Path:
    """
    Resolution order:
      1. explicit argument
      2. OSCILLATION_OS_DATA_DIR environment variable
      3. ~/.oscillation-os/
    """
    if data_dir is not None:
        return Path(data_dir).expanduser()
    env = os.environ.get(DATA_DIR_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / ".oscillation-os"


# -----------------------------
# Stores
# -----------------------------
class JsonStore:
    """One JSON file per key inside a data directory."""

    def __init__(self, data_dir: Optional[os.PathLike | str] = None):
        self.data_dir = resolve_data_dir(data_dir)

    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def load(self, key: str, fallback: Any) -> Any:
        path = self.path_for(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return fallback
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s, using fallback: %s", path, e)
            return fallback
        return _decode(raw, fallback, source=str(path))

    def save(self, key: str, value: Any) -> None:
        # Write .tmp then rename so a crash never leaves half a record behind
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, path)
        logger.debug("Saved %s", path)


class MemoryStore:
    """Dict-backed store; keeps serialized text so it behaves like JsonStore."""

    def __init__(self):
        self._records: dict[str, str] = {}

    def load(self, key: str, fallback: Any) -> Any:
        raw = self._records.get(key)
        if raw is None:
            return fallback
        return _decode(raw, fallback, source=key)

    def save(self, key: str, value: Any) -> None:
        self._records[key] = json.dumps(value, ensure_ascii=False)

    def raw(self, key: str) -> Optional[str]:
        return self._records.get(key)


def _decode(raw: str, fallback: Any, source: str) -> Any:
    if not raw or not raw.strip():
        return fallback
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.warning("Corrupt record in %s, using fallback: %s", source, e)
        return fallback


# -----------------------------
# Record schemas
# -----------------------------
class StateRecord(BaseModel):
    """Stored shape of one state entry; field names match the persisted record."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    timestamp: int
    day_key: str = Field(alias="dayKey")
    pole: Optional[str] = None
    raw_value: int = Field(alias="rawValue")
    energy: int
    note: Optional[str] = ""

    @classmethod
    def from_entry(cls, entry: StateEntry) -> "StateRecord":
        # in-memory entries are trusted; no validation on the way out
        return cls.model_construct(
            timestamp=entry.timestamp,
            day_key=entry.day_key,
            pole=entry.pole.value,
            raw_value=entry.raw_value,
            energy=entry.energy,
            note=entry.note,
        )

    def to_entry(self) -> StateEntry:
        try:
            pole = Pole(self.pole)
        except ValueError:
            # unknown pole string: derive it again from the slider position
            pole = classify_pole(self.raw_value)
        return StateEntry(
            timestamp=self.timestamp,
            day_key=self.day_key,
            pole=pole,
            raw_value=self.raw_value,
            energy=self.energy,
            note=self.note or "",
        )


class FieldRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    timestamp: int
    text: str

    def to_entry(self) -> FieldEntry:
        return FieldEntry(timestamp=self.timestamp, text=self.text)


class FieldLogRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ground: list[FieldRecord] = Field(default_factory=list)
    flight: list[FieldRecord] = Field(default_factory=list)

    @classmethod
    def from_field_log(cls, field_log: FieldLog) -> "FieldLogRecord":
        return cls.model_construct(
            ground=[FieldRecord.model_construct(timestamp=e.timestamp, text=e.text) for e in field_log.ground],
            flight=[FieldRecord.model_construct(timestamp=e.timestamp, text=e.text) for e in field_log.flight],
        )

    def to_field_log(self) -> FieldLog:
        return FieldLog(
            ground=[r.to_entry() for r in self.ground],
            flight=[r.to_entry() for r in self.flight],
        )


STATE_LOG_ADAPTER = TypeAdapter(list[StateRecord])


def load_state_log(store) -> StateLog:
    raw = store.load(STATE_LOG_KEY, [])
    try:
        records = STATE_LOG_ADAPTER.validate_python(raw)
    except ValidationError as e:
        logger.warning("State log record is malformed, starting empty: %s", e)
        return []
    return [r.to_entry() for r in records]


def load_field_log(store) -> FieldLog:
    raw = store.load(FIELD_LOG_KEY, {"ground": [], "flight": []})
    try:
        record = FieldLogRecord.model_validate(raw)
    except ValidationError as e:
        logger.warning("Field log record is malformed, starting empty: %s", e)
        return FieldLog()
    return record.to_field_log()


def save_state_log(store, log: StateLog) -> None:
    records = [StateRecord.from_entry(e) for e in log]
    store.save(STATE_LOG_KEY, STATE_LOG_ADAPTER.dump_python(records, by_alias=True, mode="json"))
    store.save(SCHEMA_VERSION_KEY, SCHEMA_VERSION)


def save_field_log(store, field_log: FieldLog) -> None:
    record = FieldLogRecord.from_field_log(field_log)
    store.save(FIELD_LOG_KEY, record.model_dump(mode="json"))
    store.save(SCHEMA_VERSION_KEY, SCHEMA_VERSION)


def check_schema_version(store) -> Optional[int]:
    """Returns the stored schema version; a mismatch is logged, never migrated."""
    version = store.load(SCHEMA_VERSION_KEY, None)
    if version is not None and version != SCHEMA_VERSION:
        logger.warning(
            "Stored schema version %r differs from %d; records are read as-is",
            version, SCHEMA_VERSION,
        )
    return version
