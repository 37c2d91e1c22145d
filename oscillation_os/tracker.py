"""
The state holder: owns both logs, appends to them and persists every change.

Callers (the Streamlit page, the CLI) keep one OscillationTracker and hand its
logs to the pure classification functions.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .classify import DEFAULT_PROFILE, compute_frequency_label, compute_momentum_phase
from .domain import EngineProfile, FieldEntry, FieldLog, Pole, StateEntry, StateLog
from .labels import classify_pole
from .reflect import compose_reflection
from .store import (
    check_schema_version,
    load_field_log,
    load_state_log,
    save_field_log,
    save_state_log,
)
from .summary import HistorySummary, summarize_last_7_days
from .timefmt import day_key, now_ms

logger = logging.getLogger(__name__)


class OscillationTracker:

    def __init__(
        self,
        store,
        profile: EngineProfile = DEFAULT_PROFILE,
        clock: Callable[[], int] = now_ms,
    ):
        self.store = store
        self.profile = profile
        self.clock = clock

        check_schema_version(store)
        self._state_log: StateLog = load_state_log(store)
        self._field_log: FieldLog = load_field_log(store)
        logger.debug(
            "Loaded %d states, %d ground / %d flight field entries",
            len(self._state_log), len(self._field_log.ground), len(self._field_log.flight),
        )

    # -----------------------------
    # Mutations
    # -----------------------------
    def log_state(self, raw_value: int, energy: int, note: str = "") -> StateEntry:
        """
        Append a state entry and persist the state log.

        Inputs are not range-checked; the caller clamps the slider and energy.
        If the save fails the entry stays in memory and the error propagates.
        """
        timestamp = self.clock()
        entry = StateEntry(
            timestamp=timestamp,
            day_key=day_key(timestamp),
            pole=classify_pole(raw_value, self.profile.pole_threshold),
            raw_value=raw_value,
            energy=energy,
            note=(note or "").strip(),
        )
        self._state_log.append(entry)
        save_state_log(self.store, self._state_log)
        logger.info("Logged %s state (raw=%s, energy=%s)", entry.pole.value, raw_value, energy)
        return entry

    def log_field(self, kind, text: str) -> Optional[FieldEntry]:
        """
        Append an observation to the ground or flight side.

        Returns None and changes nothing when the text is empty after trimming.
        """
        if isinstance(kind, Pole):
            kind = kind.value.lower()
        side = self._field_log.side(kind)

        text = (text or "").strip()
        if not text:
            return None

        entry = FieldEntry(timestamp=self.clock(), text=text)
        side.append(entry)
        save_field_log(self.store, self._field_log)
        logger.info("Logged %s field entry", kind)
        return entry

    def reset_all(self) -> None:
        """Clear both logs and persist the empty collections. Cannot be undone."""
        self._state_log = []
        self._field_log = FieldLog()
        save_state_log(self.store, self._state_log)
        save_field_log(self.store, self._field_log)
        logger.info("Reset all data")

    # -----------------------------
    # Reads
    # -----------------------------
    @property
    def state_log(self) -> tuple[StateEntry, ...]:
        return tuple(self._state_log)

    @property
    def field_log(self) -> FieldLog:
        return self._field_log.copy()

    def today_key(self) -> str:
        return day_key(self.clock())

    def today_entries(self, today: Optional[str] = None) -> list[StateEntry]:
        today = today or self.today_key()
        return [e for e in self._state_log if e.day_key == today]

    def momentum_phase(self) -> str:
        return compute_momentum_phase(self._state_log, self.profile)

    def frequency_label(self) -> str:
        return compute_frequency_label(self._state_log, self.profile)

    def reflection(self) -> str:
        return compose_reflection(self._state_log, self.profile)

    def history_summary(self, now: Optional[int] = None) -> HistorySummary:
        now = self.clock() if now is None else now
        return summarize_last_7_days(self._state_log, now, self.profile)
