"""Shared helpers for building state logs in tests."""

import pytest

from oscillation_os.domain import Pole, StateEntry
from oscillation_os.store import MemoryStore
from oscillation_os.timefmt import day_key

MINUTE_MS = 60_000
BASE_TS = 1_760_000_000_000  # fixed epoch ms so tests don't depend on the clock

RAW_FOR_POLE = {Pole.GROUND: -50, Pole.FLIGHT: 50, Pole.CENTER: 0}


def make_entry(pole: Pole, timestamp: int = BASE_TS, energy: int = 3, note: str = "") -> StateEntry:
    return StateEntry(
        timestamp=timestamp,
        day_key=day_key(timestamp),
        pole=pole,
        raw_value=RAW_FOR_POLE[pole],
        energy=energy,
        note=note,
    )


def make_log(poles, gap_minutes: float = 5, start: int = BASE_TS) -> list[StateEntry]:
    """Entries with the given poles, evenly spaced gap_minutes apart."""
    return [
        make_entry(p, timestamp=int(start + i * gap_minutes * MINUTE_MS))
        for i, p in enumerate(poles)
    ]


class FakeClock:
    """Manually advanced clock returning ms since epoch."""

    def __init__(self, start: int = BASE_TS):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now += int(minutes * MINUTE_MS)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()
