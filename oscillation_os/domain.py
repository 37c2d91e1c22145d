from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class Pole(str, Enum):
    GROUND = "GROUND"
    FLIGHT = "FLIGHT"
    CENTER = "CENTER"

    @property
    def momentum(self) -> int:
        # signed direction used by the momentum classifier
        if self is Pole.FLIGHT:
            return 1
        if self is Pole.GROUND:
            return -1
        return 0


FIELD_KINDS = ("ground", "flight")


# -----------------------------
# Configuration / "Engine Profile"
# -----------------------------
@dataclass(frozen=True)
class EngineProfile:
    name: str = "Default"
    pole_threshold: int = 10    # |raw| must exceed this to leave CENTER

    long_gap_minutes: float = 180.0     # a gap longer than this is a slow transition
    momentum_window: int = 4    # entries looked at for the momentum phase
    min_entries_for_phase: int = 2
    min_entries_for_frequency: int = 3
    min_entries_for_reflection: int = 3

    history_days: int = 7

    # (mean gap lower bound in minutes, label), evaluated top-down, strict ">"
    frequency_buckets: tuple[tuple[float, str], ...] = field(
        default=(
            (240.0, "Very Low (long stretches)"),
            (90.0, "Low"),
            (30.0, "Medium"),
            (10.0, "High"),
        )
    )
    frequency_fallback: str = "Humming"


@dataclass(frozen=True)
class StateEntry:
    """One logged state: where the slider sat, how charged the user felt, and a note."""
    timestamp: int      # ms since epoch
    day_key: str        # local "YYYY-MM-DD" at creation
    pole: Pole
    raw_value: int      # slider position, -100..100
    energy: int         # 1..5
    note: str = ""

    @property
    def intensity(self) -> int:
        return abs(int(self.raw_value))


@dataclass(frozen=True)
class FieldEntry:
    timestamp: int
    text: str


@dataclass
class FieldLog:
    """Observations tagged to each pole. Both sides are append-only, oldest first."""
    ground: list[FieldEntry] = field(default_factory=list)
    flight: list[FieldEntry] = field(default_factory=list)

    def side(self, kind: str) -> list[FieldEntry]:
        if kind == "ground":
            return self.ground
        if kind == "flight":
            return self.flight
        raise ValueError(f"Unknown field kind {kind!r}. Expected one of {FIELD_KINDS}.")

    def newest_first(self, kind: str) -> list[FieldEntry]:
        return list(reversed(self.side(kind)))

    def copy(self) -> "FieldLog":
        return FieldLog(ground=list(self.ground), flight=list(self.flight))


# The state log is a plain chronological list of StateEntry.
StateLog = list[StateEntry]
