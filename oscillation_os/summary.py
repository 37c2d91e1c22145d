"""Ground vs Flight distribution over the recent history window."""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Sequence

from .classify import DEFAULT_PROFILE
from .domain import EngineProfile, Pole, StateEntry
from .timefmt import MS_PER_DAY


EMPTY_HISTORY_MESSAGE = (
    "When you’ve logged a few days of states, this panel will show your "
    "Ground vs Flight distribution for the last 7 days."
)


@dataclass(frozen=True)
class HistorySummary:
    ground_count: int
    flight_count: int
    ground_pct: int
    flight_pct: int
    recent_count: int   # entries in the window, CENTER included

    @property
    def is_empty(self) -> bool:
        return self.recent_count == 0

    def caption(self) -> str:
        return f"Last 7 days • {self.ground_pct}% Ground, {self.flight_pct}% Flight"


def round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; percentages round .5 upwards
    return int(math.floor(x + 0.5))


def summarize_last_7_days(
    log: Sequence[StateEntry],
    now: int,
    profile: EngineProfile = DEFAULT_PROFILE,
) -> HistorySummary:
    """
    Count GROUND and FLIGHT entries logged since now - 7 days (inclusive).

    CENTER entries are in neither count but still make the window non-empty.
    Each percentage is rounded on its own against ground + flight (at least 1),
    so a window of only CENTER entries reads 0% / 0%.

    Args:
        log: Full state log
        now: Current time, ms since epoch
        profile: Engine profile with the window length in days

    Returns:
        HistorySummary; check is_empty before showing percentages
    """
    window_start = now - profile.history_days * MS_PER_DAY
    recent = [e for e in log if e.timestamp >= window_start]

    ground_count = sum(1 for e in recent if e.pole == Pole.GROUND)
    flight_count = sum(1 for e in recent if e.pole == Pole.FLIGHT)

    total = (ground_count + flight_count) or 1
    return HistorySummary(
        ground_count=ground_count,
        flight_count=flight_count,
        ground_pct=round_half_up(100 * ground_count / total),
        flight_pct=round_half_up(100 * flight_count / total),
        recent_count=len(recent),
    )
