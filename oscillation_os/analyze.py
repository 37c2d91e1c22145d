"""Pipeline orchestration: recompute every derived view of the state log."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

from .classify import DEFAULT_PROFILE, compute_frequency_label, compute_momentum_phase
from .domain import EngineProfile, StateEntry
from .reflect import compose_reflection
from .summary import HistorySummary, summarize_last_7_days


@dataclass(frozen=True)
class Readout:
    phase: str
    frequency: str
    reflection: str
    summary: HistorySummary
    today: tuple[StateEntry, ...]   # chronological; display order is the caller's concern


def analyze(
    log: Sequence[StateEntry],
    now: int,
    today_key: str,
    profile: EngineProfile = DEFAULT_PROFILE,
) -> Readout:
    """
    Run the full set of derivations after a mutation.

    Orchestrates:
    1. Momentum phase of the latest transition
    2. Oscillation frequency over the whole log
    3. Reflection sentence
    4. 7-day Ground/Flight distribution
    5. Today's entries

    Args:
        log: Full chronological state log
        now: Current time, ms since epoch
        today_key: Local "YYYY-MM-DD" to select today's entries
        profile: Engine profile with thresholds

    Returns:
        Readout with every derived view
    """
    return Readout(
        phase=compute_momentum_phase(log, profile),
        frequency=compute_frequency_label(log, profile),
        reflection=compose_reflection(log, profile),
        summary=summarize_last_7_days(log, now, profile),
        today=tuple(e for e in log if e.day_key == today_key),
    )
