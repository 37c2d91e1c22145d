"""Momentum phase and oscillation frequency classification."""

from __future__ import annotations
from typing import Sequence

import numpy as np

from .domain import EngineProfile, Pole, StateEntry
from .timefmt import MS_PER_MINUTE


DEFAULT_PROFILE = EngineProfile()

# Momentum phase labels
SEEDING = "Seeding"
RESETTING = "Resetting"
GENTLE_RISE = "Gentle Rise"
DEEP_GROUNDING = "Deep Grounding"
ASCENT = "Ascent"
DESCENT = "Descent"
SNAP_TURN = "Snap Turn"
OSCILLATING = "Oscillating"

# Frequency labels outside the mean-gap buckets
WARMING_UP = "Low (warming up)"
FLAT = "Flat"


def minutes_between(earlier: StateEntry, later: StateEntry) -> float:
    """Signed gap in minutes; negative if the clock went backwards."""
    return (later.timestamp - earlier.timestamp) / MS_PER_MINUTE


def compute_momentum_phase(
    log: Sequence[StateEntry],
    profile: EngineProfile = DEFAULT_PROFILE,
) -> str:
    """
    Classify the most recent transition in the state log.

    The rules are an ordered chain; the first one that matches wins:
    1. fewer than 2 entries -> "Seeding"
    2. last entry is CENTER -> "Resetting"
    3. gap between the last two entries > long_gap_minutes
       -> "Gentle Rise" (into FLIGHT) or "Deep Grounding" (into GROUND)
    4. same pole repeated -> "Ascent" (FLIGHT) or "Descent" (GROUND)
    5. direct GROUND <-> FLIGHT switch -> "Snap Turn"
    6. coming out of CENTER -> "Oscillating"

    Args:
        log: Full chronological state log
        profile: Engine profile with the long-gap threshold

    Returns:
        Momentum phase label
    """
    if len(log) < profile.min_entries_for_phase:
        return SEEDING

    recent = list(log[-profile.momentum_window:])
    last = recent[-1]
    prev = recent[-2]

    if last.pole == Pole.CENTER:
        return RESETTING

    last_val = last.pole.momentum
    prev_val = prev.pole.momentum
    diff_minutes = minutes_between(prev, last)

    if diff_minutes > profile.long_gap_minutes:
        return GENTLE_RISE if last.pole == Pole.FLIGHT else DEEP_GROUNDING
    elif last_val == prev_val and last_val != 0:
        return ASCENT if last_val == 1 else DESCENT
    elif last_val != prev_val and last_val != 0 and prev_val != 0:
        return SNAP_TURN
    return OSCILLATING


def pole_change_gaps(log: Sequence[StateEntry]) -> list[float]:
    """
    Minutes between consecutive entries whose pole differs.

    Gaps are kept as-is, negative ones included.
    """
    gaps: list[float] = []
    for prev, curr in zip(log, log[1:]):
        if prev.pole != curr.pole:
            gaps.append(minutes_between(prev, curr))
    return gaps


def bucket_mean_gap(avg_minutes: float, profile: EngineProfile = DEFAULT_PROFILE) -> str:
    for lower, label in profile.frequency_buckets:
        if avg_minutes > lower:
            return label
    return profile.frequency_fallback


def compute_frequency_label(
    log: Sequence[StateEntry],
    profile: EngineProfile = DEFAULT_PROFILE,
) -> str:
    """
    Describe how fast the user alternates between poles.

    Averages the gaps between pole changes over the whole log and buckets the
    mean (minutes): >240 "Very Low (long stretches)", >90 "Low", >30 "Medium",
    >10 "High", otherwise "Humming". A log shorter than 3 entries is
    "Low (warming up)"; a log without any pole change is "Flat".
    """
    if len(log) < profile.min_entries_for_frequency:
        return WARMING_UP

    gaps = pole_change_gaps(log)
    if not gaps:
        return FLAT

    avg = float(np.mean(gaps))
    return bucket_mean_gap(avg, profile)
