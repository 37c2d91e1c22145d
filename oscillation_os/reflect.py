"""Turns the momentum phase and frequency label into a short reflection."""

from __future__ import annotations
from typing import Sequence

from .classify import DEFAULT_PROFILE, FLAT, compute_frequency_label, compute_momentum_phase
from .domain import EngineProfile, StateEntry


NOT_ENOUGH_STATES = "Log at least 3 states to unlock pattern reflections."

# Checked in order with str.startswith; "Low (warming up)" lands on "Low".
PREFIX_ADVICE: tuple[tuple[str, str], ...] = (
    (
        "Very Low",
        "Your engine is on long stretches. Nothing wrong with that, but consider a "
        "deliberate snap: a strong Ground move followed by a clean Flight session.",
    ),
    (
        "Low",
        "Low oscillation frequency. You’re holding phases for a while. Choose one "
        "sharp contrasting action to nudge the loop.",
    ),
    (
        "Medium",
        "You’re in a healthy medium oscillation. Keep one meaningful Ground move and "
        "one focused Flight move each day to maintain the hum.",
    ),
    (
        "High",
        "High oscillation frequency. You’re switching states often. Protect recovery "
        "windows and make sure each switch is intentional, not reactive.",
    ),
    (
        "Humming",
        "Humming. Your engine is running close to its natural rhythm. This is prime "
        "territory for deep creation and structural decisions.",
    ),
)

FLAT_ADVICE = (
    "Flat pattern. Poles aren’t switching much. Either you’re resting (good) or stuck "
    "(less good). A single decisive move can restart the loop."
)

FORMING_ADVICE = (
    "Your pattern is still forming. Keep logging honestly; the engine will surface a "
    "clearer rhythm soon."
)


def advice_for(freq: str) -> str:
    for prefix, message in PREFIX_ADVICE:
        if freq.startswith(prefix):
            return message
    if freq == FLAT:
        return FLAT_ADVICE
    return FORMING_ADVICE


def compose_reflection(
    log: Sequence[StateEntry],
    profile: EngineProfile = DEFAULT_PROFILE,
) -> str:
    if len(log) < profile.min_entries_for_reflection:
        return NOT_ENOUGH_STATES

    phase = compute_momentum_phase(log, profile)
    freq = compute_frequency_label(log, profile)
    return f"{phase} • {freq}. {advice_for(freq)}"
