"""Total label functions: pole from slider position, words for energy levels."""

from __future__ import annotations

from .domain import Pole


DEFAULT_POLE_THRESHOLD = 10

ENERGY_LABELS = {
    1: "Drained",
    2: "Low",
    3: "Neutral",
    4: "Charged",
    5: "Electric",
}
ENERGY_FALLBACK = "Neutral"

POLE_CAPTIONS = {
    Pole.FLIGHT: "FLIGHT – creative / refined",
    Pole.GROUND: "GROUND – body / real work",
    Pole.CENTER: "CENTER – reset / neutral",
}


def _as_number(value) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if num != num:  # NaN
        return None
    return num


def classify_pole(raw_value, threshold: int = DEFAULT_POLE_THRESHOLD) -> Pole:
    """
    Map a slider position to a pole.

    raw > threshold is FLIGHT, raw < -threshold is GROUND, everything in
    [-threshold, threshold] is CENTER. Both boundaries themselves are CENTER.
    Input that is not a number is CENTER as well; this function never raises.
    """
    num = _as_number(raw_value)
    if num is None:
        return Pole.CENTER
    if num > threshold:
        return Pole.FLIGHT
    if num < -threshold:
        return Pole.GROUND
    return Pole.CENTER


def describe_energy(level) -> str:
    """
    Word for an energy rating 1..5.

    Any other value (0, 6, 2.5, None, "abc") maps to "Neutral".
    """
    num = _as_number(level)
    if num is None or not num.is_integer():
        return ENERGY_FALLBACK
    return ENERGY_LABELS.get(int(num), ENERGY_FALLBACK)


def describe_pole(pole: Pole) -> str:
    return POLE_CAPTIONS.get(pole, POLE_CAPTIONS[Pole.CENTER])


def energy_bolts(level) -> str:
    num = _as_number(level)
    count = int(num) if num is not None and num >= 1 else 1
    return "⚡" * count
