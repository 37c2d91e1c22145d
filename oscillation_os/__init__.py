"""
Oscillation OS - Ground/Flight State Tracker

A small engine for logging a two-pole behavioral state (GROUND vs FLIGHT,
with a neutral CENTER) and reading back the oscillation pattern: the
momentum phase of the latest transition, how often the poles alternate,
a short reflection and the 7-day Ground/Flight distribution.
"""

from .domain import EngineProfile, FieldEntry, FieldLog, Pole, StateEntry
from .labels import classify_pole, describe_energy, describe_pole
from .store import JsonStore, MemoryStore
from .classify import compute_momentum_phase, compute_frequency_label, pole_change_gaps
from .reflect import compose_reflection
from .summary import HistorySummary, summarize_last_7_days
from .tracker import OscillationTracker
from .analyze import Readout, analyze

__all__ = [
    # Domain models
    "EngineProfile",
    "FieldEntry",
    "FieldLog",
    "Pole",
    "StateEntry",
    # Labels
    "classify_pole",
    "describe_energy",
    "describe_pole",
    # Persistence
    "JsonStore",
    "MemoryStore",
    # Classification
    "compute_momentum_phase",
    "compute_frequency_label",
    "pole_change_gaps",
    "compose_reflection",
    # Summary
    "HistorySummary",
    "summarize_last_7_days",
    # State holder
    "OscillationTracker",
    # Pipeline
    "Readout",
    "analyze",
]

__version__ = "0.1.0"
