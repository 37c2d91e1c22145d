"""Tabular views of the logs for display."""

from __future__ import annotations
from typing import Sequence

import pandas as pd

from .domain import FieldEntry, StateEntry
from .labels import describe_energy
from .timefmt import to_local_datetime


STATE_COLUMNS = [
    "timestamp", "time", "dayKey", "pole", "rawValue",
    "intensity", "energy", "energyLabel", "note",
]
FIELD_COLUMNS = ["timestamp", "time", "text"]


def state_log_frame(entries: Sequence[StateEntry], newest_first: bool = False) -> pd.DataFrame:
    """
    One row per state entry.

    Returns a DataFrame with columns:
      timestamp, time, dayKey, pole, rawValue, intensity, energy, energyLabel, note
    """
    if len(entries) == 0:
        return pd.DataFrame(columns=STATE_COLUMNS)

    df = pd.DataFrame(
        {
            "timestamp": [e.timestamp for e in entries],
            "dayKey": [e.day_key for e in entries],
            "pole": [e.pole.value for e in entries],
            "rawValue": [e.raw_value for e in entries],
            "intensity": [e.intensity for e in entries],
            "energy": [e.energy for e in entries],
            "energyLabel": [describe_energy(e.energy) for e in entries],
            "note": [e.note for e in entries],
        }
    )
    df["time"] = pd.to_datetime([to_local_datetime(e.timestamp) for e in entries])
    df = df[STATE_COLUMNS]

    if newest_first:
        df = df.iloc[::-1].reset_index(drop=True)
    return df


def field_log_frame(entries: Sequence[FieldEntry], newest_first: bool = True) -> pd.DataFrame:
    if len(entries) == 0:
        return pd.DataFrame(columns=FIELD_COLUMNS)

    df = pd.DataFrame(
        {
            "timestamp": [e.timestamp for e in entries],
            "text": [e.text for e in entries],
        }
    )
    df["time"] = pd.to_datetime([to_local_datetime(e.timestamp) for e in entries])
    df = df[FIELD_COLUMNS]

    if newest_first:
        df = df.iloc[::-1].reset_index(drop=True)
    return df
