from __future__ import annotations
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .domain import EngineProfile
from .summary import HistorySummary

GROUND_COLOR = "#f57c6b"
FLIGHT_COLOR = "#66e0ff"
CENTER_COLOR = "#9e9e9e"


def make_history_figure(summary: HistorySummary):
    """Two horizontal bars: share of GROUND and FLIGHT states in the last 7 days."""
    fig, ax = plt.subplots(figsize=(6, 1.8))

    labels = ["GROUND", "FLIGHT"]
    pcts = [summary.ground_pct, summary.flight_pct]
    counts = [summary.ground_count, summary.flight_count]
    colors = [GROUND_COLOR, FLIGHT_COLOR]

    y = np.arange(len(labels))
    ax.barh(y, [100, 100], color="#eeeeee", height=0.5)    # track
    ax.barh(y, pcts, color=colors, height=0.5)
    for yi, count in zip(y, counts):
        ax.text(102, yi, str(count), va="center")

    ax.set_yticks(y)
    ax.set_yticklabels(labels)
    ax.set_xlim(0, 110)
    ax.invert_yaxis()
    ax.set_xticks([])
    for side in ("top", "right", "bottom"):
        ax.spines[side].set_visible(False)

    ax.set_title(summary.caption(), fontsize=9, loc="left")
    fig.tight_layout()
    return fig


def make_timeline_figure(frame: pd.DataFrame, profile: EngineProfile = EngineProfile()):
    """
    Slider position over time, colored by pole, with marker size from energy.

    Expects the columns produced by frame.state_log_frame.
    """
    fig, ax = plt.subplots(figsize=(10, 3))

    if len(frame) > 0:
        df = frame.sort_values("timestamp")
        t = df["time"]
        raw = df["rawValue"].to_numpy(float)
        energy = pd.to_numeric(df["energy"], errors="coerce").fillna(1).to_numpy(float)
        colors = df["pole"].map(
            {"GROUND": GROUND_COLOR, "FLIGHT": FLIGHT_COLOR}
        ).fillna(CENTER_COLOR)

        ax.plot(t, raw, linewidth=1.0, color="#555555", alpha=0.5)
        ax.scatter(t, raw, s=20 + 15 * np.clip(energy, 1, 5), c=list(colors), zorder=3)

    ax.axhline(profile.pole_threshold, linestyle=":", linewidth=1.2, color=FLIGHT_COLOR, label="Flight threshold")
    ax.axhline(-profile.pole_threshold, linestyle=":", linewidth=1.2, color=GROUND_COLOR, label="Ground threshold")
    ax.axhline(0.0, linestyle="--", linewidth=0.8, color=CENTER_COLOR)

    ax.set_ylim(-105, 105)
    ax.set_ylabel("Ground  ←  slider  →  Flight")
    ax.grid(True, alpha=0.2)
    ax.legend(loc="upper right")

    fig.tight_layout()
    return fig
