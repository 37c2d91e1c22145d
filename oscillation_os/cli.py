"""
Command-line front end for the oscillation tracker.

How to run:
    oscillation-os state 40 --energy 4 --note "long walk"
    oscillation-os field ground "run 5k"
    oscillation-os status
    oscillation-os status --plot outputs/timeline.png
    oscillation-os fields
    oscillation-os reset --yes
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .analyze import analyze
from .classify import pole_change_gaps
from .domain import FIELD_KINDS
from .labels import describe_energy, describe_pole, energy_bolts
from .store import JsonStore
from .summary import EMPTY_HISTORY_MESSAGE
from .timefmt import format_date_short, format_time
from .tracker import OscillationTracker

logger = logging.getLogger(__name__)

NO_STATES_TODAY = "No states logged yet today. Log one above to start today’s cycle."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oscillation-os", description="Log Ground/Flight states and read your oscillation pattern.")
    parser.add_argument("--data-dir", type=str, default=None, help="Directory holding the logs (default: $OSCILLATION_OS_DATA_DIR or ~/.oscillation-os)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_state = sub.add_parser("state", help="Log a state from a slider value (-100 Ground .. 100 Flight)")
    p_state.add_argument("raw_value", type=int, help="Slider position, -100..100")
    p_state.add_argument("--energy", type=int, default=3, choices=range(1, 6), help="Energy rating 1..5")
    p_state.add_argument("--note", type=str, default="", help="Free-text note")

    p_field = sub.add_parser("field", help="Log a Ground or Flight observation")
    p_field.add_argument("kind", choices=FIELD_KINDS)
    p_field.add_argument("text", type=str)

    p_status = sub.add_parser("status", help="Show phase, frequency, reflection and today's log")
    p_status.add_argument("--plot", type=str, default=None, help="Save a timeline PNG to this path")

    sub.add_parser("fields", help="List field entries, newest first")

    p_reset = sub.add_parser("reset", help="Delete all states and field entries")
    p_reset.add_argument("--yes", action="store_true", help="Confirm the reset; it cannot be undone")

    return parser


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def cmd_state(tracker: OscillationTracker, args) -> int:
    entry = tracker.log_state(_clamp(args.raw_value, -100, 100), args.energy, args.note)
    print(f"{format_time(entry.timestamp)} • {describe_pole(entry.pole)} ({entry.intensity}%) • {describe_energy(entry.energy)}")
    print(f"Momentum: {tracker.momentum_phase()} | Frequency: {tracker.frequency_label()}")
    return 0


def cmd_field(tracker: OscillationTracker, args) -> int:
    entry = tracker.log_field(args.kind, args.text)
    if entry is None:
        print("Nothing logged: text is empty.", file=sys.stderr)
        return 1
    print(f"{args.kind.upper()} • {format_time(entry.timestamp)} {format_date_short(entry.timestamp)} • {entry.text}")
    return 0


def cmd_status(tracker: OscillationTracker, args) -> int:
    readout = analyze(tracker.state_log, tracker.clock(), tracker.today_key(), tracker.profile)

    print(f"Momentum phase: {readout.phase}")
    print(f"Frequency:      {readout.frequency}")
    gaps = pole_change_gaps(tracker.state_log)
    if gaps:
        print(f"Pole changes:   {len(gaps)} (mean gap {sum(gaps) / len(gaps):.1f} min)")
    else:
        print("Pole changes:   0")
    print()
    print(readout.reflection)
    print()
    if readout.summary.is_empty:
        print(EMPTY_HISTORY_MESSAGE)
    else:
        s = readout.summary
        print(f"GROUND {s.ground_count:>4}  FLIGHT {s.flight_count:>4}")
        print(s.caption())
    print()

    print("Today:")
    if not readout.today:
        print(f"  {NO_STATES_TODAY}")
    for e in reversed(readout.today):
        print(f"  {format_time(e.timestamp)} • {e.pole.value:<6} {energy_bolts(e.energy)}  {e.note or '(no note)'}")

    if args.plot:
        from .frame import state_log_frame
        from .render import make_timeline_figure

        plot_path = Path(args.plot)
        plot_path.parent.mkdir(parents=True, exist_ok=True)
        fig = make_timeline_figure(state_log_frame(tracker.state_log), tracker.profile)
        fig.savefig(plot_path, dpi=150)
        print(f"Plot: {plot_path}")
    return 0


def cmd_fields(tracker: OscillationTracker, args) -> int:
    field_log = tracker.field_log
    for kind in FIELD_KINDS:
        print(f"{kind.upper()}:")
        entries = field_log.newest_first(kind)
        if not entries:
            print("  (empty)")
        for e in entries:
            print(f"  {format_time(e.timestamp)} {format_date_short(e.timestamp)} • {e.text}")
    return 0


def cmd_reset(tracker: OscillationTracker, args) -> int:
    if not args.yes:
        print("Reset all Oscillation OS data? This cannot be undone. Re-run with --yes.", file=sys.stderr)
        return 1
    tracker.reset_all()
    print("All data reset.")
    return 0


COMMANDS = {
    "state": cmd_state,
    "field": cmd_field,
    "status": cmd_status,
    "fields": cmd_fields,
    "reset": cmd_reset,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    tracker = OscillationTracker(JsonStore(args.data_dir))
    return COMMANDS[args.command](tracker, args)


if __name__ == "__main__":
    sys.exit(main())
