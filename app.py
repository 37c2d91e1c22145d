import streamlit as st

from oscillation_os.analyze import analyze
from oscillation_os.domain import Pole
from oscillation_os.frame import field_log_frame, state_log_frame
from oscillation_os.labels import classify_pole, describe_energy, describe_pole, energy_bolts
from oscillation_os.render import make_history_figure, make_timeline_figure
from oscillation_os.store import JsonStore
from oscillation_os.summary import EMPTY_HISTORY_MESSAGE
from oscillation_os.timefmt import format_header_date, format_time
from oscillation_os.tracker import OscillationTracker

NO_STATES_TODAY = "No states logged yet today. Log one above to start today’s cycle."


# -----------------------------
# Streamlit page setup
# -----------------------------
st.set_page_config(page_title="Oscillation OS", layout="wide")
st.title("Oscillation OS")
st.caption(format_header_date())


# -----------------------------
# Session-state helper
# -----------------------------
def _get_tracker() -> OscillationTracker:
    if "tracker" not in st.session_state:
        st.session_state["tracker"] = OscillationTracker(JsonStore())
    return st.session_state["tracker"]


def _persist(action, *args):
    """Run a mutating tracker call; a failed save keeps the session going."""
    try:
        return action(*args)
    except OSError as e:
        st.error(f"Could not save to disk: {e}. The entry is kept for this session only.")
        return None


def _on_set_state() -> None:
    ss = st.session_state
    entry = _persist(_get_tracker().log_state, ss["pole_slider"], ss["energy_slider"], ss.get("state_note", ""))
    if entry is not None:
        st.session_state["state_note"] = ""


def _on_add_field(kind: str) -> None:
    entry = _persist(_get_tracker().log_field, kind, st.session_state.get(f"{kind}_input", ""))
    if entry is not None:
        st.session_state[f"{kind}_input"] = ""


def _on_reset() -> None:
    _persist(_get_tracker().reset_all)


tracker = _get_tracker()


# -----------------------------
# State input
# -----------------------------
col_state, col_meta = st.columns([2, 1])

with col_state:
    st.subheader("Current state")
    raw_value = st.slider("Ground ← → Flight", min_value=-100, max_value=100, value=0, step=1, key="pole_slider")
    pole = classify_pole(raw_value, tracker.profile.pole_threshold)
    st.markdown(f"**{describe_pole(pole)}** · intensity {abs(raw_value)}%")

    energy = st.slider("Energy", min_value=1, max_value=5, value=3, step=1, key="energy_slider")
    st.caption(describe_energy(energy))

    st.text_input("Note", key="state_note")
    st.button("Set state", key="set_state", on_click=_on_set_state)


readout = analyze(tracker.state_log, tracker.clock(), tracker.today_key(), tracker.profile)

with col_meta:
    st.metric("Momentum phase", readout.phase)
    st.metric("Frequency", readout.frequency)


# -----------------------------
# Reflection + history
# -----------------------------
st.subheader("Engine reflection")
st.write(readout.reflection)

st.subheader("Last 7 days")
if readout.summary.is_empty:
    st.info(EMPTY_HISTORY_MESSAGE)
else:
    st.pyplot(make_history_figure(readout.summary), clear_figure=True)

if len(tracker.state_log) > 0:
    with st.expander("Timeline"):
        st.pyplot(make_timeline_figure(state_log_frame(tracker.state_log), tracker.profile), clear_figure=True)


# -----------------------------
# Today's log
# -----------------------------
st.subheader("Today")
if not readout.today:
    st.caption(NO_STATES_TODAY)
else:
    for e in reversed(readout.today):
        st.markdown(
            f"`{format_time(e.timestamp)}` **{e.pole.value}** {energy_bolts(e.energy)}  \n"
            f"{e.note or '_No note_'}"
        )


# -----------------------------
# Field logs
# -----------------------------
st.subheader("Field")
col_ground, col_flight = st.columns(2)

for col, kind in ((col_ground, Pole.GROUND), (col_flight, Pole.FLIGHT)):
    key = kind.value.lower()
    with col:
        st.markdown(f"**{kind.value}**")
        st.text_input(f"Add {key} observation", key=f"{key}_input")
        st.button(f"Add {key}", key=f"{key}_add", on_click=_on_add_field, args=(key,))
        frame = field_log_frame(tracker.field_log.side(key))
        if len(frame) == 0:
            st.caption("Nothing logged yet.")
        else:
            st.dataframe(frame[["time", "text"]], use_container_width=True, hide_index=True)


# -----------------------------
# Reset
# -----------------------------
st.divider()
with st.expander("Reset"):
    confirm = st.checkbox("I understand this deletes all Oscillation OS data and cannot be undone.")
    st.button("Reset all data", key="reset_all", disabled=not confirm, on_click=_on_reset)
