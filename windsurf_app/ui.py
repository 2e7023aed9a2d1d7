from dataclasses import fields

import streamlit as st

from .config import SLIDERS
from .model import TopSpeedResult
from .physics import Inputs, Outputs, mps_to_knots
from .presets import PresetError, PresetStore
from .url import apply_inputs_to_state


def _slider(label, key, unit=None, help=None):
    lo, hi, step = SLIDERS[key]
    st.sidebar.slider(f"{label} ({unit})" if unit else label, lo, hi, step=step, key=key, help=help)

def current_inputs(state=None) -> Inputs:
    state = st.session_state if state is None else state
    return Inputs(**{f.name: float(state[f.name]) for f in fields(Inputs)})

def sidebar_controls():
    st.sidebar.header("Inputs")

    st.sidebar.subheader("Environment")
    _slider("True wind speed", "true_wind_mps", "m/s",
            help=f"{mps_to_knots(st.session_state['true_wind_mps']):.1f} kn")
    _slider("Course angle (0=DW, 180=UW)", "course_angle_deg", "deg")
    _slider("Board speed", "board_speed_mps", "m/s")

    st.sidebar.subheader("Board & water drag (simple)")
    _slider("Water drag C0 (baseline)", "water_c0", "N")
    _slider("Water drag C2 (quadratic)", "water_c2", "N/(m/s)²")

    st.sidebar.subheader("Rig & trim")
    _slider("Sail area", "sail_area_m2", "m²")
    _slider("Sheeting angle", "sheeting_deg", "deg", help="Clamped to ±85° in the model.")
    _slider("Downhaul", "downhaul", help="More = flatter sail.")
    _slider("Outhaul", "outhaul", help="More = flatter sail.")

    return current_inputs(), float(st.session_state["water_c0"]), float(st.session_state["water_c2"])

def telemetry(out: Outputs, top: TopSpeedResult):
    c1, c2, c3, c4, c5 = st.columns(5)
    c1.metric("Apparent wind speed", f"{out.apparent_wind_mps:.2f} m/s")
    c2.metric("Apparent wind angle", f"{out.apparent_wind_angle_deg:.1f}°")
    c3.metric("Effective AoA (alpha)", f"{out.alpha_deg:.1f}°")
    c4.metric("CL", f"{out.cl:.3f}")
    c5.metric("CD", f"{out.cd:.3f}")

    c1, c2, c3, c4, c5 = st.columns(5)
    c1.metric("Lift", f"{out.lift_N:.0f} N")
    c2.metric("Drag", f"{out.drag_N:.0f} N")
    c3.metric("Drive (forward)", f"{out.drive_N:.0f} N")
    c4.metric("Side force", f"{out.side_N:.0f} N")
    c5.metric("Aero power", f"{out.power_W:.0f} W")

    c1, c2 = st.columns(2)
    c1.metric("Estimated top speed", f"{top.speed_mps:.1f} m/s ({top.speed_kn:.1f} kn)")
    c2.metric("At top speed: drive vs water drag", f"{top.drive_N:.0f} N vs {top.water_drag_N:.0f} N")

# Preset callbacks run before the widgets are drawn, so they may write widget keys
def _save_preset(store: PresetStore):
    name = st.session_state["preset_name"].strip()
    store.upsert(name, current_inputs())
    if name:
        st.session_state["preset_selected"] = name

def _load_selected(store: PresetStore):
    p = store.find(st.session_state.get("preset_selected", ""))
    if p is not None:
        apply_inputs_to_state(p.inputs)

def _delete_selected(store: PresetStore):
    name = st.session_state.get("preset_selected", "")
    if name:
        store.delete(name)
        st.session_state["preset_selected"] = ""

def _import_presets(store: PresetStore):
    try:
        store.import_json(st.session_state.get("preset_import_text", ""))
    except PresetError as e:
        st.session_state["preset_error"] = str(e)
    else:
        st.session_state["preset_error"] = None
        st.session_state["preset_selected"] = ""

def presets_panel(store: PresetStore):
    st.session_state.setdefault("preset_name", "My preset")
    st.session_state.setdefault("preset_selected", "")
    presets = store.load()
    names = [""] + [p.name for p in presets]
    if st.session_state["preset_selected"] not in names:
        st.session_state["preset_selected"] = ""

    c1, c2 = st.columns([3, 1])
    c1.text_input("Preset name", key="preset_name")
    c2.button("Save", on_click=_save_preset, args=(store,))

    c1, c2, c3 = st.columns([2, 1, 1])
    c1.selectbox("Presets", names, key="preset_selected",
                 format_func=lambda n: n or "-- select preset --",
                 on_change=_load_selected, args=(store,))
    c2.button("Load", on_click=_load_selected, args=(store,))
    c3.button("Delete", on_click=_delete_selected, args=(store,))

    st.download_button("Export JSON", data=store.export_json(), file_name="windsurf_presets.json",
                       mime="application/json")
    st.text_area("Paste presets JSON here to import.", key="preset_import_text", height=140)
    st.button("Import JSON", on_click=_import_presets, args=(store,))
    if st.session_state.get("preset_error"):
        st.error(f"Import failed: {st.session_state['preset_error']}")
