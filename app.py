# Streamlit app: windsurf apparent wind + sail forces, with presets and shareable links
import streamlit as st

from windsurf_app.config import DEFAULTS, settings
from windsurf_app.logging_config import setup_logging
from windsurf_app.model import top_speed, speed_sweep
from windsurf_app.physics import compute
from windsurf_app.presets import PresetStore
from windsurf_app.ui import sidebar_controls, telemetry, presets_panel
from windsurf_app.url import init_state_from_query, update_share_url
from windsurf_app.viz import force_diagram, drive_side_diagram, speed_sweep_chart

st.set_page_config(page_title="Windsurf Physics — Apparent Wind + Sail Forces", layout="wide")

SETTINGS = settings()
setup_logging(SETTINGS["log_level"], SETTINGS["log_file"])
store = PresetStore(SETTINGS["presets_path"])

# Initialize state (defaults + apply query string if present)
init_state_from_query(DEFAULTS)

# -------------------------
# Sidebar Controls (all widgets keyed to session_state)
# -------------------------
inputs, water_c0, water_c2 = sidebar_controls()

out = compute(inputs)
top = top_speed(inputs, water_c0, water_c2)

# -------------------------
# Layout & UI
# -------------------------
st.title("Windsurf Physics")
st.caption("Apparent wind + simplified sail forces. Board frame: +x forward, +y starboard.")

telemetry(out, top)

tab_forces, tab_side, tab_speed, tab_presets = st.tabs(["Forces", "Drive / Side", "Top speed", "Presets / Share"])

with tab_forces:
    st.plotly_chart(force_diagram(out))

with tab_side:
    st.plotly_chart(drive_side_diagram(inputs, out))

with tab_speed:
    df = speed_sweep(inputs, water_c0, water_c2)
    st.plotly_chart(speed_sweep_chart(df, top))
    st.caption("Top speed is the fastest sampled speed (0–30 m/s, 0.1 m/s steps) where sail drive still covers "
               "water drag C0 + C2·V².")

with tab_presets:
    st.subheader("Presets")
    presets_panel(store)

    st.subheader("Share this exact setup")
    c1, c2 = st.columns(2)
    with c1:
        if st.button("Update shareable URL"):
            update_share_url()
            st.success("URL updated — copy it from your browser's address bar and share.")
    with c2:
        if st.button("Clear URL parameters"):
            st.query_params.clear()
            st.success("Cleared — the URL has no parameters now.")
