import logging
import math
from dataclasses import asdict
from urllib.parse import urlencode

import streamlit as st

from .config import SLIDERS
from .physics import Inputs

logger = logging.getLogger(__name__)

# session_state key -> (query parameter, format)
QUERY_KEYS = dict(
    true_wind_mps=("tws", "{:.1f}"),
    course_angle_deg=("course", "{:.0f}"),
    board_speed_mps=("speed", "{:.1f}"),
    sail_area_m2=("area", "{:.1f}"),
    sheeting_deg=("sheet", "{:.0f}"),
    downhaul=("downhaul", "{:.2f}"),
    outhaul=("outhaul", "{:.2f}"),
    water_c0=("c0", "{:.0f}"),
    water_c2=("c2", "{:.1f}"),
)


def within_sliders(values):
    """Clamp values into their slider ranges; the widgets reject anything outside. Non-finite values are dropped."""
    out = {}
    for k, v in values.items():
        v = float(v)
        if not math.isfinite(v):
            logger.debug(f"Dropping non-finite value {k}={v!r}")
            continue
        lo, hi, _ = SLIDERS.get(k, (-math.inf, math.inf, None))
        out[k] = min(max(v, lo), hi)
    return out

def state_to_query(state):
    return {param: fmt.format(float(state[k])) for k, (param, fmt) in QUERY_KEYS.items()}

def query_to_state(qs):
    values = {}
    for k, (param, _) in QUERY_KEYS.items():
        raw = qs.get(param)
        if isinstance(raw, (list, tuple)):
            raw = raw[-1] if raw else None
        if raw is None:
            continue
        try:
            v = float(raw)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring query parameter {param}={raw!r}")
            continue
        if not math.isfinite(v):
            logger.debug(f"Ignoring non-finite query parameter {param}={raw!r}")
            continue
        values[k] = v
    return within_sliders(values)

def _apply_to_state(d):
    for k, v in d.items():
        if v is not None:
            st.session_state[k] = v

def init_state_from_query(defaults):
    # Populate defaults once
    for k, v in defaults.items():
        st.session_state.setdefault(k, v)

    if st.session_state.get('_qs_applied'):
        return

    _apply_to_state(query_to_state(st.query_params))
    st.session_state['_qs_applied'] = True

def update_share_url():
    params = state_to_query(st.session_state)
    st.query_params.from_dict(params)
    return '?' + urlencode(params)

def apply_inputs_to_state(inputs: Inputs):
    _apply_to_state(within_sliders(asdict(inputs)))
