import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULTS = dict(
    # Environment
    true_wind_mps=10.0,
    course_angle_deg=120.0,
    board_speed_mps=8.0,

    # Rig & trim
    sail_area_m2=6.5,
    sheeting_deg=20.0,
    downhaul=0.4,
    outhaul=0.3,

    # Board & water drag (simple)
    water_c0=30.0,    # N, baseline
    water_c2=1.2,     # N/(m/s)^2, quadratic
)

# (min, max, step) for each sidebar control
SLIDERS = dict(
    true_wind_mps=(2.0, 20.0, 0.5),
    course_angle_deg=(0.0, 180.0, 1.0),
    board_speed_mps=(0.0, 18.0, 0.5),
    sail_area_m2=(3.0, 10.0, 0.1),
    sheeting_deg=(-60.0, 60.0, 1.0),
    downhaul=(0.0, 1.0, 0.01),
    outhaul=(0.0, 1.0, 0.01),
    water_c0=(0.0, 200.0, 5.0),
    water_c2=(0.0, 5.0, 0.1),
)

# Physics
RHO_AIR = 1.225             # kg/m^3, sea level
CL_ALPHA_PER_DEG = 0.11
K_INDUCED = 0.06
SHEETING_LIMIT_DEG = 85.0
EPS = 1e-9

# Top-speed sweep
V_SWEEP_MAX_MPS = 30.0
V_SWEEP_STEP_MPS = 0.1

MPS_TO_KT = 1.943844

# Presets
PRESETS_MAX_SAVED = 50
PRESETS_MAX_IMPORTED = 200


def settings():
    return dict(
        presets_path=Path(os.getenv("WINDSURF_PRESETS_PATH", "~/.windsurf_presets.json")).expanduser(),
        log_level=os.getenv("WINDSURF_LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("WINDSURF_LOG_FILE") or None,
    )
