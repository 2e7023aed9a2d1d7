import logging
import math
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .config import V_SWEEP_MAX_MPS, V_SWEEP_STEP_MPS
from .physics import Inputs, force_vectors, mps_to_knots

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopSpeedResult:
    speed_mps: float
    drive_N: float
    water_drag_N: float

    @property
    def speed_kn(self) -> float:
        return mps_to_knots(self.speed_mps)


def sweep_speeds(v_max_mps=V_SWEEP_MAX_MPS, step_mps=V_SWEEP_STEP_MPS):
    """
    Board speeds 0, step, 2*step, ... up to v_max_mps (0, 0.1, ..., 30 -> 301 samples).

    The step is never stretched: when v_max_mps is not a whole number of steps the grid
    stops at the last full step below it. When it is, the last sample is exactly v_max_mps.
    """
    if not step_mps > 0:
        raise ValueError(f"step_mps must be positive, got {step_mps!r}")
    n = max(int(math.floor(v_max_mps / step_mps + 1e-9)), 0)
    if math.isclose(n * step_mps, v_max_mps):
        return np.linspace(0.0, v_max_mps, n + 1)
    return np.arange(n + 1) * step_mps

def water_drag(v, water_c0, water_c2):
    v = np.asarray(v, dtype=float)
    return water_c0 + water_c2 * v * v

def drive_vs_speed(inputs: Inputs, v):
    # Propulsive drive shows up as negative drive_N in the board frame
    out = force_vectors(inputs, board_speed_mps=v)
    return np.maximum(0.0, -out["drive_N"])

def top_speed(inputs: Inputs, water_c0: float, water_c2: float,
              v_max_mps=V_SWEEP_MAX_MPS, step_mps=V_SWEEP_STEP_MPS) -> TopSpeedResult:
    """
    Highest sampled board speed where sail drive still covers water drag.

    Every speed on the grid is evaluated (inputs.board_speed_mps is ignored) and the last
    sustainable sample wins, so with a non-monotonic drive curve this is the fastest
    sustainable point rather than the first crossing. Falls back to zero speed, zero
    drive and water_c0 drag when nothing on the grid is sustainable.
    """
    v = sweep_speeds(v_max_mps, step_mps)
    drive = drive_vs_speed(inputs, v)
    D = water_drag(v, water_c0, water_c2)
    sustainable = drive >= D

    if sustainable.any():
        idx = np.flatnonzero(sustainable)[-1]
        result = TopSpeedResult(float(v[idx]), float(drive[idx]), float(D[idx]))
    else:
        result = TopSpeedResult(0.0, 0.0, float(water_c0))

    logger.debug("top speed %.1f m/s (drive %.0f N, water drag %.0f N) over %d samples",
                 result.speed_mps, result.drive_N, result.water_drag_N, len(v))
    return result

def speed_sweep(inputs: Inputs, water_c0: float, water_c2: float,
                v_max_mps=V_SWEEP_MAX_MPS, step_mps=V_SWEEP_STEP_MPS) -> pd.DataFrame:
    v = sweep_speeds(v_max_mps, step_mps)
    drive = drive_vs_speed(inputs, v)
    D = water_drag(v, water_c0, water_c2)
    return pd.DataFrame({
        "speed_mps": v,
        "speed_kn": mps_to_knots(v),
        "drive_N": drive,
        "water_drag_N": D,
        "surplus_N": drive - D,
        "sustainable": drive >= D,
    })
