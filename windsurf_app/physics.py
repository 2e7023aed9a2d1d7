from dataclasses import dataclass, fields

import numpy as np

from .config import (
    RHO_AIR, CL_ALPHA_PER_DEG, K_INDUCED, SHEETING_LIMIT_DEG, EPS, MPS_TO_KT
)

# Board axes: +x forward, +y starboard


@dataclass(frozen=True)
class Inputs:
    true_wind_mps: float
    course_angle_deg: float     # 0 = downwind, 180 = upwind (relative to true wind)
    board_speed_mps: float
    sail_area_m2: float
    sheeting_deg: float         # sail angle relative to board centerline
    downhaul: float             # 0..1, more = flatter
    outhaul: float              # 0..1, more = flatter


@dataclass(frozen=True)
class Outputs:
    apparent_wind_mps: float
    apparent_wind_angle_deg: float  # + = from starboard
    alpha_deg: float

    cl: float
    cd: float

    lift_N: float
    drag_N: float

    drive_N: float
    side_N: float
    power_W: float

    Va_x: float
    Va_y: float
    L_x: float
    L_y: float
    D_x: float
    D_y: float
    F_x: float
    F_y: float


def mps_to_knots(mps: float) -> float:
    return mps * MPS_TO_KT

def knots_to_mps(kn: float) -> float:
    return kn / MPS_TO_KT

def clamp(x, lo, hi):
    return np.maximum(lo, np.minimum(hi, x))

def wrap_deg(deg):
    """Wrap an angle (scalar or array) into (-180, 180]. Values already in range are returned unchanged."""
    a = np.asarray(deg, dtype=float)
    # fmod is exact, so one step brings anything far out of range to within a turn
    a = np.where(np.abs(a) > 540.0, np.fmod(a, 360.0), a)
    while np.any(a > 180.0):
        a = np.where(a > 180.0, a - 360.0, a)
    while np.any(a <= -180.0):
        a = np.where(a <= -180.0, a + 360.0, a)
    return a

def true_wind_vector(true_wind_mps, course_angle_deg):
    # Wind velocity in the board frame: course 180 puts the wind on +x (from ahead),
    # course 0 puts it on -x (from behind)
    theta = np.pi - np.deg2rad(course_angle_deg)
    tw = np.asarray(true_wind_mps, dtype=float)
    return tw * np.cos(theta), tw * np.sin(theta)

def apparent_wind(true_wind_mps, course_angle_deg, board_speed_mps):
    """Apparent wind vector, speed and angle (deg) in the board frame. Vectorized over any argument."""
    Vw_x, Vw_y = true_wind_vector(true_wind_mps, course_angle_deg)
    Va_x = Vw_x - np.asarray(board_speed_mps, dtype=float)
    Va_y = Vw_y - 0.0
    Va = np.hypot(Va_x, Va_y)
    awa_deg = np.rad2deg(np.arctan2(Va_y, Va_x))
    return Va_x, Va_y, Va, awa_deg

def trim_polar(downhaul, outhaul):
    # Flatter sail: earlier stall, lower peak CL, less profile drag
    flatness = clamp(0.5 * np.asarray(downhaul, dtype=float) + 0.5 * np.asarray(outhaul, dtype=float), 0.0, 1.0)
    stall_deg = 18.0 - 5.0 * flatness
    cl_max = 1.2 - 0.4 * flatness
    cd0 = 0.08 - 0.02 * flatness
    return flatness, stall_deg, cl_max, cd0

def lift_coefficient(alpha_deg, stall_deg, cl_max):
    alpha_lin = clamp(alpha_deg, -stall_deg, stall_deg)
    cl = CL_ALPHA_PER_DEG * alpha_lin
    return clamp(cl, -cl_max, cl_max)

def drag_coefficient(cl, cd0):
    return cd0 + K_INDUCED * cl * cl

def force_vectors(inputs: Inputs, board_speed_mps=None):
    """
    Evaluate the sail model. board_speed_mps overrides inputs.board_speed_mps and may be an
    array, in which case every returned entry is an array over those speeds.
    """
    v_board = inputs.board_speed_mps if board_speed_mps is None else board_speed_mps
    v_board = np.asarray(v_board, dtype=float)

    Va_x, Va_y, Va, awa_deg = apparent_wind(inputs.true_wind_mps, inputs.course_angle_deg, v_board)

    sail_angle_deg = clamp(inputs.sheeting_deg, -SHEETING_LIMIT_DEG, SHEETING_LIMIT_DEG)
    alpha_deg = wrap_deg(awa_deg - sail_angle_deg)

    _, stall_deg, cl_max, cd0 = trim_polar(inputs.downhaul, inputs.outhaul)
    cl = lift_coefficient(alpha_deg, stall_deg, cl_max)
    cd = drag_coefficient(cl, cd0)

    q = 0.5 * RHO_AIR * Va * Va
    lift_N = q * inputs.sail_area_m2 * cl
    drag_N = q * inputs.sail_area_m2 * cd

    # eps keeps the unit vector finite (collapsing to zero) when Va == 0
    ux = Va_x / (Va + EPS)
    uy = Va_y / (Va + EPS)

    D_x = -drag_N * ux
    D_y = -drag_N * uy

    sign = np.where(alpha_deg >= 0, 1.0, -1.0)
    L_x = sign * lift_N * (-uy)
    L_y = sign * lift_N * ux

    F_x = L_x + D_x
    F_y = L_y + D_y

    return dict(
        apparent_wind_mps=Va,
        apparent_wind_angle_deg=awa_deg,
        alpha_deg=alpha_deg,
        cl=cl,
        cd=cd,
        lift_N=lift_N,
        drag_N=drag_N,
        drive_N=F_x,
        side_N=F_y,
        power_W=F_x * v_board,
        Va_x=Va_x,
        Va_y=np.broadcast_to(Va_y, np.shape(Va_x)),
        L_x=L_x,
        L_y=L_y,
        D_x=D_x,
        D_y=D_y,
        F_x=F_x,
        F_y=F_y,
    )

def compute(inputs: Inputs) -> Outputs:
    """Apparent wind, coefficients and board-frame forces for one set of inputs. Never raises."""
    out = force_vectors(inputs)
    return Outputs(**{f.name: float(out[f.name]) for f in fields(Outputs)})
