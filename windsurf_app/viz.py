import math

import numpy as np
import plotly.graph_objects as go

from .model import TopSpeedResult
from .physics import Inputs, Outputs

# Board frame is drawn as-is: +x forward to the right, +y starboard up
WIND_WEIGHT = 25.0      # force diagram: N per m/s of apparent wind
WIND_PX = 10.0          # drive/side diagram: px per m/s
FORCE_PX = 0.15         # drive/side diagram: px per N
MAX_FORCE_PX = 160.0

COLORS = dict(wind="#2563eb", lift="#22c55e", drag="#ef4444", total="#000000", part="#555555")


def add_arrow(fig, x0, y0, x1, y1, name, color="#000000"):
    # Zero-length arrows have no direction to draw
    if math.hypot(x1 - x0, y1 - y0) < 1e-6:
        return
    fig.add_annotation(x=x1, y=y1, ax=x0, ay=y0, xref="x", yref="y", axref="x", ayref="y",
                       showarrow=True, arrowhead=3, arrowsize=1.2, arrowwidth=2,
                       arrowcolor=color, text=name, font=dict(color=color), xanchor="left")

def _square_axes(fig, half):
    fig.update_xaxes(range=[-half, half], zeroline=True)
    fig.update_yaxes(range=[-half, half], zeroline=True, scaleanchor="x", scaleratio=1)

def force_diagram(out: Outputs):
    """Apparent wind, lift, drag and resultant in the board frame on one autoscaled plot."""
    vectors = [
        ("Va", out.Va_x * WIND_WEIGHT, out.Va_y * WIND_WEIGHT, COLORS["wind"]),
        ("L", out.L_x, out.L_y, COLORS["lift"]),
        ("D", out.D_x, out.D_y, COLORS["drag"]),
        ("F", out.F_x, out.F_y, COLORS["total"]),
    ]
    reach = max([abs(c) for _, x, y, _ in vectors for c in (x, y)] + [1e-6])

    fig = go.Figure()
    add_arrow(fig, -0.6 * reach, 0, 0.85 * reach, 0, "+x forward", COLORS["part"])
    add_arrow(fig, 0, -0.6 * reach, 0, 0.85 * reach, "+y starboard", COLORS["part"])
    for name, x, y, color in vectors:
        add_arrow(fig, 0, 0, x, y, name, color)

    _square_axes(fig, 1.15 * reach)
    fig.update_layout(height=480, showlegend=False,
                      xaxis_title="x (N)", yaxis_title="y (N)",
                      title=f"Va scaled x{WIND_WEIGHT:g}")
    return fig

def drive_side_diagram(inputs: Inputs, out: Outputs):
    # Rebuilt from speed and angle, like a reader of the telemetry would
    awa = math.radians(out.apparent_wind_angle_deg)
    wx = WIND_PX * out.apparent_wind_mps * math.cos(awa)
    wy = WIND_PX * out.apparent_wind_mps * math.sin(awa)

    fx = float(np.clip(out.drive_N * FORCE_PX, -MAX_FORCE_PX, MAX_FORCE_PX))
    fy = float(np.clip(out.side_N * FORCE_PX, -MAX_FORCE_PX, MAX_FORCE_PX))

    fig = go.Figure()
    add_arrow(fig, 0, 0, 120, 0, "+x forward", COLORS["total"])
    add_arrow(fig, 0, 0, 0, 120, "+y starboard", COLORS["total"])
    add_arrow(fig, 0, 0, wx, wy, f"Va {out.apparent_wind_mps:.2f} m/s", COLORS["wind"])
    add_arrow(fig, 0, 0, fx, fy, "F (drive/side)", COLORS["drag"])
    add_arrow(fig, 0, 0, fx, 0, f"Drive {out.drive_N:.0f} N", COLORS["part"])
    add_arrow(fig, 0, 0, 0, fy, f"Side {out.side_N:.0f} N", COLORS["part"])

    fig.add_annotation(
        xref="paper", yref="paper", x=0.01, y=0.99, showarrow=False, align="left",
        xanchor="left", yanchor="top",
        text=(f"Course: {inputs.course_angle_deg:.0f} deg<br>"
              f"Sheeting: {inputs.sheeting_deg:.0f} deg<br>"
              f"Alpha: {out.alpha_deg:.1f} deg"),
    )
    _square_axes(fig, max(200.0, 1.1 * math.hypot(wx, wy)))
    fig.update_layout(height=480, showlegend=False, xaxis_title="px", yaxis_title="px")
    return fig

def speed_sweep_chart(df, result: TopSpeedResult):
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=df["speed_mps"], y=df["drive_N"], mode="lines", name="Sail drive (N)",
                             customdata=df["speed_kn"], hovertemplate="%{x:.1f} m/s (%{customdata:.1f} kn)<br>%{y:.0f} N"))
    fig.add_trace(go.Scatter(x=df["speed_mps"], y=df["water_drag_N"], mode="lines", name="Water drag (N)",
                             customdata=df["speed_kn"], hovertemplate="%{x:.1f} m/s (%{customdata:.1f} kn)<br>%{y:.0f} N"))
    if result.speed_mps > 0:
        fig.add_vline(x=result.speed_mps, line_dash="dash", annotation_text="Top speed", annotation_position="top")
    fig.update_layout(xaxis_title="Board speed (m/s)", yaxis_title="Force (N)", height=480)
    return fig
