"""
Pytest configuration and shared fixtures.
"""

import pytest

from windsurf_app.physics import Inputs
from windsurf_app.presets import PresetStore


@pytest.fixture
def reach_inputs() -> Inputs:
    """Broad reach regression case: 10 m/s wind, 120 deg course, 8 m/s board speed."""
    return Inputs(
        true_wind_mps=10.0,
        course_angle_deg=120.0,
        board_speed_mps=8.0,
        sail_area_m2=6.5,
        sheeting_deg=20.0,
        downhaul=0.4,
        outhaul=0.4,
    )


@pytest.fixture
def default_inputs() -> Inputs:
    """The app's default slider values."""
    return Inputs(
        true_wind_mps=10.0,
        course_angle_deg=120.0,
        board_speed_mps=8.0,
        sail_area_m2=6.5,
        sheeting_deg=20.0,
        downhaul=0.4,
        outhaul=0.3,
    )


@pytest.fixture
def store(tmp_path) -> PresetStore:
    """Preset store backed by a file in a temp directory."""
    return PresetStore(tmp_path / "presets.json")
