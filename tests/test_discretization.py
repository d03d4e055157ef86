"""Tests for the depth and time grids."""

import numpy as np
import pytest

from dwcpn.constants import DEPTH_PROFILE_COUNT, MAX_DEPTH, TIME_STEPS
from dwcpn.discretization import (
    build_day_schedule,
    build_depth_grid,
    chlorophyll_profile,
    day_length,
    effective_bottom,
    solar_declination,
)


# ---------- SOLAR GEOMETRY ----------

def test_declination_at_solstices():
    """Declination reaches about +/-23.4 degrees at the solstices."""
    assert solar_declination(172) == pytest.approx(23.4, abs=0.3)
    assert solar_declination(355) == pytest.approx(-23.4, abs=0.3)


def test_equator_has_twelve_hour_days():
    for iday in (1, 80, 172, 266, 355):
        assert day_length(0.0, iday) == pytest.approx(12.0)


def test_hemispheres_sum_to_a_full_day():
    """Day length at latitude L and -L on the same day add up to 24 hours."""
    for lat in (15.0, 45.0, 60.0):
        assert day_length(lat, 100) + day_length(-lat, 100) == pytest.approx(24.0)


def test_opposite_solstices_are_symmetric():
    assert day_length(45.0, 172) == pytest.approx(day_length(-45.0, 355), abs=0.05)


def test_polar_night_and_polar_day():
    assert day_length(80.0, 355) == 0.0
    assert day_length(80.0, 172) == pytest.approx(24.0)


def test_day_schedule_is_centred_on_noon():
    schedule = build_day_schedule(30.0, 172)
    assert len(schedule.times) == TIME_STEPS
    assert schedule.times[0] == pytest.approx(schedule.sunrise)
    assert schedule.times[-1] == pytest.approx(24.0 - schedule.sunrise)
    assert schedule.times[schedule.noon_index] == pytest.approx(12.0)
    assert np.argmax(schedule.cos_zenith) == schedule.noon_index
    assert np.all((schedule.cos_zenith >= 0) & (schedule.cos_zenith <= 1))


def test_noon_elevation():
    """At the subsolar latitude the sun is overhead at noon."""
    declination = float(solar_declination(172))
    schedule = build_day_schedule(declination, 172)
    assert schedule.noon_elevation == pytest.approx(90.0)


# ---------- DEPTH GRID ----------

@pytest.mark.parametrize("z_bottom, mld, mld_only, expected", [
    (200.0, 30.0, False, 200.0),
    (1000.0, 30.0, False, MAX_DEPTH),
    (200.0, 30.0, True, 30.0),
    (20.0, 30.0, True, 20.0),
])
def test_effective_bottom(z_bottom, mld, mld_only, expected):
    assert effective_bottom(z_bottom, mld, mld_only) == pytest.approx(expected)


def test_depth_grid_shape():
    depths = build_depth_grid(200.0, 30.0, False)
    assert len(depths) == DEPTH_PROFILE_COUNT
    assert depths[0] == 0.0
    assert depths[-1] == pytest.approx(200.0)
    assert np.all(np.diff(depths) > 0)


def test_chlorophyll_profile_matches_surface_value():
    depths = build_depth_grid(200.0, 30.0, False)
    profile = chlorophyll_profile(depths, 0.2, 40.0, 1.0, 15.0)
    assert profile[0] == pytest.approx(0.2)
    assert depths[np.argmax(profile)] == pytest.approx(40.0)
    assert np.all(profile > 0)


def test_chlorophyll_profile_without_peak_is_uniform():
    depths = build_depth_grid(200.0, 30.0, False)
    profile = chlorophyll_profile(depths, 0.5, 40.0, 0.0, 15.0)
    np.testing.assert_allclose(profile, 0.5)


def test_chlorophyll_profile_in_mixed_layer_is_uniform():
    depths = build_depth_grid(200.0, 30.0, True)
    profile = chlorophyll_profile(depths, 0.3, 40.0, 2.0, 15.0, mld_only=True)
    np.testing.assert_allclose(profile, 0.3)


def test_chlorophyll_profile_with_degenerate_width_is_not_finite():
    """A vanishing peak width yields non-finite values instead of raising."""
    depths = build_depth_grid(200.0, 30.0, False)
    profile = chlorophyll_profile(depths, 0.2, 40.0, 1.0, 1e-200)
    assert not np.all(np.isfinite(profile))


def test_chlorophyll_profile_with_unreachable_peak_is_background():
    depths = build_depth_grid(200.0, 30.0, False)
    profile = chlorophyll_profile(depths, 0.2, 1e200, 1.0, 15.0)
    np.testing.assert_allclose(profile, 0.2)
