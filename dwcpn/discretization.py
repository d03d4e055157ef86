"""
Depth and time discretization for a single pixel.

The day is sampled from sunrise to sunset at TIME_STEPS points using the
Kirk (1994) declination and day length formulae; depth is sampled at
DEPTH_PROFILE_COUNT evenly spaced levels from the surface to the effective
bottom of the water column.
"""

from dataclasses import dataclass

import numpy as np

from .constants import DEPTH_PROFILE_COUNT, MAX_DEPTH, TIME_STEPS


# ---------- SOLAR GEOMETRY ----------

def solar_declination(day_of_year):
    """
    Solar declination in degrees for the given day(s) of the year.

    Args:
        day_of_year: Day of year, 1-366 (scalar or array)

    Returns:
        Declination in degrees
    """
    angle = np.radians(360.0 * (np.asarray(day_of_year, dtype=float) - 1.0) / 365.25)
    return (0.39637 - 22.9133 * np.cos(angle)
            + 4.02543 * np.sin(angle)
            - 0.3872 * np.cos(2 * angle)
            + 0.052 * np.sin(2 * angle))


def day_length(latitude, day_of_year):
    """
    Hours of daylight for the given latitude(s) and day(s) of the year.

    Polar night returns 0 and polar day returns 24.
    """
    declination = np.radians(solar_declination(day_of_year))
    cos_hour_angle = -np.tan(np.radians(latitude)) * np.tan(declination)
    cos_hour_angle = np.clip(cos_hour_angle, -1.0, 1.0)
    return 2.0 * np.degrees(np.arccos(cos_hour_angle)) / 15.0


@dataclass(frozen=True)
class DaySchedule:
    """Time-of-day sampling of the daylight period."""
    day_length: float  # hours
    sunrise: float  # local solar time, hours
    times: np.ndarray  # local solar time of each sample, hours
    fractions: np.ndarray  # fraction of the daylight period elapsed, 0-1
    cos_zenith: np.ndarray  # cosine of the solar zenith angle at each sample
    noon_elevation: float  # solar elevation at noon, degrees
    noon_index: int = TIME_STEPS // 2


def build_day_schedule(latitude: float, day_of_year: int) -> DaySchedule:
    """Build the sunrise-to-sunset schedule for one pixel."""
    declination = float(solar_declination(day_of_year))
    length = float(day_length(latitude, day_of_year))
    sunrise = 12.0 - 0.5 * length

    fractions = np.linspace(0.0, 1.0, TIME_STEPS)
    times = sunrise + fractions * length

    lat_r = np.radians(latitude)
    dec_r = np.radians(declination)
    hour_angle = np.radians(15.0 * (times - 12.0))
    cos_zenith = (np.sin(lat_r) * np.sin(dec_r)
                  + np.cos(lat_r) * np.cos(dec_r) * np.cos(hour_angle))

    return DaySchedule(
        day_length=length,
        sunrise=sunrise,
        times=times,
        fractions=fractions,
        cos_zenith=np.clip(cos_zenith, 0.0, 1.0),
        noon_elevation=max(0.0, 90.0 - abs(latitude - declination)),
    )


# ---------- DEPTH GRID ----------

def effective_bottom(z_bottom: float, mld: float, mld_only: bool) -> float:
    """
    Deepest level of the depth grid.

    The bathymetry always bounds the grid; with mld_only the mixed layer
    bounds it too, so a mixed layer deeper than the sea floor stops at the
    sea floor.
    """
    bottom = min(z_bottom, MAX_DEPTH)
    if mld_only:
        bottom = min(bottom, mld)
    return bottom


def build_depth_grid(z_bottom: float, mld: float, mld_only: bool) -> np.ndarray:
    """DEPTH_PROFILE_COUNT evenly spaced depths from the surface to the effective bottom."""
    return np.linspace(0.0, effective_bottom(z_bottom, mld, mld_only), DEPTH_PROFILE_COUNT)


def chlorophyll_profile(depths, chl, z_m, rho, sigma, mld_only=False):
    """
    Chlorophyll concentration at each depth level.

    Shifted Gaussian profile B(z) = B0 [1 + rho exp(-(z - z_m)^2 / 2 sigma^2)]
    scaled so that B(0) equals the surface chlorophyll. With mld_only the
    surface value is held through the whole (mixed-layer) grid.

    Args:
        depths: 1D array of depth levels (m)
        chl: Surface chlorophyll (mg m^-3)
        z_m: Depth of the chlorophyll maximum (m)
        rho: Ratio of peak height to background biomass
        sigma: Width of the peak (m)
        mld_only: Hold surface chlorophyll uniformly

    Returns:
        1D array of chlorophyll (mg m^-3)
    """
    if mld_only:
        return np.full(len(depths), chl, dtype=np.float64)

    # Extreme widths or depths give inf/nan, which the caller rejects
    with np.errstate(over='ignore', divide='ignore', invalid='ignore', under='ignore'):
        z_m = np.float64(z_m)
        two_sigma_sq = 2.0 * np.float64(sigma) ** 2
        peak = np.exp(-((depths - z_m) ** 2) / two_sigma_sq)
        background = chl / (1.0 + rho * np.exp(-(z_m ** 2) / two_sigma_sq))
        return background * (1.0 + rho * peak)
