"""
Spectral underwater light field.

Surface PAR is spread over the day as I(t) = iom sin(pi t / D), split into
wavebands and into direct and diffuse streams, and attenuated level by level
with a Beer-Lambert law whose coefficient K = (a + bb) / mu combines pure
water, chlorophyll-weighted phytoplankton absorption, yellow substance and
backscattering at each depth.
"""

import math
from dataclasses import dataclass

import numpy as np
from numba import njit

from .constants import (
    AW,
    CLEAR_SKY_DIFFUSE_FRACTION,
    DIFFUSE_MU,
    EINSTEIN_PER_HOUR_PER_WATT,
    EUPHOTIC_FRACTION,
    PAR_FRACTIONS,
    SURFACE_TRANSMISSION,
    WATER_REFRACTIVE_INDEX,
    WL_ARRAY,
    YELLOW_SUBSTANCE_INDEX,
    YELLOW_SUBSTANCE_SLOPE,
    YELLOW_SUBSTANCE_WL,
)


@dataclass(frozen=True)
class LightField:
    """Irradiance just below the surface and at every depth level (W m^-2)."""
    spectral: np.ndarray  # (time, depth, waveband)
    par: np.ndarray  # (time, depth), summed over wavebands


# ---------- SURFACE IRRADIANCE ----------

def cloud_transmission(cloud: float, noon_elevation: float) -> float:
    """Fraction of clear-sky PAR reaching the sea surface (Reed, 1977)."""
    if cloud <= 0.0:
        return 1.0
    return min(1.0, 1.0 - 0.62 * cloud + 0.0019 * noon_elevation)


def noon_irradiance_maximum(par: float, day_length: float, cloud: float = 0.0,
                            noon_elevation: float = 90.0) -> float:
    """
    Broadband PAR above the surface at solar noon (W m^-2).

    A sinusoidal day I(t) = iom sin(pi t / D) integrates to the daily PAR,
    so iom = pi PAR / 2D.

    Args:
        par: Daily surface PAR (Einstein m^-2 d^-1)
        day_length: Hours of daylight
        cloud: Cloud fraction, 0-1
        noon_elevation: Solar elevation at noon (degrees)

    Returns:
        Noon PAR maximum in W m^-2
    """
    hourly_max = math.pi * par * cloud_transmission(cloud, noon_elevation) / (2.0 * day_length)
    return hourly_max / EINSTEIN_PER_HOUR_PER_WATT


def surface_spectral_irradiance(iom, fractions, cloud=0.0):
    """
    Direct and diffuse irradiance just below the surface per waveband.

    Returns:
        Tuple of (direct, diffuse), each (time, waveband) in W m^-2
    """
    broadband = SURFACE_TRANSMISSION * iom * np.maximum(np.sin(np.pi * fractions), 0.0)
    diffuse_fraction = min(1.0, CLEAR_SKY_DIFFUSE_FRACTION + (1.0 - CLEAR_SKY_DIFFUSE_FRACTION) * cloud)

    spectral = np.outer(broadband, PAR_FRACTIONS)
    return spectral * (1.0 - diffuse_fraction), spectral * diffuse_fraction


def underwater_mu(cos_zenith):
    """Cosine of the solar zenith angle after refraction at the sea surface."""
    sin_air = np.sqrt(1.0 - np.asarray(cos_zenith) ** 2)
    sin_water = sin_air / WATER_REFRACTIVE_INDEX
    return np.sqrt(1.0 - sin_water ** 2)


# ---------- INHERENT OPTICAL PROPERTIES ----------

def inherent_optics(chl_profile, bw, bbr, ac, yel_sub):
    """
    Absorption and backscattering coefficients at each depth and waveband.

    Args:
        chl_profile: 1D chlorophyll at each depth level (mg m^-3)
        bw: Pure seawater backscattering per waveband (m^-1)
        bbr: Particle backscattering ratio per waveband
        ac: Chlorophyll-specific absorption per waveband (m^2 mg^-1)
        yel_sub: Yellow substance absorption at 440 nm relative to
            phytoplankton absorption at 440 nm

    Returns:
        Tuple of (absorption, backscattering), each (depth, waveband) in m^-1
    """
    chl = np.asarray(chl_profile, dtype=np.float64)[:, np.newaxis]

    a_phyto = chl * ac[np.newaxis, :]
    yellow_shape = np.exp(-YELLOW_SUBSTANCE_SLOPE * (WL_ARRAY - YELLOW_SUBSTANCE_WL))
    a_yellow = yel_sub * a_phyto[:, [YELLOW_SUBSTANCE_INDEX]] * yellow_shape[np.newaxis, :]
    absorption = AW[np.newaxis, :] + a_phyto + a_yellow

    # Gordon & Morel (1983) particle scattering
    particle_scattering = 0.3 * chl ** 0.62 * (550.0 / WL_ARRAY)[np.newaxis, :]
    backscattering = bw[np.newaxis, :] + bbr[np.newaxis, :] * particle_scattering

    return absorption, backscattering


# ---------- PROPAGATION ----------

@njit
def _propagate_core(surface_direct, surface_diffuse, mu_direct, depths, attenuation):
    """
    Numba-optimized Beer-Lambert propagation down the depth grid.

    Args:
        surface_direct: 2D array (time, waveband) of direct irradiance
        surface_diffuse: 2D array (time, waveband) of diffuse irradiance
        mu_direct: 1D array (time) of refracted zenith cosines
        depths: 1D array of depth levels
        attenuation: 2D array (depth, waveband) of a + bb

    Returns:
        3D array (time, depth, waveband) of downward irradiance
    """
    nt, nw = surface_direct.shape
    nz = depths.shape[0]
    irradiance = np.zeros((nt, nz, nw))

    for t in range(nt):
        for w in range(nw):
            direct = surface_direct[t, w]
            diffuse = surface_diffuse[t, w]
            irradiance[t, 0, w] = direct + diffuse

            for k in range(1, nz):
                # Layer mean of the coefficients at its two bounding levels
                optical_depth = 0.5 * (attenuation[k - 1, w] + attenuation[k, w]) * (depths[k] - depths[k - 1])
                direct = direct * math.exp(-optical_depth / mu_direct[t])
                diffuse = diffuse * math.exp(-optical_depth / DIFFUSE_MU)
                irradiance[t, k, w] = direct + diffuse

    return irradiance


def compute_light_field(depths, chl_profile, schedule, iom, cloud, bw, bbr, ac, yel_sub) -> LightField:
    """
    Spectral irradiance at every time sample and depth level of one pixel.

    Args:
        depths: 1D array of depth levels (m)
        chl_profile: 1D chlorophyll at each depth level (mg m^-3)
        schedule: DaySchedule for the pixel
        iom: Noon PAR maximum above the surface (W m^-2)
        cloud: Cloud fraction, 0-1
        bw, bbr, ac: Shared spectral tables
        yel_sub: Yellow substance ratio at 440 nm

    Returns:
        LightField with spectral (time, depth, waveband) and PAR (time, depth)
    """
    direct, diffuse = surface_spectral_irradiance(iom, schedule.fractions, cloud)
    absorption, backscattering = inherent_optics(chl_profile, bw, bbr, ac, yel_sub)

    spectral = _propagate_core(
        np.ascontiguousarray(direct, dtype=np.float64),
        np.ascontiguousarray(diffuse, dtype=np.float64),
        np.ascontiguousarray(underwater_mu(schedule.cos_zenith), dtype=np.float64),
        np.ascontiguousarray(depths, dtype=np.float64),
        np.ascontiguousarray(absorption + backscattering, dtype=np.float64),
    )
    return LightField(spectral=spectral, par=spectral.sum(axis=2))


def euphotic_depth(depths, par_profile) -> float:
    """
    Depth at which PAR falls to EUPHOTIC_FRACTION of its surface value.

    Interpolates log-linearly between the bracketing levels. If light never
    falls that far within the grid, the decay of the deepest layer is
    extended below the bottom level.
    """
    surface = par_profile[0]
    target = EUPHOTIC_FRACTION * surface

    below = np.nonzero(par_profile <= target)[0]
    if len(below) == 0:
        return _extrapolate_below(depths, par_profile, target)

    k = below[0]
    if k == 0:
        return float(depths[0])

    upper = par_profile[k - 1]
    lower = par_profile[k]
    if lower > 0:
        frac = (math.log(upper) - math.log(target)) / (math.log(upper) - math.log(lower))
    else:
        frac = (upper - target) / (upper - lower)
    return float(depths[k - 1] + frac * (depths[k] - depths[k - 1]))


def _extrapolate_below(depths, par_profile, target) -> float:
    """Depth below the grid where PAR reaches target, at the deepest layer's attenuation."""
    bottom = float(depths[-1])
    upper = float(par_profile[-2])
    lower = float(par_profile[-1])
    thickness = bottom - float(depths[-2])
    if thickness <= 0 or lower <= 0 or upper <= lower:
        return bottom

    k_last = (math.log(upper) - math.log(lower)) / thickness
    return bottom + (math.log(lower) - math.log(target)) / k_last
