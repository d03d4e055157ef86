"""
Photosynthesis-irradiance model and Prochlorococcus partitioning.

Production per unit chlorophyll follows the saturating P-I curve of Platt et
al. (1980) without photoinhibition, with the initial slope made spectral by
weighting it with the shape of the chlorophyll-specific absorption spectrum:

    P^B = P_m^B (1 - exp(-sum_l alpha(l) I(l) / P_m^B))
"""

import numpy as np


def spectral_alpha(alpha_b: float, ac: np.ndarray) -> np.ndarray:
    """Initial slope per waveband, averaging to alpha_b across the spectrum."""
    return alpha_b * ac / ac.mean()


def specific_production(spectral_irradiance, alpha, pmb):
    """
    Chlorophyll-specific carbon fixation rate (mgC mgChl^-1 h^-1).

    Args:
        spectral_irradiance: Array (..., waveband) of irradiance (W m^-2)
        alpha: Spectral initial slope per waveband
        pmb: Maximum photosynthetic rate

    Returns:
        Array with the waveband axis removed, bounded by [0, pmb]
    """
    absorbed = np.asarray(spectral_irradiance) @ alpha
    return pmb * (1.0 - np.exp(-absorbed / pmb))


# ---------- PROCHLOROCOCCUS ----------

def prochloro_profile(depths, surface, maximum, z_m, sigma, mld_only=False):
    """
    Prochlorococcus chlorophyll at each depth level.

    Above the chlorophyll maximum the concentration rises from the surface
    value to the maximum value following the Gaussian shape of the total
    biomass; below it the maximum value decays with the same Gaussian.

    Args:
        depths: 1D array of depth levels (m)
        surface: Surface concentration (mg Chl m^-3)
        maximum: Concentration at the chlorophyll maximum (mg Chl m^-3)
        z_m: Depth of the chlorophyll maximum (m)
        sigma: Width of the peak (m)
        mld_only: Hold the surface value uniformly

    Returns:
        1D array of concentration
    """
    if mld_only:
        return np.full(len(depths), surface, dtype=np.float64)

    with np.errstate(over='ignore', divide='ignore', invalid='ignore', under='ignore'):
        z_m = np.float64(z_m)
        two_sigma_sq = 2.0 * np.float64(sigma) ** 2
        shape = np.exp(-((depths - z_m) ** 2) / two_sigma_sq)
        shape_surface = np.exp(-(z_m ** 2) / two_sigma_sq)
        if shape_surface < 1.0:
            rising = (shape - shape_surface) / (1.0 - shape_surface)
        else:
            rising = np.ones_like(shape)

        return np.where(
            depths <= z_m,
            surface + (maximum - surface) * rising,
            maximum * shape,
        )


def ecotype_split(pro_total, noon_par, alpha_b, pmb):
    """
    Split Prochlorococcus into high-light and low-light ecotypes.

    The high-light share at each depth is the light saturation
    1 - exp(-alpha_b I_noon / pmb) of the noon irradiance there.

    Returns:
        Tuple of (high_light, low_light) concentrations summing to pro_total
    """
    high_light = pro_total * (1.0 - np.exp(-alpha_b * noon_par / pmb))
    return high_light, pro_total - high_light


def partition_biomass(chl_profile, pro_total):
    """
    Split total chlorophyll into the Prochlorococcus part and the residual.

    The Prochlorococcus part is capped at the total so the residual is never
    negative.
    """
    pro_chl = np.minimum(pro_total, chl_profile)
    return pro_chl, chl_profile - pro_chl
