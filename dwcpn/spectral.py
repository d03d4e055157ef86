"""
Spectral coefficient tables shared by every pixel of a run.

Each table is computed once, flagged read-only, and passed by reference into
ModelInputs. All three are indexed by the wavebands in constants.WL_ARRAY.
"""

import numpy as np

from .constants import WL_ARRAY, A_BRICAUD, E_BRICAUD, OPEN_OCEAN_CHL


def read_only(values) -> np.ndarray:
    """Return values as a contiguous float64 array that cannot be written to."""
    values = np.ascontiguousarray(values, dtype=np.float64)
    values.setflags(write=False)
    return values


def calculate_bw() -> np.ndarray:
    """
    Backscattering coefficient of pure seawater (m^-1).

    Half of the Morel (1974) total scattering, b_w(500) = 0.00288 m^-1 with
    a lambda^-4.32 spectral dependence.
    """
    return read_only(0.5 * 0.00288 * (500.0 / WL_ARRAY) ** 4.32)


def calculate_bbr() -> np.ndarray:
    """
    Backscattering ratio of biogenic particles (dimensionless).

    Morel (1988) ratio 0.002 + 0.02 (0.5 - 0.25 log10 C) (550 / lambda),
    evaluated at the open-ocean reference chlorophyll.
    """
    ratio = 0.5 - 0.25 * np.log10(OPEN_OCEAN_CHL)
    return read_only(0.002 + 0.02 * ratio * (550.0 / WL_ARRAY))


def calculate_ac() -> np.ndarray:
    """
    Chlorophyll-specific absorption of phytoplankton (m^2 mg Chl^-1).

    Bricaud et al. (1995) fit evaluated at the open-ocean reference
    chlorophyll, so absorption scales linearly with local biomass.
    """
    return read_only(A_BRICAUD * OPEN_OCEAN_CHL ** (-E_BRICAUD))
