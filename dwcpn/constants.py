"""
Fixed constants for the DWCPN production model.

Waveband tables cover 400-700 nm in 10 nm steps. Pure water absorption is
Pope & Fry (1997); the chlorophyll-specific absorption coefficients are the
Bricaud et al. (1995) power-law fits a*(l) = A(l) * chl^-E(l).
"""

import numpy as np

# ---------- WAVEBANDS ----------

WL_ARRAY = np.arange(400.0, 701.0, 10.0)
WL_COUNT = len(WL_ARRAY)

# Pure water absorption (m^-1)
AW = np.array([
    0.00663, 0.00473, 0.00454, 0.00495, 0.00635, 0.00922, 0.00979, 0.0106, 0.0127,
    0.015, 0.0204, 0.0325, 0.0409, 0.0434, 0.0474, 0.0565, 0.0619, 0.0695, 0.0896,
    0.1351, 0.2224, 0.2644, 0.2755, 0.2916, 0.3108, 0.34, 0.41, 0.439, 0.465, 0.516, 0.624,
])

A_BRICAUD = np.array([
    0.0241, 0.0287, 0.0328, 0.0359, 0.0378, 0.0350, 0.0328, 0.0309, 0.0281,
    0.0254, 0.0210, 0.0162, 0.0126, 0.0103, 0.0085, 0.0070, 0.0057, 0.0050,
    0.0051, 0.0054, 0.0052, 0.0055, 0.0061, 0.0066, 0.0071, 0.0078, 0.0108,
    0.0174, 0.0161, 0.0069, 0.0025,
])

E_BRICAUD = np.array([
    0.6877, 0.6834, 0.6664, 0.6478, 0.6266, 0.5993, 0.5961, 0.5970, 0.5890,
    0.6074, 0.6529, 0.7212, 0.7939, 0.8500, 0.9036, 0.9312, 0.9345, 0.9298,
    0.8933, 0.8589, 0.8410, 0.8548, 0.8704, 0.8638, 0.8524, 0.8155, 0.8233,
    0.8138, 0.8284, 0.9255, 1.0286,
])

# Spectral shape of surface PAR (quanta), normalised to sum to 1 below
_PAR_SPECTRUM = np.array([
    0.00227, 0.00218, 0.00239, 0.00189, 0.00297, 0.00348, 0.00345,
    0.00344, 0.00373, 0.00377, 0.00362, 0.00364, 0.00360, 0.00367,
    0.00354, 0.00368, 0.00354, 0.00357, 0.00363, 0.00332, 0.00358,
    0.00357, 0.00359, 0.00340, 0.00350, 0.00332, 0.00342, 0.00347,
    0.00342, 0.00290, 0.00314,
])
PAR_FRACTIONS = _PAR_SPECTRUM / _PAR_SPECTRUM.sum()

# Reference wavelength for yellow substance absorption and its spectral slope
YELLOW_SUBSTANCE_WL = 440.0
YELLOW_SUBSTANCE_SLOPE = 0.014
YELLOW_SUBSTANCE_INDEX = int(np.argmin(np.abs(WL_ARRAY - YELLOW_SUBSTANCE_WL)))

# Chlorophyll used to fix the concentration-dependent optical tables (mg m^-3)
OPEN_OCEAN_CHL = 0.2

# ---------- DEPTH AND TIME GRIDS ----------

DEPTH_PROFILE_COUNT = 101
TIME_STEPS = 51  # odd so the middle sample falls on solar noon
MAX_DEPTH = 250.0  # m, deeper water never contributes to production
EUPHOTIC_FRACTION = 0.01

# Bounds on the chlorophyll peak, m
MAX_PEAK_DEPTH = 11000.0  # deepest ocean trench
MIN_PEAK_WIDTH = 0.1
MAX_PEAK_WIDTH = 11000.0

# ---------- RADIATIVE TRANSFER ----------

SURFACE_TRANSMISSION = 0.95
WATER_REFRACTIVE_INDEX = 1.341
DIFFUSE_MU = 0.83
CLEAR_SKY_DIFFUSE_FRACTION = 0.2

# 1 W m^-2 of PAR ~ 4.57 umol photons m^-2 s^-1, expressed as Einstein m^-2 h^-1
EINSTEIN_PER_HOUR_PER_WATT = 4.57e-6 * 3600.0
