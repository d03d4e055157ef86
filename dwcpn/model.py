"""
Per-pixel DWCPN production model.

calculate_production is the single entry point: it validates one pixel's
inputs, builds the depth/time grids, propagates the spectral light field,
evaluates the P-I model at every (time, depth) cell and integrates the result
over the day and down the water column.

The function is pure. The only state shared between pixels is the set of
read-only spectral tables carried by ModelInputs.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np

from .constants import MAX_PEAK_DEPTH, MAX_PEAK_WIDTH, MIN_PEAK_WIDTH, WL_COUNT
from .discretization import build_day_schedule, build_depth_grid, chlorophyll_profile
from .errors import InvalidInputError, NumericalFailureError
from .light import compute_light_field, euphotic_depth, noon_irradiance_maximum
from .photosynthesis import (
    ecotype_split,
    partition_biomass,
    prochloro_profile,
    spectral_alpha,
    specific_production,
)
from .spectral import read_only

log = logging.getLogger("Model")


# ---------- DATA STRUCTURES ----------

@dataclass(frozen=True)
class ProchloroInputs:
    """Prochlorococcus chlorophyll at the surface and at the chlorophyll maximum."""
    prochloro_surface: float
    prochloro_maximum: float


@dataclass(frozen=True)
class ModelSettings:
    """Mode switches for one run."""
    mld_only: bool = False  # Limit the grid to the mixed layer, uniform chlorophyll
    iom_only: bool = False  # Stop once the noon PAR maximum is known
    prochloro_inputs: Optional[ProchloroInputs] = None


@dataclass(frozen=True, eq=False)
class ModelInputs:
    """Inputs for a single pixel."""
    lat: float  # degrees north
    lon: float  # degrees east
    z_bottom: float  # bathymetric depth, m
    iday: int  # day of year
    alpha_b: float  # P-I initial slope, mgC mgChl^-1 h^-1 (W m^-2)^-1
    pmb: float  # P-I maximum rate, mgC mgChl^-1 h^-1
    z_m: float  # depth of the chlorophyll maximum, m
    mld: float  # mixed-layer depth, m
    chl: float  # surface chlorophyll, mg m^-3
    rho: float  # peak height relative to background biomass
    sigma: float  # width of the chlorophyll peak, m
    cloud: float  # cloud fraction, 0-1
    yel_sub: float  # yellow substance / phytoplankton absorption at 440 nm
    par: float  # daily surface PAR, Einstein m^-2 d^-1
    bw: np.ndarray = field(repr=False)
    bbr: np.ndarray = field(repr=False)
    ac: np.ndarray = field(repr=False)


@dataclass(frozen=True)
class IrradianceOnlyOutput:
    """Result of an iom_only run: just the noon PAR maximum (W m^-2)."""
    par_noon_max: float


@dataclass(frozen=True, eq=False)
class ModelOutput:
    """Result of a full run. Profiles have DEPTH_PROFILE_COUNT levels."""
    pp_day: float  # mgC m^-2 d^-1
    euphotic_depth: float  # m
    par_noon_max: float  # W m^-2
    depths: np.ndarray = field(repr=False)  # m
    chl_profile: np.ndarray = field(repr=False)  # mg Chl m^-3
    pp_profile: np.ndarray = field(repr=False)  # mgC m^-3 d^-1
    pro_total_profile: np.ndarray = field(repr=False)  # mg Chl m^-3
    pro_1_profile: np.ndarray = field(repr=False)  # high-light ecotype
    pro_2_profile: np.ndarray = field(repr=False)  # low-light ecotype
    pp_prochloro_profile: np.ndarray = field(repr=False)  # mgC m^-3 d^-1


# ---------- VALIDATION ----------

_SCALAR_FIELDS = (
    "lat", "lon", "z_bottom", "iday", "alpha_b", "pmb", "z_m", "mld",
    "chl", "rho", "sigma", "cloud", "yel_sub", "par",
)


def _is_finite(value) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def validate_inputs(inputs: ModelInputs, settings: ModelSettings):
    """
    Check that every physical input is finite and within its valid range.

    Raises:
        InvalidInputError: naming the first offending input
    """
    for name in _SCALAR_FIELDS:
        value = getattr(inputs, name)
        if not _is_finite(value):
            raise InvalidInputError(f"{name} must be a finite number, got {value!r}")

    checks = [
        (-90.0 <= inputs.lat <= 90.0, "lat must be between -90 and 90 degrees"),
        (-180.0 <= inputs.lon <= 360.0, "lon must be between -180 and 360 degrees"),
        (inputs.iday == int(inputs.iday) and 1 <= inputs.iday <= 366, "iday must be a whole day between 1 and 366"),
        (inputs.z_bottom > 0.0, "z_bottom must be positive"),
        (inputs.mld >= 0.0, "mld must not be negative"),
        (inputs.mld > 0.0 or not settings.mld_only, "mld must be positive when mld_only is set"),
        (inputs.chl >= 0.0, "chl must not be negative"),
        (inputs.par >= 0.0, "par must not be negative"),
        (inputs.alpha_b >= 0.0, "alpha_b must not be negative"),
        (inputs.pmb > 0.0, "pmb must be positive"),
        (0.0 <= inputs.z_m <= MAX_PEAK_DEPTH, f"z_m must be between 0 and {MAX_PEAK_DEPTH} m"),
        (inputs.rho >= 0.0, "rho must not be negative"),
        (MIN_PEAK_WIDTH <= inputs.sigma <= MAX_PEAK_WIDTH, f"sigma must be between {MIN_PEAK_WIDTH} and {MAX_PEAK_WIDTH} m"),
        (0.0 <= inputs.cloud <= 1.0, "cloud must be between 0 and 1"),
        (inputs.yel_sub >= 0.0, "yel_sub must not be negative"),
    ]
    for ok, message in checks:
        if not ok:
            raise InvalidInputError(message)

    for name in ("bw", "bbr", "ac"):
        table = np.asarray(getattr(inputs, name))
        if table.shape != (WL_COUNT,):
            raise InvalidInputError(f"{name} must have shape ({WL_COUNT},), got {table.shape}")
        if not np.all(np.isfinite(table)):
            raise InvalidInputError(f"{name} contains non-finite values")

    pro = settings.prochloro_inputs
    if pro is not None:
        for name in ("prochloro_surface", "prochloro_maximum"):
            value = getattr(pro, name)
            if not _is_finite(value) or value < 0.0:
                raise InvalidInputError(f"{name} must be a finite, non-negative number, got {value!r}")


def _check_finite(name: str, value):
    if not np.all(np.isfinite(value)):
        raise NumericalFailureError(f"{name} is not finite")


# ---------- MODEL ----------

def calculate_production(
    inputs: ModelInputs,
    settings: Optional[ModelSettings] = None
) -> Union[ModelOutput, IrradianceOnlyOutput]:
    """
    Compute daily primary production for one pixel.

    Args:
        inputs: Pixel inputs, including the shared spectral tables
        settings: Mode switches and optional Prochlorococcus inputs

    Returns:
        IrradianceOnlyOutput when settings.iom_only is set, else ModelOutput

    Raises:
        InvalidInputError: an input is non-finite or out of range
        NumericalFailureError: the pixel has no daylight or a result is not finite
    """
    if settings is None:
        settings = ModelSettings()
    validate_inputs(inputs, settings)

    try:
        with np.errstate(over='raise', divide='raise', invalid='raise', under='ignore'):
            return _integrate(inputs, settings)
    except NumericalFailureError:
        raise
    except ArithmeticError as e:
        # Covers FloatingPointError from numpy and Python float overflow
        raise NumericalFailureError(f"{type(e).__name__}: {e}") from e


def _integrate(inputs: ModelInputs, settings: ModelSettings) -> Union[ModelOutput, IrradianceOnlyOutput]:
    schedule = build_day_schedule(inputs.lat, inputs.iday)
    if schedule.day_length <= 0.0:
        raise NumericalFailureError(f"No daylight at latitude {inputs.lat} on day {inputs.iday}")

    iom = noon_irradiance_maximum(inputs.par, schedule.day_length, inputs.cloud, schedule.noon_elevation)
    _check_finite("par_noon_max", iom)

    if settings.iom_only:
        return IrradianceOnlyOutput(par_noon_max=iom)

    depths = build_depth_grid(inputs.z_bottom, inputs.mld, settings.mld_only)
    chl_profile = chlorophyll_profile(
        depths, inputs.chl, inputs.z_m, inputs.rho, inputs.sigma, settings.mld_only
    )
    _check_finite("chl_profile", chl_profile)

    light = compute_light_field(
        depths, chl_profile, schedule, iom, inputs.cloud,
        inputs.bw, inputs.bbr, inputs.ac, inputs.yel_sub
    )
    _check_finite("irradiance", light.spectral)

    # (time, depth) chlorophyll-specific rate
    rate = specific_production(light.spectral, spectral_alpha(inputs.alpha_b, inputs.ac), inputs.pmb)
    noon_par = light.par[schedule.noon_index]

    pro = settings.prochloro_inputs
    if pro is not None:
        pro_total = prochloro_profile(
            depths, pro.prochloro_surface, pro.prochloro_maximum,
            inputs.z_m, inputs.sigma, settings.mld_only
        )
    else:
        pro_total = np.zeros_like(depths)
    _check_finite("pro_total_profile", pro_total)
    pro_1, pro_2 = ecotype_split(pro_total, noon_par, inputs.alpha_b, inputs.pmb)
    pro_chl, residual_chl = partition_biomass(chl_profile, pro_total)

    # Integrate over the daylight hours, then down the water column
    pp_prochloro = np.trapezoid(rate * pro_chl[np.newaxis, :], x=schedule.times, axis=0)
    pp_residual = np.trapezoid(rate * residual_chl[np.newaxis, :], x=schedule.times, axis=0)
    pp_profile = pp_prochloro + pp_residual
    pp_day = float(np.trapezoid(pp_profile, x=depths))

    zeu = euphotic_depth(depths, noon_par)

    _check_finite("pp_profile", pp_profile)
    _check_finite("pp_day", pp_day)
    _check_finite("euphotic_depth", zeu)

    log.debug(f"pixel ({inputs.lat}, {inputs.lon}): pp={pp_day:.4e} zeu={zeu:.2f} iom={iom:.2f}")

    return ModelOutput(
        pp_day=pp_day,
        euphotic_depth=zeu,
        par_noon_max=iom,
        depths=read_only(depths),
        chl_profile=read_only(chl_profile),
        pp_profile=read_only(pp_profile),
        pro_total_profile=read_only(pro_total),
        pro_1_profile=read_only(pro_1),
        pro_2_profile=read_only(pro_2),
        pp_prochloro_profile=read_only(pp_prochloro),
    )
