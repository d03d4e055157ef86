"""
I/O module for gridded DWCPN runs.

This module handles:
- Reading the per-pixel input fields from a NetCDF file
- Creating missing output variables (maps and depth profiles)
- Writing model results back into the same file
"""

import logging
from typing import Dict

import numpy as np
from netCDF4 import Dataset

from .constants import DEPTH_PROFILE_COUNT
from .grid_config import GridConfig

log = logging.getLogger("IO")

# Map fields (lat, lon) and profile fields (depth_profile, lat, lon)
MAP_OUTPUTS = ("pp", "euphotic_depth", "par_noon_max")
PROFILE_OUTPUTS = ("pro_total", "pro_1", "pro_2", "pp_prochloro")

# Input fields every full run needs, in addition to lat and lon
_REQUIRED_INPUTS = ("chl", "par", "bathymetry", "pi_alpha", "pi_pmb", "zm", "mld", "rho", "sigma")
_PROCHLORO_INPUTS = ("pro_surf", "pro_max")


# ---------- NETCDF LOADING ----------

def read_field(nc: Dataset, var_name: str) -> np.ma.MaskedArray:
    """
    Read one variable as a float64 masked array.

    Values equal to the variable's _FillValue or missing_value are masked by
    netCDF4; NaNs are masked here.

    Raises:
        KeyError: the variable is not in the file
    """
    if var_name not in nc.variables:
        raise KeyError(f"Variable '{var_name}' not found in {nc.filepath()}")
    data = nc.variables[var_name][:]
    return np.ma.masked_invalid(np.ma.asarray(data, dtype=np.float64))


def load_grid_fields(nc: Dataset, config: GridConfig, iom_only: bool = False) -> Dict[str, np.ma.MaskedArray]:
    """
    Load every input field a run needs.

    Args:
        nc: Open NetCDF dataset
        config: Variable names and run options
        iom_only: Only load what the noon PAR calculation needs

    Returns:
        Dictionary of field key (InputVariables attribute) -> masked array.
        lat and lon are 1D or 2D coordinate arrays; every other field is 2D.
    """
    names = config.inputs
    keys = ["lat", "lon", "par"]
    if not iom_only:
        keys = ["lat", "lon"] + list(_REQUIRED_INPUTS)
        if config.use_prochloro:
            keys += list(_PROCHLORO_INPUTS)

    fields = {}
    for key in keys:
        var_name = getattr(names, key)
        fields[key] = read_field(nc, var_name)
        log.debug(f"Loaded {var_name} with shape {fields[key].shape}")

    grid_shape = fields["par"].shape
    if len(grid_shape) != 2:
        raise ValueError(f"Expected 2D (lat, lon) input fields, '{names.par}' has shape {grid_shape}")
    for key, values in fields.items():
        if key in ("lat", "lon"):
            continue
        if values.shape != grid_shape:
            raise ValueError(
                f"Field '{getattr(names, key)}' has shape {values.shape}, expected {grid_shape}"
            )

    log.info(f"Loaded {len(fields)} input fields on a {grid_shape[0]} x {grid_shape[1]} grid")
    return fields


# ---------- OUTPUT VARIABLES ----------

def _map_dimensions(nc: Dataset, config: GridConfig):
    """Dimensions of the 2D input fields, used for the output maps."""
    return nc.variables[config.inputs.par].dimensions


def ensure_output_variables(nc: Dataset, config: GridConfig, keys) -> Dict[str, str]:
    """
    Create any output variable that is missing from the file.

    Profile outputs get a leading depth dimension of DEPTH_PROFILE_COUNT
    levels, created if needed.

    Args:
        nc: NetCDF dataset opened for writing
        config: Variable names and fill value
        keys: Output keys (OutputVariables attributes) that will be written

    Returns:
        Dictionary of output key -> variable name in the file
    """
    map_dims = _map_dimensions(nc, config)
    profile_dim = config.profile_dimension
    var_names = {}

    for key in keys:
        var_name = getattr(config.outputs, key)
        var_names[key] = var_name
        if var_name in nc.variables:
            continue

        if key in PROFILE_OUTPUTS:
            if profile_dim not in nc.dimensions:
                nc.createDimension(profile_dim, DEPTH_PROFILE_COUNT)
                log.info(f"Created dimension {profile_dim} ({DEPTH_PROFILE_COUNT})")
            dims = (profile_dim,) + tuple(map_dims)
        else:
            dims = tuple(map_dims)

        nc.createVariable(var_name, 'f8', dims, fill_value=config.fill_value)
        log.info(f"Created output variable {var_name} {dims}")

    return var_names


def write_results(nc: Dataset, config: GridConfig, outputs: Dict[str, np.ndarray]):
    """
    Write result arrays to their output variables.

    Pixels that were not computed hold config.fill_value in the arrays; they
    are masked so netCDF4 stores each variable's own fill value.

    Args:
        nc: NetCDF dataset opened for writing
        config: Variable names and fill value
        outputs: Dictionary of output key -> array (2D maps or 3D profiles)
    """
    var_names = ensure_output_variables(nc, config, outputs.keys())

    for key, values in outputs.items():
        var_name = var_names[key]
        masked = np.ma.masked_equal(values, config.fill_value)
        nc.variables[var_name][:] = masked
        log.info(f"Wrote {var_name} ({masked.count()} valid values)")
