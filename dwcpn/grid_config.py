"""
Configuration parsing for gridded DWCPN runs.

This module handles parsing of a dwcpn_config.toml file into structured
configuration objects: which NetCDF variables hold each model input, which
variables receive each output, and the per-run constants applied to every
pixel. Every setting has a default, so a run without a config file uses the
standard variable layout.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union
import logging

# Import TOML parser (tomllib in Python 3.11+, tomli for earlier versions)
try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib

log = logging.getLogger("Config")

# NetCDF default fill value for doubles
NC_FILL_DOUBLE = 9.969209968386869e36


# ---------- DATA STRUCTURES ----------

@dataclass
class InputVariables:
    """NetCDF variable names of the per-pixel model inputs."""
    lat: str = "lat"
    lon: str = "lon"
    chl: str = "chlor_a"
    par: str = "par"
    bathymetry: str = "bathymetry"
    pi_alpha: str = "PI_alpha"
    pi_pmb: str = "PI_pmb"
    zm: str = "zm"
    mld: str = "mld"
    rho: str = "rho"
    sigma: str = "sigma"
    pro_surf: str = "Pro_Surf"
    pro_max: str = "Pro_Max"


@dataclass
class OutputVariables:
    """NetCDF variable names the model results are written to."""
    pp: str = "pp"
    euphotic_depth: str = "euphotic_depth"
    par_noon_max: str = "i_star_mean"
    pro_total: str = "pro_total"
    pro_1: str = "pro_1"
    pro_2: str = "pro_2"
    pp_prochloro: str = "prochlorococcus"


@dataclass
class GridConfig:
    """Complete configuration for a gridded run."""
    cloud: float = 0.0  # Cloud fraction applied to every pixel
    yel_sub: float = 0.2  # Yellow substance ratio at 440 nm
    use_prochloro: bool = True  # Read Pro_Surf/Pro_Max and fill the subpopulation profiles
    fill_value: float = NC_FILL_DOUBLE  # Used when creating output variables
    profile_dimension: str = "depth_profile"

    inputs: InputVariables = None
    outputs: OutputVariables = None

    def __post_init__(self):
        """Initialize default variable names if None."""
        if self.inputs is None:
            self.inputs = InputVariables()
        if self.outputs is None:
            self.outputs = OutputVariables()


# ---------- PARSING FUNCTIONS ----------

def _apply_section(target, section: dict, section_name: str):
    """Copy known keys of a TOML table onto a dataclass, warning about the rest."""
    known = {f.name for f in fields(target)}
    for key, value in section.items():
        if key not in known:
            log.warning(f"Unknown key '{key}' in [{section_name}] ignored")
            continue
        setattr(target, key, value)


def parse_toml_config(file_path: Union[str, Path]) -> GridConfig:
    """
    Parse TOML configuration file.

    Args:
        file_path: Path to the .toml configuration file

    Returns:
        GridConfig object with all parsed configuration
    """
    config = GridConfig()

    with open(file_path, 'rb') as f:
        data = tomllib.load(f)

    # Parse model constants
    model = data.get('model', {})
    config.cloud = float(model.get('cloud', config.cloud))
    config.yel_sub = float(model.get('yel_sub', config.yel_sub))
    config.use_prochloro = bool(model.get('use_prochloro', config.use_prochloro))

    # Parse NetCDF layout
    netcdf = data.get('netcdf', {})
    config.fill_value = float(netcdf.get('fill_value', config.fill_value))
    config.profile_dimension = netcdf.get('profile_dimension', config.profile_dimension)

    # Parse variable names
    _apply_section(config.inputs, data.get('inputs', {}), 'inputs')
    _apply_section(config.outputs, data.get('outputs', {}), 'outputs')

    if not 0.0 <= config.cloud <= 1.0:
        raise ValueError(f"cloud must be between 0 and 1, got {config.cloud}")
    if config.yel_sub < 0.0:
        raise ValueError(f"yel_sub must not be negative, got {config.yel_sub}")

    log.info(f"Parsed configuration from {file_path}")
    return config


def load_config(file_path: Optional[Union[str, Path]] = None) -> GridConfig:
    """Load configuration from file_path, or the defaults when no file is given."""
    if file_path is None:
        log.info("No configuration file given, using defaults")
        return GridConfig()
    return parse_toml_config(file_path)
