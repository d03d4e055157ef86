"""
Processing module for gridded DWCPN runs.

Runs the per-pixel model over every (lat, lon) cell of an input grid. Cells
with any masked input are skipped; cells the model rejects are logged and
counted. Both leave the fill value in every output.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Union

import numpy as np
from netCDF4 import Dataset
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from .constants import DEPTH_PROFILE_COUNT
from .errors import ModelError
from .grid_config import GridConfig
from .grid_io import MAP_OUTPUTS, PROFILE_OUTPUTS, load_grid_fields, write_results
from .model import ModelInputs, ModelSettings, ProchloroInputs, calculate_production
from .spectral import calculate_ac, calculate_bbr, calculate_bw

log = logging.getLogger("Processor")


# ---------- DATA STRUCTURES ----------

@dataclass
class GridResults:
    """Output arrays of a gridded run and per-pixel bookkeeping."""
    outputs: Dict[str, np.ndarray]
    processed: int = 0
    skipped: int = 0
    failed: List[Tuple[int, int, str]] = field(default_factory=list)


# ---------- HELPERS ----------

def _coordinates(lat, lon, y: int, x: int) -> Tuple[float, float]:
    """Latitude and longitude of cell (y, x) for 1D or 2D coordinate arrays."""
    if lat.ndim == 2:
        return float(lat[y, x]), float(lon[y, x])
    return float(lat[y]), float(lon[x])


def _cell_masked(fields: Dict[str, np.ma.MaskedArray], y: int, x: int) -> bool:
    lat_mask = np.ma.getmaskarray(fields["lat"])
    lon_mask = np.ma.getmaskarray(fields["lon"])
    if lat_mask.ndim == 2:
        if lat_mask[y, x] or lon_mask[y, x]:
            return True
    elif lat_mask[y] or lon_mask[x]:
        return True

    for key, values in fields.items():
        if key in ("lat", "lon"):
            continue
        if np.ma.getmaskarray(values)[y, x]:
            return True
    return False


def _allocate_outputs(shape, keys, fill_value: float) -> Dict[str, np.ndarray]:
    outputs = {}
    for key in keys:
        if key in PROFILE_OUTPUTS:
            outputs[key] = np.full((DEPTH_PROFILE_COUNT,) + tuple(shape), fill_value, dtype=np.float64)
        else:
            outputs[key] = np.full(shape, fill_value, dtype=np.float64)
    return outputs


def _progress(show: bool) -> Progress:
    return Progress(
        TextColumn("{task.description}"),
        SpinnerColumn(),
        TimeElapsedColumn(),
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        disable=not show,
    )


# ---------- GRID PROCESSING ----------

def process_grid(
    fields: Dict[str, np.ma.MaskedArray],
    day_of_year: int,
    config: GridConfig,
    mld_only: bool = False,
    iom_only: bool = False,
    show_progress: bool = True
) -> GridResults:
    """
    Run the model over every cell of the grid.

    Args:
        fields: Input fields as returned by load_grid_fields
        day_of_year: Day of year applied to every cell
        config: Run constants (cloud, yel_sub, use_prochloro, fill_value)
        mld_only: Restrict each cell to its mixed layer
        iom_only: Only compute the noon PAR maximum
        show_progress: Draw a progress bar on the console

    Returns:
        GridResults with one output array per written output key
    """
    lat = fields["lat"]
    lon = fields["lon"]
    shape = fields["par"].shape
    ny, nx = shape

    # Spectral tables are shared by every cell
    bw = calculate_bw()
    bbr = calculate_bbr()
    ac = calculate_ac()

    keys = ("par_noon_max",) if iom_only else MAP_OUTPUTS + PROFILE_OUTPUTS
    results = GridResults(outputs=_allocate_outputs(shape, keys, config.fill_value))
    out = results.outputs

    log.info(f"Processing {ny * nx} cells for day {day_of_year} (mld_only={mld_only}, iom_only={iom_only})")

    with _progress(show_progress) as progress:
        task = progress.add_task("DWCPN", total=ny * nx)
        for y in range(ny):
            for x in range(nx):
                if _cell_masked(fields, y, x):
                    results.skipped += 1
                    continue

                cell_lat, cell_lon = _coordinates(lat, lon, y, x)

                if iom_only:
                    # Only daily PAR matters; the other physical inputs get neutral values
                    inputs = ModelInputs(
                        lat=cell_lat, lon=cell_lon, z_bottom=1.0, iday=day_of_year,
                        alpha_b=0.0, pmb=1.0, z_m=0.0, mld=0.0, chl=0.0, rho=0.0, sigma=1.0,
                        cloud=config.cloud, yel_sub=config.yel_sub,
                        par=float(fields["par"][y, x]), bw=bw, bbr=bbr, ac=ac,
                    )
                    settings = ModelSettings(mld_only=False, iom_only=True)
                else:
                    inputs = ModelInputs(
                        lat=cell_lat,
                        lon=cell_lon,
                        z_bottom=float(fields["bathymetry"][y, x]),
                        iday=day_of_year,
                        alpha_b=float(fields["pi_alpha"][y, x]),
                        pmb=float(fields["pi_pmb"][y, x]),
                        z_m=float(fields["zm"][y, x]),
                        mld=float(fields["mld"][y, x]),
                        chl=float(fields["chl"][y, x]),
                        rho=float(fields["rho"][y, x]),
                        sigma=float(fields["sigma"][y, x]),
                        cloud=config.cloud,
                        yel_sub=config.yel_sub,
                        par=float(fields["par"][y, x]),
                        bw=bw,
                        bbr=bbr,
                        ac=ac,
                    )
                    prochloro = None
                    if config.use_prochloro:
                        prochloro = ProchloroInputs(
                            prochloro_surface=float(fields["pro_surf"][y, x]),
                            prochloro_maximum=float(fields["pro_max"][y, x]),
                        )
                    settings = ModelSettings(mld_only=mld_only, iom_only=False, prochloro_inputs=prochloro)

                try:
                    result = calculate_production(inputs, settings)
                except ModelError as e:
                    log.warning(f"Cell ({y}, {x}) at ({cell_lat:.3f}, {cell_lon:.3f}) failed: {e}")
                    results.failed.append((y, x, str(e)))
                    continue

                out["par_noon_max"][y, x] = result.par_noon_max
                if not iom_only:
                    out["pp"][y, x] = result.pp_day
                    out["euphotic_depth"][y, x] = result.euphotic_depth
                    out["pro_total"][:, y, x] = result.pro_total_profile
                    out["pro_1"][:, y, x] = result.pro_1_profile
                    out["pro_2"][:, y, x] = result.pro_2_profile
                    out["pp_prochloro"][:, y, x] = result.pp_prochloro_profile
                results.processed += 1

            progress.advance(task, nx)

    log.info(
        f"Processed {results.processed} cells, skipped {results.skipped} masked, "
        f"{len(results.failed)} failed"
    )
    return results


def process_file(
    file_path: Union[str, Path],
    day_of_year: int,
    config: GridConfig,
    mld_only: bool = False,
    iom_only: bool = False,
    show_progress: bool = True
) -> GridResults:
    """
    Run the model over a NetCDF file and write the results into it.

    The file is opened in append mode; missing output variables are created.

    Returns:
        GridResults of the run
    """
    log.info(f"Opening {file_path}")
    with Dataset(file_path, 'r+') as nc:
        fields = load_grid_fields(nc, config, iom_only=iom_only)
        results = process_grid(
            fields, day_of_year, config,
            mld_only=mld_only, iom_only=iom_only, show_progress=show_progress
        )
        write_results(nc, config, results.outputs)
    return results
