#!/usr/bin/env python
"""
DWCPN - spectral primary production over a gridded NetCDF file.

Reads chlorophyll, PAR, bathymetry, P-I parameters and the chlorophyll profile
shape from the input file, runs the model for every ocean cell and writes the
results back into the same file.

Examples:
  dwcpn -i input.nc -j 172
  dwcpn -i input.nc -j 172 -m -c dwcpn_config.toml
  dwcpn -i input.nc -j 172 -p
"""

import argparse
import logging
import sys
from pathlib import Path

from .grid_config import load_config
from .grid_processor import process_file
from .logging_utils import print_header, print_info, print_success, print_warning, setup_logging

log = logging.getLogger("Run")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dwcpn',
        description='DWCPN spectral primary production model',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('-i', '--inputfile', type=Path, required=True,
                        help='NetCDF file holding the input fields; results are written into it')
    parser.add_argument('-j', '--jday', type=int, required=True,
                        help='Day of year (1-366)')
    parser.add_argument('-m', '--mixed-layer-depth', action='store_true',
                        help='Integrate over the mixed layer only, with uniform chlorophyll')
    parser.add_argument('-p', '--iom-only', action='store_true',
                        help='Only compute the noon maximum PAR')
    parser.add_argument('-c', '--config', type=Path, default=None,
                        help='TOML configuration file (default: built-in variable names)')
    parser.add_argument('--log-file', type=Path, default=None,
                        help='Log file (default: dwcpn.<input stem>.<jday>.log)')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Hide the progress bar')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.inputfile.exists():
        parser.error(f"Input file not found: {args.inputfile}")
    if not 1 <= args.jday <= 366:
        parser.error(f"Day of year must be between 1 and 366, got {args.jday}")
    if args.config is not None and not args.config.exists():
        parser.error(f"Configuration file not found: {args.config}")

    log_file = args.log_file or Path(f"dwcpn.{args.inputfile.stem}.{args.jday}.log")
    setup_logging(log_file)

    print_header("DWCPN primary production")
    log.info(f"Processing file: {args.inputfile}")
    log.info(f"Day of year: {args.jday}")

    config = load_config(args.config)

    results = process_file(
        args.inputfile,
        args.jday,
        config,
        mld_only=args.mixed_layer_depth,
        iom_only=args.iom_only,
        show_progress=not args.quiet
    )

    if results.failed:
        print_warning(f"{len(results.failed)} cells failed, see {log_file}")
    print_info(f"{results.skipped} masked cells skipped")
    print_success(f"{results.processed} cells written to {args.inputfile}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
