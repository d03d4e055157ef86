"""
Console and log-file setup for DWCPN command-line runs.

Console messages are formatted with rich; the full DEBUG log goes to a file.
"""

import logging
from pathlib import Path
from typing import Union

from rich.console import Console
from rich.panel import Panel

_console = Console()


def setup_logging(log_file: Union[str, Path]):
    """
    Send DEBUG and above to log_file and INFO and above to the console.

    Args:
        log_file: Path of the log file, overwritten on each run
    """
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s %(name)-12s %(levelname)-8s %(message)s',
        datefmt='%m-%d %H:%M',
        filename=str(log_file),
        filemode='w'
    )

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    formatter = logging.Formatter('%(levelname)-5s %(message)s')
    console.setFormatter(formatter)
    logging.getLogger('').addHandler(console)

    # numba logs its compilation passes at DEBUG
    logging.getLogger('numba').setLevel(logging.WARNING)


def print_header(text: str):
    """
    Print a boxed header.

    Example:
        print_header("DWCPN primary production")
        # ╭──────────────────────────╮
        # │ DWCPN primary production │
        # ╰──────────────────────────╯
    """
    _console.print(Panel(text, expand=False, border_style="blue"))


def print_success(message: str):
    """Print a success message in green with a check mark."""
    _console.print(f":white_check_mark: {message}", style="green")


def print_info(message: str):
    _console.print(f"[blue]ℹ[/blue] {message}")


def print_warning(message: str):
    """Print a warning message in yellow."""
    _console.print(f":warning: {message}", style="yellow")
