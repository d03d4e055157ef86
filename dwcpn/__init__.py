"""DWCPN spectral primary production model."""

from .constants import DEPTH_PROFILE_COUNT, WL_ARRAY, WL_COUNT
from .errors import InvalidInputError, ModelError, NumericalFailureError
from .model import (
    IrradianceOnlyOutput,
    ModelInputs,
    ModelOutput,
    ModelSettings,
    ProchloroInputs,
    calculate_production,
)
from .spectral import calculate_ac, calculate_bbr, calculate_bw

__all__ = [
    'DEPTH_PROFILE_COUNT',
    'WL_ARRAY',
    'WL_COUNT',
    'ModelError',
    'InvalidInputError',
    'NumericalFailureError',
    'IrradianceOnlyOutput',
    'ModelInputs',
    'ModelOutput',
    'ModelSettings',
    'ProchloroInputs',
    'calculate_production',
    'calculate_ac',
    'calculate_bbr',
    'calculate_bw',
]
