"""Shared fixtures for the DWCPN tests."""

import pytest

from dwcpn.model import ModelInputs
from dwcpn.spectral import calculate_ac, calculate_bbr, calculate_bw

# Subtropical summer pixel over deep water
BASE_PIXEL = dict(
    lat=30.0,
    lon=-40.0,
    z_bottom=200.0,
    iday=172,
    alpha_b=0.05,
    pmb=3.0,
    z_m=40.0,
    mld=30.0,
    chl=0.2,
    rho=1.0,
    sigma=15.0,
    cloud=0.0,
    yel_sub=0.2,
    par=45.0,
)


@pytest.fixture(scope="session")
def tables():
    """Spectral tables (bw, bbr, ac) shared by every test."""
    return calculate_bw(), calculate_bbr(), calculate_ac()


@pytest.fixture
def make_inputs(tables):
    """Build ModelInputs for the base pixel with any field overridden."""
    bw, bbr, ac = tables

    def _make(**overrides):
        values = dict(BASE_PIXEL)
        values.update(overrides)
        return ModelInputs(bw=bw, bbr=bbr, ac=ac, **values)

    return _make
