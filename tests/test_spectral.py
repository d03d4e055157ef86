"""Tests for the shared spectral coefficient tables."""

import numpy as np
import pytest

from dwcpn.constants import WL_ARRAY, WL_COUNT
from dwcpn.spectral import calculate_ac, calculate_bbr, calculate_bw, read_only


@pytest.mark.parametrize("builder", [calculate_bw, calculate_bbr, calculate_ac])
def test_table_shape_and_sign(builder):
    """Each table has one positive, finite value per waveband."""
    table = builder()
    assert table.shape == (WL_COUNT,)
    assert table.dtype == np.float64
    assert np.all(np.isfinite(table))
    assert np.all(table > 0)


@pytest.mark.parametrize("builder", [calculate_bw, calculate_bbr, calculate_ac])
def test_table_is_read_only(builder):
    """Tables cannot be modified in place."""
    table = builder()
    assert not table.flags.writeable
    with pytest.raises(ValueError):
        table[0] = 1.0


@pytest.mark.parametrize("builder", [calculate_bw, calculate_bbr, calculate_ac])
def test_table_is_deterministic(builder):
    np.testing.assert_array_equal(builder(), builder())


def test_bw_reference_value():
    """Seawater backscattering is half the Morel scattering at 500 nm."""
    bw = calculate_bw()
    i500 = int(np.argmin(np.abs(WL_ARRAY - 500.0)))
    assert bw[i500] == pytest.approx(0.5 * 0.00288)


def test_scattering_decreases_with_wavelength():
    """Both backscattering tables fall off towards the red."""
    assert np.all(np.diff(calculate_bw()) < 0)
    assert np.all(np.diff(calculate_bbr()) < 0)


def test_ac_peaks_in_the_blue():
    """Phytoplankton absorption is strongest around 440 nm."""
    ac = calculate_ac()
    assert 420.0 <= WL_ARRAY[np.argmax(ac)] <= 450.0
    assert ac[WL_ARRAY == 440.0][0] > ac[WL_ARRAY == 550.0][0]


def test_read_only_copies_lists():
    values = read_only([1, 2, 3])
    assert values.dtype == np.float64
    assert not values.flags.writeable
