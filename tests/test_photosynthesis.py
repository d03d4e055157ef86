"""Tests for the P-I model and the Prochlorococcus partitioning."""

import numpy as np
import pytest

from dwcpn.constants import PAR_FRACTIONS, WL_COUNT
from dwcpn.photosynthesis import (
    ecotype_split,
    partition_biomass,
    prochloro_profile,
    spectral_alpha,
    specific_production,
)


def test_spectral_alpha_averages_to_alpha_b(tables):
    _, _, ac = tables
    alpha = spectral_alpha(0.05, ac)
    assert alpha.shape == (WL_COUNT,)
    assert alpha.mean() == pytest.approx(0.05)


def test_no_light_no_production(tables):
    _, _, ac = tables
    rate = specific_production(np.zeros((3, WL_COUNT)), spectral_alpha(0.05, ac), 3.0)
    np.testing.assert_array_equal(rate, np.zeros(3))


def test_rate_saturates_at_pmb(tables):
    """Production is bounded by pmb and approaches it in bright light."""
    _, _, ac = tables
    alpha = spectral_alpha(0.05, ac)
    levels = np.array([1.0, 10.0, 100.0, 1e5])[:, np.newaxis] * PAR_FRACTIONS[np.newaxis, :]
    rate = specific_production(levels, alpha, 3.0)
    assert np.all(np.diff(rate) > 0)
    assert np.all((rate >= 0) & (rate <= 3.0))
    assert rate[-1] == pytest.approx(3.0)


def test_initial_slope_in_dim_light(tables):
    """In weak light the rate is the absorbed-light term alpha . I."""
    _, _, ac = tables
    alpha = spectral_alpha(0.05, ac)
    light = 1e-4 * PAR_FRACTIONS
    assert specific_production(light, alpha, 3.0) == pytest.approx(light @ alpha, rel=1e-4)


# ---------- PROCHLOROCOCCUS ----------

def test_prochloro_profile_shape():
    depths = np.linspace(0.0, 200.0, 101)
    profile = prochloro_profile(depths, 0.05, 0.12, 40.0, 15.0)
    assert profile[0] == pytest.approx(0.05)
    assert profile[20] == pytest.approx(0.12)
    assert np.all(np.diff(profile[:21]) >= 0)
    assert np.all(np.diff(profile[20:]) <= 0)
    assert np.all(profile >= 0)


def test_prochloro_profile_in_mixed_layer_is_uniform():
    depths = np.linspace(0.0, 30.0, 101)
    np.testing.assert_allclose(prochloro_profile(depths, 0.05, 0.12, 40.0, 15.0, mld_only=True), 0.05)


def test_ecotype_split_sums_to_total():
    pro_total = np.array([0.1, 0.1, 0.1])
    noon_par = np.array([500.0, 20.0, 0.0])
    high, low = ecotype_split(pro_total, noon_par, 0.05, 3.0)
    np.testing.assert_allclose(high + low, pro_total)
    assert high[0] > high[1] > high[2] == 0.0


def test_partition_caps_prochloro_at_total():
    chl = np.array([0.2, 0.2, 0.05])
    pro = np.array([0.0, 0.1, 0.1])
    pro_chl, residual = partition_biomass(chl, pro)
    np.testing.assert_allclose(pro_chl, [0.0, 0.1, 0.05])
    np.testing.assert_allclose(residual, [0.2, 0.1, 0.0])
    assert np.all(residual >= 0)


def test_prochloro_profile_with_extreme_shape_does_not_raise():
    depths = np.linspace(0.0, 200.0, 101)
    profile = prochloro_profile(depths, 0.05, 0.12, 1e200, 1e-200)
    assert profile.shape == depths.shape
