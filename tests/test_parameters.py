#!/usr/bin/python3

"""
Tests for parameter derivation (cosmoeval/parameters.py)

Run with: pytest tests/test_parameters.py -v
"""

import dataclasses
import numpy as np
import pytest
from cosmoeval import CosmologyError, derive, omega_nu_h2, omega_gamma_h2
from cosmoeval import flat_lcdm, flat_lcdm_nu, lcdm, lcdm_nu, flat_wcdm, flat_wacdm, flat_wacdm_nu
from cosmoeval.constants import T_CMB

def closure(p):
    return p.Omega_m + p.Omega_g + p.Omega_n_rel + p.Omega_k + p.Omega_l


class TestClosure:
    """Dark-energy density closes the density budget."""

    @pytest.mark.parametrize("kwargs", [
        dict(Omega_c = 0.25, Omega_b = 0.05, h = 0.7, n_s = 0.96, A_s = 2.1e-09),
        dict(Omega_c = 0.25, Omega_b = 0.05, h = 0.7, n_s = 0.96, sigma8 = 0.8, Omega_k = 0.05),
        dict(Omega_c = 0.3, Omega_b = 0.05, h = 0.7, n_s = 0.96, A_s = 2e-09, Omega_k = -0.03,
             N_nu_rel = 1.046, N_nu_mass = 2., m_nu = 0.3),
        dict(Omega_c = 0.1, Omega_b = 0.02, h = 0.5, n_s = 1.0, sigma8 = 0.9, N_nu_rel = 3.046),
        dict(Omega_c = 0.25, Omega_b = 0.05, h = 0.7, n_s = 0.96, A_s = 2.1e-09,
             N_nu_mass = 3., m_nu = 1.5, w0 = -0.9, wa = 0.1),
    ])
    def test_closure(self, kwargs):
        p = derive(**kwargs)
        assert abs( closure(p) - 1. ) <= 1e-10

    def test_scenario(self, nu_params):
        p = nu_params
        assert p.Omega_n_mass > 0.
        assert p.Omega_n_rel == 0.
        assert p.Omega_m == pytest.approx(0.3 + 0.05 + p.Omega_n_mass, rel = 1e-14)
        assert p.Omega_l == pytest.approx(1. - p.Omega_m - p.Omega_g - p.Omega_k, rel = 1e-14)
        assert abs( closure(p) - 1. ) <= 1e-10

    def test_derived_fields(self, nu_params):
        p = nu_params
        assert p.H0 == pytest.approx(70.)
        assert p.T_CMB == T_CMB
        assert p.Omega_g == pytest.approx(omega_gamma_h2(T_CMB) / 0.49, rel = 1e-14)
        assert p.Omega_n_mass == pytest.approx(omega_nu_h2(1., 3., 0.12, T_CMB) / 0.49, rel = 1e-14)
        assert p.Omega_n == pytest.approx(p.Omega_n_rel + p.Omega_n_mass)
        assert p.z_star is None


class TestNormalization:
    """Exactly one of A_s and sigma8."""

    def test_amplitude(self, params):
        assert params.A_s == 2.1e-09
        assert params.sigma8 is None
        assert params.normalization.kind == 'A_s'

    def test_sigma8(self, sigma8_params):
        assert sigma8_params.sigma8 == 0.8
        assert sigma8_params.A_s is None

    def test_nan_is_unset(self):
        p = derive(0.25, 0.05, 0.7, 0.96, A_s = float('nan'), sigma8 = 0.8)
        assert p.sigma8 == 0.8 and p.A_s is None

    def test_both_set(self):
        with pytest.raises(CosmologyError):
            derive(0.25, 0.05, 0.7, 0.96, A_s = 2.1e-09, sigma8 = 0.8)

    def test_none_set(self):
        with pytest.raises(CosmologyError):
            derive(0.25, 0.05, 0.7, 0.96)

    @pytest.mark.parametrize("kwargs", [ dict(A_s = 0.), dict(sigma8 = -0.8) ])
    def test_non_positive(self, kwargs):
        with pytest.raises(CosmologyError):
            derive(0.25, 0.05, 0.7, 0.96, **kwargs)


class TestValidation:
    """Invalid primary parameters."""

    @pytest.mark.parametrize("kwargs", [
        dict(h = 0.),
        dict(h = -0.7),
        dict(Omega_c = -0.1),
        dict(Omega_b = -0.01),
        dict(N_nu_rel = -1.),
        dict(N_nu_mass = -1.),
        dict(N_nu_mass = 3., m_nu = -0.1),
        dict(m_nu = 0.1),
    ])
    def test_invalid(self, kwargs):
        args = dict(Omega_c = 0.25, Omega_b = 0.05, h = 0.7, n_s = 0.96, A_s = 2.1e-09)
        args.update(kwargs)
        with pytest.raises(CosmologyError):
            derive(**args)

    def test_negative_dark_energy_warns(self):
        with pytest.warns(UserWarning):
            p = derive(1.1, 0.05, 0.7, 0.96, A_s = 2.1e-09)
        assert p.Omega_l < 0.

    def test_frozen(self, params):
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.h = 0.5


class TestModifiedGrowth:
    """Modified growth table ownership."""

    def test_absent(self, params):
        assert params.mgrowth is None
        assert not params.has_mgrowth
        assert params.nz_mgrowth == 0

    def test_empty_arrays(self):
        p = derive(0.25, 0.05, 0.7, 0.96, A_s = 2.1e-09, z_mgrowth = [], df_mgrowth = [])
        assert not p.has_mgrowth and p.nz_mgrowth == 0

    def test_deep_copy(self):
        z, df = np.array([0., 1., 2.]), np.array([0.1, 0.2, 0.3])
        p = derive(0.25, 0.05, 0.7, 0.96, A_s = 2.1e-09, z_mgrowth = z, df_mgrowth = df)
        z[0], df[0] = 10., 10.
        assert p.has_mgrowth and p.nz_mgrowth == 3
        assert p.mgrowth.z[0] == 0. and p.mgrowth.df[0] == 0.1
        assert not np.shares_memory(p.mgrowth.z, z)

    def test_read_only(self):
        p = derive(0.25, 0.05, 0.7, 0.96, A_s = 2.1e-09, z_mgrowth = [0., 1.], df_mgrowth = [0.1, 0.1])
        with pytest.raises(ValueError):
            p.mgrowth.df[0] = 1.

    @pytest.mark.parametrize("z, df", [ ([0., 1.], [0.1]),
                                        ([0., 1.], None),
                                        (None, [0.1]),
                                        ([[0., 1.]], [[0.1, 0.1]]),
                                        ([1., 0.], [0.1, 0.1]), ])
    def test_invalid(self, z, df):
        with pytest.raises(CosmologyError):
            derive(0.25, 0.05, 0.7, 0.96, A_s = 2.1e-09, z_mgrowth = z, df_mgrowth = df)


class TestShortcuts:
    """Model family shortcuts."""

    def test_flat_lcdm(self):
        p = flat_lcdm(0.25, 0.05, 0.7, 0.96, sigma8 = 0.8)
        assert p.Omega_k == 0. and p.w0 == -1. and p.wa == 0.
        assert p.N_nu_rel == 0. and p.N_nu_mass == 0. and p.m_nu == 0.
        assert p.isFlat()

    def test_lcdm(self):
        p = lcdm(0.25, 0.05, 0.1, 0.7, 0.96, sigma8 = 0.8)
        assert p.Omega_k == 0.1 and not p.isFlat()

    def test_neutrinos(self):
        p = flat_lcdm_nu(0.25, 0.05, 0.7, 0.96, 1.046, 2., 0.06, A_s = 2.1e-09)
        q = lcdm_nu(0.25, 0.05, 0., 0.7, 0.96, 1.046, 2., 0.06, A_s = 2.1e-09)
        assert p.Omega_n_rel > 0. and p.Omega_n_mass > 0.
        assert p.Omega_l == q.Omega_l

    def test_dark_energy(self):
        assert flat_wcdm(0.25, 0.05, -0.9, 0.7, 0.96, sigma8 = 0.8).w0 == -0.9
        p = flat_wacdm(0.25, 0.05, -0.9, 0.2, 0.7, 0.96, sigma8 = 0.8)
        assert (p.w0, p.wa) == (-0.9, 0.2)
        p = flat_wacdm_nu(0.25, 0.05, -0.9, 0.2, 0.7, 0.96, 0., 3., 0.1, sigma8 = 0.8)
        assert p.Omega_n_mass > 0.
