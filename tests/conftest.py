#!/usr/bin/python3

import pytest
from cosmoeval import Cosmology, flat_lcdm, flat_lcdm_nu

@pytest.fixture
def params():
    return flat_lcdm(Omega_c = 0.25, Omega_b = 0.05, h = 0.7, n_s = 0.96, A_s = 2.1e-09)

@pytest.fixture
def sigma8_params():
    return flat_lcdm(Omega_c = 0.25, Omega_b = 0.05, h = 0.7, n_s = 0.96, sigma8 = 0.8)

@pytest.fixture
def nu_params():
    return flat_lcdm_nu(Omega_c = 0.3, Omega_b = 0.05, h = 0.7, n_s = 0.9619,
                        N_nu_rel = 0., N_nu_mass = 3., m_nu = 0.12, A_s = 2.215e-09)

@pytest.fixture
def model(params):
    cm = Cosmology(params)
    yield cm
    cm.free()
