#!/usr/bin/python3

r"""

Background quantities
=====================

Expansion rate, comoving distance and linear growth for a `Parameters` record. The functions
`compute_distances` and `compute_growth` fill the interpolation tables of a cosmology model;
the others are plain functions of the scale factor.

The expansion rate is

.. math::

    E^2(a) = \Omega_{cb} a^{-3} + \Omega_r a^{-4} + \frac{\omega_{\nu,m}(a)}{h^2}
             + \Omega_k a^{-2} + \Omega_\Lambda \rho_{de}(a)

where the dark-energy density follows the :math:`w_0`-:math:`w_a` model.

"""

import time
import logging
import numpy as np
from scipy.integrate import solve_ivp, cumulative_trapezoid
from typing import Any
from ._base import CosmologyError, STATUS_INTEGRATION_ERROR, STATUS_SPLINE_ERROR
from .neutrinos import omega_nu_h2
from .utils import Interpolator1D
from .constants import HUBBLE_DISTANCE

def darkEnergyDensity(params: Any, a: Any) -> Any:
    r"""
    Return the dark-energy density relative to its present value, for the equation of state
    :math:`w(a) = w_0 + w_a (1 - a)`.
    """
    w0, wa = params.w0, params.wa
    return a**( -3*(1 + w0 + wa) ) * np.exp( 3*wa*(a - 1) )

def massiveNeutrinoDensity(params: Any, a: Any) -> Any:
    r"""
    Return the massive neutrino density in units of present critical density.
    """
    if params.N_nu_mass == 0:
        return np.zeros_like(a)
    return omega_nu_h2(a, params.N_nu_mass, params.m_nu, params.T_CMB, params.nu_table) / params.h**2

def E2(params: Any, a: Any) -> Any:
    r"""
    Return the squared expansion rate :math:`E^2(a) = H^2(a) / H_0^2`.
    """
    a   = np.asarray(a, dtype = 'float')
    res = ( params.Omega_c + params.Omega_b ) * a**-3
    res = res + params.Omega_r * a**-4
    res = res + massiveNeutrinoDensity(params, a)
    res = res + params.Omega_k * a**-2
    res = res + params.Omega_l * darkEnergyDensity(params, a)
    return res

def dlnEdlna(params: Any, a: Any) -> Any:
    r"""
    Return the logarithmic derivative of the expansion rate with respect to scale factor.
    """
    a    = np.asarray(a, dtype = 'float')
    w    = params.w0 + params.wa * (1 - a)
    res  = -3*( params.Omega_c + params.Omega_b ) * a**-3
    res += -4*params.Omega_r * a**-4
    res += -2*params.Omega_k * a**-2
    res += -3*(1 + w) * params.Omega_l * darkEnergyDensity(params, a)
    if params.N_nu_mass > 0:
        # central difference for the neutrino term
        eps  = 1e-04
        res += ( massiveNeutrinoDensity(params, a*np.exp(eps))
                 - massiveNeutrinoDensity(params, a*np.exp(-eps)) ) / (2*eps)
    return 0.5 * res / E2(params, a)

def _interpolator(x: Any, f: Any, name: str) -> Interpolator1D:
    if not np.all( np.isfinite(f) ):
        raise CosmologyError(f"non-finite samples in {name} table", STATUS_SPLINE_ERROR)
    try:
        return Interpolator1D(x, f, name = name)
    except ValueError as __e:
        raise CosmologyError(f"failed to create {name} table: {__e}", STATUS_SPLINE_ERROR) from __e

def compute_distances(model: Any) -> None:
    r"""
    Fill the comoving distance :math:`\chi(a)`, its inverse :math:`a(\chi)` and expansion
    rate :math:`E(a)` tables of a cosmology model. Distances are integrated as

    .. math::

        \chi(a) = \frac{c}{H_0} \int_{\ln a}^0 \frac{{\rm d}\ln a'}{a' E(a')}

    using the redshift integration rule of the model settings.
    """
    __t_init = time.time()
    params, settings = model.params, model.settings

    lna = np.linspace( np.log(settings.a_spline_min), 0., settings.a_spline_pts )
    if np.any( E2(params, np.exp(lna)) <= 0. ):
        raise CosmologyError("expansion rate is not real in the table range", STATUS_INTEGRATION_ERROR)

    def integrand(t: Any, lna: Any) -> Any:
        # map t in [-1, 1] to [lna, 0]
        x = 0.5*lna*(1 - t)
        return -0.5*lna * np.exp(-x) / np.sqrt( E2(params, np.exp(x)) )

    chi = HUBBLE_DISTANCE / params.h * settings.z_quad.integrate( integrand, args = (lna, ) )
    chi[-1] = 0.

    # tables of the group are filled only after all of them are created
    chi_table  = _interpolator(lna, chi, 'comoving distance')
    achi_table = _interpolator(chi[::-1], lna[::-1], 'scale factor')
    E_table    = _interpolator(lna, 0.5*np.log( E2(params, np.exp(lna)) ), 'expansion rate')
    model.cache.chi.fill( chi_table )
    model.cache.achi.fill( achi_table )
    model.cache.E.fill( E_table )
    logging.info( "computed distance tables in %g seconds", time.time() - __t_init )
    return

def compute_growth(model: Any) -> None:
    r"""
    Fill the linear growth factor :math:`D(a)` and growth rate :math:`f(a)` tables of a
    cosmology model, and set its present growth factor. The growth equation

    .. math::

        D'' + \left(2 + \frac{{\rm d}\ln E}{{\rm d}\ln a}\right) D' = \frac{3}{2}
            \Omega_{cb}(a) D

    (primes are derivatives in :math:`\ln a`) is solved from an early time, starting on the
    growing mode :math:`D = a + 2a_{eq}/3`. The growth factor is normalised so that
    :math:`D = a` during matter domination. If the parameters has a modified growth table,
    the change is added to the growth rate and the growth factor is integrated again.
    """
    __t_init = time.time()
    params, settings = model.params, model.settings
    Ocb = params.Omega_c + params.Omega_b
    if Ocb <= 0.:
        raise CosmologyError("growth needs a non-zero matter density", STATUS_INTEGRATION_ERROR)

    a_init = settings.a_growth_init
    lna    = np.linspace( np.log(settings.a_spline_min), 0., settings.a_spline_pts )

    def rhs(x: float, y: Any) -> Any:
        a = np.exp(x)
        D, dD = y
        Om = Ocb * a**-3 / E2(params, a)
        return [ dD, -( 2. + dlnEdlna(params, a) ) * dD + 1.5*Om*D ]

    # radiation density at the initial time, including relativistic massive neutrinos
    Orad = params.Omega_r + massiveNeutrinoDensity(params, a_init) * a_init**4
    a_eq = Orad / Ocb
    y0   = [ a_init + 2*a_eq / 3., a_init ]
    try:
        sol = solve_ivp( rhs,
                         ( np.log(a_init), 0. ),
                         y0,
                         t_eval = lna,
                         method = 'DOP853',
                         rtol   = settings.reltol,
                         atol   = 1e-03*a_init, )
    except (ValueError, ArithmeticError) as __e:
        raise CosmologyError(f"growth integration failed: {__e}", STATUS_INTEGRATION_ERROR) from __e
    if not sol.success:
        raise CosmologyError(f"growth integration failed: {sol.message}", STATUS_INTEGRATION_ERROR)

    D, dD = sol.y
    f     = dD / D
    if params.has_mgrowth:
        # growth rate changes are zero outside the table
        mg = params.mgrowth
        f  = f + np.interp( np.exp(-lna) - 1., mg.z, mg.df, left = 0., right = 0. )
        D  = D[0] * np.exp( cumulative_trapezoid( f, lna, initial = 0. ) )

    D_table, f_table = _interpolator(lna, D, 'growth factor'), _interpolator(lna, f, 'growth rate')
    model.cache.growth.fill( D_table )
    model.cache.fgrowth.fill( f_table )
    model.growth0 = float( D[-1] )
    logging.info( "computed growth tables in %g seconds", time.time() - __t_init )
    return
