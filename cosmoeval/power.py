#!/usr/bin/python3

r"""

Matter power spectrum and variance
==================================

Functions filling the power spectrum and variance tables of a cosmology model. The linear
power spectrum at present time is

.. math::

    P(k) = \frac{2\pi^2}{k^3} \frac{4}{25} A_s \left( \frac{k}{k_p} \right)^{n_s-1}
           \left( \frac{ck}{H_0} \right)^4 \frac{T^2(k) D^2(1)}{\Omega_m^2}

with pivot scale :math:`k_p = 0.05` 1/Mpc. When normalised with :math:`\sigma_8`, the same
shape is scaled to have the required variance at 8 Mpc/h. The variance is

.. math::

    \sigma^2(R) = \frac{1}{2\pi^2} \int {\rm d}\ln k \; k^3 P(k) w^2(kR)

"""

import time
import logging
import numpy as np
from typing import Any, Callable
from ._base import CosmologyError, STATUS_INTEGRATION_ERROR, STATUS_SPLINE_ERROR
from .utils import Interpolator1D, Interpolator2D
from .constants import HUBBLE_DISTANCE, K_PIVOT, TWO_PI2

def variance(power: Callable,
             window: Any,
             r: Any,
             rule: Any, ) -> Any:
    r"""
    Return the matter variance smoothed at scale r (Mpc).

    Parameters
    ----------
    power: callable
        Power spectrum in Mpc^3, as function of wavenumber in 1/Mpc.
    window: WindowFunction
        Smoothing window.
    r: array_like
    rule: IntegrationRule
        Integration rule in :math:`\ln k`.

    Returns
    -------
    res: array_like

    """
    def integrand(lnk: Any, r: Any) -> Any:
        k = np.exp(lnk)
        return k**3 * power(k) * window(k*r)**2

    res = rule.integrate( integrand, args = ( np.asarray(r, dtype = 'float'), ) ) / TWO_PI2
    if not np.all( np.isfinite(res) ):
        raise CosmologyError("variance integration failed", STATUS_INTEGRATION_ERROR)
    return res

def linearPowerToday(model: Any, k: Any, A_s: float) -> Any:
    r"""
    Return the linear matter power spectrum at present time, for a primordial amplitude A_s.
    Requires the growth tables of the model.
    """
    params = model.params
    k   = np.asarray(k, dtype = 'float')
    res = 2*np.pi**2 / k**3 * 0.16*A_s * ( k / K_PIVOT )**( params.n_s - 1 )
    res = res * ( k * HUBBLE_DISTANCE / params.h )**4 * ( model.growth0 / params.Omega_m )**2
    res = res * model.transfer_function( params, k )**2
    return res

def compute_linear_power(model: Any) -> None:
    r"""
    Fill the linear power spectrum table of a cosmology model. The model must have its growth
    tables computed.
    """
    __t_init = time.time()
    params, settings = model.params, model.settings
    if params.Omega_m <= 0.:
        raise CosmologyError("power spectrum needs a non-zero matter density", STATUS_SPLINE_ERROR)

    lnk = np.linspace( np.log(settings.k_min), np.log(settings.k_max), settings.k_pts )
    if params.A_s is not None:
        pk = linearPowerToday( model, np.exp(lnk), params.A_s )
    else:
        # shape with unit amplitude, scaled to the required sigma8
        power = lambda __k: linearPowerToday( model, __k, 1. )
        norm  = variance( power, model.window_function, 8. / params.h, settings.k_quad )
        pk    = power( np.exp(lnk) ) * params.sigma8**2 / norm

    if not ( np.all( np.isfinite(pk) ) and np.all( pk > 0. ) ):
        raise CosmologyError("invalid linear power spectrum samples", STATUS_SPLINE_ERROR)
    try:
        spline = Interpolator1D( lnk, np.log(pk), name = 'linear power spectrum' )
    except ValueError as __e:
        raise CosmologyError(f"failed to create linear power table: {__e}", STATUS_SPLINE_ERROR) from __e
    model.cache.p_lin.fill( spline )
    logging.info( "computed linear power spectrum table in %g seconds", time.time() - __t_init )
    return

def compute_nonlinear_power(model: Any) -> None:
    r"""
    Fill the non-linear power spectrum table of a cosmology model, on a grid of wavenumber
    and scale factor. The model must have its linear power and growth tables computed.
    """
    __t_init = time.time()
    settings, cache = model.settings, model.cache

    lnk = cache.p_lin.value.x
    lna = np.linspace( np.log(settings.a_power_min), 0., settings.a_power_pts )
    k, a   = np.exp(lnk)[:,None], np.exp(lna)[None,:]
    growth = cache.growth.value( lna ) / model.growth0
    pk_lin = np.exp( cache.p_lin.value( lnk ) )[:,None] * growth[None,:]**2
    pk     = model.nonlinear_model( model, k, a, pk_lin )

    pk = np.broadcast_to( pk, pk_lin.shape )
    if not ( np.all( np.isfinite(pk) ) and np.all( pk > 0. ) ):
        raise CosmologyError("invalid non-linear power spectrum samples", STATUS_SPLINE_ERROR)
    try:
        spline = Interpolator2D( lnk, lna, np.log(pk), name = 'non-linear power spectrum' )
    except ValueError as __e:
        raise CosmologyError(f"failed to create non-linear power table: {__e}", STATUS_SPLINE_ERROR) from __e
    cache.p_nl.fill( spline )
    logging.info( "computed non-linear power spectrum table in %g seconds", time.time() - __t_init )
    return

def compute_sigma(model: Any) -> None:
    r"""
    Fill the variance table (log of :math:`\sigma(R)` at present time) of a cosmology model.
    The model must have its linear power table computed.
    """
    __t_init = time.time()
    settings, p_lin = model.settings, model.cache.p_lin.value

    lnr = np.linspace( np.log(settings.r_min), np.log(settings.r_max), settings.r_pts )
    # wavenumbers outside the table has zero power
    def power(k: Any) -> Any:
        lnk = np.log(k)
        res = np.zeros_like(lnk)
        msk = ( lnk >= p_lin.x[0] ) & ( lnk <= p_lin.x[-1] )
        res[msk] = np.exp( p_lin( lnk[msk] ) )
        return res

    var = variance( power, model.window_function, np.exp(lnr), settings.k_quad )
    if not np.all( var > 0. ):
        raise CosmologyError("invalid variance samples", STATUS_SPLINE_ERROR)
    try:
        spline = Interpolator1D( lnr, 0.5*np.log(var), name = 'variance' )
    except ValueError as __e:
        raise CosmologyError(f"failed to create variance table: {__e}", STATUS_SPLINE_ERROR) from __e
    model.cache.logsigma.fill( spline )
    logging.info( "computed variance table in %g seconds", time.time() - __t_init )
    return
