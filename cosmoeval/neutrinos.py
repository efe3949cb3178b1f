#!/usr/bin/python3

r"""

Neutrino energy density
=======================

Energy density of relativistic and massive neutrinos. The massive species are described by
the Fermi-Dirac phase-space integral

.. math::

    F(y) = \int_0^\infty {\rm d}x \frac{x^2 \sqrt{x^2 + y^2}}{e^x + 1}

where :math:`y = m_\nu a / k_B T_\nu` is the reduced mass. This is tabulated once, normalised
by its massless value :math:`F(0) = 7\pi^4/120`, and interpolated with a monotone cubic spline.

"""

import time
import logging
import numpy as np
from functools import lru_cache
from scipy.interpolate import PchipInterpolator
from typing import Any
from ._base import CosmologyError, STATUS_INTEGRATION_ERROR
from .utils.objects import IntegrationRule, Settings
from .constants import KBOLTZ_EV, OMEGA_GAMMA_H2_PER_T4, TNU_OVER_TCMB, FERMI_FACTOR

def omega_gamma_h2(t_cmb: float) -> float:
    r"""
    Return the photon density parameter times :math:`h^2`, for a CMB temperature in K.
    """
    return OMEGA_GAMMA_H2_PER_T4 * t_cmb**4

class PhaseSpaceTable:
    r"""
    Interpolation table of the normalised neutrino phase-space integral :math:`F(y) / F(0)`,
    as a function of the reduced mass :math:`y`. The table is read-only after creation and
    can be shared by any number of cosmologies.

    Parameters
    ----------
    ymin, ymax: float, optional
        Range of the reduced mass variable. Default values are taken from `Settings`.
    pts: int, optional
        Number of log-spaced points in the table.
    rule: IntegrationRule, optional
        Integration rule over the momentum variable.

    Raises
    ------
    CosmologyError
        If the integration gives non-finite values.

    Notes
    -----
    Outside the table, the value at `ymin` is used for smaller `y` (relativistic plateau) and
    the value is continued linearly from `ymax` for larger `y` (non-relativistic limit, where
    :math:`F(y) \approx 3\zeta(3) y / 2`).

    """

    __slots__ = 'ymin', 'ymax', 'x', 'data', 'spline'

    def __init__(self,
                 ymin: float = None,
                 ymax: float = None,
                 pts: int = None,
                 rule: IntegrationRule = None, ) -> None:
        defaults = Settings()
        ymin = defaults.y_min  if ymin is None else ymin
        ymax = defaults.y_max  if ymax is None else ymax
        pts  = defaults.y_pts  if pts  is None else pts
        rule = defaults.x_quad if rule is None else rule
        if not 0. < ymin < ymax:
            raise CosmologyError("reduced mass range must satisfy 0 < ymin < ymax")
        if pts < 4:
            raise CosmologyError("phase-space table needs at least 4 points")
        self.ymin, self.ymax = ymin, ymax

        def integrand(x: Any, y: Any) -> Any:
            return x**2 * np.sqrt( x**2 + y**2 ) / ( np.exp(x) + 1. )

        lny = np.linspace( np.log(ymin), np.log(ymax), pts )
        res = rule.integrate( integrand, args = ( np.exp(lny), ) )
        res0 = rule.integrate( integrand, args = ( 0., ) )
        if not ( np.all( np.isfinite(res) ) and np.isfinite(res0) and res0 > 0. ):
            raise CosmologyError("phase-space integration failed", STATUS_INTEGRATION_ERROR)

        self.x, self.data = lny, res / res0
        self.spline = PchipInterpolator( self.x, self.data )

    def __call__(self, y: Any) -> Any:
        r"""
        Return the normalised phase-space integral at reduced mass `y`.
        """
        y   = np.asarray( y, dtype = 'float' )
        res = self.spline( np.log( np.clip( y, self.ymin, self.ymax ) ) )
        res = np.where( y > self.ymax, res * y / self.ymax, res )
        return res[()]

@lru_cache(maxsize = None)
def phase_space_table() -> PhaseSpaceTable:
    r"""
    Return the process-wide phase-space table, creating it on the first call.
    """
    __t_init = time.time()
    table    = PhaseSpaceTable()
    logging.info( "created neutrino phase-space table in %g seconds", time.time() - __t_init )
    return table

def omega_nu_h2(a: Any,
                n_eff: float,
                m_nu: float,
                t_cmb: float,
                table: PhaseSpaceTable = None, ) -> Any:
    r"""
    Return the neutrino density parameter times :math:`h^2` at scale factor `a`, including
    the :math:`a^{-4}` scaling.

    Parameters
    ----------
    a: array_like
        Scale factor, must be positive.
    n_eff: float
        Number of neutrino species.
    m_nu: float
        Summed neutrino mass in eV, shared equally by the species. Zero means massless.
    t_cmb: float
        CMB temperature in K.
    table: PhaseSpaceTable, optional
        Phase-space table to use. If not given, the shared table is used.

    Returns
    -------
    res: array_like

    """
    if n_eff < 0.:
        raise CosmologyError("number of neutrino species must be non-negative")
    if m_nu < 0.:
        raise CosmologyError("neutrino mass must be non-negative")
    if t_cmb <= 0.:
        raise CosmologyError("CMB temperature must be positive")
    a = np.asarray( a, dtype = 'float' )
    if np.any( a <= 0. ):
        raise CosmologyError("scale factor must be positive")

    if n_eff == 0.:
        return np.zeros_like( a )[()]

    # massless density per species at present
    prefix = FERMI_FACTOR * TNU_OVER_TCMB**4 * omega_gamma_h2( t_cmb )
    if m_nu == 0.:
        res = n_eff * prefix / a**4
        return np.asarray( res )[()]

    if table is None:
        table = phase_space_table()
    y   = ( m_nu / n_eff ) * a / ( KBOLTZ_EV * TNU_OVER_TCMB * t_cmb )
    res = n_eff * prefix * table( y ) / a**4
    return np.asarray( res )[()]
