#!/usr/bin/python3

r"""

Cosmological parameters
=======================

The function `derive` turns a set of primary parameters into a complete, self consistent
`Parameters` record: radiation density from the CMB temperature, relativistic and massive
neutrino densities, total matter density, and the dark-energy density closing the budget

.. math::

    \Omega_m + \Omega_\gamma + \Omega_{\nu,rel} + \Omega_k + \Omega_\Lambda = 1

The power spectrum is normalised either by the primordial amplitude :math:`A_s` or by
:math:`\sigma_8`, never both. Other functions here are shortcuts for common model families.

>>> p = flat_lcdm(Omega_c = 0.25, Omega_b = 0.05, h = 0.7, n_s = 0.96, A_s = 2.1e-09)

"""

import warnings
import numpy as np
from dataclasses import dataclass, field
from typing import Any
from ._base import CosmologyError
from .neutrinos import PhaseSpaceTable, omega_gamma_h2, omega_nu_h2
from .constants import T_CMB

@dataclass(frozen = True)
class Normalization:
    r"""
    Power spectrum normalization: either the primordial amplitude (`kind = 'A_s'`) or the
    matter variance at 8 Mpc/h (`kind = 'sigma8'`).
    """
    kind: str
    value: float

    def __post_init__(self) -> None:
        if self.kind not in ('A_s', 'sigma8'):
            raise CosmologyError(f"unknown normalization: '{self.kind}'")
        if not ( np.isfinite(self.value) and self.value > 0. ):
            raise CosmologyError(f"value of {self.kind} must be positive")

@dataclass(frozen = True, eq = False)
class MGrowthTable:
    r"""
    Modified growth table: change in the growth rate, `df`, at redshifts `z`. Arrays are
    private read-only copies.
    """
    z: np.ndarray
    df: np.ndarray

    @property
    def size(self) -> int: return len(self.z)

@dataclass(frozen = True)
class Parameters:
    r"""
    A complete set of cosmological parameters. Create using `derive` (or any of the
    shortcut functions), not directly.

    Attributes
    ----------
    Omega_c, Omega_b, Omega_k: float
        Cold dark matter, baryon and curvature density parameters.
    N_nu_rel, N_nu_mass: float
        Number of relativistic and massive neutrino species.
    m_nu: float
        Summed mass of massive neutrinos in eV.
    w0, wa: float
        Dark-energy equation of state parameters, :math:`w(a) = w_0 + w_a(1 - a)`.
    h: float
        Hubble parameter in 100 km/sec/Mpc.
    n_s: float
        Primordial power spectrum index.
    normalization: Normalization
        Power spectrum normalization.
    H0: float
        Hubble parameter in km/sec/Mpc.
    T_CMB: float
        CMB temperature in K.
    Omega_g, Omega_n_rel, Omega_n_mass, Omega_n, Omega_m, Omega_l: float
        Derived density parameters (photons, neutrinos, matter and dark-energy).
    z_star: float or None
        Recombination redshift (not computed here).
    mgrowth: MGrowthTable or None
        Modified growth table.
    nu_table: PhaseSpaceTable or None
        Neutrino phase-space table used for the massive neutrino density. None means the
        shared table.

    """
    Omega_c: float
    Omega_b: float
    Omega_k: float
    N_nu_rel: float
    N_nu_mass: float
    m_nu: float
    w0: float
    wa: float
    h: float
    n_s: float
    normalization: Normalization
    H0: float
    T_CMB: float
    Omega_g: float
    Omega_n_rel: float
    Omega_n_mass: float
    Omega_n: float
    Omega_m: float
    Omega_l: float
    z_star: float | None = None
    mgrowth: MGrowthTable | None = None
    nu_table: PhaseSpaceTable | None = field( default = None, repr = False, compare = False )

    @property
    def A_s(self) -> float | None:
        norm = self.normalization
        return norm.value if norm.kind == 'A_s' else None

    @property
    def sigma8(self) -> float | None:
        norm = self.normalization
        return norm.value if norm.kind == 'sigma8' else None

    @property
    def has_mgrowth(self) -> bool: return self.mgrowth is not None

    @property
    def nz_mgrowth(self) -> int: return 0 if self.mgrowth is None else self.mgrowth.size

    @property
    def Omega_r(self) -> float:
        r"""
        Density of relativistic species (photons and massless neutrinos).
        """
        return self.Omega_g + self.Omega_n_rel

    def isFlat(self) -> bool:
        return abs(self.Omega_k) < 1e-08

    def __repr__(self) -> str:
        attrs = ('Omega_c', 'Omega_b', 'Omega_k', 'Omega_m', 'Omega_l', 'h', 'n_s')
        attrs = ', '.join([ f'{attr}={getattr(self, attr)}' for attr in attrs ])
        norm  = self.normalization
        return f"{self.__class__.__name__}({attrs}, {norm.kind}={norm.value})"

def _mgrowth_table(z: Any, df: Any) -> MGrowthTable | None:
    if z is None and df is None:
        return None
    if z is None or df is None:
        raise CosmologyError("modified growth needs both redshift and growth-rate arrays")
    # private copies, never aliasing the caller's buffers
    z, df = np.array(z, dtype = 'float'), np.array(df, dtype = 'float')
    if z.ndim != 1 or df.ndim != 1:
        raise CosmologyError("modified growth arrays must be one dimensional")
    if z.shape != df.shape:
        raise CosmologyError("modified growth arrays must have the same size")
    if z.size == 0:
        return None
    if np.any( np.diff(z) <= 0. ):
        raise CosmologyError("modified growth redshifts must be strictly increasing")
    z.flags.writeable  = False
    df.flags.writeable = False
    return MGrowthTable(z, df)

def derive(Omega_c: float,
           Omega_b: float,
           h: float,
           n_s: float,
           A_s: float = None,
           sigma8: float = None,
           Omega_k: float = 0.,
           N_nu_rel: float = 0.,
           N_nu_mass: float = 0.,
           m_nu: float = 0.,
           w0: float = -1.,
           wa: float = 0.,
           z_mgrowth: Any = None,
           df_mgrowth: Any = None,
           table: PhaseSpaceTable = None, ) -> Parameters:
    r"""
    Derive a complete set of cosmological parameters from the primary ones.

    Parameters
    ----------
    Omega_c, Omega_b: float
        Cold dark matter and baryon density parameters.
    h: float
        Hubble parameter in 100 km/sec/Mpc.
    n_s: float
        Primordial power spectrum index.
    A_s, sigma8: float, optional
        Power spectrum normalization. Exactly one of these must be given.
    Omega_k: float, default = 0
        Curvature density parameter.
    N_nu_rel, N_nu_mass: float, default = 0
        Number of relativistic and massive neutrino species.
    m_nu: float, default = 0
        Summed mass of massive neutrinos in eV.
    w0, wa: float
        Dark-energy equation of state parameters. Default is a cosmological constant.
    z_mgrowth, df_mgrowth: array_like, optional
        Redshifts and growth rate changes for modified growth. Copied.
    table: PhaseSpaceTable, optional
        Neutrino phase-space table. If not given, the shared table is used.

    Returns
    -------
    params: Parameters

    Raises
    ------
    CosmologyError

    """
    # normalization: exactly one of A_s and sigma8
    finite = lambda __x: __x is not None and np.isfinite(__x)
    if finite(A_s) and finite(sigma8):
        raise CosmologyError("A_s and sigma8 cannot be both set")
    if finite(A_s):
        normalization = Normalization('A_s', A_s)
    elif finite(sigma8):
        normalization = Normalization('sigma8', sigma8)
    else:
        raise CosmologyError("power spectrum normalization (A_s or sigma8) is not set")

    if h <= 0:
        raise CosmologyError("hubble parameter must be positive")
    if Omega_c < 0:
        raise CosmologyError("cold dark matter density must be non-negative")
    if Omega_b < 0:
        raise CosmologyError("baryon density must be non-negative")
    if N_nu_rel < 0 or N_nu_mass < 0:
        raise CosmologyError("number of neutrino species must be non-negative")
    if m_nu < 0:
        raise CosmologyError("neutrino mass must be non-negative")
    if m_nu > 0 and N_nu_mass == 0:
        raise CosmologyError("neutrino mass is set, but there are no massive species")

    mgrowth = _mgrowth_table(z_mgrowth, df_mgrowth)

    # radiation: photon density from CMB temperature
    h2      = h**2
    Omega_g = omega_gamma_h2(T_CMB) / h2
    # neutrinos
    Omega_n_rel  = omega_nu_h2(1., N_nu_rel, 0., T_CMB, table) / h2
    Omega_n_mass = omega_nu_h2(1., N_nu_mass, m_nu, T_CMB, table) / h2
    # matter and dark energy (closing the density budget)
    Omega_m = Omega_b + Omega_c + Omega_n_mass
    Omega_l = 1. - Omega_m - Omega_g - Omega_n_rel - Omega_k
    if Omega_l < 0.:
        warnings.warn(f"dark-energy density is negative: {Omega_l:g}")

    return Parameters(Omega_c       = Omega_c,
                      Omega_b       = Omega_b,
                      Omega_k       = Omega_k,
                      N_nu_rel      = N_nu_rel,
                      N_nu_mass     = N_nu_mass,
                      m_nu          = m_nu,
                      w0            = w0,
                      wa            = wa,
                      h             = h,
                      n_s           = n_s,
                      normalization = normalization,
                      H0            = 100. * h,
                      T_CMB         = T_CMB,
                      Omega_g       = float( Omega_g ),
                      Omega_n_rel   = float( Omega_n_rel ),
                      Omega_n_mass  = float( Omega_n_mass ),
                      Omega_n       = float( Omega_n_rel + Omega_n_mass ),
                      Omega_m       = float( Omega_m ),
                      Omega_l       = float( Omega_l ),
                      z_star        = None,
                      mgrowth       = mgrowth,
                      nu_table      = table, )

#########################################################################################
#                                   Shortcut constructors                               #
#########################################################################################

def flat_lcdm(Omega_c: float, Omega_b: float, h: float, n_s: float,
              A_s: float = None, sigma8: float = None, ) -> Parameters:
    r"""
    Parameters for a flat :math:`\Lambda`-CDM cosmology without neutrinos.
    """
    return derive(Omega_c, Omega_b, h, n_s, A_s = A_s, sigma8 = sigma8)

def flat_lcdm_nu(Omega_c: float, Omega_b: float, h: float, n_s: float,
                 N_nu_rel: float, N_nu_mass: float, m_nu: float,
                 A_s: float = None, sigma8: float = None, ) -> Parameters:
    r"""
    Parameters for a flat :math:`\Lambda`-CDM cosmology with neutrinos.
    """
    return derive(Omega_c, Omega_b, h, n_s, A_s = A_s, sigma8 = sigma8,
                  N_nu_rel = N_nu_rel, N_nu_mass = N_nu_mass, m_nu = m_nu)

def lcdm(Omega_c: float, Omega_b: float, Omega_k: float, h: float, n_s: float,
         A_s: float = None, sigma8: float = None, ) -> Parameters:
    r"""
    Parameters for a curved :math:`\Lambda`-CDM cosmology without neutrinos.
    """
    return derive(Omega_c, Omega_b, h, n_s, A_s = A_s, sigma8 = sigma8, Omega_k = Omega_k)

def lcdm_nu(Omega_c: float, Omega_b: float, Omega_k: float, h: float, n_s: float,
            N_nu_rel: float, N_nu_mass: float, m_nu: float,
            A_s: float = None, sigma8: float = None, ) -> Parameters:
    r"""
    Parameters for a curved :math:`\Lambda`-CDM cosmology with neutrinos.
    """
    return derive(Omega_c, Omega_b, h, n_s, A_s = A_s, sigma8 = sigma8, Omega_k = Omega_k,
                  N_nu_rel = N_nu_rel, N_nu_mass = N_nu_mass, m_nu = m_nu)

def flat_wcdm(Omega_c: float, Omega_b: float, w0: float, h: float, n_s: float,
              A_s: float = None, sigma8: float = None, ) -> Parameters:
    r"""
    Parameters for a flat cosmology with constant dark-energy equation of state.
    """
    return derive(Omega_c, Omega_b, h, n_s, A_s = A_s, sigma8 = sigma8, w0 = w0)

def flat_wcdm_nu(Omega_c: float, Omega_b: float, w0: float, h: float, n_s: float,
                 N_nu_rel: float, N_nu_mass: float, m_nu: float,
                 A_s: float = None, sigma8: float = None, ) -> Parameters:
    return derive(Omega_c, Omega_b, h, n_s, A_s = A_s, sigma8 = sigma8, w0 = w0,
                  N_nu_rel = N_nu_rel, N_nu_mass = N_nu_mass, m_nu = m_nu)

def flat_wacdm(Omega_c: float, Omega_b: float, w0: float, wa: float, h: float, n_s: float,
               A_s: float = None, sigma8: float = None, ) -> Parameters:
    r"""
    Parameters for a flat cosmology with a time varying dark-energy equation of state.
    """
    return derive(Omega_c, Omega_b, h, n_s, A_s = A_s, sigma8 = sigma8, w0 = w0, wa = wa)

def flat_wacdm_nu(Omega_c: float, Omega_b: float, w0: float, wa: float, h: float, n_s: float,
                  N_nu_rel: float, N_nu_mass: float, m_nu: float,
                  A_s: float = None, sigma8: float = None, ) -> Parameters:
    return derive(Omega_c, Omega_b, h, n_s, A_s = A_s, sigma8 = sigma8, w0 = w0, wa = wa,
                  N_nu_rel = N_nu_rel, N_nu_mass = N_nu_mass, m_nu = m_nu)
