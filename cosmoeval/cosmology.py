#!/usr/bin/python3

r"""

Cosmology model
===============

A `Cosmology` combines a `Parameters` record with lazily computed interpolation tables for
distances, growth, power spectra and variance. Tables are computed on first use, kept for
the lifetime of the model and never recomputed.

>>> from cosmoeval import Cosmology, flat_lcdm
>>> with Cosmology( flat_lcdm(0.25, 0.05, 0.7, 0.96, sigma8 = 0.8) ) as cm:
...     cm.sigma8()

"""

import functools
import numpy as np
from dataclasses import dataclass
from typing import Any, Callable
from ._base import TransferFunction, NonlinearModel, WindowFunction
from ._base import CosmologyError, STATUS_OK, STATUS_ERROR, STATUS_DOMAIN_ERROR, STATUS_MODEL_ERROR
from ._helpers import _DerivedCache
from .parameters import Parameters, flat_lcdm, derive
from .utils import Settings, typestr
from .constants import HUBBLE_DISTANCE
from . import background, power

@dataclass
class Configuration:
    r"""
    Models used by a cosmology. Each can be a model object or the name of an available model.

    Parameters
    ----------
    transfer_function: str, TransferFunction, default = 'eisenstein98_zb'
    matter_power_spectrum: str, NonlinearModel, default = 'linear'
        Model for the non-linear matter power spectrum.
    window: str, WindowFunction, default = 'tophat'
        Window function used for smoothing in variance calculations.

    """
    transfer_function: Any     = 'eisenstein98_zb'
    matter_power_spectrum: Any = 'linear'
    window: Any                = 'tophat'

    def resolve(self) -> tuple[TransferFunction, NonlinearModel, WindowFunction]:
        r"""
        Return the model objects. Raise `CosmologyError` if a name is not available, or an
        object is of wrong type.
        """
        items = [( 'transfer function'    , self.transfer_function    , TransferFunction ),
                 ( 'matter power spectrum', self.matter_power_spectrum, NonlinearModel   ),
                 ( 'window function'      , self.window               , WindowFunction   ), ]
        models = []
        for __what, __value, __cls in items:
            if isinstance(__value, str):
                if not __cls.available.exists(__value):
                    raise CosmologyError(f"{ __what } model not available: '{ __value }'", STATUS_MODEL_ERROR)
                __value = __cls.available.get(__value)
            elif not isinstance(__value, __cls):
                raise CosmologyError(f"{ __what } model must be a '{ __cls.__name__ }' object, got '{ typestr(__value) }'",
                                     STATUS_MODEL_ERROR)
            models.append(__value)
        return tuple(models)

def _query(method: Callable) -> Callable:
    # runs a query on an open model, setting the model status on failure
    @functools.wraps(method)
    def wrapper(self: 'Cosmology', *args: Any, **kwargs: Any) -> Any:
        if self._closed:
            raise CosmologyError("cosmology model is already released", STATUS_MODEL_ERROR)
        try:
            return method(self, *args, **kwargs)
        except CosmologyError as __e:
            self._setStatus(__e.status, str(__e))
            raise
        except (ValueError, ArithmeticError, np.linalg.LinAlgError) as __e:
            self._setStatus(STATUS_ERROR, str(__e))
            raise CosmologyError(str(__e), STATUS_ERROR) from __e
    return wrapper

class Cosmology:
    r"""
    A cosmology model with lazily computed tables of derived quantities. Distances are in
    Mpc, wavenumbers in 1/Mpc and power spectrum in Mpc^3.

    Parameters
    ----------
    params: Parameters
        Cosmological parameters, as returned by `derive` or a shortcut function.
    config: Configuration, optional
        Models for transfer function, non-linear power and smoothing window.
    settings: Settings, optional
        Settings for the interpolation tables and integrations.
    name: str, optional
        Optional name for the cosmology model.

    Attributes
    ----------
    status: int
        Status code. This is `STATUS_OK` until a calculation fails, and then keeps the code
        of the first failure.
    status_message: str
        Message of the first failure.
    cache: _DerivedCache
        Interpolation tables.

    Raises
    ------
    CosmologyError

    Notes
    -----
    Construction does no calculations. The tables needed for a query are computed on its
    first call. Use `free` (or a `with` block) to release all tables: any query after that
    raises a `CosmologyError`.

    """

    __slots__ = ('params', 'config', 'settings', 'name', 'cache', 'growth0', 'status',
                 'status_message', 'transfer_function', 'nonlinear_model', 'window_function',
                 '_closed', )

    def __init__(self,
                 params: Parameters,
                 config: Configuration = None,
                 settings: Settings = None,
                 name: str = None, ) -> None:
        if not isinstance(params, Parameters):
            raise CosmologyError(f"params must be a 'Parameters' object, got '{ typestr(params) }'",
                                 STATUS_MODEL_ERROR)
        if name is not None and not isinstance(name, str):
            raise TypeError("name must be a string")
        self.params   = params
        self.config   = Configuration() if config is None else config
        self.settings = Settings() if settings is None else settings
        self.name     = name
        # linked models
        self.transfer_function, self.nonlinear_model, self.window_function = self.config.resolve()

        self.cache   = _DerivedCache()
        self.growth0 = None
        self.status, self.status_message = STATUS_OK, ''
        self._closed = False

    def __repr__(self) -> str:
        name = '' if self.name is None else f"name={self.name}, "
        return f"{self.__class__.__name__}({name}{self.params!r})"

    def __enter__(self) -> 'Cosmology':
        return self

    def __exit__(self, *args: Any) -> None:
        self.free()

    def _setStatus(self, status: int, message: str) -> None:
        # only the first failure is kept
        if self.status == STATUS_OK:
            self.status, self.status_message = status, message
        return

    @property
    def closed(self) -> bool: return self._closed

    @property
    def computed_distances(self) -> bool: return self.cache.computed_distances

    @property
    def computed_growth(self) -> bool: return self.cache.computed_growth

    @property
    def computed_power(self) -> bool: return self.cache.computed_power

    @property
    def computed_nonlin_power(self) -> bool: return self.cache.computed_nonlin_power

    @property
    def computed_sigma(self) -> bool: return self.cache.computed_sigma

    def free(self) -> None:
        r"""
        Release all interpolation tables. The model cannot be used after this. Calling this
        again has no effect.
        """
        if self._closed:
            return
        self.cache.release()
        self.growth0 = None
        self._closed = True
        return

    ###########################################################################################################
    #                                       Table creation                                                    #
    ###########################################################################################################

    def _computeDistances(self) -> None:
        if not self.cache.computed_distances:
            background.compute_distances(self)
        return

    def _computeGrowth(self) -> None:
        if not self.cache.computed_growth:
            background.compute_growth(self)
        return

    def _computeLinearPower(self) -> None:
        self._computeGrowth()
        if not self.cache.computed_power:
            power.compute_linear_power(self)
        return

    def _computeNonlinearPower(self) -> None:
        self._computeLinearPower()
        if not self.cache.computed_nonlin_power:
            power.compute_nonlinear_power(self)
        return

    def _computeSigma(self) -> None:
        self._computeLinearPower()
        if not self.cache.computed_sigma:
            power.compute_sigma(self)
        return

    @staticmethod
    def _inDomain(spline: Any, x: Any, what: str, *args: Any) -> None:
        # raise an error if arguments are outside the table
        if not spline.contains(x, *args):
            raise CosmologyError(f"{what} is outside the table range", STATUS_DOMAIN_ERROR)
        return

    def _lna(self, a: Any, spline: Any) -> Any:
        a = np.asarray(a, dtype = 'float')
        if not np.all( a > 0. ):
            raise CosmologyError("scale factor must be positive", STATUS_DOMAIN_ERROR)
        lna = np.log(a)
        self._inDomain(spline, lna, 'scale factor')
        return lna

    ###########################################################################################################
    #                                       Background quantities                                             #
    ###########################################################################################################

    @_query
    def hubbleRate(self, a: Any) -> Any:
        r"""
        Return the expansion rate :math:`E(a) = H(a) / H_0` at scale factor a.

        Parameters
        ----------
        a: array_like

        Returns
        -------
        res: array_like

        """
        self._computeDistances()
        spline = self.cache.E.value
        return np.exp( spline( self._lna(a, spline) ) )

    @_query
    def comovingRadialDistance(self, a: Any) -> Any:
        r"""
        Return the comoving radial distance in Mpc to scale factor a.

        Parameters
        ----------
        a: array_like

        Returns
        -------
        res: array_like

        """
        self._computeDistances()
        spline = self.cache.chi.value
        return spline( self._lna(a, spline) )

    @_query
    def scaleFactorOfChi(self, chi: Any) -> Any:
        r"""
        Return the scale factor for a comoving radial distance chi (Mpc).

        Parameters
        ----------
        chi: array_like

        Returns
        -------
        res: array_like

        """
        self._computeDistances()
        spline = self.cache.achi.value
        self._inDomain(spline, chi, 'comoving distance')
        return np.exp( spline( chi ) )

    @_query
    def comovingAngularDistance(self, a: Any) -> Any:
        r"""
        Return the comoving angular (transverse) distance in Mpc to scale factor a.
        """
        chi = self.comovingRadialDistance(a)
        Ok0 = self.params.Omega_k
        if self.params.isFlat():
            return chi
        dh = HUBBLE_DISTANCE / self.params.h
        x  = np.sqrt( abs(Ok0) ) * chi / dh
        # hyperbolic (open) and spherical (closed) geometry
        if Ok0 > 0.:
            return dh * np.sinh(x) / np.sqrt(Ok0)
        return dh * np.sin(x) / np.sqrt(-Ok0)

    @_query
    def angularDiameterDistance(self, a: Any) -> Any:
        r"""
        Return the angular diameter distance in Mpc to scale factor a.
        """
        return np.multiply( a, self.comovingAngularDistance(a) )

    @_query
    def luminosityDistance(self, a: Any) -> Any:
        r"""
        Return the luminosity distance in Mpc to scale factor a.
        """
        return np.divide( self.comovingAngularDistance(a), a )

    @_query
    def growthFactor(self, a: Any) -> Any:
        r"""
        Return the linear growth factor at scale factor a, normalised to 1 at present.

        Parameters
        ----------
        a: array_like

        Returns
        -------
        res: array_like

        """
        return self.growthFactorUnnorm(a) / self.growth0

    @_query
    def growthFactorUnnorm(self, a: Any) -> Any:
        r"""
        Return the linear growth factor at scale factor a, normalised to be equal to a during
        matter domination.
        """
        self._computeGrowth()
        spline = self.cache.growth.value
        return spline( self._lna(a, spline) )

    @_query
    def growthRate(self, a: Any) -> Any:
        r"""
        Return the logarithmic growth rate :math:`f = {\rm d}\ln D / {\rm d}\ln a`.
        """
        self._computeGrowth()
        spline = self.cache.fgrowth.value
        return spline( self._lna(a, spline) )

    ###########################################################################################################
    #                                  Matter power spectrum calculations                                     #
    ###########################################################################################################

    @_query
    def linearMatterPower(self, k: Any, a: Any = 1.) -> Any:
        r"""
        Return the linear matter power spectrum for wavenumber k and scale factor a.

        Parameters
        ----------
        k: array_like
            Wavenumber in 1/Mpc.
        a: array_like, default = 1

        Returns
        -------
        res: array_like
            Power spectrum in Mpc^3.

        """
        self._computeLinearPower()
        spline = self.cache.p_lin.value
        k = np.asarray(k, dtype = 'float')
        if not np.all( k > 0. ):
            raise CosmologyError("wavenumber must be positive", STATUS_DOMAIN_ERROR)
        lnk = np.log(k)
        self._inDomain(spline, lnk, 'wavenumber')
        growth = self.growthFactor(a)
        return np.exp( spline( lnk ) ) * growth**2

    @_query
    def nonlinearMatterPower(self, k: Any, a: Any = 1.) -> Any:
        r"""
        Return the non-linear matter power spectrum for wavenumber k and scale factor a.

        Parameters
        ----------
        k: array_like
            Wavenumber in 1/Mpc.
        a: array_like, default = 1

        Returns
        -------
        res: array_like
            Power spectrum in Mpc^3.

        """
        self._computeNonlinearPower()
        spline = self.cache.p_nl.value
        k, a = np.asarray(k, dtype = 'float'), np.asarray(a, dtype = 'float')
        if not ( np.all( k > 0. ) and np.all( a > 0. ) ):
            raise CosmologyError("wavenumber and scale factor must be positive", STATUS_DOMAIN_ERROR)
        lnk, lna = np.log(k), np.log(a)
        self._inDomain(spline, lnk, 'wavenumber or scale factor', lna)
        return np.exp( spline( lnk, lna ) )[()]

    @_query
    def sigmaR(self, r: Any, a: Any = 1.) -> Any:
        r"""
        Return the rms of matter density fluctuation smoothed at scale r, at scale factor a.

        Parameters
        ----------
        r: array_like
            Smoothing scale in Mpc.
        a: array_like, default = 1

        Returns
        -------
        res: array_like

        """
        self._computeSigma()
        spline = self.cache.logsigma.value
        r = np.asarray(r, dtype = 'float')
        if not np.all( r > 0. ):
            raise CosmologyError("smoothing scale must be positive", STATUS_DOMAIN_ERROR)
        lnr = np.log(r)
        self._inDomain(spline, lnr, 'smoothing scale')
        return np.exp( spline( lnr ) ) * self.growthFactor(a)

    @_query
    def sigma8(self, a: Any = 1.) -> Any:
        r"""
        Return the rms of matter density fluctuation smoothed at 8 Mpc/h, at scale factor a.
        """
        return self.sigmaR(8. / self.params.h, a)

#########################################################################################
#                               Built-in models + constructor                           #
#########################################################################################

def cosmology(name: str, *args: Any, **kwargs: Any) -> Cosmology:
    r"""
    Return a cosmology model.

    Parameters
    ----------
    name: str
        If a predefined name, return that cosmology. Otherwise, create a cosmology with this
        name.
    *args, **kwargs: Any
        Other arguments are passed to `derive`. Keywords `config` and `settings` are passed
        to the `Cosmology` constructor.

    Returns
    -------
    cm: Cosmology

    See Also
    --------
    derive

    """
    if name is not None and not isinstance(name, str):
        raise TypeError("name must be an 'str' or None")
    config, settings = kwargs.pop( 'config', None ), kwargs.pop( 'settings', None )
    # cosmology with parameters from Plank et al (2018)
    if name == 'plank18':
        params = flat_lcdm(Omega_c = 0.2582, Omega_b = 0.0483, h = 0.6790, n_s = 0.9681, sigma8 = 0.8154)
    # cosmology with parameters from Plank et al (2015)
    elif name == 'plank15':
        params = flat_lcdm(Omega_c = 0.2660, Omega_b = 0.0493, h = 0.6736, n_s = 0.9649, sigma8 = 0.8111)
    # cosmology with parameters from WMAP survay
    elif name == 'wmap08':
        params = flat_lcdm(Omega_c = 0.2140, Omega_b = 0.0441, h = 0.719, n_s = 0.963, sigma8 = 0.796)
    # cosmology for millanium simulation
    elif name == 'millanium':
        params = flat_lcdm(Omega_c = 0.205, Omega_b = 0.045, h = 0.73, n_s = 1.0, sigma8 = 0.9)
    elif not args and not kwargs:
        raise CosmologyError(f"model not available: '{name}'")
    # create a new model with given name
    else:
        params = derive(*args, **kwargs)
    return Cosmology(params, config = config, settings = settings, name = name)
