#!/usr/bin/python3

import numpy as np
from scipy.fftpack import dct
from scipy.interpolate import UnivariateSpline, RectBivariateSpline
from dataclasses import dataclass
from typing import Any, Callable

class ModelDatabase:
    r"""
    An object to store some models as database. This then allow the user to map
    models with names and get then easily!

    Parameters
    ----------
    name: str
    baseclass: type, tuple of type
        Type of the objects in the database.

    """
    __slots__ = '_db', 'baseclass', 'name'

    def __init__(self, name: str, baseclass: type | tuple[type]) -> None:
        assert isinstance(name, str)
        self.name = name
        self.baseclass = baseclass
        self._db = {}

    def exists(self, key: str) -> bool:
        r"""
        Check if an item with given key `key` exist or not.
        """
        return key in self._db

    def add(self, key: str, value: object) -> None:
        r"""
        Add a model to the database and map to the given `key`. If `key` already exist,
        an error is raised. Argument `value` must be of correct type.
        """
        if key in self._db:
            raise ValueError(f"key already exists: '{key}'")
        if not isinstance(value, self.baseclass):
            raise TypeError(f"incorrect type: '{type(value)}'")
        self._db[key] = value
        return

    def get(self, key: str) -> object:
        r"""
        Get an item with given key, from the database. If key not exist, return None.
        """
        return self._db.get(key, None)

###################################################################################################
#									     Numerical Tools										  #
###################################################################################################

# Itergration
class IntegrationRule:
    r"""
    Base class representing an integration rule.
    """
    __slots__ = 'a', 'b', 'pts', '_nodes', '_weights',

    def __init__(self) -> None:
        self._nodes, self._weights = None, None
        # integration limits
        self.a: float = None
        self.b: float = None
        self.pts: int = None

    @property
    def nodes(self) -> Any:
        r"""
        Intergration points for this rule.
        """
        return self._nodes

    @property
    def weights(self) -> Any:
        r"""
        Weight of this rule. They will have sum `b-a`.
        """
        return self._weights

    def __add__(self, other: object) -> 'IntegrationRule':
        if not isinstance(other, IntegrationRule):
            return NotImplemented
        return CompositeIntegrationRule(self, other)

    def integrate(self,
                  func: Callable,
                  args: tuple = None, ) -> Any:
        r"""
        Integrate a function `func` over the first axis. The function is called with the
        nodes reshaped as a column, so that extra array arguments broadcast along the
        other axes.

        Parameters
        ----------
        func: callable
        args: tuple, default = None
            Additional arguments to function call.

        Returns
        -------
        res: array_like

        """
        args  = args or ()
        shape = np.shape(self.nodes) + tuple(1 for _ in np.broadcast_shapes(*map(np.shape, args)))
        pts, wts = np.reshape(self.nodes, shape), np.reshape(self.weights, shape)
        return np.sum( wts * func(pts, *args), axis = 0 )

class CompositeIntegrationRule(IntegrationRule):
    r"""
    A class representing a composite integration rule as left and right rules.

    Parameters
    ----------
    left, right: IntegrationRule

    """
    __slots__ = '_left', '_right', 'connected'

    def __init__(self, left: IntegrationRule, right: IntegrationRule) -> None:
        super().__init__()
        if right.a < left.a: left, right = right, left
        if left.a < right.b and left.b > right.a:
            raise ValueError(f"overlapping intervals: [{left.a}, {left.b}] and [{right.a}, {right.b}]")
        self._left, self._right = left, right
        self.a, self.b = left.a, right.b
        self.connected = False
        self.pts = left.pts + right.pts
        if abs( left.b - right.a ) < 1e-08:
            self.connected = True
            self.pts -= 1

    @property
    def nodes(self) -> Any:
        _nodes = np.zeros(self.pts)
        _nodes[:self._left.pts] = self._left.nodes
        offset = 1 if self.connected else 0
        _nodes[self._left.pts:] = self._right.nodes[offset:]
        return _nodes

    @property
    def weights(self) -> Any:
        _weights = np.zeros(self.pts)
        _weights[:self._left.pts] = self._left.weights
        offset = 0
        if self.connected:
            offset = 1
            _weights[self._left.pts-1] += self._right.weights[0]
        _weights[self._left.pts:] = self._right.weights[offset:]
        return _weights

class DefiniteUnweightedCC(IntegrationRule):
    r"""
    A class representing an unweighted clenshaw-curtis integration rule over the interval
    `[a, b]`. This can be used for integrations in general, but not useful when in the
    function to integrate is highly oscillating.

    Parameters
    ----------
    a, b: float
        Limits of integration
    pts: int
        Number of points to use for integration

    """

    def __init__(self, a: float, b: float, pts: int) -> None:
        super().__init__()
        # make number of points even number greater than or equal to 2
        pts = 2 * (max(2, pts) // 2) # will be pts + 1 nodes
        n = np.arange(pts/2 + 1)
        # weights
        __w = dct( 1./( 1 - 4.*n**2 ), type = 1, ) * (2. / pts)
        __w[0] *= 0.5
        # nodes
        __x = np.cos(n*np.pi / pts)

        self._nodes   = np.concatenate([ -__x[:-1], __x[-1::-1] ])
        self._weights = np.concatenate([  __w[:-1], __w[-1::-1] ])
        # transform the nodes and weights into range [a, b]
        if b < a: a, b = b, a
        self._nodes   = 0.5*(b-a) * self._nodes + 0.5*(b+a)
        self._weights = 0.5*(b-a) * self._weights
        self.a, self.b, self.pts = a, b, pts + 1
        return

# Interpolation
class Interpolator1D:
    r"""
    A one variable interpolation table, over the closed interval spanned by the samples.

    Parameters
    ----------
    x, f: array_like
        Sample points (strictly increasing) and function values.
    name: str, optional
        Name of the tabulated quantity, used in error messages.
    **kwargs: Any
        Other keyword arguments are passed to `scipy.interpolate.UnivariateSpline`.

    """

    __slots__ = 'spline', 'x', 'data', 'name'

    def __init__(self,
                 x: Any,
                 f: Any,
                 name: str = None,
                 **kwargs,     ) -> None:
        kwargs = { 's': 0, 'ext': 'raise', **kwargs } # set default s = 0
        self.x, self.data = np.asarray(x, dtype = 'float'), np.asarray(f, dtype = 'float')
        self.name   = name or 'function'
        self.spline = UnivariateSpline(self.x, self.data, **kwargs)

    @property
    def domain(self) -> tuple[float, float]: return self.x[0], self.x[-1]

    def contains(self, x: Any) -> bool:
        x = np.asarray(x)
        return bool( np.all( ( x >= self.x[0] ) & ( x <= self.x[-1] ) ) )

    def __call__(self, x: Any) -> Any:
        return np.asarray( self.spline(x) )[()]


class Interpolator2D:
    r"""
    A two variable interpolations table. Used to interpolate values on a grid.

    Parameters
    ----------
    x, y: array_like
        Grid points along each axis (strictly increasing).
    f: array_like
        Function values of shape `(len(x), len(y))`.
    name: str, optional
        Name of the tabulated quantity, used in error messages.
    **kwargs: Any
        Other keyword arguments are passed to `scipy.interpolate.RectBivariateSpline`.

    """

    __slots__ = 'spline', 'x', 'data', 'name'

    def __init__(self,
                 x: Any,
                 y: Any,
                 f: Any,
                 name: str = None,
                 **kwargs,     ) -> None:
        kwargs = { 's': 0, **kwargs } # set default s = 0
        x, y   = np.asarray(x, dtype = 'float'), np.asarray(y, dtype = 'float')
        self.x, self.data = (x, y), np.asarray(f, dtype = 'float')
        self.name   = name or 'function'
        self.spline = RectBivariateSpline(x, y, self.data, **kwargs)

    @property
    def domain(self) -> tuple[tuple[float, float], tuple[float, float]]:
        x, y = self.x
        return (x[0], x[-1]), (y[0], y[-1])

    def contains(self, x: Any, y: Any) -> bool:
        (xa, xb), (ya, yb) = self.domain
        x, y = np.asarray(x), np.asarray(y)
        return bool( np.all( ( x >= xa ) & ( x <= xb ) ) and np.all( ( y >= ya ) & ( y <= yb ) ) )

    def __call__(self, x: Any, y: Any) -> Any:
        x, y  = np.broadcast_arrays( np.asarray(x, dtype = 'float'), np.asarray(y, dtype = 'float') )
        res   = self.spline(np.ravel(x), np.ravel(y), grid = False)
        return np.reshape(res, x.shape)

@dataclass
class Settings:
    r"""
    A table of various settings for calculations. Distances are in Mpc and wavenumbers
    in 1/Mpc.
    """
    reltol: float = 1e-06
    # scale factor grid used by the distance and growth tables
    a_spline_min: float = 1e-03
    a_spline_pts: int   = 250
    # scale factor grid used by the non-linear power spectrum table
    a_power_min: float = 1e-02
    a_power_pts: int   = 64
    # initial scale factor for the growth equation
    a_growth_init: float = 1e-06
    # wavenumber grid for power spectrum tables (1/Mpc)
    k_min: float = 1e-05
    k_max: float = 1e+03
    k_pts: int   = 512
    # radius grid for the variance table (Mpc)
    r_min: float = 1e-01
    r_max: float = 1e+02
    r_pts: int   = 128
    # neutrino phase-space table: reduced mass range and points
    y_min: float = 1e-04
    y_max: float = 1e+03
    y_pts: int   = 1000
    # redshift integration rule, on [-1, 1]
    z_quad: IntegrationRule = DefiniteUnweightedCC(a = -1., b = 1., pts = 128)
    # k integration rule (points in log(k) space, must lie inside [k_min, k_max])
    k_quad: IntegrationRule = (DefiniteUnweightedCC(a = -11.5, b = -4.6, pts = 64 ) + # 1e-05 to 1e-02, approx.
                               DefiniteUnweightedCC(a =  -4.6, b =  2.3, pts = 512) + # 1e-02 to 1e+01, approx.
                               DefiniteUnweightedCC(a =   2.3, b =  6.9, pts = 128) ) # 1e+01 to 1e+03, approx.
    # phase-space integration rule (momentum in units of temperature)
    x_quad: IntegrationRule = (DefiniteUnweightedCC(a =  0., b =  5., pts = 128) +
                               DefiniteUnweightedCC(a =  5., b = 20., pts = 128) +
                               DefiniteUnweightedCC(a = 20., b = 60., pts = 64 ) )
