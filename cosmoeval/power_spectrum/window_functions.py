#!/usr/bin/python3

import numpy as np
from scipy.special import eval_hermite, hyp0f1
from typing import Any
from .._base import WindowFunction

class SphericalTophat(WindowFunction):
    r"""
    Spherical top-hat filter, :math:`w(x) = 3(\sin x - x \cos x) / x^3`.
    """
    def call(self, x: Any, deriv: int = 0) -> Any:
        # written with the hypergeometric function 0f1, which is regular at x = 0
        x = np.asarray(x, dtype = 'float')
        if deriv == 0:
            return hyp0f1(2.5, -0.25*x**2)
        if deriv == 1:
            return -x * hyp0f1(3.5, -0.25*x**2) / 5.
        if deriv == 2:
            return 0.8 * hyp0f1(3.5, -0.25*x**2) - hyp0f1(2.5, -0.25*x**2)
        raise ValueError(f"invalid value for argument 'deriv': {deriv}")

class Gaussian(WindowFunction):
    r"""
    Gaussian filter, :math:`w(x) = \exp(-x^2/2)`.
    """
    def call(self, x: Any, deriv: int = 0) -> Any:
        SQRT_2 = 1.4142135623730951
        if deriv < 0:
            raise ValueError(f"invalid value for argument 'deriv': {deriv}")
        x   = np.divide(x, SQRT_2)
        res = np.exp(-x**2)
        if deriv > 0:
            # derivatives in terms of hermite polynomials
            res = res * eval_hermite(deriv, x) / (-SQRT_2)**deriv
        return res


# initialising models to be readily used
tophat   = SphericalTophat()
gaussian = Gaussian()

_available_models__ = {'tophat'  : tophat,
                       'gaussian': gaussian, }
