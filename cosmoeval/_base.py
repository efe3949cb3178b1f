#!/usr/bin/python3

from typing import Any
from .utils.objects import ModelDatabase

#########################################################################################
#                                   Errors and status                                   #
#########################################################################################

STATUS_OK                = 0 # no failure so far
STATUS_ERROR             = 1 # generic failure
STATUS_INTEGRATION_ERROR = 2 # numerical integration / ode solver failed
STATUS_SPLINE_ERROR      = 3 # building an interpolation table failed
STATUS_DOMAIN_ERROR      = 4 # argument outside a table's domain
STATUS_MODEL_ERROR       = 5 # model misconfigured or used after release

class CosmologyError(Exception):
    r"""
    Base class of exceptions raised in cosmology calculations.

    Parameters
    ----------
    message: str
    status: int, default = STATUS_ERROR
        Status code describing the failure.

    """

    def __init__(self, message: str, status: int = STATUS_ERROR) -> None:
        super().__init__(message)
        self.status = status

#########################################################################################
#                               Models linked to a cosmology                            #
#########################################################################################

class TransferFunction:
    r"""
    Base class representing a linear matter transfer function model, at present time.
    """

    # a database of available transfer functions
    available: ModelDatabase = None

    def call(self,
             params: Any,
             k: Any,  ) -> Any:
        r"""
        Returns the value of linear transfer function for wavenumber k (in 1/Mpc) at
        present time.

        Paremeters
        ----------
        params: Parameters
            Cosmological parameters to use.
        k: array_like

        Returns
        -------
        res: array_like

        """
        raise NotImplementedError()

    def __call__(self,
                 params: Any,
                 k: Any,  ) -> Any:
        return self.call(params, k)

TransferFunction.available = ModelDatabase('transfer_functions', TransferFunction)

class NonlinearModel:
    r"""
    Base class representing a model mapping the linear matter power spectrum to the
    non-linear one.
    """

    # a database of available non-linear models
    available: ModelDatabase = None

    def call(self,
             model: Any,
             k: Any,
             a: Any,
             pk_lin: Any, ) -> Any:
        r"""
        Returns the non-linear matter power spectrum for wavenumber k (in 1/Mpc) and scale
        factor a, given the linear power spectrum at the same points.

        Paremeters
        ----------
        model: Cosmology
            Cosmology model to use.
        k, a: array_like
        pk_lin: array_like
            Linear power spectrum in Mpc^3.

        Returns
        -------
        res: array_like

        """
        raise NotImplementedError()

    def __call__(self,
                 model: Any,
                 k: Any,
                 a: Any,
                 pk_lin: Any, ) -> Any:
        return self.call(model, k, a, pk_lin)

NonlinearModel.available = ModelDatabase('nonlinear_models', NonlinearModel)

class WindowFunction:
    r"""
    Base class representing a smoothing window model. These are used smooth matter density
    field in calculating variance.
    """

    # a database of available window functions
    available: ModelDatabase = None

    def call(self, x: Any, deriv: int = 0) -> Any:
        r"""
        Returns the value of the window function or its derivatives.

        Parameters
        ----------
        x: array_like
        deriv: int, default = 0
            If non-zero, return the derivative of that order.

        Returns
        -------
        res: array_like

        """
        raise NotImplementedError()

    def __call__(self, x: Any, deriv: int = 0) -> Any:
        return self.call(x, deriv)

WindowFunction.available = ModelDatabase('window_functions', WindowFunction)
