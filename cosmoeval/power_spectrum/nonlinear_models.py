#!/usr/bin/python3

from typing import Any
from .._base import NonlinearModel

class Linear(NonlinearModel):
    r"""
    No non-linear correction: the non-linear power spectrum is the linear one.
    """
    def call(self,
             model: Any,
             k: Any,
             a: Any,
             pk_lin: Any, ) -> Any:
        return pk_lin


# initialising models to be readily used
linear = Linear()

_available_models__ = {'linear': linear, }
