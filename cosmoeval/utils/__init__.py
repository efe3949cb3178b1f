#!/usr/bin/python3

from .objects import ModelDatabase, Settings
from .objects import IntegrationRule, CompositeIntegrationRule, DefiniteUnweightedCC
from .objects import Interpolator1D, Interpolator2D

def typestr(o: object) -> str:
    r"""
    Return the class (type) name of the object.
    """
    return type(o).__name__

__all__ = ['objects', 'ModelDatabase', 'Settings', 'IntegrationRule', 'CompositeIntegrationRule',
           'DefiniteUnweightedCC', 'Interpolator1D', 'Interpolator2D', 'typestr', ]
