#!/usr/bin/python3

from dataclasses import dataclass, field, fields
from typing import Any
from ._base import CosmologyError, STATUS_MODEL_ERROR

class _CacheSlot:
    r"""
    A write-once holder for an interpolation table. The slot is computed if and only if it
    holds a table.
    """

    __slots__ = 'name', '_value'

    def __init__(self, name: str) -> None:
        self.name   = name
        self._value = None

    @property
    def computed(self) -> bool: return self._value is not None

    @property
    def value(self) -> Any:
        if self._value is None:
            raise CosmologyError(f"{self.name} table is not computed", STATUS_MODEL_ERROR)
        return self._value

    def fill(self, value: Any) -> None:
        if value is None:
            raise CosmologyError(f"cannot fill {self.name} table with nothing", STATUS_MODEL_ERROR)
        if self._value is not None:
            raise CosmologyError(f"{self.name} table is already computed", STATUS_MODEL_ERROR)
        self._value = value
        return

    def release(self) -> bool:
        released, self._value = self._value is not None, None
        return released

    def __repr__(self) -> str:
        return f"_CacheSlot({self.name}, computed={self.computed})"

@dataclass
class _DerivedCache:
    chi: _CacheSlot      = field( default_factory = lambda: _CacheSlot('comoving distance') ) # args = ln(a)
    achi: _CacheSlot     = field( default_factory = lambda: _CacheSlot('scale factor') )      # args = chi
    E: _CacheSlot        = field( default_factory = lambda: _CacheSlot('expansion rate') )    # ln E, args = ln(a)
    growth: _CacheSlot   = field( default_factory = lambda: _CacheSlot('growth factor') )     # args = ln(a)
    fgrowth: _CacheSlot  = field( default_factory = lambda: _CacheSlot('growth rate') )       # args = ln(a)
    logsigma: _CacheSlot = field( default_factory = lambda: _CacheSlot('variance') )          # ln sigma, args = ln(r)
    p_lin: _CacheSlot    = field( default_factory = lambda: _CacheSlot('linear power') )      # ln P, args = ln(k)
    p_nl: _CacheSlot     = field( default_factory = lambda: _CacheSlot('non-linear power') )  # ln P, args = ln(k), ln(a)

    @property
    def computed_distances(self) -> bool:
        return self.chi.computed and self.achi.computed and self.E.computed

    @property
    def computed_growth(self) -> bool:
        return self.growth.computed and self.fgrowth.computed

    @property
    def computed_power(self) -> bool: return self.p_lin.computed

    @property
    def computed_nonlin_power(self) -> bool: return self.p_nl.computed

    @property
    def computed_sigma(self) -> bool: return self.logsigma.computed

    def slots(self) -> list[_CacheSlot]:
        return [ getattr(self, __f.name) for __f in fields(self) ]

    def release(self) -> int:
        r"""
        Release all tables and return the number of slots that held one.
        """
        return sum( __slot.release() for __slot in self.slots() )
