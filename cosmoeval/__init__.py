#!/usr/bin/python3

# errors, status codes and model base classes
from ._base import CosmologyError, TransferFunction, NonlinearModel, WindowFunction
from ._base import (STATUS_OK, STATUS_ERROR, STATUS_INTEGRATION_ERROR, STATUS_SPLINE_ERROR,
                    STATUS_DOMAIN_ERROR, STATUS_MODEL_ERROR, )
# neutrinos
from .neutrinos import PhaseSpaceTable, phase_space_table, omega_nu_h2, omega_gamma_h2
# parameters
from .parameters import Parameters, Normalization, MGrowthTable, derive
from .parameters import (flat_lcdm, flat_lcdm_nu, lcdm, lcdm_nu, flat_wcdm, flat_wcdm_nu,
                         flat_wacdm, flat_wacdm_nu, )
# cosmology model
from .cosmology import Cosmology, Configuration, cosmology
from .utils import Settings

# initialise models
def _initialise_models() -> None:
    from .power_spectrum.linear_models import _available_models__
    for __name, __model in _available_models__.items():
        TransferFunction.available.add( __name, __model )
    from .power_spectrum.nonlinear_models import _available_models__
    for __name, __model in _available_models__.items():
        NonlinearModel.available.add( __name, __model )
    from .power_spectrum.window_functions import _available_models__
    for __name, __model in _available_models__.items():
        WindowFunction.available.add( __name, __model )
    return

# initialising the module
_initialise_models()

__all__ = ['power_spectrum',
           'background',
           'power',
           'CosmologyError',
           'TransferFunction',
           'NonlinearModel',
           'WindowFunction',
           'PhaseSpaceTable',
           'phase_space_table',
           'omega_nu_h2',
           'omega_gamma_h2',
           'Parameters',
           'Normalization',
           'MGrowthTable',
           'derive',
           'flat_lcdm',
           'flat_lcdm_nu',
           'lcdm',
           'lcdm_nu',
           'flat_wcdm',
           'flat_wcdm_nu',
           'flat_wacdm',
           'flat_wacdm_nu',
           'Cosmology',
           'Configuration',
           'cosmology',
           'Settings', ]
