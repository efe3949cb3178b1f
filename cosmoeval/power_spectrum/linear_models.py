#!/usr/bin/python3

r"""

Transfer functions
==================

Fitting formulas for the linear matter transfer function at present time. All models take
the wavenumber in 1/Mpc and a `Parameters` record. The growth of the power spectrum in time
is handled by the cosmology model and is scale independent.

"""

import numpy as np
from typing import Any
from .._base import TransferFunction

class BBKS(TransferFunction):
    r"""
    Transfer function given by Bardeen et al (1986).
    """

    def shapeParameter(self, params: Any) -> float:
        return params.Omega_m * params.h

    def call(self,
             params: Any,
             k: Any, ) -> Any:
        # fitting formula uses wavenumber in h/Mpc
        k = np.asarray(k, dtype = 'float') / params.h

        q   = k / self.shapeParameter(params)
        res = 1 + 3.89*q + (16.1*q)**2 + (5.46*q)**3 + (6.71*q)**4
        q   = 2.34*q
        res = res**-0.25 * np.log(1 + q) / q
        return res

class Sugiyama95(BBKS):
    r"""
    Transfer function given by Bardeen et al (1986), including correction by Sugiyama (1995).
    """

    def shapeParameter(self, params: Any) -> float:
        Om0, Ob0, h = params.Omega_m, params.Omega_b, params.h
        # baryonic mass causes a reduction of the shape parameter
        return Om0 * h * np.exp( -Ob0 - np.sqrt(2*h)*Ob0 / Om0 )

class Eisenstein98_zeroBaryon(TransferFunction):
    r"""
    Transfer function given by Eisentein & Hu (1998), not including baryon oscillations.
    """

    def call(self,
             params: Any,
             k: Any, ) -> Any:
        # wavenumber is in h/Mpc
        h = params.h
        k = np.asarray(k, dtype = 'float') / h

        theta = params.T_CMB / 2.7
        Omh2, Obh2 = params.Omega_m * h**2, params.Omega_b * h**2
        fb    = Obh2 / Omh2

        # Eqn. 26
        s = 44.5*np.log( 9.83/Omh2 ) / np.sqrt( 1 + 10*Obh2**0.75 )
        # Eqn. 31
        a_gamma   = 1 - 0.328*np.log( 431*Omh2 ) * fb + 0.38*np.log( 22.3*Omh2 ) * fb**2
        # Eqn. 30
        gamma_eff = Omh2 / h * ( a_gamma + ( 1 - a_gamma ) / ( 1 + ( 0.43*k*s )**4 ) )
        # Eqn. 28
        q = k * ( theta**2 / gamma_eff )
        L = np.log( 2*np.e + 1.8*q )
        C = 14.2 + 731.0 / ( 1 + 62.5*q )
        return L / ( L + C*q**2 )

class Eisenstein98_withNeutrino(TransferFunction):
    r"""
    Transfer function given by Eisentein & Hu (1998), including massive neutrinos. Only the
    present time shape is used: the scale dependent growth due to neutrino free-streaming is
    not included.
    """

    def call(self,
             params: Any,
             k: Any, ) -> Any:
        # wavenumber is in 1/Mpc
        k = np.asarray(k, dtype = 'float')

        theta = params.T_CMB / 2.7
        h     = params.h
        Omh2, Obh2 = params.Omega_m * h**2, params.Omega_b * h**2
        Nnu        = params.N_nu_mass
        fb, fnu    = Obh2 / Omh2, params.Omega_n_mass / params.Omega_m
        fc         = 1.0 - fb - fnu
        fcb, fnb   = fc + fb, fnu + fc

        # redshift at matter-radiation equality: eqn. 1
        zp1_eq = 2.5e+4 * Omh2 / theta**4
        # redshift at drag epoch : eqn 2
        c1  = 0.313*(1 + 0.607*Omh2**0.674) / Omh2**0.419
        c2  = 0.238*Omh2**0.223
        z_d = 1291.0*(Omh2**0.251)*(1 + c1*Obh2**c2) / (1 + 0.659*Omh2**0.828)
        # eqn 3
        yd  = zp1_eq / (1 + z_d)
        # sound horizon : eqn. 4
        s = 44.5*np.log(9.83 / Omh2) / np.sqrt(1 + 10*Obh2**(3/4))
        # eqn. 14
        pc  = 0.25*( 5 - np.sqrt( 1 + 24.0*fc  ) )
        pcb = 0.25*( 5 - np.sqrt( 1 + 24.0*fcb ) )
        # small-scale suppression : eqn. 15
        alpha  = (fc / fcb) * (5 - 2 *(pc + pcb)) / (5 - 4 * pcb)
        alpha *= (1 - 0.533 * fnb + 0.126 * fnb**3) / (1 - 0.193 * np.sqrt(fnu * Nnu) + 0.169 * fnu * Nnu**0.2)
        alpha *= (1 + yd)**(pcb - pc)
        alpha *= (1 + 0.5 * (pc - pcb) * (1 + 1 / (3 - 4 * pc) / (7 - 4 * pcb)) / (1 + yd))
        # eqn. 16
        Gamma_eff = Omh2 * (np.sqrt(alpha) + (1 - np.sqrt(alpha)) / (1 + (0.43 * k * s)**4))

        # transfer function T_sup
        q      = k * theta**2 / Gamma_eff # q_eff
        beta_c = (1 - 0.949 * fnb)**(-1)  # eqn. 21
        L      = np.log(np.e + 1.84 * beta_c * np.sqrt(alpha) * q) # eqn. 19
        C      = 14.4 + 325 / (1 + 60.5 * q**1.08) # eqn. 20
        res    = L / (L + C * q**2) # eqn. 18
        if fnu == 0:
            return res

        # master function
        q   = k * theta**2 / Omh2 # eqn 5
        qnu = 3.92 * q * np.sqrt(Nnu / fnu) # eqn. 23
        B0  = 1.24 * fnu**0.64 * Nnu**(0.3 + 0.6 * fnu)
        Bk  = 1 + B0 / (qnu**(-1.6) + qnu**0.8) # eqn. 22
        return res * Bk # eqn. 24


# initialising models to be readily used
bbks            = BBKS()
sugiyama95      = Sugiyama95()
eisenstein98_zb = Eisenstein98_zeroBaryon()
eisenstein98_nu = Eisenstein98_withNeutrino()

_available_models__ = {'bbks'           : bbks,
                       'sugiyama95'     : sugiyama95,
                       'eisenstein98_zb': eisenstein98_zb,
                       'eisenstein98_nu': eisenstein98_nu, }
