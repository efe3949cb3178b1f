#!/usr/bin/python3

# Speed of light in km/sec
SPEED_OF_LIGHT_KMPS = 299792.458

# Speed of light in m/sec
SPEED_OF_LIGHT = 2.99792458e+08

# Newton's gravitational constant in m^3/kg/s^2
GNEWT = 6.67430e-11

# Stefan-Boltzmann constant in W/m^2/K^4
STBOLTZ = 5.670374419e-08

# Boltzmann constant in eV/K
KBOLTZ_EV = 8.617333262e-05

# 1 Mpc in m
MPC = 3.085677581491367e+22

# CMB temperature in K
T_CMB = 2.7255

# Pivot scale of the primordial spectrum in 1/Mpc
K_PIVOT = 0.05

# Critical density for h = 1, as an energy density in J/m^3
RHO_CRIT100 = 3. * ( 1.0e+05 / MPC )**2 * SPEED_OF_LIGHT**2 / ( 8*3.141592653589793 * GNEWT )

# Photon density parameter times h^2, per K^4 of CMB temperature
OMEGA_GAMMA_H2_PER_T4 = 4. * STBOLTZ / SPEED_OF_LIGHT / RHO_CRIT100

# Neutrino to photon temperature ratio, (4/11)^(1/3)
TNU_OVER_TCMB = 0.7137658555036082

# Fermi-Dirac to Bose-Einstein energy density ratio
FERMI_FACTOR = 0.875

# Hubble distance c/H0 in Mpc, for h = 1
HUBBLE_DISTANCE = 0.01 * SPEED_OF_LIGHT_KMPS

# Others
PI = 3.141592653589793
TWO_PI2 = 19.739208802178716
