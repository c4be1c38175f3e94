"""
Physical constants used by the formula catalog.

Formulas work on plain floats in each variable's default unit, so the
catalog uses the magnitudes below. The quantities keep the units on record.
"""

from formulatron.physics.units import Q_

# Newtonian constant of gravitation (SI)
G = Q_(6.6743e-11, "m^3 / kg / s^2")

# Stefan-Boltzmann constant (SI)
STEFAN = Q_(5.670374419e-8, "W / m^2 / K^4")

# Wien's displacement constant (SI)
WIEN = Q_(2.897771955e-3, "m * K")

# Hubble constant as used by the Hubble's law formula
HUBBLE = Q_(70, "km / s / Mpc")

# Eddington luminosity per solar mass, in L⊙ / M⊙
EDDINGTON = 3.2e4

# Tangential speed of 1 arcsecond/year at 1 parsec, in km/s
PROPER_MOTION_KMS = 4.74

# Small-angle conversion: arcseconds per radian
ARCSEC_PER_RADIAN = 206265


G_SI = G.to("m^3 / kg / s^2").magnitude
STEFAN_SI = STEFAN.to("W / m^2 / K^4").magnitude
WIEN_SI = WIEN.to("m * K").magnitude
HUBBLE_KMS_MPC = HUBBLE.to("km / s / Mpc").magnitude

# Hubble time for H = 1 km/s/Mpc, in Julian years (t = HUBBLE_TIME_YEARS / H)
HUBBLE_TIME_YEARS = (1 / Q_(1, "km / s / Mpc")).to("julian_year").magnitude
