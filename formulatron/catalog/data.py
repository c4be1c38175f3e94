"""
Declarative formula catalog.

Every variable carries its own closed-form expression in terms of the
others; nothing is inverted symbolically. Each formula receives the full
mapping of variable id -> value (in default units) and returns a float.
Expressions may divide by zero or leave their domain; the engine reads any
such failure as NaN.

`order` is the initial recalculation chain. Units are display names from
formulatron.physics.units; a variable without "unit" is dimensionless.
"""

import math
from math import log10, pi, sqrt

from formulatron.physics.constants import (
    ARCSEC_PER_RADIAN,
    EDDINGTON,
    G_SI as G,
    HUBBLE_KMS_MPC,
    HUBBLE_TIME_YEARS,
    PROPER_MOTION_KMS,
    STEFAN_SI as STEFAN,
    WIEN_SI as WIEN,
)


def _inrange(a, x, b):
    return a <= x <= b


def _luminosity_from_mass(v):
    """Main-sequence mass-luminosity relation, solar units."""
    M = v["M"]
    if _inrange(0.00, M, 0.43):
        return 0.23 * M ** 2.3
    if _inrange(0.43, M, 2.00):
        return 1.00 * M ** 4.0
    if _inrange(2.00, M, 55.0):
        return 1.40 * M ** 3.5
    if _inrange(55.0, M, 1000):
        return 32000 * M ** 1.0
    return math.nan


# Upper luminosity of each branch above, used to pick the inverse branch
_ML_BREAKS = (0.23 * 0.43 ** 2.3, 2.00 ** 4.0, 1.40 * 55.0 ** 3.5, 32000 * 1000)


def _mass_from_luminosity(v):
    L = v["L"]
    if _inrange(0, L, _ML_BREAKS[0]):
        return (L / 0.23) ** (1 / 2.3)
    if _inrange(_ML_BREAKS[0], L, _ML_BREAKS[1]):
        return L ** (1 / 4.0)
    if _inrange(_ML_BREAKS[1], L, _ML_BREAKS[2]):
        return (L / 1.40) ** (1 / 3.5)
    if _inrange(_ML_BREAKS[2], L, _ML_BREAKS[3]):
        return L / 32000
    return math.nan


CATALOG_DATA = {
    "stellar-relations": {
        "name": "Stellar Relations",
        "forms": {
            "distance-modulus": {
                "name": "distance modulus",
                "description": "relates the distance of an object to the difference between its apparent and absolute magnitudes",
                "order": ["d", "M", "m"],
                "variables": {
                    "m": {
                        "name": "apparent magnitude",
                        "symbol": "m",
                        "value": 5,
                        "formula": lambda v: (5 * log10(v["d"]) - 5) + v["M"],
                    },
                    "M": {
                        "name": "absolute magnitude",
                        "symbol": "M",
                        "value": -5,
                        "formula": lambda v: v["m"] - (5 * log10(v["d"]) - 5),
                    },
                    "d": {
                        "name": "distance",
                        "symbol": "d",
                        "value": 1000,
                        "unit": "parsecs",
                        "formula": lambda v: 10 ** ((v["m"] - v["M"] + 5) / 5),
                    },
                },
            },
            "small-angle": {
                "name": "small angle formula",
                "description": "relates the distance of an object by the ratio of its angular and linear diameters",
                "order": ["D", "d", "theta"],
                "variables": {
                    "theta": {
                        "name": "angular diameter",
                        "symbol": "θ",
                        "value": 10,
                        "unit": "arcseconds",
                        "formula": lambda v: ARCSEC_PER_RADIAN * v["d"] / v["D"],
                    },
                    "d": {
                        "name": "linear diameter",
                        "symbol": "d",
                        "value": 5,
                        "unit": "centimeters",
                        "formula": lambda v: v["theta"] * v["D"] / ARCSEC_PER_RADIAN,
                    },
                    "D": {
                        "name": "distance",
                        "symbol": "D",
                        "value": 1e5,
                        "unit": "centimeters",
                        "formula": lambda v: v["d"] * ARCSEC_PER_RADIAN / v["theta"],
                    },
                },
            },
            "parallax": {
                "name": "parallax distance",
                "description": "relates the distance of an object by its parallax",
                "order": ["p", "d"],
                "variables": {
                    "d": {
                        "name": "distance",
                        "symbol": "d",
                        "value": 10,
                        "unit": "parsecs",
                        "formula": lambda v: 1 / v["p"],
                    },
                    "p": {
                        "name": "parallax",
                        "symbol": "p",
                        "value": 0.1,
                        "unit": "arcseconds",
                        "formula": lambda v: 1 / v["d"],
                    },
                },
            },
            "magnitude-luminosity": {
                "name": "magnitude-luminosity relation",
                "description": "relates two objects' luminosity ratio to magnitude difference",
                "order": ["M2", "M1", "L2", "L1"],
                "variables": {
                    "L1": {
                        "name": "1's luminosity",
                        "symbol": "L₁",
                        "value": 3e11,
                        "unit": "watts",
                        "formula": lambda v: v["L2"] * 100 ** ((v["M2"] - v["M1"]) / 5),
                    },
                    "L2": {
                        "name": "2's luminosity",
                        "symbol": "L₂",
                        "value": 3e8,
                        "unit": "watts",
                        "formula": lambda v: v["L1"] / 100 ** ((v["M2"] - v["M1"]) / 5),
                    },
                    "M1": {
                        "name": "1's magnitude",
                        "symbol": "M₁",
                        "value": 10,
                        "formula": lambda v: v["M2"] - 2.5 * log10(v["L1"] / v["L2"]),
                    },
                    "M2": {
                        "name": "2's magnitude",
                        "symbol": "M₂",
                        "value": 15,
                        "formula": lambda v: v["M1"] + 2.5 * log10(v["L1"] / v["L2"]),
                    },
                },
            },
            "mass-luminosity": {
                "name": "mass-luminosity relation, main-sequence",
                "description": "relates a main-sequence star's mass to its luminosity",
                "order": ["M", "L"],
                "variables": {
                    "L": {
                        "name": "luminosity",
                        "symbol": "L",
                        "value": 4427.2,
                        "unit": "L⊙",
                        "formula": _luminosity_from_mass,
                    },
                    "M": {
                        "name": "mass",
                        "symbol": "M",
                        "value": 10,
                        "unit": "M⊙",
                        "formula": _mass_from_luminosity,
                    },
                },
            },
            "stefan-boltzmann": {
                "name": "Stefan-Boltzmann Law",
                "description": "relates an object's luminosity to its radius and temperature",
                "order": ["T", "R", "L"],
                "variables": {
                    "L": {
                        "name": "luminosity",
                        "symbol": "L",
                        "value": 10,
                        "unit": "watts",
                        "formula": lambda v: 4 * pi * v["R"] ** 2 * STEFAN * v["T"] ** 4,
                    },
                    "R": {
                        "name": "radius",
                        "symbol": "R",
                        "value": 10,
                        "unit": "meters",
                        "formula": lambda v: sqrt(v["L"] / (4 * pi * STEFAN * v["T"] ** 4)),
                    },
                    "T": {
                        "name": "temperature",
                        "symbol": "T",
                        "value": 10,
                        "unit": "kelvins",
                        "formula": lambda v: (v["L"] / (4 * pi * v["R"] ** 2 * STEFAN)) ** (1 / 4),
                    },
                },
            },
            "wien": {
                "name": "Wien's Displacement Law",
                "description": "relates a blackbody peak radiation wavelength to its temperature",
                "order": ["T", "lam"],
                "variables": {
                    "lam": {
                        "name": "peak wavelength",
                        "symbol": "λ",
                        "value": 0.05,
                        "unit": "meters",
                        "formula": lambda v: WIEN / v["T"],
                    },
                    "T": {
                        "name": "temperature",
                        "symbol": "T",
                        "value": 0.06,
                        "unit": "kelvins",
                        "formula": lambda v: WIEN / v["lam"],
                    },
                },
            },
            "eddington": {
                "name": "Eddington Luminosity",
                "description": "the maximum possible luminosity for a star before radiation pressure overcomes surface gravity",
                "order": ["M", "L"],
                "variables": {
                    "L": {
                        "name": "luminosity",
                        "symbol": "L",
                        "value": 32000,
                        "unit": "L⊙",
                        "formula": lambda v: EDDINGTON * v["M"],
                    },
                    "M": {
                        "name": "mass",
                        "symbol": "M",
                        "value": 1,
                        "unit": "M⊙",
                        "formula": lambda v: v["L"] / EDDINGTON,
                    },
                },
            },
            "leavitt-classical": {
                "name": "period-luminosity relation (Leavitt Law), Classical Cepheids",
                "order": ["P", "M_V"],
                "variables": {
                    "M_V": {
                        "name": "visual absolute magnitude",
                        "symbol": "Mᵥ",
                        "value": -4.05,
                        "formula": lambda v: -2.43 * (log10(v["P"]) - 1) - 4.05,
                    },
                    "P": {
                        "name": "period",
                        "symbol": "P",
                        "value": 10,
                        "unit": "days",
                        "formula": lambda v: 10 ** ((v["M_V"] + 4.05) / -2.43 + 1),
                    },
                },
            },
            "leavitt-ii": {
                "name": "period-luminosity relation (Leavitt Law), Type II Cepheids",
                "order": ["P", "M_V"],
                "variables": {
                    "M_V": {
                        "name": "visual absolute magnitude",
                        "symbol": "Mᵥ",
                        "value": -2.66,
                        "formula": lambda v: -2.81 * log10(v["P"]) + 0.15,
                    },
                    "P": {
                        "name": "period",
                        "symbol": "P",
                        "value": 10,
                        "unit": "days",
                        "formula": lambda v: 10 ** ((v["M_V"] - 0.15) / -2.81),
                    },
                },
            },
            "lifespan": {
                "name": "lifespan",
                "description": "relates the lifespan of a main-sequence star to its mass",
                "order": ["M", "t"],
                "variables": {
                    "t": {
                        "name": "lifespan",
                        "symbol": "t",
                        "value": 1e10,
                        "unit": "years",
                        "formula": lambda v: v["M"] ** -2.5 * 1e10,
                    },
                    "M": {
                        "name": "mass",
                        "symbol": "M",
                        "value": 1,
                        "unit": "M⊙",
                        "formula": lambda v: (v["t"] * 1e-10) ** (-1 / 2.5),
                    },
                },
            },
        },
    },
    "orbital-mechanics": {
        "name": "Orbital Mechanics",
        "forms": {
            "center-of-mass": {
                "name": "center of mass",
                "description": "relates center of mass of two objects to their masses and positions",
                "order": ["X", "mu", "m2", "m1", "x2", "x1"],
                "variables": {
                    "x1": {
                        "name": "1's position",
                        "symbol": "x₁",
                        "value": 1,
                        "unit": "meters",
                        "formula": lambda v: (v["X"] * (v["m1"] + v["m2"]) - v["x2"] * v["m2"]) / v["m1"],
                    },
                    "x2": {
                        "name": "2's position",
                        "symbol": "x₂",
                        "value": 3,
                        "unit": "meters",
                        "formula": lambda v: (v["X"] * (v["m1"] + v["m2"]) - v["x1"] * v["m1"]) / v["m2"],
                    },
                    "m1": {
                        "name": "1's mass",
                        "symbol": "m₁",
                        "value": 1,
                        "unit": "kilograms",
                        "formula": lambda v: v["m2"] * (v["x2"] - v["X"]) / (v["X"] - v["x1"]),
                    },
                    "m2": {
                        "name": "2's mass",
                        "symbol": "m₂",
                        "value": 1,
                        "unit": "kilograms",
                        "formula": lambda v: v["m1"] * (v["x1"] - v["X"]) / (v["X"] - v["x2"]),
                    },
                    "mu": {
                        "name": "reduced mass",
                        "symbol": "µ",
                        "value": 0.5,
                        "unit": "kilograms",
                        "formula": lambda v: v["m1"] * v["m2"] / (v["m1"] + v["m2"]),
                    },
                    "X": {
                        "name": "center of mass",
                        "symbol": "X",
                        "value": 2,
                        "unit": "meters",
                        "formula": lambda v: (v["m1"] * v["x1"] + v["m2"] * v["x2"]) / (v["m1"] + v["m2"]),
                    },
                },
            },
            "newton-gravitation": {
                "name": "Newton's Law of Universal Gravitation",
                "description": "relates the force of gravity between two objects to their masses and distance",
                "order": ["F", "r", "m1", "m2"],
                "variables": {
                    "m1": {
                        "name": "1's mass",
                        "symbol": "m₁",
                        "value": 1,
                        "unit": "kilograms",
                        "formula": lambda v: v["F"] * v["r"] * v["r"] / G / v["m2"],
                    },
                    "m2": {
                        "name": "2's mass",
                        "symbol": "m₂",
                        "value": 2e15,
                        "unit": "kilograms",
                        "formula": lambda v: v["F"] * v["r"] * v["r"] / G / v["m1"],
                    },
                    "r": {
                        "name": "distance",
                        "symbol": "r",
                        "value": 60,
                        "unit": "meters",
                        "formula": lambda v: sqrt(G * v["m1"] * v["m2"] / v["F"]),
                    },
                    "F": {
                        "name": "gravitational force",
                        "symbol": "F",
                        "value": 37,
                        "unit": "newtons",
                        "formula": lambda v: G * v["m1"] * v["m2"] / v["r"] / v["r"],
                    },
                },
            },
            "vis-viva": {
                "name": "orbital speed (vis-viva)",
                "description": "relates the speed of an object to its orbital radius and semi-major axis",
                "order": ["v", "r", "a", "m1", "m2"],
                "variables": {
                    "m1": {
                        "name": "1's mass",
                        "symbol": "m₁",
                        "value": 1e10,
                        "unit": "kilograms",
                        "formula": lambda v: v["v"] * v["v"] / G / (2 / v["r"] - 1 / v["a"]) - v["m2"],
                    },
                    "m2": {
                        "name": "2's mass",
                        "symbol": "m₂",
                        "value": 2e10,
                        "unit": "kilograms",
                        "formula": lambda v: v["v"] * v["v"] / G / (2 / v["r"] - 1 / v["a"]) - v["m1"],
                    },
                    "r": {
                        "name": "distance",
                        "symbol": "r",
                        "value": 2,
                        "unit": "meters",
                        "formula": lambda v: 2 / (v["v"] * v["v"] / G / (v["m1"] + v["m2"]) + 1 / v["a"]),
                    },
                    "a": {
                        "name": "semi-major axis",
                        "symbol": "a",
                        "value": 3,
                        "unit": "meters",
                        "formula": lambda v: 1 / (2 / v["r"] - v["v"] * v["v"] / G / (v["m1"] + v["m2"])),
                    },
                    "v": {
                        "name": "orbital speed",
                        "symbol": "v",
                        "value": 1.15,
                        "unit": "meters/second",
                        "formula": lambda v: sqrt(G * (v["m1"] + v["m2"]) * (2 / v["r"] - 1 / v["a"])),
                    },
                },
            },
        },
    },
    "large-scale-universe": {
        "name": "Large-Scale Universe",
        "forms": {
            "hubble": {
                "name": "Hubble's Law",
                "description": "relates the recessional speed of an object to its distance, due to the expansion of the universe",
                "order": ["v", "d"],
                "variables": {
                    "v": {
                        "name": "recessional speed",
                        "symbol": "v",
                        "value": 70,
                        "unit": "kilometers/second",
                        "formula": lambda v: HUBBLE_KMS_MPC * v["d"],
                    },
                    "d": {
                        "name": "distance",
                        "symbol": "d",
                        "value": 1,
                        "unit": "megaparsecs",
                        "formula": lambda v: v["v"] / HUBBLE_KMS_MPC,
                    },
                },
            },
            "proper-motion": {
                "name": "proper motion",
                "description": "relates the tangential speed of an object to its distance and angular motion",
                "order": ["v", "mu", "d"],
                "variables": {
                    "d": {
                        "name": "distance",
                        "symbol": "d",
                        "value": 1,
                        "unit": "parsecs",
                        "formula": lambda v: v["v"] / PROPER_MOTION_KMS / v["mu"],
                    },
                    "mu": {
                        "name": "proper motion",
                        "symbol": "µ",
                        "value": 1,
                        "unit": "arcseconds/year",
                        "formula": lambda v: v["v"] / PROPER_MOTION_KMS / v["d"],
                    },
                    "v": {
                        "name": "tangential speed",
                        "symbol": "v",
                        "value": 4.74,
                        "unit": "kilometers/second",
                        "formula": lambda v: PROPER_MOTION_KMS * v["mu"] * v["d"],
                    },
                },
            },
            "universe-age": {
                "name": "age of the universe",
                "description": "relates the age of the universe to Hubble Constant",
                "order": ["H", "t"],
                "variables": {
                    "t": {
                        "name": "age",
                        "symbol": "t",
                        "value": 1.3968e10,
                        "unit": "years",
                        "formula": lambda v: HUBBLE_TIME_YEARS / v["H"],
                    },
                    "H": {
                        "name": "Hubble constant",
                        "symbol": "H",
                        "value": 70,
                        "unit": "kilometers/second/megaparsec",
                        "formula": lambda v: HUBBLE_TIME_YEARS / v["t"],
                    },
                },
            },
            "z-factor": {
                "name": "z-factor",
                "description": "relates the z-factor to wavelength dilation from the cosmic microwave background",
                "order": ["z", "lam", "lam0"],
                "variables": {
                    "lam": {
                        "name": "wavelength",
                        "symbol": "λ",
                        "value": 2,
                        "unit": "meters",
                        "formula": lambda v: v["lam0"] * (v["z"] + 1),
                    },
                    "lam0": {
                        "name": "original wavelength",
                        "symbol": "λ₀",
                        "value": 1,
                        "unit": "meters",
                        "formula": lambda v: v["lam"] / (v["z"] + 1),
                    },
                    "z": {
                        "name": "z-factor",
                        "symbol": "z",
                        "value": 1,
                        "formula": lambda v: v["lam"] / v["lam0"] - 1,
                    },
                },
            },
        },
    },
    "telescopes": {
        "name": "Telescopes & Lenses",
        "forms": {
            "resolving-power": {
                "name": "resolving power",
                "description": "relates the angular resolution of a lens to its aperture and the wavelength",
                "order": ["D", "lam", "theta"],
                "variables": {
                    "theta": {
                        "name": "angular resolution",
                        "symbol": "θ",
                        "value": 1.22,
                        "unit": "radians",
                        "formula": lambda v: 1.22 * v["lam"] / v["D"],
                    },
                    "lam": {
                        "name": "wavelength",
                        "symbol": "λ",
                        "value": 1,
                        "unit": "nanometers",
                        "formula": lambda v: v["theta"] * v["D"] / 1.22,
                    },
                    "D": {
                        "name": "lens diameter",
                        "symbol": "D",
                        "value": 1,
                        "unit": "nanometers",
                        "formula": lambda v: 1.22 * v["lam"] / v["theta"],
                    },
                },
            },
        },
    },
}
