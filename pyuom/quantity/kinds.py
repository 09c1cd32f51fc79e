"""
Common quantity kinds and their registration against the reference SI
units.  Kinds sharing a dimension are registered in order of
preference: the first one registered is the default result of
arithmetic producing that dimension (e.g. `Frequency` before
`RadioActivity`).
"""
from pyuom.units import (AMPERE, BECQUEREL, CANDELA, HERTZ, JOULE, KELVIN,
                         KILOGRAM, LUMEN, METRE, MOLE, NEWTON, ONE, RADIAN,
                         SECOND, STERADIAN, WATT)
from ._quantity import Quantity
from ._registry import QuantityRegistry

__all__ = ['Dimensionless', 'Mass', 'Length', 'Time', 'Temperature',
           'AmountOfSubstance', 'ElectricCurrent', 'LuminousIntensity',
           'Angle', 'SolidAngle', 'Frequency', 'RadioActivity', 'Force',
           'Energy', 'Power', 'LuminousFlux', 'Area', 'Volume', 'Speed',
           'Acceleration', 'register_si_quantities']


# ======================================================================

class Dimensionless(Quantity):
    pass


class Mass(Quantity):
    pass


class Length(Quantity):
    pass


class Time(Quantity):
    pass


class Temperature(Quantity):
    pass


class AmountOfSubstance(Quantity):
    pass


class ElectricCurrent(Quantity):
    pass


class LuminousIntensity(Quantity):
    pass


class Angle(Quantity):
    """Plane angle, in radians.  Distinct from `SolidAngle` and
    `Dimensionless` although all three are dimensionless."""


class SolidAngle(Quantity):
    pass


class Frequency(Quantity):
    """Frequency, in hertz.  Distinct from `RadioActivity` although both
    have dimension T⁻¹."""


class RadioActivity(Quantity):
    pass


class Force(Quantity):
    pass


class Energy(Quantity):
    pass


class Power(Quantity):
    pass


class LuminousFlux(Quantity):
    pass


class Area(Quantity):
    pass


class Volume(Quantity):
    pass


class Speed(Quantity):
    pass


class Acceleration(Quantity):
    pass


# ----------------------------------------------------------------------

def register_si_quantities(registry: QuantityRegistry):
    """Register the kinds defined in this module with `registry`."""
    for kind, unit in (
            (Dimensionless, ONE),
            (Mass, KILOGRAM),
            (Length, METRE),
            (Time, SECOND),
            (Temperature, KELVIN),
            (AmountOfSubstance, MOLE),
            (ElectricCurrent, AMPERE),
            (LuminousIntensity, CANDELA),
            (Angle, RADIAN),
            (SolidAngle, STERADIAN),
            (Frequency, HERTZ),
            (RadioActivity, BECQUEREL),
            (Force, NEWTON),
            (Energy, JOULE),
            (Power, WATT),
            (LuminousFlux, LUMEN),
            (Area, METRE ** 2),
            (Volume, METRE ** 3),
            (Speed, METRE / SECOND),
            (Acceleration, METRE / SECOND ** 2)):
        registry.register(kind, unit)
