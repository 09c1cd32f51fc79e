"""
Reference set of SI units (plus a few common non-SI units defined
exactly in terms of them).  Larger unit systems are expected to be
built on top of these in the same way.
"""
from fractions import Fraction

from pyuom.converters import scale, shift
from pyuom.dimension import (AMOUNT_OF_SUBSTANCE, ELECTRIC_CURRENT, LENGTH,
                             LUMINOUS_INTENSITY, MASS, TEMPERATURE, TIME)
from ._prefix import MetricPrefix
from ._unit import AlternateUnit, BaseUnit, ONE, TransformedUnit

__all__ = ['KILOGRAM', 'METRE', 'SECOND', 'KELVIN', 'MOLE', 'AMPERE', 'CANDELA',
           'RADIAN', 'STERADIAN', 'HERTZ', 'BECQUEREL', 'NEWTON', 'JOULE',
           'WATT', 'LUMEN', 'GRAM', 'POUND_MASS', 'KILOMETRE', 'CENTIMETRE',
           'MILLIMETRE', 'FOOT', 'INCH', 'MINUTE', 'HOUR', 'CELSIUS',
           'LITRE']

# == Base Unit Definitions =============================================

KILOGRAM = BaseUnit('kg', MASS, 'kilogram')
METRE = BaseUnit('m', LENGTH, 'metre')
SECOND = BaseUnit('s', TIME, 'second')
KELVIN = BaseUnit('K', TEMPERATURE, 'kelvin')
MOLE = BaseUnit('mol', AMOUNT_OF_SUBSTANCE, 'mole')
AMPERE = BaseUnit('A', ELECTRIC_CURRENT, 'ampere')
CANDELA = BaseUnit('cd', LUMINOUS_INTENSITY, 'candela')

# == Alternate Units ===================================================

# Plane and solid angles are both dimensionless but are distinct
# quantities.
RADIAN = AlternateUnit(ONE, 'rad', 'radian')
STERADIAN = AlternateUnit(ONE, 'sr', 'steradian')

# Frequency and radioactivity are both 1/s.
HERTZ = AlternateUnit(SECOND.inverse(), 'Hz', 'hertz')
BECQUEREL = AlternateUnit(SECOND.inverse(), 'Bq', 'becquerel')

NEWTON = AlternateUnit(KILOGRAM * METRE / SECOND ** 2, 'N', 'newton')
JOULE = AlternateUnit(KILOGRAM * METRE ** 2 / SECOND ** 2, 'J', 'joule')
WATT = AlternateUnit(KILOGRAM * METRE ** 2 / SECOND ** 3, 'W', 'watt')
LUMEN = AlternateUnit(CANDELA * STERADIAN, 'lm', 'lumen')

# == Derived Units =====================================================

# -- Mass --------------------------------------------------------------

GRAM = TransformedUnit.of(KILOGRAM, scale(1, 1000), symbol='g',
                          name='gram')
POUND_MASS = TransformedUnit.of(KILOGRAM, scale('0.45359237'),
                                symbol='lbm', name='pound')
# Defn Intl & US Standard Pound.

# -- Length ------------------------------------------------------------

KILOMETRE = METRE.with_prefix(MetricPrefix.KILO)
CENTIMETRE = METRE.with_prefix(MetricPrefix.CENTI)
MILLIMETRE = METRE.with_prefix(MetricPrefix.MILLI)
FOOT = TransformedUnit.of(METRE, scale(Fraction(3048, 10000)),
                          symbol='ft', name='foot')  # International foot.
INCH = TransformedUnit.of(FOOT, scale(1, 12), symbol='in', name='inch')

# -- Time --------------------------------------------------------------

MINUTE = TransformedUnit.of(SECOND, scale(60), symbol='min',
                            name='minute')
HOUR = TransformedUnit.of(MINUTE, scale(60), symbol='h', name='hour')

# -- Temperature -------------------------------------------------------

CELSIUS = TransformedUnit.of(KELVIN, shift('273.15'), symbol='°C',
                             name='degree Celsius')

# -- Volume ------------------------------------------------------------

LITRE = TransformedUnit.of(METRE ** 3, scale(1, 1000), symbol='L',
                           name='litre')
