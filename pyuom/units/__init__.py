"""
Units (:mod:`pyuom.units`)
==========================

.. currentmodule:: pyuom.units

Unit definitions and the rules for converting between them.

Examples
--------
Units are combined arithmetically, and equal products compare equal
regardless of how they were built:

>>> speed = METRE / SECOND
>>> print(speed)
m.s⁻¹
>>> speed * SECOND == METRE
True

Conversions are found between any units sharing a system unit:

>>> KILOMETRE.get_converter_to(METRE).convert_double(1.5)
1500.0
>>> (KILOMETRE / HOUR).get_converter_to(METRE / SECOND).scale_as_rational()
ExactRational(5, 18)

Units with the same dimension but a different system unit are
compatible but cannot be converted implicitly:

>>> HERTZ.is_compatible(BECQUEREL)
True
>>> HERTZ.get_converter_to(BECQUEREL)  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
...
pyuom.exceptions.IncommensurableUnitsError: Cannot convert 'Hz' -> 'Bq'.
"""

from ._unit import (Unit, AlternateUnit, BaseUnit, ONE, ProductUnit,
                    TransformedUnit)
from ._prefix import BinaryPrefix, MetricPrefix
from ._defs import *
from ._defs import __all__ as _defs_all

__all__ = ['Unit', 'AlternateUnit', 'BaseUnit', 'ONE', 'ProductUnit',
           'TransformedUnit', 'BinaryPrefix', 'MetricPrefix'] + _defs_all
