"""
Quantities (:mod:`pyuom.quantity`)
==================================

.. currentmodule:: pyuom.quantity

Values with units, and the registry that decides which kind of quantity
results from an operation.

Examples
--------
The kind of a result is derived from its unit:

>>> from pyuom.units import METRE, SECOND
>>> v = Speed(10.0, METRE / SECOND)
>>> f = v / Length(100.0, METRE)
>>> f
Frequency(0.1, 'Hz')

Kinds with the same dimension are never converted implicitly, but can
be reinterpreted explicitly:

>>> f.as_quantity(RadioActivity)
RadioActivity(0.1, 'Bq')
"""

from ._quantity import (Quantity, get_quantity_registry, quantity,
                        register_quantity)
from ._registry import QuantityRegistry
from .kinds import *
from .kinds import __all__ as _kinds_all

register_si_quantities(get_quantity_registry())

__all__ = ['Quantity', 'QuantityRegistry', 'get_quantity_registry',
           'quantity', 'register_quantity'] + _kinds_all
