"""
.. This module acts as the top-level API documentation.

.. module: pyuom

Dimensional analysis and unit conversion with exact (decimal) and fast
(floating point / numpy) evaluation.

.. autosummary::
    :toctree: generated/

    converters
    dimension
    math
    quantity
    units
"""

__version__ = "0.1.0"

import sys

# ======================================================================

assert sys.version_info >= (3, 10)

from pyuom._opts import (UnitOptions, default_context, get_unit_options,
                         set_unit_options)
from pyuom.exceptions import *
from pyuom.math import ExactRational, nth_root
from pyuom.dimension import Dimension, BaseDimension
from pyuom.converters import (UnitConverter, compose, identity, power, root,
                              scale, shift)
from pyuom.units import (Unit, AlternateUnit, BaseUnit, ONE, ProductUnit,
                         TransformedUnit, MetricPrefix, BinaryPrefix)
from pyuom.quantity import Quantity, quantity
