from __future__ import annotations

import decimal
from decimal import Decimal
import operator
from typing import Callable

import numpy as np

from pyuom.converters import UnitConverter
from pyuom.exceptions import (IllegalArgumentError,
                              IncommensurableUnitsError)
from pyuom.math import nth_root, real_root
from pyuom.units import Unit
from ._registry import QuantityRegistry


# ======================================================================

class Quantity:
    """
    ``Quantity`` represents a numeric value together with its unit.
    Subclasses represent specific kinds of quantity (e.g. `Length`) and
    are registered with the quantity registry; ``Quantity`` itself is the
    generic kind used when no specific kind applies.

    The value may be:

    - A float (or int), using fast floating point conversions.
    - A numpy array (lists / tuples are converted), with conversions
      applied elementwise.
    - A `decimal.Decimal`, using exact conversions rounded according to
      the default context (see `set_unit_options`) or an explicit
      context where a method accepts one.

    Quantities are immutable.  Arithmetic results are created through
    the registry so that the kind of the result is derived from its
    unit, e.g. a `Length` divided by a `Time` gives a `Speed`.

    Parameters
    ----------
    value :
        Numeric value.
    unit : Unit
        Unit of `value`.

    Raises
    ------
    IncommensurableUnitsError
        If this is a registered kind and `unit` does not belong to it.
    """
    __slots__ = ('_value', '_unit')

    def __init__(self, value, unit: Unit):
        if not isinstance(unit, Unit):
            raise IllegalArgumentError(f"Expected a unit, got {unit!r}.")
        if isinstance(value, (list, tuple)):
            value = np.asarray(value, dtype=float)

        kind = type(self)
        if kind is not Quantity and _REGISTRY.is_registered(kind):
            sys_unit = _REGISTRY.system_unit(kind)
            if unit.system_unit != sys_unit:
                raise IncommensurableUnitsError(
                    f"Unit '{unit}' cannot be used for quantity kind "
                    f"{kind.__name__} (system unit '{sys_unit}').")

        self._value, self._unit = value, unit

    # -- Properties ----------------------------------------------------

    @property
    def dimension(self):
        return self._unit.dimension

    @property
    def kind(self) -> type:
        return type(self)

    @property
    def system_unit(self) -> Unit:
        return self._unit.system_unit

    @property
    def unit(self) -> Unit:
        return self._unit

    @property
    def value(self):
        return self._value

    # -- Conversion ----------------------------------------------------

    def as_quantity(self, kind: type) -> Quantity:
        """
        Reinterpret as a different kind of quantity with the same
        dimension, without converting the value.  The unit is mapped onto
        the system unit of `kind` using the same converter (e.g. ``kHz``
        becomes ``kBq``).

        This is the only way to move between kinds with different system
        units, e.g. from a `Frequency` to a `RadioActivity`.

        Raises
        ------
        UnsupportedQuantityKindError
            If `kind` is not registered.
        IncommensurableUnitsError
            If the dimensions differ.
        """
        target = _REGISTRY.system_unit(kind)
        if not self._unit.is_compatible(target):
            raise IncommensurableUnitsError(
                f"Cannot reinterpret '{self}' as {kind.__name__}.",
                details=f"Dimensions {self.dimension} and "
                        f"{target.dimension} differ.")

        unit = self._unit
        if unit.system_unit != target:
            unit = _REGISTRY.map_unit(unit, kind)
        return _REGISTRY.factory(kind)(self._value, unit)

    def is_compatible(self, other: Quantity | Unit) -> bool:
        """``True`` if `other` (or its unit) has the same dimension."""
        if isinstance(other, Quantity):
            other = other.unit
        return self._unit.is_compatible(other)

    def to(self, unit: Unit, context: decimal.Context = None) -> Quantity:
        """
        Returns this quantity converted to `unit`.  For `Decimal` values
        `context` gives the precision and rounding.

        Raises
        ------
        IncommensurableUnitsError
            If `unit` does not share the same system unit.
        """
        conv = self._unit.get_converter_to(unit)
        return self._same_kind(_convert(conv, self._value, context), unit)

    def to_system_unit(self, context: decimal.Context = None) -> Quantity:
        return self.to(self._unit.system_unit, context)

    # -- Arithmetic ----------------------------------------------------

    def add(self, other: Quantity) -> Quantity:
        """
        Add `other`, which is first converted to the unit of this
        quantity.  The result has the unit and kind of this quantity.
        """
        return self._add_sub(other, operator.add)

    def subtract(self, other: Quantity) -> Quantity:
        """See `add`."""
        return self._add_sub(other, operator.sub)

    def multiply(self, other: Quantity | float) -> Quantity:
        """
        Multiply by another quantity (the result has the product unit
        and the kind registered for it) or by a plain number (same unit
        and kind).
        """
        if not isinstance(other, Quantity):
            return self._same_kind(_binary(operator.mul, self._value, other),
                                   self._unit)
        return _REGISTRY.create(
            _binary(operator.mul, self._value, other.value),
            self._unit.multiply(other.unit))

    def divide(self, other: Quantity | float) -> Quantity:
        """See `multiply`."""
        if not isinstance(other, Quantity):
            return self._same_kind(
                _binary(operator.truediv, self._value, other), self._unit)
        return _REGISTRY.create(
            _binary(operator.truediv, self._value, other.value),
            self._unit.divide(other.unit))

    def pow(self, n: int) -> Quantity:
        """Raise value and unit to integer power `n`."""
        unit = self._unit.pow(n)
        return _REGISTRY.create(self._value ** int(n), unit)

    def root(self, n: int, context: decimal.Context = None) -> Quantity:
        """
        Take the `n`-th root of value and unit.

        Raises
        ------
        ArithmeticDomainError
            If `n` is even and the value is negative.
        """
        unit = self._unit.root(n)
        n = int(n)
        if isinstance(self._value, Decimal):
            value = nth_root(n, self._value, context)
        else:
            value = real_root(n, self._value)
        return _REGISTRY.create(value, unit)

    def inverse(self) -> Quantity:
        return _REGISTRY.create(_binary(operator.truediv, 1, self._value),
                                self._unit.inverse())

    def negate(self) -> Quantity:
        return self._same_kind(-self._value, self._unit)

    # -- Comparison ----------------------------------------------------

    def is_equivalent(self, other: Quantity) -> bool:
        """
        ``True`` if `other` converted to this unit has an equal value.
        Quantities that cannot be converted are never equivalent.
        """
        if not isinstance(other, Quantity):
            return False
        try:
            return bool(np.all(_common_cmp(self, other, operator.eq)))
        except IncommensurableUnitsError:
            return False

    def is_close(self, other: Quantity, rel_tol: float = 1e-9,
                 abs_tol: float = 0.0) -> bool:
        """
        ``True`` if `other` converted to this unit is within tolerance
        (all elements, for arrays).  See `numpy.isclose`.
        """
        rhs = other.to(self._unit).value
        return bool(np.all(np.isclose(np.asarray(self._value, dtype=float),
                                      np.asarray(rhs, dtype=float),
                                      rtol=rel_tol, atol=abs_tol)))

    # -- Operators -----------------------------------------------------

    def __abs__(self) -> Quantity:
        return self._same_kind(abs(self._value), self._unit)

    def __neg__(self) -> Quantity:
        return self.negate()

    def __add__(self, rhs: Quantity) -> Quantity:
        if not isinstance(rhs, Quantity):
            return NotImplemented
        return self.add(rhs)

    def __sub__(self, rhs: Quantity) -> Quantity:
        if not isinstance(rhs, Quantity):
            return NotImplemented
        return self.subtract(rhs)

    def __mul__(self, rhs) -> Quantity:
        return self.multiply(rhs)

    def __rmul__(self, lhs) -> Quantity:
        return self.multiply(lhs)

    def __truediv__(self, rhs) -> Quantity:
        return self.divide(rhs)

    def __rtruediv__(self, lhs) -> Quantity:
        """Number divided by this quantity."""
        return self.inverse().multiply(lhs)

    def __pow__(self, n) -> Quantity:
        return self.pow(n)

    def __lt__(self, rhs):
        return _common_cmp(self, rhs, operator.lt)

    def __le__(self, rhs):
        return _common_cmp(self, rhs, operator.le)

    def __eq__(self, rhs):
        try:
            return _common_cmp(self, rhs, operator.eq)
        except IncommensurableUnitsError:
            return False

    def __ne__(self, rhs):
        try:
            return _common_cmp(self, rhs, operator.ne)
        except IncommensurableUnitsError:
            return True

    def __ge__(self, rhs):
        return _common_cmp(self, rhs, operator.ge)

    def __gt__(self, rhs):
        return _common_cmp(self, rhs, operator.gt)

    __hash__ = None

    # -- String Magic Methods ------------------------------------------

    def __format__(self, format_spec: str):
        label = str(self._unit)
        value_str = format(self._value, format_spec)
        return f"{value_str} {label}" if label else value_str

    def __repr__(self):
        return f"{type(self).__name__}({self._value!r}, '{self._unit}')"

    def __str__(self):
        return self.__format__('')

    # -- Private Methods -----------------------------------------------

    def _add_sub(self, other: Quantity, op: Callable) -> Quantity:
        conv = other.unit.get_converter_to(self._unit)
        value = _binary(op, self._value, _convert(conv, other.value))
        return self._same_kind(value, self._unit)

    def _same_kind(self, value, unit: Unit) -> Quantity:
        if type(self) is Quantity:
            return Quantity(value, unit)
        return _REGISTRY.create(value, unit, kind=type(self))


# ----------------------------------------------------------------------

def _binary(op: Callable, lhs, rhs):
    """
    Apply `op`.  A `Decimal` operand is dropped to floating point unless
    the other operand is also a `Decimal` or an integer.
    """
    if isinstance(lhs, Decimal) and not isinstance(rhs, (Decimal, int)):
        lhs = float(lhs)
    elif isinstance(rhs, Decimal) and not isinstance(lhs, (Decimal, int)):
        rhs = float(rhs)
    return op(lhs, rhs)


def _common_cmp(lhs: Quantity, rhs, op: Callable[..., bool]):
    """
    Common method used for comparison of a Quantity object and another
    object called by all magic methods.  The `rhs` is converted to the
    units of `lhs` before comparison.
    """
    if not isinstance(rhs, Quantity):
        return NotImplemented

    if lhs.unit == rhs.unit:
        rhs_value = rhs.value
    else:
        rhs_value = _convert(rhs.unit.get_converter_to(lhs.unit), rhs.value)
    return _binary(op, lhs.value, rhs_value)


def _convert(conv: UnitConverter, value, context: decimal.Context = None):
    """Run the exact path for `Decimal` values, otherwise the float
    path."""
    if isinstance(value, Decimal):
        return conv.convert_exact(value, context)
    return conv.convert_double(value)


# == Registry ==========================================================

_REGISTRY = QuantityRegistry(Quantity)


def get_quantity_registry() -> QuantityRegistry:
    """Returns the process-wide quantity registry."""
    return _REGISTRY


def register_quantity(kind: type, system_unit: Unit,
                      factory: Callable = None):
    """Register `kind` with the process-wide registry.  See
    `QuantityRegistry.register`."""
    _REGISTRY.register(kind, system_unit, factory)


def quantity(value, unit: Unit, kind: type = None) -> Quantity:
    """
    Factory function making a quantity of `value` in `unit`.  If `kind`
    is omitted, the registered kind for `unit` is used (or the generic
    `Quantity` if there is none).

    Examples
    --------
    >>> from pyuom.units import METRE, SECOND
    >>> quantity(10.0, METRE) / quantity(2.0, SECOND)
    Speed(5.0, 'm.s⁻¹')
    """
    return _REGISTRY.create(value, unit, kind)
