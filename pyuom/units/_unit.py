"""
Unit model: base, alternate, transformed and product units.

Every unit has a `dimension`, a `system_unit` (the canonical unit of its
measurement branch) and a `system_converter` taking values in the unit
to values in the system unit.  Conversion between two units is only
possible when they share a system unit; equal dimensions are not enough.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from fractions import Fraction
from functools import cached_property
import threading
import warnings

from pyuom._opts import get_unit_options
from pyuom.converters import (IDENTITY, UnitConverter, power, root,
                              scale, shift)
from pyuom.dimension import Dimension
from pyuom.exceptions import (IllegalArgumentError,
                              IllegalConfigurationError,
                              IncommensurableUnitsError,
                              NonIntegralExponentError,
                              UnsupportedOperationError)
from pyuom.util import power_label

__all__ = ['Unit', 'BaseUnit', 'AlternateUnit', 'TransformedUnit',
           'ProductUnit', 'ONE']

# Cached unit-to-unit converters, keyed by (from, to).
_CONVERSION_CACHE: dict[tuple[Unit, Unit], UnitConverter] = {}
_CONVERSION_LOCK = threading.Lock()


# ======================================================================

class Unit(ABC):
    """
    Abstract base of all units.  Units are immutable.  Equality is
    structural within each kind of unit (see the individual classes);
    it does not consider units of different kinds with the same effect
    to be equal.
    """

    # -- Abstract Properties -------------------------------------------

    @property
    @abstractmethod
    def dimension(self) -> Dimension:
        raise NotImplementedError

    @property
    @abstractmethod
    def symbol(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def system_converter(self) -> UnitConverter:
        """Converter from this unit to `system_unit`."""
        raise NotImplementedError

    @property
    @abstractmethod
    def system_unit(self) -> Unit:
        raise NotImplementedError

    @abstractmethod
    def _key(self) -> tuple:
        """Values that determine equality within the class."""
        raise NotImplementedError

    # -- Properties ----------------------------------------------------

    @property
    def name(self) -> str | None:
        return None

    @property
    def prefix(self):
        """Prefix used to build the unit (if any)."""
        return None

    def is_system_unit(self) -> bool:
        return self.system_unit == self

    # -- Conversion ----------------------------------------------------

    def is_compatible(self, other: Unit) -> bool:
        """
        Returns ``True`` if `other` has the same dimension.  Compatible
        units are not necessarily convertible; see `get_converter_to`.
        """
        return self.dimension == other.dimension

    def get_converter_to(self, other: Unit) -> UnitConverter:
        """
        Returns the converter taking values in this unit to values in
        `other`.

        Raises
        ------
        IncommensurableUnitsError
            If the units do not share the same system unit.  This
            applies even if the dimensions are equal (e.g. ``Hz`` and
            ``Bq``).
        """
        if self == other:
            return IDENTITY

        opts = get_unit_options()
        if opts.cache_conversions:
            try:
                return _CONVERSION_CACHE[self, other]
            except KeyError:
                pass

        this_sys, that_sys = self.system_unit, other.system_unit
        if this_sys != that_sys:
            raise IncommensurableUnitsError(
                f"Cannot convert '{self}' -> '{other}'.",
                details=f"System units '{this_sys}' and '{that_sys}' "
                        f"differ (dimensions {self.dimension} and "
                        f"{other.dimension}).")

        conv = self.system_converter.and_then(
            other.system_converter.inverse())

        n_steps = len(conv.steps())
        if n_steps > opts.conversion_length_warning:
            warnings.warn(f"Warning: Converting '{self}' -> '{other}' "
                          f"requires {n_steps} steps.")

        if opts.cache_conversions:
            with _CONVERSION_LOCK:
                conv = _CONVERSION_CACHE.setdefault((self, other), conv)
        return conv

    # -- Unit Builders -------------------------------------------------

    def multiply(self, other: Unit | float) -> Unit:
        """
        Product with another unit, or if `other` is a number, this unit
        scaled by `other` (e.g. ``METRE.multiply(1000)`` is a kilometre).
        """
        if isinstance(other, Unit):
            return ProductUnit.of_product(self, other)
        return TransformedUnit.of(self, scale(other))

    def divide(self, other: Unit | float) -> Unit:
        """Quotient with another unit, or this unit scaled by
        ``1 / other``."""
        if isinstance(other, Unit):
            return ProductUnit.of_quotient(self, other)
        return TransformedUnit.of(self, scale(1, other))

    def shift(self, offset) -> Unit:
        """
        Unit offset from this one, e.g. ``KELVIN.shift(273.15)`` is
        Celsius (0 °C == 273.15 K).
        """
        return TransformedUnit.of(self, shift(offset))

    def pow(self, n: int) -> Unit:
        """Raise to integer power `n`."""
        if isinstance(n, float) and n.is_integer():
            n = int(n)
        if not isinstance(n, int) or isinstance(n, bool):
            raise NonIntegralExponentError(f"Unit power must be an "
                                           f"integer, got {n!r}.")
        return ProductUnit.of_power(self, Fraction(n))

    def root(self, n: int) -> Unit:
        """
        Take the `n`-th root.

        Raises
        ------
        NonIntegralExponentError
            If `n` is not an integer.
        IllegalArgumentError
            If ``n <= 0``.
        """
        if isinstance(n, float) and n.is_integer():
            n = int(n)
        if not isinstance(n, int) or isinstance(n, bool):
            raise NonIntegralExponentError(f"Unit root must be an "
                                           f"integer, got {n!r}.")
        if n <= 0:
            raise IllegalArgumentError(f"Unit root must be > 0, got {n}.")
        return ProductUnit.of_power(self, Fraction(1, n))

    def inverse(self) -> Unit:
        return ProductUnit.of_power(self, Fraction(-1))

    def with_prefix(self, prefix) -> Unit:
        """
        Unit scaled by `prefix` (a `MetricPrefix` or `BinaryPrefix`).
        Prefixes accumulate, so ``METRE.multiply(100).with_prefix(KILO)``
        converts to metres with a factor of 100,000.
        """
        name = None if self.name is None else prefix.prefix_name + self.name
        return TransformedUnit.of(self, prefix.converter,
                                  symbol=prefix.symbol + self.symbol,
                                  name=name, prefix=prefix)

    def with_symbol(self, symbol: str) -> Unit:
        raise UnsupportedOperationError(
            f"Cannot change the symbol of {type(self).__name__}.")

    def with_name(self, name: str) -> Unit:
        raise UnsupportedOperationError(
            f"Cannot change the name of {type(self).__name__}.")

    # -- Operators -----------------------------------------------------

    def __mul__(self, other: Unit) -> Unit:
        if not isinstance(other, Unit):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: Unit) -> Unit:
        if not isinstance(other, Unit):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, lhs) -> Unit:
        if lhs != 1:
            return NotImplemented
        return self.inverse()

    def __pow__(self, n) -> Unit:
        if isinstance(n, Fraction):
            return ProductUnit.of_power(self, n)
        return self.pow(n)

    # -- Comparison / Hashing ------------------------------------------

    def __eq__(self, other):
        if self is other:
            return True
        if type(self) is not type(other):
            return False
        return self._key() == other._key()

    def __hash__(self):
        return hash((type(self), self._key()))

    # -- String Magic Methods ------------------------------------------

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"

    def __str__(self):
        return self.symbol


# ----------------------------------------------------------------------

class BaseUnit(Unit):
    """
    Fundamental unit of a base dimension, e.g. the metre.  A base unit
    is its own system unit; two base units are equal if they have the
    same symbol and dimension.
    """

    def __init__(self, symbol: str, dimension: Dimension,
                 name: str = None):
        if not symbol:
            raise IllegalArgumentError("Base unit requires a symbol.")
        self._symbol, self._dimension, self._name = symbol, dimension, name

    @property
    def dimension(self) -> Dimension:
        return self._dimension

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def system_converter(self) -> UnitConverter:
        return IDENTITY

    @property
    def system_unit(self) -> Unit:
        return self

    def with_name(self, name: str) -> Unit:
        return BaseUnit(self._symbol, self._dimension, name)

    def _key(self) -> tuple:
        return self._symbol, self._dimension


class AlternateUnit(Unit):
    """
    A new system unit with the same dimension as `parent`, e.g. the
    hertz (``1/s``) or the radian (dimensionless).  Although compatible
    with `parent` and any other unit of the same dimension, it is only
    convertible to units that are derived from it.

    Parameters
    ----------
    parent : Unit
        The system unit giving the dimension.
    symbol : str
        Symbol for the new unit.  Alternate units are equal if they have
        the same symbol and parent.
    name : str, optional
        Descriptive name.

    Raises
    ------
    IllegalArgumentError
        If `parent` is not a system unit.
    """

    def __init__(self, parent: Unit, symbol: str, name: str = None):
        if not parent.is_system_unit():
            raise IllegalArgumentError(
                f"Alternate unit '{symbol}' requires a system unit as its "
                f"parent, got '{parent}'.")
        if not symbol:
            raise IllegalArgumentError("Alternate unit requires a symbol.")
        self._parent, self._symbol, self._name = parent, symbol, name

    @property
    def dimension(self) -> Dimension:
        return self._parent.dimension

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def parent(self) -> Unit:
        return self._parent

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def system_converter(self) -> UnitConverter:
        return IDENTITY

    @property
    def system_unit(self) -> Unit:
        return self

    def with_name(self, name: str) -> Unit:
        return AlternateUnit(self._parent, self._symbol, name)

    def with_symbol(self, symbol: str) -> Unit:
        """New alternate unit (i.e. a distinct system unit) with the
        given symbol."""
        return AlternateUnit(self._parent, symbol, self._name)

    def _key(self) -> tuple:
        return self._symbol, self._parent


class TransformedUnit(Unit):
    """
    Unit derived from a `parent` unit by a converter, e.g. the
    kilometre (scale of 1000 from the metre) or degree Celsius (offset
    of 273.15 from the kelvin).  Use `TransformedUnit.of` to construct.

    Transformed units share the dimension and system unit of their
    parent, and are equal when they have the same parent and converter.
    """

    def __init__(self, parent: Unit, converter: UnitConverter,
                 symbol: str = None, name: str = None, prefix=None):
        self._parent, self._converter = parent, converter
        self._symbol, self._name, self._prefix = symbol, name, prefix

    @classmethod
    def of(cls, parent: Unit, converter: UnitConverter,
           symbol: str = None, name: str = None, prefix=None) -> Unit:
        """
        Make a unit whose values convert to `parent` values using
        `converter`.

        An identity `converter` returns `parent` itself.  Otherwise
        transforms of transformed units are flattened onto the
        underlying parent, and if the combined converter is the
        identity that underlying parent is returned.

        Examples
        --------
        >>> from pyuom.units import METRE
        >>> cm = TransformedUnit.of(METRE, scale(1, 100), symbol='cm')
        >>> cm.system_converter
        ScaleConverter(factor=ExactRational(1, 100))
        >>> TransformedUnit.of(cm, IDENTITY) is cm
        True
        >>> TransformedUnit.of(cm, scale(100)) is METRE
        True
        """
        if converter.is_identity():
            return parent

        if isinstance(parent, TransformedUnit):
            converter = converter.and_then(parent.parent_converter)
            parent = parent.parent

        if converter.is_identity():
            return parent
        return cls(parent, converter, symbol, name, prefix)

    # -- Properties ----------------------------------------------------

    @property
    def dimension(self) -> Dimension:
        return self._parent.dimension

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def parent(self) -> Unit:
        return self._parent

    @property
    def parent_converter(self) -> UnitConverter:
        """Converter from this unit to `parent`."""
        return self._converter

    @property
    def prefix(self):
        return self._prefix

    @property
    def symbol(self) -> str:
        if self._symbol is not None:
            return self._symbol
        return f'[{self._converter.describe(self._parent.symbol)}]'

    @property
    def system_converter(self) -> UnitConverter:
        return self._converter.and_then(self._parent.system_converter)

    @property
    def system_unit(self) -> Unit:
        return self._parent.system_unit

    # -- Methods -------------------------------------------------------

    def with_name(self, name: str) -> Unit:
        return TransformedUnit(self._parent, self._converter, self._symbol,
                               name, self._prefix)

    def with_symbol(self, symbol: str) -> Unit:
        return TransformedUnit(self._parent, self._converter, symbol,
                               self._name, self._prefix)

    def _key(self) -> tuple:
        return self._parent, self._converter


# ----------------------------------------------------------------------

_PRODUCTS: dict[tuple, ProductUnit] = {}
_PRODUCTS_LOCK = threading.Lock()


class ProductUnit(Unit):
    """
    Unit formed from a product of other units raised to rational powers,
    e.g. ``m.s⁻¹``.  Elements are kept sorted by symbol with equal units
    merged, so products of the same units compare equal regardless of
    the order they were built in.  Use `of_product`, `of_quotient`,
    `of_power` or the `Unit` arithmetic methods to construct.

    Units with an offset (e.g. °C) cannot take part in a product.
    """

    def __init__(self, elements: tuple[tuple[Unit, Fraction], ...]):
        self._elements = tuple(elements)

    # -- Construction --------------------------------------------------

    @classmethod
    def of_product(cls, lhs: Unit, rhs: Unit) -> Unit:
        return cls._of_elements(_elements_of(lhs) + _elements_of(rhs))

    @classmethod
    def of_quotient(cls, lhs: Unit, rhs: Unit) -> Unit:
        return cls._of_elements(
            _elements_of(lhs) + _elements_of(rhs, Fraction(-1)))

    @classmethod
    def of_power(cls, unit: Unit, pwr: Fraction) -> Unit:
        return cls._of_elements(_elements_of(unit, Fraction(pwr)))

    @classmethod
    def _of_elements(cls, elements) -> Unit:
        merged = {}
        for unit, pwr in elements:
            merged[unit] = merged.get(unit, 0) + pwr

        items = sorted(((u, p) for u, p in merged.items() if p != 0),
                       key=lambda x: x[0].symbol)
        if not items:
            return ONE
        if len(items) == 1 and items[0][1] == 1:
            return items[0][0]

        for unit, _ in items:
            if not unit.system_converter.is_linear():
                raise IllegalConfigurationError(
                    f"Unit '{unit}' has an offset and cannot be used in "
                    f"a product unit.")

        key = tuple(items)
        if not get_unit_options().cache_made_units:
            return cls(key)
        with _PRODUCTS_LOCK:
            try:
                return _PRODUCTS[key]
            except KeyError:
                return _PRODUCTS.setdefault(key, cls(key))

    # -- Properties ----------------------------------------------------

    @cached_property
    def dimension(self) -> Dimension:
        dim = Dimension.NONE
        for unit, pwr in self._elements:
            dim *= unit.dimension.pow(pwr)
        return dim

    @property
    def elements(self) -> tuple[tuple[Unit, Fraction], ...]:
        """``(unit, exponent)`` pairs making up the product."""
        return self._elements

    @property
    def symbol(self) -> str:
        return '.'.join(power_label(unit.symbol, pwr)
                        for unit, pwr in self._elements)

    @cached_property
    def system_converter(self) -> UnitConverter:
        conv = IDENTITY
        for unit, pwr in self._elements:
            conv = conv.and_then(_power_converter(unit.system_converter,
                                                  pwr))
        return conv

    @cached_property
    def system_unit(self) -> Unit:
        if all(unit.is_system_unit() for unit, _ in self._elements):
            return self
        return ProductUnit._of_elements(
            (unit.system_unit, pwr) for unit, pwr in self._elements)

    def _key(self) -> tuple:
        return self._elements


def _elements_of(unit: Unit, pwr: Fraction = Fraction(1)):
    """Elements of `unit` (itself, unless a product) scaled by `pwr`."""
    if isinstance(unit, ProductUnit):
        return [(u, p * pwr) for u, p in unit.elements]
    return [(unit, pwr)]


def _power_converter(conv: UnitConverter, pwr: Fraction) -> UnitConverter:
    """Converter for a unit raised to rational power `pwr`."""
    num, den = pwr.numerator, pwr.denominator
    if num < 0:
        conv, num = conv.inverse(), -num
    conv = power(conv, num)
    if den != 1:
        conv = root(conv, den)
    return conv


ONE = ProductUnit(())
"""The dimensionless unit (empty product)."""

_PRODUCTS[()] = ONE

