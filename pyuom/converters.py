"""
Unit converters: composable transformations taking a value expressed in
one unit to the equivalent value in another.

Every converter can be evaluated two ways:

- ``convert_double(x)`` for fast floating point work (scalars or numpy
  arrays).
- ``convert_exact(x, context)`` for `decimal.Decimal` values, rounded
  according to a caller-supplied `decimal.Context`.

Converters should normally be made using the factory functions
`identity`, `scale`, `shift`, `compose`, `root` and `power`, which
simplify the result where possible.

Examples
--------
Scales fuse together exactly:

>>> km_to_mm = scale(1000).and_then(scale(1000))
>>> km_to_mm
ScaleConverter(factor=ExactRational(1000000, 1))
>>> km_to_mm.convert_double(1.5)
1500000.0

Offsets are not linear:

>>> c_to_k = shift('273.15')
>>> c_to_k.is_linear()
False
>>> c_to_k.convert_double(0.0)
273.15
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import decimal
from decimal import Decimal
import math
import threading

from numpy.typing import ArrayLike

from pyuom._opts import default_context, get_unit_options
from pyuom.exceptions import (ArithmeticDomainError, IllegalArgumentError,
                              IllegalConfigurationError,
                              UnsupportedOperationError)
from pyuom.math import ExactRational, nth_root

__all__ = ['UnitConverter', 'IdentityConverter', 'ScaleConverter',
           'ShiftConverter', 'CompositeConverter', 'RootConverter',
           'PowerConverter', 'IDENTITY', 'identity', 'scale', 'shift',
           'compose', 'root', 'power']


# ======================================================================

class UnitConverter(ABC):
    """
    Abstract base of all converters.  Converters are immutable and
    compare structurally, so equal chains can be used interchangeably as
    dictionary keys.
    """

    # -- Abstract Methods ----------------------------------------------

    @abstractmethod
    def convert_double(self, x: ArrayLike) -> ArrayLike:
        """Convert a float (or array of floats)."""
        raise NotImplementedError

    @abstractmethod
    def convert_exact(self, x: Decimal,
                      context: decimal.Context = None) -> Decimal:
        """
        Convert a `Decimal` value, rounding according to `context`
        (default given by `pyuom.default_context`).
        """
        raise NotImplementedError

    @abstractmethod
    def describe(self, operand: str) -> str:
        """
        Symbolic rendering of this converter applied to `operand`, e.g.
        ``'1000·m'`` or ``'K + 273.15'``.
        """
        raise NotImplementedError

    @abstractmethod
    def inverse(self) -> UnitConverter:
        raise NotImplementedError

    @abstractmethod
    def is_linear(self) -> bool:
        """
        Returns ``True`` if ``convert(a·x + b·y) == a·convert(x) +
        b·convert(y)``, i.e. the converter is a pure scaling.
        """
        raise NotImplementedError

    # -- Composition ---------------------------------------------------

    def and_then(self, after: UnitConverter) -> UnitConverter:
        """Converter applying `self` first, then `after`."""
        return compose(self, after)

    def compose_before(self, other: UnitConverter) -> UnitConverter:
        """Same as `and_then`."""
        return compose(self, other)

    def compose_after(self, other: UnitConverter) -> UnitConverter:
        """Converter applying `other` first, then `self`."""
        return compose(other, self)

    def is_identity(self) -> bool:
        return False

    def steps(self) -> tuple[UnitConverter, ...]:
        """Primitive (non-composite) converters applied in order."""
        return (self,)

    # -- Linear Accessors ----------------------------------------------

    def scale(self) -> float:
        """
        Floating point scale factor, equal to ``convert_double(1.0)``.

        Raises
        ------
        UnsupportedOperationError
            If the converter is not linear.
        """
        self._check_linear('scale')
        return self.convert_double(1.0)

    def scale_as_rational(self) -> ExactRational:
        """
        Scale factor as an `ExactRational`.  Converters that are not a
        product of rational scales (e.g. roots) give the rational value of
        the default-precision decimal result.
        """
        self._check_linear('scale_as_rational')
        return ExactRational(self.convert_exact(Decimal(1)))

    def scale_exact(self, context: decimal.Context = None) -> Decimal:
        """Scale factor as a `Decimal` rounded according to `context`."""
        self._check_linear('scale_exact')
        return self.convert_exact(Decimal(1), context)

    def _check_linear(self, op: str):
        if not self.is_linear():
            raise UnsupportedOperationError(
                f"'{op}' requires a linear converter, got {self!r}.")


# ----------------------------------------------------------------------

@dataclass(frozen=True)
class IdentityConverter(UnitConverter):
    """Leaves values unchanged.  Use the `IDENTITY` instance."""

    def convert_double(self, x):
        return x

    def convert_exact(self, x, context=None):
        return (context or default_context()).plus(Decimal(x))

    def describe(self, operand: str) -> str:
        return operand

    def inverse(self) -> UnitConverter:
        return self

    def is_identity(self) -> bool:
        return True

    def is_linear(self) -> bool:
        return True

    def scale_as_rational(self) -> ExactRational:
        return ExactRational(1)

    def steps(self) -> tuple[UnitConverter, ...]:
        return ()


IDENTITY = IdentityConverter()


@dataclass(frozen=True)
class ScaleConverter(UnitConverter):
    """
    Multiplies values by an exact rational `factor`.  The exact path
    multiplies exactly and rounds once.
    """
    factor: ExactRational
    _factor_flt: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        factor = ExactRational.from_number(self.factor)
        if factor == 0:
            raise IllegalArgumentError("Scale factor cannot be zero.")
        object.__setattr__(self, 'factor', factor)
        object.__setattr__(self, '_factor_flt', float(factor))

    def convert_double(self, x):
        return x * self._factor_flt

    def convert_exact(self, x, context=None):
        return (ExactRational(Decimal(x)) * self.factor).to_decimal(context)

    def describe(self, operand: str) -> str:
        if self.factor.denominator == 1:
            return f'{self.factor}·{operand}'
        return f'({self.factor})·{operand}'

    def inverse(self) -> UnitConverter:
        return ScaleConverter(1 / self.factor)

    def is_linear(self) -> bool:
        return True

    def scale_as_rational(self) -> ExactRational:
        return self.factor


@dataclass(frozen=True)
class ShiftConverter(UnitConverter):
    """Adds a decimal `offset` to values."""
    offset: Decimal
    _offset_flt: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        offset = _as_decimal(self.offset)
        object.__setattr__(self, 'offset', offset)
        object.__setattr__(self, '_offset_flt', float(offset))

    def convert_double(self, x):
        return x + self._offset_flt

    def convert_exact(self, x, context=None):
        return (context or default_context()).add(Decimal(x), self.offset)

    def describe(self, operand: str) -> str:
        if self.offset < 0:
            return f'{operand} - {-self.offset}'
        return f'{operand} + {self.offset}'

    def inverse(self) -> UnitConverter:
        return ShiftConverter(-self.offset)

    def is_linear(self) -> bool:
        return self.offset == 0

    def scale_as_rational(self) -> ExactRational:
        self._check_linear('scale_as_rational')
        return ExactRational(1)


@dataclass(frozen=True)
class CompositeConverter(UnitConverter):
    """Applies `first`, then `second`."""
    first: UnitConverter
    second: UnitConverter

    def convert_double(self, x):
        return self.second.convert_double(self.first.convert_double(x))

    def convert_exact(self, x, context=None):
        context = context or default_context()
        return self.second.convert_exact(
            self.first.convert_exact(x, context), context)

    def describe(self, operand: str) -> str:
        return self.second.describe(self.first.describe(operand))

    def inverse(self) -> UnitConverter:
        return compose(self.second.inverse(), self.first.inverse())

    def is_linear(self) -> bool:
        return self.first.is_linear() and self.second.is_linear()

    def scale_as_rational(self) -> ExactRational:
        self._check_linear('scale_as_rational')
        return (self.first.scale_as_rational() *
                self.second.scale_as_rational())

    def steps(self) -> tuple[UnitConverter, ...]:
        return self.first.steps() + self.second.steps()


@dataclass(frozen=True)
class RootConverter(UnitConverter):
    """
    Multiplies values by the `n`-th root of the scale of a linear
    `inner` converter.  This arises from units raised to fractional
    powers, e.g. ``km^(1/2)``.

    The floating point multiplier is computed once on construction.  The
    exact path recomputes the root on each call because its precision
    is chosen by the caller.

    Raises
    ------
    IllegalArgumentError
        If ``n <= 0``.
    IllegalConfigurationError
        If `inner` is not linear.
    ArithmeticDomainError
        If `n` is even and the scale of `inner` is negative.
    """
    inner: UnitConverter
    n: int
    _multiplier: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        _check_index(self.n, 'Root')
        if not self.inner.is_linear():
            raise IllegalConfigurationError(
                f"Root of a non-linear converter: {self.inner!r}.")
        k = self.inner.scale()
        if k < 0 and self.n % 2 == 0:
            raise ArithmeticDomainError(
                f"Even root (n = {self.n}) of negative scale {k}.")
        if self.n == 2:
            mult = math.sqrt(k)
        else:
            mult = math.copysign(abs(k) ** (1 / self.n), k)
        object.__setattr__(self, '_multiplier', mult)

    def convert_double(self, x):
        return x * self._multiplier

    def convert_exact(self, x, context=None):
        context = context or default_context()
        rooted = nth_root(self.n, self.inner.scale_exact(context), context)
        return context.multiply(Decimal(x), rooted)

    def describe(self, operand: str) -> str:
        return f"{self.inner.scale():g}^(1/{self.n})·{operand}"

    def inverse(self) -> UnitConverter:
        return RootConverter(self.inner.inverse(), self.n)

    def is_linear(self) -> bool:
        return True


@dataclass(frozen=True)
class PowerConverter(UnitConverter):
    """
    Multiplies values by the scale of a linear `inner` converter raised
    to integer power ``n >= 1``.

    Raises
    ------
    IllegalArgumentError
        If ``n <= 0``.
    IllegalConfigurationError
        If `inner` is not linear.
    """
    inner: UnitConverter
    n: int
    _multiplier: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        _check_index(self.n, 'Power')
        if not self.inner.is_linear():
            raise IllegalConfigurationError(
                f"Power of a non-linear converter: {self.inner!r}.")
        object.__setattr__(self, '_multiplier',
                           self.inner.scale() ** self.n)

    def convert_double(self, x):
        return x * self._multiplier

    def convert_exact(self, x, context=None):
        k = _rational_scale(self.inner)
        if k is not None:
            return (ExactRational(Decimal(x)) * k ** self.n).to_decimal(
                context)

        context = context or default_context()
        k = self.inner.scale_exact(context)
        return context.multiply(Decimal(x), context.power(k, self.n))

    def describe(self, operand: str) -> str:
        return f"{self.inner.scale():g}^{self.n}·{operand}"

    def inverse(self) -> UnitConverter:
        return PowerConverter(self.inner.inverse(), self.n)

    def is_linear(self) -> bool:
        return True

    def scale_as_rational(self) -> ExactRational:
        return self.inner.scale_as_rational() ** self.n


def _as_decimal(x) -> Decimal:
    """Exact `Decimal` from a number or string (floats via `repr`)."""
    if isinstance(x, Decimal):
        return x
    if isinstance(x, bool):
        raise IllegalArgumentError(f"Cannot use boolean {x} as a number.")
    if isinstance(x, float):
        x = repr(x)
    elif not isinstance(x, (int, str)):
        x = ExactRational.from_number(x).to_decimal()
    try:
        res = Decimal(x)
    except decimal.InvalidOperation as e:
        raise IllegalArgumentError(f"Invalid decimal value {x!r}.") from e
    if not res.is_finite():
        raise IllegalArgumentError(f"Non-finite decimal value {x!r}.")
    return res


def _rational_scale(c: UnitConverter) -> ExactRational | None:
    """Exact scale of `c` if it is built only from rational scales,
    otherwise ``None``."""
    if isinstance(c, IdentityConverter):
        return ExactRational(1)
    if isinstance(c, ScaleConverter):
        return c.factor
    if isinstance(c, PowerConverter):
        k = _rational_scale(c.inner)
        return None if k is None else k ** c.n
    if isinstance(c, CompositeConverter):
        k1, k2 = _rational_scale(c.first), _rational_scale(c.second)
        if k1 is None or k2 is None:
            return None
        return k1 * k2
    return None


def _check_index(n, what: str):
    if not isinstance(n, int) or isinstance(n, bool):
        raise IllegalArgumentError(f"{what} index must be an integer, got "
                                   f"{n!r}.")
    if n <= 0:
        raise IllegalArgumentError(f"{what} index must be > 0, got {n}.")


# == Factory Functions =================================================

_CONVERTERS: dict[UnitConverter, UnitConverter] = {}
_CONVERTERS_LOCK = threading.Lock()


def _intern(c: UnitConverter) -> UnitConverter:
    """
    Return the canonical instance equal to `c`.  If two threads intern
    equal converters concurrently both receive the same object.
    """
    if not get_unit_options().cache_conversions:
        return c
    with _CONVERTERS_LOCK:
        return _CONVERTERS.setdefault(c, c)


def identity() -> UnitConverter:
    return IDENTITY


def scale(p, q=1) -> UnitConverter:
    """
    Converter multiplying by ``p / q``.  `p` and `q` may be any real
    numbers (floats are taken at their shortest decimal representation).
    A unity factor gives the identity converter.

    Raises
    ------
    IllegalArgumentError
        If `p` or `q` is zero.
    """
    den = ExactRational.from_number(q)
    if den == 0:
        raise IllegalArgumentError(f"Zero denominator in scale {p}/{q}.")
    factor = ExactRational.from_number(p) / den
    if factor == 1:
        return IDENTITY
    return _intern(ScaleConverter(factor))


def shift(offset) -> UnitConverter:
    """Converter adding `offset`.  A zero offset gives the identity."""
    offset = _as_decimal(offset)
    if offset == 0:
        return IDENTITY
    return _intern(ShiftConverter(offset))


def compose(first: UnitConverter, second: UnitConverter) -> UnitConverter:
    """
    Converter applying `first` then `second`, simplified where possible:

    - Identity operands are dropped.
    - Adjacent scales multiply, adjacent shifts add.
    - Roots (or powers) with the same index merge their inner
      converters.

    Simplification looks through nested composites so that chains do
    not grow when an adjacent pair can be fused.
    """
    if first.is_identity():
        return second
    if second.is_identity():
        return first

    fused = _fuse(first, second)
    if fused is not None:
        return fused

    if isinstance(first, CompositeConverter):
        fused = _fuse(first.second, second)
        if fused is not None:
            return compose(first.first, fused)

    if isinstance(second, CompositeConverter):
        fused = _fuse(first, second.first)
        if fused is not None:
            return compose(fused, second.second)

    return _intern(CompositeConverter(first, second))


def _fuse(a: UnitConverter, b: UnitConverter) -> UnitConverter | None:
    """Single converter equivalent to `a` then `b`, or ``None``."""
    if isinstance(a, ScaleConverter) and isinstance(b, ScaleConverter):
        return scale(a.factor * b.factor)
    if isinstance(a, ShiftConverter) and isinstance(b, ShiftConverter):
        return shift(a.offset + b.offset)
    if (isinstance(a, RootConverter) and isinstance(b, RootConverter) and
            a.n == b.n):
        return root(compose(a.inner, b.inner), a.n)
    if (isinstance(a, PowerConverter) and isinstance(b, PowerConverter) and
            a.n == b.n):
        return power(compose(a.inner, b.inner), a.n)
    return None


def root(inner: UnitConverter, n: int) -> UnitConverter:
    """
    Converter multiplying by the `n`-th root of the scale of linear
    converter `inner`.  Exact rational roots of scales give a plain
    scale converter.

    Raises
    ------
    IllegalArgumentError
        If ``n <= 0``.
    IllegalConfigurationError
        If `inner` is not linear.
    """
    _check_index(n, 'Root')
    if not inner.is_linear():
        raise IllegalConfigurationError(
            f"Root of a non-linear converter: {inner!r}.")
    if n == 1 or inner.is_identity():
        return inner

    if isinstance(inner, ScaleConverter):
        exact = inner.factor.nth_root(n)
        if exact is not None:
            return scale(exact)
    elif isinstance(inner, PowerConverter) and inner.n % n == 0:
        return power(inner.inner, inner.n // n)
    elif isinstance(inner, RootConverter):
        return root(inner.inner, inner.n * n)

    return _intern(RootConverter(inner, n))


def power(inner: UnitConverter, n: int) -> UnitConverter:
    """
    Converter multiplying by the scale of linear converter `inner`
    raised to integer power `n`.  Negative powers use the inverse of
    `inner`, zero gives the identity.

    Raises
    ------
    IllegalArgumentError
        If `n` is not an integer.
    IllegalConfigurationError
        If `inner` is not linear (and ``n != 1``).
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise IllegalArgumentError(f"Power index must be an integer, got "
                                   f"{n!r}.")
    if n == 0:
        return IDENTITY
    if n == 1:
        return inner
    if not inner.is_linear():
        raise IllegalConfigurationError(
            f"Power of a non-linear converter: {inner!r}.")
    if n < 0:
        return power(inner.inverse(), -n)
    if inner.is_identity():
        return inner

    if isinstance(inner, ScaleConverter):
        return scale(inner.factor ** n)
    elif isinstance(inner, PowerConverter):
        return power(inner.inner, inner.n * n)
    elif isinstance(inner, RootConverter) and n % inner.n == 0:
        return power(inner.inner, n // inner.n)

    return _intern(PowerConverter(inner, n))
