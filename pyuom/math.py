"""
Exact rational numbers and root extraction used by the unit converters,
plus small numeric helpers for scalar / array values.

Examples
--------
Rational values stay exact through chains of operations:

>>> ExactRational(1, 3) * 3
ExactRational(1, 1)
>>> ExactRational.from_number(2.54) / 100
ExactRational(127, 5000)

Decimal roots are computed to the precision of the supplied context:

>>> import decimal
>>> nth_root(2, decimal.Decimal(2), decimal.Context(prec=10))
Decimal('1.414213562')
"""
from __future__ import annotations

import decimal
import math
from decimal import Decimal
from fractions import Fraction

import numpy as np
from numpy.typing import ArrayLike

from pyuom._opts import default_context, get_unit_options
from pyuom.exceptions import (ArithmeticDomainError, DivisionByZeroError,
                              IllegalArgumentError, PrecisionError)

__all__ = ['ExactRational', 'nth_root', 'real_root', 'sclvec_asarray',
           'sclvec_return']


# ======================================================================

class ExactRational(Fraction):
    """
    Immutable fraction of two arbitrary-precision integers, always
    stored reduced with the sign on the numerator.  This is a
    `fractions.Fraction` whose arithmetic results remain
    `ExactRational` and whose failures are reported with the errors of
    this package.

    Parameters
    ----------
    numerator : int, Rational, Decimal or str, default = 0
        Numerator (or complete value, if `denominator` is omitted).
    denominator : int or Rational, optional
        Denominator, must be non-zero.

    Raises
    ------
    IllegalArgumentError
        If the denominator is zero or the value cannot be interpreted.
    """
    __slots__ = ()

    def __new__(cls, numerator=0, denominator=None):
        try:
            return super().__new__(cls, numerator, denominator)
        except ZeroDivisionError as e:
            raise IllegalArgumentError(
                f"Zero denominator in {numerator}/{denominator}.") from e
        except (TypeError, ValueError, OverflowError) as e:
            raise IllegalArgumentError(
                f"Cannot make a rational number from {numerator!r}.") from e

    @classmethod
    def from_number(cls, x) -> ExactRational:
        """
        Make an exact rational from any real number.  Floats are taken
        at their shortest decimal representation (e.g. ``2.54`` gives
        ``127/50``) rather than their binary expansion.
        """
        if isinstance(x, cls):
            return x
        if isinstance(x, bool):
            raise IllegalArgumentError(f"Cannot use boolean {x} as a number.")
        if isinstance(x, float):
            return cls(repr(x))
        return cls(x)

    # -- Unary / Binary Operators --------------------------------------

    def __add__(self, other):
        return _wrap(Fraction.__add__(self, other))

    def __radd__(self, other):
        return _wrap(Fraction.__radd__(self, other))

    def __sub__(self, other):
        return _wrap(Fraction.__sub__(self, other))

    def __rsub__(self, other):
        return _wrap(Fraction.__rsub__(self, other))

    def __mul__(self, other):
        return _wrap(Fraction.__mul__(self, other))

    def __rmul__(self, other):
        return _wrap(Fraction.__rmul__(self, other))

    def __truediv__(self, other):
        if other == 0:
            raise DivisionByZeroError(f"Division of {self} by zero.")
        return _wrap(Fraction.__truediv__(self, other))

    def __rtruediv__(self, other):
        if self == 0:
            raise DivisionByZeroError(f"Division of {other} by zero.")
        return _wrap(Fraction.__rtruediv__(self, other))

    def __pow__(self, other, modulo=None):
        if modulo is not None:
            return NotImplemented
        if self == 0 and other < 0:
            raise DivisionByZeroError("Zero raised to a negative power.")
        return _wrap(Fraction.__pow__(self, other))

    def __neg__(self):
        return ExactRational(-self.numerator, self.denominator)

    def __pos__(self):
        return self

    def __abs__(self):
        return ExactRational(abs(self.numerator), self.denominator)

    # -- Named Operations ----------------------------------------------

    def add(self, other) -> ExactRational:
        return self + ExactRational.from_number(other)

    def subtract(self, other) -> ExactRational:
        return self - ExactRational.from_number(other)

    def multiply(self, other) -> ExactRational:
        return self * ExactRational.from_number(other)

    def divide(self, other) -> ExactRational:
        return self / ExactRational.from_number(other)

    def negate(self) -> ExactRational:
        return -self

    def invert(self) -> ExactRational:
        """Returns ``1 / self``."""
        return 1 / self

    def pow(self, n: int) -> ExactRational:
        """Raise to integer power `n` (which may be negative)."""
        if not isinstance(n, int) or isinstance(n, bool):
            raise IllegalArgumentError(
                f"Exact rational power requires an integer, got {n!r}.")
        return self ** n

    def nth_root(self, n: int) -> ExactRational | None:
        """
        Returns the exact real `n`-th root if both the numerator and
        denominator are perfect `n`-th powers, otherwise ``None``.  Odd
        roots of negative values are negative; even roots of negative
        values give ``None``.
        """
        if n < 1:
            raise IllegalArgumentError(f"Root index must be >= 1, got {n}.")
        sign = 1
        p, q = self.numerator, self.denominator
        if p < 0:
            if n % 2 == 0:
                return None
            sign, p = -1, -p

        rp, rq = _integer_root(p, n), _integer_root(q, n)
        if rp ** n != p or rq ** n != q:
            return None
        return ExactRational(sign * rp, rq)

    # -- Conversion ----------------------------------------------------

    def to_decimal(self, context: decimal.Context = None) -> Decimal:
        """
        Returns the value as a `Decimal` rounded according to `context`
        (default: see `pyuom.default_context`).
        """
        context = context or default_context()
        return context.divide(Decimal(self.numerator),
                              Decimal(self.denominator))

    def to_double(self) -> float:
        return float(self)

    def __repr__(self):
        return f"ExactRational({self.numerator}, {self.denominator})"


def _wrap(result):
    """Promote plain `Fraction` results to `ExactRational`."""
    if isinstance(result, Fraction) and not isinstance(result,
                                                       ExactRational):
        return ExactRational(result.numerator, result.denominator)
    return result


def _integer_root(k: int, n: int) -> int:
    """Floor of the `n`-th root of non-negative integer `k`."""
    if k < 2:
        return k
    x = 1 << -(-k.bit_length() // n)  # Always >= the root.
    while True:
        y = ((n - 1) * x + k // x ** (n - 1)) // n
        if y >= x:
            return x
        x = y


# ======================================================================

def nth_root(n: int, value, context: decimal.Context = None) -> Decimal:
    """
    Compute the real `n`-th root of a decimal value to the precision of
    `context` using Newton-Raphson iteration.

    Parameters
    ----------
    n : int
        Root index, ``n >= 1``.
    value : Decimal or int
        Value to take the root of.
    context : decimal.Context, optional
        Precision and rounding of the result.  If omitted the current
        default context is used (see `set_unit_options`).

    Returns
    -------
    result : Decimal
        Root rounded to ``context.prec`` significant digits.

    Raises
    ------
    IllegalArgumentError
        If ``n <= 0``.
    ArithmeticDomainError
        If `value` is negative and `n` is even.
    PrecisionError
        If the iteration does not settle within
        ``root_max_iterations`` steps.

    Notes
    -----
    - The iteration is seeded from a floating-point estimate and
      refined using ``x' = ((n - 1) x + v / x^(n - 1)) / n`` carried out
      with two guard digits.
    - Values that are exact `n`-th powers of a rational number return
      the exact root directly.
    """
    if not isinstance(n, int) or n <= 0:
        raise IllegalArgumentError(f"Root index must be a positive "
                                   f"integer, got {n!r}.")
    context = context or default_context()
    value = Decimal(value)
    if n == 1:
        return context.plus(value)
    if value.is_zero():
        return Decimal(0)
    if value < 0:
        if n % 2 == 0:
            raise ArithmeticDomainError(
                f"Even root (n = {n}) of negative value {value}.")
        return -nth_root(n, -value, context)

    exact = ExactRational(value).nth_root(n)
    if exact is not None:
        return exact.to_decimal(context)

    work = decimal.Context(prec=context.prec + 2,
                           rounding=decimal.ROUND_HALF_EVEN)
    tol = Decimal(1).scaleb(-context.prec)
    max_its = get_unit_options().root_max_iterations
    with decimal.localcontext(work):
        x = _root_seed(n, value)
        for _ in range(max_its):
            x_new = ((n - 1) * x + value / x ** (n - 1)) / n
            if x_new == x or abs(x_new - x) <= tol * x_new:
                return context.plus(x_new)
            x = x_new

    raise PrecisionError(f"Root (n = {n}) of {value} did not converge.",
                         iterations=max_its, last=x)


def _root_seed(n: int, value: Decimal) -> Decimal:
    """Floating point starting estimate for `nth_root`."""
    try:
        x = float(value)
        seed = math.sqrt(x) if n == 2 else x ** (1 / n)
    except OverflowError:
        seed = math.inf
    if 0.0 < seed < math.inf:
        return Decimal(repr(seed))

    # Outside float range: use the decimal exponent only.
    return Decimal(1).scaleb((value.adjusted() + 1) // n)


def real_root(n: int, x: ArrayLike) -> ArrayLike:
    """
    Floating point real `n`-th root of a scalar or array.  Odd roots of
    negative values are negative.

    Raises
    ------
    ArithmeticDomainError
        If `n` is even and any value is negative.
    """
    if not isinstance(n, int) or n <= 0:
        raise IllegalArgumentError(f"Root index must be a positive "
                                   f"integer, got {n!r}.")
    xa, scalar = sclvec_asarray(x, dtype=float)
    if n % 2 == 0 and np.any(xa < 0):
        raise ArithmeticDomainError(f"Even root (n = {n}) of negative "
                                    f"value.")
    if n == 2:
        res = np.sqrt(xa)
    else:
        res = np.sign(xa) * np.abs(xa) ** (1 / n)
    return sclvec_return(res, scalar)


# ----------------------------------------------------------------------

def sclvec_asarray(x: ArrayLike, *args, **kwargs) -> tuple[np.ndarray, bool]:
    """
    Convenience function to prepare a numpy array from a scalar or vector
    argument, as well as `True` if it is a scalar (or `False` otherwise).
    Equivalent to::

        res = np.asarray(x, *args, **kwargs)
        return res, res.ndim == 0
    """
    res = np.asarray(x, *args, **kwargs)
    return res, res.ndim == 0


def sclvec_return(x: np.ndarray, scalar: bool) -> ArrayLike:
    """If ``scalar == True``, returns ``float(x)``, otherwise returns `x`
    unchanged.
    """
    return float(x.squeeze()[()]) if scalar else x
