"""
Physical dimensions, represented as rational powers of the SI base
dimensions.

Examples
--------
>>> speed = LENGTH / TIME
>>> print(speed)
L.T⁻¹
>>> speed * TIME == LENGTH
True
>>> print((LENGTH ** 2).root(2))
L
>>> print(Dimension.NONE)
1
"""
from __future__ import annotations

from enum import Enum
from fractions import Fraction
from numbers import Rational

from pyuom.exceptions import IllegalArgumentError, NonIntegralExponentError
from pyuom.util import power_label

__all__ = ['BaseDimension', 'Dimension', 'AMOUNT_OF_SUBSTANCE',
           'ELECTRIC_CURRENT', 'LENGTH', 'LUMINOUS_INTENSITY', 'MASS',
           'TEMPERATURE', 'TIME']


# ======================================================================

class BaseDimension(Enum):
    """The SI base dimensions, in the order used for display."""
    MASS = 'M'
    LENGTH = 'L'
    TIME = 'T'
    TEMPERATURE = 'Θ'
    AMOUNT_OF_SUBSTANCE = 'N'
    ELECTRIC_CURRENT = 'I'
    LUMINOUS_INTENSITY = 'J'

    @property
    def symbol(self) -> str:
        return self.value


_BASE_ORDER = {b: i for i, b in enumerate(BaseDimension)}


# ----------------------------------------------------------------------

class Dimension:
    """
    Immutable mapping of base dimensions to rational exponents.  Base
    dimensions with a zero exponent are omitted, so two dimensions are
    equal exactly when their non-zero exponents agree.

    Parameters
    ----------
    exponents : dict[BaseDimension, Rational], optional
        Exponent of each base dimension.  If omitted the result is
        dimensionless.
    """
    __slots__ = ('_exps',)

    NONE: Dimension  # Set after class definition.

    def __init__(self, exponents: dict[BaseDimension, Rational] = None):
        exps = []
        for base, pwr in (exponents or {}).items():
            if not isinstance(base, BaseDimension):
                raise IllegalArgumentError(f"Not a base dimension: "
                                           f"{base!r}.")
            pwr = _as_exponent(pwr)
            if pwr != 0:
                exps.append((base, pwr))
        exps.sort(key=lambda x: _BASE_ORDER[x[0]])
        self._exps = tuple(exps)

    @classmethod
    def of(cls, base: BaseDimension) -> Dimension:
        """Dimension consisting of a single base dimension."""
        return cls({base: 1})

    # -- Properties ----------------------------------------------------

    @property
    def exponents(self) -> dict[BaseDimension, Fraction]:
        """Copy of the non-zero exponents."""
        return dict(self._exps)

    def exponent(self, base: BaseDimension) -> Fraction:
        return dict(self._exps).get(base, Fraction(0))

    def is_dimensionless(self) -> bool:
        return not self._exps

    # -- Algebra -------------------------------------------------------

    def multiply(self, other: Dimension) -> Dimension:
        """Add exponents of `self` and `other`."""
        res = dict(self._exps)
        for base, pwr in other._exps:
            res[base] = res.get(base, 0) + pwr
        return Dimension(res)

    def divide(self, other: Dimension) -> Dimension:
        """Subtract exponents of `other` from `self`."""
        return self.multiply(other.pow(-1))

    def pow(self, n: int | Rational) -> Dimension:
        """Multiply all exponents by `n`."""
        n = _as_exponent(n)
        return Dimension({base: pwr * n for base, pwr in self._exps})

    def root(self, n: int) -> Dimension:
        """
        Divide all exponents by `n`.

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
            raise NonIntegralExponentError(f"Root index must be an "
                                           f"integer, got {n!r}.")
        if n <= 0:
            raise IllegalArgumentError(f"Root index must be > 0, got {n}.")
        return Dimension({base: pwr / n for base, pwr in self._exps})

    def __mul__(self, other: Dimension) -> Dimension:
        if not isinstance(other, Dimension):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: Dimension) -> Dimension:
        if not isinstance(other, Dimension):
            return NotImplemented
        return self.divide(other)

    def __pow__(self, n) -> Dimension:
        return self.pow(n)

    # -- Comparison / Hashing ------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Dimension):
            return NotImplemented
        return self._exps == other._exps

    def __hash__(self):
        return hash(self._exps)

    # -- String Magic Methods ------------------------------------------

    def __repr__(self):
        return f"Dimension('{self}')"

    def __str__(self):
        if not self._exps:
            return '1'
        return '.'.join(power_label(base.symbol, pwr)
                        for base, pwr in self._exps)


def _as_exponent(x) -> Fraction:
    """Convert `x` to a `Fraction` exponent, allowing integral floats."""
    if isinstance(x, float):
        if not x.is_integer():
            raise NonIntegralExponentError(
                f"Exponent must be rational, got float {x!r}.")
        x = int(x)
    if not isinstance(x, Rational) or isinstance(x, bool):
        raise NonIntegralExponentError(f"Exponent must be rational, got "
                                       f"{x!r}.")
    return Fraction(x)


# ----------------------------------------------------------------------

Dimension.NONE = Dimension()

MASS = Dimension.of(BaseDimension.MASS)
LENGTH = Dimension.of(BaseDimension.LENGTH)
TIME = Dimension.of(BaseDimension.TIME)
TEMPERATURE = Dimension.of(BaseDimension.TEMPERATURE)
AMOUNT_OF_SUBSTANCE = Dimension.of(BaseDimension.AMOUNT_OF_SUBSTANCE)
ELECTRIC_CURRENT = Dimension.of(BaseDimension.ELECTRIC_CURRENT)
LUMINOUS_INTENSITY = Dimension.of(BaseDimension.LUMINOUS_INTENSITY)
