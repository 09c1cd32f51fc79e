from __future__ import annotations

from enum import Enum

from pyuom.converters import UnitConverter, scale
from pyuom.math import ExactRational


# ======================================================================

class _PrefixMixin:
    """Common accessors for prefix enumerations.  Each member value is
    a ``(symbol, base, exponent)`` tuple."""

    @property
    def symbol(self) -> str:
        return self.value[0]

    @property
    def exponent(self) -> int:
        return self.value[2]

    @property
    def base(self) -> int:
        return self.value[1]

    @property
    def prefix_name(self) -> str:
        return self.name.lower()

    @property
    def factor(self) -> ExactRational:
        return ExactRational(self.base) ** self.exponent

    @property
    def converter(self) -> UnitConverter:
        """Converter from the prefixed unit to the plain unit."""
        return scale(self.factor)


class MetricPrefix(_PrefixMixin, Enum):
    """
    SI decimal prefixes.

    Examples
    --------
    >>> MetricPrefix.KILO.factor
    ExactRational(1000, 1)
    >>> MetricPrefix.MICRO.symbol
    'µ'
    """
    YOTTA = ('Y', 10, 24)
    ZETTA = ('Z', 10, 21)
    EXA = ('E', 10, 18)
    PETA = ('P', 10, 15)
    TERA = ('T', 10, 12)
    GIGA = ('G', 10, 9)
    MEGA = ('M', 10, 6)
    KILO = ('k', 10, 3)
    HECTO = ('h', 10, 2)
    DEKA = ('da', 10, 1)
    DECI = ('d', 10, -1)
    CENTI = ('c', 10, -2)
    MILLI = ('m', 10, -3)
    MICRO = ('µ', 10, -6)
    NANO = ('n', 10, -9)
    PICO = ('p', 10, -12)
    FEMTO = ('f', 10, -15)
    ATTO = ('a', 10, -18)
    ZEPTO = ('z', 10, -21)
    YOCTO = ('y', 10, -24)


class BinaryPrefix(_PrefixMixin, Enum):
    """IEC binary prefixes (powers of 1024)."""
    KIBI = ('Ki', 1024, 1)
    MEBI = ('Mi', 1024, 2)
    GIBI = ('Gi', 1024, 3)
    TEBI = ('Ti', 1024, 4)
    PEBI = ('Pi', 1024, 5)
    EXBI = ('Ei', 1024, 6)
    ZEBI = ('Zi', 1024, 7)
    YOBI = ('Yi', 1024, 8)

