from __future__ import annotations

from dataclasses import dataclass, replace
import decimal

# ======================================================================

_ROUNDING_MODES = frozenset((
    decimal.ROUND_CEILING, decimal.ROUND_DOWN, decimal.ROUND_FLOOR,
    decimal.ROUND_HALF_DOWN, decimal.ROUND_HALF_EVEN, decimal.ROUND_HALF_UP,
    decimal.ROUND_UP, decimal.ROUND_05UP))


@dataclass(frozen=True, kw_only=True)
class UnitOptions:
    """
    Dataclass that holds option flags for handling units and exact
    conversions.  See `get_unit_options` and `set_unit_options` for full
    details.
    """
    cache_conversions: bool
    cache_made_units: bool
    conversion_length_warning: int
    unicode_str: bool
    precision: int
    rounding: str
    root_max_iterations: int

    def __post_init__(self):
        """Check certain values"""
        if self.conversion_length_warning <= 1:
            raise ValueError("Require 'conversion_length_warning' > 1.")
        if self.precision < 1:
            raise ValueError("Require 'precision' >= 1.")
        if self.rounding not in _ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode '{self.rounding}'.")
        if self.root_max_iterations < 1:
            raise ValueError("Require 'root_max_iterations' >= 1.")


# Create single instance and set defaults.
_unit_options = UnitOptions(
    cache_conversions=True,
    cache_made_units=True,
    conversion_length_warning=6,
    unicode_str=True,
    precision=34,
    rounding=decimal.ROUND_HALF_EVEN,
    root_max_iterations=100
)


# ----------------------------------------------------------------------

def default_context() -> decimal.Context:
    """
    Returns
    -------
    context : decimal.Context
        A new decimal context using the current `precision` and
        `rounding` options.  This is used by exact conversions whenever
        the caller does not supply a context.
    """
    return decimal.Context(prec=_unit_options.precision,
                           rounding=_unit_options.rounding)


def get_unit_options() -> UnitOptions:
    """
    Returns
    -------
    unit_options : UnitOptions
        Returns a UnitOptions object containing the options.  For a
        full description of each option, see `set_unit_options`.
    """
    return replace(_unit_options)


# noinspection PyIncorrectDocstring
def set_unit_options(**kwargs):
    """
    Set the current unit options.

    Parameters
    ----------
    cache_conversions : bool, default = True
        If `True`, converters produced by the factory functions are
        interned and unit-to-unit converters are cached for faster repeat
        access.  Only the requested conversion 'direction' is cached.

        .. note:: There is presently no size limit on this cache. This
           is normally not a problem as only a few types of conversions
           occur in any application.

    cache_made_units : bool, default = True
        If `True`, product units (e.g. from multiplying two units) are
        cached so that equal products share one instance.

    conversion_length_warning : int, default = 6
        Issue a warning if a unit-to-unit converter is made up of more
        primitive steps than this value.  It could indicate a potential
        buildup of error and usually means that a more direct unit
        definition should be added.

    unicode_str : bool, default = True
        Generate unicode characters for superscripts in product unit
        symbols and dimensions.

    precision : int, default = 34
        Number of significant digits used by exact conversions when no
        explicit `decimal.Context` is given.

    rounding : str, default = decimal.ROUND_HALF_EVEN
        Rounding mode used by exact conversions when no explicit
        `decimal.Context` is given.

    root_max_iterations : int, default = 100
        Maximum number of Newton-Raphson steps when extracting an exact
        nth root before `PrecisionError` is raised.

    See Also
    --------
    get_unit_options

    Examples
    --------
    By default negative powers are rendered with unicode characters:
    >>> from pyuom.units import METRE, SECOND
    >>> print(METRE / SECOND)
    m.s⁻¹

    If this is disabled, the caret '^' is used instead:
    >>> set_unit_options(unicode_str=False)
    >>> print(METRE / SECOND)
    m.s^-1
    >>> set_unit_options(unicode_str=True)
    """
    global _unit_options
    _unit_options = replace(_unit_options, **kwargs)
