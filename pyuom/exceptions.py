"""
Exceptions raised by the converter, unit and quantity machinery.  Each
exception also derives from the closest builtin category so that
existing ``except ValueError`` (etc) handlers keep working.
"""

__all__ = ['UnitsError', 'IllegalArgumentError', 'IllegalConfigurationError',
           'UnsupportedOperationError', 'ArithmeticDomainError',
           'DivisionByZeroError', 'PrecisionError', 'IncommensurableUnitsError',
           'NonIntegralExponentError', 'UnsupportedQuantityKindError']

# ======================================================================


class UnitsError(Exception):
    """
    Base class for all errors raised by this package.  Additional
    information (optional) is included to allow the reason for the
    failure to be determined.
    """

    def __init__(self, *args, details: str = None, **kwargs):
        """
        Parameters
        ----------
        args :
            Passed to `Exception`.
        details : str, default = None
            Additional text relating to the specific failure.
        kwargs :
            Additional attributes can be added to the object using
            keyword arguments.
        """
        super().__init__(*args)
        self.details = details
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __str__(self):
        """Add additional details below the main failure notice."""
        error_str = super().__str__()
        for k, v in self.__dict__.items():
            if v is not None:
                error_str += f"\n{k} -> {v}"
        return error_str


# ----------------------------------------------------------------------

class IllegalArgumentError(UnitsError, ValueError):
    """Invalid parameters given when building a number, converter or
    unit."""


class IllegalConfigurationError(IllegalArgumentError):
    """
    A converter or unit was assembled from parts that cannot be
    combined, e.g. a root or power of a non-linear converter.
    """


class UnsupportedOperationError(UnitsError, TypeError):
    """A linear-only operation was requested from a non-linear
    converter."""


class ArithmeticDomainError(UnitsError, ArithmeticError, ValueError):
    """Even root of a negative value."""


class DivisionByZeroError(UnitsError, ZeroDivisionError):
    pass


class PrecisionError(UnitsError, ArithmeticError):
    """
    Raised when an iterative calculation (e.g. root extraction) does not
    reach the requested precision within its iteration limit.
    """


class IncommensurableUnitsError(UnitsError, ValueError):
    """Conversion attempted between units that do not share a system
    unit."""


class NonIntegralExponentError(UnitsError, ValueError):
    pass


class UnsupportedQuantityKindError(UnitsError, LookupError):
    """No factory is registered for the requested quantity kind."""
