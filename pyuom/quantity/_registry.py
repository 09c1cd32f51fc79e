from __future__ import annotations

import threading
from typing import Callable

from pyuom.dimension import Dimension
from pyuom.exceptions import (IllegalArgumentError,
                              IncommensurableUnitsError,
                              UnsupportedQuantityKindError)
from pyuom.units import TransformedUnit, Unit


# ======================================================================

class QuantityRegistry:
    """
    Registry of quantity kinds.  Each kind (a `Quantity` subclass) is
    registered against the system unit that its values are expressed
    in, together with a factory used to make new instances.

    The first kind registered for a given system unit (or dimension) is
    the default result kind for arithmetic producing that system unit (or
    dimension).  For example, if `Frequency` is registered before
    `RadioActivity`, dividing a speed by a length gives a `Frequency`.

    Registration and lookup are safe to use from multiple threads.

    Parameters
    ----------
    generic : type
        Quantity class used when no kind is found for a result.
    """

    def __init__(self, generic: type):
        self._generic = generic
        self._lock = threading.Lock()
        self._factories: dict[type, Callable] = {}
        self._system_units: dict[type, Unit] = {}
        self._by_unit: dict[Unit, type] = {}
        self._by_dimension: dict[Dimension, type] = {}

    def register(self, kind: type, system_unit: Unit,
                 factory: Callable = None):
        """
        Register quantity `kind` with its `system_unit`.

        Parameters
        ----------
        kind : type
            Quantity subclass.
        system_unit : Unit
            System unit of this kind, e.g. ``HERTZ`` for frequency.
        factory : Callable[[value, unit], Quantity], optional
            Used to create new instances.  If omitted `kind` itself is
            called.

        Raises
        ------
        IllegalArgumentError
            If `system_unit` is not a system unit, or if `kind` is
            already registered with a different system unit.
        """
        if not system_unit.is_system_unit():
            raise IllegalArgumentError(
                f"'{system_unit}' is not a system unit (registering "
                f"{kind.__name__}).")

        with self._lock:
            existing = self._system_units.get(kind)
            if existing is not None and existing != system_unit:
                raise IllegalArgumentError(
                    f"{kind.__name__} is already registered with system "
                    f"unit '{existing}'.")
            self._factories[kind] = factory or kind
            self._system_units[kind] = system_unit
            self._by_unit.setdefault(system_unit, kind)
            self._by_dimension.setdefault(system_unit.dimension, kind)

    def is_registered(self, kind: type) -> bool:
        return kind in self._factories

    def factory(self, kind: type) -> Callable:
        try:
            return self._factories[kind]
        except KeyError:
            raise UnsupportedQuantityKindError(
                f"No factory registered for quantity kind "
                f"{kind.__name__}.") from None

    def system_unit(self, kind: type) -> Unit:
        try:
            return self._system_units[kind]
        except KeyError:
            raise UnsupportedQuantityKindError(
                f"Quantity kind {kind.__name__} is not "
                f"registered.") from None

    def kind_for(self, unit: Unit) -> type | None:
        """
        Kind registered for the system unit of `unit`, otherwise the
        default kind for its dimension, otherwise ``None``.
        """
        return (self._by_unit.get(unit.system_unit) or
                self._by_dimension.get(unit.dimension))

    # -- Construction --------------------------------------------------

    def create(self, value, unit: Unit, kind: type = None,
               generic: bool = True):
        """
        Make a quantity of `value` in `unit`.

        Parameters
        ----------
        value :
            Numeric value (float, array or `Decimal`).
        unit : Unit
            Unit of `value`.
        kind : type, optional
            Requested quantity kind.  If omitted the kind is found from
            `unit` (see `kind_for`).
        generic : bool, default = True
            If `kind` is omitted and none is found, return a generic
            quantity.  Otherwise raise `UnsupportedQuantityKindError`.

        Returns
        -------
        Quantity

        Raises
        ------
        UnsupportedQuantityKindError
            If `kind` is not registered, or no kind was found and
            `generic` is ``False``.
        IncommensurableUnitsError
            If `unit` cannot be used for `kind`.

        Notes
        -----
        If the system unit of `unit` is not the one registered for the
        kind but has the same dimension (e.g. ``s⁻¹`` for a frequency),
        the unit is mapped onto the kind's system unit using the same
        converter, so the value is unchanged.  This is not done if the
        system unit of `unit` belongs to another kind (e.g. ``Bq`` for
        a frequency); see `Quantity.as_quantity` for that.
        """
        if kind is None:
            kind = self.kind_for(unit)
            if kind is None:
                if not generic:
                    raise UnsupportedQuantityKindError(
                        f"No quantity kind registered for unit '{unit}' "
                        f"(dimension {unit.dimension}).")
                return self._generic(value, unit)

        elif kind is self._generic:
            return kind(value, unit)

        sys_unit = self.system_unit(kind)
        factory = self.factory(kind)
        if unit.system_unit != sys_unit:
            owner = self._by_unit.get(unit.system_unit)
            if not unit.is_compatible(sys_unit) or owner is not None:
                raise IncommensurableUnitsError(
                    f"Unit '{unit}' cannot be used for quantity kind "
                    f"{kind.__name__} (system unit '{sys_unit}').")
            unit = self.map_unit(unit, kind)

        return factory(value, unit)

    def map_unit(self, unit: Unit, kind: type) -> Unit:
        """
        Map `unit` onto the system unit of `kind` keeping the same
        converter, e.g. ``kHz`` becomes ``kBq`` for radioactivity.  The
        prefix is carried across only if it is the whole of the
        converter; other units keep their converter on an unnamed unit.
        """
        sys_unit = self.system_unit(kind)
        if (unit.prefix is not None and unit.parent.is_system_unit() and
                unit.parent_converter == unit.prefix.converter):
            return sys_unit.with_prefix(unit.prefix)
        return TransformedUnit.of(sys_unit, unit.system_converter)
