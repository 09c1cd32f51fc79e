#!/usr/bin/env python3

# Examples of units and quantities.

from decimal import Context, Decimal

from pyuom.quantity import Area, Frequency, Length, Mass, RadioActivity, Speed
from pyuom.units import (FOOT, HOUR, KILOGRAM, KILOMETRE, METRE,
                         MetricPrefix, POUND_MASS, SECOND)


# ----------------------------------------------------------------------------

def main():
    wing_span = Length(10.0, METRE)
    chord = Length(1.0, METRE)
    wing_area = wing_span * chord
    print(f"Wing area = {wing_area} [{wing_area.to(FOOT ** 2):.5g}]")
    assert isinstance(wing_area, Area)

    takeoff_mass = Mass(300.0, KILOGRAM)
    print(f"Takeoff mass = {takeoff_mass:.5G} "
          f"[{takeoff_mass.to(POUND_MASS):.5G}]")

    cruise = Speed(180.0, KILOMETRE / HOUR)
    print(f"Cruise speed = {cruise} [{cruise.to(METRE / SECOND):.5G}]")

    # Exact conversion to 50 significant digits.
    mile = Length(Decimal(5280), FOOT)
    print(f"1 mile = {mile.to(KILOMETRE, Context(prec=50))}")

    # Frequency and radioactivity share a dimension but are never mixed
    # up implicitly.
    rate = Speed(10.0, METRE / SECOND) / Length(100.0, METRE)
    print(f"Rate = {rate!r}")
    print(f"As radioactivity = {rate.as_quantity(RadioActivity)!r}")
    assert isinstance(rate, Frequency)

    km = METRE.with_prefix(MetricPrefix.KILO)
    print(f"Prefixed unit: {km} -> {km.get_converter_to(METRE)}")


# -----------------------------------------------------------------------------

if __name__ == "__main__":
    main()
