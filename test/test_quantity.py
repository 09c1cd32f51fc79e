from unittest import TestCase


# noinspection PyUnusedLocal
class TestQuantity(TestCase):
    def test___init__(self):
        import numpy as np
        from pyuom.exceptions import (IllegalArgumentError,
                                      IncommensurableUnitsError)
        from pyuom.quantity import Frequency, Length, Quantity
        from pyuom.units import BECQUEREL, KILOGRAM, KILOMETRE, METRE

        x = Length(1.5, KILOMETRE)
        self.assertEqual(x.value, 1.5)
        self.assertIs(x.unit, KILOMETRE)
        self.assertIs(x.kind, Length)
        self.assertEqual(x.system_unit, METRE)
        self.assertEqual(repr(x), "Length(1.5, 'km')")
        self.assertEqual(f"{x:.2f}", '1.50 km')

        # Lists become arrays.
        x = Length([1.0, 2.0], METRE)
        self.assertIsInstance(x.value, np.ndarray)

        # Generic quantities accept any unit.
        x = Quantity(2.0, KILOGRAM * METRE)
        self.assertEqual(str(x), '2.0 kg.m')

        with self.assertRaises(IncommensurableUnitsError):
            x = Length(1.0, KILOGRAM)
        with self.assertRaises(IncommensurableUnitsError):
            x = Frequency(1.0, BECQUEREL)
        with self.assertRaises(IllegalArgumentError):
            x = Length(1.0, 'm')

    def test___add__(self):
        # Also tests __sub__.
        from decimal import Decimal
        from pyuom.exceptions import IncommensurableUnitsError
        from pyuom.quantity import Length, Time
        from pyuom.units import FOOT, INCH, KILOMETRE, METRE, SECOND

        x = Length(1.0, KILOMETRE) + Length(500.0, METRE)
        self.assertIsInstance(x, Length)
        self.assertIs(x.unit, KILOMETRE)
        self.assertAlmostEqual(x.value, 1.5)

        x = Length(Decimal(1), FOOT) - Length(Decimal(6), INCH)
        self.assertEqual(x.value, Decimal('0.5'))
        self.assertIs(x.unit, FOOT)

        with self.assertRaises(IncommensurableUnitsError):
            x = Length(1.0, METRE) + Time(1.0, SECOND)
        with self.assertRaises(TypeError):
            x = Length(1.0, METRE) + 1.0

    def test___mul__(self):
        # Also tests __truediv__, __pow__ and root().
        import decimal
        from decimal import Decimal
        from pyuom.quantity import (Area, Dimensionless, Frequency, Length,
                                    Quantity, Speed, Time)
        from pyuom.units import (HERTZ, KILOGRAM, KILOMETRE, METRE, ONE,
                                 SECOND)

        x = Length(2.0, METRE) * Length(3.0, METRE)
        self.assertIsInstance(x, Area)
        self.assertEqual(x.value, 6.0)
        self.assertEqual(x.unit, METRE ** 2)

        x = Length(10.0, METRE) / Time(2.0, SECOND)
        self.assertIsInstance(x, Speed)
        self.assertEqual(x.value, 5.0)

        # Numbers keep the kind and unit.
        x = 3 * Length(2.0, KILOMETRE)
        self.assertIsInstance(x, Length)
        self.assertEqual(x.value, 6.0)
        self.assertIs(x.unit, KILOMETRE)
        self.assertEqual((Length(Decimal('1.5'), METRE) * 2).value,
                         Decimal('3.0'))
        self.assertIsInstance((Length(Decimal('1.5'), METRE) * 2.0).value,
                              float)

        x = Length(4.0, METRE) / Length(2.0, METRE)
        self.assertIsInstance(x, Dimensionless)
        self.assertIs(x.unit, ONE)
        self.assertEqual(str(x), '2.0')

        # Number divided by a time is a frequency.
        x = 1 / Time(2.0, SECOND)
        self.assertIsInstance(x, Frequency)
        self.assertEqual(x.unit, HERTZ)
        self.assertEqual(x.value, 0.5)

        x = Length(3.0, METRE) ** 2
        self.assertIsInstance(x, Area)
        self.assertEqual(x.value, 9.0)

        x = Area(9.0, METRE ** 2).root(2)
        self.assertIsInstance(x, Length)
        self.assertEqual(x.value, 3.0)
        self.assertEqual(x.unit, METRE)

        x = Area(Decimal(2), METRE ** 2).root(2, decimal.Context(prec=10))
        self.assertEqual(x.value, Decimal('1.414213562'))

        # No registered kind.
        x = Length(2.0, METRE) * Quantity(3.0, KILOGRAM)
        self.assertIs(type(x), Quantity)

    def test_to(self):
        from decimal import Decimal
        import numpy as np
        from pyuom.exceptions import IncommensurableUnitsError
        from pyuom.quantity import Frequency, Length, Temperature, quantity
        from pyuom.units import (BECQUEREL, CELSIUS, KELVIN, KILOMETRE, METRE,
                                 MINUTE)

        x = Length(Decimal('1.5'), KILOMETRE).to(METRE)
        self.assertIsInstance(x, Length)
        self.assertEqual(x.value, Decimal(1500))

        x = Length([1.0, 2.0], KILOMETRE).to(METRE)
        np.testing.assert_array_equal(x.value, [1000.0, 2000.0])

        x = Temperature(25.0, CELSIUS).to_system_unit()
        self.assertIs(x.unit, KELVIN)
        self.assertAlmostEqual(x.value, 298.15)

        # Per-minute units are mapped onto the hertz.
        x = quantity(30.0, MINUTE.inverse())
        self.assertIsInstance(x, Frequency)
        self.assertEqual(x.value, 30.0)
        self.assertAlmostEqual(x.to_system_unit().value, 0.5)

        with self.assertRaises(IncommensurableUnitsError):
            x = x.to(BECQUEREL)
        with self.assertRaises(IncommensurableUnitsError):
            x = Frequency(1.0, MINUTE.inverse())  # Unmapped unit.

    def test_as_quantity(self):
        from pyuom.exceptions import (IncommensurableUnitsError,
                                      UnsupportedQuantityKindError)
        from pyuom.converters import scale
        from pyuom.quantity import (Frequency, Length, Quantity,
                                    RadioActivity, Speed, Time, quantity)
        from pyuom.units import (BECQUEREL, HERTZ, METRE, MetricPrefix,
                                 SECOND, TransformedUnit)

        f = Speed(10.0, METRE / SECOND) / Length(100.0, METRE)
        self.assertIsInstance(f, Frequency)
        self.assertEqual(f.unit, HERTZ)
        self.assertAlmostEqual(f.value, 0.1)

        a = f.as_quantity(RadioActivity)
        self.assertIsInstance(a, RadioActivity)
        self.assertEqual(a.unit, BECQUEREL)
        self.assertEqual(a.value, f.value)

        # Prefixes carry across.
        khz = HERTZ.with_prefix(MetricPrefix.KILO)
        a = Frequency(2.0, khz).as_quantity(RadioActivity)
        self.assertEqual(str(a.unit), 'kBq')
        self.assertEqual(a.value, 2.0)

        # A prefix on a scaled unit is not the whole converter.
        rpm = TransformedUnit.of(SECOND.inverse(), scale(1, 60),
                                 symbol='rpm')
        krpm = rpm.with_prefix(MetricPrefix.KILO)
        x = quantity(1.0, krpm)
        self.assertIsInstance(x, Frequency)
        self.assertEqual(x.value, 1.0)
        self.assertNotEqual(str(x.unit), 'kHz')
        self.assertAlmostEqual(x.to(HERTZ).value, 1000 / 60)

        a = x.as_quantity(RadioActivity)
        self.assertEqual(a.value, 1.0)
        self.assertAlmostEqual(a.to(BECQUEREL).value, 1000 / 60)

        with self.assertRaises(IncommensurableUnitsError):
            x = f.as_quantity(Time)

        class Unregistered(Quantity):
            pass

        with self.assertRaises(UnsupportedQuantityKindError):
            x = f.as_quantity(Unregistered)

    def test_compare(self):
        from decimal import Decimal
        import numpy as np
        from pyuom.exceptions import IncommensurableUnitsError
        from pyuom.quantity import Frequency, Length, RadioActivity, Time
        from pyuom.units import (BECQUEREL, FOOT, HERTZ, INCH, KILOMETRE,
                                 METRE, SECOND)

        self.assertEqual(Length(1.0, KILOMETRE), Length(1000.0, METRE))
        self.assertTrue(Length(1.0, FOOT) > Length(11.0, INCH))
        self.assertTrue(Length(Decimal(1), FOOT) <= Length(Decimal(12), INCH))
        self.assertNotEqual(Length(1.0, METRE), Time(1.0, SECOND))
        self.assertNotEqual(Frequency(1.0, HERTZ),
                            RadioActivity(1.0, BECQUEREL))

        self.assertTrue(Length(1.0, KILOMETRE).is_equivalent(
            Length(1000.0, METRE)))
        self.assertFalse(Length(1.0, METRE).is_equivalent(Time(1.0, SECOND)))
        self.assertFalse(Length(1.0, METRE).is_equivalent(1.0))
        self.assertTrue(Length(1.0, FOOT).is_close(Length(0.3048, METRE)))
        self.assertFalse(Length(1.0, FOOT).is_close(Length(0.3, METRE)))
        self.assertTrue(Length([1.0, 2.0], FOOT).is_close(
            Length(np.array([12.0, 24.0]), INCH)))

        with self.assertRaises(IncommensurableUnitsError):
            x = Length(1.0, METRE) < Time(1.0, SECOND)
        with self.assertRaises(TypeError):
            x = hash(Length(1.0, METRE))

    def test_unary(self):
        from pyuom.quantity import Length
        from pyuom.units import METRE

        x = -Length(2.0, METRE)
        self.assertIsInstance(x, Length)
        self.assertEqual(x.value, -2.0)
        self.assertEqual(abs(x).value, 2.0)
        self.assertEqual(x.negate().value, 2.0)


class TestQuantityRegistry(TestCase):
    def test_create(self):
        from pyuom.exceptions import (IncommensurableUnitsError,
                                      UnsupportedQuantityKindError)
        from pyuom.quantity import (Frequency, Length, Quantity, quantity,
                                    get_quantity_registry)
        from pyuom.units import BECQUEREL, HERTZ, KILOGRAM, METRE, SECOND

        reg = get_quantity_registry()
        self.assertIs(reg.kind_for(METRE), Length)
        self.assertIs(reg.kind_for(SECOND.inverse()), Frequency)
        self.assertIsNone(reg.kind_for(KILOGRAM * METRE))

        x = quantity(1.0, SECOND.inverse())
        self.assertIsInstance(x, Frequency)
        self.assertEqual(x.unit, HERTZ)

        x = reg.create(1.0, KILOGRAM * METRE)
        self.assertIs(type(x), Quantity)
        with self.assertRaises(UnsupportedQuantityKindError):
            x = reg.create(1.0, KILOGRAM * METRE, generic=False)

        # Units belonging to another kind are not mapped.
        with self.assertRaises(IncommensurableUnitsError):
            x = reg.create(1.0, BECQUEREL, kind=Frequency)
        with self.assertRaises(IncommensurableUnitsError):
            x = quantity(1.0, SECOND, kind=Length)

        class Unregistered(Quantity):
            pass

        with self.assertRaises(UnsupportedQuantityKindError):
            x = reg.create(1.0, METRE, kind=Unregistered)
        with self.assertRaises(LookupError):  # Also builtin type.
            x = reg.factory(Unregistered)

    def test_register(self):
        from pyuom.exceptions import IllegalArgumentError
        from pyuom.quantity import Length, Quantity, QuantityRegistry
        from pyuom.units import KILOMETRE, METRE, SECOND

        reg = QuantityRegistry(Quantity)
        self.assertIs(type(reg.create(1.0, METRE)), Quantity)

        made = []

        def make_length(value, unit):
            made.append((value, unit))
            return Length(value, unit)

        reg.register(Length, METRE, factory=make_length)
        self.assertTrue(reg.is_registered(Length))
        self.assertIs(reg.system_unit(Length), METRE)
        x = reg.create(2.0, KILOMETRE)
        self.assertIsInstance(x, Length)
        self.assertEqual(made, [(2.0, KILOMETRE)])

        reg.register(Length, METRE)  # Same system unit is allowed.
        with self.assertRaises(IllegalArgumentError):
            reg.register(Length, SECOND)
        with self.assertRaises(IllegalArgumentError):
            reg.register(Length, KILOMETRE)

    def test_register_order(self):
        from pyuom.quantity import (Frequency, Quantity, QuantityRegistry,
                                    RadioActivity)
        from pyuom.units import BECQUEREL, HERTZ, SECOND

        # The first kind registered for a dimension is the default.
        reg = QuantityRegistry(Quantity)
        reg.register(RadioActivity, BECQUEREL)
        reg.register(Frequency, HERTZ)
        self.assertIs(reg.kind_for(SECOND.inverse()), RadioActivity)
        self.assertIs(reg.kind_for(HERTZ), Frequency)
        self.assertIs(reg.kind_for(BECQUEREL), RadioActivity)
