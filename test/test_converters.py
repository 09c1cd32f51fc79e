from unittest import TestCase


# noinspection PyUnusedLocal
class TestScaleShift(TestCase):
    def test_scale(self):
        from decimal import Decimal
        from pyuom.converters import IDENTITY, ScaleConverter, scale
        from pyuom.exceptions import IllegalArgumentError
        from pyuom.math import ExactRational

        c = scale(1000)
        self.assertIsInstance(c, ScaleConverter)
        self.assertEqual(c.factor, ExactRational(1000))
        self.assertEqual(c.convert_double(1.5), 1500.0)
        self.assertEqual(c.convert_exact(Decimal('1.5')), Decimal(1500))
        self.assertEqual(c.scale(), c.convert_double(1.0))
        self.assertEqual(c.scale_as_rational(), 1000)
        self.assertTrue(c.is_linear())

        self.assertIs(scale(5, 5), IDENTITY)
        self.assertEqual(scale(2.54).factor, ExactRational(127, 50))
        self.assertEqual(scale(1, 3).inverse(), scale(3))

        with self.assertRaises(IllegalArgumentError):
            x = scale(0)
        with self.assertRaises(IllegalArgumentError):
            x = scale(1, 0)
        with self.assertRaises(IllegalArgumentError):
            x = scale(0, 5)

    def test_shift(self):
        from decimal import Decimal
        from pyuom.converters import IDENTITY, shift
        from pyuom.exceptions import UnsupportedOperationError

        c = shift('273.15')
        self.assertFalse(c.is_linear())
        self.assertEqual(c.convert_exact(Decimal('-273.15')), 0)
        self.assertAlmostEqual(c.inverse().convert_double(300.0), 26.85)
        self.assertIs(shift(0), IDENTITY)
        self.assertIs(shift(1).and_then(shift(-1)), IDENTITY)

        with self.assertRaises(UnsupportedOperationError):
            x = c.scale()
        with self.assertRaises(UnsupportedOperationError):
            x = c.scale_as_rational()
        with self.assertRaises(TypeError):  # Also builtin type.
            x = c.scale_exact()

    def test_describe(self):
        from pyuom.converters import IDENTITY, scale, shift

        self.assertEqual(scale(1000).describe('m'), '1000·m')
        self.assertEqual(scale(1, 100).describe('m'), '(1/100)·m')
        self.assertEqual(shift('273.15').describe('K'), 'K + 273.15')
        self.assertEqual(shift(-32).describe('x'), 'x - 32')
        self.assertEqual(IDENTITY.describe('m'), 'm')


class TestCompose(TestCase):
    def test_fusion(self):
        from pyuom.converters import (CompositeConverter, IDENTITY, compose,
                                      scale, shift)

        c = scale(1000).and_then(scale(2))
        self.assertEqual(c, scale(2000))
        self.assertEqual(c.convert_double(1.0), 2000.0)

        self.assertEqual(shift(1).and_then(shift(2)), shift(3))
        self.assertIs(compose(IDENTITY, scale(3)), scale(3))
        self.assertIs(compose(scale(3), IDENTITY), scale(3))

        # Mixed chains do not fuse, but adjacent scales still do through
        # a nested composite.
        c = shift(10).and_then(scale(2))
        self.assertIsInstance(c, CompositeConverter)
        self.assertEqual(len(c.steps()), 2)
        self.assertEqual(c.and_then(scale(5)), shift(10).and_then(scale(10)))
        self.assertEqual(IDENTITY.steps(), ())

    def test_order(self):
        from pyuom.converters import scale, shift

        a, b = shift(10), scale(3)
        for x in (-2.0, 0.0, 5.0, 1e6):
            self.assertEqual(a.and_then(b).convert_double(x),
                             b.convert_double(a.convert_double(x)))
            self.assertEqual(a.compose_before(b).convert_double(x),
                             b.convert_double(a.convert_double(x)))
            self.assertEqual(a.compose_after(b).convert_double(x),
                             a.convert_double(b.convert_double(x)))
        self.assertEqual(a.and_then(b).convert_double(5.0), 45.0)
        self.assertEqual(b.and_then(a).convert_double(5.0), 25.0)

    def test_inverse(self):
        from decimal import Decimal
        from pyuom.converters import scale, shift

        for c in (scale(3, 7), shift('-459.67'),
                  shift('459.67').and_then(scale(5, 9))):
            self.assertEqual(c.inverse().inverse(), c)
            x = Decimal('12.5')
            res = c.inverse().convert_exact(c.convert_exact(x))
            self.assertLessEqual(abs(res - x), Decimal('1E-28'))

    def test_linear(self):
        from pyuom.converters import scale, shift

        self.assertTrue(scale(2).and_then(scale(3, 4)).is_linear())
        self.assertFalse(scale(2).and_then(shift(1)).is_linear())
        self.assertEqual(scale(2).and_then(scale(3, 4)).scale_as_rational(),
                         1.5)

    def test_equality(self):
        from fractions import Fraction
        from pyuom.converters import ScaleConverter, scale, shift

        # Structural, and interned by the factories.
        self.assertEqual(ScaleConverter(Fraction(4, 2)), ScaleConverter(2))
        self.assertEqual(hash(ScaleConverter(Fraction(4, 2))),
                         hash(ScaleConverter(2)))
        self.assertIs(scale(1000), scale(1000))
        self.assertIs(shift(10).and_then(scale(2)),
                      shift(10).and_then(scale(2)))
        self.assertNotEqual(shift(10).and_then(scale(2)),
                            scale(2).and_then(shift(10)))


class TestRootPower(TestCase):
    def test_root(self):
        import decimal
        from decimal import Decimal
        from pyuom.converters import RootConverter, root, scale

        # Exact rational roots become scales.
        self.assertEqual(root(scale(1000000), 2), scale(1000))
        self.assertEqual(root(scale(-8, 27), 3), scale(-2, 3))
        self.assertIs(root(scale(7), 1), scale(7))

        c = root(scale(1000), 2)
        self.assertIsInstance(c, RootConverter)
        self.assertAlmostEqual(c.convert_double(1.0), 31.6227766, places=7)
        self.assertEqual(c.convert_exact(Decimal(1), decimal.Context(prec=20)),
                         Decimal('31.622776601683793320'))
        self.assertAlmostEqual(float(c.scale_exact()), c.scale(), places=12)
        self.assertAlmostEqual(c.inverse().convert_double(c.scale()), 1.0)

        # Odd roots of negative scales.
        self.assertAlmostEqual(root(scale(-2), 3).convert_double(1.0),
                               -(2 ** (1 / 3)))

        # Nested roots combine.
        self.assertEqual(root(root(scale(10), 2), 3), root(scale(10), 6))

    def test_root_errors(self):
        from pyuom.converters import RootConverter, root, scale, shift
        from pyuom.exceptions import (ArithmeticDomainError,
                                      IllegalArgumentError,
                                      IllegalConfigurationError)

        with self.assertRaises(IllegalConfigurationError):
            x = root(shift(1), 2)
        with self.assertRaises(IllegalConfigurationError):
            x = RootConverter(shift(1), 2)
        with self.assertRaises(IllegalArgumentError):
            x = root(scale(4), 0)
        with self.assertRaises(IllegalArgumentError):
            x = root(scale(4), -2)
        with self.assertRaises(IllegalArgumentError):
            x = root(scale(4), 1.5)
        with self.assertRaises(ArithmeticDomainError):
            x = root(scale(-2), 2)

    def test_root_recovers_value(self):
        from pyuom.converters import power, root, scale

        for v in ('1.5', '0.0254', '1000', '6.02214076E+23'):
            for n in (2, 3, 5):
                c = root(power(scale(v), n), n)
                self.assertEqual(c, scale(v))

    def test_power(self):
        import decimal
        from decimal import Decimal
        from pyuom.converters import (CompositeConverter, IDENTITY,
                                      PowerConverter, power, root, scale,
                                      shift)
        from pyuom.exceptions import (IllegalArgumentError,
                                      IllegalConfigurationError)

        self.assertEqual(power(scale(10), 3), scale(1000))
        self.assertEqual(power(scale(10), -2), scale(1, 100))
        self.assertIs(power(scale(10), 0), IDENTITY)
        self.assertIs(power(shift(1), 1), shift(1))

        # Powers and roots cancel.
        self.assertEqual(power(root(scale(10), 2), 2), scale(10))
        c = power(root(scale(10), 2), 3)
        self.assertIsInstance(c, PowerConverter)
        self.assertAlmostEqual(c.convert_double(1.0), 10 ** 1.5)

        # Rational inner scales are raised exactly and rounded once.
        ctx = decimal.Context(prec=5)
        c = PowerConverter(scale(1, 3), 3)
        self.assertEqual(c.convert_exact(Decimal(27), ctx), 1)
        c = PowerConverter(CompositeConverter(scale(1, 3), scale(3, 2)), 3)
        self.assertEqual(c.convert_exact(Decimal(54), ctx), Decimal('6.75'))

        with self.assertRaises(IllegalConfigurationError):
            x = power(shift(1), 2)
        with self.assertRaises(IllegalArgumentError):
            x = power(scale(10), 0.5)
