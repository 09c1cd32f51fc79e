from unittest import TestCase


class TestUtil(TestCase):
    def test_to_ucode_super(self):
        from pyuom.util import to_ucode_super

        self.assertEqual(to_ucode_super('-12'), '⁻¹²')
        self.assertEqual(to_ucode_super('m3'), 'm³')

    def test_power_label(self):
        from fractions import Fraction
        from pyuom import set_unit_options
        from pyuom.util import power_label

        self.assertEqual(power_label('m', Fraction(1)), 'm')
        self.assertEqual(power_label('m', Fraction(2)), 'm²')
        self.assertEqual(power_label('s', Fraction(-1)), 's⁻¹')
        self.assertEqual(power_label('m', Fraction(-3, 2)), 'm^(-3/2)')

        set_unit_options(unicode_str=False)
        try:
            self.assertEqual(power_label('s', Fraction(-1)), 's^-1')
            self.assertEqual(power_label('m', Fraction(1, 2)), 'm^(1/2)')
        finally:
            set_unit_options(unicode_str=True)
