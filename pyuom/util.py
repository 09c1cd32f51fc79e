"""
Small, general purpose utility functions.
"""
from __future__ import annotations

from fractions import Fraction

from pyuom._opts import get_unit_options

# == Unicode Functions =================================================

_UCODE_SS_CHARS = ('⁺⁻ᐧ⁰¹²³⁴⁵⁶⁷⁸⁹', '+-.0123456789')


def to_ucode_super(ss: str) -> str:
    """
    Convert numeric characters in the string ``ss`` to unicode superscript.
    """
    result = ''
    for c in ss:
        idx = _UCODE_SS_CHARS[1].find(c)
        if idx >= 0:
            result += _UCODE_SS_CHARS[0][idx]
        else:
            result += c
    return result


def power_label(label: str, pwr: Fraction) -> str:
    """
    Append exponent `pwr` to `label`, e.g. ``m²``, ``s^-1``.  Unit
    exponents are omitted and fractional exponents are always written
    in ascii as ``^(p/q)``.  Superscripts are only used when the
    `unicode_str` option is set.
    """
    if pwr == 1:
        return label
    if pwr.denominator != 1:
        return f'{label}^({pwr})'
    if get_unit_options().unicode_str:
        return label + to_ucode_super(f'{pwr}')
    return f'{label}^{pwr}'
