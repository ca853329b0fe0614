# -*- encoding: utf-8 -*-
# @File   : convert.py
# @Time   : 2024/10/13 00:12:47
# @Author : Kariko Lin

"""Text <-> value conversions used by the typed accessors.

Grammar follows the C library number parsers (`strtol`, `strtoul`,
`strtof`, `strtod`) in the "C" locale: leading whitespace, optional sign,
decimal digits, and for floating point an optional fraction, exponent,
or `inf`/`infinity`/`nan`.

Each parser returns a `Conversion` rather than touching any shared error
indicator, so callers decide for themselves whether a partial parse or an
out-of-range number is acceptable.
"""

from math import isinf
from re import IGNORECASE
from re import compile as regex
from struct import pack, unpack
from typing import NamedTuple

from .consts import FALSE_ALIASES, TRUE_ALIASES

INT_MIN = -(1 << 31)
INT_MAX = (1 << 31) - 1
UINT_MAX = (1 << 32) - 1

_INT = regex(r'[ \t\n\v\f\r]*([+-]?[0-9]+)')
# negative unsigned numbers are rejected instead of wrapped around.
_UINT = regex(r'[ \t\n\v\f\r]*(\+?[0-9]+)')
_FLOAT = regex(
    r'[ \t\n\v\f\r]*('
    r'[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?'
    r'|inf(?:inity)?|nan))',
    IGNORECASE)
_NONZERO = regex(r'[1-9]')


class Conversion(NamedTuple):
    value: int | float
    consumed: int   # chars of the source text used
    overflow: bool  # out of range, too large or too small

    def is_complete(self, text: str) -> bool:
        """Whether the whole `text` was a single in-range number."""
        return 0 < self.consumed == len(text) and not self.overflow


def _parse_integer(text: str, lo: int, hi: int, unsigned: bool) -> Conversion:
    m = (_UINT if unsigned else _INT).match(text)
    if m is None:
        return Conversion(0, 0, False)
    val = int(m.group(1))
    if val > hi:
        return Conversion(hi, m.end(), True)
    if val < lo:
        return Conversion(lo, m.end(), True)
    return Conversion(val, m.end(), False)


def parse_int(text: str) -> Conversion:
    return _parse_integer(text, INT_MIN, INT_MAX, False)


def parse_uint(text: str) -> Conversion:
    return _parse_integer(text, 0, UINT_MAX, True)


def parse_double(text: str) -> Conversion:
    m = _FLOAT.match(text)
    if m is None:
        return Conversion(0.0, 0, False)
    token = m.group(1)
    val = float(token)
    # `float()` silently turns huge literals into inf, tiny ones into 0.
    overflow = ((isinf(val) and 'inf' not in token.lower())
                or (val == 0.0
                    and _NONZERO.search(_mantissa(token)) is not None))
    return Conversion(val, m.end(), overflow)


def _mantissa(token: str) -> str:
    return token.lower().split('e', 1)[0]


def to_single(val: float) -> float:
    """Round a double to IEEE single precision.

    Raises `OverflowError` if it doesn't fit."""
    return unpack('<f', pack('<f', val))[0]


def parse_float(text: str) -> Conversion:
    ret = parse_double(text)
    if ret.overflow:
        return ret
    try:
        single = to_single(ret.value)
    except OverflowError:
        return ret._replace(overflow=True)
    if single == 0.0 and ret.value != 0.0:
        return ret._replace(value=single, overflow=True)
    return ret._replace(value=single)


def parse_bool(text: str, true_str: str, false_str: str) -> bool | None:
    """Case-insensitive. `None` means neither a true nor a false literal."""
    lowered = text.lower()
    if lowered == true_str.lower() or lowered in TRUE_ALIASES:
        return True
    if lowered == false_str.lower() or lowered in FALSE_ALIASES:
        return False
    return None


def format_int(val: int) -> str:
    return '%d' % val


def format_float(val: float) -> str:
    return '%f' % to_single(val)


def format_double(val: float) -> str:
    return '%f' % val
