# -*- encoding: utf-8 -*-
# @File   : test_convert.py
# @Time   : 2024/10/13 14:31:07
# @Author : Kariko Lin

from math import isinf

import pytest

from pyconfigini.ini import convert


class TestIntegers:
    def test_plain_and_signed(self) -> None:
        assert convert.parse_int('42') == (42, 2, False)
        assert convert.parse_int('-17').value == -17
        assert convert.parse_int('+8').is_complete('+8')

    def test_partial_parse_is_incomplete(self) -> None:
        ret = convert.parse_int('12abc')
        assert ret.consumed == 2
        assert not ret.is_complete('12abc')

    def test_no_digits(self) -> None:
        assert convert.parse_int('abc').consumed == 0
        assert not convert.parse_int('').is_complete('')

    def test_int_range(self) -> None:
        assert convert.parse_int('-2147483648').is_complete('-2147483648')
        ret = convert.parse_int('2147483648')
        assert ret.overflow
        assert ret.value == convert.INT_MAX

    def test_unsigned(self) -> None:
        assert convert.parse_uint('4294967295').value == convert.UINT_MAX
        assert convert.parse_uint('4294967296').overflow
        # negatives are refused instead of wrapped.
        assert convert.parse_uint('-1').consumed == 0


class TestFloats:
    @pytest.mark.parametrize('text, expected', [
        ('2.5', 2.5),
        ('.5', 0.5),
        ('3.', 3.0),
        ('1e3', 1000.0),
        ('-4.25E-1', -0.425),
    ])
    def test_grammar(self, text: str, expected: float) -> None:
        ret = convert.parse_double(text)
        assert ret.is_complete(text)
        assert ret.value == pytest.approx(expected)

    def test_dangling_exponent(self) -> None:
        assert convert.parse_double('1e').consumed == 1
        assert convert.parse_double('.').consumed == 0

    def test_double_overflow(self) -> None:
        assert convert.parse_double('1e400').overflow
        ret = convert.parse_double('-Infinity')
        assert not ret.overflow and isinf(ret.value)

    def test_underflow_is_out_of_range(self) -> None:
        assert convert.parse_double('1e-400').overflow is True
        assert convert.parse_double('0.0e-400').overflow is False
        assert convert.parse_float('1e-50').overflow is True
        assert convert.parse_float('-0.0') == (0.0, 4, False)
        assert not convert.parse_float('1e-30').overflow

    def test_single_precision(self) -> None:
        assert convert.parse_float('3.4e39').overflow
        ret = convert.parse_float('0.1')
        assert ret.value == convert.to_single(0.1)
        assert ret.value != 0.1

    def test_formatting(self) -> None:
        assert convert.format_double(100) == '100.000000'
        assert convert.format_float(2.5) == '2.500000'
        assert convert.format_int(-3) == '-3'
        with pytest.raises(OverflowError):
            convert.format_float(1e300)


class TestBooleans:
    @pytest.mark.parametrize('text', ['1', 'true', 'TRUE', 'Yes', 'yes'])
    def test_true_aliases(self, text: str) -> None:
        assert convert.parse_bool(text, '1', '0') is True

    @pytest.mark.parametrize('text', ['0', 'False', 'no', 'NO'])
    def test_false_aliases(self, text: str) -> None:
        assert convert.parse_bool(text, '1', '0') is False

    def test_configured_literals(self) -> None:
        assert convert.parse_bool('ON', 'on', 'off') is True
        assert convert.parse_bool('Off', 'on', 'off') is False
        assert convert.parse_bool('on', '1', '0') is None
        assert convert.parse_bool('maybe', 'on', 'off') is None
