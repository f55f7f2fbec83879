import pytest

from paytoplay.services.lottery.amounts import format_amount, one_unit, parse_amount


def test_format_whole_and_fractional_amounts():
    assert format_amount(one_unit(24), 24, 'NEAR') == '1 NEAR'
    assert format_amount(3 * one_unit(24) // 2, 24, 'NEAR') == '1.5 NEAR'
    assert format_amount(0, 24, 'NEAR') == '0 NEAR'
    assert format_amount(1, 24, 'NEAR') == '0.000000000000000000000001 NEAR'
    assert format_amount(4, 0, 'NEAR') == '4 NEAR'


def test_format_keeps_precision_of_large_pots():
    pot = 12345678901234567890123456789 * one_unit(24) + 7
    assert format_amount(pot, 24, 'NEAR') == '12345678901234567890123456789.000000000000000000000007 NEAR'


def test_parse_amount():
    assert parse_amount(5) == 5
    assert parse_amount('1000000000000000000000000') == 10 ** 24
    for bad in (-1, '-1', '1.5', 1.5, None, True, 'abc'):
        with pytest.raises(ValueError):
            parse_amount(bad)
