"""
core/utils/num.py 테스트

센트 반올림과 설명문 숫자 표기
"""

from decimal import Decimal

import pytest

from core.utils.num import (
    cents,
    currency_text,
    parse_currency,
    parse_decimal,
    to_decimal,
    trim,
    trim_signed,
)


class TestToDecimal:
    """to_decimal 테스트"""

    def test_int(self) -> None:
        assert to_decimal(12) == Decimal("12")

    def test_float_goes_through_str(self) -> None:
        """float 이진 오차를 들여오지 않음"""
        assert to_decimal(0.1) == Decimal("0.1")

    def test_decimal_passthrough(self) -> None:
        value = Decimal("1.23")
        assert to_decimal(value) is value

    @pytest.mark.parametrize("value", [True, "12", None, float("nan"), float("inf"), Decimal("NaN")])
    def test_rejects_invalid(self, value: object) -> None:
        """bool, 문자열, None, NaN, 무한대 거부"""
        with pytest.raises(ValueError):
            to_decimal(value)


class TestCents:
    """cents 테스트"""

    def test_round_half_up(self) -> None:
        assert cents(Decimal("10.005")) == Decimal("10.01")
        assert cents(Decimal("10.004")) == Decimal("10.00")

    def test_negative(self) -> None:
        assert cents(Decimal("-1.005")) == Decimal("-1.01")

    def test_float_input(self) -> None:
        assert cents(10.001) == Decimal("10.00")


class TestTrim:
    """trim / trim_signed 테스트"""

    def test_strips_trailing_zeros(self) -> None:
        assert trim(Decimal("2.10000000")) == "2.1"

    def test_eight_decimals(self) -> None:
        assert trim(Decimal(1) / Decimal(9)) == "0.11111111"
        assert trim(Decimal(5) / Decimal(9)) == "0.55555556"

    def test_integer(self) -> None:
        assert trim(12) == "12"
        assert trim(-12) == "-12"

    def test_zero(self) -> None:
        assert trim(0) == "0"
        assert trim(Decimal("-0.000000001")) == "0"

    def test_large_integer_not_exponent(self) -> None:
        """지수 표기 없음"""
        assert trim(Decimal("1E+3")) == "1000"

    def test_signed(self) -> None:
        assert trim_signed(Decimal("0.5")) == "+0.5"
        assert trim_signed(Decimal("-0.5")) == "-0.5"
        assert trim_signed(0) == "+0"


class TestCurrencyText:
    """currency_text 테스트"""

    def test_grouping(self) -> None:
        assert currency_text(11000) == "11,000.00"
        assert currency_text(Decimal("1234567.891")) == "1,234,567.89"

    def test_small(self) -> None:
        assert currency_text(Decimal("0.5")) == "0.50"

    def test_negative(self) -> None:
        assert currency_text(Decimal("-1200")) == "-1,200.00"

    def test_negative_zero(self) -> None:
        """0으로 반올림되는 음수는 0.00"""
        assert currency_text(Decimal("-0.001")) == "0.00"


class TestParse:
    """parse_decimal / parse_currency 테스트"""

    def test_parse_decimal(self) -> None:
        assert parse_decimal("+0.55555556") == Decimal("0.55555556")
        assert parse_decimal("-2") == Decimal("-2")

    def test_parse_decimal_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_decimal("1.2.3")

    def test_parse_currency(self) -> None:
        assert parse_currency("11,000.00") == Decimal("11000.00")

    def test_parse_currency_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_currency("1,2.3.4")
