"""
숫자 변환/표기 유틸리티

분개 금액의 센트 반올림과 설명문에 쓰이는 세 가지 숫자 표기:
- trim: 소수점 8자리 고정 후 뒤쪽 0 제거 (예: 2.1, 0.55555556)
- trim_signed: trim + 부호 (예: +0.55555556, -2)
- currency_text: 소수점 2자리 + 천 단위 쉼표 (예: 11,000.00)
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from core.constants import Precision


def to_decimal(value: Any) -> Decimal:
    """숫자를 Decimal로 변환

    float는 str을 거쳐 변환하여 이진 부동소수점 오차를 들여오지 않음.

    Raises:
        ValueError: 숫자가 아니거나 NaN/무한대인 경우
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError(f"숫자가 아닙니다: {value!r}")
    result = value if isinstance(value, Decimal) else Decimal(str(value))
    if not result.is_finite():
        raise ValueError(f"유한한 숫자가 아닙니다: {value!r}")
    return result


def cents(value: Decimal | int | float) -> Decimal:
    """센트 단위로 반올림 (ROUND_HALF_UP)"""
    return to_decimal(value).quantize(Precision.CENT, rounding=ROUND_HALF_UP)


def trim(value: Decimal | int | float) -> str:
    """소수점 8자리로 고정 후 불필요한 0 제거

    예: 12 → "12", 1/9 → "0.11111111", 0 → "0"
    """
    quantized = to_decimal(value).quantize(Precision.QUANTITY, rounding=ROUND_HALF_UP)
    if quantized == 0:
        return "0"
    text = format(quantized, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def trim_signed(value: Decimal | int | float) -> str:
    """trim()과 같지만 0 이상이면 '+' 부호를 붙임"""
    text = trim(value)
    if text.startswith("-"):
        return text
    return "+" + text


def currency_text(value: Decimal | int | float) -> str:
    """통화 금액 표기 (소수점 2자리, 천 단위 쉼표)

    0으로 반올림되는 음수는 "0.00"으로 표기 ("-0.00" 방지).
    """
    amount = cents(value)
    if amount == 0:
        amount = Decimal("0.00")
    return f"{amount:,.2f}"


def parse_decimal(text: str) -> Decimal:
    """설명문의 숫자 텍스트를 Decimal로 변환

    Raises:
        ValueError: 숫자로 해석할 수 없는 경우 (예: "1.2.3")
    """
    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"숫자 해석 실패: {text!r}") from e


def parse_currency(text: str) -> Decimal:
    """currency_text() 표기를 Decimal로 변환 (천 단위 쉼표 제거)"""
    return parse_decimal(text.replace(",", ""))
