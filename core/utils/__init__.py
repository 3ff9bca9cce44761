"""
유틸리티 패키지

숫자 표기/반올림, 통화 코드/기호 변환 등 공통 유틸리티
"""

from core.utils.currency import (
    ISO_4217_CODES,
    is_currency_code,
    symbol_to_text,
    text_to_symbol,
)
from core.utils.num import (
    cents,
    currency_text,
    parse_currency,
    parse_decimal,
    to_decimal,
    trim,
    trim_signed,
)

__all__ = [
    "ISO_4217_CODES",
    "is_currency_code",
    "symbol_to_text",
    "text_to_symbol",
    "cents",
    "currency_text",
    "parse_currency",
    "parse_decimal",
    "to_decimal",
    "trim",
    "trim_signed",
]
