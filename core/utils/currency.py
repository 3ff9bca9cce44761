"""
통화 코드/기호 테이블

ISO 4217 통화 코드 검증과 설명문용 통화 기호 변환.
기호 → 코드 역변환이 가능하도록 SYMBOLS의 기호 값은 모두 고유해야 함.
고유 기호가 없는 통화(SEK, NOK, CHF 등)는 코드 자체를 기호로 사용.
"""

# 현행 ISO 4217 통화 코드
ISO_4217_CODES: frozenset[str] = frozenset({
    "AED", "AFN", "ALL", "AMD", "ANG", "AOA", "ARS", "AUD", "AWG", "AZN",
    "BAM", "BBD", "BDT", "BGN", "BHD", "BIF", "BMD", "BND", "BOB", "BRL",
    "BSD", "BTN", "BWP", "BYN", "BZD", "CAD", "CDF", "CHF", "CLP", "CNY",
    "COP", "CRC", "CUP", "CVE", "CZK", "DJF", "DKK", "DOP", "DZD", "EGP",
    "ERN", "ETB", "EUR", "FJD", "FKP", "GBP", "GEL", "GHS", "GIP", "GMD",
    "GNF", "GTQ", "GYD", "HKD", "HNL", "HTG", "HUF", "IDR", "ILS", "INR",
    "IQD", "IRR", "ISK", "JMD", "JOD", "JPY", "KES", "KGS", "KHR", "KMF",
    "KPW", "KRW", "KWD", "KYD", "KZT", "LAK", "LBP", "LKR", "LRD", "LSL",
    "LYD", "MAD", "MDL", "MGA", "MKD", "MMK", "MNT", "MOP", "MRU", "MUR",
    "MVR", "MWK", "MXN", "MYR", "MZN", "NAD", "NGN", "NIO", "NOK", "NPR",
    "NZD", "OMR", "PAB", "PEN", "PGK", "PHP", "PKR", "PLN", "PYG", "QAR",
    "RON", "RSD", "RUB", "RWF", "SAR", "SBD", "SCR", "SDG", "SEK", "SGD",
    "SHP", "SLE", "SOS", "SRD", "SSP", "STN", "SVC", "SYP", "SZL", "THB",
    "TJS", "TMT", "TND", "TOP", "TRY", "TTD", "TWD", "TZS", "UAH", "UGX",
    "USD", "UYU", "UZS", "VES", "VND", "VUV", "WST", "XAF", "XCD", "XOF",
    "XPF", "YER", "ZAR", "ZMW", "ZWL",
})

# 통화 코드 → 설명문 기호
SYMBOLS: dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "JPY": "¥",
    "DKK": "kr",
    "INR": "₹",
    "KRW": "₩",
    "RUB": "₽",
    "ILS": "₪",
    "NGN": "₦",
    "THB": "฿",
    "PHP": "₱",
    "UAH": "₴",
    "VND": "₫",
    "TRY": "₺",
    "PLN": "zł",
    "CZK": "Kč",
    "BRL": "R$",
}

_SYMBOL_TO_CODE: dict[str, str] = {sym: code for code, sym in SYMBOLS.items()}


def is_currency_code(value: object) -> bool:
    """ISO 4217 통화 코드인지 확인"""
    return isinstance(value, str) and value in ISO_4217_CODES


def text_to_symbol(code: str) -> str:
    """통화 코드를 설명문 기호로 변환 (기호가 없으면 코드 그대로)"""
    return SYMBOLS.get(code, code)


def symbol_to_text(symbol: str) -> str:
    """설명문 기호를 통화 코드로 역변환

    Raises:
        ValueError: 알 수 없는 기호
    """
    if symbol in _SYMBOL_TO_CODE:
        return _SYMBOL_TO_CODE[symbol]
    if is_currency_code(symbol):
        return symbol
    raise ValueError(f"알 수 없는 통화 기호: {symbol!r}")
