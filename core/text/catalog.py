"""
설명문 템플릿 카탈로그

언어별 거래 유형 주 템플릿과 선택 구절(option) 템플릿.
프로세스 시작 시 고정되며 변경되지 않음 (읽기 전용 매핑).

표기법:
- C{var}: 거래 서비스의 설정 변수
- ={var}: 필드 값 그대로
- +{var}: 부호 있는 소수 (소수점 8자리, 뒤쪽 0 제거)
- #{var}: 소수 (소수점 8자리, 뒤쪽 0 제거)
- ${var}: 통화 금액 (소수점 2자리, 천 단위 쉼표)
- £{var}: 필드 통화 코드의 기호
- X{$}: 기준 통화 기호

주 템플릿의 선언 순서가 해석 시 시도 순서 (첫 번째 일치 사용).
'expense.misc3'처럼 점이 들어간 키는 target별 템플릿이며, 일반 템플릿('expense')보다 먼저 선언.
선택 구절은 거래 유형별로 묶이며 선언 순서대로 시도 (자유 텍스트 notes는 마지막).
"""

from types import MappingProxyType
from typing import Mapping

from core.config.loader import ConfigurationError


_FI: dict[str, dict] = {
    "tx": {
        "deposit": "Talletus C{service}-palveluun",
        "withdrawal": "Nosto C{service}-palvelusta",
        "buy": "Osto +{amount} ={target}",
        "sell": "Myynti +{amount} ={target}",
        "dividend": "Osinko #{amount} x ={target}",
        "stock-dividend": "Osakeosinko ={target} +{amount} ={source}",
        "fx-in": "Valuutanvaihto £{target} <- £{currency}",
        "fx-out": "Valuutanvaihto £{target} -> £{currency}",
        "interest": "C{service} lainakorko",
        "loan-take": "Lainanotto: C{loan_name}",
        "loan-pay": "Lainan lyhennys: C{loan_name}",
        "move-in": "Siirto C{service}-palveluun +{amount} ={target}",
        "move-out": "Siirto C{service}-palvelusta +{amount} ={target}",
        "trade": "Vaihto +{given} ={source} -> +{amount} ={target}",
        "expense.misc": "Satunnaiset kulut",
        "expense.misc1": "Satunnaiset kulut #1",
        "expense.misc2": "Satunnaiset kulut #2",
        "expense.misc3": "Satunnaiset kulut #3",
        "expense.bank": "Pankkikulut",
        "expense": "Kulu ={target}",
        "income.misc": "Satunnaiset tulot",
        "income.interest": "Korkotulot",
        "income": "Tulo ={target}",
        "error": "Selvitettävä tapahtuma",
    },
    "options": {
        "buy": {
            "stock": "yht. #{stock} ={target}",
            "average_now": "k.h. nyt ${avg} X{$}/={target}",
            "rate": "kurssi #{rate} £{currency}/X{$}",
        },
        "sell": {
            "average": "k.h. ${avg} X{$}/={target}",
            "stock_left": "jälj. #{stock} ={target}",
            "rate": "kurssi #{rate} £{currency}/X{$}",
        },
        "dividend": {
            "given": "osinko #{given} £{currency}",
            "tax": "vero ${tax} £{currency}",
            "rate": "kurssi #{rate} £{currency}/X{$}",
        },
        "stock-dividend": {
            "stock": "yht. #{stock} ={source}",
            "average_now": "k.h. nyt ${avg} X{$}/={source}",
            "rate": "kurssi #{rate} £{currency}/X{$}",
        },
        "fx-in": {
            "rate": "ostokurssi #{rate} £{target}/£{currency}",
        },
        "fx-out": {
            "rate": "myyntikurssi #{rate} £{currency}/£{target}",
        },
        "move-in": {
            "stock": "yht. #{stock} ={target}",
        },
        "move-out": {
            "average": "k.h. ${avg} X{$}/={target}",
            "stock_left": "jälj. #{stock} ={target}",
        },
        "trade": {
            "burn": "poltettu +{burn_amount} ={burn_target}",
            "stock": "yht. #{stock} ={target}",
            "average_now": "k.h. nyt ${avg} X{$}/={target}",
            "stock_left": "jälj. #{stock2} ={source}",
        },
        "expense": {
            "vat": "alv ${vat} X{$}",
            "notes": "={notes}",
        },
        "income": {
            "notes": "={notes}",
        },
        "error": {
            "notes": "={notes}",
        },
    },
}

_EN: dict[str, dict] = {
    "tx": {
        "deposit": "Deposit to C{service}",
        "withdrawal": "Withdrawal from C{service}",
        "buy": "Buy +{amount} ={target}",
        "sell": "Sell +{amount} ={target}",
        "dividend": "Dividend #{amount} x ={target}",
        "stock-dividend": "Stock dividend ={target} +{amount} ={source}",
        "fx-in": "Currency exchange £{target} <- £{currency}",
        "fx-out": "Currency exchange £{target} -> £{currency}",
        "interest": "C{service} loan interest",
        "loan-take": "Loan taken: C{loan_name}",
        "loan-pay": "Loan repayment: C{loan_name}",
        "move-in": "Transfer to C{service} +{amount} ={target}",
        "move-out": "Transfer from C{service} +{amount} ={target}",
        "trade": "Trade +{given} ={source} -> +{amount} ={target}",
        "expense.misc": "Miscellaneous expenses",
        "expense.bank": "Bank charges",
        "expense": "Expense ={target}",
        "income.misc": "Miscellaneous income",
        "income.interest": "Interest income",
        "income": "Income ={target}",
        "error": "Unresolved transaction",
    },
    "options": {
        "buy": {
            "stock": "total #{stock} ={target}",
            "average_now": "avg. now ${avg} X{$}/={target}",
            "rate": "rate #{rate} £{currency}/X{$}",
        },
        "sell": {
            "average": "avg. ${avg} X{$}/={target}",
            "stock_left": "left #{stock} ={target}",
            "rate": "rate #{rate} £{currency}/X{$}",
        },
        "dividend": {
            "given": "dividend #{given} £{currency}",
            "tax": "tax ${tax} £{currency}",
            "rate": "rate #{rate} £{currency}/X{$}",
        },
        "stock-dividend": {
            "stock": "total #{stock} ={source}",
            "average_now": "avg. now ${avg} X{$}/={source}",
            "rate": "rate #{rate} £{currency}/X{$}",
        },
        "fx-in": {
            "rate": "buy rate #{rate} £{target}/£{currency}",
        },
        "fx-out": {
            "rate": "sell rate #{rate} £{currency}/£{target}",
        },
        "move-in": {
            "stock": "total #{stock} ={target}",
        },
        "move-out": {
            "average": "avg. ${avg} X{$}/={target}",
            "stock_left": "left #{stock} ={target}",
        },
        "trade": {
            "burn": "burned +{burn_amount} ={burn_target}",
            "stock": "total #{stock} ={target}",
            "average_now": "avg. now ${avg} X{$}/={target}",
            "stock_left": "left #{stock2} ={source}",
        },
        "expense": {
            "vat": "VAT ${vat} X{$}",
            "notes": "={notes}",
        },
        "income": {
            "notes": "={notes}",
        },
        "error": {
            "notes": "={notes}",
        },
    },
}


def _freeze(value: Mapping) -> Mapping:
    return MappingProxyType({
        k: _freeze(v) if isinstance(v, Mapping) else v
        for k, v in value.items()
    })


CATALOGS: Mapping[str, Mapping[str, Mapping]] = _freeze({
    "fi": _FI,
    "en": _EN,
})


def get_catalog(language: str) -> Mapping[str, Mapping]:
    """언어별 카탈로그

    Raises:
        ConfigurationError: 카탈로그가 없는 언어
    """
    catalog = CATALOGS.get(language)
    if catalog is None:
        raise ConfigurationError(f"설명문 카탈로그가 없는 언어입니다: '{language}'")
    return catalog


def kind_of_key(key: str) -> tuple[str, str | None]:
    """템플릿 키를 (거래 유형, target 하위 키)로 분리

    예: "expense.misc3" → ("expense", "misc3"), "buy" → ("buy", None)
    """
    kind, _, sub = key.partition(".")
    return kind, (sub or None)
