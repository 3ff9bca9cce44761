"""
복식부기 타입 정의

분개 항목(LedgerPosting)과 계정 역할(AccountRole) 정의
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable


class AccountRole(str, Enum):
    """논리적 계정 역할

    설정(accounts)에서 실제 계정 번호로 해석됨.
    하위 키를 갖는 역할은 심볼/통화/분류 키와 함께 사용 (예: targets.BTC).
    """

    BANK = "bank"  # 주거래 은행 계좌
    FEES = "fees"  # 수수료
    PROFITS = "profits"  # 매매 이익
    LOSSES = "losses"  # 매매 손실
    DIVIDENDS = "dividends"  # 배당 수익
    INTEREST = "interest"  # 지급 이자
    IMBALANCE = "imbalance"  # 미결(상대 계정 미확정)
    TARGETS = "targets"  # 보유 상품 (하위 키: 심볼)
    CURRENCIES = "currencies"  # 통화 계정 (하위 키: 통화 코드)
    TAXES = "taxes"  # 세금 (하위 키: source, income, vat)
    LOANS = "loans"  # 대출 (하위 키: 통화 코드)
    EXPENSES = "expenses"  # 기타 비용 (하위 키: 분류)
    INCOMES = "incomes"  # 기타 수익 (하위 키: 분류)


@dataclass(frozen=True)
class LedgerPosting:
    """분개 항목

    금액은 센트 단위, 부호 있는 값 (양수: 차변, 음수: 대변).
    한 거래의 모든 항목 합계는 정확히 0.

    Attributes:
        account_number: 계정 번호
        amount: 금액
        description: 항목 설명 (하위 거래 항목에만 사용)
    """

    account_number: str
    amount: Decimal
    description: str | None = None


def postings_total(postings: Iterable[LedgerPosting]) -> Decimal:
    """분개 항목 합계"""
    return sum((p.amount for p in postings), Decimal("0"))


def is_balanced(postings: Iterable[LedgerPosting]) -> bool:
    """분개 균형 검증 (합계가 정확히 0)"""
    return postings_total(postings) == 0
