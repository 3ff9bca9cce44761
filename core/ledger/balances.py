"""
계정 잔액

분개 항목을 계정 번호별로 누적. 설정된 계정 목록으로 초기화하면
거래가 없는 계정도 잔액 0으로 조회됨.
"""

import logging
from decimal import Decimal
from typing import Iterable

from core.config.loader import LedgerConfig
from core.ledger.types import LedgerPosting, postings_total

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class AccountBalances:
    """계정 번호 → 잔액

    사용 예시:
    ```python
    balances = AccountBalances.from_config(config)
    balances.apply(tx.to_entries())
    balances.balance_of("1910")
    ```
    """

    def __init__(self, accounts: Iterable[str] | None = None) -> None:
        self._balances: dict[str, Decimal] = {}
        self.load(accounts or [])

    @classmethod
    def from_config(cls, config: LedgerConfig) -> "AccountBalances":
        """설정의 모든 계정 번호로 초기화"""
        return cls(config.all_accounts())

    def load(self, accounts: Iterable[str]) -> None:
        """계정 목록 등록 (이미 있는 계정의 잔액은 유지)"""
        for number in accounts:
            self._balances.setdefault(str(number), ZERO)

    def transfer(self, number: str, amount: Decimal) -> Decimal:
        """계정에 금액 가감

        Returns:
            변경 후 잔액
        """
        if number not in self._balances:
            logger.debug(f"등록되지 않은 계정에 기록: {number}")
        balance = self._balances.get(number, ZERO) + amount
        self._balances[number] = balance
        return balance

    def apply(self, postings: Iterable[LedgerPosting]) -> None:
        """분개 항목 반영"""
        for posting in postings:
            self.transfer(posting.account_number, posting.amount)

    def balance_of(self, number: str) -> Decimal:
        """잔액 (모르는 계정은 0)"""
        return self._balances.get(number, ZERO)

    def accounts(self) -> list[str]:
        """등록된 계정 번호 (정렬)"""
        return sorted(self._balances)

    def total(self) -> Decimal:
        """전체 잔액 합계 (균형 잡힌 분개만 반영했다면 0)"""
        return postings_total(
            LedgerPosting(number, amount) for number, amount in self._balances.items()
        )

    def snapshot(self) -> dict[str, Decimal]:
        """0이 아닌 잔액 복사본"""
        return {n: b for n, b in sorted(self._balances.items()) if b != 0}
