"""
현금성 거래

입출금, 환전, 이자, 대출. 재고 변화가 없는 거래.
"""

from decimal import Decimal

from core.ledger.types import AccountRole, LedgerPosting
from core.tx.base import BASE_CURRENCY, NOT_SET, Transaction
from core.types import TxKind
from core.utils.num import cents


def _split_fee(
    tx: Transaction,
    role: AccountRole,
    subkey: str | None,
    total: Decimal,
    fee: Decimal,
) -> list[LedgerPosting]:
    """수수료가 있으면 차변을 (금액 - 수수료) + 수수료로 나눔"""
    entries = [tx.posting(role, total - fee, subkey)]
    if fee > 0:
        entries.append(tx.posting(AccountRole.FEES, fee))
    return entries


class Deposit(Transaction):
    """은행에서 서비스로 입금 (기준 통화)"""

    KIND = TxKind.DEPOSIT
    FIELDS = {
        "fee": Decimal("0"),
    }

    def build_entries(self) -> list[LedgerPosting]:
        total, fee = cents(self.total), cents(self.fee)
        return [
            *_split_fee(self, AccountRole.CURRENCIES, self.config.currency, total, fee),
            self.posting(AccountRole.BANK, -total),
        ]


class Withdrawal(Transaction):
    """서비스에서 은행으로 출금 (기준 통화)"""

    KIND = TxKind.WITHDRAWAL
    FIELDS = {
        "fee": Decimal("0"),
    }

    def build_entries(self) -> list[LedgerPosting]:
        total, fee = cents(self.total), cents(self.fee)
        return [
            *_split_fee(self, AccountRole.BANK, None, total, fee),
            self.posting(AccountRole.CURRENCIES, -total, self.config.currency),
        ]


class FxIn(Transaction):
    """환전: currency를 주고 target 통화를 받음

    total은 기준 통화 환산 금액, amount는 받은 target 통화 수량.
    """

    KIND = TxKind.FX_IN
    FIELDS = {
        "target": NOT_SET,
        "amount": None,
        "currency": BASE_CURRENCY,
        "rate": NOT_SET,
        "fee": Decimal("0"),
    }

    def build_entries(self) -> list[LedgerPosting]:
        total, fee = cents(self.total), cents(self.fee)
        return [
            *_split_fee(self, AccountRole.CURRENCIES, self.target, total, fee),
            self.posting(AccountRole.CURRENCIES, -total, self.currency),
        ]

    def text_options(self) -> list[str]:
        return ["rate"] if self.has("rate") else []


class FxOut(Transaction):
    """환전: target 통화를 주고 currency를 받음"""

    KIND = TxKind.FX_OUT
    FIELDS = {
        "target": NOT_SET,
        "amount": None,
        "currency": BASE_CURRENCY,
        "rate": NOT_SET,
        "fee": Decimal("0"),
    }

    def build_entries(self) -> list[LedgerPosting]:
        total, fee = cents(self.total), cents(self.fee)
        return [
            *_split_fee(self, AccountRole.CURRENCIES, self.currency, total, fee),
            self.posting(AccountRole.CURRENCIES, -total, self.target),
        ]

    def text_options(self) -> list[str]:
        return ["rate"] if self.has("rate") else []


class Interest(Transaction):
    """대출 이자 지급"""

    KIND = TxKind.INTEREST
    FIELDS = {
        "currency": BASE_CURRENCY,
        "rate": None,
    }

    def build_entries(self) -> list[LedgerPosting]:
        total = cents(self.total)
        return [
            self.posting(AccountRole.CURRENCIES, -total, self.currency),
            self.posting(AccountRole.INTEREST, total),
        ]


class LoanTake(Transaction):
    """대출 실행 (통화 계정으로 입금, 대출 계정 증가)"""

    KIND = TxKind.LOAN_TAKE
    FIELDS = {
        "currency": BASE_CURRENCY,
    }

    def build_entries(self) -> list[LedgerPosting]:
        total = cents(self.total)
        return [
            self.posting(AccountRole.CURRENCIES, total, self.currency),
            self.posting(AccountRole.LOANS, -total, self.currency),
        ]


class LoanPay(Transaction):
    """대출 상환"""

    KIND = TxKind.LOAN_PAY
    FIELDS = {
        "currency": BASE_CURRENCY,
    }

    def build_entries(self) -> list[LedgerPosting]:
        total = cents(self.total)
        return [
            self.posting(AccountRole.LOANS, total, self.currency),
            self.posting(AccountRole.CURRENCIES, -total, self.currency),
        ]
