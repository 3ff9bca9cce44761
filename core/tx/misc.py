"""
기타 거래

분류(target)별 비용/수익 계정 거래와 가져오기 중 해석하지 못한 거래.
"""

from decimal import Decimal

from core.ledger.types import AccountRole, LedgerPosting
from core.tx.base import BASE_CURRENCY, NOT_SET, Transaction
from core.types import TxKind
from core.utils.num import cents


class _Categorized(Transaction):
    """target이 분류 키인 거래 (expenses.<target>, incomes.<target>)

    설명문 템플릿은 분류별 키(예: "expense.misc3")를 우선 사용.
    """

    def template_keys(self) -> list[str]:
        kind = self.KIND.value
        return [f"{kind}.{self.target.lower()}", kind]

    def text_options(self) -> list[str]:
        return ["notes"] if self.notes else []


class Expense(_Categorized):
    """기타 비용 (부가세 분리 가능)"""

    KIND = TxKind.EXPENSE
    FIELDS = {
        "target": NOT_SET,
        "amount": None,
        "currency": BASE_CURRENCY,
        "rate": None,
        "vat": None,
        "notes": "",
    }

    def build_entries(self) -> list[LedgerPosting]:
        total = cents(self.total)
        vat = cents(self.vat) if self.has("vat") else Decimal("0")
        entries = [self.posting(AccountRole.EXPENSES, total - vat, self.target)]
        if vat > 0:
            entries.append(self.posting(AccountRole.TAXES, vat, "vat"))
        entries.append(self.posting(AccountRole.CURRENCIES, -total, self.currency))
        return entries

    def text_options(self) -> list[str]:
        options = ["vat"] if self.has("vat") else []
        return options + super().text_options()


class Income(_Categorized):
    """기타 수익"""

    KIND = TxKind.INCOME
    FIELDS = {
        "target": NOT_SET,
        "amount": None,
        "currency": BASE_CURRENCY,
        "rate": None,
        "notes": "",
    }

    def build_entries(self) -> list[LedgerPosting]:
        total = cents(self.total)
        return [
            self.posting(AccountRole.CURRENCIES, total, self.currency),
            self.posting(AccountRole.INCOMES, -total, self.target),
        ]


class Error(Transaction):
    """해석하지 못한 거래

    notes가 "in"이면 target 계정(계정 번호)으로 total 입금, "out"이면 출금.
    상대 계정은 imbalance. 그 외에는 분개 항목 없음.
    """

    KIND = TxKind.ERROR
    FIELDS = {
        "target": None,
        "notes": "",
    }

    def build_entries(self) -> list[LedgerPosting]:
        direction = {"in": 1, "out": -1}.get(self.notes)
        if direction is None:
            return []
        total = cents(self.total) * direction
        return [
            LedgerPosting(account_number=self.require("target"), amount=total),
            self.posting(AccountRole.IMBALANCE, -total),
        ]

    def text_options(self) -> list[str]:
        return ["notes"] if self.notes else []
