"""
배당 거래

현금 배당과 주식 배당. 원천징수 세금은 외화 배당이면 taxes.source,
기준 통화 배당이면 taxes.income 계정으로 분리.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from core.ledger.types import AccountRole, LedgerPosting
from core.tx.base import BASE_CURRENCY, NOT_SET, Transaction
from core.types import TxKind
from core.utils.num import cents

if TYPE_CHECKING:
    from core.stock.tracker import CostBasisTracker


class Dividend(Transaction):
    """현금 배당

    Attributes:
        amount: 배당 기준 보유 수량
        given: 1주당 배당금 (표기용)
        tax: 원천징수 세금 (total에 포함)
    """

    KIND = TxKind.DIVIDEND
    FIELDS = {
        "target": NOT_SET,
        "amount": NOT_SET,
        "currency": BASE_CURRENCY,
        "rate": NOT_SET,
        "tax": Decimal("0"),
        "given": None,
    }

    def tax_subkey(self) -> str:
        return "source" if self.is_foreign_currency() else "income"

    def build_entries(self) -> list[LedgerPosting]:
        total, tax = cents(self.total), cents(self.tax)
        entries = [
            self.posting(AccountRole.DIVIDENDS, -total),
            self.posting(AccountRole.CURRENCIES, total - tax, self.currency),
        ]
        if tax > 0:
            entries.append(self.posting(AccountRole.TAXES, tax, self.tax_subkey()))
        return entries

    def text_options(self) -> list[str]:
        options = []
        if self.has("given"):
            options.append("given")
        if self.tax > 0:
            options.append("tax")
        if self.is_foreign_currency():
            options.append("rate")
        return options


class StockDividend(Dividend):
    """주식 배당: target 보유로 source를 amount만큼 무상 취득

    total은 과세 대상 가치. 0이면 분개 항목 없음.
    """

    KIND = TxKind.STOCK_DIVIDEND
    FIELDS = {
        **Dividend.FIELDS,
        "source": NOT_SET,
        "stock": NOT_SET,
        "avg": NOT_SET,
    }

    def build_entries(self) -> list[LedgerPosting]:
        if cents(self.total) == 0:
            return []
        return super().build_entries()

    def update_stock(self, tracker: CostBasisTracker) -> None:
        level = tracker.add(self.amount, self.source, Decimal("0"))
        self.stock, self.avg = level.quantity, level.average

    def text_options(self) -> list[str]:
        options = ["stock", "average_now"]
        if self.is_foreign_currency():
            options.append("rate")
        return options
