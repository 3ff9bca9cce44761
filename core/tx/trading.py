"""
재고 이동 거래

매수/매도, 외부 이전(입고/출고), 상품 간 교환.
update_stock()으로 CostBasisTracker를 갱신하고 결과(stock/avg)를 필드에 저장하여
설명문에 표기되도록 함. 거래는 시간 오름차순으로 적용해야 함.
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

ZERO = Decimal("0")


def profit_or_loss(tx: Transaction, diff: Decimal) -> list[LedgerPosting]:
    """손익 분개

    diff = 처분 원가 - 회수 금액.
    diff > 0 이면 손실(차변), diff < 0 이면 이익(대변, 음수 금액), 0이면 항목 없음.
    """
    if diff > 0:
        return [tx.posting(AccountRole.LOSSES, diff)]
    if diff < 0:
        return [tx.posting(AccountRole.PROFITS, diff)]
    return []


def fee_posting(tx: Transaction, fee: Decimal) -> list[LedgerPosting]:
    return [tx.posting(AccountRole.FEES, fee)] if fee != 0 else []


class Buy(Transaction):
    """기준 통화(또는 외화)로 상품 매수

    total은 수수료를 포함한 지불 금액. 취득원가는 total - fee.
    """

    KIND = TxKind.BUY
    FIELDS = {
        "target": NOT_SET,
        "amount": NOT_SET,
        "currency": BASE_CURRENCY,
        "rate": NOT_SET,
        "fee": Decimal("0"),
        "stock": NOT_SET,
        "avg": NOT_SET,
    }

    def cost(self) -> Decimal:
        return cents(self.total) - cents(self.fee)

    def build_entries(self) -> list[LedgerPosting]:
        total = cents(self.total)
        return [
            self.posting(AccountRole.TARGETS, self.cost(), self.target),
            *fee_posting(self, cents(self.fee)),
            self.posting(AccountRole.CURRENCIES, -total, self.currency),
        ]

    def update_stock(self, tracker: CostBasisTracker) -> None:
        level = tracker.add(self.amount, self.target, self.cost())
        self.stock, self.avg = level.quantity, level.average

    def text_options(self) -> list[str]:
        options = ["stock"]
        if not self.config.flags.no_profit:
            options.append("average_now")
        if self.is_foreign_currency():
            options.append("rate")
        return options


class Sell(Transaction):
    """상품 매도

    amount는 음수 (처분 수량). avg는 매도 시점의 가중평균 단가.
    처분 원가 = -amount × avg, 손익 = 처분 원가 - total.
    no_profit 플래그가 켜져 있으면 손익 없이 total을 그대로 원가로 처리.
    """

    KIND = TxKind.SELL
    FIELDS = {
        "target": NOT_SET,
        "amount": NOT_SET,
        "currency": BASE_CURRENCY,
        "rate": NOT_SET,
        "fee": Decimal("0"),
        "stock": NOT_SET,
        "avg": NOT_SET,
    }

    def cost_basis(self) -> Decimal:
        """처분 원가 (센트 단위)"""
        return cents(-self.amount * self.avg)

    def build_entries(self) -> list[LedgerPosting]:
        total, fee = cents(self.total), cents(self.fee)
        proceeds = [
            self.posting(AccountRole.CURRENCIES, total - fee, self.currency),
            *fee_posting(self, fee),
        ]
        if self.config.flags.no_profit:
            return [*proceeds, self.posting(AccountRole.TARGETS, -total, self.target)]

        cost_basis = self.cost_basis()
        return [
            *proceeds,
            *profit_or_loss(self, cost_basis - total),
            self.posting(AccountRole.TARGETS, -cost_basis, self.target),
        ]

    def update_stock(self, tracker: CostBasisTracker) -> None:
        level = tracker.add(self.amount, self.target)
        self.stock, self.avg = level.quantity, level.average

    def text_options(self) -> list[str]:
        options = [] if self.config.flags.no_profit else ["average"]
        options.append("stock_left")
        if self.is_foreign_currency():
            options.append("rate")
        return options


class MoveIn(Transaction):
    """외부에서 서비스로 상품 이전

    상대 계정이 확정되지 않으므로 imbalance 계정으로 균형을 맞춤.
    """

    KIND = TxKind.MOVE_IN
    FIELDS = {
        "target": NOT_SET,
        "amount": NOT_SET,
        "stock": NOT_SET,
        "avg": NOT_SET,
    }

    def build_entries(self) -> list[LedgerPosting]:
        total = cents(self.total)
        return [
            self.posting(AccountRole.TARGETS, total, self.target),
            self.posting(AccountRole.IMBALANCE, -total),
        ]

    def update_stock(self, tracker: CostBasisTracker) -> None:
        level = tracker.add(self.amount, self.target, cents(self.total))
        self.stock, self.avg = level.quantity, level.average

    def text_options(self) -> list[str]:
        return ["stock"]


class MoveOut(Transaction):
    """서비스에서 외부로 상품 이전 (amount는 음수)"""

    KIND = TxKind.MOVE_OUT
    FIELDS = {
        "target": NOT_SET,
        "amount": NOT_SET,
        "stock": NOT_SET,
        "avg": NOT_SET,
    }

    def build_entries(self) -> list[LedgerPosting]:
        total = cents(self.total)
        return [
            self.posting(AccountRole.TARGETS, -total, self.target),
            self.posting(AccountRole.IMBALANCE, total),
        ]

    def update_stock(self, tracker: CostBasisTracker) -> None:
        level = tracker.add(self.amount, self.target)
        self.stock, self.avg = level.quantity, level.average

    def text_options(self) -> list[str]:
        return ["average", "stock_left"]


class Trade(Transaction):
    """상품 간 교환: source를 given만큼 주고 target을 amount만큼 받음

    given과 burn_amount는 음수 (처분 수량).
    burn: 세 번째 심볼(burn_target)을 평균 단가로 소모하여 수수료에 합산.
    total이 없으면 update_stock()에서 -given × avg2 + 소모 원가로 계산.

    trade_profit 플래그가 켜져 있고 rate(target 1단위의 기준 통화 시가)가 있으면
    target을 시가로 기록하고 매도와 같은 방식으로 손익을 인식.
    """

    KIND = TxKind.TRADE
    FIELDS = {
        "target": NOT_SET,
        "source": NOT_SET,
        "amount": NOT_SET,
        "given": NOT_SET,
        "fee": Decimal("0"),
        "burn_target": None,
        "burn_amount": None,
        "burn_avg": None,
        "rate": None,
        "stock": NOT_SET,
        "avg": NOT_SET,
        "stock2": NOT_SET,
        "avg2": NOT_SET,
    }

    def is_burning(self) -> bool:
        return self.has("burn_target") or self.has("burn_amount")

    def burn_cost(self) -> Decimal:
        """소모된 심볼의 원가 (센트 단위, 소모 없으면 0)"""
        if not self.is_burning():
            return ZERO
        return cents(-self.require("burn_amount") * self.require("burn_avg"))

    def is_profit_recognized(self) -> bool:
        return self.config.flags.trade_profit and self.has("rate")

    def market_value(self) -> Decimal:
        """받은 target의 시가 (센트 단위)"""
        return cents(self.amount * self.rate)

    def target_value(self) -> Decimal:
        """target 계정에 기록되는 금액 (= 취득원가)"""
        if self.is_profit_recognized():
            return self.market_value()
        return cents(self.total) - cents(self.fee) - self.burn_cost()

    def build_entries(self) -> list[LedgerPosting]:
        total = cents(self.total)
        burn_cost = self.burn_cost()
        fee = cents(self.fee) + burn_cost
        source_cost = total - burn_cost
        target_value = self.target_value()

        entries = [
            self.posting(AccountRole.TARGETS, target_value, self.target),
            *fee_posting(self, fee),
        ]
        if self.is_profit_recognized():
            entries.extend(profit_or_loss(self, total - target_value - fee))
        entries.append(self.posting(AccountRole.TARGETS, -source_cost, self.source))
        if burn_cost != 0:
            entries.append(self.posting(AccountRole.TARGETS, -burn_cost, self.burn_target))
        return entries

    def update_stock(self, tracker: CostBasisTracker) -> None:
        if self.is_burning():
            burn_target = self.require("burn_target")
            self.burn_avg = tracker.average_of(burn_target)
            tracker.add(self.require("burn_amount"), burn_target)

        level = tracker.add(self.given, self.source)
        self.stock2, self.avg2 = level.quantity, level.average

        if not self.has("total"):
            self.total = cents(-self.given * self.avg2) + self.burn_cost()

        level = tracker.add(self.amount, self.target, self.target_value())
        self.stock, self.avg = level.quantity, level.average

    def text_options(self) -> list[str]:
        options = ["burn"] if self.is_burning() else []
        options.extend(["stock", "average_now", "stock_left"])
        return options
