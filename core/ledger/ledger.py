"""
거래 원장

가져온 거래들을 모아 시간 오름차순으로 재고와 잔액에 반영.
가중평균은 이력의 누적 계산이므로 적용 순서가 결과를 결정함.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from core.ledger.balances import AccountBalances
from core.ledger.types import LedgerPosting, is_balanced, postings_total

if TYPE_CHECKING:
    from core.config.loader import LedgerConfig
    from core.stock.tracker import CostBasisTracker
    from core.tx.base import Transaction

logger = logging.getLogger(__name__)


class UnbalancedEntryError(Exception):
    """분개 합계가 0이 아닌 거래"""

    pass


def _order_key(tx: Transaction) -> tuple:
    # 시각이 없는 거래가 먼저
    return (tx.time is not None, tx.time)


class Ledger:
    """거래 모음

    같은 거래는 한 번만 적용됨 (apply를 여러 번 호출해도 새 거래만 반영).

    사용 예시:
    ```python
    ledger = Ledger(config)
    ledger.add(transactions)
    results = ledger.apply(tracker, balances)
    ```
    """

    def __init__(self, config: LedgerConfig) -> None:
        self.config = config
        self._transactions: list[Transaction] = []
        self._applied: set[int] = set()

    def add(self, txs: Transaction | Iterable[Transaction]) -> None:
        """거래 추가 (하나 또는 여러 개)"""
        if hasattr(txs, "to_entries"):
            txs = [txs]
        for tx in txs:
            self._transactions.append(tx)

    @property
    def transactions(self) -> list[Transaction]:
        """시간 오름차순 거래 목록 (같은 시각은 추가 순서)"""
        return sorted(self._transactions, key=_order_key)

    def __len__(self) -> int:
        return len(self._transactions)

    def targets(self) -> list[str]:
        """거래가 참조하는 상품 심볼 (정렬)"""
        symbols: set[str] = set()
        for tx in self._transactions:
            if not tx.is_stock_moving():
                continue
            for name in ("target", "source", "burn_target"):
                if tx.has(name):
                    symbols.add(tx.get(name))
        return sorted(symbols)

    def currencies(self) -> list[str]:
        """거래가 참조하는 통화 코드 (기준 통화 포함, 정렬)"""
        codes = {self.config.currency}
        for tx in self._transactions:
            if tx.has("currency"):
                codes.add(tx.get("currency"))
        return sorted(codes)

    def apply(
        self,
        tracker: CostBasisTracker,
        balances: AccountBalances | None = None,
    ) -> list[tuple[Transaction, list[LedgerPosting]]]:
        """아직 적용하지 않은 거래를 시간 순으로 재고/잔액에 반영

        거래마다 update_stock() 후 to_entries() 순서로 처리
        (매도 손익은 재고 반영 시 기록된 평균 단가로 계산).

        Returns:
            (거래, 분개 항목) 목록

        Raises:
            UnbalancedEntryError: 분개 합계가 0이 아닌 경우
                (실패한 거래의 재고 변경은 되돌림)
        """
        results = []
        for tx in self.transactions:
            if id(tx) in self._applied:
                continue
            saved = tracker.snapshot()
            try:
                tx.update_stock(tracker)
                entries = tx.to_entries()
                if not is_balanced(entries):
                    raise UnbalancedEntryError(
                        f"분개 합계가 0이 아닙니다: {tx!r} (합계 {postings_total(entries)})"
                    )
            except Exception:
                # 실패한 거래의 재고 변경 취소
                tracker.restore(saved)
                raise
            if balances is not None:
                balances.apply(entries)
            self._applied.add(id(tx))
            results.append((tx, entries))
            logger.debug(f"거래 적용: {tx.kind.value} {tx.time} ({len(entries)}개 항목)")

        logger.info(f"원장 적용 완료: {len(results)}건 (전체 {len(self._transactions)}건)")
        return results
