"""
취득원가 추적기

심볼별 보유 수량과 가중평균 단가를 메모리에 보관.
가중평균법: 취득 시에만 평균을 다시 계산하고, 처분 시에는 평균을 유지.

주의: 가중평균은 이력의 누적 계산이므로 거래는 반드시 시간 오름차순으로 적용해야 함.
내부 잠금이 없으므로 호출자가 순차 적용을 보장해야 함.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping

from core.utils.num import to_decimal

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class StockLevel:
    """add() 결과

    Attributes:
        quantity: 변경 후 보유 수량
        average: 변경 후 가중평균 단가
    """

    quantity: Decimal
    average: Decimal


class CostBasisTracker:
    """심볼 → (보유 수량, 가중평균 단가) 저장소

    처음 참조되는 심볼은 수량 0, 평균 0으로 간주.
    어떤 연산도 예외를 던지지 않음 (보유량 초과 처분은 음수 수량으로 남고 경고만 기록).

    사용 예시:
    ```python
    tracker = CostBasisTracker()
    tracker.add(Decimal("4"), "ETH", Decimal("2000"))  # 4 ETH, 총 2000 EUR
    tracker.remove(Decimal("0.5"), "ETH")
    tracker.quantity_of("ETH")  # Decimal("3.5")
    tracker.average_of("ETH")   # Decimal("500")
    ```
    """

    def __init__(self) -> None:
        self._quantities: dict[str, Decimal] = {}
        self._averages: dict[str, Decimal] = {}

    def add(
        self,
        quantity: Decimal | int | float,
        symbol: str,
        cost: Decimal | int | float | None = None,
    ) -> StockLevel:
        """보유 수량 증감

        cost는 단가가 아니라 이번 변경으로 더해지는 **총** 금액.
        quantity > 0: 평균 = (기존 수량 × 기존 평균 + cost) / 새 수량
        quantity <= 0: 수량만 줄고 평균은 그대로 (cost 무시)

        Args:
            quantity: 증감 수량 (음수면 처분)
            symbol: 심볼
            cost: 총 취득 금액 (None이면 현재 평균값을 그대로 사용)

        Returns:
            변경 후 StockLevel
        """
        quantity = to_decimal(quantity)
        old_quantity = self.quantity_of(symbol)
        old_average = self.average_of(symbol)
        new_quantity = old_quantity + quantity

        self._quantities[symbol] = new_quantity
        self._averages.setdefault(symbol, ZERO)

        if quantity > 0:
            contribution = old_average if cost is None else to_decimal(cost)
            if new_quantity <= 0:
                # 음수 보유 상태에서의 취득: 평균 정의 불가
                self._averages[symbol] = ZERO
            else:
                self._averages[symbol] = (old_quantity * old_average + contribution) / new_quantity
        elif new_quantity < 0 <= old_quantity:
            logger.warning(
                f"보유량 초과 처분: {symbol} 보유 {old_quantity}, 처분 {-quantity} → {new_quantity}"
            )

        logger.debug(
            f"재고 변경: {symbol} {quantity:+} → 수량 {new_quantity}, 평균 {self._averages[symbol]}"
        )
        return StockLevel(quantity=new_quantity, average=self._averages[symbol])

    def remove(self, quantity: Decimal | int | float, symbol: str) -> StockLevel:
        """보유 수량 감소 (평균 유지)"""
        return self.add(-to_decimal(quantity), symbol, ZERO)

    def quantity_of(self, symbol: str) -> Decimal:
        """보유 수량 (모르는 심볼은 0)"""
        return self._quantities.get(symbol, ZERO)

    def average_of(self, symbol: str) -> Decimal:
        """가중평균 단가 (모르는 심볼은 0)"""
        return self._averages.get(symbol, ZERO)

    def bulk_set_averages(self, averages: Mapping[str, Decimal | int | float]) -> None:
        """외부에서 복원한 평균 단가로 초기화"""
        for symbol, average in averages.items():
            self._averages[symbol] = to_decimal(average)

    def bulk_set_quantities(self, quantities: Mapping[str, Decimal | int | float]) -> None:
        """외부에서 복원한 보유 수량으로 초기화"""
        for symbol, quantity in quantities.items():
            self._quantities[symbol] = to_decimal(quantity)

    def list_held_symbols(self) -> list[str]:
        """수량이 0이 아닌 심볼 (정렬)"""
        return sorted(s for s, q in self._quantities.items() if q != 0)

    def snapshot(self) -> dict[str, StockLevel]:
        """현재 상태 복사본"""
        symbols = set(self._quantities) | set(self._averages)
        return {
            s: StockLevel(quantity=self.quantity_of(s), average=self.average_of(s))
            for s in sorted(symbols)
        }

    def restore(self, snapshot: Mapping[str, StockLevel]) -> None:
        """snapshot() 시점 상태로 되돌림 (이후 추가된 심볼은 제거)"""
        self._quantities = {s: level.quantity for s, level in snapshot.items()}
        self._averages = {s: level.average for s, level in snapshot.items()}
