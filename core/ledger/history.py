"""
이력 재생

장부 저장소의 설명문만으로 특정 시점의 보유 수량/평균 단가를 복원.
최신 항목부터 거꾸로 훑으며 심볼별로 처음 발견한(가장 최근) 값을 사용.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterable

from core.types import TxKind

if TYPE_CHECKING:
    from core.stock.tracker import CostBasisTracker
    from core.text.parser import DecodedText, DescriptionParser

logger = logging.getLogger(__name__)


@dataclass
class HistoricalState:
    """복원된 상태

    Attributes:
        stock: 심볼 → 보유 수량
        avg: 심볼 → 가중평균 단가
    """

    stock: dict[str, Decimal] = field(default_factory=dict)
    avg: dict[str, Decimal] = field(default_factory=dict)


def _levels(decoded: DecodedText) -> list[tuple[Any, Any, Any]]:
    """설명문에 표기된 (심볼, 수량, 평균) 목록

    주식 배당은 받은 심볼(source) 기준, 교환은 source 잔량도 포함.
    """
    fields = decoded.fields
    if decoded.kind == TxKind.STOCK_DIVIDEND:
        return [(fields.get("source"), fields.get("stock"), fields.get("avg"))]
    levels = [(fields.get("target"), fields.get("stock"), fields.get("avg"))]
    if decoded.kind == TxKind.TRADE:
        levels.append((fields.get("source"), fields.get("stock2"), fields.get("avg2")))
    return levels


def find_price_and_stock(
    rows: Iterable[tuple[datetime, str]],
    targets: Iterable[str],
    parser: DescriptionParser,
    date: datetime | None = None,
) -> HistoricalState:
    """설명문 이력에서 심볼별 최신 보유 수량/평균 단가 찾기

    Args:
        rows: (시각, 설명문) 목록, 최신 항목부터
        targets: 찾을 심볼
        parser: 설명문 해석기
        date: 기준 시각 (이후 항목은 건너뜀, None이면 제한 없음)

    Returns:
        HistoricalState (평균을 찾지 못한 심볼은 0)
    """
    wanted = set(targets)
    state = HistoricalState()

    for time, description in rows:
        if date is not None and time > date:
            logger.warning(f"기준 시각 이후 항목 건너뜀: {time} {description!r}")
            continue
        decoded = parser.decode(description)
        if decoded is None:
            continue
        for symbol, stock, avg in _levels(decoded):
            if symbol not in wanted:
                continue
            if stock is not None and symbol not in state.stock:
                state.stock[symbol] = stock
            if avg is not None and symbol not in state.avg:
                state.avg[symbol] = avg
        if wanted <= set(state.stock) and wanted <= set(state.avg):
            break

    for symbol in wanted:
        state.avg.setdefault(symbol, Decimal("0"))
    missing = sorted(wanted - set(state.stock))
    if missing:
        logger.info(f"이력에서 보유 수량을 찾지 못한 심볼: {missing}")
    return state


def seed_tracker(tracker: CostBasisTracker, state: HistoricalState) -> None:
    """복원한 상태로 추적기 초기화"""
    tracker.bulk_set_quantities(state.stock)
    tracker.bulk_set_averages(state.avg)
    logger.debug(f"추적기 초기화: 수량 {len(state.stock)}개, 평균 {len(state.avg)}개")
