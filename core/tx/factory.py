"""
거래 생성 팩토리

거래 유형(kind) → 거래 클래스 매핑. 닫힌 집합이며 알 수 없는 유형은 거부.
"""

import logging
from datetime import datetime
from typing import Any, Mapping

from core.config.loader import LedgerConfig
from core.tx.base import Transaction, TxValidationError
from core.tx.cash import Deposit, FxIn, FxOut, Interest, LoanPay, LoanTake, Withdrawal
from core.tx.dividend import Dividend, StockDividend
from core.tx.misc import Error, Expense, Income
from core.tx.trading import Buy, MoveIn, MoveOut, Sell, Trade
from core.types import TxKind

logger = logging.getLogger(__name__)


TX_CLASSES: dict[TxKind, type[Transaction]] = {
    cls.KIND: cls
    for cls in (
        Deposit,
        Withdrawal,
        Buy,
        Sell,
        Dividend,
        StockDividend,
        FxIn,
        FxOut,
        Interest,
        LoanTake,
        LoanPay,
        MoveIn,
        MoveOut,
        Trade,
        Expense,
        Income,
        Error,
    )
}

# 모든 유형이 빠짐없이 등록되어 있어야 함
if set(TX_CLASSES) != set(TxKind):
    raise RuntimeError(
        f"등록되지 않은 거래 유형이 있습니다: {sorted(k.value for k in set(TxKind) - set(TX_CLASSES))}"
    )


def create_transaction(
    kind: TxKind | str,
    fields: Mapping[str, Any] | None,
    config: LedgerConfig,
    service: str | None = None,
    fund: str | None = None,
    tags: list[str] | None = None,
    time: datetime | None = None,
) -> Transaction:
    """거래 생성

    fields에 "tags"가 있으면 태그 목록으로 분리하여 사용.

    Args:
        kind: 거래 유형
        fields: 필드 값
        config: 원장 설정
        service: 서비스 이름
        fund: 펀드 이름
        tags: 태그 목록
        time: 거래 시각

    Returns:
        거래 유형에 맞는 Transaction 인스턴스

    Raises:
        TxValidationError: 알 수 없는 유형, 허용되지 않는 필드, 유효하지 않은 값
    """
    try:
        tx_kind = TxKind.parse(kind)
    except ValueError as e:
        raise TxValidationError(f"알 수 없는 거래 유형입니다: {kind!r}") from e

    data = dict(fields or {})
    field_tags = data.pop("tags", None)
    if tags is None and field_tags is not None:
        tags = list(field_tags)

    tx = TX_CLASSES[tx_kind](
        config,
        data,
        service=service,
        fund=fund,
        tags=tags,
        time=time,
    )
    logger.debug(f"거래 생성: {tx!r}")
    return tx
