"""
거래 유형 모듈

닫힌 거래 유형 집합. 각 유형은 필드 검증, 분개 생성(to_entries),
설명문 생성(to_text), 재고 반영(update_stock)을 구현.

사용 예시:
```python
from core.tx import create_transaction

tx = create_transaction("sell", {"total": 1200, "target": "ETH", "amount": -2, "avg": 500}, config)
tx.to_entries()
# [LedgerPosting("EUR", 1200.00), LedgerPosting("PROFITS", -200.00), LedgerPosting("ETH", -1000.00)]
```
"""

from core.tx.base import (
    BASE_CURRENCY,
    FIELD_VALIDATORS,
    NOT_SET,
    FieldNotSetError,
    Transaction,
    TxValidationError,
)
from core.tx.cash import Deposit, FxIn, FxOut, Interest, LoanPay, LoanTake, Withdrawal
from core.tx.dividend import Dividend, StockDividend
from core.tx.factory import TX_CLASSES, create_transaction
from core.tx.misc import Error, Expense, Income
from core.tx.trading import Buy, MoveIn, MoveOut, Sell, Trade

__all__ = [
    # 기본
    "Transaction",
    "TxValidationError",
    "FieldNotSetError",
    "NOT_SET",
    "BASE_CURRENCY",
    "FIELD_VALIDATORS",
    # 팩토리
    "TX_CLASSES",
    "create_transaction",
    # 유형
    "Deposit",
    "Withdrawal",
    "Buy",
    "Sell",
    "Dividend",
    "StockDividend",
    "FxIn",
    "FxOut",
    "Interest",
    "LoanTake",
    "LoanPay",
    "MoveIn",
    "MoveOut",
    "Trade",
    "Expense",
    "Income",
    "Error",
]
