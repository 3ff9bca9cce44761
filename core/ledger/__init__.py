"""
복식부기 모듈

분개 항목(LedgerPosting), 계정 잔액, 거래 원장, 설명문 이력 재생.

사용 예시:
```python
from core.ledger import AccountBalances, Ledger

ledger = Ledger(config)
ledger.add(transactions)

balances = AccountBalances.from_config(config)
ledger.apply(tracker, balances)
balances.balance_of("1910")
```
"""

from core.ledger.balances import AccountBalances
from core.ledger.history import HistoricalState, find_price_and_stock, seed_tracker
from core.ledger.ledger import Ledger, UnbalancedEntryError
from core.ledger.types import AccountRole, LedgerPosting, is_balanced, postings_total

__all__ = [
    # 타입
    "AccountRole",
    "LedgerPosting",
    "is_balanced",
    "postings_total",
    # 잔액 / 원장
    "AccountBalances",
    "Ledger",
    "UnbalancedEntryError",
    # 이력 재생
    "HistoricalState",
    "find_price_and_stock",
    "seed_tracker",
]
