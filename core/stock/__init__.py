"""
재고 추적 모듈

심볼별 보유 수량과 가중평균 취득단가 관리
"""

from core.stock.tracker import CostBasisTracker, StockLevel

__all__ = [
    "CostBasisTracker",
    "StockLevel",
]
