"""
타입 정의 모듈

거래 유형 Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class TxKind(str, Enum):
    """거래 유형 (닫힌 집합)

    값은 설명문 템플릿 키와 가져오기(import) 디스크립터의 kind 값으로 그대로 사용됨.
    """

    DEPOSIT = "deposit"  # 은행 → 기준 통화 계정 입금
    WITHDRAWAL = "withdrawal"  # 기준 통화 계정 → 은행 출금
    BUY = "buy"  # 매수
    SELL = "sell"  # 매도
    DIVIDEND = "dividend"  # 현금 배당
    STOCK_DIVIDEND = "stock-dividend"  # 주식 배당
    FX_IN = "fx-in"  # 환전 (target 통화 취득)
    FX_OUT = "fx-out"  # 환전 (target 통화 처분)
    INTEREST = "interest"  # 대출 이자 지급
    LOAN_TAKE = "loan-take"  # 대출 실행
    LOAN_PAY = "loan-pay"  # 대출 상환
    MOVE_IN = "move-in"  # 외부 → 시스템 내 이전
    MOVE_OUT = "move-out"  # 시스템 → 외부 이전
    TRADE = "trade"  # 상품 간 교환
    EXPENSE = "expense"  # 기타 비용
    INCOME = "income"  # 기타 수익
    ERROR = "error"  # 가져오기 실패 항목

    @classmethod
    def parse(cls, value: "str | TxKind") -> "TxKind":
        """문자열 또는 TxKind를 TxKind로 변환

        Raises:
            ValueError: 알 수 없는 거래 유형
        """
        if isinstance(value, TxKind):
            return value
        return cls(value)


# 보유 수량(재고)을 변경하는 거래 유형
STOCK_MOVING_KINDS: frozenset[TxKind] = frozenset({
    TxKind.BUY,
    TxKind.SELL,
    TxKind.MOVE_IN,
    TxKind.MOVE_OUT,
    TxKind.TRADE,
    TxKind.STOCK_DIVIDEND,
})
