"""
가져오기 디스크립터 (Pydantic)

증권사/거래소 CSV 가져오기 어댑터가 만드는 표준화된 거래 표현.
입력 경계에서 타입/범위를 검증한 뒤 팩토리로 거래를 생성.
모든 금액/수량은 Decimal 타입 사용.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

from core.config.loader import LedgerConfig
from core.tx import Transaction, create_transaction
from core.types import TxKind
from core.utils.currency import is_currency_code

# 거래 필드가 아닌 메타데이터 항목
_META_FIELDS = {"kind", "tags", "service", "fund", "time"}


class TransactionDescriptor(BaseModel):
    """표준화된 거래 디스크립터

    유형별로 허용되는 필드가 다르며, 허용되지 않는 필드는 to_transaction()에서 거부됨.
    total이 없는 교환(trade)은 재고 반영 시 원가로 계산됨.
    """

    kind: TxKind = Field(..., description="거래 유형")
    total: Decimal | None = Field(default=None, ge=0, description="기준 통화 총액")
    currency: str | None = Field(default=None, description="거래 통화 (ISO 4217)")
    target: str | None = Field(default=None, description="대상 심볼 / 분류 키")
    source: str | None = Field(default=None, description="교환 시 주는 심볼")
    amount: Decimal | None = Field(default=None, description="대상 수량 (처분은 음수)")
    given: Decimal | None = Field(default=None, description="주는 수량 / 1주당 배당금")
    fee: Decimal | None = Field(default=None, ge=0, description="수수료")
    tax: Decimal | None = Field(default=None, ge=0, description="원천징수 세금")
    rate: Decimal | None = Field(default=None, gt=0, description="환율 / 시가")
    vat: Decimal | None = Field(default=None, ge=0, description="부가세")
    notes: str | None = Field(default=None, description="메모")
    burn_target: str | None = Field(default=None, description="소모 심볼")
    burn_amount: Decimal | None = Field(default=None, description="소모 수량 (음수)")
    tags: list[str] = Field(default_factory=list, description="태그 목록")
    service: str | None = Field(default=None, description="서비스 이름")
    fund: str | None = Field(default=None, description="펀드 이름")
    time: datetime | None = Field(default=None, description="거래 시각")

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "kind": "buy",
                    "total": "1000.00",
                    "target": "BTC",
                    "amount": "0.025",
                    "fee": "1.50",
                    "service": "Coinbase",
                    "time": "2024-03-01T12:00:00+00:00",
                },
                {
                    "kind": "dividend",
                    "total": "4.30",
                    "currency": "USD",
                    "target": "TSLA",
                    "amount": "5",
                    "given": "0.02",
                    "rate": "0.86",
                },
            ]
        },
    }

    @field_validator("currency")
    @classmethod
    def _check_currency(cls, value: str | None) -> str | None:
        if value is not None and not is_currency_code(value):
            raise ValueError(f"유효하지 않은 통화 코드입니다: {value!r}")
        return value

    def fields(self) -> dict[str, Any]:
        """값이 있는 거래 필드 (메타데이터 제외)"""
        return self.model_dump(exclude=_META_FIELDS, exclude_none=True)

    def to_transaction(self, config: LedgerConfig) -> Transaction:
        """팩토리로 거래 생성

        Raises:
            TxValidationError: 유형에 허용되지 않는 필드나 유효하지 않은 값
        """
        return create_transaction(
            self.kind,
            self.fields(),
            config,
            service=self.service,
            fund=self.fund,
            tags=list(self.tags),
            time=self.time,
        )
