"""
거래 기본 클래스

모든 거래 유형의 공통 동작:
- 필드 검증 (설정 시 즉시 검증, 읽을 때 미설정이면 오류)
- 분개 생성 (to_entries), 설명문 생성 (to_text), 재고 반영 (update_stock)
- 하위 거래 (예: 매수 대금을 위한 대출 실행)
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, ClassVar

from core.ledger.types import AccountRole, LedgerPosting
from core.types import STOCK_MOVING_KINDS, TxKind
from core.utils.currency import is_currency_code
from core.utils.num import to_decimal

if TYPE_CHECKING:
    from core.config.loader import LedgerConfig
    from core.stock.tracker import CostBasisTracker
    from core.text.render import TextRenderer


class TxValidationError(ValueError):
    """거래 필드 검증 오류"""

    pass


class FieldNotSetError(TxValidationError):
    """설정되지 않은 필드 읽기 오류"""

    pass


class _Marker:
    """기본값 표식"""

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name


# 기본값 없음 (반드시 설정해야 읽을 수 있음)
NOT_SET: Any = _Marker("NOT_SET")
# 설정의 기준 통화를 기본값으로 사용
BASE_CURRENCY: Any = _Marker("BASE_CURRENCY")

SYMBOL_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9*._-]*$")
# 설명문 구절 구분자 ", " 와 평가액 꼬리 " | 숫자" 는 notes에 쓸 수 없음
NOTES_FORBIDDEN = re.compile(r", | \| -?[0-9.,]+")


# -----------------------------------------------------------------------------
# 필드 검증 함수
# -----------------------------------------------------------------------------

def _number(name: str, value: Any) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError as e:
        raise TxValidationError(f"'{name}'에 유효하지 않은 값입니다: {value!r}") from e


def _ge_zero(name: str, value: Any) -> Decimal:
    number = _number(name, value)
    if number < 0:
        raise TxValidationError(f"'{name}'은(는) 0 이상이어야 합니다: {value!r}")
    return number


def _gt_zero(name: str, value: Any) -> Decimal:
    number = _number(name, value)
    if number <= 0:
        raise TxValidationError(f"'{name}'은(는) 0보다 커야 합니다: {value!r}")
    return number


def _currency(name: str, value: Any) -> str:
    if not is_currency_code(value):
        raise TxValidationError(f"'{name}'에 유효하지 않은 통화 코드입니다: {value!r}")
    return value


def _symbol(name: str, value: Any) -> str:
    if not isinstance(value, str) or not SYMBOL_PATTERN.match(value):
        raise TxValidationError(f"'{name}'에 유효하지 않은 심볼입니다: {value!r}")
    return value


def _text(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TxValidationError(f"'{name}'은(는) 문자열이어야 합니다: {value!r}")
    if NOTES_FORBIDDEN.search(value):
        raise TxValidationError(f"'{name}'에 설명문 구분자를 쓸 수 없습니다: {value!r}")
    return value


# 필드 풀: 모든 거래 유형이 공유하는 필드 이름 → 검증 함수
FIELD_VALIDATORS: dict[str, Callable[[str, Any], Any]] = {
    "total": _ge_zero,
    "currency": _currency,
    "target": _symbol,
    "source": _symbol,
    "amount": _number,
    "given": _number,
    "fee": _ge_zero,
    "tax": _ge_zero,
    "vat": _ge_zero,
    "rate": _gt_zero,
    "notes": _text,
    "stock": _number,
    "avg": _number,
    "stock2": _number,
    "avg2": _number,
    "burn_target": _symbol,
    "burn_amount": _number,
    "burn_avg": _number,
}


class Transaction:
    """거래 기본 클래스

    하위 클래스는 KIND와 FIELDS(필드 → 기본값)를 선언하고
    build_entries(), build_text(), update_stock()을 구현.
    total은 모든 유형에 공통이며 기본값이 없음.

    필드는 속성처럼 읽고 쓸 수 있음:
    ```python
    tx = create_transaction("buy", {"total": 100, "target": "BTC"}, config)
    tx.amount = Decimal("0.5")
    tx.stock  # FieldNotSetError
    ```
    """

    KIND: ClassVar[TxKind]
    FIELDS: ClassVar[dict[str, Any]] = {}

    def __init__(
        self,
        config: LedgerConfig,
        data: dict[str, Any] | None = None,
        service: str | None = None,
        fund: str | None = None,
        tags: list[str] | None = None,
        time: datetime | None = None,
    ) -> None:
        """
        Args:
            config: 원장 설정 (기준 통화, 계정 역할, 서비스 변수)
            data: 필드 값
            service: 거래가 발생한 서비스 이름
            fund: 펀드 이름
            tags: 태그 목록 (설명문 앞 [Tag] 표기)
            time: 거래 시각 (Ledger 적용 순서)

        Raises:
            TxValidationError: 허용되지 않는 필드나 유효하지 않은 값
        """
        object.__setattr__(self, "_data", {})
        self.config = config
        self.service = service
        self.fund = fund
        self.tags = list(tags or [])
        self.time = time
        self.sub_txs: list[Transaction] = []
        for name, value in (data or {}).items():
            self.set(name, value)

    # -------------------------------------------------------------------------
    # 필드 접근
    # -------------------------------------------------------------------------

    @classmethod
    def declared_fields(cls) -> dict[str, Any]:
        """이 유형이 허용하는 필드와 기본값"""
        return {"total": NOT_SET, **cls.FIELDS}

    def _default(self, name: str) -> Any:
        default = self.declared_fields().get(name, NOT_SET)
        if default is BASE_CURRENCY:
            return self.config.currency
        return default

    def get(self, name: str) -> Any:
        """필드 값 읽기

        Raises:
            FieldNotSetError: 값도 기본값도 없는 경우
        """
        if name in self._data:
            return self._data[name]
        default = self._default(name)
        if default is NOT_SET:
            raise FieldNotSetError(f"{self.KIND.value} 거래의 '{name}' 필드가 설정되지 않았습니다")
        return default

    def set(self, name: str, value: Any) -> None:
        """필드 값 설정 (즉시 검증)

        기본값이 None인 필드만 None을 허용.

        Raises:
            TxValidationError: 허용되지 않는 필드나 유효하지 않은 값
        """
        declared = self.declared_fields()
        if name not in declared:
            raise TxValidationError(f"{self.KIND.value} 거래에 허용되지 않는 필드입니다: '{name}'")
        if value is None:
            if declared[name] is not None:
                raise TxValidationError(f"'{name}'에 None을 설정할 수 없습니다")
            self._data[name] = None
            return
        self._data[name] = FIELD_VALIDATORS[name](name, value)

    def require(self, name: str) -> Any:
        """None이 아닌 필드 값 읽기

        Raises:
            FieldNotSetError: 값이 없거나 None인 경우
        """
        value = self.get(name)
        if value is None:
            raise FieldNotSetError(f"{self.KIND.value} 거래의 '{name}' 필드가 설정되지 않았습니다")
        return value

    def has(self, name: str) -> bool:
        """필드에 값이 있는지 확인 (None 값은 없음으로 간주)"""
        if name not in self.declared_fields():
            return False
        if name in self._data:
            return self._data[name] is not None
        default = self._default(name)
        return default is not NOT_SET and default is not None

    def __getattr__(self, name: str) -> Any:
        # 일반 속성 조회가 실패했을 때만 호출됨
        if name.startswith("_") or name not in FIELD_VALIDATORS:
            raise AttributeError(f"{type(self).__name__} 객체에 '{name}' 속성이 없습니다")
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in FIELD_VALIDATORS:
            self.set(name, value)
        else:
            object.__setattr__(self, name, value)

    @property
    def kind(self) -> TxKind:
        return self.KIND

    def fields(self) -> dict[str, Any]:
        """명시적으로 설정된 필드 복사본"""
        return dict(self._data)

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (디버그/직렬화용)"""
        return {
            "kind": self.KIND.value,
            "service": self.service,
            "fund": self.fund,
            "tags": list(self.tags),
            "time": self.time.isoformat() if self.time else None,
            "fields": self.fields(),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.fields()!r}, service={self.service!r})"

    # -------------------------------------------------------------------------
    # 하위 거래
    # -------------------------------------------------------------------------

    def add_sub_tx(self, sub: Transaction) -> None:
        """하위 거래 추가

        하위 거래의 분개 항목은 부모 항목 뒤에 설명문과 함께 붙음.
        부모 설명문에는 영향 없음.
        """
        self.sub_txs.append(sub)

    # -------------------------------------------------------------------------
    # 분개 / 설명문 / 재고
    # -------------------------------------------------------------------------

    def account(self, role: AccountRole | str, subkey: str | None = None) -> str:
        """계정 역할을 계정 번호로 해석"""
        role = role.value if isinstance(role, AccountRole) else role
        return self.config.resolve_account(role, subkey)

    def posting(
        self,
        role: AccountRole | str,
        amount: Decimal,
        subkey: str | None = None,
    ) -> LedgerPosting:
        """역할 기반 분개 항목 생성"""
        return LedgerPosting(account_number=self.account(role, subkey), amount=amount)

    def build_entries(self) -> list[LedgerPosting]:
        """이 거래 자체의 분개 항목 (하위 클래스 구현)"""
        raise NotImplementedError

    def to_entries(self) -> list[LedgerPosting]:
        """분개 항목 (하위 거래 포함)

        Raises:
            FieldNotSetError: 필요한 필드가 없는 경우
            ConfigurationError: 계정 역할이 설정되지 않은 경우
        """
        entries = self.build_entries()
        for sub in self.sub_txs:
            description = sub.to_text()
            entries.extend(
                LedgerPosting(p.account_number, p.amount, description)
                for p in sub.to_entries()
            )
        return entries

    def template_keys(self) -> list[str]:
        """주 템플릿 키 후보 (앞쪽 우선)"""
        return [self.KIND.value]

    def text_options(self) -> list[str]:
        """설명문에 붙일 선택 구절 이름 (기본: 없음)"""
        return []

    def build_text(self, text: TextRenderer) -> str:
        """설명문 생성: 주 템플릿 + 선택 구절"""
        options = [text.option(name, self) for name in self.text_options()]
        return text.with_options(text.tx(self), options)

    def to_text(self) -> str:
        """설명문

        Raises:
            FieldNotSetError: 템플릿이 참조하는 필드가 없는 경우
            ConfigurationError: 템플릿이나 서비스 변수가 없는 경우
        """
        from core.text.render import TextRenderer

        return self.build_text(TextRenderer(self.config))

    def update_stock(self, tracker: CostBasisTracker) -> None:
        """재고 반영 (기본: 재고 변화 없음)

        같은 경제적 사건에 대해 두 번 호출하면 안 됨.
        """
        return None

    def is_stock_moving(self) -> bool:
        """보유 수량을 바꾸는 유형인지"""
        return self.KIND in STOCK_MOVING_KINDS

    def is_foreign_currency(self) -> bool:
        """거래 통화가 기준 통화와 다른지"""
        return self.has("currency") and self.get("currency") != self.config.currency
