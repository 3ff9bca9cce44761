"""
설명문 해석

장부 저장소에는 자유 텍스트 설명문만 남으므로, 과거 재고/평균 단가는
설명문을 다시 해석하여 복원해야 함.

해석 순서:
1. 뒤쪽 " | <금액> <통화>" 평가액 표기 제거
2. 앞쪽 [Tag] 표기를 태그 목록으로 분리 (여러 개 가능)
3. 뒤쪽 괄호 안의 선택 구절을 ", " 기준으로 분리
4. 주 템플릿을 선언 순서대로 시도 (첫 번째 일치 사용)
5. 해당 거래 유형의 선택 구절 템플릿으로 각 구절 해석, 필드 병합

일치하는 템플릿이 없으면 None (예외 아님). 이력 재생에서는 건너뛰기로 처리.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from core.config.loader import LedgerConfig
from core.text.catalog import kind_of_key
from core.text.grammar import Grammar, Matcher, get_grammar
from core.tx.base import Transaction, TxValidationError
from core.tx.factory import create_transaction
from core.types import TxKind

logger = logging.getLogger(__name__)

VALUATION_SUFFIX = re.compile(r"^(.*?) \| -?[0-9.,]+(?: .*)?$")
TAG_PREFIX = re.compile(r"^\[([a-zA-Z0-9]+)\]\s*(.*)$")
OPTIONS_SUFFIX = re.compile(r"^(.*?) \((.*)\)$")


@dataclass
class DecodedText:
    """해석 결과

    Attributes:
        kind: 거래 유형
        fields: 필드 값 (주 템플릿 + 선택 구절)
        tags: 태그 목록 (순서 유지)
        service: 태그나 C{...} 값으로 찾은 서비스 이름
        fund: 태그로 찾은 펀드 이름
        key: 일치한 주 템플릿 키
    """

    kind: TxKind
    fields: dict[str, Any]
    tags: list[str] = field(default_factory=list)
    service: str | None = None
    fund: str | None = None
    key: str = ""


class DescriptionParser:
    """설명문 → 거래 필드 해석기

    사용 예시:
    ```python
    parser = DescriptionParser(config)
    decoded = parser.decode("Osto +0.55555556 BTC (yht. 2.1 BTC)")
    decoded.kind    # TxKind.BUY
    decoded.fields  # {"amount": Decimal("0.55555556"), "target": "BTC", "stock": Decimal("2.1")}
    ```
    """

    def __init__(self, config: LedgerConfig) -> None:
        """
        Args:
            config: 원장 설정 (언어, 기준 통화, 서비스 변수/태그)

        Raises:
            ConfigurationError: 카탈로그가 없는 언어
        """
        self.config = config
        self.grammar: Grammar = get_grammar(config.language, config.currency)

    @staticmethod
    def split(text: str) -> tuple[list[str], str, list[str]]:
        """설명문을 (태그 목록, 본문, 선택 구절 목록)으로 분리"""
        text = text.strip()
        m = VALUATION_SUFFIX.match(text)
        if m:
            text = m.group(1)

        tags: list[str] = []
        while True:
            m = TAG_PREFIX.match(text)
            if not m:
                break
            tags.append(m.group(1))
            text = m.group(2)

        options: list[str] = []
        m = OPTIONS_SUFFIX.match(text)
        if m:
            text, options = m.group(1), m.group(2).split(", ")
        return tags, text, options

    def decode(self, text: str) -> DecodedText | None:
        """설명문 해석

        Returns:
            DecodedText, 일치하는 템플릿이 없으면 None
        """
        tags, body, options = self.split(text)
        for matcher in self.grammar.main:
            decoded = self._decode_with(matcher, body, options, tags)
            if decoded is not None:
                return decoded
        logger.debug(f"설명문 해석 실패: {text!r}")
        return None

    def parse(self, text: str) -> Transaction | None:
        """설명문을 해석하여 거래 골격 생성

        해석 결과가 필드 검증을 통과하지 못하면 불일치와 같이 None.
        """
        decoded = self.decode(text)
        if decoded is None:
            return None
        try:
            return create_transaction(
                decoded.kind,
                decoded.fields,
                self.config,
                service=decoded.service,
                fund=decoded.fund,
                tags=decoded.tags,
            )
        except TxValidationError as e:
            logger.debug(f"설명문 필드 검증 실패: {text!r} ({e})")
            return None

    # -------------------------------------------------------------------------
    # 내부
    # -------------------------------------------------------------------------

    def _decode_with(
        self,
        matcher: Matcher,
        body: str,
        options: list[str],
        tags: list[str],
    ) -> DecodedText | None:
        result = matcher.match(body)
        if result is None:
            return None

        kind_value, sub = kind_of_key(matcher.key)
        kind = TxKind(kind_value)
        fields = dict(result.fields)
        if sub is not None:
            fields["target"] = sub.upper()

        service = self.config.find_service(tags)
        fund = self.config.find_fund(tags)
        if service is None and result.variables:
            service = self._service_from(result.variables)
        if service is not None:
            known = self.config.service_variables(service, fund)
            for name, value in result.variables.items():
                if known.get(name) != value:
                    return None

        groups = self.grammar.options.get(kind.value, ())
        for fragment in options:
            option = next(
                (r for r in (m.match(fragment) for m in groups) if r is not None),
                None,
            )
            if option is None:
                return None
            for name, value in option.fields.items():
                if name in fields and fields[name] != value:
                    return None
                fields[name] = value

        return DecodedText(
            kind=kind,
            fields=fields,
            tags=list(tags),
            service=service,
            fund=fund,
            key=matcher.key,
        )

    def _service_from(self, variables: dict[str, str]) -> str | None:
        """C{...} 캡처 값으로 서비스 찾기 (모든 값이 일치하는 첫 번째 서비스)"""
        candidates: list[str] | None = None
        for name, value in variables.items():
            found = self.config.services_with(name, value)
            candidates = found if candidates is None else [s for s in candidates if s in found]
        return candidates[0] if candidates else None
