"""
설명문 문법

템플릿의 자리표시자(<표기>{이름})를 해석하여
- 생성 쪽: 자리표시자 목록 (render)
- 해석 쪽: 전체 일치 정규식 + 캡처 순서별 변환 함수 표 (parser)
를 만듦. 언어/기준 통화별로 한 번만 컴파일하여 캐시 (이후 읽기 전용).
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Mapping

from core.config.loader import ConfigurationError
from core.text.catalog import get_catalog
from core.utils.currency import symbol_to_text, text_to_symbol
from core.utils.num import parse_currency, parse_decimal

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"([X=C+#$£])\{(\w+|\$)\}")


class Sigil(str, Enum):
    """자리표시자 표기"""

    CONFIG = "C"  # 서비스 설정 변수
    RAW = "="  # 값 그대로
    SIGNED = "+"  # 부호 있는 소수
    DECIMAL = "#"  # 소수
    CURRENCY = "$"  # 통화 금액
    SYMBOL = "£"  # 통화 기호
    SPECIAL = "X"  # 특수 표기 (X{$}: 기준 통화 기호)


# 표기별 캡처 정규식
# DECIMAL은 보유량 초과 처분 후의 음수 재고도 해석하도록 선택적 '-' 허용
SLOT_PATTERNS: dict[Sigil, str] = {
    Sigil.CONFIG: r".+?",
    Sigil.RAW: r".+?",
    Sigil.SIGNED: r"[-+][0-9.]+",
    Sigil.DECIMAL: r"-?[0-9.]+",
    Sigil.CURRENCY: r"-?[0-9.,]+",
    Sigil.SYMBOL: r".+?",
}

# 표기별 변환 함수 (ValueError → 불일치)
CONVERSIONS: dict[Sigil, Callable[[str], Any]] = {
    Sigil.CONFIG: str,
    Sigil.RAW: str,
    Sigil.SIGNED: parse_decimal,
    Sigil.DECIMAL: parse_decimal,
    Sigil.CURRENCY: parse_currency,
    Sigil.SYMBOL: symbol_to_text,
}


@dataclass(frozen=True)
class Slot:
    """캡처 그룹 하나 (캡처 순서대로 나열)"""

    sigil: Sigil
    name: str


@dataclass(frozen=True)
class MatchResult:
    """일치 결과

    Attributes:
        fields: 필드 이름 → 변환된 값
        variables: C{...} 설정 변수 이름 → 캡처된 텍스트
    """

    fields: dict[str, Any]
    variables: dict[str, str]


@dataclass(frozen=True)
class Matcher:
    """템플릿 하나의 컴파일 결과"""

    key: str
    template: str
    regex: re.Pattern
    slots: tuple[Slot, ...]

    def match(self, text: str) -> MatchResult | None:
        """텍스트 전체가 템플릿과 일치하면 캡처 값을 변환하여 반환

        같은 필드가 두 번 나오면 값이 같아야 함.
        """
        m = self.regex.fullmatch(text)
        if not m:
            return None
        fields: dict[str, Any] = {}
        variables: dict[str, str] = {}
        for slot, raw in zip(self.slots, m.groups()):
            try:
                value = CONVERSIONS[slot.sigil](raw)
            except ValueError:
                logger.debug(f"변환 실패: {self.key} {slot.sigil.value}{{{slot.name}}} = {raw!r}")
                return None
            target = variables if slot.sigil == Sigil.CONFIG else fields
            if slot.name in target and target[slot.name] != value:
                return None
            target[slot.name] = value
        return MatchResult(fields=fields, variables=variables)


def placeholders(template: str) -> list[tuple[Sigil, str]]:
    """템플릿의 자리표시자 목록 (왼쪽부터)

    Raises:
        ConfigurationError: 지원하지 않는 표기 (예: X{var}, ={$})
    """
    ret = []
    for m in PLACEHOLDER_PATTERN.finditer(template):
        sigil, name = Sigil(m.group(1)), m.group(2)
        if (sigil == Sigil.SPECIAL) != (name == "$"):
            raise ConfigurationError(f"지원하지 않는 템플릿 표기입니다: {m.group(0)!r} in {template!r}")
        ret.append((sigil, name))
    return ret


def compile_template(key: str, template: str, currency: str) -> Matcher:
    """템플릿을 전체 일치 정규식으로 컴파일

    리터럴 텍스트는 이스케이프하고 자리표시자는 캡처 그룹으로 바꿈.
    X{$}는 기준 통화 기호 리터럴로 바꿈.
    """
    placeholders(template)
    parts: list[str] = []
    slots: list[Slot] = []
    pos = 0
    for m in PLACEHOLDER_PATTERN.finditer(template):
        parts.append(re.escape(template[pos:m.start()]))
        sigil, name = Sigil(m.group(1)), m.group(2)
        if sigil == Sigil.SPECIAL:
            parts.append(re.escape(text_to_symbol(currency)))
        else:
            parts.append(f"({SLOT_PATTERNS[sigil]})")
            slots.append(Slot(sigil=sigil, name=name))
        pos = m.end()
    parts.append(re.escape(template[pos:]))
    return Matcher(key=key, template=template, regex=re.compile("".join(parts)), slots=tuple(slots))


@dataclass(frozen=True)
class Grammar:
    """언어 하나의 컴파일된 문법

    Attributes:
        language: 언어
        currency: 기준 통화
        main: 주 템플릿 Matcher (선언 순서)
        options: 거래 유형 → 선택 구절 Matcher (선언 순서)
    """

    language: str
    currency: str
    main: tuple[Matcher, ...]
    options: Mapping[str, tuple[Matcher, ...]]


@lru_cache(maxsize=None)
def get_grammar(language: str, currency: str) -> Grammar:
    """언어/기준 통화별 문법 (최초 호출 시 컴파일 후 캐시)"""
    catalog = get_catalog(language)
    main = tuple(
        compile_template(key, template, currency)
        for key, template in catalog["tx"].items()
    )
    options = {
        kind: tuple(
            compile_template(name, template, currency)
            for name, template in group.items()
        )
        for kind, group in catalog["options"].items()
    }
    logger.debug(f"문법 컴파일 완료: {language}/{currency} (주 템플릿 {len(main)}개)")
    return Grammar(language=language, currency=currency, main=main, options=options)


__all__ = [
    "Grammar",
    "MatchResult",
    "Matcher",
    "PLACEHOLDER_PATTERN",
    "Sigil",
    "Slot",
    "compile_template",
    "get_grammar",
    "placeholders",
]
