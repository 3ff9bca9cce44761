"""
설명문 생성

거래 필드를 카탈로그 템플릿에 치환하여 한 줄 설명문을 만듦.
자리표시자는 왼쪽부터 한 번에 치환하며, 치환된 값은 다시 해석하지 않음.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Callable

from core.config.loader import ConfigurationError, LedgerConfig
from core.text.catalog import get_catalog
from core.text.grammar import PLACEHOLDER_PATTERN, Sigil, placeholders
from core.utils.currency import text_to_symbol
from core.utils.num import currency_text, trim, trim_signed

if TYPE_CHECKING:
    from core.tx.base import Transaction


# 표기별 값 → 텍스트 변환
FORMATTERS: dict[Sigil, Callable[[Any], str]] = {
    Sigil.RAW: str,
    Sigil.SIGNED: trim_signed,
    Sigil.DECIMAL: trim,
    Sigil.CURRENCY: currency_text,
    Sigil.SYMBOL: text_to_symbol,
}


class TextRenderer:
    """설명문 생성기

    사용 예시:
    ```python
    text = TextRenderer(config)
    text.with_options(text.tx(tx), [text.option("stock", tx)])
    # "Osto +0.55555556 BTC (yht. 2.1 BTC)"
    ```
    """

    def __init__(self, config: LedgerConfig) -> None:
        """
        Args:
            config: 원장 설정 (언어, 기준 통화, 서비스 변수)

        Raises:
            ConfigurationError: 카탈로그가 없는 언어
        """
        self.config = config
        self.catalog = get_catalog(config.language)

    def template_for(self, tx: Transaction) -> str:
        """거래의 주 템플릿 (후보 키 중 카탈로그에 있는 첫 번째)

        Raises:
            ConfigurationError: 카탈로그에 템플릿이 없는 경우
        """
        templates = self.catalog["tx"]
        for key in tx.template_keys():
            if key in templates:
                return templates[key]
        raise ConfigurationError(
            f"'{self.config.language}' 카탈로그에 템플릿이 없습니다: {tx.template_keys()}"
        )

    def tx(self, tx: Transaction) -> str:
        """주 템플릿 치환"""
        return self.substitute(self.template_for(tx), tx)

    def option(self, name: str, tx: Transaction) -> str:
        """선택 구절 치환

        Raises:
            ConfigurationError: 거래 유형에 해당 선택 구절이 없는 경우
        """
        group = self.catalog["options"].get(tx.kind.value, {})
        if name not in group:
            raise ConfigurationError(
                f"'{self.config.language}' 카탈로그에 선택 구절이 없습니다: {tx.kind.value}.{name}"
            )
        return self.substitute(group[name], tx)

    @staticmethod
    def with_options(body: str, options: list[str]) -> str:
        """주 설명문 뒤에 선택 구절을 괄호로 붙임 (없으면 그대로)"""
        if not options:
            return body
        return f"{body} ({', '.join(options)})"

    def substitute(self, template: str, tx: Transaction) -> str:
        """템플릿의 자리표시자를 거래 값으로 치환

        Raises:
            FieldNotSetError: 참조한 필드가 없는 경우
            ConfigurationError: 참조한 서비스 변수가 없는 경우
        """
        placeholders(template)
        variables: dict[str, str] | None = None

        def replace(m: re.Match) -> str:
            nonlocal variables
            sigil, name = Sigil(m.group(1)), m.group(2)
            if sigil == Sigil.SPECIAL:
                return text_to_symbol(self.config.currency)
            if sigil == Sigil.CONFIG:
                if variables is None:
                    variables = self.config.service_variables(tx.service, tx.fund)
                if name not in variables:
                    raise ConfigurationError(
                        f"서비스 '{tx.service}'에 설정 변수가 없습니다: '{name}'"
                    )
                return variables[name]
            return FORMATTERS[sigil](tx.require(name))

        return PLACEHOLDER_PATTERN.sub(replace, template)
