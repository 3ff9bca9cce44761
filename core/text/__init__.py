"""
설명문 코덱

거래 → 한 줄 설명문 (TextRenderer), 설명문 → 거래 필드 (DescriptionParser).
두 방향이 같은 카탈로그와 문법을 공유하므로 생성한 설명문은 그대로 다시 해석됨.
"""

from core.text.catalog import CATALOGS, get_catalog
from core.text.grammar import Grammar, Matcher, Sigil, get_grammar
from core.text.parser import DecodedText, DescriptionParser
from core.text.render import TextRenderer

__all__ = [
    "CATALOGS",
    "get_catalog",
    "Grammar",
    "Matcher",
    "Sigil",
    "get_grammar",
    "DecodedText",
    "DescriptionParser",
    "TextRenderer",
]
