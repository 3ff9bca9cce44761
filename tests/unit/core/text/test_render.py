"""
core/text/render.py 테스트

거래 유형별 설명문 생성 (핀란드어/영어)
"""

from decimal import Decimal
from typing import Any

import pytest

from core.config.loader import ConfigurationError, LedgerConfig
from core.text.render import TextRenderer
from core.tx import FieldNotSetError, create_transaction

NINTH5 = Decimal(5) / Decimal(9)  # 0.55555556


def text_of(config: LedgerConfig, kind: str, fields: dict[str, Any], **kwargs: Any) -> str:
    return create_transaction(kind, fields, config, **kwargs).to_text()


class TestBuySellText:
    """매수 / 매도"""

    def test_buy_no_profit(self, no_profit_config: LedgerConfig) -> None:
        """no_profit이면 평균 단가 생략"""
        text = text_of(
            no_profit_config, "buy",
            {"total": 1, "target": "BTC", "amount": NINTH5, "stock": Decimal("2.1"), "avg": 1},
        )
        assert text == "Osto +0.55555556 BTC (yht. 2.1 BTC)"

    def test_buy(self, config: LedgerConfig) -> None:
        text = text_of(
            config, "buy",
            {"total": 1, "target": "BTC", "amount": NINTH5, "stock": Decimal("10.1"), "avg": 11000},
        )
        assert text == "Osto +0.55555556 BTC (yht. 10.1 BTC, k.h. nyt 11,000.00 €/BTC)"

    def test_buy_foreign_currency(self, config: LedgerConfig) -> None:
        """외화 매수는 환율 표기"""
        text = text_of(
            config, "buy",
            {
                "total": 1, "target": "NEO", "amount": 10, "stock": 10, "avg": 2,
                "currency": "USD", "rate": Decimal("0.86"),
            },
        )
        assert text == "Osto +10 NEO (yht. 10 NEO, k.h. nyt 2.00 €/NEO, kurssi 0.86 $/€)"

    def test_sell(self, config: LedgerConfig) -> None:
        text = text_of(
            config, "sell",
            {"total": 1, "target": "BTC", "amount": -NINTH5, "stock": Decimal("1.1"), "avg": 11000},
        )
        assert text == "Myynti -0.55555556 BTC (k.h. 11,000.00 €/BTC, jälj. 1.1 BTC)"

    def test_sell_no_profit(self, no_profit_config: LedgerConfig) -> None:
        text = text_of(
            no_profit_config, "sell",
            {"total": 1, "target": "BTC", "amount": -1, "stock": 0, "avg": 11000},
        )
        assert text == "Myynti -1 BTC (jälj. 0 BTC)"

    def test_missing_stock(self, config: LedgerConfig) -> None:
        """참조한 필드가 없으면 FieldNotSetError"""
        tx = create_transaction("buy", {"total": 1, "target": "BTC", "amount": 1}, config)
        with pytest.raises(FieldNotSetError):
            tx.to_text()


class TestDividendText:
    """배당"""

    def test_foreign_dividend(self, config: LedgerConfig) -> None:
        text = text_of(
            config, "dividend",
            {
                "total": Decimal("4.3"), "target": "TSLA", "amount": 5, "given": Decimal("0.02"),
                "currency": "USD", "rate": Decimal("0.86"),
            },
        )
        assert text == "Osinko 5 x TSLA (osinko 0.02 $, kurssi 0.86 $/€)"

    def test_domestic_dividend(self, config: LedgerConfig) -> None:
        text = text_of(
            config, "dividend", {"total": 20, "target": "NOKIA", "amount": 10, "given": 2}
        )
        assert text == "Osinko 10 x NOKIA (osinko 2 €)"

    def test_dividend_with_tax(self, config: LedgerConfig) -> None:
        text = text_of(
            config, "dividend",
            {
                "total": Decimal("4.3"), "target": "TSLA", "amount": 5, "given": Decimal("0.02"),
                "tax": Decimal("0.15"), "currency": "USD", "rate": Decimal("0.86"),
            },
        )
        assert text == "Osinko 5 x TSLA (osinko 0.02 $, vero 0.15 $, kurssi 0.86 $/€)"

    def test_plain_dividend(self, config: LedgerConfig) -> None:
        """선택 구절이 없으면 괄호 없음"""
        text = text_of(config, "dividend", {"total": 20, "target": "NOKIA", "amount": 10})
        assert text == "Osinko 10 x NOKIA"

    def test_stock_dividend(self, config: LedgerConfig) -> None:
        text = text_of(
            config, "stock-dividend",
            {"total": 0, "target": "NOKIA", "source": "NOK2", "amount": 5, "stock": 5, "avg": 0},
        )
        assert text == "Osakeosinko NOKIA +5 NOK2 (yht. 5 NOK2, k.h. nyt 0.00 €/NOK2)"


class TestCashText:
    """환전 / 이자 / 대출 / 입출금"""

    def test_fx_in(self, config: LedgerConfig) -> None:
        text = text_of(
            config, "fx-in", {"total": 1, "target": "USD", "currency": "EUR", "rate": Decimal("0.86")}
        )
        assert text == "Valuutanvaihto $ <- € (ostokurssi 0.86 $/€)"

    def test_fx_out(self, config: LedgerConfig) -> None:
        text = text_of(
            config, "fx-out", {"total": 1, "target": "DKK", "currency": "USD", "rate": Decimal("1.01")}
        )
        assert text == "Valuutanvaihto kr -> $ (myyntikurssi 1.01 $/kr)"

    def test_interest(self, config: LedgerConfig) -> None:
        text = text_of(config, "interest", {"total": 1}, service="Service-Z")
        assert text == "Service-Z lainakorko"

    def test_loan_take(self, config: LedgerConfig) -> None:
        assert text_of(config, "loan-take", {"total": 1}, service="shark") == "Lainanotto: Sharks Loan"

    def test_loan_pay(self, config: LedgerConfig) -> None:
        text = text_of(config, "loan-pay", {"total": 1}, service="shark")
        assert text == "Lainan lyhennys: Sharks Loan"

    def test_deposit(self, config: LedgerConfig) -> None:
        assert text_of(config, "deposit", {"total": 1}, service="Service-Z") == "Talletus Service-Z-palveluun"

    def test_withdrawal(self, config: LedgerConfig) -> None:
        assert text_of(config, "withdrawal", {"total": 1}, service="Service-Z") == "Nosto Service-Z-palvelusta"

    def test_service_required(self, config: LedgerConfig) -> None:
        """C{service}는 서비스가 필요"""
        tx = create_transaction("interest", {"total": 1}, config)
        with pytest.raises(ConfigurationError):
            tx.to_text()

    def test_missing_service_variable(self, config: LedgerConfig) -> None:
        """서비스에 없는 변수는 ConfigurationError"""
        tx = create_transaction("loan-take", {"total": 1}, config, service="Service-Z")
        with pytest.raises(ConfigurationError, match="loan_name"):
            tx.to_text()


class TestMoveText:
    """입고 / 출고"""

    def test_move_in(self, config: LedgerConfig) -> None:
        text = text_of(
            config, "move-in",
            {"total": 1, "target": "LTC", "amount": Decimal("0.12312312"), "stock": Decimal("0.22222222"), "avg": 1},
            service="Service-Z",
        )
        assert text == "Siirto Service-Z-palveluun +0.12312312 LTC (yht. 0.22222222 LTC)"

    def test_move_out(self, config: LedgerConfig) -> None:
        text = text_of(
            config, "move-out",
            {"total": 1, "target": "LTC", "amount": Decimal("-0.56756757"), "stock": 0, "avg": 120},
            service="Service-Z",
        )
        assert text == "Siirto Service-Z-palvelusta -0.56756757 LTC (k.h. 120.00 €/LTC, jälj. 0 LTC)"


class TestMiscText:
    """비용 / 수익 / 미해석"""

    def test_expense_by_category(self, config: LedgerConfig) -> None:
        """분류별 템플릿"""
        text = text_of(config, "expense", {"total": 1, "target": "MISC3", "notes": "kankkulan kaivoon"})
        assert text == "Satunnaiset kulut #3 (kankkulan kaivoon)"

    def test_expense_generic(self, config: LedgerConfig) -> None:
        """분류별 템플릿이 없으면 일반 템플릿"""
        text = text_of(config, "expense", {"total": 1, "target": "FOOD", "vat": 4, "notes": "lounas"})
        assert text == "Kulu FOOD (alv 4.00 €, lounas)"

    def test_income(self, config: LedgerConfig) -> None:
        assert text_of(config, "income", {"total": 1, "target": "MISC", "notes": "lotto"}) == "Satunnaiset tulot (lotto)"

    def test_error(self, config: LedgerConfig) -> None:
        text = text_of(config, "error", {"total": 1, "target": "BANK", "notes": "in"})
        assert text == "Selvitettävä tapahtuma (in)"

    def test_error_without_notes(self, config: LedgerConfig) -> None:
        assert text_of(config, "error", {"total": 1}) == "Selvitettävä tapahtuma"


class TestEnglish:
    """영어 카탈로그"""

    def test_buy(self, config_en: LedgerConfig) -> None:
        text = text_of(
            config_en, "buy",
            {"total": 1, "target": "BTC", "amount": Decimal("0.5"), "stock": Decimal("2.1"), "avg": 11000},
        )
        assert text == "Buy +0.5 BTC (total 2.1 BTC, avg. now 11,000.00 €/BTC)"

    def test_fx_in(self, config_en: LedgerConfig) -> None:
        text = text_of(
            config_en, "fx-in", {"total": 1, "target": "USD", "rate": Decimal("0.86")}
        )
        assert text == "Currency exchange $ <- € (buy rate 0.86 $/€)"

    def test_loan(self, config_en: LedgerConfig) -> None:
        assert text_of(config_en, "loan-take", {"total": 1}, service="shark") == "Loan taken: Sharks Loan"


class TestTextRenderer:
    """TextRenderer 직접 사용"""

    def test_unknown_language(self, config: LedgerConfig) -> None:
        swedish = LedgerConfig.from_dict({**config.to_dict(), "language": "sv"})
        with pytest.raises(ConfigurationError, match="sv"):
            TextRenderer(swedish)

    def test_with_options(self) -> None:
        assert TextRenderer.with_options("Body", []) == "Body"
        assert TextRenderer.with_options("Body", ["a", "b"]) == "Body (a, b)"

    def test_unknown_option(self, config: LedgerConfig) -> None:
        tx = create_transaction("deposit", {"total": 1}, config, service="Service-Z")
        with pytest.raises(ConfigurationError):
            TextRenderer(config).option("stock", tx)

    def test_substitution_is_single_pass(self, config: LedgerConfig) -> None:
        """치환된 값 안의 자리표시자 모양은 다시 치환하지 않음"""
        tx = create_transaction("income", {"total": 1, "target": "MISC", "notes": "#{stock}"}, config)
        assert TextRenderer(config).option("notes", tx) == "#{stock}"
