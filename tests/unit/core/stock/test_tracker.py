"""
core/stock/tracker.py 테스트

가중평균 취득원가 계산과 보유량 초과 처분 동작
"""

import logging
from decimal import Decimal

import pytest

from core.stock.tracker import CostBasisTracker, StockLevel


class TestAdd:
    """add 테스트"""

    def test_unknown_symbol_is_zero(self, tracker: CostBasisTracker) -> None:
        """처음 보는 심볼은 0"""
        assert tracker.quantity_of("ETH") == 0
        assert tracker.average_of("ETH") == 0

    def test_first_acquisition(self, tracker: CostBasisTracker) -> None:
        """cost는 총액 (단가 아님)"""
        level = tracker.add(Decimal("2"), "BTC", Decimal("20000"))

        assert level == StockLevel(quantity=Decimal("2"), average=Decimal("10000"))

    def test_weighted_average(self, tracker: CostBasisTracker) -> None:
        """평균 = (기존 수량 × 기존 평균 + cost) / 새 수량"""
        tracker.add(2, "BTC", 20000)
        level = tracker.add(2, "BTC", 24000)

        assert level.quantity == Decimal("4")
        assert level.average == Decimal("11000")

    def test_disposal_keeps_average(self, tracker: CostBasisTracker) -> None:
        """처분 시 평균 유지"""
        tracker.add(4, "BTC", 44000)
        level = tracker.add(-1, "BTC")

        assert level.quantity == Decimal("3")
        assert level.average == Decimal("11000")

    def test_disposal_ignores_cost(self, tracker: CostBasisTracker) -> None:
        tracker.add(4, "BTC", 44000)
        tracker.add(-1, "BTC", 999999)

        assert tracker.average_of("BTC") == Decimal("11000")

    def test_default_cost_is_current_average(self, tracker: CostBasisTracker) -> None:
        """cost 생략 시 현재 평균을 총액으로 더함"""
        tracker.add(2, "ETH", 1000)  # 평균 500
        level = tracker.add(3, "ETH")

        # (2 × 500 + 500) / 5
        assert level.quantity == Decimal("5")
        assert level.average == Decimal("300")

    def test_float_input(self, tracker: CostBasisTracker) -> None:
        """float는 Decimal로 변환"""
        tracker.add(0.1, "LTC", 10)
        tracker.add(0.2, "LTC", 20)

        assert tracker.quantity_of("LTC") == Decimal("0.3")
        assert tracker.average_of("LTC") == Decimal("100")


class TestRemove:
    """remove 테스트"""

    def test_add_then_remove(self, tracker: CostBasisTracker) -> None:
        tracker.add(4, "ETH")
        tracker.remove(0.5, "ETH")

        assert tracker.quantity_of("ETH") == Decimal("3.5")

    def test_remove_keeps_average(self, tracker: CostBasisTracker) -> None:
        tracker.add(4, "ETH", 2000)
        tracker.remove(Decimal("0.5"), "ETH")

        assert tracker.average_of("ETH") == Decimal("500")


class TestOversell:
    """보유량 초과 처분 테스트"""

    def test_negative_quantity_allowed(self, tracker: CostBasisTracker) -> None:
        """예외 없이 음수 수량"""
        tracker.add(1, "NEO", 10)
        level = tracker.add(-3, "NEO")

        assert level.quantity == Decimal("-2")
        assert level.average == Decimal("10")

    def test_warning_logged(self, tracker: CostBasisTracker, caplog: pytest.LogCaptureFixture) -> None:
        """0 이상에서 음수로 넘어갈 때 경고"""
        tracker.add(1, "NEO", 10)
        with caplog.at_level(logging.WARNING, logger="core.stock.tracker"):
            tracker.add(-3, "NEO")

        assert "보유량 초과 처분" in caplog.text

    def test_acquisition_while_negative_resets_average(self, tracker: CostBasisTracker) -> None:
        """음수 보유에서 취득 후에도 0 이하이면 평균 0"""
        tracker.add(1, "NEO", 10)
        tracker.add(-3, "NEO")
        level = tracker.add(1, "NEO", 5)

        assert level.quantity == Decimal("-1")
        assert level.average == 0


class TestBulk:
    """bulk_set / list_held_symbols / snapshot 테스트"""

    def test_bulk_set(self, tracker: CostBasisTracker) -> None:
        tracker.bulk_set_quantities({"BTC": Decimal("2"), "ETH": 3})
        tracker.bulk_set_averages({"BTC": Decimal("11000")})

        assert tracker.quantity_of("ETH") == Decimal("3")
        assert tracker.average_of("BTC") == Decimal("11000")
        assert tracker.average_of("ETH") == 0

    def test_bulk_then_add(self, tracker: CostBasisTracker) -> None:
        """복원한 상태에서 계속 누적"""
        tracker.bulk_set_quantities({"BTC": 2})
        tracker.bulk_set_averages({"BTC": 10000})
        tracker.add(2, "BTC", 24000)

        assert tracker.average_of("BTC") == Decimal("11000")

    def test_list_held_symbols(self, tracker: CostBasisTracker) -> None:
        """수량이 0이 아닌 심볼 정렬"""
        tracker.add(1, "LTC", 1)
        tracker.add(1, "BTC", 1)
        tracker.add(1, "ETH", 1)
        tracker.remove(1, "ETH")
        tracker.add(-1, "NEO")

        assert tracker.list_held_symbols() == ["BTC", "LTC", "NEO"]

    def test_snapshot(self, tracker: CostBasisTracker) -> None:
        tracker.add(2, "BTC", 20000)
        snapshot = tracker.snapshot()

        assert snapshot == {"BTC": StockLevel(Decimal("2"), Decimal("10000"))}

    def test_restore(self, tracker: CostBasisTracker) -> None:
        """restore() 후 snapshot 시점 상태로 복귀"""
        tracker.add(2, "BTC", 20000)
        saved = tracker.snapshot()
        tracker.add(2, "BTC", 60000)
        tracker.add(5, "LTC", 500)

        tracker.restore(saved)

        assert tracker.quantity_of("BTC") == Decimal("2")
        assert tracker.average_of("BTC") == Decimal("10000")
        assert tracker.list_held_symbols() == ["BTC"]
