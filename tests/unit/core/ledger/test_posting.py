"""Ledger 분개 타입 테스트"""

from decimal import Decimal

import pytest

from core.ledger.types import AccountRole, LedgerPosting, is_balanced, postings_total


class TestAccountRole:
    """AccountRole Enum 테스트"""

    def test_values(self) -> None:
        assert AccountRole.BANK == "bank"
        assert AccountRole.TARGETS.value == "targets"
        assert AccountRole("imbalance") is AccountRole.IMBALANCE

    def test_all_roles_are_strings(self) -> None:
        for role in AccountRole:
            assert isinstance(role.value, str)
            assert role.value == role.value.lower()


class TestLedgerPosting:
    """LedgerPosting 테스트"""

    def test_create(self) -> None:
        posting = LedgerPosting("1910", Decimal("12.00"))
        assert posting.account_number == "1910"
        assert posting.amount == Decimal("12.00")
        assert posting.description is None

    def test_frozen(self) -> None:
        posting = LedgerPosting("1910", Decimal("1"))
        with pytest.raises(AttributeError):
            posting.amount = Decimal("2")  # type: ignore


class TestBalance:
    """합계 / 균형 검증"""

    def test_balanced(self) -> None:
        postings = [
            LedgerPosting("EUR", Decimal("1200.00")),
            LedgerPosting("PROFITS", Decimal("-200.00")),
            LedgerPosting("ETH", Decimal("-1000.00")),
        ]
        assert postings_total(postings) == 0
        assert is_balanced(postings)

    def test_unbalanced_by_one_cent(self) -> None:
        postings = [
            LedgerPosting("EUR", Decimal("10.00")),
            LedgerPosting("BANK", Decimal("-9.99")),
        ]
        assert postings_total(postings) == Decimal("0.01")
        assert not is_balanced(postings)

    def test_empty_is_balanced(self) -> None:
        assert postings_total([]) == Decimal("0")
        assert is_balanced([])

    def test_accepts_generator(self) -> None:
        assert is_balanced(LedgerPosting("X", Decimal(n)) for n in (1, -1))
