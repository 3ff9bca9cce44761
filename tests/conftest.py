"""
pytest 공통 fixture 정의

샘플 원장 설정, 취득원가 추적기, 임시 설정 파일
"""

import tempfile
from pathlib import Path
from typing import Any

import pytest

from core.config.loader import LedgerConfig
from core.stock.tracker import CostBasisTracker


# 읽기 쉽도록 계정 번호를 역할 이름으로 사용
SAMPLE_CONFIG: dict[str, Any] = {
    "currency": "EUR",
    "language": "fi",
    "accounts": {
        "bank": "BANK",
        "fees": "FEES",
        "profits": "PROFITS",
        "losses": "LOSSES",
        "dividends": "DIVIDENDS",
        "interest": "INTEREST",
        "imbalance": "IMBALANCE",
        "currencies": {"EUR": "EUR", "USD": "USD", "DKK": "DKK"},
        "targets": {"ETH": "ETH", "BTC": "BTC", "LTC": "LTC", "NEO": "NEO", "BNB": "BNB"},
        "taxes": {"source": "TAX_SOURCE", "income": "TAX_INCOME", "vat": "VAT"},
        "loans": {"EUR": "LOAN_EUR"},
        "expenses": {"misc": "EXP_MISC", "misc3": "EXP_MISC3", "food": "EXP_FOOD"},
        "incomes": {"misc": "INC_MISC"},
    },
    "services": {
        "Service-Z": {"tag": "SZ"},
        "shark": {
            "tag": "SH",
            "loan_name": "Sharks Loan",
            "funds": {"Growth": {"tag": "GR"}},
        },
    },
    "tags": {"SZ": "Service-Z", "SH": "Sharks"},
}


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config() -> LedgerConfig:
    """핀란드어 설명문, 기준 통화 EUR 샘플 설정"""
    return LedgerConfig.from_dict(SAMPLE_CONFIG)


@pytest.fixture
def config_en() -> LedgerConfig:
    """영어 설명문 샘플 설정"""
    return LedgerConfig.from_dict({**SAMPLE_CONFIG, "language": "en"})


@pytest.fixture
def no_profit_config(config: LedgerConfig) -> LedgerConfig:
    """손익 계산을 끈 설정"""
    return config.with_flags(no_profit=True)


@pytest.fixture
def tracker() -> CostBasisTracker:
    """빈 취득원가 추적기"""
    return CostBasisTracker()


@pytest.fixture
def temp_config_file(temp_dir: Path) -> Path:
    """테스트용 ledger.yaml 파일 생성"""
    content = """# 테스트용 ledger.yaml
currency: EUR
language: fi

flags:
  no_profit: true

accounts:
  bank: 1910
  fees: "9750"
  currencies:
    EUR: "1920"
    usd: "1921"
  targets:
    BTC: "1551"

services:
  Service-Z:
    tag: SZ
"""
    path = temp_dir / "ledger.yaml"
    path.write_text(content, encoding="utf-8")
    return path
